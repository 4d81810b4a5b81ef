"""
Podcast Diarizer
----------------
Turn an audio file into a speaker-labeled transcript using OpenAI's
transcription and chat-completion APIs.
"""
from podcast_diarizer.config import Settings
from podcast_diarizer.pipeline.transcript_pipeline import PipelineResult, TranscriptPipeline

__version__ = "0.1.0"

__all__ = ["Settings", "TranscriptPipeline", "PipelineResult", "__version__"]
