"""
Transcription Module
--------------------
Speech-to-text through OpenAI's Whisper endpoint.
"""
from podcast_diarizer.transcription.whisper import WhisperTranscriptionService, transcribe

__all__ = ["WhisperTranscriptionService", "transcribe"]
