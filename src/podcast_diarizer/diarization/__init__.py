"""
Speaker Diarization Module
--------------------------
Handles labeling who spoke which part of a transcript.

Diarization is delegated to a chat-completion model that receives the raw
transcript together with the expected number of speakers.
"""
from podcast_diarizer.diarization.chat_diarizer import ChatCompletionDiarizer, diarize

__all__ = ["ChatCompletionDiarizer", "diarize"]
