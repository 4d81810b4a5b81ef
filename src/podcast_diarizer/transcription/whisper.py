#!/usr/bin/env python3
"""
Whisper Transcription Service
-----------------------------
Integration with OpenAI's audio transcription endpoint.

This module uploads a local audio file as multipart form data and returns
the plain transcript text.
"""
import os
import time
import logging
from pathlib import Path
from typing import Optional, Union

import requests

from podcast_diarizer.api.client import Deadline, OpenAIClient, closing_logged
from podcast_diarizer.api.schemas import TranscriptionResponse
from podcast_diarizer.config import Settings
from podcast_diarizer.exceptions import AudioFileTooLargeError, FileAccessError

logger = logging.getLogger(__name__)


class WhisperTranscriptionService:
    """Transcription service using the OpenAI Whisper API"""

    def __init__(self, settings: Settings, api_key: str, session: Optional[requests.Session] = None):
        """
        Initialize Whisper transcription service

        Args:
            settings: Shared settings
            api_key: OpenAI API key
            session: Optional requests session (mainly for tests)
        """
        self.settings = settings
        self.client = OpenAIClient(settings, api_key, session=session)

    def transcribe(self, audio_path: Union[str, Path]) -> str:
        """
        Transcribe an audio file

        Args:
            audio_path: Path to audio file (at most settings.max_audio_file_size bytes)

        Returns:
            Transcript text; "" if the response carries no text field

        Raises:
            AudioFileTooLargeError: Before any request, if the file is too big
            FileAccessError: If the file cannot be stat'ed, opened or read
            NetworkError, UpstreamError, DecodeError: From the API call
        """
        start_time = time.time()
        deadline = Deadline(self.settings.transcription_timeout)
        audio_path = Path(audio_path)

        try:
            file_size = os.stat(audio_path).st_size
        except OSError as e:
            raise FileAccessError("failed to get file info", e) from e
        if file_size > self.settings.max_audio_file_size:
            raise AudioFileTooLargeError(file_size, self.settings.max_audio_file_size)

        try:
            audio_file = open(audio_path, "rb")
        except OSError as e:
            raise FileAccessError("failed to open audio file", e) from e

        with closing_logged(audio_file, "audio file"):
            try:
                audio_data = audio_file.read()
            except OSError as e:
                raise FileAccessError("failed to copy file content", e) from e

            logger.info(f"Uploading {audio_path.name} ({file_size / (1024 * 1024):.2f}MB) for transcription")
            payload = self.client.post(
                self.settings.transcription_url,
                "transcription",
                deadline,
                files={"file": (audio_path.name, audio_data)},
                data={"model": self.settings.transcription_model},
            )

        result = TranscriptionResponse.from_dict(payload)

        processing_time = time.time() - start_time
        logger.info(f"Transcription completed in {processing_time:.2f}s ({len(result.text)} characters)")
        return result.text


def transcribe(settings: Settings, api_key: str, audio_path: Union[str, Path]) -> str:
    """Transcribe audio_path with a one-off WhisperTranscriptionService"""
    return WhisperTranscriptionService(settings, api_key).transcribe(audio_path)
