#!/usr/bin/env python3
"""
Configuration
-------------
Static settings for the OpenAI endpoints, local file names, timeouts and size limits.

A single immutable Settings object is built at startup and handed to every
client and to the pipeline.
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from podcast_diarizer.exceptions import UsageError

API_KEY_ENV_VAR = "OPENAI_API_KEY"

MIB = 1024 * 1024


@dataclass(frozen=True)
class Settings:
    """Endpoint URLs, file names, timeouts (seconds) and size limits (bytes)"""
    transcription_url: str = "https://api.openai.com/v1/audio/transcriptions"
    chat_completions_url: str = "https://api.openai.com/v1/chat/completions"
    transcription_file: str = "transcription.txt"
    diarized_file: str = "diarized.txt"
    transcription_timeout: float = 5 * 60.0
    diarization_timeout: float = 2 * 60.0
    http_timeout: float = 30.0
    max_audio_file_size: int = 25 * MIB
    max_response_body_size: int = 10 * MIB
    transcription_model: str = "whisper-1"
    diarization_model: str = "gpt-4o"
    diarization_temperature: float = 0.3


def load_api_key(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Read the OpenAI API key from the environment

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        The non-empty API key

    Raises:
        UsageError: If the variable is unset or empty
    """
    environ = os.environ if environ is None else environ
    api_key = environ.get(API_KEY_ENV_VAR, "")
    if not api_key:
        raise UsageError(f"Please set the {API_KEY_ENV_VAR} environment variable")
    return api_key
