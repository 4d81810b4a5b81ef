#!/usr/bin/env python3
"""
Chat Completion Diarizer
------------------------
Labels a raw transcript with speakers by prompting a chat-completion model.

The speaker count is only a hint embedded in the prompt; it is not
validated, so zero or negative values reach the model as written.
"""
import json
import time
import logging
from typing import Optional

import requests

from podcast_diarizer.api.client import Deadline, OpenAIClient
from podcast_diarizer.api.schemas import ChatCompletionRequest, ChatCompletionResponse, ChatMessage
from podcast_diarizer.config import Settings
from podcast_diarizer.exceptions import EmptyResultError, EncodingError

logger = logging.getLogger(__name__)

DIARIZATION_PROMPT = """You are an expert in speaker diarization.
Given the following transcript of a podcast and knowing there are {num_speakers} speakers, please insert clear breaks and label each segment with the appropriate speaker (e.g., "Speaker 1:", "Speaker 2:", etc.).

Transcript:
{transcript}

Return the diarized transcript."""


def build_prompt(transcript: str, num_speakers: int) -> str:
    return DIARIZATION_PROMPT.format(num_speakers=num_speakers, transcript=transcript)


class ChatCompletionDiarizer:
    """Speaker diarization via the OpenAI chat completions API"""

    def __init__(self, settings: Settings, api_key: str, session: Optional[requests.Session] = None):
        """
        Initialize the diarizer

        Args:
            settings: Shared settings
            api_key: OpenAI API key
            session: Optional requests session (mainly for tests)
        """
        self.settings = settings
        self.client = OpenAIClient(settings, api_key, session=session)

    def build_request(self, transcript: str, num_speakers: int) -> ChatCompletionRequest:
        return ChatCompletionRequest(
            model=self.settings.diarization_model,
            messages=[ChatMessage(role="user", content=build_prompt(transcript, num_speakers))],
            temperature=self.settings.diarization_temperature,
        )

    def diarize(self, transcript: str, num_speakers: int) -> str:
        """
        Produce a speaker-labeled version of transcript

        Args:
            transcript: Raw transcript text
            num_speakers: Speaker count hint

        Returns:
            Content of the first choice returned by the model

        Raises:
            EncodingError: If the request body cannot be serialized
            EmptyResultError: If the model returns no choices
            NetworkError, UpstreamError, DecodeError: From the API call
        """
        start_time = time.time()
        deadline = Deadline(self.settings.diarization_timeout)

        request = self.build_request(transcript, num_speakers)
        try:
            body = json.dumps(request.to_dict())
        except (TypeError, ValueError) as e:
            raise EncodingError("failed to marshal payload", e) from e

        logger.info(f"Requesting diarization for {num_speakers} speakers from {request.model}")
        payload = self.client.post(
            self.settings.chat_completions_url,
            "chat completion",
            deadline,
            headers={"Content-Type": "application/json"},
            data=body.encode("utf-8"),
        )

        result = ChatCompletionResponse.from_dict(payload)
        if not result.choices:
            raise EmptyResultError("no choices returned from chat completion")

        processing_time = time.time() - start_time
        logger.info(f"Diarization completed in {processing_time:.2f}s")
        return result.choices[0]


def diarize(settings: Settings, api_key: str, transcript: str, num_speakers: int) -> str:
    """Diarize transcript with a one-off ChatCompletionDiarizer"""
    return ChatCompletionDiarizer(settings, api_key).diarize(transcript, num_speakers)
