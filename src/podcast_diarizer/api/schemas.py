#!/usr/bin/env python3
"""
OpenAI Request/Response Schemas
-------------------------------
Typed records for the transcription and chat-completion endpoints.

Decoding is permissive where the API contract allows it: unknown fields are
ignored and missing optional strings default to "". A document of the wrong
type (for example a list where an object is expected) raises DecodeError.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from podcast_diarizer.exceptions import DecodeError


def _expect_object(value: Any, what: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DecodeError(f"expected {what} to be a JSON object, got {type(value).__name__}")
    return value


def _optional_str(obj: Dict[str, Any], key: str, what: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"expected {what}.{key} to be a string, got {type(value).__name__}")
    return value


@dataclass
class TranscriptionResponse:
    """Body of a successful audio transcription response"""
    text: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "TranscriptionResponse":
        obj = _expect_object(data, "transcription response")
        return cls(text=_optional_str(obj, "text", "transcription response"))


@dataclass
class ChatMessage:
    """A single chat message"""
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class ChatCompletionRequest:
    """
    Body of a chat completion request

    max_tokens is never sent so the model may use its full output capacity.
    """
    model: str
    messages: List[ChatMessage]
    temperature: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [message.to_dict() for message in self.messages],
            "temperature": self.temperature,
        }


@dataclass
class ChatCompletionResponse:
    """Body of a successful chat completion response, reduced to the message contents"""
    choices: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ChatCompletionResponse":
        obj = _expect_object(data, "chat completion response")
        raw_choices = obj.get("choices")
        if raw_choices is None:
            raw_choices = []
        if not isinstance(raw_choices, list):
            raise DecodeError(
                f"expected chat completion response.choices to be a list, got {type(raw_choices).__name__}"
            )

        contents = []
        for index, raw_choice in enumerate(raw_choices):
            choice = _expect_object(raw_choice, f"choices[{index}]")
            message = _expect_object(choice.get("message"), f"choices[{index}].message")
            contents.append(_optional_str(message, "content", f"choices[{index}].message"))
        return cls(choices=contents)
