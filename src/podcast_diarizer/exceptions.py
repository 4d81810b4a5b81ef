"""Exceptions raised by the transcription and diarization pipeline."""
from typing import Optional


class DiarizerError(Exception):
    """Base class for every failure reported by the pipeline."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class UsageError(DiarizerError):
    """Raised for missing or invalid command-line input or credentials."""


class AudioFileTooLargeError(UsageError):
    """Raised when the audio file exceeds the upload size limit."""

    def __init__(self, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(f"audio file too large: {size} bytes (max: {max_size} bytes)")


class FileAccessError(DiarizerError):
    """Raised when a local file cannot be stat'ed, opened, read or written."""


class NetworkError(DiarizerError):
    """Raised on transport failures, including timeouts and expired deadlines."""


class UpstreamError(DiarizerError):
    """Raised when an API answers with a non-success HTTP status."""

    def __init__(self, operation: str, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"non-200 response from {operation}: {status_code}, body: {body}")


class DecodeError(DiarizerError):
    """Raised when a response body is not the expected JSON shape."""


class EncodingError(DiarizerError):
    """Raised when a request body cannot be serialized."""


class EmptyResultError(DiarizerError):
    """Raised when the chat completion returns no choices."""
