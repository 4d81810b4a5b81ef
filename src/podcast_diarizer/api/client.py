#!/usr/bin/env python3
"""
OpenAI HTTP Client
------------------
Thin wrapper around requests shared by the transcription and diarization services.

Every call is bounded twice: each connect/read stall by the settings' HTTP
timeout, and the call as a whole (request construction, network I/O and body
read) by a per-call Deadline. Responses are always closed; a failure while
closing is logged and never replaces the call's own outcome.
"""
import json
import time
import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional

import requests

from podcast_diarizer.config import Settings
from podcast_diarizer.exceptions import (
    DecodeError,
    NetworkError,
    UpstreamError,
    UsageError,
)

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 64 * 1024


class Deadline:
    """Wall-clock budget for one API call"""

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic):
        self.seconds = seconds
        self._clock = clock
        self._expires_at = clock() + seconds

    def remaining(self) -> float:
        return max(0.0, self._expires_at - self._clock())

    def check(self, operation: str) -> float:
        """Return the remaining budget, raising NetworkError if it is spent"""
        remaining = self.remaining()
        if remaining <= 0:
            raise NetworkError(f"{operation} exceeded its deadline of {self.seconds:.0f}s")
        return remaining


@contextmanager
def closing_logged(resource: Any, description: str) -> Iterator[Any]:
    """Close resource on exit, logging (not raising) any error from close()"""
    try:
        yield resource
    finally:
        try:
            resource.close()
        except Exception as e:
            logger.warning(f"Error closing {description}: {e}")


class OpenAIClient:
    """Authenticated POST requests against the OpenAI API"""

    def __init__(self, settings: Settings, api_key: str, session: Optional[requests.Session] = None):
        """
        Initialize the client

        Args:
            settings: Shared settings (timeouts and size limits)
            api_key: OpenAI API key sent as a bearer token
            session: requests session to use (a new one is created if omitted)
        """
        if not api_key:
            raise UsageError("OpenAI API key must not be empty")

        self.settings = settings
        self.session = session or requests.Session()
        self.headers = {"Authorization": f"Bearer {api_key}"}

    def post(
        self,
        url: str,
        operation: str,
        deadline: Deadline,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> Any:
        """
        POST to url and return the decoded JSON body of a 200 response

        Args:
            url: Endpoint URL
            operation: Human-readable name of the call, used in error messages
            deadline: Budget for the whole call
            headers: Extra headers merged over the authorization header
            **kwargs: Passed through to requests (data, files, ...)

        Raises:
            NetworkError: On transport failure, timeout or deadline expiry
            UpstreamError: On any status other than 200
            DecodeError: If the body is not valid JSON
        """
        remaining = deadline.check(operation)
        request_headers = dict(self.headers)
        if headers:
            request_headers.update(headers)

        try:
            response = self.session.post(
                url,
                headers=request_headers,
                timeout=self._timeout(remaining),
                stream=True,
                **kwargs,
            )
        except requests.Timeout as e:
            raise NetworkError(f"{operation} request timed out", e) from e
        except requests.RequestException as e:
            raise NetworkError(f"failed to send {operation} request", e) from e

        with closing_logged(response, f"{operation} response body"):
            if response.status_code != 200:
                try:
                    body = self._read_body(response, operation, deadline, self.settings.max_response_body_size)
                except NetworkError as e:
                    logger.warning(f"Could not read {operation} error body: {e}")
                    body = b""
                raise UpstreamError(operation, response.status_code, body.decode("utf-8", errors="replace"))

            body = self._read_body(response, operation, deadline)

        try:
            return json.loads(body)
        except ValueError as e:
            raise DecodeError(f"failed to decode {operation} response", e) from e

    def _timeout(self, remaining: float):
        """(connect, read) timeout: the HTTP stall limit, clipped to the remaining budget"""
        stall = min(self.settings.http_timeout, remaining)
        return (stall, stall)

    def _read_body(
        self,
        response: requests.Response,
        operation: str,
        deadline: Deadline,
        limit: Optional[int] = None,
    ) -> bytes:
        """Read the response body, stopping after limit bytes when one is given"""
        chunks = []
        total = 0
        try:
            for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
                deadline.check(operation)
                if limit is not None:
                    chunk = chunk[:limit - total]
                chunks.append(chunk)
                total += len(chunk)
                if limit is not None and total >= limit:
                    break
        except requests.RequestException as e:
            raise NetworkError(f"failed to read {operation} response", e) from e
        return b"".join(chunks)
