"""
Shared fixtures for the test suite: fake HTTP responses and sessions.
"""
import io
import json
from unittest.mock import MagicMock

import requests


def make_response(status_code, body=b""):
    """Build a real requests.Response whose streamed body is body"""
    if not isinstance(body, bytes):
        body = json.dumps(body).encode("utf-8")
    response = requests.Response()
    response.status_code = status_code
    response.raw = io.BytesIO(body)
    return response


def make_session(*responses):
    """A mock session whose post() returns responses in order"""
    session = MagicMock(spec=requests.Session)
    session.post.side_effect = list(responses)
    return session


def transcription_body(text):
    return {"text": text}


def chat_body(*contents):
    return {"choices": [{"index": i, "message": {"role": "assistant", "content": c}}
                        for i, c in enumerate(contents)]}
