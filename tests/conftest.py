"""Shared fixtures for the jsonhttp tests."""

import io
import json
import logging
import sys
from http.client import HTTPMessage
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from jsonhttp.response import DEFAULT_CONTENT_TYPE, set_content_type
from jsonhttp.utils.logging import logger, set_logging_level


class RecordingHandler:
    """In-memory stand-in for a BaseHTTPRequestHandler.

    Records what a response helper writes and serves a prepared request
    body and headers.
    """

    def __init__(self, body=None, headers=None):
        self.headers = HTTPMessage()
        for name, value in (headers or {}).items():
            self.headers[name] = value
        if body is not None and "Content-Length" not in self.headers:
            self.headers["Content-Length"] = str(len(body))
        self.rfile = io.BytesIO(body or b"")
        self.wfile = io.BytesIO()
        self.status = None
        self.response_headers = {}
        self.headers_ended = False

    def send_response(self, code, message=None):
        self.status = int(code)

    def send_header(self, keyword, value):
        self.response_headers[keyword] = value

    def end_headers(self):
        self.headers_ended = True

    @property
    def body(self):
        return self.wfile.getvalue()

    def json(self):
        return json.loads(self.body.decode("utf-8"))


@pytest.fixture
def recorder():
    """A recording handler with no request body."""
    return RecordingHandler()


@pytest.fixture
def make_request():
    """Factory for recording handlers carrying a request body."""
    def _make(body=None, headers=None):
        if isinstance(body, str):
            body = body.encode("utf-8")
        return RecordingHandler(body=body, headers=headers)
    return _make


class _CurrentStdout:
    """Writes to whatever sys.stdout is at write time (capsys swaps it per phase)."""

    def write(self, data):
        return sys.stdout.write(data)

    def flush(self):
        sys.stdout.flush()


@pytest.fixture(autouse=True)
def reset_process_settings(capsys):
    """Route log output to the captured stdout and restore process-wide settings."""
    streams = [(h, h.stream) for h in logger.handlers if type(h) is logging.StreamHandler]
    for h, _ in streams:
        h.setStream(_CurrentStdout())
    yield
    for h, stream in streams:
        h.setStream(stream)
    set_content_type(DEFAULT_CONTENT_TYPE)
    set_logging_level("INFO")
