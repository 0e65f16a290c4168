"""Request body decoding.

Provides unmarshal_request_body(), the JSON counterpart of respond() for
reading requests.
"""

from __future__ import annotations

from http.server import BaseHTTPRequestHandler
from typing import Any, Optional

from jsonhttp.decoder import decode
from jsonhttp.errors import EmptyRequestBodyError, RequestBodyError
from jsonhttp.response import Message, respond
from jsonhttp.utils.logging import log


def content_length(handler: BaseHTTPRequestHandler) -> Optional[int]:
    """Return the declared body length, or None if it is absent or invalid."""
    raw = handler.headers.get("Content-Length")
    if raw is None:
        return None
    try:
        length = int(raw.strip())
    except ValueError:
        return None
    return length if length >= 0 else None


def unmarshal_request_body(handler: BaseHTTPRequestHandler, target: Any = None) -> Any:
    """Decode the JSON request body into target.

    On failure a 400 response carrying the diagnostic has already been
    written when the exception reaches the caller, so the caller only has to
    stop handling the request.

    Args:
        handler: The HTTP request handler to read from and respond through.
        target: Destination, see jsonhttp.decoder.decode().

    Returns:
        The decoded value.

    Raises:
        EmptyRequestBodyError: The request has no body.
        JSONSyntaxError: The body is not valid JSON.
        JSONTypeError: The body does not fit target.
        UnexpectedEOFError: The body ends before a complete value.
    """
    length = content_length(handler)
    try:
        if not length:
            raise EmptyRequestBodyError()
        return decode(handler.rfile.read(length), target)
    except RequestBodyError as e:
        log(f"[jsonhttp] Rejected request body: {e.message}", level="DEBUG")
        respond(handler, e.status, Message(e.message, int(e.status)))
        raise
