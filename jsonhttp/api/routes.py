"""API route handlers for the demo server.

Each handler reads its input with unmarshal_request_body() and writes its
output with respond() or one of the status wrappers.
"""

from http.server import BaseHTTPRequestHandler

from jsonhttp import response as responses
from jsonhttp.errors import RequestBodyError
from jsonhttp.response import Message, responder_for
from jsonhttp.unmarshal import unmarshal_request_body

# Statuses that cannot carry a body to an HTTP client
_BODILESS = {204, 304}


def handle_health(handler: BaseHTTPRequestHandler) -> None:
    """Handle GET /api/health."""
    responses.ok(handler, {"status": "ok"})


def handle_echo(handler: BaseHTTPRequestHandler) -> None:
    """Handle POST /api/echo - reply with the decoded message.

    A code in the message that is a valid HTTP status becomes the response
    status.
    """
    try:
        message = unmarshal_request_body(handler, Message)
    except RequestBodyError:
        return
    responses.respond(handler, 0, message)


def handle_create_message(handler: BaseHTTPRequestHandler) -> None:
    """Handle POST /api/messages - accept a message with 201 Created."""
    try:
        message = unmarshal_request_body(handler, Message)
    except RequestBodyError:
        return
    responses.created(handler, message)


def handle_status(handler: BaseHTTPRequestHandler, code: str) -> None:
    """Handle GET /api/status/<code> - reply through the wrapper for code.

    Args:
        handler: The HTTP request handler instance.
        code: The status code segment of the path.
    """
    responder = responder_for(int(code)) if code.isdigit() else None
    if responder is None or int(code) < 200 or int(code) in _BODILESS:
        responses.not_found(handler, f"no responder for status {code}")
        return
    responder(handler)
