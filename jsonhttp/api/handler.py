"""HTTP request handler for the jsonhttp demo server."""

from __future__ import annotations

from typing import Any
from http.server import BaseHTTPRequestHandler
from urllib.parse import urlparse

from jsonhttp import response as responses
from jsonhttp.api import routes
from jsonhttp.utils.logging import log

STATUS_PREFIX = "/api/status/"


class JSONHandler(BaseHTTPRequestHandler):
    """HTTP handler routing the demo API endpoints."""

    server_version = "jsonhttp/1.0"

    def do_GET(self) -> None:
        """Handle GET requests."""
        path = urlparse(self.path).path

        if path == "/api/health":
            routes.handle_health(self)
            return

        if path.startswith(STATUS_PREFIX):
            routes.handle_status(self, path[len(STATUS_PREFIX):])
            return

        responses.not_found(self)

    def do_POST(self) -> None:
        """Handle POST requests."""
        path = urlparse(self.path).path

        if path == "/api/echo":
            routes.handle_echo(self)
            return

        if path == "/api/messages":
            routes.handle_create_message(self)
            return

        responses.not_found(self)

    def _method_not_allowed(self) -> None:
        responses.method_not_allowed(self)

    do_PUT = do_PATCH = do_DELETE = _method_not_allowed

    def log_message(self, format: str, *args: Any) -> None:
        """Send access logs through the package logger at DEBUG level."""
        log(f"[HTTP] {self.address_string()} {format % args}", level="DEBUG")
