"""HTTP server initialization and lifecycle management.

Provides the main run_server function and a factory for test servers.
"""

from __future__ import annotations

from http.server import ThreadingHTTPServer
from pathlib import Path
from typing import Optional

from jsonhttp.api.handler import JSONHandler
from jsonhttp.config.settings import ServerSettings, load_settings
from jsonhttp.response import set_content_type
from jsonhttp.utils.logging import log, set_logging_level


def apply_settings(settings: ServerSettings) -> None:
    """Apply the logging level and Content-Type to the process."""
    set_logging_level(settings.logging_level)
    set_content_type(settings.content_type)


def run_server(
    host: Optional[str] = None,
    port: Optional[int] = None,
    config_dir: Optional[Path] = None,
    log_level: Optional[str] = None,
) -> None:
    """Start the HTTP server.

    Runs until interrupted. Arguments left as None come from the settings.

    Args:
        host: The interface to bind.
        port: The port to listen on.
        config_dir: Directory for configuration files (default: cwd).
        log_level: Overrides the configured logging level.
    """
    settings = load_settings(config_dir or Path.cwd())
    apply_settings(settings)
    if log_level:
        set_logging_level(log_level)

    host = host or settings.host
    port = port if port is not None else settings.port

    with ThreadingHTTPServer((host, port), JSONHandler) as httpd:
        log(f"Serving jsonhttp demo API at http://{host}:{httpd.server_address[1]}")
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            log("Shutting down...")


def create_test_server(
    port: int = 0,
    config_dir: Optional[Path] = None,
) -> tuple:
    """Create a test server instance without starting it.

    Args:
        port: The port to listen on (0 = auto-assign).
        config_dir: Directory for configuration files.

    Returns:
        Tuple of (server, settings, base_url).
    """
    settings = load_settings(config_dir or Path.cwd())
    apply_settings(settings)

    server = ThreadingHTTPServer(("localhost", port), JSONHandler)
    base_url = f"http://{server.server_address[0]}:{server.server_address[1]}"

    return server, settings, base_url
