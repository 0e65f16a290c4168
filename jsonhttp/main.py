"""Main entry point for the jsonhttp demo server.

Usage:
    python -m jsonhttp.main [--host HOST] [--port PORT] [--config-dir DIR]

Example:
    python -m jsonhttp.main --port 8080 --log-level DEBUG
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from jsonhttp.core.server import run_server
from jsonhttp.utils.logging import LOGGING_LEVELS


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        args: Command line arguments (default: sys.argv[1:]).

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="jsonhttp-server",
        description="Demo HTTP server for the jsonhttp response helpers"
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Interface to bind (default: from settings)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: from settings)"
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory for configuration files (default: current directory)"
    )
    parser.add_argument(
        "--log-level",
        choices=sorted(LOGGING_LEVELS),
        default=None,
        help="Override the configured logging level"
    )

    return parser.parse_args(args)


def main(args: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        args: Command line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 for success).
    """
    parsed = parse_args(args)

    try:
        run_server(
            host=parsed.host,
            port=parsed.port,
            config_dir=parsed.config_dir,
            log_level=parsed.log_level,
        )
        return 0
    except KeyboardInterrupt:
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
