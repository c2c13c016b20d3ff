"""
=============================================================================
STATICHTTP CLI ENTRY POINT
=============================================================================

    # Serve ../public on 0.0.0.0:8585 (the defaults)
    python -m statichttp

    # Serve another directory on another port
    python -m statichttp ./site --port 3000

    # Standard Content-Type header and the broader MIME table
    python -m statichttp ./site --standard-headers --mime-table web

    # Drop clients that stay silent, cap concurrent connections
    python -m statichttp ./site --timeout 10 --max-connections 256

Configuration starts from the environment (see ServerConfig.from_env);
flags given on the command line win.

=============================================================================
"""

import argparse
import sys
from typing import Optional, Sequence

from . import __version__
from .config import ServerConfig, LOG_FORMATS
from .http.mime_types import MIME_TABLES
from .server import create_app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statichttp",
        description="Serve the files of a directory over HTTP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m statichttp                          # ../public on port 8585
  python -m statichttp ./site --port 3000       # Another directory and port
  python -m statichttp --standard-headers       # Send Content-Type
        """,
    )

    parser.add_argument(
        "root",
        nargs="?",
        default=None,
        help="Directory to serve (default: ../public, or HTTP_ROOT_DIR)",
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on (default: 8585)",
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Seconds to wait for a request line before dropping the client (default: wait forever)",
    )
    parser.add_argument(
        "--max-connections", "-c",
        type=int,
        default=None,
        help="Maximum connections served at once (default: unlimited)",
    )

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--mime-table", "-m",
        choices=sorted(MIME_TABLES),
        default=None,
        help="Extension to MIME table (default: default)",
    )
    parser.add_argument(
        "--standard-headers",
        action="store_true",
        help="Send 'Content-Type' instead of 'ContentType'",
    )

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Access log format (default: text)",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"statichttp {__version__}",
    )

    return parser


def build_config(args: argparse.Namespace) -> ServerConfig:
    """Environment config with command line overrides applied."""
    config = ServerConfig.from_env()

    if args.root is not None:
        config.root_dir = args.root
    if args.host is not None:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    if args.timeout is not None:
        config.timeout = args.timeout
    if args.max_connections is not None:
        config.max_connections = args.max_connections
    if args.mime_table is not None:
        config.mime_table = args.mime_table
    if args.standard_headers:
        config.content_type_header = "Content-Type"
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.log_format is not None:
        config.log_format = args.log_format

    return config


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        server = create_app(build_config(args))
    except ValueError as e:
        parser.error(str(e))

    server.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
