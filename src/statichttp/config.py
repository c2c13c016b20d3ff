"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the static file server.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m statichttp ./public --port 3000                  │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTP_PORT=3000 python -m statichttp                        │
    │                                                                      │
    │   3. Default values (in this dataclass)                             │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Everything here is read once at startup. Nothing in the server re-reads
configuration while serving.

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional

from .http.mime_types import MIME_TABLES


LOG_FORMATS = ("text", "json")


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip().lower() in ("", "none"):
        return None
    return float(value)


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value.strip().lower() in ("", "none"):
        return None
    return int(value)


@dataclass
class ServerConfig:
    """
    Configuration for the static file server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, buffer_size, timeout

    REQUEST LIMITS
    - max_line_size, max_connections

    CONTENT
    - root_dir, mime_table, content_type_header

    LOGGING
    - log_level, log_format

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "0.0.0.0"
    """
    The IP address to bind to.
    - "0.0.0.0" - All network interfaces
    - "127.0.0.1" - Localhost only
    """

    port: int = 8585
    """
    The port number to listen on. 0 lets the OS pick a free port.
    """

    backlog: int = 128
    """
    Maximum number of queued connections waiting for accept().
    """

    buffer_size: int = 8192
    """
    Bytes read per recv() while looking for the end of the request line.
    """

    timeout: Optional[float] = None
    """
    Per-connection socket timeout in seconds.
    None = block forever. A client that connects and never sends a line
    then holds its thread until it disconnects.
    """

    # ─────────────────────────────────────────────────────────────────────
    # REQUEST LIMITS
    # ─────────────────────────────────────────────────────────────────────

    max_line_size: int = 64 * 1024
    """
    Longest accepted request line in bytes. Longer lines get a 414.
    """

    max_connections: Optional[int] = None
    """
    Maximum connections handled at the same time.
    None = unbounded, one thread per connection with no limit.
    When set, the accept loop waits for a free slot before accepting more.
    """

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT
    # ─────────────────────────────────────────────────────────────────────

    root_dir: Optional[str] = "../public"
    """
    Directory whose files are served. None serves nothing (every path 404s).
    """

    mime_table: str = "default"
    """
    Built-in extension → MIME table: "default" or "web".
    """

    content_type_header: str = "ContentType"
    """
    Name of the content type header on successful responses.
    "ContentType" for existing clients, "Content-Type" for standard HTTP.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """

    log_format: str = "text"
    """
    Access log format: 'text' or 'json'.
    """

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTP_HOST                 Server host (default: 0.0.0.0)
        HTTP_PORT                 Server port (default: 8585)
        HTTP_ROOT_DIR             Directory to serve (default: ../public)
        HTTP_TIMEOUT              Socket timeout in seconds (default: none)
        HTTP_MAX_CONNECTIONS      Concurrent connection cap (default: none)
        HTTP_MIME_TABLE           default | web (default: default)
        HTTP_CONTENT_TYPE_HEADER  Header name (default: ContentType)
        HTTP_LOG_LEVEL            Logging level (default: INFO)
        HTTP_LOG_FORMAT           text | json (default: text)

        =====================================================================
        """
        defaults = cls()
        return cls(
            host=os.getenv("HTTP_HOST", defaults.host),
            port=int(os.getenv("HTTP_PORT", str(defaults.port))),
            root_dir=os.getenv("HTTP_ROOT_DIR", defaults.root_dir),
            timeout=_optional_float(os.getenv("HTTP_TIMEOUT")),
            max_connections=_optional_int(os.getenv("HTTP_MAX_CONNECTIONS")),
            mime_table=os.getenv("HTTP_MIME_TABLE", defaults.mime_table),
            content_type_header=os.getenv(
                "HTTP_CONTENT_TYPE_HEADER", defaults.content_type_header
            ),
            log_level=os.getenv("HTTP_LOG_LEVEL", defaults.log_level),
            log_format=os.getenv("HTTP_LOG_FORMAT", defaults.log_format),
        )

    def validate(self) -> None:
        """
        Validate configuration values. Called once, at server construction.

        Raises:
            ValueError: On the first invalid value.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.buffer_size < 1024:
            raise ValueError("buffer_size must be >= 1024")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.max_line_size < 16:
            raise ValueError("max_line_size must be >= 16")

        if self.max_connections is not None and self.max_connections < 1:
            raise ValueError("max_connections must be >= 1")

        if self.mime_table not in MIME_TABLES:
            raise ValueError(
                f"Unknown mime_table: {self.mime_table!r}. "
                f"Choose one of: {', '.join(sorted(MIME_TABLES))}"
            )

        if not self.content_type_header or ":" in self.content_type_header:
            raise ValueError(f"Invalid content_type_header: {self.content_type_header!r}")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {LOG_FORMATS}")
