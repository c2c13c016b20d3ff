"""
=============================================================================
HTTP PROTOCOL LAYER
=============================================================================

The small slice of HTTP/1.1 this server speaks:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    Request-Response Cycle                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   CLIENT                                         SERVER              │
    │      │                                              │                │
    │      │   GET /index.html HTTP/1.1                   │                │
    │      │  ─────────────────────────────────────────►  │                │
    │      │   (only this first line is ever read)        │                │
    │      │                                              │                │
    │      │                              HTTP/1.1 200    │                │
    │      │  ◄─────────────────────────────────────────  │                │
    │      │                        ContentType: text/html│                │
    │      │                        <body bytes>          │                │
    │      │                                              │                │
    │      │                         (connection closed)  │                │
    └─────────────────────────────────────────────────────────────────────┘

MODULE COMPONENTS
─────────────────

    request.py       parse_request_line(): bytes → RequestLine
    response.py      HTTPResponse: (status, headers, body) → bytes
    status_codes.py  HTTPStatus: the codes the server emits
    mime_types.py    Read-only extension → MIME tables

=============================================================================
"""

from .request import HTTPParseError, RequestLine, parse_request_line, split_target
from .response import (
    HTTPResponse,
    ok,
    error,
    not_found,
    bad_request,
    not_implemented,
    internal_error,
)
from .status_codes import HTTPStatus
from .mime_types import (
    DEFAULT_MIME_TYPES,
    WEB_MIME_TYPES,
    extension_of,
    lookup_mime,
    get_mime_table,
    freeze_table,
)

__all__ = [
    # Request line
    "HTTPParseError",
    "RequestLine",
    "parse_request_line",
    "split_target",

    # Responses
    "HTTPResponse",
    "ok",
    "error",
    "not_found",
    "bad_request",
    "not_implemented",
    "internal_error",

    # Status codes
    "HTTPStatus",

    # MIME types
    "DEFAULT_MIME_TYPES",
    "WEB_MIME_TYPES",
    "extension_of",
    "lookup_mime",
    "get_mime_table",
    "freeze_table",
]
