"""
=============================================================================
REQUEST LINE PARSING
=============================================================================

The server reads exactly ONE line from each connection and nothing else:

    GET /sub/logo.png?v=3 HTTP/1.1\r\n
    ─┬─ ──────┬────── ─┬─ ───┬────
     │        │        │     └── ignored (as is everything after it)
     │        │        └──────── query  "v=3"
     │        └───────────────── path   "/sub/logo.png"
     └────────────────────────── method "GET"

Headers, bodies and any further requests on the same connection are never
read. There is no percent-decoding and no normalization of the path: the
path is matched against the resource registry exactly as sent.

=============================================================================
PARSING RULES
=============================================================================

1. Strip the line terminator (\n or \r\n).
2. Split on runs of spaces and tabs. The first token is the method, the
   second is the request target. Anything after that is ignored.
   Splitting happens on the raw bytes, so a UTF-8 "à" (0xC3 0xA0) is never
   mistaken for a no-break space.
3. Split the target on the FIRST "?":
       "/a?x=1?y"  →  path "/a", query "x=1?y"
       "/a?"       →  path "/a", query ""
       "/a"        →  path "/a", query None

Fewer than two tokens is a malformed request line (400 Bad Request).

=============================================================================
"""

import os
import re
from dataclasses import dataclass
from typing import Optional, Union


_SEPARATOR = re.compile(rb"[ \t]+")


class HTTPParseError(Exception):
    """
    Raised when a request line cannot be read or parsed.

    Carries the HTTP status the server answers with:

        400 Bad Request  - Missing method or request target
        414 URI Too Long - Line exceeds the configured max_line_size
    """

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class RequestLine:
    """
    A parsed request line: (method, path, query).

    Attributes:
        method: HTTP method exactly as sent (e.g. "GET").
        path: Request path without the query string.
        query: Text after the first "?", or None if there was no "?".
    """

    method: str
    path: str
    query: Optional[str] = None

    def __iter__(self):
        # Allows `method, path, query = request_line`
        return iter((self.method, self.path, self.query))

    @property
    def target(self) -> str:
        """The request target as sent, path plus query."""
        if self.query is None:
            return self.path
        return f"{self.path}?{self.query}"


def split_target(target: str) -> tuple[str, Optional[str]]:
    """
    Split a request target on its first "?" into (path, query).

    Examples:
        >>> split_target("/index.html?lang=en")
        ('/index.html', 'lang=en')

        >>> split_target("/index.html")
        ('/index.html', None)
    """
    path, sep, query = target.partition("?")
    return path, (query if sep else None)


def parse_request_line(line: Union[bytes, str]) -> RequestLine:
    """
    Parse a raw request line.

    Tokens are decoded with os.fsdecode(), the same way pathlib decodes
    file names, so a UTF-8 path like "/café.html" matches the file on
    disk. Undecodable bytes become surrogates; decoding never fails.

    Args:
        line: The request line, with or without its terminator.

    Returns:
        The parsed RequestLine.

    Raises:
        HTTPParseError: If the method or the request target is missing.
    """
    if isinstance(line, str):
        line = os.fsencode(line)

    stripped = line.rstrip(b"\r\n").strip(b" \t")
    tokens = _SEPARATOR.split(stripped) if stripped else []
    if len(tokens) < 2:
        raise HTTPParseError(f"Invalid request line: {stripped!r}")

    method, target = os.fsdecode(tokens[0]), os.fsdecode(tokens[1])
    path, query = split_target(target)
    return RequestLine(method=method, path=path, query=query)
