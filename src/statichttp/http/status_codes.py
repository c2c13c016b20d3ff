"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The statuses this server can put on the wire.

    ┌─────────────────────────────────────────────────────────────────────┐
    │  CODE   WHEN                                                        │
    ├─────────────────────────────────────────────────────────────────────┤
    │  200    Resource found and its MIME type resolved                   │
    │  400    Request line could not be parsed                            │
    │  404    No resource at the path, or no MIME type for it             │
    │  414    Request line longer than max_line_size                      │
    │  500    Handler failed (file vanished, permission denied, ...)      │
    │  501    No handler registered for the request method                │
    └─────────────────────────────────────────────────────────────────────┘

Only 200 and 404 come from request handlers. The rest are produced by the
server itself when a connection cannot be dispatched normally.

The status line carries the code alone, without a reason phrase:

    HTTP/1.1 404\r\n

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes emitted by the server.

    IntEnum, so members compare equal to plain integers:

        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.NOT_FOUND.code
        '404'
    """

    OK = 200
    BAD_REQUEST = 400
    NOT_FOUND = 404
    URI_TOO_LONG = 414
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501

    @property
    def code(self) -> str:
        """The status as it appears on the status line, e.g. "200"."""
        return str(int(self))

    @property
    def phrase(self) -> str:
        """Reason phrase, used in log output only."""
        return _STATUS_PHRASES[self]

    @property
    def is_success(self) -> bool:
        return 200 <= self < 300

    @property
    def is_error(self) -> bool:
        return self >= 400


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.URI_TOO_LONG: "URI Too Long",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
    HTTPStatus.NOT_IMPLEMENTED: "Not Implemented",
}
