"""
=============================================================================
HTTP RESPONSE
=============================================================================

A response is the triple a handler produces: (status, headers, body).
The server serializes it straight onto the socket and closes the
connection.

=============================================================================
WIRE FORMAT
=============================================================================

    HTTP/1.1 200\r\n                  ← Status line (code only, no phrase)
    ContentType: text/html\r\n        ← Headers, in mapping order
    \r\n                              ← Empty line (separator)
    <!DOCTYPE html>...                ← Raw body bytes

Nothing is added on the way out: no Content-Length, Date, Server or
Connection header. The end of the body is signalled by closing the
connection, which is why every connection is single-shot.

Error responses carry no headers and no body at all:

    HTTP/1.1 404\r\n
    \r\n

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, Union

from .status_codes import HTTPStatus


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

        Handler returns          to_bytes()              Socket sends
        HTTPResponse    ─────►   serializes    ─────►    raw bytes

    Unpacks like the (status, headers, body) triple:

        status, headers, body = handler.handle("/", None)
    """

    status: Union[HTTPStatus, int] = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __iter__(self):
        return iter((self.status, self.headers, self.body))

    @property
    def status_line(self) -> str:
        """
        Get the HTTP status line.

        Any integer status is accepted, so handlers may answer with codes
        the server itself never produces (302, 204, ...).

        Example: "HTTP/1.1 200"
        """
        return f"HTTP/1.1 {int(self.status)}"

    def to_bytes(self) -> bytes:
        """
        Serialize the response to bytes for sending over the socket.

        Returns:
            Status line, headers, blank line, then the body bytes.

        Raises:
            UnicodeEncodeError: If a header is not ISO-8859-1 text.
            TypeError: If the body is not bytes.
        """
        lines = [self.status_line]
        for name, value in self.headers.items():
            lines.append(f"{name}: {value}")
        lines.append("")

        header_bytes = "\r\n".join(lines).encode("iso-8859-1") + b"\r\n"
        return header_bytes + self.body


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def ok(body: bytes, headers: Dict[str, str]) -> HTTPResponse:
    """200 with the given headers and body."""
    return HTTPResponse(status=HTTPStatus.OK, headers=dict(headers), body=body)


def error(status: HTTPStatus) -> HTTPResponse:
    """An error response: status only, empty headers, empty body."""
    return HTTPResponse(status=status)


def not_found() -> HTTPResponse:
    return error(HTTPStatus.NOT_FOUND)


def bad_request() -> HTTPResponse:
    return error(HTTPStatus.BAD_REQUEST)


def not_implemented() -> HTTPResponse:
    return error(HTTPStatus.NOT_IMPLEMENTED)


def internal_error() -> HTTPResponse:
    return error(HTTPStatus.INTERNAL_SERVER_ERROR)
