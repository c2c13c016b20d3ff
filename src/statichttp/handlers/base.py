"""
Request handler contract.

One handler per HTTP method. The server parses the request line, picks the
handler registered for its method, and calls:

    handler.handle(path, query) → HTTPResponse (status, headers, body)

Structural (typing.Protocol): any object with a matching handle() method
can be registered with HTTPServer.register_handler().
"""

from typing import Optional, Protocol, runtime_checkable

from ..http.response import HTTPResponse


@runtime_checkable
class RequestHandler(Protocol):
    """Turns a parsed request into a response."""

    def handle(self, path: str, query: Optional[str]) -> HTTPResponse:
        ...
