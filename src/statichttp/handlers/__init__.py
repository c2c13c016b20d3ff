"""
Request handlers, one per HTTP method.

    base.py   RequestHandler protocol: handle(path, query) → HTTPResponse
    get.py    GetRequestHandler: serves resources from a ResourceRegistry

Registering a handler:

    server.register_handler("GET", GetRequestHandler(table, registry))

Any object with a compatible handle() method can be registered, e.g. a
handler answering HEAD or OPTIONS for a particular deployment.
"""

from .base import RequestHandler
from .get import GetRequestHandler, DEFAULT_CONTENT_TYPE_HEADER

__all__ = [
    "RequestHandler",
    "GetRequestHandler",
    "DEFAULT_CONTENT_TYPE_HEADER",
]
