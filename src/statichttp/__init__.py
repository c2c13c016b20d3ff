"""
=============================================================================
STATICHTTP - Minimal Static File HTTP Server
=============================================================================

Serves the files of a directory tree over HTTP, using raw Python sockets
and one thread per connection.

=============================================================================
PROJECT OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    STATICHTTP ARCHITECTURE                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. SOCKETS (core/)                                                │
    │      - Listening socket and accept loop                             │
    │      - Per-connection wrapper: read one line, send, close           │
    │                                                                      │
    │   2. HTTP (http/)                                                   │
    │      - Request line parsing: METHOD PATH[?QUERY]                    │
    │      - Response serialization: status line, headers, body           │
    │      - Extension → MIME tables                                      │
    │                                                                      │
    │   3. RESOURCES (resources/)                                         │
    │      - Resource protocol: get_data(), mime()                        │
    │      - FileResource, StaticResource                                 │
    │      - ResourceRegistry: URL path → Resource, by discovery          │
    │                                                                      │
    │   4. HANDLERS (handlers/)                                           │
    │      - One handler per HTTP method                                  │
    │      - GetRequestHandler: registry lookup → 200 / 404               │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
QUICK START
=============================================================================

    from statichttp import create_app, ServerConfig

    server = create_app(ServerConfig(root_dir="./public", port=8585))
    server.run()

Or from the command line:

    python -m statichttp ./public --port 8585

=============================================================================
"""

__version__ = "1.0.0"

from .server import HTTPServer, create_app
from .config import ServerConfig
from .handlers import GetRequestHandler, RequestHandler
from .resources import FileResource, Resource, ResourceRegistry, StaticResource
from .http import DEFAULT_MIME_TYPES, WEB_MIME_TYPES

__all__ = [
    "HTTPServer",
    "create_app",
    "ServerConfig",
    "GetRequestHandler",
    "RequestHandler",
    "Resource",
    "FileResource",
    "StaticResource",
    "ResourceRegistry",
    "DEFAULT_MIME_TYPES",
    "WEB_MIME_TYPES",
    "__version__",
]
