"""
=============================================================================
CORE NETWORKING
=============================================================================

Transport layer of the server: TCP sockets and client connections.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   Client ──TCP──► SocketServer.accept() ──► Connection               │
    │                                                  │                   │
    │                                                  ▼                   │
    │                                     read_request_line()              │
    │                                     send_response()                  │
    │                                     close()                          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

SocketServer knows nothing about HTTP: it accepts sockets and hands each
one, wrapped in a Connection, to a callback. Threading and dispatch live
in statichttp.server.

=============================================================================
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState

__all__ = [
    "SocketServer",     # Listening socket + accept loop
    "Connection",       # Client socket wrapper
    "ConnectionState",  # Connection lifecycle states
]
