"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

Wraps one accepted client socket with the three operations the server
needs: read the request line, send the response, close.

=============================================================================
TCP IS A BYTE STREAM, NOT A MESSAGE PROTOCOL
=============================================================================

TCP does not preserve message boundaries. The request line

    GET /index.html HTTP/1.1\r\n

may arrive in one recv() or in several:

    recv() → b"GET /ind"
    recv() → b"ex.html HTTP/1.1\r\nHost: local"

So bytes are buffered until a newline shows up. Whatever follows the
newline in the buffer (headers, body) is simply dropped: this server
never reads past the first line.

=============================================================================
ONE REQUEST PER CONNECTION
=============================================================================

    ┌─────────────────────────────────────────────────────────────────┐
    │                    Connection Lifecycle                          │
    ├─────────────────────────────────────────────────────────────────┤
    │                                                                  │
    │   NEW ──► READING ──► PROCESSING ──► WRITING ──► CLOSING ──► CLOSED
    │              │                                      ▲            │
    │              └── peer closed / timeout / bad line ──┘            │
    │                                                                  │
    └─────────────────────────────────────────────────────────────────┘

There is no keep-alive state. The response has no Content-Length, so
closing the connection is how the client learns the body is complete.

=============================================================================
"""

import socket
import time
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional
import uuid

from ..http.request import HTTPParseError


logger = logging.getLogger(__name__)


# Bounds on discarding unread client bytes in close()
DRAIN_TIMEOUT = 0.5
DRAIN_LIMIT = 64 * 1024


class ConnectionState(Enum):
    """Connection lifecycle states, used in debug logging."""
    NEW = "new"                # Just accepted, nothing read yet
    READING = "reading"        # Reading the request line
    PROCESSING = "processing"  # Handler is running
    WRITING = "writing"        # Sending the response
    CLOSING = "closing"        # Shutdown sequence in progress
    CLOSED = "closed"          # Socket released


@dataclass
class Connection:
    """
    Represents a client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short unique identifier for log lines.
        state: Current lifecycle state.
        created_at: Timestamp when the connection was accepted.
        buffer_size: Bytes requested per recv() call.
        timeout: Socket timeout in seconds, None blocks forever.
        max_line_size: Longest accepted request line, in bytes.
    """

    # Required parameters
    socket: socket.socket
    address: tuple

    # Generated/default parameters
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    # Configuration (passed from ServerConfig)
    buffer_size: int = 8192
    timeout: Optional[float] = None
    max_line_size: int = 64 * 1024

    _buffer: bytes = field(default=b"", repr=False)

    def __post_init__(self):
        self.socket.setblocking(True)
        if self.timeout:
            self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def client_port(self) -> int:
        return self.address[1]

    @property
    def age(self) -> float:
        """Connection age in seconds."""
        return time.time() - self.created_at

    # =========================================================================
    # READING
    # =========================================================================

    def read_request_line(self) -> Optional[bytes]:
        """
        Read one line from the socket.

        ┌─────────────────────────────────────────────────────────────┐
        │   while no b"\\n" in buffer:                                 │
        │       recv() → buffer           (EOF → stop)                │
        │       too long?  → HTTPParseError(414)                      │
        │                                                              │
        │   newline found   → return bytes up to and including it     │
        │   EOF, partial    → return the partial line                 │
        │   EOF, nothing    → return None                             │
        └─────────────────────────────────────────────────────────────┘

        Returns:
            The raw line (terminator included when present), or None if
            the client closed without sending anything.

        Raises:
            TimeoutError: If the socket timeout expires first.
            HTTPParseError: If the line exceeds max_line_size (414).
        """
        self.state = ConnectionState.READING

        try:
            while b"\n" not in self._buffer:
                chunk = self._recv()
                if not chunk:
                    break  # Peer closed

                self._buffer += chunk

                if b"\n" not in self._buffer and len(self._buffer) > self.max_line_size:
                    raise HTTPParseError(
                        f"Request line too long: more than {self.max_line_size} bytes",
                        status_code=414,
                    )
        except socket.timeout:
            raise TimeoutError("Request line read timeout")

        end = self._buffer.find(b"\n")
        if end == -1:
            line, self._buffer = self._buffer, b""
        else:
            line, self._buffer = self._buffer[:end + 1], self._buffer[end + 1:]

        if len(line.rstrip(b"\r\n")) > self.max_line_size:
            raise HTTPParseError(
                f"Request line too long: {len(line)} bytes",
                status_code=414,
            )

        return line or None

    def _recv(self) -> bytes:
        """recv() that reports an abrupt disconnect as EOF."""
        try:
            return self.socket.recv(self.buffer_size)
        except (ConnectionResetError, BrokenPipeError):
            return b""

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> bool:
        """
        Send response bytes to the client.

        Uses sendall() so partial sends are retried until everything is out.

        Returns:
            True if sent, False if the client went away.
        """
        self.state = ConnectionState.WRITING

        try:
            self.socket.sendall(data)
            return True
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection. Safe to call more than once.

        1. shutdown(SHUT_WR): send FIN, the client sees end-of-body
        2. Drain: discard what the client sent after the request line
           (headers, body), so close() does not answer with a RST that
           could destroy the response still in flight. Drained bytes are
           never parsed. Stops after DRAIN_LIMIT bytes or DRAIN_TIMEOUT
           seconds in total, whichever comes first.
        3. close(): release the file descriptor
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Already disconnected

        deadline = time.monotonic() + DRAIN_TIMEOUT
        drained = 0
        try:
            while drained < DRAIN_LIMIT:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self.socket.settimeout(remaining)
                chunk = self.socket.recv(4096)
                if not chunk:
                    break
                drained += len(chunk)
        except OSError:
            pass  # Includes socket.timeout

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age * 1000:.1f}ms")

    # =========================================================================
    # CONTEXT MANAGER
    # =========================================================================

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Don't suppress exceptions
