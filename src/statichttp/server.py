"""
=============================================================================
HTTP SERVER
=============================================================================

Ties the pieces together: the socket server accepts, a thread per
connection reads the request line, the handler registered for the method
builds the response, and the connection is closed.

=============================================================================
ARCHITECTURE OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    STATIC SERVER ARCHITECTURE                       │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │                        ┌─────────────────┐                          │
    │                        │   HTTPServer    │                          │
    │                        │ (method table)  │                          │
    │                        └────────┬────────┘                          │
    │                                 │                                    │
    │            ┌────────────────────┼────────────────────┐              │
    │            ▼                    ▼                    ▼              │
    │    ┌──────────────┐    ┌──────────────┐    ┌──────────────────┐    │
    │    │ SocketServer │    │ Thread per   │    │ "GET" →          │    │
    │    │ (accept)     │    │ connection   │    │ GetRequestHandler│    │
    │    └──────────────┘    └──────────────┘    └────────┬─────────┘    │
    │                                                     ▼              │
    │                                           ┌──────────────────┐     │
    │                                           │ ResourceRegistry │     │
    │                                           │ + MIME table     │     │
    │                                           └──────────────────┘     │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
REQUEST LIFECYCLE
=============================================================================

    1. ACCEPT             SocketServer accepts, wraps socket in Connection
    2. SPAWN              New daemon thread for the connection
    3. READ               Exactly one line: "GET /a.html?x=1 HTTP/1.1"
    4. PARSE              → RequestLine("GET", "/a.html", "x=1")
    5. DISPATCH           handlers["GET"].handle("/a.html", "x=1")
    6. SEND               "HTTP/1.1 200\\r\\nContentType: text/html\\r\\n\\r\\n<body>"
    7. CLOSE              Always. No keep-alive.

=============================================================================
FAILURE ISOLATION
=============================================================================

Every failure stays inside its connection's thread:

    Bad request line         → 400 (414 if too long)
    No handler for method    → 501
    Handler raised           → 500 (logged with traceback)
    Response not encodable   → 500 (logged with traceback)
    Client silent/timed out  → connection closed, nothing sent
    Anything else            → logged, connection closed

All error responses have no headers and no body. The accept loop and the
other connections never see any of it.

=============================================================================
SHARED STATE
=============================================================================

The handler table and the resource registries are filled in before
start() and frozen by it. Connection threads only ever read them, so no
locks are taken while serving.

=============================================================================
"""

import logging
import threading
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .access_log import log_request
from .config import ServerConfig
from .core import SocketServer, Connection, ConnectionState
from .core.socket_server import ACCEPT_POLL_INTERVAL
from .handlers import RequestHandler, GetRequestHandler
from .http import (
    HTTPParseError,
    HTTPResponse,
    HTTPStatus,
    RequestLine,
    parse_request_line,
    error,
    not_implemented,
    internal_error,
    get_mime_table,
)
from .resources import ResourceRegistry


logger = logging.getLogger(__name__)


class HTTPServer:
    """
    Static file HTTP server.

    =========================================================================
    USAGE
    =========================================================================

        registry = ResourceRegistry("./public")
        server = HTTPServer(ServerConfig(port=8585))
        server.register_handler("GET", GetRequestHandler(DEFAULT_MIME_TYPES, registry))

        # Blocking, until Ctrl+C
        server.start(concurrent=False)

        # Or in the background
        thread = server.start(concurrent=True)
        ...
        server.shutdown()

    Or let create_app() do the wiring from a ServerConfig.

    =========================================================================
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        """
        Initialize the HTTP server. No socket is opened until start().

        Args:
            config: Server configuration. Defaults are used if not provided.

        Raises:
            ValueError: If the configuration is invalid.
        """
        self.config = config or ServerConfig()
        self.config.validate()  # Fail-fast on invalid config

        self._socket_server = SocketServer(self.config)
        self._handlers: Dict[str, RequestHandler] = {}

        # Caps concurrent connections when configured
        self._slots: Optional[threading.BoundedSemaphore] = None
        if self.config.max_connections is not None:
            self._slots = threading.BoundedSemaphore(self.config.max_connections)

        self._accept_thread: Optional[threading.Thread] = None
        self._started = False

    # =========================================================================
    # HANDLER REGISTRATION
    # =========================================================================

    def register_handler(self, method: str, handler: RequestHandler) -> "HTTPServer":
        """
        Bind a handler to an HTTP method, replacing any previous binding.

        Methods are matched exactly as sent, so "GET" and "get" differ.

        Returns:
            Self for method chaining.

        Raises:
            RuntimeError: If the server has already started.
        """
        if self._started:
            raise RuntimeError(
                f"Cannot register handler for {method!r}: server already started"
            )
        if method in self._handlers:
            logger.debug(f"Replacing handler for {method}")
        self._handlers[method] = handler
        return self

    @property
    def handlers(self) -> Mapping[str, RequestHandler]:
        """Read-only view of the method → handler table."""
        return MappingProxyType(self._handlers)

    @property
    def address(self) -> Tuple[str, int]:
        """Bound (host, port) once started, configured address before."""
        return self._socket_server.address

    @property
    def is_running(self) -> bool:
        return self._socket_server.is_running

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def start(self, concurrent: bool = False) -> Optional[threading.Thread]:
        """
        Start accepting connections.

        The socket is bound before this returns in both modes, so clients
        can connect as soon as start() hands back control.

        Args:
            concurrent: If True, run the accept loop on a background thread
                        and return that thread. If False, run it here; this
                        only returns after shutdown().

        Returns:
            The accept thread when concurrent, else None.

        Raises:
            RuntimeError: If the server was already started.
            OSError: If the address cannot be bound.
        """
        if self._started:
            raise RuntimeError("Server already started")
        self._started = True
        self._freeze()

        self._socket_server.bind()

        if concurrent:
            self._accept_thread = threading.Thread(
                target=self._socket_server.serve,
                args=(self._handle_connection,),
                name="statichttp-accept",
                daemon=True,
            )
            self._accept_thread.start()
            return self._accept_thread

        self._socket_server.install_signal_handlers()
        self._socket_server.serve(self._handle_connection)
        return None

    def run(self):
        """
        Configure logging, print the banner, and serve until Ctrl+C.
        """
        configure_logging(self.config.log_level)

        # Bind first so the banner shows the real port
        self._socket_server.bind()
        self._print_startup_banner()

        try:
            self.start(concurrent=False)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self.shutdown()
            logger.info("Server stopped")

    def shutdown(self, timeout: Optional[float] = 5.0):
        """
        Stop accepting connections.

        In-flight connection threads are not waited for. Safe to call from
        any thread and more than once.

        Args:
            timeout: How long to wait for the accept thread to exit.
        """
        self._socket_server.shutdown()

        thread = self._accept_thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    def _freeze(self):
        """Make the registries behind the registered handlers read-only."""
        for handler in self._handlers.values():
            resources = getattr(handler, "resources", None)
            if isinstance(resources, ResourceRegistry):
                resources.freeze()

    def _print_startup_banner(self):
        host, port = self.address
        methods = ", ".join(sorted(self._handlers)) or "none"
        print()
        print("╔══════════════════════════════════════════════════════════════╗")
        print(f"  statichttp listening on http://{host}:{port}")
        print(f"  Methods: {methods}")
        print(f"  Root:    {self.config.root_dir}")
        print("  Press Ctrl+C to stop")
        print("╚══════════════════════════════════════════════════════════════╝")
        print()

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """
        Start a thread for a freshly accepted connection.

        Runs on the accept loop. With max_connections set, waits here for
        a free slot, which stops further accepts until one frees up.
        """
        if self._slots is not None:
            while not self._slots.acquire(timeout=ACCEPT_POLL_INTERVAL):
                if not self._socket_server.is_running:
                    conn.close()
                    return

        thread = threading.Thread(
            target=self._process_connection,
            args=(conn,),
            name=f"statichttp-conn-{conn.id}",
            daemon=True,
        )
        try:
            thread.start()
        except RuntimeError:
            if self._slots is not None:
                self._slots.release()
            raise

    def _process_connection(self, conn: Connection):
        """
        Serve one request on one connection (runs in its own thread).

        Never raises: whatever goes wrong is logged and the connection is
        closed.
        """
        request: Optional[RequestLine] = None

        try:
            with conn:  # Always closed, whatever happens below
                try:
                    raw = conn.read_request_line()
                    if raw is None:
                        logger.debug(f"[{conn.id}] Client closed before sending a request line")
                        return

                    request = parse_request_line(raw)
                    conn.state = ConnectionState.PROCESSING
                    response = self.dispatch(request)

                except HTTPParseError as e:
                    logger.info(f"[{conn.id}] Bad request from {conn.client_ip}: {e}")
                    response = error(HTTPStatus(e.status_code))

                except TimeoutError:
                    logger.debug(f"[{conn.id}] Timed out waiting for a request line")
                    return

                response, data = self._serialize(response)
                if not conn.send_response(data):
                    return

                log_request(
                    request_id=conn.id,
                    client_ip=conn.client_ip,
                    status_code=response.status,
                    content_length=len(response.body),
                    started_at=conn.created_at,
                    method=request.method if request else "-",
                    path=request.path if request else "-",
                    query=request.query if request else None,
                    log_format=self.config.log_format,
                )

        except Exception as e:
            logger.exception(f"[{conn.id}] Connection error: {e}")

        finally:
            if self._slots is not None:
                self._slots.release()

    def _serialize(self, response: HTTPResponse) -> Tuple[HTTPResponse, bytes]:
        """
        Turn a handler's response into wire bytes.

        A response that cannot be serialized (header outside ISO-8859-1,
        body that is not bytes) is replaced by a 500.

        Returns:
            The response actually sent and its bytes.
        """
        try:
            return response, response.to_bytes()
        except Exception as e:
            logger.exception(f"Cannot serialize response {response!r}: {e}")
            fallback = internal_error()
            return fallback, fallback.to_bytes()

    def dispatch(self, request: RequestLine) -> HTTPResponse:
        """
        Route a parsed request to the handler for its method.

        Returns:
            The handler's response; 501 if no handler is registered for the
            method; 500 if the handler raised.
        """
        handler = self._handlers.get(request.method)
        if handler is None:
            logger.warning(f"No handler for method {request.method!r}")
            return not_implemented()

        try:
            return handler.handle(request.path, request.query)
        except Exception as e:
            logger.exception(f"Handler error for {request.method} {request.path}: {e}")
            return internal_error()


def configure_logging(log_level: str = "INFO"):
    """Configure the root logger and the statichttp loggers."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("statichttp").setLevel(level)


def create_app(
    config: Optional[ServerConfig] = None,
    extension_to_mime: Optional[Mapping[str, str]] = None,
) -> HTTPServer:
    """
    Build a server with the default wiring.

        MIME table   ← config.mime_table (or extension_to_mime if given)
        Registry     ← everything under config.root_dir
        "GET"        → GetRequestHandler(table, registry)

    Args:
        config: Server configuration.
        extension_to_mime: Table to use instead of the configured one.

    Returns:
        A server ready to start().

    Example:
        app = create_app(ServerConfig(root_dir="./public", port=3000))
        app.run()
    """
    config = config or ServerConfig()
    server = HTTPServer(config)

    table = extension_to_mime if extension_to_mime is not None else get_mime_table(config.mime_table)
    registry = ResourceRegistry(config.root_dir)

    server.register_handler(
        "GET",
        GetRequestHandler(table, registry, header_name=config.content_type_header),
    )
    return server
