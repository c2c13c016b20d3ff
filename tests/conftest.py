"""
pytest configuration and fixtures.
"""

import socket
from pathlib import Path
from typing import Generator, Tuple

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from statichttp import HTTPServer, ServerConfig, create_app
from statichttp.handlers import GetRequestHandler
from statichttp.http import DEFAULT_MIME_TYPES
from statichttp.resources import ResourceRegistry


INDEX_HTML = b"<!DOCTYPE html><html><body>home</body></html>"
A_HTML = b"<html><body>a</body></html>"
B_PNG = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
DATA_BIN = b"\x00\x01\x02\x03"


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    """
    A small public tree:

        public/
        ├── index.html
        ├── a.html
        ├── data.bin
        └── sub/
            └── b.png
    """
    root = tmp_path / "public"
    (root / "sub").mkdir(parents=True)
    (root / "index.html").write_bytes(INDEX_HTML)
    (root / "a.html").write_bytes(A_HTML)
    (root / "data.bin").write_bytes(DATA_BIN)
    (root / "sub" / "b.png").write_bytes(B_PNG)
    return root


@pytest.fixture
def registry(public_dir: Path) -> ResourceRegistry:
    return ResourceRegistry(public_dir)


@pytest.fixture
def get_handler(registry: ResourceRegistry) -> GetRequestHandler:
    return GetRequestHandler(DEFAULT_MIME_TYPES, registry)


@pytest.fixture
def config(public_dir: Path) -> ServerConfig:
    """Test server configuration on a free localhost port."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        root_dir=str(public_dir),
        log_level="WARNING",
    )


@pytest.fixture
def running_server(config: ServerConfig) -> Generator[HTTPServer, None, None]:
    """A server with the default wiring, accepting in the background."""
    server = create_app(config)
    server.start(concurrent=True)

    yield server

    server.shutdown()


def send_request(
    address: Tuple[str, int],
    raw: bytes,
    timeout: float = 5.0,
) -> bytes:
    """Send raw bytes, then read the response until the server closes."""
    with socket.create_connection(address, timeout=timeout) as sock:
        sock.sendall(raw)
        return read_until_eof(sock)


def read_until_eof(sock: socket.socket) -> bytes:
    chunks = []
    while True:
        chunk = sock.recv(4096)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def split_response(raw: bytes) -> Tuple[str, dict, bytes]:
    """Split raw response bytes into (status, headers, body)."""
    head, _, body = raw.partition(b"\r\n\r\n")
    lines = head.decode("iso-8859-1").split("\r\n")

    version, status = lines[0].split(" ", 1)
    assert version == "HTTP/1.1"

    headers = {}
    for line in lines[1:]:
        name, _, value = line.partition(": ")
        headers[name] = value

    return status, headers, body
