"""
Unit tests for HTTPServer handler registration and dispatch.

No sockets are opened here.
"""

import pytest

from statichttp import HTTPServer, ServerConfig, create_app
from statichttp.handlers import GetRequestHandler
from statichttp.http import HTTPResponse, HTTPStatus, RequestLine, ok


class EchoHandler:
    """Answers with the path and query it was given."""

    def handle(self, path, query):
        return ok(f"{path}|{query}".encode(), {"ContentType": "text/plain"})


class FailingHandler:
    def handle(self, path, query):
        raise OSError("disk gone")


@pytest.fixture
def server(config: ServerConfig) -> HTTPServer:
    return HTTPServer(config)


class TestRegistration:
    """Tests for register_handler() and the handler table."""

    def test_register_and_dispatch(self, server: HTTPServer):
        server.register_handler("GET", EchoHandler())

        response = server.dispatch(RequestLine("GET", "/x", "a=1"))

        assert response.status == HTTPStatus.OK
        assert response.body == b"/x|a=1"

    def test_register_returns_self(self, server: HTTPServer):
        assert server.register_handler("GET", EchoHandler()) is server

    def test_last_registration_wins(self, server: HTTPServer):
        second = EchoHandler()
        server.register_handler("GET", FailingHandler())
        server.register_handler("GET", second)

        assert server.handlers["GET"] is second

    def test_handlers_view_is_read_only(self, server: HTTPServer):
        server.register_handler("GET", EchoHandler())

        with pytest.raises(TypeError):
            server.handlers["POST"] = EchoHandler()

    def test_register_after_start_raises(self, server: HTTPServer):
        server.start(concurrent=True)
        try:
            with pytest.raises(RuntimeError):
                server.register_handler("POST", EchoHandler())
        finally:
            server.shutdown()

    def test_start_twice_raises(self, server: HTTPServer):
        server.start(concurrent=True)
        try:
            with pytest.raises(RuntimeError):
                server.start(concurrent=True)
        finally:
            server.shutdown()

    def test_start_freezes_registry(self, config: ServerConfig):
        server = create_app(config)
        registry = server.handlers["GET"].resources

        server.start(concurrent=True)
        try:
            assert registry.frozen
        finally:
            server.shutdown()


class TestDispatch:
    """Tests for dispatch() results."""

    def test_unknown_method(self, server: HTTPServer):
        server.register_handler("GET", EchoHandler())

        status, headers, body = server.dispatch(RequestLine("POST", "/", None))

        assert status == HTTPStatus.NOT_IMPLEMENTED
        assert headers == {}
        assert body == b""

    def test_method_is_case_sensitive(self, server: HTTPServer):
        server.register_handler("GET", EchoHandler())

        assert server.dispatch(RequestLine("get", "/", None)).status == 501

    def test_no_handlers_at_all(self, server: HTTPServer):
        assert server.dispatch(RequestLine("GET", "/", None)).status == 501

    def test_handler_error_becomes_500(self, server: HTTPServer):
        server.register_handler("GET", FailingHandler())

        response = server.dispatch(RequestLine("GET", "/", None))

        assert response.status == HTTPStatus.INTERNAL_SERVER_ERROR
        assert response.headers == {}
        assert response.body == b""

    def test_handler_error_is_logged(self, server: HTTPServer, caplog):
        server.register_handler("GET", FailingHandler())

        with caplog.at_level("ERROR", logger="statichttp"):
            server.dispatch(RequestLine("GET", "/boom", None))

        assert "disk gone" in caplog.text


class TestCreateApp:
    """Tests for the default wiring."""

    def test_get_is_registered(self, config: ServerConfig):
        server = create_app(config)

        assert list(server.handlers) == ["GET"]
        assert isinstance(server.handlers["GET"], GetRequestHandler)

    def test_serves_root(self, config: ServerConfig):
        server = create_app(config)

        response = server.dispatch(RequestLine("GET", "/", None))

        assert isinstance(response, HTTPResponse)
        assert response.status == 200
        assert response.headers == {"ContentType": "text/html"}

    def test_header_name_from_config(self, config: ServerConfig):
        config.content_type_header = "Content-Type"
        server = create_app(config)

        response = server.dispatch(RequestLine("GET", "/a.html", None))

        assert response.headers == {"Content-Type": "text/html"}

    def test_web_table(self, config: ServerConfig, public_dir):
        (public_dir / "style.css").write_bytes(b"body{}")
        config.mime_table = "web"
        server = create_app(config)

        response = server.dispatch(RequestLine("GET", "/style.css", None))

        assert response.status == 200
        assert response.headers == {"ContentType": "text/css"}

    def test_explicit_table(self, config: ServerConfig):
        server = create_app(config, extension_to_mime={".bin": "application/octet-stream"})

        assert server.dispatch(RequestLine("GET", "/data.bin", None)).status == 200
        assert server.dispatch(RequestLine("GET", "/a.html", None)).status == 404

    def test_missing_root_dir(self, config: ServerConfig, tmp_path):
        config.root_dir = str(tmp_path / "nope")

        with pytest.raises(ValueError):
            create_app(config)

    def test_invalid_config(self, config: ServerConfig):
        config.port = 70000

        with pytest.raises(ValueError):
            create_app(config)
