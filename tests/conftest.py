"""
pytest configuration and fixtures.
"""

import http.client
import socket
import threading
import time
from typing import Generator, Optional

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httprouter import HTTPServer, ServerConfig
from httprouter.handlers import register_pages
from httprouter.http import HTTPRequest, HTTPResponse, ResponseBuilder


@pytest.fixture
def config() -> ServerConfig:
    """Default test server configuration."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        log_level="WARNING",
    )


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


class TestServer:
    """Test server helper that runs in a background thread."""

    def __init__(self, server: HTTPServer, port: int):
        self.server = server
        self.port = port
        self._thread: Optional[threading.Thread] = None

    def start(self):
        """Start server in background thread."""
        self._thread = threading.Thread(
            target=self.server.run,
            kwargs={"port": self.port},
            daemon=True
        )
        self._thread.start()

        # Wait for the accept loop, not just the socket
        for _ in range(50):  # 5 seconds max
            if self.server.running and self.server._listener.serving:
                return
            time.sleep(0.1)

        raise RuntimeError("Server failed to start")

    def stop(self):
        """Stop the server."""
        self.server.shutdown()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def request(self, method: str, path: str, body: Optional[bytes] = None,
                headers: Optional[dict] = None):
        """Send one request, return (response, body bytes)."""
        conn = http.client.HTTPConnection("127.0.0.1", self.port, timeout=5)
        try:
            conn.request(method, path, body=body, headers=headers or {})
            response = conn.getresponse()
            return response, response.read()
        finally:
            conn.close()


@pytest.fixture
def test_server(free_port: int) -> Generator[TestServer, None, None]:
    """A live server with the demo pages plus an echo route."""
    server = HTTPServer(ServerConfig(
        host="127.0.0.1",
        port=free_port,
        log_level="WARNING",
    ))
    register_pages(server.router)

    @server.post("/echo")
    def echo_route(request: HTTPRequest) -> HTTPResponse:
        return (ResponseBuilder()
            .header("X-Echo-Length", str(len(request.body)))
            .body(request.body)
            .build())

    @server.get("/boom")
    def boom(request: HTTPRequest) -> HTTPResponse:
        raise RuntimeError("handler failure")

    test_srv = TestServer(server, free_port)
    test_srv.start()

    yield test_srv

    test_srv.stop()


@pytest.fixture
def server_factory(free_port: int) -> Generator:
    """Start any HTTPServer on the free port; stopped at teardown."""
    started = []

    def start(server: HTTPServer) -> TestServer:
        test_srv = TestServer(server, free_port)
        test_srv.start()
        started.append(test_srv)
        return test_srv

    yield start

    for test_srv in started:
        test_srv.stop()
