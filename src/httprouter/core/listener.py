"""
=============================================================================
LISTENER - THE STANDARD LIBRARY'S HTTP SERVER, WIRED TO A ROUTER
=============================================================================

Python ships an HTTP server in `http.server`. It already does the hard,
boring parts:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                       WHO DOES WHAT                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   http.server.ThreadingHTTPServer                                    │
    │     • bind + listen on (host, port)                                  │
    │     • accept loop, one thread per connection                         │
    │     • parse request line and headers                                 │
    │     • keep-alive bookkeeping (HTTP/1.1)                              │
    │                                                                      │
    │   RequestHandler (this module)                                       │
    │     • read Content-Length bytes of body                              │
    │     • build an HTTPRequest                                           │
    │     • router.dispatch(request) → HTTPResponse                        │
    │     • write status line, headers, body                               │
    │     • one access log line                                            │
    │                                                                      │
    │   Router (httprouter.http.router)                                    │
    │     • pick the handler, or fall back to 404                          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
ONE METHOD, MANY NAMES
=============================================================================

BaseHTTPRequestHandler looks for a method called "do_" + request method:

    GET /goodbye HTTP/1.1   →   handler.do_GET()
    POST /guestbook ...     →   handler.do_POST()
    BREW /pot HTTP/1.1      →   no do_BREW → 501 Unsupported method

Routing by method is the router's job, so every do_XXX is the same
function. A POST to a path with only a GET route still reaches the router,
which answers 404 like any other unmatched pair.

=============================================================================
"""

from datetime import datetime, timezone
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Dict, Optional, Tuple
import json
import logging
import threading
import time

from ..config import ServerConfig
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse
from ..http.router import Router


logger = logging.getLogger(__name__)
access_logger = logging.getLogger("httprouter.access")


class RequestHandler(BaseHTTPRequestHandler):
    """
    Per-connection handler created by http.server.

    self.server is a _RouterHTTPServer, which carries the router and the
    config; the handler itself holds no state between requests.
    """

    # HTTP/1.1 enables keep-alive; every response carries Content-Length
    # so the client always knows where a body ends.
    protocol_version = "HTTP/1.1"

    server: "_RouterHTTPServer"

    def handle_request(self) -> None:
        """Serve one parsed request (shared by every do_XXX method)."""
        start = time.perf_counter()

        body = self._read_body()
        if body is None:
            return

        request = HTTPRequest.from_target(
            method=self.command,
            target=self.path,
            headers=self._collect_headers(),
            body=body,
            version=self.request_version,
            client_address=tuple(self.client_address[:2]),
        )

        response = self.server.router.dispatch(request)

        # Logged before writing so the line exists once the client has its answer
        if self.server.config.access_log:
            self._log_access(request, response, start)

        try:
            self._write_response(response, include_body=request.method != "HEAD")
        except (BrokenPipeError, ConnectionResetError) as e:
            # Client went away mid-response; nothing left to send it
            logger.debug("Client %s disconnected: %s", self.client_address[0], e)
            self.close_connection = True

    do_GET = do_HEAD = do_POST = do_PUT = do_DELETE = handle_request
    do_PATCH = do_OPTIONS = do_TRACE = do_CONNECT = handle_request

    # =========================================================================
    # READING
    # =========================================================================

    def _collect_headers(self) -> Dict[str, str]:
        """
        Headers as a dict, repeated names joined with ", " (RFC 7230 §3.2.2).

            Accept: text/html
            Accept: application/json   →  {"accept": "text/html, application/json"}
        """
        headers: Dict[str, str] = {}
        for name, value in self.headers.items():
            key = name.lower()
            if key in headers:
                headers[key] += ", " + value
            else:
                headers[key] = value
        return headers

    def _read_body(self) -> Optional[bytes]:
        """
        Read exactly Content-Length bytes.

        The body is handed to handlers as opaque bytes. Chunked request
        bodies are not supported and get a 501.

        Returns:
            The body (b"" when absent), or None if an error response was
            already sent.
        """
        if "chunked" in self.headers.get("Transfer-Encoding", "").lower():
            self.send_error(501, "Chunked request bodies are not supported")
            self.close_connection = True
            return None

        raw_length = self.headers.get("Content-Length")
        if raw_length is None:
            return b""

        try:
            length = int(raw_length)
            if length < 0:
                raise ValueError(raw_length)
        except ValueError:
            self.send_error(400, f"Invalid Content-Length: {raw_length!r}")
            self.close_connection = True
            return None

        return self.rfile.read(length) if length else b""

    # =========================================================================
    # WRITING
    # =========================================================================

    def _write_response(self, response: HTTPResponse, include_body: bool) -> None:
        """
        Serialize a response.

        send_response() would insert its own Server and Date headers ahead
        of the handler's; send_response_only() writes just the status line
        and leaves header order to HTTPResponse.wire_headers().
        """
        self.send_response_only(int(response.status), response.reason)
        for name, value in response.wire_headers(self.server.config.server_name):
            self.send_header(name, value)
        self.end_headers()

        if include_body:
            self.wfile.write(response.body_bytes)
        self.wfile.flush()

    # =========================================================================
    # LOGGING
    # =========================================================================
    #
    # BaseHTTPRequestHandler prints to stderr. Send everything through the
    # logging module instead so the host application controls where it goes.
    #

    def _log_access(self, request: HTTPRequest, response: HTTPResponse, start: float) -> None:
        duration_ms = (time.perf_counter() - start) * 1000
        entry = {
            "client_ip": request.client_address[0],
            "method": request.method,
            "path": self.path,
            "status": int(response.status),
            "content_length": len(response.body_bytes),
            "duration_ms": round(duration_ms, 2),
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        }

        if self.server.config.log_format == "json":
            access_logger.info(json.dumps(entry))
        else:
            access_logger.info(
                '%s - - [%s] "%s %s" %d %d %.2fms',
                entry["client_ip"], entry["timestamp"], entry["method"],
                entry["path"], entry["status"], entry["content_length"], duration_ms,
            )

    def log_message(self, format: str, *args) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)

    def log_error(self, format: str, *args) -> None:
        logger.warning("%s - %s", self.address_string(), format % args)


class _RouterHTTPServer(ThreadingHTTPServer):
    """ThreadingHTTPServer that knows its router and config."""

    # Worker threads must not keep the process alive after shutdown
    daemon_threads = True

    def __init__(self, address: Tuple[str, int], router: Router, config: ServerConfig):
        self.router = router
        self.config = config
        super().__init__(address, RequestHandler)

    def handle_error(self, request, client_address) -> None:
        # socketserver's default prints a traceback to stderr
        logger.exception("Unhandled error while serving %s", client_address[0])


class Listener:
    """
    Owns the listening socket and serves a Router on it.

        listener = Listener(router, ServerConfig(port=3000))
        listener.bind()              # socket is listening now
        listener.serve_forever()     # blocks; shutdown() from another thread

    bind() is separate from serve_forever() so callers can learn the real
    port (when configured with port=0) before the accept loop starts.

    A shutdown() that arrives before the accept loop has started is
    remembered: the next serve_forever() returns at once instead of
    serving. server_close() forgets it.
    """

    def __init__(self, router: Router, config: Optional[ServerConfig] = None):
        self.router = router
        self.config = config if config is not None else ServerConfig()
        self._httpd: Optional[_RouterHTTPServer] = None
        self._serving = False
        # Guards _serving against a concurrent shutdown()
        self._state_lock = threading.Lock()
        self._stop_requested = threading.Event()

    def bind(self) -> Tuple[str, int]:
        """
        Create the server socket and start listening.

        Returns:
            The bound (host, port)

        Raises:
            OSError: If the address is in use or not available.
        """
        if self._httpd is None:
            self._httpd = _RouterHTTPServer(
                (self.config.host, self.config.port), self.router, self.config
            )
            logger.debug("Bound listener to %s:%s", *self.server_address)
        return self.server_address

    @property
    def server_address(self) -> Tuple[str, int]:
        """Bound (host, port); the configured address before bind()."""
        if self._httpd is None:
            return (self.config.host, self.config.port)
        host, port = self._httpd.server_address[:2]
        return (host, port)

    @property
    def serving(self) -> bool:
        return self._serving

    def serve_forever(self, poll_interval: float = 0.5) -> None:
        """Run the accept loop until shutdown() is called. Binds first if needed."""
        self.bind()

        with self._state_lock:
            if self._stop_requested.is_set():
                self._stop_requested.clear()
                logger.debug("Shutdown requested before the accept loop started")
                return
            self._serving = True

        try:
            # socketserver keeps a shutdown() issued from here on, even one
            # that lands before its loop is entered
            self._httpd.serve_forever(poll_interval=poll_interval)
        finally:
            with self._state_lock:
                self._serving = False

    def shutdown(self) -> None:
        """
        Stop the accept loop and wait for it to exit.

        Must be called from a different thread than serve_forever(). If the
        loop is not running yet, the request is recorded and the next
        serve_forever() returns immediately.
        """
        with self._state_lock:
            if not self._serving:
                self._stop_requested.set()
                return
            httpd = self._httpd
        httpd.shutdown()

    def server_close(self) -> None:
        """Release the listening socket."""
        self._stop_requested.clear()
        if self._httpd is not None:
            self._httpd.server_close()
            self._httpd = None

    def __enter__(self) -> "Listener":
        self.bind()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()
        self.server_close()
