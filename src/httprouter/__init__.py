"""
=============================================================================
HTTPROUTER - A Small HTTP Server Walkthrough With Explicit Routing
=============================================================================

This package walks through the basics of building an HTTP server on top of
Python's standard-library `http.server` module: creating a server, handling
requests, setting status codes and headers, returning different body formats
(plaintext, JSON, HTML), and routing requests with a "not found" fallback.

=============================================================================
PROJECT OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTPROUTER ARCHITECTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. LISTENER (core/listener.py)                                    │
    │      - http.server.ThreadingHTTPServer does accept + parsing        │
    │      - One handler class answers every HTTP method                  │
    │      - Writes status line, headers and body back to the socket      │
    │                                                                      │
    │   2. ROUTER (http/router.py)                                        │
    │      - Exact (METHOD, path) lookup in a dict                        │
    │      - Duplicate or malformed routes fail at setup time             │
    │      - Unmatched requests ALWAYS get a 404, never a hung client     │
    │                                                                      │
    │   3. RESPONSES (http/response.py)                                   │
    │      - HTTPResponse: status + ordered headers + body                │
    │      - ResponseBuilder: text(), json(), html()                      │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httprouter/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m httprouter)
    ├── errors.py            # ConfigurationError
    ├── config.py            # ServerConfig dataclass
    ├── server.py            # HTTPServer: one Router + one Listener
    ├── core/
    │   └── listener.py      # stdlib http.server adapter
    ├── http/
    │   ├── request.py       # HTTPRequest (read-only view)
    │   ├── response.py      # HTTPResponse + ResponseBuilder
    │   ├── router.py        # Route + Router
    │   └── status_codes.py  # Status constants and reason phrases
    └── handlers/
        └── pages.py         # The walkthrough's demo pages

=============================================================================
QUICK START
=============================================================================

    from httprouter import HTTPServer, ServerConfig
    from httprouter.http import ResponseBuilder

    server = HTTPServer(ServerConfig(port=3000))

    @server.get("/")
    def hello(request):
        return ResponseBuilder().html("<h1>Hello</h1>").build()

    @server.get("/goodbye")
    def goodbye(request):
        return ResponseBuilder().html("<h1>Goodbye</h1>").build()

    server.run()   # GET /missing → 404 <h1>Not found</h1>

=============================================================================
"""

__version__ = "1.0.0"

from .config import ServerConfig
from .errors import ConfigurationError
from .server import HTTPServer

__all__ = ["HTTPServer", "ServerConfig", "ConfigurationError", "__version__"]
