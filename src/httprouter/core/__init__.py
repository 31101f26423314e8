"""
=============================================================================
CORE - THE LISTENER
=============================================================================

Everything below the router: sockets, HTTP parsing and serialization.
We lean on the standard library's `http.server` for all of it and only
add the glue that hands each parsed request to a Router.

    client ──TCP──► ThreadingHTTPServer ──► RequestHandler ──► Router
                                                  │
    client ◄──────── status line, headers, body ◄─┘

=============================================================================
"""

from .listener import Listener, RequestHandler

__all__ = [
    "Listener",         # Owns the socket, serves a Router
    "RequestHandler",   # http.server handler class that calls dispatch()
]
