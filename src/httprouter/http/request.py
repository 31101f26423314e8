"""
=============================================================================
HTTP REQUEST VIEW
=============================================================================

The listener (http.server) does the byte-level parsing for us. What the
router receives is a small, read-only view of the request:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │    GET /goodbye?lang=en#top HTTP/1.1\r\n                             │
    │    ─┬─ ─────────┬──────────  ────┬────                               │
    │     │           │                │                                   │
    │   method   request-target     version                                │
    │                 │                                                    │
    │      ┌──────────┼─────────────┐                                      │
    │      │          │             │                                      │
    │    path       query       fragment                                   │
    │  /goodbye    lang=en     (dropped - never sent by browsers,          │
    │                           but stripped anyway)                       │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Only the PATH takes part in routing. Query parameters are parsed and kept
for handlers, but "/goodbye?lang=en" and "/goodbye" hit the same route.

=============================================================================
WHAT WE DO NOT NORMALIZE
=============================================================================

    /goodbye   vs  /goodbye/   → different paths (no trailing-slash folding)
    /goodbye   vs  /Goodbye    → different paths (case-sensitive)
    /a%20b     vs  /a b        → different paths (no percent-decoding)

Matching is plain string equality on what the client sent, minus the query
string and fragment.

=============================================================================
HEADERS
=============================================================================

Header names are case-insensitive per RFC 7230. We normalize them to
lowercase once, at construction, so `get_header("Content-Type")` and
`get_header("content-type")` find the same value.

The body is opaque bytes. Parsing it (forms, JSON, streaming) is left to
handlers.
=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple
from urllib.parse import parse_qs


def split_target(target: str) -> Tuple[str, str]:
    """
    Split a request-target into (path, query).

    The fragment, if any, is discarded. An empty path becomes "/".

    Examples:
        split_target("/goodbye?lang=en#top")  → ("/goodbye", "lang=en")
        split_target("/goodbye/")             → ("/goodbye/", "")
        split_target("")                      → ("/", "")
    """
    target = target.split("#", 1)[0]
    path, _, query = target.partition("?")
    return path or "/", query


@dataclass(frozen=True)
class HTTPRequest:
    """
    Read-only view of an incoming request.

    Attributes:
        method:         HTTP method, uppercase ("GET", "POST", ...)
        path:           Request path without query string or fragment
        version:        "HTTP/1.1" or "HTTP/1.0"
        headers:        Header name (lowercase) → value
        query_params:   "?a=1&a=2&b=" → {"a": ["1", "2"], "b": [""]}
        body:           Raw body bytes, b"" when the request has none
        client_address: (ip, port) of the peer, for logging

    Build one from a raw request-target with `HTTPRequest.from_target()`;
    the dataclass constructor is handy in tests:

        HTTPRequest(method="GET", path="/goodbye")
    """

    method: str
    path: str
    version: str = "HTTP/1.1"
    headers: Dict[str, str] = field(default_factory=dict)
    query_params: Dict[str, List[str]] = field(default_factory=dict)
    body: bytes = b""
    client_address: Tuple[str, int] = ("", 0)

    def __post_init__(self) -> None:
        # frozen=True blocks normal assignment; normalization happens once here
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(
            self, "headers", {name.lower(): value for name, value in self.headers.items()}
        )

    @classmethod
    def from_target(
        cls,
        method: str,
        target: str,
        headers: Optional[Mapping[str, str]] = None,
        body: bytes = b"",
        version: str = "HTTP/1.1",
        client_address: Tuple[str, int] = ("", 0),
    ) -> "HTTPRequest":
        """
        Build a request from the raw request-target of the request line.

        Args:
            method: HTTP method from the request line
            target: Raw target, e.g. "/goodbye?lang=en"
            headers: Header mapping (any case)
            body: Raw body bytes
            version: HTTP version string
            client_address: (ip, port) of the peer

        Returns:
            HTTPRequest with path and query split apart
        """
        path, query = split_target(target)
        return cls(
            method=method,
            path=path,
            version=version,
            headers=dict(headers or {}),
            query_params=parse_qs(query, keep_blank_values=True),
            body=body,
            client_address=client_address,
        )

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def content_type(self) -> Optional[str]:
        """Content-Type without parameters ("text/html; charset=utf-8" → "text/html")."""
        ct = self.headers.get("content-type", "")
        return ct.split(";")[0].strip().lower() or None

    @property
    def content_length(self) -> int:
        """Content-Length as an integer, 0 if missing or invalid."""
        try:
            return int(self.headers.get("content-length", 0))
        except ValueError:
            return 0

    @property
    def host(self) -> str:
        return self.headers.get("host", "")

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    def get_header(self, name: str, default: str = "") -> str:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower(), default)

    def get_query(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """First value of a query parameter, or ``default``."""
        values = self.query_params.get(name, [])
        return values[0] if values else default

    def get_query_list(self, name: str) -> List[str]:
        """All values of a query parameter (empty list if absent)."""
        return list(self.query_params.get(name, []))
