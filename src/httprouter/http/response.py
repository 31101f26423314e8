"""
=============================================================================
HTTP RESPONSE DESCRIPTOR AND BUILDER
=============================================================================

A handler answers a request with an HTTPResponse: a status code, an ordered
set of headers and a body. The listener turns that into bytes on the wire.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     WHAT THE LISTENER WRITES                        │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    HTTP/1.1 200 OK\r\n                 ← status line                │
    │    Content-Type: text/html\r\n         ← handler's headers,         │
    │    X-Powered-By: httprouter\r\n          in insertion order         │
    │    Content-Length: 14\r\n              ← added if missing           │
    │    Date: Mon, 19 Oct 2026 ...\r\n      ← added if missing           │
    │    Server: httprouter/1.0\r\n          ← added if missing           │
    │    \r\n                                                              │
    │    <h1>Hello</h1>                      ← body                       │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Headers live in a plain dict. Dicts keep insertion order, so the order a
handler sets headers in is the order they are serialized in. That makes
responses deterministic and easy to assert on in tests.

=============================================================================
THREE BODY FORMATS
=============================================================================

The walkthrough returns the same greeting three ways:

    ResponseBuilder().text("Hello, world").build()
        Content-Type: text/plain; charset=utf-8

    ResponseBuilder().json({"message": "Hello, world"}).build()
        Content-Type: application/json; charset=utf-8

    ResponseBuilder().html("<h1>Hello</h1>").build()
        Content-Type: text/html; charset=utf-8

The Content-Type is what tells the browser whether to show raw text,
pretty-print JSON or render markup. Same bytes, different meaning.

=============================================================================
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union
import json

from .status_codes import HTTPStatus, is_valid_status, reason_phrase


# Body of the fallback responses. Kept as module constants so the router,
# the listener and the tests agree on the exact bytes.
NOT_FOUND_BODY = "<h1>Not found</h1>"
INTERNAL_ERROR_BODY = "<h1>Internal Server Error</h1>"

TEXT_PLAIN = "text/plain; charset=utf-8"
TEXT_HTML = "text/html; charset=utf-8"
APPLICATION_JSON = "application/json; charset=utf-8"


@dataclass
class HTTPResponse:
    """
    The status/headers/body triple produced for a request.

    Attributes:
        status:  Integer status code, 100-599 (an HTTPStatus works too)
        headers: Header name → value, serialized in insertion order
        body:    str (encoded as UTF-8 on the wire) or bytes

    Raises:
        ValueError: If ``status`` is outside 100-599, or ``body`` is
            neither str nor bytes.
    """

    status: int = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: Union[str, bytes] = b""

    def __post_init__(self) -> None:
        if not is_valid_status(self.status):
            raise ValueError(f"Invalid status code: {self.status!r} (must be 100-599)")
        # bytes(5) would be five NUL bytes and bytes(None) fails mid-write
        if not isinstance(self.body, (str, bytes, bytearray)):
            raise ValueError(
                f"Response body must be str or bytes, got {type(self.body).__name__}"
            )

    @property
    def status_line(self) -> str:
        """e.g. "HTTP/1.1 404 Not Found"."""
        return f"HTTP/1.1 {int(self.status)} {self.reason}"

    @property
    def reason(self) -> str:
        return reason_phrase(self.status)

    @property
    def body_bytes(self) -> bytes:
        """The body as bytes; str bodies are UTF-8 encoded."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return bytes(self.body)

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """
        Case-insensitive header lookup.

        Response headers keep the case the handler used (so the wire shows
        "Content-Type"), but lookups should not care.
        """
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        """Set a header, returning self for chaining."""
        self.headers[name] = value
        return self

    def wire_headers(
        self,
        server_name: str = "httprouter/1.0",
        now: Optional[datetime] = None,
    ) -> List[Tuple[str, str]]:
        """
        Headers exactly as the listener writes them.

        The handler's headers come first, in order. Content-Length, Date
        and Server are appended when the handler did not set them. The
        response itself is not modified.

        Args:
            server_name: Value for the Server header
            now: Clock override for the Date header (tests)

        Returns:
            List of (name, value) pairs
        """
        items = list(self.headers.items())
        present = {name.lower() for name, _ in items}

        # Without Content-Length the client cannot tell where the body ends
        if "content-length" not in present:
            items.append(("Content-Length", str(len(self.body_bytes))))
        if "date" not in present:
            items.append(("Date", format_http_date(now or datetime.now(timezone.utc))))
        if "server" not in present:
            items.append(("Server", server_name))
        return items


class ResponseBuilder:
    """
    Fluent builder for HTTPResponse.

        response = (ResponseBuilder()
            .status(HTTPStatus.CREATED)
            .header("X-Request-Id", "abc123")
            .json({"id": 1})
            .build())

    Every method except build() returns self.
    """

    def __init__(self) -> None:
        self._status: int = HTTPStatus.OK
        self._headers: Dict[str, str] = {}
        self._body: Union[str, bytes] = b""

    def status(self, status: int) -> "ResponseBuilder":
        self._status = status
        return self

    def header(self, name: str, value: str) -> "ResponseBuilder":
        self._headers[name] = value
        return self

    def headers(self, headers: Dict[str, str]) -> "ResponseBuilder":
        self._headers.update(headers)
        return self

    def content_type(self, content_type: str) -> "ResponseBuilder":
        return self.header("Content-Type", content_type)

    def body(self, body: Union[str, bytes]) -> "ResponseBuilder":
        """Raw body. Prefer text(), json() or html() so Content-Type is set."""
        self._body = body
        return self

    def text(self, text: str, content_type: str = TEXT_PLAIN) -> "ResponseBuilder":
        """Plaintext body."""
        self._body = text
        return self.content_type(content_type)

    def html(self, markup: str, content_type: str = TEXT_HTML) -> "ResponseBuilder":
        """HTML body."""
        self._body = markup
        return self.content_type(content_type)

    def json(self, data: Any, pretty: bool = False) -> "ResponseBuilder":
        """
        JSON body.

        ensure_ascii=False keeps non-ASCII characters readable; the body is
        UTF-8 encoded on the wire and the charset says so.
        """
        self._body = json.dumps(data, indent=2 if pretty else None, ensure_ascii=False)
        return self.content_type(APPLICATION_JSON)

    def build(self) -> HTTPResponse:
        """
        Build the HTTPResponse.

        Raises:
            ValueError: If the status code is outside 100-599.
        """
        return HTTPResponse(status=self._status, headers=dict(self._headers), body=self._body)


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an HTTP-date: "Mon, 19 Oct 2026 09:30:00 GMT".

    Built from fixed English tables rather than strftime, whose %a/%b
    follow the process locale.
    """
    dt = dt.astimezone(timezone.utc)
    return (
        f"{_DAYS[dt.weekday()]}, {dt.day:02d} {_MONTHS[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def ok(body: Union[str, bytes, dict, list] = "", content_type: Optional[str] = None) -> HTTPResponse:
    """
    200 OK with the Content-Type picked from the body's type.

        ok({"a": 1})     → application/json
        ok("hi")         → text/plain
        ok(b"\\x00")      → no Content-Type unless given
    """
    builder = ResponseBuilder().status(HTTPStatus.OK)
    if isinstance(body, (dict, list)):
        builder.json(body)
    elif isinstance(body, str):
        builder.text(body, content_type or TEXT_PLAIN)
    else:
        builder.body(body)
        if content_type:
            builder.content_type(content_type)
    return builder.build()


def html_response(markup: str, status: int = HTTPStatus.OK) -> HTTPResponse:
    """HTML page with the given status."""
    return ResponseBuilder().status(status).html(markup).build()


def not_found(body: str = NOT_FOUND_BODY) -> HTTPResponse:
    """
    The router's fallback: 404, ``Content-Type: text/html``, ``<h1>Not found</h1>``.

    A fresh object every call, so a caller adding headers to one 404 cannot
    leak them into the next.
    """
    return HTTPResponse(
        status=HTTPStatus.NOT_FOUND,
        headers={"Content-Type": "text/html"},
        body=body,
    )


def internal_error(body: str = INTERNAL_ERROR_BODY) -> HTTPResponse:
    """500 returned when a handler fails. Never exposes the exception text."""
    return HTTPResponse(
        status=HTTPStatus.INTERNAL_SERVER_ERROR,
        headers={"Content-Type": "text/html"},
        body=body,
    )
