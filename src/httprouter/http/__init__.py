"""
=============================================================================
HTTP LAYER
=============================================================================

The pieces a handler author touches:

    ┌─────────────────────────────────────────────────────────────────────┐
    │ request.py       HTTPRequest - read-only method/path/headers/body   │
    │ response.py      HTTPResponse - status, ordered headers, body       │
    │                  ResponseBuilder - text() / json() / html()         │
    │ router.py        Router - exact (METHOD, path) → handler            │
    │ status_codes.py  HTTPStatus and reason phrases                      │
    └─────────────────────────────────────────────────────────────────────┘

Parsing bytes off the socket is NOT here; http.server does that in the
listener (httprouter.core).
=============================================================================
"""

from .request import HTTPRequest, split_target
from .response import (
    HTTPResponse,
    ResponseBuilder,
    NOT_FOUND_BODY,
    INTERNAL_ERROR_BODY,
    ok,                 # 200 with Content-Type from the body's type
    html_response,      # HTML page with any status
    not_found,          # 404 fallback
    internal_error,     # 500 fallback
)
from .router import Router, Route, Handler, METHODS
from .status_codes import HTTPStatus

__all__ = [
    # Requests
    "HTTPRequest",
    "split_target",

    # Responses
    "HTTPResponse",
    "ResponseBuilder",
    "NOT_FOUND_BODY",
    "INTERNAL_ERROR_BODY",
    "ok",
    "html_response",
    "not_found",
    "internal_error",

    # Routing
    "Router",
    "Route",
    "Handler",
    "METHODS",

    # Status codes
    "HTTPStatus",
]
