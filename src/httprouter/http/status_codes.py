"""
=============================================================================
HTTP STATUS CODES
=============================================================================

Status codes are 3-digit numbers grouped by their first digit:

    ┌────────┬───────────────────────────────────────────────────────────┐
    │  1xx   │ INFORMATIONAL - request received, continuing              │
    │  2xx   │ SUCCESS       - 200 OK is what the walkthrough returns    │
    │  3xx   │ REDIRECTION   - further action needed                     │
    │  4xx   │ CLIENT ERROR  - 404 Not Found is our fallback             │
    │  5xx   │ SERVER ERROR  - 500 when a handler blows up               │
    └────────┴───────────────────────────────────────────────────────────┘

The listener sits on `http.server`, which already speaks the standard
library's `http.HTTPStatus` enum (with `.phrase` for the reason text), so we
reuse that enum instead of keeping a second table of the same numbers.

Handlers may still return any integer in 100-599, including codes the enum
does not know about (e.g. 299). `reason_phrase()` covers those.
=============================================================================
"""

from http import HTTPStatus

# Valid range for a status code on the wire (RFC 7231 §6)
MIN_STATUS = 100
MAX_STATUS = 599


def is_valid_status(code: int) -> bool:
    """Check that ``code`` is an integer in the 100-599 range."""
    # bool is an int subclass; True is not a status code
    if isinstance(code, bool) or not isinstance(code, int):
        return False
    return MIN_STATUS <= code <= MAX_STATUS


def reason_phrase(code: int) -> str:
    """
    Get the reason phrase for a status code.

        HTTP/1.1 404 Not Found
                 ─── ─────────
                  │      │
                  │      └── reason phrase
                  └───────── status code

    Unknown codes fall back to a generic phrase for their class, so the
    status line is never empty.
    """
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return _CLASS_PHRASES.get(code // 100, "Unknown")


_CLASS_PHRASES = {
    1: "Informational",
    2: "Success",
    3: "Redirection",
    4: "Client Error",
    5: "Server Error",
}


__all__ = ["HTTPStatus", "MIN_STATUS", "MAX_STATUS", "is_valid_status", "reason_phrase"]
