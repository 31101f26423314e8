"""
=============================================================================
DEMO PAGES
=============================================================================

The walkthrough builds its server up one step at a time. These handlers are
where it ends up:

    GET /          <h1>Hello</h1>          text/html
    GET /goodbye   <h1>Goodbye</h1>        text/html
    GET /text      Hello, world            text/plain
    GET /json      {"message": "Hello, world"}   application/json
    anything else  <h1>Not found</h1>      404 (router fallback)

Each handler is a plain function from HTTPRequest to HTTPResponse. None of
them touch global state, so they run safely on any listener thread.
=============================================================================
"""

from ..http import HTTPRequest, HTTPResponse, ResponseBuilder, Router


GREETING = "Hello, world"


def hello(request: HTTPRequest) -> HTTPResponse:
    return ResponseBuilder().html("<h1>Hello</h1>").build()


def goodbye(request: HTTPRequest) -> HTTPResponse:
    return ResponseBuilder().html("<h1>Goodbye</h1>").build()


def plaintext(request: HTTPRequest) -> HTTPResponse:
    # Same greeting, but the browser shows it verbatim instead of rendering it
    return ResponseBuilder().text(GREETING).build()


def json_greeting(request: HTTPRequest) -> HTTPResponse:
    return ResponseBuilder().json({"message": GREETING}).build()


def register_pages(router: Router) -> Router:
    """
    Register the demo routes on ``router``.

    Returns:
        The same router, for chaining

    Raises:
        ConfigurationError: If any of the paths is already taken.
    """
    router.register("GET", "/", hello)
    router.register("GET", "/goodbye", goodbye)
    router.register("GET", "/text", plaintext)
    router.register("GET", "/json", json_greeting)
    return router
