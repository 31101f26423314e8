"""
=============================================================================
REQUEST ROUTER
=============================================================================

Maps (method, path) pairs to handler functions, with a fallback for
everything else.

=============================================================================
FROM IF/ELSE TO A TABLE
=============================================================================

The first routing most tutorials show is a chain of comparisons:

    if request.url == "/":
        ... hello ...
    elif request.url == "/goodbye":
        ... goodbye ...
    # forgot the else? the client waits forever for a response

This router keeps the same semantics (exact string equality) but turns the
chain into a dict keyed by (METHOD, path):

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        ROUTING FLOW                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   GET /goodbye?lang=en                                               │
    │        │                                                             │
    │        ▼  strip query string / fragment                              │
    │   ("GET", "/goodbye")                                                │
    │        │                                                             │
    │        ▼  dict lookup, O(1)                                          │
    │   ┌──────────────────────────────────────────────┐                  │
    │   │ ("GET",  "/")         → hello                │                  │
    │   │ ("GET",  "/goodbye")  → goodbye   ← MATCH    │                  │
    │   │ ("POST", "/goodbye")  → sign_guestbook       │                  │
    │   └──────────────────────────────────────────────┘                  │
    │        │                        │                                    │
    │     found                   not found                                │
    │        ▼                        ▼                                    │
    │   goodbye(request)        404 <h1>Not found</h1>                     │
    │                           (or the configured default handler)        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The "no match" case is no longer a branch you can forget: a failed lookup
always lands on the fallback. dispatch() has no code path that returns
without a response.

=============================================================================
MATCHING RULES
=============================================================================

    Registered          Request            Match?
    ──────────          ───────            ──────
    GET /goodbye        GET /goodbye       yes
    GET /goodbye        GET /goodbye?x=1   yes   (query ignored)
    GET /goodbye        GET /goodbye/      no    (no trailing-slash folding)
    GET /goodbye        GET /Goodbye       no    (case-sensitive)
    GET /goodbye        POST /goodbye      no    (method is part of the key)

No parameters, no wildcards, no prefix matching.

=============================================================================
LIFECYCLE: SINGLE WRITER, THEN MANY READERS
=============================================================================

    configure                     freeze()                 serve
    ─────────────────────────────────┼─────────────────────────────────►
    register() / @get / @post        │   dispatch() from any number of
    (one thread, at startup)         │   listener threads, no locks

Registration mutates the table and is not thread-safe. Once the server
starts it calls freeze(); after that the table never changes, so concurrent
dispatch needs no locking. Registering on a frozen router is an error.

=============================================================================
INTERVIEW QUESTIONS ABOUT ROUTING
=============================================================================

Q: "Why fail on duplicate routes instead of letting the last one win?"
A: "Last-one-wins silently shadows a handler, usually because two modules
   picked the same path. Failing at registration surfaces that at startup,
   not as a confusing bug in production."

Q: "What happens if a handler raises?"
A: "The router logs it and answers 500. One broken handler should cost one
   response, not the listener thread."

=============================================================================
"""

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple
import logging

from ..errors import ConfigurationError
from .request import HTTPRequest, split_target
from .response import HTTPResponse, internal_error, not_found


logger = logging.getLogger(__name__)


# A handler takes a request and returns a response
Handler = Callable[[HTTPRequest], HTTPResponse]

# The methods a route can be registered for (RFC 7231 + PATCH)
METHODS: FrozenSet[str] = frozenset({
    "GET",
    "HEAD",
    "POST",
    "PUT",
    "DELETE",
    "PATCH",
    "OPTIONS",
    "TRACE",
    "CONNECT",
})


@dataclass(frozen=True)
class Route:
    """
    A registered (method, path) pair mapped to a handler.

    Immutable: created at configuration time, lives for the whole process.
    """

    method: str
    path: str
    handler: Handler

    @property
    def key(self) -> Tuple[str, str]:
        return (self.method, self.path)


def validate_path(path: str) -> None:
    """
    Check that a route path is a well-formed absolute path.

    Raises:
        ConfigurationError: If the path is not a string, does not start
            with "/" or contains whitespace.
    """
    if not isinstance(path, str):
        raise ConfigurationError(f"Route path must be a string, got {type(path).__name__}")
    if not path.startswith("/"):
        raise ConfigurationError(f"Route path must start with '/': {path!r}")
    if any(ch.isspace() for ch in path):
        raise ConfigurationError(f"Route path must not contain whitespace: {path!r}")


class Router:
    """
    Exact-match HTTP router with a deterministic fallback.

        router = Router()

        @router.get("/")
        def hello(request):
            return ResponseBuilder().html("<h1>Hello</h1>").build()

        router.dispatch(HTTPRequest("GET", "/"))         # hello's response
        router.dispatch(HTTPRequest("GET", "/missing"))  # 404 Not found

    The 404 body can be replaced with set_default_handler().
    """

    def __init__(self) -> None:
        self._routes: Dict[Tuple[str, str], Route] = {}
        self._default_handler: Optional[Handler] = None
        self._frozen = False

    # =========================================================================
    # ROUTE REGISTRATION
    # =========================================================================

    def register(self, method: str, path: str, handler: Handler) -> Route:
        """
        Add a route.

        All checks run before the table is touched, so a failed call leaves
        the router exactly as it was.

        Args:
            method: HTTP method, any case ("get" is stored as "GET")
            path: Exact absolute path, e.g. "/goodbye"
            handler: Callable taking HTTPRequest, returning HTTPResponse

        Returns:
            The registered Route

        Raises:
            ConfigurationError: Frozen router, unknown method, malformed
                path, non-callable handler or duplicate (method, path).
        """
        if self._frozen:
            raise ConfigurationError(
                f"Cannot register {method} {path}: router is frozen"
            )

        if not isinstance(method, str) or method.upper() not in METHODS:
            raise ConfigurationError(
                f"Unknown HTTP method {method!r}; expected one of {sorted(METHODS)}"
            )
        method = method.upper()

        validate_path(path)

        if not callable(handler):
            raise ConfigurationError(f"Handler for {method} {path} is not callable")

        key = (method, path)
        if key in self._routes:
            existing = self._routes[key].handler
            raise ConfigurationError(
                f"Duplicate route {method} {path} "
                f"(already handled by {getattr(existing, '__name__', existing)!r})"
            )

        route = Route(method=method, path=path, handler=handler)
        self._routes[key] = route
        logger.debug("Registered route %s %s", method, path)
        return route

    def set_default_handler(self, handler: Optional[Handler]) -> None:
        """
        Replace the built-in 404 fallback.

        The handler is called for every request that matches no route, so
        an embedding application can render its own "not found" page. Pass
        None to restore the built-in ``<h1>Not found</h1>``.

        Raises:
            ConfigurationError: If the router is frozen or the handler is
                not callable.
        """
        if self._frozen:
            raise ConfigurationError("Cannot change the default handler: router is frozen")
        if handler is not None and not callable(handler):
            raise ConfigurationError("Default handler is not callable")
        self._default_handler = handler

    def freeze(self) -> None:
        """Mark configuration complete. Further registration raises."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # =========================================================================
    # DECORATORS
    # =========================================================================
    #
    #     @router.get("/goodbye")
    #     def goodbye(request):
    #         ...
    #
    # is the same as router.register("GET", "/goodbye", goodbye). The
    # handler is returned unchanged, so decorators can be stacked to serve
    # one function on several routes.
    #
    # =========================================================================

    def route(self, path: str, method: str = "GET") -> Callable[[Handler], Handler]:
        """Decorator registering the function for ``method`` on ``path``."""
        def decorator(handler: Handler) -> Handler:
            self.register(method, path, handler)
            return handler
        return decorator

    def get(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, "GET")

    def post(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, "POST")

    def put(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, "PUT")

    def delete(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, "DELETE")

    def patch(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, "PATCH")

    def head(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, "HEAD")

    def options(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, "OPTIONS")

    # =========================================================================
    # MATCHING AND DISPATCH
    # =========================================================================

    def match(self, method: str, path: str) -> Optional[Route]:
        """
        Find the route for an exact (method, path) pair.

        The query string and fragment are stripped from ``path`` first;
        nothing else is normalized.

        Returns:
            The Route, or None if nothing is registered for the pair
        """
        path, _ = split_target(path)
        return self._routes.get((method.upper(), path))

    def dispatch(self, request: HTTPRequest) -> HTTPResponse:
        """
        Resolve a request to exactly one response. Never raises.

        1. Look up (request.method, request.path) exactly
        2. Found → return the handler's response unchanged
        3. Not found → default handler if set, else 404 Not found
        4. Handler raised, or returned something that is not an
           HTTPResponse → log it, return 500

        Args:
            request: The incoming request

        Returns:
            The response to send
        """
        route = self.match(request.method, request.path)
        if route is not None:
            return self._invoke(route.handler, request, f"{route.method} {route.path}")

        if self._default_handler is not None:
            return self._invoke(self._default_handler, request, "default handler")

        return not_found()

    def _invoke(self, handler: Handler, request: HTTPRequest, label: str) -> HTTPResponse:
        try:
            response = handler(request)
        except Exception:
            logger.exception("Handler for %s raised while serving %s %s",
                             label, request.method, request.path)
            return internal_error()

        if not isinstance(response, HTTPResponse):
            logger.error("Handler for %s returned %s, not an HTTPResponse",
                         label, type(response).__name__)
            return internal_error()
        return response

    # =========================================================================
    # INTROSPECTION
    # =========================================================================

    def routes(self) -> List[Route]:
        """All routes, in registration order."""
        return list(self._routes.values())

    def describe(self) -> str:
        """
        Route table as text, for startup logs:

              GET      /
              GET      /goodbye
              POST     /guestbook
        """
        if not self._routes:
            return "  (no routes registered)"
        return "\n".join(f"  {route.method:8} {route.path}" for route in self.routes())

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        method, path = key
        return (str(method).upper(), path) in self._routes
