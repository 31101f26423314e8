"""
=============================================================================
HTTP SERVER
=============================================================================

HTTPServer ties one Router to one Listener. There is no module-level
server object: whoever builds the HTTPServer owns it and passes it around.

=============================================================================
LIFECYCLE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   1. CONFIGURE  server = HTTPServer(ServerConfig(port=3000))        │
    │                 config.validate() - bad settings fail here           │
    │                                                                      │
    │   2. ROUTES     @server.get("/") ...                                 │
    │                 duplicate / malformed routes fail here               │
    │                                                                      │
    │   3. RUN        server.run()                                         │
    │                   • logging configured                               │
    │                   • router frozen (no more registration)             │
    │                   • socket bound, startup line logged                │
    │                   • accept loop until Ctrl+C or shutdown()           │
    │                                                                      │
    │   4. STOP       socket closed, "Server stopped" logged               │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Everything that can be wrong with the route table is caught in step 2,
before a single request is served.
=============================================================================
"""

from typing import Callable, Optional
import logging

from .config import ServerConfig
from .core import Listener
from .http import Handler, Router


logger = logging.getLogger(__name__)


class HTTPServer:
    """
    A Router served by the standard library's HTTP server.

        server = HTTPServer()

        @server.get("/")
        def hello(request):
            return ResponseBuilder().html("<h1>Hello</h1>").build()

        @server.get("/goodbye")
        def goodbye(request):
            return ResponseBuilder().html("<h1>Goodbye</h1>").build()

        server.run()   # http://127.0.0.1:3000/

    Pass an existing Router to serve routes assembled elsewhere.
    """

    def __init__(self, config: Optional[ServerConfig] = None, router: Optional[Router] = None):
        """
        Args:
            config: Server configuration; defaults to ServerConfig().
            router: Router to serve; a fresh one if not given.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        self.config = config if config is not None else ServerConfig()
        self.config.validate()

        self._router = router if router is not None else Router()
        self._listener = Listener(self._router, self.config)
        self._running = False

    @property
    def router(self) -> Router:
        return self._router

    @property
    def running(self) -> bool:
        return self._running

    @property
    def address(self):
        """Bound (host, port) once running, configured address before."""
        return self._listener.server_address

    # =========================================================================
    # ROUTE REGISTRATION (delegates to the router)
    # =========================================================================

    def route(self, path: str, method: str = "GET") -> Callable[[Handler], Handler]:
        return self._router.route(path, method)

    def get(self, path: str) -> Callable[[Handler], Handler]:
        return self._router.get(path)

    def post(self, path: str) -> Callable[[Handler], Handler]:
        return self._router.post(path)

    def put(self, path: str) -> Callable[[Handler], Handler]:
        return self._router.put(path)

    def delete(self, path: str) -> Callable[[Handler], Handler]:
        return self._router.delete(path)

    def patch(self, path: str) -> Callable[[Handler], Handler]:
        return self._router.patch(path)

    def set_default_handler(self, handler: Optional[Handler]) -> None:
        """Replace the 404 fallback (see Router.set_default_handler)."""
        self._router.set_default_handler(handler)

    # =========================================================================
    # RUNNING
    # =========================================================================

    def run(self, host: Optional[str] = None, port: Optional[int] = None) -> None:
        """
        Start serving (blocking).

        Args:
            host: Override config host.
            port: Override config port.

        Raises:
            ConfigurationError: If the overrides make the config invalid.
            OSError: If the address cannot be bound.
        """
        if host is not None:
            self.config.host = host
        if port is not None:
            self.config.port = port
        self.config.validate()

        self._setup_logging()

        # Single writer is done; from here on the router is read-only
        self._router.freeze()

        bound_host, bound_port = self._listener.bind()
        logger.info("Server running at http://%s:%s/", bound_host, bound_port)
        logger.info("Registered routes:\n%s", self._router.describe())

        self._running = True
        try:
            self._listener.serve_forever()
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._running = False
            self._listener.server_close()
            logger.info("Server stopped")

    def shutdown(self) -> None:
        """Stop a running server from another thread."""
        logger.info("Shutting down server...")
        self._listener.shutdown()

    def _setup_logging(self) -> None:
        """Configure logging based on config."""
        level = self.config.log_level_number
        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.getLogger("httprouter").setLevel(level)
