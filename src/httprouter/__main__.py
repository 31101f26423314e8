"""
=============================================================================
CLI ENTRY POINT
=============================================================================

    # Run the demo site on http://127.0.0.1:3000/
    python -m httprouter

    # Another port, every interface
    python -m httprouter --host 0.0.0.0 --port 8000

    # JSON access logs for a log collector
    python -m httprouter --log-format json

Settings come from the environment first (HTTP_HOST, HTTP_PORT,
HTTP_LOG_LEVEL, HTTP_LOG_FORMAT); command-line flags override them.
=============================================================================
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import LOG_FORMATS, LOG_LEVELS, ServerConfig
from .errors import ConfigurationError
from .handlers import register_pages
from .server import HTTPServer


def build_parser(defaults: ServerConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httprouter",
        description="Serve the httprouter demo site on the standard-library HTTP server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m httprouter                      # http://127.0.0.1:3000/
  python -m httprouter --port 8000          # Custom port
  python -m httprouter --host 0.0.0.0       # Listen on all interfaces
  python -m httprouter --log-format json    # Structured access logs
        """,
    )

    parser.add_argument(
        "--host", "-H",
        default=defaults.host,
        help=f"Host to bind to (default: {defaults.host})",
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=defaults.port,
        help=f"Port to listen on (default: {defaults.port})",
    )
    parser.add_argument(
        "--log-level", "-l",
        type=str.upper,
        choices=LOG_LEVELS,
        default=defaults.log_level,
        help=f"Logging level (default: {defaults.log_level})",
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=defaults.log_format,
        help=f"Access log format (default: {defaults.log_format})",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httprouter {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, build the server, register the demo pages and run.

    Returns:
        Process exit code (0 on clean shutdown, 1 on a startup error)
    """
    try:
        defaults = ServerConfig.from_env()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    args = build_parser(defaults).parse_args(argv)

    config = ServerConfig(
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        log_format=args.log_format,
    )

    try:
        server = HTTPServer(config)
        register_pages(server.router)
        server.run()
    except (ConfigurationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
