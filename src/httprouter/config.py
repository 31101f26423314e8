"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

All settings in one typed dataclass, filled from code, environment
variables or the CLI:

    ┌─────────────────────────────────────────────────────────────────────┐
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments   python -m httprouter --port 8000      │
    │   2. Environment variables    HTTP_PORT=8000 python -m httprouter   │
    │   3. Dataclass defaults       port=3000                             │
    └─────────────────────────────────────────────────────────────────────┘

validate() runs when the server is constructed, so a bad port or log level
stops the process before it binds a socket, not hours later.
=============================================================================
"""

import logging
import os
from dataclasses import dataclass

from .errors import ConfigurationError


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")


@dataclass
class ServerConfig:
    """
    Configuration for the HTTP server.

    Development:
        ServerConfig()                          # 127.0.0.1:3000, INFO

    Container:
        ServerConfig(host="0.0.0.0", log_format="json")

    Tests:
        ServerConfig(port=0)                    # OS picks a free port
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """Address to bind. "0.0.0.0" listens on every interface."""

    port: int = 3000
    """Port to listen on. 0 asks the OS for any free port."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """DEBUG, INFO, WARNING, ERROR or CRITICAL."""

    log_format: str = "text"
    """Access log format: "text" (Apache-style) or "json" (one object per line)."""

    access_log: bool = True
    """Emit one access log line per request on the "httprouter.access" logger."""

    # ─────────────────────────────────────────────────────────────────────
    # IDENTITY
    # ─────────────────────────────────────────────────────────────────────

    server_name: str = "httprouter/1.0"
    """Value of the Server header, unless a handler sets its own."""

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Build a config from environment variables.

            HTTP_HOST        bind address         (default 127.0.0.1)
            HTTP_PORT        port                 (default 3000)
            HTTP_LOG_LEVEL   logging level        (default INFO)
            HTTP_LOG_FORMAT  text | json          (default text)

        Raises:
            ConfigurationError: If HTTP_PORT is not an integer.
        """
        raw_port = os.getenv("HTTP_PORT", "3000")
        try:
            port = int(raw_port)
        except ValueError:
            raise ConfigurationError(f"HTTP_PORT must be an integer, got {raw_port!r}") from None

        return cls(
            host=os.getenv("HTTP_HOST", "127.0.0.1"),
            port=port,
            log_level=os.getenv("HTTP_LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("HTTP_LOG_FORMAT", "text").lower(),
        )

    @property
    def log_level_number(self) -> int:
        """log_level as a logging module constant (logging.INFO, ...)."""
        return getattr(logging, self.log_level.upper(), logging.INFO)

    def validate(self) -> None:
        """
        Fail fast on invalid settings.

        Raises:
            ConfigurationError: On the first invalid value.
        """
        if not isinstance(self.port, int) or not 0 <= self.port <= 65535:
            raise ConfigurationError(f"Invalid port: {self.port!r}. Must be 0-65535.")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log_level: {self.log_level!r}. Must be one of {', '.join(LOG_LEVELS)}."
            )

        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"Invalid log_format: {self.log_format!r}. Must be 'text' or 'json'."
            )

        if not self.server_name:
            raise ConfigurationError("server_name must not be empty")
