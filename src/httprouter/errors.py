"""
Exceptions raised while a server is being configured.

Request-time problems never surface as exceptions: the router turns them
into responses. Setup-time problems are different. A route table with a
duplicate entry or a malformed path is a programming error, and the process
should refuse to start rather than serve from an inconsistent table.
"""


class ConfigurationError(ValueError):
    """
    Raised synchronously when routes or server settings are invalid.

    Subclasses ValueError so callers that already validate configuration
    with ``except ValueError`` keep working.

    Examples:
        router.get("/users")(list_users)
        router.get("/users")(other)     # ConfigurationError: duplicate
        router.get("users")(other)      # ConfigurationError: not absolute
        ServerConfig(port=70000).validate()  # ConfigurationError
    """
