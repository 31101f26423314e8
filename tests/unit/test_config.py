"""
Unit tests for server configuration.
"""

import logging

import pytest

from httprouter import HTTPServer, ServerConfig
from httprouter.errors import ConfigurationError


class TestServerConfig:

    def test_defaults(self):
        config = ServerConfig()

        assert config.host == "127.0.0.1"
        assert config.port == 3000
        assert config.log_level == "INFO"
        assert config.log_format == "text"
        config.validate()

    def test_port_zero_allowed(self, config: ServerConfig):
        assert config.port == 0
        config.validate()

    @pytest.mark.parametrize("port", [-1, 65536, 100000])
    def test_invalid_port(self, port):
        with pytest.raises(ConfigurationError, match="Invalid port"):
            ServerConfig(port=port).validate()

    def test_invalid_log_level(self):
        with pytest.raises(ConfigurationError, match="log_level"):
            ServerConfig(log_level="LOUD").validate()

    def test_log_level_case_insensitive(self):
        config = ServerConfig(log_level="debug")
        config.validate()
        assert config.log_level_number == logging.DEBUG

    def test_invalid_log_format(self):
        with pytest.raises(ConfigurationError, match="log_format"):
            ServerConfig(log_format="xml").validate()

    def test_empty_server_name(self):
        with pytest.raises(ConfigurationError):
            ServerConfig(server_name="").validate()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HTTP_HOST", "0.0.0.0")
        monkeypatch.setenv("HTTP_PORT", "8000")
        monkeypatch.setenv("HTTP_LOG_LEVEL", "debug")
        monkeypatch.setenv("HTTP_LOG_FORMAT", "JSON")

        config = ServerConfig.from_env()

        assert config.host == "0.0.0.0"
        assert config.port == 8000
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_from_env_defaults(self, monkeypatch):
        for name in ("HTTP_HOST", "HTTP_PORT", "HTTP_LOG_LEVEL", "HTTP_LOG_FORMAT"):
            monkeypatch.delenv(name, raising=False)

        assert ServerConfig.from_env() == ServerConfig()

    def test_from_env_bad_port(self, monkeypatch):
        monkeypatch.setenv("HTTP_PORT", "three thousand")

        with pytest.raises(ConfigurationError, match="HTTP_PORT"):
            ServerConfig.from_env()


class TestServerConstruction:

    def test_invalid_config_refuses_to_start(self):
        with pytest.raises(ConfigurationError):
            HTTPServer(ServerConfig(port=-5))

    def test_run_rejects_invalid_override(self, config: ServerConfig):
        server = HTTPServer(config)

        with pytest.raises(ConfigurationError):
            server.run(port=70000)
        assert not server.running

    def test_decorators_delegate_to_router(self, config: ServerConfig):
        server = HTTPServer(config)

        @server.get("/")
        def index(request):
            raise AssertionError("not called")

        server.post("/items")(index)
        server.put("/items")(index)
        server.delete("/items")(index)
        server.patch("/items")(index)
        server.route("/items", method="OPTIONS")(index)

        assert [(r.method, r.path) for r in server.router.routes()] == [
            ("GET", "/"),
            ("POST", "/items"),
            ("PUT", "/items"),
            ("DELETE", "/items"),
            ("PATCH", "/items"),
            ("OPTIONS", "/items"),
        ]

    def test_duplicate_route_fails_at_setup(self, config: ServerConfig):
        server = HTTPServer(config)
        server.get("/")(lambda request: None)

        with pytest.raises(ConfigurationError):
            server.get("/")(lambda request: None)

    def test_shutdown_before_run_does_not_block(self, config: ServerConfig):
        HTTPServer(config).shutdown()
