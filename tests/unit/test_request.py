"""
Unit tests for the HTTP request view.
"""

import dataclasses

import pytest

from httprouter.http.request import HTTPRequest, split_target


class TestSplitTarget:
    """Tests for request-target splitting."""

    @pytest.mark.parametrize("target,expected", [
        ("/goodbye", ("/goodbye", "")),
        ("/goodbye?lang=en", ("/goodbye", "lang=en")),
        ("/goodbye#top", ("/goodbye", "")),
        ("/goodbye?lang=en#top", ("/goodbye", "lang=en")),
        ("/goodbye/", ("/goodbye/", "")),
        ("/a?b?c", ("/a", "b?c")),
        ("", ("/", "")),
        ("?x=1", ("/", "x=1")),
    ])
    def test_split(self, target, expected):
        assert split_target(target) == expected

    def test_path_is_not_decoded_or_folded(self):
        assert split_target("/Good%20Bye/")[0] == "/Good%20Bye/"


class TestHTTPRequest:
    """Tests for HTTPRequest."""

    def test_from_target(self):
        request = HTTPRequest.from_target(
            "get",
            "/search?q=hello%20world&tag=a&tag=b&empty=",
            headers={"Host": "localhost:3000", "Content-Type": "text/plain; charset=utf-8"},
            body=b"payload",
            client_address=("127.0.0.1", 54321),
        )

        assert request.method == "GET"
        assert request.path == "/search"
        assert request.get_query("q") == "hello world"
        assert request.get_query_list("tag") == ["a", "b"]
        assert request.get_query("empty") == ""
        assert request.get_query("missing") is None
        assert request.get_query("missing", "default") == "default"
        assert request.get_query_list("missing") == []
        assert request.body == b"payload"
        assert request.client_address == ("127.0.0.1", 54321)

    def test_headers_case_insensitive(self):
        request = HTTPRequest(method="GET", path="/", headers={"User-Agent": "pytest", "X-Mixed-Case": "v"})

        assert request.headers == {"user-agent": "pytest", "x-mixed-case": "v"}
        assert request.get_header("USER-AGENT") == "pytest"
        assert request.get_header("x-mixed-case") == "v"
        assert request.get_header("missing") == ""
        assert request.get_header("missing", "default") == "default"

    def test_content_properties(self):
        request = HTTPRequest(
            method="POST",
            path="/",
            headers={"Content-Type": "Application/JSON; charset=utf-8", "Content-Length": "12", "Host": "h"},
        )

        assert request.content_type == "application/json"
        assert request.content_length == 12
        assert request.host == "h"

    def test_missing_or_bad_content_length(self):
        assert HTTPRequest(method="GET", path="/").content_length == 0
        assert HTTPRequest(method="GET", path="/", headers={"content-length": "abc"}).content_length == 0
        assert HTTPRequest(method="GET", path="/").content_type is None

    def test_defaults(self):
        request = HTTPRequest(method="GET", path="/")

        assert request.version == "HTTP/1.1"
        assert request.body == b""
        assert request.query_params == {}

    def test_read_only(self):
        request = HTTPRequest(method="GET", path="/")

        with pytest.raises(dataclasses.FrozenInstanceError):
            request.path = "/other"

    def test_query_list_is_a_copy(self):
        request = HTTPRequest.from_target("GET", "/?a=1")
        request.get_query_list("a").append("2")

        assert request.get_query_list("a") == ["1"]
