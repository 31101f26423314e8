"""
Unit tests for HTTP response building.
"""

import json
from datetime import datetime, timezone

import pytest

from httprouter.http.response import (
    HTTPResponse,
    ResponseBuilder,
    HTTPStatus,
    ok,
    html_response,
    not_found,
    internal_error,
    format_http_date,
)
from httprouter.http.status_codes import is_valid_status, reason_phrase


FIXED_NOW = datetime(2026, 10, 19, 9, 30, 5, tzinfo=timezone.utc)


class TestHTTPResponse:
    """Tests for HTTPResponse class."""

    def test_status_line(self):
        assert HTTPResponse(status=HTTPStatus.OK).status_line == "HTTP/1.1 200 OK"
        assert HTTPResponse(status=404).status_line == "HTTP/1.1 404 Not Found"

    def test_unknown_status_gets_class_phrase(self):
        assert HTTPResponse(status=299).reason == "Success"
        assert HTTPResponse(status=599).reason == "Server Error"

    @pytest.mark.parametrize("status", [0, 99, 600, 1000, -200])
    def test_out_of_range_status_rejected(self, status):
        with pytest.raises(ValueError):
            HTTPResponse(status=status)

    def test_non_integer_status_rejected(self):
        with pytest.raises(ValueError):
            HTTPResponse(status="200")
        with pytest.raises(ValueError):
            HTTPResponse(status=True)

    @pytest.mark.parametrize("body", [None, 5, ["a"], {"a": 1}])
    def test_non_str_or_bytes_body_rejected(self, body):
        with pytest.raises(ValueError, match="body"):
            HTTPResponse(body=body)

    def test_bytearray_body_allowed(self):
        assert HTTPResponse(body=bytearray(b"abc")).body_bytes == b"abc"

    def test_body_bytes(self):
        assert HTTPResponse(body="héllo").body_bytes == "héllo".encode("utf-8")
        assert HTTPResponse(body=b"\x00\x01").body_bytes == b"\x00\x01"

    def test_get_header_case_insensitive(self):
        response = HTTPResponse(headers={"Content-Type": "text/html"})

        assert response.get_header("content-type") == "text/html"
        assert response.get_header("CONTENT-TYPE") == "text/html"
        assert response.get_header("x-missing") is None
        assert response.get_header("x-missing", "dflt") == "dflt"

    def test_set_header_chaining(self):
        response = (HTTPResponse()
            .set_header("X-One", "1")
            .set_header("X-Two", "2"))

        assert response.headers == {"X-One": "1", "X-Two": "2"}

    def test_wire_headers_keep_insertion_order(self):
        response = HTTPResponse(
            headers={"X-Zulu": "z", "Content-Type": "text/html", "X-Alpha": "a"},
            body="<h1>Hi</h1>",
        )

        names = [name for name, _ in response.wire_headers(now=FIXED_NOW)]

        assert names == ["X-Zulu", "Content-Type", "X-Alpha", "Content-Length", "Date", "Server"]

    def test_wire_headers_auto_values(self):
        response = HTTPResponse(body="héllo")

        headers = dict(response.wire_headers(server_name="test/0.1", now=FIXED_NOW))

        assert headers["Content-Length"] == str(len("héllo".encode("utf-8")))
        assert headers["Date"] == "Mon, 19 Oct 2026 09:30:05 GMT"
        assert headers["Server"] == "test/0.1"

    def test_wire_headers_respect_handler_values(self):
        response = HTTPResponse(headers={"server": "custom", "content-length": "0"}, body=b"")

        names = [name.lower() for name, _ in response.wire_headers(now=FIXED_NOW)]

        assert names.count("server") == 1
        assert names.count("content-length") == 1

    def test_wire_headers_do_not_mutate(self):
        response = HTTPResponse(headers={"X-One": "1"})
        response.wire_headers()

        assert response.headers == {"X-One": "1"}


class TestResponseBuilder:
    """Tests for ResponseBuilder class."""

    def test_defaults(self):
        response = ResponseBuilder().build()

        assert response.status == 200
        assert response.headers == {}
        assert response.body == b""

    def test_status(self):
        response = ResponseBuilder().status(HTTPStatus.CREATED).build()
        assert response.status == HTTPStatus.CREATED

    def test_invalid_status_fails_on_build(self):
        with pytest.raises(ValueError):
            ResponseBuilder().status(700).build()

    def test_text_body(self):
        response = ResponseBuilder().text("Hello, world").build()

        assert response.headers["Content-Type"] == "text/plain; charset=utf-8"
        assert response.body == "Hello, world"

    def test_html_body(self):
        response = ResponseBuilder().html("<h1>Hello</h1>").build()

        assert response.headers["Content-Type"] == "text/html; charset=utf-8"
        assert response.body == "<h1>Hello</h1>"

    def test_json_body(self):
        data = {"name": "Ada", "langs": ["en", "fr"]}
        response = ResponseBuilder().json(data).build()

        assert response.headers["Content-Type"] == "application/json; charset=utf-8"
        assert json.loads(response.body_bytes) == data

    def test_json_keeps_unicode(self):
        response = ResponseBuilder().json({"greeting": "héllo"}).build()
        assert "héllo" in response.body

    def test_pretty_json(self):
        response = ResponseBuilder().json({"a": 1}, pretty=True).build()
        assert "\n" in response.body

    def test_headers_in_order(self):
        response = (ResponseBuilder()
            .header("X-First", "1")
            .headers({"X-Second": "2", "X-Third": "3"})
            .html("<p>x</p>")
            .build())

        assert list(response.headers) == ["X-First", "X-Second", "X-Third", "Content-Type"]

    def test_build_copies_headers(self):
        builder = ResponseBuilder().header("X-One", "1")
        first = builder.build()
        builder.header("X-Two", "2")

        assert "X-Two" not in first.headers


class TestConvenienceFunctions:

    def test_ok_with_dict_is_json(self):
        response = ok({"message": "hi"})

        assert response.status == 200
        assert response.headers["Content-Type"].startswith("application/json")

    def test_ok_with_str_is_text(self):
        response = ok("hi")
        assert response.headers["Content-Type"].startswith("text/plain")

    def test_ok_with_bytes(self):
        response = ok(b"\x89PNG", content_type="image/png")

        assert response.body == b"\x89PNG"
        assert response.headers["Content-Type"] == "image/png"

    def test_html_response(self):
        response = html_response("<h1>Gone</h1>", status=410)

        assert response.status == 410
        assert response.body == "<h1>Gone</h1>"

    def test_not_found(self):
        response = not_found()

        assert response.status == 404
        assert response.headers == {"Content-Type": "text/html"}
        assert response.body == "<h1>Not found</h1>"

    def test_internal_error(self):
        response = internal_error()

        assert response.status == 500
        assert response.headers == {"Content-Type": "text/html"}


class TestStatusCodes:

    def test_is_valid_status(self):
        assert is_valid_status(100)
        assert is_valid_status(599)
        assert is_valid_status(HTTPStatus.NOT_FOUND)
        assert not is_valid_status(99)
        assert not is_valid_status(600)
        assert not is_valid_status(200.0)

    def test_reason_phrase(self):
        assert reason_phrase(200) == "OK"
        assert reason_phrase(404) == "Not Found"
        assert reason_phrase(450) == "Client Error"


def test_format_http_date():
    assert format_http_date(FIXED_NOW) == "Mon, 19 Oct 2026 09:30:05 GMT"
