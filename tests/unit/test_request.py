"""
Unit tests for HTTP request reading.
"""

import io
import socket

import pytest

from webserver.http.request import parse_request_line, read_http_request


class TestParseRequestLine:
    """Tests for extracting the path from one line."""

    @pytest.mark.parametrize("line, expected", [
        ("GET /foo.html HTTP/1.1", "/foo.html"),
        ("GET /foo.html HTTP/1.0", "/foo.html"),
        ("GET /dir/page.html HTTP/1.1\r\n", "/dir/page.html"),
        ("GET /foo.html:8080 HTTP/1.1", "/foo.html"),
        ("GET    /spaced.html   HTTP/1.1", "/spaced.html"),
    ])
    def test_get_lines(self, line, expected):
        """Well-formed GET lines yield the request target."""
        assert parse_request_line(line) == expected

    def test_root_is_default_path(self):
        """The site root maps to the empty (default) path."""
        assert parse_request_line("GET / HTTP/1.1") == ""
        assert parse_request_line("GET /:8080 HTTP/1.1") == ""

    def test_port_suffix_never_in_path(self):
        """A trailing :port is stripped, other colons are kept."""
        assert parse_request_line("GET /a:b.html:80 HTTP/1.1") == "/a:b.html"

    @pytest.mark.parametrize("line", [
        "",
        "GET",
        "POST /foo.html HTTP/1.1",
        "HEAD /foo.html HTTP/1.1",
        "get /foo.html HTTP/1.1",
        "GETTY /foo.html HTTP/1.1",
        "Host: localhost:8080",
        "GET /foo.html",
        "GET /foo.html 1.1",
        "GET /a b.html HTTP/1.1",
    ])
    def test_non_get_lines(self, line):
        """Anything that is not a GET request line yields None."""
        assert parse_request_line(line) is None


class TestReadHTTPRequest:
    """Tests for reading a full header block."""

    def test_simple_get(self, sample_get_request: bytes):
        """Path comes from the request line, headers are ignored."""
        assert read_http_request(io.BytesIO(sample_get_request)) == "/index.html"

    def test_drains_header_block(self, sample_get_request: bytes):
        """Reading stops right after the blank line, not before."""
        reader = io.BytesIO(sample_get_request + b"LEFTOVER")
        read_http_request(reader)
        assert reader.read() == b"LEFTOVER"

    def test_root_request(self):
        """GET / gives the default path."""
        assert read_http_request(io.BytesIO(b"GET / HTTP/1.1\r\n\r\n")) == ""

    def test_empty_request(self):
        """No bytes at all gives the default path."""
        assert read_http_request(io.BytesIO(b"")) == ""

    def test_empty_first_line(self):
        """A blank first line ends the request immediately."""
        reader = io.BytesIO(b"\r\nGET /late.html HTTP/1.1\r\n\r\n")
        assert read_http_request(reader) == ""

    def test_non_get_request(self):
        """Other methods give the default path."""
        raw = b"POST /form.html HTTP/1.1\r\nHost: x\r\n\r\n"
        assert read_http_request(io.BytesIO(raw)) == ""

    def test_get_without_version(self):
        """A GET line missing its HTTP version gives the default path."""
        raw = b"GET /foo.html\r\n\r\n"
        assert read_http_request(io.BytesIO(raw)) == ""

    def test_lf_only_line_endings(self):
        """Bare LF framing works the same as CRLF."""
        raw = b"GET /lf.html HTTP/1.1\nHost: x\n\n"
        assert read_http_request(io.BytesIO(raw)) == "/lf.html"

    def test_stream_ends_without_blank_line(self):
        """End of stream also ends the header block."""
        raw = b"GET /eof.html HTTP/1.1\r\nHost: x\r\n"
        assert read_http_request(io.BytesIO(raw)) == "/eof.html"

    def test_first_get_wins(self):
        """Once a path is captured later GET-looking lines are ignored."""
        raw = b"GET /first.html HTTP/1.1\r\nGET /second.html HTTP/1.1\r\n\r\n"
        assert read_http_request(io.BytesIO(raw)) == "/first.html"

    def test_get_after_junk_line(self):
        """Lines before the GET line are skipped."""
        raw = b"garbage\r\nGET /after.html HTTP/1.1\r\n\r\n"
        assert read_http_request(io.BytesIO(raw)) == "/after.html"

    def test_invalid_utf8_does_not_raise(self):
        """Undecodable bytes are replaced, not fatal."""
        raw = b"GET /caf\xe9.html HTTP/1.1\r\n\r\n"
        assert read_http_request(io.BytesIO(raw)).startswith("/caf")

    def test_read_error_keeps_captured_path(self):
        """A failing stream stops parsing but keeps what was read."""

        class FailingReader:
            def __init__(self):
                self.lines = [b"GET /partial.html HTTP/1.1\r\n"]

            def readline(self):
                if self.lines:
                    return self.lines.pop(0)
                raise socket.timeout("timed out")

        assert read_http_request(FailingReader()) == "/partial.html"

    def test_read_error_before_anything(self):
        """A stream that fails immediately gives the default path."""

        class BrokenReader:
            def readline(self):
                raise ConnectionResetError("reset by peer")

        assert read_http_request(BrokenReader()) == ""
