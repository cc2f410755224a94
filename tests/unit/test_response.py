"""
Unit tests for HTTP response writing.
"""

import io
from datetime import datetime, timezone, timedelta

from webserver.http.status_codes import HTTPStatus
from webserver.http.response import (
    DEFAULT_BODY,
    NOT_FOUND_BODY,
    build_header,
    format_http_date,
    format_page_date,
    write_http_header,
    write_not_found,
    write_default_page,
)


WHEN = datetime(2026, 1, 15, 12, 30, 45, tzinfo=timezone.utc)


class TestHTTPStatus:
    """Tests for HTTPStatus enum."""

    def test_status_phrases(self):
        assert HTTPStatus.OK.phrase == "OK"
        assert HTTPStatus.NOT_FOUND.phrase == "Not Found"

    def test_int_compatible(self):
        assert HTTPStatus.OK == 200
        assert HTTPStatus.NOT_FOUND == 404


class TestBuildHeader:
    """Tests for the header block."""

    def test_ok_header_exact(self):
        """Full header block, LF framed, in fixed order."""
        header = build_header(HTTPStatus.OK, WHEN, "TestServer/1.0")
        assert header == (
            b"HTTP/1.1 200 OK\n"
            b"Date: Thu, 15 Jan 2026 12:30:45 GMT\n"
            b"Server: TestServer/1.0\n"
            b"Connection: close\n"
            b"Content-Type: text/html\n"
            b"\n"
        )

    def test_not_found_status_line(self):
        header = build_header(HTTPStatus.NOT_FOUND, WHEN, "x")
        assert header.startswith(b"HTTP/1.1 404 Not Found\n")

    def test_ends_with_two_newlines(self):
        assert build_header(HTTPStatus.OK, WHEN, "x").endswith(b"\n\n")

    def test_no_carriage_returns_by_default(self):
        assert b"\r" not in build_header(HTTPStatus.OK, WHEN, "x")

    def test_crlf_option(self):
        """CRLF framing when requested."""
        header = build_header(HTTPStatus.OK, WHEN, "x", crlf=True)
        assert header.startswith(b"HTTP/1.1 200 OK\r\n")
        assert header.endswith(b"Content-Type: text/html\r\n\r\n")
        assert header.count(b"\r\n") == 6


class TestWriters:
    """Tests for the stream-writing helpers."""

    def test_write_http_header_returns_flag(self):
        out = io.BytesIO()
        assert write_http_header(out, True, WHEN, "x") is True
        assert out.getvalue().startswith(b"HTTP/1.1 200 OK\n")

        out = io.BytesIO()
        assert write_http_header(out, False, WHEN, "x") is False
        assert out.getvalue().startswith(b"HTTP/1.1 404 Not Found\n")

    def test_write_not_found(self):
        out = io.BytesIO()
        write_not_found(out)
        assert out.getvalue() == (
            b"<html><head></head><body>\n"
            b"<h3>ERROR! CODE: 404 NOT FOUND</h3>\n"
            b"</body></html>\n"
        )
        assert out.getvalue() == NOT_FOUND_BODY

    def test_write_default_page(self):
        out = io.BytesIO()
        write_default_page(out)
        assert out.getvalue() == (
            b"<html><head></head><body>\n"
            b"<h3>My web server works!</h3>\n"
            b"</body></html>\n"
        )
        assert out.getvalue() == DEFAULT_BODY


class TestDateFormats:
    """Tests for header and page date formatting."""

    def test_http_date(self):
        assert format_http_date(WHEN) == "Thu, 15 Jan 2026 12:30:45 GMT"

    def test_http_date_converts_to_gmt(self):
        """Aware datetimes in other zones are shifted to GMT."""
        plus_two = WHEN.astimezone(timezone(timedelta(hours=2)))
        assert format_http_date(plus_two) == "Thu, 15 Jan 2026 12:30:45 GMT"

    def test_page_date(self):
        assert format_page_date(WHEN) == "Thu Jan 15 12:30:45 UTC 2026"

    def test_page_date_naive_is_utc(self):
        assert format_page_date(WHEN.replace(tzinfo=None)) == "Thu Jan 15 12:30:45 UTC 2026"
