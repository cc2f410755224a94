"""
=============================================================================
HTTP RESPONSE WRITING
=============================================================================

Everything that goes back over the wire: the header block, the two canned
bodies, and the date formats used in headers and pages.

=============================================================================
RESPONSE FORMAT
=============================================================================

    HTTP/1.1 200 OK\\n                          ◄── status line
    Date: Fri, 16 Oct 2026 15:04:05 GMT\\n      ◄── headers
    Server: Zack's server\\n
    Connection: close\\n
    Content-Type: text/html\\n
    \\n                                         ◄── end of headers
    <html>...                                  ◄── body (no Content-Length,
                                                   the close marks the end)

NOTE ON LINE ENDINGS:
─────────────────────

HTTP/1.1 says header lines end with CRLF ("\\r\\n"). This server has always
sent a bare LF and clients have always tolerated it, so LF stays the
default. Pass crlf=True (ServerConfig.crlf_headers) to send CRLF instead.

=============================================================================
"""

from datetime import datetime, timezone
from typing import BinaryIO

from .status_codes import HTTPStatus


CONTENT_TYPE = "text/html"

DEFAULT_BODY = (
    "<html><head></head><body>\n"
    "<h3>My web server works!</h3>\n"
    "</body></html>\n"
).encode()

NOT_FOUND_BODY = (
    "<html><head></head><body>\n"
    "<h3>ERROR! CODE: 404 NOT FOUND</h3>\n"
    "</body></html>\n"
).encode()


# =============================================================================
# DATE FORMATTING
# =============================================================================

def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an HTTP-date (RFC 7231).

    Format: Day, DD Mon YYYY HH:MM:SS GMT
    Example: Wed, 01 Jan 2026 12:00:00 GMT

    Naive datetimes are taken to be UTC already; aware ones are converted.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)

    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )


def format_page_date(dt: datetime) -> str:
    """
    Format a datetime the way it appears inside served pages.

    Example: Fri Oct 16 15:04:05 UTC 2026
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.strftime("%a %b %d %H:%M:%S %Z %Y")


# =============================================================================
# HEADER BLOCK
# =============================================================================

def build_header(
    status: HTTPStatus,
    date: datetime,
    server_name: str,
    crlf: bool = False,
) -> bytes:
    """
    Build the complete header block, including the terminating blank line.

    Args:
        status: OK or NOT_FOUND.
        date: Time for the Date header.
        server_name: Value of the Server header.
        crlf: Use "\\r\\n" instead of "\\n" as the line terminator.
    """
    eol = "\r\n" if crlf else "\n"
    lines = [
        f"HTTP/1.1 {status.value} {status.phrase}",
        f"Date: {format_http_date(date)}",
        f"Server: {server_name}",
        "Connection: close",
        f"Content-Type: {CONTENT_TYPE}",
    ]
    return (eol.join(lines) + eol + eol).encode()


def write_http_header(
    writer: BinaryIO,
    found: bool,
    date: datetime,
    server_name: str,
    crlf: bool = False,
) -> bool:
    """
    Write the header block for a found / not-found outcome.

    Write errors are not caught here; they belong to the caller.

    Returns:
        The found flag, so callers can branch on it directly.
    """
    status = HTTPStatus.OK if found else HTTPStatus.NOT_FOUND
    writer.write(build_header(status, date, server_name, crlf))
    return found


def write_not_found(writer: BinaryIO) -> None:
    """Write the fixed 404 page."""
    writer.write(NOT_FOUND_BODY)


def write_default_page(writer: BinaryIO) -> None:
    """Write the fixed greeting page served for an empty path."""
    writer.write(DEFAULT_BODY)
