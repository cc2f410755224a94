"""
=============================================================================
HTTP PROTOCOL MODULE
=============================================================================

The wire-level pieces of the server:

    request.py       Read the header block, extract the requested path
    response.py      Write the header block and the canned bodies
    status_codes.py  200 / 404

No sockets here: every function takes a file-like object, so the same code
runs against a real connection or an io.BytesIO in tests.
=============================================================================
"""

from .status_codes import HTTPStatus
from .request import parse_request_line, read_http_request
from .response import (
    CONTENT_TYPE,
    DEFAULT_BODY,
    NOT_FOUND_BODY,
    build_header,
    format_http_date,
    format_page_date,
    write_http_header,
    write_not_found,
    write_default_page,
)

__all__ = [
    "HTTPStatus",
    "parse_request_line",
    "read_http_request",
    "CONTENT_TYPE",
    "DEFAULT_BODY",
    "NOT_FOUND_BODY",
    "build_header",
    "format_http_date",
    "format_page_date",
    "write_http_header",
    "write_not_found",
    "write_default_page",
]
