"""
=============================================================================
HTTP REQUEST READING
=============================================================================

Turns the bytes a client sends into the one thing this server cares about:
the requested path.

=============================================================================
WHAT A BROWSER SENDS
=============================================================================

    GET /index.html HTTP/1.1\\r\\n        ◄── request line (we use this)
    Host: localhost:8080\\r\\n            ◄── headers (read, then ignored)
    User-Agent: Mozilla/5.0\\r\\n
    Accept: text/html\\r\\n
    \\r\\n                                ◄── empty line: end of headers

Only the request line matters, but the whole header block is still read.
If we answered and closed while unread bytes sat in the kernel's receive
buffer, many TCP stacks would send an RST instead of a FIN and the client
could lose part of our response.

=============================================================================
PERMISSIVE PARSING
=============================================================================

Nothing here ever rejects a request:

    ┌──────────────────────────────────────┬─────────────────────────────┐
    │ Request line                         │ Path                        │
    ├──────────────────────────────────────┼─────────────────────────────┤
    │ GET /foo.html HTTP/1.1               │ "/foo.html"                 │
    │ GET /foo.html:8080 HTTP/1.1          │ "/foo.html"                 │
    │ GET / HTTP/1.1                       │ ""   (default page)         │
    │ POST /foo.html HTTP/1.1              │ ""                          │
    │ GET /foo.html                        │ ""   (no HTTP version)      │
    │ GET                                  │ ""                          │
    │ (empty / connection closed)          │ ""                          │
    └──────────────────────────────────────┴─────────────────────────────┘

=============================================================================
"""

import re
import logging
from typing import BinaryIO, Optional


logger = logging.getLogger(__name__)


# A ":8080"-style suffix some clients leave glued to the target
PORT_SUFFIX = re.compile(r":\d+$")


def parse_request_line(line: str) -> Optional[str]:
    """
    Extract the path from a single request line.

    Only "GET <target> HTTP/<version>" counts; a missing version or
    extra tokens make the line malformed.

    Args:
        line: One decoded line, with or without its line terminator.

    Returns:
        The path ("" for the site root) if this is a GET request line,
        otherwise None.
    """
    parts = line.split()
    if len(parts) != 3 or parts[0] != "GET" or not parts[2].startswith("HTTP/"):
        return None

    target = PORT_SUFFIX.sub("", parts[1])
    if target == "/":
        return ""
    return target


def read_http_request(reader: BinaryIO, log: Optional[logging.Logger] = None) -> str:
    """
    Read a full request header block and return the requested path.

    Lines are read until an empty line or end of stream. The first GET
    request line wins; everything else is drained and discarded.

    Args:
        reader: Binary stream with readline() (e.g. socket.makefile("rb")).
        log: Logger for request lines and read errors.

    Returns:
        The requested path, "" when there is none. Never raises for read
        errors: whatever was captured before the failure is returned.
    """
    log = log or logger
    path = ""
    captured = False

    while True:
        try:
            raw = reader.readline()
        except (OSError, ValueError) as e:
            # socket.timeout is an OSError; ValueError if the file was closed
            log.error(f"Request error: {e}")
            break

        if not raw:
            break  # End of stream

        line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
        log.debug(f"Request line: ({line})")

        if not line:
            break  # Blank line ends the header block

        if not captured:
            parsed = parse_request_line(line)
            if parsed is not None:
                path = parsed
                captured = True

    return path
