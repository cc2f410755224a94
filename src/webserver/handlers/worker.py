"""
=============================================================================
WEB WORKER
=============================================================================

The request handler. One WebWorker.handle() call serves one connection
from first byte to close.

=============================================================================
THE FOUR STEPS
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    handle(conn)                                      │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. read_http_request(reader)      → path                          │
    │         drain the header block, keep the GET target                 │
    │                                                                      │
    │   2. open_resource(path)            → found, file                   │
    │         "" is always found; otherwise "can it be opened?"           │
    │                                                                      │
    │   3. write_http_header(writer, found)                               │
    │         200 OK or 404 Not Found + fixed headers                     │
    │                                                                      │
    │   4. write_content(writer, path, file)  /  write_not_found(writer)  │
    │         greeting, substituted .html, nothing, or the 404 page       │
    │                                                                      │
    │   close connection and file       ◄── on every path                 │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PLACEHOLDER TOKENS
=============================================================================

Served .html pages may contain two literal markers:

    <cs371date>     → current time, e.g. "Fri Oct 16 15:04:05 UTC 2026"
    <cs371server>   → the configured page identity string

Every other character of the line is written unchanged. The line
terminator is NOT written back, so a multi-line page arrives as one long
line. Browsers don't care; diff tools do.

=============================================================================
ONE OPEN, NOT TWO
=============================================================================

A naive server checks "does the file exist?" and later opens it to read,
leaving a window where the file can disappear in between (TOCTOU). Here
the existence check IS the open: the same handle is used for the body and
closed afterwards.

=============================================================================
ERROR POLICY
=============================================================================

    Malformed request          → treated as path ""
    Read error on the request  → keep whatever path we had
    File won't open            → 404
    File read error mid-body   → log, stop the body, close normally
    Write error to the client  → abort, log, close

There is no 500 page. A broken response is simply cut short.

=============================================================================
"""

import os
import logging
from datetime import datetime, timezone
from typing import BinaryIO, Callable, Iterator, Optional, TextIO, Tuple

from ..config import ServerConfig
from ..core.connection import Connection
from ..http.request import read_http_request
from ..http.response import (
    format_page_date,
    write_http_header,
    write_not_found,
    write_default_page,
)


logger = logging.getLogger(__name__)


DATE_TOKEN = "<cs371date>"
SERVER_TOKEN = "<cs371server>"

# Only pages with this suffix have a body; see write_content()
TEMPLATE_SUFFIX = ".html"


def substitute_placeholders(line: str, date_text: str, identity: str) -> str:
    """Replace every placeholder token in one line of a page."""
    return line.replace(DATE_TOKEN, date_text).replace(SERVER_TOKEN, identity)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _open_text(path: str) -> TextIO:
    return open(path, "r", encoding="utf-8", errors="replace")


class WebWorker:
    """
    Serves one request per connection.

    A single WebWorker is shared by all connection threads. It holds only
    configuration and collaborators, never per-request state, so concurrent
    handle() calls don't interact.

    Collaborators (all injectable for tests):
        log:    anything with debug/info/error, default the module logger.
        clock:  returns "now" as a datetime, used for both dates.
        opener: opens a filesystem path for text reading.

    Usage:
        worker = WebWorker(ServerConfig(document_root="./www"))
        threading.Thread(target=worker.handle, args=(conn,)).start()
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        log: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], datetime]] = None,
        opener: Optional[Callable[[str], TextIO]] = None,
    ):
        self.config = config or ServerConfig()
        self.log = log or logger
        self._clock = clock or _utc_now
        self._opener = opener or _open_text

    # =========================================================================
    # ENTRY POINT
    # =========================================================================

    def handle(self, conn: Connection) -> None:
        """
        Handle one connection from start to finish (thread target).

        The connection is always closed. Errors that abort the response
        (write failures) are logged here and go no further: this is the
        top of a worker thread.
        """
        self.log.info(f"[{conn.id}] Handling connection...")
        try:
            with conn:
                self.serve(conn.reader, conn.writer)
        except Exception as e:
            self.log.error(f"[{conn.id}] Output error: {e}")
        self.log.info(f"[{conn.id}] Done handling connection.")

    def serve(self, reader: BinaryIO, writer: BinaryIO) -> None:
        """
        Run the four steps against a pair of streams.

        Raises:
            OSError: If writing to the client fails.
        """
        path = self.read_http_request(reader)
        found, resource = self.open_resource(path)

        try:
            if self.write_http_header(writer, found):
                self.write_content(writer, path, resource)
            else:
                write_not_found(writer)
            writer.flush()
        finally:
            if resource is not None:
                resource.close()

    # =========================================================================
    # STEP 1: READ THE REQUEST
    # =========================================================================

    def read_http_request(self, reader: BinaryIO) -> str:
        """Drain the request header block and return the requested path."""
        return read_http_request(reader, self.log)

    # =========================================================================
    # STEP 2: DOES THE RESOURCE EXIST?
    # =========================================================================

    def resolve(self, path: str) -> str:
        """Map a request path onto the filesystem under document_root."""
        return os.path.join(self.config.document_root, path.lstrip("/"))

    def open_resource(self, path: str) -> Tuple[bool, Optional[TextIO]]:
        """
        Decide whether path can be served.

        Returns:
            (True, None) for the empty path, without touching the disk.
            (True, file) when the file opened; the caller must close it.
            (False, None) when it could not be opened for any reason.
        """
        if not path:
            return True, None

        try:
            return True, self._opener(self.resolve(path))
        except (OSError, ValueError) as e:
            # ValueError: embedded NUL byte in the path
            self.log.debug(f"Not found: {path} ({e})")
            return False, None

    # =========================================================================
    # STEP 3: HEADER
    # =========================================================================

    def write_http_header(self, writer: BinaryIO, found: bool) -> bool:
        """Write the status line and fixed headers. Returns found."""
        return write_http_header(
            writer,
            found,
            date=self._clock(),
            server_name=self.config.server_name,
            crlf=self.config.crlf_headers,
        )

    # =========================================================================
    # STEP 4: BODY
    # =========================================================================

    def write_content(
        self,
        writer: BinaryIO,
        path: str,
        resource: Optional[TextIO],
    ) -> None:
        """
        Write the body of a found resource.

        - empty path:       the canned greeting
        - *.html:           the file, placeholders substituted line by line
        - any other file:   nothing at all

        The last case is long-standing behavior: a .png or .txt gets a
        "200 OK" with an empty body. Kept as is.
        """
        if not path:
            write_default_page(writer)
            return

        if not path.endswith(TEMPLATE_SUFFIX) or resource is None:
            return

        date_text = format_page_date(self._clock())
        identity = self.config.page_identity

        for line in self._read_lines(resource, path):
            writer.write(substitute_placeholders(line, date_text, identity).encode())

    def _read_lines(self, resource: TextIO, path: str) -> Iterator[str]:
        """
        Yield the lines of resource without their terminators.

        A read failure ends the iteration after logging it. Exceptions
        raised by the consumer (write errors) are not caught here.
        """
        try:
            for line in resource:
                yield line[:-1] if line.endswith("\n") else line
        except (OSError, ValueError) as e:
            self.log.error(f"Error reading {path}: {e}")
