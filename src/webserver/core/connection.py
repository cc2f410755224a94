"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

Wraps one accepted client socket for the lifetime of one request.

=============================================================================
ONE REQUEST, THEN CLOSE
=============================================================================

This server answers exactly one request per TCP connection:

    ┌─────────────────────────────────────────────────────────────────┐
    │                    Connection Lifetime                           │
    ├─────────────────────────────────────────────────────────────────┤
    │                                                                  │
    │   TCP Connect                                                    │
    │       │                                                          │
    │       ├── Read request headers    (reader)                       │
    │       ├── Write header + body     (writer)                       │
    │       │                                                          │
    │   TCP Close          ◄── always, even after an error             │
    │                                                                  │
    └─────────────────────────────────────────────────────────────────┘

The response carries "Connection: close" and no Content-Length, so the
close is also how the client learns the body is complete.

=============================================================================
WHY makefile()?
=============================================================================

TCP is a byte stream: recv() may hand us half a line or three lines at
once. socket.makefile() puts a buffered file object on top of the socket
so we can simply call readline() and let Python do the buffering.

=============================================================================
CONNECTION STATE MACHINE
=============================================================================

    NEW ──────► READING ──────► WRITING ──────► CLOSED
     │             │                               ▲
     └─────────────┴───────────────────────────────┘
                 (error: close from any state)

=============================================================================
"""

import socket
import time
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import BinaryIO, Optional
import uuid


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection lifecycle states."""
    NEW = "new"              # Just accepted
    READING = "reading"      # Reading the request header block
    WRITING = "writing"      # Sending the response
    CLOSED = "closed"        # Socket released


@dataclass
class Connection:
    """
    Represents a client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short identifier used in log lines.
        state: Current connection state.
        created_at: Timestamp when connection was accepted.
        timeout: Read timeout in seconds, None to block forever.
    """

    # Required parameters
    socket: socket.socket
    address: tuple

    # Generated/default parameters
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)
    timeout: Optional[float] = 30.0

    # Buffered file objects over the socket
    _reader: Optional[BinaryIO] = field(default=None, repr=False)
    _writer: Optional[BinaryIO] = field(default=None, repr=False)

    def __post_init__(self):
        """Configure the socket and open the buffered streams."""
        self.socket.settimeout(self.timeout)
        self._reader = self.socket.makefile("rb")
        self._writer = self.socket.makefile("wb")

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def age(self) -> float:
        """Get connection age in seconds."""
        return time.time() - self.created_at

    @property
    def closed(self) -> bool:
        return self.state == ConnectionState.CLOSED

    @property
    def reader(self) -> BinaryIO:
        """Buffered binary stream for reading the request."""
        self.state = ConnectionState.READING
        return self._reader

    @property
    def writer(self) -> BinaryIO:
        """Buffered binary stream for writing the response."""
        self.state = ConnectionState.WRITING
        return self._writer

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection.

        Safe to call more than once. Every step is attempted even if an
        earlier one fails, so the file descriptor is always released:

        1. flush the writer (anything still buffered goes out)
        2. close the reader/writer file objects
        3. shutdown(SHUT_WR), which sends FIN to the client
        4. close() the socket
        """
        if self.state == ConnectionState.CLOSED:
            return  # Already closed

        try:
            self._writer.close()  # close() flushes first
        except OSError as e:
            logger.debug(f"[{self.id}] Flush on close failed: {e}")

        try:
            self._reader.close()
        except OSError:
            pass

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Already disconnected, that's fine

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    # =========================================================================
    # CONTEXT MANAGER
    # =========================================================================

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Ensure the connection is closed; never suppresses exceptions."""
        self.close()
        return False
