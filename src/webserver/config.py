"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the web server.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m webserver --port 3000                           │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTP_PORT=3000 python -m webserver                        │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional


_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class ServerConfig:
    """
    Configuration for the web server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, timeout

    CONTENT
    - document_root, server_name, page_identity

    PROTOCOL
    - crlf_headers

    LOGGING
    - log_level

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """
    The IP address to bind to.
    - "127.0.0.1" - Localhost only (development)
    - "0.0.0.0" - All network interfaces
    """

    port: int = 8080
    """The port number to listen on."""

    backlog: int = 128
    """Maximum number of queued connections waiting for accept()."""

    timeout: Optional[float] = 30.0
    """
    Socket read timeout in seconds for client connections.
    None = block forever waiting for the request.
    """

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT
    # ─────────────────────────────────────────────────────────────────────

    document_root: str = "."
    """
    Directory request paths are resolved against.
    GET /pages/a.html serves <document_root>/pages/a.html
    """

    server_name: str = "Zack's server"
    """Value of the Server response header."""

    page_identity: str = "Zackery Meyer's CS371 Server"
    """Text substituted for <cs371server> in served .html pages."""

    # ─────────────────────────────────────────────────────────────────────
    # PROTOCOL
    # ─────────────────────────────────────────────────────────────────────

    crlf_headers: bool = False
    """
    Terminate header lines with CRLF instead of LF.
    LF is the long-standing behavior; CRLF is what RFC 7230 requires.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR)."""

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        HTTP_HOST            Server host (default: 127.0.0.1)
        HTTP_PORT            Server port (default: 8080)
        HTTP_TIMEOUT         Read timeout in seconds (default: 30)
        HTTP_DOCUMENT_ROOT   Directory to serve from (default: .)
        HTTP_SERVER_NAME     Server header value
        HTTP_PAGE_IDENTITY   <cs371server> replacement text
        HTTP_CRLF_HEADERS    1/true/yes/on to send CRLF headers
        HTTP_LOG_LEVEL       Logging level (default: INFO)
        """
        defaults = cls()
        return cls(
            host=os.getenv("HTTP_HOST", defaults.host),
            port=int(os.getenv("HTTP_PORT", str(defaults.port))),
            timeout=float(os.getenv("HTTP_TIMEOUT", str(defaults.timeout))),
            document_root=os.getenv("HTTP_DOCUMENT_ROOT", defaults.document_root),
            server_name=os.getenv("HTTP_SERVER_NAME", defaults.server_name),
            page_identity=os.getenv("HTTP_PAGE_IDENTITY", defaults.page_identity),
            crlf_headers=os.getenv("HTTP_CRLF_HEADERS", "").lower() in _TRUE_VALUES,
            log_level=os.getenv("HTTP_LOG_LEVEL", defaults.log_level),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called at startup so a bad port or a missing document root fails
        immediately instead of on the first request.
        """
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 1-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if not os.path.isdir(self.document_root):
            raise ValueError(f"document_root is not a directory: {self.document_root}")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log_level: {self.log_level}")
