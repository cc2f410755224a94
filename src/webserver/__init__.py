"""
=============================================================================
WEBSERVER - A Minimal One-Request-Per-Connection HTTP Server
=============================================================================

A small teaching web server built on raw Python sockets. Every connection
carries exactly one GET request and is closed after the response.

=============================================================================
WHAT IT SERVES
=============================================================================

    GET /               → "My web server works!" greeting
    GET /page.html      → page.html with <cs371date> and <cs371server>
                          replaced by the current time and server identity
    GET /image.png      → 200 OK, empty body
    GET /missing.html   → 404 page

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    webserver/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m webserver)
    ├── server.py            # HTTPServer: listener + thread per connection
    ├── config.py            # ServerConfig dataclass
    ├── core/
    │   ├── socket_server.py # TCP socket handling, accept loop
    │   └── connection.py    # Client socket wrapper
    ├── http/
    │   ├── request.py       # Request header reading, path extraction
    │   ├── response.py      # Header block, canned bodies, dates
    │   └── status_codes.py  # 200 / 404
    └── handlers/
        └── worker.py        # WebWorker: the per-connection handler

=============================================================================
QUICK START
=============================================================================

    from webserver import HTTPServer, ServerConfig

    server = HTTPServer(ServerConfig(port=8080, document_root="./www"))
    server.run()

=============================================================================
"""

__version__ = "1.0.0"

from .server import HTTPServer
from .config import ServerConfig
from .handlers import WebWorker

__all__ = ["HTTPServer", "ServerConfig", "WebWorker", "__version__"]
