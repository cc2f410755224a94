"""
=============================================================================
WEB SERVER
=============================================================================

Ties the pieces together:

    HTTPServer.run()
        └──► SocketServer.start(self._handle_connection)
                 │
                 └──► for each accepted Connection:
                          threading.Thread(target=WebWorker.handle)
        └──► after shutdown: join every worker thread still running

=============================================================================
WHY A PLAIN THREAD PER CONNECTION?
=============================================================================

Each connection serves one small request and closes, and the handler
keeps no shared state. A fresh thread per connection is the simplest
thing that lets a slow client not block everyone else:

    ┌───────────────────────┬──────────────────────────────────────────┐
    │ Model                 │ Trade-off                                │
    ├───────────────────────┼──────────────────────────────────────────┤
    │ Thread per connection │ Simple, no coordination, unbounded count │
    │ Thread pool           │ Bounded, needs a queue and overflow rule │
    │ asyncio               │ Scales best, every call must be async    │
    └───────────────────────┴──────────────────────────────────────────┘

=============================================================================
"""

import logging
import threading
from typing import List, Optional

from .config import ServerConfig
from .core import SocketServer, Connection
from .handlers import WebWorker


logger = logging.getLogger(__name__)


class HTTPServer:
    """
    Single-request-per-connection web server.

    Usage:
        server = HTTPServer(ServerConfig(port=8080, document_root="./www"))
        server.run()  # Blocks until Ctrl+C

    For tests or embedding, run() on a background thread, then
    wait_until_ready() and read bound_address.
    """

    def __init__(self, config: Optional[ServerConfig] = None, worker: Optional[WebWorker] = None):
        """
        Initialize the server.

        Args:
            config: Server configuration. Uses defaults if not provided.
            worker: Request handler. Built from config if not provided.
        """
        self.config = config or ServerConfig()
        self.config.validate()  # Fail-fast on invalid config

        self._socket_server = SocketServer(self.config)
        self._worker = worker or WebWorker(self.config)
        self._running = False
        self._workers: List[threading.Thread] = []

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def bound_address(self):
        """(host, port) actually bound, None until listening."""
        return self._socket_server.bound_address

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self):
        """
        Start the server (blocking).

        Returns after shutdown() or Ctrl+C, once every request that had
        already started has been answered.
        """
        self._running = True
        self._setup_logging()

        logger.info(
            f"Starting {self.config.server_name} on {self.config.host}:{self.config.port}, "
            f"serving {self.config.document_root}"
        )

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._wait_for_workers()
            self._running = False
            logger.info("Server stopped")

    def shutdown(self):
        """
        Stop accepting connections.

        Requests already being handled are not cancelled: run() returns
        only after each of them has finished.
        """
        self._socket_server.shutdown()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the server is listening."""
        return self._socket_server.wait_until_ready(timeout)

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.getLogger("webserver").setLevel(level)

    def _wait_for_workers(self):
        """Wait for every in-flight request to finish."""
        pending = [t for t in self._workers if t.is_alive()]
        if pending:
            logger.info(f"Waiting for {len(pending)} in-flight request(s)...")
        for thread in pending:
            thread.join()
        self._workers = []

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """Start a worker thread for one connection (called by SocketServer)."""
        # Only the accept loop touches this list
        self._workers = [t for t in self._workers if t.is_alive()]

        thread = threading.Thread(
            target=self._worker.handle,
            args=(conn,),
            name=f"webworker-{conn.id}",
        )
        self._workers.append(thread)
        thread.start()
