"""
pytest configuration and fixtures.
"""

import io
import socket
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Generator

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from webserver import HTTPServer, ServerConfig, WebWorker


FIXED_TIME = datetime(2026, 1, 15, 12, 30, 45, tzinfo=timezone.utc)


@pytest.fixture
def sample_get_request() -> bytes:
    """Browser-style GET request for a page."""
    return (
        b"GET /index.html HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/html\r\n"
        b"\r\n"
    )


@pytest.fixture
def document_root(tmp_path: Path) -> Path:
    """A small site with a template page, a plain page and a non-HTML file."""
    (tmp_path / "index.html").write_text(
        "<html><body>\n"
        "<p>Served by <cs371server> at <cs371date></p>\n"
        "</body></html>\n"
    )
    (tmp_path / "plain.html").write_text("<p>no tokens here</p>\n")
    (tmp_path / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "page.html").write_text("<h1><cs371server></h1>\n")
    return tmp_path


@pytest.fixture
def config(document_root: Path) -> ServerConfig:
    """Test configuration serving the temporary document root."""
    return ServerConfig(
        host="127.0.0.1",
        document_root=str(document_root),
        server_name="TestServer/1.0",
        page_identity="Test Identity",
        timeout=5.0,
        log_level="WARNING",
    )


@pytest.fixture
def worker(config: ServerConfig) -> WebWorker:
    """Worker with a frozen clock."""
    return WebWorker(config, clock=lambda: FIXED_TIME)


@pytest.fixture
def exchange(worker: WebWorker) -> Callable[[bytes], bytes]:
    """Run a raw request through worker.serve() and return the raw response."""
    def run(request: bytes, using: WebWorker = None) -> bytes:
        out = io.BytesIO()
        (using or worker).serve(io.BytesIO(request), out)
        return out.getvalue()
    return run


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


class ServerThread:
    """Runs an HTTPServer on a background thread."""

    def __init__(self, server: HTTPServer):
        self.server = server
        self._thread: threading.Thread = None

    @property
    def port(self) -> int:
        return self.server.bound_address[1]

    def start(self):
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()
        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        self.server.shutdown()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def request(self, raw: bytes) -> bytes:
        """Send raw bytes and read until the server closes the connection."""
        with socket.create_connection(('127.0.0.1', self.port), timeout=5.0) as s:
            s.sendall(raw)
            chunks = []
            while True:
                chunk = s.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        return b"".join(chunks)


@pytest.fixture
def running_server(config: ServerConfig, free_port: int) -> Generator[ServerThread, None, None]:
    """A live server on a free port."""
    config.port = free_port
    server_thread = ServerThread(HTTPServer(config))
    server_thread.start()

    yield server_thread

    server_thread.stop()
