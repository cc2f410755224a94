"""
=============================================================================
CORE SERVER COMPONENTS
=============================================================================

The networking plumbing underneath the request handler.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         SOCKET SERVER                                │
    │  ─────────────────────────────────────────────────────────────────  │
    │  • Creates the listening TCP socket, binds, listens                 │
    │  • Runs the accept() loop                                           │
    │  • Handles SIGTERM / SIGINT                                          │
    └─────────────────────────────────────────────────────────────────────┘
                                    │
                                    │ One Connection per accept()
                                    ▼
    ┌─────────────────────────────────────────────────────────────────────┐
    │                          CONNECTION                                  │
    │  ─────────────────────────────────────────────────────────────────  │
    │  • Wraps the client socket in buffered reader/writer streams        │
    │  • Tracks state (NEW → READING → WRITING → CLOSED)                  │
    │  • Closes cleanly, exactly once                                     │
    └─────────────────────────────────────────────────────────────────────┘

THREAD-PER-CONNECTION
─────────────────────

Every Connection gets its own thread and nothing is shared between them,
so there are no locks anywhere in the request path.
=============================================================================
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState

__all__ = [
    "SocketServer",     # Listening socket + accept loop
    "Connection",       # Client socket wrapper
    "ConnectionState",  # Connection lifecycle states
]
