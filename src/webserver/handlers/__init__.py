"""
=============================================================================
HANDLERS MODULE
=============================================================================

    Connection                WebWorker                  Response
   ┌───────────┐           ┌─────────────┐           ┌─────────────┐
   │ GET /a    │ ────────▶ │ read        │ ────────▶ │ 200 / 404   │
   │ .html     │           │ open        │           │ headers     │
   │ HTTP/1.1  │           │ write       │           │ page body   │
   └───────────┘           └─────────────┘           └─────────────┘

WebWorker is the only handler: there is no routing, every request goes
through the same four steps.
=============================================================================
"""

from .worker import (
    WebWorker,
    substitute_placeholders,
    DATE_TOKEN,
    SERVER_TOKEN,
)

__all__ = [
    "WebWorker",
    "substitute_placeholders",
    "DATE_TOKEN",
    "SERVER_TOKEN",
]
