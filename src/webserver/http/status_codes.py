"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The two outcomes this server can produce.

=============================================================================
WHY ONLY TWO?
=============================================================================

Every connection ends in exactly one of two states:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    STATUS DECISION                                  │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   path == ""            ──────────►  200 OK   (canned greeting)     │
    │   path opens for read   ──────────►  200 OK   (file content)        │
    │   anything else         ──────────►  404 Not Found                  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

There is no 400 for malformed requests (they become the default page) and
no 500 for internal errors (the response is simply cut short).

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    IntEnum, so members compare equal to plain integers:

        >>> HTTPStatus.OK == 200
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """

    OK = 200
    NOT_FOUND = 404

    @property
    def phrase(self) -> str:
        """Reason phrase used on the status line."""
        return _PHRASES[self]


_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NOT_FOUND: "Not Found",
}
