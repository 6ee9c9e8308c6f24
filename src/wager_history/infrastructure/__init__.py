"""
Infrastructure package for the Wager History desk.

Centralizes HTTP connectivity concerns (client construction, headers,
timeouts). Keep this layer focused on I/O setup, decoupled from the desk and
the domain rules.
"""

from wager_history.infrastructure.http_factory import build_client, build_headers

__all__ = [
    "build_client",
    "build_headers",
]
