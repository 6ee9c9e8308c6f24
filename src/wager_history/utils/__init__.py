"""
Utilities package for the Wager History desk.

Shared cross-cutting helpers. Keep this package free of domain logic.
"""

from wager_history.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
