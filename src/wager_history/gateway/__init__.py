"""
Gateway package: how the desk reaches the ledger API.

Re-exports the protocols and the httpx implementation so callers can import
from `wager_history.gateway` directly.
"""

from wager_history.gateway.abstract import (
    AbstractLedgerGateway,
    GroupAdmin,
    LedgerGateway,
    RecordUpdater,
)
from wager_history.gateway.http_gateway import HttpLedgerGateway

__all__ = [
    # Protocols
    "AbstractLedgerGateway",
    "GroupAdmin",
    "LedgerGateway",
    "RecordUpdater",
    # Implementations
    "HttpLedgerGateway",
]
