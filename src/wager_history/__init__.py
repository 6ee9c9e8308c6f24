"""
Wager History - review and correction desk for a numbers-game ledger.

The package holds the rules that decide whether an edited history record may
be sent back to the ledger API:

- Digit-priority validation of three-digit ("pana") numbers
- Bet-type eligibility by number length
- A per-record edit session with dirty tracking and type reconciliation
- Search filtering and per-type partitioning of the history tables
- Bulk-delete selection tied to the visible records

The ledger API itself is reached through a small gateway protocol with an
httpx implementation; `HistoryDesk` wires everything together.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from wager_history.config import Settings, build_context, get_settings
from wager_history.desk import HistoryDesk, Notice
from wager_history.directory import GroupDirectory
from wager_history.domain.edit_session import EditSession, SessionState, SubmitResult, SubmitStatus
from wager_history.domain.errors import CollaboratorError, SessionClosedError, WagerHistoryError
from wager_history.domain.filtering import DEFAULT_BUCKETS, filter_records, partition_by_type
from wager_history.domain.models import DeskContext, HistoryRecord, TypeOption
from wager_history.domain.selection import SelectionSet
from wager_history.domain.validation import eligible_types, is_valid_three_digit
from wager_history.gateway.abstract import LedgerGateway
from wager_history.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    "build_context",
    # Core rules
    "is_valid_three_digit",
    "eligible_types",
    "filter_records",
    "partition_by_type",
    "DEFAULT_BUCKETS",
    "SelectionSet",
    # Edit session
    "EditSession",
    "SessionState",
    "SubmitResult",
    "SubmitStatus",
    # Models
    "DeskContext",
    "HistoryRecord",
    "TypeOption",
    # Desk and gateway
    "HistoryDesk",
    "Notice",
    "GroupDirectory",
    "LedgerGateway",
    # Errors
    "WagerHistoryError",
    "CollaboratorError",
    "SessionClosedError",
    # Logging
    "configure_logging",
    "get_logger",
]
