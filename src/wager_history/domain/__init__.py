"""
Domain package for the Wager History desk.

Exports the record models and the pure rules that operate on them. Keep this
package free of transport and rendering concerns.
"""

from wager_history.domain.errors import (
    CollaboratorError,
    DuplicateGroupError,
    SessionClosedError,
    WagerHistoryError,
)
from wager_history.domain.groups import Group, GroupDraft, filter_groups
from wager_history.domain.models import (
    NO_TYPE_ID,
    DeleteEntry,
    DeskContext,
    GameOption,
    HistoryRecord,
    TypeOption,
    UpdatePayload,
)

__all__ = [
    "NO_TYPE_ID",
    "HistoryRecord",
    "TypeOption",
    "GameOption",
    "DeskContext",
    "UpdatePayload",
    "DeleteEntry",
    "Group",
    "GroupDraft",
    "filter_groups",
    "WagerHistoryError",
    "CollaboratorError",
    "DuplicateGroupError",
    "SessionClosedError",
]
