"""
Exception taxonomy for the Wager History desk.

Field validation problems are not exceptions: they travel as an error
mapping (see `validation.validate_fields`). Only failures of the external
ledger API and misuse of a finished edit session are raised.
"""

from __future__ import annotations

from typing import Any, Optional


class WagerHistoryError(Exception):
    """Base class for all errors raised by this package."""


class CollaboratorError(WagerHistoryError):
    """
    A call to the ledger API failed (transport error, timeout or non-2xx).

    Callers convert it into a user-visible notice; it is never retried.
    """

    def __init__(
        self,
        operation: str,
        message: str,
        status_code: Optional[int] = None,
        details: Any = None,
    ) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.status_code = status_code
        self.details = details


class DuplicateGroupError(CollaboratorError):
    """The API answered a group creation with an existing group of that name."""


class SessionClosedError(WagerHistoryError):
    """An edit session was used after it was submitted or cancelled."""


__all__ = [
    "WagerHistoryError",
    "CollaboratorError",
    "DuplicateGroupError",
    "SessionClosedError",
]
