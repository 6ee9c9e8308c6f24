"""
Gateway interfaces for the ledger API.

The desk and the edit session only ever talk to these protocols. The HTTP
implementation lives in `wager_history.gateway.http_gateway`; tests plug in
in-memory fakes. Every method signals failure by raising
`wager_history.domain.errors.CollaboratorError`.
"""

from __future__ import annotations

import abc
from datetime import date
from typing import List, Protocol, runtime_checkable

from wager_history.domain.groups import Group, GroupDraft
from wager_history.domain.models import GameOption, HistoryRecord, TypeOption, UpdatePayload


@runtime_checkable
class RecordUpdater(Protocol):
    """The one call an edit session needs to persist itself."""

    def submit_update(self, payload: UpdatePayload) -> None:
        ...


@runtime_checkable
class LedgerGateway(RecordUpdater, Protocol):
    """
    Everything the history desk needs from the ledger API.
    """

    def require_authenticated(self) -> bool:
        """
        Return False when the session is no longer logged in.

        A False answer abandons the pending fetch without any further notice.
        """
        ...

    def fetch_records(
        self, user_id: int, game_id: int, business_date: date, group_id: int
    ) -> List[HistoryRecord]:
        ...

    def fetch_type_options(self) -> List[TypeOption]:
        ...

    def fetch_games(self) -> List[GameOption]:
        ...

    def fetch_user_groups(self, user_id: int) -> List[Group]:
        ...

    def submit_delete(self, ids: List[int]) -> None:
        ...


@runtime_checkable
class GroupAdmin(Protocol):
    """Group directory administration."""

    def require_authenticated(self) -> bool:
        ...

    def list_groups(self) -> List[Group]:
        ...

    def create_group(self, draft: GroupDraft) -> None:
        ...

    def update_group(self, group_id: int, draft: GroupDraft) -> None:
        ...

    def delete_group(self, group_id: int) -> None:
        ...


class AbstractLedgerGateway(abc.ABC):
    """
    ABC helper for class-based gateways.

    Subclasses implement every abstract method; `close` is optional.
    """

    @abc.abstractmethod
    def require_authenticated(self) -> bool:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def fetch_records(
        self, user_id: int, game_id: int, business_date: date, group_id: int
    ) -> List[HistoryRecord]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def fetch_type_options(self) -> List[TypeOption]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def fetch_games(self) -> List[GameOption]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def fetch_user_groups(self, user_id: int) -> List[Group]:  # pragma: no cover
        raise NotImplementedError

    @abc.abstractmethod
    def submit_update(self, payload: UpdatePayload) -> None:  # pragma: no cover
        raise NotImplementedError

    @abc.abstractmethod
    def submit_delete(self, ids: List[int]) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    def close(self) -> None:
        """Release transport resources."""


__all__ = [
    "RecordUpdater",
    "LedgerGateway",
    "GroupAdmin",
    "AbstractLedgerGateway",
]
