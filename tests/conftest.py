"""
Pytest configuration for the Wager History desk.

Provides fixtures for:
- Settings with test-specific overrides
- Reference bet types and games
- A history record factory
- An in-memory ledger gateway that records every call
"""

from __future__ import annotations

import os
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

import pytest

from wager_history.config import Settings
from wager_history.domain.errors import CollaboratorError, DuplicateGroupError
from wager_history.domain.groups import Group, GroupDraft
from wager_history.domain.models import (
    DeskContext,
    GameOption,
    HistoryRecord,
    TypeOption,
    UpdatePayload,
)

BUSINESS_DATE = date(2024, 5, 1)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        api_base_url=os.getenv("API_BASE_URL", "http://ledger.test/api"),
        api_token=os.getenv("API_TOKEN", "test-token"),
        api_timeout=5.0,
        user_id=int(os.getenv("USER_ID", "7")),
        log_level="DEBUG",
    )


@pytest.fixture
def type_options() -> List[TypeOption]:
    """Bet types as `/types` returns them, in server order."""
    return [
        TypeOption(id=2, label="Jodi"),
        TypeOption(id=3, label="Open Pana"),
        TypeOption(id=4, label="Open"),
        TypeOption(id=7, label="Close"),
        TypeOption(id=9, label="Close Pana"),
        TypeOption(id=11, label="Half Sangam"),
    ]


@pytest.fixture
def games() -> List[GameOption]:
    return [GameOption(id=1, name="Main Bazar"), GameOption(id=2, name="Kalyan")]


@pytest.fixture
def groups() -> List[Group]:
    return [
        Group(id=1, groupname="North Branch", commission=Decimal("5")),
        Group(id=2, groupname="South Agents", pana_payable=Decimal("140")),
    ]


@pytest.fixture
def context() -> DeskContext:
    return DeskContext(user_id=7, token="test-token")


@pytest.fixture
def make_record() -> Callable[..., HistoryRecord]:
    """Factory for history records; keyword overrides use model field names."""

    def _make(record_id: int = 1, **overrides: Any) -> HistoryRecord:
        values: Dict[str, Any] = {
            "id": record_id,
            "created_at": datetime(2024, 5, 1, 10, 15),
            "modified_at": None,
            "number": "123",
            "game_id": 1,
            "game_name": "Main Bazar",
            "type_id": 3,
            "type_name": "Open Pana",
            "amount": Decimal("100"),
            "user_id": 7,
            "business_date": BUSINESS_DATE,
            "group_id": 1,
            "group_name": "North Branch",
        }
        values.update(overrides)
        return HistoryRecord(**values)

    return _make


class FakeGateway:
    """
    In-memory stand-in for the ledger API.

    Set `fail_on` to an operation name to make that call raise
    `CollaboratorError`, or `authenticated = False` to close the auth gate.
    """

    def __init__(
        self,
        records: Optional[List[HistoryRecord]] = None,
        types: Optional[List[TypeOption]] = None,
        games: Optional[List[GameOption]] = None,
        groups: Optional[List[Group]] = None,
    ) -> None:
        self.records = list(records or [])
        self.types = list(types or [])
        self.games = list(games or [])
        self.groups = list(groups or [])
        self.authenticated = True
        self.fail_on: set = set()
        self.calls: List[tuple] = []
        self.updates: List[UpdatePayload] = []
        self.deleted: List[List[int]] = []

    def _call(self, operation: str, *args: Any) -> None:
        self.calls.append((operation, *args))
        if operation in self.fail_on:
            raise CollaboratorError(operation, "simulated failure", status_code=500)

    def require_authenticated(self) -> bool:
        self.calls.append(("require_authenticated",))
        return self.authenticated

    def fetch_records(
        self, user_id: int, game_id: int, business_date: date, group_id: int
    ) -> List[HistoryRecord]:
        self._call("fetch_records", user_id, game_id, business_date, group_id)
        return [
            r
            for r in self.records
            if r.game_id == game_id and r.group_id == group_id and r.business_date == business_date
        ]

    def fetch_type_options(self) -> List[TypeOption]:
        self._call("fetch_type_options")
        return list(self.types)

    def fetch_games(self) -> List[GameOption]:
        self._call("fetch_games")
        return list(self.games)

    def fetch_user_groups(self, user_id: int) -> List[Group]:
        self._call("fetch_user_groups", user_id)
        return list(self.groups)

    def submit_update(self, payload: UpdatePayload) -> None:
        self._call("submit_update", payload)
        self.updates.append(payload)
        self.records = [
            r.model_copy(update={"number": payload.number, "amount": payload.amount})
            if r.id == payload.id
            else r
            for r in self.records
        ]

    def submit_delete(self, ids: List[int]) -> None:
        self._call("submit_delete", list(ids))
        self.deleted.append(list(ids))
        self.records = [r for r in self.records if r.id not in ids]

    def list_groups(self) -> List[Group]:
        self._call("list_groups")
        return list(self.groups)

    def create_group(self, draft: GroupDraft) -> None:
        self._call("create_group", draft)
        if any(g.groupname == draft.groupname for g in self.groups):
            raise DuplicateGroupError("create_group", f"group '{draft.groupname}' already exists")
        next_id = max((g.id for g in self.groups), default=0) + 1
        self.groups.append(Group(id=next_id, **draft.model_dump()))

    def update_group(self, group_id: int, draft: GroupDraft) -> None:
        self._call("update_group", group_id, draft)
        self.groups = [
            Group(id=g.id, **draft.model_dump()) if g.id == group_id else g for g in self.groups
        ]

    def delete_group(self, group_id: int) -> None:
        self._call("delete_group", group_id)
        self.groups = [g for g in self.groups if g.id != group_id]

    def operations(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_gateway(type_options, games, groups) -> FakeGateway:
    return FakeGateway(types=type_options, games=games, groups=groups)
