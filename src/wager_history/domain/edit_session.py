"""
Edit session for a single history record.

The session owns two value copies of the record: `original`, frozen at the
start of the edit, and `current`, which follows every field change. Field
validation runs per change and is merged into `errors`; `submit` re-runs it
in full and is the only place that decides whether the edit may be sent.

Changing the number re-derives the bet types legal for its length. When the
current type is not among them the session snaps it to the first legal
option, or to the "no type" sentinel when there is none.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

from wager_history.domain.errors import CollaboratorError, SessionClosedError
from wager_history.domain.models import (
    NO_TYPE_ID,
    GameOption,
    HistoryRecord,
    TypeOption,
    UpdatePayload,
)
from wager_history.domain.validation import (
    eligible_types,
    parse_amount,
    validate_amount,
    validate_fields,
    validate_number,
)
from wager_history.utils.logging import get_logger

if TYPE_CHECKING:
    from wager_history.gateway.abstract import RecordUpdater

log = get_logger(__name__)

EDITABLE_FIELDS = ("number", "amount", "game", "type")

NO_CHANGES_NOTICE = "No changes made to update."
UPDATE_FAILED_NOTICE = "Failed to update record"
UPDATE_OK_NOTICE = "Record updated successfully"
BUSY_NOTICE = "An update for this record is already in progress."


class SessionState(str, enum.Enum):
    CLEAN = "clean"
    EDITING = "editing"
    INVALID = "invalid"
    VALID = "valid"
    SUBMITTED = "submitted"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.SUBMITTED, SessionState.CANCELLED)


class SubmitStatus(str, enum.Enum):
    SUBMITTED = "submitted"
    INVALID = "invalid"
    NO_CHANGES = "no_changes"
    FAILED = "failed"
    BUSY = "busy"


@dataclass(frozen=True)
class SubmitResult:
    """
    Outcome of `EditSession.submit`.

    `errors` carries the field messages when status is INVALID; `notice` is
    the user-facing message for every other status.
    """

    status: SubmitStatus
    errors: Dict[str, str] = field(default_factory=dict)
    notice: Optional[str] = None
    payload: Optional[UpdatePayload] = None

    @property
    def ok(self) -> bool:
        return self.status is SubmitStatus.SUBMITTED


class EditSession:
    def __init__(
        self,
        record: HistoryRecord,
        types: Sequence[TypeOption] = (),
        user_id: int = 0,
    ) -> None:
        self.original: HistoryRecord = record.model_copy(deep=True)
        self.current: HistoryRecord = record.model_copy(deep=True)
        self.errors: Dict[str, str] = {}
        self.dirty = False
        self.loading = False
        self.state = SessionState.CLEAN
        self.user_id = user_id
        self._types: List[TypeOption] = list(types)
        if self._types:
            self._reconcile_type()

    @classmethod
    def start(
        cls,
        record: HistoryRecord,
        types: Sequence[TypeOption] = (),
        user_id: int = 0,
    ) -> "EditSession":
        return cls(record, types=types, user_id=user_id)

    @property
    def record_id(self) -> int:
        return self.original.id

    @property
    def types(self) -> List[TypeOption]:
        return list(self._types)

    @property
    def has_errors(self) -> bool:
        return any(self.errors.values())

    @property
    def type_options(self) -> List[TypeOption]:
        """Types selectable for the number currently being edited."""
        return eligible_types(len(self.current.number), self._types)

    def _ensure_open(self) -> None:
        if self.state.is_terminal:
            raise SessionClosedError(
                f"edit session for record {self.record_id} is {self.state.value}"
            )

    def set_types(self, types: Sequence[TypeOption]) -> None:
        """Replace the reference type list and re-check the current type."""
        self._ensure_open()
        self._types = list(types)
        self._reconcile_type()

    def change_field(self, name: str, value: Any) -> Dict[str, str]:
        """
        Apply a user edit and return the merged error mapping.

        `game` and `type` take a GameOption / TypeOption. `amount` keeps the
        raw input when it does not parse, so the error stays visible.
        """
        self._ensure_open()
        if name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown field '{name}'. Editable: {', '.join(EDITABLE_FIELDS)}")

        if name == "number":
            text = "" if value is None else str(value)
            self.current.number = text
            changed = text != self.original.number
            self.errors["number"] = validate_number(text)
            self._reconcile_type()
        elif name == "amount":
            parsed = parse_amount(value)
            self.current.amount = parsed if parsed is not None else value
            changed = self.current.amount != self.original.amount
            self.errors["amount"] = validate_amount(value)
        elif name == "game":
            game = _as_game(value)
            self.current.game_id = game.id
            self.current.game_name = game.name
            changed = game.id != self.original.game_id
        else:
            option = _as_type(value)
            self.current.type_id = option.id
            self.current.type_name = option.label
            changed = option.id != self.original.type_id

        if changed:
            self.dirty = True
        if self.has_errors:
            self.state = SessionState.INVALID
        elif self.state in (SessionState.INVALID, SessionState.VALID):
            self.state = SessionState.VALID
        else:
            self.state = SessionState.EDITING
        return dict(self.errors)

    def _reconcile_type(self) -> None:
        options = eligible_types(len(self.current.number), self._types)
        if any(o.id == self.current.type_id for o in options):
            return
        if options:
            self.current.type_id = options[0].id
            self.current.type_name = options[0].label
        else:
            self.current.type_id = NO_TYPE_ID
            self.current.type_name = ""

    def build_payload(self, now: Optional[datetime] = None) -> UpdatePayload:
        current = self.current
        return UpdatePayload(
            number=current.number,
            game_id=current.game_id,
            game_name=current.game_name,
            type_id=current.type_id,
            type_name=current.type_name,
            amount=current.amount,
            created_at=self.original.created_at,
            id=self.original.id,
            modified=now or datetime.now(),
            business_date=current.business_date,
            user_id=self.user_id,
            group_id=current.group_id,
            group_name=current.group_name,
        )

    def submit(self, gateway: "RecordUpdater", now: Optional[datetime] = None) -> SubmitResult:
        """
        Validate everything, then persist through `gateway` if anything changed.
        """
        self._ensure_open()
        if self.loading:
            return SubmitResult(SubmitStatus.BUSY, notice=BUSY_NOTICE)

        self.errors = validate_fields(self.current.number, self.current.amount)
        if self.has_errors:
            self.state = SessionState.INVALID
            return SubmitResult(SubmitStatus.INVALID, errors=dict(self.errors))
        self.state = SessionState.VALID

        if not self.dirty:
            return SubmitResult(SubmitStatus.NO_CHANGES, notice=NO_CHANGES_NOTICE)

        payload = self.build_payload(now)
        self.loading = True
        try:
            gateway.submit_update(payload)
        except CollaboratorError as exc:
            log.warning(
                "Record update failed",
                extra={"record_id": self.record_id, "error": str(exc)},
            )
            return SubmitResult(SubmitStatus.FAILED, notice=UPDATE_FAILED_NOTICE, payload=payload)
        finally:
            self.loading = False

        self.state = SessionState.SUBMITTED
        log.info("Record updated", extra={"record_id": self.record_id})
        return SubmitResult(SubmitStatus.SUBMITTED, notice=UPDATE_OK_NOTICE, payload=payload)

    def cancel(self) -> None:
        self._ensure_open()
        self.state = SessionState.CANCELLED


def _as_game(value: Union[GameOption, Dict[str, Any]]) -> GameOption:
    if isinstance(value, GameOption):
        return value
    return GameOption.model_validate(value)


def _as_type(value: Union[TypeOption, Dict[str, Any]]) -> TypeOption:
    if isinstance(value, TypeOption):
        return value
    return TypeOption.model_validate(value)


__all__ = [
    "EDITABLE_FIELDS",
    "BUSY_NOTICE",
    "SessionState",
    "SubmitStatus",
    "SubmitResult",
    "EditSession",
]
