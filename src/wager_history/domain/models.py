"""
Domain models for the Wager History desk.

Defines the history record as the ledger API returns it (`history_*` wire
names), the read-only reference options, the explicit session context, and
the update/delete payloads posted back to `/createorupdatedata`.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

NO_TYPE_ID = -1


def json_number(value: Decimal) -> Union[int, float]:
    """Render a Decimal the way the API expects: plain JSON numbers."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


class HistoryRecord(BaseModel):
    """
    A single wager entry in the ledger.
    """

    id: int = Field(..., alias="history_id", description="Server-assigned identifier.")
    created_at: datetime = Field(..., alias="history_created_at")
    modified_at: Optional[datetime] = Field(None, alias="history_modified_at")
    number: str = Field(..., alias="history_number", pattern=r"^\d{1,3}$")
    game_id: int = Field(..., alias="history_game_id")
    game_name: str = Field("", alias="history_game_name")
    type_id: int = Field(..., alias="history_type_id")
    type_name: str = Field("", alias="history_type_name")
    amount: Decimal = Field(..., alias="history_amount", gt=0)
    user_id: int = Field(..., alias="history_user_id")
    business_date: date = Field(..., alias="history_date", description="Business date of the draw.")
    group_id: int = Field(..., alias="history_group")
    group_name: str = Field("", alias="history_groupname")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("number", mode="before")
    @classmethod
    def _number_as_text(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("business_date", mode="before")
    @classmethod
    def _date_only(cls, value: object) -> object:
        # The API sometimes sends the business date as a full timestamp.
        if isinstance(value, str) and len(value) > 10:
            return value[:10]
        if isinstance(value, datetime):
            return value.date()
        return value


class TypeOption(BaseModel):
    """Bet type reference entry (`/types` serves them as game-shaped rows)."""

    id: int
    label: str

    model_config = ConfigDict(frozen=True)


class GameOption(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(frozen=True)


class DeskContext(BaseModel):
    """
    Explicit per-user context for the desk: who is editing and with what token.
    """

    user_id: int
    token: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class UpdatePayload(BaseModel):
    """
    One `flag="U"` entry for `/createorupdatedata`.
    """

    flag: Literal["U"] = "U"
    number: str
    game_id: int = Field(..., serialization_alias="gameid")
    game_name: str = Field(..., serialization_alias="game")
    type_id: int = Field(..., serialization_alias="typeid")
    type_name: str = Field(..., serialization_alias="type")
    amount: Decimal
    created_at: datetime = Field(..., serialization_alias="createdat")
    id: int
    modified: datetime
    business_date: date = Field(..., serialization_alias="gamedate")
    user_id: int = Field(..., serialization_alias="uid")
    group_id: int = Field(..., serialization_alias="group")
    group_name: str = Field(..., serialization_alias="grpname")

    model_config = ConfigDict(frozen=True)

    @field_serializer("amount")
    def _serialize_amount(self, value: Decimal) -> Union[int, float]:
        return json_number(value)

    @field_serializer("modified")
    def _serialize_modified(self, value: datetime) -> str:
        return value.strftime("%Y-%m-%d %H:%M:%S")

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class DeleteEntry(BaseModel):
    flag: Literal["D"] = "D"
    id: int

    def to_wire(self) -> dict:
        return self.model_dump(mode="json")


def delete_entries(ids: List[int]) -> List[DeleteEntry]:
    return [DeleteEntry(id=record_id) for record_id in ids]


__all__ = [
    "NO_TYPE_ID",
    "json_number",
    "HistoryRecord",
    "TypeOption",
    "GameOption",
    "DeskContext",
    "UpdatePayload",
    "DeleteEntry",
    "delete_entries",
]
