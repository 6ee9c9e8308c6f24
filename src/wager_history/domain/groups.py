"""
Organizational groups (agents or branches) that own history records.

Payout rates are percentages. A group's commission stays below 100 and its
non-pana payable is always what the commission leaves over.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator

from wager_history.domain.models import json_number

RATE_CEILING = Decimal("100")


class _GroupFields(BaseModel):
    groupname: str = Field(..., min_length=1)
    commission: Decimal = Field(Decimal("0"), ge=0)
    nonpana_payable: Decimal = Field(Decimal("0"), ge=0)
    pana_payable: Decimal = Field(Decimal("0"), ge=0)

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_serializer("commission", "nonpana_payable", "pana_payable", when_used="json")
    def _serialize_rates(self, value: Decimal):
        return json_number(value)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json")


class GroupDraft(_GroupFields):
    """
    Editable group fields, as sent to `POST /groups` and `PUT /groups/{id}`.

    `nonpana_payable` is not taken from input: it is derived as
    `100 - commission`.
    """

    commission: Decimal = Field(..., ge=0, lt=RATE_CEILING)

    @model_validator(mode="before")
    @classmethod
    def _derive_nonpana_payable(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        try:
            commission = Decimal(str(data.get("commission")))
        except InvalidOperation:
            # Left to field validation to report.
            return data
        if commission.is_finite() and commission < RATE_CEILING:
            data = {**data, "nonpana_payable": RATE_CEILING - commission}
        return data


class Group(_GroupFields):
    """A group as the ledger API returns it."""

    id: int

    def draft(self, **changes: Any) -> GroupDraft:
        """Draft for `PUT /groups/{id}`: this group's fields with `changes` applied."""
        values = self.model_dump(exclude={"id", "nonpana_payable"})
        values.update({k: v for k, v in changes.items() if v is not None})
        return GroupDraft.model_validate(values)


def filter_groups(groups: Iterable[Group], search: str = "") -> List[Group]:
    """Groups whose name contains `search`, ignoring case."""
    needle = (search or "").lower()
    return [g for g in groups if needle in g.groupname.lower()]


__all__ = ["Group", "GroupDraft", "RATE_CEILING", "filter_groups"]
