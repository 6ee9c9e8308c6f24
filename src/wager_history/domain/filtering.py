"""
Search filter and per-type partition of the working record collection.

Both operations are stable: they never reorder records, they only drop the
ones that do not match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from wager_history.domain.models import HistoryRecord
from wager_history.domain.validation import parse_amount


@dataclass(frozen=True)
class TypeBucket:
    """A display table: records booked under `type_id`, titled `label`."""

    key: str
    type_id: int
    label: str


# Fixed display order, independent of the order records arrive in.
DEFAULT_BUCKETS: Tuple[TypeBucket, ...] = (
    TypeBucket("open", 4, "Open"),
    TypeBucket("openPana", 3, "Open Pana"),
    TypeBucket("jodi", 2, "Jodi"),
    TypeBucket("close", 7, "Close"),
    TypeBucket("closePana", 9, "Close Pana"),
)

_NO_MATCH = object()


def _amount_target(amount_query: Optional[str]) -> object:
    if amount_query is None or amount_query == "":
        return None
    parsed = parse_amount(amount_query)
    return _NO_MATCH if parsed is None else parsed


def _matches(record: HistoryRecord, number_query: str, amount_target: object) -> bool:
    if number_query.lower() not in record.number.lower():
        return False
    if amount_target is None:
        return True
    if amount_target is _NO_MATCH:
        return False
    return record.amount == amount_target


def filter_records(
    records: Iterable[HistoryRecord],
    number_query: str = "",
    amount_query: Optional[str] = "",
) -> List[HistoryRecord]:
    """
    Keep records whose number contains `number_query` (case-insensitive)
    and, when `amount_query` is given, whose amount equals it exactly.

    An amount query that is not a number matches nothing.
    """
    target = _amount_target(amount_query)
    return [r for r in records if _matches(r, number_query or "", target)]


def partition_by_type(
    records: Sequence[HistoryRecord],
    buckets: Sequence[TypeBucket] = DEFAULT_BUCKETS,
    number_query: str = "",
    amount_query: Optional[str] = "",
) -> List[Tuple[TypeBucket, List[HistoryRecord]]]:
    """
    Split records into one filtered table per bucket, in bucket order.

    Every bucket is emitted, empty or not.
    """
    return [
        (
            bucket,
            filter_records(
                (r for r in records if r.type_id == bucket.type_id), number_query, amount_query
            ),
        )
        for bucket in buckets
    ]


__all__ = ["TypeBucket", "DEFAULT_BUCKETS", "filter_records", "partition_by_type"]
