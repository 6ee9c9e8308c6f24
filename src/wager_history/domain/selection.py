"""
Bulk-delete selection over the visible history records.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List


class SelectionSet:
    """
    Ordered set of record ids marked for deletion.

    Ids that drop out of view after a new filter or fetch are kept; only
    `select_all` and `clear` rebuild the set wholesale.
    """

    def __init__(self) -> None:
        self._ids: List[int] = []

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._ids

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> List[int]:
        return list(self._ids)

    def is_selected(self, record_id: int) -> bool:
        return record_id in self._ids

    def mark(self, record_id: int, checked: bool) -> None:
        """Set the checkbox state of a single record."""
        if checked and record_id not in self._ids:
            self._ids.append(record_id)
        elif not checked:
            self._ids = [i for i in self._ids if i != record_id]

    def toggle(self, record_id: int) -> bool:
        """Flip a single record; returns the new state."""
        checked = not self.is_selected(record_id)
        self.mark(record_id, checked)
        return checked

    def select_all(self, visible_ids: Iterable[int]) -> None:
        self._ids = list(dict.fromkeys(visible_ids))

    def clear(self) -> None:
        self._ids = []

    def all_selected(self, visible_ids: Iterable[int]) -> bool:
        """Derived "Select All" checkbox state for the current view."""
        visible = list(visible_ids)
        return len(visible) > 0 and len(self._ids) == len(visible)


__all__ = ["SelectionSet"]
