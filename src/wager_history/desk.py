"""
History desk: the controller behind the history screen.

Holds the working record collection for one (game, date, group) scope, the
search filters, the bulk-delete selection and the reference data, and turns
every ledger API failure into a user-facing `Notice` instead of an exception.

Usage:
    from wager_history.desk import HistoryDesk

    desk = HistoryDesk(gateway, context)
    desk.load_reference_data()
    desk.select(game_id=3, group_id=2)
    for bucket, records in desk.tables:
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Literal, Optional, Sequence, Tuple

from wager_history.domain.edit_session import BUSY_NOTICE, EditSession, SubmitResult, SubmitStatus
from wager_history.domain.errors import CollaboratorError
from wager_history.domain.filtering import (
    DEFAULT_BUCKETS,
    TypeBucket,
    filter_records,
    partition_by_type,
)
from wager_history.domain.groups import Group
from wager_history.domain.models import DeskContext, GameOption, HistoryRecord, TypeOption
from wager_history.domain.selection import SelectionSet
from wager_history.gateway.abstract import LedgerGateway
from wager_history.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class Notice:
    level: Literal["success", "error", "info"]
    message: str


class HistoryDesk:
    def __init__(
        self,
        gateway: LedgerGateway,
        context: DeskContext,
        buckets: Sequence[TypeBucket] = DEFAULT_BUCKETS,
    ) -> None:
        self.gateway = gateway
        self.context = context
        self.buckets: Tuple[TypeBucket, ...] = tuple(buckets)

        self.records: List[HistoryRecord] = []
        self.types: List[TypeOption] = []
        self.games: List[GameOption] = []
        self.groups: List[Group] = []

        self.game: Optional[GameOption] = None
        self.business_date: date = date.today()
        self.group: Optional[Group] = None

        self.number_query = ""
        self.amount_query = ""
        self.selection = SelectionSet()
        self.loading = False
        self.notices: List[Notice] = []

    # -- notices -------------------------------------------------------

    def _notify(self, level: Literal["success", "error", "info"], message: str) -> None:
        self.notices.append(Notice(level, message))

    def drain_notices(self) -> List[Notice]:
        notices, self.notices = self.notices, []
        return notices

    # -- reference data ------------------------------------------------

    def load_reference_data(self) -> bool:
        """
        Fetch games, bet types and the user's groups.

        Each list fails independently; returns False only when the auth gate
        says the session is gone.
        """
        if not self.gateway.require_authenticated():
            return False
        try:
            self.groups = self.gateway.fetch_user_groups(self.context.user_id)
        except CollaboratorError:
            self._notify("error", "Failed to load data")
        try:
            self.games = self.gateway.fetch_games()
        except CollaboratorError:
            self._notify("error", "Failed to fetch games")
        try:
            self.types = self.gateway.fetch_type_options()
        except CollaboratorError:
            self._notify("error", "Failed to fetch types")
        log.info(
            "Reference data loaded",
            extra={"games": len(self.games), "types": len(self.types), "groups": len(self.groups)},
        )
        return True

    # -- scope and fetch -----------------------------------------------

    def select(
        self,
        game_id: Optional[int] = None,
        business_date: Optional[date] = None,
        group_id: Optional[int] = None,
    ) -> bool:
        """
        Change the (game, date, group) scope; refreshes once all three are set.

        Ids that do not match a loaded game or group leave that part unset.
        """
        if game_id is not None:
            self.game = next((g for g in self.games if g.id == game_id), None)
        if business_date is not None:
            self.business_date = business_date
        if group_id is not None:
            self.group = next((g for g in self.groups if g.id == group_id), None)
        if self.game is None or self.group is None:
            return False
        return self.refresh()

    def refresh(self) -> bool:
        """Replace the working collection with a fresh fetch for the current scope."""
        if self.game is None or self.group is None:
            return False
        if not self.gateway.require_authenticated():
            return False
        self.loading = True
        try:
            self.records = self.gateway.fetch_records(
                self.context.user_id, self.game.id, self.business_date, self.group.id
            )
        except CollaboratorError:
            self._notify("error", "Failed to fetch history")
            return False
        finally:
            self.loading = False
        log.info(
            "History refreshed",
            extra={
                "records": len(self.records),
                "game_id": self.game.id,
                "group_id": self.group.id,
                "date": self.business_date.isoformat(),
            },
        )
        return True

    # -- filters and tables --------------------------------------------

    def set_filters(
        self, number_query: Optional[str] = None, amount_query: Optional[str] = None
    ) -> None:
        if number_query is not None:
            self.number_query = number_query
        if amount_query is not None:
            self.amount_query = amount_query

    @property
    def visible_records(self) -> List[HistoryRecord]:
        return filter_records(self.records, self.number_query, self.amount_query)

    @property
    def visible_ids(self) -> List[int]:
        return [r.id for r in self.visible_records]

    @property
    def tables(self) -> List[Tuple[TypeBucket, List[HistoryRecord]]]:
        return partition_by_type(self.records, self.buckets, self.number_query, self.amount_query)

    # -- selection -----------------------------------------------------

    @property
    def all_selected(self) -> bool:
        return self.selection.all_selected(self.visible_ids)

    def set_select_all(self, checked: bool) -> None:
        if checked:
            self.selection.select_all(self.visible_ids)
        else:
            self.selection.clear()

    def toggle_selection(self, record_id: int) -> bool:
        return self.selection.toggle(record_id)

    # -- edit ----------------------------------------------------------

    def find(self, record_id: int) -> Optional[HistoryRecord]:
        return next((r for r in self.records if r.id == record_id), None)

    def begin_edit(self, record_id: int) -> EditSession:
        record = self.find(record_id)
        if record is None:
            raise KeyError(f"record {record_id} is not in the current view")
        return EditSession.start(record, types=self.types, user_id=self.context.user_id)

    def submit_edit(self, session: EditSession) -> SubmitResult:
        """Submit an edit; a no-op returning BUSY while another request is in flight."""
        if self.loading:
            return SubmitResult(SubmitStatus.BUSY, notice=BUSY_NOTICE)
        self.loading = True
        try:
            result = session.submit(self.gateway)
        finally:
            self.loading = False
        if result.notice:
            self._notify("success" if result.ok else "error", result.notice)
        if result.ok:
            self.refresh()
        return result

    # -- delete --------------------------------------------------------

    def delete_record(self, record_id: int) -> bool:
        if self.loading:
            return False
        self.loading = True
        try:
            self.gateway.submit_delete([record_id])
        except CollaboratorError:
            self._notify("error", "Failed to delete record")
            return False
        finally:
            self.loading = False
        self._notify("success", "Record deleted successfully")
        log.info("Record deleted", extra={"record_id": record_id})
        self.refresh()
        return True

    def delete_selected(self) -> bool:
        """
        Delete every selected record in one request.

        No-op while another request is in flight or when nothing is selected.
        """
        ids = self.selection.ids
        if not ids or self.loading:
            return False
        self.loading = True
        try:
            self.gateway.submit_delete(ids)
        except CollaboratorError:
            self._notify("error", "Failed to delete selected records")
            return False
        finally:
            self.loading = False
        self._notify("success", "Records deleted successfully")
        log.info("Records deleted", extra={"record_ids": ids, "count": len(ids)})
        self.selection.clear()
        self.refresh()
        return True


__all__ = ["Notice", "HistoryDesk"]
