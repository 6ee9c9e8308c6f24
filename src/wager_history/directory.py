"""
Group directory: list, search, add, edit and delete the groups records belong to.

Like the history desk, every ledger API failure becomes a `Notice`; every
successful change reloads the directory.
"""

from __future__ import annotations

from typing import List, Optional

from wager_history.desk import Notice
from wager_history.domain.errors import CollaboratorError, DuplicateGroupError
from wager_history.domain.groups import Group, GroupDraft, filter_groups
from wager_history.gateway.abstract import GroupAdmin
from wager_history.utils.logging import get_logger

log = get_logger(__name__)

DUPLICATE_NAME_NOTICE = "Group name already exists!"


class GroupDirectory:
    def __init__(self, gateway: GroupAdmin) -> None:
        self.gateway = gateway
        self.groups: List[Group] = []
        self.search = ""
        self.notices: List[Notice] = []

    def drain_notices(self) -> List[Notice]:
        notices, self.notices = self.notices, []
        return notices

    def load(self) -> bool:
        """Reload every group; False when the session is gone or the fetch failed."""
        if not self.gateway.require_authenticated():
            return False
        try:
            self.groups = self.gateway.list_groups()
        except CollaboratorError:
            self.notices.append(Notice("error", "Failed to fetch groups"))
            return False
        log.info("Groups loaded", extra={"groups": len(self.groups)})
        return True

    @property
    def visible(self) -> List[Group]:
        return filter_groups(self.groups, self.search)

    def find(self, group_id: int) -> Optional[Group]:
        return next((g for g in self.groups if g.id == group_id), None)

    def add(self, draft: GroupDraft) -> bool:
        try:
            self.gateway.create_group(draft)
        except DuplicateGroupError:
            self.notices.append(Notice("error", DUPLICATE_NAME_NOTICE))
            return False
        except CollaboratorError:
            self.notices.append(Notice("error", "Something went wrong/Group name already exists!"))
            return False
        self.notices.append(Notice("success", "Group added successfully!"))
        log.info("Group added", extra={"groupname": draft.groupname})
        self.load()
        return True

    def update(self, group_id: int, draft: GroupDraft) -> bool:
        try:
            self.gateway.update_group(group_id, draft)
        except CollaboratorError:
            self.notices.append(Notice("error", "Something went wrong/Group name already exists!"))
            return False
        self.notices.append(Notice("success", "Group updated successfully!"))
        log.info("Group updated", extra={"group_id": group_id})
        self.load()
        return True

    def delete(self, group_id: int) -> bool:
        try:
            self.gateway.delete_group(group_id)
        except CollaboratorError:
            self.notices.append(Notice("error", "Failed to delete group"))
            return False
        self.notices.append(Notice("success", "Group deleted successfully!"))
        log.info("Group deleted", extra={"group_id": group_id})
        self.load()
        return True


__all__ = ["GroupDirectory", "DUPLICATE_NAME_NOTICE"]
