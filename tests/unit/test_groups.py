from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from wager_history.desk import Notice
from wager_history.directory import DUPLICATE_NAME_NOTICE, GroupDirectory
from wager_history.domain.groups import Group, GroupDraft


class TestGroupDraft:
    def test_nonpana_payable_is_what_commission_leaves(self):
        draft = GroupDraft(groupname="X", commission=10)
        assert draft.nonpana_payable == Decimal("90")

    def test_nonpana_payable_input_is_overridden(self):
        draft = GroupDraft(groupname="X", commission="12.5", nonpana_payable=5)
        assert draft.nonpana_payable == Decimal("87.5")
        assert draft.to_wire()["nonpana_payable"] == 87.5

    @pytest.mark.parametrize("commission", [100, 150, -1, "abc"])
    def test_commission_must_be_below_one_hundred(self, commission):
        with pytest.raises(ValidationError) as excinfo:
            GroupDraft(groupname="X", commission=commission)
        assert excinfo.value.errors()[0]["loc"] == ("commission",)

    def test_commission_is_required(self):
        with pytest.raises(ValidationError):
            GroupDraft(groupname="X")

    def test_existing_group_keeps_server_rates(self):
        group = Group(id=1, groupname="Legacy", commission=5, nonpana_payable=80)
        assert group.nonpana_payable == Decimal("80")

    def test_draft_from_group_applies_changes_and_rederives(self):
        group = Group(id=1, groupname="North", commission=5, nonpana_payable=80, pana_payable=140)

        draft = group.draft(commission=20, groupname=None)

        assert draft.groupname == "North"
        assert draft.commission == Decimal("20")
        assert draft.nonpana_payable == Decimal("80")
        assert draft.pana_payable == Decimal("140")


@pytest.fixture
def directory(fake_gateway) -> GroupDirectory:
    directory = GroupDirectory(fake_gateway)
    assert directory.load()
    return directory


class TestGroupDirectory:
    def test_load_and_search(self, directory):
        directory.search = "SOUTH"
        assert [g.id for g in directory.visible] == [2]
        assert directory.find(1).groupname == "North Branch"

    def test_load_failure_and_auth_gate(self, fake_gateway):
        fake_gateway.fail_on.add("list_groups")
        directory = GroupDirectory(fake_gateway)
        assert directory.load() is False
        assert directory.drain_notices() == [Notice("error", "Failed to fetch groups")]

        fake_gateway.authenticated = False
        assert directory.load() is False
        assert directory.notices == []

    def test_add_reloads(self, directory, fake_gateway):
        assert directory.add(GroupDraft(groupname="East", commission=3)) is True

        assert [g.groupname for g in directory.groups][-1] == "East"
        assert directory.drain_notices() == [Notice("success", "Group added successfully!")]
        assert fake_gateway.operations().count("list_groups") == 2

    def test_add_duplicate_name(self, directory):
        assert directory.add(GroupDraft(groupname="North Branch", commission=3)) is False
        assert directory.drain_notices() == [Notice("error", DUPLICATE_NAME_NOTICE)]

    def test_add_failure(self, directory, fake_gateway):
        fake_gateway.fail_on.add("create_group")
        assert directory.add(GroupDraft(groupname="East", commission=3)) is False
        assert directory.drain_notices()[0].level == "error"

    def test_update_and_delete(self, directory, fake_gateway):
        draft = directory.find(2).draft(commission=15)

        assert directory.update(2, draft) is True
        assert directory.find(2).nonpana_payable == Decimal("85")

        assert directory.delete(1) is True
        assert [g.id for g in directory.groups] == [2]
        assert [n.message for n in directory.drain_notices()] == [
            "Group updated successfully!",
            "Group deleted successfully!",
        ]

    def test_delete_failure(self, directory, fake_gateway):
        fake_gateway.fail_on.add("delete_group")
        assert directory.delete(1) is False
        assert directory.drain_notices() == [Notice("error", "Failed to delete group")]
