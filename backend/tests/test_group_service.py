"""Tests for groups, memberships and invite codes."""

import pytest
import uuid

from stockroom.exceptions import AccessDenied, Conflict, NotFound
from stockroom.models import Category, Group, GroupMember, Item
from stockroom.schemas.group import GroupCreate
from stockroom.services import group_service


class TestCreateGroup:

    def test_creates_group_owned_by_caller(self, db_session, owner):
        group = group_service.create_group(db_session, owner, GroupCreate(name="Family"))
        assert group.owner_id == owner.id
        assert len(group.invite_code) == 16
        int(group.invite_code, 16)  # hex

    def test_owner_gets_no_membership_row(self, db_session, owner):
        group = group_service.create_group(db_session, owner, GroupCreate(name="Family"))
        assert db_session.query(GroupMember).filter(GroupMember.group_id == group.id).count() == 0

    def test_invite_code_retries_on_collision(self, db_session, sample_group, monkeypatch):
        """A code already used by another group is skipped."""
        values = iter([
            uuid.UUID("0123456789abcdef0000000000000000"),  # collides with sample_group
            uuid.UUID("fedcba98765432100000000000000000"),
        ])
        monkeypatch.setattr(group_service.uuid, "uuid4", lambda: next(values))
        assert group_service.generate_invite_code(db_session) == "fedcba9876543210"

    def test_invite_code_gives_up_after_max_attempts(self, db_session, sample_group, monkeypatch):
        monkeypatch.setattr(
            group_service.uuid, "uuid4",
            lambda: uuid.UUID("0123456789abcdef0000000000000000")
        )
        with pytest.raises(RuntimeError):
            group_service.generate_invite_code(db_session)


class TestJoinGroup:

    def test_join_with_invite_code(self, db_session, outsider, sample_group):
        group = group_service.join_group(db_session, outsider, sample_group.invite_code)
        assert group.id == sample_group.id
        membership = db_session.query(GroupMember).filter(
            GroupMember.group_id == sample_group.id,
            GroupMember.user_id == outsider.id,
        ).first()
        assert membership is not None

    def test_join_twice_conflicts(self, db_session, outsider, sample_group):
        group_service.join_group(db_session, outsider, sample_group.invite_code)
        with pytest.raises(Conflict, match="already a member"):
            group_service.join_group(db_session, outsider, sample_group.invite_code)

    def test_owner_cannot_join_own_group(self, db_session, owner, sample_group):
        with pytest.raises(Conflict):
            group_service.join_group(db_session, owner, sample_group.invite_code)

    def test_concurrent_join_is_conflict(self, db_session, member, sample_group, monkeypatch):
        """A membership inserted after the lookup still reports already a member."""
        monkeypatch.setattr(group_service, "_find_membership", lambda db, group_id, user_id: None)
        with pytest.raises(Conflict, match="already a member"):
            group_service.join_group(db_session, member, sample_group.invite_code)
        # Session is usable again after the failed insert
        assert db_session.query(GroupMember).filter(GroupMember.user_id == member.id).count() == 1

    def test_unknown_code(self, db_session, outsider):
        with pytest.raises(NotFound):
            group_service.join_group(db_session, outsider, "nope")


class TestLeaveGroup:

    def test_member_leaves(self, db_session, member, sample_group):
        group_service.leave_group(db_session, member, sample_group.id)
        assert db_session.query(GroupMember).filter(GroupMember.user_id == member.id).count() == 0

    def test_owner_cannot_leave(self, db_session, owner, sample_group):
        with pytest.raises(Conflict):
            group_service.leave_group(db_session, owner, sample_group.id)

    def test_non_member_cannot_leave(self, db_session, outsider, sample_group):
        with pytest.raises(AccessDenied):
            group_service.leave_group(db_session, outsider, sample_group.id)


class TestDeleteGroup:

    def test_member_cannot_delete(self, db_session, member, sample_group):
        with pytest.raises(AccessDenied):
            group_service.delete_group(db_session, member, sample_group.id)
        assert db_session.query(Group).count() == 1

    def test_delete_cascades(self, db_session, owner, sample_group, group_item, personal_item):
        group_id = sample_group.id
        group_service.delete_group(db_session, owner, group_id)

        assert db_session.query(Group).filter(Group.id == group_id).count() == 0
        assert db_session.query(GroupMember).filter(GroupMember.group_id == group_id).count() == 0
        assert db_session.query(Category).filter(Category.group_id == group_id).count() == 0
        assert db_session.query(Item).filter(Item.group_id == group_id).count() == 0
        # Personal data is untouched
        assert db_session.query(Item).filter(Item.id == personal_item.id).count() == 1


class TestRemoveMember:

    def test_owner_removes_member(self, db_session, owner, member, sample_group):
        membership = db_session.query(GroupMember).filter(GroupMember.user_id == member.id).first()
        group_service.remove_member(db_session, owner, sample_group.id, membership.id)
        assert db_session.query(GroupMember).filter(GroupMember.id == membership.id).count() == 0

    def test_member_cannot_remove(self, db_session, member, sample_group):
        membership = db_session.query(GroupMember).filter(GroupMember.user_id == member.id).first()
        with pytest.raises(AccessDenied):
            group_service.remove_member(db_session, member, sample_group.id, membership.id)

    def test_unknown_member(self, db_session, owner, sample_group):
        with pytest.raises(NotFound):
            group_service.remove_member(db_session, owner, sample_group.id, "missing")


class TestInviteCodes:

    def test_regenerate_invalidates_old_code(self, db_session, owner, sample_group):
        old_code = sample_group.invite_code
        new_code = group_service.regenerate_invite_code(db_session, owner, sample_group.id)

        assert new_code != old_code
        with pytest.raises(NotFound):
            group_service.get_group_by_invite_code(db_session, old_code)
        preview = group_service.get_group_by_invite_code(db_session, new_code)
        assert preview["id"] == sample_group.id

    def test_member_cannot_regenerate(self, db_session, member, sample_group):
        with pytest.raises(AccessDenied):
            group_service.regenerate_invite_code(db_session, member, sample_group.id)

    def test_preview(self, db_session, owner, sample_group):
        preview = group_service.get_group_by_invite_code(db_session, sample_group.invite_code)
        assert preview["name"] == "Share house"
        assert preview["owner_name"] == owner.name
        assert preview["member_count"] == 2


class TestReadGroups:

    def test_get_group_as_owner(self, db_session, owner, sample_group, group_item):
        detail = group_service.get_group(db_session, owner, sample_group.id)
        assert detail["is_owner"] is True
        assert detail["invite_code"] == sample_group.invite_code
        assert len(detail["members"]) == 1
        assert detail["categories"][0]["item_count"] == 1

    def test_get_group_as_member_hides_invite_code(self, db_session, member, sample_group):
        detail = group_service.get_group(db_session, member, sample_group.id)
        assert detail["is_owner"] is False
        assert detail["invite_code"] is None

    def test_get_group_as_outsider(self, db_session, outsider, sample_group):
        with pytest.raises(AccessDenied):
            group_service.get_group(db_session, outsider, sample_group.id)

    def test_get_groups_splits_owned_and_joined(self, db_session, owner, member, sample_group):
        owner_view = group_service.get_groups(db_session, owner)
        assert [g["id"] for g in owner_view["owned"]] == [sample_group.id]
        assert owner_view["joined"] == []
        assert owner_view["owned"][0]["member_count"] == 2

        member_view = group_service.get_groups(db_session, member)
        assert member_view["owned"] == []
        joined = member_view["joined"][0]
        assert joined["owner_name"] == owner.name
        assert joined["invite_code"] is None
        assert joined["member_count"] == 2


class TestInviteCodeRace:
    """A code taken between lookup and commit is replaced with a new one."""

    def _codes(self, monkeypatch, *codes):
        values = iter(codes)
        monkeypatch.setattr(group_service, "generate_invite_code", lambda db: next(values))

    def test_create_retries_after_unique_violation(self, db_session, outsider, sample_group, monkeypatch):
        self._codes(monkeypatch, sample_group.invite_code, "aaaaaaaaaaaaaaaa")
        group = group_service.create_group(db_session, outsider, GroupCreate(name="Dorm"))
        assert group.invite_code == "aaaaaaaaaaaaaaaa"
        assert db_session.query(Group).count() == 2

    def test_regenerate_retries_after_unique_violation(self, db_session, owner, sample_group, monkeypatch):
        other = group_service.create_group(db_session, owner, GroupCreate(name="Office"))
        self._codes(monkeypatch, other.invite_code, "bbbbbbbbbbbbbbbb")
        code = group_service.regenerate_invite_code(db_session, owner, sample_group.id)
        assert code == "bbbbbbbbbbbbbbbb"

    def test_gives_up_with_conflict(self, db_session, outsider, sample_group, monkeypatch):
        monkeypatch.setattr(group_service, "generate_invite_code", lambda db: sample_group.invite_code)
        with pytest.raises(Conflict):
            group_service.create_group(db_session, outsider, GroupCreate(name="Dorm"))
        assert db_session.query(Group).count() == 1
