"""Unit tests for member_service (users, roles and groups)."""

import pytest

from src.core.db_client import RecordNotFoundError
from src.domain.create_models import GroupCreate, UserInvite
from src.domain.user import UserRole
from src.modules.members import service as member_service


@pytest.mark.unit
class TestInviteUser:
    """Tests for invite_user."""

    async def test_invite_creates_member(self, patched_db, admin_user):
        user = await member_service.invite_user(UserInvite(email="New.Person@Example.com"), actor_id=admin_user["id"])

        assert user.email == "new.person@example.com"
        assert user.name == "new.person"
        assert user.role == UserRole.MEMBER

    async def test_invite_stores_no_password(self, patched_db, admin_user):
        user = await member_service.invite_user(UserInvite(email="x@example.com"), actor_id=admin_user["id"])

        record = await patched_db.get_record("users", user.id)
        assert not any("password" in key for key in record)

    async def test_duplicate_email_rejected(self, patched_db, admin_user):
        with pytest.raises(ValueError, match="already registered"):
            await member_service.invite_user(UserInvite(email="ANA@example.com"), actor_id=admin_user["id"])

    async def test_member_cannot_invite(self, patched_db, member_user):
        with pytest.raises(PermissionError, match="not authorized"):
            await member_service.invite_user(UserInvite(email="x@example.com"), actor_id=member_user["id"])


@pytest.mark.unit
class TestRolesAndRemoval:
    async def test_change_role(self, patched_db, admin_user, member_user):
        user = await member_service.change_role(member_user["id"], UserRole.ADMIN, actor_id=admin_user["id"])

        assert user.role == UserRole.ADMIN

    async def test_member_cannot_change_roles(self, patched_db, admin_user, member_user):
        with pytest.raises(PermissionError):
            await member_service.change_role(admin_user["id"], UserRole.MEMBER, actor_id=member_user["id"])

    async def test_remove_user_drops_memberships(self, patched_db, admin_user, member_user):
        group = await member_service.create_group(
            GroupCreate(name="Ops", member_ids=[member_user["id"], admin_user["id"]]),
            actor_id=admin_user["id"],
        )

        await member_service.remove_user(member_user["id"], actor_id=admin_user["id"])

        with pytest.raises(RecordNotFoundError):
            await member_service.get_user(member_user["id"])
        assert (await member_service.get_group(group.id)).member_ids == [admin_user["id"]]

    async def test_admin_cannot_remove_self(self, patched_db, admin_user):
        with pytest.raises(PermissionError):
            await member_service.remove_user(admin_user["id"], actor_id=admin_user["id"])

    async def test_list_users_sorted(self, patched_db, admin_user, member_user):
        assert [u.name for u in await member_service.list_users()] == ["Ana Admin", "Bruno Member"]


@pytest.mark.unit
class TestGroups:
    async def test_create_group_dedupes_members(self, patched_db, admin_user, member_user):
        group = await member_service.create_group(
            GroupCreate(name="Ops", member_ids=[member_user["id"], member_user["id"]]),
            actor_id=admin_user["id"],
        )

        assert group.member_ids == [member_user["id"]]
        assert (await member_service.get_group(group.id)).member_ids == [member_user["id"]]

    async def test_set_members_replaces_list(self, patched_db, admin_user, member_user):
        group = await member_service.create_group(
            GroupCreate(name="Ops", member_ids=[member_user["id"]]), actor_id=admin_user["id"]
        )

        updated = await member_service.set_group_members(group.id, [admin_user["id"]], actor_id=admin_user["id"])

        assert updated.member_ids == [admin_user["id"]]
        groups = await member_service.list_groups()
        assert [g.member_ids for g in groups] == [[admin_user["id"]]]

    async def test_delete_group(self, patched_db, admin_user, member_user):
        group = await member_service.create_group(
            GroupCreate(name="Ops", member_ids=[member_user["id"]]), actor_id=admin_user["id"]
        )

        await member_service.delete_group(group.id, actor_id=admin_user["id"])

        assert await member_service.list_groups() == []
        assert await patched_db.list_all_records("group_members") == []

    async def test_member_cannot_create_group(self, patched_db, member_user):
        with pytest.raises(PermissionError):
            await member_service.create_group(GroupCreate(name="Ops"), actor_id=member_user["id"])


@pytest.mark.unit
class TestAppData:
    async def test_bundle(self, patched_db, admin_user, member_user, contact):
        data = await member_service.get_app_data(member_user["id"])

        assert data.user.id == member_user["id"]
        assert len(data.users) == 2
        assert [c.name for c in data.contacts] == ["Carla Contact"]
        assert data.tasks == []
        assert data.groups == []

    async def test_unknown_user(self, patched_db):
        with pytest.raises(RecordNotFoundError):
            await member_service.get_app_data("404")
