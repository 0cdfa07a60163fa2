"""Member service for users, roles and groups."""

import logging

from src.core import db_client
from src.core.logging import span
from src.domain.create_models import GroupCreate, UserInvite
from src.domain.user import Group, User, UserRole
from src.models.service_models import AppData


logger = logging.getLogger(__name__)


async def get_user(user_id: str) -> User:
    """Get a user by ID.

    Raises:
        db_client.RecordNotFoundError: If the user does not exist
    """
    record = await db_client.get_record(collection="users", record_id=user_id)
    return User(**record)


async def get_user_by_email(email: str) -> User | None:
    """Get a user by e-mail (case-insensitive), or None."""
    record = await db_client.get_first_record(
        collection="users",
        filter_query=f'email = "{db_client.sanitize_param(email.strip().lower())}"',
    )
    return User(**record) if record else None


async def list_users() -> list[User]:
    """List all users ordered by name."""
    records = await db_client.list_all_records(collection="users", sort="+name")
    return [User(**record) for record in records]


async def _require_admin(actor_id: str) -> User:
    """Guard: the acting user must be an admin."""
    actor = await get_user(actor_id)
    if actor.role != UserRole.ADMIN:
        msg = f"User {actor_id} is not authorized to manage members"
        logger.warning(msg)
        raise PermissionError(msg)
    return actor


async def invite_user(data: UserInvite, *, actor_id: str) -> User:
    """Create a user from an e-mail invite (admin-only).

    The display name defaults to the local part of the e-mail address. No
    password is created here; credentials are handled outside this service.

    Args:
        data: Invite payload (e-mail already normalized to lower case)
        actor_id: ID of the admin sending the invite

    Returns:
        The created user

    Raises:
        PermissionError: If the actor is not an admin
        ValueError: If the e-mail is already registered
    """
    with span("member_service.invite_user"):
        await _require_admin(actor_id)

        # Guard: e-mail must be unique
        if await get_user_by_email(data.email):
            msg = f"E-mail {data.email} is already registered"
            logger.warning(msg)
            raise ValueError(msg)

        record = await db_client.create_record(
            collection="users",
            data={
                "name": data.name or data.email.split("@")[0],
                "email": data.email,
                "role": data.role,
            },
        )
        logger.info("Invited user %s as %s by %s", data.email, data.role, actor_id)
        return User(**record)


async def change_role(user_id: str, role: UserRole, *, actor_id: str) -> User:
    """Change a user's role (admin-only).

    Raises:
        PermissionError: If the actor is not an admin
        db_client.RecordNotFoundError: If the user does not exist
    """
    with span("member_service.change_role"):
        await _require_admin(actor_id)
        record = await db_client.update_record(collection="users", record_id=user_id, data={"role": role})
        logger.info("Changed role of user %s to %s", user_id, role)
        return User(**record)


async def remove_user(user_id: str, *, actor_id: str) -> None:
    """Remove a user and their group memberships (admin-only).

    Tasks the user created keep their ``creator_id``.

    Raises:
        PermissionError: If the actor is not an admin, or removes themselves
        db_client.RecordNotFoundError: If the user does not exist
    """
    with span("member_service.remove_user"):
        await _require_admin(actor_id)
        if user_id == actor_id:
            msg = "Admins cannot remove themselves"
            raise PermissionError(msg)

        await get_user(user_id)
        await db_client.delete_records(
            collection="group_members",
            filter_query=f'user_id = "{db_client.sanitize_param(user_id)}"',
        )
        await db_client.delete_record(collection="users", record_id=user_id)
        logger.info("Removed user %s", user_id)


async def _member_ids(group_id: str) -> list[str]:
    records = await db_client.list_all_records(
        collection="group_members",
        filter_query=f'group_id = "{db_client.sanitize_param(group_id)}"',
    )
    return [str(record["user_id"]) for record in records]


async def _insert_members(group_id: str, member_ids: list[str]) -> None:
    for user_id in dict.fromkeys(member_ids):
        await db_client.create_record(collection="group_members", data={"group_id": group_id, "user_id": user_id})


async def create_group(data: GroupCreate, *, actor_id: str) -> Group:
    """Create a group with optional initial members (admin-only)."""
    with span("member_service.create_group"):
        await _require_admin(actor_id)
        record = await db_client.create_record(collection="user_groups", data={"name": data.name})
        await _insert_members(record["id"], data.member_ids)
        logger.info("Created group %s with %d members", record["id"], len(data.member_ids))
        return Group(id=record["id"], name=record["name"], member_ids=list(dict.fromkeys(data.member_ids)))


async def get_group(group_id: str) -> Group:
    """Get a group with its member IDs.

    Raises:
        db_client.RecordNotFoundError: If the group does not exist
    """
    record = await db_client.get_record(collection="user_groups", record_id=group_id)
    return Group(id=record["id"], name=record["name"], member_ids=await _member_ids(group_id))


async def list_groups() -> list[Group]:
    """List all groups with their member IDs."""
    records = await db_client.list_all_records(collection="user_groups", sort="+name")
    links = await db_client.list_all_records(collection="group_members")

    members: dict[str, list[str]] = {}
    for link in links:
        members.setdefault(str(link["group_id"]), []).append(str(link["user_id"]))

    return [Group(id=r["id"], name=r["name"], member_ids=members.get(str(r["id"]), [])) for r in records]


async def delete_group(group_id: str, *, actor_id: str) -> None:
    """Delete a group and its memberships (admin-only).

    Tasks pointing at the group keep their ``group_id`` and become visible to
    admins only.
    """
    with span("member_service.delete_group"):
        await _require_admin(actor_id)
        await db_client.get_record(collection="user_groups", record_id=group_id)
        await db_client.delete_records(
            collection="group_members",
            filter_query=f'group_id = "{db_client.sanitize_param(group_id)}"',
        )
        await db_client.delete_record(collection="user_groups", record_id=group_id)
        logger.info("Deleted group %s", group_id)


async def set_group_members(group_id: str, member_ids: list[str], *, actor_id: str) -> Group:
    """Replace the full member list of a group (admin-only)."""
    with span("member_service.set_group_members"):
        await _require_admin(actor_id)
        group = await get_group(group_id)

        if group.member_ids:
            await db_client.delete_records(
                collection="group_members",
                filter_query=f'group_id = "{db_client.sanitize_param(group_id)}"',
            )
        await _insert_members(group_id, member_ids)

        logger.info("Set %d members on group %s", len(member_ids), group_id)
        return group.model_copy(update={"member_ids": list(dict.fromkeys(member_ids))})


async def get_app_data(user_id: str) -> AppData:
    """Everything a client loads after sign-in: people, groups, visible tasks and preferences.

    Raises:
        db_client.RecordNotFoundError: If the user does not exist
    """
    from src.modules.contacts import service as contact_service
    from src.modules.tasks import service as task_service
    from src.services import preferences_service

    with span("member_service.get_app_data"):
        user = await get_user(user_id)

        return AppData(
            user=user,
            users=await list_users(),
            contacts=await contact_service.list_contacts(),
            groups=await list_groups(),
            tasks=await task_service.list_visible_tasks(user_id),
            preferences=await preferences_service.get_preferences(),
        )
