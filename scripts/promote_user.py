#!/usr/bin/env python3
"""Admin script to create or promote users by e-mail.

The HTTP API only lets admins manage users, so the first admin is created here.

Usage:
    python scripts/promote_user.py <email> [--role admin|member] [--name NAME]
    python scripts/promote_user.py --list
"""

import asyncio
import logging
import sys

from src.core import db_client
from src.core.db_client import sanitize_param
from src.domain.user import UserRole, validate_email


logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


async def list_users() -> None:
    """List all users with their roles."""
    users = await db_client.list_all_records(collection="users", sort="+name")

    for user in users:
        logger.info(f"{user['email']} - {user['name']} ({user['role']})")


async def promote_user(email: str, role: str = UserRole.ADMIN, name: str | None = None) -> None:
    """Set a user's role, creating the user when the e-mail is unknown.

    Args:
        email: E-mail of the user
        role: Role to assign (admin or member)
        name: Display name for a newly created user
    """
    email = validate_email(email)
    user = await db_client.get_first_record(
        collection="users",
        filter_query=f'email = "{sanitize_param(email)}"',
    )

    if not user:
        await db_client.create_record(
            collection="users",
            data={"name": name or email.split("@")[0], "email": email, "role": role},
        )
        logger.info(f"Created {email} as {role}")
        return

    if user["role"] != role:
        await db_client.update_record(collection="users", record_id=user["id"], data={"role": role})
    logger.info(f"{email} is now {role}")


def print_usage() -> None:
    """Print usage information."""
    logger.info(__doc__)


def _option(args: list[str], flag: str) -> str | None:
    if flag not in args:
        return None
    index = args.index(flag)
    if index + 1 >= len(args):
        sys.exit(1)
    return args[index + 1]


async def main() -> None:
    """Main entry point."""
    args = sys.argv[1:]

    if not args or "--help" in args or "-h" in args:
        print_usage()
        return

    await db_client.init_db()

    try:
        if "--list" in args:
            await list_users()
            return

        role = _option(args, "--role") or UserRole.ADMIN
        if role not in [UserRole.ADMIN, UserRole.MEMBER]:
            sys.exit(1)

        await promote_user(args[0], role, _option(args, "--name"))
    finally:
        await db_client.close_connection()


if __name__ == "__main__":
    asyncio.run(main())
