"""
Administrative commands that run outside the HTTP surface.

    python -m app.scripts.manage seed-categories
    python -m app.scripts.manage create-admin --name Admin --email admin@example.com
"""

import argparse
import asyncio
import getpass
import logging

from pydantic import ValidationError as PydanticValidationError

from app.collections.user import get_user_from_email, insert_user
from app.core.exceptions import AppError, Conflict, ValidationError
from app.core.mongodb import MongoStore
from app.core.security import hash_password
from app.models.user import SignupRequest, User, UserRole
from app.services.auth import check_password_length
from app.services.categories import CategoryService

logger = logging.getLogger("app.scripts.manage")


async def seed_categories(store: MongoStore) -> int:
    count = await CategoryService(store).seed_defaults()
    logger.info("%d categories created", count)
    return count


async def create_admin(store: MongoStore, name: str, email: str, password: str) -> User:
    """ADMIN accounts are only provisioned here, never through signup."""
    try:
        request = SignupRequest(
            name=name, email=email.strip(), password=password, role=UserRole.ADMIN
        )
    except PydanticValidationError as e:
        raise ValidationError(e.errors()[0]["msg"]) from e
    check_password_length(request.password)

    email = request.email.lower()
    if await get_user_from_email(store, email):
        raise Conflict("Email already in use")
    user = User(
        name=request.name,
        email=email,
        password_hash=await hash_password(request.password),
        role=UserRole.ADMIN,
    )
    await insert_user(store, user)
    logger.info("Created admin %s", user.id)
    return user


async def _run(args: argparse.Namespace) -> None:
    store = MongoStore.from_settings()
    try:
        await store.ensure_indexes()
        if args.command == "seed-categories":
            await seed_categories(store)
        elif args.command == "create-admin":
            password = args.password or getpass.getpass("Password: ")
            await create_admin(store, args.name, args.email, password)
    finally:
        store.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m app.scripts.manage")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("seed-categories", help="Replace categories with the defaults")

    admin_parser = subparsers.add_parser("create-admin", help="Provision an ADMIN user")
    admin_parser.add_argument("--name", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", help="Prompted for when omitted")
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    args = build_parser().parse_args(argv)
    try:
        asyncio.run(_run(args))
    except AppError as e:
        logger.error("%s", e.message)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
