from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.exceptions import Conflict
from app.core.mongodb import MongoStore, store_failure
from app.models.user import User


async def get_user_from_id(store: MongoStore, user_id: str) -> User | None:
    user_collection: AsyncIOMotorCollection = store.users
    try:
        response = await user_collection.find_one({"_id": user_id})
        return User.model_validate(response) if response else None
    except PyMongoError as e:
        raise store_failure("get_user_from_id") from e


async def get_user_from_email(store: MongoStore, email: str) -> User | None:
    user_collection: AsyncIOMotorCollection = store.users
    try:
        item = await user_collection.find_one({"email": email.lower()})
        return User.model_validate(item) if item else None
    except PyMongoError as e:
        raise store_failure("get_user_from_email") from e


async def insert_user(store: MongoStore, user: User) -> User:
    """Inserts a new user. The unique email index turns a race into Conflict."""
    user_collection: AsyncIOMotorCollection = store.users
    try:
        payload = user.model_dump(mode="json", exclude_none=True, by_alias=True)
        await user_collection.insert_one(payload)
        return user
    except DuplicateKeyError as e:
        raise Conflict("Email already in use") from e
    except PyMongoError as e:
        raise store_failure("insert_user") from e
