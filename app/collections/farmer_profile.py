from uuid import NAMESPACE_URL, uuid5

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.mongodb import MongoStore, store_failure
from app.core.timestamps import utc_timestamp
from app.models.farmer_profile import FarmerProfile, FarmerProfileInput


def farmer_profile_id(user_id: str) -> str:
    return uuid5(NAMESPACE_URL, f"farmer-profile:{user_id}").hex


async def get_farmer_profile_from_user_id(
    store: MongoStore, user_id: str
) -> FarmerProfile | None:
    farmer_profile_collection: AsyncIOMotorCollection = store.farmer_profiles
    try:
        response = await farmer_profile_collection.find_one({"user_id": user_id})
        return FarmerProfile.model_validate(response) if response else None
    except PyMongoError as e:
        raise store_failure("get_farmer_profile_from_user_id") from e


async def upsert_farmer_profile(
    store: MongoStore, user_id: str, profile: FarmerProfileInput
) -> FarmerProfile:
    """
    Creates the user's profile or replaces its editable fields in one atomic
    call keyed by `user_id`, so concurrent saves never produce two documents.
    The document id is derived from the user id, which makes the upsert
    target the same document even when two inserts race.
    """
    farmer_profile_collection: AsyncIOMotorCollection = store.farmer_profiles
    now = utc_timestamp()
    fields = profile.model_dump(mode="json", exclude_none=True)
    unset = {
        name: ""
        for name in FarmerProfileInput.model_fields
        if name not in fields
    }
    update = {
        "$set": {**fields, "updated_at": now},
        "$setOnInsert": {"created_at": now},
    }
    if unset:
        update["$unset"] = unset
    try:
        response = await farmer_profile_collection.find_one_and_update(
            {"_id": farmer_profile_id(user_id), "user_id": user_id},
            update,
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
    except DuplicateKeyError:
        # Lost an insert race against the unique index; the document exists now.
        response = await _update_existing(farmer_profile_collection, user_id, update)
    except PyMongoError as e:
        raise store_failure("upsert_farmer_profile") from e
    return FarmerProfile.model_validate(response)


async def _update_existing(
    farmer_profile_collection: AsyncIOMotorCollection, user_id: str, update: dict
) -> dict:
    update = {key: value for key, value in update.items() if key != "$setOnInsert"}
    try:
        return await farmer_profile_collection.find_one_and_update(
            {"user_id": user_id},
            update,
            return_document=ReturnDocument.AFTER,
        )
    except PyMongoError as e:
        raise store_failure("upsert_farmer_profile") from e
