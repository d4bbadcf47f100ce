from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.exceptions import Conflict
from app.core.mongodb import MongoStore, store_failure
from app.models.category import Category


async def get_categories(store: MongoStore) -> list[Category]:
    category_collection: AsyncIOMotorCollection = store.categories
    try:
        items = category_collection.find({}).sort("name", ASCENDING)
        return [Category.model_validate(item) async for item in items]
    except PyMongoError as e:
        raise store_failure("get_categories") from e


async def get_category_from_slug(store: MongoStore, slug: str) -> Category | None:
    category_collection: AsyncIOMotorCollection = store.categories
    try:
        response = await category_collection.find_one({"slug": slug})
        return Category.model_validate(response) if response else None
    except PyMongoError as e:
        raise store_failure("get_category_from_slug") from e


async def insert_category(store: MongoStore, category: Category) -> Category:
    category_collection: AsyncIOMotorCollection = store.categories
    try:
        payload = category.model_dump(mode="json", exclude_none=True, by_alias=True)
        await category_collection.insert_one(payload)
        return category
    except DuplicateKeyError as e:
        raise Conflict("Category with this name already exists") from e
    except PyMongoError as e:
        raise store_failure("insert_category") from e


async def replace_categories(store: MongoStore, categories: list[Category]) -> int:
    """Drops every category and inserts `categories` in their place."""
    category_collection: AsyncIOMotorCollection = store.categories
    try:
        await category_collection.delete_many({})
        if not categories:
            return 0
        result = await category_collection.insert_many(
            [
                category.model_dump(mode="json", exclude_none=True, by_alias=True)
                for category in categories
            ]
        )
        return len(result.inserted_ids)
    except PyMongoError as e:
        raise store_failure("replace_categories") from e
