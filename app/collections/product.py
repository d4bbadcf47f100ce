from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from app.core.mongodb import MongoStore, store_failure
from app.core.timestamps import utc_timestamp
from app.models.product import Product


async def get_product_from_id(store: MongoStore, product_id: str) -> Product | None:
    product_collection: AsyncIOMotorCollection = store.products
    try:
        response = await product_collection.find_one({"_id": product_id})
        return Product.model_validate(response) if response else None
    except PyMongoError as e:
        raise store_failure("get_product_from_id") from e


async def get_products_from_farmer_id(store: MongoStore, farmer_id: str) -> list[Product]:
    product_collection: AsyncIOMotorCollection = store.products
    try:
        items = product_collection.find({"farmer_id": farmer_id}).sort(
            "created_at", DESCENDING
        )
        return [Product.model_validate(item) async for item in items]
    except PyMongoError as e:
        raise store_failure("get_products_from_farmer_id") from e


async def insert_product(store: MongoStore, product: Product) -> Product:
    product_collection: AsyncIOMotorCollection = store.products
    try:
        payload = product.model_dump(mode="json", exclude_none=True, by_alias=True)
        await product_collection.insert_one(payload)
        return product
    except PyMongoError as e:
        raise store_failure("insert_product") from e


async def update_product_fields(
    store: MongoStore, product_id: str, farmer_id: str, fields: dict
) -> Product | None:
    """
    Applies `fields` to the product only while it is still owned by
    `farmer_id`. Returns None when no such product exists anymore.
    """
    product_collection: AsyncIOMotorCollection = store.products
    fields = {
        **fields,
        "updated_at": utc_timestamp(),
    }
    try:
        response = await product_collection.find_one_and_update(
            {"_id": product_id, "farmer_id": farmer_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        return Product.model_validate(response) if response else None
    except PyMongoError as e:
        raise store_failure("update_product_fields") from e


async def delete_product(store: MongoStore, product_id: str, farmer_id: str) -> bool:
    product_collection: AsyncIOMotorCollection = store.products
    try:
        result = await product_collection.delete_one(
            {"_id": product_id, "farmer_id": farmer_id}
        )
        return result.deleted_count > 0
    except PyMongoError as e:
        raise store_failure("delete_product") from e
