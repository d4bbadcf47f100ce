import logging

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo import ASCENDING

from app.core.config import settings
from app.core.exceptions import InternalError

logger = logging.getLogger(__name__)

USER_COLLECTION = "user"
PRODUCT_COLLECTION = "product"
FARMER_PROFILE_COLLECTION = "farmer_profile"
CATEGORY_COLLECTION = "category"


class MongoStore:
    """
    Owns the MongoDB client for the lifetime of the application.
    Created once at startup and handed to every service that needs it.
    """

    def __init__(self, client: AsyncIOMotorClient, db_name: str):
        self._client = client
        self.db_name = db_name
        self._database: AsyncIOMotorDatabase = client[db_name]

    @classmethod
    def from_settings(cls) -> "MongoStore":
        mongo_uri = settings.MONGO_DIRECT_URI or settings.MONGO_URI
        client = AsyncIOMotorClient(mongo_uri, uuidRepresentation="standard")
        return cls(client, settings.MONGO_DB_NAME)

    async def ensure_indexes(self) -> None:
        await self.users.create_index([("email", ASCENDING)], unique=True)
        await self.categories.create_index([("slug", ASCENDING)], unique=True)
        await self.farmer_profiles.create_index(
            [("user_id", ASCENDING)], unique=True
        )
        await self.products.create_index(
            [("farmer_id", ASCENDING), ("created_at", ASCENDING)]
        )
        logger.info("MongoDB indexes ensured on '%s'", self.db_name)

    def close(self) -> None:
        self._client.close()

    @property
    def users(self) -> AsyncIOMotorCollection:
        return self._database[USER_COLLECTION]

    @property
    def products(self) -> AsyncIOMotorCollection:
        return self._database[PRODUCT_COLLECTION]

    @property
    def farmer_profiles(self) -> AsyncIOMotorCollection:
        return self._database[FARMER_PROFILE_COLLECTION]

    @property
    def categories(self) -> AsyncIOMotorCollection:
        return self._database[CATEGORY_COLLECTION]


def store_failure(operation: str) -> InternalError:
    """
    Logs the store fault currently being handled and returns the generic
    error the caller should raise in its place.
    """
    logger.exception("MongoDB operation failed (%s)", operation)
    return InternalError()
