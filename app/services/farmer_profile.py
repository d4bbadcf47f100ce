import logging

from app.collections.farmer_profile import (
    get_farmer_profile_from_user_id,
    upsert_farmer_profile,
)
from app.core.exceptions import NotFound
from app.core.mongodb import MongoStore
from app.models.farmer_profile import FarmerProfile, FarmerProfileInput
from app.models.session import SessionClaims
from app.models.user import UserRole
from app.services.authorization import resolve_caller, resolve_caller_with_role

logger = logging.getLogger(__name__)


class FarmerProfileService:
    def __init__(self, store: MongoStore):
        self.store = store

    async def get(self, claims: SessionClaims) -> FarmerProfile:
        user = await resolve_caller(self.store, claims)
        profile = await get_farmer_profile_from_user_id(self.store, user.id)
        if profile is None:
            raise NotFound("Profile not found")
        return profile

    async def save(
        self, claims: SessionClaims, data: FarmerProfileInput
    ) -> FarmerProfile:
        """Creates the caller's profile on first save and updates it afterwards."""
        user = await resolve_caller_with_role(self.store, claims, UserRole.FARMER)
        profile = await upsert_farmer_profile(self.store, user.id, data)
        logger.info("Saved farmer profile %s for user %s", profile.id, user.id)
        return profile
