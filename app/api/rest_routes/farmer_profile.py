from fastapi import APIRouter, Depends

from app.api.dependencies import get_farmer_profile_service
from app.core.security import verify_jwt
from app.models.farmer_profile import FarmerProfile, FarmerProfileInput
from app.models.session import SessionClaims
from app.services.farmer_profile import FarmerProfileService

router = APIRouter(prefix="/farmer/profile", tags=["Farmer Profile"])


@router.get(
    "",
    response_model=FarmerProfile,
    summary="Get the caller's farmer profile",
    response_model_exclude_none=True,
)
async def get_farmer_profile(
    claims: SessionClaims = Depends(verify_jwt),
    profile_service: FarmerProfileService = Depends(get_farmer_profile_service),
):
    return await profile_service.get(claims)


@router.post(
    "",
    response_model=FarmerProfile,
    summary="Create or Update the caller's farmer profile",
    response_model_exclude_none=True,
)
async def save_farmer_profile(
    profile: FarmerProfileInput,
    claims: SessionClaims = Depends(verify_jwt),
    profile_service: FarmerProfileService = Depends(get_farmer_profile_service),
):
    """
    Upserts the profile keyed by the caller's identity. Re-submitting the same
    form updates the single existing profile.
    """
    return await profile_service.save(claims, profile)
