from fastapi import APIRouter, Depends

from app.api.dependencies import get_auth_service
from app.core.security import verify_jwt
from app.models.session import SessionClaims
from app.services.auth import AuthService

router = APIRouter(tags=["Pages"])


@router.get("/dashboard")
async def dashboard(
    claims: SessionClaims = Depends(verify_jwt),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Default landing page after login, guarded by the route guard."""
    user = await auth_service.current_user(claims)
    return {"message": f"Welcome back, {user.name}!", "role": user.role}
