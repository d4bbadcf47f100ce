from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from app.api.dependencies import get_auth_service
from app.core.config import settings
from app.core.security import verify_jwt
from app.models.session import SessionClaims, Token
from app.models.user import LoginRequest, SignupRequest, UserPublic
from app.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignupResponse(BaseModel):
    message: str
    user: UserPublic


class MessageResponse(BaseModel):
    message: str


@router.post(
    "/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED
)
async def signup(
    request_data: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Registers a new user. Role defaults to CONSUMER when omitted.
    """
    user = await auth_service.signup(request_data)
    return SignupResponse(message="User created successfully", user=user)


@router.post("/login", response_model=Token)
async def login(
    login_data: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Exchanges email and password for a session token. The token is returned
    in the body and also set as an http-only cookie for browser navigation.
    """
    token = await auth_service.login(login_data)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token.access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
    )
    return token


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME)
    return MessageResponse(message="Logged out")


@router.get("/user", response_model=UserPublic)
async def get_current_user(
    claims: SessionClaims = Depends(verify_jwt),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Retrieves the currently authenticated user's information.
    """
    return await auth_service.current_user(claims)
