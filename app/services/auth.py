import logging

from app.collections.user import get_user_from_email, insert_user
from app.core.config import settings
from app.core.exceptions import AuthenticationError, Conflict, ValidationError
from app.core.mongodb import MongoStore
from app.core.security import create_access_token, hash_password, verify_password
from app.models.session import SessionClaims, Token
from app.models.user import LoginRequest, SignupRequest, User, UserPublic, UserRole
from app.services.authorization import resolve_caller

logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72


def check_password_length(password: str) -> None:
    """bcrypt only accepts passwords up to 72 bytes."""
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError("Password is too long")


class AuthService:
    """Signup, credential exchange and current-user lookup."""

    def __init__(self, store: MongoStore):
        self.store = store

    async def signup(self, request: SignupRequest) -> UserPublic:
        if request.role == UserRole.ADMIN and not settings.ALLOW_ADMIN_SIGNUP:
            raise ValidationError("Invalid role selected")
        check_password_length(request.password)

        email = request.email.lower()
        if await get_user_from_email(self.store, email):
            raise Conflict("Email already in use")

        user = User(
            name=request.name,
            email=email,
            password_hash=await hash_password(request.password),
            role=request.role,
        )
        await insert_user(self.store, user)
        logger.info("Created user %s with role %s", user.id, user.role.value)
        return UserPublic.from_user(user)

    async def login(self, request: LoginRequest) -> Token:
        """
        Exchanges credentials for a session token. An unknown email, an
        account without a password and a wrong password all fail the same way.
        """
        user = await get_user_from_email(self.store, request.email)
        password_hash = user.password_hash if user else None
        if not await verify_password(request.password, password_hash) or user is None:
            raise AuthenticationError()

        return Token(
            access_token=create_access_token(user),
            user=UserPublic.from_user(user),
        )

    async def current_user(self, claims: SessionClaims) -> UserPublic:
        return UserPublic.from_user(await resolve_caller(self.store, claims))
