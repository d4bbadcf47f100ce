import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from fastapi import Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.security import OAuth2PasswordBearer
from fastapi.security.utils import get_authorization_scheme_param
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import Unauthorized
from app.models.session import SessionClaims
from app.models.user import User

from .config import settings

ALGORITHM = "HS256"

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False
)

# Compared against when no stored hash exists so that a missing account
# costs the same as a wrong password. Same cost factor as real hashes.
_DUMMY_PASSWORD_HASH = bcrypt.hashpw(
    b"fresh-harvest", bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
)


def _hash_password_sync(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _check_password_sync(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash or a password bcrypt refuses (over 72 bytes).
        return False


async def hash_password(password: str) -> str:
    return await run_in_threadpool(_hash_password_sync, password)


async def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        await run_in_threadpool(
            _check_password_sync, password, _DUMMY_PASSWORD_HASH.decode("utf-8")
        )
        return False
    return await run_in_threadpool(_check_password_sync, password, password_hash)


def create_access_token(user: User) -> str:
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": user.id,
        "role": user.role.value,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str | None) -> SessionClaims | None:
    """Returns the session carried by `token`, or None if it is not valid."""
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
        return SessionClaims.model_validate(payload)
    except jwt.ExpiredSignatureError:
        logger.debug("Rejected expired session token")
        return None
    except (jwt.PyJWTError, PydanticValidationError):
        return None


def token_from_request(request: Request, bearer_token: str | None = None) -> str | None:
    """Bearer header wins over the session cookie."""
    if bearer_token is None:
        scheme, param = get_authorization_scheme_param(
            request.headers.get("Authorization")
        )
        if scheme.lower() == "bearer" and param:
            bearer_token = param
    return bearer_token or request.cookies.get(settings.SESSION_COOKIE_NAME)


async def verify_jwt(
    request: Request, token: str | None = Depends(oauth2_scheme)
) -> SessionClaims:
    claims = decode_access_token(token_from_request(request, token))
    if claims is None:
        raise Unauthorized("Could not validate credentials")
    return claims
