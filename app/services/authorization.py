import logging

from app.collections.user import get_user_from_id
from app.core.exceptions import Unauthorized
from app.core.mongodb import MongoStore
from app.models.session import SessionClaims
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


async def resolve_caller(store: MongoStore, claims: SessionClaims) -> User:
    """
    Loads the user behind a session from the store. Role checks use the
    stored record, never the role claim inside the token.
    """
    user = await get_user_from_id(store, claims.sub)
    if user is None:
        logger.warning("Session subject %s no longer resolves to a user", claims.sub)
        raise Unauthorized()
    if user.role != claims.role:
        logger.info(
            "Session role %s for user %s is stale, stored role is %s",
            claims.role.value,
            user.id,
            user.role.value,
        )
    return user


def require_role(user: User, *roles: UserRole) -> User:
    if user.role not in roles:
        raise Unauthorized()
    return user


async def resolve_caller_with_role(
    store: MongoStore, claims: SessionClaims, *roles: UserRole
) -> User:
    return require_role(await resolve_caller(store, claims), *roles)
