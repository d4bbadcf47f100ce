"""
Path policy for browser navigation.

`decide` is a pure function over (path, session); `RouteGuardMiddleware`
evaluates it on every request and turns a redirect decision into a 307.
The JSON API is never redirected, it answers with 401 from its own
dependencies instead.
"""

from dataclasses import dataclass
from enum import Enum

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.core.security import decode_access_token, token_from_request
from app.models.session import SessionClaims
from app.models.user import UserRole

LOGIN_PATH = "/login"
DEFAULT_LANDING_PATH = "/dashboard"

PUBLIC_PATHS = frozenset({"/login", "/signup", "/register"})
FARMER_PATH_PREFIX = "/farmer"
PROTECTED_PATH_PREFIXES = ("/dashboard",)


class PathKind(str, Enum):
    PUBLIC = "public"
    FARMER = "farmer-restricted"
    PROTECTED = "protected"
    UNGUARDED = "unguarded"


@dataclass(frozen=True)
class GuardDecision:
    redirect_to: str | None = None

    @property
    def allowed(self) -> bool:
        return self.redirect_to is None


ALLOW = GuardDecision()


def _matches_prefix(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def classify_path(path: str) -> PathKind:
    normalized = path.rstrip("/") or "/"
    if normalized in PUBLIC_PATHS:
        return PathKind.PUBLIC
    if _matches_prefix(normalized, FARMER_PATH_PREFIX):
        return PathKind.FARMER
    if any(_matches_prefix(normalized, prefix) for prefix in PROTECTED_PATH_PREFIXES):
        return PathKind.PROTECTED
    return PathKind.UNGUARDED


def decide(path: str, session: SessionClaims | None) -> GuardDecision:
    kind = classify_path(path)
    if kind is PathKind.UNGUARDED:
        return ALLOW

    is_public = kind is PathKind.PUBLIC
    if session is None and not is_public:
        return GuardDecision(redirect_to=LOGIN_PATH)
    if kind is PathKind.FARMER and session.role != UserRole.FARMER:
        return GuardDecision(redirect_to=DEFAULT_LANDING_PATH)
    if session is not None and is_public:
        return GuardDecision(redirect_to=DEFAULT_LANDING_PATH)
    return ALLOW


class RouteGuardMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if classify_path(path) is PathKind.UNGUARDED:
            return await call_next(request)

        session = decode_access_token(token_from_request(request))
        decision = decide(path, session)
        if decision.allowed:
            return await call_next(request)
        return RedirectResponse(url=decision.redirect_to, status_code=307)
