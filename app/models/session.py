from datetime import datetime

from pydantic import BaseModel, Field

from app.models.user import UserPublic, UserRole


class SessionClaims(BaseModel):
    """Decoded session token. `role` is the snapshot taken at login."""

    sub: str = Field(description="Identifier of the authenticated user")
    role: UserRole = Field(description="Role copied from the user at login time")
    iat: datetime | None = None
    exp: datetime


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserPublic
