from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserRole(str, Enum):
    FARMER = "FARMER"
    CONSUMER = "CONSUMER"
    ADMIN = "ADMIN"


class User(BaseModel):
    id: str = Field(
        default_factory=lambda: uuid4().hex,
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
    )
    name: str = Field(...)
    email: str = Field(...)
    password_hash: Optional[str] = Field(
        default=None,
        description="bcrypt hash, absent for identities provisioned without credentials",
    )
    role: UserRole = Field(default=UserRole.CONSUMER)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class UserPublic(BaseModel):
    """User as it is exposed over HTTP, never carrying the password hash."""

    id: str = Field(
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
    )
    name: str
    email: str
    role: UserRole
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
        )


class SignupRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    role: UserRole = Field(default=UserRole.CONSUMER)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1)
