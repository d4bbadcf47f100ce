import re
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """
    Lower-cases the name, collapses every run of non-alphanumeric characters
    into a single '-' and strips leading/trailing separators.
    """
    return _NON_ALPHANUMERIC.sub("-", name.lower()).strip("-")


class Category(BaseModel):
    id: str = Field(
        default_factory=lambda: uuid4().hex,
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
    )
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CategoryCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
