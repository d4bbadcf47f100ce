from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)

from app.core.timestamps import format_timestamp


class FarmingMethod(str, Enum):
    """Enumeration of the farming practices a farm can declare."""

    ORGANIC = "Organic"
    CONVENTIONAL = "Conventional"
    HYDROPONIC = "Hydroponic"
    PERMACULTURE = "Permaculture"
    BIODYNAMIC = "Biodynamic"
    SUSTAINABLE = "Sustainable"
    OTHER = "Other"


class Coordinates(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class Address(BaseModel):
    """Postal address of the farm."""

    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    country: str = Field(min_length=1)
    coordinates: Optional[Coordinates] = None


class ContactInfo(BaseModel):
    phone: str = Field(min_length=1)
    email: str = Field(min_length=1)
    website: Optional[str] = None


class Certification(BaseModel):
    name: str = Field(min_length=1)
    issued_by: str = Field(min_length=1)
    issued_date: date
    expiry_date: Optional[date] = None
    image: Optional[str] = None


class SocialMedia(BaseModel):
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None
    youtube: Optional[str] = None


class FarmerProfileInput(BaseModel):
    """Editable part of a farmer profile, as submitted by the profile form."""

    model_config = ConfigDict(extra="forbid")

    farm_name: str = Field(min_length=1, description="Public name of the farm.")
    description: str = Field(min_length=1)
    profile_image: str = Field(min_length=1, description="URL of the profile image.")
    cover_image: Optional[str] = None
    address: Address
    contact_info: ContactInfo
    farming_methods: List[FarmingMethod] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    gallery: List[str] = Field(default_factory=list)
    social_media: SocialMedia = Field(default_factory=SocialMedia)
    established_year: Optional[int] = None
    farm_size: Optional[str] = None

    @field_validator("farming_methods")
    @classmethod
    def dedupe_farming_methods(cls, v: List[FarmingMethod]) -> List[FarmingMethod]:
        return list(dict.fromkeys(v))

    @field_validator("established_year")
    @classmethod
    def validate_established_year(cls, v: Optional[int]) -> Optional[int]:
        if v is None:
            return v
        current_year = datetime.now(timezone.utc).year
        if not 1900 <= v <= current_year:
            raise ValueError(f"established_year must be between 1900 and {current_year}")
        return v


class FarmerProfile(FarmerProfileInput):
    """
    Stored farmer profile. There is at most one per user, keyed by `user_id`.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(
        description="UUID of the farmer profile",
        default_factory=lambda: uuid4().hex,
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
    )
    user_id: str = Field(description="UUID of the owning user with role FARMER")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_serializer("created_at", "updated_at", when_used="json")
    def serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)
