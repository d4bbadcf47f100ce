from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer

from app.core.timestamps import format_timestamp


class ProductCategory(str, Enum):
    """Categories a product can be listed under."""

    VEGETABLES = "Vegetables"
    FRUITS = "Fruits"
    DAIRY = "Dairy"
    EGGS = "Eggs"
    MEAT = "Meat"
    HERBS = "Herbs"
    HONEY = "Honey"
    BAKERY = "Bakery"
    PROCESSED = "Processed"
    OTHER = "Other"


class ProductUnit(str, Enum):
    """Units a product price is quoted in."""

    KG = "kg"
    LB = "lb"
    PIECE = "piece"
    BUNCH = "bunch"
    DOZEN = "dozen"
    LITER = "liter"
    PINT = "pint"
    QUART = "quart"
    GALLON = "gallon"


class Product(BaseModel):
    """A produce listing owned by a single farmer."""

    id: str = Field(
        description="UUID of the product",
        default_factory=lambda: uuid4().hex,
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
    )
    farmer_id: str = Field(description="UUID of the user with role FARMER who owns it")
    name: str = Field(min_length=1, description="Display name of the product.")
    description: str = Field(min_length=1)
    category: ProductCategory
    images: List[str] = Field(
        min_length=1, description="Image URLs, the first one is the cover."
    )
    price: float = Field(ge=0)
    unit: ProductUnit
    quantity_available: float = Field(default=0, ge=0)
    is_organic: bool = False
    is_featured: bool = False
    is_available: bool = True
    harvest_date: Optional[date] = None
    expiry_date: Optional[date] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_serializer("created_at", "updated_at", when_used="json")
    def serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)


class ProductCreate(BaseModel):
    """Body of a product creation request. Ownership is never taken from here."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    category: ProductCategory
    images: List[str] = Field(min_length=1)
    price: float = Field(ge=0)
    unit: ProductUnit
    quantity_available: float = Field(default=0, ge=0)
    is_organic: bool = False
    is_featured: bool = False
    is_available: bool = True
    harvest_date: Optional[date] = None
    expiry_date: Optional[date] = None


class ProductUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[ProductCategory] = None
    images: Optional[List[str]] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    unit: Optional[ProductUnit] = None
    quantity_available: Optional[float] = Field(default=None, ge=0)
    is_organic: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_available: Optional[bool] = None
    harvest_date: Optional[date] = None
    expiry_date: Optional[date] = None
