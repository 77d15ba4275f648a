"""
Pydantic schemas for the admin food / alcohol forms and their responses.
Validation runs before any record store call.
"""
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from venue_menu.services.menu_view import ALL_CATEGORIES

MAX_PRICE = Decimal("1000000")
MAX_TAGS = 20


def _clean_required_text(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


def _clean_tags(v) -> set[str]:
    if v is None:
        return set()
    if isinstance(v, str):
        v = v.split(",")
    tags = {str(t).strip().lower().replace(" ", "_") for t in v}
    tags.discard("")
    if len(tags) > MAX_TAGS:
        raise ValueError(f"at most {MAX_TAGS} tags are allowed")
    return tags


def _clean_category(v: str) -> str:
    v = _clean_required_text(v)
    if v.lower() == ALL_CATEGORIES:
        raise ValueError(f"'{v}' is reserved for the all-categories filter")
    return v


def _to_decimal(v):
    if v is None or v == "":
        return None
    if isinstance(v, bool):
        raise ValueError("must be a number")
    try:
        return Decimal(str(v).strip())
    except InvalidOperation:
        raise ValueError("must be a number")


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class FoodItemCreate(BaseModel):
    """Food item form; also used for wholesale updates."""

    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    price: Decimal = Field(..., ge=0, le=MAX_PRICE, decimal_places=2)
    vegetarian: bool = False
    available: bool = True
    tags: set[str] = Field(default_factory=set)
    featured: bool = False

    @field_validator("name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _clean_required_text(v)

    @field_validator("category")
    @classmethod
    def valid_category(cls, v: str) -> str:
        return _clean_category(v)

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() or None if v is not None else None

    @field_validator("price", mode="before")
    @classmethod
    def validate_decimal(cls, v):
        """Normalize decimal inputs to Decimal instances."""
        return _to_decimal(v)

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v):
        return _clean_tags(v)


class AlcoholItemCreate(BaseModel):
    """Alcohol item form; every pour-size price is independently optional."""

    name: str = Field(..., min_length=1, max_length=200)
    brand: Optional[str] = Field(None, max_length=200)
    category: str = Field(..., min_length=1, max_length=100)
    price_30ml: Optional[Decimal] = Field(None, ge=0, le=MAX_PRICE, decimal_places=2)
    price_60ml: Optional[Decimal] = Field(None, ge=0, le=MAX_PRICE, decimal_places=2)
    price_90ml: Optional[Decimal] = Field(None, ge=0, le=MAX_PRICE, decimal_places=2)
    price_180ml: Optional[Decimal] = Field(None, ge=0, le=MAX_PRICE, decimal_places=2)
    price_bottle: Optional[Decimal] = Field(None, ge=0, le=MAX_PRICE, decimal_places=2)
    available: bool = True
    tags: set[str] = Field(default_factory=set)
    featured: bool = False

    @field_validator("name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _clean_required_text(v)

    @field_validator("category")
    @classmethod
    def valid_category(cls, v: str) -> str:
        return _clean_category(v)

    @field_validator("brand")
    @classmethod
    def blank_brand_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() or None if v is not None else None

    @field_validator(
        "price_30ml", "price_60ml", "price_90ml", "price_180ml", "price_bottle",
        mode="before",
    )
    @classmethod
    def validate_decimal(cls, v):
        """Empty inputs mean the size is not offered."""
        return _to_decimal(v)

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v):
        return _clean_tags(v)


class AvailabilityUpdate(BaseModel):
    available: bool


class BulkAvailabilityRequest(BaseModel):
    ids: list[int] = Field(..., max_length=1000)
    available: bool

    @field_validator("ids")
    @classmethod
    def unique_ids(cls, v: list[int]) -> list[int]:
        return list(dict.fromkeys(v))


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class _TaggedResponse(BaseModel):
    tags: list[str]

    @field_validator("tags", mode="before")
    @classmethod
    def sorted_tags(cls, v):
        return sorted(v or ())

    model_config = {"from_attributes": True}


class FoodItemResponse(_TaggedResponse):
    kind: Literal["food"] = "food"
    id: int
    name: str
    category: str
    description: Optional[str]
    price: Decimal
    vegetarian: bool
    available: bool
    featured: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class AlcoholItemResponse(_TaggedResponse):
    kind: Literal["alcohol"] = "alcohol"
    id: int
    name: str
    brand: Optional[str]
    category: str
    price_30ml: Optional[Decimal]
    price_60ml: Optional[Decimal]
    price_90ml: Optional[Decimal]
    price_180ml: Optional[Decimal]
    price_bottle: Optional[Decimal]
    available: bool
    featured: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class MessageResponse(BaseModel):
    message: str


class FoodMutationResponse(MessageResponse):
    item: FoodItemResponse


class AlcoholMutationResponse(MessageResponse):
    item: AlcoholItemResponse


class BulkAvailabilityResponse(MessageResponse):
    count: int
    available: bool


class CategoryPresetsResponse(BaseModel):
    food: list[str]
    alcohol: list[str]
