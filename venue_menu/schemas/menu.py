"""
Pydantic schemas for the grouped menu views (admin managers and public menu).
"""
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from venue_menu.schemas.menu_item import AlcoholItemResponse, FoodItemResponse
from venue_menu.schemas.promotion import PromotionResponse
from venue_menu.schemas.venue_settings import VenueContactCard
from venue_menu.services.menu_view import Availability, Diet, MenuView


class FiltersResponse(BaseModel):
    category: str
    diet: Diet
    availability: Availability
    query: str

    model_config = {"from_attributes": True}


class CategoryChipResponse(BaseModel):
    category: str
    count: int

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Admin views
# ---------------------------------------------------------------------------

class AdminFoodBucket(BaseModel):
    title: str
    items: list[FoodItemResponse]


class AdminAlcoholBucket(BaseModel):
    title: str
    items: list[AlcoholItemResponse]


class AdminFoodView(BaseModel):
    filters: FiltersResponse
    chips: list[CategoryChipResponse]
    buckets: list[AdminFoodBucket]
    total: int
    category_presets: list[str]


class AdminAlcoholView(BaseModel):
    filters: FiltersResponse
    chips: list[CategoryChipResponse]
    buckets: list[AdminAlcoholBucket]
    total: int
    category_presets: list[str]


# ---------------------------------------------------------------------------
# Public menu
# ---------------------------------------------------------------------------

class PricePointResponse(BaseModel):
    size: str
    label: str
    amount: Decimal
    display: str

    model_config = {"from_attributes": True}


class FoodEntryPublic(BaseModel):
    kind: Literal["food"]
    id: int
    name: str
    category: str
    description: Optional[str]
    vegetarian: bool
    price: Decimal
    price_display: str
    tags: list[str]
    featured: bool


class AlcoholEntryPublic(BaseModel):
    kind: Literal["alcohol"]
    id: int
    name: str
    brand: Optional[str]
    category: str
    prices: list[PricePointResponse]
    tags: list[str]
    featured: bool


MenuEntryPublic = Annotated[
    Union[FoodEntryPublic, AlcoholEntryPublic],
    Field(discriminator="kind"),
]


class PublicBucket(BaseModel):
    title: str
    items: list[MenuEntryPublic]
    promotions: list[PromotionResponse]


class PublicMenuResponse(BaseModel):
    view: MenuView
    filters: FiltersResponse
    chips: list[CategoryChipResponse]
    buckets: list[PublicBucket]
    total: int
    promotions: list[PromotionResponse]
    venue: VenueContactCard
    errors: list[str] = Field(default_factory=list)
