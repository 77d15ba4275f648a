"""
Promotion model and the preset promotions offered by the admin panel.

Presets exist independently of the record store; a `promotions` row only
overrides a preset's text and records whether it is active.
"""
from dataclasses import dataclass, replace
from enum import Enum


class PromotionCategory(str, Enum):
    BEER = "beer"
    FOOD = "food"
    DRINKS = "drinks"
    ALCOHOL = "alcohol"
    GENERAL = "general"


@dataclass(frozen=True)
class Promotion:
    key: str
    title: str
    description: str
    category: PromotionCategory
    active: bool = False

    def with_active(self, active: bool) -> "Promotion":
        return replace(self, active=active)

    @classmethod
    def from_row(cls, row) -> "Promotion":
        """Build a Promotion from a sqlite3.Row object."""
        return cls(
            key=row["key"],
            title=row["title"],
            description=row["description"],
            category=PromotionCategory(row["category"]),
            active=bool(row["active"]),
        )


PRESET_PROMOTIONS: tuple[Promotion, ...] = (
    Promotion(
        key="buy2_beer_get1_free",
        title="Buy 2 Beer, Get 1 Free",
        description="Order any two beers and get the third beer free of equal or lesser value.",
        category=PromotionCategory.BEER,
    ),
    Promotion(
        key="happy_hour_beer_5to7",
        title="Happy Hour Beer (5-7 PM)",
        description="Flat 20% off on all beers during happy hours.",
        category=PromotionCategory.BEER,
    ),
    Promotion(
        key="buy3_large_pizza_pay2",
        title="Buy 3 Large Pizza, Pay for 2",
        description="Get one large pizza free when you order three.",
        category=PromotionCategory.FOOD,
    ),
    Promotion(
        key="combo_whiskey_starter",
        title="Whiskey + Starter Combo",
        description="Flat ₹200 off when ordering any whiskey with a starter.",
        category=PromotionCategory.ALCOHOL,
    ),
    Promotion(
        key="welcome_drink_weekend",
        title="Weekend Welcome Drink",
        description="One complimentary mocktail for every dine-in group on weekends.",
        category=PromotionCategory.GENERAL,
    ),
)
