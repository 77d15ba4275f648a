"""
Domain models for menu entries (rows of the `food_menu` and `alcohol` tables).

Both entry types carry a ``kind`` discriminator so shared code paths can
dispatch on it with ``match`` instead of probing for attributes.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
import json
from typing import Literal, Optional, Union


FOOD_KIND = "food"
ALCOHOL_KIND = "alcohol"

# Pour sizes in presentation order: (column suffix, display label)
POUR_SIZES: tuple[tuple[str, str], ...] = (
    ("30ml", "30ml"),
    ("60ml", "60ml"),
    ("90ml", "90ml"),
    ("180ml", "180ml"),
    ("bottle", "Bottle"),
)

FOOD_CATEGORY_PRESETS: tuple[str, ...] = (
    "Starters",
    "Soups",
    "Salads",
    "Main Course",
    "Breakfast",
    "Breads",
    "Rice & Biryani",
    "Desserts",
    "Beverages",
)

ALCOHOL_CATEGORY_PRESETS: tuple[str, ...] = (
    "Beer",
    "Whisky",
    "Vodka",
    "Rum",
    "Gin",
    "Tequila",
    "Wine",
    "Brandy",
    "Cocktails",
    "Liqueur",
)


def _decimal_or_none(value) -> Optional[Decimal]:
    return None if value is None else Decimal(str(value))


def _tags_from_column(raw: Optional[str]) -> frozenset[str]:
    if not raw:
        return frozenset()
    return frozenset(json.loads(raw))


def tags_to_column(tags) -> str:
    """Serialize a tag collection for storage (sorted for stable rows)."""
    return json.dumps(sorted(tags or ()))


@dataclass
class FoodItem:
    id: int
    name: str
    category: str
    price: Decimal
    vegetarian: bool
    available: bool
    description: Optional[str] = None
    tags: frozenset[str] = field(default_factory=frozenset)
    featured: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    kind: Literal["food"] = FOOD_KIND

    @classmethod
    def from_row(cls, row) -> "FoodItem":
        """Build a FoodItem from a sqlite3.Row object."""
        return cls(
            id=row["id"],
            name=row["name"],
            category=row["category"],
            description=row["description"],
            price=Decimal(str(row["price"])),
            vegetarian=bool(row["vegetarian"]),
            available=bool(row["available"]),
            tags=_tags_from_column(row["tags"]),
            featured=bool(row["featured"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )


@dataclass
class AlcoholItem:
    id: int
    name: str
    category: str
    available: bool
    brand: Optional[str] = None
    price_30ml: Optional[Decimal] = None
    price_60ml: Optional[Decimal] = None
    price_90ml: Optional[Decimal] = None
    price_180ml: Optional[Decimal] = None
    price_bottle: Optional[Decimal] = None
    tags: frozenset[str] = field(default_factory=frozenset)
    featured: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    kind: Literal["alcohol"] = ALCOHOL_KIND

    def price_for(self, size: str) -> Optional[Decimal]:
        """Return the price for a pour size suffix such as ``"60ml"``."""
        return getattr(self, f"price_{size}")

    @classmethod
    def from_row(cls, row) -> "AlcoholItem":
        """Build an AlcoholItem from a sqlite3.Row object."""
        return cls(
            id=row["id"],
            name=row["name"],
            brand=row["brand"],
            category=row["category"],
            price_30ml=_decimal_or_none(row["price_30ml"]),
            price_60ml=_decimal_or_none(row["price_60ml"]),
            price_90ml=_decimal_or_none(row["price_90ml"]),
            price_180ml=_decimal_or_none(row["price_180ml"]),
            price_bottle=_decimal_or_none(row["price_bottle"]),
            available=bool(row["available"]),
            tags=_tags_from_column(row["tags"]),
            featured=bool(row["featured"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )


MenuEntry = Union[FoodItem, AlcoholItem]
