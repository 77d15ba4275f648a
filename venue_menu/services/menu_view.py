"""
Menu view-model.

Turns raw food / alcohol collections into the grouped, filtered, searched
and counted data shown by the admin managers and the public menu:

- category grouping in first-seen order (empty category -> "Uncategorized")
- case-insensitive substring search over name and tags
- category / diet / availability predicates combined by AND
- per-category chip counts that keep zero entries
- the fixed promotion-to-bucket association rules
- pour-size price presentation for alcohol items
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Iterable, Optional, Sequence

from venue_menu.models.menu_item import (
    POUR_SIZES,
    AlcoholItem,
    MenuEntry,
)
from venue_menu.models.promotion import Promotion, PromotionCategory

UNCATEGORIZED = "Uncategorized"
ALL_CATEGORIES = "all"


class MenuView(str, Enum):
    FOOD = "food"
    DRINKS = "drinks"


class Diet(str, Enum):
    ALL = "all"
    VEG = "veg"
    NON_VEG = "non_veg"


class Availability(str, Enum):
    ALL = "all"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class MenuFilters:
    category: str = ALL_CATEGORIES
    diet: Diet = Diet.ALL
    availability: Availability = Availability.ALL
    query: str = ""


@dataclass
class Bucket:
    title: str
    items: list = field(default_factory=list)
    promotions: list[Promotion] = field(default_factory=list)


@dataclass(frozen=True)
class CategoryChip:
    category: str
    count: int


@dataclass(frozen=True)
class PricePoint:
    size: str
    label: str
    amount: Decimal
    display: str


@dataclass
class MenuViewResult:
    view: MenuView
    filters: MenuFilters
    chips: list[CategoryChip]
    buckets: list[Bucket]

    @property
    def total(self) -> int:
        return sum(len(b.items) for b in self.buckets)


class UnknownMenuEntryError(TypeError):
    pass


def _unknown_kind(item) -> UnknownMenuEntryError:
    return UnknownMenuEntryError(f"Unknown menu entry kind: {getattr(item, 'kind', None)!r}")


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------

def normalize_category(category: Optional[str]) -> str:
    """Map a missing or blank category to the sentinel bucket label."""
    if category is None or not str(category).strip():
        return UNCATEGORIZED
    return str(category)


def group_by_category(items: Iterable[MenuEntry]) -> list[Bucket]:
    """Partition *items* into buckets keyed by exact category, first-seen order."""
    groups: dict[str, Bucket] = {}
    for item in items:
        title = normalize_category(item.category)
        if title not in groups:
            groups[title] = Bucket(title=title)
        groups[title].items.append(item)
    return list(groups.values())


def flatten(buckets: Iterable[Bucket]) -> list:
    return [item for bucket in buckets for item in bucket.items]


def first_seen_categories(items: Iterable[MenuEntry]) -> list[str]:
    return [bucket.title for bucket in group_by_category(items)]


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

def normalize_query(query: Optional[str]) -> str:
    return (query or "").strip().lower()


def matches_query(item: MenuEntry, query: Optional[str]) -> bool:
    """True if the name or any tag contains *query* (case-insensitive)."""
    needle = normalize_query(query)
    if not needle:
        return True
    if needle in item.name.lower():
        return True
    return any(needle in tag.lower() for tag in (item.tags or ()))


def search_items(items: Iterable[MenuEntry], query: Optional[str]) -> list:
    if not normalize_query(query):
        return list(items)
    return [item for item in items if matches_query(item, query)]


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def matches_category(item: MenuEntry, category: str) -> bool:
    return category == ALL_CATEGORIES or normalize_category(item.category) == category


def matches_diet(item: MenuEntry, diet: Diet) -> bool:
    match item.kind:
        case "food":
            if diet is Diet.VEG:
                return item.vegetarian
            if diet is Diet.NON_VEG:
                return not item.vegetarian
            return True
        case "alcohol":
            return True
        case _:
            raise _unknown_kind(item)


def matches_availability(item: MenuEntry, availability: Availability) -> bool:
    if availability is Availability.AVAILABLE:
        return item.available
    if availability is Availability.UNAVAILABLE:
        return not item.available
    return True


def apply_filters(items: Iterable[MenuEntry], filters: MenuFilters) -> list:
    """Apply category, diet and availability predicates, then the search query."""
    narrowed = [
        item
        for item in items
        if matches_category(item, filters.category)
        and matches_diet(item, filters.diet)
        and matches_availability(item, filters.availability)
    ]
    return search_items(narrowed, filters.query)


def build_buckets(items: Sequence[MenuEntry], filters: MenuFilters) -> list[Bucket]:
    """Group the filtered items; categories left without items are dropped."""
    return [b for b in group_by_category(apply_filters(items, filters)) if b.items]


def category_counts(items: Sequence[MenuEntry], filters: MenuFilters) -> list[CategoryChip]:
    """
    Count matches per candidate category, ignoring the selected category.

    Candidates are the categories of the items that pass the availability
    filter, in first-seen order; categories with no match keep a zero count.
    """
    candidates = first_seen_categories(
        item for item in items if matches_availability(item, filters.availability)
    )
    matching = apply_filters(items, replace(filters, category=ALL_CATEGORIES))
    counts = dict.fromkeys(candidates, 0)
    for item in matching:
        counts[normalize_category(item.category)] += 1
    return [CategoryChip(category=c, count=n) for c, n in counts.items()]


# ---------------------------------------------------------------------------
# Promotions
# ---------------------------------------------------------------------------

def promotion_applies(promotion: Promotion, view: MenuView, bucket_title: str) -> bool:
    """Fixed association table between promotion categories and menu buckets."""
    category = PromotionCategory(promotion.category)
    if category is PromotionCategory.GENERAL:
        return True
    if view is MenuView.FOOD and category is PromotionCategory.FOOD:
        return True
    if view is MenuView.DRINKS and category in (PromotionCategory.ALCOHOL, PromotionCategory.DRINKS):
        return True
    # TODO: replace the title substring test with explicit beer tagging on categories
    if category is PromotionCategory.BEER and "beer" in bucket_title.lower():
        return True
    return False


def promotions_for_bucket(
    promotions: Iterable[Promotion],
    view: MenuView,
    bucket_title: str,
) -> list[Promotion]:
    return [p for p in promotions if promotion_applies(p, view, bucket_title)]


# ---------------------------------------------------------------------------
# Prices
# ---------------------------------------------------------------------------

def format_amount(amount, currency_symbol: str) -> str:
    """Format a price as ``<symbol><amount>``; whole amounts drop the decimals."""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    text = f"{value:.2f}"
    if text.endswith(".00"):
        text = text[:-3]
    return f"{currency_symbol}{text}"


def present_prices(item: AlcoholItem, currency_symbol: str) -> list[PricePoint]:
    """List the pour sizes that carry a price, in fixed size order."""
    points = []
    for size, label in POUR_SIZES:
        amount = item.price_for(size)
        if amount is None:
            continue
        points.append(
            PricePoint(
                size=size,
                label=label,
                amount=amount,
                display=format_amount(amount, currency_symbol),
            )
        )
    return points


def present_item(item: MenuEntry, currency_symbol: str) -> dict:
    """Public representation of a menu entry, dispatched on its kind."""
    base = {
        "kind": item.kind,
        "id": item.id,
        "name": item.name,
        "category": normalize_category(item.category),
        "tags": sorted(item.tags or ()),
        "featured": item.featured,
    }
    match item.kind:
        case "food":
            return {
                **base,
                "description": item.description,
                "vegetarian": item.vegetarian,
                "price": item.price,
                "price_display": format_amount(item.price, currency_symbol),
            }
        case "alcohol":
            return {
                **base,
                "brand": item.brand,
                "prices": present_prices(item, currency_symbol),
            }
        case _:
            raise _unknown_kind(item)


# ---------------------------------------------------------------------------
# Whole views
# ---------------------------------------------------------------------------

def build_menu_view(
    items: Sequence[MenuEntry],
    view: MenuView,
    filters: MenuFilters,
    promotions: Sequence[Promotion] = (),
) -> MenuViewResult:
    """Chips, buckets and per-bucket promotions for one collection."""
    buckets = build_buckets(items, filters)
    for bucket in buckets:
        bucket.promotions = promotions_for_bucket(promotions, view, bucket.title)
    return MenuViewResult(
        view=view,
        filters=filters,
        chips=category_counts(items, filters),
        buckets=buckets,
    )


def build_public_view(
    food: Sequence[MenuEntry],
    alcohol: Sequence[MenuEntry],
    view: MenuView,
    filters: MenuFilters,
    promotions: Sequence[Promotion] = (),
) -> MenuViewResult:
    """Public menu: only available items, diet filter only on the food view."""
    filters = replace(filters, availability=Availability.AVAILABLE)
    if view is MenuView.DRINKS:
        filters = replace(filters, diet=Diet.ALL)
    items = food if view is MenuView.FOOD else alcohol
    active = [p for p in promotions if p.active]
    return build_menu_view(items, view, filters, active)
