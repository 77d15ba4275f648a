import itertools
from decimal import Decimal

import pytest

from venue_menu.models.menu_item import AlcoholItem, FoodItem
from venue_menu.models.promotion import PRESET_PROMOTIONS, Promotion, PromotionCategory
from venue_menu.services.menu_view import (
    UNCATEGORIZED,
    Availability,
    Diet,
    MenuFilters,
    MenuView,
    UnknownMenuEntryError,
    apply_filters,
    build_menu_view,
    build_public_view,
    category_counts,
    flatten,
    format_amount,
    group_by_category,
    matches_diet,
    present_item,
    present_prices,
    promotions_for_bucket,
    search_items,
)


def food(id, name, category, vegetarian=True, available=True, tags=(), price="100"):
    return FoodItem(
        id=id,
        name=name,
        category=category,
        price=Decimal(price),
        vegetarian=vegetarian,
        available=available,
        tags=frozenset(tags),
    )


def drink(id, name, category, available=True, **prices):
    return AlcoholItem(
        id=id,
        name=name,
        category=category,
        available=available,
        **{k: Decimal(str(v)) for k, v in prices.items()},
    )


def promo(key, category, active=True):
    return Promotion(key=key, title=key, description="", category=PromotionCategory(category), active=active)


MENU = [
    food(1, "Paneer Tikka", "Starters", tags={"spicy"}),
    food(2, "Chicken Wings", "Starters", vegetarian=False),
    food(3, "Idli", "Breakfast"),
    food(4, "Omelette", "Breakfast", vegetarian=False, available=False),
    food(5, "Brownie", "Desserts", tags={"chef_special"}),
    food(6, "Mystery Dish", ""),
]


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------

def test_group_by_category_first_seen_order():
    buckets = group_by_category(MENU)
    assert [b.title for b in buckets] == ["Starters", "Breakfast", "Desserts", UNCATEGORIZED]
    assert [i.name for i in buckets[0].items] == ["Paneer Tikka", "Chicken Wings"]


def test_group_then_flatten_is_a_permutation():
    for perm in itertools.permutations(MENU[:5]):
        flat = flatten(group_by_category(perm))
        assert sorted(i.id for i in flat) == sorted(i.id for i in perm)
        assert len(flat) == len(perm)


def test_grouping_is_case_sensitive():
    items = [food(1, "A", "starters"), food(2, "B", "Starters")]
    assert [b.title for b in group_by_category(items)] == ["starters", "Starters"]


def test_missing_category_goes_to_uncategorized():
    items = [food(1, "A", None), food(2, "B", "  ")]
    buckets = group_by_category(items)
    assert len(buckets) == 1
    assert buckets[0].title == UNCATEGORIZED


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("query", ["", "   ", None])
def test_empty_query_returns_input_unchanged(query):
    assert search_items(MENU, query) == MENU


def test_every_substring_of_a_name_finds_the_item():
    name = "Paneer Tikka"
    for start in range(len(name)):
        for end in range(start + 1, len(name) + 1):
            needle = name[start:end]
            if not needle.strip():
                continue
            assert MENU[0] in search_items(MENU, needle.upper())


def test_search_matches_tags():
    assert [i.name for i in search_items(MENU, "CHEF")] == ["Brownie"]


def test_search_with_no_match_is_empty():
    assert search_items(MENU, "sushi") == []


# ---------------------------------------------------------------------------
# Filters and counts
# ---------------------------------------------------------------------------

def test_filters_combine_and_ignore_order_of_application():
    filters = MenuFilters(category="Starters", diet=Diet.VEG, availability=Availability.AVAILABLE)
    assert [i.name for i in apply_filters(MENU, filters)] == ["Paneer Tikka"]
    # applying again is a no-op
    assert apply_filters(apply_filters(MENU, filters), filters) == apply_filters(MENU, filters)


def test_diet_does_not_filter_alcohol():
    beer = drink(1, "Lager", "Beer", price_bottle=300)
    assert matches_diet(beer, Diet.VEG)
    assert matches_diet(beer, Diet.NON_VEG)


def test_unknown_kind_raises():
    class Stranger:
        kind = "dessert_cart"

    with pytest.raises(UnknownMenuEntryError):
        matches_diet(Stranger(), Diet.VEG)


def test_category_counts_keep_zero_entries_and_ignore_selection():
    filters = MenuFilters(category="Desserts", query="paneer")
    chips = {c.category: c.count for c in category_counts(MENU, filters)}
    assert chips == {"Starters": 1, "Breakfast": 0, "Desserts": 0, UNCATEGORIZED: 0}


def test_public_idli_scenario():
    items = [
        food(1, "Idli", "Breakfast", vegetarian=True, available=True),
        food(2, "Omelette", "Breakfast", vegetarian=False, available=False),
    ]
    result = build_public_view(items, [], MenuView.FOOD, MenuFilters())
    assert [b.title for b in result.buckets] == ["Breakfast"]
    assert [i.name for i in result.buckets[0].items] == ["Idli"]


def test_public_view_forces_available_only():
    result = build_public_view(MENU, [], MenuView.FOOD, MenuFilters(availability=Availability.UNAVAILABLE))
    assert "Omelette" not in [i.name for i in flatten(result.buckets)]


def test_admin_view_sees_unavailable_items():
    result = build_menu_view(MENU, MenuView.FOOD, MenuFilters(availability=Availability.UNAVAILABLE))
    assert [i.name for i in flatten(result.buckets)] == ["Omelette"]
    assert result.total == 1


def test_filtered_out_categories_are_dropped_from_buckets():
    result = build_menu_view(MENU, MenuView.FOOD, MenuFilters(query="brownie"))
    assert [b.title for b in result.buckets] == ["Desserts"]


# ---------------------------------------------------------------------------
# Promotions
# ---------------------------------------------------------------------------

def test_beer_promotion_matches_bucket_title_substring():
    beer = promo("beer", "beer")
    assert promotions_for_bucket([beer], MenuView.DRINKS, "IPA Beer") == [beer]
    assert promotions_for_bucket([beer], MenuView.DRINKS, "Lager") == []


def test_general_promotion_matches_every_bucket():
    general = promo("welcome", "general")
    assert promotions_for_bucket([general], MenuView.FOOD, "Starters") == [general]
    assert promotions_for_bucket([general], MenuView.DRINKS, "Whisky") == [general]


@pytest.mark.parametrize(
    "category, view, expected",
    [
        ("food", MenuView.FOOD, True),
        ("food", MenuView.DRINKS, False),
        ("drinks", MenuView.DRINKS, True),
        ("alcohol", MenuView.DRINKS, True),
        ("alcohol", MenuView.FOOD, False),
        ("beer", MenuView.FOOD, False),
    ],
)
def test_promotion_association_table(category, view, expected):
    p = promo("p", category)
    assert (promotions_for_bucket([p], view, "Starters") == [p]) is expected


def test_public_view_attaches_only_active_promotions():
    active = promo("a", "food", active=True)
    stopped = promo("b", "food", active=False)
    result = build_public_view(MENU, [], MenuView.FOOD, MenuFilters(), [active, stopped])
    assert all(b.promotions == [active] for b in result.buckets)


def test_preset_promotions():
    keys = [p.key for p in PRESET_PROMOTIONS]
    assert keys == [
        "buy2_beer_get1_free",
        "happy_hour_beer_5to7",
        "buy3_large_pizza_pay2",
        "combo_whiskey_starter",
        "welcome_drink_weekend",
    ]
    assert not any(p.active for p in PRESET_PROMOTIONS)


# ---------------------------------------------------------------------------
# Prices
# ---------------------------------------------------------------------------

def test_present_prices_only_lists_present_sizes_in_order():
    item = drink(1, "Old Monk", "Rum", price_bottle=1800, price_60ml=250)
    points = present_prices(item, "₹")
    assert [p.label for p in points] == ["60ml", "Bottle"]
    assert [p.display for p in points] == ["₹250", "₹1800"]


def test_present_prices_with_no_prices_is_empty():
    assert present_prices(drink(1, "House Wine", "Wine"), "₹") == []


def test_format_amount_keeps_fractional_part():
    assert format_amount(Decimal("12.5"), "$") == "$12.50"
    assert format_amount(Decimal("300.00"), "₹") == "₹300"


def test_present_item_dispatches_on_kind():
    dish = present_item(MENU[0], "₹")
    assert dish["kind"] == "food"
    assert dish["price_display"] == "₹100"
    assert dish["tags"] == ["spicy"]

    rum = present_item(drink(7, "Old Monk", "Rum", price_60ml=250), "₹")
    assert rum["kind"] == "alcohol"
    assert [p.label for p in rum["prices"]] == ["60ml"]
