from decimal import Decimal

from venue_menu.models.menu_item import AlcoholItem, FoodItem
from venue_menu.models.promotion import Promotion, PromotionCategory
from venue_menu.services.menu_browser import MenuBrowser
from venue_menu.services.menu_view import ALL_CATEGORIES, Diet, MenuView

from test_debounce import FakeTimer


FOOD = [
    FoodItem(id=1, name="Idli", category="Breakfast", price=Decimal("80"), vegetarian=True, available=True),
    FoodItem(id=2, name="Omelette", category="Breakfast", price=Decimal("120"), vegetarian=False, available=True),
    FoodItem(id=3, name="Mojito Cake", category="Desserts", price=Decimal("200"), vegetarian=True, available=True),
]
ALCOHOL = [
    AlcoholItem(id=1, name="Classic Mojito", category="Cocktails", available=True, price_60ml=Decimal("400")),
    AlcoholItem(id=2, name="Craft IPA", category="IPA Beer", available=True, price_bottle=Decimal("350")),
]
BEER_PROMO = Promotion(
    key="buy2_beer_get1_free",
    title="Buy 2 Beer, Get 1 Free",
    description="",
    category=PromotionCategory.BEER,
    active=True,
)


def make_browser(**kwargs):
    FakeTimer.created = []
    return MenuBrowser(FOOD, ALCOHOL, [BEER_PROMO], timer_factory=FakeTimer, **kwargs)


def test_typing_recomputes_once_with_last_query():
    seen = []
    browser = make_browser(on_change=seen.append)
    for text in ("m", "mo", "moj"):
        browser.type_query(text)
    assert browser.raw_query == "moj"
    assert browser.recompute_count == 0

    FakeTimer.created[-1].fire()
    assert browser.recompute_count == 1
    assert browser.filters.query == "moj"
    assert [i.name for b in browser.snapshot.buckets for i in b.items] == ["Mojito Cake"]
    assert len(seen) == 1


def test_flush_query_applies_pending_text():
    browser = make_browser()
    browser.type_query("idli")
    browser.flush_query()
    assert browser.filters.query == "idli"
    assert browser.snapshot.total == 1


def test_diet_and_category_apply_immediately():
    browser = make_browser()
    browser.set_diet(Diet.VEG)
    browser.select_category("Breakfast")
    assert browser.recompute_count == 2
    assert [i.name for b in browser.snapshot.buckets for i in b.items] == ["Idli"]
    chips = {c.category: c.count for c in browser.snapshot.chips}
    assert chips == {"Breakfast": 1, "Desserts": 1}


def test_switching_view_resets_category_and_shows_beer_promotion():
    browser = make_browser()
    browser.select_category("Breakfast")
    result = browser.set_view(MenuView.DRINKS)
    assert browser.filters.category == ALL_CATEGORIES
    titles = {b.title: b.promotions for b in result.buckets}
    assert titles["IPA Beer"] == [BEER_PROMO]
    assert titles["Cocktails"] == []


def test_load_replaces_collections():
    browser = make_browser()
    browser.load(FOOD[:1], [], [])
    assert browser.snapshot.total == 1
    browser.close()
