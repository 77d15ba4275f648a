import sqlite3

from venue_menu.repositories.alcohol_repository import AlcoholRepository

MENU_URL = "/api/v1/public/menu"


def add_food(client, headers, name, category, vegetarian=True, available=True, price=100):
    r = client.post(
        "/api/v1/admin/food",
        json={"name": name, "category": category, "price": price, "vegetarian": vegetarian, "available": available},
        headers=headers,
    )
    assert r.status_code == 201, r.text


def add_drink(client, headers, name, category, **prices):
    r = client.post("/api/v1/admin/alcohol", json={"name": name, "category": category, **prices}, headers=headers)
    assert r.status_code == 201, r.text


def test_public_menu_needs_no_session(client):
    r = client.get(MENU_URL)
    assert r.status_code == 200
    body = r.json()
    assert body["buckets"] == []
    assert body["errors"] == []


def test_idli_scenario(client, admin_headers):
    add_food(client, admin_headers, "Idli", "Breakfast", vegetarian=True)
    add_food(client, admin_headers, "Omelette", "Breakfast", vegetarian=False, available=False)

    body = client.get(MENU_URL).json()
    assert [b["title"] for b in body["buckets"]] == ["Breakfast"]
    assert [i["name"] for i in body["buckets"][0]["items"]] == ["Idli"]
    assert body["total"] == 1


def test_diet_and_search_filters(client, admin_headers):
    add_food(client, admin_headers, "Paneer Tikka", "Starters")
    add_food(client, admin_headers, "Chicken Wings", "Starters", vegetarian=False)

    body = client.get(MENU_URL, params={"diet": "veg"}).json()
    assert [i["name"] for b in body["buckets"] for i in b["items"]] == ["Paneer Tikka"]

    body = client.get(MENU_URL, params={"q": "wing"}).json()
    assert [i["name"] for b in body["buckets"] for i in b["items"]] == ["Chicken Wings"]
    assert body["filters"]["availability"] == "available"


def test_drinks_view_prices_and_beer_promotion(client, admin_headers):
    add_drink(client, admin_headers, "Old Monk", "Rum", price_60ml=250, price_bottle=1800)
    add_drink(client, admin_headers, "Craft IPA", "IPA Beer", price_bottle=350)
    add_drink(client, admin_headers, "Kingfisher", "Lager", price_bottle=300)
    client.put(
        "/api/v1/admin/promotions/buy2_beer_get1_free/active",
        json={"active": True},
        headers=admin_headers,
    )

    body = client.get(MENU_URL, params={"view": "drinks"}).json()
    buckets = {b["title"]: b for b in body["buckets"]}
    assert list(buckets) == ["Rum", "IPA Beer", "Lager"]

    rum = buckets["Rum"]["items"][0]
    assert rum["kind"] == "alcohol"
    assert [(p["label"], p["display"]) for p in rum["prices"]] == [("60ml", "₹250"), ("Bottle", "₹1800")]

    assert [p["key"] for p in buckets["IPA Beer"]["promotions"]] == ["buy2_beer_get1_free"]
    assert buckets["Lager"]["promotions"] == []
    assert [p["key"] for p in body["promotions"]] == ["buy2_beer_get1_free"]


def test_one_collection_failing_does_not_hide_the_other(client, admin_headers, monkeypatch):
    add_food(client, admin_headers, "Idli", "Breakfast")

    def broken(self, available=None, category=None):
        raise sqlite3.OperationalError("no such table: alcohol")

    monkeypatch.setattr(AlcoholRepository, "list_all", broken)
    body = client.get(MENU_URL).json()
    assert body["errors"] == ["Failed to load alcohol menu"]
    assert body["total"] == 1


def test_public_menu_includes_contact_card(client, admin_headers):
    client.put("/api/v1/admin/settings", json={"bar_name": "The Neon Tap", "phone": "123"}, headers=admin_headers)
    body = client.get(MENU_URL).json()
    assert body["venue"]["bar_name"] == "The Neon Tap"
    assert body["venue"]["phone"] == "123"


def test_menu_pdf(client, admin_headers):
    add_food(client, admin_headers, "Idli", "Breakfast")
    add_drink(client, admin_headers, "Old Monk", "Rum", price_60ml=250)
    r = client.get("/api/v1/public/menu.pdf")
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert r.content.startswith(b"%PDF")
