import pytest

FOOD_URL = "/api/v1/admin/food"
ALCOHOL_URL = "/api/v1/admin/alcohol"


def create_food(client, headers, **overrides):
    payload = {
        "name": "Paneer Tikka",
        "category": "Starters",
        "description": "Cottage cheese, tandoor grilled",
        "price": 350,
        "vegetarian": True,
        "available": True,
        "tags": ["Chef Special", "spicy"],
    }
    payload.update(overrides)
    r = client.post(FOOD_URL, json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["item"]


def create_alcohol(client, headers, **overrides):
    payload = {"name": "Old Monk", "category": "Rum", "price_60ml": 250, "price_bottle": 1800}
    payload.update(overrides)
    r = client.post(ALCOHOL_URL, json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["item"]


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------

def test_food_crud(client, admin_headers):
    r = client.post(
        FOOD_URL,
        json={"name": "Idli", "category": "Breakfast", "price": 80, "vegetarian": True},
        headers=admin_headers,
    )
    assert r.status_code == 201
    assert r.json()["message"] == "Food item created successfully"
    item = r.json()["item"]
    assert item["kind"] == "food"
    assert float(item["price"]) == 80

    r = client.get(f"{FOOD_URL}/{item['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["name"] == "Idli"

    r = client.put(
        f"{FOOD_URL}/{item['id']}",
        json={"name": "Idli Sambar", "category": "Breakfast", "price": 90, "vegetarian": True},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["message"] == "Food item updated successfully"
    assert r.json()["item"]["name"] == "Idli Sambar"

    r = client.delete(f"{FOOD_URL}/{item['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["message"] == "Food item deleted successfully"

    r = client.get(f"{FOOD_URL}/{item['id']}", headers=admin_headers)
    assert r.status_code == 404


def test_tags_are_normalized(client, admin_headers):
    item = create_food(client, admin_headers)
    assert item["tags"] == ["chef_special", "spicy"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "   "},
        {"category": ""},
        {"category": "all"},
        {"category": " All "},
        {"price": -1},
        {"price": "abc"},
        {"price": 10.555},
    ],
)
def test_food_form_validation(client, admin_headers, overrides):
    payload = {"name": "Idli", "category": "Breakfast", "price": 80}
    payload.update(overrides)
    r = client.post(FOOD_URL, json=payload, headers=admin_headers)
    assert r.status_code == 422


def test_alcohol_crud_and_optional_prices(client, admin_headers):
    item = create_alcohol(client, admin_headers, brand="Mohan Meakin")
    assert item["kind"] == "alcohol"
    assert item["price_30ml"] is None
    assert float(item["price_60ml"]) == 250

    r = client.put(
        f"{ALCOHOL_URL}/{item['id']}",
        json={"name": "Old Monk", "category": "Rum", "price_30ml": "", "price_bottle": 1900},
        headers=admin_headers,
    )
    assert r.status_code == 200
    updated = r.json()["item"]
    assert updated["price_60ml"] is None
    assert float(updated["price_bottle"]) == 1900
    assert r.json()["message"] == "Alcohol item updated successfully"


def test_alcohol_category_cannot_shadow_all_filter(client, admin_headers):
    r = client.post(ALCOHOL_URL, json={"name": "House Red", "category": "ALL", "price_bottle": 900}, headers=admin_headers)
    assert r.status_code == 422

    create_alcohol(client, admin_headers, category="All Day Specials")
    r = client.get(ALCOHOL_URL, params={"category": "Rum"}, headers=admin_headers)
    assert [c["category"] for c in r.json()["chips"]] == ["All Day Specials"]


def test_update_missing_item_is_404(client, admin_headers):
    r = client.put(
        f"{FOOD_URL}/9999",
        json={"name": "Ghost", "category": "Starters", "price": 1},
        headers=admin_headers,
    )
    assert r.status_code == 404


# ---------------------------------------------------------------------------
# Availability
# ---------------------------------------------------------------------------

def test_toggle_twice_restores_state(client, admin_headers):
    item = create_food(client, admin_headers)
    url = f"{FOOD_URL}/{item['id']}/toggle-availability"

    first = client.post(url, headers=admin_headers).json()
    assert first["item"]["available"] is False
    assert first["message"] == "Food item marked unavailable"

    second = client.post(url, headers=admin_headers).json()
    assert second["item"]["available"] is True


def test_set_availability(client, admin_headers):
    item = create_alcohol(client, admin_headers)
    r = client.put(
        f"{ALCOHOL_URL}/{item['id']}/availability",
        json={"available": False},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["item"]["available"] is False


@pytest.mark.parametrize("size", [0, 1, 3])
def test_bulk_unavailable_marks_every_selected_item(client, admin_headers, size):
    ids = [create_food(client, admin_headers, name=f"Dish {n}")["id"] for n in range(3)]
    selected = ids[:size]

    r = client.post(
        f"{FOOD_URL}/bulk-availability",
        json={"ids": selected, "available": False},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["count"] == size
    assert r.json()["message"] == f"{size} food item(s) marked unavailable"

    for item_id in ids:
        item = client.get(f"{FOOD_URL}/{item_id}", headers=admin_headers).json()
        assert item["available"] is (item_id not in selected)


def test_bulk_with_missing_id_changes_nothing(client, admin_headers):
    item = create_alcohol(client, admin_headers)
    r = client.post(
        f"{ALCOHOL_URL}/bulk-availability",
        json={"ids": [item["id"], 4242], "available": False},
        headers=admin_headers,
    )
    assert r.status_code == 404
    assert "4242" in r.json()["detail"]

    still = client.get(f"{ALCOHOL_URL}/{item['id']}", headers=admin_headers).json()
    assert still["available"] is True


# ---------------------------------------------------------------------------
# Admin views
# ---------------------------------------------------------------------------

def test_admin_food_view_groups_and_counts(client, admin_headers):
    create_food(client, admin_headers, name="Idli", category="Breakfast", tags=[])
    create_food(client, admin_headers, name="Omelette", category="Breakfast", vegetarian=False, available=False)
    create_food(client, admin_headers, name="Brownie", category="Desserts", tags=[])

    r = client.get(FOOD_URL, headers=admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert [b["title"] for b in body["buckets"]] == ["Breakfast", "Desserts"]
    assert body["total"] == 3
    assert "Starters" in body["category_presets"]

    r = client.get(FOOD_URL, params={"diet": "non_veg", "category": "Desserts"}, headers=admin_headers)
    body = r.json()
    assert body["buckets"] == []
    assert {c["category"]: c["count"] for c in body["chips"]} == {"Breakfast": 1, "Desserts": 0}

    r = client.get(FOOD_URL, params={"availability": "unavailable"}, headers=admin_headers)
    assert [i["name"] for b in r.json()["buckets"] for i in b["items"]] == ["Omelette"]


def test_admin_alcohol_view_search(client, admin_headers):
    create_alcohol(client, admin_headers)
    create_alcohol(client, admin_headers, name="Kingfisher", category="Beer", price_60ml=None, price_bottle=300)

    r = client.get(ALCOHOL_URL, params={"q": "KING"}, headers=admin_headers)
    body = r.json()
    assert [i["name"] for b in body["buckets"] for i in b["items"]] == ["Kingfisher"]
    assert body["filters"]["query"] == "KING"


def test_category_presets(client, admin_headers):
    r = client.get("/api/v1/admin/categories", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["alcohol"][0] == "Beer"
    assert "Rice & Biryani" in r.json()["food"]


def test_store_failure_names_the_action(client, admin_headers, monkeypatch):
    import sqlite3

    from venue_menu.repositories.food_repository import FoodRepository

    def broken(self, **fields):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(FoodRepository, "create", broken)
    r = client.post(
        FOOD_URL,
        json={"name": "Idli", "category": "Breakfast", "price": 80},
        headers=admin_headers,
    )
    assert r.status_code == 503
    assert r.json()["detail"] == "Failed to create food item"
