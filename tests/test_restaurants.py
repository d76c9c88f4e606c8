import pytest


def create_restaurant(client, **fields):
    body = {"name": "테스트 식당"}
    body.update(fields)
    resp = client.post("/api/restaurants", json=body)
    assert resp.status_code == 201
    return resp.json()["data"]


def test_list_restaurants_empty(client):
    resp = client.get("/api/restaurants")
    assert resp.status_code == 200
    assert resp.json() == {"data": []}


def test_create_restaurant_returns_camel_case_fields(client):
    resp = client.post(
        "/api/restaurants",
        json={
            "name": "Joe's",
            "category": "Pizza",
            "location": "Downtown",
            "priceRange": "$$",
            "rating": 4.5,
            "description": "Great slices",
            "recommendedMenu": ["Margherita", "Pepperoni"],
        },
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["id"] > 0
    assert data["name"] == "Joe's"
    assert data["priceRange"] == "$$"
    assert data["rating"] == 4.5
    assert data["recommendedMenu"] == ["Margherita", "Pepperoni"]
    assert "createdAt" in data and "updatedAt" in data


def test_create_restaurant_defaults_menu_to_empty_list(client):
    data = create_restaurant(client)
    assert data["recommendedMenu"] == []
    assert data["rating"] is None


def test_create_restaurant_requires_name(client):
    resp = client.post("/api/restaurants", json={"category": "Pizza"})
    assert resp.status_code == 400
    assert "name" in resp.json()["error"]["message"]


def test_get_restaurant_by_id(client):
    created = create_restaurant(client, category="Korean")
    resp = client.get(f"/api/restaurants/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"]["category"] == "Korean"


def test_get_restaurant_not_found(client):
    resp = client.get("/api/restaurants/999")
    assert resp.status_code == 404
    assert resp.json() == {"error": {"message": "Restaurant not found"}}


def test_get_restaurant_with_non_integer_id(client):
    resp = client.get("/api/restaurants/abc")
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_update_restaurant_only_changes_given_fields(client):
    created = create_restaurant(client, category="Pizza", location="Downtown")
    resp = client.patch(
        f"/api/restaurants/{created['id']}", json={"location": "Uptown", "rating": 3.8}
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["location"] == "Uptown"
    assert data["rating"] == 3.8
    assert data["category"] == "Pizza"
    assert data["name"] == created["name"]


def test_update_restaurant_not_found(client):
    resp = client.patch("/api/restaurants/999", json={"name": "x"})
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "Restaurant not found"


def test_delete_restaurant(client):
    created = create_restaurant(client)
    resp = client.delete(f"/api/restaurants/{created['id']}")
    assert resp.status_code == 204
    assert resp.content == b""
    assert client.get(f"/api/restaurants/{created['id']}").status_code == 404


def test_delete_restaurant_not_found(client):
    resp = client.delete("/api/restaurants/999")
    assert resp.status_code == 404


def test_popular_orders_by_rating_with_unrated_last(client):
    mid = create_restaurant(client, name="mid", rating=4.5)
    unrated = create_restaurant(client, name="unrated")
    low = create_restaurant(client, name="low", rating=3.0)
    top = create_restaurant(client, name="top", rating=4.9)

    resp = client.get("/api/restaurants/popular")
    assert resp.status_code == 200
    ids = [r["id"] for r in resp.json()["data"]]
    assert ids == [top["id"], mid["id"], low["id"], unrated["id"]]


def test_popular_respects_limit(client):
    for i in range(7):
        create_restaurant(client, name=f"r{i}", rating=float(i))

    default = client.get("/api/restaurants/popular").json()["data"]
    assert len(default) == 5

    limited = client.get("/api/restaurants/popular", params={"limit": 2}).json()["data"]
    assert [r["rating"] for r in limited] == [6.0, 5.0]


@pytest.mark.parametrize("limit", ["0", "abc"])
def test_popular_rejects_invalid_limit(client, limit):
    resp = client.get("/api/restaurants/popular", params={"limit": limit})
    assert resp.status_code == 400
