import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.services import submission_service

JOES = {
    "restaurantName": "Joe's",
    "category": "Pizza",
    "location": "Downtown",
    "priceRange": "$$",
    "recommendedMenu": "Margherita, Pepperoni",
    "review": "Great",
    "submitterName": "Ann",
    "submitterEmail": "ann@example.com",
}


def create_submission(client, **overrides):
    body = dict(JOES)
    body.update(overrides)
    resp = client.post("/api/submissions", json=body)
    assert resp.status_code == 201
    return resp.json()["data"]


def approve(client, submission_id):
    resp = client.patch(
        f"/api/submissions/{submission_id}", json={"status": "approved"}
    )
    assert resp.status_code == 200
    return resp.json()["data"]


def restaurant_ids(client):
    return [r["id"] for r in client.get("/api/restaurants").json()["data"]]


def test_create_submission_normalises_and_starts_pending(client):
    data = create_submission(client)
    assert data["restaurantName"] == "Joe's"
    assert data["recommendedMenu"] == ["Margherita", "Pepperoni"]
    assert data["status"] == "pending"
    assert data["restaurantId"] is None
    assert data["submitterEmail"] == "ann@example.com"


def test_create_submission_ignores_client_status_and_restaurant_id(client):
    data = create_submission(client, status="approved", restaurantId=42)
    assert data["status"] == "pending"
    assert data["restaurantId"] is None
    assert restaurant_ids(client) == []


def test_create_submission_fills_optional_fields_with_empty_strings(client):
    resp = client.post(
        "/api/submissions",
        json={"restaurantName": "A", "category": "B", "location": "C"},
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["priceRange"] == ""
    assert data["review"] == ""
    assert data["submitterName"] == ""
    assert data["submitterEmail"] == ""
    assert data["recommendedMenu"] == []


@pytest.mark.parametrize(
    "menu, expected",
    [
        (["a", "b"], ["a", "b"]),
        ("a, b, ,c", ["a", "b", "c"]),
        ("", []),
        (None, []),
        (42, []),
        ({"x": 1}, []),
    ],
)
def test_create_submission_menu_forms(client, menu, expected):
    data = create_submission(client, recommendedMenu=menu)
    assert data["recommendedMenu"] == expected


@pytest.mark.parametrize(
    "body, missing",
    [
        ({}, "restaurantName"),
        ({"category": "B", "location": "C"}, "restaurantName"),
        ({"restaurantName": "", "category": "B", "location": "C"}, "restaurantName"),
        ({"restaurantName": "A"}, "category"),
        ({"restaurantName": "A", "location": "C"}, "category"),
        ({"restaurantName": "A", "category": "B"}, "location"),
    ],
)
def test_create_submission_reports_first_missing_field(client, body, missing):
    resp = client.post("/api/submissions", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": {"message": f"'{missing}' is required"}}


def test_list_submissions_filters_by_status(client):
    first = create_submission(client)
    second = create_submission(client, restaurantName="Second")
    approve(client, second["id"])

    all_items = client.get("/api/submissions").json()["data"]
    assert [s["id"] for s in all_items] == [first["id"], second["id"]]

    pending = client.get("/api/submissions", params={"status": "pending"}).json()["data"]
    assert [s["id"] for s in pending] == [first["id"]]

    approved = client.get("/api/submissions", params={"status": "approved"}).json()["data"]
    assert [s["id"] for s in approved] == [second["id"]]


def test_list_submissions_rejects_unknown_status(client):
    resp = client.get("/api/submissions", params={"status": "archived"})
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_get_submission(client):
    created = create_submission(client)
    resp = client.get(f"/api/submissions/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"]["restaurantName"] == "Joe's"


@pytest.mark.parametrize("method", ["get", "delete"])
def test_missing_submission_returns_404(client, method):
    resp = getattr(client, method)("/api/submissions/999")
    assert resp.status_code == 404
    assert resp.json() == {"error": {"message": "Submission not found"}}


def test_patch_missing_submission_returns_404(client):
    resp = client.patch("/api/submissions/999", json={"status": "approved"})
    assert resp.status_code == 404
    assert resp.json() == {"error": {"message": "Submission not found"}}
    assert restaurant_ids(client) == []


def test_approve_creates_linked_restaurant(client):
    created = create_submission(client)
    data = approve(client, created["id"])

    assert data["status"] == "approved"
    assert data["restaurantId"] is not None

    restaurant = client.get(f"/api/restaurants/{data['restaurantId']}").json()["data"]
    assert restaurant["name"] == "Joe's"
    assert restaurant["category"] == "Pizza"
    assert restaurant["location"] == "Downtown"
    assert restaurant["priceRange"] == "$$"
    assert restaurant["description"] == "Great"
    assert restaurant["recommendedMenu"] == ["Margherita", "Pepperoni"]


def test_approve_twice_creates_only_one_restaurant(client):
    created = create_submission(client)
    first = approve(client, created["id"])
    second = approve(client, created["id"])

    assert second["restaurantId"] == first["restaurantId"]
    assert restaurant_ids(client) == [first["restaurantId"]]


def test_reject_approved_submission_deletes_restaurant(client):
    created = create_submission(client)
    approved = approve(client, created["id"])

    resp = client.patch(f"/api/submissions/{created['id']}", json={"status": "rejected"})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "rejected"
    assert data["restaurantId"] is None
    assert client.get(f"/api/restaurants/{approved['restaurantId']}").status_code == 404


def test_reject_pending_submission_leaves_restaurants_alone(client):
    other = client.post("/api/restaurants", json={"name": "Other"}).json()["data"]
    created = create_submission(client)

    resp = client.patch(f"/api/submissions/{created['id']}", json={"status": "rejected"})
    assert resp.status_code == 200
    assert resp.json()["data"]["restaurantId"] is None
    assert restaurant_ids(client) == [other["id"]]


def test_approve_after_reject_creates_new_restaurant(client):
    created = create_submission(client)
    first = approve(client, created["id"])
    client.patch(f"/api/submissions/{created['id']}", json={"status": "rejected"})
    second = approve(client, created["id"])

    assert second["restaurantId"] is not None
    assert second["restaurantId"] != first["restaurantId"]
    assert restaurant_ids(client) == [second["restaurantId"]]


def test_update_merges_only_present_fields(client):
    created = create_submission(client)
    resp = client.patch(
        f"/api/submissions/{created['id']}",
        json={"review": "Even better", "location": None},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["review"] == "Even better"
    assert data["location"] == "Downtown"
    assert data["status"] == "pending"


def test_update_replaces_menu_only_with_a_list(client):
    created = create_submission(client)

    kept = client.patch(
        f"/api/submissions/{created['id']}", json={"recommendedMenu": "Calzone"}
    ).json()["data"]
    assert kept["recommendedMenu"] == ["Margherita", "Pepperoni"]

    replaced = client.patch(
        f"/api/submissions/{created['id']}", json={"recommendedMenu": ["Calzone"]}
    ).json()["data"]
    assert replaced["recommendedMenu"] == ["Calzone"]


def test_update_ignores_restaurant_id_from_client(client):
    created = create_submission(client)
    resp = client.patch(f"/api/submissions/{created['id']}", json={"restaurantId": 77})
    assert resp.status_code == 200
    assert resp.json()["data"]["restaurantId"] is None


def test_update_rejects_unknown_status(client):
    created = create_submission(client)
    resp = client.patch(f"/api/submissions/{created['id']}", json={"status": "done"})
    assert resp.status_code == 400
    assert client.get(f"/api/submissions/{created['id']}").json()["data"]["status"] == "pending"


def test_delete_approved_submission_deletes_restaurant(client):
    created = create_submission(client)
    approved = approve(client, created["id"])

    resp = client.delete(f"/api/submissions/{created['id']}")
    assert resp.status_code == 204
    assert client.get(f"/api/submissions/{created['id']}").status_code == 404
    assert client.get(f"/api/restaurants/{approved['restaurantId']}").status_code == 404


def test_delete_pending_submission_keeps_other_restaurants(client):
    other = client.post("/api/restaurants", json={"name": "Other"}).json()["data"]
    created = create_submission(client)

    resp = client.delete(f"/api/submissions/{created['id']}")
    assert resp.status_code == 204
    assert restaurant_ids(client) == [other["id"]]


def test_delete_submission_whose_restaurant_is_already_gone(client):
    created = create_submission(client)
    approved = approve(client, created["id"])
    client.delete(f"/api/restaurants/{approved['restaurantId']}")

    resp = client.delete(f"/api/submissions/{created['id']}")
    assert resp.status_code == 204
    assert client.get(f"/api/submissions/{created['id']}").status_code == 404


def test_failed_save_after_approval_removes_created_restaurant(client, monkeypatch):
    created = create_submission(client)

    async def failing_update(db, submission, payload):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(submission_service, "update_submission", failing_update)

    resp = client.patch(f"/api/submissions/{created['id']}", json={"status": "approved"})
    assert resp.status_code == 500
    assert resp.json() == {"error": {"message": "Internal server error"}}

    monkeypatch.undo()
    assert restaurant_ids(client) == []
    stored = client.get(f"/api/submissions/{created['id']}").json()["data"]
    assert stored["status"] == "pending"
    assert stored["restaurantId"] is None


def test_delete_submission_with_stale_link_keeps_newer_restaurant(client):
    created = create_submission(client)
    approved = approve(client, created["id"])
    client.delete(f"/api/restaurants/{approved['restaurantId']}")

    newer = client.post("/api/restaurants", json={"name": "Unrelated"}).json()["data"]
    assert newer["id"] != approved["restaurantId"]

    resp = client.delete(f"/api/submissions/{created['id']}")
    assert resp.status_code == 204
    assert client.get(f"/api/restaurants/{newer['id']}").status_code == 200


def test_reject_with_stale_link_keeps_newer_restaurant(client):
    created = create_submission(client)
    approved = approve(client, created["id"])
    client.delete(f"/api/restaurants/{approved['restaurantId']}")
    newer = client.post("/api/restaurants", json={"name": "Unrelated"}).json()["data"]

    resp = client.patch(f"/api/submissions/{created['id']}", json={"status": "rejected"})
    assert resp.status_code == 200
    assert resp.json()["data"]["restaurantId"] is None
    assert restaurant_ids(client) == [newer["id"]]


def test_create_submission_drops_null_menu_entries(client):
    data = create_submission(client, recommendedMenu=["x", None, 3])
    assert data["recommendedMenu"] == ["x", "3"]
