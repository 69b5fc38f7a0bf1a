"""
Integration tests for the items endpoints.

Tests cover:
- CRUD round trips through the HTTP API
- Category filter, pagination and X-Total-Count
- 404 / 400 / 401 / 422 error mapping
"""

import pytest

from lessons_api.repositories.item_repo import ItemRepository


def create(client, **overrides):
    payload = {"name": "Widget", "price": 9.5, "quantity": 4, "category": "other"}
    payload.update(overrides)
    response = client.post("/items", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateAndRead:
    """POST /items and GET /items/{item_id}."""

    def test_create_returns_201_with_id(self, client, sample_item):
        response = client.post("/items", json=sample_item)

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 1
        assert body["name"] == sample_item["name"]
        assert body["category"] == "electronics"

    def test_create_then_get(self, client, sample_item):
        created = client.post("/items", json=sample_item).json()

        response = client.get(f"/items/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_create_applies_defaults(self, client):
        body = client.post("/items", json={"name": "Pen", "price": 1.25}).json()
        assert body["quantity"] == 0
        assert body["category"] == "other"
        assert body["description"] is None

    def test_get_missing_item_returns_404(self, client):
        response = client.get("/items/99")

        assert response.status_code == 404
        assert response.json() == {
            "detail": "Item 99 not found",
            "error_code": "ITEM_NOT_FOUND",
        }

    @pytest.mark.parametrize("item_id", ["0", "-1", "abc"])
    def test_invalid_item_id_returns_422(self, client, item_id):
        assert client.get(f"/items/{item_id}").status_code == 422

    @pytest.mark.parametrize(
        "payload, field",
        [
            ({"price": 1.0}, "name"),
            ({"name": "Pen"}, "price"),
            ({"name": "Pen", "price": -5}, "price"),
            ({"name": "Pen", "price": 1.0, "quantity": -1}, "quantity"),
            ({"name": "Pen", "price": 1.0, "category": "toys"}, "category"),
            ({"name": "   ", "price": 1.0}, "name"),
        ],
    )
    def test_invalid_body_returns_422(self, client, payload, field):
        response = client.post("/items", json=payload)

        assert response.status_code == 422
        locs = [tuple(err["loc"]) for err in response.json()["detail"]]
        assert ("body", field) in locs

    def test_invalid_body_not_stored(self, client, item_repo: ItemRepository):
        client.post("/items", json={"name": "Pen", "price": 0})
        assert item_repo.count() == 0


class TestListItems:
    """GET /items."""

    def test_empty_list(self, client):
        response = client.get("/items")

        assert response.status_code == 200
        assert response.json() == []
        assert response.headers["X-Total-Count"] == "0"

    def test_lists_all_in_order(self, client):
        for name in ("A", "B", "C"):
            create(client, name=name)

        response = client.get("/items")

        assert [item["name"] for item in response.json()] == ["A", "B", "C"]
        assert response.headers["X-Total-Count"] == "3"

    def test_filter_by_category(self, client):
        create(client, name="Novel", category="books")
        create(client, name="Phone", category="electronics")
        create(client, name="Atlas", category="books")

        response = client.get("/items", params={"category": "books"})

        assert [item["name"] for item in response.json()] == ["Novel", "Atlas"]
        assert response.headers["X-Total-Count"] == "2"

    def test_unknown_category_filter_returns_422(self, client):
        assert client.get("/items", params={"category": "toys"}).status_code == 422

    def test_pagination(self, client):
        for i in range(5):
            create(client, name=f"Item {i}")

        response = client.get("/items", params={"limit": 2, "offset": 2})

        assert [item["name"] for item in response.json()] == ["Item 2", "Item 3"]
        assert response.headers["X-Total-Count"] == "5"

    def test_limit_and_offset_are_clamped(self, client):
        for i in range(3):
            create(client, name=f"Item {i}")

        response = client.get("/items", params={"limit": 0, "offset": -4})

        assert [item["name"] for item in response.json()] == ["Item 0"]


class TestReplaceAndUpdate:
    """PUT and PATCH /items/{item_id}."""

    def test_put_replaces_item(self, client):
        created = create(client, name="Old", description="old")

        response = client.put(
            f"/items/{created['id']}",
            json={"name": "New", "price": 3.0},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == created["id"]
        assert body["name"] == "New"
        assert body["description"] is None
        assert body["quantity"] == 0

    def test_put_missing_returns_404(self, client):
        response = client.put("/items/5", json={"name": "New", "price": 3.0})
        assert response.status_code == 404
        assert response.json()["error_code"] == "ITEM_NOT_FOUND"

    def test_patch_updates_only_given_fields(self, client):
        created = create(client, name="Lamp", price=20.0, quantity=2)

        response = client.patch(f"/items/{created['id']}", json={"price": 15.0})

        assert response.status_code == 200
        body = response.json()
        assert body["price"] == 15.0
        assert body["name"] == "Lamp"
        assert body["quantity"] == 2

    def test_patch_empty_body_is_noop(self, client):
        created = create(client)

        response = client.patch(f"/items/{created['id']}", json={})

        assert response.status_code == 200
        assert response.json() == created

    def test_patch_missing_returns_404(self, client):
        assert client.patch("/items/8", json={"price": 1.0}).status_code == 404

    def test_patch_invalid_value_returns_422(self, client):
        created = create(client)
        assert client.patch(f"/items/{created['id']}", json={"price": 0}).status_code == 422

    @pytest.mark.parametrize("payload", [
        {"price": None},
        {"quantity": None},
        {"name": None},
        {"category": None},
        {"quantity": None, "name": None},
    ])
    def test_patch_null_for_required_field_returns_422(self, client, payload):
        created = create(client)

        response = client.patch(f"/items/{created['id']}", json=payload)

        assert response.status_code == 422
        assert client.get(f"/items/{created['id']}").json() == created

    def test_patch_null_description_clears_it(self, client):
        created = create(client, description="Blue")

        response = client.patch(f"/items/{created['id']}", json={"description": None})

        assert response.status_code == 200
        assert response.json()["description"] is None

    def test_purchase_after_rejected_null_patch(self, client):
        created = create(client, quantity=3)
        client.patch(f"/items/{created['id']}", json={"quantity": None, "name": None})

        response = client.post(f"/items/{created['id']}/purchase", json={"quantity": 1})

        assert response.status_code == 200
        assert response.json()["quantity"] == 2


class TestDelete:
    """DELETE /items/{item_id} with bearer token."""

    def test_delete_with_token(self, client, auth_headers):
        created = create(client)

        response = client.delete(f"/items/{created['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/items/{created['id']}").status_code == 404

    def test_delete_without_token_returns_401(self, client, item_repo: ItemRepository):
        created = create(client)

        response = client.delete(f"/items/{created['id']}")

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_FAILED"
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert item_repo.count() == 1

    def test_delete_with_wrong_token_returns_401(self, client):
        created = create(client)

        response = client.delete(
            f"/items/{created['id']}",
            headers={"Authorization": "Bearer not-the-token"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid authentication token"

    def test_delete_missing_returns_404(self, client, auth_headers):
        assert client.delete("/items/3", headers=auth_headers).status_code == 404

    def test_ids_not_reused_after_delete(self, client, auth_headers):
        create(client, name="a")
        second = create(client, name="b")
        client.delete(f"/items/{second['id']}", headers=auth_headers)

        assert create(client, name="c")["id"] == 3


class TestPurchase:
    """POST /items/{item_id}/purchase."""

    def test_purchase_decrements_stock(self, client):
        created = create(client, quantity=5)

        response = client.post(f"/items/{created['id']}/purchase", json={"quantity": 3})

        assert response.status_code == 200
        assert response.json()["quantity"] == 2

    def test_purchase_defaults_to_one_unit(self, client):
        created = create(client, quantity=5)

        response = client.post(f"/items/{created['id']}/purchase", json={})

        assert response.json()["quantity"] == 4

    def test_insufficient_stock_returns_400(self, client):
        created = create(client, quantity=1)

        response = client.post(f"/items/{created['id']}/purchase", json={"quantity": 2})

        assert response.status_code == 400
        assert response.json() == {
            "detail": f"Item {created['id']} has 1 in stock, 2 requested",
            "error_code": "INSUFFICIENT_STOCK",
        }
        assert client.get(f"/items/{created['id']}").json()["quantity"] == 1

    def test_purchase_missing_item_returns_404(self, client):
        response = client.post("/items/77/purchase", json={"quantity": 1})
        assert response.status_code == 404

    def test_purchase_zero_returns_422(self, client):
        created = create(client)
        response = client.post(f"/items/{created['id']}/purchase", json={"quantity": 0})
        assert response.status_code == 422
