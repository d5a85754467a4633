"""Tests for item API endpoints."""

import pytest
from fastapi.testclient import TestClient

from app.catalog.service import CatalogService
from app.domain.exceptions import StorageError
from app.infrastructure.config import settings

PREFIX = settings.api_prefix
IMAGE = "https://example.com/image.jpg"


class TestCreateItem:
    """Tests for POST /items."""

    def test_create_item_success(self, client: TestClient, create_category) -> None:
        category = create_category("Mains")
        response = client.post(
            f"{PREFIX}/items",
            json={
                "name": "Pizza Margherita",
                "image": IMAGE,
                "description": "Tomato and mozzarella",
                "category_id": category["id"],
                "base_amount": 100,
                "discount": 15,
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["category_id"] == category["id"]
        assert data["category_name"] == "Mains"
        assert data["subcategory_id"] is None
        assert data["base_amount"] == 100
        assert data["discount"] == 15
        assert data["total_amount"] == 85

    def test_discount_defaults_to_zero(self, client: TestClient, create_category) -> None:
        category = create_category("Mains")
        response = client.post(
            f"{PREFIX}/items",
            json={"name": "Burger", "image": IMAGE, "category_id": category["id"], "base_amount": 40},
        )
        assert response.status_code == 201
        assert response.json()["discount"] == 0
        assert response.json()["total_amount"] == 40

    def test_missing_base_amount(self, client: TestClient, create_category) -> None:
        category = create_category("Mains")
        response = client.post(
            f"{PREFIX}/items",
            json={"name": "Burger", "image": IMAGE, "category_id": category["id"]},
        )
        assert response.status_code == 400

    def test_unknown_category(self, client: TestClient) -> None:
        response = client.post(
            f"{PREFIX}/items",
            json={"name": "Burger", "image": IMAGE, "category_id": "missing", "base_amount": 1},
        )
        assert response.status_code == 404
        assert response.json() == {"message": "Parent category not found"}

    def test_unknown_subcategory(self, client: TestClient, create_category) -> None:
        category = create_category("Mains")
        response = client.post(
            f"{PREFIX}/items",
            json={
                "name": "Burger",
                "image": IMAGE,
                "category_id": category["id"],
                "subcategory_id": "missing",
                "base_amount": 1,
            },
        )
        assert response.status_code == 404
        assert response.json() == {"message": "Parent sub-category not found"}

    def test_subcategory_of_other_category_rejected(
        self, client: TestClient, create_category, create_subcategory
    ) -> None:
        drinks = create_category("Beverages")
        food = create_category("Mains")
        pizza = create_subcategory(food["id"], "Pizza")

        response = client.post(
            f"{PREFIX}/items",
            json={
                "name": "Cola",
                "image": IMAGE,
                "category_id": drinks["id"],
                "subcategory_id": pizza["id"],
                "base_amount": 10,
            },
        )
        assert response.status_code == 400
        assert response.json() == {
            "message": "Sub-category does not belong to the provided category"
        }
        assert client.get(f"{PREFIX}/items").json() == []

    def test_inherits_category_tax_through_empty_subcategory(
        self, client: TestClient, create_category, create_subcategory, create_item
    ) -> None:
        category = create_category("Beverages", tax_applicability=True, tax=5)
        soda = create_subcategory(category["id"], "Soda")
        client.patch(f"{PREFIX}/subcategories/{soda['id']}", json={"tax": None})

        item = create_item(category["id"], "Cola", subcategory_id=soda["id"])
        assert item["tax"] == 5
        assert item["tax_applicability"] is True

    def test_explicit_item_values_win(
        self, client: TestClient, create_category, create_subcategory, create_item
    ) -> None:
        category = create_category("Beverages", tax_applicability=True, tax=5)
        soda = create_subcategory(category["id"], "Soda", tax=8)

        item = create_item(
            category["id"],
            "Water",
            subcategory_id=soda["id"],
            tax_applicability=False,
            tax=0,
        )
        assert item["tax_applicability"] is False
        assert item["tax"] == 0


class TestReadItems:
    """Tests for GET /items and GET /items/{id}."""

    def test_list_items(self, client: TestClient, create_category, create_item) -> None:
        category = create_category("Mains")
        create_item(category["id"], "Burger")
        create_item(category["id"], "Fries")

        response = client.get(f"{PREFIX}/items")
        assert response.status_code == 200
        data = response.json()
        assert {i["name"] for i in data} == {"Burger", "Fries"}
        assert all("total_amount" in i for i in data)

    def test_get_item(self, client: TestClient, create_category, create_item) -> None:
        category = create_category("Mains")
        item = create_item(category["id"], "Burger", base_amount=40, discount=5)

        response = client.get(f"{PREFIX}/items/{item['id']}")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Burger"
        assert data["total_amount"] == 35
        assert data["category_name"] == "Mains"

    def test_get_item_not_found(self, client: TestClient) -> None:
        response = client.get(f"{PREFIX}/items/missing")
        assert response.status_code == 404
        assert response.json() == {"message": "Item not found"}


class TestSearchItems:
    """Tests for GET /items/search."""

    def test_search_matches_case_insensitively(
        self, client: TestClient, create_category, create_item
    ) -> None:
        category = create_category("Mains")
        create_item(category["id"], "Pizza Margherita")
        create_item(category["id"], "Garlic Bread")

        response = client.get(f"{PREFIX}/items/search", params={"name": "piz"})
        assert response.status_code == 200
        assert [i["name"] for i in response.json()] == ["Pizza Margherita"]

    def test_search_without_term(self, client: TestClient) -> None:
        response = client.get(f"{PREFIX}/items/search")
        assert response.status_code == 400
        assert response.json() == {"message": 'Search query "name" is required.'}

    def test_search_with_empty_term(self, client: TestClient) -> None:
        response = client.get(f"{PREFIX}/items/search", params={"name": ""})
        assert response.status_code == 400

    def test_search_no_match(self, client: TestClient, create_category, create_item) -> None:
        category = create_category("Mains")
        create_item(category["id"], "Burger")
        response = client.get(f"{PREFIX}/items/search", params={"name": "sushi"})
        assert response.status_code == 200
        assert response.json() == []


class TestEditItem:
    """Tests for PATCH /items/{id}."""

    def test_total_amount_follows_edit(
        self, client: TestClient, create_category, create_item
    ) -> None:
        category = create_category("Mains")
        item = create_item(category["id"], "Pizza Margherita", base_amount=100, discount=15)
        assert item["total_amount"] == 85

        response = client.patch(
            f"{PREFIX}/items/{item['id']}",
            json={"base_amount": 120, "total_amount": 1},
        )
        assert response.status_code == 200
        assert response.json()["total_amount"] == 105
        assert client.get(f"{PREFIX}/items/{item['id']}").json()["total_amount"] == 105

    def test_edit_not_found(self, client: TestClient) -> None:
        response = client.patch(f"{PREFIX}/items/missing", json={"name": "x"})
        assert response.status_code == 404

    def test_edit_rejects_null_base_amount(
        self, client: TestClient, create_category, create_item
    ) -> None:
        category = create_category("Mains")
        item = create_item(category["id"], "Burger")
        response = client.patch(f"{PREFIX}/items/{item['id']}", json={"base_amount": None})
        assert response.status_code == 400

    def test_refile_orphaned_item(
        self, client: TestClient, create_category, create_subcategory, create_item
    ) -> None:
        category = create_category("Beverages")
        old = create_subcategory(category["id"], "Old")
        new = create_subcategory(category["id"], "New")
        item = create_item(category["id"], "Cola", subcategory_id=old["id"])
        client.delete(f"{PREFIX}/subcategories/{old['id']}")

        response = client.patch(
            f"{PREFIX}/items/{item['id']}", json={"subcategory_id": new["id"]}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["subcategory_id"] == new["id"]
        assert data["subcategory_name"] == "New"

        listed = client.get(f"{PREFIX}/subcategories/{new['id']}/items").json()
        assert [i["id"] for i in listed] == [item["id"]]

    def test_detach_with_null_subcategory(
        self, client: TestClient, create_category, create_subcategory, create_item
    ) -> None:
        category = create_category("Beverages")
        soda = create_subcategory(category["id"], "Soda")
        item = create_item(category["id"], "Cola", subcategory_id=soda["id"])

        response = client.patch(f"{PREFIX}/items/{item['id']}", json={"subcategory_id": None})
        assert response.status_code == 200
        assert response.json()["subcategory_id"] is None

    def test_refile_into_unknown_subcategory(
        self, client: TestClient, create_category, create_item
    ) -> None:
        category = create_category("Beverages")
        item = create_item(category["id"], "Cola")

        response = client.patch(
            f"{PREFIX}/items/{item['id']}", json={"subcategory_id": "missing"}
        )
        assert response.status_code == 404
        assert response.json() == {"message": "Parent sub-category not found"}

    def test_refile_into_other_category_rejected(
        self, client: TestClient, create_category, create_subcategory, create_item
    ) -> None:
        drinks = create_category("Beverages")
        food = create_category("Mains")
        pizza = create_subcategory(food["id"], "Pizza")
        item = create_item(drinks["id"], "Cola")

        response = client.patch(
            f"{PREFIX}/items/{item['id']}", json={"subcategory_id": pizza["id"]}
        )
        assert response.status_code == 400
        assert response.json() == {
            "message": "Sub-category does not belong to the provided category"
        }
        assert client.get(f"{PREFIX}/items/{item['id']}").json()["subcategory_id"] is None


class TestDeleteItem:
    """Tests for DELETE /items/{id}."""

    def test_delete_item(self, client: TestClient, create_category, create_item) -> None:
        category = create_category("Mains")
        item = create_item(category["id"], "Burger")

        response = client.delete(f"{PREFIX}/items/{item['id']}")
        assert response.status_code == 200
        assert response.json() == {"message": "Item deleted successfully."}
        assert client.get(f"{PREFIX}/items/{item['id']}").status_code == 404

    def test_delete_not_found(self, client: TestClient) -> None:
        response = client.delete(f"{PREFIX}/items/missing")
        assert response.status_code == 404
        assert response.json() == {"message": "Item not found"}


class TestStorageFailures:
    """Tests for database failures surfacing through the API."""

    def test_storage_error_returns_500(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def failing_list(self) -> list:
            raise StorageError("fetching items", "boom")

        monkeypatch.setattr(CatalogService, "list_items", failing_list)

        response = client.get(f"{PREFIX}/items")
        assert response.status_code == 500
        assert response.json() == {"message": "Error fetching items", "error": "boom"}
