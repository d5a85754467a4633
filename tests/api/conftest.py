"""Shared fixtures for API tests."""

from collections.abc import Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.infrastructure.config import settings

IMAGE = "https://example.com/image.jpg"


def api(path: str) -> str:
    """Prefix a path with the configured API prefix."""
    return f"{settings.api_prefix}{path}"


@pytest.fixture
def create_category(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Create a category through the API and return its JSON."""

    def _create(name: str = "Beverages", **fields: Any) -> dict[str, Any]:
        response = client.post(api("/categories"), json={"name": name, "image": IMAGE, **fields})
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_subcategory(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Create a subcategory through the API and return its JSON."""

    def _create(category_id: str, name: str = "Soda", **fields: Any) -> dict[str, Any]:
        response = client.post(
            api("/subcategories"),
            json={"name": name, "image": IMAGE, "category_id": category_id, **fields},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_item(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Create an item through the API and return its JSON."""

    def _create(
        category_id: str,
        name: str = "Cola",
        base_amount: float = 10,
        **fields: Any,
    ) -> dict[str, Any]:
        response = client.post(
            api("/items"),
            json={
                "name": name,
                "image": IMAGE,
                "category_id": category_id,
                "base_amount": base_amount,
                **fields,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
