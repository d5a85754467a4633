"""Sample menu used to seed an empty catalog."""

from typing import Any

import structlog

from app.catalog.service import CatalogService
from app.domain.exceptions import ConflictError

logger = structlog.get_logger()

SAMPLE_MENU: list[dict[str, Any]] = [
    {
        "name": "Beverages",
        "image": "https://example.com/images/beverages.jpg",
        "description": "Hot and cold drinks",
        "tax_applicability": True,
        "tax": 5,
        "tax_type": "percentage",
        "subcategories": [
            {
                "name": "Soda",
                "image": "https://example.com/images/soda.jpg",
                "items": [
                    {
                        "name": "Cola",
                        "image": "https://example.com/images/cola.jpg",
                        "base_amount": 50,
                    },
                    {
                        "name": "Lemonade",
                        "image": "https://example.com/images/lemonade.jpg",
                        "base_amount": 60,
                        "discount": 10,
                    },
                ],
            },
            {
                "name": "Coffee",
                "image": "https://example.com/images/coffee.jpg",
                "tax": 12,
                "items": [
                    {
                        "name": "Espresso",
                        "image": "https://example.com/images/espresso.jpg",
                        "base_amount": 90,
                    },
                ],
            },
        ],
        "items": [
            {
                "name": "Mineral Water",
                "image": "https://example.com/images/water.jpg",
                "base_amount": 20,
                "tax_applicability": False,
            },
        ],
    },
    {
        "name": "Mains",
        "image": "https://example.com/images/mains.jpg",
        "description": "Pizza, pasta and burgers",
        "subcategories": [
            {
                "name": "Pizza",
                "image": "https://example.com/images/pizza.jpg",
                "items": [
                    {
                        "name": "Pizza Margherita",
                        "image": "https://example.com/images/margherita.jpg",
                        "base_amount": 100,
                        "discount": 15,
                    },
                    {
                        "name": "Pizza Diavola",
                        "image": "https://example.com/images/diavola.jpg",
                        "base_amount": 120,
                    },
                ],
            },
        ],
        "items": [],
    },
]


async def seed_menu(
    service: CatalogService,
    menu: list[dict[str, Any]] | None = None,
) -> dict[str, int]:
    """Load a menu tree through the catalog service.

    Categories whose name already exists are skipped together with
    everything below them, so the function can be re-run safely.

    Args:
        service: Catalog service bound to an open session.
        menu: Menu tree, defaults to ``SAMPLE_MENU``.

    Returns:
        Counts of created and skipped records.
    """
    counts = {"categories": 0, "subcategories": 0, "items": 0, "skipped": 0}

    for entry in menu if menu is not None else SAMPLE_MENU:
        category_data = {
            k: v for k, v in entry.items() if k not in ("subcategories", "items")
        }
        try:
            category = await service.create_category(**category_data)
        except ConflictError:
            logger.info("Category exists, skipping", name=entry["name"])
            counts["skipped"] += 1
            continue
        counts["categories"] += 1

        for sub_entry in entry.get("subcategories", []):
            sub_data = {k: v for k, v in sub_entry.items() if k != "items"}
            view = await service.create_subcategory(category_id=category.id, **sub_data)
            counts["subcategories"] += 1

            for item_data in sub_entry.get("items", []):
                await service.create_item(
                    category_id=category.id,
                    subcategory_id=view.subcategory.id,
                    **item_data,
                )
                counts["items"] += 1

        for item_data in entry.get("items", []):
            await service.create_item(category_id=category.id, **item_data)
            counts["items"] += 1

    return counts
