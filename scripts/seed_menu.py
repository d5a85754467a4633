#!/usr/bin/env python3
"""Seed menu catalog script.

Creates the database tables and loads a small sample menu
(categories, sub-categories and items).

Usage:
    python scripts/seed_menu.py
    python scripts/seed_menu.py --no-create-tables
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.catalog.seed import seed_menu
from app.catalog.service import CatalogService
from app.infrastructure.database import async_session_factory, create_tables
from app.infrastructure.logging_config import configure_logging


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the menu catalog with sample data",
    )
    parser.add_argument(
        "--no-create-tables",
        action="store_true",
        help="Don't create tables before seeding",
    )

    args = parser.parse_args()
    configure_logging()

    print("=" * 60)
    print("Menu Catalog Seeder")
    print("=" * 60)

    if not args.no_create_tables:
        print("Creating database tables...")
        await create_tables()
        print("Tables ready.")
        print()

    async with async_session_factory() as session:
        result = await seed_menu(CatalogService(session))

    print(f"  ✓ Categories: {result['categories']}")
    print(f"  ✓ Sub-categories: {result['subcategories']}")
    print(f"  ✓ Items: {result['items']}")
    print(f"  - Skipped existing categories: {result['skipped']}")
    print()
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
