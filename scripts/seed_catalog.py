#!/usr/bin/env python3
"""Seed product catalog script.

Generates and stores a deterministic sample catalog.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --seed 7 --per-category 10
    python scripts/seed_catalog.py --no-clear --no-photos
"""

import argparse
import asyncio

from storefront.catalog.generator import GeneratorConfig
from storefront.catalog.service import CatalogService
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import async_session_factory, create_tables, engine
from storefront.infrastructure.logging import configure_logging


async def seed(config: GeneratorConfig, clear: bool) -> dict:
    """Create tables and seed the catalog.

    Args:
        config: Generator configuration.
        clear: Whether to clear existing products.

    Returns:
        Seeding result.
    """
    await create_tables()
    async with async_session_factory() as session:
        service = CatalogService(session)
        result = await service.seed_catalog(config=config, clear_existing=clear)
    await engine.dispose()
    return result


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the storefront product catalog")
    parser.add_argument(
        "--seed",
        type=int,
        default=settings.catalog_seed,
        help="Random seed (default: from settings)",
    )
    parser.add_argument(
        "--per-category",
        type=int,
        default=4,
        help="Products per category (default: 4)",
    )
    parser.add_argument(
        "--no-photos",
        action="store_true",
        help="Don't attach placeholder photos",
    )
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Keep existing products; reuse categories and skip clashing products",
    )
    args = parser.parse_args()

    configure_logging(settings.log_level)

    config = GeneratorConfig(
        seed=args.seed,
        products_per_category=args.per_category,
        include_photos=not args.no_photos,
    )

    print("=" * 60)
    print("Storefront Catalog Seeder")
    print("=" * 60)
    print(f"Database: {settings.database_url}")
    print(f"Seed: {config.seed}")
    print(f"Clear existing: {not args.no_clear}")
    print()

    result = asyncio.run(seed(config, clear=not args.no_clear))

    print(f"  ✓ Deleted: {result['deleted']} existing products")
    print(f"  ✓ Categories: {result['categories_created']}")
    print(f"  ✓ Products: {result['products_created']}")
    print(f"  ✓ Skipped: {result['skipped']} clashing products")
    print()
    print("Seeding complete!")


if __name__ == "__main__":
    main()
