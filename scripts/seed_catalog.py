#!/usr/bin/env python3
"""Seed category taxonomies script.

Loads the embedded product and construction category trees, with their
feature definitions, into the database.

Usage:
    python scripts/seed_catalog.py --kind product
    python scripts/seed_catalog.py --kind construction
    python scripts/seed_catalog.py --all --create-tables
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import listings.catalog.models  # noqa: F401,E402
import listings.infrastructure.models  # noqa: F401,E402
from listings.catalog.service import CatalogSeeder  # noqa: E402
from listings.infrastructure.database import Base, async_session_factory, engine  # noqa: E402


async def create_tables() -> None:
    """Create database tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_kind(kind: str) -> dict:
    """Seed one category hierarchy.

    Args:
        kind: "product" or "construction".

    Returns:
        Seeding result.
    """
    async with async_session_factory() as session:
        result = await CatalogSeeder(session).seed(kind)
        await session.commit()
        return result


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed category taxonomies and feature definitions",
    )
    parser.add_argument(
        "--kind",
        choices=["product", "construction"],
        default="product",
        help="Hierarchy to seed (default: product)",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Seed both the product and the construction hierarchy",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables first (development databases without migrations)",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Listings Taxonomy Seeder")
    print("=" * 60)

    if args.create_tables:
        print("Creating database tables...")
        await create_tables()
        print("Tables ready.")
        print()

    kinds = ["product", "construction"] if args.all else [args.kind]

    for kind in kinds:
        print(f"Seeding {kind} taxonomy...")

        try:
            result = await seed_kind(kind)

            print(f"  ✓ Categories in taxonomy: {result['categories_total']}")
            print(f"  ✓ Categories created: {result['categories_created']}")
            print(f"  ✓ Features created: {result['features_created']}")
            print()
        except Exception as e:
            print(f"  ✗ Error: {e}")
            raise

    await engine.dispose()

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
