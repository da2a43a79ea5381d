"""Catalog seeding service.

Loads the embedded category taxonomies, with their feature definitions,
into the database.
"""

from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from listings.catalog.models import (
    ConstructionCategory,
    ConstructionFeatureDefinition,
    ProductCategory,
    ProductFeatureDefinition,
)
from listings.catalog.taxonomy import TaxonomyParser

logger = structlog.get_logger()

MODELS = {
    "product": (ProductCategory, ProductFeatureDefinition),
    "construction": (ConstructionCategory, ConstructionFeatureDefinition),
}


class CatalogSeeder:
    """Seeds one category hierarchy from its embedded taxonomy.

    Categories keep their taxonomy IDs; those already present are
    skipped, so seeding twice is harmless.

    Example usage:
        async with async_session_factory() as session:
            result = await CatalogSeeder(session).seed("product")
            await session.commit()
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize seeder with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def seed(self, kind: str) -> dict[str, Any]:
        """Insert missing categories and their feature definitions.

        Args:
            kind: "product" or "construction".

        Returns:
            Seeding result with counts.

        Raises:
            ValueError: If kind is unknown.
        """
        if kind not in MODELS:
            raise ValueError(f"Unknown taxonomy kind: {kind}")
        category_model, feature_model = MODELS[kind]

        parser = TaxonomyParser()
        categories = sorted(parser.parse_embedded(kind), key=lambda c: (c.level, c.id))

        result = await self.session.execute(select(category_model.id))
        existing = set(result.scalars().all())

        categories_created = 0
        features_created = 0
        for level in sorted({c.level for c in categories}):
            pending = [c for c in categories if c.level == level and c.id not in existing]
            if not pending:
                continue

            for category in pending:
                self.session.add(
                    category_model(
                        id=category.id,
                        name=category.name,
                        parent_id=category.parent_id,
                    )
                )
            # Parents must exist before children and features reference them
            await self.session.flush()

            for category in pending:
                for feature in category.features:
                    self.session.add(
                        feature_model(
                            name=feature.name,
                            type=feature.type,
                            is_required=feature.is_required,
                            category_id=category.id,
                        )
                    )
                    features_created += 1
            categories_created += len(pending)
            await self.session.flush()

        logger.info(
            "Taxonomy seeded",
            kind=kind,
            categories_created=categories_created,
            features_created=features_created,
        )

        return {
            "kind": kind,
            "categories_total": len(categories),
            "categories_created": categories_created,
            "features_created": features_created,
        }
