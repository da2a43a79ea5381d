"""Feature definition repositories.

One repository class serves both hierarchies; it is bound to a
definition model and its category model at construction time.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from listings.catalog.models import (
    ConstructionCategory,
    ConstructionFeatureDefinition,
    ProductCategory,
    ProductFeatureDefinition,
)
from listings.domain.features import FeatureDefinition, FeatureType

DefinitionModel = type[ProductFeatureDefinition] | type[ConstructionFeatureDefinition]
CategoryModel = type[ProductCategory] | type[ConstructionCategory]


def _to_domain(row: ProductFeatureDefinition | ConstructionFeatureDefinition) -> FeatureDefinition:
    return FeatureDefinition(
        id=row.id,
        name=row.name,
        feature_type=FeatureType.from_declared(row.type),
        is_required=row.is_required,
        category_id=row.category_id,
        description=row.description,
    )


class FeatureDefinitionRepository:
    """Reads feature definitions and category existence for one hierarchy.

    Example usage:
        repo = FeatureDefinitionRepository.for_products(session)
        definitions = await repo.get_by_category(3)
    """

    def __init__(
        self,
        session: AsyncSession,
        definition_model: DefinitionModel,
        category_model: CategoryModel,
    ) -> None:
        """Initialize repository.

        Args:
            session: Async SQLAlchemy session.
            definition_model: Feature definition ORM model.
            category_model: Category ORM model of the same hierarchy.
        """
        self.session = session
        self.definition_model = definition_model
        self.category_model = category_model

    @classmethod
    def for_products(cls, session: AsyncSession) -> "FeatureDefinitionRepository":
        """Repository over the product hierarchy."""
        return cls(session, ProductFeatureDefinition, ProductCategory)

    @classmethod
    def for_constructions(cls, session: AsyncSession) -> "FeatureDefinitionRepository":
        """Repository over the construction hierarchy."""
        return cls(session, ConstructionFeatureDefinition, ConstructionCategory)

    async def get_by_category(self, category_id: int) -> list[FeatureDefinition]:
        """Get every live feature definition declared by a category.

        Args:
            category_id: Category ID.

        Returns:
            Definitions ordered by ID.
        """
        model = self.definition_model
        result = await self.session.execute(
            select(model)
            .where(model.category_id == category_id, model.deleted_at.is_(None))
            .order_by(model.id)
        )
        return [_to_domain(row) for row in result.scalars().all()]

    async def get_by_id(self, feature_id: int) -> FeatureDefinition | None:
        """Get a feature definition by ID, regardless of its category."""
        model = self.definition_model
        result = await self.session.execute(
            select(model).where(model.id == feature_id, model.deleted_at.is_(None))
        )
        row = result.scalar_one_or_none()
        return _to_domain(row) if row is not None else None

    async def category_exists(self, category_id: int) -> bool:
        """Check that a live category exists."""
        model = self.category_model
        result = await self.session.execute(
            select(func.count())
            .select_from(model)
            .where(model.id == category_id, model.deleted_at.is_(None))
        )
        return result.scalar_one() > 0
