"""Catalog repositories for database operations.

Provides tenant-scoped CRUD for products, variants and constructions,
the image upsert-by-remote-link and feature value upsert-by-feature-id
policies, soft deletion and the category listing query.
"""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from listings.catalog.models import (
    Construction,
    ConstructionCategory,
    ConstructionFeatureValue,
    ConstructionImage,
    Product,
    ProductCategory,
    ProductImage,
    Variant,
    VariantFeatureValue,
    VariantImage,
)
from listings.catalog.taxonomy import grandchild_category_ids
from listings.domain.features import FeatureValue


class CatalogRepository:
    """Operations shared by every catalog entity repository.

    Subclasses bind the entity's image and feature value tables through
    the ``image_model`` / ``feature_model`` and ``parent_key`` attributes.
    """

    image_model: Any = None
    feature_model: Any = None
    parent_key: str = ""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, entity: Any) -> Any:
        """Insert an entity with its nested collections.

        Args:
            entity: ORM entity to save.

        Returns:
            Saved entity with its ID populated.
        """
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def update_fields(self, entity: Any, fields: dict[str, Any]) -> Any:
        """Apply scalar field updates; associations are left untouched.

        Args:
            entity: Loaded ORM entity.
            fields: Column name to new value.

        Returns:
            Updated entity.
        """
        for name, value in fields.items():
            setattr(entity, name, value)
        await self.session.flush()
        return entity

    async def find_image_by_remote_link(self, parent_id: int, remote_link: str) -> Any | None:
        """Get a live image by (remote_link, parent ID)."""
        model = self.image_model
        result = await self.session.execute(
            select(model).where(
                model.remote_link == remote_link,
                getattr(model, self.parent_key) == parent_id,
                model.deleted_at.is_(None),
            )
        )
        return result.scalars().first()

    async def upsert_images(self, parent_id: int, remote_links: list[str]) -> None:
        """Overwrite images matched by remote link, insert the rest.

        Args:
            parent_id: Owning entity ID.
            remote_links: Submitted remote links.
        """
        for remote_link in remote_links:
            existing = await self.find_image_by_remote_link(parent_id, remote_link)
            if existing is not None:
                existing.remote_link = remote_link
            else:
                self.session.add(
                    self.image_model(remote_link=remote_link, **{self.parent_key: parent_id})
                )
        await self.session.flush()

    async def find_feature_value(self, parent_id: int, feature_id: int) -> Any | None:
        """Get a live feature value by (feature ID, parent ID)."""
        model = self.feature_model
        result = await self.session.execute(
            select(model).where(
                model.feature_id == feature_id,
                getattr(model, self.parent_key) == parent_id,
                model.deleted_at.is_(None),
            )
        )
        return result.scalars().first()

    async def upsert_feature_values(self, parent_id: int, values: list[FeatureValue]) -> None:
        """Overwrite values matched by feature ID, insert the rest.

        Args:
            parent_id: Owning entity ID.
            values: Validated feature values.
        """
        for value in values:
            existing = await self.find_feature_value(parent_id, value.feature_id)
            if existing is not None:
                existing.value = value.raw
            else:
                self.session.add(
                    self.feature_model(
                        feature_id=value.feature_id,
                        value=value.raw,
                        **{self.parent_key: parent_id},
                    )
                )
        await self.session.flush()

    @staticmethod
    def _mark_deleted(rows: Sequence[Any], when: datetime) -> None:
        for row in rows:
            if row.deleted_at is None:
                row.mark_deleted(when)


class ProductRepository(CatalogRepository):
    """Repository for Product database operations.

    Example usage:
        repo = ProductRepository(session)
        product = await repo.find_by_id_and_tenant(product_id=1, company_id=7)
    """

    image_model = ProductImage
    parent_key = "product_id"

    async def find_by_id(self, product_id: int) -> Product | None:
        """Get a live product by ID, regardless of owner."""
        result = await self.session.execute(
            select(Product)
            .where(Product.id == product_id, Product.deleted_at.is_(None))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def find_by_id_and_tenant(self, product_id: int, company_id: int) -> Product | None:
        """Get a live product owned by a tenant.

        Args:
            product_id: Product ID.
            company_id: Tenant ID.

        Returns:
            Product if found and owned by the tenant, None otherwise.
        """
        result = await self.session.execute(
            select(Product)
            .where(
                Product.id == product_id,
                Product.company_id == company_id,
                Product.deleted_at.is_(None),
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def count_by_spu_and_tenant(self, spu: str, company_id: int) -> int:
        """Count a tenant's live products with an SPU."""
        result = await self.session.execute(
            select(func.count())
            .select_from(Product)
            .where(
                Product.spu == spu,
                Product.company_id == company_id,
                Product.deleted_at.is_(None),
            )
        )
        return result.scalar_one()

    async def find_all_by_category(self, category_id: int) -> Sequence[Product]:
        """Get live products assigned to grandchildren of a category.

        Args:
            category_id: Ancestor product category ID.

        Returns:
            Products ordered by ID.
        """
        result = await self.session.execute(
            select(Product)
            .where(
                Product.category_id.in_(grandchild_category_ids(ProductCategory, category_id)),
                Product.deleted_at.is_(None),
            )
            .order_by(Product.id)
        )
        return result.scalars().all()

    async def soft_delete(self, product: Product) -> None:
        """Soft-delete a product with its images and variants."""
        now = datetime.now(timezone.utc)
        for variant in product.variants:
            self._mark_deleted(variant.images, now)
            self._mark_deleted(variant.features, now)
        self._mark_deleted(product.variants, now)
        self._mark_deleted(product.images, now)
        product.mark_deleted(now)
        await self.session.flush()


class VariantRepository(CatalogRepository):
    """Repository for Variant database operations.

    Variants have no owner column; tenant scoping goes through the
    parent product.
    """

    image_model = VariantImage
    feature_model = VariantFeatureValue
    parent_key = "variant_id"

    async def find_by_id_and_tenant(self, variant_id: int, company_id: int) -> Variant | None:
        """Get a live variant whose product is owned by a tenant.

        Args:
            variant_id: Variant ID.
            company_id: Tenant ID.

        Returns:
            Variant if found and owned by the tenant, None otherwise.
        """
        result = await self.session.execute(
            select(Variant)
            .join(Product, Product.id == Variant.product_id)
            .where(
                Variant.id == variant_id,
                Product.company_id == company_id,
                Variant.deleted_at.is_(None),
                Product.deleted_at.is_(None),
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def find_all_by_category(self, category_id: int) -> Sequence[Variant]:
        """Get live variants of products in grandchildren of a category."""
        result = await self.session.execute(
            select(Variant)
            .join(Product, Product.id == Variant.product_id)
            .where(
                Product.category_id.in_(grandchild_category_ids(ProductCategory, category_id)),
                Product.deleted_at.is_(None),
                Variant.deleted_at.is_(None),
            )
            .order_by(Variant.id)
        )
        return result.scalars().all()

    async def find_product_category(self, variant: Variant) -> int | None:
        """Get the category of a variant's parent product."""
        result = await self.session.execute(
            select(Product.category_id).where(Product.id == variant.product_id)
        )
        return result.scalar_one_or_none()

    async def soft_delete(self, variant: Variant) -> None:
        """Soft-delete a variant with its images and feature values."""
        now = datetime.now(timezone.utc)
        self._mark_deleted(variant.images, now)
        self._mark_deleted(variant.features, now)
        variant.mark_deleted(now)
        await self.session.flush()


class ConstructionRepository(CatalogRepository):
    """Repository for Construction database operations."""

    image_model = ConstructionImage
    feature_model = ConstructionFeatureValue
    parent_key = "construction_id"

    async def find_by_id_and_tenant(
        self, construction_id: int, company_id: int
    ) -> Construction | None:
        """Get a live construction owned by a tenant."""
        result = await self.session.execute(
            select(Construction)
            .where(
                Construction.id == construction_id,
                Construction.company_id == company_id,
                Construction.deleted_at.is_(None),
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def find_all_by_category(self, category_id: int) -> Sequence[Construction]:
        """Get live constructions assigned to grandchildren of a category."""
        result = await self.session.execute(
            select(Construction)
            .where(
                Construction.category_id.in_(
                    grandchild_category_ids(ConstructionCategory, category_id)
                ),
                Construction.deleted_at.is_(None),
            )
            .order_by(Construction.id)
        )
        return result.scalars().all()

    async def soft_delete(self, construction: Construction) -> None:
        """Soft-delete a construction with its images and feature values."""
        now = datetime.now(timezone.utc)
        self._mark_deleted(construction.images, now)
        self._mark_deleted(construction.features, now)
        construction.mark_deleted(now)
        await self.session.flush()
