"""Product application service.

Orchestrates tenant-scoped product management:
- Creating products with SPU uniqueness per company
- Partial updates with image upsert by remote link
- Soft deletion with images and variants
- Category listing over the grandchild traversal
"""

from dataclasses import dataclass, field
from typing import Any

import structlog
from sqlalchemy.exc import SQLAlchemyError

from listings.application.feature_service import FeatureDefinitionProvider
from listings.application.results import OperationResult
from listings.catalog.models import Product, ProductImage
from listings.catalog.repository import ProductRepository
from listings.domain.exceptions import (
    CategoryNotFoundError,
    DomainError,
    DuplicateSPUError,
    ProductNotFoundError,
    StoreError,
)

logger = structlog.get_logger()


# ============================================================================
# Product Commands
# ============================================================================


@dataclass
class ProductDraft:
    """Data for a new product."""

    name: str
    spu: str
    category_id: int
    is_active: bool = False
    description: str | None = None
    hero_image: str | None = None
    images: list[str] = field(default_factory=list)


@dataclass
class ProductChanges:
    """Partial product update. None means "leave unchanged"."""

    name: str | None = None
    spu: str | None = None
    is_active: bool | None = None
    description: str | None = None
    hero_image: str | None = None
    images: list[str] | None = None

    def scalar_fields(self) -> dict[str, Any]:
        """Supplied scalar fields."""
        fields = {
            "name": self.name,
            "spu": self.spu,
            "is_active": self.is_active,
            "description": self.description,
            "hero_image": self.hero_image,
        }
        return {key: value for key, value in fields.items() if value is not None}


# ============================================================================
# Product Service
# ============================================================================


class ProductService:
    """Product orchestrator.

    Every mutation is scoped by the acting tenant. A product owned by
    another tenant is reported as not found.
    """

    def __init__(
        self,
        repository: ProductRepository,
        categories: FeatureDefinitionProvider,
    ) -> None:
        """Initialize service.

        Args:
            repository: Product repository.
            categories: Product hierarchy provider, used for category checks.
        """
        self.repository = repository
        self.categories = categories

    async def create(self, draft: ProductDraft, company_id: int) -> OperationResult[Product]:
        """Create a product.

        Args:
            draft: Product data.
            company_id: Acting tenant.

        Returns:
            Result with the created product.
        """
        try:
            if await self.repository.count_by_spu_and_tenant(draft.spu, company_id) > 0:
                raise DuplicateSPUError(draft.spu)

            if not await self.categories.category_exists(draft.category_id):
                raise CategoryNotFoundError(draft.category_id)

            product = await self.repository.save(
                Product(
                    company_id=company_id,
                    spu=draft.spu,
                    name=draft.name,
                    description=draft.description,
                    is_active=draft.is_active,
                    hero_image=draft.hero_image,
                    category_id=draft.category_id,
                    images=[ProductImage(remote_link=link) for link in draft.images],
                    variants=[],
                )
            )
            product = await self.repository.find_by_id_and_tenant(product.id, company_id)
        except SQLAlchemyError as e:
            logger.error("Product save failed", company_id=company_id, error=str(e))
            return OperationResult.fail(StoreError("Product could not be created"))
        except DomainError as e:
            logger.warning("Product creation rejected", company_id=company_id, error_code=e.error_code)
            return OperationResult.fail(e)

        logger.info("Product created", product_id=product.id, company_id=company_id, spu=product.spu)
        return OperationResult.ok(product)

    async def update(
        self,
        product_id: int,
        changes: ProductChanges,
        company_id: int,
    ) -> OperationResult[Product]:
        """Apply a partial update to a tenant's product.

        Args:
            product_id: Product ID.
            changes: Supplied fields.
            company_id: Acting tenant.

        Returns:
            Result with the updated product.
        """
        try:
            product = await self.repository.find_by_id_and_tenant(product_id, company_id)
            if product is None:
                raise ProductNotFoundError(product_id)

            if changes.spu is not None and changes.spu != product.spu:
                if await self.repository.count_by_spu_and_tenant(changes.spu, company_id) > 0:
                    raise DuplicateSPUError(changes.spu)

            if changes.images:
                await self.repository.upsert_images(product.id, changes.images)

            await self.repository.update_fields(product, changes.scalar_fields())
            product = await self.repository.find_by_id_and_tenant(product_id, company_id)
        except SQLAlchemyError as e:
            logger.error("Product update failed", product_id=product_id, error=str(e))
            return OperationResult.fail(StoreError("Product could not be updated"))
        except DomainError as e:
            logger.warning("Product update rejected", product_id=product_id, error_code=e.error_code)
            return OperationResult.fail(e)

        logger.info("Product updated", product_id=product_id, company_id=company_id)
        return OperationResult.ok(product)

    async def delete(self, product_id: int, company_id: int) -> OperationResult[None]:
        """Soft-delete a tenant's product with its images and variants."""
        try:
            product = await self.repository.find_by_id_and_tenant(product_id, company_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            await self.repository.soft_delete(product)
        except SQLAlchemyError as e:
            logger.error("Product delete failed", product_id=product_id, error=str(e))
            return OperationResult.fail(StoreError("Product could not be deleted"))
        except DomainError as e:
            return OperationResult.fail(e)

        logger.info("Product deleted", product_id=product_id, company_id=company_id)
        return OperationResult.ok()

    async def find_by_id(self, product_id: int, company_id: int) -> OperationResult[Product]:
        """Get a tenant's product."""
        try:
            product = await self.repository.find_by_id_and_tenant(product_id, company_id)
            if product is None:
                raise ProductNotFoundError(product_id)
        except SQLAlchemyError as e:
            logger.error("Product lookup failed", product_id=product_id, error=str(e))
            return OperationResult.fail(StoreError("Product could not be loaded"))
        except DomainError as e:
            return OperationResult.fail(e)

        return OperationResult.ok(product)

    async def find_all_by_category(self, category_id: int) -> OperationResult[list[Product]]:
        """List products in the grandchild categories of a category."""
        try:
            products = await self.repository.find_all_by_category(category_id)
        except SQLAlchemyError as e:
            logger.error("Product listing failed", category_id=category_id, error=str(e))
            return OperationResult.fail(StoreError("Products could not be loaded"))

        return OperationResult.ok(list(products))
