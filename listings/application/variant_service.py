"""Variant application service.

Variants carry the typed feature values of the product catalog. Their
schema is the category of the parent product.
"""

from dataclasses import dataclass, field
from typing import Any

import structlog
from sqlalchemy.exc import SQLAlchemyError

from listings.application.feature_service import FeatureSchemaValidator
from listings.application.results import OperationResult
from listings.catalog.models import Variant, VariantFeatureValue, VariantImage
from listings.catalog.repository import ProductRepository, VariantRepository
from listings.domain.exceptions import (
    CategoryNotFoundError,
    DomainError,
    ProductNotFoundError,
    StoreError,
    VariantNotFoundError,
)
from listings.domain.features import FeatureInput

logger = structlog.get_logger()


@dataclass
class VariantDraft:
    """Data for a new variant."""

    name: str
    sku: str
    product_id: int
    description: str | None = None
    is_active: bool = False
    images: list[str] = field(default_factory=list)
    features: list[FeatureInput] = field(default_factory=list)


@dataclass
class VariantChanges:
    """Partial variant update. None means "leave unchanged"."""

    name: str | None = None
    sku: str | None = None
    description: str | None = None
    is_active: bool | None = None
    images: list[str] | None = None
    features: list[FeatureInput] | None = None

    def scalar_fields(self) -> dict[str, Any]:
        """Supplied scalar fields."""
        fields = {
            "name": self.name,
            "sku": self.sku,
            "description": self.description,
            "is_active": self.is_active,
        }
        return {key: value for key, value in fields.items() if value is not None}


class VariantService:
    """Variant orchestrator.

    Ownership is checked through the parent product's company.
    """

    def __init__(
        self,
        repository: VariantRepository,
        products: ProductRepository,
        validator: FeatureSchemaValidator,
    ) -> None:
        """Initialize service.

        Args:
            repository: Variant repository.
            products: Product repository, for parent lookups.
            validator: Validator over the product feature definitions.
        """
        self.repository = repository
        self.products = products
        self.validator = validator

    async def create(self, draft: VariantDraft, company_id: int) -> OperationResult[Variant]:
        """Create a variant under one of the tenant's products.

        Args:
            draft: Variant data.
            company_id: Acting tenant.

        Returns:
            Result with the created variant.
        """
        try:
            product = await self.products.find_by_id_and_tenant(draft.product_id, company_id)
            if product is None:
                raise ProductNotFoundError(draft.product_id)

            values = await self.validator.validate(product.category_id, draft.features)

            variant = await self.repository.save(
                Variant(
                    product_id=product.id,
                    name=draft.name,
                    sku=draft.sku,
                    description=draft.description,
                    is_active=draft.is_active,
                    images=[VariantImage(remote_link=link) for link in draft.images],
                    features=[
                        VariantFeatureValue(feature_id=value.feature_id, value=value.raw)
                        for value in values
                    ],
                )
            )
            variant = await self.repository.find_by_id_and_tenant(variant.id, company_id)
        except SQLAlchemyError as e:
            logger.error("Variant save failed", product_id=draft.product_id, error=str(e))
            return OperationResult.fail(StoreError("Variant could not be created"))
        except DomainError as e:
            logger.warning(
                "Variant creation rejected",
                product_id=draft.product_id,
                error_code=e.error_code,
            )
            return OperationResult.fail(e)

        logger.info("Variant created", variant_id=variant.id, product_id=variant.product_id)
        return OperationResult.ok(variant)

    async def update(
        self,
        variant_id: int,
        changes: VariantChanges,
        company_id: int,
    ) -> OperationResult[Variant]:
        """Apply a partial update to a tenant's variant.

        Supplied features are validated against the product category and
        written with upsert-by-feature-id.

        Args:
            variant_id: Variant ID.
            changes: Supplied fields.
            company_id: Acting tenant.

        Returns:
            Result with the updated variant.
        """
        try:
            variant = await self.repository.find_by_id_and_tenant(variant_id, company_id)
            if variant is None:
                raise VariantNotFoundError(variant_id)

            if changes.features is not None:
                category_id = await self.repository.find_product_category(variant)
                if category_id is None:
                    raise CategoryNotFoundError(variant.product_id)
                values = await self.validator.validate(category_id, changes.features)
                await self.repository.upsert_feature_values(variant.id, values)

            if changes.images:
                await self.repository.upsert_images(variant.id, changes.images)

            await self.repository.update_fields(variant, changes.scalar_fields())
            variant = await self.repository.find_by_id_and_tenant(variant_id, company_id)
        except SQLAlchemyError as e:
            logger.error("Variant update failed", variant_id=variant_id, error=str(e))
            return OperationResult.fail(StoreError("Variant could not be updated"))
        except DomainError as e:
            logger.warning("Variant update rejected", variant_id=variant_id, error_code=e.error_code)
            return OperationResult.fail(e)

        logger.info("Variant updated", variant_id=variant_id, company_id=company_id)
        return OperationResult.ok(variant)

    async def delete(self, variant_id: int, company_id: int) -> OperationResult[None]:
        """Soft-delete a tenant's variant with its images and feature values."""
        try:
            variant = await self.repository.find_by_id_and_tenant(variant_id, company_id)
            if variant is None:
                raise VariantNotFoundError(variant_id)
            await self.repository.soft_delete(variant)
        except SQLAlchemyError as e:
            logger.error("Variant delete failed", variant_id=variant_id, error=str(e))
            return OperationResult.fail(StoreError("Variant could not be deleted"))
        except DomainError as e:
            return OperationResult.fail(e)

        logger.info("Variant deleted", variant_id=variant_id, company_id=company_id)
        return OperationResult.ok()

    async def find_by_id(self, variant_id: int, company_id: int) -> OperationResult[Variant]:
        """Get a tenant's variant."""
        try:
            variant = await self.repository.find_by_id_and_tenant(variant_id, company_id)
            if variant is None:
                raise VariantNotFoundError(variant_id)
        except SQLAlchemyError as e:
            logger.error("Variant lookup failed", variant_id=variant_id, error=str(e))
            return OperationResult.fail(StoreError("Variant could not be loaded"))
        except DomainError as e:
            return OperationResult.fail(e)

        return OperationResult.ok(variant)

    async def find_all_by_category(self, category_id: int) -> OperationResult[list[Variant]]:
        """List variants whose product sits in a grandchild category."""
        try:
            variants = await self.repository.find_all_by_category(category_id)
        except SQLAlchemyError as e:
            logger.error("Variant listing failed", category_id=category_id, error=str(e))
            return OperationResult.fail(StoreError("Variants could not be loaded"))

        return OperationResult.ok(list(variants))
