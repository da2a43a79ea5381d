"""Construction application service.

Constructions carry typed feature values validated against the
construction category schema. Money and area fields are stored as
fixed-precision decimals.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

import structlog
from sqlalchemy.exc import SQLAlchemyError

from listings.application.feature_service import FeatureSchemaValidator
from listings.application.results import OperationResult
from listings.catalog.models import Construction, ConstructionFeatureValue, ConstructionImage
from listings.catalog.repository import ConstructionRepository
from listings.domain.constructions import (
    check_quarter_label,
    check_region,
    check_stage,
    to_amount,
)
from listings.domain.exceptions import (
    CategoryNotFoundError,
    ConstructionNotFoundError,
    DomainError,
    StoreError,
)
from listings.domain.features import FeatureInput

logger = structlog.get_logger()

_AMOUNT_FIELDS = ("cost_of_project", "land_area", "construction_zone")


@dataclass
class ConstructionDraft:
    """Data for a new construction."""

    name: str
    category_id: int
    geographic_region: str
    province: str
    district: str
    stage: str
    start: str
    end: str
    cost_of_project: Decimal
    land_area: Decimal
    construction_zone: Decimal
    images: list[str] = field(default_factory=list)
    features: list[FeatureInput] = field(default_factory=list)


@dataclass
class ConstructionChanges:
    """Partial construction update. None means "leave unchanged"."""

    name: str | None = None
    geographic_region: str | None = None
    province: str | None = None
    district: str | None = None
    stage: str | None = None
    start: str | None = None
    end: str | None = None
    cost_of_project: Decimal | None = None
    land_area: Decimal | None = None
    construction_zone: Decimal | None = None
    images: list[str] | None = None
    features: list[FeatureInput] | None = None

    def scalar_fields(self) -> dict[str, Any]:
        """Supplied scalar fields, checked and normalized.

        Raises:
            ValidationError: If a supplied value is out of its domain.
        """
        fields: dict[str, Any] = {}
        if self.name is not None:
            fields["name"] = self.name
        if self.geographic_region is not None:
            fields["geographic_region"] = check_region(self.geographic_region)
        if self.province is not None:
            fields["province"] = self.province
        if self.district is not None:
            fields["district"] = self.district
        if self.stage is not None:
            fields["stage"] = check_stage(self.stage)
        if self.start is not None:
            fields["start"] = check_quarter_label(self.start, "start")
        if self.end is not None:
            fields["end"] = check_quarter_label(self.end, "end")
        for name in _AMOUNT_FIELDS:
            value = getattr(self, name)
            if value is not None:
                fields[name] = to_amount(value, name)
        return fields


class ConstructionService:
    """Construction orchestrator."""

    def __init__(
        self,
        repository: ConstructionRepository,
        validator: FeatureSchemaValidator,
    ) -> None:
        """Initialize service.

        Args:
            repository: Construction repository.
            validator: Validator over the construction feature definitions.
        """
        self.repository = repository
        self.validator = validator

    async def create(
        self,
        draft: ConstructionDraft,
        company_id: int,
    ) -> OperationResult[Construction]:
        """Create a construction.

        Args:
            draft: Construction data.
            company_id: Acting tenant.

        Returns:
            Result with the created construction.
        """
        try:
            if not await self.validator.provider.category_exists(draft.category_id):
                raise CategoryNotFoundError(draft.category_id)

            values = await self.validator.validate(draft.category_id, draft.features)

            construction = await self.repository.save(
                Construction(
                    company_id=company_id,
                    name=draft.name,
                    category_id=draft.category_id,
                    geographic_region=check_region(draft.geographic_region),
                    province=draft.province,
                    district=draft.district,
                    stage=check_stage(draft.stage),
                    start=check_quarter_label(draft.start, "start"),
                    end=check_quarter_label(draft.end, "end"),
                    cost_of_project=to_amount(draft.cost_of_project, "cost_of_project"),
                    land_area=to_amount(draft.land_area, "land_area"),
                    construction_zone=to_amount(draft.construction_zone, "construction_zone"),
                    images=[ConstructionImage(remote_link=link) for link in draft.images],
                    features=[
                        ConstructionFeatureValue(feature_id=value.feature_id, value=value.raw)
                        for value in values
                    ],
                )
            )
            construction = await self.repository.find_by_id_and_tenant(construction.id, company_id)
        except SQLAlchemyError as e:
            logger.error("Construction save failed", company_id=company_id, error=str(e))
            return OperationResult.fail(StoreError("Construction could not be created"))
        except DomainError as e:
            logger.warning(
                "Construction creation rejected",
                company_id=company_id,
                error_code=e.error_code,
            )
            return OperationResult.fail(e)

        logger.info("Construction created", construction_id=construction.id, company_id=company_id)
        return OperationResult.ok(construction)

    async def update(
        self,
        construction_id: int,
        changes: ConstructionChanges,
        company_id: int,
    ) -> OperationResult[Construction]:
        """Apply a partial update to a tenant's construction.

        Args:
            construction_id: Construction ID.
            changes: Supplied fields.
            company_id: Acting tenant.

        Returns:
            Result with the updated construction.
        """
        try:
            construction = await self.repository.find_by_id_and_tenant(construction_id, company_id)
            if construction is None:
                raise ConstructionNotFoundError(construction_id)

            fields = changes.scalar_fields()

            if changes.features is not None:
                values = await self.validator.validate(construction.category_id, changes.features)
                await self.repository.upsert_feature_values(construction.id, values)

            if changes.images:
                await self.repository.upsert_images(construction.id, changes.images)

            await self.repository.update_fields(construction, fields)
            construction = await self.repository.find_by_id_and_tenant(construction_id, company_id)
        except SQLAlchemyError as e:
            logger.error("Construction update failed", construction_id=construction_id, error=str(e))
            return OperationResult.fail(StoreError("Construction could not be updated"))
        except DomainError as e:
            logger.warning(
                "Construction update rejected",
                construction_id=construction_id,
                error_code=e.error_code,
            )
            return OperationResult.fail(e)

        logger.info("Construction updated", construction_id=construction_id, company_id=company_id)
        return OperationResult.ok(construction)

    async def delete(self, construction_id: int, company_id: int) -> OperationResult[None]:
        """Soft-delete a tenant's construction with its images and feature values."""
        try:
            construction = await self.repository.find_by_id_and_tenant(construction_id, company_id)
            if construction is None:
                raise ConstructionNotFoundError(construction_id)
            await self.repository.soft_delete(construction)
        except SQLAlchemyError as e:
            logger.error("Construction delete failed", construction_id=construction_id, error=str(e))
            return OperationResult.fail(StoreError("Construction could not be deleted"))
        except DomainError as e:
            return OperationResult.fail(e)

        logger.info("Construction deleted", construction_id=construction_id, company_id=company_id)
        return OperationResult.ok()

    async def find_by_id(
        self,
        construction_id: int,
        company_id: int,
    ) -> OperationResult[Construction]:
        """Get a tenant's construction."""
        try:
            construction = await self.repository.find_by_id_and_tenant(construction_id, company_id)
            if construction is None:
                raise ConstructionNotFoundError(construction_id)
        except SQLAlchemyError as e:
            logger.error("Construction lookup failed", construction_id=construction_id, error=str(e))
            return OperationResult.fail(StoreError("Construction could not be loaded"))
        except DomainError as e:
            return OperationResult.fail(e)

        return OperationResult.ok(construction)

    async def find_all_by_category(
        self,
        category_id: int,
    ) -> OperationResult[list[Construction]]:
        """List constructions in the grandchild categories of a category."""
        try:
            constructions = await self.repository.find_all_by_category(category_id)
        except SQLAlchemyError as e:
            logger.error("Construction listing failed", category_id=category_id, error=str(e))
            return OperationResult.fail(StoreError("Constructions could not be loaded"))

        return OperationResult.ok(list(constructions))
