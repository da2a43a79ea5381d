"""Feature schema validation and feature definition listing.

The validator is shared by the product and construction hierarchies;
each passes its own feature definition provider.
"""

from typing import Protocol

import structlog
from sqlalchemy.exc import SQLAlchemyError

from listings.application.results import OperationResult
from listings.domain.exceptions import (
    CategoryNotFoundError,
    DomainError,
    FeatureNotFoundError,
    InvalidFeatureValueError,
    MissingRequiredFeatureError,
    StoreError,
)
from listings.domain.features import (
    FeatureDefinition,
    FeatureInput,
    FeatureValue,
    parse_feature_value,
)

logger = structlog.get_logger()


class FeatureDefinitionProvider(Protocol):
    """Source of category-scoped feature definitions."""

    async def get_by_category(self, category_id: int) -> list[FeatureDefinition]:
        """Get every feature definition declared by a category."""
        ...

    async def get_by_id(self, feature_id: int) -> FeatureDefinition | None:
        """Get a feature definition by ID."""
        ...

    async def category_exists(self, category_id: int) -> bool:
        """Check that a category exists."""
        ...


class FeatureSchemaValidator:
    """Validates submitted feature values against a category schema.

    Checks run in a fixed order and stop at the first failure:

    1. every required definition of the category must be present
    2. each submitted value, in input order, must parse as the
       declared type of its feature definition
    """

    def __init__(self, provider: FeatureDefinitionProvider) -> None:
        """Initialize validator.

        Args:
            provider: Feature definition source for one hierarchy.
        """
        self.provider = provider

    async def validate(
        self,
        category_id: int,
        values: list[FeatureInput],
    ) -> list[FeatureValue]:
        """Validate feature values for a category.

        Args:
            category_id: Category whose schema applies.
            values: Submitted (feature_id, raw value) pairs.

        Returns:
            Typed values in input order.

        Raises:
            MissingRequiredFeatureError: If a required feature is absent.
            FeatureNotFoundError: If a submitted feature ID is unknown.
            InvalidFeatureValueError: If a value does not parse as its type.
        """
        definitions = await self.provider.get_by_category(category_id)
        provided = {value.feature_id for value in values}

        for definition in definitions:
            if definition.is_required and definition.id not in provided:
                raise MissingRequiredFeatureError(definition.id)

        typed: list[FeatureValue] = []
        for value in values:
            definition = await self.provider.get_by_id(value.feature_id)
            if definition is None:
                raise FeatureNotFoundError(value.feature_id)

            try:
                parsed = parse_feature_value(definition.feature_type, value.value)
            except ValueError as e:
                raise InvalidFeatureValueError(
                    value.feature_id, value.value, definition.feature_type.value
                ) from e

            typed.append(
                FeatureValue(
                    feature_id=value.feature_id,
                    feature_type=definition.feature_type,
                    raw=value.value,
                    value=parsed,
                )
            )

        return typed


class FeatureService:
    """Feature definition queries."""

    def __init__(self, provider: FeatureDefinitionProvider) -> None:
        self.provider = provider

    async def list_features(self, category_id: int) -> OperationResult[list[FeatureDefinition]]:
        """List the feature definitions of a category.

        Args:
            category_id: Category ID.

        Returns:
            Result with the category's definitions.
        """
        try:
            if not await self.provider.category_exists(category_id):
                raise CategoryNotFoundError(category_id)
            definitions = await self.provider.get_by_category(category_id)
        except SQLAlchemyError as e:
            logger.error("Feature listing failed", category_id=category_id, error=str(e))
            return OperationResult.fail(StoreError("Could not load features"))
        except DomainError as e:
            return OperationResult.fail(e)

        return OperationResult.ok(definitions)
