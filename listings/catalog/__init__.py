"""Catalog module.

ORM models, repositories and the category hierarchy query for the
product and construction catalogs.
"""

from listings.catalog.features import FeatureDefinitionRepository
from listings.catalog.repository import (
    ConstructionRepository,
    ProductRepository,
    VariantRepository,
)
from listings.catalog.taxonomy import TaxonomyParser, grandchild_category_ids

__all__ = [
    "ConstructionRepository",
    "FeatureDefinitionRepository",
    "ProductRepository",
    "TaxonomyParser",
    "VariantRepository",
    "grandchild_category_ids",
]
