"""Application layer module.

Contains application services (use cases) that orchestrate
domain logic and infrastructure.
"""

from listings.application.auth_service import AuthService
from listings.application.company_service import CompanyRegistration, CompanyService
from listings.application.construction_service import (
    ConstructionChanges,
    ConstructionDraft,
    ConstructionService,
)
from listings.application.context import AppContext, build_context
from listings.application.feature_service import FeatureSchemaValidator, FeatureService
from listings.application.product_service import ProductChanges, ProductDraft, ProductService
from listings.application.results import OperationResult
from listings.application.variant_service import VariantChanges, VariantDraft, VariantService

__all__ = [
    "AppContext",
    "build_context",
    "OperationResult",
    "AuthService",
    "CompanyRegistration",
    "CompanyService",
    "FeatureSchemaValidator",
    "FeatureService",
    "ProductChanges",
    "ProductDraft",
    "ProductService",
    "VariantChanges",
    "VariantDraft",
    "VariantService",
    "ConstructionChanges",
    "ConstructionDraft",
    "ConstructionService",
]
