"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from listings.api.auth import router as auth_router
from listings.api.constructions import router as constructions_router
from listings.api.health import router as health_router
from listings.api.products import router as products_router
from listings.api.variants import router as variants_router

__all__ = [
    "auth_router",
    "constructions_router",
    "health_router",
    "products_router",
    "variants_router",
]
