"""Supplier product API endpoints.

All endpoints require a live session whose token carries the supplier
capability.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from listings.api.dependencies import SessionDep, SupplierAccess, raise_for_result
from listings.api.schemas import (
    ErrorResponse,
    FeatureDefinitionResponse,
    FeatureListResponse,
    MessageResponse,
    ProductCreateRequest,
    ProductListResponse,
    ProductResponse,
    ProductUpdateRequest,
)
from listings.application.feature_service import FeatureService
from listings.application.product_service import ProductChanges, ProductDraft, ProductService
from listings.catalog.features import FeatureDefinitionRepository
from listings.catalog.models import Product
from listings.catalog.repository import ProductRepository
from listings.domain.features import FeatureDefinition

router = APIRouter(prefix="/api/v1/supplier", tags=["Products"])

ERROR_RESPONSES = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


# ============================================================================
# Dependencies
# ============================================================================


def get_product_service(session: SessionDep) -> ProductService:
    """Get product service bound to the request session."""
    return ProductService(
        repository=ProductRepository(session),
        categories=FeatureDefinitionRepository.for_products(session),
    )


def get_feature_service(session: SessionDep) -> FeatureService:
    """Get feature service over the product hierarchy."""
    return FeatureService(FeatureDefinitionRepository.for_products(session))


ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]


# ============================================================================
# Converters
# ============================================================================


def product_to_response(product: Product) -> ProductResponse:
    """Convert Product model to response schema."""
    return ProductResponse.model_validate(product.to_dict())


def feature_to_response(definition: FeatureDefinition) -> FeatureDefinitionResponse:
    """Convert FeatureDefinition to response schema."""
    return FeatureDefinitionResponse(
        id=definition.id,
        name=definition.name,
        description=definition.description,
        type=definition.feature_type.value,
        is_required=definition.is_required,
        category_id=definition.category_id,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/product",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a product",
)
async def create_product(
    request: ProductCreateRequest,
    access: SupplierAccess,
    service: ProductServiceDep,
) -> ProductResponse:
    """Create a product owned by the caller.

    Args:
        request: Product form.
        access: Verified supplier session.
        service: Product service.

    Returns:
        The created product.
    """
    result = await service.create(
        ProductDraft(
            name=request.name,
            spu=request.spu,
            category_id=request.category_id,
            is_active=request.is_active,
            description=request.description,
            hero_image=request.hero_image,
            images=[image.remote_link for image in request.product_images],
        ),
        company_id=access.company_id,
    )
    if not result.success:
        raise_for_result(result)

    return product_to_response(result.value)


@router.put(
    "/product/{product_id}",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    summary="Update a product",
)
async def update_product(
    product_id: int,
    request: ProductUpdateRequest,
    access: SupplierAccess,
    service: ProductServiceDep,
) -> ProductResponse:
    """Apply the supplied fields to one of the caller's products."""
    images = None
    if request.product_images is not None:
        images = [image.remote_link for image in request.product_images]

    result = await service.update(
        product_id,
        ProductChanges(
            name=request.name,
            spu=request.spu,
            is_active=request.is_active,
            description=request.description,
            hero_image=request.hero_image,
            images=images,
        ),
        company_id=access.company_id,
    )
    if not result.success:
        raise_for_result(result)

    return product_to_response(result.value)


@router.delete(
    "/product/{product_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    summary="Delete a product",
)
async def delete_product(
    product_id: int,
    access: SupplierAccess,
    service: ProductServiceDep,
) -> MessageResponse:
    """Soft-delete one of the caller's products with its images and variants."""
    result = await service.delete(product_id, company_id=access.company_id)
    if not result.success:
        raise_for_result(result)

    return MessageResponse(message="Product deleted")


@router.get(
    "/product/{product_id}",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    summary="Get a product",
)
async def get_product(
    product_id: int,
    access: SupplierAccess,
    service: ProductServiceDep,
) -> ProductResponse:
    """Get one of the caller's products."""
    result = await service.find_by_id(product_id, company_id=access.company_id)
    if not result.success:
        raise_for_result(result)

    return product_to_response(result.value)


@router.get(
    "/products/{category_id}",
    response_model=ProductListResponse,
    responses=ERROR_RESPONSES,
    summary="List products of a category",
    description="Lists products assigned to the grandchild categories of the given category.",
)
async def list_products(
    category_id: int,
    access: SupplierAccess,
    service: ProductServiceDep,
) -> ProductListResponse:
    """List products two category levels below a category."""
    result = await service.find_all_by_category(category_id)
    if not result.success:
        raise_for_result(result)

    items = [product_to_response(product) for product in result.value]
    return ProductListResponse(items=items, total=len(items))


@router.get(
    "/feature/{category_id}",
    response_model=FeatureListResponse,
    responses=ERROR_RESPONSES,
    summary="List feature definitions of a category",
)
async def list_features(
    category_id: int,
    access: SupplierAccess,
    service: Annotated[FeatureService, Depends(get_feature_service)],
) -> FeatureListResponse:
    """List the feature definitions variants in a category must follow."""
    result = await service.list_features(category_id)
    if not result.success:
        raise_for_result(result)

    items = [feature_to_response(definition) for definition in result.value]
    return FeatureListResponse(items=items, total=len(items))
