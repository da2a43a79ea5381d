"""Supplier variant API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from listings.api.dependencies import SessionDep, SupplierAccess, raise_for_result
from listings.api.schemas import (
    ErrorResponse,
    FeatureValueSchema,
    MessageResponse,
    VariantCreateRequest,
    VariantResponse,
    VariantUpdateRequest,
)
from listings.application.feature_service import FeatureSchemaValidator
from listings.application.variant_service import VariantChanges, VariantDraft, VariantService
from listings.catalog.features import FeatureDefinitionRepository
from listings.catalog.repository import ProductRepository, VariantRepository
from listings.domain.features import FeatureInput

router = APIRouter(prefix="/api/v1/supplier", tags=["Variants"])

ERROR_RESPONSES = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


# ============================================================================
# Dependencies
# ============================================================================


def get_variant_service(session: SessionDep) -> VariantService:
    """Get variant service bound to the request session."""
    return VariantService(
        repository=VariantRepository(session),
        products=ProductRepository(session),
        validator=FeatureSchemaValidator(FeatureDefinitionRepository.for_products(session)),
    )


VariantServiceDep = Annotated[VariantService, Depends(get_variant_service)]


# ============================================================================
# Converters
# ============================================================================


def features_to_inputs(features: list[FeatureValueSchema]) -> list[FeatureInput]:
    """Convert submitted feature values to domain inputs."""
    return [FeatureInput(feature_id=f.feature_id, value=f.value) for f in features]


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/variant",
    response_model=VariantResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a variant",
)
async def create_variant(
    request: VariantCreateRequest,
    access: SupplierAccess,
    service: VariantServiceDep,
) -> VariantResponse:
    """Create a variant under one of the caller's products.

    Feature values are validated against the product's category.

    Args:
        request: Variant form.
        access: Verified supplier session.
        service: Variant service.

    Returns:
        The created variant.
    """
    result = await service.create(
        VariantDraft(
            name=request.name,
            sku=request.sku,
            product_id=request.product_id,
            description=request.description,
            is_active=request.is_active,
            images=[image.remote_link for image in request.variant_images],
            features=features_to_inputs(request.features),
        ),
        company_id=access.company_id,
    )
    if not result.success:
        raise_for_result(result)

    return VariantResponse.model_validate(result.value.to_dict())


@router.put(
    "/variant/{variant_id}",
    response_model=VariantResponse,
    responses=ERROR_RESPONSES,
    summary="Update a variant",
)
async def update_variant(
    variant_id: int,
    request: VariantUpdateRequest,
    access: SupplierAccess,
    service: VariantServiceDep,
) -> VariantResponse:
    """Apply the supplied fields to one of the caller's variants."""
    images = None
    if request.variant_images is not None:
        images = [image.remote_link for image in request.variant_images]

    features = None
    if request.features is not None:
        features = features_to_inputs(request.features)

    result = await service.update(
        variant_id,
        VariantChanges(
            name=request.name,
            sku=request.sku,
            description=request.description,
            is_active=request.is_active,
            images=images,
            features=features,
        ),
        company_id=access.company_id,
    )
    if not result.success:
        raise_for_result(result)

    return VariantResponse.model_validate(result.value.to_dict())


@router.delete(
    "/variant/{variant_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    summary="Delete a variant",
)
async def delete_variant(
    variant_id: int,
    access: SupplierAccess,
    service: VariantServiceDep,
) -> MessageResponse:
    """Soft-delete one of the caller's variants."""
    result = await service.delete(variant_id, company_id=access.company_id)
    if not result.success:
        raise_for_result(result)

    return MessageResponse(message="Variant deleted")


@router.get(
    "/variant/{variant_id}",
    response_model=VariantResponse,
    responses=ERROR_RESPONSES,
    summary="Get a variant",
)
async def get_variant(
    variant_id: int,
    access: SupplierAccess,
    service: VariantServiceDep,
) -> VariantResponse:
    """Get one of the caller's variants."""
    result = await service.find_by_id(variant_id, company_id=access.company_id)
    if not result.success:
        raise_for_result(result)

    return VariantResponse.model_validate(result.value.to_dict())
