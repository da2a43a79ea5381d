"""Constructor construction API endpoints.

All endpoints require a live session whose token carries the
constructor capability.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from listings.api.dependencies import ConstructorAccess, SessionDep, raise_for_result
from listings.api.schemas import (
    ConstructionCreateRequest,
    ConstructionListResponse,
    ConstructionResponse,
    ConstructionUpdateRequest,
    ErrorResponse,
    MessageResponse,
)
from listings.api.variants import features_to_inputs
from listings.application.construction_service import (
    ConstructionChanges,
    ConstructionDraft,
    ConstructionService,
)
from listings.application.feature_service import FeatureSchemaValidator
from listings.catalog.features import FeatureDefinitionRepository
from listings.catalog.models import Construction
from listings.catalog.repository import ConstructionRepository

router = APIRouter(prefix="/api/v1/constructor", tags=["Constructions"])

ERROR_RESPONSES = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


# ============================================================================
# Dependencies
# ============================================================================


def get_construction_service(session: SessionDep) -> ConstructionService:
    """Get construction service bound to the request session."""
    return ConstructionService(
        repository=ConstructionRepository(session),
        validator=FeatureSchemaValidator(FeatureDefinitionRepository.for_constructions(session)),
    )


ConstructionServiceDep = Annotated[ConstructionService, Depends(get_construction_service)]


# ============================================================================
# Converters
# ============================================================================


def construction_to_response(construction: Construction) -> ConstructionResponse:
    """Convert Construction model to response schema."""
    return ConstructionResponse.model_validate(construction.to_dict())


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/construction",
    response_model=ConstructionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a construction",
)
async def create_construction(
    request: ConstructionCreateRequest,
    access: ConstructorAccess,
    service: ConstructionServiceDep,
) -> ConstructionResponse:
    """Create a construction owned by the caller.

    Args:
        request: Construction form.
        access: Verified constructor session.
        service: Construction service.

    Returns:
        The created construction.
    """
    result = await service.create(
        ConstructionDraft(
            name=request.name,
            category_id=request.construction_category_id,
            geographic_region=request.geographic_region.value,
            province=request.province,
            district=request.district,
            stage=request.stage.value,
            start=request.start,
            end=request.end,
            cost_of_project=request.cost_of_project,
            land_area=request.land_area,
            construction_zone=request.construction_zone,
            images=[image.remote_link for image in request.construction_images],
            features=features_to_inputs(request.construction_features),
        ),
        company_id=access.company_id,
    )
    if not result.success:
        raise_for_result(result)

    return construction_to_response(result.value)


@router.put(
    "/construction/{construction_id}",
    response_model=ConstructionResponse,
    responses=ERROR_RESPONSES,
    summary="Update a construction",
)
async def update_construction(
    construction_id: int,
    request: ConstructionUpdateRequest,
    access: ConstructorAccess,
    service: ConstructionServiceDep,
) -> ConstructionResponse:
    """Apply the supplied fields to one of the caller's constructions."""
    images = None
    if request.construction_images is not None:
        images = [image.remote_link for image in request.construction_images]

    features = None
    if request.construction_features is not None:
        features = features_to_inputs(request.construction_features)

    result = await service.update(
        construction_id,
        ConstructionChanges(
            name=request.name,
            geographic_region=request.geographic_region.value if request.geographic_region else None,
            province=request.province,
            district=request.district,
            stage=request.stage.value if request.stage else None,
            start=request.start,
            end=request.end,
            cost_of_project=request.cost_of_project,
            land_area=request.land_area,
            construction_zone=request.construction_zone,
            images=images,
            features=features,
        ),
        company_id=access.company_id,
    )
    if not result.success:
        raise_for_result(result)

    return construction_to_response(result.value)


@router.delete(
    "/construction/{construction_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    summary="Delete a construction",
)
async def delete_construction(
    construction_id: int,
    access: ConstructorAccess,
    service: ConstructionServiceDep,
) -> MessageResponse:
    """Soft-delete one of the caller's constructions."""
    result = await service.delete(construction_id, company_id=access.company_id)
    if not result.success:
        raise_for_result(result)

    return MessageResponse(message="Construction deleted")


@router.get(
    "/construction/{construction_id}",
    response_model=ConstructionResponse,
    responses=ERROR_RESPONSES,
    summary="Get a construction",
)
async def get_construction(
    construction_id: int,
    access: ConstructorAccess,
    service: ConstructionServiceDep,
) -> ConstructionResponse:
    """Get one of the caller's constructions."""
    result = await service.find_by_id(construction_id, company_id=access.company_id)
    if not result.success:
        raise_for_result(result)

    return construction_to_response(result.value)


@router.get(
    "/constructions/{category_id}",
    response_model=ConstructionListResponse,
    responses=ERROR_RESPONSES,
    summary="List constructions of a category",
    description="Lists constructions in the grandchild categories of the given category.",
)
async def list_constructions(
    category_id: int,
    access: ConstructorAccess,
    service: ConstructionServiceDep,
) -> ConstructionListResponse:
    """List constructions two category levels below a category."""
    result = await service.find_all_by_category(category_id)
    if not result.success:
        raise_for_result(result)

    items = [construction_to_response(construction) for construction in result.value]
    return ConstructionListResponse(items=items, total=len(items))
