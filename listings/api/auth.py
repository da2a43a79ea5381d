"""Authentication API endpoints.

Provides company signup, login, logout and token refresh.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from listings.api.dependencies import (
    AuthServiceDep,
    ContextDep,
    CurrentAccess,
    SessionDep,
    raise_for_result,
)
from listings.api.schemas import (
    CompanyResponse,
    ErrorResponse,
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    SignupRequest,
    TokenPairResponse,
)
from listings.application.company_service import CompanyRegistration, CompanyService
from listings.domain.sessions import TokenDetails
from listings.infrastructure.company_repository import CompanyRepository

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


# ============================================================================
# Dependencies
# ============================================================================


def get_company_service(
    context: ContextDep,
    session: SessionDep,
    auth_service: AuthServiceDep,
) -> CompanyService:
    """Get company service bound to the request session."""
    return CompanyService(
        repository=CompanyRepository(session),
        password_hasher=context.password_hasher,
        auth_service=auth_service,
        capability_policy=context.capability_policy,
    )


# ============================================================================
# Converters
# ============================================================================


def tokens_to_response(details: TokenDetails) -> TokenPairResponse:
    """Convert issued tokens to response schema."""
    return TokenPairResponse(
        access_token=details.access_token,
        refresh_token=details.refresh_token,
        access_expires_at=details.access_expires_at,
        refresh_expires_at=details.refresh_expires_at,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/signup",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Register a company",
)
async def signup(
    request: SignupRequest,
    service: Annotated[CompanyService, Depends(get_company_service)],
) -> CompanyResponse:
    """Register a company account.

    Args:
        request: Registration form.
        service: Company service.

    Returns:
        The registered company.
    """
    result = await service.register(
        CompanyRegistration(
            name=request.name,
            company_type=request.company_type.value,
            web_site=request.web_site,
            email=request.email,
            company_authorized_name=request.company_authorized_name,
            company_authorized_surname=request.company_authorized_surname,
            is_active=request.is_active,
            is_supplier=request.is_supplier,
            is_constructor=request.is_constructor,
            password=request.password,
            password_again=request.password_again,
        )
    )
    if not result.success:
        raise_for_result(result)

    return CompanyResponse.model_validate(result.value.to_dict())


@router.post(
    "/login",
    response_model=TokenPairResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Log in",
)
async def login(
    request: LoginRequest,
    service: Annotated[CompanyService, Depends(get_company_service)],
) -> TokenPairResponse:
    """Verify credentials and issue a token pair.

    Args:
        request: Login form.
        service: Company service.

    Returns:
        Access and refresh tokens.
    """
    result = await service.login(request.email, request.password)
    if not result.success:
        raise_for_result(result)

    return tokens_to_response(result.value)


@router.delete(
    "/logout",
    response_model=MessageResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Log out",
)
async def logout(
    access: CurrentAccess,
    auth_service: AuthServiceDep,
) -> MessageResponse:
    """Delete both sessions of the caller's token pair."""
    result = await auth_service.logout(access)
    if not result.success:
        raise_for_result(result)

    return MessageResponse(message="Successfully logged out")


@router.post(
    "/token/refresh",
    response_model=TokenPairResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Rotate a refresh token",
)
async def refresh_token(
    request: RefreshRequest,
    auth_service: AuthServiceDep,
) -> TokenPairResponse:
    """Exchange a refresh token for a new token pair.

    The submitted refresh token cannot be used again.
    """
    result = await auth_service.refresh(request.refresh_token)
    if not result.success:
        raise_for_result(result)

    return tokens_to_response(result.value)
