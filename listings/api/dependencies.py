"""Shared API dependencies.

Builds request-scoped services from the application context and a
database session, resolves the bearer token into the acting tenant and
translates failed service results into HTTP errors.
"""

from typing import Annotated, NoReturn

import structlog
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from listings.application.auth_service import AuthService
from listings.application.context import AppContext
from listings.application.results import OperationResult
from listings.domain.exceptions import CapabilityRequiredError
from listings.domain.sessions import AccessDetails
from listings.infrastructure.database import get_session

logger = structlog.get_logger()

bearer_scheme = HTTPBearer(auto_error=False)

# error_kind -> HTTP status
STATUS_BY_KIND = {
    "validation": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "feature_schema": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "authentication": status.HTTP_401_UNAUTHORIZED,
    "authorization": status.HTTP_401_UNAUTHORIZED,
    "not_found": status.HTTP_404_NOT_FOUND,
    "conflict": status.HTTP_409_CONFLICT,
    "store": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


# ============================================================================
# Error Translation
# ============================================================================


def raise_for_result(result: OperationResult) -> NoReturn:
    """Raise the HTTP error matching a failed service result.

    Args:
        result: Failed result.

    Raises:
        HTTPException: Always.
    """
    if result.error_code == CapabilityRequiredError.error_code:
        status_code = status.HTTP_403_FORBIDDEN
    else:
        status_code = STATUS_BY_KIND.get(
            result.error_kind or "", status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    raise HTTPException(
        status_code=status_code,
        detail={
            "error_code": result.error_code or "ERROR",
            "message": result.error or "Request failed",
            "details": result.details,
        },
        headers=headers,
    )


# ============================================================================
# Context and Session
# ============================================================================


def get_context(request: Request) -> AppContext:
    """Get the application context built at startup."""
    return request.app.state.context


ContextDep = Annotated[AppContext, Depends(get_context)]
SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_auth_service(context: ContextDep) -> AuthService:
    """Get the authorization resolver."""
    return context.auth_service()


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


# ============================================================================
# Authentication
# ============================================================================


async def get_current_access(
    request: Request,
    auth_service: AuthServiceDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> AccessDetails:
    """Resolve the bearer access token into verified access details.

    Args:
        request: Incoming request.
        auth_service: Authorization resolver.
        credentials: Parsed Authorization header.

    Returns:
        Access details whose session is live and bound to the claimed tenant.

    Raises:
        HTTPException: 401 if the token or its session is invalid.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error_code": "UNAUTHENTICATED",
                "message": "Missing bearer token",
            },
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = await auth_service.resolve_owner(credentials.credentials)
    if not result.success:
        logger.warning(
            "Bearer token rejected",
            path=request.url.path,
            error_code=result.error_code,
        )
        raise_for_result(result)

    structlog.contextvars.bind_contextvars(company_id=result.value.company_id)
    return result.value


CurrentAccess = Annotated[AccessDetails, Depends(get_current_access)]


def require_supplier(access: CurrentAccess) -> AccessDetails:
    """Require the supplier capability claim."""
    if access.claims is None or not access.claims.is_supplier:
        raise_for_result(OperationResult.fail(CapabilityRequiredError("supplier")))
    return access


def require_constructor(access: CurrentAccess) -> AccessDetails:
    """Require the constructor capability claim."""
    if access.claims is None or not access.claims.is_constructor:
        raise_for_result(OperationResult.fail(CapabilityRequiredError("constructor")))
    return access


SupplierAccess = Annotated[AccessDetails, Depends(require_supplier)]
ConstructorAccess = Annotated[AccessDetails, Depends(require_constructor)]
