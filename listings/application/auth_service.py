"""Authorization resolver.

Issues access/refresh token pairs, binds them to sessions in the session
store and resolves the acting tenant of a request. A token is honored
only while its session exists, so deleting a session revokes a token
that is still cryptographically valid.
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

import structlog

from listings.application.results import OperationResult
from listings.domain.exceptions import (
    DomainError,
    InvalidTokenError,
    SessionNotFoundError,
    TenantMismatchError,
)
from listings.domain.sessions import (
    AccessDetails,
    TenantClaims,
    TokenDetails,
    refresh_session_id,
)
from listings.infrastructure.security import TokenCodec
from listings.infrastructure.session_store import SessionStore

logger = structlog.get_logger()


def _claim_int(claims: dict[str, Any], key: str) -> int:
    value = claims.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTokenError(f"Token claim '{key}' is missing or malformed")
    return value


def _claim_str(claims: dict[str, Any], key: str) -> str:
    value = claims.get(key)
    if not isinstance(value, str) or not value:
        raise InvalidTokenError(f"Token claim '{key}' is missing or malformed")
    return value


class AuthService:
    """Token pair lifecycle and session resolution.

    Example usage:
        service = AuthService(store, access_codec, refresh_codec)
        result = await service.resolve_owner(bearer_token)
        if result.success:
            company_id = result.value.company_id
    """

    def __init__(
        self,
        session_store: SessionStore,
        access_codec: TokenCodec,
        refresh_codec: TokenCodec,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=30),
    ) -> None:
        """Initialize service.

        Args:
            session_store: Session key-value store.
            access_codec: Codec signing access tokens.
            refresh_codec: Codec signing refresh tokens.
            access_ttl: Access session lifetime.
            refresh_ttl: Refresh session lifetime.
        """
        self.session_store = session_store
        self.access_codec = access_codec
        self.refresh_codec = refresh_codec
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    # ========================================================================
    # Issuance
    # ========================================================================

    def issue_token_pair(self, claims: TenantClaims) -> TokenDetails:
        """Sign a new access/refresh token pair.

        The refresh session ID is derived from the access session ID and
        the tenant ID.

        Args:
            claims: Identity claims embedded in both tokens.

        Returns:
            Signed tokens with their session IDs and expiries.
        """
        now = datetime.now(timezone.utc)
        access_uuid = str(uuid4())
        refresh_uuid = refresh_session_id(access_uuid, claims.company_id)
        access_expires_at = now + self.access_ttl
        refresh_expires_at = now + self.refresh_ttl

        access_claims = claims.to_dict()
        access_claims["authorized"] = True
        access_claims["access_uuid"] = access_uuid

        refresh_claims = claims.to_dict()
        refresh_claims["refresh_uuid"] = refresh_uuid

        return TokenDetails(
            access_token=self.access_codec.issue(access_claims, access_expires_at),
            refresh_token=self.refresh_codec.issue(refresh_claims, refresh_expires_at),
            access_uuid=access_uuid,
            refresh_uuid=refresh_uuid,
            access_expires_at=access_expires_at,
            refresh_expires_at=refresh_expires_at,
        )

    async def create_auth(self, company_id: int, details: TokenDetails) -> None:
        """Persist both sessions of a token pair.

        Each session maps its ID to the tenant ID and expires with its token.

        Args:
            company_id: Tenant ID.
            details: Issued token pair.
        """
        now = datetime.now(timezone.utc)
        await self.session_store.set(
            details.access_uuid, str(company_id), details.access_expires_at - now
        )
        await self.session_store.set(
            details.refresh_uuid, str(company_id), details.refresh_expires_at - now
        )

    # ========================================================================
    # Resolution
    # ========================================================================

    def extract_access(self, token: str) -> AccessDetails:
        """Verify an access token and extract its session metadata.

        Args:
            token: Encoded access token.

        Returns:
            Access session ID, claimed tenant ID and identity claims.

        Raises:
            InvalidTokenError: If the token or its claims are invalid.
        """
        claims = self.access_codec.parse(token)
        if claims.get("authorized") is not True:
            raise InvalidTokenError("Token is not authorized")

        access_uuid = _claim_str(claims, "access_uuid")
        company_id = _claim_int(claims, "company_id")
        return AccessDetails(
            access_uuid=access_uuid,
            company_id=company_id,
            claims=TenantClaims.from_dict(company_id, claims),
        )

    async def fetch_auth(self, access_uuid: str, claimed_company_id: int) -> OperationResult[int]:
        """Confirm an access session against the session store.

        Args:
            access_uuid: Access session ID.
            claimed_company_id: Tenant ID claimed by the token.

        Returns:
            Result with the tenant ID bound to the session.
        """
        try:
            stored = await self.session_store.get(access_uuid)
            if stored is None:
                raise SessionNotFoundError(access_uuid)

            try:
                company_id = int(stored)
            except ValueError:
                company_id = 0

            if company_id != claimed_company_id:
                logger.warning(
                    "Session tenant mismatch",
                    claimed_company_id=claimed_company_id,
                )
                raise TenantMismatchError(claimed_company_id)
        except DomainError as e:
            return OperationResult.fail(e)

        return OperationResult.ok(company_id)

    async def resolve_owner(self, token: str) -> OperationResult[AccessDetails]:
        """Resolve the acting tenant of a bearer access token.

        Args:
            token: Encoded access token.

        Returns:
            Result with the verified access details.
        """
        try:
            access = self.extract_access(token)
        except DomainError as e:
            return OperationResult.fail(e)

        fetched = await self.fetch_auth(access.access_uuid, access.company_id)
        if not fetched.success:
            return OperationResult(
                success=False,
                error=fetched.error,
                error_code=fetched.error_code,
                error_kind=fetched.error_kind,
                details=fetched.details,
            )

        return OperationResult.ok(access)

    # ========================================================================
    # Logout / Refresh
    # ========================================================================

    async def logout(self, access: AccessDetails) -> OperationResult[None]:
        """Delete both sessions of the pair the access token belongs to.

        Fails if either session was already gone.

        Args:
            access: Verified access details.

        Returns:
            Empty result.
        """
        try:
            for session_id in (access.access_uuid, access.refresh_uuid):
                deleted = await self.session_store.delete(session_id)
                if deleted != 1:
                    raise SessionNotFoundError(session_id)
        except DomainError as e:
            logger.warning("Logout failed", company_id=access.company_id, error=e.message)
            return OperationResult.fail(e)

        logger.info("Company logged out", company_id=access.company_id)
        return OperationResult.ok()

    async def refresh(self, refresh_token: str) -> OperationResult[TokenDetails]:
        """Rotate a refresh token into a new token pair.

        The old refresh session is deleted before the new pair is
        persisted, so a refresh token can be used once.

        Args:
            refresh_token: Encoded refresh token.

        Returns:
            Result with the new token pair.
        """
        try:
            claims = self.refresh_codec.parse(refresh_token)
            refresh_uuid = _claim_str(claims, "refresh_uuid")
            company_id = _claim_int(claims, "company_id")

            deleted = await self.session_store.delete(refresh_uuid)
            if deleted != 1:
                raise SessionNotFoundError(refresh_uuid)

            details = self.issue_token_pair(TenantClaims.from_dict(company_id, claims))
            await self.create_auth(company_id, details)
        except DomainError as e:
            logger.warning("Token refresh failed", error_code=e.error_code)
            return OperationResult.fail(e)

        logger.info("Token pair refreshed", company_id=company_id)
        return OperationResult.ok(details)
