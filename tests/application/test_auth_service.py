"""Tests for the authorization resolver."""

from datetime import timedelta

import pytest

from listings.application.auth_service import AuthService
from listings.domain.sessions import TenantClaims, TokenDetails
from listings.infrastructure.security import TokenCodec
from listings.infrastructure.session_store import InMemorySessionStore


@pytest.fixture
def claims() -> TenantClaims:
    """Claims of a supplier tenant."""
    return TenantClaims(
        company_id=7,
        company_authorized_name="Ayşe",
        company_authorized_surname="Yılmaz",
        email="info@acme.com.tr",
        is_supplier=True,
        is_constructor=False,
    )


async def _login(auth_service: AuthService, claims: TenantClaims) -> TokenDetails:
    details = auth_service.issue_token_pair(claims)
    await auth_service.create_auth(claims.company_id, details)
    return details


class TestIssueTokenPair:
    """Tests for token pair issuance."""

    def test_session_ids(self, auth_service: AuthService, claims: TenantClaims) -> None:
        """The refresh session ID derives from the access one."""
        details = auth_service.issue_token_pair(claims)

        assert details.refresh_uuid == f"{details.access_uuid}++7"
        assert details.access_expires_at < details.refresh_expires_at

    def test_access_token_claims(self, auth_service: AuthService, claims: TenantClaims) -> None:
        """Access tokens carry identity claims and their session ID."""
        details = auth_service.issue_token_pair(claims)
        access = auth_service.extract_access(details.access_token)

        assert access.access_uuid == details.access_uuid
        assert access.company_id == 7
        assert access.claims == claims

    def test_pairs_are_unique(self, auth_service: AuthService, claims: TenantClaims) -> None:
        """Each pair gets a fresh session ID."""
        first = auth_service.issue_token_pair(claims)
        second = auth_service.issue_token_pair(claims)
        assert first.access_uuid != second.access_uuid


class TestFetchAuth:
    """Tests for session lookup."""

    @pytest.mark.asyncio
    async def test_round_trip(self, auth_service: AuthService, claims: TenantClaims) -> None:
        """A fresh session resolves to the tenant it was issued for."""
        details = await _login(auth_service, claims)

        result = await auth_service.fetch_auth(details.access_uuid, 7)

        assert result.success
        assert result.value == 7

    @pytest.mark.asyncio
    async def test_tenant_mismatch(self, auth_service: AuthService, claims: TenantClaims) -> None:
        """A session bound to another tenant is unauthorized."""
        details = await _login(auth_service, claims)

        result = await auth_service.fetch_auth(details.access_uuid, 8)

        assert not result.success
        assert result.error_kind == "authorization"
        assert result.error == "Unauthorized"

    @pytest.mark.asyncio
    async def test_unknown_session(self, auth_service: AuthService) -> None:
        """Unknown sessions fail authentication."""
        result = await auth_service.fetch_auth("missing", 7)

        assert not result.success
        assert result.error_kind == "authentication"
        assert result.error_code == "SESSION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_corrupt_session_value(
        self, auth_service: AuthService, session_store: InMemorySessionStore
    ) -> None:
        """Non-numeric stored values never match a tenant."""
        await session_store.set("abc", "not-a-number", timedelta(minutes=1))

        result = await auth_service.fetch_auth("abc", 7)

        assert not result.success
        assert result.error_kind == "authorization"


class TestResolveOwner:
    """Tests for bearer token resolution."""

    @pytest.mark.asyncio
    async def test_valid_token(self, auth_service: AuthService, claims: TenantClaims) -> None:
        """A live session resolves to its access details."""
        details = await _login(auth_service, claims)

        result = await auth_service.resolve_owner(details.access_token)

        assert result.success
        assert result.value.company_id == 7
        assert result.value.claims.is_supplier is True

    @pytest.mark.asyncio
    async def test_refresh_token_is_not_an_access_token(
        self, auth_service: AuthService, claims: TenantClaims
    ) -> None:
        """Refresh tokens are signed with another secret."""
        details = await _login(auth_service, claims)

        result = await auth_service.resolve_owner(details.refresh_token)

        assert not result.success
        assert result.error_code == "INVALID_TOKEN"

    @pytest.mark.asyncio
    async def test_expired_token(
        self, session_store: InMemorySessionStore, claims: TenantClaims
    ) -> None:
        """Expired tokens fail before the session is consulted."""
        service = AuthService(
            session_store,
            TokenCodec("access"),
            TokenCodec("refresh"),
            access_ttl=timedelta(seconds=-5),
        )
        details = await _login(service, claims)

        result = await service.resolve_owner(details.access_token)

        assert not result.success
        assert result.error_code == "TOKEN_EXPIRED"
        assert result.error_kind == "authentication"

    @pytest.mark.asyncio
    async def test_garbage_token(self, auth_service: AuthService) -> None:
        """Malformed tokens fail authentication."""
        result = await auth_service.resolve_owner("garbage")

        assert not result.success
        assert result.error_kind == "authentication"


class TestLogout:
    """Tests for logout."""

    @pytest.mark.asyncio
    async def test_logout_then_reuse(self, auth_service: AuthService, claims: TenantClaims) -> None:
        """A token whose session was deleted is rejected although it still verifies."""
        details = await _login(auth_service, claims)
        access = (await auth_service.resolve_owner(details.access_token)).value

        logout = await auth_service.logout(access)
        assert logout.success

        # Signature and expiry still pass
        assert auth_service.extract_access(details.access_token).access_uuid == details.access_uuid

        result = await auth_service.resolve_owner(details.access_token)
        assert not result.success
        assert result.error_kind == "authentication"
        assert result.error_code == "SESSION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_logout_removes_refresh_session(
        self, auth_service: AuthService, claims: TenantClaims
    ) -> None:
        """The paired refresh token stops working too."""
        details = await _login(auth_service, claims)
        access = auth_service.extract_access(details.access_token)

        await auth_service.logout(access)
        result = await auth_service.refresh(details.refresh_token)

        assert not result.success
        assert result.error_code == "SESSION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_logout_twice(self, auth_service: AuthService, claims: TenantClaims) -> None:
        """A second logout finds no session."""
        details = await _login(auth_service, claims)
        access = auth_service.extract_access(details.access_token)

        await auth_service.logout(access)
        result = await auth_service.logout(access)

        assert not result.success
        assert result.error_code == "SESSION_NOT_FOUND"


class TestRefresh:
    """Tests for refresh token rotation."""

    @pytest.mark.asyncio
    async def test_refresh_issues_new_pair(
        self, auth_service: AuthService, claims: TenantClaims
    ) -> None:
        """A refresh yields a working pair for the same tenant."""
        details = await _login(auth_service, claims)

        result = await auth_service.refresh(details.refresh_token)

        assert result.success
        assert result.value.access_uuid != details.access_uuid
        resolved = await auth_service.resolve_owner(result.value.access_token)
        assert resolved.success
        assert resolved.value.claims == claims

    @pytest.mark.asyncio
    async def test_refresh_token_is_single_use(
        self, auth_service: AuthService, claims: TenantClaims
    ) -> None:
        """Reusing the old refresh token fails."""
        details = await _login(auth_service, claims)

        await auth_service.refresh(details.refresh_token)
        result = await auth_service.refresh(details.refresh_token)

        assert not result.success
        assert result.error_kind == "authentication"
        assert result.error_code == "SESSION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_access_token_cannot_refresh(
        self, auth_service: AuthService, claims: TenantClaims
    ) -> None:
        """Access tokens are rejected by the refresh codec."""
        details = await _login(auth_service, claims)

        result = await auth_service.refresh(details.access_token)

        assert not result.success
        assert result.error_code == "INVALID_TOKEN"
