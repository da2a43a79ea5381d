"""Shared fixtures for API tests."""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from listings.api.dependencies import get_context
from listings.application.context import AppContext
from listings.catalog.service import CatalogSeeder
from listings.infrastructure.database import get_session
from listings.main import app


@pytest_asyncio.fixture
async def client(
    context: AppContext,
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client backed by the test database and session store."""

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async with session_factory() as session:
        await CatalogSeeder(session).seed("product")
        await CatalogSeeder(session).seed("construction")
        await session.commit()

    app.dependency_overrides[get_context] = lambda: context
    app.dependency_overrides[get_session] = override_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def signup_and_login(
    client: AsyncClient,
    email: str,
    is_supplier: bool = True,
    is_constructor: bool = False,
) -> dict[str, str]:
    """Register a company, log it in and return its auth headers."""
    response = await client.post(
        "/api/v1/auth/signup",
        json={
            "name": email.split("@")[0],
            "company_type": "Limited Şirketi",
            "email": email,
            "company_authorized_name": "Ayşe",
            "company_authorized_surname": "Yılmaz",
            "is_supplier": is_supplier,
            "is_constructor": is_constructor,
            "password": "s3cret",
            "password_again": "s3cret",
        },
    )
    assert response.status_code == 201, response.text

    response = await client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": "s3cret"},
    )
    assert response.status_code == 200, response.text

    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def login_as(client: AsyncClient) -> Callable[..., Awaitable[dict[str, str]]]:
    """Register and log in further companies from a test."""

    async def _login_as(
        email: str, is_supplier: bool = True, is_constructor: bool = False
    ) -> dict[str, str]:
        return await signup_and_login(client, email, is_supplier, is_constructor)

    return _login_as


@pytest_asyncio.fixture
async def supplier_headers(client: AsyncClient) -> dict[str, str]:
    """Auth headers of a logged-in supplier."""
    return await signup_and_login(client, "supplier@acme.com.tr")


@pytest_asyncio.fixture
async def other_supplier_headers(client: AsyncClient) -> dict[str, str]:
    """Auth headers of a second supplier."""
    return await signup_and_login(client, "rival@beta.com.tr")


@pytest_asyncio.fixture
async def constructor_headers(client: AsyncClient) -> dict[str, str]:
    """Auth headers of a logged-in constructor."""
    return await signup_and_login(
        client, "build@insaat.com.tr", is_supplier=False, is_constructor=True
    )
