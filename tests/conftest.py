"""Shared fixtures.

Every test gets a fresh in-memory SQLite database and an in-memory
session store.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

import listings.catalog.models  # noqa: F401
from listings.application.auth_service import AuthService
from listings.application.context import AppContext, build_context
from listings.catalog.service import CatalogSeeder
from listings.infrastructure.config import Settings
from listings.infrastructure.database import Base, build_engine
from listings.infrastructure.models import Company
from listings.infrastructure.session_store import InMemorySessionStore


# ============================================================================
# Context Fixtures
# ============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings with an in-memory session store and cheap hashing."""
    return Settings(
        session_backend="memory",
        password_memory_cost=1024,
        password_parallelism=1,
        capability_policy="at_least_one",
    )


@pytest.fixture
def session_store() -> InMemorySessionStore:
    """Create an empty session store."""
    return InMemorySessionStore()


@pytest.fixture
def context(test_settings: Settings, session_store: InMemorySessionStore) -> AppContext:
    """Build the application context around the in-memory store."""
    return build_context(test_settings, session_store=session_store)


@pytest.fixture
def auth_service(context: AppContext) -> AuthService:
    """Get the authorization resolver."""
    return context.auth_service()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory database with every table."""
    engine = build_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Open a session on the test database."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def product_taxonomy(session: AsyncSession) -> None:
    """Seed the embedded product taxonomy."""
    await CatalogSeeder(session).seed("product")
    await session.commit()


@pytest_asyncio.fixture
async def construction_taxonomy(session: AsyncSession) -> None:
    """Seed the embedded construction taxonomy."""
    await CatalogSeeder(session).seed("construction")
    await session.commit()


# ============================================================================
# Company Fixtures
# ============================================================================


async def create_company(
    session: AsyncSession,
    email: str,
    is_supplier: bool = True,
    is_constructor: bool = False,
) -> Company:
    """Insert a company row directly."""
    company = Company(
        name=email.split("@")[0],
        company_type="Limited Şirketi",
        email=email,
        company_authorized_name="Ayşe",
        company_authorized_surname="Yılmaz",
        is_active=True,
        is_supplier=is_supplier,
        is_constructor=is_constructor,
        password_hash="not-a-real-hash",
    )
    session.add(company)
    await session.flush()
    return company


@pytest_asyncio.fixture
async def supplier(session: AsyncSession) -> Company:
    """A supplier company."""
    return await create_company(session, "supplier@acme.com.tr")


@pytest_asyncio.fixture
async def other_supplier(session: AsyncSession) -> Company:
    """A second, unrelated supplier company."""
    return await create_company(session, "rival@beta.com.tr")


@pytest_asyncio.fixture
async def constructor(session: AsyncSession) -> Company:
    """A constructor company."""
    return await create_company(
        session, "build@insaat.com.tr", is_supplier=False, is_constructor=True
    )


@pytest_asyncio.fixture
async def other_constructor(session: AsyncSession) -> Company:
    """A second, unrelated constructor company."""
    return await create_company(
        session, "yapi@rakip.com.tr", is_supplier=False, is_constructor=True
    )
