"""Catalog store engine, declarative base and request sessions."""

from collections.abc import AsyncGenerator

import structlog
from sqlalchemy import MetaData
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from listings.infrastructure.config import settings

logger = structlog.get_logger()

# Matches the index and constraint names used by the alembic migrations
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the catalog store.

    In-memory SQLite (local runs and tests) shares one connection so every
    session sees the same database; other URLs get a pre-pinged pool.
    """
    in_memory = database_url.endswith("://") or ":memory:" in database_url
    if database_url.startswith("sqlite") and in_memory:
        return create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(database_url, echo=echo, pool_pre_ping=True)


engine = build_engine(settings.database_url, echo=settings.debug)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request.

    The whole request runs in one transaction: committed after the
    handler returns, rolled back if anything raises.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            logger.error("Transaction rolled back", error=str(e))
            await session.rollback()
            raise
        except Exception:
            await session.rollback()
            raise
