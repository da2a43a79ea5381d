"""Company repository for database operations."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from listings.infrastructure.models import Company


class CompanyRepository:
    """Repository for Company database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, company: Company) -> Company:
        """Insert a company and flush to obtain its ID."""
        self.session.add(company)
        await self.session.flush()
        return company

    async def find_by_email(self, email: str) -> Company | None:
        """Get an active (not deleted) company by email."""
        result = await self.session.execute(
            select(Company).where(
                Company.email == email,
                Company.deleted_at.is_(None),
            )
        )
        return result.scalar_one_or_none()

    async def count_by_email(self, email: str) -> int:
        """Count companies registered with an email."""
        result = await self.session.execute(
            select(func.count()).select_from(Company).where(Company.email == email)
        )
        return result.scalar_one()
