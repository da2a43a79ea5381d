"""SQLAlchemy models for tenant accounts.

Defines the companies table. Catalog tables live in listings.catalog.models.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from listings.infrastructure.database import Base


class Company(Base):
    """Registered company account, the unit of data ownership.

    Attributes:
        id: Tenant ID.
        name: Company name.
        company_type: Legal entity kind.
        web_site: Optional web site.
        email: Login email, stored lower-cased and unique.
        company_authorized_name: Authorized person's first name.
        company_authorized_surname: Authorized person's last name.
        is_active: Whether the account is active.
        is_supplier: May manage the product catalog.
        is_constructor: May manage construction listings.
        password_hash: Argon2id hash in PHC string format.
    """

    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    company_type: Mapped[str] = mapped_column(String(50), nullable=False)
    web_site: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(75), nullable=False, unique=True, index=True)
    company_authorized_name: Mapped[str] = mapped_column(String(50), nullable=False)
    company_authorized_surname: Mapped[str] = mapped_column(String(50), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_supplier: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_constructor: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Company(id={self.id}, email={self.email})>"

    def to_dict(self) -> dict:
        """Convert to dictionary without credentials.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "name": self.name,
            "company_type": self.company_type,
            "web_site": self.web_site,
            "email": self.email,
            "company_authorized_name": self.company_authorized_name,
            "company_authorized_surname": self.company_authorized_surname,
            "is_active": self.is_active,
            "is_supplier": self.is_supplier,
            "is_constructor": self.is_constructor,
        }
