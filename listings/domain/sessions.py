"""Session and token value objects.

A login produces two opaque session identifiers, each mapped to the
tenant ID in the session store with its own TTL:

- access session: a random UUID, short-lived
- refresh session: ``<access uuid>++<tenant id>``, long-lived
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Self

from listings.domain.base import ValueObject

REFRESH_SEPARATOR = "++"


def refresh_session_id(access_uuid: str, company_id: int) -> str:
    """Derive the refresh session identifier from the access one.

    Args:
        access_uuid: Access session UUID.
        company_id: Tenant ID.

    Returns:
        Refresh session identifier.
    """
    return f"{access_uuid}{REFRESH_SEPARATOR}{company_id}"


@dataclass(frozen=True)
class TenantClaims(ValueObject):
    """Identity claims embedded in both tokens of a pair."""

    company_id: int
    company_authorized_name: str
    company_authorized_surname: str
    email: str
    is_supplier: bool
    is_constructor: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JWT claims dictionary."""
        return {
            "company_id": self.company_id,
            "company_authorized_name": self.company_authorized_name,
            "company_authorized_surname": self.company_authorized_surname,
            "email": self.email,
            "is_supplier": self.is_supplier,
            "is_constructor": self.is_constructor,
        }

    @classmethod
    def from_dict(cls, company_id: int, claims: dict[str, Any]) -> Self:
        """Rebuild claims from a decoded token.

        Missing or mistyped entries fall back to empty values.

        Args:
            company_id: Tenant ID already extracted from the token.
            claims: Decoded claims.

        Returns:
            TenantClaims instance.
        """

        def _str(key: str) -> str:
            value = claims.get(key)
            return value if isinstance(value, str) else ""

        return cls(
            company_id=company_id,
            company_authorized_name=_str("company_authorized_name"),
            company_authorized_surname=_str("company_authorized_surname"),
            email=_str("email"),
            is_supplier=claims.get("is_supplier") is True,
            is_constructor=claims.get("is_constructor") is True,
        )


@dataclass(frozen=True)
class AccessDetails(ValueObject):
    """Metadata extracted from a verified access token.

    Attributes:
        access_uuid: Access session identifier.
        company_id: Tenant ID claimed by the token.
        claims: Full identity claims.
    """

    access_uuid: str
    company_id: int
    claims: TenantClaims | None = field(default=None, compare=False)

    @property
    def refresh_uuid(self) -> str:
        """Refresh session identifier paired with this access session."""
        return refresh_session_id(self.access_uuid, self.company_id)


@dataclass(frozen=True)
class TokenDetails(ValueObject):
    """An issued token pair and its session metadata."""

    access_token: str
    refresh_token: str
    access_uuid: str
    refresh_uuid: str
    access_expires_at: datetime
    refresh_expires_at: datetime
