"""Credential manager.

Registers companies and logs them in.
"""

from dataclasses import dataclass

import structlog
from sqlalchemy.exc import SQLAlchemyError

from listings.application.auth_service import AuthService
from listings.application.results import OperationResult
from listings.domain.exceptions import (
    CapabilityPolicyError,
    DomainError,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    PasswordMismatchError,
    StoreError,
)
from listings.domain.policies import CapabilityPolicy
from listings.domain.sessions import TenantClaims, TokenDetails
from listings.infrastructure.company_repository import CompanyRepository
from listings.infrastructure.models import Company
from listings.infrastructure.security import PasswordHasher

logger = structlog.get_logger()


@dataclass
class CompanyRegistration:
    """Registration form data."""

    name: str
    company_type: str
    email: str
    company_authorized_name: str
    company_authorized_surname: str
    password: str
    password_again: str
    web_site: str | None = None
    is_active: bool = True
    is_supplier: bool = False
    is_constructor: bool = False


class CompanyService:
    """Registration and login.

    Example usage:
        service = CompanyService(repository, hasher, auth_service)
        result = await service.login("info@acme.com.tr", "secret")
        if result.success:
            tokens = result.value
    """

    def __init__(
        self,
        repository: CompanyRepository,
        password_hasher: PasswordHasher,
        auth_service: AuthService,
        capability_policy: CapabilityPolicy = CapabilityPolicy.AT_LEAST_ONE,
    ) -> None:
        """Initialize service.

        Args:
            repository: Company repository.
            password_hasher: Argon2id hasher.
            auth_service: Token pair issuer.
            capability_policy: Rule for the supplier/constructor flags.
        """
        self.repository = repository
        self.password_hasher = password_hasher
        self.auth_service = auth_service
        self.capability_policy = capability_policy

    async def register(self, form: CompanyRegistration) -> OperationResult[Company]:
        """Register a company.

        Only the password hash is stored.

        Args:
            form: Registration data.

        Returns:
            Result with the saved company.
        """
        email = form.email.strip().lower()
        try:
            if form.password != form.password_again:
                raise PasswordMismatchError()

            if not self.capability_policy.allows(form.is_supplier, form.is_constructor):
                raise CapabilityPolicyError(self.capability_policy.value)

            if await self.repository.count_by_email(email) > 0:
                raise EmailAlreadyExistsError(email)

            company = await self.repository.save(
                Company(
                    name=form.name,
                    company_type=form.company_type,
                    web_site=form.web_site,
                    email=email,
                    company_authorized_name=form.company_authorized_name,
                    company_authorized_surname=form.company_authorized_surname,
                    is_active=form.is_active,
                    is_supplier=form.is_supplier,
                    is_constructor=form.is_constructor,
                    password_hash=self.password_hasher.hash(form.password),
                )
            )
        except SQLAlchemyError as e:
            logger.error("Company save failed", error=str(e))
            return OperationResult.fail(StoreError("Company could not be saved"))
        except DomainError as e:
            logger.warning("Company registration rejected", error_code=e.error_code)
            return OperationResult.fail(e)

        logger.info("Company registered", company_id=company.id)
        return OperationResult.ok(company)

    async def login(self, email: str, password: str) -> OperationResult[TokenDetails]:
        """Verify credentials and open a session.

        Unknown email and wrong password fail with the same error.

        Args:
            email: Login email (case-insensitive).
            password: Plaintext password.

        Returns:
            Result with the new token pair.
        """
        try:
            company = await self.repository.find_by_email(email.strip().lower())
            if company is None:
                self.password_hasher.verify_absent(password)
                raise InvalidCredentialsError()
            if not self.password_hasher.verify(password, company.password_hash):
                raise InvalidCredentialsError()

            details = self.auth_service.issue_token_pair(
                TenantClaims(
                    company_id=company.id,
                    company_authorized_name=company.company_authorized_name,
                    company_authorized_surname=company.company_authorized_surname,
                    email=company.email,
                    is_supplier=company.is_supplier,
                    is_constructor=company.is_constructor,
                )
            )
            await self.auth_service.create_auth(company.id, details)
        except SQLAlchemyError as e:
            logger.error("Company lookup failed", error=str(e))
            return OperationResult.fail(StoreError("Could not log in"))
        except DomainError as e:
            logger.warning("Login rejected", error_code=e.error_code)
            return OperationResult.fail(e)

        logger.info("Company logged in", company_id=company.id)
        return OperationResult.ok(details)
