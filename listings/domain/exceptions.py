"""Domain exceptions.

All domain-level errors raised by the feature validator, the session
resolver and the catalog orchestrators. Every error carries a machine
readable ``error_code`` and an ``error_kind`` so the application layer
can translate it into a result without inspecting message strings.
"""

from typing import Any, ClassVar


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    error_kind: ClassVar[str] = "domain"
    error_code: ClassVar[str] = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Validation Errors
# ============================================================================


class ValidationError(DomainError):
    """Raised when input fields are malformed or missing."""

    error_kind = "validation"
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize validation error.

        Args:
            message: Human-readable error message.
            field: Name of the offending field.
        """
        super().__init__(message, details={"field": field} if field else {})
        self.field = field


class PasswordMismatchError(ValidationError):
    """Raised when password and its confirmation differ."""

    error_code = "PASSWORDS_NOT_SAME"

    def __init__(self) -> None:
        super().__init__("Passwords are not the same", field="password_again")


class CapabilityPolicyError(ValidationError):
    """Raised when supplier/constructor flags violate the registration policy."""

    error_code = "CAPABILITY_POLICY_VIOLATION"

    def __init__(self, policy: str) -> None:
        """Initialize capability policy error.

        Args:
            policy: Name of the active policy.
        """
        super().__init__(
            f"is_supplier/is_constructor do not satisfy policy '{policy}'",
            field="is_supplier",
        )
        self.details["policy"] = policy


# ============================================================================
# Feature Schema Errors
# ============================================================================


class FeatureSchemaError(DomainError):
    """Base class for feature schema violations."""

    error_kind = "feature_schema"
    error_code = "FEATURE_SCHEMA_ERROR"


class MissingRequiredFeatureError(FeatureSchemaError):
    """Raised when a required feature of the category is not supplied."""

    error_code = "FEATURE_REQUIRED"

    def __init__(self, feature_id: int) -> None:
        """Initialize missing required feature error.

        Args:
            feature_id: ID of the required feature definition.
        """
        super().__init__(
            f"Required feature with ID {feature_id} is not present in the form",
            details={"feature_id": feature_id},
        )
        self.feature_id = feature_id


class InvalidFeatureValueError(FeatureSchemaError):
    """Raised when a feature value does not parse as its declared type."""

    error_code = "FEATURE_INVALID_VALUE"

    def __init__(self, feature_id: int, raw_value: str, expected_type: str) -> None:
        """Initialize invalid feature value error.

        Args:
            feature_id: ID of the feature definition.
            raw_value: The submitted value.
            expected_type: Declared primitive type.
        """
        super().__init__(
            f"Invalid value for feature with ID {feature_id}: "
            f"{raw_value!r} is not a valid {expected_type}",
            details={
                "feature_id": feature_id,
                "value": raw_value,
                "expected_type": expected_type,
            },
        )
        self.feature_id = feature_id
        self.raw_value = raw_value


# ============================================================================
# Authentication / Authorization Errors
# ============================================================================


class AuthenticationError(DomainError):
    """Raised when a session or token is missing, invalid or expired."""

    error_kind = "authentication"
    error_code = "UNAUTHENTICATED"


class InvalidCredentialsError(AuthenticationError):
    """Raised on login failure. Never says which of email/password was wrong."""

    error_code = "INVALID_CREDENTIALS"

    def __init__(self) -> None:
        super().__init__("Email or password is incorrect")


class SessionNotFoundError(AuthenticationError):
    """Raised when a session identifier is absent from the session store."""

    error_code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: str) -> None:
        """Initialize session not found error.

        Args:
            session_id: The access or refresh session identifier.
        """
        super().__init__("Session is invalid or has expired")
        self.session_id = session_id


class InvalidTokenError(AuthenticationError):
    """Raised when a token fails signature, expiry or claim checks."""

    error_code = "INVALID_TOKEN"


class TokenExpiredError(InvalidTokenError):
    """Raised when a token's expiry claim is in the past."""

    error_code = "TOKEN_EXPIRED"


class AuthorizationError(DomainError):
    """Raised when the resolved tenant may not perform the operation."""

    error_kind = "authorization"
    error_code = "UNAUTHORIZED"


class TenantMismatchError(AuthorizationError):
    """Raised when the session's tenant differs from the token's tenant claim."""

    def __init__(self, claimed_tenant_id: int) -> None:
        super().__init__(
            "Unauthorized",
            details={"claimed_tenant_id": claimed_tenant_id},
        )


class CapabilityRequiredError(AuthorizationError):
    """Raised when the token lacks the supplier/constructor capability."""

    error_code = "CAPABILITY_REQUIRED"

    def __init__(self, capability: str) -> None:
        super().__init__(
            f"Tenant is not allowed to act as {capability}",
            details={"capability": capability},
        )


# ============================================================================
# Not Found Errors
# ============================================================================


class NotFoundError(DomainError):
    """Base class for missing entities.

    Also used to mask entities owned by another tenant.
    """

    error_kind = "not_found"
    error_code = "NOT_FOUND"
    entity_type: ClassVar[str] = "Entity"

    def __init__(self, entity_id: int | str) -> None:
        """Initialize not found error.

        Args:
            entity_id: ID that was looked up.
        """
        super().__init__(
            f"{self.entity_type} not found: {entity_id}",
            details={"entity_type": self.entity_type, "entity_id": entity_id},
        )
        self.entity_id = entity_id


class ProductNotFoundError(NotFoundError):
    error_code = "PRODUCT_NOT_FOUND"
    entity_type = "Product"


class VariantNotFoundError(NotFoundError):
    error_code = "VARIANT_NOT_FOUND"
    entity_type = "Variant"


class ConstructionNotFoundError(NotFoundError):
    error_code = "CONSTRUCTION_NOT_FOUND"
    entity_type = "Construction"


class CategoryNotFoundError(NotFoundError):
    error_code = "CATEGORY_NOT_FOUND"
    entity_type = "Category"


class FeatureNotFoundError(NotFoundError):
    error_code = "FEATURE_NOT_FOUND"
    entity_type = "Feature"


# ============================================================================
# Conflict Errors
# ============================================================================


class ConflictError(DomainError):
    """Base class for uniqueness violations."""

    error_kind = "conflict"
    error_code = "CONFLICT"


class DuplicateSPUError(ConflictError):
    """Raised when a tenant already owns a product with the same SPU."""

    error_code = "PRODUCT_SPU_MUST_BE_UNIQUE"

    def __init__(self, spu: str) -> None:
        super().__init__(
            f"Product SPU must be unique: {spu}",
            details={"spu": spu},
        )


class EmailAlreadyExistsError(ConflictError):
    """Raised when registering an email that is already taken."""

    error_code = "EMAIL_ALREADY_EXISTS"

    def __init__(self, email: str) -> None:
        super().__init__("Email already exists", details={"email": email})


# ============================================================================
# Store Errors
# ============================================================================


class StoreError(DomainError):
    """Opaque failure of the catalog or session store."""

    error_kind = "store"
    error_code = "STORE_ERROR"
