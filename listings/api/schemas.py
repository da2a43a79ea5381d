"""API schemas for the Listings API.

Pydantic models for request/response validation and serialization.
Create forms require their core fields; update forms make every field
optional and only the supplied ones are applied.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from listings.domain.constructions import ConstructionStage, GeographicRegion

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
QUARTER_PATTERN = r"^[0-9]{4} - [1-4]\.Çeyrek$"


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | list[Any] = Field(
        default_factory=dict, description="Additional error context"
    )
    request_id: str | None = Field(default=None, description="Request correlation ID")


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str = Field(..., description="Result message")


class ImageSchema(BaseModel):
    """Remote image link submitted with a form."""

    remote_link: str = Field(..., min_length=1, max_length=255, description="Image URL")


class ImageResponse(BaseModel):
    """Stored image."""

    id: int
    remote_link: str


class FeatureValueSchema(BaseModel):
    """Submitted feature value. Values always travel as strings."""

    feature_id: int = Field(..., gt=0, description="Feature definition ID")
    value: str = Field(..., min_length=1, max_length=128, description="Raw value")


class FeatureValueResponse(BaseModel):
    """Stored feature value."""

    id: int
    feature_id: int
    value: str


# ============================================================================
# Company / Auth Schemas
# ============================================================================


class CompanyType(str, Enum):
    """Legal entity kinds."""

    ANONIM = "Anonim Şirketi"
    SAHIS = "Şahıs"
    LIMITED = "Limited Şirketi"
    KOLLEKTIF = "Kollektif Şirket"
    ADI_ORTAKLIK = "Adi Ortaklık"
    ADI_KOMANDIT = "Adi Komandit Şirket"
    SERMAYESI_PAYLARA_BOLUNMUS = "Sermayesi Paylara Bölünmüş Komandit Şirket"
    DIGER = "Diğer"


class SignupRequest(BaseModel):
    """Company registration form."""

    name: str = Field(..., min_length=1, max_length=50, description="Company name")
    company_type: CompanyType = Field(..., description="Legal entity kind")
    web_site: str | None = Field(default=None, max_length=255, description="Web site")
    email: str = Field(..., max_length=75, pattern=EMAIL_PATTERN, description="Login email")
    company_authorized_name: str = Field(..., min_length=1, max_length=50)
    company_authorized_surname: str = Field(..., min_length=1, max_length=50)
    is_active: bool = Field(default=True)
    is_supplier: bool = Field(default=False, description="May manage products")
    is_constructor: bool = Field(default=False, description="May manage constructions")
    password: str = Field(..., min_length=1, max_length=100)
    password_again: str = Field(..., min_length=1, max_length=100)


class CompanyResponse(BaseModel):
    """Registered company. Never includes credentials."""

    id: int
    name: str
    company_type: str
    web_site: str | None = None
    email: str
    company_authorized_name: str
    company_authorized_surname: str
    is_active: bool
    is_supplier: bool
    is_constructor: bool


class LoginRequest(BaseModel):
    """Login form."""

    email: str = Field(..., max_length=75, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1, max_length=100)


class RefreshRequest(BaseModel):
    """Refresh token submission."""

    refresh_token: str = Field(..., min_length=1)


class TokenPairResponse(BaseModel):
    """Issued access/refresh token pair."""

    access_token: str = Field(..., description="Short-lived bearer token")
    refresh_token: str = Field(..., description="Single-use refresh token")
    access_expires_at: datetime
    refresh_expires_at: datetime


# ============================================================================
# Product / Variant Schemas
# ============================================================================


class ProductCreateRequest(BaseModel):
    """New product form."""

    name: str = Field(..., min_length=1, max_length=100)
    spu: str = Field(..., min_length=1, max_length=50, description="Unique per company")
    is_active: bool = Field(default=False)
    description: str | None = Field(default=None, max_length=255)
    hero_image: str | None = Field(default=None, max_length=255)
    product_images: list[ImageSchema] = Field(default_factory=list)
    category_id: int = Field(..., gt=0, description="Product category ID")


class ProductUpdateRequest(BaseModel):
    """Partial product update form."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    spu: str | None = Field(default=None, min_length=1, max_length=50)
    is_active: bool | None = None
    description: str | None = Field(default=None, max_length=255)
    hero_image: str | None = Field(default=None, max_length=255)
    product_images: list[ImageSchema] | None = None


class VariantCreateRequest(BaseModel):
    """New variant form."""

    name: str = Field(..., min_length=1, max_length=100)
    sku: str = Field(..., min_length=1, max_length=50)
    product_id: int = Field(..., gt=0)
    description: str | None = Field(default=None, max_length=255)
    is_active: bool = Field(default=False)
    variant_images: list[ImageSchema] = Field(default_factory=list)
    features: list[FeatureValueSchema] = Field(default_factory=list)


class VariantUpdateRequest(BaseModel):
    """Partial variant update form."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    sku: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=255)
    is_active: bool | None = None
    variant_images: list[ImageSchema] | None = None
    features: list[FeatureValueSchema] | None = None


class VariantResponse(BaseModel):
    """Variant with images and feature values."""

    id: int
    product_id: int
    name: str
    sku: str
    description: str | None = None
    is_active: bool
    variant_images: list[ImageResponse] = Field(default_factory=list)
    features: list[FeatureValueResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class ProductResponse(BaseModel):
    """Product with images and variants."""

    id: int
    company_id: int
    spu: str
    name: str
    description: str | None = None
    is_active: bool
    hero_image: str | None = None
    category_id: int
    product_images: list[ImageResponse] = Field(default_factory=list)
    variants: list[VariantResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class ProductListResponse(BaseModel):
    """Products of a category listing."""

    items: list[ProductResponse]
    total: int


class FeatureDefinitionResponse(BaseModel):
    """Feature definition of a category."""

    id: int
    name: str
    description: str | None = None
    type: str = Field(..., description="integer, float, boolean or string")
    is_required: bool
    category_id: int


class FeatureListResponse(BaseModel):
    """Feature definitions of a category."""

    items: list[FeatureDefinitionResponse]
    total: int


# ============================================================================
# Construction Schemas
# ============================================================================


class ConstructionCreateRequest(BaseModel):
    """New construction form."""

    name: str = Field(..., min_length=1, max_length=255)
    construction_category_id: int = Field(..., gt=0)
    geographic_region: GeographicRegion
    province: str = Field(..., min_length=1, max_length=50)
    district: str = Field(..., min_length=1, max_length=50)
    stage: ConstructionStage
    start: str = Field(..., pattern=QUARTER_PATTERN, description="e.g. '2024 - 3.Çeyrek'")
    end: str = Field(..., pattern=QUARTER_PATTERN, description="e.g. '2026 - 1.Çeyrek'")
    cost_of_project: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    land_area: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    construction_zone: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    construction_images: list[ImageSchema] = Field(default_factory=list)
    construction_features: list[FeatureValueSchema] = Field(default_factory=list)


class ConstructionUpdateRequest(BaseModel):
    """Partial construction update form."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    geographic_region: GeographicRegion | None = None
    province: str | None = Field(default=None, min_length=1, max_length=50)
    district: str | None = Field(default=None, min_length=1, max_length=50)
    stage: ConstructionStage | None = None
    start: str | None = Field(default=None, pattern=QUARTER_PATTERN)
    end: str | None = Field(default=None, pattern=QUARTER_PATTERN)
    cost_of_project: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    land_area: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    construction_zone: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    construction_images: list[ImageSchema] | None = None
    construction_features: list[FeatureValueSchema] | None = None


class ConstructionResponse(BaseModel):
    """Construction with images and feature values."""

    id: int
    company_id: int
    name: str
    category_id: int
    geographic_region: str
    province: str
    district: str
    stage: str
    start: str
    end: str
    cost_of_project: Decimal | None = None
    land_area: Decimal | None = None
    construction_zone: Decimal | None = None
    construction_images: list[ImageResponse] = Field(default_factory=list)
    construction_features: list[FeatureValueResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class ConstructionListResponse(BaseModel):
    """Constructions of a category listing."""

    items: list[ConstructionResponse]
    total: int
