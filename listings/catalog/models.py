"""SQLAlchemy models for the product and construction catalogs.

Two parallel hierarchies share the same shape:

- ProductCategory -> ProductFeatureDefinition, Product -> Variant -> VariantFeatureValue
- ConstructionCategory -> ConstructionFeatureDefinition, Construction -> ConstructionFeatureValue

Every table carries ``deleted_at``; rows are soft-deleted and reads filter
on ``deleted_at IS NULL``.
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from listings.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _live(rows: list) -> list:
    return [row for row in rows if row.deleted_at is None]


class TimestampMixin:
    """created_at / updated_at / deleted_at columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def mark_deleted(self, when: datetime | None = None) -> None:
        """Soft-delete this row."""
        self.deleted_at = when or _utcnow()


# ============================================================================
# Categories and Feature Definitions
# ============================================================================


class ProductCategory(TimestampMixin, Base):
    """Node of the product category tree."""

    __tablename__ = "product_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("product_categories.id"),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductCategory(id={self.id}, name={self.name})>"


class ConstructionCategory(TimestampMixin, Base):
    """Node of the construction category tree."""

    __tablename__ = "construction_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("construction_categories.id"),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ConstructionCategory(id={self.id}, name={self.name})>"


class ProductFeatureDefinition(TimestampMixin, Base):
    """Typed attribute declared by a product category.

    Attributes:
        id: Feature definition ID.
        name: Display name.
        description: Help text.
        is_required: Whether every variant in the category must supply it.
        type: Declared primitive type (integer, float/float64, boolean, string).
        category_id: Owning product category.
    """

    __tablename__ = "p_features"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False, default="string")
    category_id: Mapped[int] = mapped_column(
        "product_category_id",
        Integer,
        ForeignKey("product_categories.id"),
        nullable=False,
        index=True,
    )


class ConstructionFeatureDefinition(TimestampMixin, Base):
    """Typed attribute declared by a construction category."""

    __tablename__ = "c_features"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False, default="string")
    category_id: Mapped[int] = mapped_column(
        "construction_category_id",
        Integer,
        ForeignKey("construction_categories.id"),
        nullable=False,
        index=True,
    )


# ============================================================================
# Products and Variants
# ============================================================================


class Product(TimestampMixin, Base):
    """Product owned by a supplier company.

    Attributes:
        id: Product ID.
        company_id: Owning tenant.
        spu: Standard Product Unit code, unique per company.
        name: Product name.
        description: Product description.
        is_active: Whether the product is listed.
        hero_image: Main image remote link.
        category_id: Product category.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("companies.id"), nullable=False, index=True
    )
    spu: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    hero_image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    category_id: Mapped[int] = mapped_column(
        "product_category_id",
        Integer,
        ForeignKey("product_categories.id"),
        nullable=False,
        index=True,
    )

    # Relationships
    images: Mapped[list["ProductImage"]] = relationship(
        "ProductImage",
        lazy="selectin",
        order_by="ProductImage.id",
    )
    variants: Mapped[list["Variant"]] = relationship(
        "Variant",
        lazy="selectin",
        order_by="Variant.id",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, spu={self.spu}, company_id={self.company_id})>"

    def to_dict(self) -> dict:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "company_id": self.company_id,
            "spu": self.spu,
            "name": self.name,
            "description": self.description,
            "is_active": self.is_active,
            "hero_image": self.hero_image,
            "category_id": self.category_id,
            "product_images": [image.to_dict() for image in _live(self.images)],
            "variants": [variant.to_dict() for variant in _live(self.variants)],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class ProductImage(TimestampMixin, Base):
    """Remote image attached to a product."""

    __tablename__ = "product_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("products.id"), nullable=False, index=True
    )
    remote_link: Mapped[str] = mapped_column(String(255), nullable=False)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"id": self.id, "remote_link": self.remote_link}


class Variant(TimestampMixin, Base):
    """Sellable variant of a product.

    Variants carry the feature values; their schema is the parent
    product's category.
    """

    __tablename__ = "variants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("products.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    sku: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    images: Mapped[list["VariantImage"]] = relationship(
        "VariantImage",
        lazy="selectin",
        order_by="VariantImage.id",
    )
    features: Mapped[list["VariantFeatureValue"]] = relationship(
        "VariantFeatureValue",
        lazy="selectin",
        order_by="VariantFeatureValue.id",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Variant(id={self.id}, sku={self.sku})>"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "product_id": self.product_id,
            "name": self.name,
            "sku": self.sku,
            "description": self.description,
            "is_active": self.is_active,
            "variant_images": [image.to_dict() for image in _live(self.images)],
            "features": [feature.to_dict() for feature in _live(self.features)],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class VariantImage(TimestampMixin, Base):
    """Remote image attached to a variant."""

    __tablename__ = "variant_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    variant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("variants.id"), nullable=False, index=True
    )
    remote_link: Mapped[str] = mapped_column(String(255), nullable=False)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"id": self.id, "remote_link": self.remote_link}


class VariantFeatureValue(TimestampMixin, Base):
    """A variant's value for a product feature definition.

    The value is stored as the submitted string.
    """

    __tablename__ = "product_features"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    variant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("variants.id"), nullable=False, index=True
    )
    feature_id: Mapped[int] = mapped_column(
        "product_feature_id",
        Integer,
        ForeignKey("p_features.id"),
        nullable=False,
        index=True,
    )
    value: Mapped[str] = mapped_column(String(128), nullable=False)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"id": self.id, "feature_id": self.feature_id, "value": self.value}


# ============================================================================
# Constructions
# ============================================================================


class Construction(TimestampMixin, Base):
    """Construction project listing owned by a constructor company.

    Money and area fields are fixed-precision decimals.
    """

    __tablename__ = "constructions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("companies.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[int] = mapped_column(
        "construction_category_id",
        Integer,
        ForeignKey("construction_categories.id"),
        nullable=False,
        index=True,
    )
    geographic_region: Mapped[str] = mapped_column(String(20), nullable=False)
    province: Mapped[str] = mapped_column(String(50), nullable=False)
    district: Mapped[str] = mapped_column(String(50), nullable=False)
    stage: Mapped[str] = mapped_column(String(20), nullable=False)
    start: Mapped[str] = mapped_column(String(25), nullable=False)
    end: Mapped[str] = mapped_column(String(25), nullable=False)
    cost_of_project: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    land_area: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    construction_zone: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)

    # Relationships
    images: Mapped[list["ConstructionImage"]] = relationship(
        "ConstructionImage",
        lazy="selectin",
        order_by="ConstructionImage.id",
    )
    features: Mapped[list["ConstructionFeatureValue"]] = relationship(
        "ConstructionFeatureValue",
        lazy="selectin",
        order_by="ConstructionFeatureValue.id",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Construction(id={self.id}, name={self.name})>"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "company_id": self.company_id,
            "name": self.name,
            "category_id": self.category_id,
            "geographic_region": self.geographic_region,
            "province": self.province,
            "district": self.district,
            "stage": self.stage,
            "start": self.start,
            "end": self.end,
            "cost_of_project": self.cost_of_project,
            "land_area": self.land_area,
            "construction_zone": self.construction_zone,
            "construction_images": [image.to_dict() for image in _live(self.images)],
            "construction_features": [feature.to_dict() for feature in _live(self.features)],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class ConstructionImage(TimestampMixin, Base):
    """Remote image attached to a construction."""

    __tablename__ = "construction_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    construction_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("constructions.id"), nullable=False, index=True
    )
    remote_link: Mapped[str] = mapped_column(String(255), nullable=False)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"id": self.id, "remote_link": self.remote_link}


class ConstructionFeatureValue(TimestampMixin, Base):
    """A construction's value for a construction feature definition."""

    __tablename__ = "construction_features"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    construction_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("constructions.id"), nullable=False, index=True
    )
    feature_id: Mapped[int] = mapped_column(
        "construction_feature_id",
        Integer,
        ForeignKey("c_features.id"),
        nullable=False,
        index=True,
    )
    value: Mapped[str] = mapped_column(String(128), nullable=False)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"id": self.id, "feature_id": self.feature_id, "value": self.value}
