"""Tests for the variant orchestrator."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from listings.application.feature_service import FeatureSchemaValidator
from listings.application.product_service import ProductDraft, ProductService
from listings.application.variant_service import VariantChanges, VariantDraft, VariantService
from listings.catalog.features import FeatureDefinitionRepository
from listings.catalog.models import Product
from listings.catalog.repository import ProductRepository, VariantRepository
from listings.domain.features import FeatureInput
from listings.infrastructure.models import Company


@pytest.fixture
def service(session: AsyncSession, product_taxonomy: None) -> VariantService:
    """Variant service over the seeded product taxonomy."""
    return VariantService(
        repository=VariantRepository(session),
        products=ProductRepository(session),
        validator=FeatureSchemaValidator(FeatureDefinitionRepository.for_products(session)),
    )


@pytest.fixture
def products(session: AsyncSession, product_taxonomy: None) -> ProductService:
    """Product service for parent products and reads."""
    return ProductService(
        repository=ProductRepository(session),
        categories=FeatureDefinitionRepository.for_products(session),
    )


@pytest_asyncio.fixture
async def cement(products: ProductService, supplier: Company) -> Product:
    """A cement product; its category requires strength class and bag weight."""
    result = await products.create(
        ProductDraft(name="Portland Çimento", spu="CEM-1", category_id=3),
        company_id=supplier.id,
    )
    return result.value


@pytest_asyncio.fixture
async def feature_ids(session: AsyncSession, product_taxonomy: None) -> dict[str, int]:
    """Feature definition IDs of the cement category by name."""
    definitions = await FeatureDefinitionRepository.for_products(session).get_by_category(3)
    return {d.name: d.id for d in definitions}


def _features(ids: dict[str, int], weight: str = "50") -> list[FeatureInput]:
    return [
        FeatureInput(ids["Dayanım Sınıfı"], "CEM I 42,5 R"),
        FeatureInput(ids["Torba Ağırlığı (kg)"], weight),
    ]


class TestCreateVariant:
    """Tests for VariantService.create."""

    @pytest.mark.asyncio
    async def test_create(
        self,
        service: VariantService,
        cement: Product,
        supplier: Company,
        feature_ids: dict[str, int],
    ) -> None:
        """Feature values are stored as submitted strings."""
        result = await service.create(
            VariantDraft(
                name="50 kg",
                sku="CEM-1-50",
                product_id=cement.id,
                images=["https://cdn.example.com/cem50.jpg"],
                features=_features(feature_ids),
            ),
            company_id=supplier.id,
        )

        assert result.success
        variant = result.value.to_dict()
        assert variant["product_id"] == cement.id
        assert sorted(f["value"] for f in variant["features"]) == ["50", "CEM I 42,5 R"]
        assert variant["variant_images"][0]["remote_link"] == "https://cdn.example.com/cem50.jpg"

    @pytest.mark.asyncio
    async def test_missing_required_feature(
        self,
        service: VariantService,
        cement: Product,
        supplier: Company,
        feature_ids: dict[str, int],
    ) -> None:
        """Required features of the product category must be supplied."""
        result = await service.create(
            VariantDraft(
                name="50 kg",
                sku="CEM-1-50",
                product_id=cement.id,
                features=[FeatureInput(feature_ids["Dayanım Sınıfı"], "CEM I")],
            ),
            company_id=supplier.id,
        )

        assert not result.success
        assert result.error_code == "FEATURE_REQUIRED"
        assert result.details["feature_id"] == feature_ids["Torba Ağırlığı (kg)"]

    @pytest.mark.asyncio
    async def test_wrong_type(
        self,
        service: VariantService,
        cement: Product,
        supplier: Company,
        feature_ids: dict[str, int],
    ) -> None:
        """Integer features reject non-integer values."""
        result = await service.create(
            VariantDraft(
                name="50 kg",
                sku="CEM-1-50",
                product_id=cement.id,
                features=_features(feature_ids, weight="abc"),
            ),
            company_id=supplier.id,
        )

        assert not result.success
        assert result.error_code == "FEATURE_INVALID_VALUE"
        assert result.error_kind == "feature_schema"

    @pytest.mark.asyncio
    async def test_other_tenant_product(
        self,
        service: VariantService,
        cement: Product,
        other_supplier: Company,
        feature_ids: dict[str, int],
    ) -> None:
        """Variants can only be added to the tenant's own products."""
        result = await service.create(
            VariantDraft(
                name="50 kg",
                sku="CEM-1-50",
                product_id=cement.id,
                features=_features(feature_ids),
            ),
            company_id=other_supplier.id,
        )

        assert not result.success
        assert result.error_code == "PRODUCT_NOT_FOUND"


class TestUpdateVariant:
    """Tests for VariantService.update."""

    @pytest_asyncio.fixture
    async def variant_id(
        self,
        service: VariantService,
        cement: Product,
        supplier: Company,
        feature_ids: dict[str, int],
    ) -> int:
        """An existing cement variant."""
        result = await service.create(
            VariantDraft(
                name="50 kg",
                sku="CEM-1-50",
                product_id=cement.id,
                images=["https://cdn.example.com/cem50.jpg"],
                features=_features(feature_ids),
            ),
            company_id=supplier.id,
        )
        return result.value.id

    @pytest.mark.asyncio
    async def test_feature_upsert(
        self,
        service: VariantService,
        variant_id: int,
        supplier: Company,
        feature_ids: dict[str, int],
    ) -> None:
        """Supplied features overwrite existing values by feature ID."""
        result = await service.update(
            variant_id,
            VariantChanges(features=_features(feature_ids, weight="25")),
            company_id=supplier.id,
        )

        assert result.success
        values = {f.feature_id: f.value for f in result.value.features}
        assert len(result.value.features) == 2
        assert values[feature_ids["Torba Ağırlığı (kg)"]] == "25"

    @pytest.mark.asyncio
    async def test_features_untouched_when_omitted(
        self, service: VariantService, variant_id: int, supplier: Company
    ) -> None:
        """Omitting features skips validation and leaves values alone."""
        result = await service.update(
            variant_id, VariantChanges(name="Büyük torba"), company_id=supplier.id
        )

        assert result.success
        assert result.value.name == "Büyük torba"
        assert len(result.value.features) == 2

    @pytest.mark.asyncio
    async def test_invalid_feature_update(
        self,
        service: VariantService,
        variant_id: int,
        supplier: Company,
        feature_ids: dict[str, int],
    ) -> None:
        """Supplied features are validated against the product category."""
        result = await service.update(
            variant_id,
            VariantChanges(features=[FeatureInput(feature_ids["Dayanım Sınıfı"], "CEM II")]),
            company_id=supplier.id,
        )

        assert not result.success
        assert result.error_code == "FEATURE_REQUIRED"

    @pytest.mark.asyncio
    async def test_image_upsert(
        self, service: VariantService, variant_id: int, supplier: Company
    ) -> None:
        """Known image links are not duplicated."""
        result = await service.update(
            variant_id,
            VariantChanges(
                images=["https://cdn.example.com/cem50.jpg", "https://cdn.example.com/back.jpg"]
            ),
            company_id=supplier.id,
        )

        assert [image.remote_link for image in result.value.images] == [
            "https://cdn.example.com/cem50.jpg",
            "https://cdn.example.com/back.jpg",
        ]

    @pytest.mark.asyncio
    async def test_other_tenant_looks_missing(
        self, service: VariantService, variant_id: int, other_supplier: Company
    ) -> None:
        """Another tenant's variant fails like a missing one."""
        foreign = await service.update(
            variant_id, VariantChanges(name="x"), company_id=other_supplier.id
        )
        missing = await service.update(9999, VariantChanges(name="x"), company_id=other_supplier.id)

        assert foreign.error_code == missing.error_code == "VARIANT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_delete(
        self,
        service: VariantService,
        products: ProductService,
        variant_id: int,
        cement: Product,
        supplier: Company,
    ) -> None:
        """Deleted variants disappear from reads and from their product."""
        result = await service.delete(variant_id, company_id=supplier.id)

        assert result.success
        assert (await service.find_by_id(variant_id, company_id=supplier.id)).error_code == (
            "VARIANT_NOT_FOUND"
        )
        product = (await products.find_by_id(cement.id, company_id=supplier.id)).value
        assert product.to_dict()["variants"] == []

    @pytest.mark.asyncio
    async def test_find_all_by_category(
        self, service: VariantService, variant_id: int
    ) -> None:
        """Variants are listed through their product's category."""
        result = await service.find_all_by_category(1)

        assert [v.id for v in result.value] == [variant_id]
        assert (await service.find_all_by_category(2)).value == []

    @pytest.mark.asyncio
    async def test_deleting_product_hides_variant(
        self,
        service: VariantService,
        products: ProductService,
        variant_id: int,
        cement: Product,
        supplier: Company,
    ) -> None:
        """Product deletion cascades to its variants."""
        await products.delete(cement.id, company_id=supplier.id)

        result = await service.find_by_id(variant_id, company_id=supplier.id)

        assert result.error_code == "VARIANT_NOT_FOUND"
