"""Tests for constructor construction API endpoints."""

from decimal import Decimal

import pytest
from httpx import AsyncClient

CONSTRUCTION = {
    "name": "Çamlık Evleri",
    "construction_category_id": 3,
    "geographic_region": "Marmara",
    "province": "İstanbul",
    "district": "Beykoz",
    "stage": "Kaba",
    "start": "2024 - 3.Çeyrek",
    "end": "2026 - 1.Çeyrek",
    "cost_of_project": "1500000.5",
    "land_area": "12000",
    "construction_zone": "4500.25",
    "construction_images": [{"remote_link": "https://cdn.example.com/site.jpg"}],
}


# Category 3 is the first construction category declaring features, so
# its definitions are seeded as IDs 1-3
FEATURES = [
    {"feature_id": 1, "value": "12"},
    {"feature_id": 2, "value": "96"},
    {"feature_id": 3, "value": "true"},
]


class TestConstructions:
    """Tests for /api/v1/constructor endpoints."""

    @pytest.mark.asyncio
    async def test_create(self, client: AsyncClient, constructor_headers: dict[str, str]) -> None:
        """Should create the construction with two-decimal amounts."""
        response = await client.post(
            "/api/v1/constructor/construction",
            json={**CONSTRUCTION, "construction_features": FEATURES},
            headers=constructor_headers,
        )

        assert response.status_code == 201, response.text
        data = response.json()
        assert Decimal(data["cost_of_project"]) == Decimal("1500000.50")
        assert data["category_id"] == 3
        assert len(data["construction_features"]) == 3
        assert len(data["construction_images"]) == 1

    @pytest.mark.asyncio
    async def test_requires_constructor(
        self, client: AsyncClient, supplier_headers: dict[str, str]
    ) -> None:
        """Should refuse companies without the constructor capability."""
        response = await client.post(
            "/api/v1/constructor/construction",
            json={**CONSTRUCTION, "construction_features": FEATURES},
            headers=supplier_headers,
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "CAPABILITY_REQUIRED"

    @pytest.mark.asyncio
    async def test_bad_quarter_label(
        self, client: AsyncClient, constructor_headers: dict[str, str]
    ) -> None:
        """Should reject malformed quarter labels."""
        response = await client.post(
            "/api/v1/constructor/construction",
            json={**CONSTRUCTION, "start": "2024 - 3xÇeyrek"},
            headers=constructor_headers,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_required_feature(
        self, client: AsyncClient, constructor_headers: dict[str, str]
    ) -> None:
        """Should reject a construction without its category's required features."""
        response = await client.post(
            "/api/v1/constructor/construction",
            json=CONSTRUCTION,
            headers=constructor_headers,
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "FEATURE_REQUIRED"

    @pytest.mark.asyncio
    async def test_lifecycle(
        self,
        client: AsyncClient,
        constructor_headers: dict[str, str],
        login_as,
    ) -> None:
        """Should update, list, hide from other tenants and delete."""
        response = await client.post(
            "/api/v1/constructor/construction",
            json={**CONSTRUCTION, "construction_features": FEATURES},
            headers=constructor_headers,
        )
        construction_id = response.json()["id"]

        response = await client.put(
            f"/api/v1/constructor/construction/{construction_id}",
            json={"stage": "İnce", "land_area": "12500.75"},
            headers=constructor_headers,
        )
        assert response.status_code == 200
        assert response.json()["stage"] == "İnce"
        assert Decimal(response.json()["land_area"]) == Decimal("12500.75")

        response = await client.get(
            "/api/v1/constructor/constructions/1", headers=constructor_headers
        )
        assert [item["id"] for item in response.json()["items"]] == [construction_id]

        rival_headers = await login_as(
            "yapi@rakip.com.tr", is_supplier=False, is_constructor=True
        )
        response = await client.get(
            f"/api/v1/constructor/construction/{construction_id}", headers=rival_headers
        )
        assert response.status_code == 404

        response = await client.delete(
            f"/api/v1/constructor/construction/{construction_id}", headers=constructor_headers
        )
        assert response.status_code == 200

        response = await client.get(
            f"/api/v1/constructor/construction/{construction_id}", headers=constructor_headers
        )
        assert response.status_code == 404
