"""Tests for the embedded category taxonomies."""

import pytest

from listings.catalog.taxonomy import Category, FeatureSpec, TaxonomyParser


class TestCategory:
    """Tests for Category dataclass."""

    def test_category_path_parts(self) -> None:
        """Category path can be split into parts."""
        category = Category(
            id=3,
            name="Çimento",
            full_path="Yapı Malzemeleri > Bağlayıcılar > Çimento",
            level=3,
        )
        assert category.path_parts == ["Yapı Malzemeleri", "Bağlayıcılar", "Çimento"]

    def test_root_category(self) -> None:
        """Root category has level 1."""
        category = Category(id=1, name="Konut", full_path="Konut", level=1)
        assert category.level == 1
        assert category.parent_id is None


class TestTaxonomyParser:
    """Tests for TaxonomyParser."""

    @pytest.fixture
    def parser(self) -> TaxonomyParser:
        """Create parser with the embedded product taxonomy."""
        parser = TaxonomyParser()
        parser.parse_embedded("product")
        return parser

    def test_parse_embedded(self) -> None:
        """Both embedded taxonomies parse."""
        parser = TaxonomyParser()
        assert len(parser.parse_embedded("product")) == 18
        assert len(parser.parse_embedded("construction")) == 14

    def test_unknown_kind(self) -> None:
        """Unknown taxonomy kinds are rejected."""
        with pytest.raises(ValueError):
            TaxonomyParser().parse_embedded("vehicle")

    def test_get_by_id(self, parser: TaxonomyParser) -> None:
        """Categories can be found by ID."""
        category = parser.get_by_id(3)
        assert category is not None
        assert category.name == "Çimento"
        assert category.level == 3

    def test_get_by_id_not_found(self, parser: TaxonomyParser) -> None:
        """Non-existent ID returns None."""
        assert parser.get_by_id(999) is None

    def test_parent_resolved_by_path(self, parser: TaxonomyParser) -> None:
        """Parents are resolved from the category path."""
        assert parser.get_by_id(3).parent_id == 2
        assert parser.get_by_id(2).parent_id == 1
        assert parser.get_by_id(1).parent_id is None

    def test_root_categories(self, parser: TaxonomyParser) -> None:
        """Top-level categories have no parent."""
        roots = parser.get_root_categories()
        assert sorted(c.id for c in roots) == [1, 20, 40]

    def test_leaf_categories(self, parser: TaxonomyParser) -> None:
        """Leaf categories have no children."""
        leaves = {c.id for c in parser.get_leaf_categories()}
        assert 3 in leaves
        assert 2 not in leaves

    def test_features(self, parser: TaxonomyParser) -> None:
        """Features keep their declared type and required marker."""
        features = parser.get_by_id(3).features
        assert features == [
            FeatureSpec(name="Dayanım Sınıfı", type="string", is_required=True),
            FeatureSpec(name="Torba Ağırlığı (kg)", type="integer", is_required=True),
        ]

        optional = parser.get_by_id(6).features[2]
        assert optional == FeatureSpec(name="Taşıyıcı", type="boolean", is_required=False)

    def test_parse_text(self) -> None:
        """Custom taxonomies parse, skipping comments and junk lines."""
        parser = TaxonomyParser()
        categories = parser.parse_text(
            "# comment\n"
            "1 - Root\n"
            "not a category\n"
            "2 - Root > Mid\n"
            "3 - Root > Mid > Leaf | Renk, Ağırlık:float64*\n"
        )

        assert len(categories) == 3
        leaf = parser.get_by_id(3)
        assert leaf.parent_id == 2
        assert leaf.features == [
            FeatureSpec(name="Renk", type="string", is_required=False),
            FeatureSpec(name="Ağırlık", type="float64", is_required=True),
        ]

    def test_parse_file(self, tmp_path) -> None:
        """Taxonomies can be loaded from a file."""
        path = tmp_path / "taxonomy.txt"
        path.write_text("1 - Root\n2 - Root > Child\n", encoding="utf-8")

        categories = TaxonomyParser().parse_file(path)
        assert [c.id for c in categories] == [1, 2]
