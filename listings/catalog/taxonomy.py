"""Category taxonomies.

Two things live here:

- the category hierarchy query used by "find all by category" listings
- the embedded seed taxonomies and their parser

Taxonomy format example:
    1 - Yapı Malzemeleri
    2 - Yapı Malzemeleri > Bağlayıcılar
    3 - Yapı Malzemeleri > Bağlayıcılar > Çimento | Dayanım Sınıfı:string*, Torba (kg):integer

Features follow ``|`` as ``name:type``; a trailing ``*`` marks the
feature as required.
"""

from dataclasses import dataclass, field
from pathlib import Path

from sqlalchemy import Select, select

from listings.catalog.models import ConstructionCategory, ProductCategory

CategoryModel = type[ProductCategory] | type[ConstructionCategory]


def grandchild_category_ids(model: CategoryModel, category_id: int) -> Select:
    """Build the descendant lookup used by category listings.

    Matches categories whose parent is a direct child of ``category_id``.
    Exactly two levels down: neither direct children nor deeper
    descendants are included.

    Args:
        model: ProductCategory or ConstructionCategory.
        category_id: Ancestor category ID.

    Returns:
        Select of matching category IDs, usable with ``in_()``.
    """
    children = select(model.id).where(
        model.parent_id == category_id,
        model.deleted_at.is_(None),
    )
    return select(model.id).where(
        model.parent_id.in_(children),
        model.deleted_at.is_(None),
    )


@dataclass
class FeatureSpec:
    """A feature definition declared in the taxonomy."""

    name: str
    type: str = "string"
    is_required: bool = False


@dataclass
class Category:
    """A category from an embedded taxonomy.

    Attributes:
        id: Category ID (from taxonomy text).
        name: Category name (leaf part).
        full_path: Full category path (e.g., "Yapı Malzemeleri > Bağlayıcılar").
        parent_id: ID of parent category (None for root).
        level: Depth in taxonomy tree (1 = root).
        features: Feature definitions declared on this category.
    """

    id: int
    name: str
    full_path: str
    parent_id: int | None = None
    level: int = 1
    features: list[FeatureSpec] = field(default_factory=list)
    children: list["Category"] = field(default_factory=list, repr=False)

    @property
    def path_parts(self) -> list[str]:
        """Get list of path components.

        Returns:
            List of category names from root to this category.
        """
        return [part.strip() for part in self.full_path.split(">")]


class TaxonomyParser:
    """Parser for the embedded category taxonomies.

    Example usage:
        parser = TaxonomyParser()
        categories = parser.parse_embedded("product")
        roots = parser.get_root_categories()
    """

    PRODUCT_TAXONOMY = '''
1 - Yapı Malzemeleri
2 - Yapı Malzemeleri > Bağlayıcılar
3 - Yapı Malzemeleri > Bağlayıcılar > Çimento | Dayanım Sınıfı:string*, Torba Ağırlığı (kg):integer*
4 - Yapı Malzemeleri > Bağlayıcılar > Alçı | Priz Süresi (dk):integer, Torba Ağırlığı (kg):integer*
5 - Yapı Malzemeleri > Duvar Malzemeleri
6 - Yapı Malzemeleri > Duvar Malzemeleri > Tuğla | En (cm):float64*, Boy (cm):float64*, Taşıyıcı:boolean
7 - Yapı Malzemeleri > Duvar Malzemeleri > Gazbeton | Yoğunluk (kg/m3):integer*, Kalınlık (cm):float64*
20 - Hırdavat
21 - Hırdavat > Elektrikli El Aletleri
22 - Hırdavat > Elektrikli El Aletleri > Matkap | Güç (W):integer*, Akülü:boolean*, Marka:string
23 - Hırdavat > Elektrikli El Aletleri > Taşlama | Güç (W):integer*, Disk Çapı (mm):integer*
24 - Hırdavat > Bağlantı Elemanları
25 - Hırdavat > Bağlantı Elemanları > Vida | Uzunluk (mm):float64*, Malzeme:string
40 - Tesisat
41 - Tesisat > Sıhhi Tesisat
42 - Tesisat > Sıhhi Tesisat > Boru | Çap (mm):float64*, Malzeme:string*
43 - Tesisat > Elektrik Tesisatı
44 - Tesisat > Elektrik Tesisatı > Kablo | Kesit (mm2):float64*, Uzunluk (m):integer*
'''.strip()

    CONSTRUCTION_TAXONOMY = '''
1 - Konut
2 - Konut > Apartman
3 - Konut > Apartman > Site İçi | Kat Sayısı:integer*, Daire Sayısı:integer*, Otopark:boolean
4 - Konut > Apartman > Müstakil Blok | Kat Sayısı:integer*, Asansör:boolean
5 - Konut > Villa
6 - Konut > Villa > Tripleks | Havuz:boolean*, Bahçe Alanı (m2):float64
10 - Ticari
11 - Ticari > Ofis
12 - Ticari > Ofis > Plaza | Kat Sayısı:integer*, Enerji Sınıfı:string
13 - Ticari > Alışveriş
14 - Ticari > Alışveriş > AVM | Mağaza Sayısı:integer*, Otopark Kapasitesi:integer
20 - Altyapı
21 - Altyapı > Ulaşım
22 - Altyapı > Ulaşım > Köprü | Açıklık (m):float64*, Şerit Sayısı:integer*
'''.strip()

    def __init__(self) -> None:
        """Initialize parser with empty category storage."""
        self._categories: dict[int, Category] = {}
        self._root_categories: list[Category] = []

    def parse_embedded(self, kind: str) -> list[Category]:
        """Parse one of the embedded taxonomies.

        Args:
            kind: "product" or "construction".

        Returns:
            List of all categories.

        Raises:
            ValueError: If kind is unknown.
        """
        if kind == "product":
            return self.parse_text(self.PRODUCT_TAXONOMY)
        if kind == "construction":
            return self.parse_text(self.CONSTRUCTION_TAXONOMY)
        raise ValueError(f"Unknown taxonomy kind: {kind}")

    def parse_file(self, path: str | Path) -> list[Category]:
        """Parse taxonomy from file."""
        with open(path, encoding="utf-8") as f:
            return self.parse_text(f.read())

    def parse_text(self, text: str) -> list[Category]:
        """Parse taxonomy text."""
        return self._parse_lines(text.splitlines())

    def _parse_features(self, declared: str) -> list[FeatureSpec]:
        features = []
        for item in declared.split(","):
            item = item.strip()
            if not item:
                continue

            is_required = item.endswith("*")
            item = item.rstrip("*").strip()
            if ":" in item:
                name, type_name = item.rsplit(":", 1)
            else:
                name, type_name = item, "string"

            features.append(
                FeatureSpec(
                    name=name.strip(),
                    type=type_name.strip() or "string",
                    is_required=is_required,
                )
            )
        return features

    def _parse_lines(self, lines: list[str]) -> list[Category]:
        """Parse taxonomy from lines.

        Args:
            lines: Taxonomy lines.

        Returns:
            List of all categories.
        """
        self._categories.clear()
        self._root_categories.clear()

        # First pass: create all categories
        for line in lines:
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if " - " not in line:
                continue

            id_part, rest = line.split(" - ", 1)
            try:
                cat_id = int(id_part.strip())
            except ValueError:
                continue

            path_part, _, feature_part = rest.partition("|")
            full_path = path_part.strip()
            parts = [p.strip() for p in full_path.split(">")]

            self._categories[cat_id] = Category(
                id=cat_id,
                name=parts[-1],
                full_path=full_path,
                level=len(parts),
                features=self._parse_features(feature_part),
            )

        # Second pass: establish parent-child relationships
        by_path = {category.full_path: category for category in self._categories.values()}
        for category in self._categories.values():
            if category.level == 1:
                self._root_categories.append(category)
                continue

            parent = by_path.get(" > ".join(category.path_parts[:-1]))
            if parent is not None:
                category.parent_id = parent.id
                parent.children.append(category)

        return list(self._categories.values())

    def get_by_id(self, category_id: int) -> Category | None:
        """Get category by ID."""
        return self._categories.get(category_id)

    def get_root_categories(self) -> list[Category]:
        """Get top-level categories."""
        return self._root_categories

    def get_leaf_categories(self) -> list[Category]:
        """Get categories with no children.

        Returns:
            List of leaf categories.
        """
        return [c for c in self._categories.values() if not c.children]
