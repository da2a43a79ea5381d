"""Typed feature values.

Feature values travel as strings on the wire and in storage. Once a
value has passed schema validation it is converted to a ``FeatureValue``
carrying the declared type and the parsed Python value, so nothing
downstream has to parse it again.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Self

from listings.domain.base import ValueObject

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")
_TRUE_LITERALS = frozenset({"1", "t", "true"})
_FALSE_LITERALS = frozenset({"0", "f", "false"})


class FeatureType(str, Enum):
    """Primitive type a feature definition declares."""

    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    STRING = "string"

    @classmethod
    def from_declared(cls, declared: str) -> Self:
        """Resolve a stored type name.

        Older rows store ``float64`` for floats, and unknown names are
        treated as free text.

        Args:
            declared: Type name as stored on the definition row.

        Returns:
            Matching FeatureType.
        """
        name = (declared or "").strip().lower()
        if name == "float64":
            return cls.FLOAT
        try:
            return cls(name)
        except ValueError:
            return cls.STRING


def parse_feature_value(feature_type: FeatureType, raw: str) -> int | float | bool | str:
    """Parse a raw string according to a feature type.

    Args:
        feature_type: Declared type.
        raw: Submitted string value.

    Returns:
        Parsed Python value.

    Raises:
        ValueError: If the string is not a valid literal of the type.
    """
    if feature_type is FeatureType.INTEGER:
        if not _INTEGER_RE.fullmatch(raw):
            raise ValueError(f"not an integer: {raw!r}")
        return int(raw)

    if feature_type is FeatureType.FLOAT:
        if not _FLOAT_RE.fullmatch(raw):
            raise ValueError(f"not a decimal number: {raw!r}")
        return float(raw)

    if feature_type is FeatureType.BOOLEAN:
        lowered = raw.lower()
        if lowered in _TRUE_LITERALS:
            return True
        if lowered in _FALSE_LITERALS:
            return False
        raise ValueError(f"not a boolean: {raw!r}")

    return raw


@dataclass(frozen=True)
class FeatureDefinition(ValueObject):
    """Category-scoped schema entry for a typed attribute.

    Attributes:
        id: Feature definition ID.
        name: Display name.
        feature_type: Declared primitive type.
        is_required: Whether every entity in the category must supply it.
        category_id: Owning category.
        description: Optional help text.
    """

    id: int
    name: str
    feature_type: FeatureType
    is_required: bool
    category_id: int
    description: str | None = None


@dataclass(frozen=True)
class FeatureInput(ValueObject):
    """A submitted (feature_id, raw value) pair."""

    feature_id: int
    value: str


@dataclass(frozen=True)
class FeatureValue(ValueObject):
    """A validated feature value.

    Attributes:
        feature_id: Feature definition ID.
        feature_type: Declared type the value was parsed as.
        raw: Original string, which is what gets stored.
        value: Parsed value (int, float, bool or str).
    """

    feature_id: int
    feature_type: FeatureType
    raw: str
    value: int | float | bool | str
