"""Tests for typed feature values."""

import pytest

from listings.domain import FeatureType, parse_feature_value


class TestFeatureType:
    """Tests for FeatureType resolution."""

    def test_known_names(self) -> None:
        """Declared names map to their types."""
        assert FeatureType.from_declared("integer") is FeatureType.INTEGER
        assert FeatureType.from_declared("boolean") is FeatureType.BOOLEAN
        assert FeatureType.from_declared("string") is FeatureType.STRING

    def test_float64_is_float(self) -> None:
        """Rows declaring float64 are floats."""
        assert FeatureType.from_declared("float64") is FeatureType.FLOAT
        assert FeatureType.from_declared("float") is FeatureType.FLOAT

    def test_case_and_whitespace_ignored(self) -> None:
        """Type names are normalized before lookup."""
        assert FeatureType.from_declared(" Integer ") is FeatureType.INTEGER

    def test_unknown_name_is_string(self) -> None:
        """Unknown declarations fall back to free text."""
        assert FeatureType.from_declared("date") is FeatureType.STRING
        assert FeatureType.from_declared("") is FeatureType.STRING


class TestParseFeatureValue:
    """Tests for parse_feature_value."""

    @pytest.mark.parametrize("raw,expected", [("42", 42), ("-7", -7), ("+3", 3)])
    def test_integer(self, raw: str, expected: int) -> None:
        """Integer literals parse to int."""
        assert parse_feature_value(FeatureType.INTEGER, raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "4.2", "", " 4", "1e3", "5\n", "\u0663", "\uff15"])
    def test_integer_rejects(self, raw: str) -> None:
        """Non-integer strings are rejected, including trailing newlines."""
        with pytest.raises(ValueError):
            parse_feature_value(FeatureType.INTEGER, raw)

    @pytest.mark.parametrize(
        "raw,expected",
        [("2.5", 2.5), ("10", 10.0), (".5", 0.5), ("1e3", 1000.0), ("-0.25", -0.25)],
    )
    def test_float(self, raw: str, expected: float) -> None:
        """Decimal literals parse to float."""
        assert parse_feature_value(FeatureType.FLOAT, raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "nan", "inf", "1,5", "", "1.5\n", "\u0661.\u0665"])
    def test_float_rejects(self, raw: str) -> None:
        """Non-numeric strings are rejected, including non-ASCII digits."""
        with pytest.raises(ValueError):
            parse_feature_value(FeatureType.FLOAT, raw)

    @pytest.mark.parametrize("raw", ["true", "TRUE", "t", "1"])
    def test_boolean_true(self, raw: str) -> None:
        """True literals parse to True."""
        assert parse_feature_value(FeatureType.BOOLEAN, raw) is True

    @pytest.mark.parametrize("raw", ["false", "False", "f", "0"])
    def test_boolean_false(self, raw: str) -> None:
        """False literals parse to False."""
        assert parse_feature_value(FeatureType.BOOLEAN, raw) is False

    @pytest.mark.parametrize("raw", ["yes", "no", "2", ""])
    def test_boolean_rejects(self, raw: str) -> None:
        """Other strings are not booleans."""
        with pytest.raises(ValueError):
            parse_feature_value(FeatureType.BOOLEAN, raw)

    def test_string_is_untouched(self) -> None:
        """String features accept anything."""
        assert parse_feature_value(FeatureType.STRING, "C 32,5 R") == "C 32,5 R"
