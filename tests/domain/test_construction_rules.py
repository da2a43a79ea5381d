"""Tests for construction listing vocabulary."""

from decimal import Decimal

import pytest

from listings.domain.constructions import (
    check_quarter_label,
    check_region,
    check_stage,
    is_quarter_label,
    to_amount,
)
from listings.domain.exceptions import ValidationError


class TestQuarterLabel:
    """Tests for quarter labels."""

    @pytest.mark.parametrize("value", ["2024 - 3.Çeyrek", "1999 - 1.Çeyrek", "2030 - 4.Çeyrek"])
    def test_valid(self, value: str) -> None:
        """Well-formed labels are accepted."""
        assert is_quarter_label(value)

    @pytest.mark.parametrize(
        "value",
        [
            "2024 - 5.Çeyrek",
            "2024-3.Çeyrek",
            "24 - 3.Çeyrek",
            "2024 - 3xÇeyrek",
            "2024 - 3.Ceyrek",
            "2024 - 3.Çeyrek ",
            "2024 - 3.Çeyrek\n",
            "\u0662\u0660\u0662\u0664 - 3.Çeyrek",
        ],
    )
    def test_invalid(self, value: str) -> None:
        """Anything else is rejected, including a non-dot separator."""
        assert not is_quarter_label(value)

    def test_check_reports_field(self) -> None:
        """Failures name the offending field."""
        with pytest.raises(ValidationError) as exc_info:
            check_quarter_label("2024", "end")
        assert exc_info.value.field == "end"

    def test_check_rejects_trailing_newline(self) -> None:
        """The domain check does not rely on form validation running first."""
        with pytest.raises(ValidationError):
            check_quarter_label("2024 - 3.Çeyrek\n", "start")


class TestEnumerations:
    """Tests for region and stage checks."""

    def test_known_region(self) -> None:
        """Known regions pass through."""
        assert check_region("İç Anadolu") == "İç Anadolu"

    def test_unknown_region(self) -> None:
        """Unknown regions are rejected."""
        with pytest.raises(ValidationError):
            check_region("Trakya")

    def test_known_stage(self) -> None:
        """Known stages pass through."""
        assert check_stage("Kaba") == "Kaba"

    def test_unknown_stage(self) -> None:
        """Unknown stages are rejected."""
        with pytest.raises(ValidationError):
            check_stage("Bitti")


class TestToAmount:
    """Tests for to_amount."""

    def test_quantized_to_cents(self) -> None:
        """Amounts keep two fractional digits."""
        assert to_amount(Decimal("1500000.5"), "cost_of_project") == Decimal("1500000.50")
        assert str(to_amount(Decimal("12"), "land_area")) == "12.00"

    def test_rounds_half_up(self) -> None:
        """Extra digits round half up."""
        assert to_amount(Decimal("0.125"), "land_area") == Decimal("0.13")

    def test_float_goes_through_str(self) -> None:
        """Floats keep their shortest decimal form."""
        assert to_amount(0.1, "land_area") == Decimal("0.10")

    def test_negative_rejected(self) -> None:
        """Negative amounts are rejected."""
        with pytest.raises(ValidationError):
            to_amount(Decimal("-1"), "cost_of_project")

    def test_non_number_rejected(self) -> None:
        """Non-numeric strings are rejected."""
        with pytest.raises(ValidationError):
            to_amount("abc", "cost_of_project")

    def test_non_finite_rejected(self) -> None:
        """NaN and infinity are rejected."""
        with pytest.raises(ValidationError):
            to_amount(Decimal("NaN"), "cost_of_project")
        with pytest.raises(ValidationError):
            to_amount(Decimal("Infinity"), "cost_of_project")

    def test_too_large_rejected(self) -> None:
        """Amounts must fit ten digits with two decimals."""
        with pytest.raises(ValidationError):
            to_amount(Decimal("100000000"), "cost_of_project")
