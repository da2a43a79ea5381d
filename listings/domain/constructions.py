"""Construction listing vocabulary."""

import re
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from listings.domain.exceptions import ValidationError

_QUARTER_RE = re.compile(r"[0-9]{4} - [1-4]\.Çeyrek")
_CENTS = Decimal("0.01")


class GeographicRegion(str, Enum):
    """Geographic regions of Turkey."""

    MARMARA = "Marmara"
    EGE = "Ege"
    IC_ANADOLU = "İç Anadolu"
    AKDENIZ = "Akdeniz"
    KARADENIZ = "Karadeniz"
    DOGU_ANADOLU = "Doğu Anadolu"
    GUNEYDOGU_ANADOLU = "Güneydoğu Anadolu"


class ConstructionStage(str, Enum):
    """Progress stage of a construction project."""

    PROJE = "Proje"
    TEMEL = "Temel"
    KABA = "Kaba"
    INCE = "İnce"
    TAMAMLANDI = "Tamamlandı"
    BEKLEMEDE = "Beklemede"
    DEVAM_EDIYOR = "Devam Ediyor"
    PLANLANAN = "Planlanan"


def is_quarter_label(value: str) -> bool:
    """Check a ``YYYY - N.Çeyrek`` quarter label."""
    return bool(_QUARTER_RE.fullmatch(value))


def check_quarter_label(value: str, field: str) -> str:
    """Return the label or raise ValidationError."""
    if not is_quarter_label(value):
        raise ValidationError(f"{field} must look like '2024 - 3.Çeyrek'", field=field)
    return value


def check_region(value: str) -> str:
    """Return the region or raise ValidationError."""
    try:
        return GeographicRegion(value).value
    except ValueError as e:
        raise ValidationError(f"Unknown geographic region: {value}", field="geographic_region") from e


def check_stage(value: str) -> str:
    """Return the stage or raise ValidationError."""
    try:
        return ConstructionStage(value).value
    except ValueError as e:
        raise ValidationError(f"Unknown stage: {value}", field="stage") from e


def to_amount(value: Decimal | int | float | str, field: str) -> Decimal:
    """Convert to a non-negative decimal with two fractional digits.

    Floats go through ``str`` so 0.1 stays 0.10.

    Args:
        value: Submitted number.
        field: Field name for error reporting.

    Returns:
        Quantized Decimal.

    Raises:
        ValidationError: If the value is not a non-negative number.
    """
    try:
        amount = Decimal(str(value)) if not isinstance(value, Decimal) else value
    except ArithmeticError as e:
        raise ValidationError(f"{field} must be a number", field=field) from e

    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"{field} must be a non-negative number", field=field)
    amount = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    if amount >= Decimal("100000000"):
        raise ValidationError(f"{field} is too large", field=field)
    return amount
