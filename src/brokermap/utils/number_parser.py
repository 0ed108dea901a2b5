"""Number parsing utilities."""

from decimal import Decimal, InvalidOperation
from typing import Optional

NAN = Decimal("NaN")


def parse_number(value: Optional[str]) -> Decimal:
    """Parse a plain decimal-point number.

    Handles "10", "150.00", "-3.5", "+2", " 1e3 ". No currency symbols,
    thousands separators or locale formats are recognized.

    Args:
        value: Raw cell value

    Returns:
        Decimal value, or Decimal("NaN") if the value is empty, not a number
        or not finite
    """
    if value is None:
        return NAN

    value = value.strip()
    if not value:
        return NAN

    try:
        number = Decimal(value)
    except InvalidOperation:
        return NAN

    # Infinities and signaling NaN would raise on arithmetic
    if not number.is_finite():
        return NAN
    return number


def parse_number_or(value: Optional[str], default: Decimal) -> Decimal:
    """Parse a number, returning ``default`` when it is not a number."""
    number = parse_number(value)
    if number.is_nan():
        return default
    return number


def parse_optional_number(value: Optional[str]) -> Optional[Decimal]:
    """Parse a number, returning None when it is not a number."""
    number = parse_number(value)
    if number.is_nan():
        return None
    return number
