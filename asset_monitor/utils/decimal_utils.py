"""Helpers for Decimal normalization."""

from decimal import Decimal


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, JSON payloads or user input.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def coerce_optional_decimal(value) -> Decimal | None:
    """Normalize a nullable numeric value, keeping None as None."""
    if value is None:
        return None
    return coerce_decimal(value)


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part / whole * 100`` or zero when ``whole`` is not positive."""
    if whole <= 0:
        return Decimal("0")
    return (part / whole) * Decimal("100")


__all__ = ["coerce_decimal", "coerce_optional_decimal", "percent_of"]
