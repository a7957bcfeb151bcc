"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value) -> Decimal:
    """Round a monetary value half-up to two decimals.

    Args:
        value: Raw numeric value.

    Returns:
        Decimal: Value quantized to cents.
    """
    return coerce_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)


__all__ = ["coerce_decimal", "round_money"]
