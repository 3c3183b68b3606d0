"""
Money Utilities - Safe Decimal operations for monetary values.

Prices are stored as numeric columns and arrive from PostgREST as floats or
strings; everything is converted to Decimal before arithmetic.
"""
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal, None]

# Storefront prices are USD with cents
MONEY_PRECISION = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """
    Convert any value to Decimal safely.

    Returns Decimal("0") for None or unparseable input.
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        # Go through str() so 0.1 stays 0.1
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def round_money(value: Number) -> Decimal:
    """Round to cents (half up)."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def to_float(value: Number) -> float:
    """
    Convert to float for JSON responses.

    Use only at API boundaries, not for internal calculations.
    """
    return float(round_money(value))


def format_money(value: Number) -> str:
    """Format as a dollar amount, e.g. ``$1,234.50``."""
    return f"${round_money(value):,.2f}"
