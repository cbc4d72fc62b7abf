"""
Amount Coercion Module

Converts loosely typed input (numbers or numeric strings) into Decimal.
The same rule applies to initial balances and transaction amounts.
NEVER hands back float for monetary values.
"""

from decimal import (
    Decimal, InvalidOperation, Inexact, MAX_EMAX, MIN_EMIN,
    getcontext, localcontext
)
from typing import Any, Optional

# High precision for financial calculations
getcontext().prec = 28

# Magnitude bounds of accepted values (those of the default decimal context)
MAX_ADJUSTED_EXPONENT = 999999
MIN_EXPONENT = -999999


def parse_amount(value: Any) -> Optional[Decimal]:
    """
    Coerce a raw value to a finite Decimal

    Native numbers pass through, strings are parsed as decimal literals.
    Booleans, None, containers and unparseable strings are rejected, as are
    NaN, infinities and values beyond the supported exponent range.

    Args:
        value: Raw balance or amount from the input record

    Returns:
        Decimal value, or None if the value is not a finite number
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        # str() keeps 750.25 as 750.25 instead of its binary expansion
        amount = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            return None
    else:
        return None

    if not amount.is_finite():
        return None

    if amount.adjusted() > MAX_ADJUSTED_EXPONENT or amount.as_tuple().exponent < MIN_EXPONENT:
        return None

    return amount


def _exact(operation, a: Decimal, b: Decimal) -> Decimal:
    # Enough digits to hold every digit of both operands plus a carry
    top = max(a.adjusted(), b.adjusted())
    bottom = min(a.as_tuple().exponent, b.as_tuple().exponent)
    with localcontext() as ctx:
        ctx.prec = max(top - bottom + 2, 1)
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        ctx.traps[Inexact] = True
        return operation(a, b)


def add_amounts(a: Decimal, b: Decimal) -> Decimal:
    """Exact sum, never rounded to the ambient context precision"""
    return _exact(Decimal.__add__, a, b)


def subtract_amounts(a: Decimal, b: Decimal) -> Decimal:
    """Exact difference, never rounded to the ambient context precision"""
    return _exact(Decimal.__sub__, a, b)


def format_amount(amount: Decimal) -> str:
    """Plain string form used in messages and reports"""
    if amount.is_zero():
        # Negative zero prints as zero
        amount = abs(amount)
    return f"{amount:f}"
