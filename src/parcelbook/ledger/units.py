"""Area unit conversion and numeric coercion helpers.

Every figure the ledger derives goes through these helpers, so malformed
form input (empty strings, free text, ``None``) degrades to a number
instead of raising or producing NaN.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

from parcelbook.core.types import AREA_DECIMALS, PING_PER_M2


def to_number(value: Any, default: float = 0.0) -> float:
    """Coerce a form value to a finite float, falling back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def to_share_denominator(value: Any) -> float:
    """Coerce an ownership-share denominator; empty or zero means 1."""
    denom = to_number(value, default=1.0)
    return denom if denom != 0 else 1.0


def to_ping(square_meters: Any) -> float:
    """Convert square meters to ping."""
    return to_number(square_meters) * PING_PER_M2


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a cashier: halves always go away from zero."""
    if not math.isfinite(value):
        return 0.0
    quantum = Decimal(1).scaleb(-digits)
    try:
        rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return 0.0
    return float(rounded)


def round_area(value: Any) -> float:
    return round_half_up(to_number(value), AREA_DECIMALS)


def format_area(value: Any) -> str:
    """Render an area with the fixed report precision, e.g. ``"15.125"``."""
    return f"{round_area(value):.{AREA_DECIMALS}f}"


def format_amount(value: Any) -> str:
    """Render a monetary amount as a plain number without a trailing ``.0``."""
    number = to_number(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def exact_sum(values: Iterable[Any]) -> float:
    """Sum coerced values with correct rounding, independent of order."""
    return math.fsum(to_number(v) for v in values)
