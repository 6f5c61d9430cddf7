"""Limits keeping encode and decode work proportional to input size."""

from __future__ import annotations

import math
from decimal import Decimal

DEFAULT_MAX_DEPTH = 128
MAX_INTEGER_DIGITS = 4000

_INTEGER_BOUND = 10**MAX_INTEGER_DIGITS


def integer_within_limit(value: int) -> bool:
    return -_INTEGER_BOUND < value < _INTEGER_BOUND


def decimal_within_integer_limit(value: Decimal) -> bool:
    """Check the magnitude of `value` before anything expands its exponent."""
    if not value.is_finite():
        return False
    return value.is_zero() or value.adjusted() < MAX_INTEGER_DIGITS


def checked_float(value: int | Decimal) -> float | None:
    """Convert to float, or return None when the value has no float form.

    Decimals may round to the nearest float but must not overflow; integers
    must convert exactly. ``nan`` and ``inf`` decimals convert as themselves,
    signaling NaNs do not convert.
    """
    try:
        converted = float(value)
    except (OverflowError, ValueError):
        return None
    if isinstance(value, Decimal):
        if value.is_finite() and math.isinf(converted):
            return None
        return converted
    if converted != value:
        return None
    return converted
