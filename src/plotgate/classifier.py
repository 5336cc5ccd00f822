"""Numeric classifier — clean (tick-aligned) vs dirty (sub-pip) prices."""

from __future__ import annotations

import math
from typing import Any

CLEAN_DECIMALS = 6


def to_number(value: Any) -> float:
    """Coerce a numeric-like value to float; anything else becomes NaN."""
    if isinstance(value, bool) or value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def is_clean(value: Any) -> bool:
    """True if ``value`` survives a round trip through 6 decimal digits.

    ``1.123456`` is clean, ``1.1234567`` is not. NaN (including anything
    that does not coerce to a number) is never clean.
    """
    number = to_number(value)
    if math.isnan(number):
        return False
    return float(f"{number:.{CLEAN_DECIMALS}f}") == number
