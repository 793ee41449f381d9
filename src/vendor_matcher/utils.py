"""Numeric helpers shared by the scorers."""

import math
from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up (2.5 -> 3)."""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value to [min_val, max_val].

    NaN clamps to min_val.
    """
    if math.isnan(value):
        return min_val
    return max(min_val, min(max_val, value))
