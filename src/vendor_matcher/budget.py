"""Budget Reconciler.

Converts budget bracket tags to numeric ranges and compares buyer budgets
with vendor pricing.
"""

import math
from typing import Optional

from .schema import BudgetRange, PriceRange

DEFAULT_TOLERANCE = 1.25

BUDGET_RANGES = {
    BudgetRange.UNDER_10K: PriceRange(min=0, max=10_000),
    BudgetRange.RANGE_10K_50K: PriceRange(min=10_000, max=50_000),
    BudgetRange.RANGE_50K_100K: PriceRange(min=50_000, max=100_000),
    BudgetRange.RANGE_100K_250K: PriceRange(min=100_000, max=250_000),
    BudgetRange.OVER_250K: PriceRange(min=250_000, max=math.inf),
}

# Unknown brackets fail open
UNBOUNDED_RANGE = PriceRange(min=0, max=math.inf)


def to_numeric_range(bracket: Optional[str]) -> PriceRange:
    """Convert a budget bracket tag to its numeric range.

    Unknown or missing brackets map to [0, inf).
    """
    try:
        return BUDGET_RANGES[BudgetRange(bracket)]
    except ValueError:
        return UNBOUNDED_RANGE


def ranges_overlap(a: PriceRange, b: PriceRange) -> bool:
    """Check if two price ranges overlap."""
    return not (a.min > b.max or a.max < b.min)


def within_tolerance(
    user_budget: PriceRange,
    vendor_price: PriceRange,
    tolerance_factor: float = DEFAULT_TOLERANCE,
) -> bool:
    """Check if the vendor's minimum price is within tolerance of the budget ceiling.

    An unbounded budget ceiling accepts any vendor price.
    """
    if math.isinf(user_budget.max):
        return True
    return vendor_price.min <= user_budget.max * tolerance_factor
