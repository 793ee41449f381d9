"""Base Scorer.

Scores a vendor against an assessment on four independent dimensions.
Produces a 0-100 base score with a per-dimension breakdown.
"""

import logging
from typing import Optional

from .budget import ranges_overlap, to_numeric_range, within_tolerance
from .config import MatcherConfig, get_config
from .schema import AssessmentPriorities, BaseScore, Gap, Vendor

logger = logging.getLogger(__name__)


class BaseScorer:
    """Computes the base fit score for a vendor.

    Scoring principles:
    - Every dimension is independent of the others
    - Nothing required means nothing missed (full credit)
    - Unknown vendor pricing earns half credit
    - Unknown target segments earn no size credit
    """

    def __init__(self, config: Optional[MatcherConfig] = None):
        """Initialize scorer with optional custom configuration."""
        self.config = config or get_config()
        self.weights = self.config.scoring_weights

    def score(
        self,
        vendor: Vendor,
        priorities: AssessmentPriorities,
        gaps: list[Gap],
    ) -> BaseScore:
        """Compute the base score breakdown for one vendor.

        Args:
            vendor: Vendor catalog entry
            priorities: Buyer priorities for the assessment
            gaps: Gaps identified by the assessment

        Returns:
            Base score with the four dimension scores and their sum
        """
        risk_area_coverage = self.risk_area_coverage(vendor, gaps)
        size_fit = self.size_fit(priorities, vendor)
        geo_coverage = self.geo_coverage(priorities, vendor)
        price_score = self.price_score(priorities, vendor)

        total_base = risk_area_coverage + size_fit + geo_coverage + price_score

        logger.debug(
            "Base score for vendor %s: coverage=%.1f size=%.1f geo=%.1f price=%.1f total=%.1f",
            vendor.id, risk_area_coverage, size_fit, geo_coverage, price_score, total_base,
        )

        return BaseScore(
            vendor_id=vendor.id,
            risk_area_coverage=risk_area_coverage,
            size_fit=size_fit,
            geo_coverage=geo_coverage,
            price_score=price_score,
            total_base=total_base,
        )

    def risk_area_coverage(self, vendor: Vendor, gaps: list[Gap]) -> float:
        """Score how many assessment gaps fall in the vendor's categories."""
        if not gaps:
            return self.weights.risk_area_coverage

        categories = set(vendor.categories)
        covered = sum(1 for gap in gaps if gap.category in categories)

        return (covered / len(gaps)) * self.weights.risk_area_coverage

    def size_fit(self, priorities: AssessmentPriorities, vendor: Vendor) -> float:
        """Score how well the vendor's target segments fit the buyer's size."""
        cfg = self.config.size_fit
        segments = vendor.target_segments

        if not segments:
            return cfg.no_match

        user_size = priorities.company_size
        if user_size in segments:
            return cfg.exact_match

        adjacent = cfg.adjacency.get(user_size or "", [])
        if any(size in segments for size in adjacent):
            return cfg.partial_match

        return cfg.no_match

    def geo_coverage(self, priorities: AssessmentPriorities, vendor: Vendor) -> float:
        """Score how many required jurisdictions the vendor covers."""
        required = priorities.jurisdictions
        if not required:
            return self.weights.geo_coverage

        coverage = {region.lower() for region in vendor.geographic_coverage}
        if self.config.geo_coverage.global_coverage.lower() in coverage:
            return self.weights.geo_coverage

        matched = sum(1 for region in required if region.lower() in coverage)

        return (matched / len(required)) * self.weights.geo_coverage

    def price_score(self, priorities: AssessmentPriorities, vendor: Vendor) -> float:
        """Score how well the vendor's pricing fits the buyer's budget."""
        cfg = self.config.price

        if not vendor.pricing_range:
            return cfg.unknown_pricing_score

        user_budget = to_numeric_range(priorities.budget_range)
        vendor_price = to_numeric_range(vendor.pricing_range)

        if ranges_overlap(user_budget, vendor_price):
            return self.weights.price

        if within_tolerance(user_budget, vendor_price, cfg.tolerance_factor):
            return cfg.tolerance_score

        return 0.0


def compute_base_score(
    vendor: Vendor,
    priorities: AssessmentPriorities,
    gaps: list[Gap],
    config: Optional[MatcherConfig] = None,
) -> BaseScore:
    """Compute the base score for one vendor with the current configuration."""
    return BaseScorer(config).score(vendor, priorities, gaps)
