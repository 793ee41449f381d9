"""Priority Boost Calculator.

Scores how well a vendor aligns with the buyer's stated preferences:
- Top priority coverage: 0-20 points
- Must-have features: 0-10 points
- Deployment match: 0-5 points
- Speed to deploy: 0-5 points
"""

import logging
from typing import Any, Optional

from .config import MatcherConfig, get_config
from .schema import AssessmentPriorities, PriorityBoost, Vendor

logger = logging.getLogger(__name__)


def normalize_priority_format(priority: Any) -> Optional[str]:
    """Normalize a display-format priority label to a vendor category tag.

    "transaction-monitoring" becomes "TRANSACTION_MONITORING". Missing,
    non-string or blank input returns None.
    """
    if not isinstance(priority, str) or not priority.strip():
        return None
    return priority.strip().upper().replace("-", "_")


class PriorityBoostCalculator:
    """Computes the priority boost for a vendor.

    Only the highest-ranked matching priority counts; ranks never stack.
    """

    def __init__(self, config: Optional[MatcherConfig] = None):
        """Initialize calculator with optional custom configuration."""
        self.config = config or get_config()
        self.points = self.config.priority_boost

        # Evaluated in order, first match wins
        self.rank_points = [
            (1, self.points.rank_1),
            (2, self.points.rank_2),
            (3, self.points.rank_3),
        ]

    def calculate(self, vendor: Vendor, priorities: AssessmentPriorities) -> PriorityBoost:
        """Compute the complete priority boost breakdown for one vendor.

        Args:
            vendor: Vendor catalog entry
            priorities: Buyer priorities for the assessment

        Returns:
            Priority boost with the four components and their sum
        """
        top_boost, matched_priority, matched_rank = self.top_priority_boost(vendor, priorities)
        feature_boost, missing_features = self.feature_boost(vendor, priorities)
        deployment_boost = self.deployment_boost(vendor, priorities)
        speed_boost = self.speed_boost(vendor, priorities)

        total_boost = top_boost + feature_boost + deployment_boost + speed_boost

        logger.debug(
            "Priority boost for vendor %s: top=%s features=%s deployment=%s speed=%s total=%s",
            vendor.id, top_boost, feature_boost, deployment_boost, speed_boost, total_boost,
        )

        return PriorityBoost(
            vendor_id=vendor.id,
            top_priority_boost=top_boost,
            matched_priority=matched_priority,
            matched_rank=matched_rank,
            feature_boost=feature_boost,
            missing_features=missing_features,
            deployment_boost=deployment_boost,
            speed_boost=speed_boost,
            total_boost=total_boost,
        )

    def top_priority_boost(
        self,
        vendor: Vendor,
        priorities: AssessmentPriorities,
    ) -> tuple[float, Optional[str], Optional[int]]:
        """Score the highest-ranked priority covered by the vendor's categories.

        Returns:
            Tuple of (boost, matched priority as entered by the buyer, rank)
        """
        ranked = priorities.ranked_priorities
        categories = set(vendor.categories)

        for rank, points in self.rank_points:
            if rank > len(ranked):
                break
            candidate = ranked[rank - 1]
            normalized = normalize_priority_format(candidate)
            if normalized and normalized in categories:
                return points, candidate, rank

        return 0.0, None, None

    def feature_boost(
        self,
        vendor: Vendor,
        priorities: AssessmentPriorities,
    ) -> tuple[float, list[str]]:
        """Score must-have feature coverage.

        Returns:
            Tuple of (boost, missing features in the buyer's order)
        """
        required = priorities.must_have_features
        if not required:
            return self.points.features_all, []

        available = set(vendor.features)
        missing = [feature for feature in dict.fromkeys(required) if feature not in available]

        if not missing:
            return self.points.features_all, []
        if len(missing) <= self.points.max_missing_for_partial:
            return self.points.features_partial, missing
        return 0.0, missing

    def deployment_boost(self, vendor: Vendor, priorities: AssessmentPriorities) -> float:
        """Score support for the buyer's deployment preference."""
        preference = (priorities.deployment_preference or "").strip()
        if not preference:
            return 0.0

        if preference.lower() == self.points.flexible_preference.lower():
            return self.points.deployment_match

        options = (vendor.deployment_options or "").lower()
        if preference.lower() in options:
            return self.points.deployment_match

        return 0.0

    def speed_boost(self, vendor: Vendor, priorities: AssessmentPriorities) -> float:
        """Score fast implementation, only for buyers who need it immediately."""
        urgency = (priorities.implementation_urgency or "").strip()
        if urgency.lower() != self.points.immediate_urgency.lower():
            return 0.0

        timeline = vendor.implementation_timeline_days
        if timeline is None:
            timeline = self.points.default_implementation_days

        if timeline <= self.points.fast_implementation_days:
            return self.points.speed_boost

        return 0.0


def compute_priority_boost(
    vendor: Vendor,
    priorities: AssessmentPriorities,
    config: Optional[MatcherConfig] = None,
) -> PriorityBoost:
    """Compute the priority boost for one vendor with the current configuration."""
    return PriorityBoostCalculator(config).calculate(vendor, priorities)
