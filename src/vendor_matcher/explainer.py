"""Match Reason Generator.

Generates human-readable explanations and a summary tier for vendor
match scores. Reasons are pure formatting over a computed breakdown.
"""

from typing import Optional

from .config import MatcherConfig, get_config
from .schema import BaseScore, PriorityBoost, Vendor
from .utils import round_half_up

RANK_LABELS = {1: "#1", 2: "#2", 3: "#3"}


class MatchExplainer:
    """Generates reasons and summaries for vendor match scores.

    Reasons are emitted in a fixed order: priority, gap coverage,
    features, size, geography, price, deployment, speed. Conditions that
    do not hold are skipped.
    """

    def __init__(self, config: Optional[MatcherConfig] = None):
        """Initialize explainer with configuration."""
        self.config = config or get_config()
        self.weights = self.config.scoring_weights
        self.size_points = self.config.size_fit
        self.price_points = self.config.price
        self.boost_points = self.config.priority_boost
        self.tiers = self.config.match_tiers

        # Highest threshold first, a score on a boundary takes the higher tier
        self.tier_labels = [
            (self.tiers.excellent_threshold, self.tiers.excellent_label),
            (self.tiers.strong_threshold, self.tiers.strong_label),
            (self.tiers.good_threshold, self.tiers.good_label),
        ]

    def generate_reasons(
        self,
        vendor: Vendor,
        base_score: BaseScore,
        priority_boost: PriorityBoost,
    ) -> list[str]:
        """Generate match reasons for a vendor.

        Args:
            vendor: Vendor that was scored
            base_score: Base score breakdown
            priority_boost: Priority boost breakdown

        Returns:
            Ordered list of 0-8 reason strings
        """
        reasons = []

        priority_reason = self._priority_reason(priority_boost)
        if priority_reason:
            reasons.append(priority_reason)

        if base_score.risk_area_coverage >= self.tiers.coverage_reason_threshold:
            percentage = round_half_up(
                base_score.risk_area_coverage / self.weights.risk_area_coverage * 100
            )
            reasons.append(f"Addresses {percentage}% of your identified compliance gaps")

        feature_reason = self._feature_reason(priority_boost)
        if feature_reason:
            reasons.append(feature_reason)

        if base_score.size_fit == self.size_points.exact_match:
            reasons.append("Designed for companies your size")
        elif base_score.size_fit == self.size_points.partial_match:
            reasons.append("Well-suited for companies your size")

        geo_reason = self._geo_reason(base_score.geo_coverage)
        if geo_reason:
            reasons.append(geo_reason)

        if base_score.price_score == self.weights.price:
            reasons.append("Within your budget range")
        elif base_score.price_score == self.price_points.tolerance_score:
            tolerance_pct = round_half_up((self.price_points.tolerance_factor - 1) * 100)
            reasons.append(f"Slightly above budget but within {tolerance_pct}% tolerance")

        if priority_boost.deployment_boost == self.boost_points.deployment_match:
            reasons.append("Supports your preferred deployment model")

        if priority_boost.speed_boost == self.boost_points.speed_boost:
            reasons.append(
                f"Fast implementation timeline (≤{self.boost_points.fast_implementation_days} days)"
            )

        return reasons

    def generate_summary(self, total_score: float) -> str:
        """Map a combined 0-140 score to its summary tier."""
        for threshold, label in self.tier_labels:
            if total_score >= threshold:
                return label
        return self.tiers.partial_label

    def _priority_reason(self, priority_boost: PriorityBoost) -> Optional[str]:
        """Describe which ranked priority the vendor covers."""
        if not priority_boost.matched_priority:
            return None
        rank = priority_boost.matched_rank
        if rank is None:
            # Breakdowns built elsewhere may only carry the points
            if priority_boost.top_priority_boost == self.boost_points.rank_1:
                rank = 1
            elif priority_boost.top_priority_boost == self.boost_points.rank_2:
                rank = 2
            else:
                rank = 3
        return f"Covers your {RANK_LABELS.get(rank, '#3')} priority: {priority_boost.matched_priority}"

    def _feature_reason(self, priority_boost: PriorityBoost) -> Optional[str]:
        """Describe must-have feature coverage."""
        if priority_boost.feature_boost == self.boost_points.features_all:
            return "Has all must-have features you specified"

        if priority_boost.feature_boost == self.boost_points.features_partial:
            missing = priority_boost.missing_features
            missing_list = ", ".join(missing)
            if len(missing) == 1:
                return f"Has most features, missing: {missing_list}"
            return f"Has most features, missing {len(missing)}: {missing_list}"

        return None

    def _geo_reason(self, geo_coverage: float) -> Optional[str]:
        """Describe jurisdiction coverage in tiers."""
        full = self.weights.geo_coverage
        if geo_coverage == full:
            return "Full coverage for all your jurisdictions"
        if geo_coverage >= full * 0.75:
            return "Covers most of your required jurisdictions"
        if geo_coverage >= full * 0.5:
            return "Partial coverage for your jurisdictions"
        return None


def generate_match_reasons(
    vendor: Vendor,
    base_score: BaseScore,
    priority_boost: PriorityBoost,
    config: Optional[MatcherConfig] = None,
) -> list[str]:
    """Generate match reasons with the current configuration."""
    return MatchExplainer(config).generate_reasons(vendor, base_score, priority_boost)


def generate_match_summary(total_score: float, config: Optional[MatcherConfig] = None) -> str:
    """Generate the summary tier with the current configuration."""
    return MatchExplainer(config).generate_summary(total_score)
