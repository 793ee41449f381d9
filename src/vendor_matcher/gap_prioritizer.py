"""Gap Prioritizer.

Derives severity, priority, effort and cost for compliance gaps from the
originating answer score, whether the question is foundational, and the
weight of its section. Every derivation is a pure function of that triple.
"""

import logging
import math
from typing import Callable, Optional

from .config import MatcherConfig, get_config
from .schema import (
    BudgetRange,
    EffortRange,
    Gap,
    GapPrioritization,
    GapPriority,
    PrioritizedGap,
    Severity,
)
from .utils import clamp, round_half_up

logger = logging.getLogger(__name__)

# (effort, severity, section_weight, is_foundational) -> bool
CostRule = Callable[[EffortRange, Severity, float, bool], bool]


class GapPrioritizer:
    """Prioritizes compliance gaps for remediation planning.

    Effort and cost are ordered cascades: rules are evaluated top to
    bottom and the first matching rule decides the result, so each
    outcome can be traced back to a single rule.
    """

    def __init__(self, config: Optional[MatcherConfig] = None):
        """Initialize prioritizer with optional custom configuration."""
        self.config = config or get_config()
        cfg = self.config.gap_prioritization
        self.thresholds = cfg

        self.severity_bands = [
            (cfg.critical_below, Severity.CRITICAL),
            (cfg.high_below, Severity.HIGH),
            (cfg.medium_below, Severity.MEDIUM),
        ]

        self.priority_bands = [
            (cfg.immediate_from, GapPriority.IMMEDIATE),
            (cfg.short_term_from, GapPriority.SHORT_TERM),
            (cfg.medium_term_from, GapPriority.MEDIUM_TERM),
        ]

        self.effort_rules: list[tuple[Callable[[float, bool, float], bool], EffortRange]] = [
            (
                lambda weight, foundational, score: (
                    weight > cfg.large_effort_section_weight
                    and foundational
                    and score < cfg.large_effort_score_below
                ),
                EffortRange.LARGE,
            ),
            (
                lambda weight, foundational, score: (
                    cfg.medium_effort_min_weight <= weight <= cfg.medium_effort_max_weight
                ),
                EffortRange.MEDIUM,
            ),
            (lambda weight, foundational, score: foundational, EffortRange.MEDIUM),
        ]

        self.cost_rules: list[tuple[CostRule, BudgetRange]] = [
            (
                lambda effort, severity, weight, foundational: (
                    effort == EffortRange.LARGE
                    and severity == Severity.CRITICAL
                    and weight > cfg.top_cost_section_weight
                ),
                BudgetRange.OVER_250K,
            ),
            (
                lambda effort, severity, weight, foundational: (
                    effort == EffortRange.LARGE and severity == Severity.CRITICAL
                ),
                BudgetRange.RANGE_100K_250K,
            ),
            (
                lambda effort, severity, weight, foundational: (
                    effort == EffortRange.LARGE
                    or (effort == EffortRange.MEDIUM and foundational)
                ),
                BudgetRange.RANGE_50K_100K,
            ),
            (
                lambda effort, severity, weight, foundational: (
                    effort == EffortRange.MEDIUM
                    or (effort == EffortRange.SMALL and foundational)
                ),
                BudgetRange.RANGE_10K_50K,
            ),
        ]

    def prioritize(
        self,
        score: float,
        is_foundational: bool,
        section_weight: float,
    ) -> GapPrioritization:
        """Derive all prioritization fields for one gap.

        Args:
            score: Final answer score (0-5)
            is_foundational: Whether the originating question is foundational
            section_weight: Weight of the question's section (0-1)

        Returns:
            Severity, priority, priority score, effort and cost
        """
        if not (math.isfinite(score) and math.isfinite(section_weight)):
            logger.debug(
                "Non-finite gap input (score=%s, section_weight=%s); using lowest priority",
                score, section_weight,
            )
            return GapPrioritization(
                severity=Severity.LOW,
                priority=GapPriority.LONG_TERM,
                priority_score=self.thresholds.min_priority_score,
                effort=EffortRange.SMALL,
                cost=BudgetRange.UNDER_10K,
            )

        is_foundational = bool(is_foundational)
        severity = self.severity(score)
        priority_score = self.priority_score(score, is_foundational, section_weight)
        priority = self.priority(priority_score)
        effort = self.effort(section_weight, is_foundational, score)
        cost = self.cost(effort, severity, section_weight, is_foundational)

        return GapPrioritization(
            severity=severity,
            priority=priority,
            priority_score=priority_score,
            effort=effort,
            cost=cost,
        )

    def severity(self, score: float) -> Severity:
        """Classify severity from the answer score (strict upper bounds)."""
        for upper_bound, severity in self.severity_bands:
            if score < upper_bound:
                return severity
        return Severity.LOW

    def priority_score(self, score: float, is_foundational: bool, section_weight: float) -> int:
        """Calculate the 1-10 priority score used to sort gaps.

        Lower answer scores, foundational questions and heavier sections
        all raise the priority.
        """
        cfg = self.thresholds
        raw = (cfg.max_answer_score - score) * cfg.score_multiplier
        if is_foundational:
            raw += cfg.foundational_boost
        raw += section_weight * cfg.section_weight_multiplier

        return round_half_up(clamp(raw, cfg.min_priority_score, cfg.max_priority_score))

    def priority(self, priority_score: int) -> GapPriority:
        """Map a priority score to its remediation timeframe."""
        for lower_bound, priority in self.priority_bands:
            if priority_score >= lower_bound:
                return priority
        return GapPriority.LONG_TERM

    def effort(self, section_weight: float, is_foundational: bool, score: float) -> EffortRange:
        """Estimate remediation effort."""
        for rule, effort in self.effort_rules:
            if rule(section_weight, is_foundational, score):
                return effort
        return EffortRange.SMALL

    def cost(
        self,
        effort: EffortRange,
        severity: Severity,
        section_weight: float,
        is_foundational: bool,
    ) -> BudgetRange:
        """Estimate remediation cost bracket."""
        for rule, cost in self.cost_rules:
            if rule(effort, severity, section_weight, is_foundational):
                return cost
        return BudgetRange.UNDER_10K

    def prioritize_gap(self, gap: Gap) -> PrioritizedGap:
        """Attach prioritization fields to a gap record."""
        result = self.prioritize(gap.score, gap.is_foundational, gap.section_weight)
        logger.debug(
            "Gap %s (%s): severity=%s priority=%s score=%d effort=%s cost=%s",
            gap.id, gap.category, result.severity.value, result.priority.value,
            result.priority_score, result.effort.value, result.cost.value,
        )
        return PrioritizedGap(**gap.model_dump(), **result.model_dump())

    def prioritize_gaps(self, gaps: list[Gap]) -> list[PrioritizedGap]:
        """Prioritize gaps and sort them by priority score, highest first.

        Gaps with equal priority scores keep their input order.
        """
        prioritized = [self.prioritize_gap(gap) for gap in gaps]
        prioritized.sort(key=lambda g: g.priority_score, reverse=True)
        return prioritized


def prioritize_gap(
    score: float,
    is_foundational: bool,
    section_weight: float,
    config: Optional[MatcherConfig] = None,
) -> GapPrioritization:
    """Derive gap prioritization fields with the current configuration."""
    return GapPrioritizer(config).prioritize(score, is_foundational, section_weight)
