"""Vendor Matching Engine.

Orchestrates base scoring, priority boost, reason generation and gap
prioritization over plain records. Also loads and validates the JSON
records consumed by the CLI.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from .base_scorer import BaseScorer
from .config import MatcherConfig, get_config
from .explainer import MatchExplainer
from .gap_prioritizer import GapPrioritizer
from .priority_boost import PriorityBoostCalculator
from .schema import (
    AssessmentPriorities,
    BaseScore,
    Gap,
    PrioritizedGap,
    PriorityBoost,
    Vendor,
    VendorMatchScore,
)

logger = logging.getLogger(__name__)

RANKED_PRIORITY_COUNT = 3
MAX_MUST_HAVE_FEATURES = 5


class VendorMatchingEngine:
    """Ranks vendors for an assessment and prioritizes its gaps.

    Every scoring call is pure: no state is shared between vendors, so
    callers may score vendors concurrently without locking.
    """

    def __init__(self, config: Optional[MatcherConfig] = None):
        """Initialize engine components with a shared configuration."""
        self.config = config or get_config()
        self.base_scorer = BaseScorer(self.config)
        self.boost_calculator = PriorityBoostCalculator(self.config)
        self.explainer = MatchExplainer(self.config)
        self.gap_prioritizer = GapPrioritizer(self.config)

    def compute_base_score(
        self,
        vendor: Vendor,
        priorities: AssessmentPriorities,
        gaps: list[Gap],
    ) -> BaseScore:
        """Compute the 0-100 base score for one vendor."""
        return self.base_scorer.score(vendor, priorities, gaps)

    def compute_priority_boost(
        self,
        vendor: Vendor,
        priorities: AssessmentPriorities,
    ) -> PriorityBoost:
        """Compute the 0-40 priority boost for one vendor."""
        return self.boost_calculator.calculate(vendor, priorities)

    def calculate_total_score(self, base_score: BaseScore, priority_boost: PriorityBoost) -> float:
        """Combine base score and boost, capped at the maximum total."""
        total = base_score.total_base + priority_boost.total_boost
        return min(total, self.config.matching.max_total_score)

    def score_vendor(
        self,
        vendor: Vendor,
        priorities: AssessmentPriorities,
        gaps: list[Gap],
    ) -> VendorMatchScore:
        """Score a single vendor with reasons and a summary tier."""
        base_score = self.compute_base_score(vendor, priorities, gaps)
        priority_boost = self.compute_priority_boost(vendor, priorities)
        total_score = self.calculate_total_score(base_score, priority_boost)

        return VendorMatchScore(
            vendor_id=vendor.id,
            vendor_name=vendor.name,
            base_score=base_score,
            priority_boost=priority_boost,
            total_score=total_score,
            match_reasons=self.explainer.generate_reasons(vendor, base_score, priority_boost),
            summary=self.explainer.generate_summary(total_score),
        )

    def match_vendors(
        self,
        vendors: list[Vendor],
        priorities: AssessmentPriorities,
        gaps: list[Gap],
        limit: Optional[int] = None,
        min_score: Optional[float] = None,
    ) -> list[VendorMatchScore]:
        """Score all vendors and return the best matches.

        Args:
            vendors: Candidate vendors
            priorities: Buyer priorities for the assessment
            gaps: Gaps identified by the assessment
            limit: Maximum matches to return (default from config)
            min_score: Minimum total score to keep (default from config)

        Returns:
            Matches sorted by total score, highest first. Ties keep the
            input vendor order.
        """
        if limit is None:
            limit = self.config.matching.default_limit
        if min_score is None:
            min_score = self.config.matching.default_min_score

        candidates = self.approved_vendors(vendors)
        scores = [self.score_vendor(vendor, priorities, gaps) for vendor in candidates]

        matches = [s for s in scores if s.total_score >= min_score]
        matches.sort(key=lambda s: s.total_score, reverse=True)
        matches = matches[:limit]

        logger.info(
            "Matched %d approved vendors against %d gaps: %d above %.1f, top score %.1f",
            len(candidates), len(gaps), len(matches), min_score,
            matches[0].total_score if matches else 0.0,
        )

        return matches

    def top_base_matches(
        self,
        vendors: list[Vendor],
        priorities: AssessmentPriorities,
        gaps: list[Gap],
        limit: Optional[int] = None,
        min_score: Optional[float] = None,
    ) -> list[BaseScore]:
        """Rank approved vendors on the 0-100 base score alone.

        Same filtering, ordering and truncation as match_vendors, without
        the priority boost.
        """
        if limit is None:
            limit = self.config.matching.default_limit
        if min_score is None:
            min_score = self.config.matching.default_min_score

        candidates = self.approved_vendors(vendors)
        scores = [self.compute_base_score(vendor, priorities, gaps) for vendor in candidates]

        matches = [s for s in scores if s.total_base >= min_score]
        matches.sort(key=lambda s: s.total_base, reverse=True)
        matches = matches[:limit]

        logger.info(
            "Ranked %d approved vendors on base score: %d above %.1f",
            len(candidates), len(matches), min_score,
        )

        return matches

    def approved_vendors(self, vendors: list[Vendor]) -> list[Vendor]:
        """Drop vendors whose catalog status is set to anything but approved."""
        approved = self.config.matching.approved_status.upper()
        kept = [v for v in vendors if v.status is None or v.status.strip().upper() == approved]
        if len(kept) != len(vendors):
            logger.debug("Skipped %d vendors that are not approved", len(vendors) - len(kept))
        return kept

    def prioritize_gaps(self, gaps: list[Gap]) -> list[PrioritizedGap]:
        """Prioritize gaps, highest priority score first."""
        prioritized = self.gap_prioritizer.prioritize_gaps(gaps)
        logger.info("Prioritized %d gaps", len(prioritized))
        return prioritized


# =============================================================================
# Loading and validation
# =============================================================================


def _read_json(path: Union[str, Path]) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _as_list(data: Any, key: str) -> list:
    """Accept either a bare JSON array or an object wrapping one under `key`."""
    if isinstance(data, dict) and key in data:
        data = data[key]
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of {key}")
    return data


def load_vendors(path: Union[str, Path]) -> list[Vendor]:
    """Load vendor records from a JSON file."""
    vendors = [Vendor.model_validate(item) for item in _as_list(_read_json(path), "vendors")]
    logger.info("Loaded %d vendors from %s", len(vendors), path)
    return vendors


def load_priorities(path: Union[str, Path]) -> AssessmentPriorities:
    """Load assessment priorities from a JSON file."""
    return AssessmentPriorities.model_validate(_read_json(path))


def load_gaps(path: Union[str, Path]) -> list[Gap]:
    """Load gap records from a JSON file."""
    gaps = [Gap.model_validate(item) for item in _as_list(_read_json(path), "gaps")]
    logger.info("Loaded %d gaps from %s", len(gaps), path)
    return gaps


def validate_priorities(priorities: AssessmentPriorities) -> tuple[bool, list[str]]:
    """Check the business rules the scorer relies on but never enforces.

    Returns:
        Tuple of (is_valid, list of issues)
    """
    issues = []
    ranked = priorities.ranked_priorities

    if len(ranked) != RANKED_PRIORITY_COUNT:
        issues.append(
            f"Must rank exactly {RANKED_PRIORITY_COUNT} priorities (found {len(ranked)})"
        )

    named = [p for p in ranked if isinstance(p, str) and p.strip()]
    if len(named) != len(ranked):
        issues.append("Ranked priorities must not be empty")
    if len(set(named)) != len(named):
        issues.append("Ranked priorities must be distinct")

    if priorities.selected_use_cases:
        invalid = [p for p in named if p not in priorities.selected_use_cases]
        if invalid:
            issues.append(
                f"Ranked priorities must be from selected use cases. Invalid: {', '.join(invalid)}"
            )

    if len(priorities.must_have_features) > MAX_MUST_HAVE_FEATURES:
        issues.append(
            f"Maximum {MAX_MUST_HAVE_FEATURES} must-have features allowed "
            f"(found {len(priorities.must_have_features)})"
        )

    return len(issues) == 0, issues


def validate_priorities_file(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Validate a priorities JSON file."""
    try:
        priorities = load_priorities(path)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        return False, [str(e)]
    return validate_priorities(priorities)


def validate_vendors_file(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Validate a vendors JSON file."""
    try:
        raw = _as_list(_read_json(path), "vendors")
    except (OSError, json.JSONDecodeError, ValueError) as e:
        return False, [str(e)]

    issues = []
    for i, item in enumerate(raw):
        try:
            vendor = Vendor.model_validate(item)
        except ValidationError as e:
            issues.append(f"Vendor {i}: {e.error_count()} validation error(s)")
            continue
        label = vendor.id or vendor.name or f"#{i}"
        if not vendor.categories:
            issues.append(f"Vendor {label}: no categories")

    return len(issues) == 0, issues
