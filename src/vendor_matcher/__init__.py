"""Compliance vendor matching and gap prioritization."""

from .base_scorer import BaseScorer, compute_base_score
from .engine import VendorMatchingEngine
from .explainer import MatchExplainer, generate_match_reasons, generate_match_summary
from .gap_prioritizer import GapPrioritizer, prioritize_gap
from .priority_boost import PriorityBoostCalculator, compute_priority_boost, normalize_priority_format

__all__ = [
    "BaseScorer",
    "GapPrioritizer",
    "MatchExplainer",
    "PriorityBoostCalculator",
    "VendorMatchingEngine",
    "compute_base_score",
    "compute_priority_boost",
    "generate_match_reasons",
    "generate_match_summary",
    "normalize_priority_format",
    "prioritize_gap",
]
