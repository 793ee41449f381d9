"""Centralized configuration management for the vendor matcher."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .schema import CompanySize, DeploymentPreference, ImplementationUrgency, VendorStatus


class _FrozenConfig(BaseModel):
    model_config = ConfigDict(frozen=True)


class ScoringWeightsConfig(_FrozenConfig):
    """Maximum points for each base score dimension.

    The four weights sum to the 100-point base score.
    """
    risk_area_coverage: float = Field(
        40.0,
        description="Points for covering every identified compliance gap"
    )
    size_fit: float = Field(
        20.0,
        description="Points for an exact company size match"
    )
    geo_coverage: float = Field(
        20.0,
        description="Points for covering every required jurisdiction"
    )
    price: float = Field(
        20.0,
        description="Points for pricing that overlaps the buyer budget"
    )


class SizeFitConfig(_FrozenConfig):
    """Company size fit scoring.

    Adjacency is a linear chain: each size is adjacent only to its
    immediate neighbours.
    """
    exact_match: float = Field(20.0, description="Vendor targets the buyer's size")
    partial_match: float = Field(15.0, description="Vendor targets an adjacent size")
    no_match: float = Field(0.0, description="No exact or adjacent match")
    adjacency: dict[str, list[str]] = Field(
        default_factory=lambda: {
            CompanySize.STARTUP.value: [CompanySize.SMB.value],
            CompanySize.SMB.value: [CompanySize.STARTUP.value, CompanySize.MIDMARKET.value],
            CompanySize.MIDMARKET.value: [CompanySize.SMB.value, CompanySize.ENTERPRISE.value],
            CompanySize.ENTERPRISE.value: [CompanySize.MIDMARKET.value],
        },
        description="Adjacent segments per company size"
    )


class GeoCoverageConfig(_FrozenConfig):
    """Geographic coverage matching. Comparisons are case-insensitive."""
    global_coverage: str = Field("GLOBAL", description="Coverage tag meaning every jurisdiction")


class PriceConfig(_FrozenConfig):
    """Budget reconciliation settings."""
    tolerance_factor: float = Field(
        1.25,
        description="Multiplier on the buyer budget ceiling for partial credit"
    )
    unknown_pricing_score: float = Field(
        10.0,
        description="Points when the vendor has not disclosed pricing"
    )
    tolerance_score: float = Field(
        10.0,
        description="Points when vendor pricing is within tolerance"
    )


class PriorityBoostConfig(_FrozenConfig):
    """Points and sentinels for the priority boost."""
    rank_1: float = Field(20.0, description="Vendor covers the #1 ranked priority")
    rank_2: float = Field(15.0, description="Vendor covers the #2 ranked priority")
    rank_3: float = Field(10.0, description="Vendor covers the #3 ranked priority")
    features_all: float = Field(10.0, description="No must-have features missing")
    features_partial: float = Field(5.0, description="A few must-have features missing")
    max_missing_for_partial: int = Field(
        2,
        description="Most missing features that still earn partial credit"
    )
    deployment_match: float = Field(5.0, description="Vendor supports the deployment preference")
    speed_boost: float = Field(5.0, description="Fast implementation for urgent buyers")
    fast_implementation_days: int = Field(
        90,
        description="Maximum implementation timeline counted as fast"
    )
    default_implementation_days: int = Field(
        365,
        description="Timeline assumed when the vendor does not publish one"
    )
    flexible_preference: str = Field(
        DeploymentPreference.FLEXIBLE.value,
        description="Deployment preference matching any vendor"
    )
    immediate_urgency: str = Field(
        ImplementationUrgency.IMMEDIATE.value,
        description="Urgency that enables the speed boost"
    )


class MatchTiersConfig(_FrozenConfig):
    """Summary tiers on the combined 0-140 score.

    A score equal to a threshold belongs to that tier.
    """
    excellent_threshold: float = Field(120.0, description="Minimum score for an excellent match")
    strong_threshold: float = Field(100.0, description="Minimum score for a strong match")
    good_threshold: float = Field(80.0, description="Minimum score for a good match")
    excellent_label: str = "Excellent match - Highly recommended"
    strong_label: str = "Strong match - Recommended"
    good_label: str = "Good match - Worth considering"
    partial_label: str = "Partial match - May require evaluation"
    coverage_reason_threshold: float = Field(
        30.0,
        description="Minimum risk area coverage points that earn a gap coverage reason"
    )


class GapPrioritizationConfig(_FrozenConfig):
    """Thresholds for deriving gap severity, priority, effort and cost."""
    max_answer_score: float = Field(5.0, description="Top of the answer score scale")
    critical_below: float = Field(1.5, description="Scores below this are CRITICAL")
    high_below: float = Field(2.5, description="Scores below this are HIGH")
    medium_below: float = Field(3.5, description="Scores below this are MEDIUM")
    score_multiplier: float = Field(2.0, description="Priority points per answer point below the maximum")
    foundational_boost: float = Field(2.0, description="Priority points for foundational questions")
    section_weight_multiplier: float = Field(5.0, description="Priority points per unit of section weight")
    min_priority_score: int = 1
    max_priority_score: int = 10
    immediate_from: int = Field(9, description="Minimum priority score for IMMEDIATE")
    short_term_from: int = Field(6, description="Minimum priority score for SHORT_TERM")
    medium_term_from: int = Field(3, description="Minimum priority score for MEDIUM_TERM")
    large_effort_section_weight: float = Field(
        0.25,
        description="LARGE effort requires a section weight above this"
    )
    large_effort_score_below: float = Field(
        2.0,
        description="LARGE effort requires an answer score below this"
    )
    medium_effort_min_weight: float = Field(0.15, description="Lower bound of the MEDIUM effort weight band")
    medium_effort_max_weight: float = Field(0.25, description="Upper bound of the MEDIUM effort weight band")
    top_cost_section_weight: float = Field(
        0.20,
        description="OVER_250K cost requires a section weight above this"
    )


class MatchingConfig(_FrozenConfig):
    """Defaults for ranking a vendor catalog."""
    default_limit: int = Field(15, description="Maximum vendors returned by a match")
    default_min_score: float = Field(0.0, description="Minimum total score to include a vendor")
    max_total_score: float = Field(140.0, description="Cap on base score plus boost")
    approved_status: str = Field(
        VendorStatus.APPROVED.value,
        description="Only vendors with this status (or none) are ranked"
    )


class MatcherConfig(_FrozenConfig):
    """Complete configuration for the vendor matcher."""
    scoring_weights: ScoringWeightsConfig = Field(default_factory=ScoringWeightsConfig)
    size_fit: SizeFitConfig = Field(default_factory=SizeFitConfig)
    geo_coverage: GeoCoverageConfig = Field(default_factory=GeoCoverageConfig)
    price: PriceConfig = Field(default_factory=PriceConfig)
    priority_boost: PriorityBoostConfig = Field(default_factory=PriorityBoostConfig)
    match_tiers: MatchTiersConfig = Field(default_factory=MatchTiersConfig)
    gap_prioritization: GapPrioritizationConfig = Field(default_factory=GapPrioritizationConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)


# Global config instance
_config: Optional[MatcherConfig] = None


def get_config() -> MatcherConfig:
    """Get the current configuration.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = MatcherConfig()
    return _config


def load_config(path: Path) -> MatcherConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded MatcherConfig.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    _config = MatcherConfig.model_validate(data or {})
    return _config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = MatcherConfig()


def find_config_file() -> Optional[Path]:
    """Find a matcher configuration file.

    Looks in (order of priority):
    1. VENDOR_MATCHER_CONFIG environment variable
    2. ./matcher-config.yaml
    3. ./matcher-config.yml
    4. ~/.config/vendor-matcher/config.yaml
    """
    env_path = os.environ.get("VENDOR_MATCHER_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    for name in ["matcher-config.yaml", "matcher-config.yml"]:
        path = Path(name)
        if path.exists():
            return path

    user_config = Path.home() / ".config" / "vendor-matcher" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file.

    Args:
        path: Path where to save the configuration.
    """
    data = MatcherConfig().model_dump()

    yaml_content = """# Vendor Matcher Configuration
# ============================
#
# This file configures base scoring weights, priority boost points,
# summary tiers and gap prioritization thresholds.
#
# Copy this file to one of these locations:
#   - ./matcher-config.yaml (current directory)
#   - ~/.config/vendor-matcher/config.yaml (user config)
#
# Or set the VENDOR_MATCHER_CONFIG environment variable.

"""
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
