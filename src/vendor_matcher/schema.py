"""Pydantic models for the Vendor Matching Engine.

Input schemas for vendors, assessment priorities and gaps, and output
schemas for score breakdowns. Input models accept both snake_case and the
camelCase names used by the assessment datastore.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Enums
# =============================================================================


class CompanySize(str, Enum):
    """Company size segment, ordered smallest to largest."""
    STARTUP = "STARTUP"
    SMB = "SMB"
    MIDMARKET = "MIDMARKET"
    ENTERPRISE = "ENTERPRISE"


class BudgetRange(str, Enum):
    """Budget bracket used for both buyer budget and vendor pricing."""
    UNDER_10K = "UNDER_10K"
    RANGE_10K_50K = "RANGE_10K_50K"
    RANGE_50K_100K = "RANGE_50K_100K"
    RANGE_100K_250K = "RANGE_100K_250K"
    OVER_250K = "OVER_250K"


class DeploymentPreference(str, Enum):
    """Buyer deployment preference."""
    CLOUD = "CLOUD"
    ON_PREMISE = "ON_PREMISE"
    HYBRID = "HYBRID"
    FLEXIBLE = "FLEXIBLE"


class VendorStatus(str, Enum):
    """Catalog review status of a vendor."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    SUSPENDED = "SUSPENDED"


class ImplementationUrgency(str, Enum):
    """How soon the buyer needs a solution in place."""
    IMMEDIATE = "IMMEDIATE"
    PLANNED = "PLANNED"
    STRATEGIC = "STRATEGIC"
    LONG_TERM = "LONG_TERM"


class Severity(str, Enum):
    """Gap severity derived from the answer score."""
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class GapPriority(str, Enum):
    """Remediation timeframe derived from the numeric priority score."""
    IMMEDIATE = "IMMEDIATE"
    SHORT_TERM = "SHORT_TERM"
    MEDIUM_TERM = "MEDIUM_TERM"
    LONG_TERM = "LONG_TERM"


class EffortRange(str, Enum):
    """Estimated remediation effort."""
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"


# =============================================================================
# Input Models
# =============================================================================


class _InputModel(BaseModel):
    """Base for records supplied by upstream collaborators."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Vendor(_InputModel):
    """A vendor catalog entry."""
    id: Optional[str] = None
    name: Optional[str] = None
    categories: list[str] = Field(default_factory=list)
    target_segments: list[str] = Field(default_factory=list)
    geographic_coverage: list[str] = Field(default_factory=list)
    pricing_range: Optional[str] = None
    features: list[str] = Field(default_factory=list)
    deployment_options: Optional[str] = None
    implementation_timeline_days: Optional[int] = None
    status: Optional[str] = Field(None, description="Catalog review status; missing means approved")


class AssessmentPriorities(_InputModel):
    """Buyer priorities captured alongside an assessment."""
    company_size: Optional[str] = None
    jurisdictions: list[str] = Field(default_factory=list)
    budget_range: Optional[str] = None
    ranked_priorities: list[Optional[str]] = Field(default_factory=list)
    selected_use_cases: list[str] = Field(default_factory=list)
    must_have_features: list[str] = Field(default_factory=list)
    deployment_preference: Optional[str] = None
    implementation_urgency: Optional[str] = None


class Gap(_InputModel):
    """A compliance gap derived from a low-scoring assessment answer."""
    id: Optional[str] = None
    category: str
    title: Optional[str] = None
    description: Optional[str] = None
    score: float = Field(..., description="Final answer score on the 0-5 scale")
    is_foundational: bool = False
    section_weight: float = Field(0.0, description="Section weight on the 0-1 scale")


# =============================================================================
# Output Models
# =============================================================================


class PriceRange(BaseModel):
    """Numeric price range for a budget bracket. `max` may be infinite."""
    model_config = ConfigDict(frozen=True)

    min: float
    max: float


class BaseScore(BaseModel):
    """Base fit score for a (vendor, assessment) pair, 0-100."""
    vendor_id: Optional[str] = None
    risk_area_coverage: float = Field(..., ge=0)
    size_fit: float = Field(..., ge=0)
    geo_coverage: float = Field(..., ge=0)
    price_score: float = Field(..., ge=0)
    total_base: float = Field(..., ge=0)


class PriorityBoost(BaseModel):
    """Preference alignment boost for a (vendor, assessment) pair, 0-40."""
    vendor_id: Optional[str] = None
    top_priority_boost: float = Field(..., ge=0)
    matched_priority: Optional[str] = None
    matched_rank: Optional[int] = None
    feature_boost: float = Field(..., ge=0)
    missing_features: list[str] = Field(default_factory=list)
    deployment_boost: float = Field(..., ge=0)
    speed_boost: float = Field(..., ge=0)
    total_boost: float = Field(..., ge=0)


class VendorMatchScore(BaseModel):
    """Combined match record for one vendor."""
    vendor_id: Optional[str] = None
    vendor_name: Optional[str] = None
    base_score: BaseScore
    priority_boost: PriorityBoost
    total_score: float = Field(..., ge=0)
    match_reasons: list[str] = Field(default_factory=list)
    summary: str


class GapPrioritization(BaseModel):
    """Derived prioritization fields for one gap."""
    severity: Severity
    priority: GapPriority
    priority_score: int = Field(..., ge=1, le=10)
    effort: EffortRange
    cost: BudgetRange


class PrioritizedGap(Gap):
    """A gap together with its derived prioritization fields."""
    severity: Severity
    priority: GapPriority
    priority_score: int = Field(..., ge=1, le=10)
    effort: EffortRange
    cost: BudgetRange
