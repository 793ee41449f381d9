"""Shared fixtures for vendor matcher tests."""

import pytest

from vendor_matcher.config import reset_config
from vendor_matcher.schema import AssessmentPriorities, Gap, Vendor


@pytest.fixture(autouse=True)
def default_config():
    """Start every test from the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def vendor() -> Vendor:
    """A mid-market cloud vendor covering AML and transaction monitoring."""
    return Vendor(
        id="vendor-1",
        name="ComplyCo",
        categories=["KYC_AML", "TRANSACTION_MONITORING"],
        target_segments=["MIDMARKET", "ENTERPRISE"],
        geographic_coverage=["US", "UK", "EU"],
        pricing_range="RANGE_50K_100K",
        features=["api_access", "real_time_alerts", "case_management"],
        deployment_options="Cloud, Hybrid",
        implementation_timeline_days=60,
    )


@pytest.fixture
def priorities() -> AssessmentPriorities:
    """Priorities of a mid-market buyer that the sample vendor fits well."""
    return AssessmentPriorities(
        company_size="MIDMARKET",
        jurisdictions=["US", "UK"],
        budget_range="RANGE_50K_100K",
        ranked_priorities=["transaction-monitoring", "risk-scoring", "fraud-detection"],
        selected_use_cases=["transaction-monitoring", "risk-scoring", "fraud-detection", "kyc-aml"],
        must_have_features=["api_access", "real_time_alerts"],
        deployment_preference="CLOUD",
        implementation_urgency="IMMEDIATE",
    )


@pytest.fixture
def gaps() -> list[Gap]:
    """Four gaps, three of them in categories the sample vendor covers."""
    return [
        Gap(id="g1", category="KYC_AML", score=1.0, is_foundational=True, section_weight=0.3),
        Gap(id="g2", category="TRANSACTION_MONITORING", score=2.0, section_weight=0.2),
        Gap(id="g3", category="KYC_AML", score=3.0, section_weight=0.1),
        Gap(id="g4", category="SANCTIONS_SCREENING", score=1.2, is_foundational=True, section_weight=0.25),
    ]
