"""Tests for the vendor matching engine, loaders and validation."""

import json

import pytest

from vendor_matcher import VendorMatchingEngine
from vendor_matcher.config import MatcherConfig, MatchingConfig, PriorityBoostConfig
from vendor_matcher.engine import (
    load_gaps,
    load_priorities,
    load_vendors,
    validate_priorities,
    validate_priorities_file,
    validate_vendors_file,
)
from vendor_matcher.schema import AssessmentPriorities, Vendor, VendorStatus


@pytest.fixture
def engine() -> VendorMatchingEngine:
    return VendorMatchingEngine()


@pytest.fixture
def weak_vendor() -> Vendor:
    """A vendor with no catalog data beyond its identity."""
    return Vendor(id="vendor-2", name="BareMinimum")


class TestScoreVendor:
    """Tests for scoring a single vendor."""

    def test_strong_vendor(self, engine, vendor, priorities, gaps):
        result = engine.score_vendor(vendor, priorities, gaps)

        assert result.vendor_id == "vendor-1"
        assert result.vendor_name == "ComplyCo"
        assert result.base_score.total_base == 90
        assert result.priority_boost.total_boost == 40
        assert result.total_score == 130
        assert result.summary == "Excellent match - Highly recommended"
        assert len(result.match_reasons) == 8

    def test_weak_vendor(self, engine, weak_vendor, priorities, gaps):
        result = engine.score_vendor(weak_vendor, priorities, gaps)

        # Unknown pricing earns 10; two missing must-haves earn 5
        assert result.base_score.price_score == 10
        assert result.base_score.total_base == 10
        assert result.priority_boost.feature_boost == 5
        assert result.total_score == 15
        assert result.summary == "Partial match - May require evaluation"

    def test_total_is_capped(self, vendor, priorities, gaps):
        config = MatcherConfig(priority_boost=PriorityBoostConfig(rank_1=50))
        result = VendorMatchingEngine(config).score_vendor(vendor, priorities, gaps)

        assert result.base_score.total_base + result.priority_boost.total_boost == 160
        assert result.total_score == 140

    def test_idempotent(self, engine, vendor, priorities, gaps):
        assert engine.score_vendor(vendor, priorities, gaps) == engine.score_vendor(vendor, priorities, gaps)


class TestMatchVendors:
    """Tests for ranking a vendor catalog."""

    def test_sorted_by_total_score(self, engine, vendor, weak_vendor, priorities, gaps):
        matches = engine.match_vendors([weak_vendor, vendor], priorities, gaps)

        assert [m.vendor_id for m in matches] == ["vendor-1", "vendor-2"]
        assert matches[0].total_score >= matches[1].total_score

    def test_ties_keep_input_order(self, engine, vendor, priorities, gaps):
        twin = vendor.model_copy(update={"id": "vendor-3"})
        matches = engine.match_vendors([twin, vendor], priorities, gaps)

        assert [m.vendor_id for m in matches] == ["vendor-3", "vendor-1"]

    def test_min_score_filters(self, engine, vendor, weak_vendor, priorities, gaps):
        matches = engine.match_vendors([vendor, weak_vendor], priorities, gaps, min_score=20)
        assert [m.vendor_id for m in matches] == ["vendor-1"]

    def test_limit(self, engine, vendor, weak_vendor, priorities, gaps):
        matches = engine.match_vendors([weak_vendor, vendor], priorities, gaps, limit=1)
        assert [m.vendor_id for m in matches] == ["vendor-1"]

    def test_default_limit_from_config(self, priorities):
        config = MatcherConfig(matching=MatchingConfig(default_limit=2))
        vendors = [Vendor(id=f"v{i}") for i in range(5)]
        matches = VendorMatchingEngine(config).match_vendors(vendors, priorities, [])
        assert len(matches) == 2

    def test_empty_catalog(self, engine, priorities, gaps):
        assert engine.match_vendors([], priorities, gaps) == []

    def test_no_gaps_gives_full_coverage(self, engine, vendor, priorities):
        matches = engine.match_vendors([vendor], priorities, [])
        assert matches[0].base_score.risk_area_coverage == 40


class TestApprovedVendors:
    """Tests for catalog status filtering."""

    @pytest.mark.parametrize("status", ["PENDING", "REJECTED", "SUSPENDED"])
    def test_unapproved_vendors_are_not_ranked(self, engine, vendor, priorities, gaps, status):
        held = vendor.model_copy(update={"id": "held", "status": status})
        matches = engine.match_vendors([held, vendor], priorities, gaps)
        assert [m.vendor_id for m in matches] == ["vendor-1"]

    @pytest.mark.parametrize("status", [None, "APPROVED", "approved"])
    def test_approved_or_unset_status_is_kept(self, engine, vendor, status):
        candidate = vendor.model_copy(update={"status": status})
        assert engine.approved_vendors([candidate]) == [candidate]

    def test_status_loaded_from_json(self, tmp_path):
        path = tmp_path / "vendors.json"
        path.write_text(json.dumps([{"id": "v1", "status": VendorStatus.SUSPENDED.value}]))
        assert load_vendors(path)[0].status == "SUSPENDED"


class TestTopBaseMatches:
    """Tests for ranking on the base score alone."""

    @pytest.fixture
    def broad_vendor(self) -> Vendor:
        """Higher base score than the sample vendor, but a smaller boost."""
        return Vendor(
            id="broad",
            categories=["KYC_AML", "TRANSACTION_MONITORING", "SANCTIONS_SCREENING"],
            target_segments=["MIDMARKET"],
            geographic_coverage=["GLOBAL"],
            pricing_range="RANGE_50K_100K",
        )

    def test_order_differs_from_total_score_ranking(self, engine, vendor, broad_vendor, priorities, gaps):
        by_total = engine.match_vendors([vendor, broad_vendor], priorities, gaps)
        by_base = engine.top_base_matches([vendor, broad_vendor], priorities, gaps)

        assert [m.vendor_id for m in by_total] == ["vendor-1", "broad"]
        assert [s.vendor_id for s in by_base] == ["broad", "vendor-1"]
        assert [s.total_base for s in by_base] == [100, 90]

    def test_min_score_applies_to_base(self, engine, vendor, broad_vendor, priorities, gaps):
        matches = engine.top_base_matches([vendor, broad_vendor], priorities, gaps, min_score=95)
        assert [s.vendor_id for s in matches] == ["broad"]

    def test_limit_and_status(self, engine, vendor, broad_vendor, priorities, gaps):
        rejected = broad_vendor.model_copy(update={"status": "REJECTED"})
        matches = engine.top_base_matches([rejected, vendor], priorities, gaps, limit=1)
        assert [s.vendor_id for s in matches] == ["vendor-1"]


class TestPrioritizeGaps:
    """Tests for gap prioritization through the engine."""

    def test_highest_priority_first(self, engine, gaps):
        result = engine.prioritize_gaps(gaps)
        assert [g.id for g in result] == ["g1", "g4", "g2", "g3"]


class TestValidatePriorities:
    """Tests for priorities business rules."""

    def test_valid(self, priorities):
        assert validate_priorities(priorities) == (True, [])

    def test_wrong_count(self):
        is_valid, issues = validate_priorities(
            AssessmentPriorities(ranked_priorities=["kyc-aml", "fraud-detection"])
        )
        assert not is_valid
        assert any("exactly 3" in issue for issue in issues)

    def test_empty_entry(self):
        is_valid, issues = validate_priorities(
            AssessmentPriorities(ranked_priorities=["kyc-aml", "", "fraud-detection"])
        )
        assert not is_valid
        assert "Ranked priorities must not be empty" in issues

    def test_duplicates(self):
        is_valid, issues = validate_priorities(
            AssessmentPriorities(ranked_priorities=["kyc-aml", "kyc-aml", "fraud-detection"])
        )
        assert not is_valid
        assert "Ranked priorities must be distinct" in issues

    def test_must_come_from_selected_use_cases(self):
        is_valid, issues = validate_priorities(AssessmentPriorities(
            ranked_priorities=["kyc-aml", "fraud-detection", "risk-scoring"],
            selected_use_cases=["kyc-aml", "fraud-detection"],
        ))
        assert not is_valid
        assert any("Invalid: risk-scoring" in issue for issue in issues)

    def test_too_many_must_have_features(self, priorities):
        too_many = priorities.model_copy(update={"must_have_features": list("abcdef")})
        is_valid, issues = validate_priorities(too_many)
        assert not is_valid
        assert any("Maximum 5 must-have features" in issue for issue in issues)


class TestLoaders:
    """Tests for JSON loading."""

    def test_load_vendors_camel_case(self, tmp_path):
        path = tmp_path / "vendors.json"
        path.write_text(json.dumps([{
            "id": "v1",
            "name": "ComplyCo",
            "categories": ["KYC_AML"],
            "targetSegments": ["SMB"],
            "geographicCoverage": ["GLOBAL"],
            "pricingRange": "UNDER_10K",
            "deploymentOptions": "Cloud",
            "implementationTimelineDays": 30,
            "website": "https://example.com",
        }]))

        vendors = load_vendors(path)

        assert len(vendors) == 1
        assert vendors[0].target_segments == ["SMB"]
        assert vendors[0].implementation_timeline_days == 30

    def test_load_vendors_wrapped(self, tmp_path):
        path = tmp_path / "vendors.json"
        path.write_text(json.dumps({"vendors": [{"id": "v1"}, {"id": "v2"}]}))
        assert [v.id for v in load_vendors(path)] == ["v1", "v2"]

    def test_load_vendors_rejects_non_list(self, tmp_path):
        path = tmp_path / "vendors.json"
        path.write_text(json.dumps({"id": "v1"}))
        with pytest.raises(ValueError):
            load_vendors(path)

    def test_load_priorities(self, tmp_path):
        path = tmp_path / "priorities.json"
        path.write_text(json.dumps({
            "companySize": "SMB",
            "rankedPriorities": ["kyc-aml", "fraud-detection", "risk-scoring"],
            "mustHaveFeatures": ["sso"],
            "implementationUrgency": "IMMEDIATE",
        }))

        priorities = load_priorities(path)

        assert priorities.company_size == "SMB"
        assert priorities.ranked_priorities[0] == "kyc-aml"
        assert priorities.must_have_features == ["sso"]

    def test_load_gaps(self, tmp_path):
        path = tmp_path / "gaps.json"
        path.write_text(json.dumps({"gaps": [
            {"id": "g1", "category": "KYC_AML", "score": 1.0, "isFoundational": True, "sectionWeight": 0.3},
        ]}))

        gaps = load_gaps(path)

        assert gaps[0].is_foundational is True
        assert gaps[0].section_weight == 0.3


class TestValidateFiles:
    """Tests for file validation."""

    def test_valid_vendors_file(self, tmp_path):
        path = tmp_path / "vendors.json"
        path.write_text(json.dumps([{"id": "v1", "categories": ["KYC_AML"]}]))
        assert validate_vendors_file(path) == (True, [])

    def test_vendor_without_categories(self, tmp_path):
        path = tmp_path / "vendors.json"
        path.write_text(json.dumps([{"id": "v1"}]))
        is_valid, issues = validate_vendors_file(path)
        assert not is_valid
        assert issues == ["Vendor v1: no categories"]

    def test_vendor_with_bad_field(self, tmp_path):
        path = tmp_path / "vendors.json"
        path.write_text(json.dumps([{"id": "v1", "categories": ["KYC_AML"], "implementationTimelineDays": "soon"}]))
        is_valid, issues = validate_vendors_file(path)
        assert not is_valid
        assert issues == ["Vendor 0: 1 validation error(s)"]

    def test_unreadable_vendors_file(self, tmp_path):
        path = tmp_path / "vendors.json"
        path.write_text("{not json")
        is_valid, issues = validate_vendors_file(path)
        assert not is_valid
        assert len(issues) == 1

    def test_missing_priorities_file(self, tmp_path):
        is_valid, issues = validate_priorities_file(tmp_path / "missing.json")
        assert not is_valid
        assert len(issues) == 1
