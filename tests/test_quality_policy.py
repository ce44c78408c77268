"""Tests for the quality policy."""

import pytest

from contracts import BenchmarkRecord, CostRecord, IntelligencePackage, PackageMetadata, QualityAssessment
from orchestrator.quality_policy import (
    ISSUE_NO_BENCHMARKS,
    ISSUE_NO_COSTS,
    ISSUE_NO_PATTERNS,
    ISSUE_NO_TOOLS,
    ISSUE_STALE,
    QualityPolicy,
    assess_intelligence_quality,
    should_use_fallback,
)

from conftest import make_pattern, make_tool


def _package(tools=(), patterns=(), benchmarks=None, freshness=1.0):
    return IntelligencePackage(
        metadata=PackageMetadata(icp="agency", data_freshness=freshness),
        tools=list(tools),
        patterns=list(patterns),
        benchmarks=benchmarks,
        costs=CostRecord(median="$300-800/month", custom_build="x", saas_range="$200-800/month"),
    )


class TestAssess:

    def test_empty_package_scores_zero(self):
        """An empty package scores 0 and lists every gap."""
        assessment = QualityPolicy().assess(_package(freshness=0.0))
        assert assessment.score == 0.0
        for issue in (ISSUE_NO_TOOLS, ISSUE_NO_PATTERNS, ISSUE_STALE, ISSUE_NO_BENCHMARKS, ISSUE_NO_COSTS):
            assert issue in assessment.issues

    def test_complete_package_scores_one(self):
        """A complete package is capped at 1.0 with no issues."""
        package = _package(
            tools=[make_tool(f"T{i}") for i in range(5)],
            patterns=[make_pattern()],
            benchmarks=BenchmarkRecord(metrics={"leadConversion": "5-12%"}),
        )
        assessment = QualityPolicy().assess(package)
        assert assessment.score == 1.0
        assert assessment.issues == []

    def test_weights(self):
        """Each component adds its weight."""
        policy = QualityPolicy()
        one_unpriced_tool = _package(tools=[make_tool(pricing_details=None)], freshness=0.0)
        assert policy.assess(one_unpriced_tool).score == pytest.approx(0.3)

        with_pattern = _package(tools=[make_tool(pricing_details=None)], patterns=[make_pattern()], freshness=0.0)
        assert policy.assess(with_pattern).score == pytest.approx(0.5)

        aging = _package(freshness=0.3)
        assert policy.assess(aging).score == pytest.approx(0.1)

    def test_benchmarks_need_lead_conversion(self):
        """Benchmarks only count with a leadConversion metric."""
        package = _package(benchmarks=BenchmarkRecord(metrics={"salesCycle": "3-6 months"}), freshness=0.0)
        assessment = QualityPolicy().assess(package)
        assert assessment.score == 0.0
        assert ISSUE_NO_BENCHMARKS in assessment.issues

    def test_assess_does_not_modify_package(self):
        """Assessment only reads the package."""
        package = _package(tools=[make_tool()])
        before = package.model_dump()
        assess_intelligence_quality(package)
        assert package.model_dump() == before


class TestShouldUseFallback:

    def test_threshold(self):
        """Scores below the threshold trigger fallback."""
        policy = QualityPolicy(threshold=0.5)
        assert policy.should_use_fallback(QualityAssessment(score=0.49)) is True
        assert policy.should_use_fallback(QualityAssessment(score=0.5)) is False

    def test_default_policy(self):
        """Module-level helpers use the configured threshold."""
        assert should_use_fallback(QualityAssessment(score=0.0)) is True
        assert should_use_fallback(QualityAssessment(score=0.9)) is False
