"""Tests for contract adapters."""

from datetime import datetime

from contracts import CostRecord, IntelligencePackage, PackageMetadata, BenchmarkRecord
from contracts.adapters import assessment_from_answers, package_to_template_context

from conftest import make_pattern, make_tool


def test_assessment_from_answers_primary_keys():
    """Questionnaire keys map straight onto the assessment fields."""
    context = assessment_from_answers({
        "icpType": "Marketing Agency",
        "revenueChallenge": "manual lead qualification",
        "solutionStack": "HubSpot, Slack",
        "investmentLevel": "Quick Win",
    })
    assert context.business_type == "Marketing Agency"
    assert context.revenue_challenge == "manual lead qualification"
    assert context.solution_stack == "HubSpot, Slack"
    assert context.investment_level == "Quick Win"


def test_assessment_from_answers_secondary_keys():
    """businessType, the first challenge and a joined techStack are used as fallbacks."""
    context = assessment_from_answers({
        "businessType": "SaaS",
        "challenges": ["proposal generation", "churn"],
        "techStack": ["Salesforce", "", "Gong"],
    })
    assert context.business_type == "SaaS"
    assert context.revenue_challenge == "proposal generation"
    assert context.solution_stack == "Salesforce, Gong"
    assert context.investment_level is None


def test_assessment_from_empty_answers():
    """Blank answers stay None so the normalizer can apply its defaults."""
    context = assessment_from_answers({"icpType": "   ", "challenges": []})
    assert context.business_type is None
    assert context.revenue_challenge is None
    assert context.solution_stack is None


def test_package_to_template_context():
    """A package flattens into the report template variables."""
    package = IntelligencePackage(
        metadata=PackageMetadata(industry_data_points="550+", successful_implementations="40+"),
        tools=[
            make_tool("Clay", orchestration_compatible=False),
            make_tool("n8n", category="automation", orchestration_compatible=True),
        ],
        patterns=[make_pattern(times_implemented=40), make_pattern("Other", times_implemented=None)],
        benchmarks=BenchmarkRecord(metrics={"leadConversion": "5-12%"}),
        costs=CostRecord(median="$49-74/month", custom_build="$5,000-15,000", saas_range="$49-49/month"),
    )
    variables = package_to_template_context(package, now=datetime(2026, 10, 1))

    assert variables["currentMonth"] == "October 2026"
    assert variables["intelligenceData"] == {"toolsAnalyzed": 2, "implementationsTracked": 40}
    intelligence = variables["intelligence"]
    assert intelligence["benchmarks"] == {"leadConversion": "5-12%"}
    assert intelligence["orchestrationTools"] == ["n8n"]
    assert intelligence["costs"]["median"] == "$49-74/month"
    assert intelligence["dataPoints"]["industrySpecific"] == "550+"
    assert intelligence["implementations"]["successful"] == "40+"
    assert variables["assessmentData"] == {}


def test_template_context_defaults_without_scale_metadata():
    """Missing benchmarks and scale metadata fall back to template defaults."""
    package = IntelligencePackage(
        metadata=PackageMetadata(),
        costs=CostRecord(median="a", custom_build="b", saas_range="c"),
    )
    intelligence = package_to_template_context(package)["intelligence"]
    assert intelligence["benchmarks"] == {}
    assert intelligence["dataPoints"]["industrySpecific"] == "10,000+"
    assert intelligence["implementations"]["successful"] == "200+"
