"""Tests for rule-based insight synthesis."""

from contracts import AssessmentContext
from context import normalize_context
from orchestrator.insight_synthesizer import InsightSynthesizer, synthesize_insights


def _insights(**fields):
    return synthesize_insights(normalize_context(AssessmentContext(**fields)))


def test_end_to_end_scenario(scenario_assessment):
    """Marketing agency scenario produces the expected insights."""
    insights = synthesize_insights(normalize_context(scenario_assessment))
    assert insights.primary_recommendation == (
        "Start with AI-powered manual lead qualification using proven SaaS tools"
    )
    assert "Automate lead qualification" in insights.quick_wins
    assert "Process automation" in insights.quick_wins
    assert insights.risk_factors == ["Change management resistance"]
    assert insights.long_term_strategy == "Create client-facing AI capabilities with white-label options"


def test_primary_recommendation_by_complexity():
    """Primary recommendation wording follows the complexity tier."""
    moderate = _insights(solution_stack="A, B, C", investment_level="Transformation")
    complex_ = _insights(solution_stack="A, B, C", investment_level="Enterprise")
    assert moderate.primary_recommendation == "Hybrid approach: SaaS tools + custom integration layer"
    assert complex_.primary_recommendation == "Build custom revenue intelligence platform with AI orchestration"


def test_default_challenge_in_simple_recommendation():
    """A missing challenge uses the default challenge text."""
    assert _insights().primary_recommendation == (
        "Start with AI-powered workflow automation using proven SaaS tools"
    )


def test_risks():
    """Risk factors depend on stack presence and complexity."""
    complex_ = _insights(solution_stack="A, B, C", investment_level="Enterprise")
    assert complex_.risk_factors == ["Change management resistance", "Technical implementation complexity"]
    no_stack = _insights()
    assert no_stack.risk_factors == ["Change management resistance", "Limited existing technical infrastructure"]


def test_quick_wins_match_case_insensitively():
    """Quick wins are keyed off the challenge regardless of case."""
    insights = _insights(revenue_challenge="Manual Proposal generation")
    assert insights.quick_wins == [
        "Automate lead qualification",
        "AI-powered proposal generation",
        "Process automation",
    ]


def test_long_term_strategy_by_icp():
    """Long term strategy is chosen per ICP."""
    assert _insights(business_type="ITSM").long_term_strategy == "Build comprehensive service intelligence platform"
    assert _insights(business_type="SaaS").long_term_strategy == (
        "Develop product-led growth intelligence with user behavior AI"
    )


def test_deterministic():
    """Same context, same insights."""
    context = normalize_context(AssessmentContext(business_type="SaaS", revenue_challenge="data processing"))
    assert InsightSynthesizer().synthesize(context) == InsightSynthesizer().synthesize(context)
