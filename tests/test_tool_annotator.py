"""Tests for the tools-stream policy."""

from contracts import AssessmentContext
from context import normalize_context
from orchestrator.tool_annotator import (
    DEFAULT_REASON,
    ToolAnnotator,
    effort_estimate,
    recommendation_reason,
    stack_compatibility,
)

from conftest import make_tool


def _context(stack="HubSpot, Slack", business_type="Marketing Agency", investment="Quick Win"):
    return normalize_context(AssessmentContext(
        business_type=business_type,
        revenue_challenge="manual lead qualification",
        solution_stack=stack,
        investment_level=investment,
    ))


class TestStackCompatibility:

    def test_one_match_in_three_item_stack(self):
        """One match in three items scores 1 / 1.5."""
        tool = make_tool(integrations=["Slack", "Jira"])
        assert stack_compatibility(tool, ["Slack", "Notion", "Asana"]) == 0.667

    def test_substring_match_both_directions(self):
        """Stack and integration names match as substrings either way."""
        tool = make_tool(integrations=["Slack Connect", "hub"])
        assert stack_compatibility(tool, ["slack", "HubSpot"]) == 1.0

    def test_capped_at_one(self):
        """Compatibility never exceeds 1.0."""
        tool = make_tool(integrations=["Slack", "HubSpot", "Notion"])
        assert stack_compatibility(tool, ["Slack", "HubSpot"]) == 1.0

    def test_defaults_when_either_side_empty(self):
        """No stack or no integrations scores 0.5."""
        assert stack_compatibility(make_tool(integrations=[]), ["Slack"]) == 0.5
        assert stack_compatibility(make_tool(), []) == 0.5


class TestRecommendationReason:

    def test_all_fragments_joined(self):
        """Every applicable reason fragment is joined in order."""
        tool = make_tool(icp_scores={"agency": 0.85}, integrations=["Slack"], similarity=0.9)
        assert recommendation_reason(tool, _context()) == (
            "Highly rated for AGENCY companies; "
            "Integrates with your existing stack; "
            "High relevance to your specific challenge"
        )

    def test_generic_reason_when_nothing_applies(self):
        """Without any signal the generic reason is used."""
        tool = make_tool(icp_scores={"agency": 0.6}, integrations=["Jira"], similarity=0.2)
        assert recommendation_reason(tool, _context()) == DEFAULT_REASON

    def test_no_stack_means_no_stack_fragment(self):
        """The stack fragment needs a parsed stack."""
        tool = make_tool(icp_scores={"agency": 0.6}, integrations=["Slack"], similarity=0.2)
        assert recommendation_reason(tool, _context(stack=None)) == DEFAULT_REASON


class TestEffortAndOrchestration:

    def test_tool_supplied_effort_wins(self):
        """Tool-supplied effort overrides the complexity table."""
        context = _context()
        assert effort_estimate(make_tool(implementation_effort="3 days"), context.complexity) == "3 days"

    def test_effort_table_by_complexity(self):
        """Effort defaults follow the complexity tier."""
        moderate = _context(stack="A, B, C", investment="Transformation")
        complex_ = _context(stack="A, B, C", investment="Enterprise")
        assert effort_estimate(make_tool(), moderate.complexity) == "2-4 weeks"
        assert effort_estimate(make_tool(), complex_.complexity) == "4-8 weeks"
        assert effort_estimate(make_tool(), _context().complexity) == "1-2 weeks"

    def test_orchestration_by_category_or_api_integration(self):
        """Annotated tools carry orchestration compatibility."""
        assert make_tool(category="ai-model", integrations=[]).is_orchestration_compatible()
        assert make_tool(category="crm", integrations=["REST hooks"]).is_orchestration_compatible()
        assert make_tool(category="crm", integrations=["Public API"]).is_orchestration_compatible()
        assert not make_tool(category="crm", integrations=["Slack"]).is_orchestration_compatible()


class TestToolAnnotator:

    def test_filters_by_icp_and_caps(self):
        """Tools below the ICP floor are dropped and the list is capped."""
        tools = [make_tool(f"Tool {i}", icp_scores={"agency": 0.9}) for i in range(4)]
        tools.insert(1, make_tool("Poor Fit", icp_scores={"agency": 0.2}))
        annotated = ToolAnnotator(min_icp_score=0.5, max_tools=3).process(tools, _context())
        assert [t.name for t in annotated] == ["Tool 0", "Tool 1", "Tool 2"]

    def test_every_kept_tool_is_annotated(self):
        """Every kept tool gets reason, fit and effort."""
        annotated = ToolAnnotator().process([make_tool()], _context())
        tool = annotated[0]
        assert tool.recommendation_reason
        assert 0.0 <= tool.stack_compatibility <= 1.0
        assert tool.effort_estimate == "1-2 weeks"
        assert tool.orchestration_compatible is False

    def test_unrated_icp_is_filtered(self):
        """Tools with no score for the ICP are dropped."""
        tool = make_tool(icp_scores={"saas": 0.9})
        assert ToolAnnotator().process([tool], _context()) == []
