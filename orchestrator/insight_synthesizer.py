"""Rule-based insight synthesis.

Turns a normalized context into report narrative: a primary recommendation,
risk factors, quick wins and a long-term strategy. Deterministic and pure.
"""

from typing import Dict, List

from contracts import ICP, Complexity, InsightsRecord, NormalizedContext


DEFAULT_LONG_TERM_STRATEGY = "Build scalable AI-first revenue operations"

LONG_TERM_STRATEGIES: Dict[ICP, str] = {
    ICP.ITSM: "Build comprehensive service intelligence platform",
    ICP.AGENCY: "Create client-facing AI capabilities with white-label options",
    ICP.SAAS: "Develop product-led growth intelligence with user behavior AI",
}


class InsightSynthesizer:
    """Derives InsightsRecord fields from complexity, ICP, stack and challenge text."""

    def primary_recommendation(self, context: NormalizedContext) -> str:
        if context.complexity == Complexity.SIMPLE:
            return f"Start with AI-powered {context.challenge} using proven SaaS tools"
        if context.complexity == Complexity.COMPLEX:
            return "Build custom revenue intelligence platform with AI orchestration"
        return "Hybrid approach: SaaS tools + custom integration layer"

    def risk_factors(self, context: NormalizedContext) -> List[str]:
        risks = ["Change management resistance"]
        if context.complexity == Complexity.COMPLEX:
            risks.append("Technical implementation complexity")
        if not context.has_stack:
            risks.append("Limited existing technical infrastructure")
        return risks

    def quick_wins(self, context: NormalizedContext) -> List[str]:
        challenge = context.challenge.lower()
        wins = ["Automate lead qualification"]
        if "proposal" in challenge:
            wins.append("AI-powered proposal generation")
        if "manual" in challenge:
            wins.append("Process automation")
        return wins

    def long_term_strategy(self, context: NormalizedContext) -> str:
        return LONG_TERM_STRATEGIES.get(context.icp, DEFAULT_LONG_TERM_STRATEGY)

    def synthesize(self, context: NormalizedContext) -> InsightsRecord:
        return InsightsRecord(
            primary_recommendation=self.primary_recommendation(context),
            risk_factors=self.risk_factors(context),
            quick_wins=self.quick_wins(context),
            long_term_strategy=self.long_term_strategy(context),
        )


_default_synthesizer = InsightSynthesizer()


def synthesize_insights(context: NormalizedContext) -> InsightsRecord:
    """Synthesize insights with the default rules."""
    return _default_synthesizer.synthesize(context)
