"""Context normalizer for mapping free-text assessment answers to canonical codes.

Uses ordered keyword tables: the first keyword found (case-insensitive
substring) in a label decides the code, and every lookup has a default so
normalization never fails.
"""

from typing import Dict, List, Optional, Tuple

from contracts import (
    AssessmentContext,
    BudgetTier,
    Complexity,
    ICP,
    NormalizedContext,
    UseCase,
)


DEFAULT_CHALLENGE = "workflow automation"


def assess_complexity(stack_size: int, budget_tier: BudgetTier) -> Complexity:
    """Derive the complexity tier from stack size and budget tier.

    The simple rule is checked first, so a Quick Win budget stays simple even
    with a large stack.
    """
    if budget_tier == BudgetTier.QUICK_WIN or stack_size <= 2:
        return Complexity.SIMPLE
    if budget_tier == BudgetTier.ENTERPRISE or stack_size >= 5:
        return Complexity.COMPLEX
    return Complexity.MODERATE


class ContextNormalizer:
    """Maps an AssessmentContext into a NormalizedContext.

    Order matters in both keyword tables: more specific phrases come before
    the shorter keywords they contain.
    """

    ICP_KEYWORDS: List[Tuple[str, ICP]] = [
        ("ITSM", ICP.ITSM),
        ("IT Service Management", ICP.ITSM),
        ("Technology Services", ICP.ITSM),
        ("Professional Services", ICP.AGENCY),
        ("Marketing Agency", ICP.AGENCY),
        ("Consulting", ICP.AGENCY),
        ("Agency", ICP.AGENCY),
        ("SaaS", ICP.SAAS),
        ("Software", ICP.SAAS),
        ("Technology", ICP.SAAS),
        ("B2B Software", ICP.SAAS),
    ]

    CHALLENGE_KEYWORDS: List[Tuple[str, UseCase]] = [
        ("manual lead qualification", UseCase.LEAD_QUALIFICATION),
        ("lead qualification", UseCase.LEAD_QUALIFICATION),
        ("proposal generation", UseCase.PROPOSAL_GENERATION),
        ("content creation", UseCase.CONTENT_CREATION),
        ("meeting intelligence", UseCase.MEETING_INTELLIGENCE),
        ("workflow automation", UseCase.WORKFLOW_AUTOMATION),
        ("data processing", UseCase.DATA_PROCESSING),
    ]

    BUDGET_TIERS: Dict[str, BudgetTier] = {tier.value: tier for tier in BudgetTier}

    def normalize(self, context: AssessmentContext) -> NormalizedContext:
        """Normalize the context.

        Args:
            context: Raw assessment context; any field may be None

        Returns:
            NormalizedContext with defaults applied for unmapped or absent fields
        """
        stack_items = self.parse_stack(context.solution_stack)
        budget_tier = self.parse_budget(context.investment_level)
        challenge = (context.revenue_challenge or "").strip() or DEFAULT_CHALLENGE

        return NormalizedContext(
            icp=self.normalize_icp(context.business_type),
            use_case=self.map_challenge_to_use_case(context.revenue_challenge),
            stack_items=stack_items,
            budget_tier=budget_tier,
            complexity=assess_complexity(len(stack_items), budget_tier),
            challenge=challenge,
        )

    def normalize_icp(self, business_type: Optional[str]) -> ICP:
        """Map a business-type label to an ICP code (default agency)."""
        if not business_type:
            return ICP.AGENCY
        label = business_type.lower()
        for keyword, icp in self.ICP_KEYWORDS:
            if keyword.lower() in label:
                return icp
        return ICP.AGENCY

    def map_challenge_to_use_case(self, challenge: Optional[str]) -> UseCase:
        """Map a revenue challenge to a use-case code (default workflow-automation)."""
        if not challenge:
            return UseCase.WORKFLOW_AUTOMATION
        label = challenge.lower()
        for keyword, use_case in self.CHALLENGE_KEYWORDS:
            if keyword in label:
                return use_case
        return UseCase.WORKFLOW_AUTOMATION

    @staticmethod
    def parse_stack(solution_stack: Optional[str]) -> List[str]:
        """Split a comma-separated stack description, dropping empty entries."""
        if not solution_stack:
            return []
        return [item.strip() for item in solution_stack.split(",") if item.strip()]

    def parse_budget(self, investment_level: Optional[str]) -> BudgetTier:
        """Exact lookup of the investment label (default Quick Win)."""
        if not investment_level:
            return BudgetTier.QUICK_WIN
        return self.BUDGET_TIERS.get(investment_level, BudgetTier.QUICK_WIN)


_default_normalizer = ContextNormalizer()


def normalize_context(context: AssessmentContext) -> NormalizedContext:
    """Convenience function for normalizing an assessment context.

    Args:
        context: Raw assessment context

    Returns:
        NormalizedContext
    """
    return _default_normalizer.normalize(context)
