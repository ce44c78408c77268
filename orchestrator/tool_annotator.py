"""Tool annotation for the tools stream.

Filters retrieved tools by ICP fit and derives the report-facing fields:
recommendation reason, stack compatibility, effort estimate and
orchestration compatibility.
"""

from typing import Dict, List, Optional

from config import settings
from contracts import Complexity, NormalizedContext, ToolRecord


DEFAULT_REASON = "Good fit for your requirements"
REASON_SEPARATOR = "; "

HIGH_ICP_SCORE = 0.8
HIGH_SIMILARITY = 0.8
DEFAULT_STACK_COMPATIBILITY = 0.5

EFFORT_BY_COMPLEXITY: Dict[Complexity, str] = {
    Complexity.SIMPLE: "1-2 weeks",
    Complexity.MODERATE: "2-4 weeks",
    Complexity.COMPLEX: "4-8 weeks",
}


def _matches_stack(integration: str, stack_items: List[str]) -> bool:
    """Case-insensitive substring match in either direction."""
    integration = integration.lower()
    for item in stack_items:
        item = item.lower()
        if integration in item or item in integration:
            return True
    return False


def stack_compatibility(tool: ToolRecord, stack_items: List[str]) -> float:
    """Share of the tool's integrations found in the client's stack.

    Normalized by half the stack size, capped at 1.0 and rounded to three
    places. 0.5 when either side is empty.
    """
    if not stack_items or not tool.integrations:
        return DEFAULT_STACK_COMPATIBILITY
    matches = sum(1 for i in tool.integrations if _matches_stack(i, stack_items))
    return round(min(1.0, matches / max(1.0, len(stack_items) * 0.5)), 3)


def recommendation_reason(tool: ToolRecord, context: NormalizedContext) -> str:
    """Join the applicable reason fragments, or return the generic reason."""
    reasons = []
    if tool.icp_score(context.icp.value) >= HIGH_ICP_SCORE:
        reasons.append(f"Highly rated for {context.icp.value.upper()} companies")
    if context.stack_items and any(_matches_stack(i, context.stack_items) for i in tool.integrations):
        reasons.append("Integrates with your existing stack")
    if tool.similarity >= HIGH_SIMILARITY:
        reasons.append("High relevance to your specific challenge")
    return REASON_SEPARATOR.join(reasons) if reasons else DEFAULT_REASON


def effort_estimate(tool: ToolRecord, complexity: Complexity) -> str:
    return tool.implementation_effort or EFFORT_BY_COMPLEXITY[complexity]


class ToolAnnotator:
    """Applies the tools-stream policy to raw retrieval results."""

    def __init__(self, min_icp_score: Optional[float] = None, max_tools: Optional[int] = None):
        self.min_icp_score = settings.min_icp_score if min_icp_score is None else min_icp_score
        self.max_tools = max_tools or settings.max_tools

    def annotate(self, tool: ToolRecord, context: NormalizedContext) -> ToolRecord:
        """Return a copy of the tool with every derived field set."""
        return tool.model_copy(update={
            "recommendation_reason": recommendation_reason(tool, context),
            "stack_compatibility": stack_compatibility(tool, context.stack_items),
            "effort_estimate": effort_estimate(tool, context.complexity),
            "orchestration_compatible": tool.is_orchestration_compatible(),
        })

    def process(self, tools: List[ToolRecord], context: NormalizedContext) -> List[ToolRecord]:
        """Filter by ICP fit, annotate, and cap the list.

        Args:
            tools: Raw tools in retrieval order
            context: Normalized assessment context

        Returns:
            At most max_tools annotated tools, retrieval order preserved
        """
        icp = context.icp.value
        kept = [t for t in tools if t.icp_score(icp) >= self.min_icp_score]
        return [self.annotate(t, context) for t in kept[: self.max_tools]]
