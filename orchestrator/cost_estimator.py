"""Cost estimation for the costs stream.

Derives a median SaaS cost, a custom-build estimate and the observed SaaS
price range from the tools gathered for the same context.
"""

import re
from typing import Dict, List

from contracts import Complexity, CostRecord, PricingDetails, ToolRecord


DEFAULT_MEDIAN = "$300-800/month"
DEFAULT_SAAS_RANGE = "$200-800/month"

CUSTOM_BUILD_BY_COMPLEXITY: Dict[Complexity, str] = {
    Complexity.SIMPLE: "$5,000-15,000 setup + $200-500/month",
    Complexity.MODERATE: "$15,000-50,000 setup + $500-1500/month",
    Complexity.COMPLEX: "$50,000-150,000 setup + $2000-5000/month",
}

# Substituted when the costs stream itself fails
FAILED_STREAM_COSTS = CostRecord(
    median="$500-2000/month",
    custom_build="$5,000-25,000 setup + $200-1000/month",
    saas_range="$200-800/month",
)

_DOLLAR_AMOUNT = re.compile(r"\$(\d+)")


def extract_monthly_cost(pricing: PricingDetails) -> int:
    """Pull one monthly price out of a tool's pricing details.

    Free text yields the first whole-dollar amount; a tier mapping yields its
    "pro" tier. Anything else yields 0, which callers treat as unpriced.
    """
    if isinstance(pricing, str):
        match = _DOLLAR_AMOUNT.search(pricing)
        return int(match.group(1)) if match else 0
    if isinstance(pricing, dict):
        pro = pricing.get("pro")
        if isinstance(pro, (int, float)) and not isinstance(pro, bool):
            return int(pro)
    return 0


def priced_costs(tools: List[ToolRecord]) -> List[int]:
    """Positive monthly prices of the given tools, ascending."""
    return sorted(c for c in (extract_monthly_cost(t.pricing_details) for t in tools) if c > 0)


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def median_tool_cost(tools: List[ToolRecord]) -> str:
    """Upper-median price m rendered as '$m-$1.5m/month'."""
    costs = priced_costs(tools)
    if not costs:
        return DEFAULT_MEDIAN
    median = costs[len(costs) // 2]
    return f"${median}-{_round_half_up(median * 1.5)}/month"


def saas_range(tools: List[ToolRecord]) -> str:
    costs = priced_costs(tools)
    if not costs:
        return DEFAULT_SAAS_RANGE
    return f"${costs[0]}-{costs[-1]}/month"


def custom_build_cost(complexity: Complexity) -> str:
    return CUSTOM_BUILD_BY_COMPLEXITY[complexity]


def estimate_costs(tools: List[ToolRecord], complexity: Complexity) -> CostRecord:
    """Build the cost record for a context.

    Args:
        tools: Tools gathered by the tools stream
        complexity: Complexity tier of the context

    Returns:
        CostRecord with median, custom_build and saas_range
    """
    return CostRecord(
        median=median_tool_cost(tools),
        custom_build=custom_build_cost(complexity),
        saas_range=saas_range(tools),
    )
