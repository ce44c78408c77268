"""Tests for cost derivation from gathered tools."""

import pytest

from contracts import Complexity
from orchestrator.cost_estimator import (
    DEFAULT_MEDIAN,
    DEFAULT_SAAS_RANGE,
    estimate_costs,
    extract_monthly_cost,
    median_tool_cost,
    saas_range,
)

from conftest import make_tool


@pytest.mark.parametrize("pricing,expected", [
    ("$49/month", 49),
    ("Free (100 tasks), $19.99/month starter", 19),
    ("$0.15 per million input tokens", 0),
    ({"free": 0, "pro": 50}, 50),
    ({"starter": 20}, 0),
    ("contact sales", 0),
    (None, 0),
])
def test_extract_monthly_cost(pricing, expected):
    """First dollar amount in text, or the pro tier of a price dict."""
    assert extract_monthly_cost(pricing) == expected


def test_median_uses_upper_middle_and_rounds_half_up():
    """Median is the upper-middle price with a 1.5x upper bound."""
    tools = [
        make_tool("A", pricing_details="$49/month"),
        make_tool("B", pricing_details={"pro": 50}),
        make_tool("C", pricing_details="$19.99/month starter"),
        make_tool("D", pricing_details=None),
    ]
    # priced: 19, 49, 50 → median 49, 49 * 1.5 = 73.5
    assert median_tool_cost(tools) == "$49-74/month"
    assert saas_range(tools) == "$19-50/month"


def test_even_count_takes_upper_middle():
    """With an even count the upper of the two middle prices is used."""
    tools = [make_tool(str(p), pricing_details=f"${p}/month") for p in (10, 20, 30, 40)]
    assert median_tool_cost(tools) == "$30-45/month"


def test_defaults_without_prices():
    """Unpriced tools give the default median and SaaS range."""
    tools = [make_tool(pricing_details=None)]
    assert median_tool_cost(tools) == DEFAULT_MEDIAN
    assert saas_range([]) == DEFAULT_SAAS_RANGE


@pytest.mark.parametrize("complexity,expected", [
    (Complexity.SIMPLE, "$5,000-15,000 setup + $200-500/month"),
    (Complexity.MODERATE, "$15,000-50,000 setup + $500-1500/month"),
    (Complexity.COMPLEX, "$50,000-150,000 setup + $2000-5000/month"),
])
def test_custom_build_by_complexity(complexity, expected):
    """Custom build cost follows the complexity tier."""
    assert estimate_costs([], complexity).custom_build == expected
