"""Shared fixtures: an in-memory retrieval backend and sample records."""

import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest

from contracts import (
    AssessmentContext,
    PatternRecord,
    RetrievalError,
    RetrievalFilter,
    RetrievalResult,
    ToolRecord,
)
from librarian.retriever import IntelligenceRetriever


class FakeRetriever(IntelligenceRetriever):
    """Retriever double serving fixed records.

    ``fail`` holds stream names (tools, patterns, benchmarks, trends,
    freshness) whose calls raise RetrievalError; it can be changed between
    calls.
    """

    def __init__(
        self,
        tools: Optional[List[ToolRecord]] = None,
        patterns: Optional[List[PatternRecord]] = None,
        benchmarks: Optional[Dict[str, Any]] = None,
        market: Optional[Dict[str, Any]] = None,
        freshness: float = 1.0,
        fail: Optional[set] = None,
    ):
        self.tools = tools or []
        self.patterns = patterns or []
        self.benchmarks = benchmarks
        self.market = market
        self.freshness = freshness
        self.fail = set(fail or ())
        self.calls: List[str] = []
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "fake"

    def _call(self, stream: str) -> None:
        with self._lock:
            self.calls.append(stream)
        if stream in self.fail:
            raise RetrievalError(f"{stream} backend down", operation=stream)

    def retrieve(self, query: str, filter_context: RetrievalFilter) -> RetrievalResult:
        stream = "patterns" if "implementation patterns" in query else "tools"
        self._call(stream)
        return RetrievalResult(tools=self.tools, patterns=self.patterns)

    def get_benchmarks(self, icp: str) -> Optional[Dict[str, Any]]:
        self._call("benchmarks")
        return self.benchmarks

    def get_market_context(self, icp: str) -> Optional[Dict[str, Any]]:
        self._call("trends")
        return self.market

    def get_data_freshness(self) -> float:
        self._call("freshness")
        return self.freshness


def make_tool(name: str = "Clay", **overrides: Any) -> ToolRecord:
    fields = {
        "name": name,
        "category": "crm",
        "description": f"{name} for lead qualification",
        "pricing_details": "$49/month",
        "integrations": ["HubSpot", "Slack"],
        "use_cases": ["lead-qualification"],
        "best_for": "Lead enrichment",
        "icp_scores": {"agency": 0.9, "saas": 0.7, "itsm": 0.4},
        "similarity": 0.6,
    }
    fields.update(overrides)
    return ToolRecord(**fields)


def make_pattern(name: str = "Webhook Scoring", **overrides: Any) -> PatternRecord:
    fields = {
        "name": name,
        "description": "Webhook triggers AI scoring",
        "complexity": "simple",
        "typical_timeline": "2-4 weeks",
        "typical_cost_range": "$50-200/month",
        "times_implemented": 40,
        "icp_scores": {"agency": 0.9},
    }
    fields.update(overrides)
    return PatternRecord(**fields)


AGENCY_BENCHMARKS = {"leadConversion": "5-12%", "salesCycle": "3-6 months"}

MARKET = {
    "rising": ["AI-native CRMs"],
    "declining": ["Manual lead routing"],
    "new": ["Revenue intelligence agents"],
}


@pytest.fixture
def scenario_assessment() -> AssessmentContext:
    """The marketing-agency assessment used across end-to-end tests."""
    return AssessmentContext(
        business_type="Marketing Agency",
        revenue_challenge="manual lead qualification",
        solution_stack="HubSpot, Slack",
        investment_level="Quick Win",
    )


@pytest.fixture
def healthy_retriever() -> FakeRetriever:
    """Backend returning enough live data to pass the quality policy."""
    tools = [
        make_tool("Clay"),
        make_tool("Apollo", pricing_details={"pro": 99}),
        make_tool("n8n", category="automation", pricing_details={"free": 0, "pro": 50}),
        make_tool("Zapier", category="automation", pricing_details="$19.99/month starter"),
        make_tool("Fireflies.ai", pricing_details=None),
    ]
    return FakeRetriever(
        tools=tools,
        patterns=[make_pattern()],
        benchmarks=dict(AGENCY_BENCHMARKS),
        market=dict(MARKET),
        freshness=1.0,
    )


@pytest.fixture
def thin_retriever() -> FakeRetriever:
    """Backend returning a single unpriced tool and nothing else."""
    return FakeRetriever(
        tools=[make_tool("Clay", pricing_details=None)],
        freshness=0.0,
    )


@pytest.fixture
def local_database() -> Dict[str, Any]:
    """A small local intelligence database updated just now."""
    return {
        "updated_at": datetime.now(timezone.utc).isoformat(),
        "tools": [
            {
                "name": "Clay",
                "slug": "clay",
                "category": "crm",
                "description": "AI-native lead enrichment and qualification",
                "pricing_details": {"free": 0, "pro": 349},
                "integrations": ["HubSpot", "Slack"],
                "use_cases": ["lead-qualification"],
                "best_for": "Scoring inbound leads",
                "icp_scores": {"agency": 0.9, "saas": 0.95, "itsm": 0.6},
                "health_score": 0.9,
                "momentum": "rising",
            },
            {
                "name": "ServiceNow Now Assist",
                "category": "itsm-platform",
                "description": "Ticket summarization and lead routing for service desks",
                "pricing_details": "$2500/month add-on",
                "integrations": ["ServiceNow", "REST API"],
                "use_cases": ["workflow-automation"],
                "best_for": "Enterprise service desks",
                "icp_scores": {"itsm": 0.95, "agency": 0.3, "saas": 0.4},
                "health_score": 0.85,
            },
            {
                "name": "PandaDoc",
                "category": "document-automation",
                "description": "Proposal generation and e-signature",
                "pricing_details": "$49/month business",
                "integrations": ["HubSpot"],
                "use_cases": ["proposal-generation"],
                "best_for": "Agencies producing many proposals",
                "icp_scores": {"agency": 0.9},
                "health_score": 0.8,
            },
        ],
        "patterns": [
            {
                "name": "Webhook → AI → Database",
                "category": "lead-qualification",
                "description": "Webhook triggers AI lead scoring",
                "complexity": "simple",
                "typical_timeline": "1-2 weeks",
                "icp_scores": {"agency": 0.9, "itsm": 0.7},
            },
            {
                "name": "Event Streaming → ML Pipeline",
                "category": "data-processing",
                "description": "Real-time revenue event processing",
                "complexity": "complex",
                "typical_timeline": "8-12 weeks",
                "icp_scores": {"agency": 0.4, "saas": 0.9},
            },
        ],
        "benchmarks": {"agency": dict(AGENCY_BENCHMARKS)},
        "trends": {
            "rising": ["AI-native CRMs"],
            "declining": ["Legacy on-prem CRMs"],
            "new": ["Multi-model routing"],
            "category_trends": {"crm": "stable"},
            "icp_recommendations": {"agency": "Automate qualification first"},
        },
    }
