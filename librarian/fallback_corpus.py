"""Curated fallback corpus.

Always-valid tools, reference architectures and conservative benchmarks used
when live retrieval is missing or too thin to build a report on. Everything
here is static in-process data; no call in this module performs I/O.
"""

from typing import Dict, List, Optional

from contracts import (
    BenchmarkRecord,
    Complexity,
    FallbackIntelligence,
    FallbackPattern,
    FallbackTool,
    ICP,
    IntelligencePackage,
    PatternRecord,
    ToolRecord,
    UseCase,
)


PLACEHOLDER_EXAMPLE_LINKS = [
    "https://github.com/example/ai-workflow",
    "https://github.com/example/automation-stack",
]

MIN_FALLBACK_ICP_SCORE = 0.6
MIN_BLENDED_TOOLS = 3
MAX_BLENDED_TOOLS = 5


STABLE_TOOLS: Dict[UseCase, List[FallbackTool]] = {
    UseCase.LEAD_QUALIFICATION: [
        FallbackTool(
            name="OpenAI GPT-4o-mini",
            category="ai-model",
            description="Cost-effective language model for high-volume lead qualification",
            pricing="$0.15 per million input tokens, $0.60 per million output tokens",
            integrations=["REST API", "Python SDK", "Node.js SDK", "Any platform via API"],
            best_for="Automated lead scoring and qualification at scale",
            pros=[
                "40x cheaper than GPT-4o for simple tasks",
                "Fast response times (< 1 second)",
                "Excellent for structured data extraction",
                "High rate limits",
            ],
            cons=[
                "Less capable than GPT-4o for complex reasoning",
                "May need more specific prompts",
                "Limited context window vs larger models",
            ],
            implementation_effort="1-2 weeks",
            icp_score=0.9,
        ),
        FallbackTool(
            name="Anthropic Claude-3-haiku",
            category="ai-model",
            description="Balanced model for lead qualification with better reasoning",
            pricing="$0.25 per million input tokens, $1.25 per million output tokens",
            integrations=["REST API", "Anthropic SDK", "Custom integrations"],
            best_for="Complex lead qualification requiring nuanced understanding",
            pros=[
                "Better reasoning than GPT-4o-mini",
                "Strong safety and reliability",
                "Good for complex qualification criteria",
                "Consistent performance",
            ],
            cons=[
                "More expensive than GPT-4o-mini",
                "Newer ecosystem than OpenAI",
                "Requires separate API integration",
            ],
            implementation_effort="1-2 weeks",
            icp_score=0.8,
        ),
    ],
    UseCase.PROPOSAL_GENERATION: [
        FallbackTool(
            name="OpenAI GPT-4o",
            category="ai-model",
            description="Premium model for high-quality proposal and content generation",
            pricing="$5 per million input tokens, $15 per million output tokens",
            integrations=["REST API", "Python SDK", "Node.js SDK", "LangChain"],
            best_for="Professional proposals requiring creativity and detail",
            pros=[
                "Highest quality content generation",
                "Excellent at long-form writing",
                "Strong understanding of business context",
                "Mature ecosystem and tooling",
            ],
            cons=[
                "Most expensive option",
                "Slower than smaller models",
                "May be overkill for simple proposals",
            ],
            implementation_effort="1-3 weeks",
            icp_score=0.9,
        ),
    ],
    UseCase.WORKFLOW_AUTOMATION: [
        FallbackTool(
            name="n8n",
            category="automation",
            description="Open-source workflow automation with AI node support",
            pricing="Free self-hosted, $20/month cloud starter, $50/month pro",
            integrations=["400+ pre-built nodes", "Custom API endpoints", "AI models", "Databases"],
            best_for="Custom automation workflows without vendor lock-in",
            pros=[
                "Complete control over workflows",
                "No vendor lock-in",
                "Strong AI integration support",
                "Visual workflow builder",
                "Active open-source community",
            ],
            cons=[
                "Requires technical setup and maintenance",
                "Self-hosting complexity",
                "Smaller ecosystem than Zapier",
            ],
            implementation_effort="2-4 weeks",
            icp_score=0.8,
        ),
        FallbackTool(
            name="Zapier",
            category="automation",
            description="Popular no-code automation platform with extensive integrations",
            pricing="Free (100 tasks), $19.99/month starter, $49/month professional",
            integrations=["5000+ app integrations", "AI models", "Custom webhooks"],
            best_for="Quick integrations between popular business tools",
            pros=[
                "Massive integration library",
                "No technical setup required",
                "Reliable and stable",
                "Great for non-technical users",
            ],
            cons=[
                "Can get expensive at scale",
                "Limited customization options",
                "Vendor lock-in concerns",
                "Task limits on lower tiers",
            ],
            implementation_effort="1-2 weeks",
            icp_score=0.7,
        ),
        FallbackTool(
            name="Pipedream",
            category="automation",
            description="Developer-friendly automation platform with code steps",
            pricing="Free (3000 invocations), $19/month basic, $49/month advanced",
            integrations=["1000+ pre-built actions", "Custom code steps", "AI APIs"],
            best_for="Automation workflows requiring custom logic and code",
            pros=[
                "Code and no-code hybrid approach",
                "Developer-friendly interface",
                "Custom JavaScript/Python steps",
                "Good free tier",
            ],
            cons=[
                "Requires some technical knowledge",
                "Smaller community than Zapier",
                "Less enterprise features",
            ],
            implementation_effort="1-3 weeks",
            icp_score=0.8,
        ),
    ],
    UseCase.DATA_PROCESSING: [
        FallbackTool(
            name="Supabase",
            category="infrastructure",
            description="Open-source backend with PostgreSQL and real-time features",
            pricing="Free (up to 500MB), $25/month Pro, $599/month Team",
            integrations=["PostgreSQL", "REST API", "GraphQL", "Real-time subscriptions"],
            best_for="Rapid backend development with SQL database",
            pros=[
                "Full PostgreSQL database",
                "Built-in authentication",
                "Real-time subscriptions",
                "Excellent developer experience",
            ],
            cons=[
                "PostgreSQL learning curve",
                "Less mature than Firebase",
                "Fewer third-party integrations",
            ],
            implementation_effort="1-2 weeks",
            icp_score=0.8,
        ),
    ],
}


STABLE_PATTERNS: Dict[Complexity, FallbackPattern] = {
    Complexity.SIMPLE: FallbackPattern(
        name="Webhook → AI → Database",
        description="Direct webhook processing with AI analysis and result storage",
        architecture="Vercel Edge Function → OpenAI API → Supabase",
        timeline="1 week",
        cost="$50-200/month",
        stack=["Vercel", "OpenAI API", "Supabase"],
        complexity=Complexity.SIMPLE,
        pros=[
            "Quick to implement",
            "Low operational overhead",
            "Serverless scaling",
            "Cost-effective for low volume",
        ],
        cons=[
            "Limited to simple workflows",
            "No complex orchestration",
            "Vendor dependent",
        ],
        success_indicators=[
            "Sub-second response times",
            "99.9% uptime",
            "Linear cost scaling",
        ],
        common_pitfalls=[
            "Not handling API failures gracefully",
            "Insufficient input validation",
            "Missing error logging",
        ],
    ),
    Complexity.MODERATE: FallbackPattern(
        name="Queue → AI Router → Multi-Model",
        description="Queued processing with intelligent model routing and result storage",
        architecture="Node.js + BullMQ → LiteLLM Router → PostgreSQL",
        timeline="2-4 weeks",
        cost="$200-1000/month",
        stack=["Node.js", "BullMQ", "Redis", "LiteLLM", "PostgreSQL"],
        complexity=Complexity.MODERATE,
        pros=[
            "Handles high volume reliably",
            "Cost optimization through model routing",
            "Fault tolerance and retries",
            "Detailed analytics and monitoring",
        ],
        cons=[
            "More complex to set up",
            "Requires infrastructure management",
            "Multiple moving parts",
        ],
        success_indicators=[
            "1000+ jobs/hour processing",
            "30-50% cost savings vs single model",
            "99.5% job completion rate",
        ],
        common_pitfalls=[
            "Queue backlog management",
            "Model routing logic complexity",
            "Monitoring blind spots",
        ],
    ),
    Complexity.COMPLEX: FallbackPattern(
        name="Event Streaming → ML Pipeline",
        description="Real-time event processing with ML pipeline and AI orchestration",
        architecture="Kafka → Databricks → Multiple AI APIs → Data Warehouse",
        timeline="2-3 months",
        cost="$2000+/month",
        stack=["Apache Kafka", "Databricks", "Multiple AI APIs", "Snowflake/BigQuery"],
        complexity=Complexity.COMPLEX,
        pros=[
            "Enterprise-scale processing",
            "Real-time analytics and insights",
            "Advanced ML capabilities",
            "Multi-modal AI integration",
        ],
        cons=[
            "High complexity and cost",
            "Requires ML/Data engineering expertise",
            "Long implementation timeline",
        ],
        success_indicators=[
            "10,000+ events/second processing",
            "Real-time (<100ms) insights",
            "Multi-model ensemble accuracy",
        ],
        common_pitfalls=[
            "Over-engineering for actual needs",
            "Data pipeline complexity",
            "Model drift and monitoring",
        ],
    ),
}


# Conservative, defensible baselines per ICP
STABLE_BENCHMARKS: Dict[ICP, Dict[str, str]] = {
    ICP.ITSM: {
        "leadConversion": "3-7%",
        "salesCycle": "6-9 months",
        "aiAdoption": "15-25%",
        "automationLevel": "20-40%",
        "averageTicketCount": "500-2000/month",
        "customerSatisfaction": "75-85%",
    },
    ICP.AGENCY: {
        "leadConversion": "5-12%",
        "salesCycle": "3-6 months",
        "aiAdoption": "25-40%",
        "automationLevel": "30-60%",
        "averageProjectValue": "$5,000-50,000",
        "clientRetention": "60-80%",
    },
    ICP.SAAS: {
        "leadConversion": "10-20%",
        "salesCycle": "2-4 months",
        "aiAdoption": "40-60%",
        "automationLevel": "50-80%",
        "averageDealSize": "$1,000-10,000",
        "churnRate": "5-15%",
    },
}


ICP_RECOMMENDATIONS: Dict[ICP, List[str]] = {
    ICP.ITSM: [
        "Focus on ticket automation and service desk integration",
        "Prioritize reliability over cutting-edge features",
    ],
    ICP.AGENCY: [
        "Emphasize proposal quality and client presentation",
        "Consider white-label solutions for client delivery",
    ],
    ICP.SAAS: [
        "Build for scale and integration from day one",
        "Invest in analytics and user behavior tracking",
    ],
}

COMPLEXITY_RECOMMENDATIONS: Dict[Complexity, List[str]] = {
    Complexity.SIMPLE: [
        "Start with proven, simple solutions",
        "Focus on quick wins and immediate ROI",
    ],
    Complexity.MODERATE: [
        "Plan for growth but avoid over-engineering",
        "Implement monitoring and error handling early",
    ],
    Complexity.COMPLEX: [
        "Ensure you have the technical expertise in-house",
        "Plan for 2-3x longer implementation than estimated",
    ],
}


class FallbackCorpus:
    """Read-only access to the curated corpus.

    Lookups are keyed by enum members and always resolve: unknown use cases
    fall back to workflow automation, unknown tiers to the moderate pattern
    and unknown ICPs to the agency baselines.
    """

    def __init__(
        self,
        tools: Optional[Dict[UseCase, List[FallbackTool]]] = None,
        patterns: Optional[Dict[Complexity, FallbackPattern]] = None,
        benchmarks: Optional[Dict[ICP, Dict[str, str]]] = None,
    ):
        self.tools = tools or STABLE_TOOLS
        self.patterns = patterns or STABLE_PATTERNS
        self.benchmarks = benchmarks or STABLE_BENCHMARKS

    @staticmethod
    def map_challenge_to_use_case(challenge: str) -> UseCase:
        """Coarse challenge → corpus category mapping.

        Deliberately broader than the normalizer's table: the corpus only
        carries four categories.
        """
        text = (challenge or "").lower()
        if "qualification" in text or "lead" in text:
            return UseCase.LEAD_QUALIFICATION
        if "proposal" in text or "content" in text:
            return UseCase.PROPOSAL_GENERATION
        if "data" in text or "processing" in text:
            return UseCase.DATA_PROCESSING
        return UseCase.WORKFLOW_AUTOMATION

    def get_fallback_tools(self, use_case: UseCase, icp: Optional[ICP] = None) -> List[FallbackTool]:
        """Curated tools for a use case, best ICP fit first when an ICP is given."""
        tools = self.tools.get(use_case) or self.tools[UseCase.WORKFLOW_AUTOMATION]
        if icp is None:
            return list(tools)
        fitting = [t for t in tools if t.icp_score >= MIN_FALLBACK_ICP_SCORE]
        return sorted(fitting, key=lambda t: t.icp_score, reverse=True)

    def get_fallback_pattern(self, complexity: Complexity) -> FallbackPattern:
        return self.patterns.get(complexity) or self.patterns[Complexity.MODERATE]

    def get_fallback_benchmarks(self, icp: ICP) -> Dict[str, str]:
        return dict(self.benchmarks.get(icp) or self.benchmarks[ICP.AGENCY])

    @staticmethod
    def generate_recommendations(icp: ICP, complexity: Complexity) -> List[str]:
        """Two ICP-specific then two complexity-specific recommendations."""
        return ICP_RECOMMENDATIONS.get(icp, []) + COMPLEXITY_RECOMMENDATIONS.get(complexity, [])

    def get_fallback_intelligence(
        self,
        challenge: str,
        icp: ICP,
        complexity: Complexity,
    ) -> FallbackIntelligence:
        """Select curated data for one context.

        Args:
            challenge: Revenue challenge text
            icp: Canonical ICP
            complexity: Complexity tier

        Returns:
            FallbackIntelligence with tools, one pattern, benchmarks and recommendations
        """
        use_case = self.map_challenge_to_use_case(challenge)
        tools = self.get_fallback_tools(use_case, icp)
        if not tools:
            # Every category carries at least one tool above the ICP floor, but a
            # custom corpus may not.
            tools = list(self.tools.get(use_case) or self.tools[UseCase.WORKFLOW_AUTOMATION])
        return FallbackIntelligence(
            tools=tools,
            pattern=self.get_fallback_pattern(complexity),
            benchmarks=self.get_fallback_benchmarks(icp),
            recommendations=self.generate_recommendations(icp, complexity),
        )

    def enhance_with_fallback(
        self,
        package: IntelligencePackage,
        data: FallbackIntelligence,
    ) -> Dict[str, object]:
        """Merge curated data into a package without discarding live data.

        Tools: live tools are kept; curated tools not already present (by name)
        top the list up to three, and the list is capped at five when anything
        was added. Patterns: live, or the single curated pattern. Benchmarks:
        live, or the curated baselines.

        Returns:
            Dict with merged "tools", "patterns" and "benchmarks"
        """
        tools = list(package.tools)
        present = {t.name.lower() for t in tools}
        missing = MIN_BLENDED_TOOLS - len(tools)
        if missing > 0:
            extra = [
                to_tool_record(t, package.metadata.icp)
                for t in data.tools
                if t.name.lower() not in present
            ]
            tools = (tools + extra[:missing])[:MAX_BLENDED_TOOLS]

        patterns = list(package.patterns) or [to_pattern_record(data.pattern)]
        benchmarks = package.benchmarks or to_benchmark_record(data.benchmarks)
        return {"tools": tools, "patterns": patterns, "benchmarks": benchmarks}


def to_tool_record(tool: FallbackTool, icp: Optional[str] = None) -> ToolRecord:
    """Convert a curated tool into a package ToolRecord with derived fields filled."""
    icp_code = icp.value if isinstance(icp, ICP) else icp
    record = ToolRecord(
        name=tool.name,
        category=tool.category,
        description=tool.description,
        pricing_details=tool.pricing,
        integrations=list(tool.integrations),
        best_for=tool.best_for,
        icp_scores={icp_code: tool.icp_score} if icp_code else {},
        implementation_effort=tool.implementation_effort,
        source="fallback",
        recommendation_reason=f"Curated recommendation: {tool.best_for}",
        stack_compatibility=0.5,
        effort_estimate=tool.implementation_effort,
    )
    return record.model_copy(update={"orchestration_compatible": record.is_orchestration_compatible()})


def to_pattern_record(pattern: FallbackPattern) -> PatternRecord:
    """Convert a curated pattern into a PatternRecord."""
    return PatternRecord(
        name=pattern.name,
        description=pattern.description,
        complexity=pattern.complexity.value,
        architecture=pattern.architecture,
        typical_stack=list(pattern.stack),
        typical_timeline=pattern.timeline,
        typical_cost_range=pattern.cost,
        success_indicators=list(pattern.success_indicators),
        common_pitfalls=list(pattern.common_pitfalls),
        source="fallback",
        example_links=list(PLACEHOLDER_EXAMPLE_LINKS),
        estimated_timeline=pattern.timeline,
    )


def to_benchmark_record(metrics: Dict[str, str]) -> BenchmarkRecord:
    """Wrap curated baselines; client position is unknown for curated data."""
    return BenchmarkRecord(metrics=dict(metrics), source="fallback")
