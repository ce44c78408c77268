"""Intelligence package contracts.

Records flowing through the five gathering streams (tools, patterns, benchmarks,
costs, trends), the synthesized insights, and the assembled package handed to
the report pipeline.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from typing import Any, Dict, List, Optional, Union
from datetime import datetime, timezone


PricingDetails = Union[str, Dict[str, Any], None]

ORCHESTRATION_CATEGORIES = frozenset({"ai-model", "automation", "infrastructure", "framework"})


class ToolRecord(BaseModel):
    """A SaaS tool or model returned by retrieval, plus report-facing derived fields."""
    id: Optional[str] = Field(None, description="Backend identifier")
    name: str = Field(..., description="Tool name")
    category: str = Field("", description="Category, e.g. ai-model, automation")
    description: str = Field("", description="Short description")
    pricing_details: PricingDetails = Field(None, description="Free-text price or {tier: monthly price}")
    integrations: List[str] = Field(default_factory=list)
    use_cases: List[str] = Field(default_factory=list)
    best_for: str = Field("", description="What the tool is best suited to")
    icp_scores: Dict[str, float] = Field(default_factory=dict, description="Fit score per ICP code")
    similarity: float = Field(0.0, ge=0.0, le=1.0, description="Retrieval similarity to the query")
    implementation_effort: Optional[str] = Field(None, description="Tool-supplied effort, e.g. '1-2 weeks'")
    source: str = Field("retrieval", description="retrieval or fallback")

    # Derived by the tools stream
    recommendation_reason: Optional[str] = None
    stack_compatibility: Optional[float] = Field(None, ge=0.0, le=1.0)
    effort_estimate: Optional[str] = None
    orchestration_compatible: Optional[bool] = None

    def icp_score(self, icp: str) -> float:
        """Fit score for an ICP code, 0 when unrated."""
        return self.icp_scores.get(icp, 0.0)

    def is_orchestration_compatible(self) -> bool:
        """True if the tool can sit behind an orchestration layer.

        Either its category is one that composes well (models, automation,
        infrastructure, frameworks) or it exposes an API/REST integration.
        """
        if self.category in ORCHESTRATION_CATEGORIES:
            return True
        return any("api" in i.lower() or "rest" in i.lower() for i in self.integrations)


class PatternRecord(BaseModel):
    """An implementation pattern (reference architecture) and its enrichments."""
    id: Optional[str] = None
    name: str = Field(..., description="Pattern name")
    category: str = ""
    description: str = ""
    complexity: Optional[str] = None
    architecture: str = ""
    typical_stack: List[str] = Field(default_factory=list)
    typical_timeline: str = Field("", description="e.g. '2-4 weeks'")
    typical_cost_range: str = ""
    github_examples: List[str] = Field(default_factory=list)
    success_indicators: List[str] = Field(default_factory=list)
    common_pitfalls: List[str] = Field(default_factory=list)
    times_implemented: Optional[int] = Field(None, ge=0)
    icp_scores: Dict[str, float] = Field(default_factory=dict)
    similarity: float = Field(0.0, ge=0.0, le=1.0)
    source: str = "retrieval"

    # Derived by the patterns stream
    example_links: List[str] = Field(default_factory=list)
    estimated_timeline: Optional[str] = None
    similar_builds: Optional[int] = Field(None, ge=0)

    @property
    def adoption_count(self) -> int:
        """Implementations attributed to this pattern for scale metadata."""
        return self.times_implemented or self.similar_builds or 10


class ClientPosition(BaseModel):
    """Where the client sits against ICP benchmarks."""
    lead_conversion: str = "below_average"
    sales_cycle: str = "above_average"
    automation: str = "minimal"


class ImprovementPotential(BaseModel):
    """Expected upside from closing the benchmark gap."""
    revenue_increase: str = "40-60%"
    efficiency_gain: str = "3-5x"
    time_to_value: str = "6-8 weeks"


class BenchmarkRecord(BaseModel):
    """Industry baseline metrics for an ICP with the client's relative position."""
    metrics: Dict[str, Any] = Field(default_factory=dict, description="e.g. {'leadConversion': '5-12%'}")
    client_position: Optional[ClientPosition] = None
    improvement_potential: Optional[ImprovementPotential] = None
    source: str = "retrieval"

    @property
    def has_lead_conversion(self) -> bool:
        return bool(self.metrics.get("leadConversion"))


class CostRecord(BaseModel):
    """Cost ranges for SaaS adoption versus a custom build."""
    median: str = Field(..., description="Median monthly SaaS cost range")
    custom_build: str = Field(..., description="Custom build setup + run cost")
    saas_range: str = Field(..., description="Observed monthly SaaS price range")


class TrendRecord(BaseModel):
    """Market movement for the ICP."""
    model_config = ConfigDict(populate_by_name=True)

    rising: List[str] = Field(default_factory=list)
    declining: List[str] = Field(default_factory=list)
    new_entrants: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("new_entrants", "new", "newEntrants"),
    )
    category_trends: Dict[str, Any] = Field(default_factory=dict)
    icp_recommendations: Optional[Any] = None


class InsightsRecord(BaseModel):
    """Narrative recommendation fields for the report."""
    primary_recommendation: Optional[str] = None
    risk_factors: List[str] = Field(default_factory=list)
    quick_wins: List[str] = Field(default_factory=list)
    long_term_strategy: Optional[str] = None
    curated_recommendations: List[str] = Field(default_factory=list)


class QualityAssessment(BaseModel):
    """Quality score for an assembled package."""
    score: float = Field(..., ge=0.0, le=1.0)
    issues: List[str] = Field(default_factory=list)


class PackageMetadata(BaseModel):
    """Provenance and quality metadata for a package."""
    model_config = ConfigDict(frozen=True)

    generated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    icp: str = "agency"
    data_freshness: float = Field(0.0, ge=0.0, le=1.0)
    quality_score: float = Field(0.0, ge=0.0, le=1.0)
    using_fallback: bool = False
    industry_data_points: Optional[str] = None
    successful_implementations: Optional[str] = None
    quality_issues: List[str] = Field(default_factory=list)
    failed_streams: List[str] = Field(default_factory=list)


class IntelligencePackage(BaseModel):
    """Everything the report pipeline needs from the intelligence layer.

    A value object: built once per orchestration call and never mutated after
    it is returned. Use ``with_updates(...)`` to derive a new, revalidated package.
    """
    model_config = ConfigDict(frozen=True)

    metadata: PackageMetadata
    tools: List[ToolRecord] = Field(default_factory=list)
    patterns: List[PatternRecord] = Field(default_factory=list)
    benchmarks: Optional[BenchmarkRecord] = None
    costs: CostRecord
    trends: TrendRecord = Field(default_factory=TrendRecord)
    insights: InsightsRecord = Field(default_factory=InsightsRecord)

    @model_validator(mode="after")
    def validate_fallback_minimum(self) -> "IntelligencePackage":
        """A fallback-enhanced package must carry at least the curated minimum."""
        if self.metadata.using_fallback:
            if not self.tools:
                raise ValueError("fallback package must contain at least one tool")
            if not self.patterns:
                raise ValueError("fallback package must contain at least one pattern")
            if self.benchmarks is None:
                raise ValueError("fallback package must contain benchmarks")
        return self

    def with_updates(self, **updates: Any) -> "IntelligencePackage":
        """Return a new, validated package with the given fields replaced."""
        return type(self)(**{**dict(self), **updates})


class RetrievalFilter(BaseModel):
    """Filter context passed to a retrieval backend alongside the query text."""
    icp: Optional[str] = None
    use_case: Optional[str] = None
    existing_stack: List[str] = Field(default_factory=list)
    budget: Optional[str] = None
    complexity: Optional[str] = None


class RetrievalResult(BaseModel):
    """Raw tools and patterns returned for one query."""
    tools: List[ToolRecord] = Field(default_factory=list)
    patterns: List[PatternRecord] = Field(default_factory=list)
