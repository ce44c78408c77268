"""Pydantic contracts for the revenue intelligence layer.

All stream handoffs and the final package are typed through these contracts.
"""

from .context_contracts import (
    ICP,
    UseCase,
    BudgetTier,
    Complexity,
    AssessmentContext,
    NormalizedContext,
)

from .intelligence_contracts import (
    PricingDetails,
    ToolRecord,
    PatternRecord,
    ClientPosition,
    ImprovementPotential,
    BenchmarkRecord,
    CostRecord,
    TrendRecord,
    InsightsRecord,
    QualityAssessment,
    PackageMetadata,
    IntelligencePackage,
    RetrievalFilter,
    RetrievalResult,
)

from .fallback_contracts import (
    FallbackTool,
    FallbackPattern,
    FallbackIntelligence,
)

from .errors import (
    IntelligenceError,
    RetrievalError,
    RetrievalUnavailableError,
)

__all__ = [
    # Context
    "ICP",
    "UseCase",
    "BudgetTier",
    "Complexity",
    "AssessmentContext",
    "NormalizedContext",
    # Intelligence
    "PricingDetails",
    "ToolRecord",
    "PatternRecord",
    "ClientPosition",
    "ImprovementPotential",
    "BenchmarkRecord",
    "CostRecord",
    "TrendRecord",
    "InsightsRecord",
    "QualityAssessment",
    "PackageMetadata",
    "IntelligencePackage",
    "RetrievalFilter",
    "RetrievalResult",
    # Fallback corpus
    "FallbackTool",
    "FallbackPattern",
    "FallbackIntelligence",
    # Errors
    "IntelligenceError",
    "RetrievalError",
    "RetrievalUnavailableError",
]
