"""Fallback blending and the full-fallback package.

FallbackBlender tops up a low-quality live package with curated data while
keeping every usable live record. build_full_fallback_package builds a
package from curated data alone; it is the last-resort path when gathering
fails outright and must not raise.
"""

from typing import Dict, List, Optional

from contracts import (
    AssessmentContext,
    Complexity,
    CostRecord,
    FallbackIntelligence,
    InsightsRecord,
    IntelligencePackage,
    PackageMetadata,
    TrendRecord,
)
from context import normalize_context
from librarian.fallback_corpus import (
    FallbackCorpus,
    to_benchmark_record,
    to_pattern_record,
    to_tool_record,
)
from log_setup import get_logger


logger = get_logger(__name__)

FULL_FALLBACK_QUALITY_SCORE = 0.8
FULL_FALLBACK_FRESHNESS = 1.0
FULL_FALLBACK_DATA_POINTS = "5,000+ (curated)"
FULL_FALLBACK_IMPLEMENTATIONS = "150+ (verified)"
FULL_FALLBACK_SAAS_RANGE = "$200-800/month"

FULL_FALLBACK_CUSTOM_BUILD: Dict[Complexity, str] = {
    Complexity.SIMPLE: "$5K-15K",
    Complexity.MODERATE: "$15K-50K",
    Complexity.COMPLEX: "$50K-150K",
}

FULL_FALLBACK_TRENDS = TrendRecord(
    rising=["AI automation", "No-code tools", "API-first solutions"],
    declining=["Manual processes", "Legacy systems"],
    new_entrants=["Hybrid AI architectures", "Context intelligence"],
)

FULL_FALLBACK_RISKS = ["Implementation complexity", "Change management"]
FULL_FALLBACK_QUICK_WINS = ["Process automation", "Lead qualification"]
FULL_FALLBACK_STRATEGY = "Build scalable AI-first revenue operations"


def merge_insights(live: InsightsRecord, recommendations: List[str]) -> InsightsRecord:
    """Merge curated insights field by field.

    Live values always win; curated values only fill fields that are unset or
    empty. Curated recommendations are appended without duplicates.

    Args:
        live: Insights synthesized for the live package
        recommendations: Curated recommendations for the same context

    Returns:
        New InsightsRecord
    """
    curated = list(live.curated_recommendations)
    curated.extend(r for r in recommendations if r not in curated)
    return live.model_copy(update={
        "primary_recommendation": live.primary_recommendation or (
            recommendations[0] if recommendations else FULL_FALLBACK_STRATEGY
        ),
        "risk_factors": list(live.risk_factors) or list(FULL_FALLBACK_RISKS),
        "quick_wins": list(live.quick_wins) or list(FULL_FALLBACK_QUICK_WINS),
        "long_term_strategy": live.long_term_strategy or FULL_FALLBACK_STRATEGY,
        "curated_recommendations": curated,
    })


class FallbackBlender:
    """Blends curated corpus data into a package that failed the quality policy."""

    def __init__(self, corpus: Optional[FallbackCorpus] = None):
        self.corpus = corpus or FallbackCorpus()

    def enhance(self, package: IntelligencePackage, fallback: FallbackIntelligence) -> IntelligencePackage:
        """Return a new package with curated data merged in.

        Args:
            package: Live package that failed the quality policy
            fallback: Curated data selected for the same context

        Returns:
            Package with using_fallback set; live tools, patterns and benchmarks preserved
        """
        merged = self.corpus.enhance_with_fallback(package, fallback)
        added_tools = len(merged["tools"]) - len(package.tools)
        logger.info(
            "Blended fallback data: +%d tools, patterns %s, benchmarks %s",
            added_tools,
            "live" if package.patterns else "curated",
            "live" if package.benchmarks is not None else "curated",
        )
        return package.with_updates(
            tools=merged["tools"],
            patterns=merged["patterns"],
            benchmarks=merged["benchmarks"],
            insights=merge_insights(package.insights, fallback.recommendations),
            metadata=package.metadata.model_copy(update={"using_fallback": True}),
        )


def build_full_fallback_package(
    assessment: AssessmentContext,
    corpus: Optional[FallbackCorpus] = None,
) -> IntelligencePackage:
    """Build a complete package from curated data only.

    Args:
        assessment: Raw assessment context
        corpus: Curated corpus; defaults to the bundled one

    Returns:
        IntelligencePackage with fixed high-confidence metadata
    """
    corpus = corpus or FallbackCorpus()
    context = normalize_context(assessment)
    fallback = corpus.get_fallback_intelligence(context.challenge, context.icp, context.complexity)

    recommendations = list(fallback.recommendations)
    return IntelligencePackage(
        metadata=PackageMetadata(
            icp=context.icp.value,
            data_freshness=FULL_FALLBACK_FRESHNESS,
            quality_score=FULL_FALLBACK_QUALITY_SCORE,
            using_fallback=True,
            industry_data_points=FULL_FALLBACK_DATA_POINTS,
            successful_implementations=FULL_FALLBACK_IMPLEMENTATIONS,
        ),
        tools=[to_tool_record(t, context.icp) for t in fallback.tools],
        patterns=[to_pattern_record(fallback.pattern)],
        benchmarks=to_benchmark_record(fallback.benchmarks),
        costs=CostRecord(
            median=fallback.pattern.cost,
            custom_build=FULL_FALLBACK_CUSTOM_BUILD[context.complexity],
            saas_range=FULL_FALLBACK_SAAS_RANGE,
        ),
        trends=FULL_FALLBACK_TRENDS.model_copy(deep=True),
        insights=InsightsRecord(
            primary_recommendation=recommendations[0] if recommendations else FULL_FALLBACK_STRATEGY,
            risk_factors=list(FULL_FALLBACK_RISKS),
            quick_wins=list(FULL_FALLBACK_QUICK_WINS),
            long_term_strategy=FULL_FALLBACK_STRATEGY,
            curated_recommendations=recommendations,
        ),
    )
