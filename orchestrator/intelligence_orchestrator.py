"""Intelligence orchestrator - single entry point for report intelligence.

Pipeline:
  Normalize context
  → Gather streams (tools ∥ patterns ∥ benchmarks ∥ trends, then costs)
  → Synthesize insights
  → Assess quality
  → [Blend curated fallback if quality is insufficient]
  → Scale metadata
  → OUTPUT IntelligencePackage

Any failure that escapes the per-stream bulkheads is caught once here and
answered with the full-fallback package, so callers always get a package.
"""

from typing import List, Optional

from contracts import (
    AssessmentContext,
    IntelligencePackage,
    NormalizedContext,
    PackageMetadata,
    PatternRecord,
    ToolRecord,
)
from context import ContextNormalizer
from librarian.cache import RetrievalCache
from librarian.factory import get_retriever
from librarian.fallback_corpus import FallbackCorpus
from librarian.retriever import IntelligenceRetriever
from log_setup import get_logger
from orchestrator.benchmark_analyst import BenchmarkAnalyst
from orchestrator.fallback_blender import FallbackBlender, build_full_fallback_package
from orchestrator.insight_synthesizer import InsightSynthesizer
from orchestrator.pattern_enricher import AdoptionEstimator
from orchestrator.quality_policy import QualityPolicy
from orchestrator.stream_gatherer import StreamGatherer


logger = get_logger(__name__)


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def estimate_industry_data_points(tools: List[ToolRecord], patterns: List[PatternRecord]) -> str:
    """Rough count of data points behind the package, e.g. '650+' or '2K+'."""
    estimated = len(tools) * 100 + len(patterns) * 50
    if estimated > 1000:
        return f"{_round_half_up(estimated / 1000)}K+"
    return f"{estimated}+"


def estimate_successful_implementations(patterns: List[PatternRecord]) -> str:
    """Sum of pattern adoption counts, e.g. '85+' or '200+'."""
    total = sum(p.adoption_count for p in patterns)
    if total > 100:
        return f"{_round_half_up(total / 100)}00+"
    return f"{total}+"


class IntelligenceOrchestrator:
    """Gathers, scores and, when needed, backfills intelligence for one report.

    Every collaborator can be injected; defaults come from settings. The
    retrieval cache belongs to this instance, so repeated calls for the same
    ICP and use case reuse raw retrieval results until clear_cache() is called.
    """

    def __init__(
        self,
        retriever: Optional[IntelligenceRetriever] = None,
        cache: Optional[RetrievalCache] = None,
        corpus: Optional[FallbackCorpus] = None,
        quality_policy: Optional[QualityPolicy] = None,
        adoption_estimator: Optional[AdoptionEstimator] = None,
        benchmark_analyst: Optional[BenchmarkAnalyst] = None,
        normalizer: Optional[ContextNormalizer] = None,
        synthesizer: Optional[InsightSynthesizer] = None,
    ):
        self.retriever = retriever or get_retriever()
        self.cache = cache if cache is not None else RetrievalCache()
        self.corpus = corpus or FallbackCorpus()
        self.quality_policy = quality_policy or QualityPolicy()
        self.normalizer = normalizer or ContextNormalizer()
        self.synthesizer = synthesizer or InsightSynthesizer()
        self.blender = FallbackBlender(self.corpus)
        self.gatherer = StreamGatherer(
            self.retriever,
            cache=self.cache,
            analyst=benchmark_analyst,
            adoption_estimator=adoption_estimator,
        )

    def gather_for_report(self, assessment: AssessmentContext) -> IntelligencePackage:
        """Build the intelligence package for one assessment.

        Never raises: an unrecovered failure anywhere in the pipeline yields
        the full-fallback package instead.

        Args:
            assessment: Business context from the report pipeline

        Returns:
            IntelligencePackage
        """
        try:
            return self._gather(assessment)
        except Exception as e:
            logger.error(
                "Intelligence gathering failed, using full fallback: %s", e,
                exc_info=True,
                extra={"extra_data": {"backend": self.retriever.name}},
            )
            return build_full_fallback_package(assessment, self.corpus)

    def _gather(self, assessment: AssessmentContext) -> IntelligencePackage:
        context = self.normalizer.normalize(assessment)
        logger.info(
            "Gathering intelligence",
            extra={"extra_data": {
                "icp": context.icp.value,
                "use_case": context.use_case.value,
                "complexity": context.complexity.value,
                "stack_items": len(context.stack_items),
            }},
        )

        streams = self.gatherer.gather(context)
        package = IntelligencePackage(
            metadata=PackageMetadata(
                icp=context.icp.value,
                data_freshness=streams.data_freshness,
                failed_streams=streams.failed_streams,
            ),
            tools=streams.tools,
            patterns=streams.patterns,
            benchmarks=streams.benchmarks,
            costs=streams.costs,
            trends=streams.trends,
            insights=self.synthesizer.synthesize(context),
        )

        assessment_result = self.quality_policy.assess(package)
        package = package.with_updates(metadata=package.metadata.model_copy(update={
            "quality_score": assessment_result.score,
            "quality_issues": assessment_result.issues,
        }))

        if self.quality_policy.should_use_fallback(assessment_result):
            logger.info(
                "Intelligence quality %.2f below threshold, blending fallback data: %s",
                assessment_result.score, "; ".join(assessment_result.issues),
            )
            package = self._blend_fallback(package, context)

        package = package.with_updates(metadata=package.metadata.model_copy(update={
            "industry_data_points": estimate_industry_data_points(package.tools, package.patterns),
            "successful_implementations": estimate_successful_implementations(package.patterns),
        }))

        logger.info(
            "Intelligence gathering complete",
            extra={"extra_data": {
                "tools": len(package.tools),
                "patterns": len(package.patterns),
                "quality_score": package.metadata.quality_score,
                "using_fallback": package.metadata.using_fallback,
            }},
        )
        return package

    def _blend_fallback(self, package: IntelligencePackage, context: NormalizedContext) -> IntelligencePackage:
        fallback = self.corpus.get_fallback_intelligence(context.challenge, context.icp, context.complexity)
        return self.blender.enhance(package, fallback)

    def clear_cache(self) -> None:
        """Drop cached retrieval results so the next call refetches."""
        self.cache.clear()


def gather_for_report(
    assessment: AssessmentContext,
    retriever: Optional[IntelligenceRetriever] = None,
) -> IntelligencePackage:
    """Convenience function for a one-off package with a fresh orchestrator.

    Args:
        assessment: Business context from the report pipeline
        retriever: Retrieval backend; defaults to settings.retriever_backend

    Returns:
        IntelligencePackage
    """
    return IntelligenceOrchestrator(retriever=retriever).gather_for_report(assessment)
