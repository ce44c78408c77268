"""Orchestrator module: stream gathering, quality policy, fallback blending and insights."""

from .intelligence_orchestrator import (
    IntelligenceOrchestrator,
    gather_for_report,
    estimate_industry_data_points,
    estimate_successful_implementations,
)
from .stream_gatherer import StreamGatherer, GatheredStreams
from .quality_policy import QualityPolicy, assess_intelligence_quality, should_use_fallback
from .fallback_blender import FallbackBlender, build_full_fallback_package
from .insight_synthesizer import InsightSynthesizer, synthesize_insights
from .pattern_enricher import (
    AdoptionEstimator,
    DeterministicAdoptionEstimator,
    RandomAdoptionEstimator,
    FixedAdoptionEstimator,
)
from .benchmark_analyst import BenchmarkAnalyst

__all__ = [
    "IntelligenceOrchestrator",
    "gather_for_report",
    "estimate_industry_data_points",
    "estimate_successful_implementations",
    "StreamGatherer",
    "GatheredStreams",
    "QualityPolicy",
    "assess_intelligence_quality",
    "should_use_fallback",
    "FallbackBlender",
    "build_full_fallback_package",
    "InsightSynthesizer",
    "synthesize_insights",
    "AdoptionEstimator",
    "DeterministicAdoptionEstimator",
    "RandomAdoptionEstimator",
    "FixedAdoptionEstimator",
    "BenchmarkAnalyst",
]
