"""Multi-stream gatherer.

Pipeline:
PARALLEL (one worker per stream):
  ├── Tools      → ICP filter → annotate → cap
  ├── Patterns   → enrich (links, timeline, adoption)
  ├── Benchmarks → client position / improvement potential
  └── Trends     → market context
JOIN:
  → Costs (derived from the gathered tools)
  → Data freshness

Each stream is a bulkhead: a failure is logged, recorded in failed_streams
and replaced by that stream's default. Only when every retrieval-backed
stream fails does the gatherer raise RetrievalUnavailableError.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from config import settings
from contracts import (
    BenchmarkRecord,
    CostRecord,
    NormalizedContext,
    PatternRecord,
    RetrievalFilter,
    RetrievalResult,
    RetrievalUnavailableError,
    ToolRecord,
    TrendRecord,
)
from librarian.cache import RetrievalCache
from librarian.retriever import IntelligenceRetriever
from log_setup import get_logger
from orchestrator.benchmark_analyst import BenchmarkAnalyst
from orchestrator.cost_estimator import FAILED_STREAM_COSTS, estimate_costs
from orchestrator.pattern_enricher import AdoptionEstimator, PatternEnricher
from orchestrator.tool_annotator import ToolAnnotator


logger = get_logger(__name__)

STREAM_TOOLS = "tools"
STREAM_PATTERNS = "patterns"
STREAM_BENCHMARKS = "benchmarks"
STREAM_COSTS = "costs"
STREAM_TRENDS = "trends"

RETRIEVAL_STREAMS = (STREAM_TOOLS, STREAM_PATTERNS, STREAM_BENCHMARKS, STREAM_TRENDS)

# Substituted when the trends stream fails
FAILED_STREAM_TRENDS = TrendRecord(
    rising=["AI-powered qualification", "No-code automation", "Hybrid architectures"],
    declining=["Legacy CRMs", "Manual processes"],
    new_entrants=["Multi-model routing", "Context-aware AI", "Revenue intelligence"],
)


def tools_query(context: NormalizedContext) -> str:
    return f"{context.challenge} tools for {context.icp.value}"


def patterns_query(context: NormalizedContext) -> str:
    return f"{context.challenge} implementation patterns"


@dataclass
class GatheredStreams:
    """Results of one gather run, defaults already substituted for failed streams."""
    tools: List[ToolRecord] = field(default_factory=list)
    patterns: List[PatternRecord] = field(default_factory=list)
    benchmarks: Optional[BenchmarkRecord] = None
    costs: CostRecord = field(default_factory=lambda: FAILED_STREAM_COSTS.model_copy())
    trends: TrendRecord = field(default_factory=TrendRecord)
    data_freshness: float = 0.0
    failed_streams: List[str] = field(default_factory=list)


class StreamGatherer:
    """Fetches the five intelligence streams for a normalized context.

    Args:
        retriever: Thread-safe retrieval backend
        cache: Cache of raw retrieval results, shared across gather runs
        annotator: Tools-stream policy
        enricher: Patterns-stream enrichment
        analyst: Benchmark position analysis
        adoption_estimator: Estimator for the default enricher; ignored when enricher is given
        max_workers: Worker threads for the concurrent streams
    """

    def __init__(
        self,
        retriever: IntelligenceRetriever,
        cache: Optional[RetrievalCache] = None,
        annotator: Optional[ToolAnnotator] = None,
        enricher: Optional[PatternEnricher] = None,
        analyst: Optional[BenchmarkAnalyst] = None,
        adoption_estimator: Optional[AdoptionEstimator] = None,
        max_workers: Optional[int] = None,
    ):
        self.retriever = retriever
        self.cache = cache if cache is not None else RetrievalCache()
        self.annotator = annotator or ToolAnnotator()
        self.enricher = enricher or PatternEnricher(adoption_estimator)
        self.analyst = analyst or BenchmarkAnalyst()
        self.max_workers = max_workers or settings.stream_workers

    def gather(self, context: NormalizedContext) -> GatheredStreams:
        """Run every stream and join the results.

        Raises:
            RetrievalUnavailableError: If all retrieval-backed streams failed
        """
        fetchers: Dict[str, Callable[[NormalizedContext], Any]] = {
            STREAM_TOOLS: self.fetch_tools,
            STREAM_PATTERNS: self.fetch_patterns,
            STREAM_BENCHMARKS: self.fetch_benchmarks,
            STREAM_TRENDS: self.fetch_trends,
        }
        results: Dict[str, Any] = {}
        failed: List[str] = []

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {executor.submit(fetch, context): name for name, fetch in fetchers.items()}
            for future in as_completed(futures):
                name = futures[future]
                try:
                    results[name] = future.result()
                except Exception as e:
                    logger.warning(
                        "Stream %s failed, using default: %s", name, e,
                        extra={"extra_data": {"stream": name, "icp": context.icp.value}},
                    )
                    failed.append(name)

        if len(failed) == len(RETRIEVAL_STREAMS):
            raise RetrievalUnavailableError(f"all retrieval streams failed for icp={context.icp.value}")

        tools = results.get(STREAM_TOOLS, [])
        try:
            costs = estimate_costs(tools, context.complexity)
        except Exception as e:
            logger.warning("Stream %s failed, using default: %s", STREAM_COSTS, e)
            failed.append(STREAM_COSTS)
            costs = FAILED_STREAM_COSTS.model_copy()

        gathered = GatheredStreams(
            tools=tools,
            patterns=results.get(STREAM_PATTERNS, []),
            benchmarks=results.get(STREAM_BENCHMARKS),
            costs=costs,
            trends=results.get(STREAM_TRENDS, FAILED_STREAM_TRENDS.model_copy()),
            data_freshness=self.fetch_freshness(),
            # Stable order regardless of completion order
            failed_streams=[s for s in (*RETRIEVAL_STREAMS, STREAM_COSTS) if s in failed],
        )
        logger.info(
            "Gathered %d tools, %d patterns (failed streams: %s)",
            len(gathered.tools), len(gathered.patterns), gathered.failed_streams or "none",
        )
        return gathered

    def _retrieval_filter(self, context: NormalizedContext) -> RetrievalFilter:
        return RetrievalFilter(
            icp=context.icp.value,
            use_case=context.use_case.value,
            existing_stack=list(context.stack_items),
            budget=context.budget_tier.value,
            complexity=context.complexity.value,
        )

    def fetch_tools(self, context: NormalizedContext) -> List[ToolRecord]:
        key = self.cache.make_key(STREAM_TOOLS, context.icp, context.use_case)
        raw: RetrievalResult = self.cache.get_or_fetch(
            key,
            lambda: self.retriever.retrieve(tools_query(context), self._retrieval_filter(context)),
        )
        return self.annotator.process(raw.tools, context)

    def fetch_patterns(self, context: NormalizedContext) -> List[PatternRecord]:
        key = self.cache.make_key(STREAM_PATTERNS, context.icp, context.use_case)
        pattern_filter = RetrievalFilter(icp=context.icp.value, complexity=context.complexity.value)
        raw: RetrievalResult = self.cache.get_or_fetch(
            key,
            lambda: self.retriever.retrieve(patterns_query(context), pattern_filter),
        )
        return self.enricher.process(raw.patterns, context)

    def fetch_benchmarks(self, context: NormalizedContext) -> Optional[BenchmarkRecord]:
        key = self.cache.make_key(STREAM_BENCHMARKS, context.icp, context.use_case)
        metrics = self.cache.get_or_fetch(key, lambda: self.retriever.get_benchmarks(context.icp.value))
        if not metrics:
            return None
        return self.analyst.analyze(context, metrics)

    def fetch_trends(self, context: NormalizedContext) -> TrendRecord:
        key = self.cache.make_key(STREAM_TRENDS, context.icp, context.use_case)
        market = self.cache.get_or_fetch(key, lambda: self.retriever.get_market_context(context.icp.value))
        if not market:
            return TrendRecord()
        return TrendRecord.model_validate(market)

    def fetch_freshness(self) -> float:
        """Corpus freshness in [0, 1]; 0.0 when the backend cannot say."""
        try:
            freshness = self.retriever.get_data_freshness()
        except Exception as e:
            logger.warning("Data freshness unavailable: %s", e)
            return 0.0
        return max(0.0, min(1.0, freshness))
