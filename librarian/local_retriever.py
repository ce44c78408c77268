"""Local intelligence database backend.

Serves tools, patterns, benchmarks and trends from a bundled JSON file using
weighted keyword search. Used when no hosted intelligence API is configured.
"""

from __future__ import annotations

import json
import re
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from config import settings
from contracts import PatternRecord, RetrievalError, RetrievalFilter, RetrievalResult, ToolRecord
from librarian.retriever import IntelligenceRetriever, freshness_from_timestamp
from log_setup import get_logger


logger = get_logger(__name__)

QUERY_STOPWORDS = {"for", "the", "and", "with", "tools", "implementation", "patterns", "our", "too"}

# Field weights for tool scoring
NAME_WEIGHT = 10
CATEGORY_WEIGHT = 8
USE_CASE_WEIGHT = 7
DESCRIPTION_WEIGHT = 6
BEST_FOR_WEIGHT = 6
INTEGRATION_WEIGHT = 4

MAX_TOOL_RESULTS = 10
MAX_PATTERN_RESULTS = 5
MIN_RETRIEVAL_ICP_SCORE = 0.5
MIN_PATTERN_ICP_SCORE = 0.6
USE_CASE_PREFERENCE_MIN = 3


def _query_terms(query: str) -> List[str]:
    words = re.findall(r"[a-z0-9][a-z0-9\-]+", query.lower())
    return [w for w in words if len(w) >= 3 and w not in QUERY_STOPWORDS]


class LocalIntelligenceRetriever(IntelligenceRetriever):
    """Retrieval over a JSON intelligence database.

    The file holds top-level keys ``tools``, ``patterns``, ``benchmarks``
    (per ICP), ``trends`` and ``updated_at`` (ISO timestamp).
    """

    def __init__(self, data_path: Optional[str | Path] = None, data: Optional[Dict[str, Any]] = None):
        """Initialize the retriever.

        Args:
            data_path: JSON database path. Defaults to config setting.
            data: Already-loaded database; skips reading data_path.
        """
        self.data_path = Path(data_path or settings.local_intelligence_path)
        self._data = data
        self._load_lock = threading.Lock()

    @property
    def name(self) -> str:
        return "local"

    def is_available(self) -> bool:
        return self._data is not None or self.data_path.exists()

    def _database(self) -> Dict[str, Any]:
        """Load the database once; raise RetrievalError if it cannot be read."""
        if self._data is not None:
            return self._data
        with self._load_lock:
            if self._data is None:
                try:
                    self._data = json.loads(self.data_path.read_text(encoding="utf-8"))
                except (OSError, ValueError) as e:
                    raise RetrievalError(f"cannot load {self.data_path}: {e}", operation="load") from e
                logger.info(
                    "Local intelligence loaded: %d tools, %d patterns",
                    len(self._data.get("tools", [])),
                    len(self._data.get("patterns", [])),
                )
        return self._data

    def retrieve(self, query: str, filter_context: RetrievalFilter) -> RetrievalResult:
        db = self._database()
        terms = _query_terms(query)
        try:
            tools = self._search_tools(db.get("tools", []), terms, filter_context)
            patterns = self._search_patterns(db.get("patterns", []), terms, filter_context)
        except ValidationError as e:
            raise RetrievalError(f"malformed record in local database: {e}", operation="retrieve") from e
        return RetrievalResult(tools=tools, patterns=patterns)

    def _search_tools(
        self,
        raw_tools: List[Dict[str, Any]],
        terms: List[str],
        filter_context: RetrievalFilter,
    ) -> List[ToolRecord]:
        icp = filter_context.icp
        scored: List[Tuple[float, float, Dict[str, Any]]] = []

        for raw in raw_tools:
            icp_scores = raw.get("icp_scores") or {}
            if icp and icp_scores.get(icp, 0) < MIN_RETRIEVAL_ICP_SCORE:
                continue
            score, similarity = self._score_tool(raw, terms, filter_context)
            if score > 0:
                scored.append((score, similarity, raw))

        scored.sort(key=lambda item: item[0], reverse=True)

        # Prefer tools built for the use case when there are enough of them
        if filter_context.use_case:
            preferred = [s for s in scored if filter_context.use_case in (s[2].get("use_cases") or [])]
            if len(preferred) >= USE_CASE_PREFERENCE_MIN:
                scored = preferred

        return [
            ToolRecord(**{**raw, "similarity": round(similarity, 3)})
            for _, similarity, raw in scored[:MAX_TOOL_RESULTS]
        ]

    @staticmethod
    def _score_tool(
        raw: Dict[str, Any],
        terms: List[str],
        filter_context: RetrievalFilter,
    ) -> Tuple[float, float]:
        """Return (ranking score, similarity in [0, 1]) for one tool."""
        name = str(raw.get("name", "")).lower()
        category = str(raw.get("category", "")).lower()
        description = str(raw.get("description", "")).lower()
        best_for = str(raw.get("best_for", "")).lower()
        use_cases = [str(u).lower() for u in raw.get("use_cases") or []]
        integrations = [str(i).lower() for i in raw.get("integrations") or []]

        score = 0.0
        matched = 0
        for term in terms:
            term_score = 0
            if term in name:
                term_score += NAME_WEIGHT
            if term in category:
                term_score += CATEGORY_WEIGHT
            if any(term in uc for uc in use_cases):
                term_score += USE_CASE_WEIGHT
            if term in description:
                term_score += DESCRIPTION_WEIGHT
            if term in best_for:
                term_score += BEST_FOR_WEIGHT
            if any(term in i for i in integrations):
                term_score += INTEGRATION_WEIGHT
            if term_score:
                matched += 1
                score += term_score

        if filter_context.use_case and filter_context.use_case in use_cases:
            score += USE_CASE_WEIGHT

        if matched == 0 and not score:
            return 0.0, 0.0

        icp_scores = raw.get("icp_scores") or {}
        if filter_context.icp:
            score += icp_scores.get(filter_context.icp, 0) * 5
        score += float(raw.get("health_score", 0)) * 2
        if raw.get("momentum") == "rising":
            score += 2
        elif raw.get("momentum") == "declining":
            score -= 2

        similarity = matched / len(terms) if terms else 0.5
        return score, min(1.0, similarity)

    def _search_patterns(
        self,
        raw_patterns: List[Dict[str, Any]],
        terms: List[str],
        filter_context: RetrievalFilter,
    ) -> List[PatternRecord]:
        icp = filter_context.icp
        candidates = raw_patterns
        if filter_context.complexity:
            by_complexity = [p for p in raw_patterns if p.get("complexity") == filter_context.complexity]
            if by_complexity:
                candidates = by_complexity
        if icp:
            by_icp = [p for p in candidates if (p.get("icp_scores") or {}).get(icp, 0) >= MIN_PATTERN_ICP_SCORE]
            if by_icp:
                candidates = by_icp

        def relevance(raw: Dict[str, Any]) -> float:
            text = " ".join(
                str(raw.get(k, "")) for k in ("name", "category", "description", "problem_solved")
            ).lower()
            if not terms:
                return 0.5
            return sum(1 for t in terms if t in text) / len(terms)

        ranked = sorted(
            ((relevance(p), p) for p in candidates),
            key=lambda item: (item[0], (item[1].get("icp_scores") or {}).get(icp or "", 0)),
            reverse=True,
        )
        return [
            PatternRecord(**{**raw, "similarity": round(sim, 3)})
            for sim, raw in ranked[:MAX_PATTERN_RESULTS]
        ]

    def get_benchmarks(self, icp: str) -> Optional[Dict[str, Any]]:
        benchmarks = self._database().get("benchmarks") or {}
        return benchmarks.get(icp)

    def get_market_context(self, icp: str) -> Optional[Dict[str, Any]]:
        trends = self._database().get("trends")
        if not trends:
            return None
        icp_recommendations = (trends.get("icp_recommendations") or {}).get(icp)
        return {
            "rising": trends.get("rising", []),
            "declining": trends.get("declining", []),
            "new": trends.get("new", []),
            "category_trends": trends.get("category_trends", {}),
            "icp_recommendations": icp_recommendations,
        }

    def get_data_freshness(self) -> float:
        updated_at = self._database().get("updated_at")
        if not updated_at:
            return 0.0
        try:
            return freshness_from_timestamp(datetime.fromisoformat(updated_at))
        except ValueError as e:
            raise RetrievalError(f"invalid updated_at '{updated_at}'", operation="freshness") from e

    def get_stats(self) -> Dict[str, Any]:
        """Summary of the loaded database for debugging."""
        db = self._database()
        tools = db.get("tools", [])
        return {
            "total_tools": len(tools),
            "total_patterns": len(db.get("patterns", [])),
            "categories": sorted({t.get("category", "") for t in tools}),
            "use_cases": sorted({uc for t in tools for uc in t.get("use_cases", [])}),
            "updated_at": db.get("updated_at"),
        }
