"""Base retrieval backend interface."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from contracts import RetrievalFilter, RetrievalResult


FRESHNESS_WINDOW_DAYS = 14.0


def freshness_from_timestamp(last_update: datetime, now: Optional[datetime] = None) -> float:
    """Score corpus freshness: 1.0 updated today, 0.5 a week old, 0.0 after two weeks."""
    if last_update.tzinfo is None:
        last_update = last_update.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    days_since_update = (now - last_update).total_seconds() / 86400
    return max(0.0, min(1.0, 1 - days_since_update / FRESHNESS_WINDOW_DAYS))


class IntelligenceRetriever(ABC):
    """Abstract base class for intelligence retrieval backends.

    Implementations must be safe to call from several threads at once and must
    raise RetrievalError (never return a malformed value) when a call fails.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name (local, http)."""
        pass

    @abstractmethod
    def retrieve(self, query: str, filter_context: RetrievalFilter) -> RetrievalResult:
        """Search tools and patterns relevant to the query.

        Args:
            query: Natural language query, e.g. 'lead qualification tools for agency'
            filter_context: ICP, use case, stack, budget and complexity filters

        Returns:
            RetrievalResult with tools and patterns ordered by relevance
        """
        pass

    @abstractmethod
    def get_benchmarks(self, icp: str) -> Optional[Dict[str, Any]]:
        """Industry baseline metrics for an ICP, or None when the backend has none."""
        pass

    @abstractmethod
    def get_market_context(self, icp: str) -> Optional[Dict[str, Any]]:
        """Rising, declining and new market categories for an ICP, or None."""
        pass

    @abstractmethod
    def get_data_freshness(self) -> float:
        """Freshness of the backend corpus in [0, 1]."""
        pass

    def is_available(self) -> bool:
        """Check if this backend is usable (data present, credentials set, etc.)."""
        return True
