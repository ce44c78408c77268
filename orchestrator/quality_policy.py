"""Quality policy for assembled intelligence packages.

Scores how much usable live data a package carries and decides whether the
curated fallback corpus should be blended in. Both operations only read the
package.
"""

from typing import List, Optional

from config import settings
from contracts import IntelligencePackage, QualityAssessment
from orchestrator.cost_estimator import extract_monthly_cost


TOOLS_WEIGHT = 0.3
TOOL_BREADTH_WEIGHT = 0.1
TOOL_BREADTH_MIN = 5
PATTERNS_WEIGHT = 0.2
FRESH_WEIGHT = 0.2
STALE_WEIGHT = 0.1
FRESH_THRESHOLD = 0.5
BENCHMARKS_WEIGHT = 0.15
COSTS_WEIGHT = 0.15

ISSUE_NO_TOOLS = "No relevant tools found"
ISSUE_FEW_TOOLS = "Limited tool options available"
ISSUE_NO_PATTERNS = "No implementation patterns found"
ISSUE_STALE = "Intelligence data is stale"
ISSUE_NO_BENCHMARKS = "No industry benchmarks available"
ISSUE_NO_COSTS = "No pricing/cost data available"


class QualityPolicy:
    """Weighted completeness score with a fallback threshold."""

    def __init__(self, threshold: Optional[float] = None):
        self.threshold = settings.fallback_quality_threshold if threshold is None else threshold

    def assess(self, package: IntelligencePackage) -> QualityAssessment:
        """Score a package.

        Args:
            package: Assembled package (not modified)

        Returns:
            QualityAssessment with score in [0, 1] and one issue per gap
        """
        score = 0.0
        issues: List[str] = []

        if package.tools:
            score += TOOLS_WEIGHT
            if len(package.tools) >= TOOL_BREADTH_MIN:
                score += TOOL_BREADTH_WEIGHT
            else:
                issues.append(ISSUE_FEW_TOOLS)
        else:
            issues.append(ISSUE_NO_TOOLS)

        if package.patterns:
            score += PATTERNS_WEIGHT
        else:
            issues.append(ISSUE_NO_PATTERNS)

        freshness = package.metadata.data_freshness
        if freshness > FRESH_THRESHOLD:
            score += FRESH_WEIGHT
        elif freshness > 0:
            score += STALE_WEIGHT
        else:
            issues.append(ISSUE_STALE)

        if package.benchmarks is not None and package.benchmarks.has_lead_conversion:
            score += BENCHMARKS_WEIGHT
        else:
            issues.append(ISSUE_NO_BENCHMARKS)

        if self._has_cost_data(package):
            score += COSTS_WEIGHT
        else:
            issues.append(ISSUE_NO_COSTS)

        return QualityAssessment(score=round(min(1.0, score), 3), issues=issues)

    @staticmethod
    def _has_cost_data(package: IntelligencePackage) -> bool:
        """True when at least one tool carries a parsable monthly price."""
        return any(extract_monthly_cost(t.pricing_details) > 0 for t in package.tools)

    def should_use_fallback(self, assessment: QualityAssessment) -> bool:
        return assessment.score < self.threshold


_default_policy = QualityPolicy()


def assess_intelligence_quality(package: IntelligencePackage) -> QualityAssessment:
    """Score a package with the default policy."""
    return _default_policy.assess(package)


def should_use_fallback(assessment: QualityAssessment) -> bool:
    """Apply the default policy's threshold to an assessment."""
    return _default_policy.should_use_fallback(assessment)
