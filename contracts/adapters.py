"""Adapters between contracts and the report pipeline.

Pure functions that convert raw questionnaire answers into an
AssessmentContext, and an IntelligencePackage into template variables.
"""

from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from contracts.context_contracts import AssessmentContext
from contracts.intelligence_contracts import IntelligencePackage


def _first_text(*values: Any) -> Optional[str]:
    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def assessment_from_answers(answers: Mapping[str, Any]) -> AssessmentContext:
    """Build an AssessmentContext from raw assessment answers.

    Accepts the questionnaire's keys: ``icpType`` (alias ``businessType``),
    ``revenueChallenge`` (else the first of ``challenges``), ``solutionStack``
    (else ``techStack`` joined with commas) and ``investmentLevel``.
    Missing answers stay None; the normalizer applies defaults.
    """
    challenges = answers.get("challenges") or []
    first_challenge = challenges[0] if isinstance(challenges, (list, tuple)) and challenges else None

    stack = answers.get("solutionStack")
    tech_stack = answers.get("techStack")
    if not _first_text(stack) and isinstance(tech_stack, (list, tuple)):
        stack = ", ".join(str(item) for item in tech_stack if str(item).strip())

    return AssessmentContext(
        business_type=_first_text(answers.get("icpType"), answers.get("businessType")),
        revenue_challenge=_first_text(answers.get("revenueChallenge"), first_challenge),
        solution_stack=_first_text(stack),
        investment_level=_first_text(answers.get("investmentLevel")),
    )


def package_to_template_context(
    package: IntelligencePackage,
    assessment: Optional[AssessmentContext] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Flatten a package into the substitution variables used by report templates."""
    now = now or datetime.now()
    data = package.model_dump(mode="json")
    implementations_tracked = sum(p.times_implemented or 0 for p in package.patterns)

    return {
        "currentMonth": now.strftime("%B %Y"),
        "intelligenceData": {
            "toolsAnalyzed": len(package.tools),
            "implementationsTracked": implementations_tracked,
        },
        "intelligence": {
            "benchmarks": data["benchmarks"]["metrics"] if package.benchmarks else {},
            "patterns": data["patterns"],
            "tools": data["tools"],
            "costs": data["costs"],
            "trending": data["trends"],
            "orchestrationTools": [t.name for t in package.tools if t.orchestration_compatible],
            "dataPoints": {
                "industrySpecific": package.metadata.industry_data_points or "10,000+",
            },
            "implementations": {
                "successful": package.metadata.successful_implementations or "200+",
            },
        },
        "assessmentData": assessment.model_dump() if assessment else {},
    }
