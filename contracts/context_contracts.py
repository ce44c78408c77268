"""Assessment context contracts: raw questionnaire context and its normalized form."""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from enum import Enum


class ICP(str, Enum):
    """Ideal Customer Profile segment."""
    ITSM = "itsm"
    AGENCY = "agency"
    SAAS = "saas"


class UseCase(str, Enum):
    """Canonical workflow challenge driving tool and pattern retrieval."""
    LEAD_QUALIFICATION = "lead-qualification"
    PROPOSAL_GENERATION = "proposal-generation"
    CONTENT_CREATION = "content-creation"
    MEETING_INTELLIGENCE = "meeting-intelligence"
    WORKFLOW_AUTOMATION = "workflow-automation"
    DATA_PROCESSING = "data-processing"


class BudgetTier(str, Enum):
    """Investment level selected in the assessment."""
    QUICK_WIN = "Quick Win"
    TRANSFORMATION = "Transformation"
    ENTERPRISE = "Enterprise"


class Complexity(str, Enum):
    """Implementation complexity tier; drives cost and effort defaults."""
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class AssessmentContext(BaseModel):
    """Business context supplied by the report pipeline.

    Every field is optional; downstream consumers apply their own defaults.
    """
    model_config = ConfigDict(frozen=True)

    business_type: Optional[str] = Field(None, description="Business-type label, e.g. 'Marketing Agency'")
    revenue_challenge: Optional[str] = Field(None, description="Primary revenue challenge, free text")
    solution_stack: Optional[str] = Field(None, description="Comma-separated technology stack description")
    investment_level: Optional[str] = Field(None, description="Investment level label, e.g. 'Quick Win'")


class NormalizedContext(BaseModel):
    """Context mapped into the canonical taxonomy; read-only downstream."""
    model_config = ConfigDict(frozen=True)

    icp: ICP = Field(ICP.AGENCY, description="Canonical ICP code")
    use_case: UseCase = Field(UseCase.WORKFLOW_AUTOMATION, description="Canonical use-case code")
    stack_items: List[str] = Field(default_factory=list, description="Trimmed, non-empty stack entries")
    budget_tier: BudgetTier = Field(BudgetTier.QUICK_WIN, description="Budget tier")
    complexity: Complexity = Field(Complexity.SIMPLE, description="Derived complexity tier")
    challenge: str = Field("workflow automation", description="Revenue challenge text used in queries and insights")

    @property
    def has_stack(self) -> bool:
        """True when at least one stack item was parsed."""
        return bool(self.stack_items)
