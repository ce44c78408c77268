"""Curated fallback corpus contracts."""

from pydantic import BaseModel, Field
from typing import Dict, List

from .context_contracts import Complexity


class FallbackTool(BaseModel):
    """A curated, always-valid tool recommendation."""
    name: str
    category: str
    description: str
    pricing: str
    integrations: List[str]
    best_for: str
    pros: List[str] = Field(default_factory=list)
    cons: List[str] = Field(default_factory=list)
    implementation_effort: str
    icp_score: float = Field(..., ge=0.0, le=1.0)


class FallbackPattern(BaseModel):
    """A proven reference architecture for one complexity tier."""
    name: str
    description: str
    architecture: str
    timeline: str
    cost: str
    stack: List[str]
    complexity: Complexity
    pros: List[str] = Field(default_factory=list)
    cons: List[str] = Field(default_factory=list)
    success_indicators: List[str] = Field(default_factory=list)
    common_pitfalls: List[str] = Field(default_factory=list)


class FallbackIntelligence(BaseModel):
    """Curated data selected for one (challenge, ICP, complexity) combination."""
    tools: List[FallbackTool] = Field(..., min_length=1)
    pattern: FallbackPattern
    benchmarks: Dict[str, str] = Field(..., min_length=1)
    recommendations: List[str] = Field(default_factory=list)
