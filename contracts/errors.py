"""Exception taxonomy for the intelligence layer."""

from typing import Optional


class IntelligenceError(Exception):
    """Base class for intelligence gathering failures."""


class RetrievalError(IntelligenceError):
    """A retrieval backend call failed or returned an unusable payload."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation

    def __str__(self) -> str:
        base = super().__str__()
        if self.operation:
            return f"{self.operation}: {base}"
        return base


class RetrievalUnavailableError(IntelligenceError):
    """Every retrieval-backed stream failed; live data is unavailable."""
