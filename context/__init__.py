"""Context module for mapping assessment answers into the canonical taxonomy."""

from .normalizer import ContextNormalizer, normalize_context, assess_complexity

__all__ = [
    "ContextNormalizer",
    "normalize_context",
    "assess_complexity",
]
