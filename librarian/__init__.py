"""Librarian module: retrieval backends, the retrieval cache and the curated fallback corpus."""

from .retriever import IntelligenceRetriever, freshness_from_timestamp
from .local_retriever import LocalIntelligenceRetriever
from .http_retriever import HTTPIntelligenceRetriever
from .factory import get_retriever, list_retrievers
from .cache import RetrievalCache
from .fallback_corpus import FallbackCorpus

__all__ = [
    "IntelligenceRetriever",
    "freshness_from_timestamp",
    "LocalIntelligenceRetriever",
    "HTTPIntelligenceRetriever",
    "get_retriever",
    "list_retrievers",
    "RetrievalCache",
    "FallbackCorpus",
]
