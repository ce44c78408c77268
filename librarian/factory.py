"""Factory for creating retrieval backends."""

from typing import Dict, List, Optional, Type

from config import settings
from librarian.retriever import IntelligenceRetriever
from librarian.local_retriever import LocalIntelligenceRetriever
from librarian.http_retriever import HTTPIntelligenceRetriever


# Registry of available backends
RETRIEVERS: Dict[str, Type[IntelligenceRetriever]] = {
    "local": LocalIntelligenceRetriever,
    "http": HTTPIntelligenceRetriever,
}


def get_retriever(backend: Optional[str] = None) -> IntelligenceRetriever:
    """Get a retrieval backend instance.

    Args:
        backend: Backend name (local, http). Defaults to settings.retriever_backend.

    Returns:
        IntelligenceRetriever instance

    Raises:
        ValueError: If the backend name is unknown
    """
    name = (backend or settings.retriever_backend).lower()
    if name not in RETRIEVERS:
        raise ValueError(f"Unknown retriever backend: {name}. Available: {list_retrievers()}")
    return RETRIEVERS[name]()


def list_retrievers() -> List[str]:
    """List registered backend names."""
    return list(RETRIEVERS.keys())
