"""HTTP client for a hosted intelligence API.

Endpoints (JSON envelope ``{"code": 0, "data": ..., "message": ...}``):

- POST /api/v1/retrieval            {"question", "context"} -> {"tools": [...], "patterns": [...]}
- GET  /api/v1/benchmarks/<icp>     -> {metric: value} or null
- GET  /api/v1/trends/<icp>         -> {"rising", "declining", "new", ...} or null
- GET  /api/v1/freshness            -> {"updated_at": ISO timestamp}
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from config import settings
from contracts import RetrievalError, RetrievalFilter, RetrievalResult
from librarian.retriever import IntelligenceRetriever, freshness_from_timestamp
from log_setup import get_logger


logger = get_logger(__name__)


class HTTPIntelligenceRetriever(IntelligenceRetriever):
    """Thin wrapper over the hosted intelligence API.

    A requests.Session is not shared across threads; each call opens its own
    connection so the retriever can serve concurrent streams.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.retrieval_api_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.retrieval_api_key
        self.timeout = timeout or settings.retrieval_timeout_seconds

    @property
    def name(self) -> str:
        return "http"

    def is_available(self) -> bool:
        """Return True if an API key is set (no ping)."""
        return bool(self.api_key)

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _request(self, method: str, path: str, operation: str, **kwargs: Any) -> Any:
        """Send a request and unwrap the envelope; raise RetrievalError on any failure."""
        url = f"{self.base_url}{path}"
        try:
            r = requests.request(method, url, headers=self._headers(), timeout=self.timeout, **kwargs)
            r.raise_for_status()
            data = r.json()
        except requests.RequestException as e:
            raise RetrievalError(str(e), operation=operation) from e
        except ValueError as e:
            raise RetrievalError(f"invalid JSON from {url}", operation=operation) from e

        if not isinstance(data, dict):
            raise RetrievalError(f"unexpected response shape from {url}", operation=operation)
        if data.get("code") != 0:
            raise RetrievalError(data.get("message", f"{operation} failed"), operation=operation)
        return data.get("data")

    def retrieve(self, query: str, filter_context: RetrievalFilter) -> RetrievalResult:
        payload = self._request(
            "POST",
            "/api/v1/retrieval",
            "retrieve",
            json={
                "question": query.strip(),
                "context": filter_context.model_dump(exclude_none=True),
            },
        )
        if payload is None:
            return RetrievalResult()
        if not isinstance(payload, dict):
            raise RetrievalError("retrieval payload is not an object", operation="retrieve")
        try:
            return RetrievalResult.model_validate(payload)
        except ValidationError as e:
            raise RetrievalError(f"malformed retrieval payload: {e}", operation="retrieve") from e

    def get_benchmarks(self, icp: str) -> Optional[Dict[str, Any]]:
        payload = self._request("GET", f"/api/v1/benchmarks/{icp}", "benchmarks")
        if payload is not None and not isinstance(payload, dict):
            raise RetrievalError("benchmarks payload is not an object", operation="benchmarks")
        return payload or None

    def get_market_context(self, icp: str) -> Optional[Dict[str, Any]]:
        payload = self._request("GET", f"/api/v1/trends/{icp}", "trends")
        if payload is not None and not isinstance(payload, dict):
            raise RetrievalError("trends payload is not an object", operation="trends")
        return payload or None

    def get_data_freshness(self) -> float:
        payload = self._request("GET", "/api/v1/freshness", "freshness")
        updated_at = (payload or {}).get("updated_at") if isinstance(payload, dict) else None
        if not updated_at:
            return 0.0
        try:
            return freshness_from_timestamp(datetime.fromisoformat(updated_at))
        except ValueError as e:
            raise RetrievalError(f"invalid updated_at '{updated_at}'", operation="freshness") from e
