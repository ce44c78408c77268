"""Configuration settings for the revenue intelligence layer."""

# Load .env into os.environ so backend credentials set there are picked up
try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Literal
from pathlib import Path


DEFAULT_LOCAL_INTELLIGENCE_PATH = str(
    Path(__file__).resolve().parent / "librarian" / "data" / "local_intelligence.json"
)


class Settings(BaseSettings):
    """Global settings for the intelligence orchestrator.

    Settings can be overridden via environment variables with REVINTEL_ prefix.
    Example: REVINTEL_MIN_ICP_SCORE=0.7
    """

    # Retrieval backend
    retriever_backend: Literal["local", "http"] = Field(
        default="local",
        description="Retrieval backend: bundled local database or hosted HTTP API"
    )
    local_intelligence_path: str = Field(
        default=DEFAULT_LOCAL_INTELLIGENCE_PATH,
        description="JSON intelligence database used by the local backend"
    )
    retrieval_api_url: str = Field(
        default="http://localhost:8600",
        description="Base URL of the hosted intelligence API"
    )
    retrieval_api_key: str = Field(
        default="",
        description="Bearer token for the hosted intelligence API (env: REVINTEL_RETRIEVAL_API_KEY)"
    )
    retrieval_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout for the hosted intelligence API"
    )

    # Tools stream policy
    min_icp_score: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Minimum ICP fit score for a tool to be recommended"
    )
    max_tools: int = Field(
        default=10,
        ge=1,
        description="Maximum tools kept in a package"
    )

    # Quality policy
    fallback_quality_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Quality score below which curated fallback data is blended in"
    )

    # Concurrency
    stream_workers: int = Field(
        default=4,
        ge=1,
        description="Worker threads used to fetch independent streams"
    )

    # Patterns stream
    adoption_estimator: Literal["deterministic", "random"] = Field(
        default="deterministic",
        description="Estimator for pattern adoption counts the backend does not supply"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level for the intelligence loggers"
    )

    model_config = {
        "env_prefix": "REVINTEL_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Create singleton instance
settings = Settings()
