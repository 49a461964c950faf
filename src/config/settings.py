# src/config/settings.py

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.policy import (
    DEFAULT_MIN_RELEVANCE,
    DEFAULT_RESPONSE_DELAY_SECONDS,
    DEFAULT_SEARCH_TIMEOUT_SECONDS,
    DEFAULT_TOP_K,
    ResultMode,
)


class SearchSettings(BaseSettings):
    """
    Runtime configuration. Every field can be overridden with a
    DOCQA_-prefixed environment variable or a .env file.
    """

    # ── Ranking ───────────────────────────────────────────────────────────
    min_relevance: float = Field(DEFAULT_MIN_RELEVANCE, ge=0.0, lt=1.0)
    result_mode: ResultMode = ResultMode.BEST_ONLY
    top_k: int = Field(DEFAULT_TOP_K, ge=1)

    # ── Request handling ─────────────────────────────────────────────────
    response_delay_seconds: float = Field(DEFAULT_RESPONSE_DELAY_SECONDS, ge=0.0)
    search_timeout_seconds: Optional[float] = Field(DEFAULT_SEARCH_TIMEOUT_SECONDS, gt=0.0)

    # Optional YAML file replacing topic groups / intent templates
    rules_path: Optional[str] = None

    # ── Server ────────────────────────────────────────────────────────────
    allowed_origins: List[str] = [
        "http://localhost:5173",
        "http://localhost:8080",
        "http://127.0.0.1:8080",
    ]
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="DOCQA_",
        env_file=".env",
        extra="ignore",
    )
