# src/domain/policy.py

from enum import Enum


# Scores must be strictly above this to be returned
DEFAULT_MIN_RELEVANCE = 0.3
DEFAULT_TOP_K = 10

# Simulated inference latency before an answered search responds
DEFAULT_RESPONSE_DELAY_SECONDS = 1.0
DEFAULT_SEARCH_TIMEOUT_SECONDS = 10.0


class ResultMode(str, Enum):
    """How many ranked excerpts a search returns."""
    BEST_ONLY = "best-only"
    TOP_K = "top-k"
