# src/domain/models.py

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Document:
    """
    A searchable document, pre-split into ordered excerpts.
    Excerpt i (0-based) is reported as page i + 1.
    """
    document_id: str
    filename: str
    excerpts: Tuple[str, ...] = ()

    def __post_init__(self):
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "excerpts", tuple(self.excerpts))


@dataclass
class ScoredExcerpt:
    """
    A single excerpt together with its relevance to the current query.
    """
    document_id: str
    filename: str
    excerpt: str
    relevance_score: float
    page_number: int = 1

    def __repr__(self) -> str:
        preview = self.excerpt[:80].replace("\n", " ")
        return (
            f"ScoredExcerpt(score={self.relevance_score:.4f}, "
            f"source='{self.filename}', page={self.page_number}, "
            f"preview='{preview}...')"
        )


class SearchErrorCode(str, Enum):
    INVALID_QUERY = "invalid_query"
    PROCESSING_FAILED = "processing_failed"
    TIMEOUT = "timeout"


@dataclass
class SearchOutcome:
    """
    Result of one search invocation.
    Either a full success (results + summary) or a failure (error, no results).
    """
    query: str
    results: List[ScoredExcerpt] = field(default_factory=list)
    summary: Optional[str] = None
    success: bool = True
    error: Optional[str] = None
    error_code: Optional[SearchErrorCode] = None

    @classmethod
    def ok(cls, query: str, results: List[ScoredExcerpt], summary: str) -> "SearchOutcome":
        return cls(query=query, results=list(results), summary=summary)

    @classmethod
    def failure(cls, query: str, error: str, error_code: SearchErrorCode) -> "SearchOutcome":
        return cls(
            query=query,
            results=[],
            summary=None,
            success=False,
            error=error,
            error_code=error_code,
        )

    @property
    def top_result(self) -> Optional[ScoredExcerpt]:
        return self.results[0] if self.results else None


@dataclass
class DocumentMetadata:
    """
    Upload record kept by the metadata store. Unrelated to the search corpus.
    """
    id: str
    filename: str
    size: int
    type: str
    uploaded_at: str
    status: str = "ready"
