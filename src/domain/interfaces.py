# src/domain/interfaces.py

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from .models import Document, DocumentMetadata, ScoredExcerpt


class CorpusPort(ABC):
    """
    Read-only access to the searchable documents.
    Seam for a future ingestion pipeline.
    """

    @abstractmethod
    def get_documents(self, ids: Optional[Iterable[str]] = None) -> List[Document]:
        """
        Return documents in corpus order.
        When ids is non-empty, only documents whose id is in ids are returned.
        """
        ...


class RelevanceScorerPort(ABC):
    """
    Relevance between a query and one excerpt, always in [0, 1].
    An embedding similarity function belongs behind this port.
    """

    @abstractmethod
    def score(self, query: str, excerpt: str) -> float: ...


class AnswerSynthesizerPort(ABC):
    """
    Turns the top-ranked excerpt into a single answer string.
    A language-model call belongs behind this port.
    """

    @abstractmethod
    def synthesize(self, query: str, top_result: Optional[ScoredExcerpt]) -> str: ...


class MetadataStorePort(ABC):

    @abstractmethod
    def add(self, filename: str, size: int, content_type: str) -> DocumentMetadata: ...

    @abstractmethod
    def list_all(self) -> List[DocumentMetadata]: ...

    @abstractmethod
    def delete(self, document_id: str) -> None:
        """Raise MetadataNotFoundError when no record has this id."""
        ...
