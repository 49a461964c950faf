# src/application/ranker.py

import logging
from typing import List, Sequence

import numpy as np

from src.domain.interfaces import RelevanceScorerPort
from src.domain.models import Document, ScoredExcerpt
from src.domain.policy import DEFAULT_MIN_RELEVANCE, DEFAULT_TOP_K, ResultMode


logger = logging.getLogger(__name__)


class ResultRanker:
    """
    Scores every excerpt of the candidate documents, drops those at or
    below min_relevance and returns the rest by descending score.

    Ties keep corpus order (document order, then page order).
    BEST_ONLY returns at most one excerpt; TOP_K at most top_k.
    """

    def __init__(
        self,
        scorer: RelevanceScorerPort,
        min_relevance: float = DEFAULT_MIN_RELEVANCE,
        mode: ResultMode = ResultMode.BEST_ONLY,
        top_k: int = DEFAULT_TOP_K,
    ):
        if top_k < 1:
            raise ValueError(f"top_k must be at least 1, got {top_k}")
        self._scorer = scorer
        self._min_relevance = min_relevance
        self._mode = ResultMode(mode)
        self._top_k = top_k

    @property
    def mode(self) -> ResultMode:
        return self._mode

    @property
    def min_relevance(self) -> float:
        return self._min_relevance

    @property
    def limit(self) -> int:
        return 1 if self._mode is ResultMode.BEST_ONLY else self._top_k

    def rank(self, query: str, documents: Sequence[Document]) -> List[ScoredExcerpt]:
        candidates: List[ScoredExcerpt] = []

        for document in documents:
            for page_number, excerpt in enumerate(document.excerpts, start=1):
                score = self._scorer.score(query, excerpt)
                if score > self._min_relevance:
                    candidates.append(ScoredExcerpt(
                        document_id=document.document_id,
                        filename=document.filename,
                        excerpt=excerpt,
                        relevance_score=float(score),
                        page_number=page_number,
                    ))

        if not candidates:
            logger.debug("No excerpt above %.2f for query %r", self._min_relevance, query)
            return []

        scores = np.array([c.relevance_score for c in candidates], dtype=np.float64)
        # Stable sort on negated scores keeps corpus order on ties
        order = np.argsort(-scores, kind="stable")[: self.limit]

        return [candidates[i] for i in order]
