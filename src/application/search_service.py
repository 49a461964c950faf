# src/application/search_service.py

import asyncio
import logging
from typing import Iterable, List, Optional

from src.application.ranker import ResultRanker
from src.domain.exceptions import EmptyQueryError
from src.domain.interfaces import AnswerSynthesizerPort, CorpusPort
from src.domain.models import SearchErrorCode, SearchOutcome
from src.domain.policy import DEFAULT_RESPONSE_DELAY_SECONDS


logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "Query cannot be empty"
PROCESSING_FAILED_MESSAGE = "Search processing failed"
TIMEOUT_MESSAGE = "Search timed out"

# handle_search() default: use the deadline given at construction
CONFIGURED_TIMEOUT = object()


class DocumentSearchService:
    """
    Core use case: answer a question from the corpus.

    Corpus -> ranker (scorer inside) -> synthesizer -> SearchOutcome.

    search() is the plain synchronous pipeline and raises on bad input.
    handle_search() is the request boundary: it never raises for
    validation or processing faults, applies the response delay and
    enforces the deadline over scoring and delay alike.
    """

    def __init__(
        self,
        corpus: CorpusPort,
        ranker: ResultRanker,
        synthesizer: AnswerSynthesizerPort,
        response_delay_seconds: float = DEFAULT_RESPONSE_DELAY_SECONDS,
        timeout_seconds: Optional[float] = None,
    ):
        self._corpus = corpus
        self._ranker = ranker
        self._synthesizer = synthesizer
        self._response_delay = response_delay_seconds
        self._timeout = timeout_seconds

    def search(
        self,
        query: Optional[str],
        document_ids: Optional[Iterable[str]] = None,
    ) -> SearchOutcome:
        """
        Rank and answer. The outcome echoes the caller's query as given;
        only the stripped text is scored.
        """
        text = (query or "").strip()
        if not text:
            raise EmptyQueryError(EMPTY_QUERY_MESSAGE)

        documents = self._corpus.get_documents(document_ids)
        results = self._ranker.rank(text, documents)
        top_result = results[0] if results else None
        summary = self._synthesizer.synthesize(text, top_result)

        logger.debug(
            "Query %r over %d documents -> %d result(s)",
            text, len(documents), len(results),
        )
        return SearchOutcome.ok(query=query, results=results, summary=summary)

    async def handle_search(
        self,
        query: Optional[str],
        document_ids: Optional[Iterable[str]] = None,
        timeout=CONFIGURED_TIMEOUT,
    ) -> SearchOutcome:
        """
        timeout: seconds, or None for no deadline. Left out, the
        deadline given at construction applies.
        """
        deadline = self._timeout if timeout is CONFIGURED_TIMEOUT else timeout

        try:
            return await asyncio.wait_for(
                self._search_with_delay(query, document_ids),
                timeout=deadline,
            )
        except EmptyQueryError as error:
            return SearchOutcome.failure(
                query or "", str(error), SearchErrorCode.INVALID_QUERY
            )
        except asyncio.TimeoutError:
            logger.warning("Search for %r exceeded %.2fs deadline", query, deadline)
            return SearchOutcome.failure(
                query or "", TIMEOUT_MESSAGE, SearchErrorCode.TIMEOUT
            )
        except Exception:
            logger.exception("Search processing failed for query %r", query)
            return SearchOutcome.failure(
                query or "", PROCESSING_FAILED_MESSAGE, SearchErrorCode.PROCESSING_FAILED
            )

    async def _search_with_delay(
        self,
        query: Optional[str],
        document_ids: Optional[Iterable[str]],
    ) -> SearchOutcome:
        # Scoring runs in a worker thread so the deadline can fire mid-pipeline
        # and other requests keep the event loop
        outcome = await asyncio.to_thread(self.search, query, document_ids)
        # Simulated inference latency; only answered queries wait
        if outcome.results and self._response_delay > 0:
            await asyncio.sleep(self._response_delay)
        return outcome

    def corpus_summary(self) -> List[dict]:
        """Searchable documents with their excerpt counts."""
        return [
            {
                "id": d.document_id,
                "filename": d.filename,
                "excerpt_count": len(d.excerpts),
            }
            for d in self._corpus.get_documents()
        ]

    @property
    def ranker(self) -> ResultRanker:
        return self._ranker
