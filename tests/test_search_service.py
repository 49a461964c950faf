# tests/test_search_service.py

import asyncio
import time

import pytest
from unittest.mock import MagicMock

from src.application.ranker import ResultRanker
from src.application.search_service import DocumentSearchService
from src.domain.exceptions import EmptyQueryError
from src.domain.interfaces import RelevanceScorerPort
from src.domain.models import Document, SearchErrorCode
from src.domain.policy import ResultMode
from src.infrastructure.corpus_store import InMemoryCorpusStore
from src.infrastructure.keyword_scorer import KeywordRelevanceScorer
from src.infrastructure.template_synthesizer import NOT_FOUND_MESSAGE, TemplateAnswerSynthesizer


class _SlowScorer(RelevanceScorerPort):
    """Blocks on every excerpt, like a heavy model would."""

    def score(self, query: str, excerpt: str) -> float:
        time.sleep(0.02)
        return 0.0


def _make_service(
    synthesizer=None,
    mode: ResultMode = ResultMode.BEST_ONLY,
    delay: float = 0.0,
    timeout: float = None,
) -> DocumentSearchService:
    return DocumentSearchService(
        corpus=InMemoryCorpusStore(),
        ranker=ResultRanker(KeywordRelevanceScorer(), mode=mode),
        synthesizer=synthesizer or TemplateAnswerSynthesizer(),
        response_delay_seconds=delay,
        timeout_seconds=timeout,
    )


# ── Synchronous pipeline ─────────────────────────────────────────────────────

def test_search_raises_on_empty_query():
    service = _make_service()
    with pytest.raises(EmptyQueryError, match="empty"):
        service.search("   ")
    with pytest.raises(ValueError):
        service.search(None)


def test_search_returns_best_result_and_summary():
    outcome = _make_service().search("dental coverage")

    assert outcome.success is True
    assert len(outcome.results) == 1
    assert outcome.top_result.document_id == "1"
    assert outcome.top_result.page_number == 1
    assert outcome.summary.startswith("According to the Employment_Contract_2024.pdf, ")


def test_search_echoes_query_as_given():
    outcome = _make_service().search("  dental coverage \n")

    assert outcome.query == "  dental coverage \n"
    assert outcome.top_result.document_id == "1"


def test_search_passes_document_filter_to_corpus():
    corpus = MagicMock()
    corpus.get_documents.return_value = [Document("2", "p.docx", ["personal data here"])]
    service = DocumentSearchService(
        corpus=corpus,
        ranker=ResultRanker(KeywordRelevanceScorer()),
        synthesizer=TemplateAnswerSynthesizer(),
    )

    service.search("personal data", ["2"])

    corpus.get_documents.assert_called_once_with(["2"])


def test_document_filter_restricts_results():
    outcome = _make_service(mode=ResultMode.TOP_K).search("personal data", ["2"])

    assert outcome.results
    assert all(r.document_id == "2" for r in outcome.results)


def test_no_match_returns_not_found_summary():
    outcome = _make_service().search("xyzzy plugh")

    assert outcome.success is True
    assert outcome.results == []
    assert outcome.summary == NOT_FOUND_MESSAGE


def test_same_query_is_deterministic():
    service = _make_service()
    first = service.search("How many vacation days?")
    second = service.search("How many vacation days?")

    assert first.top_result == second.top_result
    assert first.summary == second.summary


def test_top_k_mode_returns_sorted_list():
    outcome = _make_service(mode=ResultMode.TOP_K).search("insurance coverage")
    scores = [r.relevance_score for r in outcome.results]

    assert 1 < len(scores) <= 10
    assert scores == sorted(scores, reverse=True)


def test_corpus_summary_lists_documents():
    summary = _make_service().corpus_summary()

    assert [d["id"] for d in summary] == ["1", "2", "3", "4", "5"]
    assert summary[0]["excerpt_count"] == 6


# ── Async request boundary ───────────────────────────────────────────────────

async def test_handle_search_reports_empty_query():
    outcome = await _make_service().handle_search("  ")

    assert outcome.success is False
    assert outcome.results == []
    assert outcome.error == "Query cannot be empty"
    assert outcome.error_code is SearchErrorCode.INVALID_QUERY


async def test_handle_search_reports_processing_failure():
    synthesizer = MagicMock()
    synthesizer.synthesize.side_effect = RuntimeError("model offline")
    service = _make_service(synthesizer=synthesizer)

    outcome = await service.handle_search("dental coverage")

    assert outcome.success is False
    assert outcome.results == []
    assert outcome.summary is None
    assert outcome.error == "Search processing failed"
    assert outcome.error_code is SearchErrorCode.PROCESSING_FAILED


async def test_handle_search_success():
    outcome = await _make_service().handle_search("invoice billing", ["3"])

    assert outcome.success is True
    assert outcome.error is None
    assert outcome.top_result.filename == "Vendor_Agreement_TechCorp.pdf"
    assert outcome.top_result.page_number == 1
    assert outcome.summary.startswith("Payment terms according to Vendor_Agreement_TechCorp.pdf: ")


async def test_deadline_covers_response_delay():
    service = _make_service(delay=5.0)

    outcome = await service.handle_search("dental coverage", timeout=0.05)

    assert outcome.success is False
    assert outcome.error_code is SearchErrorCode.TIMEOUT


async def test_not_found_skips_response_delay():
    service = _make_service(delay=5.0)

    outcome = await service.handle_search("xyzzy plugh", timeout=0.5)

    assert outcome.success is True
    assert outcome.summary == NOT_FOUND_MESSAGE


async def test_configured_timeout_applies_by_default():
    service = _make_service(delay=5.0, timeout=0.05)

    outcome = await service.handle_search("dental coverage")

    assert outcome.error_code is SearchErrorCode.TIMEOUT


async def test_explicit_none_timeout_disables_deadline():
    service = _make_service(delay=0.2, timeout=0.05)

    outcome = await service.handle_search("dental coverage", timeout=None)

    assert outcome.success is True
    assert outcome.top_result.document_id == "1"


async def test_deadline_interrupts_slow_scoring():
    service = DocumentSearchService(
        corpus=InMemoryCorpusStore(),
        ranker=ResultRanker(_SlowScorer()),
        synthesizer=TemplateAnswerSynthesizer(),
        response_delay_seconds=0.0,
    )

    started = time.monotonic()
    outcome = await service.handle_search("dental", timeout=0.05)

    assert outcome.success is False
    assert outcome.error_code is SearchErrorCode.TIMEOUT
    assert time.monotonic() - started < 0.4


async def test_handle_search_echoes_query_as_given():
    outcome = await _make_service().handle_search(" invoice billing ", ["3"])

    assert outcome.success is True
    assert outcome.query == " invoice billing "


async def test_cancellation_propagates():
    service = _make_service(delay=5.0)
    task = asyncio.create_task(service.handle_search("dental coverage"))
    await asyncio.sleep(0.01)

    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
