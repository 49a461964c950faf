# src/application/factory.py

from typing import Optional

from src.application.ranker import ResultRanker
from src.application.search_service import DocumentSearchService
from src.config.rules_loader import RuleTables, load_rule_tables
from src.config.settings import SearchSettings
from src.domain.interfaces import CorpusPort
from src.infrastructure.corpus_store import InMemoryCorpusStore
from src.infrastructure.keyword_scorer import KeywordRelevanceScorer
from src.infrastructure.template_synthesizer import TemplateAnswerSynthesizer


def build_search_service(
    settings: SearchSettings,
    corpus: Optional[CorpusPort] = None,
) -> DocumentSearchService:
    """Wire corpus, scorer, ranker and synthesizer from settings."""
    rules = load_rule_tables(settings.rules_path) if settings.rules_path else RuleTables()

    ranker = ResultRanker(
        scorer=KeywordRelevanceScorer(rules.topic_groups),
        min_relevance=settings.min_relevance,
        mode=settings.result_mode,
        top_k=settings.top_k,
    )
    synthesizer = TemplateAnswerSynthesizer(
        categories=rules.intent_categories,
        default_template=rules.default_template,
    )

    return DocumentSearchService(
        corpus=corpus if corpus is not None else InMemoryCorpusStore(),
        ranker=ranker,
        synthesizer=synthesizer,
        response_delay_seconds=settings.response_delay_seconds,
        timeout_seconds=settings.search_timeout_seconds,
    )
