# src/infrastructure/keyword_scorer.py

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from src.domain.interfaces import RelevanceScorerPort


# Score increments
TOKEN_MATCH_WEIGHT = 0.3
TOPIC_MATCH_WEIGHT = 0.5
EXACT_QUERY_WEIGHT = 0.8
PHRASE_MATCH_WEIGHT = 0.6

# Tokens of this length or shorter carry no signal ("a", "is", "of")
MIN_TOKEN_LENGTH = 2


@dataclass(frozen=True)
class TopicGroup:
    """
    Keywords that stand for the same subject.
    Query and excerpt may match different keywords of one group.
    """
    name: str
    keywords: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(
            self, "keywords", tuple(k.lower() for k in self.keywords)
        )

    def matches(self, lowered_text: str) -> bool:
        return any(keyword in lowered_text for keyword in self.keywords)


DEFAULT_TOPIC_GROUPS = (
    TopicGroup("dental", ("dental", "teeth", "tooth", "dentist", "oral", "cavity", "filling")),
    TopicGroup("medical", ("medical", "health", "insurance", "coverage", "treatment", "doctor", "hospital")),
    TopicGroup("payment", ("payment", "pay", "cost", "fee", "price", "invoice", "billing", "charge")),
    TopicGroup("vacation", ("vacation", "leave", "holiday", "time off", "pto", "absence")),
    TopicGroup("termination", ("termination", "terminate", "end", "cancel", "quit", "fire", "dismiss")),
    TopicGroup("privacy", ("privacy", "data", "confidential", "gdpr", "personal", "information")),
    TopicGroup("benefits", ("benefits", "insurance", "coverage", "bonus", "compensation")),
)


def tokenize(query: str) -> List[str]:
    """Lowercased whitespace tokens longer than MIN_TOKEN_LENGTH."""
    return [t for t in query.lower().split() if len(t) > MIN_TOKEN_LENGTH]


class KeywordRelevanceScorer(RelevanceScorerPort):
    """
    Lexical relevance heuristic.

    Signals (summed, then clamped to 1.0):
    - each query token found in the excerpt         +0.3
    - each topic group hit by both query and excerpt +0.5
    - whole query found verbatim                     +0.8
    - multi-token phrase found verbatim              +0.6

    Stand-in for embedding similarity: any replacement must keep the
    same signature and the [0, 1] range.
    """

    def __init__(self, topic_groups: Sequence[TopicGroup] = DEFAULT_TOPIC_GROUPS):
        self._topic_groups = tuple(topic_groups)

    @property
    def topic_groups(self) -> Tuple[TopicGroup, ...]:
        return self._topic_groups

    def score(self, query: str, excerpt: str) -> float:
        query_lower = query.lower()
        excerpt_lower = excerpt.lower()
        tokens = tokenize(query_lower)

        score = 0.0

        # ── Direct keyword matches ────────────────────────────────────────
        for token in tokens:
            if token in excerpt_lower:
                score += TOKEN_MATCH_WEIGHT

        # ── Topic groups ──────────────────────────────────────────────────
        for group in self._topic_groups:
            if group.matches(query_lower) and group.matches(excerpt_lower):
                score += TOPIC_MATCH_WEIGHT

        # ── Exact query ───────────────────────────────────────────────────
        if query_lower and query_lower in excerpt_lower:
            score += EXACT_QUERY_WEIGHT

        # ── Partial phrase (short tokens removed) ─────────────────────────
        if len(tokens) > 1 and " ".join(tokens) in excerpt_lower:
            score += PHRASE_MATCH_WEIGHT

        return min(1.0, score)
