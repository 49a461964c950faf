# src/infrastructure/template_synthesizer.py

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from src.domain.interfaces import AnswerSynthesizerPort
from src.domain.models import ScoredExcerpt


NOT_FOUND_MESSAGE = (
    "I couldn't find any relevant information in your uploaded documents "
    "for this query. Please try rephrasing your question or upload more "
    "relevant documents."
)

DEFAULT_TEMPLATE = (
    "Based on the information found in {filename}: {excerpt} "
    "Please refer to the complete document for additional details."
)


@dataclass(frozen=True)
class IntentCategory:
    """
    Keyword-triggered query intent and the answer template it selects.
    Templates may only reference {filename} and {excerpt}.
    """
    name: str
    keywords: Tuple[str, ...]
    template: str

    def __post_init__(self):
        object.__setattr__(
            self, "keywords", tuple(k.lower() for k in self.keywords)
        )

    def matches(self, lowered_query: str) -> bool:
        return any(keyword in lowered_query for keyword in self.keywords)

    def render(self, result: ScoredExcerpt) -> str:
        return self.template.format(filename=result.filename, excerpt=result.excerpt)


# Order matters: the first matching category wins.
DEFAULT_INTENT_CATEGORIES = (
    IntentCategory(
        "dental",
        ("dental", "teeth"),
        "According to the {filename}, {excerpt} This covers your dental care needs comprehensively.",
    ),
    IntentCategory(
        "vacation",
        ("vacation", "time off", "pto"),
        "Based on the policy outlined in {filename}: {excerpt} This policy applies to all eligible employees.",
    ),
    IntentCategory(
        "compensation",
        ("salary", "pay", "compensation"),
        "Regarding compensation as specified in {filename}: {excerpt} This represents the current compensation structure.",
    ),
    IntentCategory(
        "remote_work",
        ("remote", "work from home", "wfh"),
        "The remote work policy in {filename} states: {excerpt} Please coordinate with your manager for implementation.",
    ),
    IntentCategory(
        "payment",
        ("payment", "invoice", "billing"),
        "Payment terms according to {filename}: {excerpt} These terms are standard for all transactions.",
    ),
    IntentCategory(
        "termination",
        ("terminate", "end", "quit"),
        "Termination procedures per {filename}: {excerpt} Please ensure all requirements are met.",
    ),
    IntentCategory(
        "privacy",
        ("privacy", "data", "personal information"),
        "Privacy policy as detailed in {filename}: {excerpt} This ensures compliance with data protection regulations.",
    ),
    IntentCategory(
        "insurance",
        ("insurance", "medical", "health"),
        "Health insurance coverage per {filename}: {excerpt} Contact HR for enrollment details.",
    ),
    IntentCategory(
        "retirement",
        ("401k", "retirement", "pension"),
        "Retirement benefits outlined in {filename}: {excerpt} Speak with a financial advisor for optimization strategies.",
    ),
)

FALLBACK_CATEGORY_NAME = "default"


class TemplateAnswerSynthesizer(AnswerSynthesizerPort):
    """
    Builds the answer sentence by filling an intent template with the
    top excerpt and its filename. No text is generated beyond the template.
    """

    def __init__(
        self,
        categories: Sequence[IntentCategory] = DEFAULT_INTENT_CATEGORIES,
        default_template: str = DEFAULT_TEMPLATE,
        not_found_message: str = NOT_FOUND_MESSAGE,
    ):
        self._categories = tuple(categories)
        self._fallback = IntentCategory(FALLBACK_CATEGORY_NAME, (), default_template)
        self._not_found_message = not_found_message

    @property
    def categories(self) -> Tuple[IntentCategory, ...]:
        return self._categories

    def classify(self, query: str) -> IntentCategory:
        """First category whose keywords appear in the query, else the fallback."""
        lowered = query.lower()
        for category in self._categories:
            if category.matches(lowered):
                return category
        return self._fallback

    def synthesize(self, query: str, top_result: Optional[ScoredExcerpt]) -> str:
        if top_result is None:
            return self._not_found_message
        return self.classify(query).render(top_result)
