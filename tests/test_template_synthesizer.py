# tests/test_template_synthesizer.py

from src.domain.models import ScoredExcerpt
from src.infrastructure.template_synthesizer import (
    DEFAULT_TEMPLATE,
    NOT_FOUND_MESSAGE,
    IntentCategory,
    TemplateAnswerSynthesizer,
)


DENTAL_EXCERPT = (
    "Dental insurance covers 100% of preventive care including cleanings and X-rays."
)


def _make_result(excerpt: str = DENTAL_EXCERPT, filename: str = "Benefits_Handbook_2024.pdf") -> ScoredExcerpt:
    return ScoredExcerpt(
        document_id="5",
        filename=filename,
        excerpt=excerpt,
        relevance_score=1.0,
        page_number=1,
    )


def test_dental_query_uses_dental_template():
    synthesizer = TemplateAnswerSynthesizer()

    assert synthesizer.classify("dental coverage").name == "dental"

    answer = synthesizer.synthesize("dental coverage", _make_result())
    assert answer == (
        "According to the Benefits_Handbook_2024.pdf, " + DENTAL_EXCERPT
        + " This covers your dental care needs comprehensively."
    )


def test_missing_result_returns_not_found_message():
    assert TemplateAnswerSynthesizer().synthesize("anything", None) == NOT_FOUND_MESSAGE


def test_first_matching_category_wins():
    synthesizer = TemplateAnswerSynthesizer()

    # dental precedes compensation, vacation precedes compensation
    assert synthesizer.classify("Does my pay cover dental?").name == "dental"
    assert synthesizer.classify("is PTO paid").name == "vacation"


def test_classification_is_case_insensitive():
    assert TemplateAnswerSynthesizer().classify("RETIREMENT plan").name == "retirement"


def test_unmatched_query_falls_back_to_default_template():
    synthesizer = TemplateAnswerSynthesizer()
    result = _make_result(excerpt="Cookies are used for authentication.", filename="Privacy.docx")

    assert synthesizer.classify("what about cookies").name == "default"
    assert synthesizer.synthesize("what about cookies", result) == DEFAULT_TEMPLATE.format(
        filename="Privacy.docx", excerpt="Cookies are used for authentication."
    )


def test_answer_contains_excerpt_verbatim():
    synthesizer = TemplateAnswerSynthesizer()
    for query in ["salary", "remote work", "invoice", "privacy", "health", "401k", "hello there"]:
        answer = synthesizer.synthesize(query, _make_result())
        assert DENTAL_EXCERPT in answer
        assert "Benefits_Handbook_2024.pdf" in answer


def test_custom_categories_and_default():
    synthesizer = TemplateAnswerSynthesizer(
        categories=[IntentCategory("pets", ("Cat",), "Pets ({filename}): {excerpt}")],
        default_template="Other ({filename}): {excerpt}",
    )
    result = _make_result(excerpt="Cats sleep.", filename="pets.txt")

    assert synthesizer.synthesize("my cat", result) == "Pets (pets.txt): Cats sleep."
    assert synthesizer.synthesize("dental", result) == "Other (pets.txt): Cats sleep."
