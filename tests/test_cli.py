# tests/test_cli.py

import pytest
from rich.console import Console

from src.domain.models import ScoredExcerpt, SearchErrorCode, SearchOutcome
from src.interface import cli


@pytest.fixture
def recorded(monkeypatch) -> Console:
    console = Console(record=True, width=100, color_system=None)
    monkeypatch.setattr(cli, "console", console)
    return console


@pytest.mark.parametrize("score, color", [
    (1.0, "bright_green"),
    (0.8, "bright_green"),
    (0.65, "yellow"),
    (0.31, "orange3"),
])
def test_score_bands(score, color):
    assert cli._score_to_color(score) == color


def test_failed_outcome_shows_error_code(recorded):
    outcome = SearchOutcome.failure("q", "Search timed out", SearchErrorCode.TIMEOUT)

    cli.display_outcome(outcome)

    text = recorded.export_text()
    assert "timeout" in text
    assert "Search timed out" in text


def test_outcome_lists_source_and_answer(recorded):
    result = ScoredExcerpt("1", "Employment_Contract_2024.pdf", "Dental coverage included.", 0.9, 2)
    outcome = SearchOutcome.ok("dental", [result], "Dental is covered.")

    cli.display_outcome(outcome)

    text = recorded.export_text()
    assert "Employment_Contract_2024.pdf" in text
    assert "(page 2)" in text
    assert "Dental is covered." in text


def test_ask_continue_defaults_to_yes(monkeypatch):
    monkeypatch.setattr(cli.Confirm, "ask", lambda *args, **kwargs: kwargs["default"])
    assert cli.ask_continue() is True
