# src/interface/cli.py

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich.text import Text

from src.domain.models import SearchErrorCode, SearchOutcome


console = Console()


def display_welcome_banner() -> None:
    console.print(Panel.fit(
        "[bold cyan]📄 Document Q&A[/bold cyan]\n"
        "[dim]Ask questions, get the best matching excerpt and an answer[/dim]",
        box=box.DOUBLE,
        border_style="cyan",
    ))


def display_corpus_status(documents: List[dict]) -> None:
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Document")
    table.add_column("Excerpts", justify="right")
    for doc in documents:
        table.add_row(doc["id"], doc["filename"], str(doc["excerpt_count"]))

    total = sum(d["excerpt_count"] for d in documents)
    console.print(table)
    console.print(f"[green]✓[/green] [bold]{total}[/bold] excerpts ready for search.\n")


def prompt_for_query() -> str:
    return Prompt.ask("\n[bold yellow]❓ Your question[/bold yellow]")


def prompt_for_document_ids() -> Optional[List[str]]:
    """Comma-separated ids; blank means search everything."""
    raw = Prompt.ask("[dim]Restrict to document ids (blank = all)[/dim]", default="")
    ids = [part.strip() for part in raw.split(",") if part.strip()]
    return ids or None


def display_outcome(outcome: SearchOutcome) -> None:
    if not outcome.success:
        display_error(outcome.error or "Search failed", outcome.error_code)
        return

    console.print(f"\n[bold]Results for:[/bold] [italic]\"{outcome.query}\"[/italic]\n")

    for rank, result in enumerate(outcome.results, start=1):
        score_color = _score_to_color(result.relevance_score)

        panel_content = Text()
        panel_content.append("📄 Source: ", style="dim")
        panel_content.append(result.filename, style="bold white")
        panel_content.append(f"  (page {result.page_number})", style="dim")
        panel_content.append("\n🎯 Score: ")
        panel_content.append(f"{result.relevance_score:.4f}", style=score_color)
        panel_content.append(f"\n\n{result.excerpt}")

        console.print(Panel(
            panel_content,
            title=f"[bold]#{rank}[/bold]",
            border_style=score_color,
            box=box.ROUNDED,
            padding=(1, 2),
        ))

    console.print(Panel(
        outcome.summary or "",
        title="[bold]Answer[/bold]",
        border_style="cyan" if outcome.results else "dim",
        box=box.ROUNDED,
        padding=(1, 2),
    ))


def display_error(message: str, error_code: Optional[SearchErrorCode] = None) -> None:
    title = f"[bold]{error_code.value}[/bold]" if error_code else "[bold]Error[/bold]"
    console.print(Panel(
        Text(message, style="red"),
        title=title,
        border_style="red",
        box=box.HEAVY,
    ))


def ask_continue() -> bool:
    return Confirm.ask("\n[dim]Another question?[/dim]", default=True)


# Lower bound of each band, highest first; anything shown cleared min_relevance
SCORE_BANDS = (
    (0.8, "bright_green"),
    (0.6, "yellow"),
)
WEAK_MATCH_COLOR = "orange3"


def _score_to_color(score: float) -> str:
    for floor, color in SCORE_BANDS:
        if score >= floor:
            return color
    return WEAK_MATCH_COLOR
