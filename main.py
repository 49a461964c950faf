# main.py

import asyncio
import sys

from src.application.factory import build_search_service
from src.config.logging import configure_logging
from src.config.settings import SearchSettings
from src.domain.exceptions import RulesConfigError
from src.interface.cli import (
    ask_continue,
    display_corpus_status,
    display_error,
    display_outcome,
    display_welcome_banner,
    prompt_for_document_ids,
    prompt_for_query,
)


def main() -> None:
    settings = SearchSettings()
    configure_logging(settings.log_level)
    display_welcome_banner()

    # ── 1. Wire components ───────────────────────────────────────────────────
    try:
        search_service = build_search_service(settings)
    except (FileNotFoundError, RulesConfigError) as error:
        display_error(str(error))
        sys.exit(1)

    display_corpus_status(search_service.corpus_summary())

    # ── 2. Interactive question loop ─────────────────────────────────────────
    while True:
        query = prompt_for_query()
        document_ids = prompt_for_document_ids()
        outcome = asyncio.run(search_service.handle_search(query, document_ids))
        display_outcome(outcome)

        if not ask_continue():
            break


if __name__ == "__main__":
    main()
