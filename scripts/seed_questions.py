"""Replace the PostgreSQL question bank with the built-in catalogue.

Run with:
    DATABASE_URL=postgresql+asyncpg://... python scripts/seed_questions.py [language ...]

With no arguments every supported language is loaded.  Loading replaces
the whole bank, so languages left out end up with no questions.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from proficiency.core.config import SETTINGS
from proficiency.core.errors import AssessmentError
from proficiency.core.logging import setup_logging
from proficiency.db.engine import async_session_factory, engine
from proficiency.repos.pg_question_repo import PgQuestionRepo
from proficiency.services import question_bank
from proficiency.services.cache import cache_service
from proficiency.services.question_catalog import build_catalog

logger = logging.getLogger("seed_questions")


async def seed(languages: list[str] | None) -> dict[str, int]:
    if async_session_factory is None or engine is None:
        raise SystemExit("DATABASE_URL is not set; nothing to seed")

    for language in languages or ():
        question_bank.ensure_supported(language)

    questions = build_catalog(tuple(languages) if languages else None)
    try:
        async with async_session_factory() as session:
            counts = await question_bank.bulk_load(
                PgQuestionRepo(session), questions, cache=cache_service
            )
    finally:
        await engine.dispose()
    return counts


def main() -> None:
    setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
    try:
        counts = asyncio.run(seed(sys.argv[1:]))
    except AssessmentError as e:
        logger.error("Seeding failed: %s", e.message)
        raise SystemExit(1) from e

    for language, count in sorted(counts.items()):
        print(f"{language:<8} {count:>3} questions")


if __name__ == "__main__":
    main()
