from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from proficiency.api import dependencies
from proficiency.main import app
from proficiency.models.question import Question
from proficiency.services.cache import cache_service
from proficiency.services.question_catalog import build_catalog

# Ensure repo root is on sys.path so `import proficiency` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def reset_question_bank() -> None:
    """Reload the built-in catalogue so every test sees the same bank."""
    asyncio.run(dependencies.question_repo.replace_all(build_catalog()))


@pytest.fixture(autouse=True)
def reset_attempts_and_profiles() -> None:
    dependencies.attempt_repo._attempts.clear()
    dependencies.profile_repo._by_id.clear()


@pytest.fixture(autouse=True)
def reset_cache() -> None:
    """Clear cache between tests."""
    if hasattr(cache_service, "_store"):
        cache_service._store.clear()  # type: ignore[union-attr]
        cache_service._expires_at.clear()  # type: ignore[union-attr]


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


# ---------------------------------------------------------------------------
# Answer helpers
# ---------------------------------------------------------------------------


def bank(language: str) -> list[Question]:
    """The question set a submission for ``language`` is graded against."""
    return asyncio.run(dependencies.question_repo.list_by_language(language, 15))


def wrong_option(question: Question) -> str:
    return next(o for o in question.options if o != question.correct_answer)


def answers_with_score(language: str, correct: int) -> list[str]:
    """Answers where the first ``correct`` are right and the rest wrong."""
    questions = bank(language)
    return [
        q.correct_answer if i < correct else wrong_option(q)
        for i, q in enumerate(questions)
    ]
