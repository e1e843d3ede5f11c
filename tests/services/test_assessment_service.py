from __future__ import annotations

import asyncio

import pytest

from proficiency.core.errors import InvalidInputError, NotFoundError, PersistenceError
from proficiency.models.profile import UserProfile
from proficiency.repos.attempt_repo import InMemoryAttemptRepo
from proficiency.repos.profile_repo import InMemoryProfileRepo
from proficiency.repos.question_repo import InMemoryQuestionRepo
from proficiency.services import assessment_service
from proficiency.services.question_catalog import build_catalog


class _UnavailableProfileRepo(InMemoryProfileRepo):
    async def upsert(self, profile: UserProfile) -> None:
        raise PersistenceError("failed to update user profile")


def _correct_answers(repo: InMemoryQuestionRepo, language: str) -> list[str]:
    questions = asyncio.run(repo.list_by_language(language, 15))
    return [q.correct_answer for q in questions]


def _submit(questions, attempts, profiles, **kwargs):
    return asyncio.run(
        assessment_service.submit_assessment(questions, attempts, profiles, **kwargs)
    )


def test_submit_records_attempt_and_updates_profile() -> None:
    questions = InMemoryQuestionRepo(build_catalog())
    attempts = InMemoryAttemptRepo()
    profiles = InMemoryProfileRepo()

    submission = _submit(
        questions,
        attempts,
        profiles,
        user_id="u1",
        language="python",
        answers=_correct_answers(questions, "python"),
        time_taken_seconds=300,
    )

    assert submission.attempt.score == 15
    assert submission.attempt.proficiency_level == "Advanced"
    assert submission.unanswered == 0
    assert len(attempts._attempts) == 1
    profile = profiles._by_id["u1"]
    assert profile.assessment_language == "python"
    assert profile.last_assessment_date == submission.attempt.completed_at


def test_submit_with_empty_bank_writes_nothing() -> None:
    attempts = InMemoryAttemptRepo()
    profiles = InMemoryProfileRepo()

    with pytest.raises(NotFoundError):
        _submit(
            InMemoryQuestionRepo(),
            attempts,
            profiles,
            user_id="u1",
            language="python",
            answers=["x"],
        )

    assert attempts._attempts == []
    assert profiles._by_id == {}


def test_submit_rejects_missing_fields() -> None:
    with pytest.raises(InvalidInputError, match="Missing required fields"):
        _submit(
            InMemoryQuestionRepo(build_catalog()),
            InMemoryAttemptRepo(),
            InMemoryProfileRepo(),
            user_id="",
            language="python",
            answers=[],
        )


def test_projection_failure_keeps_recorded_attempt() -> None:
    attempts = InMemoryAttemptRepo()
    with pytest.raises(PersistenceError):
        _submit(
            InMemoryQuestionRepo(build_catalog()),
            attempts,
            _UnavailableProfileRepo(),
            user_id="u1",
            language="c",
            answers=[],
        )
    assert len(attempts._attempts) == 1


def test_history_joins_question_prompts() -> None:
    questions = InMemoryQuestionRepo(build_catalog())
    attempts = InMemoryAttemptRepo()
    profiles = InMemoryProfileRepo()
    _submit(questions, attempts, profiles, user_id="u1", language="java", answers=[])

    [view] = asyncio.run(assessment_service.get_attempt_history(questions, attempts, "u1"))
    assert len(view.questions) == 15
    first = view.attempt.answers[0]
    assert view.questions[first.question_id].order_index == 1


def test_history_survives_bank_reload() -> None:
    questions = InMemoryQuestionRepo(build_catalog())
    attempts = InMemoryAttemptRepo()
    profiles = InMemoryProfileRepo()
    _submit(questions, attempts, profiles, user_id="u1", language="java", answers=[])

    # A reload mints new ids; old answers no longer resolve to a question.
    asyncio.run(questions.replace_all(build_catalog()))

    view, profile = asyncio.run(
        assessment_service.get_latest_result(questions, attempts, profiles, "u1")
    )
    assert view.questions == {}
    assert view.attempt.total_questions == 15
    assert profile is not None
