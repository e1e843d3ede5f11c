"""Submission and result flows that span the bank, ledger and projection.

Submission sequence:
  read question bank → grade → read latest attempt number
  → write attempt (durable) → write profile projection → return

A failure before the attempt write leaves no trace.  A failure in the
projection write leaves the attempt in place; a client retry then records a
second attempt.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from proficiency.core.errors import InvalidInputError
from proficiency.core.metrics import ASSESSMENT_PERCENTAGE, ASSESSMENT_SUBMISSIONS
from proficiency.models.attempt import Attempt
from proficiency.models.profile import UserProfile
from proficiency.models.question import Question
from proficiency.repos.attempt_repo import AttemptRepo
from proficiency.repos.profile_repo import ProfileRepo
from proficiency.repos.question_repo import QuestionRepo
from proficiency.services import attempt_ledger, grading, profile_projection

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Submission:
    attempt: Attempt
    unanswered: int


@dataclass(frozen=True, slots=True)
class AttemptView:
    """An attempt with the question records its answers refer to."""

    attempt: Attempt
    questions: dict[str, Question]


async def submit_assessment(
    question_repo: QuestionRepo,
    attempt_repo: AttemptRepo,
    profile_repo: ProfileRepo,
    *,
    user_id: str,
    language: str,
    answers: Sequence[str | None],
    time_taken_seconds: int | None = None,
    completed_at: datetime.datetime | None = None,
) -> Submission:
    if not user_id or not language:
        raise InvalidInputError("Missing required fields")

    result = await grading.grade(question_repo, language, answers)
    if result.unanswered:
        logger.warning(
            "Submission has %d unanswered question(s)  user_id=%s language=%s",
            result.unanswered,
            user_id,
            language,
            extra={"user_id": user_id, "language": language},
        )

    attempt = await attempt_ledger.record_attempt(
        attempt_repo,
        user_id,
        language,
        result,
        time_taken_seconds,
        completed_at=completed_at,
    )
    await profile_projection.reconcile(profile_repo, user_id, attempt)

    ASSESSMENT_SUBMISSIONS.labels(
        language=language, proficiency_level=attempt.proficiency_level
    ).inc()
    ASSESSMENT_PERCENTAGE.labels(language=language).observe(attempt.percentage)

    return Submission(attempt=attempt, unanswered=result.unanswered)


async def _with_questions(
    question_repo: QuestionRepo, attempts: Sequence[Attempt]
) -> list[AttemptView]:
    ids = {a.question_id for attempt in attempts for a in attempt.answers}
    # Questions replaced by a later bulk-load are simply absent.
    questions = await question_repo.get_by_ids(ids)
    return [
        AttemptView(
            attempt=attempt,
            questions={
                a.question_id: questions[a.question_id]
                for a in attempt.answers
                if a.question_id in questions
            },
        )
        for attempt in attempts
    ]


async def get_latest_result(
    question_repo: QuestionRepo,
    attempt_repo: AttemptRepo,
    profile_repo: ProfileRepo,
    user_id: str,
) -> tuple[AttemptView, UserProfile | None]:
    attempt = await attempt_ledger.get_latest_attempt(attempt_repo, user_id)
    [view] = await _with_questions(question_repo, [attempt])
    return view, await profile_repo.get(user_id)


async def get_attempt_history(
    question_repo: QuestionRepo, attempt_repo: AttemptRepo, user_id: str
) -> list[AttemptView]:
    attempts = await attempt_ledger.get_all_attempts(attempt_repo, user_id)
    return await _with_questions(question_repo, attempts)
