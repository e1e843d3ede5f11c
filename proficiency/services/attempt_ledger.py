"""Attempt ledger: append-only history of graded submissions.

Attempt numbers are assigned read-then-increment per (user, language).
The read and the write are not atomic, so two concurrent submissions for
the same pair can both get the same number; that lost update is accepted.
Closing it would need a per-(user, language) lock or an atomic counter.
"""

from __future__ import annotations

import datetime
import logging

from proficiency.core.errors import InvalidInputError, NotFoundError
from proficiency.models.attempt import Attempt, GradingResult
from proficiency.repos.attempt_repo import AttemptRepo

logger = logging.getLogger(__name__)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


async def next_attempt_number(repo: AttemptRepo, user_id: str, language: str) -> int:
    previous = await repo.get_highest_numbered(user_id, language)
    return previous.attempt_number + 1 if previous is not None else 1


async def record_attempt(
    repo: AttemptRepo,
    user_id: str,
    language: str,
    result: GradingResult,
    time_taken_seconds: int | None = None,
    *,
    completed_at: datetime.datetime | None = None,
) -> Attempt:
    if not user_id:
        raise InvalidInputError("Missing required fields")
    if result.language != language:
        raise InvalidInputError(
            f"Result was graded for {result.language!r}, not {language!r}"
        )
    if time_taken_seconds is not None and time_taken_seconds < 0:
        raise InvalidInputError("time_taken_seconds must not be negative")

    attempt = Attempt.from_result(
        user_id=user_id,
        attempt_number=await next_attempt_number(repo, user_id, language),
        result=result,
        completed_at=completed_at or _utcnow(),
        time_taken_seconds=time_taken_seconds,
    )
    await repo.add(attempt)

    logger.info(
        "Attempt recorded  user_id=%s language=%s attempt=%d score=%d/%d",
        user_id,
        language,
        attempt.attempt_number,
        attempt.score,
        attempt.total_questions,
        extra={
            "user_id": user_id,
            "language": language,
            "attempt_number": attempt.attempt_number,
        },
    )
    return attempt


async def get_latest_attempt(
    repo: AttemptRepo, user_id: str, language: str | None = None
) -> Attempt:
    """Most recent attempt by completed_at, across languages unless scoped."""
    attempt = await repo.get_latest(user_id, language)
    if attempt is None:
        raise NotFoundError("No assessment found for this user")
    return attempt


async def get_all_attempts(repo: AttemptRepo, user_id: str) -> list[Attempt]:
    """Every attempt for the user, most recent first.  Never empty."""
    attempts = await repo.list_for_user(user_id)
    if not attempts:
        raise NotFoundError("No assessment found for this user")
    return attempts
