"""PostgreSQL implementation of AttemptRepo."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from proficiency.core.errors import PersistenceError
from proficiency.db.tables import AttemptRow
from proficiency.models.attempt import Attempt, GradedAnswer, TopicStats


class PgAttemptRepo:
    """Satisfies the AttemptRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, attempt: Attempt) -> None:
        row = AttemptRow(
            id=attempt.id,
            user_id=attempt.user_id,
            language=attempt.language,
            attempt_number=attempt.attempt_number,
            answers=[
                {
                    "question_id": a.question_id,
                    "submitted_answer": a.submitted_answer,
                    "is_correct": a.is_correct,
                }
                for a in attempt.answers
            ],
            score=attempt.score,
            total_questions=attempt.total_questions,
            percentage=attempt.percentage,
            proficiency_level=attempt.proficiency_level,
            topic_breakdown={
                topic: {"correct": s.correct, "total": s.total}
                for topic, s in attempt.topic_breakdown.items()
            },
            completed_at=attempt.completed_at,
            time_taken_seconds=attempt.time_taken_seconds,
        )
        try:
            self._session.add(row)
            # Committed here so the attempt is durable before the profile
            # projection is written.
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise PersistenceError("failed to record attempt") from e

    async def get_highest_numbered(
        self, user_id: str, language: str
    ) -> Attempt | None:
        stmt = (
            select(AttemptRow)
            .where(AttemptRow.user_id == user_id, AttemptRow.language == language)
            .order_by(AttemptRow.attempt_number.desc())
            .limit(1)
        )
        return await self._first(stmt)

    async def get_latest(
        self, user_id: str, language: str | None = None
    ) -> Attempt | None:
        stmt = select(AttemptRow).where(AttemptRow.user_id == user_id)
        if language is not None:
            stmt = stmt.where(AttemptRow.language == language)
        stmt = stmt.order_by(
            AttemptRow.completed_at.desc(), AttemptRow.attempt_number.desc()
        ).limit(1)
        return await self._first(stmt)

    async def list_for_user(self, user_id: str) -> list[Attempt]:
        stmt = (
            select(AttemptRow)
            .where(AttemptRow.user_id == user_id)
            .order_by(AttemptRow.completed_at.desc(), AttemptRow.attempt_number.desc())
        )
        try:
            rows = (await self._session.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            raise PersistenceError("failed to read attempts") from e
        return [_row_to_attempt(row) for row in rows]

    async def _first(self, stmt) -> Attempt | None:
        try:
            row = (await self._session.execute(stmt)).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceError("failed to read attempts") from e
        if row is None:
            return None
        return _row_to_attempt(row)


def _row_to_attempt(row: AttemptRow) -> Attempt:
    return Attempt(
        id=row.id,
        user_id=row.user_id,
        language=row.language,
        attempt_number=row.attempt_number,
        answers=tuple(
            GradedAnswer(
                question_id=a["question_id"],
                submitted_answer=a.get("submitted_answer"),
                is_correct=bool(a["is_correct"]),
            )
            for a in row.answers
        ),
        score=row.score,
        total_questions=row.total_questions,
        percentage=row.percentage,
        proficiency_level=row.proficiency_level,
        topic_breakdown={
            topic: TopicStats(correct=s["correct"], total=s["total"])
            for topic, s in row.topic_breakdown.items()
        },
        completed_at=row.completed_at,
        time_taken_seconds=row.time_taken_seconds,
    )
