"""PostgreSQL implementation of QuestionRepo."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from proficiency.core.errors import PersistenceError
from proficiency.db.tables import QuestionRow
from proficiency.models.question import Question


class PgQuestionRepo:
    """Satisfies the QuestionRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_by_language(self, language: str, limit: int) -> list[Question]:
        stmt = (
            select(QuestionRow)
            .where(QuestionRow.language == language)
            .order_by(QuestionRow.order_index)
            .limit(limit)
        )
        try:
            rows = (await self._session.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            raise PersistenceError("failed to read question bank") from e
        return [_row_to_question(row) for row in rows]

    async def get_by_ids(self, question_ids: Iterable[str]) -> dict[str, Question]:
        ids = list(question_ids)
        if not ids:
            return {}
        stmt = select(QuestionRow).where(QuestionRow.id.in_(ids))
        try:
            rows = (await self._session.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            raise PersistenceError("failed to read question bank") from e
        return {row.id: _row_to_question(row) for row in rows}

    async def replace_all(self, questions: Sequence[Question]) -> None:
        try:
            await self._session.execute(delete(QuestionRow))
            self._session.add_all(
                QuestionRow(
                    id=q.id,
                    language=q.language,
                    order_index=q.order_index,
                    kind=q.kind,
                    topic=q.topic,
                    difficulty=q.difficulty,
                    prompt=q.prompt,
                    code_snippet=q.code_snippet,
                    options=list(q.options),
                    correct_answer=q.correct_answer,
                    explanation=q.explanation,
                )
                for q in questions
            )
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise PersistenceError("failed to replace question bank") from e


def _row_to_question(row: QuestionRow) -> Question:
    return Question(
        id=row.id,
        language=row.language,
        order_index=row.order_index,
        kind=row.kind,
        topic=row.topic,
        prompt=row.prompt,
        options=tuple(row.options),
        correct_answer=row.correct_answer,
        difficulty=row.difficulty,
        code_snippet=row.code_snippet,
        explanation=row.explanation,
    )
