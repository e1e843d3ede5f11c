from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from proficiency.models.question import Question


class QuestionRepo(Protocol):
    async def list_by_language(self, language: str, limit: int) -> list[Question]: ...
    async def get_by_ids(self, question_ids: Iterable[str]) -> dict[str, Question]: ...
    async def replace_all(self, questions: Sequence[Question]) -> None: ...


class InMemoryQuestionRepo:
    def __init__(self, questions: Iterable[Question] = ()) -> None:
        self._by_id: dict[str, Question] = {q.id: q for q in questions}

    async def list_by_language(self, language: str, limit: int) -> list[Question]:
        matching = [q for q in self._by_id.values() if q.language == language]
        matching.sort(key=lambda q: q.order_index)
        return matching[:limit]

    async def get_by_ids(self, question_ids: Iterable[str]) -> dict[str, Question]:
        return {qid: self._by_id[qid] for qid in question_ids if qid in self._by_id}

    async def replace_all(self, questions: Sequence[Question]) -> None:
        # Full delete-then-insert; the bank is never partially updated.
        self._by_id = {q.id: q for q in questions}
