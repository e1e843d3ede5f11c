from __future__ import annotations

from typing import Protocol

from proficiency.models.attempt import Attempt


class AttemptRepo(Protocol):
    async def add(self, attempt: Attempt) -> None: ...
    async def get_highest_numbered(
        self, user_id: str, language: str
    ) -> Attempt | None: ...
    async def get_latest(
        self, user_id: str, language: str | None = None
    ) -> Attempt | None: ...
    async def list_for_user(self, user_id: str) -> list[Attempt]: ...


def _recency_key(attempt: Attempt) -> tuple:
    return (attempt.completed_at, attempt.attempt_number)


class InMemoryAttemptRepo:
    """Append-only list of attempts.  There is no update or delete."""

    def __init__(self) -> None:
        self._attempts: list[Attempt] = []

    async def add(self, attempt: Attempt) -> None:
        if any(a.id == attempt.id for a in self._attempts):
            raise ValueError("attempt already recorded")
        self._attempts.append(attempt)

    async def get_highest_numbered(
        self, user_id: str, language: str
    ) -> Attempt | None:
        pair = [
            a
            for a in self._attempts
            if a.user_id == user_id and a.language == language
        ]
        return max(pair, key=lambda a: a.attempt_number, default=None)

    async def get_latest(
        self, user_id: str, language: str | None = None
    ) -> Attempt | None:
        candidates = [
            a
            for a in self._attempts
            if a.user_id == user_id and (language is None or a.language == language)
        ]
        return max(candidates, key=_recency_key, default=None)

    async def list_for_user(self, user_id: str) -> list[Attempt]:
        attempts = [a for a in self._attempts if a.user_id == user_id]
        return sorted(attempts, key=_recency_key, reverse=True)
