from __future__ import annotations

from typing import Protocol

from proficiency.models.profile import UserProfile


class ProfileRepo(Protocol):
    async def get(self, user_id: str) -> UserProfile | None: ...
    async def add(self, profile: UserProfile) -> None: ...
    async def upsert(self, profile: UserProfile) -> None: ...


class InMemoryProfileRepo:
    def __init__(self) -> None:
        self._by_id: dict[str, UserProfile] = {}

    async def get(self, user_id: str) -> UserProfile | None:
        return self._by_id.get(user_id)

    async def add(self, profile: UserProfile) -> None:
        if profile.user_id in self._by_id:
            raise ValueError("user already exists")
        self._by_id[profile.user_id] = profile

    async def upsert(self, profile: UserProfile) -> None:
        self._by_id[profile.user_id] = profile
