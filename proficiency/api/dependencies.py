"""Repository wiring for request handlers.

With DATABASE_URL set, each request gets PostgreSQL repositories sharing
one session (FastAPI caches ``get_async_session`` per request).  Without
it, the module-level in-memory repositories below are used; the question
bank is preloaded with the built-in catalogue.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from proficiency.db.engine import engine, get_async_session
from proficiency.repos.attempt_repo import AttemptRepo, InMemoryAttemptRepo
from proficiency.repos.pg_attempt_repo import PgAttemptRepo
from proficiency.repos.pg_profile_repo import PgProfileRepo
from proficiency.repos.pg_question_repo import PgQuestionRepo
from proficiency.repos.profile_repo import InMemoryProfileRepo, ProfileRepo
from proficiency.repos.question_repo import InMemoryQuestionRepo, QuestionRepo
from proficiency.services.question_catalog import build_catalog

question_repo = InMemoryQuestionRepo(build_catalog() if engine is None else ())
attempt_repo = InMemoryAttemptRepo()
profile_repo = InMemoryProfileRepo()

SessionDep = Annotated[AsyncSession | None, Depends(get_async_session)]


def get_question_repo(session: SessionDep) -> QuestionRepo:
    if session is None:
        return question_repo
    return PgQuestionRepo(session)


def get_attempt_repo(session: SessionDep) -> AttemptRepo:
    if session is None:
        return attempt_repo
    return PgAttemptRepo(session)


def get_profile_repo(session: SessionDep) -> ProfileRepo:
    if session is None:
        return profile_repo
    return PgProfileRepo(session)


QuestionRepoDep = Annotated[QuestionRepo, Depends(get_question_repo)]
AttemptRepoDep = Annotated[AttemptRepo, Depends(get_attempt_repo)]
ProfileRepoDep = Annotated[ProfileRepo, Depends(get_profile_repo)]
