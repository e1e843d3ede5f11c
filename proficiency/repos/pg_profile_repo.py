"""PostgreSQL implementation of ProfileRepo."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from proficiency.core.errors import PersistenceError
from proficiency.db.tables import UserProfileRow
from proficiency.models.profile import UserProfile


class PgProfileRepo:
    """Satisfies the ProfileRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: str) -> UserProfile | None:
        stmt = select(UserProfileRow).where(UserProfileRow.user_id == user_id)
        try:
            row = (await self._session.execute(stmt)).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceError("failed to read user profile") from e
        if row is None:
            return None
        return _row_to_profile(row)

    async def add(self, profile: UserProfile) -> None:
        try:
            self._session.add(UserProfileRow(**_profile_values(profile)))
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            raise ValueError("user already exists") from None
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise PersistenceError("failed to create user profile") from e

    async def upsert(self, profile: UserProfile) -> None:
        values = _profile_values(profile)
        stmt = insert(UserProfileRow).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[UserProfileRow.user_id],
            set_={k: v for k, v in values.items() if k != "user_id"},
        )
        try:
            await self._session.execute(stmt)
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise PersistenceError("failed to update user profile") from e


def _profile_values(profile: UserProfile) -> dict:
    return {
        "user_id": profile.user_id,
        "name": profile.name,
        "email": profile.email,
        "has_completed_assessment": profile.has_completed_assessment,
        "assessment_language": profile.assessment_language,
        "proficiency_level": profile.proficiency_level,
        "last_assessment_date": profile.last_assessment_date,
    }


def _row_to_profile(row: UserProfileRow) -> UserProfile:
    return UserProfile(
        user_id=row.user_id,
        name=row.name or "",
        email=row.email or "",
        has_completed_assessment=row.has_completed_assessment,
        assessment_language=row.assessment_language,
        proficiency_level=row.proficiency_level,
        last_assessment_date=row.last_assessment_date,
    )
