"""User profile projection: the latest assessment state per user.

Last writer wins.  ``reconcile`` overwrites the row from whichever attempt
was recorded most recently, in any language, even if an older attempt in
another language scored higher.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from proficiency.core.errors import ConflictError, InvalidInputError, NotFoundError
from proficiency.models.attempt import Attempt
from proficiency.models.profile import UserProfile
from proficiency.repos.profile_repo import ProfileRepo

logger = logging.getLogger(__name__)


async def register_user(
    repo: ProfileRepo, user_id: str, name: str = "", email: str = ""
) -> UserProfile:
    user_id = user_id.strip()
    if not user_id:
        raise InvalidInputError("user_id must be non-empty")

    profile = UserProfile(
        user_id=user_id, name=name.strip(), email=email.strip().lower()
    )
    try:
        await repo.add(profile)
    except ValueError:
        logger.warning("Rejected duplicate user_id=%s", user_id)
        raise ConflictError("A user with this id already exists") from None

    logger.info("User registered  user_id=%s", user_id)
    return profile


async def reconcile(repo: ProfileRepo, user_id: str, attempt: Attempt) -> UserProfile:
    """Overwrite the user's projection from ``attempt``.

    Only call this after the attempt has been stored.  Users the service
    has not seen before get a row created (single-row upsert), so a later
    status check answers 200 for them rather than 404.  The previous
    system left unknown users untouched; an upsert is kept so an attempt
    always has a matching projection.
    """
    existing = await repo.get(user_id)
    base = existing if existing is not None else UserProfile(user_id=user_id)
    profile = replace(
        base,
        has_completed_assessment=True,
        assessment_language=attempt.language,
        proficiency_level=attempt.proficiency_level,
        last_assessment_date=attempt.completed_at,
    )
    await repo.upsert(profile)

    if existing is None:
        logger.info("Profile created from first attempt  user_id=%s", user_id)
    return profile


async def get_status(repo: ProfileRepo, user_id: str) -> UserProfile:
    profile = await repo.get(user_id)
    if profile is None:
        raise NotFoundError("User not found")
    return profile
