from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from proficiency.api.dependencies import ProfileRepoDep
from proficiency.core.errors import AssessmentError
from proficiency.services import profile_projection

logger = logging.getLogger(__name__)

# POST /v1/users: called by the credential service when an account is
# created, so status checks can tell "never attempted" from "unknown user".

router = APIRouter(prefix="/v1/users", tags=["users"])


class UserCreateIn(BaseModel):
    user_id: str
    name: str = ""
    email: str = ""


class UserOut(BaseModel):
    user_id: str
    name: str
    email: str
    has_completed_assessment: bool


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def post_user(payload: UserCreateIn, repo: ProfileRepoDep) -> UserOut:
    try:
        profile = await profile_projection.register_user(
            repo, payload.user_id, name=payload.name, email=payload.email
        )
    except AssessmentError as e:
        logger.warning("User registration rejected: %s", e.message)
        raise HTTPException(
            status_code=e.status_code,
            detail={"message": e.message},
        ) from None

    return UserOut(
        user_id=profile.user_id,
        name=profile.name,
        email=profile.email,
        has_completed_assessment=profile.has_completed_assessment,
    )
