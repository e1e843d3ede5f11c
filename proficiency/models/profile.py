from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Projection / read model: the user's most recent assessment state.

    Overwritten in place on every recorded attempt, across all languages.
    The attempt ledger is the source of truth; this row makes status
    checks a single lookup.
    """

    user_id: str
    name: str = ""
    email: str = ""
    has_completed_assessment: bool = False
    assessment_language: str | None = None
    proficiency_level: str | None = None
    last_assessment_date: datetime | None = None
