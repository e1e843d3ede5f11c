"""SQLAlchemy table definitions.

These map to the frozen dataclass domain models in proficiency/models/.
Repos convert between SQLAlchemy rows and domain dataclasses.
"""

from __future__ import annotations

import datetime
import uuid

from sqlalchemy import (
    Boolean,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from proficiency.db.engine import Base


class QuestionRow(Base):
    __tablename__ = "questions"
    __table_args__ = (
        UniqueConstraint("language", "order_index", name="uq_questions_language_order"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    language: Mapped[str] = mapped_column(String(32), nullable=False)  # python|java|c
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)
    kind: Mapped[str] = mapped_column(String(32), nullable=False)  # mcq|code_output
    topic: Mapped[str] = mapped_column(String(255), nullable=False)
    difficulty: Mapped[str] = mapped_column(
        String(16), nullable=False, default="medium"
    )  # easy|medium|hard
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    code_snippet: Mapped[str | None] = mapped_column(Text, nullable=True)
    options: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False)
    correct_answer: Mapped[str] = mapped_column(Text, nullable=False)
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)


class AttemptRow(Base):
    __tablename__ = "assessment_attempts"
    __table_args__ = (
        Index("ix_attempts_user_language_number", "user_id", "language", "attempt_number"),
        Index("ix_attempts_user_completed", "user_id", "completed_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    language: Mapped[str] = mapped_column(String(32), nullable=False)
    attempt_number: Mapped[int] = mapped_column(Integer, nullable=False)
    # [{"question_id", "submitted_answer", "is_correct"}, ...] in bank order
    answers: Mapped[list[dict]] = mapped_column(JSONB, nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    total_questions: Mapped[int] = mapped_column(Integer, nullable=False)
    percentage: Mapped[int] = mapped_column(Integer, nullable=False)
    proficiency_level: Mapped[str] = mapped_column(String(16), nullable=False)
    # {"Loops": {"correct": 1, "total": 2}, ...}
    topic_breakdown: Mapped[dict] = mapped_column(JSONB, nullable=False)
    completed_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    time_taken_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)


class UserProfileRow(Base):
    __tablename__ = "user_profiles"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(320), nullable=False, default="")
    has_completed_assessment: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    assessment_language: Mapped[str | None] = mapped_column(String(32), nullable=True)
    proficiency_level: Mapped[str | None] = mapped_column(String(16), nullable=True)
    last_assessment_date: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
