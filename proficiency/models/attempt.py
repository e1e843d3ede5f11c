from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class GradedAnswer:
    question_id: str
    submitted_answer: str | None
    is_correct: bool


@dataclass(frozen=True, slots=True)
class TopicStats:
    correct: int = 0
    total: int = 0


@dataclass(frozen=True, slots=True)
class GradingResult:
    """Output of the grading engine.  Not persisted on its own."""

    language: str
    answers: tuple[GradedAnswer, ...]
    score: int
    total_questions: int
    percentage: int
    proficiency_level: str  # Beginner|Intermediate|Advanced
    topic_breakdown: dict[str, TopicStats] = field(default_factory=dict)
    unanswered: int = 0


@dataclass(frozen=True, slots=True)
class Attempt:
    """One scored submission.  Append-only: never updated after creation."""

    id: UUID
    user_id: str
    language: str
    attempt_number: int
    answers: tuple[GradedAnswer, ...]
    score: int
    total_questions: int
    percentage: int
    proficiency_level: str
    topic_breakdown: dict[str, TopicStats]
    completed_at: datetime
    time_taken_seconds: int | None = None

    @staticmethod
    def from_result(
        *,
        user_id: str,
        attempt_number: int,
        result: GradingResult,
        completed_at: datetime,
        time_taken_seconds: int | None = None,
    ) -> Attempt:
        return Attempt(
            id=uuid4(),
            user_id=user_id,
            language=result.language,
            attempt_number=attempt_number,
            answers=result.answers,
            score=result.score,
            total_questions=result.total_questions,
            percentage=result.percentage,
            proficiency_level=result.proficiency_level,
            topic_breakdown=dict(result.topic_breakdown),
            completed_at=completed_at,
            time_taken_seconds=time_taken_seconds,
        )
