"""Grading engine.

``grade_answers`` is a pure function over an ordered question set and the
submitted answers; ``grade`` fetches the question set first.  Nothing here
writes anywhere: persisting the result is the attempt ledger's job.

Rules:
  - answer i is correct iff it is exactly equal to question i's
    correct_answer (no trimming, no case folding)
  - missing / null answers are incorrect, never an error
  - percentage is rounded half-up on the exact ratio
  - tiers use inclusive upper bounds: <=40 Beginner, <=70 Intermediate,
    otherwise Advanced
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from proficiency.core.errors import InvalidInputError
from proficiency.models.attempt import GradedAnswer, GradingResult, TopicStats
from proficiency.models.question import Question
from proficiency.repos.question_repo import QuestionRepo
from proficiency.services import question_bank

logger = logging.getLogger(__name__)

BEGINNER = "Beginner"
INTERMEDIATE = "Intermediate"
ADVANCED = "Advanced"

PROFICIENCY_LEVELS = (BEGINNER, INTERMEDIATE, ADVANCED)

BEGINNER_MAX_PERCENTAGE = 40
INTERMEDIATE_MAX_PERCENTAGE = 70


def percentage_of(score: int, total: int) -> int:
    """round(score / total * 100), half-up, without float error."""
    if total <= 0:
        raise ValueError("total must be positive")
    if not 0 <= score <= total:
        raise ValueError("score must be between 0 and total")
    return (score * 200 + total) // (total * 2)


def classify_proficiency(percentage: int) -> str:
    if percentage <= BEGINNER_MAX_PERCENTAGE:
        return BEGINNER
    if percentage <= INTERMEDIATE_MAX_PERCENTAGE:
        return INTERMEDIATE
    return ADVANCED


def grade_answers(
    language: str,
    questions: Sequence[Question],
    submitted_answers: Sequence[str | None],
) -> GradingResult:
    if not questions:
        raise ValueError("cannot grade an empty question set")
    if not isinstance(submitted_answers, (list, tuple)):
        raise InvalidInputError("answers must be a list")
    if len(submitted_answers) > len(questions):
        raise InvalidInputError(
            f"Too many answers: got {len(submitted_answers)}, "
            f"expected at most {len(questions)}"
        )

    graded: list[GradedAnswer] = []
    correct_by_topic: dict[str, int] = {}
    total_by_topic: dict[str, int] = {}
    unanswered = 0

    for i, question in enumerate(questions):
        submitted = submitted_answers[i] if i < len(submitted_answers) else None
        if submitted is None or submitted == "":
            unanswered += 1
        is_correct = submitted == question.correct_answer

        graded.append(
            GradedAnswer(
                question_id=question.id,
                submitted_answer=submitted,
                is_correct=is_correct,
            )
        )

        topic = question.topic
        total_by_topic[topic] = total_by_topic.get(topic, 0) + 1
        correct_by_topic[topic] = correct_by_topic.get(topic, 0) + int(is_correct)

    score = sum(1 for a in graded if a.is_correct)
    total = len(questions)
    percentage = percentage_of(score, total)

    return GradingResult(
        language=language,
        answers=tuple(graded),
        score=score,
        total_questions=total,
        percentage=percentage,
        proficiency_level=classify_proficiency(percentage),
        topic_breakdown={
            topic: TopicStats(correct=correct_by_topic[topic], total=count)
            for topic, count in total_by_topic.items()
        },
        unanswered=unanswered,
    )


async def grade(
    repo: QuestionRepo,
    language: str,
    submitted_answers: Sequence[str | None],
) -> GradingResult:
    """Grade against the current bank.  Raises NotFoundError if it is empty."""
    if not isinstance(submitted_answers, (list, tuple)):
        raise InvalidInputError("answers must be a list")

    questions = await question_bank.get_questions_for_grading(repo, language)
    result = grade_answers(language, questions, submitted_answers)
    logger.debug(
        "Graded language=%s score=%d/%d percentage=%d level=%s",
        language,
        result.score,
        result.total_questions,
        result.percentage,
        result.proficiency_level,
    )
    return result
