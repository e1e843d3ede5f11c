from __future__ import annotations

import asyncio

import pytest

from proficiency.core.errors import InvalidInputError, NotFoundError
from proficiency.models.question import Question
from proficiency.repos.question_repo import InMemoryQuestionRepo
from proficiency.services import grading


def _question(order_index: int, topic: str = "Loops", answer: str = "a") -> Question:
    return Question.new(
        language="python",
        order_index=order_index,
        kind="mcq",
        topic=topic,
        prompt=f"Question {order_index}",
        options=("a", "b", "c", "d"),
        correct_answer=answer,
    )


def _questions(n: int) -> list[Question]:
    return [_question(i) for i in range(1, n + 1)]


# ---- percentage and tiers ----


@pytest.mark.parametrize(
    ("score", "total", "expected"),
    [
        (0, 15, 0),
        (6, 15, 40),
        (11, 15, 73),
        (15, 15, 100),
        (1, 8, 13),  # 12.5 rounds half-up
        (1, 3, 33),
        (2, 3, 67),
    ],
)
def test_percentage_of(score: int, total: int, expected: int) -> None:
    assert grading.percentage_of(score, total) == expected


def test_percentage_of_rejects_zero_total() -> None:
    with pytest.raises(ValueError):
        grading.percentage_of(0, 0)


@pytest.mark.parametrize(
    ("percentage", "level"),
    [
        (0, "Beginner"),
        (40, "Beginner"),
        (41, "Intermediate"),
        (70, "Intermediate"),
        (71, "Advanced"),
        (100, "Advanced"),
    ],
)
def test_classify_proficiency_boundaries(percentage: int, level: str) -> None:
    assert grading.classify_proficiency(percentage) == level


# ---- grade_answers ----


def test_grade_answers_counts_exact_matches() -> None:
    questions = _questions(4)
    result = grading.grade_answers("python", questions, ["a", "b", "a", "a"])
    assert result.score == 3
    assert result.total_questions == 4
    assert result.percentage == 75
    assert result.proficiency_level == "Advanced"
    assert [a.is_correct for a in result.answers] == [True, False, True, True]


def test_grade_answers_is_case_and_whitespace_sensitive() -> None:
    questions = _questions(3)
    result = grading.grade_answers("python", questions, ["A", " a", "a "])
    assert result.score == 0


def test_grade_answers_treats_missing_answers_as_incorrect() -> None:
    questions = _questions(5)
    result = grading.grade_answers("python", questions, ["a", None, ""])
    assert result.score == 1
    assert result.total_questions == 5
    assert result.unanswered == 4
    assert [a.submitted_answer for a in result.answers] == ["a", None, "", None, None]


def test_grade_answers_empty_submission_scores_zero() -> None:
    result = grading.grade_answers("python", _questions(3), [])
    assert result.score == 0
    assert result.percentage == 0
    assert result.proficiency_level == "Beginner"


def test_grade_answers_rejects_more_answers_than_questions() -> None:
    with pytest.raises(InvalidInputError, match="Too many answers"):
        grading.grade_answers("python", _questions(2), ["a", "a", "a"])


def test_grade_answers_rejects_non_list() -> None:
    with pytest.raises(InvalidInputError, match="answers must be a list"):
        grading.grade_answers("python", _questions(2), "ab")  # type: ignore[arg-type]


def test_topic_breakdown_sums_to_score_and_total() -> None:
    questions = [
        _question(1, topic="Loops"),
        _question(2, topic="Loops"),
        _question(3, topic="Functions"),
        _question(4, topic="Data Types"),
    ]
    result = grading.grade_answers("python", questions, ["a", "b", "a", None])

    assert result.topic_breakdown["Loops"].correct == 1
    assert result.topic_breakdown["Loops"].total == 2
    assert result.topic_breakdown["Functions"].correct == 1
    assert result.topic_breakdown["Data Types"].correct == 0
    assert sum(s.correct for s in result.topic_breakdown.values()) == result.score
    assert (
        sum(s.total for s in result.topic_breakdown.values())
        == result.total_questions
    )


def test_answers_follow_question_order() -> None:
    questions = _questions(3)
    result = grading.grade_answers("python", questions, ["a", "a", "a"])
    assert [a.question_id for a in result.answers] == [q.id for q in questions]


# ---- grade (with the bank) ----


def test_grade_raises_not_found_for_empty_bank() -> None:
    repo = InMemoryQuestionRepo()
    with pytest.raises(NotFoundError):
        asyncio.run(grading.grade(repo, "python", ["a"]))


def test_grade_rejects_unsupported_language() -> None:
    repo = InMemoryQuestionRepo(_questions(3))
    with pytest.raises(InvalidInputError, match="Invalid language"):
        asyncio.run(grading.grade(repo, "cobol", ["a"]))


def test_grade_uses_bank_in_order_index_order() -> None:
    questions = [_question(2, answer="b"), _question(1, answer="a")]
    repo = InMemoryQuestionRepo(questions)
    result = asyncio.run(grading.grade(repo, "python", ["a", "b"]))
    assert result.score == 2
