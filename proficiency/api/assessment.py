"""Assessment endpoints.

  GET  /v1/assessment/languages
  GET  /v1/assessment/questions/{language}
  POST /v1/assessment/submit
  GET  /v1/assessment/result/{user_id}
  GET  /v1/assessment/attempts/{user_id}
  GET  /v1/assessment/status/{user_id}

The caller is trusted to pass a user_id already verified by the credential
service.
"""

from __future__ import annotations

import datetime
import logging
from typing import NoReturn

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from proficiency.api.dependencies import (
    AttemptRepoDep,
    ProfileRepoDep,
    QuestionRepoDep,
)
from proficiency.core.errors import AssessmentError, PersistenceError
from proficiency.models.attempt import TopicStats
from proficiency.services import assessment_service, profile_projection, question_bank
from proficiency.services.assessment_service import AttemptView

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/assessment", tags=["assessment"])


# --- Request / Response schemas -------------------------------------------


class LanguageOut(BaseModel):
    id: str
    display_name: str
    icon: str


class LanguagesOut(BaseModel):
    languages: list[LanguageOut]


class QuestionOut(BaseModel):
    id: str
    language: str
    order_index: int
    kind: str
    topic: str
    difficulty: str
    prompt: str
    code_snippet: str | None = None
    options: list[str]


class QuestionsOut(BaseModel):
    questions: list[QuestionOut]
    total_questions: int


class SubmitIn(BaseModel):
    user_id: str
    language: str
    # aligned with the question order; null means unanswered
    answers: list[str | None]
    time_taken_seconds: int | None = Field(default=None, ge=0)


class TopicStatsOut(BaseModel):
    correct: int
    total: int


class SubmitResultOut(BaseModel):
    attempt_number: int
    score: int
    total_questions: int
    percentage: int
    proficiency_level: str
    topic_breakdown: dict[str, TopicStatsOut]
    unanswered: int


class SubmitOut(BaseModel):
    message: str
    result: SubmitResultOut


class AnswerOut(BaseModel):
    question_id: str
    submitted_answer: str | None
    is_correct: bool
    prompt: str | None = None
    topic: str | None = None


class AttemptOut(BaseModel):
    id: str
    user_id: str
    language: str
    attempt_number: int
    score: int
    total_questions: int
    percentage: int
    proficiency_level: str
    topic_breakdown: dict[str, TopicStatsOut]
    completed_at: datetime.datetime
    time_taken_seconds: int | None = None
    answers: list[AnswerOut]


class UserSummaryOut(BaseModel):
    name: str
    email: str


class LatestResultOut(BaseModel):
    result: AttemptOut
    user: UserSummaryOut | None = None


class AttemptsOut(BaseModel):
    attempts: list[AttemptOut]
    total_attempts: int


class StatusOut(BaseModel):
    has_completed_assessment: bool
    assessment_language: str | None = None
    proficiency_level: str | None = None


# --- helpers ----------------------------------------------------------------


def _raise_http(err: AssessmentError) -> NoReturn:
    if isinstance(err, PersistenceError):
        logger.error("Storage failure: %s", err.message, exc_info=err)
    else:
        logger.warning("%s: %s", type(err).__name__, err.message)
    raise HTTPException(
        status_code=err.status_code,
        detail={"message": err.message},
    ) from None


def _breakdown_out(breakdown: dict[str, TopicStats]) -> dict[str, TopicStatsOut]:
    return {
        topic: TopicStatsOut(correct=s.correct, total=s.total)
        for topic, s in breakdown.items()
    }


def _attempt_out(view: AttemptView) -> AttemptOut:
    attempt = view.attempt
    answers = []
    for a in attempt.answers:
        question = view.questions.get(a.question_id)
        answers.append(
            AnswerOut(
                question_id=a.question_id,
                submitted_answer=a.submitted_answer,
                is_correct=a.is_correct,
                prompt=question.prompt if question else None,
                topic=question.topic if question else None,
            )
        )
    return AttemptOut(
        id=str(attempt.id),
        user_id=attempt.user_id,
        language=attempt.language,
        attempt_number=attempt.attempt_number,
        score=attempt.score,
        total_questions=attempt.total_questions,
        percentage=attempt.percentage,
        proficiency_level=attempt.proficiency_level,
        topic_breakdown=_breakdown_out(attempt.topic_breakdown),
        completed_at=attempt.completed_at,
        time_taken_seconds=attempt.time_taken_seconds,
        answers=answers,
    )


# --- GET /languages -----------------------------------------------------------


@router.get("/languages", response_model=LanguagesOut)
def get_languages() -> LanguagesOut:
    return LanguagesOut(
        languages=[
            LanguageOut(id=lang.id, display_name=lang.display_name, icon=lang.icon)
            for lang in question_bank.list_languages()
        ]
    )


# --- GET /questions/{language} ------------------------------------------------


@router.get("/questions/{language}", response_model=QuestionsOut)
async def get_questions(language: str, repo: QuestionRepoDep) -> QuestionsOut:
    try:
        questions = await question_bank.get_questions_for_display(repo, language)
    except AssessmentError as e:
        _raise_http(e)

    return QuestionsOut(
        questions=[
            QuestionOut(
                id=q.id,
                language=q.language,
                order_index=q.order_index,
                kind=q.kind,
                topic=q.topic,
                difficulty=q.difficulty,
                prompt=q.prompt,
                code_snippet=q.code_snippet,
                options=list(q.options),
            )
            for q in questions
        ],
        total_questions=len(questions),
    )


# --- POST /submit -------------------------------------------------------------


@router.post("/submit", response_model=SubmitOut, status_code=status.HTTP_201_CREATED)
async def submit(
    payload: SubmitIn,
    question_repo: QuestionRepoDep,
    attempt_repo: AttemptRepoDep,
    profile_repo: ProfileRepoDep,
) -> SubmitOut:
    try:
        submission = await assessment_service.submit_assessment(
            question_repo,
            attempt_repo,
            profile_repo,
            user_id=payload.user_id.strip(),
            language=payload.language.strip(),
            answers=payload.answers,
            time_taken_seconds=payload.time_taken_seconds,
        )
    except AssessmentError as e:
        _raise_http(e)

    attempt = submission.attempt
    return SubmitOut(
        message="Assessment completed successfully",
        result=SubmitResultOut(
            attempt_number=attempt.attempt_number,
            score=attempt.score,
            total_questions=attempt.total_questions,
            percentage=attempt.percentage,
            proficiency_level=attempt.proficiency_level,
            topic_breakdown=_breakdown_out(attempt.topic_breakdown),
            unanswered=submission.unanswered,
        ),
    )


# --- GET /result/{user_id} ----------------------------------------------------


@router.get("/result/{user_id}", response_model=LatestResultOut)
async def get_latest_result(
    user_id: str,
    question_repo: QuestionRepoDep,
    attempt_repo: AttemptRepoDep,
    profile_repo: ProfileRepoDep,
) -> LatestResultOut:
    try:
        view, profile = await assessment_service.get_latest_result(
            question_repo, attempt_repo, profile_repo, user_id
        )
    except AssessmentError as e:
        _raise_http(e)

    user = UserSummaryOut(name=profile.name, email=profile.email) if profile else None
    return LatestResultOut(result=_attempt_out(view), user=user)


# --- GET /attempts/{user_id} --------------------------------------------------


@router.get("/attempts/{user_id}", response_model=AttemptsOut)
async def get_all_attempts(
    user_id: str,
    question_repo: QuestionRepoDep,
    attempt_repo: AttemptRepoDep,
) -> AttemptsOut:
    try:
        views = await assessment_service.get_attempt_history(
            question_repo, attempt_repo, user_id
        )
    except AssessmentError as e:
        _raise_http(e)

    return AttemptsOut(
        attempts=[_attempt_out(v) for v in views],
        total_attempts=len(views),
    )


# --- GET /status/{user_id} ----------------------------------------------------


@router.get("/status/{user_id}", response_model=StatusOut)
async def get_status(user_id: str, profile_repo: ProfileRepoDep) -> StatusOut:
    try:
        profile = await profile_projection.get_status(profile_repo, user_id)
    except AssessmentError as e:
        _raise_http(e)

    return StatusOut(
        has_completed_assessment=profile.has_completed_assessment,
        assessment_language=profile.assessment_language,
        proficiency_level=profile.proficiency_level,
    )
