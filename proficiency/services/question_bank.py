"""Question bank: language catalogue, question retrieval, bulk-load.

Display reads go through the read-through cache; grading reads always hit
the store, and the answer key never leaves this module through the
display path.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import asdict

from redis.exceptions import RedisError

from proficiency.core.config import SETTINGS
from proficiency.core.errors import InvalidInputError, NotFoundError
from proficiency.core.metrics import QUESTION_CACHE_OPERATIONS
from proficiency.models.question import DisplayQuestion, Language, Question
from proficiency.repos.question_repo import QuestionRepo
from proficiency.services.cache import CacheService, cache_service

logger = logging.getLogger(__name__)

LANGUAGES: tuple[Language, ...] = (
    Language(id="python", display_name="Python", icon="🐍"),
    Language(id="java", display_name="Java", icon="☕"),
    Language(id="c", display_name="C", icon="💻"),
)

SUPPORTED_LANGUAGES = frozenset(lang.id for lang in LANGUAGES)

QUESTION_KINDS = frozenset({"mcq", "code_output"})
DIFFICULTIES = frozenset({"easy", "medium", "hard"})

_CACHE_PREFIX = "questions:"


def list_languages() -> list[Language]:
    return list(LANGUAGES)


def ensure_supported(language: str) -> str:
    if language not in SUPPORTED_LANGUAGES:
        logger.warning("Rejected unsupported language=%r", language)
        raise InvalidInputError("Invalid language")
    return language


async def get_questions_for_grading(
    repo: QuestionRepo, language: str, *, limit: int | None = None
) -> list[Question]:
    """Full question records (with answer keys), ordered by order_index.

    Raises InvalidInputError for an unsupported language and NotFoundError
    when the language has no questions; never returns an empty list.
    """
    ensure_supported(language)
    limit = limit or SETTINGS.questions_per_assessment

    questions = await repo.list_by_language(language, limit)
    if not questions:
        logger.warning("Question bank is empty for language=%s", language)
        raise NotFoundError("No questions found for this language")
    if len(questions) < limit:
        logger.warning(
            "Question bank for language=%s has %d of %d questions",
            language,
            len(questions),
            limit,
        )
    return questions


async def get_questions_for_display(
    repo: QuestionRepo,
    language: str,
    *,
    cache: CacheService = cache_service,
) -> list[DisplayQuestion]:
    """Display-safe questions, served read-through from the cache."""
    ensure_supported(language)
    key = f"{_CACHE_PREFIX}{language}"

    cached = await _cache_get(cache, key)
    if cached is not None:
        QUESTION_CACHE_OPERATIONS.labels(operation="hit").inc()
        return [
            DisplayQuestion(**{**item, "options": tuple(item["options"])})
            for item in json.loads(cached)
        ]

    QUESTION_CACHE_OPERATIONS.labels(operation="miss").inc()
    questions = await get_questions_for_grading(repo, language)
    display = [q.for_display() for q in questions]

    await _cache_set(
        cache,
        key,
        json.dumps([asdict(d) for d in display], ensure_ascii=False),
        SETTINGS.question_cache_ttl_seconds,
    )
    return display


def validate_catalog(questions: Sequence[Question]) -> None:
    """Reject a question set that would break grading.  Raises InvalidInputError."""
    seen: set[tuple[str, int]] = set()
    for q in questions:
        where = f"{q.language} #{q.order_index}"
        if q.language not in SUPPORTED_LANGUAGES:
            raise InvalidInputError(f"{where}: unsupported language")
        if q.kind not in QUESTION_KINDS:
            raise InvalidInputError(f"{where}: unknown kind {q.kind!r}")
        if q.difficulty not in DIFFICULTIES:
            raise InvalidInputError(f"{where}: unknown difficulty {q.difficulty!r}")
        if q.order_index < 1:
            raise InvalidInputError(f"{where}: order_index must start at 1")
        if (q.language, q.order_index) in seen:
            raise InvalidInputError(f"{where}: duplicate order_index")
        seen.add((q.language, q.order_index))
        if not q.topic.strip():
            raise InvalidInputError(f"{where}: topic is required")
        if q.options.count(q.correct_answer) != 1:
            raise InvalidInputError(
                f"{where}: correct_answer must match exactly one option"
            )


async def bulk_load(
    repo: QuestionRepo,
    questions: Sequence[Question],
    *,
    cache: CacheService = cache_service,
) -> dict[str, int]:
    """Replace the whole bank (all languages) and drop cached question lists.

    Returns the number of questions loaded per language.
    """
    validate_catalog(questions)
    await repo.replace_all(questions)
    await _cache_invalidate(cache, f"{_CACHE_PREFIX}*")

    counts = dict(Counter(q.language for q in questions))
    for language in SUPPORTED_LANGUAGES - counts.keys():
        logger.warning("Bulk-load left language=%s without questions", language)
    logger.info("Question bank replaced  counts=%s", counts)
    return counts


async def _cache_get(cache: CacheService, key: str) -> str | None:
    try:
        return await cache.get(key)
    except RedisError:
        logger.warning("Question cache read failed key=%s; reading store", key)
        return None


async def _cache_set(cache: CacheService, key: str, value: str, ttl: int) -> None:
    try:
        await cache.set(key, value, ttl)
    except RedisError:
        logger.warning("Question cache write failed key=%s", key)


async def _cache_invalidate(cache: CacheService, pattern: str) -> None:
    # Entries left behind still expire after the TTL.
    try:
        await cache.delete_pattern(pattern)
    except RedisError:
        logger.warning("Question cache invalidation failed pattern=%s", pattern)
