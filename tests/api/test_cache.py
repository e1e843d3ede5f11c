"""Question-list cache through the HTTP surface.

1. First GET is a cache miss (reads the bank, populates the cache)
2. Second GET is a cache hit
3. A bulk-load invalidates every cached list
4. Languages have separate cache entries
"""

from __future__ import annotations

import asyncio

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from proficiency.api import dependencies
from proficiency.services import question_bank
from proficiency.services.cache import cache_service
from proficiency.services.question_catalog import build_catalog


def _cache_ops(operation: str) -> float:
    value = REGISTRY.get_sample_value(
        "question_cache_operations_total", {"operation": operation}
    )
    return value if value is not None else 0.0


def test_cache_miss_then_hit(client: TestClient) -> None:
    misses, hits = _cache_ops("miss"), _cache_ops("hit")

    resp1 = client.get("/v1/assessment/questions/python")
    resp2 = client.get("/v1/assessment/questions/python")

    assert resp1.json() == resp2.json()
    assert _cache_ops("miss") - misses == 1
    assert _cache_ops("hit") - hits == 1


def test_bulk_load_invalidates_cached_questions(client: TestClient) -> None:
    before = client.get("/v1/assessment/questions/python").json()

    asyncio.run(
        question_bank.bulk_load(
            dependencies.question_repo, build_catalog(), cache=cache_service
        )
    )

    after = client.get("/v1/assessment/questions/python").json()
    # Reloading mints new question ids; stale cached ids would still match.
    assert [q["id"] for q in after["questions"]] != [q["id"] for q in before["questions"]]
    assert [q["prompt"] for q in after["questions"]] == [
        q["prompt"] for q in before["questions"]
    ]


def test_cache_entries_are_per_language(client: TestClient) -> None:
    python = client.get("/v1/assessment/questions/python").json()
    java = client.get("/v1/assessment/questions/java").json()
    assert python["questions"][0]["language"] == "python"
    assert java["questions"][0]["language"] == "java"
    assert {"questions:python", "questions:java"} <= set(cache_service._store)  # type: ignore[attr-defined]
