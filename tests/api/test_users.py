from __future__ import annotations

from fastapi.testclient import TestClient


def test_register_user(client: TestClient) -> None:
    resp = client.post(
        "/v1/users",
        json={"user_id": "u-100", "name": "Ada", "email": "ADA@example.com"},
    )
    assert resp.status_code == 201
    assert resp.json() == {
        "user_id": "u-100",
        "name": "Ada",
        "email": "ada@example.com",
        "has_completed_assessment": False,
    }


def test_register_duplicate_user_is_409(client: TestClient) -> None:
    client.post("/v1/users", json={"user_id": "u-200"})
    resp = client.post("/v1/users", json={"user_id": "u-200"})
    assert resp.status_code == 409
    assert resp.json()["detail"]["message"] == "A user with this id already exists"


def test_register_blank_user_id_is_400(client: TestClient) -> None:
    resp = client.post("/v1/users", json={"user_id": "  "})
    assert resp.status_code == 400


def test_register_missing_user_id_is_400(client: TestClient) -> None:
    resp = client.post("/v1/users", json={"name": "No Id"})
    assert resp.status_code == 400
    assert resp.json()["detail"]["fields"] == ["user_id"]
