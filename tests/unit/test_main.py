"""Unit tests for the HTTP entry point."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from kardex.main import app, get_db


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client) -> None:
    """Health endpoint answers without touching storage."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_post_kardex_returns_ids(client, sample_payload) -> None:
    """Successful ingestion returns the resolved identifiers."""
    response = client.post("/kardex", json=sample_payload)

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["studentId"] and body["planId"]
    assert body["entriesCreated"] == 1


def test_post_kardex_rejects_failed_upstream(client, sample_payload) -> None:
    """ok=false maps to 400."""
    response = client.post("/kardex", json=dict(sample_payload, ok=False))

    assert response.status_code == 400


def test_post_kardex_reports_malformed_period(client, sample_payload) -> None:
    """A malformed period code maps to 422 and names the code."""
    sample_payload["courses"][0]["periodCode"] = "9"

    response = client.post("/kardex", json=sample_payload)

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "9"


def test_post_kardex_checks_ok_before_structure(client) -> None:
    """ok=false is a 400 even when the rest of the body is missing."""
    response = client.post("/kardex", json={"ok": False})

    assert response.status_code == 400
    assert response.json()["detail"]["errors"] == []


def test_post_kardex_reports_incomplete_body_as_400(client) -> None:
    """Structural problems in an ok payload map to 400 with the error list."""
    response = client.post("/kardex", json={"ok": True, "courses": []})

    assert response.status_code == 400
    errors = response.json()["detail"]["errors"]
    assert any(error["loc"] == ["student"] for error in errors)


def test_post_kardex_rejects_string_ok_flag(client, sample_payload) -> None:
    """The ok flag must be a JSON boolean."""
    response = client.post("/kardex", json=dict(sample_payload, ok="true"))

    assert response.status_code == 400
