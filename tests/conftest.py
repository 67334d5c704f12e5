"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
BACKEND_PATH = PROJECT_ROOT / "backend"
if str(BACKEND_PATH) not in sys.path:
    sys.path.insert(0, str(BACKEND_PATH))

from kardex.database import build_engine, build_session_factory, init_db  # noqa: E402


@pytest.fixture
def engine(tmp_path: Path):
    """Engine bound to a fresh SQLite file with the schema created."""
    db_engine = build_engine(f"sqlite:///{tmp_path / 'kardex.db'}")
    init_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def sample_payload() -> dict:
    return {
        "ok": True,
        "student": {
            "date": "2024-06-01",
            "program": "Ingeniería",
            "planVersion": "2021-A",
            "unit": "01",
            "enrollmentId": "A001",
            "fullName": "Ana Maria Ruiz Torres",
            "statusCode": "A",
        },
        "courses": [
            {
                "credits": "6",
                "courseCode": "MAT101",
                "courseName": "Cálculo",
                "grade1": None,
                "grade2": None,
                "ordinaryGrade": "9",
                "regularizationGrade": None,
                "periodCode": "2301",
                "examI": None,
                "examR": None,
                "examB": None,
            }
        ],
    }
