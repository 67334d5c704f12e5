"""Find-or-create resolution of catalog rows by natural key.

Every resolver takes the caller's ``Session`` and runs inside the caller's
transaction. Existing rows are returned untouched; missing rows are inserted
inside a savepoint so that a concurrent insert of the same natural key can be
absorbed by re-reading the winner's row.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kardex.config import DEFAULT_EMAIL_DOMAIN
from kardex.decoders import decode_period_code, normalize_text, parse_credits, split_full_name
from kardex.logging_config import get_logger
from kardex.models import (
    ACADEMIC_STATUS_ACTIVE,
    ACADEMIC_STATUS_INACTIVE,
    DEFAULT_COURSE_TYPE,
    Course,
    Period,
    Student,
    StudyPlan,
)

ModelT = TypeVar("ModelT")

log = get_logger(__name__)


def find_by_key(db: Session, model: type[ModelT], key: dict[str, Any]) -> Optional[ModelT]:
    return db.scalar(select(model).filter_by(**key))


def find_or_create(
    db: Session,
    model: type[ModelT],
    key: dict[str, Any],
    build: Callable[[], ModelT],
) -> tuple[ModelT, bool]:
    """Return ``(row, created)`` for the row matching ``key``.

    ``build`` is only called when no row exists yet.
    """
    found = find_by_key(db, model, key)
    if found is not None:
        return found, False
    return insert_or_reread(db, model, key, build())


def insert_or_reread(db: Session, model: type[ModelT], key: dict[str, Any], obj: ModelT) -> tuple[ModelT, bool]:
    try:
        with db.begin_nested():
            db.add(obj)
    except IntegrityError:
        existing = find_by_key(db, model, key)
        if existing is None:
            raise
        log.warning("natural_key_conflict_reread", table=model.__tablename__, key=key)
        return existing, False
    log.info("catalog_row_created", table=model.__tablename__, key=key)
    return obj, True


def resolve_plan(db: Session, version: str, display_name: Optional[str]) -> StudyPlan:
    version = version.strip()
    plan, _ = find_or_create(
        db,
        StudyPlan,
        {"version": version},
        lambda: StudyPlan(
            name=normalize_text(display_name) or f"Plan {version}",
            version=version,
            total_credits=0,
            suggested_semesters=0,
        ),
    )
    return plan


def resolve_period(db: Session, period_code: str) -> Period:
    decoded = decode_period_code(period_code)
    period, _ = find_or_create(
        db,
        Period,
        {"label": decoded.label},
        lambda: Period(
            year=decoded.year,
            cycle=decoded.cycle,
            label=decoded.label,
            start_date=date(decoded.year, 1, 1),
            end_date=date(decoded.year, 12, 31),
        ),
    )
    return period


def resolve_course(db: Session, code: str, name: Optional[str], credits_text: Optional[str], plan_id: str) -> Course:
    # plan_id only matters when the course is first created.
    code = code.strip()
    course, _ = find_or_create(
        db,
        Course,
        {"code": code},
        lambda: Course(
            code=code,
            name=normalize_text(name),
            credits=parse_credits(credits_text),
            course_type=DEFAULT_COURSE_TYPE,
            plan_id=plan_id,
        ),
    )
    return course


def academic_status_for(status_code: Optional[str]) -> str:
    return ACADEMIC_STATUS_ACTIVE if (status_code or "").strip() == "A" else ACADEMIC_STATUS_INACTIVE


def resolve_student(
    db: Session,
    enrollment_id: str,
    full_name: Optional[str],
    plan_id: str,
    status_code: Optional[str],
    email_domain: str = DEFAULT_EMAIL_DOMAIN,
) -> Student:
    enrollment_id = enrollment_id.strip()

    def build() -> Student:
        name = split_full_name(full_name)
        return Student(
            enrollment_id=enrollment_id,
            given_name=name.given_name,
            paternal_surname=name.paternal_surname,
            maternal_surname=name.maternal_surname,
            email=f"{enrollment_id}@{email_domain}",
            academic_status=academic_status_for(status_code),
            plan_id=plan_id,
            total_credits=0,
        )

    student, _ = find_or_create(db, Student, {"enrollment_id": enrollment_id}, build)
    return student
