"""Kardex ingestion workflow.

One payload is reconciled inside a single transaction: the study plan and the
student are resolved first, then every transcript line is attached to its
period and course. Lines whose (student, course, period) triple already exists
are skipped, so re-ingesting a document duplicates nothing.
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import ValidationError
from sqlalchemy.orm import Session

from kardex.config import DEFAULT_EMAIL_DOMAIN
from kardex.decoders import decode_grade, decode_period_code, split_full_name
from kardex.errors import InvalidPayload
from kardex.logging_config import get_logger
from kardex.models import TranscriptEntry
from kardex.resolvers import (
    academic_status_for,
    find_or_create,
    resolve_course,
    resolve_period,
    resolve_plan,
    resolve_student,
)
from kardex.schemas import IngestResult, KardexPayload

log = get_logger(__name__)


def validate_payload(payload: Union[KardexPayload, dict[str, Any]]) -> KardexPayload:
    """Return a validated payload whose upstream ``ok`` flag is true.

    Raises:
        InvalidPayload: If the flag is false or missing, or the shape is wrong.
    """
    if isinstance(payload, KardexPayload):
        parsed = payload
    else:
        if not isinstance(payload, dict) or payload.get("ok") is not True:
            raise InvalidPayload("Payload rejected: upstream ok flag is false or missing")
        try:
            parsed = KardexPayload.model_validate(payload)
        except ValidationError as exc:
            details = exc.errors(include_url=False, include_context=False)
            raise InvalidPayload("Payload rejected: invalid structure", details=details) from exc
    if parsed.ok is not True:
        raise InvalidPayload("Payload rejected: upstream ok flag is false or missing")
    return parsed


def ingest_kardex(
    db: Session,
    payload: Union[KardexPayload, dict[str, Any]],
    email_domain: str = DEFAULT_EMAIL_DOMAIN,
) -> IngestResult:
    """Reconcile one kardex payload against the catalog.

    ``db`` must not have a transaction in progress; the whole payload commits
    or rolls back as one unit.
    """
    data = validate_payload(payload)
    student_in = data.student
    log.info(
        "kardex_ingest_started",
        enrollment_id=student_in.enrollment_id,
        plan_version=student_in.plan_version,
        items=len(data.courses),
    )
    try:
        with db.begin():
            plan = resolve_plan(db, student_in.plan_version, student_in.program)
            student = resolve_student(
                db,
                student_in.enrollment_id,
                student_in.full_name,
                plan.id,
                student_in.status_code,
                email_domain=email_domain,
            )
            created = 0
            skipped = 0
            for item in data.courses:
                period = resolve_period(db, item.period_code)
                course = resolve_course(db, item.course_code, item.course_name, item.credits, plan.id)
                grade = decode_grade(item.ordinary_grade)
                _, was_created = find_or_create(
                    db,
                    TranscriptEntry,
                    {"student_id": student.id, "course_id": course.id, "period_id": period.id},
                    lambda: TranscriptEntry(
                        student_id=student.id,
                        course_id=course.id,
                        period_id=period.id,
                        grade=grade.grade,
                        status=grade.status,
                        running_gpa=0.0,
                        term_gpa=0.0,
                        source_file=data.source_file,
                    ),
                )
                if was_created:
                    created += 1
                else:
                    skipped += 1
                    log.debug(
                        "transcript_entry_skipped",
                        enrollment_id=student.enrollment_id,
                        course_code=course.code,
                        period=period.label,
                    )
            result = IngestResult(
                student_id=student.id,
                plan_id=plan.id,
                entries_created=created,
                entries_skipped=skipped,
            )
    except Exception as exc:
        log.error("kardex_ingest_failed", enrollment_id=student_in.enrollment_id, error=str(exc))
        raise
    log.info(
        "kardex_ingest_completed",
        enrollment_id=student_in.enrollment_id,
        entries_created=result.entries_created,
        entries_skipped=result.entries_skipped,
    )
    return result


def preview_kardex(payload: Union[KardexPayload, dict[str, Any]]) -> dict[str, Any]:
    """Decode a payload without touching storage."""
    data = validate_payload(payload)
    name = split_full_name(data.student.full_name)
    items = []
    for item in data.courses:
        period = decode_period_code(item.period_code)
        grade = decode_grade(item.ordinary_grade)
        items.append(
            {
                "course_code": item.course_code.strip(),
                "period": period.label,
                "grade": grade.grade,
                "status": grade.status,
            }
        )
    return {
        "plan_version": data.student.plan_version.strip(),
        "enrollment_id": data.student.enrollment_id.strip(),
        "given_name": name.given_name,
        "paternal_surname": name.paternal_surname,
        "maternal_surname": name.maternal_surname,
        "academic_status": academic_status_for(data.student.status_code),
        "items": items,
        "periods": sorted({row["period"] for row in items}),
    }
