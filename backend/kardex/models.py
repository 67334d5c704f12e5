from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


ACADEMIC_STATUS_ACTIVE = "ACTIVE"
ACADEMIC_STATUS_INACTIVE = "INACTIVE"
DEFAULT_COURSE_TYPE = "REQUIRED"


class Base(DeclarativeBase):
    pass


class StudyPlan(Base):
    __tablename__ = "study_plans"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String)
    version: Mapped[str] = mapped_column(String, unique=True, index=True)
    total_credits: Mapped[int] = mapped_column(Integer, default=0)
    suggested_semesters: Mapped[int] = mapped_column(Integer, default=0)


class Period(Base):
    __tablename__ = "periods"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    year: Mapped[int] = mapped_column(Integer, index=True)
    cycle: Mapped[int] = mapped_column(Integer)
    label: Mapped[str] = mapped_column(String, unique=True, index=True)
    start_date: Mapped[date] = mapped_column(Date)
    end_date: Mapped[date] = mapped_column(Date)


class Course(Base):
    __tablename__ = "courses"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    # Unique across every plan, not per plan.
    code: Mapped[str] = mapped_column(String, unique=True, index=True)
    name: Mapped[str] = mapped_column(String)
    credits: Mapped[int] = mapped_column(Integer, default=0)
    course_type: Mapped[str] = mapped_column(String, default=DEFAULT_COURSE_TYPE)
    plan_id: Mapped[str] = mapped_column(String, ForeignKey("study_plans.id"), index=True)


class Student(Base):
    __tablename__ = "students"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    enrollment_id: Mapped[str] = mapped_column(String, unique=True, index=True)
    given_name: Mapped[str] = mapped_column(String)
    paternal_surname: Mapped[str] = mapped_column(String, default="")
    maternal_surname: Mapped[str] = mapped_column(String, default="")
    email: Mapped[str] = mapped_column(String)
    academic_status: Mapped[str] = mapped_column(String, default=ACADEMIC_STATUS_ACTIVE)
    plan_id: Mapped[str] = mapped_column(String, ForeignKey("study_plans.id"), index=True)
    total_credits: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class TranscriptEntry(Base):
    __tablename__ = "transcript_entries"
    __table_args__ = (UniqueConstraint("student_id", "course_id", "period_id", name="uq_transcript_student_course_period"),)
    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    student_id: Mapped[str] = mapped_column(String, ForeignKey("students.id"), index=True)
    course_id: Mapped[str] = mapped_column(String, ForeignKey("courses.id"), index=True)
    period_id: Mapped[str] = mapped_column(String, ForeignKey("periods.id"), index=True)
    grade: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    status: Mapped[str] = mapped_column(String)
    running_gpa: Mapped[float] = mapped_column(Float, default=0.0)
    term_gpa: Mapped[float] = mapped_column(Float, default=0.0)
    source_file: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
