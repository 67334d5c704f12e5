from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool


class KardexStudent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)
    date: Optional[str] = Field(default=None, validation_alias=AliasChoices("date", "fecha"))
    program: Optional[str] = Field(default=None, validation_alias=AliasChoices("program", "programa"))
    plan_version: str = Field(validation_alias=AliasChoices("plan_version", "planVersion", "plan"))
    unit: Optional[str] = Field(default=None, validation_alias=AliasChoices("unit", "unidad"))
    enrollment_id: str = Field(validation_alias=AliasChoices("enrollment_id", "enrollmentId", "expediente"))
    full_name: str = Field(validation_alias=AliasChoices("full_name", "fullName", "alumno"))
    status_code: Optional[str] = Field(default=None, validation_alias=AliasChoices("status_code", "statusCode", "estatus"))


class KardexCourse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)
    credits: Optional[str] = Field(default=None, validation_alias=AliasChoices("credits", "CR"))
    course_code: str = Field(validation_alias=AliasChoices("course_code", "courseCode", "CVE"))
    course_name: Optional[str] = Field(default=None, validation_alias=AliasChoices("course_name", "courseName", "Materia"))
    grade1: Optional[str] = Field(default=None, validation_alias=AliasChoices("grade1", "E1"))
    grade2: Optional[str] = Field(default=None, validation_alias=AliasChoices("grade2", "E2"))
    ordinary_grade: Optional[str] = Field(default=None, validation_alias=AliasChoices("ordinary_grade", "ordinaryGrade", "ORD"))
    regularization_grade: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("regularization_grade", "regularizationGrade", "REG")
    )
    period_code: str = Field(validation_alias=AliasChoices("period_code", "periodCode", "CIC"))
    exam_i: Optional[str] = Field(default=None, validation_alias=AliasChoices("exam_i", "examI", "I"))
    exam_r: Optional[str] = Field(default=None, validation_alias=AliasChoices("exam_r", "examR", "R"))
    exam_b: Optional[str] = Field(default=None, validation_alias=AliasChoices("exam_b", "examB", "B"))


class KardexPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    ok: Optional[StrictBool] = None
    student: KardexStudent = Field(validation_alias=AliasChoices("student", "alumno"))
    courses: list[KardexCourse] = Field(default_factory=list, validation_alias=AliasChoices("courses", "materias"))
    summary: Optional[Any] = Field(default=None, validation_alias=AliasChoices("summary", "resumen"))
    source_file: Optional[str] = None


class IngestResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    ok: bool = True
    student_id: str = Field(serialization_alias="studentId")
    plan_id: str = Field(serialization_alias="planId")
    entries_created: int = Field(default=0, serialization_alias="entriesCreated")
    entries_skipped: int = Field(default=0, serialization_alias="entriesSkipped")
