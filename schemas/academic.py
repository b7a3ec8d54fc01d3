"""
schemas/academic.py

Read-only snapshots of the records the grading engine works on.
The data-access layer (services/academic_repository.py) builds them from the DB;
tests and other callers can build them directly.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field


class TermKey(NamedTuple):
    """Composite (year, term number) key; tuple ordering gives chronological order."""
    year: int
    number: int


class EnrollmentStatus(str, Enum):
    ACTIVE = "ACTIVE"
    WITHDRAWN = "WITHDRAWN"
    COMPLETED = "COMPLETED"


class EvaluationRecord(BaseModel):
    id: Optional[int] = None
    assessment_type: str = ""                          # exam, assignment, project ...
    score: Optional[Union[float, str]] = None           # 0-100, None = not graded yet
    weight: Optional[Union[float, str]] = None          # percentage of the course grade
    evaluated_on: Optional[date] = None
    notes: Optional[str] = None

    model_config = ConfigDict(frozen=True, from_attributes=True)


class CourseInfo(BaseModel):
    id: Optional[int] = None
    code: str
    name: str
    credits: int = Field(..., gt=0)

    model_config = ConfigDict(frozen=True, from_attributes=True)


class TermInfo(BaseModel):
    id: Optional[int] = None
    year: int
    number: int = Field(..., ge=1, le=2)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @property
    def key(self) -> TermKey:
        return TermKey(self.year, self.number)

    @computed_field  # type: ignore[misc]
    @property
    def label(self) -> str:
        return f"Semester {self.number}, {self.year}"


class EnrollmentRecord(BaseModel):
    id: Optional[int] = None
    student_id: Optional[int] = None
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE
    course: CourseInfo
    term: TermInfo
    evaluations: List[EvaluationRecord] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, from_attributes=True)


class StudentInfo(BaseModel):
    id: int
    first_name: str
    middle_name: Optional[str] = None
    last_name: str

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @computed_field  # type: ignore[misc]
    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(p.strip() for p in parts if p and p.strip())
