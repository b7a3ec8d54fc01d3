"""
schemas/grading.py

Derived results of the grading engine. None of these are persisted: every request
recomputes them from the current snapshot.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.academic import (
    CourseInfo,
    EnrollmentStatus,
    EvaluationRecord,
    StudentInfo,
    TermInfo,
)


# =========================================================
# Approval
# =========================================================

class ApprovalCode(str, Enum):
    UNGRADED = "UNGRADED"
    PASSED = "PASSED"
    FAILED = "FAILED"


class ApprovalStatus(BaseModel):
    code: ApprovalCode
    label: str
    passed: bool
    severity: str                   # neutral / positive / negative (display hint)

    model_config = ConfigDict(frozen=True)


# =========================================================
# Course / semester rollups
# =========================================================

class CourseResult(BaseModel):
    enrollment_id: Optional[int] = None
    course: CourseInfo
    term: TermInfo
    enrollment_status: EnrollmentStatus
    evaluations: List[EvaluationRecord] = Field(default_factory=list)
    final_grade: Optional[float] = None
    approval: ApprovalStatus
    evaluation_count: int = 0
    validated: bool = False

    model_config = ConfigDict(frozen=True)


class SemesterSummary(BaseModel):
    term: TermInfo
    courses: List[CourseResult] = Field(default_factory=list)
    total_courses: int = 0
    graded_courses: int = 0
    passed_courses: int = 0
    failed_courses: int = 0
    pending_courses: int = 0
    total_credits: int = 0
    passed_credits: int = 0
    weighted_average: Optional[float] = None

    model_config = ConfigDict(frozen=True)


class AcademicEfficiency(BaseModel):
    percentage: float
    classification: str
    average_courses_per_semester: float

    model_config = ConfigDict(frozen=True)


class OverallStatistics(BaseModel):
    total_courses: int = 0
    passed_courses: int = 0
    failed_courses: int = 0
    pending_courses: int = 0
    total_credits: int = 0
    passed_credits: int = 0
    overall_average: Optional[float] = None
    approval_percentage: float = 0.0
    credit_percentage: float = 0.0
    total_semesters: int = 0
    efficiency: AcademicEfficiency

    model_config = ConfigDict(frozen=True)


# =========================================================
# Progression
# =========================================================

class AlertCategory(str, Enum):
    LOW_LOAD = "LOW_LOAD"
    FAILED_COURSES = "FAILED_COURSES"
    LOW_APPROVAL = "LOW_APPROVAL"


class ProgressionTier(str, Enum):
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"


class ProgressionAlert(BaseModel):
    category: AlertCategory
    term_label: str
    message: str

    model_config = ConfigDict(frozen=True)


class ProgressionAssessment(BaseModel):
    tier: ProgressionTier
    alerts: List[str] = Field(default_factory=list)
    alert_details: List[ProgressionAlert] = Field(default_factory=list)
    observations: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    needs_attention: bool = False
    low_load_semesters: int = 0
    semesters_with_failures: int = 0
    low_approval_semesters: int = 0

    model_config = ConfigDict(frozen=True)


# =========================================================
# Report inputs (one student)
# =========================================================

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SemesterReport(BaseModel):
    """Everything needed for one student's grade certificate for one term."""
    student: StudentInfo
    summary: SemesterSummary
    generated_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(frozen=True)


class ProgressionReport(BaseModel):
    """Everything needed for one student's course validation across all terms."""
    student: StudentInfo
    semesters: List[SemesterSummary] = Field(default_factory=list)
    statistics: OverallStatistics
    assessment: ProgressionAssessment
    generated_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(frozen=True)
