from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Union

from schemas.academic import TermInfo
from schemas.grading import OverallStatistics

# ==========================================================
# [request schemas]
# ==========================================================
class GradeReportRequest(BaseModel):
    student_id: Optional[int] = None        # student ID
    year: Optional[int] = None              # academic year of the term
    term_number: Optional[int] = None       # 1 or 2
    include_details: bool = True            # include per-course evaluation detail


class ValidationReportRequest(BaseModel):
    student_id: Optional[int] = None
    include_details: bool = True


# ==========================================================
# [response schemas]
# ==========================================================
class ChartSeries(BaseModel):
    labels: List[str] = Field(default_factory=list)
    values: List[Optional[Union[int, float]]] = Field(default_factory=list)


class ReportData(BaseModel):
    """Report-ready structure handed to a renderer (document or JSON)."""
    title: str
    subtitle: str
    generated_at: str
    student: Dict[str, Any]
    period: Optional[Dict[str, Any]] = None             # grade certificate only
    progression: Optional[Dict[str, Any]] = None        # course validation only
    table: List[Dict[str, Any]] = Field(default_factory=list)
    summary: Dict[str, Any] = Field(default_factory=dict)
    course_details: List[Dict[str, Any]] = Field(default_factory=list)
    semester_breakdown: List[Dict[str, Any]] = Field(default_factory=list)
    alerts: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    observations: List[str] = Field(default_factory=list)
    charts: Dict[str, ChartSeries] = Field(default_factory=dict)


class GradeAvailability(BaseModel):
    valid: bool
    message: str
    total_courses: int = 0
    courses_with_grades: int = 0


class ProgressionOverview(BaseModel):
    level: str
    needs_attention: bool
    total_alerts: int


class ValidationSummary(BaseModel):
    student: str
    statistics: OverallStatistics
    progression: ProgressionOverview
    latest_term: Optional[TermInfo] = None
