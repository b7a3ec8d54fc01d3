"""
services/report_assembler.py

Shapes grading results into the sections a report renderer consumes:
header, course table, summary block, per-course detail, observations and chart series.

Two report kinds:
- grade certificate: one student, one term (SemesterReport)
- course validation: one student, whole record with progression (ProgressionReport)

No grading happens here; labels only. Performance levels use the same passing
grade as the approval classifier.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from schemas.academic import EnrollmentStatus, StudentInfo
from schemas.grading import CourseResult, ProgressionReport, SemesterReport, SemesterSummary
from schemas.reports import ChartSeries, ReportData
from services.approval import PASSING_GRADE
from services.grade_calculator import to_float
from utils.formatting import format_date, format_datetime, format_number, format_percentage

PENDING = "Pending"

PERFORMANCE_LEVELS = (
    (90, "Excellent"),
    (80, "Very Good"),
    (70, "Good"),
    (PASSING_GRADE, "Satisfactory"),
)


def performance_level(average: float) -> str:
    for floor, label in PERFORMANCE_LEVELS:
        if average >= floor:
            return label
    return "Unsatisfactory"


def assemble_report_data(
    student: StudentInfo,
    data: Union[SemesterReport, ProgressionReport],
    include_details: bool = True,
) -> ReportData:
    if isinstance(data, SemesterReport):
        return _grade_certificate(student, data, include_details)
    if isinstance(data, ProgressionReport):
        return _course_validation(student, data, include_details)
    raise TypeError(f"unsupported report data: {type(data).__name__}")


# ==========================================================
# [shared pieces]
# ==========================================================

def _grade_text(value: Optional[float]) -> str:
    return format_number(value, 2) if value is not None else PENDING


def _course_notes(result: CourseResult) -> str:
    notes = []
    if result.final_grade is None:
        notes.append("Grade pending")
    if result.enrollment_status == EnrollmentStatus.WITHDRAWN:
        notes.append("Course withdrawn")

    graded = [e for e in result.evaluations if to_float(e.score) is not None]
    total_weight = sum(to_float(e.weight) or 0 for e in result.evaluations)
    if total_weight < 100 and len(graded) < len(result.evaluations):
        notes.append("Incomplete evaluations")
    return ", ".join(notes)


def _course_row(index: int, result: CourseResult, with_term: bool = False) -> Dict[str, Any]:
    row: Dict[str, Any] = {"No.": index}
    if with_term:
        row["Semester"] = result.term.label
    row.update({
        "Code": result.course.code,
        "Course": result.course.name,
        "Credits": result.course.credits,
        "Final Grade": _grade_text(result.final_grade),
        "Status": result.approval.label,
        "Notes": _course_notes(result),
    })
    return row


def _course_detail(result: CourseResult) -> Dict[str, Any]:
    return {
        "course": {
            "code": result.course.code,
            "name": result.course.name,
            "credits": result.course.credits,
            "semester": result.term.label,
        },
        "evaluations": [
            {
                "Assessment": e.assessment_type,
                "Score": _grade_text(to_float(e.score)),
                "Weight (%)": format_number(to_float(e.weight), 1),
                "Date": format_date(e.evaluated_on) or "Not recorded",
                "Notes": e.notes or "",
            }
            for e in result.evaluations
        ],
        "final_grade": _grade_text(result.final_grade),
        "status": result.approval.label,
    }


def _approval_states(courses: Sequence[CourseResult]) -> ChartSeries:
    passed = sum(1 for c in courses if c.approval.passed)
    pending = sum(1 for c in courses if c.final_grade is None)
    return ChartSeries(
        labels=["Passed", "Failed", "Pending"],
        values=[passed, len(courses) - passed - pending, pending],
    )


def _grade_distribution(courses: Sequence[CourseResult]) -> ChartSeries:
    graded = [c for c in courses if c.final_grade is not None]
    return ChartSeries(labels=[c.course.code for c in graded], values=[c.final_grade for c in graded])


def _student_block(student: StudentInfo) -> Dict[str, Any]:
    return {"id": student.id, "name": student.full_name}


def _scale_observations() -> List[str]:
    return [
        "Grades are expressed on a 0 to 100 point scale.",
        f"The minimum passing grade is {PASSING_GRADE} points.",
    ]


# ==========================================================
# [grade certificate]
# ==========================================================

def _grade_certificate(student: StudentInfo, data: SemesterReport, include_details: bool) -> ReportData:
    summary = data.summary
    term = summary.term
    courses = summary.courses

    observations = _scale_observations()
    observations.append(f"This report covers {term.label}.")
    if term.start_date and term.end_date:
        observations.append(f"Period: {format_date(term.start_date)} to {format_date(term.end_date)}.")
    if summary.passed_courses:
        observations.append(f"The student passed {summary.passed_courses} course(s) in this period.")
    if summary.failed_courses:
        observations.append(f"The student failed {summary.failed_courses} course(s) in this period.")
    if summary.pending_courses:
        observations.append(f"{summary.pending_courses} course(s) have pending grades.")
    if summary.weighted_average is not None:
        observations.append(
            f"Overall average: {format_number(summary.weighted_average)} "
            f"({performance_level(summary.weighted_average)})."
        )

    return ReportData(
        title="CERTIFICATE OF GRADES",
        subtitle="Individual grade report by semester",
        generated_at=format_datetime(data.generated_at),
        student=_student_block(student),
        period={
            "description": term.label,
            "year": term.year,
            "semester": term.number,
            "start_date": format_date(term.start_date),
            "end_date": format_date(term.end_date),
        },
        table=[_course_row(i, c) for i, c in enumerate(courses, start=1)],
        summary={
            "Total Courses": summary.total_courses,
            "Graded Courses": summary.graded_courses,
            "Passed Courses": summary.passed_courses,
            "Failed Courses": summary.failed_courses,
            "Overall Average": format_number(summary.weighted_average) if summary.weighted_average is not None else "N/A",
            "Total Credits": summary.total_credits,
            "Passed Credits": summary.passed_credits,
            "Approval Percentage": (
                format_percentage(summary.passed_courses / summary.graded_courses)
                if summary.graded_courses else "0%"
            ),
        },
        course_details=[_course_detail(c) for c in courses] if include_details else [],
        observations=observations,
        charts={
            "grade_distribution": _grade_distribution(courses),
            "approval_states": _approval_states(courses),
        },
    )


# ==========================================================
# [course validation]
# ==========================================================

def _semester_row(summary: SemesterSummary) -> Dict[str, Any]:
    return {
        "Semester": summary.term.label,
        "Courses": summary.total_courses,
        "Passed": summary.passed_courses,
        "Failed": summary.failed_courses,
        "Pending": summary.pending_courses,
        "Credits": summary.total_credits,
        "Passed Credits": summary.passed_credits,
        "Average": format_number(summary.weighted_average) if summary.weighted_average is not None else "N/A",
    }


def _course_validation(student: StudentInfo, data: ProgressionReport, include_details: bool) -> ReportData:
    stats = data.statistics
    assessment = data.assessment
    courses = [c for s in data.semesters for c in s.courses]

    observations = _scale_observations()
    observations.append(f"The record spans {stats.total_semesters} semester(s).")
    observations.extend(assessment.observations)
    if stats.overall_average is not None:
        observations.append(
            f"Overall average: {format_number(stats.overall_average)} "
            f"({performance_level(stats.overall_average)})."
        )

    return ReportData(
        title="COURSE VALIDATION",
        subtitle="Academic record and progression review",
        generated_at=format_datetime(data.generated_at),
        student=_student_block(student),
        progression={
            "Progression Level": assessment.tier.value,
            "Needs Attention": "Yes" if assessment.needs_attention else "No",
            "Total Alerts": len(assessment.alerts),
            "Semesters With Failures": assessment.semesters_with_failures,
            "Low Load Semesters": assessment.low_load_semesters,
        },
        table=[_course_row(i, c, with_term=True) for i, c in enumerate(courses, start=1)],
        summary={
            "Total Courses": stats.total_courses,
            "Passed Courses": stats.passed_courses,
            "Failed Courses": stats.failed_courses,
            "Pending Courses": stats.pending_courses,
            "Overall Average": format_number(stats.overall_average) if stats.overall_average is not None else "N/A",
            "Total Credits": stats.total_credits,
            "Passed Credits": stats.passed_credits,
            "Approval Percentage": format_percentage(stats.approval_percentage / 100),
            "Credit Percentage": format_percentage(stats.credit_percentage / 100),
            "Total Semesters": stats.total_semesters,
            "Academic Efficiency": f"{format_number(stats.efficiency.percentage)}% ({stats.efficiency.classification})",
        },
        course_details=[_course_detail(c) for c in courses] if include_details else [],
        semester_breakdown=[_semester_row(s) for s in data.semesters],
        alerts=list(assessment.alerts),
        recommendations=list(assessment.recommendations),
        observations=observations,
        charts={
            "grade_distribution": _grade_distribution(courses),
            "approval_states": _approval_states(courses),
            "semester_averages": ChartSeries(
                labels=[s.term.label for s in data.semesters],
                values=[s.weighted_average for s in data.semesters],
            ),
        },
    )
