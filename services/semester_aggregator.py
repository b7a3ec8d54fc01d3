"""
services/semester_aggregator.py

Per-course results and per-term / whole-record statistics.

Same policy as the grade calculator one level up: ungraded courses count toward
course and credit totals but are left out of the credit-weighted average.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from schemas.academic import EnrollmentRecord, TermInfo, TermKey
from schemas.grading import (
    AcademicEfficiency,
    CourseResult,
    OverallStatistics,
    SemesterSummary,
)
from services.approval import classify_approval
from services.grade_calculator import compute_final_grade, round_half_up


def evaluate_enrollment(enrollment: EnrollmentRecord) -> CourseResult:
    final_grade = compute_final_grade(enrollment.evaluations)
    approval = classify_approval(final_grade)
    return CourseResult(
        enrollment_id=enrollment.id,
        course=enrollment.course,
        term=enrollment.term,
        enrollment_status=enrollment.status,
        evaluations=list(enrollment.evaluations),
        final_grade=final_grade,
        approval=approval,
        evaluation_count=len(enrollment.evaluations),
        validated=approval.passed,
    )


def _credit_weighted_average(courses: Iterable[CourseResult]):
    grade_points = Decimal(0)
    graded_credits = 0
    for result in courses:
        if result.final_grade is None:
            continue
        grade_points += Decimal(repr(result.final_grade)) * result.course.credits
        graded_credits += result.course.credits
    if graded_credits == 0:
        return None
    return round_half_up(grade_points / graded_credits)


def _percentage(part: int, whole: int) -> float:
    if not whole:
        return 0.0
    return round_half_up(Decimal(part) * 100 / whole)


def summarize_term(term: TermInfo, courses: Sequence[CourseResult]) -> SemesterSummary:
    graded = [c for c in courses if c.final_grade is not None]
    passed = [c for c in graded if c.approval.passed]
    return SemesterSummary(
        term=term,
        courses=list(courses),
        total_courses=len(courses),
        graded_courses=len(graded),
        passed_courses=len(passed),
        failed_courses=len(graded) - len(passed),
        pending_courses=len(courses) - len(graded),
        total_credits=sum(c.course.credits for c in courses),
        passed_credits=sum(c.course.credits for c in passed),
        weighted_average=_credit_weighted_average(graded),
    )


def group_by_term(enrollments: Iterable[EnrollmentRecord]) -> Dict[TermKey, List[EnrollmentRecord]]:
    """Group enrollments by (year, number); insertion order is kept inside each group."""
    groups: Dict[TermKey, List[EnrollmentRecord]] = {}
    for enrollment in enrollments:
        groups.setdefault(enrollment.term.key, []).append(enrollment)
    return groups


def aggregate_by_semester(enrollments: Iterable[EnrollmentRecord]) -> List[SemesterSummary]:
    """One summary per distinct term, oldest first."""
    groups = group_by_term(enrollments)
    return [
        summarize_term(groups[key][0].term, [evaluate_enrollment(e) for e in groups[key]])
        for key in sorted(groups)
    ]


# =========================================================
# Whole-record statistics
# =========================================================

def classify_efficiency(percentage: float) -> str:
    if percentage >= 90:
        return "Excellent"
    if percentage >= 80:
        return "Very Good"
    if percentage >= 70:
        return "Good"
    if percentage >= 60:
        return "Fair"
    return "Poor"


def compute_academic_efficiency(passed_courses: int, total_courses: int, total_semesters: int) -> AcademicEfficiency:
    exact = Decimal(passed_courses) * 100 / total_courses if total_courses > 0 else Decimal(0)
    per_semester = Decimal(total_courses) / total_semesters if total_semesters > 0 else Decimal(0)
    return AcademicEfficiency(
        percentage=round_half_up(exact),
        classification=classify_efficiency(exact),
        average_courses_per_semester=round_half_up(per_semester),
    )


def compute_overall_statistics(semesters: Sequence[SemesterSummary]) -> OverallStatistics:
    """Roll every semester of a student's record into one block of statistics."""
    courses = [c for s in semesters for c in s.courses]
    total_courses = len(courses)
    passed_courses = sum(s.passed_courses for s in semesters)
    total_credits = sum(s.total_credits for s in semesters)
    passed_credits = sum(s.passed_credits for s in semesters)

    return OverallStatistics(
        total_courses=total_courses,
        passed_courses=passed_courses,
        failed_courses=sum(s.failed_courses for s in semesters),
        pending_courses=sum(s.pending_courses for s in semesters),
        total_credits=total_credits,
        passed_credits=passed_credits,
        overall_average=_credit_weighted_average(courses),
        approval_percentage=_percentage(passed_courses, total_courses),
        credit_percentage=_percentage(passed_credits, total_credits),
        total_semesters=len(semesters),
        efficiency=compute_academic_efficiency(passed_courses, total_courses, len(semesters)),
    )
