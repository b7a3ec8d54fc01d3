"""
services/grade_report_service.py

Use cases behind the report endpoints. Each method:
  1) validates identifiers (fail fast, nothing computed on bad input)
  2) asks the repository for a snapshot
  3) runs the pure grading pipeline (calculator -> classifier -> aggregator -> progression)
  4) returns a ServiceResult instead of raising for expected states

Repository failures come back as DATA_ACCESS_ERROR results; nothing is retried.
"""

import logging
from functools import wraps
from typing import List, Optional

from config.settings import settings
from schemas.academic import TermInfo
from schemas.common import ErrorCode, ServiceResult
from schemas.grading import ProgressionReport, SemesterReport
from schemas.reports import GradeAvailability, ProgressionOverview, ReportData, ValidationSummary
from services.academic_repository import AcademicRepository
from services.errors import DataAccessError
from services.progression import ProgressionThresholds, evaluate_progression
from services.report_assembler import assemble_report_data
from services.semester_aggregator import (
    aggregate_by_semester,
    compute_overall_statistics,
    evaluate_enrollment,
    summarize_term,
)

logger = logging.getLogger(__name__)

VALID_TERM_NUMBERS = (1, 2)


def _failure(code: ErrorCode, message: str) -> ServiceResult:
    logger.warning("%s: %s", code.value, message)
    return ServiceResult.failure(code, message)


def _guard_data_access(func):
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except DataAccessError as exc:
            logger.exception("Record lookup failed in %s", func.__name__)
            return ServiceResult.failure(ErrorCode.DATA_ACCESS_ERROR, str(exc))
    return wrapper


class GradeReportService:
    def __init__(self, repository: AcademicRepository, thresholds: Optional[ProgressionThresholds] = None):
        self.repository = repository
        self.thresholds = thresholds or ProgressionThresholds.from_settings(settings)

    # ==========================================================
    # [internal] snapshot loading
    # ==========================================================

    def _load_semester(self, student_id, year, term_number) -> ServiceResult[SemesterReport]:
        if not student_id or not year or not term_number:
            return _failure(ErrorCode.INVALID_INPUT, "student_id, year and term_number are required")
        if term_number not in VALID_TERM_NUMBERS:
            return _failure(ErrorCode.INVALID_INPUT, "term_number must be 1 or 2")

        term = self.repository.find_term(year, term_number)
        if term is None:
            return _failure(ErrorCode.NOT_FOUND, f"Semester {term_number}/{year} not found")
        student = self.repository.get_student(student_id)
        if student is None:
            return _failure(ErrorCode.NOT_FOUND, f"Student {student_id} not found")

        enrollments = self.repository.list_enrollments(student.id, term_id=term.id)
        summary = summarize_term(term, [evaluate_enrollment(e) for e in enrollments])
        return ServiceResult.success(SemesterReport(student=student, summary=summary))

    def _load_progression(self, student_id) -> ServiceResult[ProgressionReport]:
        if not student_id:
            return _failure(ErrorCode.INVALID_INPUT, "student_id is required")
        student = self.repository.get_student(student_id)
        if student is None:
            return _failure(ErrorCode.NOT_FOUND, f"Student {student_id} not found")

        semesters = aggregate_by_semester(self.repository.list_enrollments(student.id))
        return ServiceResult.success(ProgressionReport(
            student=student,
            semesters=semesters,
            statistics=compute_overall_statistics(semesters),
            assessment=evaluate_progression(semesters, self.thresholds),
        ))

    # ==========================================================
    # [semester grades]
    # ==========================================================

    @_guard_data_access
    def get_semester_grades(self, student_id, year, term_number) -> ServiceResult[SemesterReport]:
        loaded = self._load_semester(student_id, year, term_number)
        if not loaded.ok:
            return loaded
        return ServiceResult.success(
            loaded.data, f"Grades found for {loaded.data.summary.total_courses} course(s)"
        )

    @_guard_data_access
    def list_available_semesters(self, student_id) -> ServiceResult[List[TermInfo]]:
        if not student_id:
            return _failure(ErrorCode.INVALID_INPUT, "student_id is required")
        terms = self.repository.list_student_terms(student_id)
        return ServiceResult.success(terms, f"{len(terms)} semester(s) found")

    @_guard_data_access
    def validate_existing_grades(self, student_id, year, term_number) -> ServiceResult[GradeAvailability]:
        loaded = self._load_semester(student_id, year, term_number)
        if not loaded.ok:
            return loaded

        courses = loaded.data.summary.courses
        with_grades = sum(1 for c in courses if c.evaluations)
        availability = GradeAvailability(
            valid=with_grades > 0,
            message=f"{with_grades} course(s) with grades found" if with_grades else "No grades found for this period",
            total_courses=len(courses),
            courses_with_grades=with_grades,
        )
        return ServiceResult.success(availability, availability.message)

    @_guard_data_access
    def build_grade_report(
        self, student_id, year, term_number, include_details: bool = True, require_grades: bool = True
    ) -> ServiceResult[ReportData]:
        loaded = self._load_semester(student_id, year, term_number)
        if not loaded.ok:
            return loaded

        report = loaded.data
        if require_grades and not any(c.evaluations for c in report.summary.courses):
            return _failure(ErrorCode.NO_GRADES, "No grades found for this period")

        data = assemble_report_data(report.student, report, include_details=include_details)
        logger.info(
            "Grade report built: student_id=%s term=%s courses=%d",
            report.student.id, report.summary.term.label, report.summary.total_courses,
        )
        return ServiceResult.success(data, "Grade report generated")

    # ==========================================================
    # [course validation / progression]
    # ==========================================================

    @_guard_data_access
    def get_full_validation(self, student_id) -> ServiceResult[ProgressionReport]:
        loaded = self._load_progression(student_id)
        if not loaded.ok:
            return loaded
        return ServiceResult.success(
            loaded.data, f"Validation complete for {loaded.data.statistics.total_courses} enrollment(s)"
        )

    @_guard_data_access
    def get_validation_summary(self, student_id) -> ServiceResult[ValidationSummary]:
        loaded = self._load_progression(student_id)
        if not loaded.ok:
            return loaded

        report = loaded.data
        summary = ValidationSummary(
            student=report.student.full_name,
            statistics=report.statistics,
            progression=ProgressionOverview(
                level=report.assessment.tier.value,
                needs_attention=report.assessment.needs_attention,
                total_alerts=len(report.assessment.alerts),
            ),
            latest_term=report.semesters[-1].term if report.semesters else None,
        )
        return ServiceResult.success(summary, "Validation summary ready")

    @_guard_data_access
    def build_validation_report(
        self, student_id, include_details: bool = True, require_courses: bool = True
    ) -> ServiceResult[ReportData]:
        loaded = self._load_progression(student_id)
        if not loaded.ok:
            return loaded

        report = loaded.data
        if require_courses and report.statistics.total_courses == 0:
            return _failure(ErrorCode.NO_COURSES, "The student has no registered courses to validate")

        data = assemble_report_data(report.student, report, include_details=include_details)
        logger.info(
            "Validation report built: student_id=%s semesters=%d tier=%s",
            report.student.id, len(report.semesters), report.assessment.tier.value,
        )
        return ServiceResult.success(data, "Validation report generated")
