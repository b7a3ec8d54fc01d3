"""
services/academic_repository.py

Lookups the grading service needs, answered from the SQLAlchemy session and
returned as frozen snapshots (schemas/academic.py), so nothing downstream
touches ORM objects or the session.
"""

import logging
from functools import wraps
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from models.courses import Course as CourseModel
from models.enrollments import Enrollment as EnrollmentModel
from models.evaluations import Evaluation as EvaluationModel
from models.students import Student as StudentModel
from models.terms import Term as TermModel
from schemas.academic import (
    CourseInfo,
    EnrollmentRecord,
    EvaluationRecord,
    StudentInfo,
    TermInfo,
)
from services.errors import DataAccessError

logger = logging.getLogger(__name__)


def _wrap_db_errors(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as exc:
            raise DataAccessError(f"{func.__name__} failed: {exc.__class__.__name__}") from exc
    return wrapper


def _evaluation_snapshot(row: EvaluationModel) -> EvaluationRecord:
    return EvaluationRecord(
        id=row.id,
        assessment_type=row.assessment_type,
        score=float(row.score) if row.score is not None else None,
        weight=float(row.weight) if row.weight is not None else None,
        evaluated_on=row.evaluated_on,
        notes=row.notes,
    )


def _enrollment_snapshot(row: EnrollmentModel) -> EnrollmentRecord:
    return EnrollmentRecord(
        id=row.id,
        student_id=row.student_id,
        status=row.status,
        course=CourseInfo.model_validate(row.course),
        term=TermInfo.model_validate(row.term),
        evaluations=[_evaluation_snapshot(e) for e in row.evaluations],
    )


class AcademicRepository:
    def __init__(self, db: Session):
        self.db = db

    @_wrap_db_errors
    def get_student(self, student_id: int) -> Optional[StudentInfo]:
        student = self.db.get(StudentModel, student_id)
        return StudentInfo.model_validate(student) if student else None

    @_wrap_db_errors
    def find_term(self, year: int, number: int) -> Optional[TermInfo]:
        term = (
            self.db.query(TermModel)
            .filter(TermModel.year == year, TermModel.number == number)
            .first()
        )
        return TermInfo.model_validate(term) if term else None

    @_wrap_db_errors
    def list_enrollments(self, student_id: int, term_id: Optional[int] = None) -> List[EnrollmentRecord]:
        """Enrollments with course, term and evaluations loaded; oldest term first, then course code."""
        query = (
            self.db.query(EnrollmentModel)
            .join(TermModel, TermModel.id == EnrollmentModel.term_id)
            .join(CourseModel, CourseModel.id == EnrollmentModel.course_id)
            .options(
                selectinload(EnrollmentModel.course),
                selectinload(EnrollmentModel.term),
                selectinload(EnrollmentModel.evaluations),
            )
            .filter(EnrollmentModel.student_id == student_id)
        )
        if term_id is not None:
            query = query.filter(EnrollmentModel.term_id == term_id)
        rows = query.order_by(TermModel.year, TermModel.number, CourseModel.code, EnrollmentModel.id).all()
        logger.debug("student_id=%s term_id=%s enrollments=%d", student_id, term_id, len(rows))
        return [_enrollment_snapshot(r) for r in rows]

    @_wrap_db_errors
    def list_student_terms(self, student_id: int) -> List[TermInfo]:
        """Terms the student has at least one enrollment in, newest first."""
        terms = (
            self.db.query(TermModel)
            .join(EnrollmentModel, EnrollmentModel.term_id == TermModel.id)
            .filter(EnrollmentModel.student_id == student_id)
            .distinct()
            .order_by(TermModel.year.desc(), TermModel.number.desc())
            .all()
        )
        return [TermInfo.model_validate(t) for t in terms]
