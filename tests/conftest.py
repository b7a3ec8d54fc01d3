import os

# keep the app's own engine away from any real database during tests
os.environ.setdefault("DB_AUTO_CREATE", "false")
os.environ.setdefault("SQLITE_PATH", ":memory:")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.db import Base
from dependencies.db import get_db
from models.courses import Course
from models.enrollments import Enrollment
from models.evaluations import Evaluation
from models.students import Student
from models.terms import Term
from schemas.academic import (
    CourseInfo,
    EnrollmentRecord,
    EnrollmentStatus,
    EvaluationRecord,
    StudentInfo,
    TermInfo,
)


# ==========================================================
# [snapshot builders] in-memory records for the pure engine
# ==========================================================

@pytest.fixture
def make_term():
    def _make(year=2024, number=1, **kwargs):
        return TermInfo(id=kwargs.pop("id", year * 10 + number), year=year, number=number, **kwargs)
    return _make


@pytest.fixture
def make_enrollment(make_term):
    counter = {"id": 0}

    def _make(code="MAT101", credits=4, evaluations=(), term=None, status=EnrollmentStatus.ACTIVE, name=None):
        counter["id"] += 1
        return EnrollmentRecord(
            id=counter["id"],
            student_id=1,
            status=status,
            course=CourseInfo(id=counter["id"], code=code, name=name or f"Course {code}", credits=credits),
            term=term or make_term(),
            evaluations=[
                EvaluationRecord(assessment_type=f"Evaluation {i}", score=score, weight=weight)
                for i, (score, weight) in enumerate(evaluations, start=1)
            ],
        )
    return _make


@pytest.fixture
def student():
    return StudentInfo(id=1, first_name="Ana", middle_name="María", last_name="López")


# ==========================================================
# [database] in-memory SQLite shared by the whole test
# ==========================================================

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


def _evaluation(id, enrollment_id, score, weight, kind="Exam"):
    return Evaluation(
        id=id,
        enrollment_id=enrollment_id,
        assessment_type=kind,
        score=score,
        weight=weight,
        evaluated_on=date(2023, 5, 10),
    )


@pytest.fixture
def seeded_db(db_session):
    """
    student 1: two 7-credit semesters in 2023
      2023/1  MAT101 (4cr) 85.00 passed, FIS101 (3cr) 44.00 failed
      2023/2  QUI101 (4cr) 70.00 passed, HIS101 (3cr) pending
    student 2: one enrollment in 2024/1 without evaluations
    student 3: no enrollments
    """
    db_session.add_all([
        Student(id=1, first_name="Ana", middle_name="María", last_name="López"),
        Student(id=2, first_name="Bruno", last_name="Díaz"),
        Student(id=3, first_name="Carla", last_name="Ruiz"),
        Course(id=1, code="MAT101", name="Calculus I", credits=4),
        Course(id=2, code="FIS101", name="Physics I", credits=3),
        Course(id=3, code="QUI101", name="Chemistry I", credits=4),
        Course(id=4, code="HIS101", name="History", credits=3),
        Term(id=1, year=2023, number=1, start_date=date(2023, 3, 1), end_date=date(2023, 7, 15)),
        Term(id=2, year=2023, number=2, start_date=date(2023, 8, 1), end_date=date(2023, 12, 15)),
        Term(id=3, year=2024, number=1, start_date=date(2024, 3, 1), end_date=date(2024, 7, 15)),
    ])
    db_session.flush()
    db_session.add_all([
        Enrollment(id=1, student_id=1, course_id=1, term_id=1, status=EnrollmentStatus.COMPLETED),
        Enrollment(id=2, student_id=1, course_id=2, term_id=1, status=EnrollmentStatus.COMPLETED),
        Enrollment(id=3, student_id=1, course_id=3, term_id=2),
        Enrollment(id=4, student_id=1, course_id=4, term_id=2),
        Enrollment(id=5, student_id=2, course_id=1, term_id=3),
    ])
    db_session.flush()
    db_session.add_all([
        _evaluation(1, 1, 90, 50),
        _evaluation(2, 1, 80, 50, kind="Project"),
        _evaluation(3, 2, 40, 60),
        _evaluation(4, 2, 50, 40, kind="Assignment"),
        _evaluation(5, 3, 70, 100),
        _evaluation(6, 4, None, 100),
    ])
    db_session.commit()
    return db_session


# ==========================================================
# [api] TestClient bound to the seeded session
# ==========================================================

@pytest.fixture
def client(seeded_db):
    from main import app

    def _override_get_db():
        yield seeded_db

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
