import pytest
from sqlalchemy.exc import OperationalError

from schemas.academic import EnrollmentStatus
from services.academic_repository import AcademicRepository
from services.errors import DataAccessError


def test_snapshots_from_seeded_records(seeded_db):
    repo = AcademicRepository(seeded_db)

    assert repo.get_student(1).full_name == "Ana María López"
    assert repo.get_student(99) is None
    assert repo.find_term(2023, 2).label == "Semester 2, 2023"
    assert repo.find_term(2023, 3) is None

    enrollments = repo.list_enrollments(1)
    assert [(e.term.year, e.term.number, e.course.code) for e in enrollments] == [
        (2023, 1, "FIS101"), (2023, 1, "MAT101"), (2023, 2, "HIS101"), (2023, 2, "QUI101"),
    ]
    assert enrollments[0].status == EnrollmentStatus.COMPLETED
    assert [(e.score, e.weight) for e in enrollments[1].evaluations] == [(90.0, 50.0), (80.0, 50.0)]
    assert len(repo.list_enrollments(1, term_id=2)) == 2


def test_student_terms_newest_first(seeded_db):
    terms = AcademicRepository(seeded_db).list_student_terms(1)
    assert [t.key for t in terms] == [(2023, 2), (2023, 1)]


class _BrokenSession:
    def get(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))

    def query(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))


def test_driver_errors_are_wrapped():
    repo = AcademicRepository(_BrokenSession())
    with pytest.raises(DataAccessError, match="get_student failed: OperationalError"):
        repo.get_student(1)
    with pytest.raises(DataAccessError):
        repo.list_enrollments(1)
