import pytest

from schemas.academic import StudentInfo
from schemas.common import ErrorCode
from services.errors import DataAccessError
from services.grade_report_service import GradeReportService
from services.progression import ProgressionThresholds


class FakeRepository:
    """In-memory stand-in for AcademicRepository."""

    def __init__(self, students=(), enrollments=(), fail=False):
        self.students = {s.id: s for s in students}
        self.enrollments = list(enrollments)
        self.fail = fail
        self.calls = []

    def _check(self, name):
        self.calls.append(name)
        if self.fail:
            raise DataAccessError(f"{name} failed: OperationalError")

    def get_student(self, student_id):
        self._check("get_student")
        return self.students.get(student_id)

    def find_term(self, year, number):
        self._check("find_term")
        for e in self.enrollments:
            if e.term.key == (year, number):
                return e.term
        return None

    def list_enrollments(self, student_id, term_id=None):
        self._check("list_enrollments")
        return [
            e for e in self.enrollments
            if e.student_id == student_id and (term_id is None or e.term.id == term_id)
        ]

    def list_student_terms(self, student_id):
        self._check("list_student_terms")
        terms = {e.term.key: e.term for e in self.enrollments if e.student_id == student_id}
        return [terms[k] for k in sorted(terms, reverse=True)]


@pytest.fixture
def repository(student, make_enrollment, make_term):
    first, second = make_term(2023, 1), make_term(2023, 2)
    return FakeRepository(
        students=[student, StudentInfo(id=2, first_name="Bruno", last_name="Díaz")],
        enrollments=[
            make_enrollment("MAT101", 4, [(90, 50), (80, 50)], term=first),
            make_enrollment("FIS101", 3, [(40, 60), (50, 40)], term=first),
            make_enrollment("QUI101", 4, [(70, 100)], term=second),
            make_enrollment("HIS101", 3, term=second),
        ],
    )


@pytest.fixture
def service(repository):
    return GradeReportService(repository, thresholds=ProgressionThresholds())


# ==========================================================
# input checks
# ==========================================================

@pytest.mark.parametrize(
    "student_id, year, term_number",
    [(None, 2023, 1), (1, None, 1), (1, 2023, None), (0, 2023, 1), (1, 2023, 3)],
)
def test_invalid_input_fails_before_any_lookup(service, repository, student_id, year, term_number):
    result = service.get_semester_grades(student_id, year, term_number)
    assert result.ok is False
    assert result.error.code == ErrorCode.INVALID_INPUT.value
    assert repository.calls == []


def test_unknown_term_and_student(service):
    assert service.get_semester_grades(1, 2030, 1).error.code == ErrorCode.NOT_FOUND.value
    assert service.get_semester_grades(99, 2023, 1).error.code == ErrorCode.NOT_FOUND.value
    assert service.get_full_validation(99).error.code == ErrorCode.NOT_FOUND.value
    assert service.get_full_validation(None).error.code == ErrorCode.INVALID_INPUT.value


# ==========================================================
# semester grades
# ==========================================================

def test_semester_grades(service):
    result = service.get_semester_grades(1, 2023, 1)
    assert result.ok is True
    summary = result.data.summary
    assert [c.final_grade for c in summary.courses] == [85.0, 44.0]
    assert summary.weighted_average == 67.43
    assert result.message == "Grades found for 2 course(s)"


def test_available_semesters_newest_first(service):
    terms = service.list_available_semesters(1).data
    assert [t.label for t in terms] == ["Semester 2, 2023", "Semester 1, 2023"]
    assert service.list_available_semesters(2).data == []


def test_validate_existing_grades(service):
    availability = service.validate_existing_grades(1, 2023, 2).data
    assert availability.valid is True
    assert availability.total_courses == 2
    assert availability.courses_with_grades == 1


def test_grade_report_requires_grades(service, repository, make_enrollment, make_term):
    repository.enrollments.append(make_enrollment("ART101", 2, term=make_term(2024, 1)))

    result = service.build_grade_report(1, 2024, 1)
    assert result.error.code == ErrorCode.NO_GRADES.value

    preview = service.build_grade_report(1, 2024, 1, require_grades=False)
    assert preview.ok is True
    assert preview.data.table[0]["Final Grade"] == "Pending"


def test_grade_report(service):
    result = service.build_grade_report(1, 2023, 1, include_details=False)
    assert result.ok is True
    assert result.data.title == "CERTIFICATE OF GRADES"
    assert result.data.summary["Overall Average"] == "67.43"
    assert result.data.course_details == []


# ==========================================================
# course validation
# ==========================================================

def test_full_validation(service):
    report = service.get_full_validation(1).data
    assert [s.term.label for s in report.semesters] == ["Semester 1, 2023", "Semester 2, 2023"]
    assert report.statistics.total_courses == 4
    assert report.assessment.tier.value == "POOR"


def test_validation_summary(service):
    summary = service.get_validation_summary(1).data
    assert summary.student == "Ana María López"
    assert summary.progression.level == "POOR"
    assert summary.progression.needs_attention is True
    assert summary.progression.total_alerts == 5
    assert summary.latest_term.label == "Semester 2, 2023"


def test_validation_summary_without_enrollments(service):
    summary = service.get_validation_summary(2).data
    assert summary.statistics.total_courses == 0
    assert summary.latest_term is None
    assert summary.progression.level == "EXCELLENT"


def test_validation_report_requires_courses(service):
    assert service.build_validation_report(2).error.code == ErrorCode.NO_COURSES.value
    preview = service.build_validation_report(2, require_courses=False)
    assert preview.ok is True
    assert preview.data.summary["Total Courses"] == 0


def test_thresholds_change_the_assessment(repository):
    lenient = GradeReportService(repository, ProgressionThresholds(min_semester_credits=6, min_approval_rate=0.5))
    assert lenient.get_full_validation(1).data.assessment.alerts == ["Semester 1, 2023: 1 course(s) failed"]


def test_thresholds_default_to_settings(repository, monkeypatch):
    from config.settings import settings

    monkeypatch.setattr(settings, "MIN_SEMESTER_CREDITS", 20)
    assert GradeReportService(repository).thresholds.min_semester_credits == 20


# ==========================================================
# data access failures
# ==========================================================

@pytest.mark.parametrize(
    "call",
    [
        lambda s: s.get_semester_grades(1, 2023, 1),
        lambda s: s.list_available_semesters(1),
        lambda s: s.validate_existing_grades(1, 2023, 1),
        lambda s: s.build_grade_report(1, 2023, 1),
        lambda s: s.get_full_validation(1),
        lambda s: s.get_validation_summary(1),
        lambda s: s.build_validation_report(1),
    ],
)
def test_data_access_failure_becomes_a_result(call):
    result = call(GradeReportService(FakeRepository(fail=True), ProgressionThresholds()))
    assert result.ok is False
    assert result.error.code == ErrorCode.DATA_ACCESS_ERROR.value
