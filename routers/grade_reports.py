from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from dependencies.db import get_report_service
from schemas.reports import GradeReportRequest
from services.grade_report_service import GradeReportService
from utils.responses import envelope, failure_response

router = APIRouter(prefix="/reports/grades", tags=["grade reports"])


# ==========================================================
# [1] static routes
# ==========================================================

# ✅ [TEST] liveness of the grades API
@router.get("/test")
def grades_api_test():
    return {
        "message": "Grades API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ✅ [VALIDATE] does the term have grades to report?
@router.post("/validate")
def validate_grades(body: GradeReportRequest, service: GradeReportService = Depends(get_report_service)):
    result = service.validate_existing_grades(body.student_id, body.year, body.term_number)
    return envelope(result)


# ✅ [GENERATE] grade certificate data for one term
@router.post("/generate")
def generate_grade_report(body: GradeReportRequest, service: GradeReportService = Depends(get_report_service)):
    result = service.build_grade_report(
        body.student_id, body.year, body.term_number, include_details=body.include_details
    )
    if not result.ok:
        return failure_response(result)

    report = result.data
    return envelope(result, data={
        "report": report.model_dump(mode="json"),
        "summary": {
            "student": report.student["name"],
            "period": report.period["description"],
            "total_courses": report.summary["Total Courses"],
            "passed_courses": report.summary["Passed Courses"],
            "overall_average": report.summary["Overall Average"],
        },
    })


# ==========================================================
# [2] dynamic routes (per student)
# ==========================================================

# ✅ [SEMESTERS] terms the student has enrollments in, newest first
@router.get("/semesters/{student_id}")
def list_student_semesters(student_id: int, service: GradeReportService = Depends(get_report_service)):
    return envelope(service.list_available_semesters(student_id))


# ✅ [PREVIEW] grade certificate data without the grades check
@router.get("/preview/{student_id}/{year}/{term_number}")
def preview_grade_report(
    student_id: int,
    year: int,
    term_number: int,
    service: GradeReportService = Depends(get_report_service),
):
    result = service.build_grade_report(student_id, year, term_number, require_grades=False)
    return envelope(result)


# ✅ [DATA] computed grades and term statistics (no report shaping)
@router.get("/data/{student_id}/{year}/{term_number}")
def semester_grades(
    student_id: int,
    year: int,
    term_number: int,
    service: GradeReportService = Depends(get_report_service),
):
    return envelope(service.get_semester_grades(student_id, year, term_number))
