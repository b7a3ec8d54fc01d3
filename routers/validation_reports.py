from fastapi import APIRouter, Depends

from dependencies.db import get_report_service
from schemas.reports import ValidationReportRequest
from services.grade_report_service import GradeReportService
from utils.responses import envelope, failure_response

router = APIRouter(prefix="/reports/validation", tags=["course validation"])


# ✅ [GENERATE] course validation data for the whole record
@router.post("/generate")
def generate_validation_report(body: ValidationReportRequest, service: GradeReportService = Depends(get_report_service)):
    result = service.build_validation_report(body.student_id, include_details=body.include_details)
    if not result.ok:
        return failure_response(result)

    report = result.data
    return envelope(result, data={
        "report": report.model_dump(mode="json"),
        "summary": {
            "student": report.student["name"],
            "total_courses": report.summary["Total Courses"],
            "passed_courses": report.summary["Passed Courses"],
            "overall_average": report.summary["Overall Average"],
            "academic_efficiency": report.summary["Academic Efficiency"],
            "progression_level": report.progression["Progression Level"],
        },
    })


# ✅ [PREVIEW] course validation data without the enrollment check
@router.get("/preview/{student_id}")
def preview_validation_report(student_id: int, service: GradeReportService = Depends(get_report_service)):
    result = service.build_validation_report(student_id, require_courses=False)
    return envelope(result)


# ✅ [SUMMARY] executive summary: statistics, progression level, latest term
@router.get("/summary/{student_id}")
def validation_summary(student_id: int, service: GradeReportService = Depends(get_report_service)):
    return envelope(service.get_validation_summary(student_id))


# ✅ [DATA] per-semester results, statistics and progression (no report shaping)
@router.get("/data/{student_id}")
def full_validation(student_id: int, service: GradeReportService = Depends(get_report_service)):
    return envelope(service.get_full_validation(student_id))
