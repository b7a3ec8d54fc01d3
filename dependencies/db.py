from fastapi import Depends
from sqlalchemy.orm import Session

from database.db import SessionLocal
from services.academic_repository import AcademicRepository
from services.grade_report_service import GradeReportService


# ==========================================================
# [shared] DB session per request
# ==========================================================
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_report_service(db: Session = Depends(get_db)) -> GradeReportService:
    return GradeReportService(AcademicRepository(db))
