from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.db import get_db
from models.enrollments import Enrollment as EnrollmentModel
from models.students import Student as StudentModel
from schemas.common import ErrorCode, Pagination, make_meta
from schemas.students import StudentCreate, Student as StudentSchema
from utils.responses import error_response

router = APIRouter(prefix="/students", tags=["students"])


def _not_found():
    return error_response(404, ErrorCode.NOT_FOUND.value, "Student not found")


def _student_data(student: StudentModel) -> dict:
    return StudentSchema.model_validate(student).model_dump()


# ==========================================================
# [1] CRUD
# ==========================================================

# ✅ [CREATE] add a student
@router.post("/")
def create_student(student: StudentCreate, db: Session = Depends(get_db)):
    db_student = StudentModel(**student.model_dump())
    db.add(db_student)
    db.commit()
    db.refresh(db_student)
    return {
        "success": True,
        "data": _student_data(db_student),
        "message": "Student created successfully"
    }


# ✅ [READ] list students (paged)
@router.get("/")
def read_students(p: Pagination = Depends(), db: Session = Depends(get_db)):
    query = db.query(StudentModel).order_by(StudentModel.id)
    total = query.count()
    records = query.offset((p.page - 1) * p.size).limit(p.size).all()
    return {
        "success": True,
        "data": [_student_data(r) for r in records],
        "meta": make_meta(total, p.page, p.size).model_dump(),
        "message": "Student list loaded"
    }


# ==========================================================
# [2] dynamic routes (single student)
# ==========================================================

# ✅ [READ] one student
@router.get("/{student_id}")
def read_student(student_id: int, db: Session = Depends(get_db)):
    student = db.get(StudentModel, student_id)
    if student is None:
        return _not_found()
    return {
        "success": True,
        "data": _student_data(student),
        "message": "Student loaded"
    }


# ✅ [UPDATE] edit a student
@router.put("/{student_id}")
def update_student(student_id: int, updated: StudentCreate, db: Session = Depends(get_db)):
    student = db.get(StudentModel, student_id)
    if student is None:
        return _not_found()

    for key, value in updated.model_dump().items():
        setattr(student, key, value)

    db.commit()
    db.refresh(student)
    return {
        "success": True,
        "data": _student_data(student),
        "message": "Student updated successfully"
    }


# ✅ [DELETE] remove a student
@router.delete("/{student_id}")
def delete_student(student_id: int, db: Session = Depends(get_db)):
    student = db.get(StudentModel, student_id)
    if student is None:
        return _not_found()

    # grades hang off enrollments; the record must stay whole
    enrollments = db.query(EnrollmentModel).filter(EnrollmentModel.student_id == student_id).count()
    if enrollments:
        return error_response(
            409,
            ErrorCode.CONFLICT.value,
            f"Student has {enrollments} enrollment(s) and cannot be deleted",
        )

    db.delete(student)
    db.commit()
    return {
        "success": True,
        "data": {"student_id": student_id},
        "message": "Student deleted successfully"
    }
