import csv
import os
from datetime import date
from decimal import Decimal, InvalidOperation

from sqlalchemy.orm import Session
from database.db import SessionLocal
from models.students import Student as StudentModel
from models.courses import Course as CourseModel
from models.terms import Term as TermModel
from models.enrollments import Enrollment as EnrollmentModel
from models.evaluations import Evaluation as EvaluationModel
from schemas.academic import EnrollmentStatus

DATA_DIR = "data"  # ✅ folder holding the CSV exports


def _blank(value):
    return value is None or not value.strip()


def _date(value):
    return None if _blank(value) else date.fromisoformat(value.strip())


def _decimal(value):
    return None if _blank(value) else Decimal(value.strip())


def _int(value):
    return None if _blank(value) else int(value)


def _required_date(row, field):
    if _blank(row.get(field)):
        raise ValueError(f"{field} is required")
    return _date(row[field])


def _student(row):
    return StudentModel(
        id=int(row["id"]),
        first_name=row["first_name"],
        middle_name=row.get("middle_name") or None,
        last_name=row["last_name"],
    )


def _course(row):
    return CourseModel(
        id=int(row["id"]),
        code=row["code"],
        name=row["name"],
        credits=int(row["credits"]),
        description=row.get("description") or None,
        prerequisites=row.get("prerequisites") or None,
    )


def _term(row):
    return TermModel(
        id=int(row["id"]),
        year=int(row["year"]),
        number=int(row["number"]),
        start_date=_required_date(row, "start_date"),
        end_date=_required_date(row, "end_date"),
    )


def _enrollment(row):
    return EnrollmentModel(
        id=int(row["id"]),
        student_id=int(row["student_id"]),
        course_id=int(row["course_id"]),
        term_id=int(row["term_id"]),
        status=EnrollmentStatus((row.get("status") or "ACTIVE").strip().upper()),
    )


def _evaluation(row):
    return EvaluationModel(
        id=int(row["id"]),
        enrollment_id=int(row["enrollment_id"]),
        assessment_type=row["assessment_type"],
        score=_decimal(row.get("score")),               # empty = not graded yet
        weight=_decimal(row["weight"]),
        evaluated_on=_date(row.get("evaluated_on")),
        notes=row.get("notes") or None,
        created_by=_int(row.get("created_by")),
    )


# parents before children so foreign keys hold
TABLES = (
    ("students", _student),
    ("courses", _course),
    ("terms", _term),
    ("enrollments", _enrollment),
    ("evaluations", _evaluation),
)


def migrate_academic_records(db: Session, data_dir: str = DATA_DIR) -> dict:
    """
    Load <table>.csv for every table in TABLES from data_dir.
    Missing files are skipped. Returns the number of rows added per table.
    """
    counts = {}
    try:
        for table, build in TABLES:
            path = os.path.join(data_dir, f"{table}.csv")
            if not os.path.exists(path):
                counts[table] = 0
                continue
            with open(path, newline="", encoding="utf-8-sig") as csvfile:
                rows = []
                # line 1 is the header
                for line, row in enumerate(csv.DictReader(csvfile), start=2):
                    try:
                        rows.append(build(row))
                    except (KeyError, ValueError, InvalidOperation) as exc:
                        raise ValueError(f"{table}.csv line {line}: {exc}") from exc
            db.add_all(rows)
            db.flush()
            counts[table] = len(rows)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return counts


if __name__ == "__main__":
    db: Session = SessionLocal()
    try:
        counts = migrate_academic_records(db)
    finally:
        db.close()
    for table, count in counts.items():
        print(f"✅ {table}: {count} row(s) imported")
