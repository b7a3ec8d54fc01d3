from datetime import datetime, timezone

from sqlalchemy import Column, Integer, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base
from models.students import Student        # imported so foreign keys resolve
from models.courses import Course
from models.terms import Term
from models.evaluations import Evaluation
from schemas.academic import EnrollmentStatus

class Enrollment(Base):
    __tablename__ = "enrollments"  # a student's registration in one course for one term
    __table_args__ = (
        UniqueConstraint("student_id", "course_id", "term_id", name="uq_enrollments_student_course_term"),
    )

    id = Column(Integer, primary_key=True, index=True)                          # enrollment ID (PK)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False)
    term_id = Column(Integer, ForeignKey("terms.id"), nullable=False)
    enrolled_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))  # registration time
    status = Column(Enum(EnrollmentStatus), default=EnrollmentStatus.ACTIVE, nullable=False)

    # ==========================================================
    # [relationships]
    # ==========================================================
    course = relationship(Course)
    term = relationship(Term)
    evaluations = relationship(
        Evaluation,
        back_populates="enrollment",
        order_by=Evaluation.id,
        cascade="all, delete-orphan",
    )
