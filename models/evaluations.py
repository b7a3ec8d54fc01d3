from sqlalchemy import Column, Integer, String, Numeric, Date, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base

class Evaluation(Base):
    __tablename__ = "evaluations"  # graded (or pending) assessments of an enrollment

    id = Column(Integer, primary_key=True, index=True)                          # evaluation ID (PK)
    enrollment_id = Column(Integer, ForeignKey("enrollments.id"), nullable=False, index=True)
    assessment_type = Column(String(50), nullable=False)                        # exam, assignment, project ...
    score = Column(Numeric(5, 2))                                               # 0-100, NULL = not graded yet
    weight = Column(Numeric(5, 2), nullable=False)                              # weight in percent
    evaluated_on = Column(Date)                                                 # evaluation date
    notes = Column(String(500))                                                 # free notes
    created_by = Column(Integer)                                                # user who recorded it

    enrollment = relationship("Enrollment", back_populates="evaluations")
