from sqlalchemy import Column, Integer, Date, Boolean, CheckConstraint, UniqueConstraint
from database.db import Base

class Term(Base):
    __tablename__ = "terms"  # academic semesters
    __table_args__ = (
        UniqueConstraint("year", "number", name="uq_terms_year_number"),
        CheckConstraint("number IN (1, 2)", name="ck_terms_number"),
    )

    id = Column(Integer, primary_key=True, index=True)      # term ID (Primary Key)
    year = Column(Integer, nullable=False)                  # academic year
    number = Column(Integer, nullable=False)                # 1 = first semester, 2 = second semester
    start_date = Column(Date, nullable=False)               # first day
    end_date = Column(Date, nullable=False)                 # last day
    active = Column(Boolean, default=True)                  # term status
