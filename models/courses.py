from sqlalchemy import Column, Integer, String, Boolean, CheckConstraint
from database.db import Base

class Course(Base):
    __tablename__ = "courses"  # course catalog table
    __table_args__ = (CheckConstraint("credits >= 1", name="ck_courses_credits_positive"),)

    id = Column(Integer, primary_key=True, index=True)          # course ID (Primary Key)
    code = Column(String(20), nullable=False, unique=True)      # unique course code
    name = Column(String(200), nullable=False)                  # full course name
    credits = Column(Integer, nullable=False)                   # credit count
    description = Column(String(500))                           # description
    prerequisites = Column(String(200))                         # prerequisites (free text)
    active = Column(Boolean, default=True)                      # catalog status
