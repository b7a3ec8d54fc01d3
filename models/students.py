from sqlalchemy import Column, Integer, String
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # student identity table

    id = Column(Integer, primary_key=True, index=True)               # student ID (Primary Key)
    first_name = Column(String(100), nullable=False)                 # first name
    middle_name = Column(String(100))                                # middle name (optional)
    last_name = Column(String(100), nullable=False)                  # last name
