from pydantic import BaseModel, Field
from typing import Optional

# input (POST/PUT)
class StudentCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)      # first name
    middle_name: Optional[str] = Field(default=None, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)       # last name

# output (GET, detail)
class Student(StudentCreate):
    id: int

    class Config:
        from_attributes = True
