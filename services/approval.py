"""
services/approval.py

Pass / fail / ungraded status of a final grade.
"""

from typing import Any

from schemas.grading import ApprovalCode, ApprovalStatus
from services.grade_calculator import to_float

# Minimum final grade that passes a course (inclusive). Fixed by academic regulation.
PASSING_GRADE = 61

UNGRADED = ApprovalStatus(code=ApprovalCode.UNGRADED, label="Ungraded", passed=False, severity="neutral")
PASSED = ApprovalStatus(code=ApprovalCode.PASSED, label="Passed", passed=True, severity="positive")
FAILED = ApprovalStatus(code=ApprovalCode.FAILED, label="Failed", passed=False, severity="negative")


def classify_approval(final_grade: Any) -> ApprovalStatus:
    grade = to_float(final_grade)
    if grade is None:
        return UNGRADED
    if grade >= PASSING_GRADE:
        return PASSED
    return FAILED
