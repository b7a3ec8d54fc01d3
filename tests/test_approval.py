from services.approval import PASSING_GRADE, classify_approval
from schemas.grading import ApprovalCode


def test_passing_grade_is_61():
    assert PASSING_GRADE == 61


def test_boundary_is_inclusive():
    assert classify_approval(61).code == ApprovalCode.PASSED
    assert classify_approval(61.0).passed is True
    assert classify_approval(60.99).code == ApprovalCode.FAILED


def test_missing_grade_is_ungraded():
    status = classify_approval(None)
    assert status.code == ApprovalCode.UNGRADED
    assert status.passed is False
    assert status.severity == "neutral"


def test_labels_and_severity():
    passed = classify_approval(95)
    failed = classify_approval(12.5)
    assert (passed.label, passed.severity) == ("Passed", "positive")
    assert (failed.label, failed.severity) == ("Failed", "negative")


def test_numeric_strings_and_garbage():
    assert classify_approval("75").code == ApprovalCode.PASSED
    assert classify_approval("not a grade").code == ApprovalCode.UNGRADED
    assert classify_approval(0).code == ApprovalCode.FAILED
