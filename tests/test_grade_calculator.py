from decimal import Decimal

import pytest

from schemas.academic import EvaluationRecord
from schemas.grading import ApprovalCode
from services.approval import classify_approval
from services.grade_calculator import compute_final_grade, round_half_up, to_float


def _evals(*pairs):
    return [{"score": score, "weight": weight} for score, weight in pairs]


# ==========================================================
# compute_final_grade
# ==========================================================

def test_full_weight_is_plain_weighted_sum():
    assert compute_final_grade(_evals((90, 50), (80, 50))) == 85.0
    assert compute_final_grade(_evals((40, 60), (50, 40))) == 44.0


def test_partial_grading_renormalizes_over_graded_weight():
    # only 30% of the course graded: the grade so far is that score, not 30% of it
    assert compute_final_grade(_evals((80, 30), (None, 20))) == 80.0
    assert compute_final_grade(_evals((80, 30), (None, 20), (None, 50))) == 80.0
    assert compute_final_grade(_evals((70, 20), (90, 20), (None, 60))) == 80.0


def test_nothing_gradable_returns_none():
    assert compute_final_grade([]) is None
    assert compute_final_grade(None) is None
    assert compute_final_grade(_evals((None, 50), (None, 50))) is None


def test_zero_graded_weight_returns_none():
    assert compute_final_grade(_evals((95, 0))) is None
    assert compute_final_grade(_evals((95, 0), (None, 100))) is None


def test_numeric_strings_are_accepted():
    assert compute_final_grade(_evals(("90", "50"), (" 80 ", 50.0))) == 85.0


def test_unparseable_values_are_skipped():
    assert compute_final_grade(_evals(("abc", 50), (70, 50))) == 70.0
    assert compute_final_grade(_evals((90, "n/a"), (60, 50))) == 60.0
    assert compute_final_grade(_evals(("", 100))) is None


def test_accepts_snapshot_objects():
    evaluations = [
        EvaluationRecord(assessment_type="Exam", score=75, weight=40),
        EvaluationRecord(assessment_type="Project", score="95", weight="60"),
    ]
    assert compute_final_grade(evaluations) == 87.0


def test_result_is_rounded_half_up():
    assert compute_final_grade(_evals((85.555, 100))) == 85.56
    assert compute_final_grade(_evals((61.125, 100))) == 61.13
    # 200/3 = 66.666...
    assert compute_final_grade(_evals((60, 50), (80, 25), (None, 25))) == 66.67


def test_out_of_range_values_are_used_as_given():
    assert compute_final_grade(_evals((110, 100))) == 110.0


# ==========================================================
# helpers
# ==========================================================

@pytest.mark.parametrize(
    "value, expected",
    [
        (85, 85.0),
        ("72.5", 72.5),
        (Decimal("61.00"), 61.0),
        (None, None),
        ("   ", None),
        ("sixty", None),
        (float("nan"), None),
        (float("inf"), None),
        (True, None),
    ],
)
def test_to_float(value, expected):
    assert to_float(value) == expected


def test_round_half_up_differs_from_builtin_round():
    assert round_half_up(2.675) == 2.68
    assert round(2.675, 2) == 2.67
    assert round_half_up(85.555) == 85.56
    assert round_half_up(85.554) == 85.55
    assert round_half_up(7.5, places=0) == 8.0


def test_exact_half_results_round_up_despite_float_inputs():
    # 51.62*10 + 62.87*50 over 60 is exactly 60.995
    grade = compute_final_grade(_evals((51.62, 10), (62.87, 50)))
    assert grade == 61.0
    assert classify_approval(grade).code == ApprovalCode.PASSED
    assert compute_final_grade(_evals(("47.415", 40))) == 47.42


def test_round_half_up_accepts_decimals():
    assert round_half_up(Decimal("60.995")) == 61.0
    assert round_half_up(Decimal("60.994999")) == 60.99
