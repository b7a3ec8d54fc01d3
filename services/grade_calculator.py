"""
services/grade_calculator.py

Final grade of one enrollment from its weighted evaluations.

Ungraded evaluations (no score) are left out entirely and the result is
renormalized over the weight that has been graded so far, so a course with
only 60% of its weight graded reports "the grade so far" on a 0-100 scale
instead of treating the missing 40% as zero.
"""

from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Mapping, Optional, Union


def to_float(value: Any) -> Optional[float]:
    """Coerce a numeric or numeric-string value to float; None when it can't be used."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def to_decimal(value: Any) -> Optional[Decimal]:
    """Exact decimal of a usable numeric value (via its shortest repr); None like to_float."""
    number = to_float(value)
    if number is None:
        return None
    return Decimal(repr(number))


def round_half_up(value: Union[float, Decimal], places: int = 2) -> float:
    """Round with half-up semantics (85.555 -> 85.56), unlike the built-in round()."""
    quantum = Decimal(1).scaleb(-places)
    exact = value if isinstance(value, Decimal) else Decimal(repr(value))
    return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def _field(evaluation: Any, name: str) -> Any:
    if isinstance(evaluation, Mapping):
        return evaluation.get(name)
    return getattr(evaluation, name, None)


def compute_final_grade(evaluations: Optional[Iterable[Any]]) -> Optional[float]:
    """
    Weighted final grade rounded to 2 decimals, or None when nothing is gradable.

    Each evaluation needs ``score`` and ``weight`` (attributes or mapping keys).
    Out-of-range values are used as given; bounds are checked where records are entered.
    Sums and the division run in Decimal so a result landing on .xx5 rounds up.
    """
    weighted_sum = Decimal(0)
    weight_total = Decimal(0)
    graded = 0

    for evaluation in evaluations or ():
        score = to_decimal(_field(evaluation, "score"))
        if score is None:
            continue
        weight = to_decimal(_field(evaluation, "weight"))
        if weight is None:
            continue
        weighted_sum += score * weight / 100
        weight_total += weight
        graded += 1

    # zero graded weight means "not enough data", not a grade of zero
    if graded == 0 or weight_total == 0:
        return None

    return round_half_up((weighted_sum * 100) / weight_total)
