"""
services/progression.py

Multi-semester progression diagnostics.

Every semester is checked for a low course load, failed courses and a low
approval rate. The number of alerts decides the progression tier, and the
categories that fired decide the recommendations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from schemas.grading import (
    AlertCategory,
    ProgressionAlert,
    ProgressionAssessment,
    ProgressionTier,
    SemesterSummary,
)

DEFAULT_MIN_SEMESTER_CREDITS = 12
DEFAULT_MIN_APPROVAL_RATE = 0.75

# upper alert count (inclusive) for each tier; anything above the last is POOR
TIER_LIMITS = (
    (0, ProgressionTier.EXCELLENT),
    (2, ProgressionTier.GOOD),
    (4, ProgressionTier.FAIR),
)
ATTENTION_ALERT_LIMIT = 2

TIER_OBSERVATIONS: Dict[ProgressionTier, str] = {
    ProgressionTier.EXCELLENT: "Excellent academic progression with no observations",
    ProgressionTier.GOOD: "Good academic progression with minor observations",
    ProgressionTier.FAIR: "Fair academic progression, requires attention",
    ProgressionTier.POOR: "Poor academic progression, requires academic intervention",
}

RECOMMENDATIONS: Dict[AlertCategory, List[str]] = {
    AlertCategory.FAILED_COURSES: [
        "Consider retaking failed courses at the next opportunity",
        "Request academic tutoring for the most difficult subjects",
    ],
    AlertCategory.LOW_LOAD: [
        "Increase the course load to keep a normal progression",
    ],
    AlertCategory.LOW_APPROVAL: [
        "Review study methods and learning techniques",
        "Consider psycho-pedagogical support if needed",
    ],
}

NO_ALERT_RECOMMENDATIONS = [
    "Keep up the excellent academic performance",
    "Consider taking part in extracurricular activities",
]


@dataclass(frozen=True)
class ProgressionThresholds:
    min_semester_credits: int = DEFAULT_MIN_SEMESTER_CREDITS
    min_approval_rate: float = DEFAULT_MIN_APPROVAL_RATE

    @classmethod
    def from_settings(cls, settings) -> "ProgressionThresholds":
        return cls(
            min_semester_credits=settings.MIN_SEMESTER_CREDITS,
            min_approval_rate=settings.MIN_APPROVAL_RATE,
        )


def check_semester(summary: SemesterSummary, thresholds: ProgressionThresholds) -> List[ProgressionAlert]:
    """Alerts raised by a single semester, in check order (load, failures, approval)."""
    label = summary.term.label
    alerts = []

    if summary.total_credits < thresholds.min_semester_credits:
        alerts.append(ProgressionAlert(
            category=AlertCategory.LOW_LOAD,
            term_label=label,
            message=f"{label}: low academic load ({summary.total_credits} credits)",
        ))

    if summary.failed_courses > 0:
        alerts.append(ProgressionAlert(
            category=AlertCategory.FAILED_COURSES,
            term_label=label,
            message=f"{label}: {summary.failed_courses} course(s) failed",
        ))

    if summary.total_courses > 0:
        rate = summary.passed_courses / summary.total_courses
        if rate < thresholds.min_approval_rate:
            alerts.append(ProgressionAlert(
                category=AlertCategory.LOW_APPROVAL,
                term_label=label,
                message=f"{label}: low approval percentage ({rate * 100:.1f}%)",
            ))

    return alerts


def tier_for(alert_count: int) -> ProgressionTier:
    for limit, tier in TIER_LIMITS:
        if alert_count <= limit:
            return tier
    return ProgressionTier.POOR


def build_recommendations(alerts: Sequence[ProgressionAlert]) -> List[str]:
    fired = {a.category for a in alerts}
    if not fired:
        return list(NO_ALERT_RECOMMENDATIONS)
    recommendations: List[str] = []
    # fixed order regardless of which semester fired first
    for category in (AlertCategory.FAILED_COURSES, AlertCategory.LOW_LOAD, AlertCategory.LOW_APPROVAL):
        if category in fired:
            recommendations.extend(RECOMMENDATIONS[category])
    return recommendations


def evaluate_progression(
    semesters: Sequence[SemesterSummary],
    thresholds: Optional[ProgressionThresholds] = None,
) -> ProgressionAssessment:
    thresholds = thresholds or ProgressionThresholds()

    alerts: List[ProgressionAlert] = []
    for summary in semesters:
        alerts.extend(check_semester(summary, thresholds))

    def semesters_with(category: AlertCategory) -> int:
        return len({a.term_label for a in alerts if a.category == category})

    tier = tier_for(len(alerts))
    return ProgressionAssessment(
        tier=tier,
        alerts=[a.message for a in alerts],
        alert_details=alerts,
        observations=[TIER_OBSERVATIONS[tier]],
        recommendations=build_recommendations(alerts),
        needs_attention=len(alerts) > ATTENTION_ALERT_LIMIT,
        low_load_semesters=semesters_with(AlertCategory.LOW_LOAD),
        semesters_with_failures=semesters_with(AlertCategory.FAILED_COURSES),
        low_approval_semesters=semesters_with(AlertCategory.LOW_APPROVAL),
    )
