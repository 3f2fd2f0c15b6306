"""
Course advice notes
Status line, recommendation, and encouragement text for graded courses
"""

import logging
from typing import Any, Iterable, Optional

from .data_models import GradeStatus, GradingPolicy
from .grade_table import coerce_mark, get_grade_status, mark_to_letter

logger = logging.getLogger(__name__)


STATUS_LABELS = {
    GradeStatus.SAFE.value: "Safe",
    GradeStatus.NORMAL.value: "Normal",
    GradeStatus.AT_RISK.value: "At risk",
    GradeStatus.HIGH_RISK.value: "High risk",
}

RECOMMENDATIONS = {
    GradeStatus.HIGH_RISK.value: (
        "Recommendation: your mark in this course is very low. Review the material, "
        "increase your study hours, and reach out to your instructor or extra references."
    ),
    GradeStatus.AT_RISK.value: (
        "Recommendation: your mark needs improvement. Review the lessons and focus on "
        "your weak points to raise your average."
    ),
    "general": (
        "You have more than one course that needs attention. Prioritize your revision "
        "and add study hours for the critical courses."
    ),
}

ENCOURAGEMENT = {
    GradeStatus.SAFE.value: "Keep it up: your level is excellent. Stay disciplined, you are on the right track.",
    GradeStatus.NORMAL.value: "Keep going: your performance is good. Keep reviewing to hold and grow your progress.",
    GradeStatus.AT_RISK.value: "Don't give up: every improvement starts with one step. Focus on what to improve and you will see the difference.",
    GradeStatus.HIGH_RISK.value: "Frustration is normal, but you are stronger than it. Take your time and review step by step.",
}


def _status_key(mark: Any) -> str:
    return GradeStatus(get_grade_status(mark)).value


def build_course_note(course_name: str, final_mark: Any) -> str:
    """
    Build the advice note for one course

    Ungraded courses get a single line. Graded courses get the status line,
    a recommendation when at risk, and an encouragement for every status.
    """
    mark = coerce_mark(final_mark)
    if mark is None:
        return f"Course: {course_name}. No grades entered yet."

    status = _status_key(mark)
    parts = [
        f"Course: {course_name}. Mark: {mark:g}, grade: {mark_to_letter(mark)}. "
        f"Status: {STATUS_LABELS.get(status, status)}."
    ]
    if status in RECOMMENDATIONS:
        parts.append(RECOMMENDATIONS[status])
    parts.append(ENCOURAGEMENT.get(status, ENCOURAGEMENT[GradeStatus.NORMAL.value]))
    return "\n\n".join(parts)


def count_at_risk(marks: Iterable[Any]) -> int:
    """Count graded marks in the at_risk or high_risk bucket"""
    risky = (GradeStatus.AT_RISK.value, GradeStatus.HIGH_RISK.value)
    return sum(
        1 for mark in marks
        if coerce_mark(mark) is not None and _status_key(mark) in risky
    )


def build_general_note(marks: Iterable[Any], policy: Optional[GradingPolicy] = None) -> Optional[str]:
    """
    Build the general recommendation across all courses

    Returns:
        Note text when enough courses are at risk, otherwise None
    """
    policy = policy or GradingPolicy()
    at_risk = count_at_risk(marks)
    if at_risk < policy.general_note_risk_count:
        return None

    logger.info(f"⚠️ {at_risk} courses at risk - issuing general recommendation")
    return RECOMMENDATIONS["general"] + "\n\n" + ENCOURAGEMENT[GradeStatus.HIGH_RISK.value]


__all__ = [
    'STATUS_LABELS',
    'RECOMMENDATIONS',
    'ENCOURAGEMENT',
    'build_course_note',
    'count_at_risk',
    'build_general_note',
]
