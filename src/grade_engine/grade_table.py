#!/usr/bin/env python3
"""
GRADE TABLE - Mark to letter grade, GPA points, and risk status
Fixed conversion table for the 3.75-capped 4.0 GPA scale

GRADE MAPPING:
95-100 = A  (3.75)    90-94 = A- (3.50)
85-89  = B+ (3.25)    80-84 = B  (3.00)
75-79  = B- (2.75)    70-74 = C+ (2.50)
65-69  = C  (2.25)    60-64 = C- (2.00)
55-59  = D+ (1.75)    50-54 = D  (1.50)
0-49   = F  (0.00)

Bands cover fractional marks up to the next band (94.99 is A-).

RISK STATUS (independent of the table):
✅ safe:      mark >= 80
✅ normal:    70 <= mark < 80, or no mark
✅ at_risk:   60 <= mark < 70
✅ high_risk: mark < 60

EDGE CASES HANDLED:
- Missing, NaN, or non-numeric marks: letter/points are None, status is normal
- Marks below 0 or above 100: clamped before the table lookup
"""

import math
from typing import Any, Optional, Sequence, Tuple

from .data_models import (
    MAX_MARK,
    MIN_MARK,
    GradeStatus,
    GradeTableRow,
    LetterGrade,
    parse_number,
)
from .errors import GradeTableError


def validate_grade_table(rows: Sequence[GradeTableRow]) -> None:
    """
    Check that the rows partition [0, 100] with no gap and no overlap

    Rows must be ordered from the highest band to the lowest.

    Raises:
        GradeTableError: If the table leaves a gap, overlaps, or does not
            reach both ends of the mark range
    """
    if not rows:
        raise GradeTableError("Grade table is empty")

    if rows[0].max_mark != MAX_MARK:
        raise GradeTableError(f"Top band must end at {MAX_MARK:g}, got {rows[0].max_mark:g}")
    if rows[-1].min_mark != MIN_MARK:
        raise GradeTableError(f"Bottom band must start at {MIN_MARK:g}, got {rows[-1].min_mark:g}")

    for higher, lower in zip(rows, rows[1:]):
        if lower.min_mark > lower.max_mark:
            raise GradeTableError(f"Band {lower.letter} is empty")
        if lower.upper_bound != higher.min_mark:
            raise GradeTableError(
                f"Bands {lower.letter} and {higher.letter} do not meet: "
                f"{lower.upper_bound:g} != {higher.min_mark:g}"
            )


GRADE_TABLE: Tuple[GradeTableRow, ...] = (
    GradeTableRow(min_mark=95, max_mark=100, letter=LetterGrade.A, gpa_points=3.75),
    GradeTableRow(min_mark=90, max_mark=94, letter=LetterGrade.A_MINUS, gpa_points=3.5),
    GradeTableRow(min_mark=85, max_mark=89, letter=LetterGrade.B_PLUS, gpa_points=3.25),
    GradeTableRow(min_mark=80, max_mark=84, letter=LetterGrade.B, gpa_points=3.0),
    GradeTableRow(min_mark=75, max_mark=79, letter=LetterGrade.B_MINUS, gpa_points=2.75),
    GradeTableRow(min_mark=70, max_mark=74, letter=LetterGrade.C_PLUS, gpa_points=2.5),
    GradeTableRow(min_mark=65, max_mark=69, letter=LetterGrade.C, gpa_points=2.25),
    GradeTableRow(min_mark=60, max_mark=64, letter=LetterGrade.C_MINUS, gpa_points=2.0),
    GradeTableRow(min_mark=55, max_mark=59, letter=LetterGrade.D_PLUS, gpa_points=1.75),
    GradeTableRow(min_mark=50, max_mark=54, letter=LetterGrade.D, gpa_points=1.5),
    GradeTableRow(min_mark=0, max_mark=49, letter=LetterGrade.F, gpa_points=0.0),
)

validate_grade_table(GRADE_TABLE)


def coerce_mark(value: Any) -> Optional[float]:
    """Convert a mark to float, None when missing or non-numeric"""
    return parse_number(value)


def clamp_mark(mark: float) -> float:
    """Clamp a mark to the 0-100 range"""
    return min(MAX_MARK, max(MIN_MARK, mark))


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round half-up to a number of decimal places

    Scales, adds one half, floors and scales back, so 3.125 rounds to 3.13
    (the built-in round() would give 3.12).
    """
    if not math.isfinite(value):
        return value
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def find_grade_row(mark: Any) -> Optional[GradeTableRow]:
    """Get the table band for a mark, None when the mark is missing"""
    number = coerce_mark(mark)
    if number is None:
        return None
    clamped = clamp_mark(number)
    for row in GRADE_TABLE:
        if row.contains(clamped):
            return row
    return None


def mark_to_letter(mark: Any) -> Optional[str]:
    """
    Convert a numeric mark (0-100) to its letter grade

    Args:
        mark: Mark to convert; clamped to 0-100

    Returns:
        Letter grade, or None if the mark is missing or non-numeric
    """
    if coerce_mark(mark) is None:
        return None
    row = find_grade_row(mark)
    return row.letter if row else LetterGrade.F.value


def mark_to_gpa_points(mark: Any) -> Optional[float]:
    """
    Convert a numeric mark (0-100) to GPA points

    Args:
        mark: Mark to convert; clamped to 0-100

    Returns:
        GPA points (0.0-3.75), or None if the mark is missing or non-numeric
    """
    if coerce_mark(mark) is None:
        return None
    row = find_grade_row(mark)
    return row.gpa_points if row else 0.0


def get_grade_status(mark: Any) -> GradeStatus:
    """Get the risk bucket for a mark; a missing mark is normal"""
    number = coerce_mark(mark)
    if number is None:
        return GradeStatus.NORMAL
    if number >= 80:
        return GradeStatus.SAFE
    elif number >= 70:
        return GradeStatus.NORMAL
    elif number >= 60:
        return GradeStatus.AT_RISK
    else:
        return GradeStatus.HIGH_RISK


__all__ = [
    'GRADE_TABLE',
    'validate_grade_table',
    'coerce_mark',
    'clamp_mark',
    'round_half_up',
    'find_grade_row',
    'mark_to_letter',
    'mark_to_gpa_points',
    'get_grade_status',
]
