#!/usr/bin/env python3
"""
GPA CALCULATOR - Semester, cumulative, and final-mark calculations
Credit-weighted GPA and percent aggregation on the 3.75-capped 4.0 scale

CALCULATION TYPES:
✅ Semester GPA: sum(points_i * credits_i) / sum(credits_i)
✅ Semester Percent: sum(mark_i * credits_i) / sum(credits_i)
✅ Cumulative GPA: (cgpa_old * credits_old + gpa_sem * credits_sem) / (credits_old + credits_sem)
✅ Cumulative Percent: same rolling average over percents
✅ Final Mark: sum(score_i / max_i * 100 * weight_i) / sum(weight_i)

ROUNDING:
- Only the final result is rounded (2 places, half-up)
- Intermediate sums keep full precision

EDGE CASES HANDLED:
- Zero or negative credit courses: skipped entirely
- Ungraded courses: count credits, contribute zero points
- Non-numeric inputs: treated as 0 (aggregates) or missing (marks)
- Zero total credits or weight: 0.0 (aggregates) or None (final mark)
- Zero or negative max score: item scores 0 but keeps its weight
- Missing score: item scores 0 but keeps its weight
- Infinite marks or scores: clamped to 0-100
- Infinite credits, weights, or prior averages: 0.0 (aggregates) or None (final mark)
"""

import logging
import math
from collections.abc import Mapping
from typing import Any, Iterable, Iterator, Optional

from pydantic import ValidationError

from .data_models import CourseRecord, GradeItem, parse_number
from .grade_table import clamp_mark, mark_to_gpa_points, round_half_up

logger = logging.getLogger(__name__)


def _as_record(value: Any, model):
    """Build an input model from a model instance, mapping, or object"""
    if value is None:
        return None
    if isinstance(value, model):
        return value
    try:
        if isinstance(value, Mapping):
            return model.model_validate(dict(value))
        return model.model_validate(value, from_attributes=True)
    except ValidationError as e:
        logger.debug(f"Skipping unreadable {model.__name__}: {e}")
        return None


def _graded_courses(courses: Optional[Iterable[Any]]) -> Iterator[CourseRecord]:
    """Yield course records with positive credit hours"""
    for course in courses or ():
        record = _as_record(course, CourseRecord)
        if record is None or record.credit_hours <= 0:
            continue
        yield record


def _credit_weighted_mean(courses, value_of) -> float:
    total_weighted = 0.0
    total_credits = 0.0

    for record in _graded_courses(courses):
        total_weighted += value_of(record) * record.credit_hours
        total_credits += record.credit_hours

    if total_credits == 0:
        return 0.0
    mean = total_weighted / total_credits
    if not math.isfinite(mean):
        logger.debug(f"Non-finite credit-weighted mean ({mean}), using 0.0")
        return 0.0
    return round_half_up(mean)


def compute_semester_gpa(courses: Optional[Iterable[Any]]) -> float:
    """
    Calculate semester GPA weighted by credit hours

    Args:
        courses: CourseRecord objects or mappings with credit_hours and
            final_mark (or current_grade)

    Returns:
        GPA rounded to 2 places, 0.0 when no course carries credit
    """
    def points(record: CourseRecord) -> float:
        if not record.has_mark:
            return 0.0
        return mark_to_gpa_points(record.final_mark)

    return _credit_weighted_mean(courses, points)


def compute_semester_percent(courses: Optional[Iterable[Any]]) -> float:
    """
    Calculate semester percent (credit-weighted mean of clamped marks)

    Args:
        courses: CourseRecord objects or mappings with credit_hours and
            final_mark (or current_grade)

    Returns:
        Percent rounded to 2 places, 0.0 when no course carries credit
    """
    def percent(record: CourseRecord) -> float:
        if not record.has_mark:
            return 0.0
        return clamp_mark(record.final_mark)

    return _credit_weighted_mean(courses, percent)


def _rolling_average(old_value: Any, old_credits: Any, new_value: Any, new_credits: Any) -> float:
    old_value = parse_number(old_value) or 0.0
    old_credits = parse_number(old_credits) or 0.0
    new_value = parse_number(new_value) or 0.0
    new_credits = parse_number(new_credits) or 0.0

    total_credits = old_credits + new_credits
    if total_credits == 0:
        return 0.0

    # A side with no credits adds nothing, whatever its value (inf * 0 is NaN)
    weighted = 0.0
    if old_credits:
        weighted += old_value * old_credits
    if new_credits:
        weighted += new_value * new_credits

    average = weighted / total_credits
    if not math.isfinite(average):
        logger.debug(f"Non-finite rolling average ({average}), using 0.0")
        return 0.0
    return round_half_up(average)


def compute_cgpa(cgpa_old: Any, credits_old: Any, gpa_semester: Any, credits_semester: Any) -> float:
    """
    Roll a cumulative GPA forward with one more semester

    Returns:
        New CGPA rounded to 2 places, 0.0 when both credit counts are zero
    """
    return _rolling_average(cgpa_old, credits_old, gpa_semester, credits_semester)


def compute_cum_percent(
    cum_percent_old: Any, credits_old: Any, percent_semester: Any, credits_semester: Any
) -> float:
    """
    Roll a cumulative percent forward with one more semester

    Returns:
        New cumulative percent rounded to 2 places, 0.0 when both credit
        counts are zero
    """
    return _rolling_average(cum_percent_old, credits_old, percent_semester, credits_semester)


def compute_final_mark_from_items(grade_items: Optional[Iterable[Any]]) -> Optional[float]:
    """
    Calculate a course's final mark from weighted assessment items

    Args:
        grade_items: GradeItem objects or mappings with score, max_score
            and weight

    Returns:
        Final mark clamped to 0-100 and rounded to 2 places, or None when
        there are no items with positive weight
    """
    weighted_sum = 0.0
    total_weight = 0.0

    for value in grade_items or ():
        item = _as_record(value, GradeItem)
        if item is None or item.weight <= 0:
            continue

        total_weight += item.weight
        score = item.score if item.score is not None else 0.0
        if item.max_score > 0:
            normalized = (score / item.max_score) * 100
        else:
            normalized = 0.0
        weighted_sum += normalized * item.weight

    if total_weight == 0:
        return None
    mark = weighted_sum / total_weight
    if math.isnan(mark):
        logger.debug("Grade items give no usable mark (infinite weight or score)")
        return None
    return round_half_up(clamp_mark(mark))


def total_item_weight(grade_items: Optional[Iterable[Any]]) -> float:
    """Sum of all item weights, non-positive ones included"""
    total = 0.0
    for value in grade_items or ():
        item = _as_record(value, GradeItem)
        if item is not None:
            total += item.weight
    return total


__all__ = [
    'compute_semester_gpa',
    'compute_semester_percent',
    'compute_cgpa',
    'compute_cum_percent',
    'compute_final_mark_from_items',
    'total_item_weight',
]
