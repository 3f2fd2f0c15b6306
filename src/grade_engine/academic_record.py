#!/usr/bin/env python3
"""
ACADEMIC RECORD - Course finalization and dashboard summaries
Commit finished courses to a student's record and summarize the current semester

FINALIZATION RULES:
✅ Pass: final mark >= pass mark (50 by default)
✅ Passed course: CGPA and cumulative percent roll forward, credits completed grow
✅ Failed course: credits carried grow, CGPA untouched
✅ Auto-finalize: once graded item weight reaches 100% (99.5 allows float slack)

SUMMARY CONTENTS:
✅ Semester GPA / percent over the current (non-finalized) courses
✅ Projected CGPA / percent: record rolled forward with the current semester
✅ Completed and carried course lists with letter and GPA points
✅ Per-course status rows (safe / normal / at_risk / high_risk)

EDGE CASES HANDLED:
- Courses with no positive credit hours: finalized without touching the record
- Finalizing a course with no mark: CourseNotGradedError
- Missing academic record: treated as all zeros

Dependencies: data_models.py, grade_table.py, gpa_calculator.py
"""

import logging
from typing import Any, Iterable, List, Optional

from .data_models import (
    AcademicRecord,
    AcademicSummary,
    CourseGradeView,
    CourseStatusRow,
    FinalizeOutcome,
    GradingPolicy,
    StudentCourse,
)
from .errors import CourseNotGradedError
from .gpa_calculator import (
    compute_cgpa,
    compute_cum_percent,
    compute_semester_gpa,
    compute_semester_percent,
    total_item_weight,
)
from .grade_table import (
    clamp_mark,
    coerce_mark,
    get_grade_status,
    mark_to_gpa_points,
    mark_to_letter,
)

logger = logging.getLogger(__name__)


def is_passing_mark(final_mark: Any, policy: Optional[GradingPolicy] = None) -> bool:
    """Check if a final mark passes the course"""
    policy = policy or GradingPolicy()
    mark = coerce_mark(final_mark)
    return mark is not None and mark >= policy.pass_mark


def is_ready_to_finalize(
    grade_items: Optional[Iterable[Any]],
    final_mark: Any,
    policy: Optional[GradingPolicy] = None,
) -> bool:
    """
    Check if a course should finalize automatically

    A course finalizes once its graded items add up to the full weight
    and a final mark exists.
    """
    policy = policy or GradingPolicy()
    if coerce_mark(final_mark) is None:
        return False
    return total_item_weight(grade_items) >= policy.finalize_weight_threshold


def _grade_view(course: StudentCourse) -> CourseGradeView:
    return CourseGradeView(
        course_name=course.course_name,
        course_code=course.course_code,
        percent=course.final_mark,
        gpa_points=mark_to_gpa_points(course.final_mark),
        letter_grade=mark_to_letter(course.final_mark),
    )


def _status_row(course: StudentCourse) -> CourseStatusRow:
    return CourseStatusRow(
        id=course.id,
        course_name=course.course_name,
        course_code=course.course_code,
        credit_hours=course.credit_hours,
        final_mark=course.final_mark,
        letter=mark_to_letter(course.final_mark),
        gpa_points=mark_to_gpa_points(course.final_mark),
        status=get_grade_status(course.final_mark),
        finalized=course.finalized,
        passed=course.passed,
    )


class AcademicRecordCalculator:
    """Finalize courses and build academic summaries for a student"""

    def __init__(self, policy: Optional[GradingPolicy] = None):
        """
        Initialize calculator with grading policy

        Args:
            policy: Pass mark and finalization thresholds (defaults apply
                when omitted)
        """
        self.policy = policy or GradingPolicy()
        self.calculation_log: List[str] = []

    def finalize_course(
        self,
        record: Optional[AcademicRecord],
        course: StudentCourse,
        final_mark: Any = None,
    ) -> FinalizeOutcome:
        """
        Commit a course's final mark to the academic record

        Args:
            record: Current academic record (None means an empty record)
            course: Course being finalized
            final_mark: Mark to commit; defaults to the course's own mark

        Returns:
            FinalizeOutcome with pass/fail and the updated record

        Raises:
            CourseNotGradedError: If no final mark is available
        """
        self.calculation_log = []
        record = record or AcademicRecord()

        mark = coerce_mark(final_mark) if final_mark is not None else course.final_mark
        if mark is None:
            raise CourseNotGradedError(
                f"Course {course.course_name or course.id} has no grades; "
                "enter at least one grade before finalizing"
            )

        passed = is_passing_mark(mark, self.policy)
        self.calculation_log.append(
            f"🎓 Finalizing {course.course_name or course.id}: mark {mark:g} -> "
            f"{'passed' if passed else 'failed'}"
        )

        credits = course.credit_hours
        if credits <= 0:
            self.calculation_log.append("⚠️ No credit hours - academic record unchanged")
            logger.warning(f"Finalized course {course.id} without credit hours")
            return FinalizeOutcome(passed=passed, record=record)

        if passed:
            updated = record.model_copy(update={
                "cgpa": compute_cgpa(
                    record.cgpa, record.total_credits_completed, mark_to_gpa_points(mark), credits
                ),
                "cumulative_percent": compute_cum_percent(
                    record.cumulative_percent, record.total_credits_completed, clamp_mark(mark), credits
                ),
                "total_credits_completed": record.total_credits_completed + credits,
            })
            self.calculation_log.append(
                f"✅ CGPA {record.cgpa:.2f} -> {updated.cgpa:.2f}, "
                f"credits completed {updated.total_credits_completed:g}"
            )
        else:
            updated = record.model_copy(update={
                "total_credits_carried": record.total_credits_carried + credits,
            })
            self.calculation_log.append(
                f"❌ Credits carried {updated.total_credits_carried:g}"
            )

        return FinalizeOutcome(passed=passed, record=updated)

    def build_summary(
        self,
        courses: Iterable[StudentCourse],
        record: Optional[AcademicRecord] = None,
    ) -> AcademicSummary:
        """
        Build the dashboard summary for one student

        Args:
            courses: All courses of the student, finalized or not
            record: Academic record of completed semesters

        Returns:
            AcademicSummary with semester and projected cumulative figures
        """
        self.calculation_log = []
        courses = list(courses)
        record = record or AcademicRecord()

        current = [c for c in courses if not c.finalized]
        self.calculation_log.append(
            f"📊 Summarizing {len(courses)} courses ({len(current)} in progress)"
        )

        semester_gpa = compute_semester_gpa(current)
        semester_percent = compute_semester_percent(current)
        credits_current = sum(c.credit_hours for c in current)

        cgpa = compute_cgpa(record.cgpa, record.total_credits_completed, semester_gpa, credits_current)
        cumulative_percent = compute_cum_percent(
            record.cumulative_percent, record.total_credits_completed, semester_percent, credits_current
        )

        if courses:
            avg_progress = sum(c.final_mark or 0.0 for c in courses) / len(courses)
        else:
            avg_progress = 0.0

        completed = [_grade_view(c) for c in courses if c.finalized and c.passed]
        carried = [_grade_view(c) for c in courses if c.finalized and c.passed is False]

        summary = AcademicSummary(
            semester_gpa=semester_gpa,
            semester_percent=semester_percent,
            cgpa=cgpa,
            cumulative_percent=cumulative_percent,
            credits_completed=record.total_credits_completed,
            credits_carried=record.total_credits_carried,
            credits_current=credits_current,
            courses_count=len(courses),
            avg_progress=avg_progress,
            completed_courses=completed,
            carried_courses=carried,
            courses=[_status_row(c) for c in courses],
        )

        self.calculation_log.append(f"   Semester GPA: {semester_gpa:.2f} ({semester_percent:.2f}%)")
        self.calculation_log.append(f"   Projected CGPA: {cgpa:.2f} ({cumulative_percent:.2f}%)")
        self.calculation_log.append(f"   At-risk courses: {summary.at_risk_courses}")

        return summary

    def get_calculation_log(self) -> List[str]:
        """Get detailed calculation log for debugging"""
        return self.calculation_log


__all__ = [
    'is_passing_mark',
    'is_ready_to_finalize',
    'AcademicRecordCalculator',
]
