"""
Grade Engine - letter grades, GPA points, and GPA aggregation for student
academic planning.
"""

from .data_models import (
    AcademicRecord,
    AcademicSummary,
    CourseGradeView,
    CourseRecord,
    CourseStatusRow,
    FinalizeOutcome,
    GradeItem,
    GradeStatus,
    GradeTableRow,
    GradingPolicy,
    LetterGrade,
    StudentCourse,
)
from .errors import CourseNotGradedError, GradeEngineError, GradeTableError
from .grade_table import (
    GRADE_TABLE,
    get_grade_status,
    mark_to_gpa_points,
    mark_to_letter,
)
from .gpa_calculator import (
    compute_cgpa,
    compute_cum_percent,
    compute_final_mark_from_items,
    compute_semester_gpa,
    compute_semester_percent,
)
from .academic_record import AcademicRecordCalculator, is_passing_mark, is_ready_to_finalize
from .advisor import build_course_note, build_general_note

__version__ = "1.0.0"

__all__ = [
    'GRADE_TABLE',
    'mark_to_letter',
    'mark_to_gpa_points',
    'get_grade_status',
    'compute_semester_gpa',
    'compute_semester_percent',
    'compute_cgpa',
    'compute_cum_percent',
    'compute_final_mark_from_items',
    'AcademicRecordCalculator',
    'is_passing_mark',
    'is_ready_to_finalize',
    'build_course_note',
    'build_general_note',
    'AcademicRecord',
    'AcademicSummary',
    'CourseGradeView',
    'CourseRecord',
    'CourseStatusRow',
    'FinalizeOutcome',
    'GradeItem',
    'GradeStatus',
    'GradeTableRow',
    'GradingPolicy',
    'LetterGrade',
    'StudentCourse',
    'GradeEngineError',
    'GradeTableError',
    'CourseNotGradedError',
]
