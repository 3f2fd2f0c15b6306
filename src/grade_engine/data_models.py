#!/usr/bin/env python3
"""
DATA MODELS - Pydantic schemas for grade engine inputs and results
Type-safe records for course marks, weighted grade items, and GPA summaries

INPUT RECORDS (lenient):
✅ Course Records: Credit hours + final mark for semester aggregation
✅ Grade Items: Weighted assessments (score, max score, weight)
✅ Student Courses: Course records with name, code, and finalization state
✅ Academic Records: Running CGPA, cumulative percent, credit counters

RESULT RECORDS:
✅ Course Grade Views: Percent, GPA points, letter for completed/carried courses
✅ Course Status Rows: Per-course letter, points, and risk status
✅ Academic Summary: Semester and projected cumulative figures

COERCION RULES:
- Marks that are missing, NaN, blank, or non-numeric become None
- Infinite or float-overflowing marks become +/-inf (clamped on lookup)
- Credit hours and weights that are non-numeric become 0.0
- Max score that is missing or zero becomes 100.0
- Input records never raise on malformed numbers

Dependencies: Pydantic v2 for validation
"""

import math
from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


MIN_MARK = 0.0
MAX_MARK = 100.0

_FALSE_FLAGS = {"", "0", "false", "no", "n", "none", "nan", "null"}


def parse_number(value: Any) -> Optional[float]:
    """
    Convert a loosely-typed value to float

    Returns None for None, booleans, NaN, blank strings and anything float()
    cannot parse. Infinities are kept, and integers too large for a float
    become +/-inf, so callers can clamp them like any other out-of-range mark.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def parse_flag(value: Any) -> Optional[bool]:
    """Parse a yes/no style flag; None when the value is missing"""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return None
        return value != 0
    text = str(value).strip().lower()
    if text in ("", "nan", "none", "null"):
        return None
    # Timestamps ("2024-06-01 10:00:00") count as set
    return text not in _FALSE_FLAGS


class LetterGrade(str, Enum):
    """Letter grades produced by the conversion table"""
    A = "A"
    A_MINUS = "A-"
    B_PLUS = "B+"
    B = "B"
    B_MINUS = "B-"
    C_PLUS = "C+"
    C = "C"
    C_MINUS = "C-"
    D_PLUS = "D+"
    D = "D"
    F = "F"


class GradeStatus(str, Enum):
    """Coarse risk bucket shown on dashboards"""
    SAFE = "safe"
    NORMAL = "normal"
    AT_RISK = "at_risk"
    HIGH_RISK = "high_risk"


class GradeTableRow(BaseModel):
    """One band of the mark -> letter -> GPA points table"""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    min_mark: float = Field(..., ge=MIN_MARK, le=MAX_MARK, description="Lowest mark in the band")
    max_mark: float = Field(..., ge=MIN_MARK, le=MAX_MARK, description="Highest whole mark in the band")
    letter: LetterGrade = Field(..., description="Letter grade for the band")
    gpa_points: float = Field(..., ge=0.0, le=4.0, description="GPA points on the 4.0 scale")

    @property
    def upper_bound(self) -> float:
        """Exclusive upper bound (inclusive for the top band)"""
        if self.max_mark >= MAX_MARK:
            return MAX_MARK
        return self.max_mark + 1

    def contains(self, mark: float) -> bool:
        """Check if a (clamped) mark falls in this band"""
        if self.max_mark >= MAX_MARK:
            return self.min_mark <= mark <= MAX_MARK
        return self.min_mark <= mark < self.upper_bound


class CourseRecord(BaseModel):
    """Credit hours and final mark of one course"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    credit_hours: float = Field(0.0, description="Credit hours (courses with <= 0 are skipped)")
    final_mark: Optional[float] = Field(
        None,
        validation_alias=AliasChoices("final_mark", "current_grade"),
        description="Final mark 0-100, None when not graded yet",
    )

    @field_validator("credit_hours", mode="before")
    @classmethod
    def coerce_credit_hours(cls, v):
        """Non-numeric credit hours count as zero"""
        number = parse_number(v)
        return number if number is not None else 0.0

    @field_validator("final_mark", mode="before")
    @classmethod
    def coerce_final_mark(cls, v):
        """Non-numeric marks are treated as missing"""
        return parse_number(v)

    @property
    def has_mark(self) -> bool:
        return self.final_mark is not None


class StudentCourse(CourseRecord):
    """Course enrolment of a student as returned by the records API"""

    id: Optional[str] = Field(None, description="Student course identifier")
    course_name: str = Field("", description="Course name")
    course_code: Optional[str] = Field(None, description="Course code")
    finalized: bool = Field(False, description="Whether the mark was committed to the record")
    passed: Optional[bool] = Field(None, description="Pass/fail once finalized")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Keep identifiers as text ("CS101"); whole floats lose their .0"""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, float):
            if math.isnan(v):
                return None
            if v.is_integer():
                return str(int(v))
        text = str(v).strip()
        return text if text and text.lower() != "nan" else None

    @field_validator("course_name", mode="before")
    @classmethod
    def coerce_course_name(cls, v):
        return "" if v is None else str(v).strip()

    @field_validator("course_code", mode="before")
    @classmethod
    def coerce_course_code(cls, v):
        if v is None:
            return None
        text = str(v).strip()
        return text if text and text.lower() != "nan" else None

    @field_validator("finalized", mode="before")
    @classmethod
    def coerce_finalized(cls, v):
        """Accept booleans, 0/1, yes/no, or a finalization timestamp"""
        return bool(parse_flag(v))

    @field_validator("passed", mode="before")
    @classmethod
    def coerce_passed(cls, v):
        return parse_flag(v)


class GradeItem(BaseModel):
    """One weighted assessment, e.g. a midterm worth 20%"""

    model_config = ConfigDict(extra="ignore")

    score: Optional[float] = Field(None, description="Points scored, None when missing")
    max_score: float = Field(100.0, description="Points available (defaults to 100)")
    weight: float = Field(0.0, description="Weight of the item, e.g. 20 for 20%")

    @field_validator("score", mode="before")
    @classmethod
    def coerce_score(cls, v):
        return parse_number(v)

    @field_validator("max_score", mode="before")
    @classmethod
    def coerce_max_score(cls, v):
        """Missing or zero max score falls back to 100"""
        number = parse_number(v)
        return number if number else 100.0

    @field_validator("weight", mode="before")
    @classmethod
    def coerce_weight(cls, v):
        number = parse_number(v)
        return number if number is not None else 0.0


class AcademicRecord(BaseModel):
    """Running academic record of a student (completed semesters only)"""

    model_config = ConfigDict(extra="ignore")

    cgpa: float = Field(0.0, description="Cumulative GPA over completed credits")
    cumulative_percent: float = Field(0.0, description="Cumulative percent over completed credits")
    total_credits_completed: float = Field(0.0, description="Credits of passed, finalized courses")
    total_credits_carried: float = Field(0.0, description="Credits of failed, finalized courses")

    @field_validator(
        "cgpa",
        "cumulative_percent",
        "total_credits_completed",
        "total_credits_carried",
        mode="before",
    )
    @classmethod
    def coerce_numbers(cls, v):
        number = parse_number(v)
        return number if number is not None else 0.0


class GradingPolicy(BaseModel):
    """Institution rules applied on top of the conversion table"""

    pass_mark: float = Field(50.0, ge=MIN_MARK, le=MAX_MARK, description="Minimum final mark to pass a course")
    finalize_weight_threshold: float = Field(
        99.5, gt=0.0, description="Total item weight at which a course finalizes automatically"
    )
    general_note_risk_count: int = Field(
        2, ge=1, description="At-risk courses needed before a general recommendation is issued"
    )


class CourseGradeView(BaseModel):
    """Completed or carried course as displayed on the dashboard"""

    course_name: str = Field("", description="Course name")
    course_code: Optional[str] = Field(None, description="Course code")
    percent: Optional[float] = Field(None, description="Final mark")
    gpa_points: Optional[float] = Field(None, description="GPA points for the final mark")
    letter_grade: Optional[str] = Field(None, description="Letter grade for the final mark")


class CourseStatusRow(BaseModel):
    """Per-course analytics row"""

    model_config = ConfigDict(use_enum_values=True)

    id: Optional[str] = None
    course_name: str = ""
    course_code: Optional[str] = None
    credit_hours: float = 0.0
    final_mark: Optional[float] = None
    letter: Optional[str] = None
    gpa_points: Optional[float] = None
    status: GradeStatus = GradeStatus.NORMAL
    finalized: bool = False
    passed: Optional[bool] = None


class AcademicSummary(BaseModel):
    """Dashboard/analytics summary for one student"""

    semester_gpa: float = Field(0.0, description="GPA of the current (non-finalized) courses")
    semester_percent: float = Field(0.0, description="Percent of the current courses")
    cgpa: float = Field(0.0, description="Record CGPA rolled forward with the current semester")
    cumulative_percent: float = Field(0.0, description="Record percent rolled forward with the current semester")

    credits_completed: float = Field(0.0, description="Credits completed on record")
    credits_carried: float = Field(0.0, description="Credits carried on record")
    credits_current: float = Field(0.0, description="Credits of the current courses")

    courses_count: int = Field(0, ge=0, description="All courses of the student")
    avg_progress: float = Field(0.0, description="Mean current grade over all courses")

    completed_courses: List[CourseGradeView] = Field(default_factory=list)
    carried_courses: List[CourseGradeView] = Field(default_factory=list)
    courses: List[CourseStatusRow] = Field(default_factory=list)

    @property
    def at_risk_courses(self) -> int:
        """Number of courses in the at_risk or high_risk bucket"""
        risky = (GradeStatus.AT_RISK, GradeStatus.HIGH_RISK)
        return sum(1 for row in self.courses if row.status in risky)


class FinalizeOutcome(BaseModel):
    """Result of committing a course mark to the academic record"""

    passed: bool
    record: AcademicRecord


# Export all models
__all__ = [
    'MIN_MARK',
    'MAX_MARK',
    'parse_number',
    'parse_flag',
    'LetterGrade',
    'GradeStatus',
    'GradeTableRow',
    'CourseRecord',
    'StudentCourse',
    'GradeItem',
    'AcademicRecord',
    'GradingPolicy',
    'CourseGradeView',
    'CourseStatusRow',
    'AcademicSummary',
    'FinalizeOutcome',
]
