#!/usr/bin/env python3
"""
DATA PROCESSOR - CSV loading and validation for batch grade summaries
Load course, grade item, and academic record exports into engine models

DATA SOURCES:
✅ courses.csv (required) - One row per student course
✅ grade_items.csv (optional) - Weighted assessments per student course
✅ academic_records.csv (optional) - Running CGPA and credit counters

VALIDATION STRATEGY:
1. Schema Validation: Required columns must exist
2. Cross-Reference Validation: Items and records must match a known student
3. Data Quality Checks: Credit hours and marks in range (warnings only)

Errors stop the batch; warnings are reported but data still loads.

Dependencies: pandas for CSV loading, pydantic models for type-safe records
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import logging

from .data_models import AcademicRecord, GradeItem, StudentCourse
from .gpa_calculator import compute_final_mark_from_items

logger = logging.getLogger(__name__)


COURSES_FILE = "courses.csv"
GRADE_ITEMS_FILE = "grade_items.csv"
ACADEMIC_RECORDS_FILE = "academic_records.csv"

COURSE_COLUMNS = ["student_id", "course_id", "course_name", "credit_hours", "current_grade"]
GRADE_ITEM_COLUMNS = ["student_id", "course_id", "score", "weight"]
ACADEMIC_RECORD_COLUMNS = ["student_id", "cgpa", "total_credits_completed"]

_KEY_DTYPES = {"student_id": str, "course_id": str}


def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Convert a frame to row dicts with NaN replaced by None"""
    return df.astype(object).where(df.notna(), None).to_dict("records")


class GradeDataProcessor:
    """Load and validate CSV exports for grade summaries"""

    def __init__(self, data_dir: Path = None):
        if data_dir is None:
            self.data_dir = Path.cwd() / "data"
        else:
            self.data_dir = Path(data_dir)

        # Data storage
        self.courses: pd.DataFrame = None
        self.grade_items: pd.DataFrame = None
        self.academic_records: pd.DataFrame = None

        # Validation results
        self.validation_errors: List[str] = []
        self.validation_warnings: List[str] = []

    def load_all_data(self) -> bool:
        """Load all CSV data sources with validation"""

        logger.info("🔍 LOADING GRADE DATA SOURCES")
        logger.info("=" * 60)

        self.validation_errors = []
        self.validation_warnings = []

        success = self._load_courses()

        # Optional sources - won't fail if missing
        self._load_grade_items()
        self._load_academic_records()

        if success and not self.validation_errors:
            self._perform_cross_validation()
            logger.info("✅ All data sources loaded successfully")
            return True

        logger.error("❌ Data loading failed - check validation errors")
        return False

    def _read_csv(self, file_path: Path, required_columns: List[str], label: str) -> Optional[pd.DataFrame]:
        """Read a CSV and check its required columns; None on failure"""
        try:
            logger.info(f"📊 Loading {label} from: {file_path}")
            df = pd.read_csv(file_path, encoding="utf-8-sig", dtype=_KEY_DTYPES)
        except (OSError, ValueError) as e:
            self.validation_errors.append(f"Failed to load {label}: {e}")
            logger.error(f"  ❌ Failed to load {label}: {e}")
            return None

        df.columns = [str(col).strip() for col in df.columns]
        missing_columns = [col for col in required_columns if col not in df.columns]
        if missing_columns:
            self.validation_errors.append(f"{label.capitalize()} missing columns: {missing_columns}")
            logger.error(f"  ❌ {label.capitalize()} missing columns: {missing_columns}")
            return None

        df["student_id"] = df["student_id"].str.strip()
        logger.info(f"  ✅ Loaded {len(df)} {label} rows")
        return df

    def _load_courses(self) -> bool:
        """Load and validate courses CSV"""
        df = self._read_csv(self.data_dir / COURSES_FILE, COURSE_COLUMNS, "courses")
        if df is None:
            return False

        df["course_id"] = df["course_id"].str.strip()
        self.courses = df
        self._validate_courses_quality()
        return True

    def _load_grade_items(self) -> bool:
        """Load grade items CSV if present"""
        file_path = self.data_dir / GRADE_ITEMS_FILE
        if not file_path.exists():
            logger.info("  ℹ️  No grade items file found")
            return False

        df = self._read_csv(file_path, GRADE_ITEM_COLUMNS, "grade items")
        if df is None:
            return False

        df["course_id"] = df["course_id"].str.strip()
        self.grade_items = df
        return True

    def _load_academic_records(self) -> bool:
        """Load academic records CSV if present"""
        file_path = self.data_dir / ACADEMIC_RECORDS_FILE
        if not file_path.exists():
            logger.info("  ℹ️  No academic records file found - starting from empty records")
            return False

        df = self._read_csv(file_path, ACADEMIC_RECORD_COLUMNS, "academic records")
        if df is None:
            return False

        duplicated = df["student_id"].duplicated(keep="last")
        if duplicated.any():
            self.validation_warnings.append(
                f"Academic records has {int(duplicated.sum())} duplicate students - keeping the last row"
            )
            df = df[~duplicated]

        self.academic_records = df
        return True

    def _validate_courses_quality(self):
        """Warn about out-of-range credit hours and marks"""
        credit_hours = pd.to_numeric(self.courses["credit_hours"], errors="coerce")
        bad_credits = credit_hours.isna() | (credit_hours <= 0)
        if bad_credits.any():
            self.validation_warnings.append(
                f"{int(bad_credits.sum())} courses without positive credit hours (excluded from GPA)"
            )

        marks = pd.to_numeric(self.courses["current_grade"], errors="coerce")
        out_of_range = (marks < 0) | (marks > 100)
        if out_of_range.any():
            self.validation_warnings.append(
                f"{int(out_of_range.sum())} course marks outside 0-100 (will be clamped)"
            )

    def _perform_cross_validation(self):
        """Check that items and records belong to known students"""
        known_students = set(self.courses["student_id"].dropna())

        for label, df in (("Grade items", self.grade_items), ("Academic records", self.academic_records)):
            if df is None:
                continue
            orphans = set(df["student_id"].dropna()) - known_students
            if orphans:
                self.validation_warnings.append(
                    f"{label} reference {len(orphans)} students without courses"
                )

    def get_student_ids(self) -> List[str]:
        """Get student IDs in file order"""
        if self.courses is None:
            return []
        return list(dict.fromkeys(self.courses["student_id"].dropna()))

    def get_grade_items(self, student_id: str, course_id: str) -> List[GradeItem]:
        """Get grade items of one student course"""
        if self.grade_items is None:
            return []
        mask = (self.grade_items["student_id"] == str(student_id)) & (
            self.grade_items["course_id"] == str(course_id)
        )
        return [GradeItem.model_validate(row) for row in _records(self.grade_items[mask])]

    def get_student_courses(self, student_id: str) -> List[StudentCourse]:
        """
        Get all courses of a student

        When grade items exist for a course, its current grade is recomputed
        from them.
        """
        if self.courses is None:
            return []

        rows = _records(self.courses[self.courses["student_id"] == str(student_id)])
        courses = []
        for row in rows:
            items = self.get_grade_items(student_id, row["course_id"])
            if items:
                row["current_grade"] = compute_final_mark_from_items(items)
            row["id"] = row.pop("course_id")
            courses.append(StudentCourse.model_validate(row))
        return courses

    def get_academic_record(self, student_id: str) -> AcademicRecord:
        """Get the academic record of a student (empty record when missing)"""
        if self.academic_records is None:
            return AcademicRecord()

        rows = _records(self.academic_records[self.academic_records["student_id"] == str(student_id)])
        if not rows:
            return AcademicRecord()
        return AcademicRecord.model_validate(rows[-1])

    def generate_validation_report(self) -> str:
        """Generate validation report"""

        report = ["🔍 DATA VALIDATION REPORT", "=" * 50, ""]

        if not self.validation_errors and not self.validation_warnings:
            report.append("✅ All validation checks passed!")
        else:
            if self.validation_errors:
                report.append("❌ ERRORS (Must be fixed):")
                for error in self.validation_errors:
                    report.append(f"  • {error}")
                report.append("")

            if self.validation_warnings:
                report.append("⚠️ WARNINGS (Review recommended):")
                for warning in self.validation_warnings:
                    report.append(f"  • {warning}")
                report.append("")

        if self.courses is not None:
            report.append("📊 DATA SUMMARY:")
            report.append(f"  Students: {len(self.get_student_ids())}")
            report.append(f"  Course Records: {len(self.courses)}")
            if self.grade_items is not None:
                report.append(f"  Grade Items: {len(self.grade_items)}")
            if self.academic_records is not None:
                report.append(f"  Academic Records: {len(self.academic_records)}")

        return "\n".join(report)


__all__ = ['GradeDataProcessor']
