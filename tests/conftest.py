"""
Pytest Configuration and Fixtures

Provides common fixtures for all tests including:
- Sample student courses and academic records
- Weighted grade items
- CSV data directories for the data processor and batch tool
"""

import pytest
import pandas as pd

from grade_engine.data_models import AcademicRecord, GradeItem, StudentCourse


@pytest.fixture
def sample_courses():
    """Two in-progress courses, one passed and one failed finalized course"""
    return [
        StudentCourse(id=1, course_name="Calculus", course_code="MATH201", credit_hours=3, final_mark=90),
        StudentCourse(id=2, course_name="Physics", course_code="PHY101", credit_hours=3, final_mark=80),
        StudentCourse(
            id=3, course_name="History", course_code="HIS110", credit_hours=2, final_mark=65,
            finalized=True, passed=True,
        ),
        StudentCourse(
            id=4, course_name="Chemistry", course_code="CHM101", credit_hours=3, final_mark=40,
            finalized=True, passed=False,
        ),
    ]


@pytest.fixture
def sample_record():
    """Academic record with 30 completed and 3 carried credits"""
    return AcademicRecord(
        cgpa=3.0,
        cumulative_percent=80.0,
        total_credits_completed=30,
        total_credits_carried=3,
    )


@pytest.fixture
def sample_grade_items():
    """Quiz worth 20% (18/20) and final worth 80% (40/50)"""
    return [
        GradeItem(score=18, max_score=20, weight=20),
        GradeItem(score=40, max_score=50, weight=80),
    ]


@pytest.fixture
def data_dir(tmp_path):
    """Directory with courses, grade items, and academic records CSVs"""
    pd.DataFrame([
        {"student_id": "S1", "course_id": "1", "course_name": "Calculus", "course_code": "MATH201",
         "credit_hours": 3, "current_grade": None, "finalized": 0, "passed": None},
        {"student_id": "S1", "course_id": "2", "course_name": "Physics", "course_code": "PHY101",
         "credit_hours": 3, "current_grade": 80, "finalized": 0, "passed": None},
        {"student_id": "S1", "course_id": "3", "course_name": "History", "course_code": "HIS110",
         "credit_hours": 2, "current_grade": 65, "finalized": 1, "passed": 1},
        {"student_id": "S2", "course_id": "4", "course_name": "Biology", "course_code": "BIO101",
         "credit_hours": 4, "current_grade": 55, "finalized": 0, "passed": None},
    ]).to_csv(tmp_path / "courses.csv", index=False)

    pd.DataFrame([
        {"student_id": "S1", "course_id": "1", "score": 18, "max_score": 20, "weight": 20},
        {"student_id": "S1", "course_id": "1", "score": 40, "max_score": 50, "weight": 80},
    ]).to_csv(tmp_path / "grade_items.csv", index=False)

    pd.DataFrame([
        {"student_id": "S1", "cgpa": 3.0, "cumulative_percent": 80.0,
         "total_credits_completed": 30, "total_credits_carried": 0},
    ]).to_csv(tmp_path / "academic_records.csv", index=False)

    return tmp_path
