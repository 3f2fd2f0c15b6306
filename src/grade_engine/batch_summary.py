#!/usr/bin/env python3
"""
BATCH GRADE SUMMARY
Builds one academic summary row per student from CSV exports.

Usage: grade-summary <data_dir> <output_csv> [--quiet]

Input files in <data_dir>: courses.csv, grade_items.csv (optional),
academic_records.csv (optional).
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from tqdm import tqdm

from .academic_record import AcademicRecordCalculator
from .data_models import GradingPolicy
from .data_processor import GradeDataProcessor

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "student_id",
    "courses_count",
    "semester_gpa",
    "semester_percent",
    "cgpa",
    "cumulative_percent",
    "credits_completed",
    "credits_carried",
    "credits_current",
    "at_risk_courses",
]


def summarize_students(
    processor: GradeDataProcessor,
    policy: Optional[GradingPolicy] = None,
    progress: bool = True,
) -> pd.DataFrame:
    """Build the summary frame for every student the processor knows"""
    calculator = AcademicRecordCalculator(policy)
    rows: List[Dict] = []

    student_ids = processor.get_student_ids()
    for student_id in tqdm(student_ids, desc="Summarizing", unit="student", disable=not progress):
        summary = calculator.build_summary(
            processor.get_student_courses(student_id),
            processor.get_academic_record(student_id),
        )
        rows.append({
            "student_id": student_id,
            "courses_count": summary.courses_count,
            "semester_gpa": summary.semester_gpa,
            "semester_percent": summary.semester_percent,
            "cgpa": summary.cgpa,
            "cumulative_percent": summary.cumulative_percent,
            "credits_completed": summary.credits_completed,
            "credits_carried": summary.credits_carried,
            "credits_current": summary.credits_current,
            "at_risk_courses": summary.at_risk_courses,
        })
        logger.debug(f"Student {student_id}: " + "; ".join(calculator.get_calculation_log()))

    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Build academic summaries from CSV exports")
    parser.add_argument("data_dir", type=Path, help="Directory with courses.csv and optional extras")
    parser.add_argument("output_csv", type=Path, help="Where to write the summary CSV")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and hide progress")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING if args.quiet else logging.INFO)

    processor = GradeDataProcessor(args.data_dir.expanduser())
    if not processor.load_all_data():
        logger.error(processor.generate_validation_report())
        return 1

    if processor.validation_warnings:
        logger.warning(processor.generate_validation_report())

    summaries = summarize_students(processor, progress=not args.quiet)

    output_path = args.output_csv.expanduser()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    summaries.to_csv(output_path, index=False)

    logger.info(f"✅ Wrote {len(summaries)} student summaries to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
