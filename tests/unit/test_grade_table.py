"""
Unit Tests for the Grade Conversion Table

Tests for:
- Band coverage of 0-100
- Letter grade and GPA point lookup
- Clamping and missing marks
- Risk status buckets
- Half-up rounding
"""

import math
from decimal import Decimal

import pytest

from grade_engine.data_models import GradeStatus, GradeTableRow
from grade_engine.errors import GradeTableError
from grade_engine.grade_table import (
    GRADE_TABLE,
    find_grade_row,
    get_grade_status,
    mark_to_gpa_points,
    mark_to_letter,
    round_half_up,
    validate_grade_table,
)


class TestGradeTable:
    """Tests for the table itself"""

    def test_table_has_eleven_bands(self):
        assert len(GRADE_TABLE) == 11
        assert [row.letter for row in GRADE_TABLE] == [
            "A", "A-", "B+", "B", "B-", "C+", "C", "C-", "D+", "D", "F",
        ]

    def test_bands_partition_mark_range(self):
        """Every mark in 0-100 falls in exactly one band"""
        for step in range(0, 100 * 8 + 1):
            mark = step / 8
            matches = [row for row in GRADE_TABLE if row.contains(mark)]
            assert len(matches) == 1, f"{mark} matched {len(matches)} bands"

    def test_table_validates(self):
        validate_grade_table(GRADE_TABLE)

    def test_gap_rejected(self):
        rows = [row for row in GRADE_TABLE if row.letter != "D"]
        with pytest.raises(GradeTableError):
            validate_grade_table(rows)

    def test_overlap_rejected(self):
        rows = list(GRADE_TABLE)
        rows[1] = GradeTableRow(min_mark=90, max_mark=95, letter="A-", gpa_points=3.5)
        with pytest.raises(GradeTableError):
            validate_grade_table(rows)

    def test_empty_table_rejected(self):
        with pytest.raises(GradeTableError):
            validate_grade_table([])

    def test_top_band_closed_at_100(self):
        top = GRADE_TABLE[0]
        assert top.contains(100)
        assert not top.contains(94.99)


class TestMarkToLetter:
    """Tests for mark_to_letter"""

    @pytest.mark.parametrize("mark, letter", [
        (100, "A"),
        (95, "A"),
        (94.999, "A-"),
        (90, "A-"),
        (89.5, "B+"),
        (85, "B+"),
        (80, "B"),
        (79.99, "B-"),
        (74, "C+"),
        (65, "C"),
        (60, "C-"),
        (55, "D+"),
        (50, "D"),
        (49.99, "F"),
        (0, "F"),
    ])
    def test_band_boundaries(self, mark, letter):
        assert mark_to_letter(mark) == letter

    def test_missing_mark(self):
        assert mark_to_letter(None) is None
        assert mark_to_letter(float("nan")) is None
        assert mark_to_letter("not a mark") is None
        assert mark_to_letter("") is None

    def test_numeric_string(self):
        assert mark_to_letter("85") == "B+"

    def test_clamping(self):
        assert mark_to_letter(-5) == mark_to_letter(0) == "F"
        assert mark_to_letter(150) == mark_to_letter(100) == "A"

    def test_huge_integer_mark_clamped(self):
        """Integers beyond float range clamp like any other mark above 100"""
        assert mark_to_letter(10 ** 400) == "A"
        assert mark_to_letter(-(10 ** 400)) == "F"
        assert mark_to_gpa_points(10 ** 400) == 3.75
        assert get_grade_status(10 ** 400) == "safe"


class TestMarkToGpaPoints:
    """Tests for mark_to_gpa_points"""

    @pytest.mark.parametrize("mark, points", [
        (97, 3.75),
        (92, 3.5),
        (86, 3.25),
        (81, 3.0),
        (76, 2.75),
        (71, 2.5),
        (66, 2.25),
        (61, 2.0),
        (56, 1.75),
        (51, 1.5),
        (30, 0.0),
    ])
    def test_points_per_band(self, mark, points):
        assert mark_to_gpa_points(mark) == points

    def test_missing_mark(self):
        assert mark_to_gpa_points(None) is None
        assert mark_to_gpa_points(float("nan")) is None

    def test_clamping(self):
        assert mark_to_gpa_points(150) == 3.75
        assert mark_to_gpa_points(-10) == 0.0

    def test_find_grade_row(self):
        row = find_grade_row(82)
        assert row.letter == "B"
        assert row.gpa_points == 3.0
        assert find_grade_row(None) is None


class TestGradeStatus:
    """Tests for get_grade_status"""

    @pytest.mark.parametrize("mark, status", [
        (100, "safe"),
        (80, "safe"),
        (79.99, "normal"),
        (70, "normal"),
        (69.99, "at_risk"),
        (60, "at_risk"),
        (59.99, "high_risk"),
        (0, "high_risk"),
    ])
    def test_buckets(self, mark, status):
        assert get_grade_status(mark) == status

    def test_missing_mark_is_normal(self):
        assert get_grade_status(None) == GradeStatus.NORMAL
        assert get_grade_status(float("nan")) == "normal"
        assert get_grade_status("n/a") == "normal"


class TestRoundHalfUp:
    """Tests for round_half_up"""

    def test_half_rounds_up(self):
        assert round_half_up(3.125) == 3.13
        assert round_half_up(2.5, 0) == 3.0

    def test_rounds_to_two_places(self):
        assert round_half_up(3.1666666) == 3.17
        assert round_half_up(3.1649) == 3.16

    def test_non_finite_passthrough(self):
        assert math.isinf(round_half_up(float("inf")))


class TestExtremeMarks:
    """Lookups never raise and clamp marks outside 0-100"""

    @pytest.mark.parametrize("mark, letter, points, status", [
        (10 ** 400, "A", 3.75, "safe"),
        (-(10 ** 400), "F", 0.0, "high_risk"),
        (float("inf"), "A", 3.75, "safe"),
        (float("-inf"), "F", 0.0, "high_risk"),
        ("1e400", "A", 3.75, "safe"),
        (Decimal("87.5"), "B+", 3.25, "safe"),
        (Decimal("1e500"), "A", 3.75, "safe"),
        (Decimal("-Infinity"), "F", 0.0, "high_risk"),
        (Decimal("NaN"), None, None, "normal"),
        (Decimal("sNaN"), None, None, "normal"),
    ])
    def test_lookups(self, mark, letter, points, status):
        assert mark_to_letter(mark) == letter
        assert mark_to_gpa_points(mark) == points
        assert get_grade_status(mark) == status
