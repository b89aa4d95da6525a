"""
Unit Tests for Grade Utilities

Tests for:
- Stepped grade to GPA mapping
- Scale normalization
- GPA classification tiers
- Grade validation
- Blank slot handling
"""

import math

import pytest

from pondera.data_models import GPAClassification, GradeScale
from pondera.grade_utils import (
    entered_grades,
    get_gpa_classification,
    grade_to_gpa,
    is_entered_grade,
    normalize_period_grades,
    to_ten_point_scale,
    validate_grade,
)


class TestGradeToGPA:
    """Tests for grade_to_gpa"""

    @pytest.mark.parametrize(
        "percentage, expected",
        [
            (0, 0.0),
            (59.999, 0.0),
            (60, 1.0),
            (69.999, 1.0),
            (70, 2.0),
            (79.999, 2.0),
            (80, 3.0),
            (89.999, 3.0),
            (90, 4.0),
            (100, 4.0),
        ],
    )
    def test_threshold_boundaries(self, percentage, expected):
        """Boundary percentages map to the stepped table"""
        assert grade_to_gpa(percentage, 100) == expected

    def test_just_below_ninety_falls_to_next_tier(self):
        """89.9% is not rounded up to 4.0"""
        assert grade_to_gpa(89.9, 100) == 3.0
        assert grade_to_gpa(8.99, 10) == 3.0

    @pytest.mark.parametrize("grade, percentage", [(9, 90), (6, 60), (7.5, 75), (3, 30)])
    def test_scale_normalization(self, grade, percentage):
        """Same percentage on either scale gives the same GPA"""
        assert grade_to_gpa(grade, 10) == grade_to_gpa(percentage, 100)

    def test_default_scale_is_ten(self):
        """Scale defaults to 10"""
        assert grade_to_gpa(9) == 4.0
        assert grade_to_gpa(6) == 1.0

    def test_out_of_range_values(self):
        """Out-of-range grades fall to the nearest bound without raising"""
        assert grade_to_gpa(-5) == 0.0
        assert grade_to_gpa(15) == 4.0
        assert grade_to_gpa(250, 100) == 4.0

    def test_nan_maps_to_zero(self):
        """NaN never matches a threshold"""
        assert grade_to_gpa(float("nan")) == 0.0

    def test_no_partial_credit(self):
        """Grades inside a tier all map to the same point"""
        assert grade_to_gpa(8.0) == grade_to_gpa(8.9) == 3.0


class TestGPAClassification:
    """Tests for get_gpa_classification"""

    @pytest.mark.parametrize(
        "gpa, label",
        [
            (4.0, "Excellent"),
            (3.7, "Excellent"),
            (3.5, "Very Good"),
            (3.0, "Good"),
            (2.8, "Satisfactory"),
            (2.0, "Regular"),
            (1.0, "Insufficient"),
            (0.0, "Insufficient"),
        ],
    )
    def test_tiers(self, gpa, label):
        """GPA values land in the expected tier"""
        assert get_gpa_classification(gpa).label == label

    def test_weighted_gpa_above_four(self):
        """Weighted GPAs above 4.0 are still Excellent"""
        assert get_gpa_classification(5.0).label == "Excellent"

    def test_negative_falls_through_to_lowest_tier(self):
        """Negative input still returns a classification"""
        classification = get_gpa_classification(-1.0)
        assert classification.label == "Insufficient"

    def test_classification_fields(self):
        """Each tier carries display details"""
        classification = get_gpa_classification(3.8)
        assert isinstance(classification, GPAClassification)
        assert classification.description == "Summa Cum Laude"
        assert classification.color == "#10b981"
        assert classification.bg_color == "#10b98120"
        assert classification.icon


class TestValidateGrade:
    """Tests for validate_grade"""

    def test_ten_point_scale(self):
        """0-10 is checked inclusively"""
        assert validate_grade(0, "0-10")
        assert validate_grade(10, "0-10")
        assert validate_grade(7.5, "0-10")
        assert not validate_grade(10.5, "0-10")
        assert not validate_grade(-0.1, "0-10")

    def test_hundred_point_scale(self):
        """0-100 is checked inclusively"""
        assert validate_grade(100, "0-100")
        assert validate_grade(55, "0-100")
        assert not validate_grade(101, "0-100")

    def test_non_numeric_scales_always_valid(self):
        """A-F and conceitos have no numeric range"""
        assert validate_grade(-50, "A-F")
        assert validate_grade(500, "conceitos")

    def test_accepts_enum_members(self):
        """GradeScale members work like their string values"""
        assert validate_grade(95, GradeScale.ZERO_TO_HUNDRED)
        assert not validate_grade(95, GradeScale.ZERO_TO_TEN)

    def test_nan_is_invalid(self):
        """NaN is rejected on numeric scales"""
        assert not validate_grade(float("nan"), "0-10")


class TestBlankSlots:
    """Tests for entered/blank slot helpers"""

    def test_is_entered_grade(self):
        """None and NaN are blank; zero is a grade"""
        assert not is_entered_grade(None)
        assert not is_entered_grade(math.nan)
        assert is_entered_grade(0)
        assert is_entered_grade(7.5)

    def test_entered_grades_keeps_order_and_zeros(self):
        """Blank slots are dropped, zeros kept"""
        assert entered_grades([8, None, 0, float("nan"), 6]) == [8.0, 0.0, 6.0]

    def test_normalize_keeps_zero_by_default(self):
        """Zero stays a scored grade"""
        assert normalize_period_grades([8, 0, None]) == [8.0, 0.0, None]

    def test_normalize_zero_placeholder(self):
        """Legacy zeros become blank slots"""
        assert normalize_period_grades([8, 0, 0], zero_is_placeholder=True) == [8.0, None, None]

    def test_to_ten_point_scale(self):
        """Only 0-100 grades are rescaled"""
        assert to_ten_point_scale(85, "0-100") == 8.5
        assert to_ten_point_scale(8.5, "0-10") == 8.5
        assert to_ten_point_scale(9, GradeScale.CONCEITOS) == 9
