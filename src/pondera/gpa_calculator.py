"""
GPA CALCULATOR - Weighted/unweighted GPA calculations with CORE support
Converts Brazilian period grades into U.S.-style GPA figures

CALCULATION TYPES:
✅ Final Grade: Mean of the entered period grades (ten-point scale)
✅ Unweighted GPA: Stepped 4.0 scale (90%=4.0, 80%=3.0, 70%=2.0, 60%=1.0)
✅ Weighted GPA: Adds level bonus to base (Honors +0.5, AP +1.0)
✅ CORE GPA: Only subjects of type core
✅ Yearly GPA: Credit-weighted per academic year
✅ Cumulative GPA: All years combined

EDGE CASES HANDLED:
- Blank period slots (None/NaN): Not averaged
- Scored zeros: Averaged like any other grade
- Empty years / zero credits: GPA of 0.0, never an error
- Weighted GPA: Floored at 0.0 but allowed above 4.0

Every function here is pure: plain data in, plain data out.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from .data_models import (
    GPACalculation,
    SubjectGrade,
    SubjectLevel,
    SubjectType,
    YearlyGPA,
    YearlyRecord,
)
from .grade_utils import entered_grades, grade_to_gpa

# Bonus added on top of the base GPA point
LEVEL_BONUSES = {
    SubjectLevel.REGULAR.value: 0.0,
    SubjectLevel.HONORS.value: 0.5,
    SubjectLevel.AP.value: 1.0,
}


def calculate_final_grade(period_grades: Iterable[Optional[float]]) -> float:
    """
    Average the period grades of one subject

    Zeros are real scores and are averaged; only blank slots (None/NaN)
    are left out.

    Args:
        period_grades: Grades by period

    Returns:
        Arithmetic mean, or 0.0 when nothing has been entered
    """
    grades = entered_grades(period_grades)
    if not grades:
        return 0.0
    return sum(grades) / len(grades)


def calculate_subject_grades_and_gpa(
    period_grades: Sequence[Optional[float]],
) -> Tuple[float, float]:
    """Final grade and unweighted GPA points, grades on the ten-point scale"""
    final_grade = calculate_final_grade(period_grades)
    gpa_points = grade_to_gpa(final_grade, 10)
    return final_grade, gpa_points


def calculate_subject_weighted_gpa(subject_grade: SubjectGrade) -> float:
    """Base GPA points plus the honors/AP bonus, never negative"""
    gpa = grade_to_gpa(subject_grade.final_grade)
    level = getattr(subject_grade.subject.level, "value", subject_grade.subject.level)
    gpa += LEVEL_BONUSES.get(level, 0.0)

    # Floor only: weighted GPA may exceed 4.0
    return max(gpa, 0.0)


def calculate_yearly_gpa(subjects: Iterable[SubjectGrade]) -> YearlyGPA:
    """
    Calculate GPA figures for one academic year

    Args:
        subjects: Subject grades of the year

    Returns:
        YearlyGPA with credit-weighted unweighted, weighted and CORE figures.
        The year is left unset for the caller to stamp.
    """
    total_unweighted_points = 0.0
    total_weighted_points = 0.0
    total_core_points = 0.0
    total_credits = 0.0
    total_core_credits = 0.0

    for subject_grade in subjects:
        credits = subject_grade.subject.credits
        unweighted_gpa = grade_to_gpa(subject_grade.final_grade)
        weighted_gpa = calculate_subject_weighted_gpa(subject_grade)

        total_unweighted_points += unweighted_gpa * credits
        total_weighted_points += weighted_gpa * credits
        total_credits += credits

        if subject_grade.subject.type == SubjectType.CORE:
            total_core_points += unweighted_gpa * credits
            total_core_credits += credits

    return YearlyGPA(
        unweighted=_safe_divide(total_unweighted_points, total_credits),
        weighted=_safe_divide(total_weighted_points, total_credits),
        core_only=_safe_divide(total_core_points, total_core_credits),
        total_credits=total_credits,
    )


def calculate_cumulative_gpa(yearly_records: Iterable[YearlyRecord]) -> GPACalculation:
    """
    Calculate cumulative GPA across all academic years

    Yearly GPAs are combined weighted by each year's credits. The CORE
    figure is rebuilt from the core subjects themselves rather than from
    the per-year CORE averages.

    Args:
        yearly_records: Any subset of years 1-3, in display order

    Returns:
        GPACalculation with cumulative figures and the yearly breakdown
    """
    total_unweighted_points = 0.0
    total_weighted_points = 0.0
    total_core_points = 0.0
    total_credits = 0.0
    total_core_credits = 0.0
    yearly_breakdown: List[YearlyGPA] = []

    for record in yearly_records:
        yearly_gpa = calculate_yearly_gpa(record.subjects).model_copy(
            update={"year": record.year}
        )
        yearly_breakdown.append(yearly_gpa)

        total_unweighted_points += yearly_gpa.unweighted * yearly_gpa.total_credits
        total_weighted_points += yearly_gpa.weighted * yearly_gpa.total_credits
        total_credits += yearly_gpa.total_credits

        for subject_grade in record.subjects:
            if subject_grade.subject.type == SubjectType.CORE:
                credits = subject_grade.subject.credits
                total_core_points += grade_to_gpa(subject_grade.final_grade) * credits
                total_core_credits += credits

    return GPACalculation(
        unweighted=_safe_divide(total_unweighted_points, total_credits),
        weighted=_safe_divide(total_weighted_points, total_credits),
        core_only=_safe_divide(total_core_points, total_core_credits),
        total_credits=total_credits,
        yearly_breakdown=yearly_breakdown,
        calculated_at=datetime.now(timezone.utc),
    )


def _safe_divide(points: float, credits: float) -> float:
    # No credits yet means no data, not an error
    if credits > 0:
        return points / credits
    return 0.0
