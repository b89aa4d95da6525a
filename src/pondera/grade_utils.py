"""
GRADE UTILITIES - Grade to GPA conversion, classification, and validation

GRADE MAPPING (percentage of the scale):
>= 90 = 4.0
>= 80 = 3.0
>= 70 = 2.0
>= 60 = 1.0
below 60 = 0.0

The mapping is stepped: there is no partial credit between tiers.
Thresholds are scanned from highest to lowest and the first one not
exceeding the input wins.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd

# (threshold percentage, GPA point), highest first
GPA_SCALE: Tuple[Tuple[float, float], ...] = (
    (90.0, 4.0),
    (80.0, 3.0),
    (70.0, 2.0),
    (60.0, 1.0),
    (0.0, 0.0),
)

# (minimum GPA, label, color, background color, icon, description), highest first
GPA_CLASSIFICATIONS: Tuple[Tuple[float, str, str, str, str, str], ...] = (
    (3.7, "Excellent", "#10b981", "#10b98120", "🌟", "Summa Cum Laude"),
    (3.3, "Very Good", "#059669", "#05966920", "⭐", "Magna Cum Laude"),
    (3.0, "Good", "#0d9488", "#0d948820", "✅", "Cum Laude"),
    (2.7, "Satisfactory", "#f59e0b", "#f59e0b20", "👍", "Approved"),
    (2.0, "Regular", "#d97706", "#d9770620", "⚠️", "Needs Improvement"),
    (0.0, "Insufficient", "#ef4444", "#ef444420", "❌", "Below Average"),
)

NUMERIC_SCALE_LIMITS = {
    "0-10": 10.0,
    "0-100": 100.0,
}


def grade_to_gpa(grade: float, scale: float = 10) -> float:
    """
    Convert a numeric grade to a GPA point on the 4.0 scale

    Args:
        grade: Numeric grade
        scale: Maximum of the scale the grade was recorded on (10 or 100)

    Returns:
        GPA point (4.0, 3.0, 2.0, 1.0 or 0.0)
    """
    percentage = grade if scale == 100 else (grade / scale) * 100
    for threshold, gpa_point in GPA_SCALE:
        if percentage >= threshold:
            return gpa_point
    # Negative or NaN percentages
    return GPA_SCALE[-1][1]


def get_gpa_classification(gpa: float):
    """Return the display tier for a GPA; anything below 0.0 gets the lowest tier"""
    from .data_models import GPAClassification

    tier = GPA_CLASSIFICATIONS[-1]
    for entry in GPA_CLASSIFICATIONS:
        if gpa >= entry[0]:
            tier = entry
            break

    _, label, color, bg_color, icon, description = tier
    return GPAClassification(
        label=label,
        color=color,
        bg_color=bg_color,
        icon=icon,
        description=description,
    )


def validate_grade(value: float, grade_scale: str) -> bool:
    """
    Check a grade against the active scale

    0-10 and 0-100 are range-checked (inclusive). A-F and conceitos have no
    numeric range, so any value is accepted.
    """
    limit = NUMERIC_SCALE_LIMITS.get(_scale_key(grade_scale))
    if limit is None:
        return True
    if pd.isna(value):
        return False
    return 0 <= value <= limit


def is_entered_grade(value) -> bool:
    """A period slot counts as entered unless it is None or NaN"""
    if value is None:
        return False
    try:
        return not pd.isna(value)
    except (TypeError, ValueError):
        return True


def entered_grades(period_grades: Iterable[Optional[float]]) -> List[float]:
    """Entered grades in period order"""
    return [float(g) for g in period_grades if is_entered_grade(g)]


def normalize_period_grades(
    period_grades: Sequence[Optional[float]], zero_is_placeholder: bool = False
) -> List[Optional[float]]:
    """
    Map blank slots to None

    Args:
        period_grades: Grades by period, possibly with NaN or None slots
        zero_is_placeholder: Treat 0 as "not entered" (legacy stored data)

    Returns:
        Grades by period with every blank slot set to None
    """
    normalized = []
    for grade in period_grades:
        if not is_entered_grade(grade):
            normalized.append(None)
        elif zero_is_placeholder and float(grade) == 0:
            normalized.append(None)
        else:
            normalized.append(float(grade))
    return normalized


def to_ten_point_scale(value: float, grade_scale: str) -> float:
    """Grades are stored on the ten-point scale; 0-100 input is divided by 10"""
    if _scale_key(grade_scale) == "0-100":
        return value / 10
    return value


def _scale_key(grade_scale) -> str:
    # GradeScale members hash by name, so look tables up by value
    return getattr(grade_scale, "value", grade_scale)
