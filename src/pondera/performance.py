"""
PERFORMANCE METRICS - Dashboard figures derived from records and GPA results

METRICS:
✅ Annual metrics: completion, credits, average grade/GPA, grade bands
✅ Performance indicators: overall average and the year 1 -> 3 direction
✅ Subject distribution: average grade and credits by type and level
✅ Trends: up/down/stable between two values
✅ GPA evolution: yearly breakdown with year-over-year trend

A subject counts as completed once any of its period grades is entered.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from .data_models import GPACalculation, SubjectLevel, SubjectType, YearlyRecord
from .default_subjects import YEARS

logger = logging.getLogger(__name__)

SUBJECT_COLUMNS = {
    "year": "int64",
    "subject_id": "object",
    "name": "object",
    "type": "object",
    "level": "object",
    "credits": "float64",
    "final_grade": "float64",
    "gpa_points": "float64",
    "weighted_gpa_points": "float64",
    "entered_periods": "int64",
    "completed": "bool",
}

# Changes smaller than this are reported as stable
TREND_TOLERANCE = 0.01

SUBJECT_TYPES = [t.value for t in SubjectType]
SUBJECT_LEVELS = [level.value for level in SubjectLevel]


@dataclass
class AnnualPerformanceMetrics:
    """Summary of one academic year"""

    avg_grade: float
    avg_gpa: float
    completed_subjects_count: int
    total_subjects_count: int
    earned_credits: float
    total_credits: float
    excellent_grades: int
    good_grades: int
    average_grades: int
    poor_grades: int
    completion_rate: float


@dataclass
class PerformanceIndicators:
    """Headline figures across all years"""

    overall_average: float
    total_completed: int
    total_subjects: int
    trend: str  # 'improving', 'declining', 'stable'


@dataclass
class TrendData:
    """Direction and size of a change between two values"""

    type: str  # 'up', 'down', 'stable'
    change: float
    percentage: float


def records_to_dataframe(yearly_records: Iterable[YearlyRecord]) -> pd.DataFrame:
    """One row per subject per year"""
    rows = []
    for record in yearly_records:
        for subject_grade in record.subjects:
            subject = subject_grade.subject
            rows.append(
                {
                    "year": record.year,
                    "subject_id": subject.id,
                    "name": subject.name,
                    "type": getattr(subject.type, "value", subject.type),
                    "level": getattr(subject.level, "value", subject.level),
                    "credits": subject.credits,
                    "final_grade": subject_grade.final_grade,
                    "gpa_points": subject_grade.gpa_points,
                    "weighted_gpa_points": subject_grade.weighted_gpa_points,
                    "entered_periods": sum(
                        1 for g in subject_grade.grades if g is not None
                    ),
                    "completed": subject_grade.has_grades,
                }
            )
    return pd.DataFrame(rows, columns=list(SUBJECT_COLUMNS)).astype(SUBJECT_COLUMNS)


def calculate_annual_performance_metrics(record: YearlyRecord) -> AnnualPerformanceMetrics:
    """
    Calculate dashboard metrics for one academic year

    Args:
        record: The year to summarize

    Returns:
        AnnualPerformanceMetrics; averages cover completed subjects only
    """
    df = records_to_dataframe([record])
    completed = df[df["completed"]]
    grades = completed["final_grade"]

    has_completed = len(completed) > 0
    return AnnualPerformanceMetrics(
        avg_grade=float(grades.mean()) if has_completed else 0.0,
        avg_gpa=float(completed["gpa_points"].mean()) if has_completed else 0.0,
        completed_subjects_count=len(completed),
        total_subjects_count=len(df),
        earned_credits=float(completed["credits"].sum()),
        total_credits=float(df["credits"].sum()),
        excellent_grades=int((grades >= 9).sum()),
        good_grades=int(((grades >= 7) & (grades < 9)).sum()),
        average_grades=int(((grades >= 6) & (grades < 7)).sum()),
        poor_grades=int((grades < 6).sum()),
        completion_rate=(len(completed) / len(df)) * 100 if len(df) else 0.0,
    )


def calculate_performance_indicators(
    yearly_records: Iterable[YearlyRecord],
) -> PerformanceIndicators:
    """
    Overall average of completed subjects and the direction across years

    The trend is improving only when the average rises from year 1 to 2
    and again from 2 to 3, declining only when it falls both times. Years
    without completed subjects average 0.0.

    Args:
        yearly_records: Records to summarize

    Returns:
        PerformanceIndicators
    """
    df = records_to_dataframe(yearly_records)
    completed = df[df["completed"]]
    if completed.empty:
        return PerformanceIndicators(
            overall_average=0.0,
            total_completed=0,
            total_subjects=len(df),
            trend="stable",
        )

    year_averages = (
        completed.groupby("year")["final_grade"]
        .mean()
        .reindex(list(YEARS), fill_value=0.0)
        .to_numpy()
    )
    steps = np.diff(year_averages)
    if (steps > 0).all():
        trend = "improving"
    elif (steps < 0).all():
        trend = "declining"
    else:
        trend = "stable"

    return PerformanceIndicators(
        overall_average=float(completed["final_grade"].mean()),
        total_completed=len(completed),
        total_subjects=len(df),
        trend=trend,
    )


def process_subject_distribution_data(
    yearly_records: Iterable[YearlyRecord],
    selected_year: Union[int, str] = "all",
) -> List[Dict[str, Union[str, float]]]:
    """
    Average final grade and credits of completed subjects by type and by level

    Args:
        yearly_records: Records to aggregate
        selected_year: A single year, or 'all'

    Returns:
        Two chart rows: category 'by_type' (core, elective) and
        category 'by_level' (regular, honors, ap), each with matching
        credits_<key> totals
    """
    df = records_to_dataframe(yearly_records)
    if selected_year != "all":
        df = df[df["year"] == selected_year]
    completed = df[df["completed"]]

    rows = []
    for category, column, keys in (
        ("by_type", "type", SUBJECT_TYPES),
        ("by_level", "level", SUBJECT_LEVELS),
    ):
        grouped = completed.groupby(column)
        averages = grouped["final_grade"].mean().reindex(keys, fill_value=0.0)
        credits = grouped["credits"].sum().reindex(keys, fill_value=0.0)

        row: Dict[str, Union[str, float]] = {"category": category}
        for key in keys:
            row[key] = float(averages[key])
            row[f"credits_{key}"] = float(credits[key])
        rows.append(row)

    return rows


def calculate_trend_data(value: float, previous_value: Optional[float] = None) -> TrendData:
    """Compare a value with the previous one; no usable previous value means stable"""
    if previous_value is None or previous_value == 0:
        return TrendData(type="stable", change=0.0, percentage=0.0)

    change = value - previous_value
    if abs(change) < TREND_TOLERANCE:
        return TrendData(type="stable", change=0.0, percentage=0.0)

    return TrendData(
        type="up" if change > 0 else "down",
        change=change,
        percentage=(change / previous_value) * 100,
    )


def gpa_evolution_frame(calculation: GPACalculation) -> pd.DataFrame:
    """Yearly breakdown ordered by year, with the unweighted change from the previous year"""
    frame = pd.DataFrame(
        [yearly.model_dump() for yearly in calculation.yearly_breakdown],
        columns=["year", "unweighted", "weighted", "core_only", "total_credits"],
    )
    frame = frame.sort_values("year").reset_index(drop=True)

    change = frame["unweighted"].astype(float).diff()
    frame["change"] = change.fillna(0.0)
    frame["trend"] = np.select(
        [change.isna() | (change.abs() < TREND_TOLERANCE), change > 0],
        ["stable", "up"],
        default="down",
    )
    return frame
