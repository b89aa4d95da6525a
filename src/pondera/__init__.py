"""Pondera - Brazilian high-school grades to U.S. GPA"""

from .data_models import (
    GPACalculation,
    GPAClassification,
    GradeScale,
    GradingSystem,
    Student,
    StudentGPARecord,
    Subject,
    SubjectGrade,
    SubjectLevel,
    SubjectType,
    YearlyGPA,
    YearlyRecord,
)
from .gpa_calculator import (
    calculate_cumulative_gpa,
    calculate_final_grade,
    calculate_subject_grades_and_gpa,
    calculate_subject_weighted_gpa,
    calculate_yearly_gpa,
)
from .grade_utils import get_gpa_classification, grade_to_gpa, validate_grade

__version__ = "1.0.0"

__all__ = [
    "GPACalculation",
    "GPAClassification",
    "GradeScale",
    "GradingSystem",
    "Student",
    "StudentGPARecord",
    "Subject",
    "SubjectGrade",
    "SubjectLevel",
    "SubjectType",
    "YearlyGPA",
    "YearlyRecord",
    "calculate_cumulative_gpa",
    "calculate_final_grade",
    "calculate_subject_grades_and_gpa",
    "calculate_subject_weighted_gpa",
    "calculate_yearly_gpa",
    "get_gpa_classification",
    "grade_to_gpa",
    "validate_grade",
]
