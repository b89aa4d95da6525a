"""
DATA MODELS - Pydantic schemas for grade records and GPA results
Type-safe data structures for subjects, period grades, and GPA calculations

COMPREHENSIVE DATA VALIDATION:
✅ Subjects: identity, core/elective type, regular/honors/AP level, credits
✅ Subject Grades: one slot per grading period, None = not entered
✅ Yearly Records: one record per academic year (1º, 2º, 3º ano)
✅ GPA Results: yearly breakdown plus cumulative figures

VALIDATION RULES:
- Credits must be positive
- Years must be 1, 2 or 3
- GPA figures must be non-negative
- Final grade and GPA points are derived, never stored independently

Priority: CRITICAL - Foundation for all GPA calculations
Dependencies: Pydantic for validation
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from .grade_utils import grade_to_gpa, is_entered_grade


class SubjectType(str, Enum):
    """Curriculum role of a subject"""
    CORE = "core"
    ELECTIVE = "elective"


class SubjectLevel(str, Enum):
    """Course level used for weighted GPA bonuses"""
    REGULAR = "regular"
    HONORS = "honors"
    AP = "ap"


class GradeScale(str, Enum):
    """Grade scales a student can enter grades on"""
    ZERO_TO_TEN = "0-10"
    ZERO_TO_HUNDRED = "0-100"
    LETTER = "A-F"
    CONCEITOS = "conceitos"


class GradingSystem(str, Enum):
    """How the school year is split into grading periods"""
    TRIMESTRAL = "trimestral"
    SEMESTRAL = "semestral"
    ANNUAL = "annual"

    @property
    def period_count(self) -> int:
        """Number of grade slots per subject"""
        return {"trimestral": 3, "semestral": 2, "annual": 1}[self.value]


class PonderaModel(BaseModel):
    """Shared config: snake_case in Python, camelCase accepted from stored state"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
    )


class Student(PonderaModel):
    """Student identification shown on reports"""

    name: str = Field("", description="Student name")
    school: Optional[str] = Field(None, description="School name")
    graduation_year: int = Field(
        default_factory=lambda: datetime.now().year + 1,
        description="Expected graduation year",
    )
    student_id: Optional[str] = Field(None, description="Optional student identifier")


class Subject(PonderaModel):
    """A subject taken in one academic year"""

    id: str = Field(..., description="Subject identifier")
    name: str = Field(..., description="Display name")
    type: SubjectType = Field(SubjectType.CORE, description="Core or elective")
    level: SubjectLevel = Field(SubjectLevel.REGULAR, description="Regular, honors or AP")
    credits: float = Field(1.0, gt=0.0, description="Weight in credit-weighted averages")

    @property
    def is_core(self) -> bool:
        return self.type == SubjectType.CORE

    @property
    def is_honors(self) -> bool:
        return self.level == SubjectLevel.HONORS

    @property
    def is_ap(self) -> bool:
        return self.level == SubjectLevel.AP


class SubjectGrade(PonderaModel):
    """A subject with its per-period grades and derived results"""

    subject: Subject
    grades: List[Optional[float]] = Field(
        default_factory=list,
        description="Grades by period on the ten-point scale (None = not entered)",
    )

    @field_validator("grades", mode="before")
    @classmethod
    def blank_missing_grades(cls, v):
        """NaN slots mean the grade was never entered"""
        if v is None:
            return []
        return [g if is_entered_grade(g) else None for g in v]

    @computed_field
    @property
    def final_grade(self) -> float:
        """Mean of the entered period grades"""
        from .gpa_calculator import calculate_final_grade

        return calculate_final_grade(self.grades)

    @computed_field
    @property
    def gpa_points(self) -> float:
        """Unweighted GPA points for the final grade"""
        return grade_to_gpa(self.final_grade)

    @computed_field
    @property
    def weighted_gpa_points(self) -> float:
        """GPA points including the honors/AP bonus"""
        from .gpa_calculator import calculate_subject_weighted_gpa

        return calculate_subject_weighted_gpa(self)

    @property
    def has_grades(self) -> bool:
        """Whether at least one period grade has been entered"""
        return any(is_entered_grade(g) for g in self.grades)


class YearlyRecord(PonderaModel):
    """All subjects of one academic year"""

    year: int = Field(..., ge=1, le=3, description="Academic year (1, 2 or 3)")
    subjects: List[SubjectGrade] = Field(default_factory=list)

    def get_subject(self, subject_id: str) -> Optional[SubjectGrade]:
        for subject_grade in self.subjects:
            if subject_grade.subject.id == subject_id:
                return subject_grade
        return None


class YearlyGPA(PonderaModel):
    """GPA summary for one academic year"""

    year: Optional[int] = Field(None, ge=1, le=3, description="Stamped by the caller")
    unweighted: float = Field(0.0, ge=0.0, description="Unweighted year GPA")
    weighted: float = Field(0.0, ge=0.0, description="Weighted year GPA (may exceed 4.0)")
    core_only: float = Field(0.0, ge=0.0, description="Core subjects only")
    total_credits: float = Field(0.0, ge=0.0, description="Credits across all subjects")


class GPACalculation(PonderaModel):
    """Cumulative GPA result with yearly breakdown"""

    unweighted: float = Field(..., ge=0.0, description="Unweighted cumulative GPA")
    weighted: float = Field(..., ge=0.0, description="Weighted cumulative GPA")
    core_only: float = Field(..., ge=0.0, description="Core-only cumulative GPA")
    total_credits: float = Field(..., ge=0.0, description="Credits across all years")
    yearly_breakdown: List[YearlyGPA] = Field(default_factory=list)

    # Calculation metadata
    calculated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the GPA was calculated",
    )

    def get_year(self, year: int) -> Optional[YearlyGPA]:
        for yearly in self.yearly_breakdown:
            if yearly.year == year:
                return yearly
        return None


class GPAClassification(PonderaModel):
    """Display tier for a GPA value"""

    label: str
    color: str
    bg_color: str
    icon: str
    description: str


class StudentGPARecord(PonderaModel):
    """Everything the caller holds for one student: the unit that gets persisted"""

    student: Student = Field(default_factory=Student)
    grading_system: GradingSystem = Field(GradingSystem.TRIMESTRAL)
    grade_scale: GradeScale = Field(GradeScale.ZERO_TO_TEN)
    yearly_records: List[YearlyRecord] = Field(default_factory=list)

    def get_yearly_record(self, year: int) -> Optional[YearlyRecord]:
        for record in self.yearly_records:
            if record.year == year:
                return record
        return None

    @property
    def has_valid_grades(self) -> bool:
        """At least one subject in any year has an entered grade"""
        return any(
            subject_grade.has_grades
            for record in self.yearly_records
            for subject_grade in record.subjects
        )


__all__ = [
    "SubjectType",
    "SubjectLevel",
    "GradeScale",
    "GradingSystem",
    "Student",
    "Subject",
    "SubjectGrade",
    "YearlyRecord",
    "YearlyGPA",
    "GPACalculation",
    "GPAClassification",
    "StudentGPARecord",
]
