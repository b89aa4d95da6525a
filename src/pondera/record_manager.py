"""
RECORD MANAGER - Holds a student's yearly records and runs GPA calculations

RESPONSIBILITIES:
✅ Grade entry: validates each period grade against the active scale
✅ Subject editing: add, remove and edit subjects per year
✅ Default catalog: initializes all three years from the subject catalog
✅ Year actions: clear a year's grades, keep essential subjects, reload all
✅ GPA calculation: refuses to run without any entered grade, caches results
✅ State snapshot: load/dump the StudentGPARecord for persistence

Every mutation clears the calculation cache. The GPA engine itself
(gpa_calculator) stays pure; all state lives here.
"""

import logging
from typing import Any, Dict, List, Optional

from .calculation_cache import CalculationCache, make_cache_key
from .config import PonderaSettings, get_settings
from .data_models import (
    GPACalculation,
    GradeScale,
    GradingSystem,
    Student,
    StudentGPARecord,
    Subject,
    SubjectGrade,
    YearlyRecord,
)
from .default_subjects import (
    ESSENTIAL_SUBJECT_NAMES,
    YEARS,
    create_subject_grades,
    get_subjects_for_year,
)
from .gpa_calculator import calculate_cumulative_gpa
from .grade_utils import (
    is_entered_grade,
    normalize_period_grades,
    to_ten_point_scale,
    validate_grade,
)

logger = logging.getLogger(__name__)


class PonderaError(Exception):
    """Base class for record manager errors"""


class NoValidGradesError(PonderaError, ValueError):
    """Raised when a GPA is requested before any grade has been entered"""


class RecordNotFoundError(PonderaError, KeyError):
    """Raised for an unknown year or subject"""


class GPARecordManager:
    """Caller-side owner of the academic records and their GPA result"""

    def __init__(
        self,
        record: Optional[StudentGPARecord] = None,
        settings: Optional[PonderaSettings] = None,
        cache: Optional[CalculationCache] = None,
    ):
        """
        Args:
            record: Existing snapshot; a blank one is created from settings if omitted
            settings: Defaults for grading system, scale and caching
            cache: Calculation cache; built from settings if omitted
        """
        self.settings = settings or get_settings()
        self.record = record or StudentGPARecord(
            grading_system=self.settings.grading_system,
            grade_scale=self.settings.grade_scale,
        )
        self.cache = cache or CalculationCache(
            enabled=self.settings.enable_cache,
            ttl_minutes=self.settings.cache_duration_minutes,
        )
        self.gpa_calculation: Optional[GPACalculation] = None
        self.calculation_log: List[str] = []

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def period_count(self) -> int:
        return GradingSystem(self.record.grading_system).period_count

    def set_student(self, student: Student) -> None:
        self.record.student = student

    def set_grading_system(self, grading_system: GradingSystem) -> None:
        """
        Change the grading system

        Every subject is resized to the new number of periods: grades in
        periods that no longer exist are dropped, new periods start blank.
        """
        self.record.grading_system = GradingSystem(grading_system)
        period_count = self.period_count
        for yearly_record in self.record.yearly_records:
            yearly_record.subjects = [
                SubjectGrade(
                    subject=s.subject,
                    grades=_fit_periods(s.grades, period_count),
                )
                for s in yearly_record.subjects
            ]
        self._records_changed()

    def set_grade_scale(self, grade_scale: GradeScale) -> None:
        self.record.grade_scale = GradeScale(grade_scale)

    # ------------------------------------------------------------------
    # Yearly records
    # ------------------------------------------------------------------

    def initialize_default_subjects(self) -> None:
        """Replace all records with the default catalog for years 1-3"""
        self.record.yearly_records = [
            YearlyRecord(
                year=year,
                subjects=create_subject_grades(
                    get_subjects_for_year(year), self.period_count
                ),
            )
            for year in YEARS
        ]
        self.calculation_log.append(
            f"📚 Initialized default subjects for {len(YEARS)} years"
        )
        self._records_changed()

    def get_yearly_record(self, year: int) -> Optional[YearlyRecord]:
        return self.record.get_yearly_record(year)

    def add_yearly_record(self, record: YearlyRecord) -> None:
        if self.record.get_yearly_record(record.year) is not None:
            raise ValueError(f"Year {record.year} already has a record")
        self.record.yearly_records.append(record)
        self._records_changed()

    def update_yearly_record(self, year: int, subjects: List[SubjectGrade]) -> None:
        """Replace the subjects of one year"""
        record = self._require_year(year)
        record.subjects = list(subjects)
        self._records_changed()

    def clear_year_grades(self, year: int) -> None:
        """Blank every period grade of one year, keeping its subjects"""
        record = self._require_year(year)
        record.subjects = [
            SubjectGrade(subject=s.subject, grades=[None] * self.period_count)
            for s in record.subjects
        ]
        self.calculation_log.append(f"🧹 Cleared all grades of year {year}")
        self._records_changed()

    def set_essential_subjects(self, year: int) -> None:
        """Keep only the year's core catalog subjects, with their grades"""
        record = self._require_year(year)
        record.subjects = [
            s for s in record.subjects if s.subject.name in ESSENTIAL_SUBJECT_NAMES
        ]
        self.calculation_log.append(
            f"📚 Loaded {len(record.subjects)} essential subjects for year {year}"
        )
        self._records_changed()

    def load_all_subjects(self, year: int) -> None:
        """Reload the full catalog for one year; its grades start blank"""
        record = self._require_year(year)
        record.subjects = create_subject_grades(
            get_subjects_for_year(year), self.period_count
        )
        self.calculation_log.append(
            f"📚 Loaded {len(record.subjects)} subjects for year {year}"
        )
        self._records_changed()

    # ------------------------------------------------------------------
    # Subjects and grades
    # ------------------------------------------------------------------

    def add_subject(self, year: int, subject: Subject) -> SubjectGrade:
        """Add a subject with blank grade slots for every period"""
        record = self._require_year(year)
        if record.get_subject(subject.id) is not None:
            raise ValueError(f"Subject {subject.id} already exists in year {year}")

        subject_grade = SubjectGrade(subject=subject, grades=[None] * self.period_count)
        record.subjects.append(subject_grade)
        self.calculation_log.append(f"➕ Added {subject.name} to year {year}")
        self._records_changed()
        return subject_grade

    def remove_subject(self, year: int, subject_id: str) -> None:
        record = self._require_year(year)
        self._require_subject(record, subject_id)
        record.subjects = [s for s in record.subjects if s.subject.id != subject_id]
        self._records_changed()

    def update_subject(self, year: int, subject_id: str, **changes: Any) -> Subject:
        """
        Edit subject fields (name, type, level, credits)

        Returns:
            The validated, updated Subject
        """
        unknown = set(changes) - set(Subject.model_fields)
        if unknown:
            raise ValueError(f"Unknown subject fields: {', '.join(sorted(unknown))}")

        record = self._require_year(year)
        subject_grade = self._require_subject(record, subject_id)

        data = {name: getattr(subject_grade.subject, name) for name in Subject.model_fields}
        data.update(changes)
        subject_grade.subject = Subject(**data)
        self._records_changed()
        return subject_grade.subject

    def set_period_grade(
        self, year: int, subject_id: str, period_index: int, value: Optional[float]
    ) -> bool:
        """
        Enter or clear one period grade

        Args:
            year: Academic year
            subject_id: Subject to edit
            period_index: Zero-based grading period
            value: Grade on the active scale, or None to clear the slot

        Returns:
            False if the value was rejected by validate_grade, True otherwise
        """
        if not 0 <= period_index < self.period_count:
            raise ValueError(
                f"Period {period_index} out of range for {self.record.grading_system.value} "
                f"({self.period_count} periods)"
            )

        record = self._require_year(year)
        subject_grade = self._require_subject(record, subject_id)

        if is_entered_grade(value):
            if not validate_grade(value, self.record.grade_scale):
                logger.warning(
                    f"Rejected grade {value} for {subject_id} (scale {self.record.grade_scale.value})"
                )
                self.calculation_log.append(
                    f"⚠️ Rejected grade {value} for {subject_grade.subject.name}"
                )
                return False
            value = to_ten_point_scale(float(value), self.record.grade_scale)
        else:
            value = None

        grades = list(subject_grade.grades)
        if len(grades) <= period_index:
            grades.extend([None] * (period_index + 1 - len(grades)))
        grades[period_index] = value

        # Rebuild so final grade and GPA points are re-derived for this subject only
        updated = SubjectGrade(subject=subject_grade.subject, grades=grades)
        record.subjects = [
            updated if s.subject.id == subject_id else s for s in record.subjects
        ]
        self._records_changed()
        return True

    # ------------------------------------------------------------------
    # GPA
    # ------------------------------------------------------------------

    def calculate_gpa(self) -> GPACalculation:
        """
        Calculate the cumulative GPA for the current records

        Raises:
            NoValidGradesError: No subject in any year has an entered grade
        """
        if not self.record.has_valid_grades:
            self.calculation_log.append("❌ No valid grades found to calculate GPA")
            raise NoValidGradesError("No valid grades found to calculate the GPA")

        cache_key = make_cache_key(self.record.yearly_records)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Using cached GPA calculation")
            self.calculation_log.append("♻️ Using cached GPA calculation")
            self.gpa_calculation = cached
            return cached

        self.calculation_log.append(
            f"📊 Calculating GPA for {len(self.record.yearly_records)} years"
        )
        calculation = calculate_cumulative_gpa(self.record.yearly_records)
        self.cache.set(cache_key, calculation)
        self.gpa_calculation = calculation

        logger.info(
            f"GPA calculated: unweighted {calculation.unweighted:.3f}, "
            f"weighted {calculation.weighted:.3f}, core {calculation.core_only:.3f}"
        )
        self.calculation_log.append("✅ Calculation complete:")
        self.calculation_log.append(f"   Unweighted GPA: {calculation.unweighted:.3f}")
        self.calculation_log.append(f"   Weighted GPA: {calculation.weighted:.3f}")
        self.calculation_log.append(f"   CORE GPA: {calculation.core_only:.3f}")
        self.calculation_log.append(f"   Total Credits: {calculation.total_credits:.1f}")
        return calculation

    def get_calculation_log(self) -> List[str]:
        """Get detailed calculation log for debugging"""
        return self.calculation_log

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Back to a blank record with the configured defaults"""
        self.record = StudentGPARecord(
            grading_system=self.settings.grading_system,
            grade_scale=self.settings.grade_scale,
        )
        self.gpa_calculation = None
        self.calculation_log = []
        self.cache.clear()

    def dump_state(self) -> Dict[str, Any]:
        """JSON-ready snapshot of the record (derived fields included)"""
        return self.record.model_dump(mode="json")

    def load_state(self, data: Dict[str, Any], legacy_hundred_point: bool = False) -> None:
        """
        Restore a snapshot produced by dump_state or by the web app store

        Args:
            data: Snapshot, snake_case or camelCase keys
            legacy_hundred_point: The snapshot holds 0-100 grades as entered
                (web app store) rather than on the ten-point scale; they are
                divided by 10 when the snapshot's scale is 0-100

        With the zero_is_placeholder setting on, zeros in period grades are
        read as blank slots.
        """
        record = StudentGPARecord.model_validate(data)
        rescale = legacy_hundred_point and record.grade_scale == GradeScale.ZERO_TO_HUNDRED
        if rescale or self.settings.zero_is_placeholder:
            for yearly_record in record.yearly_records:
                yearly_record.subjects = [
                    SubjectGrade(
                        subject=s.subject,
                        grades=self._normalize_loaded_grades(s.grades, rescale),
                    )
                    for s in yearly_record.subjects
                ]
            if rescale:
                logger.info("Rescaled 0-100 grades of a legacy snapshot to ten points")
        self.record = record
        self.gpa_calculation = None
        self._records_changed()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _records_changed(self) -> None:
        self.cache.clear()

    def _normalize_loaded_grades(
        self, grades: List[Optional[float]], rescale: bool
    ) -> List[Optional[float]]:
        grades = normalize_period_grades(
            grades, zero_is_placeholder=self.settings.zero_is_placeholder
        )
        if not rescale:
            return grades
        return [
            None if g is None else to_ten_point_scale(g, GradeScale.ZERO_TO_HUNDRED)
            for g in grades
        ]

    def _require_year(self, year: int) -> YearlyRecord:
        record = self.record.get_yearly_record(year)
        if record is None:
            raise RecordNotFoundError(f"No record for year {year}")
        return record

    def _require_subject(self, record: YearlyRecord, subject_id: str) -> SubjectGrade:
        subject_grade = record.get_subject(subject_id)
        if subject_grade is None:
            raise RecordNotFoundError(
                f"Subject {subject_id} not found in year {record.year}"
            )
        return subject_grade


def _fit_periods(grades: List[Optional[float]], period_count: int) -> List[Optional[float]]:
    """Cut or pad with blank slots to exactly period_count grades"""
    return list(grades[:period_count]) + [None] * (period_count - len(grades))
