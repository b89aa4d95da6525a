"""
Pytest Configuration and Fixtures

Provides common fixtures for all tests including:
- Subject grade factory
- Sample yearly records
- Isolated settings and record manager
"""

import pytest

from pondera.config import PonderaSettings
from pondera.data_models import Subject, SubjectGrade, YearlyRecord
from pondera.record_manager import GPARecordManager


@pytest.fixture
def make_subject_grade():
    """Factory for SubjectGrade records"""

    def _make(subject_id, grades, type="core", level="regular", credits=1.0, name=None):
        return SubjectGrade(
            subject=Subject(
                id=subject_id,
                name=name or subject_id.title(),
                type=type,
                level=level,
                credits=credits,
            ),
            grades=grades,
        )

    return _make


@pytest.fixture
def sample_yearly_records(make_subject_grade):
    """Two years of grades for GPA tests"""
    return [
        YearlyRecord(
            year=1,
            subjects=[
                make_subject_grade("matematica", [9, 8, 10], level="honors"),
                make_subject_grade("portugues", [6, 6, 6]),
            ],
        ),
        YearlyRecord(
            year=2,
            subjects=[
                make_subject_grade("fisica-ap", [7, 8, None], level="ap"),
                make_subject_grade("teatro", [10, 10, 10], type="elective", credits=0.5),
            ],
        ),
    ]


@pytest.fixture
def settings():
    """Settings that ignore the environment and any .env file"""
    return PonderaSettings(_env_file=None)


@pytest.fixture
def manager(settings):
    """Record manager with the default catalog loaded"""
    manager = GPARecordManager(settings=settings)
    manager.initialize_default_subjects()
    return manager
