"""
Unit Tests for Data Models

Tests for:
- Derived final grade and GPA points
- Validation rules
- Stored-state compatibility
"""

import pytest
from pydantic import ValidationError

from pondera.data_models import (
    GradingSystem,
    StudentGPARecord,
    Subject,
    SubjectGrade,
    SubjectType,
    YearlyGPA,
    YearlyRecord,
)
from pondera.grade_utils import grade_to_gpa


class TestSubjectGrade:
    """Tests for SubjectGrade derived fields"""

    def test_derived_fields(self, make_subject_grade):
        """Final grade and GPA points come from the grades"""
        subject_grade = make_subject_grade("matematica", [9, 8, 10], level="honors")

        assert subject_grade.final_grade == pytest.approx(9.0)
        assert subject_grade.gpa_points == 4.0
        assert subject_grade.weighted_gpa_points == 4.5

    def test_derived_fields_follow_grade_changes(self, make_subject_grade):
        """Editing grades re-derives final grade and points"""
        subject_grade = make_subject_grade("matematica", [9, 9, 9])
        subject_grade.grades = [6.0, 6.0, 6.0]

        assert subject_grade.final_grade == pytest.approx(6.0)
        assert subject_grade.gpa_points == grade_to_gpa(6.0)

    def test_nan_slots_become_blank(self, make_subject_grade):
        """NaN grades are stored as not entered"""
        subject_grade = make_subject_grade("matematica", [8, float("nan"), None])

        assert subject_grade.grades == [8.0, None, None]
        assert subject_grade.final_grade == pytest.approx(8.0)

    def test_has_grades(self, make_subject_grade):
        """A scored zero counts as entered"""
        assert not make_subject_grade("artes", [None, None]).has_grades
        assert make_subject_grade("artes", [0, None]).has_grades

    def test_stored_final_grade_ignored(self):
        """A final grade in stored data is never authoritative"""
        subject_grade = SubjectGrade.model_validate(
            {
                "subject": {"id": "quimica", "name": "Química"},
                "grades": [7, 7, 7],
                "finalGrade": 10,
                "gpaPoints": 4.0,
            }
        )

        assert subject_grade.final_grade == pytest.approx(7.0)
        assert subject_grade.gpa_points == 2.0

    def test_serialization_includes_derived_fields(self, make_subject_grade):
        """Dumps carry final grade and points for display layers"""
        data = make_subject_grade("matematica", [9, 9, 9]).model_dump(mode="json")

        assert data["final_grade"] == pytest.approx(9.0)
        assert data["gpa_points"] == 4.0
        assert data["subject"]["type"] == "core"


class TestValidation:
    """Tests for model validation rules"""

    def test_credits_must_be_positive(self):
        """Zero or negative credits are rejected"""
        with pytest.raises(ValidationError):
            Subject(id="artes", name="Artes", credits=0)

    def test_unknown_level_rejected(self):
        """Only regular, honors and ap levels exist"""
        with pytest.raises(ValidationError):
            Subject(id="artes", name="Artes", level="ib")

    def test_year_range(self):
        """Years are 1, 2 or 3"""
        with pytest.raises(ValidationError):
            YearlyRecord(year=4)

    def test_negative_gpa_rejected(self):
        """GPA figures are non-negative"""
        with pytest.raises(ValidationError):
            YearlyGPA(unweighted=-1.0)

    def test_subject_defaults(self):
        """Subjects default to core, regular, one credit"""
        subject = Subject(id="artes", name="Artes")

        assert subject.type == SubjectType.CORE
        assert subject.is_core
        assert not subject.is_honors
        assert not subject.is_ap
        assert subject.credits == 1.0


class TestStudentGPARecord:
    """Tests for the persisted student record"""

    def test_camel_case_state(self):
        """State saved by the web app loads with camelCase keys"""
        record = StudentGPARecord.model_validate(
            {
                "student": {"name": "Ana", "graduationYear": 2027},
                "gradingSystem": "semestral",
                "gradeScale": "0-100",
                "yearlyRecords": [
                    {
                        "year": 1,
                        "subjects": [
                            {
                                "subject": {
                                    "id": "1-matematica",
                                    "name": "Matemática",
                                    "type": "core",
                                    "level": "regular",
                                    "credits": 1,
                                },
                                "grades": [8, 9],
                            }
                        ],
                    }
                ],
            }
        )

        assert record.student.graduation_year == 2027
        assert record.grading_system == "semestral"
        assert GradingSystem(record.grading_system).period_count == 2
        assert record.get_yearly_record(1).subjects[0].final_grade == pytest.approx(8.5)
        assert record.get_yearly_record(2) is None

    def test_has_valid_grades(self, make_subject_grade):
        """Valid grades means at least one entered grade anywhere"""
        record = StudentGPARecord(
            yearly_records=[
                YearlyRecord(year=1, subjects=[make_subject_grade("artes", [None])])
            ]
        )
        assert not record.has_valid_grades

        record.yearly_records[0].subjects.append(make_subject_grade("musica", [7]))
        assert record.has_valid_grades

    @pytest.mark.parametrize(
        "system, periods",
        [("trimestral", 3), ("semestral", 2), ("annual", 1)],
    )
    def test_period_count(self, system, periods):
        """Grading systems define the number of period slots"""
        assert GradingSystem(system).period_count == periods
