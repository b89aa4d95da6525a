"""
Unit Tests for the Default Subject Catalog
"""

import pytest

from pondera.data_models import SubjectLevel, SubjectType
from pondera.default_subjects import (
    DEFAULT_SUBJECTS,
    create_subject_grades,
    get_subjects_for_year,
    slugify,
)


class TestCatalog:
    """Tests for the catalog contents"""

    def test_catalog_size(self):
        """Twelve core subjects per year plus shared electives and AP"""
        assert len(DEFAULT_SUBJECTS) == 12 * 3 + 8 + 6

    def test_ids_unique(self):
        ids = [s.id for s in DEFAULT_SUBJECTS]
        assert len(ids) == len(set(ids))

    @pytest.mark.parametrize(
        "name, slug",
        [
            ("Língua Portuguesa", "lingua-portuguesa"),
            ("Educação Física", "educacao-fisica"),
            ("Matemática (AP)", "matematica-ap"),
        ],
    )
    def test_slugify(self, name, slug):
        assert slugify(name) == slug

    def test_subjects_for_year(self):
        """Each year sees only its own core subjects"""
        subjects = get_subjects_for_year(2)
        ids = {s.id for s in subjects}

        assert len(subjects) == 26
        assert "2-matematica" in ids
        assert "1-matematica" not in ids
        assert "robotica" in ids
        assert "fisica-ap" in ids

    def test_ap_subjects_are_core(self):
        """AP subjects count toward the CORE GPA"""
        ap = [s for s in DEFAULT_SUBJECTS if s.level == SubjectLevel.AP]

        assert len(ap) == 6
        assert all(s.type == SubjectType.CORE for s in ap)


class TestCreateSubjectGrades:
    """Tests for create_subject_grades"""

    def test_blank_slots(self):
        grades = create_subject_grades(get_subjects_for_year(1), period_count=3)

        assert len(grades) == 26
        assert all(g.grades == [None, None, None] for g in grades)
        assert all(g.final_grade == 0.0 for g in grades)

    def test_subjects_are_copies(self):
        """Editing a record never touches the shared catalog"""
        subject_grade = create_subject_grades(get_subjects_for_year(1))[0]
        subject_grade.subject.credits = 2.0

        assert subject_grade.grades == []
        assert get_subjects_for_year(1)[0].credits == 1.0
