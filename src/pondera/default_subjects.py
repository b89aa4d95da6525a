"""
Default subject catalog for Brazilian high school (Ensino Médio)

Each year gets its own copy of the twelve core subjects; electives and AP
subjects are shared by all three years.
"""

import re
import unicodedata
from typing import List

from .data_models import Subject, SubjectGrade, SubjectLevel, SubjectType

YEARS = (1, 2, 3)

CORE_SUBJECT_NAMES = [
    "Língua Portuguesa",
    "Matemática",
    "História",
    "Geografia",
    "Física",
    "Química",
    "Biologia",
    "Língua Inglesa",
    "Educação Física",
    "Artes",
    "Filosofia",
    "Sociologia",
]

# The "essential subjects" shortcut keeps only these
ESSENTIAL_SUBJECT_NAMES = frozenset(CORE_SUBJECT_NAMES)

ELECTIVE_SUBJECTS = [
    Subject(id="espanhol", name="Língua Espanhola", type=SubjectType.ELECTIVE),
    Subject(id="frances", name="Língua Francesa", type=SubjectType.ELECTIVE),
    Subject(id="alemao", name="Língua Alemã", type=SubjectType.ELECTIVE),
    Subject(id="italiano", name="Língua Italiana", type=SubjectType.ELECTIVE),
    Subject(id="empreendedorismo", name="Empreendedorismo", type=SubjectType.ELECTIVE),
    Subject(id="robotica", name="Robótica", type=SubjectType.ELECTIVE),
    Subject(id="teatro", name="Teatro", type=SubjectType.ELECTIVE),
    Subject(id="musica", name="Música", type=SubjectType.ELECTIVE),
]

AP_SUBJECTS = [
    Subject(id="matematica-ap", name="Matemática (AP)", level=SubjectLevel.AP),
    Subject(id="fisica-ap", name="Física (AP)", level=SubjectLevel.AP),
    Subject(id="quimica-ap", name="Química (AP)", level=SubjectLevel.AP),
    Subject(id="biologia-ap", name="Biologia (AP)", level=SubjectLevel.AP),
    Subject(id="historia-ap", name="História (AP)", level=SubjectLevel.AP),
    Subject(id="ingles-ap", name="Língua Inglesa (AP)", level=SubjectLevel.AP),
]


def slugify(name: str) -> str:
    """'Língua Portuguesa' -> 'lingua-portuguesa'"""
    ascii_name = (
        unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    )
    return re.sub(r"[^a-z0-9]+", "-", ascii_name.lower()).strip("-")


def core_subjects_for_year(year: int) -> List[Subject]:
    return [
        Subject(id=f"{year}-{slugify(name)}", name=name, type=SubjectType.CORE)
        for name in CORE_SUBJECT_NAMES
    ]


def _generate_all_default_subjects() -> List[Subject]:
    subjects: List[Subject] = []
    for year in YEARS:
        subjects.extend(core_subjects_for_year(year))
    return subjects + ELECTIVE_SUBJECTS + AP_SUBJECTS


DEFAULT_SUBJECTS: List[Subject] = _generate_all_default_subjects()


def get_subjects_for_year(year: int) -> List[Subject]:
    """That year's core subjects plus every elective and AP subject"""
    prefix = f"{year}-"
    return [
        subject
        for subject in DEFAULT_SUBJECTS
        if subject.id.startswith(prefix)
        or subject.type == SubjectType.ELECTIVE
        or subject.level == SubjectLevel.AP
    ]


def create_subject_grades(
    subjects: List[Subject], period_count: int = 0
) -> List[SubjectGrade]:
    """
    Wrap subjects in SubjectGrade records with no grades entered

    Args:
        subjects: Subjects to wrap
        period_count: Number of blank period slots to create

    Returns:
        One SubjectGrade per subject
    """
    return [
        SubjectGrade(subject=subject.model_copy(), grades=[None] * period_count)
        for subject in subjects
    ]

