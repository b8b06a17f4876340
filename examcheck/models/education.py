"""
Pydantic models for per-level education requirements

An exam's ``education_levels`` block maps a level key to the courses,
subjects and minimum marks accepted at that level:

    {
        "graduation": {
            "course": {"options": ["B.E", "B.TECH", "B.SC"]},
            "subject": {"B.SC": ["PHYSICS", "MATHEMATICS"]},
            "marks_percentage": {"GEN": "60%", "SC": "55%"}
        },
        "12th_higher_secondary": "ALL COURSES"
    }

An empty level places no requirement on that level.
"""
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from ..utils.normalizer import normalize, parse_float, parse_list

# Levels checked in detail, highest first, with their education hierarchy rank
EDUCATION_LEVELS: Dict[str, int] = {
    "graduation": 5,
    "diploma": 4,
    "12th_higher_secondary": 3,
    "10th_secondary": 2,
}

LEVEL_NAMES = {
    "post_doctorate": "POST DOCTORATE",
    "phd": "PHD",
    "post_graduation": "POST GRADUATION",
    "graduation": "GRADUATION",
    "diploma": "DIPLOMA / ITI (POLYTECHNIC, ITI, DPHARM, PGDCA)",
    "12th_higher_secondary": "(12TH) HIGHER SECONDARY",
    "10th_secondary": "(10TH) SECONDARY",
}

WILDCARD_OPTIONS = frozenset({"ALL", "ALL COURSES", "ALL SUBJECTS"})


def level_name(level_key: str) -> str:
    return LEVEL_NAMES.get(level_key, level_key.upper())


class EducationLevelRule(BaseModel):
    """Courses, subjects and marks accepted at one education level"""
    courses: List[str] = Field(default_factory=list, description="Accepted courses; empty accepts any")
    subjects: Dict[str, List[str]] = Field(default_factory=dict, description="Course -> accepted subjects")
    subject_options: List[str] = Field(default_factory=list, description="Subjects accepted for any course")
    marks_percentage: Dict[str, str] = Field(default_factory=dict, description="Caste category -> minimum marks")

    def subjects_for(self, course: Any) -> List[str]:
        """Subjects accepted for a course, falling back to every listed subject"""
        wanted = normalize(course)
        if wanted:
            for key, subjects in self.subjects.items():
                if normalize(key) == wanted:
                    return subjects
        if self.subject_options:
            return self.subject_options
        return [subject for subjects in self.subjects.values() for subject in subjects]


class EducationRequirement(BaseModel):
    """Per-level education requirements of one evaluation unit"""
    levels: Dict[str, EducationLevelRule] = Field(default_factory=dict)
    pwd_marks_percentage: Dict[str, str] = Field(
        default_factory=dict, description="Caste category -> minimum marks for PWD candidates"
    )


def _options(value: Any) -> List[str]:
    if isinstance(value, Mapping):
        return _options(value.get("options"))
    return parse_list(value)


def _marks(value: Any) -> Dict[str, str]:
    if isinstance(value, Mapping):
        return {normalize(category): normalize(marks) for category, marks in value.items() if normalize(marks)}
    marks = normalize(value)
    return {"GEN": marks} if marks else {}


def parse_level_rule(raw: Any) -> EducationLevelRule:
    """Parse one level of an education_levels block; a plain string such as "ALL COURSES" accepts anything"""
    if not isinstance(raw, Mapping):
        return EducationLevelRule()

    subject = raw.get("subject")
    subjects: Dict[str, List[str]] = {}
    subject_options: List[str] = []
    if isinstance(subject, Mapping) and "options" not in subject:
        subjects = {str(course): parse_list(options) for course, options in subject.items()}
    else:
        subject_options = _options(subject)

    return EducationLevelRule(
        courses=_options(raw.get("course") or raw.get("course_stream")),
        subjects=subjects,
        subject_options=subject_options,
        marks_percentage=_marks(raw.get("marks_percentage")),
    )


def parse_education_requirement(levels: Any, pwd_status: Any = None) -> Optional[EducationRequirement]:
    """
    Parse an exam's education_levels block

    Args:
        levels: Raw education_levels mapping
        pwd_status: Raw pwd_status value; a mapping of category -> percentage sets PWD marks

    Returns:
        EducationRequirement, or None when the exam has no education_levels block
    """
    if not isinstance(levels, Mapping) or not levels:
        return None
    parsed = {str(key): parse_level_rule(value) for key, value in levels.items() if value not in (None, "")}
    pwd_marks = {}
    if isinstance(pwd_status, Mapping):
        pwd_marks = {category: marks for category, marks in _marks(pwd_status).items() if parse_float(marks) is not None}
    return EducationRequirement(levels=parsed, pwd_marks_percentage=pwd_marks)
