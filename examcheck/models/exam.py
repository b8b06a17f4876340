"""
Pydantic models for resolved exam records
"""
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .education import EducationRequirement
from .requirement import Requirement, RequirementField, ScalarRequirement, SessionKeyedRequirement

FLAT_DIVISION = "ALL"
NO_SESSION = "N/A"

# Division synonyms in detection priority order
DIVISION_KEYS = ("academies", "posts", "divisions", "departments", "branches", "courses")

# Fields whose values may be keyed by exam session, in lookup order
SESSION_FIELDS = (
    "between_dob",
    "between_age",
    "minimum_dob",
    "maximum_dob",
    "starting_age",
    "ending_age",
    "no_age_limit",
)

REQUIREMENT_FIELDS = (
    "gender",
    "marital_status",
    "pwd_status",
    "caste_category",
    "nationality",
    "domicile",
    "age_criteria_type",
    *SESSION_FIELDS,
    "highest_education_qualification",
    "current_employment_status",
    "gap_years_allowed",
    "active_backlogs_allowed",
    "ncc_wing",
    "ncc_certificate",
    "ncc_certificate_grade",
    "weight_kg",
    "height_cm",
    "vision_eyesight",
    "work_experience_years",
    "sports_quota_eligibility",
    "cpl_holder",
    "ex_servicemen_status",
    "language_proficiency",
    "driving_license_type",
)

DISPLAY_FIELDS = (
    "full_form",
    "exam_level",
    "exam_sector",
    "exam_target",
    "exam_frequency_year",
    "conducting_body",
    "exam_tiers",
    "exam_subjects",
    "exam_pattern",
    "mode_of_exam",
    "exam_duration",
    "total_marks",
    "number_of_questions",
    "marking_scheme",
    "paper_medium",
    "exam_date",
)


class RequirementSet(BaseModel):
    """Requirements of one evaluation unit (a flat exam or a single division)"""
    requirements: Dict[str, RequirementField] = Field(default_factory=dict)
    education: Optional[EducationRequirement] = Field(None, description="Per-level course, subject and marks rules")

    def get(self, field: str) -> Requirement:
        """Requirement for a field, defaulting to no restriction when the record omits it"""
        return self.requirements.get(field) or ScalarRequirement()

    def sessions(self) -> List[str]:
        """Session keys declared by the first session-keyed age/DOB field"""
        for field in SESSION_FIELDS:
            requirement = self.requirements.get(field)
            if isinstance(requirement, SessionKeyedRequirement) and requirement.sessions:
                return list(requirement.sessions)
        return []


class ExamMetadata(BaseModel):
    """Descriptive fields shared by flat and divisioned exams"""
    exam_code: str = Field(..., description="Stable exam identifier")
    exam_name: str = Field("", description="Official exam name")
    exam_label: str = Field("", description="Short label shown in listings")
    conducting_body: str = Field("", description="Body conducting the exam")
    exam_level: str = Field("", description="National, state, etc.")
    display_details: Dict[str, Any] = Field(default_factory=dict, description="Display-only exam details")

    model_config = ConfigDict(frozen=True)


class FlatExam(ExamMetadata):
    """Exam whose requirements apply to every candidate"""
    kind: Literal["flat"] = "flat"
    requirements: RequirementSet = Field(default_factory=RequirementSet)

    def units(self) -> List[Tuple[str, RequirementSet]]:
        return [(FLAT_DIVISION, self.requirements)]

    def division_names(self) -> List[str]:
        return []


class DivisionedExam(ExamMetadata):
    """Exam split into academies, posts or branches, each with its own requirements"""
    kind: Literal["divisioned"] = "divisioned"
    division_key: str = Field(..., description="Record key the divisions were read from")
    divisions: Dict[str, RequirementSet] = Field(default_factory=dict)

    def units(self) -> List[Tuple[str, RequirementSet]]:
        return list(self.divisions.items())

    def division_names(self) -> List[str]:
        return list(self.divisions)


ExamRecord = Union[FlatExam, DivisionedExam]


class ExamInfo(BaseModel):
    """Listing entry for an exam in the corpus"""
    exam_code: str
    exam_name: str
    exam_label: str
    conducting_body: str = ""
    exam_level: str = ""
    is_divisioned: bool = False
    division_key: Optional[str] = None
    divisions: List[str] = Field(default_factory=list)
    display_details: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "exam_code": "NDA",
                "exam_name": "National Defence Academy and Naval Academy Examination",
                "exam_label": "NDA",
                "conducting_body": "UPSC",
                "exam_level": "National",
                "is_divisioned": True,
                "division_key": "academies",
                "divisions": ["ARMY", "NAVY", "AIR FORCE"],
                "display_details": {"exam_frequency_year": "Twice a year"}
            }
        }
    )
