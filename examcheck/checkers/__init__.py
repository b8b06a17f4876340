"""
Field checkers and the registry the evaluator runs for every division

Each checker is a pure function of the candidate's value and the exam's
requirement and always returns a FieldVerdict; the education rule returns a
list with one verdict per course, subject and marks check.
"""
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Union

from ..models.exam import RequirementSet
from ..models.user import UserProfile
from ..models.verdict import FieldVerdict
from .categorical import (
    check_caste_category,
    check_cpl_holder,
    check_domicile,
    check_ex_servicemen,
    check_gender,
    check_highest_education,
    check_nationality,
    check_pwd_status,
)
from .counts import check_active_backlogs, check_gap_years
from .date_of_birth import AGE_FIELDS, check_date_of_birth
from .education import check_education_details
from .marital_status import check_marital_status
from .membership import (
    check_driving_license,
    check_employment_status,
    check_language_proficiency,
    check_ncc_wing,
    check_sports_quota,
    check_vision,
)
from .ncc import check_ncc_certificate
from .ncc_grade import check_ncc_certificate_grade
from .numeric import check_height, check_weight, check_work_experience


@dataclass(frozen=True)
class EvaluationContext:
    """Per-unit inputs shared by every checker"""
    session: Optional[str] = None
    reference_date: Optional[date] = None
    exam_code: Optional[str] = None


@dataclass(frozen=True)
class FieldRule:
    """Binds a checker to the profile and exam fields it reads"""
    name: str
    run: Callable[[UserProfile, RequirementSet, EvaluationContext], Union[FieldVerdict, List[FieldVerdict]]]


def _simple(name: str, profile_field: str, exam_field: str, checker) -> FieldRule:
    return FieldRule(
        name=name,
        run=lambda profile, requirements, ctx: checker(getattr(profile, profile_field, None), requirements.get(exam_field)),
    )


def _date_of_birth(profile: UserProfile, requirements: RequirementSet, ctx: EvaluationContext) -> FieldVerdict:
    rules = {field: requirements.get(field) for field in ("age_criteria_type", "no_age_limit", *AGE_FIELDS)}
    return check_date_of_birth(
        profile.date_of_birth, rules, session=ctx.session, reference_date=ctx.reference_date, exam_code=ctx.exam_code
    )


def _education_details(profile: UserProfile, requirements: RequirementSet, ctx: EvaluationContext) -> List[FieldVerdict]:
    return check_education_details(
        profile.education_levels,
        requirements.education,
        requirements.get("highest_education_qualification"),
        caste_category=profile.caste_category,
        pwd_status=profile.pwd_status,
    )


FIELD_RULES: List[FieldRule] = [
    _simple("gender", "gender", "gender", check_gender),
    FieldRule(
        "marital_status",
        lambda profile, requirements, ctx: check_marital_status(
            profile.marital_status, requirements.get("marital_status"), profile.gender
        ),
    ),
    _simple("pwd_status", "pwd_status", "pwd_status", check_pwd_status),
    _simple("caste_category", "caste_category", "caste_category", check_caste_category),
    _simple("nationality", "nationality", "nationality", check_nationality),
    FieldRule(
        "domicile",
        lambda profile, requirements, ctx: check_domicile(
            profile.domicile, requirements.get("domicile"), profile.nationality
        ),
    ),
    FieldRule("date_of_birth", _date_of_birth),
    _simple(
        "highest_education_qualification",
        "highest_education_qualification",
        "highest_education_qualification",
        check_highest_education,
    ),
    FieldRule("education_details", _education_details),
    _simple("current_employment_status", "current_employment_status", "current_employment_status", check_employment_status),
    _simple("gap_years", "gap_years", "gap_years_allowed", check_gap_years),
    _simple("active_backlogs", "active_backlogs", "active_backlogs_allowed", check_active_backlogs),
    _simple("ncc_wing", "ncc_wing", "ncc_wing", check_ncc_wing),
    FieldRule(
        "ncc_certificate",
        lambda profile, requirements, ctx: check_ncc_certificate(
            profile.ncc_certificate, requirements.get("ncc_certificate"), profile.ncc_wing
        ),
    ),
    FieldRule(
        "ncc_certificate_grade",
        lambda profile, requirements, ctx: check_ncc_certificate_grade(
            profile.ncc_certificate_grade, requirements.get("ncc_certificate_grade"), profile.ncc_certificate
        ),
    ),
    _simple("weight_kg", "weight_kg", "weight_kg", check_weight),
    _simple("height_cm", "height_cm", "height_cm", check_height),
    _simple("vision_eyesight", "vision_eyesight", "vision_eyesight", check_vision),
    _simple("work_experience_years", "work_experience_years", "work_experience_years", check_work_experience),
    _simple("sports_quota", "sports_quota", "sports_quota_eligibility", check_sports_quota),
    _simple("cpl_holder", "cpl_holder", "cpl_holder", check_cpl_holder),
    _simple("ex_servicemen_status", "ex_servicemen_status", "ex_servicemen_status", check_ex_servicemen),
    _simple("language_proficiency", "language_proficiency", "language_proficiency", check_language_proficiency),
    _simple("driving_license_type", "driving_license_type", "driving_license_type", check_driving_license),
]

__all__ = [
    "EvaluationContext",
    "FieldRule",
    "FIELD_RULES",
    "check_active_backlogs",
    "check_caste_category",
    "check_cpl_holder",
    "check_date_of_birth",
    "check_domicile",
    "check_driving_license",
    "check_education_details",
    "check_employment_status",
    "check_ex_servicemen",
    "check_gap_years",
    "check_gender",
    "check_height",
    "check_highest_education",
    "check_language_proficiency",
    "check_marital_status",
    "check_nationality",
    "check_ncc_certificate",
    "check_ncc_certificate_grade",
    "check_ncc_wing",
    "check_pwd_status",
    "check_sports_quota",
    "check_vision",
    "check_weight",
    "check_work_experience",
]
