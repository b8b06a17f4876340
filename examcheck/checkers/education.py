"""
Education detail checker

Runs when an exam carries an ``education_levels`` block. Every level from the
exam's minimum qualification down to 10th that the block names is checked for
course, subject and marks; diploma and 12th are then checked as equivalent
alternatives. Marks thresholds are looked up by caste category, and PWD
candidates use the exam's PWD table when it has one.
"""
from typing import Any, Dict, List, Mapping, Optional

from ..models.education import (
    EDUCATION_LEVELS,
    WILDCARD_OPTIONS,
    EducationLevelRule,
    EducationRequirement,
    level_name,
)
from ..models.user import EducationDetail
from ..models.verdict import FieldVerdict
from ..utils.normalizer import NOT_SPECIFIED, display_value, format_number, is_missing, normalize, parse_float
from .base import requirement_text
from .categorical import canonical_caste, education_rank

FIELD = "Education Details"

DEFAULT_PASS_MARKS = "33%"
GENERAL_CATEGORY_KEYS = ("GEN", "GENERAL", "UR")

EducationInput = Optional[Mapping[str, Any]]


def required_levels(highest_requirement: Any) -> List[str]:
    """Level keys to check for an exam's minimum qualification, highest first"""
    rank = education_rank(requirement_text(highest_requirement))
    return [key for key, value in EDUCATION_LEVELS.items() if value <= rank]


def _detail(education: EducationInput, level_key: str) -> EducationDetail:
    detail = (education or {}).get(level_key)
    if isinstance(detail, EducationDetail):
        return detail
    if isinstance(detail, Mapping):
        return EducationDetail(**detail)
    return EducationDetail()


def _option_matches(user_value: Any, options: List[str]) -> bool:
    user = normalize(user_value)
    return any(option == user or option in user or user in option or option == "OTHER" for option in options)


def check_education_course(user_course: Any, rule: Optional[EducationLevelRule], level_key: str) -> FieldVerdict:
    field = f"{level_name(level_key)} Course"
    name = level_name(level_key)
    if rule is None or not rule.courses or WILDCARD_OPTIONS.intersection(rule.courses):
        return FieldVerdict(
            field=field,
            user_value=display_value(user_course),
            exam_requirement="All courses accepted",
            eligible=True,
            reason=f"All courses are accepted for {name}",
        )
    if is_missing(user_course):
        return FieldVerdict(
            field=field,
            user_value=NOT_SPECIFIED,
            exam_requirement=", ".join(rule.courses),
            eligible=False,
            reason=f"Course not specified for {name}",
        )
    eligible = _option_matches(user_course, rule.courses)
    return FieldVerdict(
        field=field,
        user_value=display_value(user_course),
        exam_requirement=", ".join(rule.courses),
        eligible=eligible,
        reason=(
            f"Course {user_course} is accepted for {name}"
            if eligible
            else f"Course {user_course} is not in the allowed list for {name}"
        ),
    )


def check_education_subject(
    user_subject: Any, rule: Optional[EducationLevelRule], level_key: str, user_course: Any = None
) -> FieldVerdict:
    """Subjects may be listed per course; the candidate's course picks the list"""
    field = f"{level_name(level_key)} Subject"
    name = level_name(level_key)
    options = rule.subjects_for(user_course) if rule is not None else []
    if not options or WILDCARD_OPTIONS.intersection(options):
        return FieldVerdict(
            field=field,
            user_value=display_value(user_subject),
            exam_requirement="All subjects accepted",
            eligible=True,
            reason=f"All subjects are accepted for {name}",
        )
    if is_missing(user_subject):
        return FieldVerdict(
            field=field,
            user_value=NOT_SPECIFIED,
            exam_requirement=", ".join(options),
            eligible=False,
            reason=f"Subject not specified for {name}",
        )
    eligible = _option_matches(user_subject, options)
    return FieldVerdict(
        field=field,
        user_value=display_value(user_subject),
        exam_requirement=", ".join(options),
        eligible=eligible,
        reason=(
            f"Subject {user_subject} is accepted for {name}"
            if eligible
            else f"Subject {user_subject} is not in the allowed list for {name}"
        ),
    )


def marks_for_category(table: Dict[str, str], caste_category: Any) -> str:
    """Minimum marks for a caste category, falling back to the general category and then 33%"""
    wanted = canonical_caste(caste_category or "GEN")
    for category, marks in table.items():
        if canonical_caste(category) == wanted:
            return marks
    for category in GENERAL_CATEGORY_KEYS:
        if category in table:
            return table[category]
    return DEFAULT_PASS_MARKS


def check_marks_percentage(
    user_marks: Any,
    rule: Optional[EducationLevelRule],
    level_key: str,
    caste_category: Any = None,
    pwd: bool = False,
    pwd_marks: Optional[Dict[str, str]] = None,
) -> FieldVerdict:
    """
    Check a candidate's marks at one level

    Args:
        user_marks: Marks percentage, e.g. 72.5 or "72.5%"
        rule: Exam rule for the level
        level_key: Level being checked
        caste_category: Candidate's category, GEN when missing
        pwd: Whether the candidate is a person with disability
        pwd_marks: Category -> minimum marks for PWD candidates

    Returns:
        FieldVerdict; unparsable percentages pass
    """
    field = f"{level_name(level_key)} Marks"
    name = level_name(level_key)
    if pwd and pwd_marks:
        table, source = pwd_marks, "PWD"
    elif rule is not None and rule.marks_percentage:
        table, source = rule.marks_percentage, "Standard"
    else:
        return FieldVerdict(
            field=field,
            user_value=display_value(user_marks),
            exam_requirement="No minimum percentage",
            eligible=True,
            reason=f"No specific marks requirement for {name}",
        )

    category = normalize(caste_category) or "GEN"
    required = marks_for_category(table, caste_category)
    if is_missing(user_marks):
        return FieldVerdict(
            field=field,
            user_value=NOT_SPECIFIED,
            exam_requirement=f"{required} ({category}, {source})",
            eligible=False,
            reason=f"Marks percentage not provided for {name}",
        )

    user_percent = parse_float(user_marks)
    required_percent = parse_float(required)
    if user_percent is None or required_percent is None:
        return FieldVerdict(
            field=field,
            user_value=display_value(user_marks),
            exam_requirement=f"{required} ({category}, {source})",
            eligible=True,
            reason="Unable to parse percentage values",
        )

    shown_user = f"{format_number(user_percent)}%"
    shown_required = f"{format_number(required_percent)}%"
    eligible = user_percent >= required_percent
    return FieldVerdict(
        field=field,
        user_value=shown_user,
        exam_requirement=f"{shown_required} ({category}, {source})",
        eligible=eligible,
        reason=(
            f"Your marks ({shown_user}) meet the {source} requirement ({shown_required}) for {name}"
            if eligible
            else f"Your marks ({shown_user}) are below the {source} requirement ({shown_required}) for {name}"
        ),
    )


def check_diploma_12th_equivalency(
    education: EducationInput, requirement: EducationRequirement
) -> Optional[FieldVerdict]:
    """Diploma and 12th stand in for each other unless the exam names both; None when it names neither"""
    has_diploma = not is_missing(_detail(education, "diploma").course)
    has_12th = not is_missing(_detail(education, "12th_higher_secondary").course)
    needs_diploma = "diploma" in requirement.levels
    needs_12th = "12th_higher_secondary" in requirement.levels
    shown = f"Diploma: {'Yes' if has_diploma else 'No'}, 12th: {'Yes' if has_12th else 'No'}"

    if needs_diploma and needs_12th:
        eligible = has_diploma and has_12th
        return FieldVerdict(
            field="Diploma / 12th",
            user_value=shown,
            exam_requirement="Both Diploma and 12th required",
            eligible=eligible,
            reason=(
                "You have both Diploma and 12th qualifications"
                if eligible
                else "Both Diploma and 12th qualifications are required"
            ),
        )
    if needs_diploma or needs_12th:
        eligible = has_diploma or has_12th
        return FieldVerdict(
            field="Diploma / 12th",
            user_value=shown,
            exam_requirement="Diploma or 12th (equivalent)",
            eligible=eligible,
            reason=(
                "You have the required qualification (Diploma/12th)"
                if eligible
                else "Either Diploma or 12th qualification is required"
            ),
        )
    return None


def check_education_details(
    education: EducationInput,
    requirement: Optional[EducationRequirement],
    highest_requirement: Any = None,
    caste_category: Any = None,
    pwd_status: Any = None,
) -> List[FieldVerdict]:
    """
    Check a candidate's per-level education details

    Args:
        education: Level key -> EducationDetail (or plain mapping)
        requirement: Parsed education_levels block of the exam, if any
        highest_requirement: Exam's minimum qualification, which decides the levels checked
        caste_category: Candidate's category for marks thresholds
        pwd_status: Candidate's PWD status; YES selects the PWD marks table

    Returns:
        One verdict per course, subject and marks check, plus the Diploma/12th
        check; a single passing verdict when there is nothing to check
    """
    results: List[FieldVerdict] = []
    if requirement is not None:
        pwd = normalize(pwd_status) == "YES"
        for level_key in required_levels(highest_requirement):
            rule = requirement.levels.get(level_key)
            if rule is None:
                continue
            detail = _detail(education, level_key)
            results.append(check_education_course(detail.course, rule, level_key))
            results.append(check_education_subject(detail.subject, rule, level_key, detail.course))
            results.append(
                check_marks_percentage(
                    detail.marks_percentage, rule, level_key, caste_category, pwd, requirement.pwd_marks_percentage
                )
            )
        equivalency = check_diploma_12th_equivalency(education, requirement)
        if equivalency is not None:
            results.append(equivalency)

    if results:
        return results
    return [
        FieldVerdict(
            field=FIELD,
            user_value=", ".join(education) if education else NOT_SPECIFIED,
            exam_requirement="No specific requirement",
            eligible=True,
            reason="No course, subject or marks requirement for this exam",
        )
    ]
