"""
Checkers for bounded counts such as gap years and active backlogs

A missing candidate count is read as zero.
"""
from typing import Any, Iterable

from ..models.verdict import FieldVerdict
from ..utils.normalizer import display_value, is_missing, is_no_restriction, normalize, parse_int
from .base import requirement_text

GAP_YEARS_SENTINELS = frozenset({"NOT APPLICABLE", "NA", "APPLICABLE", "YES", "ALLOWED"})
BACKLOGS_SENTINELS = frozenset({"NOT APPLICABLE", "NA", "APPLICABLE"})
ZERO_SENTINELS = frozenset({"NO", "NONE", "0", "NOT ALLOWED"})
PERMISSIVE_VALUES = frozenset({"YES", "ALLOWED"})


def check_count(
    field: str,
    noun: str,
    user_value: Any,
    requirement: Any,
    sentinels: Iterable[str],
    default_requirement: str,
) -> FieldVerdict:
    """
    Check a candidate count against "no/none", a numeric cap, or no restriction

    Args:
        field: Display label
        noun: Counted thing used in requirement text, e.g. "gap years"
        user_value: Candidate's count
        requirement: Raw or parsed exam requirement
        sentinels: Values meaning no restriction for this field
        default_requirement: Requirement text shown when the exam leaves the field empty

    Returns:
        FieldVerdict
    """
    text = requirement_text(requirement)
    if is_no_restriction(text, sentinels):
        return FieldVerdict(
            field=field,
            user_value=display_value(user_value),
            exam_requirement=text or default_requirement,
            eligible=True,
        )

    count = parse_int(user_value, 0)
    requirement_upper = normalize(text)
    if requirement_upper in ZERO_SENTINELS:
        return FieldVerdict(
            field=field,
            user_value="0" if is_missing(user_value) else display_value(user_value),
            exam_requirement=f"No {noun} allowed",
            eligible=count == 0,
        )

    cap = parse_int(text)
    if cap is not None:
        return FieldVerdict(
            field=field,
            user_value=str(count),
            exam_requirement=f"Maximum {cap} {noun}",
            eligible=count <= cap,
        )

    if requirement_upper in PERMISSIVE_VALUES:
        return FieldVerdict(
            field=field,
            user_value=display_value(user_value),
            exam_requirement=f"{noun.capitalize()} allowed",
            eligible=True,
        )

    return FieldVerdict(field=field, user_value=display_value(user_value), exam_requirement=text, eligible=True)


def check_gap_years(user_value: Any, requirement: Any) -> FieldVerdict:
    return check_count("Gap Years", "gap years", user_value, requirement, GAP_YEARS_SENTINELS, "Allowed")


def check_active_backlogs(user_value: Any, requirement: Any) -> FieldVerdict:
    return check_count("Active Backlogs", "backlogs", user_value, requirement, BACKLOGS_SENTINELS, "Not Applicable")
