"""
Checkers for numeric minimum or range requirements
"""
from typing import Any, Iterable

from ..models.verdict import FieldVerdict
from ..utils.normalizer import (
    NOT_SPECIFIED,
    display_value,
    format_number,
    is_missing,
    is_no_restriction,
    parse_float,
    parse_range,
)
from .base import requirement_text

BODY_SENTINELS = frozenset({"NOT APPLICABLE", "NA", "ANY"})
WORK_EXPERIENCE_SENTINELS = frozenset({"NOT REQUIRED", "NOT APPLICABLE", "NA", "0"})


def check_threshold(
    field: str,
    unit: str,
    user_value: Any,
    requirement: Any,
    sentinels: Iterable[str] = BODY_SENTINELS,
    default_requirement: str = "Not Applicable",
) -> FieldVerdict:
    """
    Check a value against a minimum ("50") or an inclusive range ("50-80", "50 to 80")

    Non-numeric candidate input and unparsable requirements both resolve as eligible.

    Args:
        field: Display label
        unit: Unit appended to displayed values
        user_value: Candidate's value
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
            user_value=display_value(user_value, unit),
            exam_requirement=text or default_requirement,
            eligible=True,
        )
    if is_missing(user_value):
        return FieldVerdict(field=field, user_value=NOT_SPECIFIED, exam_requirement=text, eligible=False)

    user_number = parse_float(user_value)
    if user_number is None:
        return FieldVerdict(
            field=field,
            user_value=display_value(user_value),
            exam_requirement=text,
            eligible=True,
            reason=f"Could not read a number from '{user_value}'",
        )
    shown = f"{format_number(user_number)} {unit}"

    bounds = parse_range(text)
    if bounds is not None:
        low, high = bounds
        return FieldVerdict(
            field=field,
            user_value=shown,
            exam_requirement=f"{format_number(low)} - {format_number(high)} {unit}",
            eligible=low <= user_number <= high,
        )

    minimum = parse_float(text)
    if minimum is not None:
        return FieldVerdict(
            field=field,
            user_value=shown,
            exam_requirement=f"Minimum {format_number(minimum)} {unit}",
            eligible=user_number >= minimum,
        )

    return FieldVerdict(field=field, user_value=shown, exam_requirement=text, eligible=True)


def check_weight(user_value: Any, requirement: Any) -> FieldVerdict:
    return check_threshold("Weight (kg)", "kg", user_value, requirement)


def check_height(user_value: Any, requirement: Any) -> FieldVerdict:
    return check_threshold("Height (cm)", "cm", user_value, requirement)


def check_work_experience(user_value: Any, requirement: Any) -> FieldVerdict:
    return check_threshold(
        "Work Experience",
        "years",
        user_value,
        requirement,
        sentinels=WORK_EXPERIENCE_SENTINELS,
        default_requirement="Not Required",
    )
