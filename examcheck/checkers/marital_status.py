"""
Marital status checker

Exams either publish one allow-list for everybody or a separate list per
gender, e.g. {"MALE": "UNMARRIED", "FEMALE": "UNMARRIED, WIDOW"}. Marital
status values are closed-vocabulary tags so membership is exact.
"""
from typing import Any, Dict, Optional

from ..models.requirement import GenderKeyedRequirement, ScalarRequirement, parse_requirement
from ..models.verdict import FieldVerdict
from ..utils.normalizer import NOT_SPECIFIED, display_value, normalize, parse_list

FIELD = "Marital Status"

MARITAL_STATUS_SENTINELS = frozenset({"ALL APPLICABLE", "NOT APPLICABLE", "NA", "ANY"})


def _match(user_status: Any, requirement_value: str) -> Dict[str, Any]:
    normalized_requirement = normalize(requirement_value)
    if normalized_requirement == "" or normalized_requirement in ("ALL APPLICABLE", "ANY"):
        return {"eligible": True, "reason": "All marital statuses are eligible"}
    if normalized_requirement in MARITAL_STATUS_SENTINELS:
        return {"eligible": True, "reason": "Marital status criterion not applicable"}

    normalized_user = normalize(user_status)
    if not normalized_user:
        return {"eligible": False, "reason": "User marital status not specified"}

    allowed = parse_list(requirement_value)
    if normalized_user in allowed:
        return {"eligible": True, "reason": f"Marital status {user_status} is eligible"}
    return {
        "eligible": False,
        "reason": f"Marital status {user_status} is not eligible. Allowed: {', '.join(allowed)}",
    }


def check_marital_status(user_value: Any, requirement: Any, gender: Optional[str] = None) -> FieldVerdict:
    """
    Check a candidate's marital status

    Args:
        user_value: Candidate's marital status
        requirement: Allow-list string or gender-keyed mapping
        gender: Candidate's gender, needed for gender-keyed requirements

    Returns:
        FieldVerdict carrying the requirement resolved for the candidate's gender
    """
    parsed = parse_requirement(requirement)

    if isinstance(parsed, GenderKeyedRequirement):
        user_gender = display_value(gender)
        if not normalize(gender):
            return FieldVerdict(
                field=FIELD,
                user_value=display_value(user_value),
                exam_requirement=parsed.display() or "Gender-specific",
                eligible=False,
                reason="User gender not specified (required for gender-specific marital status check)",
                gender_requirement="Unknown",
                user_gender=NOT_SPECIFIED,
            )
        resolved = parsed.lookup(gender)
        if resolved is None:
            return FieldVerdict(
                field=FIELD,
                user_value=display_value(user_value),
                exam_requirement="Not specified for this gender",
                eligible=True,
                reason=f"No marital status restriction for {user_gender}",
                gender_requirement="Not specified for this gender",
                user_gender=user_gender,
            )
        outcome = _match(user_value, resolved)
        return FieldVerdict(
            field=FIELD,
            user_value=display_value(user_value),
            exam_requirement=resolved or "No restriction",
            eligible=outcome["eligible"],
            reason=outcome["reason"],
            gender_requirement=resolved,
            user_gender=user_gender,
        )

    value = parsed.value if isinstance(parsed, ScalarRequirement) else ""
    outcome = _match(user_value, value)
    return FieldVerdict(
        field=FIELD,
        user_value=display_value(user_value),
        exam_requirement=value.strip() or "No restriction",
        eligible=outcome["eligible"],
        reason=outcome["reason"],
    )
