"""
Helpers shared by the field checkers
"""
from typing import Any, Iterable, List, Optional

from ..models.requirement import ScalarRequirement, SessionKeyedRequirement, parse_requirement
from ..models.verdict import FieldVerdict
from ..utils.normalizer import NOT_SPECIFIED, display_value, is_missing, is_no_restriction, normalize, parse_list


def requirement_text(requirement: Any, session: Optional[str] = None) -> str:
    """
    Reduce a requirement to the text a scalar checker compares against

    Session-keyed values resolve to the requested (or first) session. Shapes a
    scalar field cannot carry, such as a gender-keyed weight, mean no restriction.
    """
    parsed = parse_requirement(requirement)
    if isinstance(parsed, ScalarRequirement):
        return parsed.value.strip()
    if isinstance(parsed, SessionKeyedRequirement):
        return (parsed.for_session(session) or "").strip()
    return ""


def loose_match(allowed: Iterable[str], candidates: Iterable[str]) -> bool:
    """True when any allowed token and any candidate token contain one another"""
    candidates = [c for c in candidates if c]
    for token in allowed:
        for candidate in candidates:
            if token in candidate or candidate in token:
                return True
    return False


def user_tokens(user_value: Any) -> List[str]:
    """Normalized tokens of a user value that may be a list or comma string"""
    if isinstance(user_value, (list, tuple)):
        return parse_list(list(user_value))
    return parse_list(user_value)


def check_loose_allow_list(
    field: str,
    user_value: Any,
    requirement: Any,
    sentinels: Iterable[str],
    default_requirement: str = "Not Applicable",
    expand=None,
    split_user: bool = False,
) -> FieldVerdict:
    """
    Shared rule for loosely matched allow-list fields

    Args:
        field: Display label
        user_value: Candidate's value
        requirement: Raw or parsed exam requirement
        sentinels: Values meaning no restriction for this field
        default_requirement: Requirement text shown when the exam leaves the field empty
        expand: Optional callable returning extra spellings of the user's value
        split_user: Treat the user value as a list of alternatives

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
    if is_missing(user_value):
        return FieldVerdict(field=field, user_value=NOT_SPECIFIED, exam_requirement=text, eligible=False)

    candidates = user_tokens(user_value) if split_user else [normalize(user_value)]
    if expand is not None:
        candidates = expand(candidates)
    eligible = loose_match(parse_list(text), candidates)
    return FieldVerdict(field=field, user_value=display_value(user_value), exam_requirement=text, eligible=eligible)

