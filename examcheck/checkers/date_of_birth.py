"""
Age and date-of-birth checker

Exams state age limits in one of several forms selected by
``age_criteria_type``: a minimum or maximum age, an age range, or limits on
the date of birth itself. Any of these values may be keyed by exam session,
e.g. {"2026-I": "02-01-2007 to 01-01-2010", "2026-II": "..."}. Ages are whole
years at the session's reference date.
"""
import re
from datetime import date
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ..models.requirement import ScalarRequirement, SessionKeyedRequirement, parse_requirement, session_reference_marker, session_year
from ..models.verdict import FieldVerdict
from ..utils.normalizer import NOT_SPECIFIED, format_date, format_number, is_missing, normalize, parse_date, parse_float

FIELD = "Date of Birth"

AGE_FIELDS = ("starting_age", "ending_age", "between_age", "minimum_dob", "maximum_dob", "between_dob")
NO_LIMIT_TYPES = ("NO_AGE_LIMIT", "NOT_APPLICABLE", "")

_DATE_LIKE = re.compile(r"\d{2}-\d{2}-\d{4}")
_TO = re.compile(r"\s+to\s+", re.IGNORECASE)


def session_reference_date(session: Optional[str]) -> Optional[date]:
    """
    Cut-off date used for age calculation in a session

    Sessions marked I (or 1) use 1 April of the session year; every other
    session uses 1 August.
    """
    year = session_year(session or "")
    if year is None:
        return None
    if session_reference_marker(session) in ("I", "1"):
        return date(year, 4, 1)
    return date(year, 8, 1)


def calculate_age(dob: date, reference: date) -> int:
    """Completed years between dob and reference"""
    return reference.year - dob.year - ((reference.month, reference.day) < (dob.month, dob.day))


def parse_age_range(value: Any) -> Optional[Tuple[float, float]]:
    """Parse "19 to 25", "19 - 25" or "19-25" into (min, max)"""
    if value is None:
        return None
    text = str(value).strip()
    if _TO.search(text):
        parts = _TO.split(text)
        if len(parts) == 2:
            low, high = parse_float(parts[0]), parse_float(parts[1])
            if low is not None and high is not None:
                return low, high
    if " - " in text:
        parts = text.split(" - ")
        if len(parts) == 2:
            low, high = parse_float(parts[0]), parse_float(parts[1])
            if low is not None and high is not None:
                return low, high
    if "-" in text and not _DATE_LIKE.search(text):
        parts = text.split("-")
        if len(parts) == 2:
            low, high = parse_float(parts[0]), parse_float(parts[1])
            if low is not None and high is not None and low < 100 and high < 100:
                return low, high
    return None


def parse_dob_range(value: Any) -> Optional[Tuple[date, date]]:
    """Parse "DD-MM-YYYY to DD-MM-YYYY" into (earliest, latest)"""
    if not isinstance(value, str):
        return None
    parts = _TO.split(value.strip())
    if len(parts) != 2:
        return None
    start, end = parse_date(parts[0]), parse_date(parts[1])
    if start is None or end is None:
        return None
    return start, end


class _AgeContext:
    """Resolved inputs for one date-of-birth check"""

    def __init__(self, rules: Mapping[str, Any], dob: date, reference: date, session: Optional[str], exam_code: Optional[str]):
        self.rules = rules
        self.dob = dob
        self.age = calculate_age(dob, reference)
        self.session = session
        self.exam_code = exam_code
        self.shown = f"DOB: {format_date(dob)} (Age: {self.age} years)"

    def value(self, field: str) -> Optional[str]:
        return resolve_session_value(self.rules.get(field), self.session, self.exam_code)

    def verdict(self, requirement: str, eligible: bool, reason: str) -> FieldVerdict:
        return FieldVerdict(field=FIELD, user_value=self.shown, exam_requirement=requirement, eligible=eligible, reason=reason)


def resolve_session_value(raw: Any, session: Optional[str] = None, exam_code: Optional[str] = None) -> Optional[str]:
    """Requirement text for a session, or None when the field is empty"""
    parsed = parse_requirement(raw)
    if isinstance(parsed, SessionKeyedRequirement):
        resolved = parsed.for_session(session, exam_code)
    elif isinstance(parsed, ScalarRequirement):
        resolved = parsed.value
    else:
        resolved = None
    if resolved is None or not resolved.strip():
        return None
    return resolved.strip()


def _starting_age(ctx: _AgeContext) -> Optional[FieldVerdict]:
    value = ctx.value("starting_age")
    minimum = parse_float(value)
    if minimum is None:
        return None
    shown = format_number(minimum)
    if ctx.age >= minimum:
        return ctx.verdict(f"Minimum age: {shown} years", True, f"Your age ({ctx.age} years) meets the minimum age requirement of {shown} years")
    return ctx.verdict(f"Minimum age: {shown} years", False, f"Your age ({ctx.age} years) is below the minimum age requirement of {shown} years")


def _ending_age(ctx: _AgeContext) -> Optional[FieldVerdict]:
    value = ctx.value("ending_age")
    maximum = parse_float(value)
    if maximum is None:
        return None
    shown = format_number(maximum)
    if ctx.age <= maximum:
        return ctx.verdict(f"Maximum age: {shown} years", True, f"Your age ({ctx.age} years) is within the maximum age limit of {shown} years")
    return ctx.verdict(f"Maximum age: {shown} years", False, f"Your age ({ctx.age} years) exceeds the maximum age limit of {shown} years")


def _between_age(ctx: _AgeContext) -> Optional[FieldVerdict]:
    bounds = parse_age_range(ctx.value("between_age"))
    if bounds is None:
        return None
    low, high = bounds
    requirement = f"Age between {format_number(low)} and {format_number(high)} years"
    if ctx.age < low:
        return ctx.verdict(requirement, False, f"Your age ({ctx.age} years) is below the minimum age of {format_number(low)} years")
    if ctx.age > high:
        return ctx.verdict(requirement, False, f"Your age ({ctx.age} years) exceeds the maximum age of {format_number(high)} years")
    return ctx.verdict(requirement, True, f"Your age ({ctx.age} years) is within the eligible range")


def _minimum_dob(ctx: _AgeContext) -> Optional[FieldVerdict]:
    value = ctx.value("minimum_dob")
    limit = parse_date(value)
    if limit is None:
        return None
    requirement = f"Born on or before: {format_date(limit)}"
    if ctx.dob <= limit:
        return ctx.verdict(requirement, True, f"Your date of birth ({format_date(ctx.dob)}) is on or before {format_date(limit)}")
    return ctx.verdict(requirement, False, f"Your date of birth ({format_date(ctx.dob)}) is after {format_date(limit)}")


def _maximum_dob(ctx: _AgeContext) -> Optional[FieldVerdict]:
    value = ctx.value("maximum_dob")
    limit = parse_date(value)
    if limit is None:
        return None
    requirement = f"Born on or after: {format_date(limit)}"
    if ctx.dob >= limit:
        return ctx.verdict(requirement, True, f"Your date of birth ({format_date(ctx.dob)}) is on or after {format_date(limit)}")
    return ctx.verdict(requirement, False, f"Your date of birth ({format_date(ctx.dob)}) is before {format_date(limit)}")


def _between_dob(ctx: _AgeContext) -> Optional[FieldVerdict]:
    bounds = parse_dob_range(ctx.value("between_dob"))
    if bounds is None:
        return None
    start, end = bounds
    requirement = f"DOB between: {format_date(start)} to {format_date(end)}"
    if ctx.dob < start:
        return ctx.verdict(requirement, False, f"Your date of birth ({format_date(ctx.dob)}) is before the eligible range")
    if ctx.dob > end:
        return ctx.verdict(requirement, False, f"Your date of birth ({format_date(ctx.dob)}) is after the eligible range")
    return ctx.verdict(requirement, True, f"Your date of birth ({format_date(ctx.dob)}) falls within the eligible range")


# Criteria type -> checks tried in order; the first one with a usable value decides
CRITERIA: Dict[str, Tuple[Callable[[_AgeContext], Optional[FieldVerdict]], ...]] = {
    "STARTING_AGE": (_starting_age,),
    "MIN_AGE": (_starting_age,),
    "ENDING_AGE": (_ending_age, _minimum_dob),
    "MAX_AGE": (_ending_age, _minimum_dob),
    "BETWEEN_AGE": (_between_age, _between_dob),
    "MINIMUM_DOB": (_minimum_dob,),
    "MAXIMUM_DOB": (_maximum_dob,),
    "BETWEEN_DOB": (_between_dob,),
}

AUTO_DETECT = (_between_dob, _minimum_dob, _maximum_dob, _between_age, _starting_age, _ending_age)


def has_age_requirement(rules: Mapping[str, Any]) -> bool:
    return any(resolve_session_value(rules.get(field)) for field in AGE_FIELDS)


def check_date_of_birth(
    user_value: Any,
    rules: Mapping[str, Any],
    session: Optional[str] = None,
    reference_date: Optional[date] = None,
    exam_code: Optional[str] = None,
) -> FieldVerdict:
    """
    Check a candidate's date of birth against an exam's age rules

    Args:
        user_value: Date of birth as DD-MM-YYYY, DD.MM.YYYY or YYYY-MM-DD
        rules: Mapping holding age_criteria_type and the age/DOB fields, raw or parsed
        session: Exam session used to pick session-keyed values and the age cut-off date
        reference_date: Cut-off date used when no session applies (defaults to today)
        exam_code: Exam code used when matching prefixed session keys

    Returns:
        FieldVerdict
    """
    criteria = normalize(resolve_session_value(rules.get("age_criteria_type")) or "")
    criteria = re.sub(r"\s+", "_", criteria)

    if criteria in NO_LIMIT_TYPES:
        no_limit = resolve_session_value(rules.get("no_age_limit"), session, exam_code)
        if no_limit or not has_age_requirement(rules):
            return FieldVerdict(
                field=FIELD,
                user_value=str(user_value).strip() if not is_missing(user_value) else NOT_SPECIFIED,
                exam_requirement=no_limit or "No age restriction",
                eligible=True,
                reason="No age limit for this exam",
            )

    if is_missing(user_value):
        return FieldVerdict(
            field=FIELD,
            user_value=NOT_SPECIFIED,
            exam_requirement="Date of birth required",
            eligible=False,
            reason="Please provide your date of birth",
        )

    dob = parse_date(user_value)
    if dob is None:
        return FieldVerdict(
            field=FIELD,
            user_value=str(user_value),
            exam_requirement="Valid date required",
            eligible=False,
            reason="Invalid date format. Please use DD-MM-YYYY format",
        )

    reference = session_reference_date(session) or reference_date or date.today()
    ctx = _AgeContext(rules, dob, reference, session, exam_code)

    for check in CRITERIA.get(criteria, AUTO_DETECT):
        verdict = check(ctx)
        if verdict is not None:
            return verdict

    return ctx.verdict("No age limit specified", True, "Age/DOB criteria not specified for selected session")
