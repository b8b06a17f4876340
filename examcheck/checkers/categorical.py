"""
Checkers for closed-vocabulary fields matched exactly

Covers gender, caste category, nationality, domicile, PWD status, CPL holder,
ex-servicemen status and the highest education qualification ladder.
"""
from typing import Any, Dict, Iterable, Optional

from ..models.verdict import FieldVerdict
from ..utils.normalizer import NOT_SPECIFIED, display_value, is_missing, is_no_restriction, normalize, parse_list
from .base import requirement_text

OPEN_SENTINELS = frozenset({"ALL APPLICABLE", "NOT APPLICABLE"})
FLAG_SENTINELS = frozenset({"NOT APPLICABLE", "NA", "ANY"})
CPL_SENTINELS = frozenset({"NOT REQUIRED", "NOT APPLICABLE", "NA"})
EDUCATION_SENTINELS = frozenset({"ALL APPLICABLE", "NOT APPLICABLE", "ANY"})

CASTE_SHORT_TO_FULL = {
    "GEN": "GENERAL (UR/UNRESERVED)",
    "GENERAL": "GENERAL (UR/UNRESERVED)",
    "UR": "GENERAL (UR/UNRESERVED)",
    "UNRESERVED": "GENERAL (UR/UNRESERVED)",
    "SC": "SC (SCHEDULED CASTE)",
    "SCHEDULED CASTE": "SC (SCHEDULED CASTE)",
    "ST": "ST (SCHEDULED TRIBE)",
    "SCHEDULED TRIBE": "ST (SCHEDULED TRIBE)",
    "OBC": "OBC (OTHER BACKWARD CLASS)",
    "OBC-NCL": "OBC (OTHER BACKWARD CLASS)",
    "EWS": "EWS (ECONOMICALLY WEAKER SECTION)",
    "MINORITY": "MINORITY",
}

NATIONALITY_SHORT_TO_FULL = {
    "OCI": "OCI (OVERSEAS CITIZEN OF INDIA)",
    "PIO": "PERSON OF INDIAN ORIGIN (PIO)",
    "TIBETAN REFUGEE": "TIBETAN REFUGEE (PRE-1962)",
}

INDIAN_STATES = (
    "ANDHRA PRADESH", "ARUNACHAL PRADESH", "ASSAM", "BIHAR", "CHHATTISGARH", "GOA", "GUJARAT",
    "HARYANA", "HIMACHAL PRADESH", "JHARKHAND", "KARNATAKA", "KERALA", "MADHYA PRADESH",
    "MAHARASHTRA", "MANIPUR", "MEGHALAYA", "MIZORAM", "NAGALAND", "ODISHA", "PUNJAB",
    "RAJASTHAN", "SIKKIM", "TAMIL NADU", "TELANGANA", "TRIPURA", "UTTAR PRADESH",
    "UTTARAKHAND", "WEST BENGAL",
)

UNION_TERRITORIES = (
    "ANDAMAN AND NICOBAR ISLANDS", "CHANDIGARH", "DADRA AND NAGAR HAVELI AND DAMAN AND DIU",
    "DELHI", "JAMMU AND KASHMIR", "LADAKH", "LAKSHADWEEP", "PUDUCHERRY",
)

DOMICILE_OPEN_KEYWORDS = frozenset({
    "ALL APPLICABLE", "ALL INDIA", "ALL STATES", "ALL INDIAN STATES",
    "PAN INDIA", "ANY", "NATIONWIDE", "NOT APPLICABLE",
})

EDUCATION_HIERARCHY: Dict[str, int] = {
    "POST DOCTORATE": 8,
    "PHD": 7,
    "POST GRADUATION": 6,
    "GRADUATION": 5,
    "DIPLOMA / ITI (POLYTECHNIC, ITI, DPHARM, PGDCA)": 4,
    "DIPLOMA": 4,
    "(12TH) HIGHER SECONDARY": 3,
    "(12TH)HIGHER SECONDARY": 3,
    "12TH HIGHER SECONDARY": 3,
    "12TH": 3,
    "(10TH) SECONDARY": 2,
    "(10TH)SECONDARY": 2,
    "10TH SECONDARY": 2,
    "10TH": 2,
    "BELOW 10TH": 1,
    "NO EDUCATION": 0,
}


def _exact_membership(
    field: str,
    label: str,
    user_value: Any,
    requirement: Any,
    canonical=normalize,
    sentinels: Iterable[str] = OPEN_SENTINELS,
) -> FieldVerdict:
    text = requirement_text(requirement)
    if is_no_restriction(text, sentinels):
        return FieldVerdict(
            field=field,
            user_value=display_value(user_value),
            exam_requirement=text or "No restriction",
            eligible=True,
            reason=f"All {label} values are eligible",
        )
    if is_missing(user_value):
        return FieldVerdict(
            field=field,
            user_value=NOT_SPECIFIED,
            exam_requirement=text,
            eligible=False,
            reason=f"User {label} not specified",
        )

    allowed = [canonical(token) for token in parse_list(text)]
    user = canonical(user_value)
    eligible = user in allowed
    reason = (
        f"{label.capitalize()} {user_value} is eligible"
        if eligible
        else f"{label.capitalize()} {user_value} is not eligible. Allowed: {', '.join(allowed)}"
    )
    return FieldVerdict(
        field=field, user_value=display_value(user_value), exam_requirement=text, eligible=eligible, reason=reason
    )


def check_gender(user_value: Any, requirement: Any) -> FieldVerdict:
    return _exact_membership("Gender", "gender", user_value, requirement)


def canonical_caste(value: Any) -> str:
    """Map short caste codes and labelled values such as 'SC (SCHEDULED CASTE)' to one full name"""
    normalized = normalize(value)
    if normalized in CASTE_SHORT_TO_FULL:
        return CASTE_SHORT_TO_FULL[normalized]
    if normalized in CASTE_SHORT_TO_FULL.values():
        return normalized
    short = normalized.split("(")[0].strip()
    return CASTE_SHORT_TO_FULL.get(short, normalized)


def check_caste_category(user_value: Any, requirement: Any) -> FieldVerdict:
    return _exact_membership("Caste Category", "caste category", user_value, requirement, canonical=canonical_caste)


def canonical_nationality(value: Any) -> str:
    normalized = normalize(value)
    return NATIONALITY_SHORT_TO_FULL.get(normalized, normalized)


def check_nationality(user_value: Any, requirement: Any) -> FieldVerdict:
    return _exact_membership("Nationality", "nationality", user_value, requirement, canonical=canonical_nationality)


def check_domicile(user_value: Any, requirement: Any, nationality: Optional[str] = None) -> FieldVerdict:
    """Domicile restrictions only apply to Indian nationals"""
    if normalize(nationality) != "INDIAN":
        return FieldVerdict(
            field="Domicile",
            user_value=display_value(user_value),
            exam_requirement=requirement_text(requirement) or "No restriction",
            eligible=True,
            reason="Domicile is only checked for Indian nationals",
        )
    return _exact_membership("Domicile", "domicile", user_value, requirement, sentinels=DOMICILE_OPEN_KEYWORDS)


def check_pwd_status(user_value: Any, requirement: Any) -> FieldVerdict:
    """
    Check PWD (person with disability) eligibility

    "NOT APPLICABLE" on this field means PWD candidates may not apply, so it is
    not a no-restriction sentinel here.
    """
    text = requirement_text(requirement)
    normalized = normalize(text)
    user = normalize(user_value)
    shown = display_value(user_value)

    if normalized in ("", "ALL APPLICABLE"):
        return FieldVerdict(
            field="PWD Status",
            user_value=shown,
            exam_requirement=text or "No restriction",
            eligible=True,
            reason="All candidates (PWD and non-PWD) are eligible",
        )
    if normalized == "APPLICABLE":
        return FieldVerdict(
            field="PWD Status",
            user_value=shown,
            exam_requirement=text,
            eligible=True,
            reason="PWD provisions available",
        )
    if normalized == "NOT APPLICABLE":
        if not user:
            return FieldVerdict(
                field="PWD Status",
                user_value=NOT_SPECIFIED,
                exam_requirement="Not open to PWD candidates",
                eligible=False,
                reason="PWD status not specified",
            )
        eligible = user == "NO"
        return FieldVerdict(
            field="PWD Status",
            user_value=shown,
            exam_requirement="Not open to PWD candidates",
            eligible=eligible,
            reason="Non-PWD candidate is eligible" if eligible else "PWD candidates are not eligible for this exam",
        )
    return FieldVerdict(
        field="PWD Status",
        user_value=shown,
        exam_requirement=text,
        eligible=True,
        reason=f"Unknown PWD requirement: {text}",
    )


def check_cpl_holder(user_value: Any, requirement: Any) -> FieldVerdict:
    text = requirement_text(requirement)
    if is_no_restriction(text, CPL_SENTINELS):
        return FieldVerdict(
            field="CPL Holder", user_value=display_value(user_value), exam_requirement=text or "Not Required", eligible=True
        )
    if is_missing(user_value):
        return FieldVerdict(field="CPL Holder", user_value=NOT_SPECIFIED, exam_requirement=text, eligible=False)
    if normalize(text) in ("YES", "REQUIRED"):
        return FieldVerdict(
            field="CPL Holder",
            user_value=display_value(user_value),
            exam_requirement="Required",
            eligible=normalize(user_value) in ("YES", "HAVE"),
        )
    return FieldVerdict(field="CPL Holder", user_value=display_value(user_value), exam_requirement=text, eligible=True)


def check_ex_servicemen(user_value: Any, requirement: Any) -> FieldVerdict:
    text = requirement_text(requirement)
    if is_no_restriction(text, FLAG_SENTINELS):
        return FieldVerdict(
            field="Ex-Servicemen Status",
            user_value=display_value(user_value),
            exam_requirement=text or "Not Applicable",
            eligible=True,
        )
    if is_missing(user_value):
        return FieldVerdict(field="Ex-Servicemen Status", user_value=NOT_SPECIFIED, exam_requirement=text, eligible=False)

    required = normalize(text)
    user = normalize(user_value)
    if required in ("YES", "REQUIRED", "ONLY"):
        return FieldVerdict(
            field="Ex-Servicemen Status",
            user_value=display_value(user_value),
            exam_requirement="Ex-servicemen only",
            eligible=user == "YES",
        )
    if required in ("NO", "NOT ALLOWED"):
        return FieldVerdict(
            field="Ex-Servicemen Status",
            user_value=display_value(user_value),
            exam_requirement="Not for ex-servicemen",
            eligible=user == "NO",
        )
    return FieldVerdict(
        field="Ex-Servicemen Status", user_value=display_value(user_value), exam_requirement=text, eligible=True
    )


def education_rank(value: Any) -> int:
    """Position of an education level in the hierarchy; unknown levels rank 0"""
    return EDUCATION_HIERARCHY.get(normalize(value), 0)


def check_highest_education(user_value: Any, requirement: Any) -> FieldVerdict:
    text = requirement_text(requirement)
    if is_no_restriction(text, EDUCATION_SENTINELS):
        return FieldVerdict(
            field="Highest Education",
            user_value=display_value(user_value),
            exam_requirement=text or "No minimum requirement",
            eligible=True,
            reason="No specific education requirement",
        )
    if is_missing(user_value):
        return FieldVerdict(
            field="Highest Education",
            user_value=NOT_SPECIFIED,
            exam_requirement=text,
            eligible=False,
            reason="Education qualification not provided",
        )
    eligible = education_rank(user_value) >= education_rank(text)
    reason = (
        f"Your education level ({user_value}) meets or exceeds the requirement ({text})"
        if eligible
        else f"Your education level ({user_value}) is below the minimum requirement ({text})"
    )
    return FieldVerdict(
        field="Highest Education", user_value=display_value(user_value), exam_requirement=text, eligible=eligible, reason=reason
    )
