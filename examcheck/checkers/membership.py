"""
Checkers for fields matched against a loose comma separated allow-list

A requirement token and the candidate's value match when either contains the
other, so "ARMY" accepts "ARMY WING". The same rule also lets "ARMY" accept
"TERRITORIAL ARMY"; exam data has not been audited for such collisions.
"""
from typing import Any, List

from ..models.verdict import FieldVerdict
from .base import check_loose_allow_list

EMPLOYMENT_SENTINELS = frozenset({"NOT APPLICABLE", "NA", "ANY"})
NCC_WING_SENTINELS = frozenset({"NOT APPLICABLE", "NA", "ANY"})
VISION_SENTINELS = frozenset({"NOT APPLICABLE", "NA", "ANY"})
SPORTS_QUOTA_SENTINELS = frozenset({"NOT APPLICABLE", "NA"})
LANGUAGE_SENTINELS = frozenset({"NOT APPLICABLE", "NA", "ANY"})
DRIVING_LICENSE_SENTINELS = frozenset({"NOT REQUIRED", "NOT APPLICABLE", "NA"})

LICENSE_TYPES = {
    "LMV": ("LMV", "LIGHT MOTOR VEHICLE"),
    "MCWG": ("MCWG", "MOTORCYCLE WITH GEAR"),
    "MCWOG": ("MCWOG", "MOTORCYCLE WITHOUT GEAR"),
    "HMV": ("HMV", "HEAVY MOTOR VEHICLE", "HTV", "HEAVY TRANSPORT VEHICLE"),
    "HGMV": ("HGMV", "HEAVY GOODS MOTOR VEHICLE"),
    "HPV": ("HPV", "HEAVY PASSENGER VEHICLE"),
}


def check_employment_status(user_value: Any, requirement: Any) -> FieldVerdict:
    return check_loose_allow_list("Employment Status", user_value, requirement, EMPLOYMENT_SENTINELS)


def check_ncc_wing(user_value: Any, requirement: Any) -> FieldVerdict:
    return check_loose_allow_list(
        "NCC Wing", user_value, requirement, NCC_WING_SENTINELS, default_requirement="Not Required"
    )


def check_vision(user_value: Any, requirement: Any) -> FieldVerdict:
    return check_loose_allow_list("Vision/Eyesight", user_value, requirement, VISION_SENTINELS)


def check_sports_quota(user_value: Any, requirement: Any) -> FieldVerdict:
    return check_loose_allow_list("Sports Quota", user_value, requirement, SPORTS_QUOTA_SENTINELS)


def check_language_proficiency(user_value: Any, requirement: Any) -> FieldVerdict:
    """Eligible when any required language matches any language the candidate knows"""
    return check_loose_allow_list("Language Proficiency", user_value, requirement, LANGUAGE_SENTINELS, split_user=True)


def _license_variations(tokens: List[str]) -> List[str]:
    expanded = list(tokens)
    for token in tokens:
        for variations in LICENSE_TYPES.values():
            if any(v == token or v in token for v in variations):
                expanded.extend(variations)
                break
    return expanded


def check_driving_license(user_value: Any, requirement: Any) -> FieldVerdict:
    """Licence classes match by abbreviation or full name, e.g. LMV and LIGHT MOTOR VEHICLE"""
    return check_loose_allow_list(
        "Driving License",
        user_value,
        requirement,
        DRIVING_LICENSE_SENTINELS,
        default_requirement="Not Required",
        expand=_license_variations,
    )
