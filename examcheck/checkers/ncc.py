"""
NCC certificate checker

The requirement is a certificate allow-list, "ALL"/"ANY" for any certificate,
or a mapping from NCC wing to the certificates accepted from that wing.
"""
from typing import Any, List, Optional

from ..models.requirement import ScalarRequirement, WingKeyedRequirement, parse_requirement
from ..models.verdict import FieldVerdict
from ..utils.normalizer import NOT_SPECIFIED, display_value, is_missing, is_no_restriction, loose_key, normalize, parse_list

FIELD = "NCC Certificate"

NCC_CERTIFICATE_SENTINELS = frozenset({"NOT APPLICABLE", "NA", "NOT REQUIRED", "NONE"})
ALL_CERTIFICATES = frozenset({"ALL APPLICABLE", "ALL", "ANY", "ALL CERTIFICATES"})


def _certificate_matches(user_certificate: Any, allowed: List[str]) -> bool:
    user = normalize(user_certificate)
    return any(
        cert in user or user in cert or loose_key(cert) == loose_key(user)
        for cert in allowed
    )


def check_ncc_certificate(user_value: Any, requirement: Any, wing: Optional[str] = None) -> FieldVerdict:
    """
    Check a candidate's NCC certificate

    Args:
        user_value: Certificate held, e.g. "C CERTIFICATE" or "NO"
        requirement: Allow-list string or wing-keyed mapping
        wing: Candidate's NCC wing, needed for wing-keyed requirements

    Returns:
        FieldVerdict
    """
    parsed = parse_requirement(requirement)

    if isinstance(parsed, WingKeyedRequirement):
        if is_missing(wing):
            return FieldVerdict(
                field=FIELD,
                user_value=display_value(user_value),
                exam_requirement=parsed.display(),
                eligible=False,
                reason="NCC wing not specified",
            )
        allowed = parse_list(parsed.lookup(wing) or "")
        if not allowed:
            return FieldVerdict(
                field=FIELD,
                user_value=display_value(user_value),
                exam_requirement=f"Wing {wing} not accepted",
                eligible=False,
                reason=f"NCC wing {wing} is not accepted for this exam",
            )
        if is_missing(user_value):
            return FieldVerdict(
                field=FIELD,
                user_value=NOT_SPECIFIED,
                exam_requirement=", ".join(allowed),
                eligible=False,
                reason="NCC certificate not specified",
            )
        eligible = _certificate_matches(user_value, allowed)
        return FieldVerdict(
            field=FIELD,
            user_value=display_value(user_value),
            exam_requirement=", ".join(allowed),
            eligible=eligible,
            reason=(
                f"Certificate {user_value} is accepted for {wing} wing"
                if eligible
                else f"Certificate {user_value} not in allowed list: {', '.join(allowed)}"
            ),
        )

    text = parsed.value.strip() if isinstance(parsed, ScalarRequirement) else ""
    if is_no_restriction(text, NCC_CERTIFICATE_SENTINELS):
        return FieldVerdict(
            field=FIELD,
            user_value=display_value(user_value),
            exam_requirement=text or "Not Required",
            eligible=True,
            reason="NCC certificate not required for this exam",
        )

    if normalize(text) in ALL_CERTIFICATES:
        held = not is_missing(user_value) and normalize(user_value) != "NO"
        return FieldVerdict(
            field=FIELD,
            user_value=display_value(user_value),
            exam_requirement="Any NCC Certificate",
            eligible=held,
            reason="Any NCC certificate is accepted" if held else "NCC certificate is required but not provided",
        )

    if is_missing(user_value):
        return FieldVerdict(
            field=FIELD,
            user_value=NOT_SPECIFIED,
            exam_requirement=text,
            eligible=False,
            reason="NCC certificate not specified",
        )

    allowed = parse_list(text)
    eligible = _certificate_matches(user_value, allowed)
    return FieldVerdict(
        field=FIELD,
        user_value=display_value(user_value),
        exam_requirement=", ".join(allowed),
        eligible=eligible,
        reason=(
            f"Certificate {user_value} matches requirement"
            if eligible
            else f"Certificate {user_value} not in allowed list: {', '.join(allowed)}"
        ),
    )
