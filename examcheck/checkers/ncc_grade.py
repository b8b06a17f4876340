"""
NCC certificate grade checker

The requirement is a grade allow-list, "ALL"/"ANY" for any grade, or a
mapping from NCC certificate to the grades accepted for that certificate.
The grade depends on the certificate the same way the certificate depends
on the NCC wing.
"""
from typing import Any, List, Optional

from ..models.requirement import CertificateKeyedRequirement, parse_requirement
from ..models.verdict import FieldVerdict
from ..utils.normalizer import NOT_SPECIFIED, display_value, is_missing, is_no_restriction, normalize, parse_list
from .base import requirement_text

FIELD = "NCC Certificate Grade"

NCC_GRADE_SENTINELS = frozenset({"NOT APPLICABLE", "NA", "NOT REQUIRED", "NONE", "ALL APPLICABLE"})
ALL_GRADES = frozenset({"ALL", "ANY", "ALL GRADES"})


def _grade_matches(user_grade: Any, allowed: List[str]) -> bool:
    user = normalize(user_grade)
    return any(grade == user or grade in user or user in grade for grade in allowed)


def _allow_list_verdict(user_value: Any, allowed: List[str], accepted_reason: str) -> FieldVerdict:
    if is_missing(user_value):
        return FieldVerdict(
            field=FIELD,
            user_value=NOT_SPECIFIED,
            exam_requirement=", ".join(allowed),
            eligible=False,
            reason="NCC grade not specified",
        )
    eligible = _grade_matches(user_value, allowed)
    return FieldVerdict(
        field=FIELD,
        user_value=display_value(user_value),
        exam_requirement=", ".join(allowed),
        eligible=eligible,
        reason=accepted_reason if eligible else f"Grade {user_value} not in allowed list: {', '.join(allowed)}",
    )


def check_ncc_certificate_grade(user_value: Any, requirement: Any, certificate: Optional[str] = None) -> FieldVerdict:
    """
    Check the grade a candidate obtained in their NCC certificate

    Args:
        user_value: Grade obtained, e.g. "B"
        requirement: Allow-list string or certificate-keyed mapping
        certificate: Candidate's NCC certificate, needed for certificate-keyed requirements

    Returns:
        FieldVerdict
    """
    parsed = parse_requirement(requirement)

    if isinstance(parsed, CertificateKeyedRequirement):
        if is_missing(certificate):
            return FieldVerdict(
                field=FIELD,
                user_value=display_value(user_value),
                exam_requirement=parsed.display(),
                eligible=False,
                reason="NCC certificate not specified",
            )
        allowed = parse_list(parsed.lookup(certificate) or "")
        if not allowed:
            return FieldVerdict(
                field=FIELD,
                user_value=display_value(user_value),
                exam_requirement=f"Certificate {certificate} not found",
                eligible=False,
                reason=f"No grade requirements found for certificate {certificate}",
            )
        return _allow_list_verdict(user_value, allowed, f"Grade {user_value} is accepted for {certificate}")

    text = requirement_text(parsed)
    if is_no_restriction(text, NCC_GRADE_SENTINELS):
        return FieldVerdict(
            field=FIELD,
            user_value=display_value(user_value),
            exam_requirement=text or "Not Required",
            eligible=True,
            reason="NCC grade not required for this exam",
        )

    if normalize(text) in ALL_GRADES:
        held = not is_missing(user_value)
        return FieldVerdict(
            field=FIELD,
            user_value=display_value(user_value),
            exam_requirement="Any Grade",
            eligible=held,
            reason="Any NCC grade is accepted" if held else "NCC grade is required but not provided",
        )

    return _allow_list_verdict(user_value, parse_list(text), f"Grade {user_value} matches requirement")
