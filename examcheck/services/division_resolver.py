"""
Service for turning raw exam records into flat or divisioned exams
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..exceptions import MalformedExamError
from ..models.exam import (
    DISPLAY_FIELDS,
    DIVISION_KEYS,
    REQUIREMENT_FIELDS,
    DivisionedExam,
    ExamInfo,
    ExamRecord,
    FlatExam,
    RequirementSet,
)
from ..models.education import parse_education_requirement
from ..models.requirement import parse_requirement
from ..utils.validators import generate_exam_code

logger = logging.getLogger(__name__)

UNNAMED_EXAM_CODE = "EXAM"


@dataclass
class DivisionStructure:
    """Shape of a raw exam record"""
    is_divisioned: bool
    division_key: Optional[str] = None
    divisions: Dict[str, Any] = field(default_factory=dict)


def detect_divisions(raw_exam: Any) -> DivisionStructure:
    """
    Find the division mapping of a raw exam record

    The division synonyms are checked in priority order and the first one
    holding a mapping wins. Division contents are not validated.

    Args:
        raw_exam: Exam record as loaded from JSON

    Returns:
        DivisionStructure
    """
    if not isinstance(raw_exam, Mapping):
        return DivisionStructure(is_divisioned=False)
    for key in DIVISION_KEYS:
        value = raw_exam.get(key)
        if isinstance(value, Mapping) and value:
            return DivisionStructure(is_divisioned=True, division_key=key, divisions=dict(value))
    return DivisionStructure(is_divisioned=False)


def parse_requirement_set(raw: Any) -> RequirementSet:
    """Parse the requirement fields of a flat record or of one division"""
    if not isinstance(raw, Mapping):
        return RequirementSet()
    return RequirementSet(
        requirements={name: parse_requirement(raw[name]) for name in REQUIREMENT_FIELDS if name in raw},
        education=parse_education_requirement(raw.get("education_levels"), raw.get("pwd_status")),
    )


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def resolve_exam(raw_exam: Any, exam_code: Optional[str] = None) -> ExamRecord:
    """
    Resolve a raw exam record once into a FlatExam or DivisionedExam

    Division entries that are not mappings are dropped. A record with no code
    and no name is still evaluated under the placeholder code "EXAM".

    Args:
        raw_exam: Exam record as loaded from JSON
        exam_code: Code to use when the record does not carry one

    Returns:
        FlatExam or DivisionedExam

    Raises:
        MalformedExamError: If the record is not a mapping, or none of its divisions is
    """
    if not isinstance(raw_exam, Mapping):
        raise MalformedExamError(
            f"Exam record {exam_code or '<unknown>'} must be a mapping, got {type(raw_exam).__name__}"
        )

    name = _text(raw_exam.get("exam_name"))
    code = _text(raw_exam.get("exam_code")) or exam_code or (generate_exam_code(name) if name else UNNAMED_EXAM_CODE)

    metadata = {
        "exam_code": code,
        "exam_name": name or code,
        "exam_label": _text(raw_exam.get("exam_label")) or code,
        "conducting_body": _text(raw_exam.get("conducting_body")),
        "exam_level": _text(raw_exam.get("exam_level")),
        "display_details": {key: raw_exam[key] for key in DISPLAY_FIELDS if raw_exam.get(key)},
    }

    structure = detect_divisions(raw_exam)
    if structure.is_divisioned:
        divisions = {}
        for division, record in structure.divisions.items():
            if not isinstance(record, Mapping):
                logger.warning(
                    f"Dropping division {division} of exam {code}: expected a mapping, got {type(record).__name__}"
                )
                continue
            divisions[str(division)] = parse_requirement_set(record)
        if not divisions:
            raise MalformedExamError(f"Exam {code} has no usable {structure.division_key}")
        logger.debug(f"Resolved exam {code} with {len(divisions)} {structure.division_key}")
        return DivisionedExam(division_key=structure.division_key, divisions=divisions, **metadata)

    return FlatExam(requirements=parse_requirement_set(raw_exam), **metadata)


def describe_exam(exam: ExamRecord) -> ExamInfo:
    """Listing entry for a resolved exam"""
    return ExamInfo(
        exam_code=exam.exam_code,
        exam_name=exam.exam_name,
        exam_label=exam.exam_label,
        conducting_body=exam.conducting_body,
        exam_level=exam.exam_level,
        is_divisioned=isinstance(exam, DivisionedExam),
        division_key=exam.division_key if isinstance(exam, DivisionedExam) else None,
        divisions=exam.division_names(),
        display_details=dict(exam.display_details),
    )
