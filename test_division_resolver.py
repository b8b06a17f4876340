"""
Tests for requirement parsing and exam record resolution
"""
import logging

import pytest

from examcheck.exceptions import MalformedExamError
from examcheck.models.exam import DivisionedExam, FlatExam
from examcheck.models.requirement import (
    CertificateKeyedRequirement,
    GenderKeyedRequirement,
    ScalarRequirement,
    SessionKeyedRequirement,
    WingKeyedRequirement,
    parse_requirement,
)
from examcheck.services.division_resolver import describe_exam, detect_divisions, resolve_exam


def test_parse_requirement_shapes():
    assert parse_requirement("UNMARRIED") == ScalarRequirement(value="UNMARRIED")
    assert parse_requirement(["HINDI", "ENGLISH"]).value == "HINDI, ENGLISH"
    assert parse_requirement(42).value == "42"
    assert parse_requirement(None).value == ""

    assert isinstance(parse_requirement({"MALE": "UNMARRIED", "female": "UNMARRIED"}), GenderKeyedRequirement)
    assert isinstance(parse_requirement({"ARMY": "C", "AIR WING": "B"}), WingKeyedRequirement)
    assert isinstance(parse_requirement({"2026-I": "x"}), SessionKeyedRequirement)
    grades = parse_requirement({"C CERTIFICATE": ["A", "B"]})
    assert isinstance(grades, CertificateKeyedRequirement)
    assert grades.lookup("c") == "A, B"
    assert parse_requirement({"something": "else"}) == ScalarRequirement()


def test_parse_requirement_is_idempotent():
    parsed = parse_requirement({"MALE": "UNMARRIED"})
    assert parse_requirement(parsed) is parsed


def test_gender_keyed_lookup_is_case_insensitive():
    parsed = parse_requirement({"MALE": "UNMARRIED", "FEMALE": "UNMARRIED, WIDOW"})
    assert parsed.lookup("female") == "UNMARRIED, WIDOW"
    assert parsed.lookup("TRANSGENDER") is None


def test_detect_divisions_priority_order():
    raw = {"courses": {"B.TECH": {}}, "academies": {"ARMY": {}}}
    structure = detect_divisions(raw)
    assert structure.is_divisioned
    assert structure.division_key == "academies"

    assert not detect_divisions({"gender": "MALE"}).is_divisioned
    assert not detect_divisions({"posts": {}}).is_divisioned
    assert not detect_divisions({"posts": ["A", "B"]}).is_divisioned


def test_resolve_flat_exam():
    exam = resolve_exam({"exam_code": "SSC_GD", "exam_name": "SSC GD", "gender": "MALE, FEMALE", "unknown_field": "x"})
    assert isinstance(exam, FlatExam)
    assert exam.units()[0][0] == "ALL"
    assert exam.requirements.get("gender").value == "MALE, FEMALE"
    assert "unknown_field" not in exam.requirements.requirements
    assert exam.division_names() == []


def test_resolve_divisioned_exam_keeps_source_order():
    raw = {
        "exam_name": "Combined Defence Services",
        "academies": {
            "IMA": {"gender": "MALE"},
            "OTA": {"gender": "MALE, FEMALE"},
            "INA": {"gender": "MALE"},
        },
    }
    exam = resolve_exam(raw, exam_code="CDS")
    assert isinstance(exam, DivisionedExam)
    assert exam.exam_code == "CDS"
    assert exam.division_names() == ["IMA", "OTA", "INA"]

    info = describe_exam(exam)
    assert info.is_divisioned
    assert info.division_key == "academies"
    assert info.exam_name == "Combined Defence Services"


def test_divisions_do_not_inherit_top_level_requirements():
    exam = resolve_exam({"exam_code": "X", "gender": "FEMALE", "posts": {"CLERK": {"weight_kg": "50"}}})
    assert exam.divisions["CLERK"].get("gender") == ScalarRequirement()


def test_non_mapping_divisions_are_dropped(caplog):
    raw = {"exam_code": "X", "posts": {"CLERK": None, "TYPIST": "TBD", "GUARD": {"gender": "FEMALE"}}}
    with caplog.at_level(logging.WARNING):
        exam = resolve_exam(raw)
    assert exam.division_names() == ["GUARD"]
    assert "Dropping division CLERK" in caplog.text


def test_exam_with_no_usable_division_raises():
    with pytest.raises(MalformedExamError):
        resolve_exam({"exam_code": "X", "posts": {"CLERK": None, "GUARD": ["MALE"]}})


def test_exam_code_fallbacks():
    assert resolve_exam({"exam_name": "Some Exam"}).exam_code.startswith("SOME_EXAM_")
    exam = resolve_exam({"gender": "MALE"}, exam_code="ABC")
    assert exam.exam_code == "ABC"
    assert exam.exam_label == "ABC"


@pytest.mark.parametrize("raw", ["not a record", 42, None, ["a"]])
def test_malformed_records_raise(raw):
    with pytest.raises(MalformedExamError):
        resolve_exam(raw, exam_code="BROKEN")


def test_record_without_identity_uses_placeholder_code():
    exam = resolve_exam({"gender": "MALE"})
    assert exam.exam_code == "EXAM"
    assert exam.exam_name == "EXAM"


def test_session_keys_come_from_age_fields():
    exam = resolve_exam({
        "exam_code": "NDA",
        "between_dob": {"2026-I": "02-07-2007 to 01-07-2010", "2026-II": "02-01-2008 to 01-01-2011"},
    })
    assert exam.requirements.sessions() == ["2026-I", "2026-II"]


def test_education_levels_are_parsed_per_division():
    exam = resolve_exam({
        "exam_code": "CDS",
        "academies": {
            "IMA": {"education_levels": {"graduation": {"course": {"options": ["B.E", "B.TECH"]}}}},
            "OTA": {"gender": "FEMALE"},
        },
    })
    assert exam.divisions["IMA"].education.levels["graduation"].courses == ["B.E", "B.TECH"]
    assert exam.divisions["OTA"].education is None
