"""
Tests for the single-exam evaluator
"""
from datetime import date

from examcheck.checkers import FIELD_RULES, FieldRule
from examcheck.models.user import UserProfile
from examcheck.services.division_resolver import resolve_exam
from examcheck.services.eligibility_service import EligibilityService, eligibility_service, session_label

THREE_POSTS = {
    "exam_code": "RLY",
    "exam_name": "Railway Recruitment",
    "posts": {
        "CLERK": {"gender": "MALE, FEMALE", "weight_kg": "45"},
        "TRACKMAN": {"gender": "MALE", "weight_kg": "60"},
        "GUARD": {"gender": "MALE, FEMALE", "height_cm": "150"},
    },
}

PROFILE = {"gender": "FEMALE", "weight_kg": "55", "height_cm": "160"}


def test_exam_is_eligible_when_any_division_is():
    verdict = eligibility_service.evaluate_exam(PROFILE, THREE_POSTS)
    assert verdict.eligible
    assert verdict.eligible_divisions == ["CLERK", "GUARD"]
    assert [unit.division for unit in verdict.results] == ["CLERK", "TRACKMAN", "GUARD"]
    assert [unit.session for unit in verdict.results] == ["N/A", "N/A", "N/A"]


def test_every_rule_runs_once_per_unit():
    verdicts = eligibility_service.evaluate(PROFILE, THREE_POSTS)
    for unit in verdicts:
        assert len(unit.results) == len(FIELD_RULES)
        assert unit.eligible == all(result.eligible for result in unit.results)


def test_evaluation_is_repeatable():
    exam = resolve_exam(THREE_POSTS)
    profile = UserProfile(**PROFILE)
    first = eligibility_service.evaluate(profile, exam, reference_date=date(2026, 1, 1))
    second = eligibility_service.evaluate(profile, exam, reference_date=date(2026, 1, 1))
    assert first == second


def test_flat_exam_is_a_single_all_unit():
    verdicts = eligibility_service.evaluate({"gender": "MALE"}, {"exam_code": "X", "gender": "MALE"})
    assert len(verdicts) == 1
    assert verdicts[0].division == "ALL"
    assert verdicts[0].eligible


def test_empty_profile_fails_restricted_fields_only():
    verdict = eligibility_service.evaluate_exam({}, {"exam_code": "X", "gender": "MALE"})
    assert not verdict.eligible
    failed = [result.field for result in verdict.results[0].results if not result.eligible]
    assert failed == ["Gender"]


def test_session_keyed_exams_expand_per_session():
    exam = {
        "exam_code": "NDA",
        "academies": {
            "ARMY": {
                "age_criteria_type": "BETWEEN_DOB",
                "between_dob": {"2026-I": "02-07-2007 to 01-07-2010", "2026-II": "02-01-2008 to 01-01-2011"},
            },
        },
    }
    verdicts = eligibility_service.evaluate({"date_of_birth": "15-09-2007"}, exam)
    assert [(unit.session, unit.eligible) for unit in verdicts] == [("2026 I", True), ("2026 II", False)]

    verdicts = eligibility_service.evaluate({"date_of_birth": "15-09-2007"}, exam, session="2026-II")
    assert len(verdicts) == 1
    assert verdicts[0].session == "2026 II"
    assert not verdicts[0].eligible


def test_session_label():
    assert session_label("2026-I") == "2026 I"
    assert session_label("CDS-II-2026") == "CDS II 2026"


def test_rule_errors_become_ineligible_verdicts():
    def broken(profile, requirements, ctx):
        raise RuntimeError("boom")

    service = EligibilityService(rules=[FieldRule("gender", broken)])
    verdict = service.evaluate_exam({"gender": "MALE"}, {"exam_code": "X"})
    result = verdict.results[0].results[0]
    assert not result.eligible
    assert result.reason == "Error during eligibility check: boom"
    assert not verdict.eligible


def test_gender_keyed_marital_status_inside_an_exam():
    exam = {"exam_code": "CDS", "marital_status": {"MALE": "UNMARRIED", "FEMALE": "UNMARRIED, WIDOW"}}
    assert eligibility_service.evaluate_exam({"gender": "female", "marital_status": "widow"}, exam).eligible
    assert not eligibility_service.evaluate_exam({"gender": "male", "marital_status": "widower"}, exam).eligible
    assert not eligibility_service.evaluate_exam({"marital_status": "UNMARRIED"}, exam).eligible


def test_record_without_code_or_name_is_still_evaluated():
    verdicts = eligibility_service.evaluate({"gender": "MALE"}, {"gender": "MALE"})
    assert [(unit.division, unit.eligible) for unit in verdicts] == [("ALL", True)]


def test_null_division_is_not_reported_eligible():
    exam = {"exam_code": "X", "posts": {"CLERK": None, "GUARD": {"gender": "FEMALE"}}}
    verdict = eligibility_service.evaluate_exam({"gender": "MALE"}, exam)
    assert not verdict.eligible
    assert verdict.eligible_divisions == []
    assert [unit.division for unit in verdict.results] == ["GUARD"]


def test_education_rule_adds_one_verdict_per_check():
    exam = {
        "exam_code": "AFCAT",
        "highest_education_qualification": "GRADUATION",
        "education_levels": {"graduation": {"marks_percentage": {"GEN": "60%"}}},
    }
    profile = {
        "highest_education_qualification": "GRADUATION",
        "education_levels": {"graduation": {"course": "B.TECH", "marks_percentage": "55"}},
    }
    unit = eligibility_service.evaluate(profile, exam)[0]
    assert len(unit.results) == len(FIELD_RULES) + 2
    assert not unit.eligible
    assert [result.field for result in unit.results if not result.eligible] == ["GRADUATION Marks"]
