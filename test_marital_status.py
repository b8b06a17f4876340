"""
Tests for the gender-aware marital status checker
"""
from examcheck.checkers.marital_status import check_marital_status
from examcheck.utils.normalizer import NOT_SPECIFIED

GENDER_KEYED = {"MALE": "UNMARRIED", "FEMALE": "UNMARRIED, WIDOW, DIVORCEE"}


def test_gender_keyed_requirement_is_resolved_for_the_candidate():
    verdict = check_marital_status("WIDOW", GENDER_KEYED, "FEMALE")
    assert verdict.eligible
    assert verdict.gender_requirement == "UNMARRIED, WIDOW, DIVORCEE"
    assert verdict.user_gender == "FEMALE"

    verdict = check_marital_status("MARRIED", GENDER_KEYED, "MALE")
    assert not verdict.eligible
    assert verdict.exam_requirement == "UNMARRIED"


def test_missing_gender_is_ineligible_with_a_reason():
    verdict = check_marital_status("UNMARRIED", GENDER_KEYED, None)
    assert not verdict.eligible
    assert verdict.reason == "User gender not specified (required for gender-specific marital status check)"
    assert verdict.gender_requirement == "Unknown"
    assert verdict.user_gender == NOT_SPECIFIED


def test_gender_without_an_entry_is_unrestricted():
    verdict = check_marital_status("MARRIED", GENDER_KEYED, "TRANSGENDER")
    assert verdict.eligible
    assert verdict.gender_requirement == "Not specified for this gender"
    assert verdict.reason == "No marital status restriction for TRANSGENDER"


def test_membership_is_exact_not_substring():
    # UNMARRIED contains MARRIED but must not admit it
    assert not check_marital_status("MARRIED", "UNMARRIED", "MALE").eligible
    assert check_marital_status("unmarried", "UNMARRIED", "MALE").eligible


def test_scalar_requirement_and_sentinels():
    assert check_marital_status(None, "ALL APPLICABLE").eligible
    assert check_marital_status(None, "").eligible
    assert check_marital_status(None, "NOT APPLICABLE").eligible

    verdict = check_marital_status(None, "UNMARRIED")
    assert not verdict.eligible
    assert verdict.reason == "User marital status not specified"


def test_regular_candidates_block_is_used():
    requirement = {"regular_candidates": {"MALE": "UNMARRIED", "FEMALE": "UNMARRIED"}}
    assert check_marital_status("UNMARRIED", requirement, "FEMALE").eligible
    assert not check_marital_status("DIVORCEE", requirement, "FEMALE").eligible
