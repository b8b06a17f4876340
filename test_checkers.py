"""
Tests for the individual field checkers
"""
import pytest

from examcheck.checkers import (
    check_active_backlogs,
    check_caste_category,
    check_cpl_holder,
    check_domicile,
    check_driving_license,
    check_education_details,
    check_employment_status,
    check_ex_servicemen,
    check_gap_years,
    check_gender,
    check_height,
    check_highest_education,
    check_language_proficiency,
    check_nationality,
    check_ncc_certificate,
    check_ncc_certificate_grade,
    check_ncc_wing,
    check_pwd_status,
    check_sports_quota,
    check_vision,
    check_weight,
    check_work_experience,
)
from examcheck.checkers.base import loose_match
from examcheck.checkers.education import (
    check_diploma_12th_equivalency,
    check_marks_percentage,
    required_levels,
)
from examcheck.models.education import parse_education_requirement
from examcheck.models.requirement import GenderKeyedRequirement, SessionKeyedRequirement
from examcheck.utils.normalizer import NOT_SPECIFIED


@pytest.mark.parametrize("checker, sentinel", [
    (check_employment_status, "ANY"),
    (check_ncc_wing, "NOT APPLICABLE"),
    (check_vision, "NA"),
    (check_sports_quota, "NOT APPLICABLE"),
    (check_language_proficiency, "ANY"),
    (check_driving_license, "NOT REQUIRED"),
    (check_weight, "ANY"),
    (check_height, "NA"),
    (check_work_experience, "0"),
    (check_gap_years, "YES"),
    (check_active_backlogs, "APPLICABLE"),
    (check_cpl_holder, "NOT REQUIRED"),
    (check_ex_servicemen, "NOT APPLICABLE"),
    (check_gender, "ALL APPLICABLE"),
    (check_caste_category, "NOT APPLICABLE"),
    (check_nationality, "ALL APPLICABLE"),
    (check_highest_education, "ANY"),
])
def test_sentinel_requirement_is_eligible_even_without_user_value(checker, sentinel):
    assert checker(None, sentinel).eligible
    assert checker(None, "").eligible


def test_sentinels_are_field_specific():
    # ANY is not a no-restriction value for sports quota
    assert not check_sports_quota(None, "ANY").eligible
    # Driving licence does not treat ANY as open either
    assert not check_driving_license(None, "ANY").eligible


def test_loose_match_is_symmetric_containment():
    assert loose_match(["ARMY"], ["ARMY WING"])
    assert loose_match(["ARMY WING"], ["ARMY"])
    assert loose_match(["ARMY"], ["TERRITORIAL ARMY"])
    assert not loose_match(["NAVY"], ["AIR"])
    assert not loose_match(["NAVY"], [""])


def test_allow_list_checkers():
    assert check_employment_status("Unemployed", "UNEMPLOYED, STUDENT").eligible
    assert not check_employment_status("Employed", "STUDENT").eligible

    verdict = check_ncc_wing(None, "ARMY, NAVY")
    assert not verdict.eligible
    assert verdict.user_value == NOT_SPECIFIED

    assert check_ncc_wing(None, "").exam_requirement == "Not Required"
    assert check_vision("6/6", "6/6, 6/9").eligible


def test_language_proficiency_accepts_any_known_language():
    assert check_language_proficiency(["Tamil", "English"], "HINDI, ENGLISH").eligible
    assert check_language_proficiency("tamil, hindi", "HINDI").eligible
    assert not check_language_proficiency("Tamil", "HINDI, ENGLISH").eligible


def test_driving_license_matches_abbreviation_and_full_name():
    assert check_driving_license("LMV", "LIGHT MOTOR VEHICLE").eligible
    assert check_driving_license("Heavy Motor Vehicle", "HMV").eligible
    assert not check_driving_license("MCWG", "HMV").eligible
    assert check_driving_license(None, "").exam_requirement == "Not Required"


@pytest.mark.parametrize("user, requirement, eligible, shown", [
    ("65", "50", True, "Minimum 50 kg"),
    ("45", "50", False, "Minimum 50 kg"),
    ("65", "50-80", True, "50 - 80 kg"),
    ("85", "50 to 80", False, "50 - 80 kg"),
    ("50", "50-80", True, "50 - 80 kg"),
])
def test_weight(user, requirement, eligible, shown):
    verdict = check_weight(user, requirement)
    assert verdict.eligible is eligible
    assert verdict.exam_requirement == shown


def test_weight_fails_open_on_unreadable_values():
    verdict = check_weight("abc", "50")
    assert verdict.eligible
    assert verdict.reason

    assert check_weight("65", "Minimum 80").eligible
    assert not check_weight(None, "50").eligible


def test_height_and_work_experience():
    verdict = check_height(162.5, "157")
    assert verdict.eligible
    assert verdict.user_value == "162.5 cm"

    assert not check_work_experience("1", "2").eligible
    assert check_work_experience("3 years", "2").eligible
    assert check_work_experience(None, "NOT REQUIRED").exam_requirement == "NOT REQUIRED"
    assert check_work_experience(None, "").exam_requirement == "Not Required"


def test_gap_years():
    assert check_gap_years(None, "NO").eligible
    verdict = check_gap_years(None, "NO")
    assert verdict.user_value == "0"
    assert verdict.exam_requirement == "No gap years allowed"

    assert not check_gap_years(1, "NO").eligible
    assert check_gap_years("2", "2").eligible

    verdict = check_gap_years("3", "2")
    assert not verdict.eligible
    assert verdict.exam_requirement == "Maximum 2 gap years"

    assert check_gap_years(5, "ALLOWED").eligible
    assert check_gap_years(None, "").exam_requirement == "Allowed"


def test_active_backlogs():
    assert check_active_backlogs(0, "NONE").eligible
    assert not check_active_backlogs(2, "NOT ALLOWED").eligible
    assert check_active_backlogs("1", "2").eligible
    verdict = check_active_backlogs(None, "YES")
    assert verdict.eligible
    assert verdict.exam_requirement == "Backlogs allowed"


def test_gender_and_caste_are_exact():
    assert check_gender("FEMALE", "MALE, FEMALE").eligible
    assert not check_gender("TRANSGENDER", "MALE, FEMALE").eligible
    assert not check_gender(None, "MALE").eligible

    assert check_caste_category("OBC", "OBC (OTHER BACKWARD CLASS), SC").eligible
    assert check_caste_category("SC (SCHEDULED CASTE)", "GEN, SC").eligible
    assert check_caste_category("UR", "GENERAL").eligible
    assert not check_caste_category("ST", "GEN, OBC").eligible


def test_nationality_and_domicile():
    assert check_nationality("Tibetan Refugee", "INDIAN, TIBETAN REFUGEE (PRE-1962)").eligible
    assert not check_nationality("NEPAL", "INDIAN").eligible

    assert check_domicile("GOA", "KARNATAKA", "NEPAL").eligible
    assert check_domicile("GOA", "KARNATAKA", None).eligible
    assert not check_domicile("GOA", "KARNATAKA", "INDIAN").eligible
    assert check_domicile("GOA", "GOA, KERALA", "INDIAN").eligible
    assert check_domicile("GOA", "ALL INDIA", "INDIAN").eligible


def test_pwd_status():
    assert check_pwd_status("YES", "ALL APPLICABLE").eligible
    assert check_pwd_status("YES", "APPLICABLE").eligible

    verdict = check_pwd_status("YES", "NOT APPLICABLE")
    assert not verdict.eligible
    assert verdict.exam_requirement == "Not open to PWD candidates"
    assert check_pwd_status("NO", "NOT APPLICABLE").eligible
    assert not check_pwd_status(None, "NOT APPLICABLE").eligible

    assert check_pwd_status("YES", "SOMETHING ELSE").eligible


def test_cpl_and_ex_servicemen():
    assert check_cpl_holder("YES", "REQUIRED").eligible
    assert check_cpl_holder("HAVE", "YES").eligible
    assert not check_cpl_holder("NO", "YES").eligible
    assert not check_cpl_holder(None, "YES").eligible

    assert check_ex_servicemen("YES", "ONLY").eligible
    assert not check_ex_servicemen("NO", "YES").eligible
    assert check_ex_servicemen("NO", "NO").eligible
    assert not check_ex_servicemen("YES", "NOT ALLOWED").eligible


def test_highest_education_uses_the_hierarchy():
    assert check_highest_education("GRADUATION", "(12TH) HIGHER SECONDARY").eligible
    assert check_highest_education("(12TH) HIGHER SECONDARY", "12TH").eligible
    assert not check_highest_education("(10TH) SECONDARY", "GRADUATION").eligible
    assert not check_highest_education(None, "GRADUATION").eligible


def test_ncc_certificate_plain_list():
    assert check_ncc_certificate("C CERTIFICATE", "B, C CERTIFICATE").eligible
    assert not check_ncc_certificate("A CERTIFICATE", "C CERTIFICATE").eligible
    assert check_ncc_certificate(None, "NOT REQUIRED").eligible
    assert not check_ncc_certificate(None, "C CERTIFICATE").eligible


def test_ncc_certificate_any():
    assert check_ncc_certificate("B", "ALL").eligible
    assert not check_ncc_certificate("NO", "ANY").eligible
    assert not check_ncc_certificate(None, "ALL").eligible


def test_ncc_certificate_by_wing():
    requirement = {"ARMY": "C CERTIFICATE", "AIR WING": "B, C"}
    assert check_ncc_certificate("C CERTIFICATE", requirement, "ARMY").eligible
    assert check_ncc_certificate("B", requirement, "air-wing").eligible

    verdict = check_ncc_certificate("C", requirement, "NAVY")
    assert not verdict.eligible
    assert "not accepted" in verdict.reason

    verdict = check_ncc_certificate("C", requirement, None)
    assert not verdict.eligible
    assert verdict.reason == "NCC wing not specified"


def test_scalar_checkers_read_session_keyed_values():
    requirement = SessionKeyedRequirement(sessions={"2026-I": "50", "2026-II": "55"})
    assert check_weight("52", requirement).eligible


def test_unusable_shape_means_no_restriction():
    requirement = GenderKeyedRequirement(entries={"MALE": "50"})
    assert check_weight("10", requirement).eligible


CERTIFICATE_GRADES = {"C CERTIFICATE": ["A", "B"], "B CERTIFICATE": ["A"]}


def test_ncc_grade_by_certificate():
    assert check_ncc_certificate_grade("B", CERTIFICATE_GRADES, "C CERTIFICATE").eligible
    assert check_ncc_certificate_grade("A", CERTIFICATE_GRADES, "C").eligible

    verdict = check_ncc_certificate_grade("B", CERTIFICATE_GRADES, "B CERTIFICATE")
    assert not verdict.eligible
    assert verdict.reason == "Grade B not in allowed list: A"

    verdict = check_ncc_certificate_grade("A", CERTIFICATE_GRADES, "A CERTIFICATE")
    assert not verdict.eligible
    assert verdict.reason == "No grade requirements found for certificate A CERTIFICATE"

    assert check_ncc_certificate_grade("A", CERTIFICATE_GRADES, None).reason == "NCC certificate not specified"
    assert check_ncc_certificate_grade(None, CERTIFICATE_GRADES, "C").reason == "NCC grade not specified"


def test_ncc_grade_plain_requirements():
    assert check_ncc_certificate_grade(None, "").eligible
    assert check_ncc_certificate_grade(None, "NOT APPLICABLE").eligible
    assert check_ncc_certificate_grade(None, "ALL APPLICABLE").eligible

    assert check_ncc_certificate_grade("C", "ALL").eligible
    verdict = check_ncc_certificate_grade(None, "ANY")
    assert not verdict.eligible
    assert verdict.exam_requirement == "Any Grade"

    assert check_ncc_certificate_grade("b", "A, B").eligible
    assert not check_ncc_certificate_grade("C", ["A", "B"]).eligible


EDUCATION_LEVELS = {
    "graduation": {
        "course": {"options": ["B.E", "B.TECH", "B.SC"]},
        "subject": {"B.SC": ["PHYSICS", "MATHEMATICS"]},
        "marks_percentage": {"GEN": "60%", "SC": "55%"},
    },
    "12th_higher_secondary": "ALL COURSES",
}


def graduate(course="B.SC", subject="PHYSICS", marks=58):
    return {
        "graduation": {"course": course, "subject": subject, "marks_percentage": marks},
        "12th_higher_secondary": {"course": "SCIENCE"},
    }


def test_required_levels_follow_the_minimum_qualification():
    assert required_levels("GRADUATION") == ["graduation", "diploma", "12th_higher_secondary", "10th_secondary"]
    assert required_levels("(12TH) HIGHER SECONDARY") == ["12th_higher_secondary", "10th_secondary"]
    assert required_levels("") == []


def test_education_details_check_each_named_level():
    requirement = parse_education_requirement(EDUCATION_LEVELS)
    results = check_education_details(graduate(), requirement, "GRADUATION", caste_category="SC")
    assert [result.field for result in results] == [
        "GRADUATION Course",
        "GRADUATION Subject",
        "GRADUATION Marks",
        "(12TH) HIGHER SECONDARY Course",
        "(12TH) HIGHER SECONDARY Subject",
        "(12TH) HIGHER SECONDARY Marks",
        "Diploma / 12th",
    ]
    assert all(result.eligible for result in results)
    assert results[2].exam_requirement == "55% (SC, Standard)"


def test_education_course_and_subject_allow_lists():
    requirement = parse_education_requirement(EDUCATION_LEVELS)

    results = check_education_details(graduate(course="B.COM"), requirement, "GRADUATION")
    assert not results[0].eligible
    assert results[0].reason == "Course B.COM is not in the allowed list for GRADUATION"

    results = check_education_details(graduate(subject="CHEMISTRY"), requirement, "GRADUATION")
    assert not results[1].eligible

    results = check_education_details({}, requirement, "GRADUATION")
    assert results[0].reason == "Course not specified for GRADUATION"


def test_marks_use_the_category_threshold():
    requirement = parse_education_requirement(EDUCATION_LEVELS)
    marks = check_education_details(graduate(marks="58%"), requirement, "GRADUATION")[2]
    assert not marks.eligible
    assert marks.user_value == "58%"
    assert marks.exam_requirement == "60% (GEN, Standard)"

    rule = requirement.levels["graduation"]
    assert check_marks_percentage("72.5", rule, "graduation", "OBC").eligible
    assert not check_marks_percentage(None, rule, "graduation").eligible
    verdict = check_marks_percentage("distinction", rule, "graduation")
    assert verdict.eligible
    assert verdict.reason == "Unable to parse percentage values"


def test_pwd_candidates_use_the_pwd_marks_table():
    requirement = parse_education_requirement(EDUCATION_LEVELS, {"GEN": "40%", "SC": "35%"})
    marks = check_education_details(graduate(marks=45), requirement, "GRADUATION", pwd_status="YES")[2]
    assert marks.eligible
    assert marks.exam_requirement == "40% (GEN, PWD)"

    marks = check_education_details(graduate(marks=45), requirement, "GRADUATION", pwd_status="NO")[2]
    assert not marks.eligible


def test_diploma_and_12th_are_equivalent_unless_both_are_named():
    only_12th = {"12th_higher_secondary": {"course": "SCIENCE"}}

    requirement = parse_education_requirement({"diploma": "ALL COURSES"})
    assert check_diploma_12th_equivalency(only_12th, requirement).eligible

    requirement = parse_education_requirement({"diploma": "ALL COURSES", "12th_higher_secondary": "ALL COURSES"})
    verdict = check_diploma_12th_equivalency(only_12th, requirement)
    assert not verdict.eligible
    assert verdict.exam_requirement == "Both Diploma and 12th required"

    requirement = parse_education_requirement({"graduation": "ALL COURSES"})
    assert check_diploma_12th_equivalency(only_12th, requirement) is None


def test_exam_without_education_levels_has_one_passing_verdict():
    results = check_education_details(None, None, "GRADUATION")
    assert len(results) == 1
    assert results[0].eligible
    assert results[0].user_value == NOT_SPECIFIED
