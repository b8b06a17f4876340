"""
Utility functions for validating profiles and naming exams
"""
import re
import hashlib
from typing import List

from .normalizer import is_missing, normalize, parse_date, parse_float

VALID_GENDERS = ['MALE', 'FEMALE', 'TRANSGENDER']
YES_NO_FIELDS = ['pwd_status', 'cpl_holder', 'ex_servicemen_status']
NON_NEGATIVE_FIELDS = ['gap_years', 'active_backlogs', 'weight_kg', 'height_cm', 'work_experience_years']


def generate_exam_code(exam_name: str) -> str:
    """
    Generate a stable exam code from an exam name

    Args:
        exam_name: Name of the exam

    Returns:
        Exam code such as "NATIONAL_DEFENCE_ACADEMY_1A2B3C4D"
    """
    # Clean the exam name
    clean_name = re.sub(r'[^\w\s-]', '', exam_name.upper())

    # Replace spaces and hyphens with underscores
    clean_name = re.sub(r'[\s-]+', '_', clean_name).strip('_')

    if len(clean_name) > 40:
        clean_name = clean_name[:40].rstrip('_')

    # Hash suffix keeps truncated names distinct
    hash_suffix = hashlib.md5(exam_name.encode()).hexdigest()[:8].upper()
    return f"{clean_name}_{hash_suffix}"


def validate_user_profile_data(profile_data: dict) -> List[str]:
    """
    Validate user profile data and return list of validation errors

    Missing fields are not errors; each checker decides what a missing value means.

    Args:
        profile_data: Dictionary containing profile data

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    # Gender validation
    gender = profile_data.get('gender')
    if not is_missing(gender) and normalize(gender) not in VALID_GENDERS:
        errors.append(f"Gender must be one of: {', '.join(VALID_GENDERS)}")

    # Date of birth validation
    dob = profile_data.get('date_of_birth')
    if not is_missing(dob) and parse_date(dob) is None:
        errors.append("Date of birth must be a valid date in DD-MM-YYYY format")

    for field in YES_NO_FIELDS:
        value = profile_data.get(field)
        if not is_missing(value) and normalize(value) not in ('YES', 'NO', 'HAVE'):
            errors.append(f"{field} must be YES or NO")

    # Counts and measurements cannot be negative when they parse
    for field in NON_NEGATIVE_FIELDS:
        number = parse_float(profile_data.get(field))
        if number is not None and number < 0:
            errors.append(f"{field} cannot be negative")

    # Marks are percentages
    for level, detail in (profile_data.get('education_levels') or {}).items():
        marks = parse_float((detail or {}).get('marks_percentage'))
        if marks is not None and not 0 <= marks <= 100:
            errors.append(f"education_levels.{level}.marks_percentage must be between 0 and 100")

    return errors
