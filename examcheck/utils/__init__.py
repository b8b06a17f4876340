"""
Utility functions for the exam eligibility engine
"""

from .normalizer import (
    normalize,
    parse_list,
    is_no_restriction,
    parse_float,
    parse_int,
    parse_range,
    parse_date
)
from .validators import (
    generate_exam_code,
    validate_user_profile_data
)

__all__ = [
    "normalize",
    "parse_list",
    "is_no_restriction",
    "parse_float",
    "parse_int",
    "parse_range",
    "parse_date",
    "generate_exam_code",
    "validate_user_profile_data"
]
