"""
Shared parsing helpers for exam requirement and user profile values
"""
import re
from datetime import date
from typing import Any, Iterable, List, Optional, Tuple

NOT_SPECIFIED = "Not specified"

DEFAULT_SENTINELS = frozenset({"NOT APPLICABLE", "NA", "ANY"})

_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+))")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_TO_SEPARATOR = re.compile(r"\s+to\s+", re.IGNORECASE)

DATE_FORMATS = (
    re.compile(r"^(?P<day>\d{1,2})-(?P<month>\d{1,2})-(?P<year>\d{4})$"),
    re.compile(r"^(?P<day>\d{1,2})\.(?P<month>\d{1,2})\.(?P<year>\d{4})$"),
    re.compile(r"^(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})$"),
)


def normalize(value: Any) -> str:
    """
    Upper-case and trim a value for comparison

    Args:
        value: Raw value from a profile or exam record

    Returns:
        Normalized string, empty for anything that is not a non-empty string or number
    """
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        return format_number(value)
    if not isinstance(value, str):
        return ""
    return value.strip().upper()


def parse_list(value: Any) -> List[str]:
    """Split a comma separated value into normalized, non-empty tokens"""
    if isinstance(value, (list, tuple)):
        tokens: Iterable[Any] = value
    else:
        tokens = str(value).split(",") if isinstance(value, (str, int, float)) else []
    parsed = []
    for token in tokens:
        for part in str(token).split(","):
            cleaned = normalize(part)
            if cleaned:
                parsed.append(cleaned)
    return parsed


def is_no_restriction(value: Any, sentinels: Iterable[str] = DEFAULT_SENTINELS) -> bool:
    """True for an empty requirement or one of the given no-restriction sentinels"""
    normalized = normalize(value)
    return normalized == "" or normalized in sentinels


def is_missing(value: Any) -> bool:
    """True when a user value was not supplied"""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def parse_float(value: Any) -> Optional[float]:
    """
    Parse the leading number of a value

    "65 kg" parses to 65.0 while "Minimum 80" and "abc" do not parse.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_FLOAT.match(str(value))
    if not match:
        return None
    return float(match.group(1))


def parse_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """Parse the leading integer of a value, returning default when there is none"""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    return int(match.group(1))


def parse_range(value: Any) -> Optional[Tuple[float, float]]:
    """
    Parse a numeric range written as "A-B" or "A to B"

    Returns:
        (low, high) when both bounds parse, otherwise None
    """
    if not isinstance(value, str):
        return None
    if "-" in value:
        parts = value.split("-")
    elif _TO_SEPARATOR.search(value):
        parts = _TO_SEPARATOR.split(value)
    else:
        return None
    if len(parts) != 2:
        return None
    low, high = parse_float(parts[0]), parse_float(parts[1])
    if low is None or high is None:
        return None
    return low, high


def format_number(value: float) -> str:
    """Render a number without a trailing .0"""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def display_value(value: Any, suffix: str = "") -> str:
    """Render a user value for display, falling back to 'Not specified'"""
    if is_missing(value):
        return NOT_SPECIFIED
    if isinstance(value, (list, tuple)):
        rendered = ", ".join(str(item) for item in value)
    elif isinstance(value, float):
        rendered = format_number(value)
    else:
        rendered = str(value).strip()
    return f"{rendered} {suffix}" if suffix else rendered


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a calendar date in DD-MM-YYYY, DD.MM.YYYY or YYYY-MM-DD form

    Returns:
        date, or None for anything that is not a real calendar date
    """
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    for pattern in DATE_FORMATS:
        match = pattern.match(text)
        if not match:
            continue
        try:
            parsed = date(int(match.group("year")), int(match.group("month")), int(match.group("day")))
        except ValueError:
            return None
        if not 1900 <= parsed.year <= 2100:
            return None
        return parsed
    return None


def format_date(value: date) -> str:
    """Render a date as DD-MM-YYYY"""
    return value.strftime("%d-%m-%Y")


def loose_key(value: Any) -> str:
    """Normalize a mapping key down to upper-case letters and digits"""
    return re.sub(r"[^A-Z0-9]", "", normalize(value))
