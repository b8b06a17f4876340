"""
Pydantic models for exam-side requirement values

Exam data stores a requirement either as a plain value or as a mapping keyed
by gender, NCC wing, NCC certificate or exam session. The raw shape is
resolved once into one of the tagged models below so checkers never have to
inspect object shapes.
"""
import re
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..utils.normalizer import format_number, loose_key, normalize

GENDER_TAGS = ("MALE", "FEMALE", "TRANSGENDER")
WING_MARKERS = ("ARMY", "NAVY", "AIR")

_YEAR = re.compile(r"\d{4}")
_SESSION_MARKER = re.compile(r"[-_ ](I{1,3}|[12])(?:[-_ ]|$)", re.IGNORECASE)


def _flatten(value: Any) -> str:
    """Render a raw requirement value as a single string"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "YES" if value else "NO"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(_flatten(item) for item in value if _flatten(item))
    if isinstance(value, str):
        return value
    return ""


class ScalarRequirement(BaseModel):
    """A requirement that applies to every candidate"""
    kind: Literal["scalar"] = "scalar"
    value: str = Field("", description="Raw requirement text")

    def display(self) -> str:
        return self.value.strip()


class GenderKeyedRequirement(BaseModel):
    """A requirement whose allowed values differ by candidate gender"""
    kind: Literal["gender_keyed"] = "gender_keyed"
    entries: Dict[str, str] = Field(default_factory=dict, description="Gender tag -> requirement text")

    def lookup(self, gender: Any) -> Optional[str]:
        return self.entries.get(normalize(gender))

    def display(self) -> str:
        return "; ".join(f"{gender}: {value}" for gender, value in self.entries.items())


class WingKeyedRequirement(BaseModel):
    """A requirement whose allowed values differ by NCC wing"""
    kind: Literal["wing_keyed"] = "wing_keyed"
    entries: Dict[str, str] = Field(default_factory=dict, description="NCC wing -> requirement text")

    def lookup(self, wing: Any) -> Optional[str]:
        wanted = loose_key(wing)
        if not wanted:
            return None
        for key, value in self.entries.items():
            if loose_key(key) == wanted:
                return value
        return None

    def display(self) -> str:
        return "; ".join(f"{wing}: {value}" for wing, value in self.entries.items())


class CertificateKeyedRequirement(BaseModel):
    """A requirement whose allowed values differ by NCC certificate, e.g. {"C CERTIFICATE": ["A", "B"]}"""
    kind: Literal["certificate_keyed"] = "certificate_keyed"
    entries: Dict[str, str] = Field(default_factory=dict, description="NCC certificate -> requirement text")

    def lookup(self, certificate: Any) -> Optional[str]:
        """Entry for a certificate written as "C", "C CERTIFICATE" or "c-certificate" """
        wanted = loose_key(certificate)
        if not wanted:
            return None
        for key, value in self.entries.items():
            have = loose_key(key)
            if not have:
                continue
            if have.startswith(wanted) or wanted.startswith(have) or have[0] == wanted[0]:
                return value
        return None

    def display(self) -> str:
        return "; ".join(f"{certificate}: {value}" for certificate, value in self.entries.items())


class SessionKeyedRequirement(BaseModel):
    """A requirement that changes with the exam session, e.g. {"2026-I": "02-01-2003 to 01-01-2008"}"""
    kind: Literal["session_keyed"] = "session_keyed"
    sessions: Dict[str, str] = Field(default_factory=dict, description="Session key -> requirement text")

    def for_session(self, session: Optional[str] = None, exam_code: Optional[str] = None) -> Optional[str]:
        """
        Resolve the requirement text for a session

        Args:
            session: Session key such as "2026-I"; the first session is used when omitted
            exam_code: Exam code used to build prefixed keys such as "CDS-I-2026"

        Returns:
            Requirement text, or None when no session matches
        """
        if not self.sessions:
            return None
        keys = list(self.sessions)
        if not session:
            return self.sessions[keys[0]] or None

        if self.sessions.get(session):
            return self.sessions[session]
        lowered = session.lower()
        for key in keys:
            if key.lower() == lowered:
                return self.sessions[key]

        if exam_code:
            for candidate in (f"{exam_code}-{session}", f"{exam_code}_{session}", f"{exam_code}{session}"):
                for key in keys:
                    if key.lower() == candidate.lower():
                        return self.sessions[key]

        year = _YEAR.search(session)
        if not year:
            return None
        if self.sessions.get(year.group(0)):
            return self.sessions[year.group(0)]
        year_keys = [key for key in keys if year.group(0) in key]
        if not year_keys:
            return None
        marker = _SESSION_MARKER.search(session)
        if marker:
            number = marker.group(1).upper()
            for key in year_keys:
                upper_key = key.upper()
                if f"-{number}-" in upper_key or f"_{number}_" in upper_key:
                    return self.sessions[key]
        return self.sessions[year_keys[0]]

    def display(self) -> str:
        return "; ".join(f"{session}: {value}" for session, value in self.sessions.items())


Requirement = Union[
    ScalarRequirement,
    GenderKeyedRequirement,
    WingKeyedRequirement,
    CertificateKeyedRequirement,
    SessionKeyedRequirement,
]

REQUIREMENT_TYPES = (
    ScalarRequirement,
    GenderKeyedRequirement,
    WingKeyedRequirement,
    CertificateKeyedRequirement,
    SessionKeyedRequirement,
)

RequirementField = Annotated[Requirement, Field(discriminator="kind")]


def parse_requirement(raw: Any) -> Requirement:
    """
    Resolve a raw exam value into a tagged requirement

    Already-parsed requirements are returned unchanged.

    Args:
        raw: Value read from an exam record

    Returns:
        One of the requirement models
    """
    if isinstance(raw, REQUIREMENT_TYPES):
        return raw
    if not isinstance(raw, dict):
        return ScalarRequirement(value=_flatten(raw))

    mapping = raw.get("regular_candidates") if isinstance(raw.get("regular_candidates"), dict) else raw
    if not mapping:
        return ScalarRequirement()

    keys = [normalize(key) for key in mapping]
    if any(key in GENDER_TAGS for key in keys):
        return GenderKeyedRequirement(
            entries={normalize(key): _flatten(value) for key, value in mapping.items() if normalize(key) in GENDER_TAGS}
        )
    if any("CERTIFICATE" in key for key in keys):
        return CertificateKeyedRequirement(entries={str(key): _flatten(value) for key, value in mapping.items()})
    if any(marker in key for key in keys for marker in WING_MARKERS):
        return WingKeyedRequirement(entries={str(key): _flatten(value) for key, value in mapping.items()})
    if any(_YEAR.search(str(key)) for key in mapping):
        return SessionKeyedRequirement(sessions={str(key): _flatten(value) for key, value in mapping.items()})

    return ScalarRequirement()


def session_reference_marker(session: str) -> Optional[str]:
    """Return the I/II style marker of a session key, if any"""
    match = _SESSION_MARKER.search(session or "")
    return match.group(1).upper() if match else None


def session_year(session: str) -> Optional[int]:
    """Return the four digit year embedded in a session key, if any"""
    match = _YEAR.search(session or "")
    return int(match.group(0)) if match else None
