"""
Models package for the exam eligibility engine
"""

from .requirement import (
    ScalarRequirement,
    GenderKeyedRequirement,
    WingKeyedRequirement,
    CertificateKeyedRequirement,
    SessionKeyedRequirement,
    Requirement,
    parse_requirement
)

from .education import (
    EducationLevelRule,
    EducationRequirement,
    parse_education_requirement
)

from .exam import (
    RequirementSet,
    FlatExam,
    DivisionedExam,
    ExamRecord,
    ExamInfo
)

from .user import (
    EducationDetail,
    UserProfile,
    ExamCheckRequest,
    EligibilityScanRequest
)

from .verdict import (
    FieldVerdict,
    DivisionVerdict,
    ExamVerdict,
    TaggedDivisionVerdict,
    SkippedExam,
    BatchResult,
    ExamSummary,
    ScanResponse
)

__all__ = [
    # Requirement models
    "ScalarRequirement",
    "GenderKeyedRequirement",
    "WingKeyedRequirement",
    "CertificateKeyedRequirement",
    "SessionKeyedRequirement",
    "Requirement",
    "parse_requirement",

    # Education models
    "EducationLevelRule",
    "EducationRequirement",
    "parse_education_requirement",

    # Exam models
    "RequirementSet",
    "FlatExam",
    "DivisionedExam",
    "ExamRecord",
    "ExamInfo",

    # User models
    "EducationDetail",
    "UserProfile",
    "ExamCheckRequest",
    "EligibilityScanRequest",

    # Verdict models
    "FieldVerdict",
    "DivisionVerdict",
    "ExamVerdict",
    "TaggedDivisionVerdict",
    "SkippedExam",
    "BatchResult",
    "ExamSummary",
    "ScanResponse"
]
