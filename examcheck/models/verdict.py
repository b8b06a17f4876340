"""
Pydantic models for eligibility verdicts
"""
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict


class FieldVerdict(BaseModel):
    """Outcome of a single field check"""
    field: str = Field(..., description="Display label of the checked field")
    user_value: str = Field(..., description="Candidate value as shown to the user")
    exam_requirement: str = Field(..., description="Exam requirement as shown to the user")
    eligible: bool = Field(..., description="Whether the candidate satisfies the requirement")
    reason: Optional[str] = Field(None, description="Explanation for the outcome")
    gender_requirement: Optional[str] = Field(None, description="Requirement resolved for the candidate's gender")
    user_gender: Optional[str] = Field(None, description="Gender used to resolve the requirement")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "Weight (kg)",
                "user_value": "65 kg",
                "exam_requirement": "50 - 80 kg",
                "eligible": True
            }
        }
    )


class DivisionVerdict(BaseModel):
    """Outcome for one division and session of an exam"""
    division: str
    session: str
    eligible: bool
    results: List[FieldVerdict] = Field(default_factory=list)


class ExamVerdict(BaseModel):
    """Exam-level outcome: eligible when at least one division is eligible"""
    exam_code: str
    exam_name: str = ""
    eligible: bool
    eligible_divisions: List[str] = Field(default_factory=list)
    results: List[DivisionVerdict] = Field(default_factory=list)


class TaggedDivisionVerdict(DivisionVerdict):
    """Division outcome tagged with the exam it came from"""
    exam_code: str
    exam_name: str = ""
    exam_label: str = ""
    conducting_body: str = ""
    exam_level: str = ""


class SkippedExam(BaseModel):
    """Exam that could not be evaluated during a scan"""
    exam_code: str
    error: str


class BatchResult(BaseModel):
    """Result of scanning a profile against an exam corpus"""
    eligible: List[TaggedDivisionVerdict] = Field(default_factory=list)
    ineligible: List[TaggedDivisionVerdict] = Field(default_factory=list)
    eligible_count: int = 0
    ineligible_count: int = 0
    total_exams_checked: int = 0
    skipped: List[SkippedExam] = Field(default_factory=list)


class ExamSummary(BaseModel):
    """Eligible divisions and sessions of one exam"""
    exam_code: str
    exam_name: str = ""
    exam_label: str = ""
    divisions: List[str] = Field(default_factory=list)
    sessions: List[str] = Field(default_factory=list)
    total_eligible: int = 0


class ScanResponse(BaseModel):
    """Scan result together with its per-exam summary"""
    result: BatchResult
    summary: List[ExamSummary] = Field(default_factory=list)
