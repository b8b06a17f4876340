"""
Pydantic models for candidate profiles and eligibility requests
"""
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field, field_validator, ConfigDict

ProfileValue = Optional[Union[str, int, float]]


class EducationDetail(BaseModel):
    """Course, subject and marks for one completed education level"""
    course: Optional[str] = Field(None, description="Course or stream, e.g. B.TECH or SCIENCE")
    subject: Optional[str] = Field(None, description="Main subject or subject combination")
    marks_percentage: ProfileValue = Field(None, description="Aggregate marks, e.g. 72.5 or '72.5%'")


class UserProfile(BaseModel):
    """Candidate profile information for eligibility checking"""
    gender: Optional[str] = Field(None, description="MALE, FEMALE or TRANSGENDER")
    marital_status: Optional[str] = Field(None, description="Candidate's marital status")
    pwd_status: Optional[str] = Field(None, description="YES if the candidate is a person with disability")
    caste_category: Optional[str] = Field(None, description="Reservation category, e.g. OBC or 'SC (SCHEDULED CASTE)'")
    nationality: Optional[str] = Field(None, description="Candidate's nationality")
    domicile: Optional[str] = Field(None, description="State or union territory of domicile")
    date_of_birth: Optional[str] = Field(None, description="DD-MM-YYYY, DD.MM.YYYY or YYYY-MM-DD")
    highest_education_qualification: Optional[str] = Field(None, description="Highest completed education level")
    education_levels: Optional[Dict[str, EducationDetail]] = Field(
        None, description="Level key (graduation, diploma, 12th_higher_secondary, 10th_secondary) -> details"
    )
    current_employment_status: Optional[str] = Field(None, description="Current employment status")
    gap_years: ProfileValue = Field(None, description="Gap years in education")
    active_backlogs: ProfileValue = Field(None, description="Number of active backlogs")
    ncc_wing: Optional[str] = Field(None, description="NCC wing (ARMY, NAVY, AIR)")
    ncc_certificate: Optional[str] = Field(None, description="NCC certificate held (A, B, C or NO)")
    ncc_certificate_grade: Optional[str] = Field(None, description="Grade obtained in the NCC certificate (A, B, C or D)")
    weight_kg: ProfileValue = Field(None, description="Weight in kg")
    height_cm: ProfileValue = Field(None, description="Height in cm")
    vision_eyesight: Optional[str] = Field(None, description="Vision / eyesight standard")
    work_experience_years: ProfileValue = Field(None, description="Years of work experience")
    sports_quota: Optional[str] = Field(None, description="Sports quota claim")
    cpl_holder: Optional[str] = Field(None, description="YES if the candidate holds a commercial pilot licence")
    ex_servicemen_status: Optional[str] = Field(None, description="YES for ex-servicemen")
    language_proficiency: Optional[Union[str, List[str]]] = Field(None, description="Languages known")
    driving_license_type: Optional[str] = Field(None, description="Driving licence class, e.g. LMV")

    @field_validator('gender', 'marital_status', 'pwd_status', 'nationality', 'ncc_wing', 'cpl_holder', 'ex_servicemen_status')
    @classmethod
    def upper_tags(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "gender": "MALE",
                "marital_status": "UNMARRIED",
                "pwd_status": "NO",
                "caste_category": "OBC",
                "nationality": "INDIAN",
                "domicile": "KARNATAKA",
                "date_of_birth": "15-06-2007",
                "highest_education_qualification": "(12TH) HIGHER SECONDARY",
                "ncc_wing": "ARMY",
                "weight_kg": "58"
            }
        }
    )

    @classmethod
    def coerce(cls, profile: Union["UserProfile", Dict[str, Any], None]) -> "UserProfile":
        """Accept either a model or a plain mapping"""
        if isinstance(profile, UserProfile):
            return profile
        return cls(**(profile or {}))


class ExamCheckRequest(BaseModel):
    """Request to check eligibility for a single exam"""
    profile: UserProfile = Field(..., description="Candidate profile")
    exam_code: Optional[str] = Field(None, description="Code of an exam in the loaded corpus")
    exam: Optional[Dict[str, Any]] = Field(None, description="Inline exam record, used instead of exam_code")
    session: Optional[str] = Field(None, description="Evaluate a single exam session, e.g. 2026-I")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "profile": {"gender": "FEMALE", "marital_status": "UNMARRIED", "date_of_birth": "02-03-2006"},
                "exam_code": "NDA",
                "session": "2026-I"
            }
        }
    )


class EligibilityScanRequest(BaseModel):
    """Request to scan a profile against many exams"""
    profile: UserProfile = Field(..., description="Candidate profile")
    exams: Optional[Dict[str, Any]] = Field(
        None, description="Exam code -> exam record; the loaded corpus is used when omitted"
    )
    exam_level: Optional[str] = Field(None, description="Keep only results for this exam level")
    conducting_body: Optional[str] = Field(None, description="Keep only results whose conducting body contains this text")
    exam_name: Optional[str] = Field(None, description="Keep only results whose exam name contains this text")
