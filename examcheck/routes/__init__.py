"""
API routes for the Exam Eligibility Engine
"""

from .exams import router as exams_router
from .eligibility import router as eligibility_router

__all__ = [
    "exams_router",
    "eligibility_router"
]
