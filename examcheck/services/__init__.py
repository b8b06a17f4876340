"""
Services package for the Exam Eligibility Engine
"""

from .division_resolver import resolve_exam, describe_exam
from .eligibility_service import EligibilityService, eligibility_service
from .batch_service import BatchService, batch_service
from .corpus_service import CorpusService, corpus_service

__all__ = [
    "resolve_exam",
    "describe_exam",
    "EligibilityService",
    "eligibility_service",
    "BatchService",
    "batch_service",
    "CorpusService",
    "corpus_service"
]
