"""
Custom exceptions for the exam eligibility engine
"""


class ExamCheckError(Exception):
    """Base exception for all eligibility engine errors"""
    pass


class MalformedExamError(ExamCheckError):
    """Raised when an exam record cannot be resolved into requirements"""
    pass


class ExamNotFoundError(ExamCheckError):
    """Raised when an exam code is not present in the loaded corpus"""
    pass
