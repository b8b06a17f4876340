"""
Exam Eligibility Engine

Checks a candidate profile against competitive-exam requirements, per division
and per exam session, and scans whole exam corpora for the exams a candidate
can sit.
"""

__version__ = "1.0.0"
__author__ = "ExamCheck Team"
__description__ = "Rule-based competitive exam eligibility checking system"
