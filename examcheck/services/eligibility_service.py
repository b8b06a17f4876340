"""
Eligibility service for checking a candidate against a single exam
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Union

from ..checkers import FIELD_RULES, EvaluationContext, FieldRule
from ..models.exam import NO_SESSION, DivisionedExam, ExamRecord, FlatExam, RequirementSet
from ..models.user import UserProfile
from ..models.verdict import DivisionVerdict, ExamVerdict, FieldVerdict
from ..utils.normalizer import display_value
from .division_resolver import resolve_exam

logger = logging.getLogger(__name__)

ProfileInput = Union[UserProfile, Dict[str, Any]]
ExamInput = Union[ExamRecord, Dict[str, Any]]


def session_label(session_key: str) -> str:
    """Display label for a session key, e.g. "2026-I" -> "2026 I" """
    return session_key.replace("-", " ")


class EligibilityService:
    """Service for checking a candidate against every division and session of one exam"""

    def __init__(self, rules: Optional[List[FieldRule]] = None):
        self.rules = list(rules) if rules is not None else list(FIELD_RULES)

    def evaluate(
        self,
        profile: ProfileInput,
        exam: ExamInput,
        session: Optional[str] = None,
        reference_date: Optional[date] = None,
    ) -> List[DivisionVerdict]:
        """
        Evaluate a candidate against one exam

        Args:
            profile: Candidate profile or plain mapping
            exam: Resolved exam or raw exam record
            session: Evaluate only this session instead of every declared session
            reference_date: Age cut-off date for units without a session

        Returns:
            One DivisionVerdict per division and session, in source order
        """
        profile = UserProfile.coerce(profile)
        if not isinstance(exam, (FlatExam, DivisionedExam)):
            exam = resolve_exam(exam)

        verdicts = []
        for division, requirements in exam.units():
            sessions = [session] if session else requirements.sessions()
            if not sessions:
                context = EvaluationContext(reference_date=reference_date, exam_code=exam.exam_code)
                verdicts.append(self._evaluate_unit(profile, requirements, division, NO_SESSION, context))
                continue
            for session_key in sessions:
                context = EvaluationContext(
                    session=session_key, reference_date=reference_date, exam_code=exam.exam_code
                )
                verdicts.append(
                    self._evaluate_unit(profile, requirements, division, session_label(session_key), context)
                )
        return verdicts

    def evaluate_exam(
        self,
        profile: ProfileInput,
        exam: ExamInput,
        session: Optional[str] = None,
        reference_date: Optional[date] = None,
    ) -> ExamVerdict:
        """
        Evaluate a candidate against one exam and roll the result up

        The candidate is eligible for the exam when at least one division is eligible.

        Returns:
            ExamVerdict with the eligible division names
        """
        if not isinstance(exam, (FlatExam, DivisionedExam)):
            exam = resolve_exam(exam)
        verdicts = self.evaluate(profile, exam, session=session, reference_date=reference_date)

        eligible_divisions: List[str] = []
        for verdict in verdicts:
            if verdict.eligible and verdict.division not in eligible_divisions:
                eligible_divisions.append(verdict.division)

        logger.info(
            f"Eligibility check for {exam.exam_code} completed: "
            f"{len(eligible_divisions)}/{len(exam.units())} divisions eligible"
        )
        return ExamVerdict(
            exam_code=exam.exam_code,
            exam_name=exam.exam_name,
            eligible=bool(eligible_divisions),
            eligible_divisions=eligible_divisions,
            results=verdicts,
        )

    def _evaluate_unit(
        self,
        profile: UserProfile,
        requirements: RequirementSet,
        division: str,
        session: str,
        context: EvaluationContext,
    ) -> DivisionVerdict:
        results: List[FieldVerdict] = []
        for rule in self.rules:
            results.extend(self._run_rule(rule, profile, requirements, context))
        eligible = all(result.eligible for result in results)
        logger.debug(f"{context.exam_code} / {division} / {session}: eligible={eligible}")
        return DivisionVerdict(division=division, session=session, eligible=eligible, results=results)

    def _run_rule(
        self,
        rule: FieldRule,
        profile: UserProfile,
        requirements: RequirementSet,
        context: EvaluationContext,
    ) -> List[FieldVerdict]:
        """
        Run a single field rule

        Checkers are written not to raise; an unexpected error still yields an
        ineligible verdict for that field instead of aborting the evaluation.
        """
        try:
            outcome = rule.run(profile, requirements, context)
        except Exception as e:
            logger.error(f"Error evaluating {rule.name} for {context.exam_code}: {e}")
            return [
                FieldVerdict(
                    field=rule.name,
                    user_value=display_value(getattr(profile, rule.name, None)),
                    exam_requirement="Unavailable",
                    eligible=False,
                    reason=f"Error during eligibility check: {str(e)}",
                )
            ]
        return outcome if isinstance(outcome, list) else [outcome]


# Global eligibility service instance
eligibility_service = EligibilityService()
