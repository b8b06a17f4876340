"""
Batch service for scanning a candidate against a whole exam corpus
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..config import settings
from ..models.exam import FLAT_DIVISION, NO_SESSION, ExamRecord
from ..models.user import UserProfile
from ..models.verdict import BatchResult, ExamSummary, SkippedExam, TaggedDivisionVerdict
from .division_resolver import resolve_exam
from .eligibility_service import EligibilityService, eligibility_service

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]
Corpus = Union[Mapping[str, Any], Iterable[Any]]


def _corpus_items(corpus: Corpus) -> List[Tuple[str, Any]]:
    """Ordered (exam code, raw record) pairs from a mapping or an iterable of records"""
    if isinstance(corpus, Mapping):
        return [(str(code), record) for code, record in corpus.items()]
    items = []
    for index, record in enumerate(corpus):
        code = record.get("exam_code") if isinstance(record, Mapping) else None
        items.append((str(code or f"exam_{index + 1}"), record))
    return items


def _label(code: str, record: Any) -> str:
    if isinstance(record, Mapping):
        return record.get("exam_label") or record.get("exam_name") or code
    return code


def _notify(on_progress: Optional[ProgressCallback], label: str, current: int, total: int):
    """Report progress; a failing callback is logged and the scan carries on"""
    if not on_progress:
        return
    try:
        on_progress(label, current, total)
    except Exception as e:
        logger.warning(f"Progress callback failed for {label}: {e}")


class BatchService:
    """Service for running the single-exam evaluator across many exams"""

    def __init__(self, evaluator: Optional[EligibilityService] = None):
        self.evaluator = evaluator or eligibility_service

    def evaluate_all(
        self,
        profile: Union[UserProfile, Dict[str, Any]],
        corpus: Corpus,
        on_progress: Optional[ProgressCallback] = None,
        max_workers: Optional[int] = None,
        reference_date: Optional[date] = None,
    ) -> BatchResult:
        """
        Evaluate a candidate against every exam in a corpus

        An exam that fails to resolve or evaluate is logged, recorded under
        ``skipped`` and the scan continues with the remaining exams.

        Args:
            profile: Candidate profile or plain mapping
            corpus: Exam code -> raw exam record, or an iterable of records carrying exam_code
            on_progress: Called as on_progress(exam_label, current, total) once per exam
            max_workers: Thread pool size; 1 evaluates sequentially (defaults to settings)
            reference_date: Age cut-off date for units without a session

        Returns:
            BatchResult with verdicts merged in corpus order
        """
        profile = UserProfile.coerce(profile)
        items = _corpus_items(corpus)
        total = len(items)
        workers = max_workers if max_workers is not None else settings.batch_max_workers

        outcomes: Dict[int, Union[List[TaggedDivisionVerdict], SkippedExam]] = {}
        if workers <= 1 or total <= 1:
            for index, (code, record) in enumerate(items):
                _notify(on_progress, _label(code, record), index + 1, total)
                outcomes[index] = self._evaluate_one(profile, code, record, reference_date)
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {
                    executor.submit(self._evaluate_one, profile, code, record, reference_date): index
                    for index, (code, record) in enumerate(items)
                }
                completed = 0
                for future in as_completed(futures):
                    index = futures[future]
                    outcomes[index] = future.result()
                    completed += 1
                    code, record = items[index]
                    _notify(on_progress, _label(code, record), completed, total)

        result = BatchResult(total_exams_checked=total)
        for index in range(total):
            outcome = outcomes[index]
            if isinstance(outcome, SkippedExam):
                result.skipped.append(outcome)
                continue
            for verdict in outcome:
                (result.eligible if verdict.eligible else result.ineligible).append(verdict)
        result.eligible_count = len(result.eligible)
        result.ineligible_count = len(result.ineligible)

        logger.info(
            f"Eligibility scan completed: {result.eligible_count} eligible, "
            f"{result.ineligible_count} ineligible across {total} exams ({len(result.skipped)} skipped)"
        )
        return result

    def _evaluate_one(
        self,
        profile: UserProfile,
        code: str,
        record: Any,
        reference_date: Optional[date],
    ) -> Union[List[TaggedDivisionVerdict], SkippedExam]:
        try:
            exam: ExamRecord = resolve_exam(record, exam_code=code)
            verdicts = self.evaluator.evaluate(profile, exam, reference_date=reference_date)
        except Exception as e:
            logger.error(f"Error checking exam {code}: {e}")
            return SkippedExam(exam_code=code, error=str(e))

        return [
            TaggedDivisionVerdict(
                **verdict.model_dump(),
                exam_code=code,
                exam_name=exam.exam_name,
                exam_label=exam.exam_label,
                conducting_body=exam.conducting_body,
                exam_level=exam.exam_level,
            )
            for verdict in verdicts
        ]

    def summarize_eligible(self, eligible: List[TaggedDivisionVerdict]) -> List[ExamSummary]:
        """
        Group eligible verdicts by exam

        Returns:
            One ExamSummary per exam, most eligible units first
        """
        summaries: Dict[str, ExamSummary] = {}
        for verdict in eligible:
            summary = summaries.get(verdict.exam_code)
            if summary is None:
                summary = ExamSummary(
                    exam_code=verdict.exam_code, exam_name=verdict.exam_name, exam_label=verdict.exam_label
                )
                summaries[verdict.exam_code] = summary
            summary.total_eligible += 1
            if verdict.division != FLAT_DIVISION and verdict.division not in summary.divisions:
                summary.divisions.append(verdict.division)
            if verdict.session != NO_SESSION and verdict.session not in summary.sessions:
                summary.sessions.append(verdict.session)

        return sorted(summaries.values(), key=lambda s: s.total_eligible, reverse=True)

    def filter_results(
        self,
        results: List[TaggedDivisionVerdict],
        exam_level: Optional[str] = None,
        conducting_body: Optional[str] = None,
        exam_name: Optional[str] = None,
    ) -> List[TaggedDivisionVerdict]:
        """
        Filter tagged verdicts by exam metadata

        Args:
            results: Verdicts to filter
            exam_level: Exact exam level, case-insensitive; exams without a level pass
            conducting_body: Substring of the conducting body, case-insensitive
            exam_name: Substring of the exam name or label, case-insensitive

        Returns:
            Verdicts matching every given filter
        """
        filtered = []
        for result in results:
            if exam_level and result.exam_level and result.exam_level.lower() != exam_level.lower():
                continue
            if conducting_body and result.conducting_body and conducting_body.lower() not in result.conducting_body.lower():
                continue
            if exam_name:
                wanted = exam_name.lower()
                if wanted not in result.exam_name.lower() and wanted not in result.exam_label.lower():
                    continue
            filtered.append(result)
        return filtered


# Global batch service instance
batch_service = BatchService()
