"""
Corpus service for loading exam records from JSON files
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import settings
from ..exceptions import ExamCheckError, ExamNotFoundError
from ..models.exam import ExamInfo, ExamRecord
from .division_resolver import describe_exam, resolve_exam

logger = logging.getLogger(__name__)


class CorpusService:
    """Service for the read-only exam corpus"""

    def __init__(self, data_dir: Optional[str] = None):
        self.data_dir = data_dir
        self.exams: Dict[str, Any] = {}
        self.load_errors: Dict[str, str] = {}
        self.loaded = False

    def load(self, data_dir: Optional[str] = None) -> int:
        """
        Load every exam record under the data directory

        Files are read recursively in sorted path order. A file holding a
        record is keyed by its exam_code (or the file stem); a file holding an
        object of records is merged entry by entry. Unreadable files are
        logged and recorded in ``load_errors``.

        Args:
            data_dir: Directory to read (defaults to settings.exam_data_dir)

        Returns:
            Number of exam records loaded
        """
        if data_dir is not None:
            self.data_dir = data_dir
        root = Path(self.data_dir or settings.exam_data_dir)

        self.exams = {}
        self.load_errors = {}
        self.loaded = True

        if not root.is_dir():
            logger.warning(f"Exam data directory not found: {root}")
            return 0

        for path in sorted(root.rglob("*.json")):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load exam file {path}: {e}")
                self.load_errors[str(path)] = str(e)
                continue
            self._add(path, data)

        logger.info(f"Loaded {len(self.exams)} exams from {root}")
        return len(self.exams)

    def _add(self, path: Path, data: Any):
        if isinstance(data, dict) and not self._is_record(data):
            for code, record in data.items():
                self.exams[str(code)] = record
            return
        code = data.get("exam_code") if isinstance(data, dict) else None
        self.exams[str(code or path.stem.upper())] = data

    @staticmethod
    def _is_record(data: Dict[str, Any]) -> bool:
        # Corpus files hold objects of records; a record carries scalar identity fields
        return any(key in data for key in ("exam_code", "exam_name", "exam_label")) or not all(
            isinstance(value, dict) for value in data.values()
        )

    def corpus(self) -> Dict[str, Any]:
        """Ordered mapping of exam code to raw exam record"""
        if not self.loaded:
            self.load()
        return dict(self.exams)

    def get_raw(self, exam_code: str) -> Any:
        """
        Get the raw record for an exam code

        Raises:
            ExamNotFoundError: If no exam matches the code (case-insensitive)
        """
        exams = self.corpus()
        if exam_code in exams:
            return exams[exam_code]
        for code, record in exams.items():
            if code.upper() == exam_code.upper():
                return record
        raise ExamNotFoundError(f"Exam not found: {exam_code}")

    def get_exam(self, exam_code: str) -> ExamRecord:
        """Resolve the record for an exam code"""
        return resolve_exam(self.get_raw(exam_code), exam_code=exam_code)

    def list_exams(self) -> List[ExamInfo]:
        """Listing entries for every exam that resolves; malformed records are left out"""
        exams = []
        for code, record in self.corpus().items():
            try:
                exams.append(describe_exam(resolve_exam(record, exam_code=code)))
            except ExamCheckError as e:
                logger.warning(f"Skipping malformed exam {code}: {e}")
        return exams


# Global corpus service instance
corpus_service = CorpusService()
