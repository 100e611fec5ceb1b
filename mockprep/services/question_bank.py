"""
Fallback Question Bank Service.

Serves the hand-authored questions used whenever the LLM path cannot be used.
The bank is stored as JSONL files (one per subject tag, plus resume-flavored
and generic filler sets), loaded lazily and cached in memory.
"""
import json
import logging
from itertools import cycle, islice
from pathlib import Path
from typing import Dict, List, Optional

from mockprep.models.questions import Question
from mockprep.services.response_parser import normalize_questions

logger = logging.getLogger(__name__)

# Default path to question bank
DEFAULT_QUESTION_BANK_PATH = Path(__file__).parent.parent.parent / "questionBank"

RESUME_SET = "resume"
GENERIC_SET = "generic"


class QuestionBankService:
    """
    Service for loading the static fallback question bank.

    Features:
    - Lazy loading of subject sets on demand
    - JSONL format parsing
    - In-memory caching of loaded sets
    - Deterministic selection: identical input always yields the same set
    """

    def __init__(self, bank_path: Optional[Path] = None):
        """
        Initialize the question bank service.

        Args:
            bank_path: Path to the question bank directory.
                       Defaults to questionBank/
        """
        self.bank_path = bank_path or DEFAULT_QUESTION_BANK_PATH

        # Cache of loaded sets: set name -> raw entries
        self._loaded: Dict[str, List[dict]] = {}
        self._available_subjects: Optional[List[str]] = None

    def list_available_subjects(self) -> List[str]:
        """List subject tags that have a bank file."""
        if self._available_subjects is not None:
            return self._available_subjects

        subjects_dir = self.bank_path / "subjects"
        if not subjects_dir.exists():
            logger.warning(f"Question bank path does not exist: {subjects_dir}")
            return []

        self._available_subjects = sorted(p.stem for p in subjects_dir.glob("*.jsonl"))
        logger.info(f"Found {len(self._available_subjects)} subject sets: {self._available_subjects}")
        return self._available_subjects

    def _load_file(self, name: str, file_path: Path) -> List[dict]:
        if name in self._loaded:
            return self._loaded[name]

        if not file_path.exists():
            logger.warning(f"Question bank file not found: {file_path}")
            self._loaded[name] = []
            return []

        entries = []
        with open(file_path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    entry = json.loads(line)
                except json.JSONDecodeError as e:
                    logger.warning(f"Skipping invalid JSON at {file_path.name}:{line_num}: {e}")
                    continue
                if isinstance(entry, dict) and entry.get("question"):
                    entries.append(entry)

        self._loaded[name] = entries
        logger.debug(f"Loaded {len(entries)} questions from '{file_path.name}'")
        return entries

    def load_subject(self, subject: str) -> List[dict]:
        """Raw entries for one subject tag; unknown tags give an empty list."""
        subject = subject.strip().lower()
        if subject == RESUME_SET:
            return self.load_resume_set()
        return self._load_file(f"subject:{subject}", self.bank_path / "subjects" / f"{subject}.jsonl")

    def load_resume_set(self) -> List[dict]:
        return self._load_file(RESUME_SET, self.bank_path / f"{RESUME_SET}.jsonl")

    def load_generic_set(self) -> List[dict]:
        return self._load_file(GENERIC_SET, self.bank_path / f"{GENERIC_SET}.jsonl")

    def _fill(self, entries: List[dict], count: int) -> List[Question]:
        """Truncate to ``count`` and pad with generic filler, cycled in order."""
        selected = list(entries[:count])
        generic = self.load_generic_set()
        if len(selected) < count and generic:
            selected.extend(islice(cycle(generic), count - len(selected)))
        questions = normalize_questions(selected, count)
        if len(questions) < count:
            logger.error(f"Question bank could only supply {len(questions)}/{count} questions")
        return questions

    def subject_questions(self, subject_tags: List[str], count: int) -> List[Question]:
        """
        Fallback questions for the given subjects.

        Subjects are consumed in request order; generic filler questions
        pad the remainder up to ``count``.
        """
        entries: List[dict] = []
        for tag in subject_tags:
            if len(entries) >= count:
                break
            entries.extend(self.load_subject(tag))
        logger.info(f"Using subject fallback questions for {subject_tags}")
        return self._fill(entries, count)

    def resume_questions(self, count: int) -> List[Question]:
        """Resume-flavored fallback questions padded to ``count``."""
        logger.info("Using resume fallback questions")
        return self._fill(self.load_resume_set(), count)


# Global instance (lazy loaded)
_question_bank: Optional[QuestionBankService] = None


def get_question_bank() -> QuestionBankService:
    """Get or create the question bank instance."""
    global _question_bank
    if _question_bank is None:
        _question_bank = QuestionBankService()
    return _question_bank
