"""
LLM response parsing and question normalization.

Model output is matched against an explicit, ordered list of recognised
shapes. Whatever candidate list is recovered, and every fallback-bank entry,
goes through the same ``normalize_questions`` step so a question set always
has the mandated length and fully populated fields.
"""
import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from mockprep.models.questions import (
    DEFAULT_TIME_LIMITS,
    Question,
    QuestionDifficulty,
    QuestionKind,
)

logger = logging.getLogger(__name__)

# Keys, in priority order, under which models wrap their question arrays
WRAPPER_KEYS = ("questions", "interviewQuestions", "interview_questions", "items", "data")

MAX_TEXT_QUESTIONS = 15
MIN_TEXT_QUESTION_CHARS = 10

_ENUMERATION_PREFIX = re.compile(r"^(?:(?:Q(?:uestion)?\s*)?\d+\s*[:.)\-]*|[\-•*]+)\s*", re.IGNORECASE)
# A `"key": "value",` line from truncated JSON
_KEY_VALUE_LINE = re.compile(r'^"?[A-Za-z_]+"?\s*:\s*"(.+?)"?,?$')

# Per-field aliases seen in model output
_TEXT_KEYS = ("question", "text", "questionText", "question_text")
_KIND_KEYS = ("type", "kind")
_TIME_KEYS = ("timeLimit", "time_limit", "timeLimitSeconds", "time_limit_seconds", "duration_seconds")
_HINT_KEYS = ("basedOn", "based_on", "sourceHint", "source_hint")


class ResponseShape(str, Enum):
    """Recognised shapes of raw model output."""
    BARE_ARRAY = "bare_array"
    WRAPPED_ARRAY = "wrapped_array"
    FIRST_ARRAY_FIELD = "first_array_field"  # object with its array under an unknown key
    EMBEDDED_ARRAY = "embedded_array"  # JSON array surrounded by prose
    TEXT_LINES = "text_lines"
    UNKNOWN = "unknown"


@dataclass
class ParsedResponse:
    """Candidate question entries recovered from model output."""
    shape: ResponseShape
    items: List[Any] = field(default_factory=list)


def _strip_code_fence(content: str) -> str:
    """Remove a surrounding markdown code block, if any."""
    if "```json" in content:
        start = content.find("```json") + 7
        end = content.find("```", start)
        return content[start:end if end != -1 else None].strip()
    if "```" in content:
        start = content.find("```") + 3
        end = content.find("```", start)
        return content[start:end if end != -1 else None].strip()
    return content


def _match_json_shape(data: Any) -> Optional[ParsedResponse]:
    if isinstance(data, list):
        return ParsedResponse(ResponseShape.BARE_ARRAY, data)
    if isinstance(data, dict):
        for key in WRAPPER_KEYS:
            if isinstance(data.get(key), list):
                return ParsedResponse(ResponseShape.WRAPPED_ARRAY, data[key])
        # Unknown key: the first array of question objects, then the first
        # array of question strings, in insertion order
        arrays = [(key, value) for key, value in data.items() if isinstance(value, list)]
        for wants_objects in (True, False):
            for key, value in arrays:
                if any(
                    isinstance(item, dict) == wants_objects and _question_text(item)
                    for item in value
                ):
                    logger.info(f"Using question array under unrecognised key {key!r}")
                    return ParsedResponse(ResponseShape.FIRST_ARRAY_FIELD, value)
    return None


def extract_questions_from_text(text: str) -> List[Dict[str, Any]]:
    """
    Pull question-looking lines out of free text.

    A candidate line is longer than 10 characters and contains a question
    mark; leading enumeration markers ("1.", "Q2:", "-") are stripped.
    """
    questions = []
    for line in text.splitlines():
        line = line.strip()
        if len(line) <= MIN_TEXT_QUESTION_CHARS or "?" not in line:
            continue
        key_value = _KEY_VALUE_LINE.match(line)
        if key_value:
            line = key_value.group(1)
        cleaned = _ENUMERATION_PREFIX.sub("", line).strip()
        if not cleaned:
            continue
        entry: Dict[str, Any] = {"question": cleaned}
        if "resume" in cleaned.lower():
            entry["basedOn"] = "Resume content"
        questions.append(entry)
        if len(questions) >= MAX_TEXT_QUESTIONS:
            break
    return questions


def parse_llm_response(content: str) -> ParsedResponse:
    """
    Recover a list of candidate question entries from raw model output.

    Shapes are tried in order: bare JSON array, JSON object wrapping an
    array under a known key, JSON object with the first array of question
    entries under any other key, JSON array embedded in prose, then question
    lines in plain text. Text that parses as JSON is never handed to the
    line heuristic.
    """
    if not content or not content.strip():
        return ParsedResponse(ResponseShape.UNKNOWN)

    body = _strip_code_fence(content.strip())

    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        logger.debug(f"LLM response is not plain JSON: {e}")
        start, end = body.find("["), body.rfind("]")
        if start != -1 and end > start:
            try:
                data = json.loads(body[start:end + 1])
                if isinstance(data, list):
                    return ParsedResponse(ResponseShape.EMBEDDED_ARRAY, data)
            except json.JSONDecodeError:
                pass
    else:
        parsed = _match_json_shape(data)
        if parsed is not None:
            return parsed
        logger.warning(f"LLM returned JSON without a question array: {body[:200]!r}")
        return ParsedResponse(ResponseShape.UNKNOWN)

    text_questions = extract_questions_from_text(content)
    if text_questions:
        return ParsedResponse(ResponseShape.TEXT_LINES, text_questions)

    logger.warning(f"Could not recover questions from LLM response: {content[:200]!r}")
    return ParsedResponse(ResponseShape.UNKNOWN)


def _first(entry: Dict[str, Any], keys) -> Any:
    for key in keys:
        value = entry.get(key)
        if value not in (None, ""):
            return value
    return None


def _question_text(entry: Any) -> Optional[str]:
    if isinstance(entry, str):
        text = entry
    elif isinstance(entry, dict):
        text = _first(entry, _TEXT_KEYS)
    else:
        return None
    if not isinstance(text, str):
        return None
    text = text.strip()
    return text or None


def positional_difficulty(index: int, count: int) -> QuestionDifficulty:
    """First third easy, middle third medium, last third hard."""
    if 3 * index < count:
        return QuestionDifficulty.EASY
    if 3 * index < 2 * count:
        return QuestionDifficulty.MEDIUM
    return QuestionDifficulty.HARD


def infer_kind(text: str) -> QuestionKind:
    if "behavior" in text.lower():
        return QuestionKind.BEHAVIORAL
    return QuestionKind.TECHNICAL


def _coerce_kind(value: Any, text: str) -> QuestionKind:
    if isinstance(value, str):
        try:
            return QuestionKind(value.strip().lower())
        except ValueError:
            pass
    return infer_kind(text)


def _coerce_difficulty(value: Any, index: int, count: int) -> QuestionDifficulty:
    if isinstance(value, str):
        try:
            return QuestionDifficulty(value.strip().lower())
        except ValueError:
            pass
    return positional_difficulty(index, count)


def _coerce_time_limit(value: Any, difficulty: QuestionDifficulty) -> int:
    if not isinstance(value, bool):
        try:
            seconds = int(float(value))
            if seconds > 0:
                return seconds
        except (TypeError, ValueError):
            pass
    return DEFAULT_TIME_LIMITS[difficulty]


def normalize_question(entry: Any, index: int, count: int) -> Optional[Question]:
    """
    Build a fully populated Question from one raw entry.

    ``index`` is the 0-based position in the final set and ``count`` the
    set size. Returns None when the entry has no usable question text.
    """
    text = _question_text(entry)
    if text is None:
        return None
    raw: Dict[str, Any] = entry if isinstance(entry, dict) else {}

    difficulty = _coerce_difficulty(raw.get("difficulty"), index, count)
    category = raw.get("category")
    hint = _first(raw, _HINT_KEYS)

    return Question(
        id=index + 1,
        text=text,
        kind=_coerce_kind(_first(raw, _KIND_KEYS), text),
        category=category.strip() if isinstance(category, str) and category.strip() else "General",
        difficulty=difficulty,
        time_limit_seconds=_coerce_time_limit(_first(raw, _TIME_KEYS), difficulty),
        source_hint=hint.strip() if isinstance(hint, str) else "",
    )


def normalize_questions(entries: List[Any], count: int) -> List[Question]:
    """
    Validate and force-limit raw entries to at most ``count`` questions.

    Entries without question text are dropped, the rest are truncated to
    ``count`` and numbered sequentially from 1. The caller pads short lists.
    """
    usable = [entry for entry in entries if _question_text(entry) is not None]
    if len(usable) > count:
        logger.info(f"Model gave {len(usable)} questions, limiting to {count}")
    questions = []
    for entry in usable[:count]:
        question = normalize_question(entry, len(questions), count)
        if question is not None:
            questions.append(question)
    return questions


def renumber(questions: List[Question]) -> List[Question]:
    """Return copies of ``questions`` with ids 1..n in list order."""
    return [q.model_copy(update={"id": i + 1}) for i, q in enumerate(questions)]
