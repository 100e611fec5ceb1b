"""
Models package.
"""
from mockprep.models.questions import (
    InterviewFormat,
    FORMAT_QUESTION_COUNTS,
    QuestionKind,
    QuestionDifficulty,
    QuestionOrigin,
    DEFAULT_TIME_LIMITS,
    Question,
    GenerationRequest,
    GenerationResult,
)

__all__ = [
    "InterviewFormat",
    "FORMAT_QUESTION_COUNTS",
    "QuestionKind",
    "QuestionDifficulty",
    "QuestionOrigin",
    "DEFAULT_TIME_LIMITS",
    "Question",
    "GenerationRequest",
    "GenerationResult",
]
