"""
Interview Question Data Models.

Models for question sets produced by the generation service and for the
JSON shape the frontend consumes.
"""
from enum import Enum
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


class InterviewFormat(str, Enum):
    """Interview formats offered on the dashboard."""
    QUICK = "quick"   # Quick Random
    TIMED = "timed"   # Timer Test
    MOCK = "mock"     # Mock Interview

    @property
    def question_count(self) -> int:
        return FORMAT_QUESTION_COUNTS[self]

    @classmethod
    def resolve(cls, tag: Optional[str]) -> "InterviewFormat":
        """Map a format tag to a format; unknown tags become QUICK."""
        try:
            return cls((tag or "").strip().lower())
        except ValueError:
            return cls.QUICK


FORMAT_QUESTION_COUNTS: Dict[InterviewFormat, int] = {
    InterviewFormat.QUICK: 5,
    InterviewFormat.TIMED: 10,
    InterviewFormat.MOCK: 15,
}


class QuestionKind(str, Enum):
    """What area a question covers."""
    TECHNICAL = "technical"
    BEHAVIORAL = "behavioral"
    SCENARIO = "scenario"
    HR = "hr"
    PROJECT = "project"


class QuestionDifficulty(str, Enum):
    """Difficulty levels for questions."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuestionOrigin(str, Enum):
    """Which generation path produced a question set."""
    SUBJECTS = "subjects"
    RESUME = "resume"


# Default answer time per difficulty, in seconds
DEFAULT_TIME_LIMITS: Dict[QuestionDifficulty, int] = {
    QuestionDifficulty.EASY: 45,
    QuestionDifficulty.MEDIUM: 60,
    QuestionDifficulty.HARD: 75,
}


class Question(BaseModel):
    """A single, fully populated interview question."""
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(ge=1)
    text: str = Field(serialization_alias="question")
    kind: QuestionKind = Field(serialization_alias="type")
    category: str = "General"
    difficulty: QuestionDifficulty
    time_limit_seconds: int = Field(gt=0, serialization_alias="timeLimit")
    source_hint: str = Field(default="", serialization_alias="basedOn")

    def to_dict(self) -> Dict[str, Any]:
        """Frontend wire shape (question/type/timeLimit/basedOn keys)."""
        return self.model_dump(mode="json", by_alias=True)


class GenerationRequest(BaseModel):
    """Input to one question-generation call."""
    subject_tags: List[str] = Field(default_factory=list)
    format: InterviewFormat = InterviewFormat.QUICK
    resume_text: Optional[str] = None

    @field_validator("format", mode="before")
    @classmethod
    def resolve_format(cls, value: Any) -> InterviewFormat:
        if isinstance(value, InterviewFormat):
            return value
        return InterviewFormat.resolve(value)

    @field_validator("subject_tags", mode="before")
    @classmethod
    def normalize_tags(cls, value: Any) -> List[str]:
        if value is None:
            return []
        return [str(tag).strip().lower() for tag in value if str(tag).strip()]

    @property
    def question_count(self) -> int:
        return self.format.question_count


class GenerationResult(BaseModel):
    """Output of one question-generation call."""
    questions: List[Question]
    used_external_model: bool
    origin: QuestionOrigin
    model: Optional[str] = None

    def to_response_dict(self) -> Dict[str, Any]:
        """Response body for the questions API."""
        return {
            "success": True,
            "questions": [q.to_dict() for q in self.questions],
            "isAI": self.used_external_model,
            "source": self.origin.value,
            "model": self.model,
        }
