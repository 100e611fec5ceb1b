"""
pytest configuration and shared fixtures.
"""
import json
import os

import pytest
from unittest.mock import AsyncMock, MagicMock

# Never pick up a developer's real key during tests
os.environ.pop("GROQ_API_KEY", None)

from mockprep.core.config import Settings
from mockprep.providers.llm import LLMResponse
from mockprep.services.question_bank import QuestionBankService
from mockprep.services.question_generator import DEFAULT_GENERATION_PARAMS, QuestionGenerator


_SAMPLE_RESUME_TEXT = """
Jane Smith
Software Engineer | jane.smith@email.com | github.com/janesmith

SUMMARY
Backend engineer with 4 years of experience building Python and Node.js services,
REST APIs and data pipelines on AWS.

SKILLS
Python, FastAPI, Django, Node.js, Express, MongoDB, PostgreSQL, Redis, Docker, Kubernetes, AWS

EXPERIENCE
Software Engineer | CloudWorks | 2021 - Present
- Built an event ingestion pipeline processing 2M events per day with Kafka and Python
- Cut p95 API latency by 35% by introducing Redis caching
- Mentored two interns and ran weekly code reviews

Junior Developer | WebStart | 2019 - 2021
- Developed Express and React dashboards for internal analytics
- Migrated a monolith's reporting module to a standalone service

PROJECTS
InterviewBuddy - mock interview platform with speech-to-text answers and AI feedback
TrafficLens - computer vision prototype counting vehicles from CCTV streams

EDUCATION
B.Tech in Computer Science, State Technical University, 2019
"""


def _long_resume_text(min_chars: int = 2000) -> str:
    text = _SAMPLE_RESUME_TEXT
    while len(text) < min_chars:
        text += _SAMPLE_RESUME_TEXT
    return text


def _make_llm_response(payload, model: str = "llama-3.1-8b-instant") -> LLMResponse:
    """Wrap a JSON-serialisable payload (or raw text) in an LLMResponse."""
    content = payload if isinstance(payload, str) else json.dumps(payload)
    return LLMResponse(
        content=content,
        model=model,
        finish_reason="stop",
        usage={"prompt_tokens": 50, "completion_tokens": 50, "total_tokens": 100},
    )


def _make_model_questions(n: int, category: str = "Computer Networks") -> list:
    """n question objects as a well-behaved model would return them."""
    return [
        {
            "id": i + 1,
            "question": f"Model question number {i + 1}: how does feature {i + 1} work?",
            "type": "technical",
            "category": category,
            "difficulty": "medium",
            "timeLimit": 60,
        }
        for i in range(n)
    ]


@pytest.fixture
def sample_resume_text() -> str:
    return _SAMPLE_RESUME_TEXT


@pytest.fixture
def resume_text_of():
    """Factory: the sample resume repeated until it is at least ``min_chars`` long."""
    return _long_resume_text


@pytest.fixture
def llm_response():
    """Factory: wrap a JSON-serialisable payload (or raw text) in an LLMResponse."""
    return _make_llm_response


@pytest.fixture
def model_questions():
    """Factory: n question objects as a well-behaved model would return them."""
    return _make_model_questions


@pytest.fixture
def valid_settings() -> Settings:
    return Settings(groq_api_key="gsk_test_key_123", llm_timeout_seconds=0.5)


@pytest.fixture
def no_key_settings() -> Settings:
    return Settings(groq_api_key=None)


@pytest.fixture
def question_bank() -> QuestionBankService:
    return QuestionBankService()


@pytest.fixture
def mock_llm():
    """Create a mock LLM provider."""
    mock = MagicMock()
    mock.generate = AsyncMock()
    return mock


@pytest.fixture
def generator(mock_llm, valid_settings, question_bank) -> QuestionGenerator:
    """QuestionGenerator with a valid key and a mock LLM."""
    return QuestionGenerator(
        llm_provider=mock_llm,
        settings=valid_settings,
        question_bank=question_bank,
        generation_params=DEFAULT_GENERATION_PARAMS,
    )


@pytest.fixture
def offline_generator(mock_llm, no_key_settings, question_bank) -> QuestionGenerator:
    """QuestionGenerator without an API key."""
    return QuestionGenerator(
        llm_provider=mock_llm,
        settings=no_key_settings,
        question_bank=question_bank,
        generation_params=DEFAULT_GENERATION_PARAMS,
    )
