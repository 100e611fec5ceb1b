"""
Question Generation Service.

Produces a fixed-size interview question set for a subject selection or a
resume. The LLM path is best effort: any configuration, transport or format
failure degrades to the static question bank, so callers always receive a
count-correct, fully populated result.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from mockprep.core.config import Settings, get_model_config, get_settings
from mockprep.core.exceptions import ConfigurationError, LLMResponseError
from mockprep.models.questions import (
    GenerationRequest,
    GenerationResult,
    InterviewFormat,
    Question,
    QuestionOrigin,
)
from mockprep.providers.llm import (
    BaseLLMProvider,
    GenerationConfig,
    system_message,
    user_message,
    get_llm_provider_sync,
)
from mockprep.services.prompts import (
    INTERVIEWER_SYSTEM_PROMPT,
    build_resume_prompt,
    build_subject_prompt,
)
from mockprep.services.question_bank import QuestionBankService, get_question_bank
from mockprep.services.response_parser import (
    normalize_questions,
    parse_llm_response,
    renumber,
)

logger = logging.getLogger(__name__)

# Shorter extracted resume text is treated as "no resume"
MIN_RESUME_CHARS = 100

DEFAULT_GENERATION_PARAMS: Dict[str, Dict[str, Any]] = {
    "subjects": {"max_tokens": 1500, "temperature": 0.8},
    "resume": {"max_tokens": 2500, "temperature": 0.7},
}


def has_usable_resume(resume_text: Optional[str]) -> bool:
    return bool(resume_text) and len(resume_text.strip()) >= MIN_RESUME_CHARS


class QuestionGenerator:
    """
    Service for generating interview question sets.

    Constructed once per process with injected settings; holds no
    per-request state, so concurrent calls do not interact.
    """

    def __init__(
        self,
        llm_provider: Optional[BaseLLMProvider] = None,
        settings: Optional[Settings] = None,
        question_bank: Optional[QuestionBankService] = None,
        generation_params: Optional[Dict[str, Dict[str, Any]]] = None,
    ):
        """
        Initialize the question generator.

        Args:
            llm_provider: LLM provider instance. If None, created from the
                factory on first use.
            settings: Application settings. If None, uses cached settings.
            question_bank: Fallback bank. If None, uses the shared instance.
            generation_params: Per-origin max_tokens/temperature. If None,
                read from config/models.yaml.
        """
        self.settings = settings or get_settings()
        self._llm = llm_provider
        self.question_bank = question_bank or get_question_bank()
        self.generation_params = generation_params or self._load_generation_params()

        if self.settings.has_valid_llm_key:
            logger.info("Question generator initialized with Groq")
        else:
            logger.warning("GROQ_API_KEY not found or invalid; fallback questions only")

    @staticmethod
    def _load_generation_params() -> Dict[str, Dict[str, Any]]:
        try:
            configured = get_model_config().get("generation", {})
        except FileNotFoundError as e:
            logger.warning(f"{e}; using default generation parameters")
            configured = {}
        return {
            origin: {**defaults, **(configured.get(origin) or {})}
            for origin, defaults in DEFAULT_GENERATION_PARAMS.items()
        }

    @property
    def llm(self) -> BaseLLMProvider:
        if self._llm is None:
            self._llm = get_llm_provider_sync()
        return self._llm

    def _generation_config(self, origin: QuestionOrigin) -> GenerationConfig:
        params = self.generation_params[origin.value]
        return GenerationConfig(
            max_tokens=int(params["max_tokens"]),
            temperature=float(params["temperature"]),
            json_mode=True,
        )

    async def generate_questions(
        self,
        subject_tags: List[str],
        interview_type: str,
        resume_text: Optional[str] = None,
    ) -> GenerationResult:
        """Convenience wrapper building a GenerationRequest."""
        request = GenerationRequest(
            subject_tags=subject_tags,
            format=InterviewFormat.resolve(interview_type),
            resume_text=resume_text,
        )
        return await self.generate(request)

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Generate a question set for one interview.

        Never raises for LLM problems: on any failure the fallback bank
        answers and ``used_external_model`` is False.
        """
        count = request.question_count
        origin = QuestionOrigin.RESUME if has_usable_resume(request.resume_text) else QuestionOrigin.SUBJECTS

        logger.info(
            f"Question generation: subjects={request.subject_tags} "
            f"format={request.format.value} origin={origin.value}"
        )

        try:
            questions, model = await self._generate_with_llm(request, origin, count)
        except ConfigurationError as e:
            logger.info(f"Using fallback ({e.message})")
            return self._fallback_result(request, origin, count)
        except asyncio.TimeoutError:
            logger.error(f"Groq generation timed out after {self.settings.llm_timeout_seconds}s")
            return self._fallback_result(request, origin, count)
        except (httpx.HTTPError, LLMResponseError) as e:
            logger.error(f"Groq generation error: {e}")
            return self._fallback_result(request, origin, count)
        except Exception as e:
            logger.exception(f"Unexpected error during Groq generation: {e}")
            return self._fallback_result(request, origin, count)

        if not questions:
            logger.warning("No usable questions in Groq response, using fallback")
            return self._fallback_result(request, origin, count)

        if len(questions) < count:
            logger.warning(f"Groq gave {len(questions)}/{count} questions, padding from question bank")
            # Draw past ``count`` so texts the model already asked can be skipped
            filler = self._fallback_questions(request, origin, count + len(questions))
            questions = self._pad(questions, filler, count)

        logger.info(f"Generated {len(questions)} questions with {model}")
        return GenerationResult(
            questions=questions,
            used_external_model=True,
            origin=origin,
            model=model,
        )

    async def _generate_with_llm(
        self,
        request: GenerationRequest,
        origin: QuestionOrigin,
        count: int,
    ):
        if not self.settings.has_valid_llm_key:
            raise ConfigurationError("no valid API key")

        if origin is QuestionOrigin.RESUME:
            prompt = build_resume_prompt(request.resume_text, count)
        else:
            prompt = build_subject_prompt(request.subject_tags, count)

        messages = [
            system_message(INTERVIEWER_SYSTEM_PROMPT),
            user_message(prompt),
        ]

        logger.info(f"Calling Groq API ({origin.value} mode)...")
        response = await asyncio.wait_for(
            self.llm.generate(messages, self._generation_config(origin)),
            timeout=self.settings.llm_timeout_seconds,
        )

        parsed = parse_llm_response(response.content)
        logger.debug(f"Groq response shape: {parsed.shape.value} ({len(parsed.items)} items)")
        logger.info(f"Groq response used {response.tokens_used} tokens")
        return normalize_questions(parsed.items, count), response.model

    def _fallback_questions(
        self,
        request: GenerationRequest,
        origin: QuestionOrigin,
        count: int,
    ) -> List[Question]:
        if origin is QuestionOrigin.RESUME:
            return self.question_bank.resume_questions(count)
        return self.question_bank.subject_questions(request.subject_tags, count)

    def _fallback_result(
        self,
        request: GenerationRequest,
        origin: QuestionOrigin,
        count: int,
    ) -> GenerationResult:
        return GenerationResult(
            questions=self._fallback_questions(request, origin, count),
            used_external_model=False,
            origin=origin,
        )

    @staticmethod
    def _pad(questions: List[Question], filler: List[Question], count: int) -> List[Question]:
        """
        Append filler questions until ``count`` is reached.

        Texts not yet in the set are taken first. Repeats of bank texts are
        used only once the bank has no new texts left, and texts the model
        already asked come last.
        """
        padded = list(questions)
        model_texts = {q.text.lower() for q in questions}
        asked = set(model_texts)
        unused = list(filler)
        for is_allowed in (
            lambda text: text not in asked,
            lambda text: text not in model_texts,
            lambda text: True,
        ):
            leftover = []
            for question in unused:
                text = question.text.lower()
                if len(padded) < count and is_allowed(text):
                    padded.append(question)
                    asked.add(text)
                else:
                    leftover.append(question)
            unused = leftover
        return renumber(padded)


# Global instance (lazy loaded)
_question_generator: Optional[QuestionGenerator] = None


def get_question_generator() -> QuestionGenerator:
    """Get or create the question generator instance."""
    global _question_generator
    if _question_generator is None:
        _question_generator = QuestionGenerator()
    return _question_generator
