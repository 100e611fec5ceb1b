"""
Services package.
"""
from mockprep.services.document_processor import DocumentProcessor, get_document_processor
from mockprep.services.question_bank import QuestionBankService, get_question_bank
from mockprep.services.question_generator import (
    QuestionGenerator,
    get_question_generator,
    has_usable_resume,
    MIN_RESUME_CHARS,
)
from mockprep.services.response_parser import (
    ResponseShape,
    ParsedResponse,
    parse_llm_response,
    normalize_question,
    normalize_questions,
)

__all__ = [
    # Document processing
    "DocumentProcessor",
    "get_document_processor",
    # Fallback bank
    "QuestionBankService",
    "get_question_bank",
    # Question generation
    "QuestionGenerator",
    "get_question_generator",
    "has_usable_resume",
    "MIN_RESUME_CHARS",
    # Response parsing
    "ResponseShape",
    "ParsedResponse",
    "parse_llm_response",
    "normalize_question",
    "normalize_questions",
]
