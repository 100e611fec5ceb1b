"""
Custom exceptions for the Mock Interview service.

Question generation absorbs all of these internally and degrades to the
fallback bank; only the HTTP layer ever turns an exception into a response.
"""
import logging
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(AppError):
    """Raised when configuration is invalid or missing (e.g. no API key)."""
    pass


class LLMResponseError(AppError):
    """Raised when the LLM API returns a body that is not a chat completion."""
    pass


class DocumentExtractionError(AppError):
    """Raised when an uploaded document type is not supported."""
    pass


async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"success": False, "detail": "Internal Server Error"},
    )


async def app_exception_handler(request: Request, exc: AppError):
    logger.warning(f"Application error: {exc.message}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "detail": exc.message, **exc.details},
    )
