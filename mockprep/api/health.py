"""
Health check endpoints.
"""
from fastapi import APIRouter
from pydantic import BaseModel

from mockprep.core.config import get_settings
from mockprep.providers.llm import get_llm_provider_sync
from mockprep.services.question_bank import get_question_bank

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    llm_configured: bool
    llm_reachable: bool
    question_bank: bool
    version: str = "0.1.0"


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Check the LLM provider and the fallback question bank.

    Without a usable key the provider is not contacted. Anything short of
    a reachable provider is "degraded": questions still come from the bank.
    """
    llm_configured = get_settings().has_valid_llm_key
    llm_ok = await get_llm_provider_sync().health_check() if llm_configured else False
    bank_ok = bool(get_question_bank().list_available_subjects())

    overall_status = "healthy" if (llm_ok and bank_ok) else "degraded"

    return HealthResponse(
        status=overall_status,
        llm_configured=llm_configured,
        llm_reachable=llm_ok,
        question_bank=bank_ok,
    )


@router.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Mock Interview API",
        "version": "0.1.0",
        "docs": "/docs",
    }
