"""
Mock Interview Service - Main FastAPI Application

This is the entry point for the question generation API.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mockprep.core.config import get_settings
from mockprep.core.exceptions import AppError, app_exception_handler, global_exception_handler
from mockprep.providers.llm import close_llm_provider
from mockprep.api import health, questions

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("Starting Mock Interview service...")
    if not settings.has_valid_llm_key:
        logger.warning("GROQ_API_KEY not found or invalid; questions will come from the fallback bank")

    yield

    logger.info("Shutting down Mock Interview service...")
    await close_llm_provider()
    logger.info("LLM client closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Interview question generation for mock interview practice",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(questions.router, prefix="/api/v1/questions", tags=["Questions"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "mockprep.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
