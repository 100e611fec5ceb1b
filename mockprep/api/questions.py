"""
Question Generation API endpoints.

Thin HTTP layer over the question generator: JSON requests for subject or
pre-extracted resume text, and multipart resume uploads.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel, Field

from mockprep.core.config import Settings, get_settings
from mockprep.core.exceptions import DocumentExtractionError
from mockprep.models.questions import FORMAT_QUESTION_COUNTS
from mockprep.services.document_processor import (
    SUPPORTED_FILE_TYPES,
    get_document_processor,
    resolve_file_type,
)
from mockprep.services.prompts import SUBJECT_NAMES
from mockprep.services.question_generator import (
    QuestionGenerator,
    get_question_generator,
    has_usable_resume,
)

logger = logging.getLogger(__name__)
router = APIRouter()


# Request/Response Models

class GenerateQuestionsRequest(BaseModel):
    """Request to generate an interview question set."""
    subjects: List[str] = Field(default_factory=list)
    interview_type: str = Field(default="quick", alias="interviewType")
    resume_text: Optional[str] = Field(default=None, alias="resumeText")

    model_config = {"populate_by_name": True}


class QuestionResponse(BaseModel):
    """One question in the frontend wire shape."""
    id: int
    question: str
    type: str
    category: str
    difficulty: str
    timeLimit: int
    basedOn: str = ""


class GenerateQuestionsResponse(BaseModel):
    """Response containing a generated question set."""
    success: bool = True
    questions: List[QuestionResponse]
    isAI: bool
    source: str
    model: Optional[str] = None


# Endpoints

@router.post("/generate", response_model=GenerateQuestionsResponse)
async def generate_questions(
    request: GenerateQuestionsRequest,
    generator: QuestionGenerator = Depends(get_question_generator),
):
    """
    Generate interview questions for the selected subjects.

    When ``resume_text`` is long enough the questions are personalised to
    it instead. Always answers with a full question set; ``isAI`` tells the
    client whether the LLM or the static bank produced it.
    """
    if not request.subjects and not has_usable_resume(request.resume_text):
        raise HTTPException(status_code=400, detail="Select at least one subject or provide a resume")

    result = await generator.generate_questions(
        request.subjects,
        request.interview_type,
        resume_text=request.resume_text,
    )
    return result.to_response_dict()


@router.post("/generate-from-resume", response_model=GenerateQuestionsResponse)
async def generate_questions_from_resume(
    file: UploadFile = File(...),
    interview_type: str = Form("quick"),
    generator: QuestionGenerator = Depends(get_question_generator),
    settings: Settings = Depends(get_settings),
):
    """
    Upload a resume and generate questions personalised to it.

    Supported formats: PDF, DOC, DOCX, TXT
    """
    try:
        file_type = resolve_file_type(file.filename, file.content_type)
    except DocumentExtractionError as e:
        raise HTTPException(status_code=400, detail=e.message)

    if file_type not in SUPPORTED_FILE_TYPES:
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Allowed types: PDF, DOC, DOCX, TXT",
        )

    content = await file.read()
    max_bytes = settings.max_resume_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {settings.max_resume_size_mb} MB",
        )

    resume_text = get_document_processor().extract_text(content, file_type)
    logger.info(f"Resume uploaded: {file.filename} ({len(content)} bytes, {len(resume_text)} chars extracted)")

    result = await generator.generate_questions(["resume"], interview_type, resume_text=resume_text)
    return result.to_response_dict()


@router.get("/formats")
async def list_formats() -> Dict[str, Any]:
    """Interview formats and the number of questions each asks."""
    return {
        "formats": [
            {"type": fmt.value, "questionCount": count}
            for fmt, count in FORMAT_QUESTION_COUNTS.items()
        ]
    }


@router.get("/subjects")
async def list_subjects() -> Dict[str, Any]:
    """Subject tags the generator understands."""
    return {
        "subjects": [{"id": tag, "name": name} for tag, name in SUBJECT_NAMES.items()]
    }
