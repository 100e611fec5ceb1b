"""
Document processing service for uploaded resumes.

Handles PDF/DOCX/TXT text extraction. Extraction is best effort: any
failure yields an empty string, which sends generation down the subject
path.
"""
import io
import logging
from pathlib import Path
from typing import Optional, Union

from pdfplumber import open as open_pdf
from docx import Document as DocxDocument

from mockprep.core.exceptions import DocumentExtractionError

logger = logging.getLogger(__name__)

# Extensions accepted by the resume upload endpoint
SUPPORTED_FILE_TYPES = {"pdf", "doc", "docx", "txt"}

CONTENT_TYPE_TO_FILE_TYPE = {
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "text/plain": "txt",
}

MAX_WORD_TEXT_CHARS = 5000
MAX_UNKNOWN_TEXT_CHARS = 3000


def resolve_file_type(filename: Optional[str], content_type: Optional[str] = None) -> str:
    """
    Work out the document type from the filename extension, falling back to
    the declared MIME type.
    """
    if filename:
        suffix = Path(filename).suffix.lower().lstrip(".")
        if suffix:
            return suffix
    if content_type in CONTENT_TYPE_TO_FILE_TYPE:
        return CONTENT_TYPE_TO_FILE_TYPE[content_type]
    raise DocumentExtractionError(
        "Could not determine document type",
        details={"filename": filename, "content_type": content_type},
    )


class DocumentProcessor:
    """Text extraction for resume documents."""

    def extract_text_from_pdf(self, pdf_bytes: bytes) -> str:
        """
        Extract text content from a PDF file.

        Args:
            pdf_bytes: PDF file content as bytes

        Returns:
            Extracted text content
        """
        text_parts = []
        with open_pdf(io.BytesIO(pdf_bytes)) as pdf:
            for page in pdf.pages:
                page_text = page.extract_text()
                if page_text:
                    text_parts.append(page_text)
        return "\n".join(text_parts).strip()

    def extract_text_from_docx(self, docx_bytes: bytes) -> str:
        """
        Extract text content from a DOCX file, including table cells.
        """
        doc = DocxDocument(io.BytesIO(docx_bytes))
        text_parts = []

        for paragraph in doc.paragraphs:
            if paragraph.text.strip():
                text_parts.append(paragraph.text)

        for table in doc.tables:
            for row in table.rows:
                row_text = " | ".join(cell.text.strip() for cell in row.cells if cell.text.strip())
                if row_text:
                    text_parts.append(row_text)

        return "\n".join(text_parts)[:MAX_WORD_TEXT_CHARS]

    def extract_text(self, data: bytes, file_type: str) -> str:
        """
        Extract plain text from a document.

        Args:
            data: File content as bytes
            file_type: pdf, doc, docx or txt; anything else is decoded as
                UTF-8 text and truncated

        Returns:
            Extracted text, or "" when extraction fails
        """
        file_type = file_type.lower().lstrip(".")
        try:
            if file_type == "pdf":
                return self.extract_text_from_pdf(data)
            if file_type in ("doc", "docx"):
                try:
                    return self.extract_text_from_docx(data)
                except Exception as e:
                    # Legacy .doc files are not zip containers; read what text we can
                    logger.warning(f"python-docx could not read {file_type} document: {e}")
                    return data.decode("utf-8", errors="ignore")[:MAX_WORD_TEXT_CHARS]
            if file_type == "txt":
                return data.decode("utf-8", errors="replace")

            logger.warning(f"Unsupported file type: {file_type}, using simple text extraction")
            return data.decode("utf-8", errors="ignore")[:MAX_UNKNOWN_TEXT_CHARS]
        except Exception as e:
            logger.error(f"Resume extraction error ({file_type}): {e}")
            return ""

    def extract_text_from_path(self, path: Union[str, Path]) -> str:
        """Extract text from a file on disk, typed by its extension."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.error(f"Could not read resume file {path}: {e}")
            return ""
        return self.extract_text(data, path.suffix or "txt")


# Global processor instance (lazy loaded)
_processor: Optional[DocumentProcessor] = None


def get_document_processor() -> DocumentProcessor:
    """Get or create the document processor instance."""
    global _processor
    if _processor is None:
        _processor = DocumentProcessor()
    return _processor
