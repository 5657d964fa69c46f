"""
Validation of uploaded resume PDFs.
"""
import logging
import fitz  # PyMuPDF

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
ALLOWED_FILE_TYPE = "application/pdf"


def validate_resume_pdf(content: bytes, content_type: str) -> int:
    """
    Check an uploaded resume file.

    Args:
        content: Raw file bytes
        content_type: Content type sent with the multipart part

    Returns:
        Number of pages in the document

    Raises:
        ValueError: If the file is not a readable PDF under the size limit
    """
    if content_type != ALLOWED_FILE_TYPE:
        raise ValueError("Only PDF files are allowed")

    if not content:
        raise ValueError("Uploaded file is empty")

    if len(content) > MAX_FILE_SIZE:
        raise ValueError("File size must be less than 10MB")

    try:
        doc = fitz.open(stream=content, filetype="pdf")
    except Exception as e:
        logger.warning(f"Rejected unreadable PDF upload: {e}")
        raise ValueError("File is not a valid PDF")

    try:
        if doc.needs_pass:
            raise ValueError("Password-protected PDFs are not supported")
        if doc.page_count < 1:
            raise ValueError("File is not a valid PDF")
        return doc.page_count
    finally:
        doc.close()
