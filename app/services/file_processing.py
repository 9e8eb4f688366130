# app/services/file_processing.py

from io import BytesIO
from PyPDF2 import PdfReader
import logging

logger = logging.getLogger(__name__)

def is_pdf(file_name: str, content_type: str) -> bool:
    return content_type == "application/pdf" or (file_name or "").lower().endswith(".pdf")

def extract_text_from_pdf(content: bytes) -> str:
    """Extracts text from a PDF file."""
    try:
        reader = PdfReader(BytesIO(content))
        text = ""
        for page in reader.pages:
            text += page.extract_text() or ""
        return text
    except Exception as e:
        logger.error(f"Error extracting text from PDF: {e}")
        raise ValueError(f"Could not extract text from PDF: {e}")

def extract_upload_text(file_name: str, content_type: str, content: bytes) -> str:
    """Text stored on the chat for an upload: PDF text, otherwise the bytes read as UTF-8."""
    if is_pdf(file_name, content_type):
        return extract_text_from_pdf(content)
    return content.decode("utf-8", errors="replace")
