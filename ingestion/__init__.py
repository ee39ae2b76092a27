"""
Ingestion Package

Uploaded PDF → validated → plain text for the prompts.
"""

from .pdf_text import (
    PdfExtractionError,
    extract_pdf_file,
    extract_pdf_text,
    validate_pdf_upload,
)

__all__ = [
    "PdfExtractionError",
    "extract_pdf_file",
    "extract_pdf_text",
    "validate_pdf_upload",
]
