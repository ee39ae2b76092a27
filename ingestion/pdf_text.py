"""
PDF text extraction for uploaded study material.

Plain text only: no layout, no images, no OCR. Scanned PDFs without a text
layer come back empty.
"""

import io
import logging
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from generation.config import DEFAULT_MAX_UPLOAD_SIZE

# Suppress verbose PDF parsing warnings
logging.getLogger("pypdf").setLevel(logging.ERROR)

log = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"pdf"}


class PdfExtractionError(Exception):
    """Upload rejected or text could not be read."""


def validate_pdf_upload(filename: str, size: int, max_size: int = DEFAULT_MAX_UPLOAD_SIZE) -> str:
    """
    Check an uploaded file before extraction.

    Returns:
        The normalized filename

    Raises:
        PdfExtractionError: no filename, not a .pdf, empty, or over max_size
    """
    filename = (filename or "").strip()
    if not filename:
        raise PdfExtractionError("Filename is required")

    extension = Path(filename).suffix.lower().lstrip(".")
    if extension not in ALLOWED_EXTENSIONS:
        raise PdfExtractionError(f"Unsupported file type: .{extension or '?'} (only PDF files are accepted)")

    if size <= 0:
        raise PdfExtractionError(f"{filename} is empty")
    if size > max_size:
        raise PdfExtractionError(
            f"{filename} is {size / (1024 * 1024):.1f} MB; the limit is {max_size / (1024 * 1024):.0f} MB"
        )
    return filename


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """Extract plain text from a PDF byte stream using pypdf."""
    try:
        reader = PdfReader(io.BytesIO(pdf_bytes))
        texts = []
        for page in reader.pages:
            t = page.extract_text()
            if t:
                texts.append(t.strip())
    except (PdfReadError, ValueError, OSError) as e:
        raise PdfExtractionError(f"PDF extraction failed: {e}") from e

    log.info(f"Extracted {sum(len(t) for t in texts)} chars from {len(texts)} page(s)")
    return "\n".join(texts)


def extract_pdf_file(path) -> str:
    """Validate and extract a PDF from disk."""
    path = Path(path)
    data = path.read_bytes()
    validate_pdf_upload(path.name, len(data))
    return extract_pdf_text(data)
