"""
Document Router
Endpoint for turning an uploaded PDF into plain text for generation.

Returns extracted text WITHOUT:
- Storing the file
- Chunking or embeddings
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from generation.config import GenerationSettings, get_settings
from generation.schemas import ExtractedDocument
from ingestion.pdf_text import PdfExtractionError, extract_pdf_text, validate_pdf_upload

router = APIRouter(prefix="/documents", tags=["documents"])

log = logging.getLogger(__name__)


@router.post("/extract-text", response_model=ExtractedDocument)
async def extract_text(
    file: UploadFile = File(..., description="PDF study material"),
    settings: GenerationSettings = Depends(get_settings),
):
    """Validate an uploaded PDF (extension, size) and return its text."""
    data = await file.read()
    try:
        filename = validate_pdf_upload(file.filename, len(data), max_size=settings.max_upload_size)
        # pypdf is synchronous
        text = await run_in_threadpool(extract_pdf_text, data)
    except PdfExtractionError as e:
        log.warning(f"[EXTRACT] rejected {file.filename!r}: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})

    return ExtractedDocument(filename=filename, size=len(data), text=text)
