"""
Export Router — /export

  POST /export/question-paper   — question paper PDF
  POST /export/answer-sheet     — answer sheet PDF

The paper is posted back by the client; nothing is stored server-side.
"""

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse

from generation.paper_exporter import export_filenames, generate_answer_sheet, generate_question_paper
from generation.schemas import QuestionPaper

router = APIRouter(prefix="/export", tags=["export"])


def _pdf_response(buffer, filename: str) -> StreamingResponse:
    return StreamingResponse(
        buffer,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.post("/question-paper")
async def export_question_paper(paper: QuestionPaper):
    """Question paper PDF (no answers)."""
    pdf_buffer = await run_in_threadpool(generate_question_paper, paper)
    return _pdf_response(pdf_buffer, export_filenames(paper)["question_paper"])


@router.post("/answer-sheet")
async def export_answer_sheet(paper: QuestionPaper):
    """Answer sheet PDF (correct options, explanations, model answers)."""
    pdf_buffer = await run_in_threadpool(generate_answer_sheet, paper)
    return _pdf_response(pdf_buffer, export_filenames(paper)["answer_sheet"])
