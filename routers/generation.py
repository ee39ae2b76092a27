"""
Generation Router

Endpoints:
  POST /generate-questions   — full question set for one paper (MCQ → short → long)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from generation.config import GenerationSettings, get_settings
from generation.orchestrator import GenerationError, MissingInputError, generate_questions
from generation.paper_summary import summarize_paper
from generation.schemas import GenerateQuestionsRequest, GenerateQuestionsResponse

router = APIRouter(tags=["generation"])

log = logging.getLogger("generation.pipeline")

GENERATION_FAILED_MESSAGE = "Failed to generate questions. Please try again."


@router.post(
    "/generate-questions",
    response_model=GenerateQuestionsResponse,
    response_model_exclude_none=True,
)
async def generate_questions_endpoint(
    request: GenerateQuestionsRequest,
    settings: GenerationSettings = Depends(get_settings),
):
    """
    Generate every requested question for a paper.

    Returns 400 when examDetails, questionConfig or extractedTexts is missing
    (no model call is made) and 500 when any model call fails. There are no
    partial results: the client retries the whole request.
    """
    texts = request.extracted_texts
    log.info(
        f"[GENERATE] files={len(texts) if texts is not None else 'missing'} "
        f"subject={request.exam_details.subject if request.exam_details else 'missing'}"
    )

    try:
        questions = await generate_questions(
            request.exam_details,
            request.question_config,
            texts,
            settings=settings,
        )
    except MissingInputError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except GenerationError as e:
        log.error(f"[GENERATE] Error generating questions: {e}")
        return JSONResponse(status_code=500, content={"error": GENERATION_FAILED_MESSAGE})

    summary = summarize_paper(questions, request.question_config)
    log.info(
        f"[GENERATE] OK — {summary.delivered_questions}/{summary.requested_questions} questions, "
        f"{summary.delivered_marks} marks"
    )
    return GenerateQuestionsResponse(questions=questions, summary=summary)
