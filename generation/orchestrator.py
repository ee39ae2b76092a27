"""
Generation Orchestrator

Runs Prompt Builder → GPT call → Response Parser once per question kind,
in fixed order: MCQ, short answer, long answer. Kinds with count == 0 are
skipped without a model call.

All-or-nothing: a failing model call aborts the whole run with
GenerationError. Fewer parsed questions than requested is not an error.
Calls are awaited one after another; there is no lock, cache or retry here.
Callers wanting a deadline wrap the coroutine (e.g. asyncio.wait_for).
"""

import logging
from typing import List, Optional, Sequence

from generation.config import GenerationSettings, get_settings
from generation.gpt_client import call_gpt
from generation.prompt_builder import build_prompt
from generation.response_parser import parse_response
from generation.schemas import (
    GENERATION_ORDER,
    ExamDetails,
    GeneratedQuestion,
    QuestionConfig,
)

log = logging.getLogger("generation.pipeline")

SOURCE_SEPARATOR = "\n\n"


class GenerationError(Exception):
    """Question generation failed; the caller should retry the whole run."""


class MissingInputError(GenerationError):
    """A required input (details, config or extracted texts) was not supplied."""


def combine_sources(extracted_texts: Sequence[str]) -> str:
    """Join per-file texts with a blank line between them."""
    return SOURCE_SEPARATOR.join(extracted_texts)


async def generate_questions(
    exam_details: Optional[ExamDetails],
    question_config: Optional[QuestionConfig],
    extracted_texts: Optional[Sequence[str]],
    settings: Optional[GenerationSettings] = None,
) -> List[GeneratedQuestion]:
    """
    Generate the full question set for one paper.

    Args:
        exam_details:    Subject / branch for the prompts
        question_config: Per-kind counts, marks and limits
        extracted_texts: Text of each uploaded document
        settings:        Model, temperature and truncation; env settings if None

    Returns:
        Questions in call order: all MCQ, then short, then long

    Raises:
        MissingInputError: a required input is None
        GenerationError:   any model call failed
    """
    if exam_details is None or question_config is None or extracted_texts is None:
        raise MissingInputError(
            "Missing required fields: examDetails, questionConfig, or extractedTexts"
        )

    settings = settings or get_settings()
    source_text = combine_sources(extracted_texts)
    questions: List[GeneratedQuestion] = []

    for kind in GENERATION_ORDER:
        type_config = question_config.for_kind(kind)
        tag = kind.value.upper()
        if type_config.count == 0:
            log.info(f"[{tag}] count=0, skipping")
            continue

        prompt = build_prompt(
            kind,
            exam_details,
            type_config,
            source_text,
            max_chars=settings.max_source_chars,
            additional=question_config.additional,
        )
        log.info(f"[{tag}] requesting {type_config.count} question(s) from {settings.model}")

        try:
            raw = await call_gpt(
                prompt,
                model=settings.model,
                temperature=settings.temperature,
                max_tokens=settings.max_tokens,
            )
        except Exception as e:
            log.error(f"[{tag}] model call failed: {e}")
            raise GenerationError(f"{kind.value} generation failed: {e}") from e

        parsed = parse_response(kind, raw, type_config)
        if len(parsed) < type_config.count:
            log.warning(f"[{tag}] parsed {len(parsed)} of {type_config.count} requested question(s)")
        else:
            log.info(f"[{tag}] parsed {len(parsed)} question(s)")
        questions.extend(parsed)

    return questions
