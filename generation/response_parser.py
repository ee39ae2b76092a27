"""
Response Parser

Turns the raw model reply for one question kind into GeneratedQuestion
records. Expects the block template rendered by prompt_builder.py:

    QUESTION 1: ...
    A) ...                 (mcq only)
    CORRECT_ANSWER: B      (mcq only)
    EXPLANATION: ...       (mcq only)
    ANSWER: ...            (short / long)
    TOPIC: ...
    DIFFICULTY: easy
    ---

Never raises. Blocks missing their mandatory lines are dropped, so the
result may hold fewer questions than were requested.

Matching is by line prefix only. A long answer line that itself starts with
"TOPIC:" or "DIFFICULTY:" is taken as metadata and cut from the answer.
"""

import logging
import re
from typing import List, Optional

from generation.prompt_builder import (
    ANSWER_LABEL,
    BLOCK_DELIMITER,
    CORRECT_ANSWER_LABEL,
    DIFFICULTY_LABEL,
    EXPLANATION_LABEL,
    QUESTION_LABEL,
    TOPIC_LABEL,
)
from generation.schemas import DIFFICULTY_LEVELS, GeneratedQuestion, QuestionKind

log = logging.getLogger(__name__)

# "---" or a longer run of dashes, alone on its line
_DELIMITER_LINE = re.compile(rf"^[ \t]*{re.escape(BLOCK_DELIMITER)}-*[ \t]*$", re.MULTILINE)
_QUESTION_PREFIX = re.compile(rf"^{QUESTION_LABEL}\s*\d*\s*:\s*")
_OPTION_LINE = re.compile(r"^[A-E]\)")

MIN_MCQ_OPTIONS = 4
DEFAULT_CORRECT_ANSWER = "A"
DEFAULT_TOPIC = "General"
DEFAULT_DIFFICULTY = "medium"


# ─── Block helpers ─────────────────────────────────────────────────────────────

def split_blocks(raw_text: str) -> List[str]:
    """Split on delimiter lines (any line ending) and drop blank blocks."""
    text = (raw_text or "").replace("\r\n", "\n").replace("\r", "\n")
    return [b for b in _DELIMITER_LINE.split(text) if b.strip()]


def _block_lines(block: str) -> List[str]:
    return [line.strip() for line in block.strip().splitlines()]


def _find_line(lines: List[str], label: str) -> Optional[str]:
    return next((line for line in lines if line.startswith(label)), None)


def _field(lines: List[str], label: str, default: str) -> str:
    line = _find_line(lines, label)
    if line is None:
        return default
    return line.replace(label, "", 1).strip() or default


def _question_text(line: str) -> str:
    return _QUESTION_PREFIX.sub("", line, count=1).strip()


def _difficulty(lines: List[str]) -> str:
    value = _field(lines, DIFFICULTY_LABEL, DEFAULT_DIFFICULTY).lower()
    return value if value in DIFFICULTY_LEVELS else DEFAULT_DIFFICULTY


# ─── Per-kind parsers ──────────────────────────────────────────────────────────

def parse_mcq_response(raw_text: str, mcq_config) -> List[GeneratedQuestion]:
    """Accept a block when it has a QUESTION line and at least 4 option lines."""
    questions = []
    for index, block in enumerate(split_blocks(raw_text), 1):
        lines = _block_lines(block)
        question_line = _find_line(lines, QUESTION_LABEL)
        # Options beyond options_count are kept as returned
        options = [line[2:].strip() for line in lines if _OPTION_LINE.match(line)]
        if question_line is None or len(options) < MIN_MCQ_OPTIONS:
            log.debug(f"[MCQ] dropping block {index}: question={question_line is not None}, options={len(options)}")
            continue

        questions.append(GeneratedQuestion(
            id=f"{QuestionKind.MCQ.value}-{index}",
            kind=QuestionKind.MCQ,
            question=_question_text(question_line),
            options=options,
            correct_answer=_field(lines, CORRECT_ANSWER_LABEL, DEFAULT_CORRECT_ANSWER),
            answer=_field(lines, EXPLANATION_LABEL, ""),
            marks=mcq_config.marks_per_question,
            difficulty=_difficulty(lines),
            topic=_field(lines, TOPIC_LABEL, DEFAULT_TOPIC),
        ))
    return questions


def parse_short_answer_response(raw_text: str, short_config) -> List[GeneratedQuestion]:
    """Accept a block when it has a QUESTION line and an ANSWER line (single line)."""
    questions = []
    for index, block in enumerate(split_blocks(raw_text), 1):
        lines = _block_lines(block)
        question_line = _find_line(lines, QUESTION_LABEL)
        answer_line = _find_line(lines, ANSWER_LABEL)
        if question_line is None or answer_line is None:
            log.debug(f"[SHORT] dropping block {index}")
            continue

        questions.append(GeneratedQuestion(
            id=f"{QuestionKind.SHORT.value}-{index}",
            kind=QuestionKind.SHORT,
            question=_question_text(question_line),
            answer=answer_line.replace(ANSWER_LABEL, "", 1).strip(),
            marks=short_config.marks_per_question,
            difficulty=_difficulty(lines),
            topic=_field(lines, TOPIC_LABEL, DEFAULT_TOPIC),
        ))
    return questions


def parse_long_answer_response(raw_text: str, long_config) -> List[GeneratedQuestion]:
    """
    Accept a block when it has a QUESTION line and an ANSWER marker.

    The answer runs from the marker to the end of the block, minus
    TOPIC/DIFFICULTY lines, with line breaks kept.
    """
    questions = []
    for index, block in enumerate(split_blocks(raw_text), 1):
        lines = _block_lines(block)
        question_line = _find_line(lines, QUESTION_LABEL)
        answer_start = next((i for i, line in enumerate(lines) if line.startswith(ANSWER_LABEL)), None)
        if question_line is None or answer_start is None:
            log.debug(f"[LONG] dropping block {index}")
            continue

        answer_lines = [
            line for line in lines[answer_start:]
            if not line.startswith(TOPIC_LABEL) and not line.startswith(DIFFICULTY_LABEL)
        ]
        answer = "\n".join(answer_lines).replace(ANSWER_LABEL, "", 1).strip()

        questions.append(GeneratedQuestion(
            id=f"{QuestionKind.LONG.value}-{index}",
            kind=QuestionKind.LONG,
            question=_question_text(question_line),
            answer=answer,
            marks=long_config.marks_per_question,
            difficulty=_difficulty(lines),
            topic=_field(lines, TOPIC_LABEL, DEFAULT_TOPIC),
        ))
    return questions


_PARSERS = {
    QuestionKind.MCQ: parse_mcq_response,
    QuestionKind.SHORT: parse_short_answer_response,
    QuestionKind.LONG: parse_long_answer_response,
}


def parse_response(kind: QuestionKind, raw_text: str, type_config) -> List[GeneratedQuestion]:
    """Dispatch to the parser for `kind`."""
    return _PARSERS[QuestionKind(kind)](raw_text, type_config)
