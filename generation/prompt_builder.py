"""
Prompt Builder

Renders one instruction string per question kind:
  - "mcq"   → N multiple choice questions with 4 or 5 labelled options
  - "short" → N short answer questions with a model answer
  - "long"  → N long answer questions with a model answer

The output template embedded in each prompt is the wire contract with
response_parser.py: labels and the block delimiter below must match exactly.
"""

from typing import List, Optional

from generation.config import DEFAULT_MAX_SOURCE_CHARS
from generation.schemas import (
    AdditionalOptions,
    ExamDetails,
    LongAnswerConfig,
    MCQConfig,
    QuestionKind,
    ShortAnswerConfig,
)


# ─── Wire labels (shared with response_parser) ─────────────────────────────────

BLOCK_DELIMITER = "---"
QUESTION_LABEL = "QUESTION"
CORRECT_ANSWER_LABEL = "CORRECT_ANSWER:"
EXPLANATION_LABEL = "EXPLANATION:"
ANSWER_LABEL = "ANSWER:"
TOPIC_LABEL = "TOPIC:"
DIFFICULTY_LABEL = "DIFFICULTY:"


# ─── Templates ─────────────────────────────────────────────────────────────────

PROMPT_HEADER = """Based on the following study material for {subject} ({branch}), create {count} {kind_name}.

Study Material:
{content}

Requirements:
{requirements}

Format your response exactly like this for each question:
"""

MCQ_FORMAT = """QUESTION [number]: [question text]
{option_lines}
CORRECT_ANSWER: [letter]
EXPLANATION: [brief explanation]
TOPIC: [topic name]
DIFFICULTY: [easy/medium/hard]
---"""

WRITTEN_ANSWER_FORMAT = """QUESTION [number]: [question text]
ANSWER: [{answer_hint} in approximately {word_limit} words]
TOPIC: [topic name]
DIFFICULTY: [easy/medium/hard]
---"""

_KIND_NAMES = {
    QuestionKind.MCQ: "multiple choice questions",
    QuestionKind.SHORT: "short answer questions",
    QuestionKind.LONG: "long answer questions",
}

_COUNT_NAMES = {
    QuestionKind.MCQ: "MCQ questions",
    QuestionKind.SHORT: "short answer questions",
    QuestionKind.LONG: "long answer questions",
}

_ANSWER_HINTS = {
    QuestionKind.SHORT: "detailed answer",
    QuestionKind.LONG: "comprehensive answer",
}


# ─── Requirement lines ─────────────────────────────────────────────────────────

def _additional_requirements(additional: Optional[AdditionalOptions]) -> List[str]:
    if additional is None:
        return []
    lines = []
    if additional.numerical_problems:
        lines.append("- Include numerical problems wherever the material supports them")
    if additional.diagram_based:
        lines.append("- Include questions that ask the student to draw or interpret a diagram")
    if additional.case_study:
        lines.append("- Include case-study questions built around a short scenario")
    return lines


def _requirements(kind: QuestionKind, type_config, additional: Optional[AdditionalOptions]) -> str:
    lines = [f"- Create exactly {type_config.count} {_COUNT_NAMES[kind]}"]
    if kind == QuestionKind.MCQ:
        labels = ", ".join(type_config.option_labels)
        lines.append(f"- Each question should have {type_config.options_count} options ({labels})")
    else:
        lines.append(f"- Each answer should be around {type_config.word_limit} words")
    lines += [
        "- Questions should cover different topics from the material",
        "- Mix of easy, medium, and hard difficulty levels",
        f"- Each question is worth {type_config.marks_per_question} marks",
    ]
    lines += _additional_requirements(additional)
    return "\n".join(lines)


def _format_template(kind: QuestionKind, type_config) -> str:
    if kind == QuestionKind.MCQ:
        option_lines = "\n".join(
            f"{label}) [option {i}]" for i, label in enumerate(type_config.option_labels, 1)
        )
        return MCQ_FORMAT.format(option_lines=option_lines)
    return WRITTEN_ANSWER_FORMAT.format(
        answer_hint=_ANSWER_HINTS[kind],
        word_limit=type_config.word_limit,
    )


# ─── Main builder ──────────────────────────────────────────────────────────────

def build_prompt(
    kind: QuestionKind,
    exam_details: ExamDetails,
    type_config,
    source_text: str,
    max_chars: int = DEFAULT_MAX_SOURCE_CHARS,
    additional: Optional[AdditionalOptions] = None,
) -> str:
    """
    Render the instruction string for one question kind.

    Args:
        kind:         Question kind to request
        exam_details: Subject / branch used in the opening line
        type_config:  MCQConfig for "mcq", Short/LongAnswerConfig otherwise
        source_text:  Combined study material
        max_chars:    Study material is truncated to this many characters
        additional:   Optional question styles (numerical, diagram, case study)

    Returns:
        Deterministic prompt text ending with the output template
    """
    kind = QuestionKind(kind)
    expected = MCQConfig if kind == QuestionKind.MCQ else (ShortAnswerConfig, LongAnswerConfig)
    if not isinstance(type_config, expected):
        raise TypeError(f"{type(type_config).__name__} is not a config for '{kind.value}' questions")

    header = PROMPT_HEADER.format(
        subject=exam_details.subject,
        branch=exam_details.branch,
        count=type_config.count,
        kind_name=_KIND_NAMES[kind],
        content=(source_text or "")[:max_chars],
        requirements=_requirements(kind, type_config, additional),
    )
    return header + _format_template(kind, type_config)
