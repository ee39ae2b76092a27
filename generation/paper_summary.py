"""
Paper Summary

Requested vs delivered counts and marks per question kind. The parser
may return fewer questions than requested; this is where that shows up.
"""

from typing import List

from generation.schemas import (
    GENERATION_ORDER,
    GeneratedQuestion,
    KindSummary,
    PaperSummary,
    QuestionConfig,
)


def summarize_paper(questions: List[GeneratedQuestion], question_config: QuestionConfig) -> PaperSummary:
    sections = []
    for kind in GENERATION_ORDER:
        delivered = [q for q in questions if q.kind == kind]
        sections.append(KindSummary(
            kind=kind,
            requested=question_config.for_kind(kind).count,
            delivered=len(delivered),
            marks=sum(q.marks for q in delivered),
        ))

    return PaperSummary(
        sections=sections,
        requested_questions=sum(s.requested for s in sections),
        delivered_questions=sum(s.delivered for s in sections),
        requested_marks=question_config.total_marks,
        delivered_marks=sum(s.marks for s in sections),
    )
