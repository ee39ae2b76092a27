"""
Paper Export Service - PDF Generation

Exports a finished QuestionPaper as two A4 documents:
- Question paper: header, instructions, Section A/B/C (MCQ, short, long)
- Answer sheet:   correct option + explanation for MCQ, model answers otherwise

Sections follow the question order of the paper, which is the generation
order (MCQ, short, long). Numbering runs continuously across sections.
"""

import logging
import re
from datetime import datetime
from io import BytesIO
from typing import List

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Flowable, KeepTogether, Paragraph, SimpleDocTemplate, Spacer

from generation.schemas import (
    GENERATION_ORDER,
    SECTION_TITLES,
    GeneratedQuestion,
    QuestionKind,
    QuestionPaper,
)

log = logging.getLogger(__name__)


# ─── Configuration ──────────────────────────────────────────────────────────────

DEFAULT_UNIVERSITY_NAME = "University/College Name"
DEFAULT_INSTRUCTIONS = [
    "Answer all questions.",
    "Write clearly and legibly.",
    "Time management is crucial.",
]

# Space left under each written question on the question paper
ANSWER_SPACE_CM = {
    QuestionKind.SHORT: 0.6,
    QuestionKind.LONG: 1.0,
}


# ─── Text helpers ───────────────────────────────────────────────────────────────

def _escape_html(text: str) -> str:
    """Escape HTML special characters so ReportLab Paragraph treats them as literal text."""
    if not text:
        return text or ""
    text = text.replace("&", "&amp;")
    text = text.replace("<", "&lt;")
    text = text.replace(">", "&gt;")
    return text


def _format_text(text: str) -> str:
    """Escape model text and keep its line breaks."""
    escaped = _escape_html(text)
    escaped = re.sub(r"\n{2,}", "<br/><br/>", escaped)
    return escaped.replace("\n", "<br/>")


def _format_exam_date(value: str) -> str:
    """ISO dates print as dd/mm/yyyy; anything else is printed as given."""
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value).strftime("%d/%m/%Y")
    except ValueError:
        return value


def _option_label(index: int) -> str:
    return chr(ord("A") + index)


# ─── Custom Flowables ───────────────────────────────────────────────────────────

class HorizontalLine(Flowable):
    """Draw a horizontal line across the page."""

    def __init__(self, width, thickness=1, color=colors.black):
        Flowable.__init__(self)
        self.width = width
        self.thickness = thickness
        self.color = color

    def draw(self):
        self.canv.setStrokeColor(self.color)
        self.canv.setLineWidth(self.thickness)
        self.canv.line(0, 0, self.width, 0)


# ─── Style Definitions ──────────────────────────────────────────────────────────

# name -> (parent, font, size, alignment, extra ParagraphStyle kwargs)
PAPER_STYLES = {
    'UniversityName': ('Heading1', 'Helvetica-Bold', 18, TA_CENTER, {'spaceAfter': 4}),
    'DepartmentName': ('Heading2', 'Helvetica-Bold', 13, TA_CENTER, {'spaceAfter': 2}),
    'ExamDetails':    ('Normal', 'Helvetica', 11, TA_CENTER, {'spaceAfter': 4}),
    'SectionHeader':  ('Heading3', 'Helvetica-Bold', 13, TA_LEFT, {'spaceBefore': 14, 'spaceAfter': 6}),
    'QuestionText':   ('Normal', 'Helvetica', 11, TA_JUSTIFY, {'spaceAfter': 4, 'leading': 15}),
    'MCQOption':      ('Normal', 'Helvetica', 10, TA_LEFT, {'leftIndent': 18, 'spaceAfter': 2}),
    'Instructions':   ('Normal', 'Helvetica', 10, TA_LEFT, {'leftIndent': 12, 'spaceAfter': 3}),
    'AnswerText':     ('Normal', 'Helvetica', 10, TA_JUSTIFY, {'leftIndent': 12, 'spaceAfter': 5, 'leading': 13}),
}


def get_custom_styles():
    """Sample stylesheet plus the paper / answer sheet styles above."""
    styles = getSampleStyleSheet()
    for name, (parent, font, size, alignment, extra) in PAPER_STYLES.items():
        styles.add(ParagraphStyle(
            name=name,
            parent=styles[parent],
            fontName=font,
            fontSize=size,
            alignment=alignment,
            textColor=colors.black,
            **extra,
        ))
    return styles


def _new_document(buffer: BytesIO) -> SimpleDocTemplate:
    return SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=2*cm,
        leftMargin=2*cm,
        topMargin=2*cm,
        bottomMargin=2*cm,
    )


def _ordered_questions(paper: QuestionPaper) -> List[GeneratedQuestion]:
    """Questions grouped by kind in section order, keeping order within a kind."""
    return [q for kind in GENERATION_ORDER for q in paper.questions_of(kind)]


# ─── Question Paper Generator ───────────────────────────────────────────────────

def generate_question_paper(paper: QuestionPaper) -> BytesIO:
    """
    Generate question paper PDF (questions only, no answers).

    Returns BytesIO buffer containing the PDF.
    """
    buffer = BytesIO()
    doc = _new_document(buffer)
    styles = get_custom_styles()
    details = paper.exam_details
    story = []

    # ─── Header ─────────────────────────────────────────────────────────────────
    university = details.university_name or DEFAULT_UNIVERSITY_NAME
    story.append(Paragraph(_escape_html(university), styles['UniversityName']))
    story.append(Spacer(1, 0.2*cm))
    story.append(Paragraph(f"Department of {_escape_html(details.branch)}", styles['DepartmentName']))
    story.append(Paragraph(f"Subject: {_escape_html(details.subject)}", styles['ExamDetails']))

    meta = []
    if details.exam_date:
        meta.append(f"Date: {_escape_html(_format_exam_date(details.exam_date))}")
    if details.exam_duration:
        meta.append(f"Duration: {_escape_html(details.exam_duration)}")
    meta.append(f"Total Marks: {details.total_marks}")
    story.append(Paragraph(" &nbsp;&nbsp;|&nbsp;&nbsp; ".join(meta), styles['ExamDetails']))
    story.append(Spacer(1, 0.3*cm))
    story.append(HorizontalLine(width=17*cm, thickness=1.5))
    story.append(Spacer(1, 0.3*cm))

    # ─── Instructions ───────────────────────────────────────────────────────────
    story.append(Paragraph("<b>Instructions:</b>", styles['Normal']))
    story.append(Spacer(1, 0.2*cm))
    for i, instruction in enumerate(DEFAULT_INSTRUCTIONS, 1):
        story.append(Paragraph(f"{i}. {instruction}", styles['Instructions']))
    story.append(Spacer(1, 0.3*cm))
    story.append(HorizontalLine(width=17*cm, thickness=1.5))
    story.append(Spacer(1, 0.4*cm))

    # ─── Sections ───────────────────────────────────────────────────────────────
    question_no = 1
    section_letter = "A"
    for kind in GENERATION_ORDER:
        questions = paper.questions_of(kind)
        if not questions:
            continue

        story.append(Paragraph(
            f"Section {section_letter}: {SECTION_TITLES[kind]}",
            styles['SectionHeader'],
        ))
        section_letter = chr(ord(section_letter) + 1)

        for q in questions:
            block = [Paragraph(
                f"<b>{question_no}.</b> {_format_text(q.question)} <b>({q.marks} marks)</b>",
                styles['QuestionText'],
            )]
            if kind == QuestionKind.MCQ:
                for i, option in enumerate(q.options or []):
                    block.append(Paragraph(
                        f"{_option_label(i)}) {_format_text(option)}",
                        styles['MCQOption'],
                    ))
                block.append(Spacer(1, 0.3*cm))
            else:
                block.append(Spacer(1, ANSWER_SPACE_CM[kind]*cm))
            story.append(KeepTogether(block))
            question_no += 1

    if question_no == 1:
        log.warning("paper_exporter: exporting a question paper with no questions")

    doc.build(story)
    buffer.seek(0)
    return buffer


# ─── Answer Sheet Generator ─────────────────────────────────────────────────────

def generate_answer_sheet(paper: QuestionPaper) -> BytesIO:
    """
    Generate answer sheet PDF (questions + answers).

    Returns BytesIO buffer containing the PDF.
    """
    buffer = BytesIO()
    doc = _new_document(buffer)
    styles = get_custom_styles()
    details = paper.exam_details
    story = []

    # ─── Header ─────────────────────────────────────────────────────────────────
    story.append(Paragraph(
        f"{_escape_html(details.subject)} - Answer Sheet",
        styles['UniversityName'],
    ))
    story.append(Paragraph(
        _escape_html(details.university_name or DEFAULT_UNIVERSITY_NAME),
        styles['DepartmentName'],
    ))
    story.append(Spacer(1, 0.3*cm))
    story.append(HorizontalLine(width=17*cm, thickness=1.5))
    story.append(Spacer(1, 0.5*cm))

    # ─── Answers ────────────────────────────────────────────────────────────────
    for question_no, q in enumerate(_ordered_questions(paper), 1):
        story.append(Paragraph(
            f"<b>{question_no}. {_format_text(q.question)}</b>",
            styles['QuestionText'],
        ))

        if q.kind == QuestionKind.MCQ:
            story.append(Paragraph(
                f"<b>Correct Answer: {_escape_html(q.correct_answer or '')}</b>",
                styles['AnswerText'],
            ))
            story.append(Paragraph(
                f"Explanation: {_format_text(q.answer)}",
                styles['AnswerText'],
            ))
        else:
            story.append(Paragraph(_format_text(q.answer), styles['AnswerText']))

        story.append(Spacer(1, 0.2*cm))
        story.append(HorizontalLine(width=17*cm, thickness=0.5, color=colors.HexColor("#cccccc")))
        story.append(Spacer(1, 0.3*cm))

    doc.build(story)
    buffer.seek(0)
    return buffer


def export_filenames(paper: QuestionPaper) -> dict:
    """Download names for the two documents, as the browser wizard saves them."""
    subject = re.sub(r"[^\w\-]+", "_", paper.exam_details.subject).strip("_") or "Exam"
    return {
        "question_paper": f"{subject}_Question_Paper.pdf",
        "answer_sheet": f"{subject}_Answer_Sheet.pdf",
    }
