"""
Wizard state machine

    upload → details → config → generate → preview

WizardState is immutable; every transition takes a state and returns the
next one, so there is no shared mutable wizard state. A transition called
from the wrong step raises WizardError.
"""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from generation.schemas import (
    ExamDetails,
    GeneratedQuestion,
    LongAnswerConfig,
    MCQConfig,
    QuestionConfig,
    QuestionPaper,
    ShortAnswerConfig,
)


class WizardError(Exception):
    """Transition not allowed from the current step, or the step failed."""


class WizardStep(str, Enum):
    UPLOAD = "upload"
    DETAILS = "details"
    CONFIG = "config"
    GENERATE = "generate"
    PREVIEW = "preview"


STEP_ORDER = [
    WizardStep.UPLOAD,
    WizardStep.DETAILS,
    WizardStep.CONFIG,
    WizardStep.GENERATE,
    WizardStep.PREVIEW,
]


def default_question_config() -> QuestionConfig:
    """Starting configuration of a new paper: 10 MCQ, 6 short, 4 long."""
    return QuestionConfig(
        mcq=MCQConfig(count=10, marks_per_question=1, options_count=4),
        short_answer=ShortAnswerConfig(count=6, marks_per_question=5, word_limit=150),
        long_answer=LongAnswerConfig(count=4, marks_per_question=15, word_limit=500),
    )


class UploadedDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    size: int = Field(..., ge=0)
    extracted_text: Optional[str] = None

    @property
    def is_processed(self) -> bool:
        return bool(self.extracted_text)


class WizardState(BaseModel):
    model_config = ConfigDict(frozen=True)

    step: WizardStep = WizardStep.UPLOAD
    files: Tuple[UploadedDocument, ...] = ()
    exam_details: Optional[ExamDetails] = None
    question_config: QuestionConfig = Field(default_factory=default_question_config)
    questions: Tuple[GeneratedQuestion, ...] = ()
    paper: Optional[QuestionPaper] = None
    # Generation progress (0-100) and the last status line shown to the user
    progress: int = Field(0, ge=0, le=100)
    status_message: str = ""

    @property
    def extracted_texts(self) -> List[str]:
        return [f.extracted_text for f in self.files if f.extracted_text]


def _require_step(state: WizardState, step: WizardStep, action: str) -> None:
    if state.step != step:
        raise WizardError(f"Cannot {action} from the '{state.step.value}' step")


# ─── Transitions ───────────────────────────────────────────────────────────────

def start_over() -> WizardState:
    """Fresh wizard with default question configuration."""
    return WizardState()


def submit_uploads(state: WizardState, files: List[UploadedDocument]) -> WizardState:
    _require_step(state, WizardStep.UPLOAD, "submit uploads")
    if not files:
        raise WizardError("Upload at least one PDF file")
    pending = [f.name for f in files if not f.is_processed]
    if pending:
        raise WizardError(f"No text extracted yet from: {', '.join(pending)}")
    return state.model_copy(update={"files": tuple(files), "step": WizardStep.DETAILS})


def submit_details(state: WizardState, exam_details: ExamDetails) -> WizardState:
    _require_step(state, WizardStep.DETAILS, "submit exam details")
    return state.model_copy(update={"exam_details": exam_details, "step": WizardStep.CONFIG})


def submit_config(state: WizardState, question_config: QuestionConfig) -> WizardState:
    _require_step(state, WizardStep.CONFIG, "submit question configuration")
    return state.model_copy(update={
        "question_config": question_config,
        "step": WizardStep.GENERATE,
        "progress": 0,
        "status_message": "",
    })


def report_progress(state: WizardState, progress: int, message: str) -> WizardState:
    _require_step(state, WizardStep.GENERATE, "report progress")
    return state.model_copy(update={"progress": progress, "status_message": message})


def complete_generation(state: WizardState, questions: List[GeneratedQuestion]) -> WizardState:
    _require_step(state, WizardStep.GENERATE, "complete generation")
    paper = QuestionPaper(exam_details=state.exam_details, questions=list(questions))
    return state.model_copy(update={
        "questions": tuple(questions),
        "paper": paper,
        "step": WizardStep.PREVIEW,
        "progress": 100,
        "status_message": "Complete!",
    })


def go_back(state: WizardState) -> WizardState:
    """details → upload, config → details, generate → config."""
    if state.step in (WizardStep.UPLOAD, WizardStep.PREVIEW):
        raise WizardError(f"Cannot go back from the '{state.step.value}' step")
    previous = STEP_ORDER[STEP_ORDER.index(state.step) - 1]
    return state.model_copy(update={"step": previous, "progress": 0, "status_message": ""})
