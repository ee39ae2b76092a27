"""
Pydantic schemas for the question paper pipeline.
Supports: MCQ, short answer and long answer question types.

Wire format is camelCase (what the browser wizard sends and reads);
Python attributes are snake_case. Either form is accepted on input.
"""

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─── Question kinds ────────────────────────────────────────────────────────────

class QuestionKind(str, Enum):
    """Question category. The value doubles as the question id prefix."""
    MCQ = "mcq"
    SHORT = "short"
    LONG = "long"


# Call order == section order in the exported paper
GENERATION_ORDER = (QuestionKind.MCQ, QuestionKind.SHORT, QuestionKind.LONG)

SECTION_TITLES = {
    QuestionKind.MCQ: "Multiple Choice Questions",
    QuestionKind.SHORT: "Short Answer Questions",
    QuestionKind.LONG: "Long Answer Questions",
}

DIFFICULTY_LEVELS = ("easy", "medium", "hard")


# ─── Input: exam details ───────────────────────────────────────────────────────

class ExamDetails(_CamelModel):
    """Exam header data. Only subject and branch reach the prompts."""
    subject: str = Field(..., description="Subject name, e.g. 'Operating Systems'")
    branch: str = Field(..., description="Branch / department name")
    university_name: str = ""
    exam_date: str = ""
    exam_duration: str = ""
    total_marks: int = Field(100, ge=0)


# ─── Input: per-kind question configuration ────────────────────────────────────

class _TypeConfig(_CamelModel):
    count: int = Field(..., ge=0, description="Number of questions to request")
    marks_per_question: int = Field(1, ge=1)

    @property
    def total_marks(self) -> int:
        return self.count * self.marks_per_question


class MCQConfig(_TypeConfig):
    options_count: Literal[4, 5] = 4

    @property
    def option_labels(self) -> List[str]:
        """A..D, plus E when five options are requested."""
        return list("ABCDE"[: self.options_count])


class ShortAnswerConfig(_TypeConfig):
    marks_per_question: int = Field(5, ge=1)
    word_limit: int = Field(150, ge=1)


class LongAnswerConfig(_TypeConfig):
    marks_per_question: int = Field(15, ge=1)
    word_limit: int = Field(500, ge=1)


class AdditionalOptions(_CamelModel):
    """Optional question styles requested on top of the plain counts."""
    numerical_problems: bool = False
    diagram_based: bool = False
    case_study: bool = False


class QuestionConfig(_CamelModel):
    """
    Full paper configuration: one block per question kind.

    Every kind must be given, with its count; 0 skips the kind. Defaults for
    a new paper live with the wizard (wizard.state.default_question_config).
    """
    mcq: MCQConfig
    short_answer: ShortAnswerConfig
    long_answer: LongAnswerConfig
    additional: AdditionalOptions = Field(default_factory=AdditionalOptions)

    def for_kind(self, kind: QuestionKind) -> _TypeConfig:
        if kind == QuestionKind.MCQ:
            return self.mcq
        if kind == QuestionKind.SHORT:
            return self.short_answer
        return self.long_answer

    @property
    def total_marks(self) -> int:
        return sum(self.for_kind(k).total_marks for k in GENERATION_ORDER)


# ─── Generation output ─────────────────────────────────────────────────────────

class GeneratedQuestion(_CamelModel):
    """
    One parsed question. Created by the response parser only.

    For MCQ, `answer` holds the explanation and `correct_answer` the option
    label. For short/long, `answer` is the model answer.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    kind: QuestionKind = Field(..., alias="type")
    question: str
    options: Optional[List[str]] = None       # MCQ only
    correct_answer: Optional[str] = None      # MCQ only: "A" / "B" / ...
    answer: str = ""
    marks: int = Field(..., ge=1)
    difficulty: Literal["easy", "medium", "hard"] = "medium"
    topic: str = "General"


class QuestionPaper(_CamelModel):
    """Finished paper handed to the exporter."""
    exam_details: ExamDetails
    questions: List[GeneratedQuestion] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=datetime.now)

    def questions_of(self, kind: QuestionKind) -> List[GeneratedQuestion]:
        return [q for q in self.questions if q.kind == kind]


# ─── Summary (requested vs delivered) ──────────────────────────────────────────

class KindSummary(_CamelModel):
    kind: QuestionKind
    requested: int
    delivered: int
    marks: int


class PaperSummary(_CamelModel):
    sections: List[KindSummary]
    requested_questions: int
    delivered_questions: int
    requested_marks: int
    delivered_marks: int

    @property
    def under_delivered(self) -> bool:
        return self.delivered_questions < self.requested_questions


# ─── API request / response ────────────────────────────────────────────────────

class GenerateQuestionsRequest(_CamelModel):
    """
    Body of POST /generate-questions.

    Fields are optional here so a missing field gets the 400 {error} body
    instead of FastAPI's generic 422.
    """
    exam_details: Optional[ExamDetails] = None
    question_config: Optional[QuestionConfig] = None
    extracted_texts: Optional[List[str]] = None


class GenerateQuestionsResponse(_CamelModel):
    questions: List[GeneratedQuestion]
    summary: Optional[PaperSummary] = None


class ExtractedDocument(_CamelModel):
    filename: str
    size: int
    text: str
