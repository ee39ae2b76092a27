"""Shared fixtures for the question paper tests."""

import pytest

from generation.config import GenerationSettings
from generation.schemas import (
    ExamDetails,
    LongAnswerConfig,
    MCQConfig,
    QuestionConfig,
    ShortAnswerConfig,
)


MCQ_REPLY = """QUESTION 1: What is 2+2?
A) 3
B) 4
C) 5
D) 6
CORRECT_ANSWER: B
EXPLANATION: Basic arithmetic
TOPIC: Math
DIFFICULTY: easy
---
QUESTION 2: Which data structure is FIFO?
A) Stack
B) Queue
C) Tree
D) Graph
CORRECT_ANSWER: B
EXPLANATION: A queue removes the oldest element first
TOPIC: Data Structures
DIFFICULTY: medium
---"""

SHORT_REPLY = """QUESTION 1: Define a process.
ANSWER: A process is a program in execution.
TOPIC: Processes
DIFFICULTY: easy
---"""

LONG_REPLY = """QUESTION 1: Explain paging.
ANSWER: Paging splits memory into fixed-size frames.
Pages map to frames through a page table.
TOPIC: Memory Management
DIFFICULTY: hard
---"""


@pytest.fixture
def exam_details() -> ExamDetails:
    return ExamDetails(
        subject="Operating Systems",
        branch="Computer Engineering",
        university_name="State University",
        exam_date="2025-05-12",
        exam_duration="3 hours",
        total_marks=50,
    )


@pytest.fixture
def question_config() -> QuestionConfig:
    return QuestionConfig(
        mcq=MCQConfig(count=2, marks_per_question=2, options_count=4),
        short_answer=ShortAnswerConfig(count=1, marks_per_question=5, word_limit=100),
        long_answer=LongAnswerConfig(count=1, marks_per_question=10, word_limit=400),
    )


@pytest.fixture
def settings() -> GenerationSettings:
    return GenerationSettings(
        openai_api_key="test-key",
        model="test-model",
        temperature=0.3,
        max_source_chars=50,
    )
