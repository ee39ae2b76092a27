"""Tests for the wizard state machine, the generate step and the API client."""

import json

import httpx
import pytest

from generation.schemas import GeneratedQuestion, QuestionPaper
from wizard import (
    UploadedDocument,
    WizardError,
    WizardStep,
    complete_generation,
    default_question_config,
    go_back,
    start_over,
    submit_config,
    submit_details,
    submit_uploads,
)
from wizard.api_client import ApiError, PaperApiClient
from wizard.controller import run_generation


QUESTION_JSON = {
    "id": "short-1",
    "type": "short",
    "question": "Define a process.",
    "answer": "A program in execution.",
    "marks": 5,
    "difficulty": "easy",
    "topic": "Processes",
}


def _files(*texts):
    return [UploadedDocument(name=f"notes{i}.pdf", size=100, extracted_text=t) for i, t in enumerate(texts)]


@pytest.fixture
def generate_state(exam_details, question_config):
    state = submit_uploads(start_over(), _files("chapter one", "chapter two"))
    state = submit_details(state, exam_details)
    return submit_config(state, question_config)


def _client(handler) -> PaperApiClient:
    return PaperApiClient(base_url="http://test", transport=httpx.MockTransport(handler))


# ─── State transitions ─────────────────────────────────────────────────────────

def test_fresh_wizard_defaults():
    state = start_over()

    assert state.step == WizardStep.UPLOAD
    assert state.files == ()
    assert state.question_config.mcq.count == 10
    assert state.question_config.short_answer.word_limit == 150
    assert state.question_config.long_answer.marks_per_question == 15


def test_forward_walk(generate_state, exam_details):
    assert generate_state.step == WizardStep.GENERATE
    assert generate_state.exam_details == exam_details
    assert generate_state.extracted_texts == ["chapter one", "chapter two"]
    assert generate_state.progress == 0


def test_upload_requires_processed_files():
    with pytest.raises(WizardError):
        submit_uploads(start_over(), [])
    with pytest.raises(WizardError, match="notes1.pdf"):
        submit_uploads(start_over(), _files("text", None))


def test_transitions_from_wrong_step_raise(exam_details):
    with pytest.raises(WizardError):
        submit_details(start_over(), exam_details)
    with pytest.raises(WizardError):
        submit_config(start_over(), default_question_config())
    with pytest.raises(WizardError):
        complete_generation(start_over(), [])


def test_transitions_do_not_mutate(exam_details):
    uploaded = submit_uploads(start_over(), _files("text"))
    detailed = submit_details(uploaded, exam_details)

    assert uploaded.step == WizardStep.DETAILS
    assert uploaded.exam_details is None
    assert detailed.step == WizardStep.CONFIG


def test_go_back(generate_state):
    state = go_back(generate_state)
    assert state.step == WizardStep.CONFIG
    state = go_back(go_back(state))
    assert state.step == WizardStep.UPLOAD
    with pytest.raises(WizardError):
        go_back(state)


def test_complete_generation_builds_paper(generate_state):
    question = GeneratedQuestion.model_validate(QUESTION_JSON)

    state = complete_generation(generate_state, [question])

    assert state.step == WizardStep.PREVIEW
    assert state.progress == 100
    assert state.status_message == "Complete!"
    assert isinstance(state.paper, QuestionPaper)
    assert state.paper.questions == [question]
    with pytest.raises(WizardError):
        go_back(state)


# ─── Generate step ─────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_run_generation_success(generate_state):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/health":
            return httpx.Response(200, json={"status": "OK", "message": "Server is running"})
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"questions": [QUESTION_JSON]})

    progress = []
    async with _client(handler) as api:
        state = await run_generation(generate_state, api, on_progress=lambda s: progress.append(s.progress))

    assert progress == [10, 20, 50, 90, 100]
    assert state.step == WizardStep.PREVIEW
    assert [q.id for q in state.questions] == ["short-1"]

    body = seen["body"]
    assert body["extractedTexts"] == ["chapter one", "chapter two"]
    assert body["examDetails"]["subject"] == "Operating Systems"
    assert body["questionConfig"]["shortAnswer"]["wordLimit"] == 100


@pytest.mark.asyncio
async def test_run_generation_server_offline(generate_state):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as api:
        with pytest.raises(WizardError, match="Unable to connect to the server"):
            await run_generation(generate_state, api)


@pytest.mark.asyncio
async def test_run_generation_surfaces_server_error(generate_state):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/health":
            return httpx.Response(200, json={"status": "OK"})
        return httpx.Response(500, json={"error": "Failed to generate questions. Please try again."})

    async with _client(handler) as api:
        with pytest.raises(WizardError, match="Please try again"):
            await run_generation(generate_state, api)


@pytest.mark.asyncio
async def test_run_generation_requires_generate_step(exam_details):
    state = submit_uploads(start_over(), _files("text"))

    async with _client(lambda request: httpx.Response(200)) as api:
        with pytest.raises(WizardError):
            await run_generation(state, api)


# ─── API client ────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_health_check_reports_failure_status():
    async with _client(lambda request: httpx.Response(503)) as api:
        assert await api.check_health() is False


@pytest.mark.asyncio
async def test_generate_error_without_json_body(exam_details, question_config):
    async with _client(lambda request: httpx.Response(502, text="Bad Gateway")) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.generate_questions(exam_details, question_config, ["text"])

    assert exc_info.value.status_code == 502
    assert str(exc_info.value) == "Failed to generate questions"


@pytest.mark.asyncio
async def test_export_returns_pdf_bytes(exam_details):
    paper = QuestionPaper(exam_details=exam_details, questions=[GeneratedQuestion.model_validate(QUESTION_JSON)])
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        assert json.loads(request.content)["questions"][0]["type"] == "short"
        return httpx.Response(200, content=b"%PDF-1.4 fake", headers={"content-type": "application/pdf"})

    async with _client(handler) as api:
        assert await api.export_question_paper(paper) == b"%PDF-1.4 fake"
        assert await api.export_answer_sheet(paper) == b"%PDF-1.4 fake"

    assert paths == ["/export/question-paper", "/export/answer-sheet"]


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [["not", "a", "dict"], "plain string", None])
async def test_non_object_error_body_still_raises_api_error(exam_details, body):
    async with _client(lambda request: httpx.Response(500, json=body)) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.generate_questions(exam_details, default_question_config(), ["text"])

    assert exc_info.value.status_code == 500
    assert str(exc_info.value) == "Failed to generate questions"


@pytest.mark.asyncio
async def test_run_generation_with_list_error_body(generate_state):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/health":
            return httpx.Response(200, json={"status": "OK"})
        return httpx.Response(500, json=["unexpected"])

    async with _client(handler) as api:
        with pytest.raises(WizardError, match="Failed to generate questions"):
            await run_generation(generate_state, api)


def test_default_config_is_only_a_wizard_default():
    config = default_question_config()

    assert (config.mcq.count, config.short_answer.count, config.long_answer.count) == (10, 6, 4)
    assert config.total_marks == 10 * 1 + 6 * 5 + 4 * 15
    assert start_over().question_config == config
