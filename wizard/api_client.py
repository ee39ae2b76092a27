"""
HTTP client for the question paper API (what the browser wizard calls).
"""

import logging
from typing import List, Optional

import httpx

from generation.schemas import (
    ExamDetails,
    GenerateQuestionsRequest,
    GenerateQuestionsResponse,
    GeneratedQuestion,
    QuestionConfig,
    QuestionPaper,
)

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001"
# Three sequential model calls can take a while
DEFAULT_TIMEOUT = 300.0


class ApiError(Exception):
    """Non-2xx response; message is the server's {"error"} text when present."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        data = response.json()
    except ValueError:
        return fallback
    if not isinstance(data, dict):
        return fallback
    return data.get("error") or fallback


class PaperApiClient:
    """Async client; use as `async with PaperApiClient(...) as api:`."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "PaperApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def check_health(self) -> bool:
        """True when GET /health answers 2xx. Never raises."""
        try:
            response = await self._client.get("/health")
            return response.is_success
        except httpx.HTTPError as e:
            log.error(f"Server health check failed: {e}")
            return False

    async def generate_questions(
        self,
        exam_details: ExamDetails,
        question_config: QuestionConfig,
        extracted_texts: List[str],
    ) -> List[GeneratedQuestion]:
        body = GenerateQuestionsRequest(
            exam_details=exam_details,
            question_config=question_config,
            extracted_texts=extracted_texts,
        )
        response = await self._post("/generate-questions", body.model_dump(mode="json", by_alias=True))
        if not response.is_success:
            raise ApiError(
                _error_message(response, "Failed to generate questions"),
                status_code=response.status_code,
            )
        return GenerateQuestionsResponse.model_validate(response.json()).questions

    async def export_question_paper(self, paper: QuestionPaper) -> bytes:
        return await self._export("/export/question-paper", paper)

    async def export_answer_sheet(self, paper: QuestionPaper) -> bytes:
        return await self._export("/export/answer-sheet", paper)

    async def _export(self, path: str, paper: QuestionPaper) -> bytes:
        response = await self._post(path, paper.model_dump(mode="json", by_alias=True))
        if not response.is_success:
            raise ApiError(_error_message(response, "Export failed"), status_code=response.status_code)
        return response.content

    async def _post(self, path: str, payload: dict) -> httpx.Response:
        try:
            return await self._client.post(path, json=payload)
        except httpx.HTTPError as e:
            raise ApiError(f"Unable to reach the server: {e}") from e
