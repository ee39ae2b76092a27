"""Tests for the OpenAI helper (client construction patched, no network)."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from generation import gpt_client
from generation.config import GenerationSettings


def _completion(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture(autouse=True)
def fresh_client():
    """Each test starts without a cached client."""
    gpt_client.reset_client()
    yield
    gpt_client.reset_client()


@pytest.fixture
def openai_mock():
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=_completion("QUESTION 1: ..."))
    with patch("generation.gpt_client.get_settings", return_value=GenerationSettings(openai_api_key="sk-test")), \
         patch("generation.gpt_client.AsyncOpenAI", return_value=client) as client_cls:
        yield client_cls, client


@pytest.mark.asyncio
async def test_call_gpt_sends_single_user_message(openai_mock):
    client_cls, client = openai_mock

    text = await gpt_client.call_gpt("Write questions", model="gpt-3.5-turbo", temperature=0.7)

    assert text == "QUESTION 1: ..."
    client_cls.assert_called_once_with(api_key="sk-test")
    client.chat.completions.create.assert_awaited_once_with(
        model="gpt-3.5-turbo",
        messages=[{"role": "user", "content": "Write questions"}],
        temperature=0.7,
    )


@pytest.mark.asyncio
async def test_max_tokens_is_passed_when_set(openai_mock):
    _, client = openai_mock

    await gpt_client.call_gpt("p", model="m", temperature=0.2, max_tokens=512)

    assert client.chat.completions.create.await_args.kwargs["max_tokens"] == 512


@pytest.mark.asyncio
async def test_empty_content_becomes_empty_string(openai_mock):
    _, client = openai_mock
    client.chat.completions.create.return_value = _completion(None)

    assert await gpt_client.call_gpt("p", model="m", temperature=0.7) == ""


@pytest.mark.asyncio
async def test_client_is_built_once_until_reset(openai_mock):
    client_cls, _ = openai_mock

    await gpt_client.call_gpt("p", model="m", temperature=0.7)
    await gpt_client.call_gpt("p", model="m", temperature=0.7)
    assert client_cls.call_count == 1

    gpt_client.reset_client()
    await gpt_client.call_gpt("p", model="m", temperature=0.7)
    assert client_cls.call_count == 2


def test_missing_api_key_raises():
    with patch("generation.gpt_client.get_settings", return_value=GenerationSettings(openai_api_key="")):
        with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
            gpt_client._get_client()
