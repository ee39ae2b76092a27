"""
Shared OpenAI GPT helper for the generation pipeline.

Used by:
  - orchestrator.py  (one call per question kind)

Model: gpt-3.5-turbo  (override with GPT_MODEL env var, e.g. "gpt-4o-mini")
Single-turn: one user message, no system prompt, no history.
"""

from typing import Optional

from openai import AsyncOpenAI

from generation.config import get_settings

# Lazy singleton
_client: Optional[AsyncOpenAI] = None


def _get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        api_key = get_settings().openai_api_key
        if not api_key:
            raise RuntimeError(
                "OPENAI_API_KEY is not set. Add it to your .env file."
            )
        _client = AsyncOpenAI(api_key=api_key)
    return _client


def reset_client() -> None:
    """Drop the cached client (after the API key changes)."""
    global _client
    _client = None


async def call_gpt(
    prompt: str,
    *,
    model: str,
    temperature: float,
    max_tokens: Optional[int] = None,
) -> str:
    """
    Call OpenAI Chat Completions and return the assistant message text.

    Args:
        prompt:      The full instruction (sent as the only user message)
        model:       Chat model identifier
        temperature: Sampling temperature
        max_tokens:  Max response tokens; None leaves it to the API default

    Returns:
        Raw string content of the model response ("" when empty)
    """
    client = _get_client()
    kwargs = {}
    if max_tokens is not None:
        kwargs["max_tokens"] = max_tokens
    response = await client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": prompt}],
        temperature=temperature,
        **kwargs,
    )
    return response.choices[0].message.content or ""
