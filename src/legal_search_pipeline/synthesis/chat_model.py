"""
Chat Model Module - Single Responsibility: one chat completion call.

Sends a message list to the generative model and returns the first
choice's content. Absent content comes back as None; deciding what the
user sees in that case belongs to the synthesizer.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Mapping, Sequence

from openai import AsyncOpenAI, OpenAIError

from legal_search_pipeline.core import ChatModel, SynthesisError

if TYPE_CHECKING:
    from legal_search_pipeline.config import Settings

logger = logging.getLogger(__name__)


class OpenAIChatModel:
    """
    OpenAI chat completions with near-deterministic sampling.

    Temperature defaults to 0.1. Output length is uncapped unless
    `max_tokens` is given here or per call; the grounded-answer stage caps
    it, the assistant does not.
    """

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str | None = None,
        temperature: float = 0.1,
        max_tokens: int | None = None,
        timeout: float = 60.0,
        client: AsyncOpenAI | None = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._api_key = api_key
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key, timeout=self.timeout)
        return self._client

    async def complete(
        self,
        messages: Sequence[Mapping[str, str]],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str | None:
        """Return the first choice's content, or None when absent."""
        kwargs = {
            "model": self.model,
            "messages": [dict(m) for m in messages],
            "temperature": self.temperature if temperature is None else temperature,
        }
        max_tokens = self.max_tokens if max_tokens is None else max_tokens
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens

        try:
            response = await asyncio.wait_for(
                self._get_client().chat.completions.create(**kwargs),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise SynthesisError(f"Chat request timed out after {self.timeout}s") from e
        except OpenAIError as e:
            raise SynthesisError(f"Chat request failed: {e}") from e

        if not response.choices:
            return None
        return response.choices[0].message.content


class MockChatModel:
    """
    Canned chat model for tests and offline runs.

    Records every message list it receives in `calls`.
    NOT for production use - only for testing/development.
    """

    def __init__(self, reply: str | None = "คำตอบทดสอบ (อ้างอิง ป.พ.พ. มาตรา 420)"):
        self.model = "mock-chat"
        self.reply = reply
        self.calls: list[list[dict]] = []

    async def complete(
        self,
        messages: Sequence[Mapping[str, str]],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str | None:
        self.calls.append([dict(m) for m in messages])
        return self.reply


def get_chat_model(
    settings: Settings | None = None,
    use_mock: bool = False,
) -> ChatModel:
    """
    Factory function to get the appropriate chat model.

    Args:
        settings: Model, key, sampling and timeout (defaults if None)
        use_mock: If True, return MockChatModel (for testing)
    """
    from legal_search_pipeline.config import Settings

    settings = settings or Settings()
    if use_mock:
        return MockChatModel()
    return OpenAIChatModel(
        model=settings.chat_model,
        api_key=settings.openai_api_key,
        temperature=settings.temperature,
        timeout=settings.chat_timeout_s,
    )
