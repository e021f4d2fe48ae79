"""
Answer synthesizer - grounded answers from retrieved passages.

answer() never raises. It returns one of three kinds of text:
- a real answer from the chat model
- NO_RELEVANT_INFO_MESSAGE when there are no passages (model not called)
- ANSWER_ERROR_MESSAGE when the model call fails or returns nothing

Failures are wrapped in SynthesisError, logged and recorded on the span
before being turned into the fallback text.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from legal_search_pipeline.core import ChatModel, LegalDocument, SynthesisError
from legal_search_pipeline.observability import (
    GEN_AI_COMPLETION,
    GEN_AI_PROMPT,
    LEGAL_SEARCH_DOC_COUNT,
    LEGAL_SEARCH_OUTCOME,
    get_tracer,
    get_tracing_config,
    model_call_attributes,
    record_degraded,
)
from legal_search_pipeline.synthesis.citations import format_context
from legal_search_pipeline.synthesis.prompts import (
    ANSWER_ERROR_MESSAGE,
    NO_RELEVANT_INFO_MESSAGE,
    build_answer_prompt,
)

logger = logging.getLogger(__name__)


async def call_chat_model(
    chat_model: ChatModel,
    messages: Sequence[Mapping[str, str]],
    temperature: float | None = None,
    max_tokens: int | None = None,
) -> str:
    """
    Run one completion and insist on non-empty content.

    Raises:
        SynthesisError: on any model failure or empty content
    """
    try:
        content = await chat_model.complete(
            messages, temperature=temperature, max_tokens=max_tokens
        )
    except SynthesisError:
        raise
    except Exception as e:
        raise SynthesisError(f"Chat model {chat_model.model} failed: {e}") from e

    if not content or not content.strip():
        raise SynthesisError(f"Chat model {chat_model.model} returned no content")
    return content


class AnswerSynthesizer:
    """Composes one grounded prompt and asks the chat model to answer it."""

    def __init__(
        self,
        chat_model: ChatModel,
        temperature: float = 0.1,
        max_tokens: int = 500,
    ):
        self._chat_model = chat_model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def answer(self, question: str, docs: Sequence[LegalDocument]) -> str:
        if not docs:
            return NO_RELEVANT_INFO_MESSAGE

        prompt = build_answer_prompt(question, format_context(docs))
        capture = get_tracing_config().capture_content

        with get_tracer().start_span(
            "legal_search.synthesize",
            attributes=model_call_attributes(
                "chat", self._chat_model.model, self.temperature, self.max_tokens
            ),
        ) as span:
            span.set_attribute(LEGAL_SEARCH_DOC_COUNT, len(docs))
            if capture:
                span.set_attribute(GEN_AI_PROMPT, prompt)

            try:
                answer = await call_chat_model(
                    self._chat_model,
                    [{"role": "user", "content": prompt}],
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                )
            except SynthesisError as e:
                logger.error(f"Answer synthesis failed, returning fallback: {e}", exc_info=e)
                record_degraded(span, e, outcome="fallback")
                return ANSWER_ERROR_MESSAGE

            span.set_attribute(LEGAL_SEARCH_OUTCOME, "answered")
            if capture:
                span.set_attribute(GEN_AI_COMPLETION, answer)
            return answer
