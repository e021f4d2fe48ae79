"""
LAWDEE legal assistant - conversational replies with cited sources.

Unlike AnswerSynthesizer, the assistant always answers, with or without
passages: the retrieved passages (rendered by generate_enhanced_answer) go
into the system prompt when there are any, and the recent conversation is
replayed so follow-up questions keep their context.
"""

from __future__ import annotations

import logging
from typing import Sequence

from legal_search_pipeline.core import ChatModel, LegalDocument, SynthesisError
from legal_search_pipeline.observability import (
    GEN_AI_COMPLETION,
    LEGAL_SEARCH_DOC_COUNT,
    LEGAL_SEARCH_HISTORY_TURNS,
    LEGAL_SEARCH_OUTCOME,
    get_tracer,
    get_tracing_config,
    model_call_attributes,
    record_degraded,
)
from legal_search_pipeline.synthesis.citations import generate_enhanced_answer
from legal_search_pipeline.synthesis.prompts import (
    CHAT_ERROR_MESSAGE,
    build_assistant_system_prompt,
)
from legal_search_pipeline.synthesis.schemas import AssistantReply, ChatTurn, LegalSource
from legal_search_pipeline.synthesis.synthesizer import call_chat_model

logger = logging.getLogger(__name__)

HISTORY_WINDOW = 6


class LegalAssistant:
    """Grounded multi-turn assistant. Replies are not length-capped."""

    def __init__(
        self,
        chat_model: ChatModel,
        temperature: float = 0.1,
        history_window: int = HISTORY_WINDOW,
    ):
        self._chat_model = chat_model
        self.temperature = temperature
        self.history_window = history_window

    def build_messages(
        self,
        text: str,
        docs: Sequence[LegalDocument],
        history: Sequence[ChatTurn] = (),
    ) -> list[dict]:
        """System prompt, the last few turns, then the new user message."""
        system_prompt = build_assistant_system_prompt(generate_enhanced_answer(text, docs))
        recent = list(history)[-self.history_window:] if self.history_window > 0 else []

        messages = [{"role": "system", "content": system_prompt}]
        messages.extend({"role": turn.role, "content": turn.content} for turn in recent)
        messages.append({"role": "user", "content": text})
        return messages

    async def reply(
        self,
        text: str,
        docs: Sequence[LegalDocument],
        history: Sequence[ChatTurn] = (),
    ) -> AssistantReply:
        sources = [LegalSource.from_document(doc) for doc in docs]
        messages = self.build_messages(text, docs, history)

        with get_tracer().start_span(
            "legal_search.chat",
            attributes=model_call_attributes("chat", self._chat_model.model, self.temperature),
        ) as span:
            span.set_attribute(LEGAL_SEARCH_DOC_COUNT, len(docs))
            span.set_attribute(LEGAL_SEARCH_HISTORY_TURNS, len(messages) - 2)

            try:
                answer = await call_chat_model(
                    self._chat_model,
                    messages,
                    temperature=self.temperature,
                )
            except SynthesisError as e:
                logger.error(f"Assistant reply failed, returning fallback: {e}", exc_info=e)
                record_degraded(span, e, outcome="fallback")
                return AssistantReply(text=CHAT_ERROR_MESSAGE, sources=sources, fallback=True)

            span.set_attribute(LEGAL_SEARCH_OUTCOME, "answered")
            if get_tracing_config().capture_content:
                span.set_attribute(GEN_AI_COMPLETION, answer)
            return AssistantReply(text=answer, sources=sources)
