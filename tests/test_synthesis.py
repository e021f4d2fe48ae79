"""
Unit Tests for Answer Synthesis

Tests the prompt, the citation answer, the chat model client and the
AnswerSynthesizer fallbacks.

PATTERNS:
---------
1. MockChatModel records every message list it receives
2. Fallback texts are compared exactly
3. The OpenAI client is injected, never constructed
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import OpenAIError

from legal_search_pipeline.config import Settings
from legal_search_pipeline.core import SynthesisError
from legal_search_pipeline.synthesis import (
    ANSWER_ERROR_MESSAGE,
    NO_RELEVANT_INFO_MESSAGE,
    AnswerSynthesizer,
    MockChatModel,
    OpenAIChatModel,
    build_answer_prompt,
    format_context,
    generate_enhanced_answer,
    get_chat_model,
)
from legal_search_pipeline.synthesis.synthesizer import call_chat_model

QUESTION = "ขอคำปรึกษาคดีแพ่ง"


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


def _completion(content):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=_completion("คำตอบ"))
    return client


@pytest.fixture
def failing_model():
    model = MagicMock()
    model.model = "failing"
    model.complete = AsyncMock(side_effect=SynthesisError("rate limited"))
    return model


# ---------------------------------------------------------------------------
# PROMPT AND CONTEXT
# ---------------------------------------------------------------------------


class TestPrompt:

    def test_context_joins_contents_in_order(self, civil_docs):
        context = format_context(civil_docs)

        parts = context.split("\n\n")
        assert parts == [doc.content for doc in civil_docs]

    def test_prompt_contains_question_and_context(self, civil_docs):
        context = format_context(civil_docs)
        prompt = build_answer_prompt(QUESTION, context)

        assert QUESTION in prompt
        assert context in prompt
        assert prompt.index(QUESTION) < prompt.index(context)


# ---------------------------------------------------------------------------
# CITATION ANSWER
# ---------------------------------------------------------------------------


class TestGenerateEnhancedAnswer:
    """Test the deterministic citation answer."""

    def test_empty_documents(self):
        assert generate_enhanced_answer(QUESTION, []) == ""

    def test_one_citation_per_document(self, civil_docs):
        answer = generate_enhanced_answer(QUESTION, civil_docs)

        lines = answer.split("\n\n")
        assert len(lines) == len(civil_docs)
        for line, doc in zip(lines, civil_docs):
            assert line.startswith(doc.law_type)
            assert f"มาตรา {doc.section}" in line
            assert line.endswith(doc.content)

    def test_exact_format(self, civil_docs):
        assert generate_enhanced_answer(QUESTION, civil_docs[:1]) == (
            "ประมวลกฎหมายแพ่งและพาณิชย์ มาตรา 420: "
            "ผู้ใดจงใจหรือประมาทเลินเล่อ ทำต่อบุคคลอื่นโดยผิดกฎหมาย"
        )

    def test_question_does_not_change_output(self, civil_docs):
        assert generate_enhanced_answer("a", civil_docs) == generate_enhanced_answer("b", civil_docs)


# ---------------------------------------------------------------------------
# CHAT MODEL
# ---------------------------------------------------------------------------


class TestOpenAIChatModel:
    """Test OpenAIChatModel with a mocked client."""

    @pytest.mark.asyncio
    async def test_sends_sampling_parameters(self, mock_client):
        model = OpenAIChatModel(client=mock_client)

        content = await model.complete([{"role": "user", "content": QUESTION}])

        assert content == "คำตอบ"
        kwargs = mock_client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.1
        assert "max_tokens" not in kwargs
        assert kwargs["messages"] == [{"role": "user", "content": QUESTION}]

    @pytest.mark.asyncio
    async def test_constructor_cap_applies_to_every_call(self, mock_client):
        model = OpenAIChatModel(max_tokens=200, client=mock_client)

        await model.complete([])

        assert mock_client.chat.completions.create.await_args.kwargs["max_tokens"] == 200

    @pytest.mark.asyncio
    async def test_per_call_overrides(self, mock_client):
        model = OpenAIChatModel(client=mock_client)

        await model.complete([], temperature=0.7, max_tokens=50)

        kwargs = mock_client.chat.completions.create.await_args.kwargs
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 50

    @pytest.mark.asyncio
    async def test_no_choices_returns_none(self, mock_client):
        mock_client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        assert await OpenAIChatModel(client=mock_client).complete([]) is None

    @pytest.mark.asyncio
    async def test_api_error_raises_synthesis_error(self, mock_client):
        mock_client.chat.completions.create.side_effect = OpenAIError("500")

        with pytest.raises(SynthesisError):
            await OpenAIChatModel(client=mock_client).complete([])

    @pytest.mark.asyncio
    async def test_timeout_raises_synthesis_error(self, mock_client):
        async def slow(**kwargs):
            await asyncio.sleep(1)

        mock_client.chat.completions.create.side_effect = slow

        with pytest.raises(SynthesisError, match="timed out"):
            await OpenAIChatModel(timeout=0.01, client=mock_client).complete([])


class TestGetChatModel:

    def test_mock(self):
        assert isinstance(get_chat_model(use_mock=True), MockChatModel)

    def test_production_uses_settings(self):
        model = get_chat_model(Settings(chat_model="gpt-4o", temperature=0.0, chat_timeout_s=5.0))

        assert isinstance(model, OpenAIChatModel)
        assert model.model == "gpt-4o"
        assert model.temperature == 0.0
        assert model.timeout == 5.0
        # Capped per call by the answer stage only
        assert model.max_tokens is None


class TestCallChatModel:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [None, "", "   \n"])
    async def test_empty_content_raises(self, reply):
        with pytest.raises(SynthesisError):
            await call_chat_model(MockChatModel(reply=reply), [])

    @pytest.mark.asyncio
    async def test_unexpected_error_is_wrapped(self):
        model = MagicMock()
        model.model = "broken"
        cause = ValueError("bad payload")
        model.complete = AsyncMock(side_effect=cause)

        with pytest.raises(SynthesisError) as exc_info:
            await call_chat_model(model, [])

        assert exc_info.value.__cause__ is cause


# ---------------------------------------------------------------------------
# ANSWER SYNTHESIZER
# ---------------------------------------------------------------------------


class TestAnswerSynthesizer:
    """Test AnswerSynthesizer answers and fallbacks."""

    @pytest.mark.asyncio
    async def test_answer_from_model(self, chat_model, civil_docs):
        answer = await AnswerSynthesizer(chat_model).answer(QUESTION, civil_docs)

        assert answer == chat_model.reply
        assert len(chat_model.calls) == 1
        [message] = chat_model.calls[0]
        assert message["role"] == "user"
        assert message["content"] == build_answer_prompt(QUESTION, format_context(civil_docs))

    @pytest.mark.asyncio
    async def test_no_documents_skips_model(self, chat_model):
        answer = await AnswerSynthesizer(chat_model).answer(QUESTION, [])

        assert answer == NO_RELEVANT_INFO_MESSAGE
        assert chat_model.calls == []

    @pytest.mark.asyncio
    async def test_model_failure_returns_error_message(self, failing_model, civil_docs, caplog):
        with caplog.at_level("ERROR"):
            answer = await AnswerSynthesizer(failing_model).answer(QUESTION, civil_docs)

        assert answer == ANSWER_ERROR_MESSAGE
        assert "rate limited" in caplog.text

    @pytest.mark.asyncio
    async def test_empty_reply_returns_error_message(self, civil_docs):
        answer = await AnswerSynthesizer(MockChatModel(reply=None)).answer(QUESTION, civil_docs)
        assert answer == ANSWER_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_passes_sampling_parameters(self, civil_docs):
        model = MagicMock()
        model.model = "m"
        model.complete = AsyncMock(return_value="ok")

        await AnswerSynthesizer(model, temperature=0.1, max_tokens=500).answer(QUESTION, civil_docs)

        kwargs = model.complete.await_args.kwargs
        assert kwargs == {"temperature": 0.1, "max_tokens": 500}
