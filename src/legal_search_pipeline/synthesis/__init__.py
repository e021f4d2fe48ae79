"""
Synthesis module - turning retrieved passages into text for the user.

- AnswerSynthesizer: model-grounded single answer with fixed fallbacks
- generate_enhanced_answer(): deterministic citation answer, no model call
- LegalAssistant: multi-turn assistant replies with cited sources
- OpenAIChatModel / MockChatModel / get_chat_model(): the chat model seam
"""

from legal_search_pipeline.synthesis.prompts import (
    ANSWER_ERROR_MESSAGE,
    CHAT_ERROR_MESSAGE,
    NO_RELEVANT_INFO_MESSAGE,
    build_answer_prompt,
    build_assistant_system_prompt,
)
from legal_search_pipeline.synthesis.citations import (
    format_context,
    generate_enhanced_answer,
)
from legal_search_pipeline.synthesis.chat_model import (
    OpenAIChatModel,
    MockChatModel,
    get_chat_model,
)
from legal_search_pipeline.synthesis.schemas import (
    AssistantReply,
    ChatTurn,
    LegalSource,
)
from legal_search_pipeline.synthesis.synthesizer import AnswerSynthesizer
from legal_search_pipeline.synthesis.assistant import LegalAssistant

__all__ = [
    # Messages and prompts
    "ANSWER_ERROR_MESSAGE",
    "CHAT_ERROR_MESSAGE",
    "NO_RELEVANT_INFO_MESSAGE",
    "build_answer_prompt",
    "build_assistant_system_prompt",
    # Citations
    "format_context",
    "generate_enhanced_answer",
    # Chat model
    "OpenAIChatModel",
    "MockChatModel",
    "get_chat_model",
    # Schemas
    "AssistantReply",
    "ChatTurn",
    "LegalSource",
    # Synthesizers
    "AnswerSynthesizer",
    "LegalAssistant",
]
