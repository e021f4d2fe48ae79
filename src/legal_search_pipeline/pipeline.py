"""
Legal search pipeline - embed, retrieve, filter, synthesize.

    question -> Embedder -> vector -> Retriever -> passages
             -> threshold filter -> Synthesizer -> answer text

Every collaborator comes in through PipelineComponents. Nothing here builds a
client at import time, so tests hand in fakes and production hands in the
OpenAI/pgvector implementations via build_pipeline().

Failure policy at this boundary:
- EmbeddingError propagates. Without a query vector nothing else can run.
- Retrieval failures become "no documents" (logged, traced).
- Synthesis failures become a fixed fallback message (logged, traced).

Each call owns its own vector, passage list and prompt, so concurrent calls
(asyncio.gather over many questions) do not interfere.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from legal_search_pipeline.config import Settings
from legal_search_pipeline.core import (
    ChatModel,
    DocumentStore,
    EmbeddingProvider,
    LegalDocument,
)
from legal_search_pipeline.retrieval import SimilarityRetriever
from legal_search_pipeline.synthesis import (
    AnswerSynthesizer,
    AssistantReply,
    ChatTurn,
    LegalAssistant,
    generate_enhanced_answer,
)

logger = logging.getLogger(__name__)


@dataclass
class PipelineComponents:
    """The capability set the pipeline runs on: embed, retrieve, synthesize."""

    embedder: EmbeddingProvider
    store: DocumentStore
    chat_model: ChatModel


@dataclass
class LegalSearchPipeline:
    """Semantic search and grounded answering over the legal corpus."""

    components: PipelineComponents
    settings: Settings = field(default_factory=Settings)

    def __post_init__(self) -> None:
        self._retriever = SimilarityRetriever(
            self.components.store,
            timeout=self.settings.store_timeout_s,
        )
        self._synthesizer = AnswerSynthesizer(
            self.components.chat_model,
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_output_tokens,
        )
        self._assistant = LegalAssistant(
            self.components.chat_model,
            temperature=self.settings.temperature,
        )

    # -----------------------------------------------------------------------
    # LIFECYCLE
    # -----------------------------------------------------------------------

    async def connect(self) -> None:
        await self.components.store.connect()

    async def close(self) -> None:
        await self.components.store.close()

    async def __aenter__(self) -> "LegalSearchPipeline":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # -----------------------------------------------------------------------
    # STAGES
    # -----------------------------------------------------------------------

    async def embed(self, text: str) -> np.ndarray:
        """Embed text. Raises EmbeddingError on failure."""
        return await self.components.embedder.embed(text)

    async def search_similar_docs(
        self,
        query: str,
        top_k: int | None = None,
    ) -> list[LegalDocument]:
        """Nearest passages for a query, most similar first."""
        top_k = self.settings.top_k if top_k is None else top_k
        query_vector = await self.embed(query)
        return await self._retriever.retrieve(query_vector, top_k)

    async def search_relevant_docs(
        self,
        query: str,
        top_k: int | None = None,
        threshold: float | None = None,
    ) -> list[LegalDocument]:
        """Nearest passages with similarity at or above the threshold."""
        top_k = self.settings.top_k if top_k is None else top_k
        threshold = self.settings.similarity_threshold if threshold is None else threshold
        query_vector = await self.embed(query)
        return await self._retriever.retrieve_relevant(query_vector, top_k, threshold)

    # -----------------------------------------------------------------------
    # ANSWERS
    # -----------------------------------------------------------------------

    async def answer_question(self, question: str) -> str:
        """
        Model-grounded answer for a question.

        Uses every retrieved passage (no similarity threshold). Returns the
        model's answer, NO_RELEVANT_INFO_MESSAGE, or ANSWER_ERROR_MESSAGE.

        Raises:
            EmbeddingError: the question could not be embedded
        """
        query_vector = await self.embed(question)
        docs = await self._retriever.retrieve_relevant(
            query_vector, self.settings.top_k, threshold=None
        )
        return await self._synthesizer.answer(question, docs)

    def generate_enhanced_answer(
        self,
        question: str,
        docs: Sequence[LegalDocument],
    ) -> str:
        """Deterministic citation answer. No model call."""
        return generate_enhanced_answer(question, docs)

    async def chat(
        self,
        text: str,
        history: Sequence[ChatTurn] = (),
    ) -> AssistantReply:
        """
        Assistant reply grounded on passages above the similarity threshold.

        Raises:
            EmbeddingError: the message could not be embedded
        """
        docs = await self.search_relevant_docs(text)
        return await self._assistant.reply(text, docs, history)


def build_pipeline(
    settings: Settings | None = None,
    use_mock: bool | None = None,
) -> LegalSearchPipeline:
    """
    Factory that wires production (or mock) components from settings.

    Args:
        settings: Pipeline settings (loaded from env if not provided)
        use_mock: Mock embeddings, in-memory store and canned chat model.
            Defaults to settings.use_mock.
    """
    from legal_search_pipeline.embeddings import get_embedding_provider
    from legal_search_pipeline.retrieval import get_vector_store
    from legal_search_pipeline.synthesis import get_chat_model

    settings = settings or Settings.from_env()
    use_mock = settings.use_mock if use_mock is None else use_mock

    components = PipelineComponents(
        embedder=get_embedding_provider(settings, use_mock=use_mock),
        store=get_vector_store(settings, use_postgres=not use_mock),
        chat_model=get_chat_model(settings, use_mock=use_mock),
    )
    logger.debug(f"Built pipeline (mock={use_mock}, chat_model={components.chat_model.model})")
    return LegalSearchPipeline(components, settings)
