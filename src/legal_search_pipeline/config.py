"""
Pipeline configuration.

Loads model names, store location, search defaults, per-call timeouts and
tracing switches from environment variables. Credentials are only ever read
here, on the server side; nothing a caller passes in can override them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    """Configuration for the search/answer pipeline.

    Environment Variables:
        OPENAI_API_KEY: Key for embedding and chat calls
        EMBEDDING_MODEL: Embedding model (default: text-embedding-3-small)
        EMBEDDING_DIMENSIONS: Expected vector size (default: 1536)
        CHAT_MODEL: Chat model for answers (default: gpt-4o-mini)
        DATABASE_URL: Postgres connection string for the pgvector store
        LEGAL_DOCS_TABLE: Table holding the legal passages (default: legal_docs)
        MATCH_FUNCTION: SQL similarity function (default: match_legal_docs)
        SEARCH_TOP_K: Documents per query (default: 3)
        SIMILARITY_THRESHOLD: Minimum similarity for relevant docs (default: 0.1)
        EMBEDDING_TIMEOUT_S / STORE_TIMEOUT_S / CHAT_TIMEOUT_S: Per-call timeouts
        USE_MOCK_EMBEDDINGS: Use hash-based embeddings and in-memory store
    """

    openai_api_key: str | None = None
    embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = 1536
    chat_model: str = "gpt-4o-mini"
    database_url: str = "postgresql://localhost/legal_search"
    table_name: str = "legal_docs"
    match_function: str = "match_legal_docs"
    top_k: int = 3
    similarity_threshold: float = 0.1
    temperature: float = 0.1
    max_output_tokens: int = 500
    embedding_timeout_s: float = 15.0
    store_timeout_s: float = 10.0
    chat_timeout_s: float = 60.0
    use_mock: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            openai_api_key=os.environ.get("OPENAI_API_KEY") or None,
            embedding_model=os.environ.get("EMBEDDING_MODEL", "text-embedding-3-small"),
            embedding_dimensions=int(os.environ.get("EMBEDDING_DIMENSIONS", "1536")),
            chat_model=os.environ.get("CHAT_MODEL", "gpt-4o-mini"),
            database_url=os.environ.get("DATABASE_URL", "postgresql://localhost/legal_search"),
            table_name=os.environ.get("LEGAL_DOCS_TABLE", "legal_docs"),
            match_function=os.environ.get("MATCH_FUNCTION", "match_legal_docs"),
            top_k=int(os.environ.get("SEARCH_TOP_K", "3")),
            similarity_threshold=float(os.environ.get("SIMILARITY_THRESHOLD", "0.1")),
            embedding_timeout_s=float(os.environ.get("EMBEDDING_TIMEOUT_S", "15")),
            store_timeout_s=float(os.environ.get("STORE_TIMEOUT_S", "10")),
            chat_timeout_s=float(os.environ.get("CHAT_TIMEOUT_S", "60")),
            use_mock=_env_bool("USE_MOCK_EMBEDDINGS"),
        )


@dataclass
class TracingConfig:
    """Phoenix tracing settings.

    Environment Variables:
        PHOENIX_ENABLED: Trace pipeline stages and OpenAI calls (default: false)
        PHOENIX_PROJECT_NAME: Project shown in Phoenix (default: legal-search-pipeline)
        PHOENIX_COLLECTOR_ENDPOINT: Remote collector; a local Phoenix app is
            launched when unset
        PHOENIX_CAPTURE_LLM_CONTENT: Put prompts and answers on spans (default: false)

    Questions put to a legal assistant routinely name people and describe
    their disputes. Leave content capture off outside controlled environments.
    """

    enabled: bool = False
    project_name: str = "legal-search-pipeline"
    collector_endpoint: str | None = None
    capture_content: bool = False

    @classmethod
    def from_env(cls) -> "TracingConfig":
        return cls(
            enabled=_env_bool("PHOENIX_ENABLED"),
            project_name=os.environ.get("PHOENIX_PROJECT_NAME", "legal-search-pipeline"),
            collector_endpoint=os.environ.get("PHOENIX_COLLECTOR_ENDPOINT") or None,
            capture_content=_env_bool("PHOENIX_CAPTURE_LLM_CONTENT"),
        )
