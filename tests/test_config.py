"""Unit tests for pipeline Settings."""

import pytest
from unittest.mock import patch

from legal_search_pipeline.config import Settings


class TestSettings:

    def test_defaults(self):
        settings = Settings()

        assert settings.embedding_model == "text-embedding-3-small"
        assert settings.embedding_dimensions == 1536
        assert settings.top_k == 3
        assert settings.similarity_threshold == 0.1
        assert settings.temperature == 0.1
        assert settings.max_output_tokens == 500
        assert settings.use_mock is False

    def test_from_env_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            settings = Settings.from_env()

        assert settings == Settings()

    def test_from_env_overrides(self):
        env = {
            "OPENAI_API_KEY": "sk-test",
            "EMBEDDING_DIMENSIONS": "3072",
            "CHAT_MODEL": "gpt-4o",
            "DATABASE_URL": "postgresql://db/legal",
            "SEARCH_TOP_K": "5",
            "SIMILARITY_THRESHOLD": "0.25",
            "STORE_TIMEOUT_S": "2.5",
            "USE_MOCK_EMBEDDINGS": "true",
        }
        with patch.dict("os.environ", env, clear=True):
            settings = Settings.from_env()

        assert settings.openai_api_key == "sk-test"
        assert settings.embedding_dimensions == 3072
        assert settings.chat_model == "gpt-4o"
        assert settings.database_url == "postgresql://db/legal"
        assert settings.top_k == 5
        assert settings.similarity_threshold == 0.25
        assert settings.store_timeout_s == 2.5
        assert settings.use_mock is True

    def test_empty_api_key_is_none(self):
        with patch.dict("os.environ", {"OPENAI_API_KEY": ""}, clear=True):
            assert Settings.from_env().openai_api_key is None

    def test_bad_number_raises(self):
        with patch.dict("os.environ", {"SEARCH_TOP_K": "three"}, clear=True):
            with pytest.raises(ValueError):
                Settings.from_env()
