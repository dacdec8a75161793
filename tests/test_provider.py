"""Tests for llmhub.provider — the LLMProvider facade."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from llmhub import (
    LLMProvider,
    MalformedModelIdError,
    UnsupportedModelError,
    UnsupportedSubProviderError,
)
from llmhub.cache import LLMCache
from llmhub.llm_clients import AnthropicClient, GenericClient, OpenAIClient
from llmhub.models import ProviderKind, SubProvider
from llmhub.registry import MODEL_TO_PROVIDER
from tests.conftest import StubClient, build_options

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def provider(logger: logging.Logger):
    instance = LLMProvider(logger, enable_caching=True)
    yield instance
    instance.close()


# ---------------------------------------------------------------------------
# get_client
# ---------------------------------------------------------------------------


class TestGetClient:
    def test_flat_openai(self, provider: LLMProvider) -> None:
        client = provider.get_client("gpt-4o")
        assert isinstance(client, OpenAIClient)
        assert client.kind is ProviderKind.OPENAI
        assert client.model_name == "gpt-4o"

    def test_flat_anthropic(self, provider: LLMProvider) -> None:
        client = provider.get_client("claude-3-7-sonnet-latest")
        assert isinstance(client, AnthropicClient)
        assert client.kind is ProviderKind.ANTHROPIC

    def test_namespaced(self, provider: LLMProvider) -> None:
        client = provider.get_client("openai/gpt-4.1")
        assert isinstance(client, GenericClient)
        assert client.model.sub_provider is SubProvider.OPENAI
        assert client.model.model_id == "gpt-4.1"

    def test_unknown_flat_lists_whole_table(self, provider: LLMProvider) -> None:
        with pytest.raises(UnsupportedModelError) as exc_info:
            provider.get_client("not-a-real-model")
        assert sorted(exc_info.value.supported_models) == sorted(MODEL_TO_PROVIDER)
        for name in MODEL_TO_PROVIDER:
            assert name in str(exc_info.value)

    def test_malformed(self, provider: LLMProvider) -> None:
        with pytest.raises(MalformedModelIdError):
            provider.get_client("bogus/weird/path/too/long")

    def test_unknown_sub_provider(self, provider: LLMProvider) -> None:
        with pytest.raises(UnsupportedSubProviderError):
            provider.get_client("bogus/model")

    def test_every_client_shares_provider_cache(self, provider: LLMProvider) -> None:
        clients = [
            provider.get_client("gpt-4o"),
            provider.get_client("gemini-2.0-flash"),
            provider.get_client("groq/llama-3.3-70b-versatile"),
        ]
        assert provider.cache is not None
        assert all(c.cache is provider.cache for c in clients)

    def test_each_call_returns_new_client(self, provider: LLMProvider) -> None:
        assert provider.get_client("gpt-4o") is not provider.get_client("gpt-4o")


# ---------------------------------------------------------------------------
# Caching disabled
# ---------------------------------------------------------------------------


class TestCachingDisabled:
    def test_no_cache(self, logger: logging.Logger) -> None:
        provider = LLMProvider(logger)
        assert provider.cache is None
        client = provider.get_client("gpt-4o")
        assert client.cache is None
        assert client.caching_active is False

    def test_cleanup_is_noop(self, logger: logging.Logger) -> None:
        provider = LLMProvider(logger)
        provider.clean_request_cache("req-1")
        provider.clean_request_cache("req-1")

    def test_default_logger(self) -> None:
        provider = LLMProvider()
        assert provider.logger.name == "llmhub"


# ---------------------------------------------------------------------------
# clean_request_cache
# ---------------------------------------------------------------------------


class TestCleanRequestCache:
    @pytest.mark.asyncio
    async def test_cleanup_releases_request_entries(
        self, provider: LLMProvider, logger: logging.Logger
    ) -> None:
        client = StubClient(
            logger=logger, enable_caching=True, cache=provider.cache, model_name="gpt-4o"
        )
        await client.create_chat_completion(build_options("a"), request_id="req-1")
        await client.create_chat_completion(build_options("b"), request_id="req-2")

        provider.clean_request_cache("req-1")

        assert provider.cache.count("req-1") == 0
        assert provider.cache.count("req-2") == 1

    def test_cleanup_twice_is_harmless(self, provider: LLMProvider) -> None:
        provider.cache.set("k1", {"content": "a"}, "req-1")
        provider.clean_request_cache("req-1")
        provider.clean_request_cache("req-1")
        assert provider.cache.count() == 0

    def test_cleanup_unknown_request(self, provider: LLMProvider) -> None:
        provider.clean_request_cache("never-seen")


# ---------------------------------------------------------------------------
# Isolation between providers
# ---------------------------------------------------------------------------


class TestProviderIsolation:
    def test_in_memory_providers_do_not_share(self, logger: logging.Logger) -> None:
        with LLMProvider(logger, True) as first, LLMProvider(logger, True) as second:
            first.cache.set("k1", {"content": "a"}, "req-1")
            assert second.cache.get("k1") is None
            second.clean_request_cache("req-1")
            assert first.cache.count("req-1") == 1

    def test_same_cache_path_is_shared(self, logger: logging.Logger, tmp_path) -> None:
        path = tmp_path / "cache.db"
        with (
            LLMProvider(logger, True, cache_path=path) as first,
            LLMProvider(logger, True, cache_path=path) as second,
        ):
            first.cache.set("k1", {"content": "a"}, "req-1")
            assert second.cache.get("k1") == {"content": "a"}


# ---------------------------------------------------------------------------
# get_model_provider / from_env / close
# ---------------------------------------------------------------------------


class TestMisc:
    def test_get_model_provider(self) -> None:
        assert LLMProvider.get_model_provider("gpt-4o") is ProviderKind.OPENAI
        assert LLMProvider.get_model_provider("openai/gpt-4.1") is None
        assert LLMProvider.get_model_provider("nope") is None

    def test_from_env_disabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LLMHUB_ENABLE_CACHING", raising=False)
        provider = LLMProvider.from_env()
        assert provider.cache is None

    def test_from_env_in_memory(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLMHUB_ENABLE_CACHING", "true")
        monkeypatch.setenv("LLMHUB_CACHE_PATH", "")
        provider = LLMProvider.from_env()
        assert isinstance(provider.cache, LLMCache)
        assert provider.cache.path is None
        provider.close()

    def test_from_env_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        path = tmp_path / "cache.db"
        monkeypatch.setenv("LLMHUB_ENABLE_CACHING", "1")
        monkeypatch.setenv("LLMHUB_CACHE_PATH", str(path))
        with LLMProvider.from_env() as provider:
            assert provider.cache.path == path

    def test_context_manager_closes(self, logger: logging.Logger) -> None:
        with patch.object(LLMCache, "close") as close:
            with LLMProvider(logger, True) as provider:
                assert provider.cache is not None
                close.assert_not_called()
        close.assert_called_once_with()

    def test_from_env_providers_without_path_are_isolated(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path
    ) -> None:
        monkeypatch.setenv("LLMHUB_ENABLE_CACHING", "1")
        monkeypatch.delenv("LLMHUB_CACHE_PATH", raising=False)
        monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path))
        monkeypatch.setenv("HOME", str(tmp_path))

        with LLMProvider.from_env() as first, LLMProvider.from_env() as second:
            assert first.cache.path is None
            assert second.cache.path is None

            first.cache.set("k1", {"content": "a"}, "req-1")
            assert second.cache.get("k1") is None

            second.clean_request_cache("req-1")
            assert first.cache.count("req-1") == 1

        assert list(tmp_path.iterdir()) == []
