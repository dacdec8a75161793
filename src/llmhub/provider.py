"""LLMProvider: the entry point callers use to obtain clients.

One provider owns one cache. Every client it hands out references that
cache, and ``clean_request_cache`` releases the entries of one request.
Two providers never share cache state unless they are given the same
``cache_path``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from llmhub.cache import get_cache_path
from llmhub.config import resolve_enable_caching
from llmhub.factory import resolve_client
from llmhub.lifecycle import CacheLifecycleManager
from llmhub.registry import get_model_provider

if TYPE_CHECKING:
    from pathlib import Path

    from llmhub.cache import LLMCache
    from llmhub.llm_clients import LLMClient
    from llmhub.models import ClientConfig, LanguageModelHandle, ProviderKind


class LLMProvider:
    def __init__(
        self,
        logger: logging.Logger | None = None,
        enable_caching: bool = False,
        *,
        cache_path: Path | None = None,
    ) -> None:
        self.logger = logger or logging.getLogger("llmhub")
        self.enable_caching = enable_caching
        self._cache_manager = CacheLifecycleManager.create(
            self.logger, enable_caching, cache_path=cache_path
        )

    @classmethod
    def from_env(cls, logger: logging.Logger | None = None) -> LLMProvider:
        """Build a provider from ``LLMHUB_ENABLE_CACHING`` and ``LLMHUB_CACHE_PATH``.

        The cache is in-memory, and private to this provider, unless
        ``LLMHUB_CACHE_PATH`` names a file.
        """
        enable_caching = resolve_enable_caching()
        cache_path = get_cache_path() if enable_caching else None
        return cls(logger, enable_caching, cache_path=cache_path)

    @property
    def cache(self) -> LLMCache | None:
        return self._cache_manager.cache

    def get_client(
        self,
        model: str | LanguageModelHandle,
        client_options: ClientConfig | None = None,
    ) -> LLMClient:
        """Return a new client for *model*, sharing this provider's cache."""
        return resolve_client(
            model,
            client_options,
            logger=self.logger,
            enable_caching=self.enable_caching,
            cache=self.cache,
        )

    def clean_request_cache(self, request_id: str) -> None:
        """Drop cached responses for *request_id*. A no-op without caching."""
        self._cache_manager.cleanup(request_id)

    @staticmethod
    def get_model_provider(model_name: str) -> ProviderKind | None:
        return get_model_provider(model_name)

    def close(self) -> None:
        self._cache_manager.close()

    def __enter__(self) -> LLMProvider:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
