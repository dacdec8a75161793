"""Base class shared by every LLM client variant."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from llmhub.models import CompletionResponse

if TYPE_CHECKING:
    import logging

    from llmhub.cache import LLMCache
    from llmhub.models import ChatCompletionOptions, ClientConfig, ProviderKind


class LLMClient(ABC):
    """A model bound to a vendor backend and to the provider's shared cache.

    Clients never own the cache. They are cheap to build: the vendor SDK
    client is created on first use, not at construction.
    """

    kind: ClassVar[ProviderKind]

    def __init__(
        self,
        *,
        logger: logging.Logger,
        enable_caching: bool = False,
        cache: LLMCache | None = None,
        model_name: str,
        client_options: ClientConfig | None = None,
    ) -> None:
        self.logger = logger
        self.enable_caching = enable_caching
        self.cache = cache
        self.model_name = model_name
        self.client_options = client_options

    @property
    def caching_active(self) -> bool:
        return self.enable_caching and self.cache is not None

    async def create_chat_completion(
        self,
        options: ChatCompletionOptions,
        *,
        request_id: str,
    ) -> CompletionResponse:
        """Answer *options*, from the shared cache when possible.

        Fresh responses are stored tagged with *request_id* so the caller can
        release them once the request is done.
        """
        key = None
        if self.caching_active:
            key = self.cache.fingerprint(self.model_name, options, self.cache_scope())
            cached = self.cache.get(key)
            if cached is not None:
                self.logger.debug(
                    "LLM cache hit for %s",
                    self.model_name,
                    extra={"request_id": request_id},
                )
                return CompletionResponse.model_validate({**cached, "cached": True})

        response = await self._complete(options)

        if key is not None:
            self.cache.set(key, response.model_dump(mode="json"), request_id)
        return response

    def cache_scope(self) -> dict[str, Any]:
        """Client settings that take part in the cache key besides the model."""
        return {}

    @abstractmethod
    async def _complete(self, options: ChatCompletionOptions) -> CompletionResponse:
        """Call the vendor API."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model_name={self.model_name!r})"
