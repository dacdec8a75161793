"""Multi-vendor client that wraps a model handle and calls litellm."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from llmhub.llm_clients.base import LLMClient
from llmhub.models import CompletionResponse, ProviderKind

if TYPE_CHECKING:
    import logging

    from llmhub.cache import LLMCache
    from llmhub.models import ChatCompletionOptions, LanguageModelHandle


class GenericClient(LLMClient):
    """Client for namespaced identifiers and caller-built handles.

    The handle is stored as given; it is only read when a request is sent.
    """

    kind = ProviderKind.GENERIC

    def __init__(
        self,
        *,
        model: LanguageModelHandle,
        logger: logging.Logger,
        enable_caching: bool = False,
        cache: LLMCache | None = None,
    ) -> None:
        super().__init__(
            logger=logger,
            enable_caching=enable_caching,
            cache=cache,
            model_name=str(getattr(model, "litellm_model", model)),
        )
        self.model = model

    def cache_scope(self) -> dict[str, Any]:
        # Same model behind another api_base is a different backend.
        return dict(getattr(self.model, "options", None) or {})

    def build_request_params(self, options: ChatCompletionOptions) -> dict[str, Any]:
        """Build litellm.acompletion kwargs from the handle and *options*."""
        params: dict[str, Any] = dict(getattr(self.model, "options", None) or {})
        params["model"] = self.model.litellm_model
        params["messages"] = [m.model_dump() for m in options.messages]
        if options.temperature is not None:
            params["temperature"] = options.temperature
        if options.max_tokens is not None:
            params["max_tokens"] = options.max_tokens
        return params

    async def _complete(self, options: ChatCompletionOptions) -> CompletionResponse:
        import litellm

        response = await litellm.acompletion(**self.build_request_params(options))

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        return CompletionResponse(
            content=content,
            model_name=response.model or self.model_name,
            provider=self.kind.value,
            raw_response_json=json.dumps(response.model_dump(), default=str),
        )
