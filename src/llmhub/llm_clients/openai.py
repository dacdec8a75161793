"""OpenAI client and the base for OpenAI-compatible vendors."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, ClassVar

from llmhub.llm_clients.base import LLMClient
from llmhub.models import CompletionResponse, ProviderKind

if TYPE_CHECKING:
    from openai import AsyncOpenAI

    from llmhub.models import ChatCompletionOptions

# Reasoning models reject temperature and take max_completion_tokens.
_REASONING_PREFIXES = ("o1", "o3", "o4")


class OpenAIClient(LLMClient):
    """Client for the OpenAI Chat Completions API.

    Subclasses reuse it for vendors exposing the same API by overriding
    ``default_base_url``, ``api_key_env`` and ``model_prefix``.
    """

    kind = ProviderKind.OPENAI
    default_base_url: ClassVar[str | None] = None
    api_key_env: ClassVar[str] = "OPENAI_API_KEY"
    model_prefix: ClassVar[str] = ""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._client: AsyncOpenAI | None = None

    @property
    def api_model_name(self) -> str:
        """Model name as the vendor API knows it."""
        return self.model_name.removeprefix(self.model_prefix)

    def build_client_kwargs(self) -> dict[str, Any]:
        """Constructor kwargs for ``AsyncOpenAI``. Caller options win."""
        kwargs = self.client_options.to_sdk_kwargs() if self.client_options else {}
        if self.default_base_url and "base_url" not in kwargs:
            kwargs["base_url"] = self.default_base_url
        if "api_key" not in kwargs:
            api_key = os.environ.get(self.api_key_env)
            if api_key:
                kwargs["api_key"] = api_key
        return kwargs

    def build_request_params(self, options: ChatCompletionOptions) -> dict[str, Any]:
        """Build chat.completions.create kwargs."""
        model = self.api_model_name
        params: dict[str, Any] = {
            "model": model,
            "messages": [m.model_dump() for m in options.messages],
        }
        reasoning = model.startswith(_REASONING_PREFIXES)
        if options.temperature is not None and not reasoning:
            params["temperature"] = options.temperature
        if options.max_tokens is not None:
            params["max_completion_tokens" if reasoning else "max_tokens"] = options.max_tokens
        return params

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(**self.build_client_kwargs())
        return self._client

    async def _complete(self, options: ChatCompletionOptions) -> CompletionResponse:
        client = self._get_client()
        response = await client.chat.completions.create(**self.build_request_params(options))

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        return CompletionResponse(
            content=content,
            model_name=response.model or self.api_model_name,
            provider=self.kind.value,
            raw_response_json=response.model_dump_json(),
        )
