"""Anthropic client backed by the Messages API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from llmhub.llm_clients.base import LLMClient
from llmhub.models import CompletionResponse, ProviderKind

if TYPE_CHECKING:
    from anthropic import AsyncAnthropic

    from llmhub.models import ChatCompletionOptions

DEFAULT_MAX_TOKENS = 4096


class AnthropicClient(LLMClient):
    """LLM client backed by the Anthropic Messages API."""

    kind = ProviderKind.ANTHROPIC

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._client: AsyncAnthropic | None = None

    def build_request_params(self, options: ChatCompletionOptions) -> dict[str, Any]:
        """Build messages.create kwargs.

        System turns move to the top-level ``system`` parameter; the API
        requires ``max_tokens``, so a default is always set.
        """
        system_parts = [m.content for m in options.messages if m.role == "system"]
        messages = [
            {"role": m.role, "content": m.content} for m in options.messages if m.role != "system"
        ]

        params: dict[str, Any] = {
            "model": self.model_name,
            "max_tokens": options.max_tokens or DEFAULT_MAX_TOKENS,
            "messages": messages,
        }
        if system_parts:
            params["system"] = "\n\n".join(system_parts)
        if options.temperature is not None:
            params["temperature"] = options.temperature
        return params

    def _get_client(self) -> AsyncAnthropic:
        if self._client is None:
            from anthropic import AsyncAnthropic

            kwargs = self.client_options.to_sdk_kwargs() if self.client_options else {}
            self._client = AsyncAnthropic(**kwargs)
        return self._client

    async def _complete(self, options: ChatCompletionOptions) -> CompletionResponse:
        client = self._get_client()
        message = await client.messages.create(**self.build_request_params(options))

        text = "".join(block.text for block in message.content if block.type == "text")

        return CompletionResponse(
            content=text,
            model_name=message.model,
            provider=self.kind.value,
            raw_response_json=message.model_dump_json(),
        )
