"""Shared test fixtures for llmhub."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from llmhub.cache import LLMCache
from llmhub.llm_clients.base import LLMClient
from llmhub.models import (
    ChatCompletionOptions,
    ChatMessage,
    CompletionResponse,
    ProviderKind,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("llmhub.tests")


@pytest.fixture
def cache(logger: logging.Logger) -> Iterator[LLMCache]:
    """Private in-memory cache, closed after the test."""
    instance = LLMCache(logger)
    yield instance
    instance.close()


def build_options(prompt: str = "Hello", **kwargs: object) -> ChatCompletionOptions:
    """Build a single-turn user request."""
    return ChatCompletionOptions(
        messages=[ChatMessage(role="user", content=prompt)],
        **kwargs,
    )


class StubClient(LLMClient):
    """Client whose vendor call returns a numbered answer and counts calls."""

    kind: ClassVar[ProviderKind] = ProviderKind.OPENAI

    def __init__(self, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.calls = 0

    async def _complete(self, options: ChatCompletionOptions) -> CompletionResponse:
        self.calls += 1
        return CompletionResponse(
            content=f"answer {self.calls}",
            model_name=self.model_name,
            provider=self.kind.value,
        )


# ---------------------------------------------------------------------------
# Tracing
# ---------------------------------------------------------------------------


def _force_reset_otel_provider() -> None:
    """Reset OTel global tracer provider to the default no-op state."""
    once = trace._TRACER_PROVIDER_SET_ONCE
    with once._lock:
        once._done = False
    trace._TRACER_PROVIDER = None


@pytest.fixture
def span_exporter() -> Iterator[InMemorySpanExporter]:
    """Register a global provider that records finished spans in memory."""
    _force_reset_otel_provider()
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    yield exporter
    provider.shutdown()
    _force_reset_otel_provider()
