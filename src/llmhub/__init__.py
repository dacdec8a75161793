"""Resolve model identifiers into cache-aware LLM clients.

Public API:
- LLMProvider: Facade owning the shared cache; get_client, clean_request_cache
- get_model_provider: Look up the provider of a flat model name
- parse_model_id: Split "sub_provider/model" strings
- ClientConfig, ChatCompletionOptions, CompletionResponse: Request/response models
- LLMHubError and subclasses: Resolution errors
"""

from __future__ import annotations

from llmhub.errors import (
    LLMHubError,
    MalformedModelIdError,
    UnsupportedModelError,
    UnsupportedModelProviderError,
    UnsupportedSubProviderError,
)
from llmhub.models import (
    ChatCompletionOptions,
    ChatMessage,
    ClientConfig,
    CompletionResponse,
    LanguageModel,
    ProviderKind,
    SubProvider,
)
from llmhub.provider import LLMProvider
from llmhub.registry import SUPPORTED_MODELS, get_model_provider, parse_model_id

__all__ = [
    "SUPPORTED_MODELS",
    "ChatCompletionOptions",
    "ChatMessage",
    "ClientConfig",
    "CompletionResponse",
    "LLMHubError",
    "LLMProvider",
    "LanguageModel",
    "MalformedModelIdError",
    "ProviderKind",
    "SubProvider",
    "UnsupportedModelError",
    "UnsupportedModelProviderError",
    "UnsupportedSubProviderError",
    "get_model_provider",
    "parse_model_id",
]
