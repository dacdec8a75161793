"""Provider registry and model ID parsing.

Design follows Function Core / Imperative Shell: everything here is a pure
lookup over immutable data. No client is constructed and no I/O happens.
"""

from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import TYPE_CHECKING

from llmhub.errors import MalformedModelIdError, UnsupportedSubProviderError
from llmhub.models import ProviderKind, SubProvider

if TYPE_CHECKING:
    from llmhub.models import LanguageModelHandle

# ---------------------------------------------------------------------------
# Flat identifier table
# ---------------------------------------------------------------------------

MODEL_TO_PROVIDER = MappingProxyType(
    {
        "gpt-4.1": ProviderKind.OPENAI,
        "gpt-4.1-mini": ProviderKind.OPENAI,
        "gpt-4.1-nano": ProviderKind.OPENAI,
        "o4-mini": ProviderKind.OPENAI,
        "o3": ProviderKind.OPENAI,
        "o3-mini": ProviderKind.OPENAI,
        "o1": ProviderKind.OPENAI,
        "o1-mini": ProviderKind.OPENAI,
        "gpt-4o": ProviderKind.OPENAI,
        "gpt-4o-mini": ProviderKind.OPENAI,
        "gpt-4o-2024-08-06": ProviderKind.OPENAI,
        "gpt-4.5-preview": ProviderKind.OPENAI,
        "o1-preview": ProviderKind.OPENAI,
        "claude-3-5-sonnet-latest": ProviderKind.ANTHROPIC,
        "claude-3-5-sonnet-20240620": ProviderKind.ANTHROPIC,
        "claude-3-5-sonnet-20241022": ProviderKind.ANTHROPIC,
        "claude-3-7-sonnet-20250219": ProviderKind.ANTHROPIC,
        "claude-3-7-sonnet-latest": ProviderKind.ANTHROPIC,
        "cerebras-llama-3.3-70b": ProviderKind.CEREBRAS,
        "cerebras-llama-3.1-8b": ProviderKind.CEREBRAS,
        "groq-llama-3.3-70b-versatile": ProviderKind.GROQ,
        "groq-llama-3.3-70b-specdec": ProviderKind.GROQ,
        "gemini-1.5-flash": ProviderKind.GOOGLE,
        "gemini-1.5-pro": ProviderKind.GOOGLE,
        "gemini-1.5-flash-8b": ProviderKind.GOOGLE,
        "gemini-2.0-flash-lite": ProviderKind.GOOGLE,
        "gemini-2.0-flash": ProviderKind.GOOGLE,
        "gemini-2.5-flash-preview-04-17": ProviderKind.GOOGLE,
        "gemini-2.5-pro-preview-03-25": ProviderKind.GOOGLE,
    }
)

SUPPORTED_MODELS: tuple[str, ...] = tuple(MODEL_TO_PROVIDER)

NAMESPACE_SEPARATOR = "/"


def get_model_provider(model_name: object) -> ProviderKind | None:
    """Return the provider kind for a flat model name, or ``None``.

    Informational query: never raises, even for non-string input.
    """
    if not isinstance(model_name, str):
        return None
    return MODEL_TO_PROVIDER.get(model_name)


def supported_providers() -> list[ProviderKind]:
    """Distinct provider kinds in the table, in first-seen order."""
    return list(dict.fromkeys(MODEL_TO_PROVIDER.values()))


def models_for_provider(kind: ProviderKind) -> list[str]:
    """All flat model names served by *kind*."""
    return [name for name, provider in MODEL_TO_PROVIDER.items() if provider is kind]


# ---------------------------------------------------------------------------
# Namespaced identifiers
# ---------------------------------------------------------------------------


def parse_model_id(model_id: str) -> tuple[SubProvider, str] | None:
    """Split a namespaced ``sub_provider/model`` identifier.

    Returns ``None`` for flat identifiers (no ``/``).

    Examples:
        >>> parse_model_id("openai/gpt-4.1")
        (<SubProvider.OPENAI: 'openai'>, 'gpt-4.1')
        >>> parse_model_id("gpt-4o") is None
        True

    Raises:
        MalformedModelIdError: Not exactly two non-empty segments.
        UnsupportedSubProviderError: First segment is not a known vendor.
    """
    if NAMESPACE_SEPARATOR not in model_id:
        return None

    parts = model_id.split(NAMESPACE_SEPARATOR)
    if len(parts) != 2 or not all(parts):
        raise MalformedModelIdError(model_id)

    sub_provider, sub_model = parts
    try:
        return SubProvider(sub_provider), sub_model
    except ValueError:
        raise UnsupportedSubProviderError(
            sub_provider, [s.value for s in SubProvider]
        ) from None


# ---------------------------------------------------------------------------
# Input shapes
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class FlatModelId:
    """A literal vendor model name, looked up in ``MODEL_TO_PROVIDER``."""

    model_name: str


@dataclasses.dataclass(frozen=True)
class NamespacedModelId:
    """A ``sub_provider/model`` string routed through the generic client."""

    model_id: str
    sub_provider: SubProvider
    sub_model: str


@dataclasses.dataclass(frozen=True)
class HandleModelInput:
    """A caller-built model handle, routed as-is to the generic client."""

    handle: LanguageModelHandle


ModelInput = FlatModelId | NamespacedModelId | HandleModelInput


def classify_model_input(model: str | LanguageModelHandle) -> ModelInput:
    """Decide which of the three input shapes *model* is.

    Anything that is not a string is treated as an opaque handle.
    """
    if not isinstance(model, str):
        return HandleModelInput(handle=model)

    parsed = parse_model_id(model)
    if parsed is None:
        return FlatModelId(model_name=model)

    sub_provider, sub_model = parsed
    return NamespacedModelId(model_id=model, sub_provider=sub_provider, sub_model=sub_model)
