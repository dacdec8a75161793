"""Core data models for llmhub."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class ProviderKind(StrEnum):
    """Which client variant handles a model."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    CEREBRAS = "cerebras"
    GROQ = "groq"

    # Namespaced identifiers and caller-built handles.
    GENERIC = "generic"


class SubProvider(StrEnum):
    """Vendor adapters reachable through the generic client."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    XAI = "xai"
    AZURE = "azure"
    GROQ = "groq"
    CEREBRAS = "cerebras"
    TOGETHERAI = "togetherai"
    MISTRAL = "mistral"
    DEEPSEEK = "deepseek"
    PERPLEXITY = "perplexity"
    OLLAMA = "ollama"


class ClientConfig(BaseModel):
    """Caller-supplied options for a vendor SDK client.

    Unknown keys are kept so vendor-specific settings pass through untouched.
    """

    model_config = ConfigDict(extra="allow")

    api_key: str | None = None
    base_url: str | None = None
    timeout: float | None = None
    max_retries: int | None = None

    def to_sdk_kwargs(self) -> dict[str, Any]:
        """Return the set options as keyword arguments for an SDK constructor."""
        return self.model_dump(exclude_none=True)


class ChatMessage(BaseModel):
    """A single chat turn."""

    role: str = Field(description="system, user or assistant.")
    content: str


class ChatCompletionOptions(BaseModel):
    """Request sent to a client. Also the input of the cache fingerprint."""

    messages: list[ChatMessage]
    temperature: float | None = None
    max_tokens: int | None = None


class CompletionResponse(BaseModel):
    """Normalized response from any client."""

    content: str
    model_name: str = Field(description="Model that produced the response.")
    provider: str
    cached: bool = Field(default=False, description="Served from the shared cache.")
    raw_response_json: str = "{}"


class LanguageModel(BaseModel):
    """Vendor model handle consumed by the generic client."""

    model_config = ConfigDict(frozen=True)

    sub_provider: SubProvider
    model_id: str
    litellm_prefix: str
    options: dict[str, Any] = Field(default_factory=dict)

    @property
    def litellm_model(self) -> str:
        return f"{self.litellm_prefix}/{self.model_id}"


@runtime_checkable
class LanguageModelHandle(Protocol):
    """What the generic client needs from a model handle at call time.

    ``LanguageModel`` satisfies this; callers may pass their own objects.
    """

    @property
    def model_id(self) -> str: ...

    @property
    def litellm_model(self) -> str: ...
