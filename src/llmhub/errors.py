"""Errors raised while resolving a model identifier into a client."""

from __future__ import annotations

from collections.abc import Iterable


class LLMHubError(Exception):
    """Base class for llmhub errors."""


class UnsupportedModelError(LLMHubError):
    """Flat model name missing from the provider registry."""

    def __init__(self, supported_models: Iterable[str]) -> None:
        self.supported_models = list(supported_models)
        msg = (
            "Unsupported model. Please use one of the supported models: "
            + ", ".join(self.supported_models)
        )
        super().__init__(msg)


class UnsupportedModelProviderError(LLMHubError):
    """Provider kind with no registered client constructor."""

    def __init__(self, supported_providers: Iterable[str]) -> None:
        self.supported_providers = list(supported_providers)
        msg = (
            "Unsupported model provider. Please use one of the supported providers: "
            + ", ".join(self.supported_providers)
        )
        super().__init__(msg)


class MalformedModelIdError(LLMHubError):
    """Namespaced identifier with the wrong number of segments."""

    def __init__(self, model_id: str) -> None:
        self.model_id = model_id
        msg = f"Invalid model identifier {model_id!r}: expected 'provider/model'"
        super().__init__(msg)


class UnsupportedSubProviderError(LLMHubError):
    """Namespaced identifier naming an unknown vendor."""

    def __init__(self, sub_provider: str, supported_sub_providers: Iterable[str]) -> None:
        self.sub_provider = sub_provider
        self.supported_sub_providers = list(supported_sub_providers)
        msg = (
            f"Unsupported sub-provider {sub_provider!r}. "
            f"Valid options: {', '.join(self.supported_sub_providers)}"
        )
        super().__init__(msg)
