"""Vendor model handles for namespaced identifiers.

A handle is a small immutable description of "model X at vendor Y" that the
generic client hands to ``litellm``. Building one never touches the network.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from llmhub.models import LanguageModel, SubProvider

if TYPE_CHECKING:
    from llmhub.models import ClientConfig

SUB_PROVIDER_PREFIXES = MappingProxyType(
    {
        SubProvider.OPENAI: "openai",
        SubProvider.ANTHROPIC: "anthropic",
        SubProvider.GOOGLE: "gemini",
        SubProvider.XAI: "xai",
        SubProvider.AZURE: "azure",
        SubProvider.GROQ: "groq",
        SubProvider.CEREBRAS: "cerebras",
        SubProvider.TOGETHERAI: "together_ai",
        SubProvider.MISTRAL: "mistral",
        SubProvider.DEEPSEEK: "deepseek",
        SubProvider.PERPLEXITY: "perplexity",
        SubProvider.OLLAMA: "ollama",
    }
)


def build_language_model(
    sub_provider: SubProvider,
    model_id: str,
    **options: Any,
) -> LanguageModel:
    """Build the handle for *model_id* served by *sub_provider*.

    *options* are forwarded to ``litellm.acompletion`` at call time
    (``api_key``, ``api_base``, ...).
    """
    return LanguageModel(
        sub_provider=sub_provider,
        model_id=model_id,
        litellm_prefix=SUB_PROVIDER_PREFIXES[sub_provider],
        options=options,
    )


def litellm_options(config: ClientConfig | None) -> dict[str, Any]:
    """Translate caller options into ``litellm.acompletion`` keyword names."""
    if config is None:
        return {}
    options = config.to_sdk_kwargs()
    if "base_url" in options:
        options["api_base"] = options.pop("base_url")
    if "max_retries" in options:
        options["num_retries"] = options.pop("max_retries")
    return options
