"""Client factory: turn a model identifier or handle into an LLM client.

The identifier shape is decided once by ``classify_model_input``; dispatch
over flat names is a lookup in ``CLIENT_CONSTRUCTORS`` rather than a branch
per vendor. All errors are raised before any client exists.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from llmhub.errors import UnsupportedModelError, UnsupportedModelProviderError
from llmhub.handles import build_language_model, litellm_options
from llmhub.llm_clients import (
    AnthropicClient,
    CerebrasClient,
    GenericClient,
    GoogleClient,
    GroqClient,
    OpenAIClient,
)
from llmhub.models import ProviderKind
from llmhub.registry import (
    SUPPORTED_MODELS,
    FlatModelId,
    HandleModelInput,
    classify_model_input,
    get_model_provider,
    supported_providers,
)
from llmhub.tracing import RESOLVE_CLIENT_SPAN, get_tracer, resolution_attributes

if TYPE_CHECKING:
    from collections.abc import Mapping

    from llmhub.cache import LLMCache
    from llmhub.llm_clients import LLMClient
    from llmhub.models import ClientConfig, LanguageModelHandle

logger = logging.getLogger(__name__)

CLIENT_CONSTRUCTORS: Mapping[ProviderKind, type[LLMClient]] = MappingProxyType(
    {
        ProviderKind.OPENAI: OpenAIClient,
        ProviderKind.ANTHROPIC: AnthropicClient,
        ProviderKind.CEREBRAS: CerebrasClient,
        ProviderKind.GROQ: GroqClient,
        ProviderKind.GOOGLE: GoogleClient,
    }
)


def resolve_client(
    model: str | LanguageModelHandle,
    client_options: ClientConfig | None = None,
    *,
    logger: logging.Logger,
    enable_caching: bool,
    cache: LLMCache | None,
    constructors: Mapping[ProviderKind, type[LLMClient]] = CLIENT_CONSTRUCTORS,
) -> LLMClient:
    """Build the client for *model*, wired to *cache*.

    1. A non-string handle goes to ``GenericClient`` untouched.
    2. ``sub_provider/model`` builds a vendor handle for ``GenericClient``.
    3. A flat name is looked up in the registry and built by the matching
       entry of *constructors*.

    Raises:
        MalformedModelIdError: Namespaced identifier with the wrong arity.
        UnsupportedSubProviderError: Namespaced identifier, unknown vendor.
        UnsupportedModelError: Flat name missing from the registry.
        UnsupportedModelProviderError: Registry kind with no constructor.
    """
    shape = classify_model_input(model)

    if isinstance(shape, HandleModelInput):
        client: LLMClient = GenericClient(
            model=shape.handle,
            logger=logger,
            enable_caching=enable_caching,
            cache=cache,
        )
        sub_provider = None
    elif isinstance(shape, FlatModelId):
        client = _build_flat_client(
            shape.model_name,
            client_options,
            logger=logger,
            enable_caching=enable_caching,
            cache=cache,
            constructors=constructors,
        )
        sub_provider = None
    else:
        handle = build_language_model(
            shape.sub_provider,
            shape.sub_model,
            **litellm_options(client_options),
        )
        client = GenericClient(
            model=handle,
            logger=logger,
            enable_caching=enable_caching,
            cache=cache,
        )
        sub_provider = shape.sub_provider.value

    _record_resolution(model, client, sub_provider)
    return client


def _build_flat_client(
    model_name: str,
    client_options: ClientConfig | None,
    *,
    logger: logging.Logger,
    enable_caching: bool,
    cache: LLMCache | None,
    constructors: Mapping[ProviderKind, type[LLMClient]],
) -> LLMClient:
    kind = get_model_provider(model_name)
    if kind is None:
        raise UnsupportedModelError(SUPPORTED_MODELS)

    constructor = constructors.get(kind)
    if constructor is None:
        # Registry and dispatch table disagree: an internal fault, not a user error.
        logger.error("No client constructor registered for provider %r", kind.value)
        raise UnsupportedModelProviderError([p.value for p in supported_providers()])

    return constructor(
        logger=logger,
        enable_caching=enable_caching,
        cache=cache,
        model_name=model_name,
        client_options=client_options,
    )


def _record_resolution(
    model: str | LanguageModelHandle,
    client: LLMClient,
    sub_provider: str | None,
) -> None:
    attrs = resolution_attributes(
        model=model if isinstance(model, str) else client.model_name,
        provider_kind=client.kind.value,
        client_class=type(client).__name__,
        sub_provider=sub_provider,
    )
    with get_tracer().start_as_current_span(RESOLVE_CLIENT_SPAN) as span:
        span.set_attributes(attrs)
    logger.debug("Resolved %s to %s", attrs["llmhub.client.model"], type(client).__name__)
