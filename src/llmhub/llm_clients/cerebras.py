"""Cerebras inference client.

Flat names carry a ``cerebras-`` prefix that the Cerebras API does not know,
so ``cerebras-llama-3.3-70b`` is sent as ``llama-3.3-70b``.
"""

from __future__ import annotations

from llmhub.llm_clients.openai import OpenAIClient
from llmhub.models import ProviderKind


class CerebrasClient(OpenAIClient):
    kind = ProviderKind.CEREBRAS
    default_base_url = "https://api.cerebras.ai/v1"
    api_key_env = "CEREBRAS_API_KEY"
    model_prefix = "cerebras-"
