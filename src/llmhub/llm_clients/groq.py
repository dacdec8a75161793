"""Groq client (OpenAI-compatible, ``groq-`` prefix stripped)."""

from __future__ import annotations

from llmhub.llm_clients.openai import OpenAIClient
from llmhub.models import ProviderKind


class GroqClient(OpenAIClient):
    kind = ProviderKind.GROQ
    default_base_url = "https://api.groq.com/openai/v1"
    api_key_env = "GROQ_API_KEY"
    model_prefix = "groq-"
