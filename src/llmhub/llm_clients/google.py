"""Gemini models through Google's OpenAI-compatible endpoint."""

from __future__ import annotations

from llmhub.llm_clients.openai import OpenAIClient
from llmhub.models import ProviderKind


class GoogleClient(OpenAIClient):
    kind = ProviderKind.GOOGLE
    default_base_url = "https://generativelanguage.googleapis.com/v1beta/openai/"
    api_key_env = "GEMINI_API_KEY"
