"""LLM client variants, one per provider kind.

Public API:
- LLMClient: Base class with shared-cache handling
- OpenAIClient, AnthropicClient, GoogleClient, CerebrasClient, GroqClient:
  Clients for flat model names
- GenericClient: Client wrapping a multi-vendor model handle
"""

from __future__ import annotations

from llmhub.llm_clients.anthropic import AnthropicClient
from llmhub.llm_clients.base import LLMClient
from llmhub.llm_clients.cerebras import CerebrasClient
from llmhub.llm_clients.generic import GenericClient
from llmhub.llm_clients.google import GoogleClient
from llmhub.llm_clients.groq import GroqClient
from llmhub.llm_clients.openai import OpenAIClient

__all__ = [
    "AnthropicClient",
    "CerebrasClient",
    "GenericClient",
    "GoogleClient",
    "GroqClient",
    "LLMClient",
    "OpenAIClient",
]
