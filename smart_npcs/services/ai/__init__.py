"""AI provider module."""

from smart_npcs.services.ai.base import AIProvider
from smart_npcs.services.ai.factory import get_ai_provider
from smart_npcs.services.ai.gemini import GeminiProvider
from smart_npcs.services.ai.mock import MockProvider
from smart_npcs.services.ai.openai_provider import AzureOpenAIProvider, OpenAIProvider

__all__ = [
    "AIProvider",
    "AzureOpenAIProvider",
    "GeminiProvider",
    "MockProvider",
    "OpenAIProvider",
    "get_ai_provider",
]
