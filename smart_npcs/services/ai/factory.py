"""Factory for creating AI provider instances."""

from typing import Optional, Union

from smart_npcs.config import AIBackend, settings
from smart_npcs.core.logging import get_logger
from smart_npcs.services.ai.base import AIProvider
from smart_npcs.services.ai.gemini import DEFAULT_GEMINI_MODEL, GeminiProvider
from smart_npcs.services.ai.mock import MockProvider
from smart_npcs.services.ai.openai_provider import (
    DEFAULT_AZURE_DEPLOYMENT,
    DEFAULT_OPENAI_MODEL,
    AzureOpenAIProvider,
    OpenAIProvider,
)

logger = get_logger(__name__)


def _parse_backend(value: Union[AIBackend, str, None]) -> AIBackend:
    if isinstance(value, AIBackend):
        return value
    try:
        return AIBackend((value or "none").strip().lower())
    except ValueError:
        logger.warning("Unknown provider '%s', using template replies only", value)
        return AIBackend.NONE


def get_ai_provider(
    provider_name: Union[AIBackend, str, None] = None,
) -> Optional[AIProvider]:
    """Resolve the configured text-generation backend.

    Called once at startup. Returns None when no backend is selected or the
    selected one lacks credentials; replies then come from templates only.

    Args:
        provider_name: Optional backend override. If not specified,
                      uses AI_PROVIDER from config.
    """
    backend = _parse_backend(provider_name or settings.AI_PROVIDER)
    timeout = settings.AI_TIMEOUT_SECONDS

    if backend == AIBackend.NONE:
        logger.info("No AI provider configured, using template replies")
        return None

    if backend == AIBackend.MOCK:
        logger.debug("Using MockProvider")
        return MockProvider()

    if not settings.AI_API_KEY:
        logger.warning("AI_API_KEY not set for '%s', using template replies", backend.value)
        return None

    provider: AIProvider
    if backend == AIBackend.GEMINI:
        provider = GeminiProvider(
            api_key=settings.AI_API_KEY,
            model=settings.AI_MODEL or DEFAULT_GEMINI_MODEL,
            timeout=timeout,
        )
    elif backend == AIBackend.OPENAI:
        provider = OpenAIProvider(
            api_key=settings.AI_API_KEY,
            model=settings.AI_MODEL or DEFAULT_OPENAI_MODEL,
            base_url=settings.AI_BASE_URL,
            timeout=timeout,
        )
    else:
        provider = AzureOpenAIProvider(
            api_key=settings.AI_API_KEY,
            endpoint=settings.AZURE_OPENAI_ENDPOINT,
            deployment=settings.AI_MODEL or DEFAULT_AZURE_DEPLOYMENT,
            api_version=settings.AZURE_OPENAI_API_VERSION,
            timeout=timeout,
        )

    if not provider.is_available():
        logger.warning("Provider '%s' is not available, using template replies", provider.name)
        return None

    logger.debug("Using %s", type(provider).__name__)
    return provider
