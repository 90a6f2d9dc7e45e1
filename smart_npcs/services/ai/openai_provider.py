"""OpenAI and Azure OpenAI providers (openai Python SDK >= 1.0)."""

from typing import Optional

import openai

from smart_npcs.core.logging import get_logger
from smart_npcs.services.ai.base import AIProvider, ChatHistory

logger = get_logger(__name__)

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_AZURE_DEPLOYMENT = "gpt-4.1"


class OpenAIProvider(AIProvider):
    """AI provider using the OpenAI Chat Completions API.

    Also serves any OpenAI-compatible endpoint through ``base_url``.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_OPENAI_MODEL,
        base_url: Optional[str] = None,
        timeout: float = 5.0,
    ) -> None:
        self._api_key = (api_key or "").strip()
        self._model_name = (model or DEFAULT_OPENAI_MODEL).strip()
        self._client = None

        if self._api_key:
            self._client = self._create_client(base_url=base_url, timeout=timeout)
        if self._client is not None:
            logger.info("%s initialized with model: %s", type(self).__name__, self._model_name)

    def _create_client(self, base_url: Optional[str], timeout: float):
        return openai.OpenAI(
            api_key=self._api_key,
            base_url=base_url or None,
            timeout=timeout,
            max_retries=0,
        )

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "openai"

    def is_available(self) -> bool:
        """Check if the provider is available."""
        return self._client is not None

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 300,
        history: Optional[ChatHistory] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """Generate text with Chat Completions.

        Raises:
            RuntimeError: If API call fails, times out or returns no text.
        """
        if not self.is_available():
            raise RuntimeError(f"{type(self).__name__} is not available. Check API key.")

        assert self._client is not None

        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.extend(history or [])
        messages.append({"role": "user", "content": prompt})

        kwargs = {}
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            completion = self._client.chat.completions.create(
                model=self._model_name,
                messages=messages,
                max_tokens=max_tokens,
                presence_penalty=0.6,
                frequency_penalty=0.3,
                **kwargs,
            )
        except openai.OpenAIError as e:
            logger.error("%s API error: %s", self.name, e)
            raise RuntimeError(f"{self.name} API error: {e}") from e

        choices = getattr(completion, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content or not content.strip():
            raise RuntimeError(f"{self.name} API returned an empty completion")
        return content.strip()


class AzureOpenAIProvider(OpenAIProvider):
    """AI provider using an Azure OpenAI deployment."""

    def __init__(
        self,
        api_key: str,
        endpoint: Optional[str],
        deployment: str = DEFAULT_AZURE_DEPLOYMENT,
        api_version: str = "2025-01-01-preview",
        timeout: float = 5.0,
    ) -> None:
        self._endpoint = endpoint
        self._api_version = api_version
        super().__init__(api_key=api_key, model=deployment, timeout=timeout)

    def _create_client(self, base_url: Optional[str], timeout: float):
        if not self._endpoint:
            return None
        return openai.AzureOpenAI(
            api_key=self._api_key,
            azure_endpoint=self._endpoint,
            api_version=self._api_version,
            timeout=timeout,
            max_retries=0,
        )

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "azure_openai"
