"""Gemini AI provider implementation."""

from typing import Any, Optional

import google.generativeai as genai

from smart_npcs.core.logging import get_logger
from smart_npcs.services.ai.base import AIProvider, ChatHistory

logger = get_logger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


class GeminiProvider(AIProvider):
    """AI provider using Google Gemini API."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        timeout: float = 5.0,
    ) -> None:
        """Initialize the Gemini provider.

        Args:
            api_key: Google API key for Gemini.
            model: Model name to use.
            timeout: Per-request deadline in seconds.
        """
        self._api_key = api_key
        self._model_name = model
        self._timeout = timeout
        self._model = None

        if self._api_key:
            genai.configure(api_key=self._api_key)
            self._model = genai.GenerativeModel(self._model_name)
            logger.info("GeminiProvider initialized with model: %s", self._model_name)

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "gemini"

    def is_available(self) -> bool:
        """Check if the provider is available."""
        return bool(self._api_key) and self._model is not None

    @staticmethod
    def _build_contents(prompt: str, history: Optional[ChatHistory]) -> list[dict[str, Any]]:
        # Gemini names the assistant side "model"
        contents = [
            {
                "role": "user" if item.get("role") == "user" else "model",
                "parts": [item.get("content", "")],
            }
            for item in history or []
        ]
        contents.append({"role": "user", "parts": [prompt]})
        return contents

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 300,
        history: Optional[ChatHistory] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """Generate text using Gemini API.

        Raises:
            RuntimeError: If API call fails or provider is not available.
        """
        if not self.is_available():
            raise RuntimeError("GeminiProvider is not available. Check API key.")

        assert self._model is not None

        # Rebuild model with system instruction if provided
        model = self._model
        if system_prompt:
            model = genai.GenerativeModel(
                self._model_name,
                system_instruction=system_prompt,
            )

        generation_config = genai.types.GenerationConfig(
            max_output_tokens=max_tokens,
            temperature=temperature,
        )

        try:
            response = model.generate_content(
                self._build_contents(prompt, history),
                generation_config=generation_config,
                request_options={"timeout": self._timeout},
            )
            result: str = response.text.strip()
        except Exception as e:
            logger.error("Gemini API error: %s", e)
            raise RuntimeError(f"Gemini API error: {e}") from e

        if not result:
            raise RuntimeError("Gemini API returned an empty completion")
        return result
