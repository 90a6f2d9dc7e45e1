"""Abstract base class for text-generation providers."""

from abc import ABC, abstractmethod
from typing import Optional

ChatHistory = list[dict[str, str]]


class AIProvider(ABC):
    """Abstract base class for AI providers.

    A provider turns a system prompt, a short rolling chat history and the
    latest user message into one character reply. Implementations raise
    RuntimeError on any failure; callers decide how to recover.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name."""
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is available and configured."""
        ...

    @abstractmethod
    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 300,
        history: Optional[ChatHistory] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """Generate a reply to the prompt.

        Args:
            prompt: The latest user message.
            system_prompt: Optional system prompt describing the character.
            max_tokens: Maximum tokens for the response.
            history: Prior messages as {"role": "user"|"assistant", "content": str}.
            temperature: Optional sampling temperature.

        Returns:
            Generated text response.

        Raises:
            RuntimeError: If the call fails or the provider is not available.
        """
        ...
