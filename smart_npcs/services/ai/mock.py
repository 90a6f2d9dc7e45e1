"""Mock AI provider for tests and local development."""

from typing import Optional

from smart_npcs.services.ai.base import AIProvider, ChatHistory

MOCK_REPLY = "[Mock] I hear you, traveler. Let me think about that for a moment."


class MockProvider(AIProvider):
    """Mock AI provider that returns a static reply.

    Records every call in ``calls`` so tests can inspect prompts and history.
    """

    def __init__(self, reply: str = MOCK_REPLY) -> None:
        self._reply = reply
        self.calls: list[dict] = []

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "mock"

    def is_available(self) -> bool:
        """Check if the provider is available."""
        return True

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 300,
        history: Optional[ChatHistory] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """Return the static reply."""
        self.calls.append(
            {
                "prompt": prompt,
                "system_prompt": system_prompt,
                "max_tokens": max_tokens,
                "history": list(history or []),
                "temperature": temperature,
            }
        )
        return self._reply
