"""Abstract base class for text-generation adapters.

Defines the interface the game handlers call. Implementations translate a
prompt into one call to an external model and return its text reply.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AIClientError(Exception):
    """A call to the text-generation service failed."""


class AIConfigurationError(AIClientError):
    """The adapter could not be initialized (e.g. missing credentials)."""


class TextGenerator(ABC):
    """Abstract text-generation adapter.

    One ``generate`` call maps to exactly one outbound request: no retry,
    backoff, streaming or batching. Cancelling the awaiting task abandons
    the outbound call.
    """

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Generate a text reply.

        Args:
            prompt: Full prompt text.

        Returns:
            The model's reply, unmodified.

        Raises:
            AIClientError: If the service call fails.
        """

    async def aclose(self) -> None:
        """Release any resources held by the adapter."""
        return None
