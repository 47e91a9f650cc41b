"""Text-generation adapters."""

from guesswho.ai.base import AIClientError, AIConfigurationError, TextGenerator
from guesswho.ai.factory import create_ai_client
from guesswho.ai.gemini import GeminiClient

__all__ = [
    "AIClientError",
    "AIConfigurationError",
    "GeminiClient",
    "TextGenerator",
    "create_ai_client",
]
