"""Startup construction of the text-generation adapter."""

from __future__ import annotations

from guesswho.ai.base import AIConfigurationError, TextGenerator
from guesswho.ai.gemini import GeminiClient
from guesswho.config.logging import get_logger
from guesswho.config.settings import ServerConfig

logger = get_logger("llm")


def create_ai_client(config: ServerConfig) -> TextGenerator | None:
    """Build the AI adapter, or return None if it cannot be initialized.

    A None result is the "uninitialized adapter" state: the server still
    starts and dependent handlers answer 503.
    """
    try:
        return GeminiClient(config)
    except AIConfigurationError as e:
        logger.warning(f"Failed to initialize Gemini client: {e}")
    except Exception:
        logger.exception("Failed to initialize Gemini client")
    return None
