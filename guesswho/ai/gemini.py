"""Gemini adapter built on LangChain's ChatGoogleGenerativeAI."""

from __future__ import annotations

from typing import Any

from guesswho.ai.base import AIClientError, AIConfigurationError, TextGenerator
from guesswho.config.logging import get_logger
from guesswho.config.settings import ServerConfig

logger = get_logger("llm")


def _content_to_text(content: Any) -> str:
    """Flatten a LangChain message content (str or list of parts) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)
    return str(content)


class GeminiClient(TextGenerator):
    """Text generation via Google Gemini.

    Built once at startup and shared read-only by all requests.
    """

    def __init__(self, config: ServerConfig):
        if not config.gemini_api_key:
            raise AIConfigurationError("GEMINI_API_KEY is not set")

        from langchain_google_genai import ChatGoogleGenerativeAI

        self.model_name = config.gemini_model
        self._llm = ChatGoogleGenerativeAI(
            model=config.gemini_model,
            google_api_key=config.gemini_api_key,
            temperature=config.ai_temperature,
            timeout=config.ai_timeout_seconds,
            max_retries=0,
        )
        logger.info(f"Gemini client initialized: {self.model_name} (temperature={config.ai_temperature:.1f})")

    async def generate(self, prompt: str) -> str:
        if self._llm is None:
            raise AIClientError("Gemini client is closed")
        try:
            response = await self._llm.ainvoke(prompt)
        except Exception as e:
            raise AIClientError(str(e) or e.__class__.__name__) from e
        return _content_to_text(response.content)

    async def aclose(self) -> None:
        self._llm = None
        logger.info("Gemini client closed")
