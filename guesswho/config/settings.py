"""Server configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

DEFAULT_PORT = 8080
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash-lite"


def _int(val: str | None, default: int) -> int:
    if val is None or not val.strip():
        return default
    return int(val)


def _float(val: str | None, default: float) -> float:
    if val is None or not val.strip():
        return default
    return float(val)


def _csv(val: str) -> list[str]:
    return [item.strip() for item in val.split(",") if item.strip()]


@dataclass
class ServerConfig:
    """Game server configuration loaded from environment variables."""

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _int(os.getenv("PORT"), DEFAULT_PORT))
    cors_origins: list[str] = field(default_factory=lambda: _csv(os.getenv("CORS_ORIGINS", "*")))

    # AI service
    gemini_api_key: str = field(default_factory=lambda: os.getenv("GEMINI_API_KEY", ""))
    gemini_model: str = field(default_factory=lambda: os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL))
    ai_temperature: float = field(default_factory=lambda: _float(os.getenv("AI_TEMPERATURE"), 0.0))
    ai_timeout_seconds: float = field(default_factory=lambda: _float(os.getenv("AI_TIMEOUT_SECONDS"), 30.0))

    # Bearer token verification
    jwt_secret: str = field(default_factory=lambda: os.getenv("AUTH_JWT_SECRET", ""))
    jwt_algorithm: str = field(default_factory=lambda: os.getenv("AUTH_JWT_ALGORITHM", "HS256"))
    jwks_url: str = field(default_factory=lambda: os.getenv("AUTH_JWKS_URL", ""))
    jwt_issuer: str = field(default_factory=lambda: os.getenv("AUTH_ISSUER", ""))
    jwt_audience: str = field(default_factory=lambda: os.getenv("AUTH_AUDIENCE", ""))
    jwt_leeway_seconds: int = field(default_factory=lambda: _int(os.getenv("AUTH_LEEWAY_SECONDS"), 0))
    jwt_expire_minutes: int = field(default_factory=lambda: _int(os.getenv("AUTH_TOKEN_EXPIRE_MINUTES"), 60))

    @property
    def ai_configured(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def auth_configured(self) -> bool:
        return bool(self.jwks_url or self.jwt_secret)

    def validate(self) -> list[str]:
        """Return a list of configuration problems (empty when the config is usable)."""
        errors = []
        if not self.auth_configured:
            errors.append("No token verification configured: set AUTH_JWT_SECRET or AUTH_JWKS_URL")
        if not self.ai_configured:
            errors.append("GEMINI_API_KEY is not set; /api/game/guess will answer 503")
        if self.ai_timeout_seconds <= 0:
            errors.append(f"AI_TIMEOUT_SECONDS must be positive, got {self.ai_timeout_seconds}")
        if not 0 < self.port < 65536:
            errors.append(f"PORT out of range: {self.port}")
        return errors


def get_server_config() -> ServerConfig:
    """Get the server configuration."""
    return ServerConfig()
