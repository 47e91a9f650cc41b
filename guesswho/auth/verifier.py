"""Bearer token verification.

The Auth Gate only depends on the TokenVerifier contract: given the raw
token (or None), decide allow/deny and return the claims or a reason.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import jwt

from guesswho.config.logging import get_logger
from guesswho.config.settings import ServerConfig

logger = get_logger("auth")

ASYMMETRIC_PREFIXES = ("RS", "ES", "PS")


@dataclass(frozen=True)
class AuthDecision:
    """Outcome of verifying one bearer credential."""

    allowed: bool
    claims: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    @classmethod
    def allow(cls, claims: dict[str, Any]) -> "AuthDecision":
        return cls(allowed=True, claims=claims)

    @classmethod
    def deny(cls, error: str) -> "AuthDecision":
        return cls(allowed=False, error=error)


class TokenVerifier(ABC):
    """Capability contract for the Auth Gate."""

    @abstractmethod
    def verify(self, token: str | None) -> AuthDecision:
        """Validate a bearer token.

        Args:
            token: The raw token from the Authorization header, or None
                when the header is missing or not a Bearer credential.

        Returns:
            AuthDecision allowing the request with its claims, or denying
            it with a client-safe reason.
        """


class JWTVerifier(TokenVerifier):
    """Verify JWTs from the identity provider.

    Uses the provider's JWKS endpoint when ``jwks_url`` is configured,
    otherwise a shared secret. Unconfigured verifiers deny everything.
    """

    def __init__(self, config: ServerConfig):
        self.config = config
        self._jwks_client: jwt.PyJWKClient | None = None
        if config.jwks_url:
            self._jwks_client = jwt.PyJWKClient(config.jwks_url, cache_keys=True)
        elif not config.jwt_secret:
            logger.warning("Token verification is not configured; all /api requests will be rejected")

    def _algorithms(self) -> list[str]:
        if self._jwks_client and not self.config.jwt_algorithm.startswith(ASYMMETRIC_PREFIXES):
            return ["RS256"]
        return [self.config.jwt_algorithm]

    def _signing_key(self, token: str) -> Any:
        if self._jwks_client:
            return self._jwks_client.get_signing_key_from_jwt(token).key
        return self.config.jwt_secret

    def verify(self, token: str | None) -> AuthDecision:
        if not token:
            return AuthDecision.deny("Missing or invalid token")
        if not self.config.auth_configured:
            return AuthDecision.deny("Token verification is not configured")

        options = {
            "require": ["exp", "sub"],
            "verify_aud": bool(self.config.jwt_audience),
        }
        kwargs: dict[str, Any] = {"leeway": self.config.jwt_leeway_seconds}
        if self.config.jwt_audience:
            kwargs["audience"] = self.config.jwt_audience
        if self.config.jwt_issuer:
            kwargs["issuer"] = self.config.jwt_issuer

        try:
            claims = jwt.decode(
                token,
                self._signing_key(token),
                algorithms=self._algorithms(),
                options=options,
                **kwargs,
            )
        except jwt.ExpiredSignatureError:
            return AuthDecision.deny("Token has expired")
        except jwt.PyJWTError as e:
            logger.debug(f"Token rejected: {e}")
            return AuthDecision.deny("Invalid token")

        return AuthDecision.allow(claims)
