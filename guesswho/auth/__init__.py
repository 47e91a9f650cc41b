"""Bearer token authentication for the /api route group."""

from guesswho.auth.gate import AuthGateMiddleware
from guesswho.auth.verifier import AuthDecision, JWTVerifier, TokenVerifier

__all__ = [
    "AuthDecision",
    "AuthGateMiddleware",
    "JWTVerifier",
    "TokenVerifier",
]
