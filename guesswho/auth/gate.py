"""Auth Gate middleware for a route group.

Requests whose path falls under the protected prefix must carry a valid
``Authorization: Bearer <token>`` header. Rejected requests never reach
the router; accepted ones pass through unchanged with the token claims
stored on ``request.state.auth_claims``.
"""

from __future__ import annotations

import asyncio

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from guesswho.auth.verifier import TokenVerifier
from guesswho.config.logging import get_logger

logger = get_logger("auth")


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an Authorization header value, or None."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


class AuthGateMiddleware:
    """Reject unauthenticated requests under ``prefix`` before routing."""

    def __init__(self, app: ASGIApp, verifier: TokenVerifier, prefix: str = "/api") -> None:
        self.app = app
        self.verifier = verifier
        self.prefix = prefix.rstrip("/")

    def _is_protected(self, path: str) -> bool:
        return path == self.prefix or path.startswith(self.prefix + "/")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self._is_protected(scope["path"]):
            await self.app(scope, receive, send)
            return

        token = extract_bearer_token(Headers(scope=scope).get("authorization"))
        decision = await asyncio.to_thread(self.verifier.verify, token)

        if not decision.allowed:
            logger.info(f"Rejected request: {decision.error}", extra={"path": scope["path"]})
            response = JSONResponse(
                status_code=401,
                content={"error": decision.error or "Unauthorized"},
                headers={"WWW-Authenticate": "Bearer"},
            )
            await response(scope, receive, send)
            return

        scope.setdefault("state", {})["auth_claims"] = decision.claims
        await self.app(scope, receive, send)
