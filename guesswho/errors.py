"""Error taxonomy for the game server.

Every error raised at the handler boundary is a GameServiceError; the app
turns it into ``{"error": <message>}`` with the class's status code.
"""

from __future__ import annotations


class GameServiceError(Exception):
    """Base class for errors that map to a JSON error response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationError(GameServiceError):
    """Missing, invalid or expired bearer credential."""

    status_code = 401
    default_message = "Missing or invalid token"


class ValidationError(GameServiceError):
    """Malformed request body."""

    status_code = 400
    default_message = "Invalid request"


class ServiceUnavailableError(GameServiceError):
    """The AI adapter was never initialized."""

    status_code = 503
    default_message = "AI service unavailable"


class UpstreamError(GameServiceError):
    """The AI adapter call failed."""

    status_code = 500

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"AI error: {detail}")


class ClientDisconnectedError(GameServiceError):
    """The client went away before the AI call finished."""

    status_code = 499
    default_message = "Client closed request"
