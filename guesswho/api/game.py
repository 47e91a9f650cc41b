"""Game endpoints: start and guess.

Both handlers are stateless. ``start`` acknowledges; ``guess`` forwards
the player's text to the AI adapter and echoes the reply verbatim.
"""

from __future__ import annotations

import anyio
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, StrictStr
from pydantic import ValidationError as PydanticValidationError

from guesswho.ai.base import TextGenerator
from guesswho.ai.prompts import build_guess_prompt
from guesswho.config.logging import get_logger
from guesswho.errors import (
    ClientDisconnectedError,
    ServiceUnavailableError,
    UpstreamError,
    ValidationError,
)

logger = get_logger("game")

router = APIRouter()


class GuessRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    guess: StrictStr


class GuessResponse(BaseModel):
    message: str = "Guess received"
    ai_response: str


class StartResponse(BaseModel):
    message: str = "Game started"


def get_ai_client(request: Request) -> TextGenerator | None:
    """Return the adapter injected at app construction (None if uninitialized)."""
    return getattr(request.app.state, "ai_client", None)


def _subject(request: Request) -> str | None:
    claims = getattr(request.state, "auth_claims", None) or {}
    return claims.get("sub")


async def listen_for_disconnect(request: Request) -> None:
    """Return once the client has closed the connection.

    Must only be called after the request body has been read.
    """
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            return


async def generate_until_disconnect(
    request: Request,
    ai_client: TextGenerator,
    prompt: str,
    timeout: float | None,
) -> str:
    """Run one adapter call bounded by the client connection and a timeout.

    The outbound call is cancelled if the client disconnects, the timeout
    expires, or this coroutine itself is cancelled. Adapter errors are
    re-raised unchanged; an expired timeout raises ``TimeoutError``.
    """
    outcome: dict = {}

    async def run_generation() -> None:
        try:
            outcome["reply"] = await ai_client.generate(prompt)
        except Exception as e:
            outcome["error"] = e
        tg.cancel_scope.cancel()

    async def run_listener() -> None:
        await listen_for_disconnect(request)
        outcome["disconnected"] = True
        tg.cancel_scope.cancel()

    try:
        with anyio.fail_after(timeout):
            async with anyio.create_task_group() as tg:
                tg.start_soon(run_generation)
                tg.start_soon(run_listener)
    except TimeoutError as e:
        raise TimeoutError(f"timed out after {timeout:g}s") from e

    if "error" in outcome:
        raise outcome["error"]
    if "reply" in outcome:
        return outcome["reply"]
    raise ClientDisconnectedError()


@router.post("/start", response_model=StartResponse)
async def start_game(request: Request) -> StartResponse:
    """Acknowledge a new game. No session is created."""
    logger.info("Game started", extra={"subject": _subject(request)})
    return StartResponse()


@router.post("/guess", response_model=GuessResponse)
async def submit_guess(
    request: Request,
    ai_client: TextGenerator | None = Depends(get_ai_client),
) -> GuessResponse:
    """Ask the model whether the guess is right and pass its reply through."""
    if ai_client is None:
        raise ServiceUnavailableError()

    try:
        body = GuessRequest.model_validate_json(await request.body())
    except PydanticValidationError as e:
        logger.debug(f"Invalid guess body: {e.error_count()} error(s)")
        raise ValidationError() from e

    config = request.app.state.config
    prompt = build_guess_prompt(body.guess)

    try:
        reply = await generate_until_disconnect(request, ai_client, prompt, config.ai_timeout_seconds)
    except ClientDisconnectedError:
        logger.info("Client disconnected; AI call cancelled", extra={"subject": _subject(request)})
        raise
    except TimeoutError as e:
        logger.warning(f"AI call {e}", extra={"subject": _subject(request)})
        raise UpstreamError(str(e)) from e
    except Exception as e:
        logger.error(f"AI call failed: {e}", exc_info=True, extra={"subject": _subject(request)})
        raise UpstreamError(str(e)) from e

    logger.info("Guess received", extra={"subject": _subject(request)})
    return GuessResponse(ai_response=reply)
