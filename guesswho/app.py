"""FastAPI application factory for the game server."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from guesswho import __version__
from guesswho.ai.base import TextGenerator
from guesswho.ai.factory import create_ai_client
from guesswho.api.game import router as game_router
from guesswho.auth.gate import AuthGateMiddleware
from guesswho.auth.verifier import JWTVerifier, TokenVerifier
from guesswho.config.logging import get_logger
from guesswho.config.settings import ServerConfig, get_server_config
from guesswho.errors import GameServiceError
from guesswho.middleware import SecurityHeadersMiddleware

logger = get_logger("api")

API_PREFIX = "/api"

# Marks an omitted ai_client; an explicit None means "uninitialized"
_BUILD_FROM_CONFIG: Any = object()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    logger.info(f"Game server v{__version__} ready (AI {'enabled' if app.state.ai_client else 'unavailable'})")

    yield

    ai_client = app.state.ai_client
    if ai_client is not None:
        try:
            await ai_client.aclose()
        except Exception:
            logger.exception("Error closing AI client")
    logger.info("Game server stopped")


async def game_error_handler(request: Request, exc: GameServiceError):
    """Handle game service errors."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions (unknown routes, wrong methods)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(
    config: ServerConfig | None = None,
    ai_client: TextGenerator | None = _BUILD_FROM_CONFIG,
    verifier: TokenVerifier | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Server configuration. Loaded from the environment if omitted.
        ai_client: Text-generation adapter. Built from ``config`` if omitted
            (None when that fails). Passing None explicitly starts the app
            with an uninitialized adapter.
        verifier: Bearer token verifier for the /api group. A JWTVerifier
            built from ``config`` if omitted.
    """
    if config is None:
        config = get_server_config()

    for problem in config.validate():
        logger.warning(f"Config: {problem}")

    if ai_client is _BUILD_FROM_CONFIG:
        ai_client = create_ai_client(config)
    if verifier is None:
        verifier = JWTVerifier(config)

    app = FastAPI(
        title="Guess Who Game Server",
        description="Health check and authenticated guessing game API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.ai_client = ai_client

    # Added innermost first: CORS must answer pre-flight before the gate sees it
    app.add_middleware(AuthGateMiddleware, verifier=verifier, prefix=API_PREFIX)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials="*" not in config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(GameServiceError, game_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    app.include_router(game_router, prefix=f"{API_PREFIX}/game", tags=["game"])

    return app
