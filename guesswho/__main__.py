"""Entry point for the game server."""

import os

import uvicorn

from guesswho.config.logging import get_logger, init_logging, shutdown_logging
from guesswho.config.settings import get_server_config


def main():
    init_logging()
    config = get_server_config()
    logger = get_logger("api")
    logger.info(f"Server starting on port {config.port}")

    # Reload only in explicit dev mode
    reload = os.getenv("SERVER_RELOAD", "").lower() in ("1", "true", "yes")
    try:
        uvicorn.run(
            "guesswho.app:create_app",
            factory=True,
            host=config.host,
            port=config.port,
            reload=reload,
            log_config=None,
        )
    finally:
        shutdown_logging()


if __name__ == "__main__":
    main()
