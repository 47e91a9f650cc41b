"""Configuration modules for the game server.

Submodules:
- guesswho.config.settings: ServerConfig loaded from environment / .env
- guesswho.config.logging: Console logging setup with tagged, colored output

Import directly from submodules:
  from guesswho.config.settings import ServerConfig, get_server_config
  from guesswho.config.logging import init_logging, get_logger
"""
