"""Guess Who game server.

A small FastAPI service exposing a health check and an authenticated
game route group whose guess endpoint forwards the player's text to a
Gemini text-generation model.
"""

__version__ = "0.1.0"
