"""Centralised runtime configuration loaded from environment variables."""

import os

HISTORY_API_URL: str = os.getenv("HISTORY_API_URL", "http://127.0.0.1:8000")
HISTORY_GAMES_PATH: str = os.getenv("HISTORY_GAMES_PATH", "/history/games")

# Unset means no timeout: a slow backend keeps the request pending.
_FETCH_TIMEOUT_RAW = os.getenv("FETCH_TIMEOUT", "").strip()
FETCH_TIMEOUT: float | None = float(_FETCH_TIMEOUT_RAW) if _FETCH_TIMEOUT_RAW else None

DETAILS_PATH: str = os.getenv("DETAILS_PATH", "/history/details")
