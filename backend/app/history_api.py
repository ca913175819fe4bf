"""Game-backend history API client."""

import logging
from typing import Any, Mapping

import httpx
from pydantic import TypeAdapter, ValidationError

from . import config
from .models import GameDetail, GameRecord

logger = logging.getLogger(__name__)

_HEADERS = {"Accept": "application/json", "User-Agent": "LyricHistoryViewer/1.0"}

_GAME_LIST = TypeAdapter(list[GameRecord])


class FetchFailure(Exception):
    """A history request failed: transport error, non-200 status or bad body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class HistoryClient:
    """Read-only client for the backend's history endpoints.

    A fresh httpx.AsyncClient is opened per call; nothing is shared between
    requests. *transport* lets tests plug in an httpx.MockTransport.
    """

    def __init__(
        self,
        base_url: str = config.HISTORY_API_URL,
        timeout: float | None = config.FETCH_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _get_json(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, headers=_HEADERS, transport=self._transport
            ) as client:
                resp = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise FetchFailure(f"GET {url} failed: {exc}") from exc

        if resp.status_code != 200:
            raise FetchFailure(f"GET {url} returned {resp.status_code}", resp.status_code)
        try:
            return resp.json()
        except ValueError as exc:
            raise FetchFailure(f"GET {url} returned a non-JSON body", resp.status_code) from exc

    async def fetch_game(self, game_id: str) -> GameDetail:
        """Return one game with all of its guesses."""
        logger.info("[history] Fetching game %s", game_id)
        data = await self._get_json("/history/game", params={"id": game_id})
        try:
            return GameDetail.model_validate(data)
        except ValidationError as exc:
            raise FetchFailure(f"Game {game_id!r} has an unexpected shape: {exc}", 200) from exc

    async def fetch_games(self, params: Any = None) -> list[GameRecord]:
        """Return the games matching *params*, a mapping or list of pairs forwarded unchanged."""
        logger.info("[history] Fetching game list %s", dict(params or {}))
        data = await self._get_json(config.HISTORY_GAMES_PATH, params=params)
        try:
            return _GAME_LIST.validate_python(data)
        except ValidationError as exc:
            raise FetchFailure(f"Game list has an unexpected shape: {exc}", 200) from exc
