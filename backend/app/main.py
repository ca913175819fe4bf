import logging
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from .history import (
    GameDetailView,
    ViewStatus,
    render_history_error,
    render_history_page,
)
from .history_api import FetchFailure, HistoryClient
from .models import parse_outcome
from .result_display import render_result

logger = logging.getLogger(__name__)

app = FastAPI(title="Lyric Guess History Viewer")


def get_history_client() -> HistoryClient:
    return HistoryClient()


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/history", response_class=HTMLResponse)
async def history_page(request: Request, client: HistoryClient = Depends(get_history_client)):
    """Table of past games; the query string is forwarded to the backend."""
    try:
        games = await client.fetch_games(list(request.query_params.multi_items()))
    except FetchFailure as exc:
        logger.warning("[history] Could not load game list (%s)", exc)
        return HTMLResponse(render_history_error(), status_code=502)
    return HTMLResponse(render_history_page(games))


@app.get("/history/details", response_class=HTMLResponse)
async def game_details_page(
    id: str = Query(""),
    client: HistoryClient = Depends(get_history_client),
):
    view = GameDetailView(game_id=id)
    status = await view.load(client)
    return HTMLResponse(view.render(), status_code=200 if status is ViewStatus.LOADED else 502)


@app.post("/api/result", response_class=HTMLResponse)
def result_fragment(payload: Any = Body(...)):
    """Render a guess result sent in the backend's wire format."""
    try:
        outcome = parse_outcome(payload)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return HTMLResponse(render_result(outcome))
