"""End-to-end tests of the viewer routes against a mocked game backend."""

import httpx
import pytest
from bs4 import BeautifulSoup
from fastapi.testclient import TestClient

from app.history import DETAIL_ERROR_TEXT, LIST_ERROR_TEXT
from app.history_api import HistoryClient
from app.main import app, get_history_client
from app.result_display import TOO_SHORT_TEXT

GAME = {
    "uuid": "game-42",
    "start_time": "2024-05-01T12:00:00Z",
    "player_name": "Eric",
    "terminal_score": 26,
}
GUESS = {
    "order_num": 0,
    "prompt": "We are never ever ever",
    "user_guess": "getting back together",
    "correct_answer": "getting back together",
    "points_earned": 26,
    "submit_time": "2024-05-01T12:00:12Z",
    "lifelines_used": [],
    "options": [],
}

client = TestClient(app)


@pytest.fixture
def backend():
    """Route the viewer's history client to an in-memory backend.

    Tests fill ``responses`` with path → httpx.Response and read ``requests``.
    """
    state = {"responses": {}, "requests": []}

    def handler(request: httpx.Request) -> httpx.Response:
        state["requests"].append(request)
        return state["responses"].get(request.url.path, httpx.Response(404))

    app.dependency_overrides[get_history_client] = lambda: HistoryClient(
        base_url="http://backend", transport=httpx.MockTransport(handler)
    )
    yield state
    app.dependency_overrides.clear()


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


# ── /history/details ──────────────────────────────────────────────────────

class TestGameDetailsPage:
    def test_renders_game(self, backend):
        backend["responses"]["/history/game"] = httpx.Response(
            200, json={"game": GAME, "guesses": [GUESS]}
        )
        resp = client.get("/history/details", params={"id": "game-42"})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        text = BeautifulSoup(resp.text, "lxml").get_text()
        assert "Eric" in text
        assert "26 points earned, 12 seconds elapsed" in text
        assert backend["requests"][0].url.params["id"] == "game-42"

    def test_not_found_shows_error(self, backend):
        resp = client.get("/history/details", params={"id": "missing"})
        assert resp.status_code == 502
        soup = BeautifulSoup(resp.text, "lxml")
        assert DETAIL_ERROR_TEXT in soup.get_text()
        assert soup.find(class_="loading") is None

    def test_missing_id_defaults_to_empty(self, backend):
        resp = client.get("/history/details")
        assert resp.status_code == 502
        assert backend["requests"][0].url.params["id"] == ""

    def test_mixed_offsets_render(self, backend):
        game = {**GAME, "start_time": "2024-05-01T12:00:00"}
        backend["responses"]["/history/game"] = httpx.Response(
            200, json={"game": game, "guesses": [GUESS]}
        )
        resp = client.get("/history/details", params={"id": "game-42"})
        assert resp.status_code == 200
        assert "12 seconds elapsed" in resp.text


# ── /history ──────────────────────────────────────────────────────────────

class TestHistoryPage:
    def test_forwards_query(self, backend):
        backend["responses"]["/history/games"] = httpx.Response(200, json=[GAME])
        resp = client.get("/history", params={"player": "Eric", "limit": "10"})
        assert resp.status_code == 200
        params = backend["requests"][0].url.params
        assert params["player"] == "Eric"
        assert params["limit"] == "10"
        soup = BeautifulSoup(resp.text, "lxml")
        assert len(soup.find("tbody").find_all("tr")) == 1

    def test_backend_error(self, backend):
        backend["responses"]["/history/games"] = httpx.Response(500)
        resp = client.get("/history")
        assert resp.status_code == 502
        assert LIST_ERROR_TEXT in resp.text


# ── /api/result ───────────────────────────────────────────────────────────

class TestResultFragment:
    def test_too_short(self):
        resp = client.post("/api/result", json="AFM")
        assert resp.status_code == 200
        assert TOO_SHORT_TEXT in BeautifulSoup(resp.text, "lxml").get_text()

    def test_skipped(self):
        pair = {
            "user_guess": {"text": "?", "flags": []},
            "answer": {"text": "shake it off", "flags": []},
        }
        resp = client.post("/api/result", json={"Skipped": pair})
        assert resp.status_code == 200
        assert "Skipped question:" in resp.text

    def test_ambiguous_payload_rejected(self):
        pair = {"user_guess": {"text": "a"}, "answer": {"text": "a"}}
        resp = client.post("/api/result", json={"Incorrect": pair, "Skipped": pair})
        assert resp.status_code == 422

    def test_untagged_payload_rejected(self):
        resp = client.post("/api/result", json={"points_earned": 5})
        assert resp.status_code == 422
