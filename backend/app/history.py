"""History views: the table of past games and the detail page of one game."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Sequence
from urllib.parse import urlencode

from bs4 import BeautifulSoup, Tag

from . import config
from .comparator import render_flagged_text, render_plain_text
from .history_api import FetchFailure, HistoryClient
from .lifelines import describe_used
from .markup import css, element, new_soup, page
from .models import GameDetail, GameRecord, GuessRecord

logger = logging.getLogger(__name__)

ANONYMOUS = "<Anonymous>"

DETAIL_ERROR_TEXT = (
    'There was an error fetching the content! Please check the "id" value in the url.'
)
LIST_ERROR_TEXT = "There was an error fetching the game history!"

_HEADER_BLUE = "#B9D9EB"
_CARD_GREEN = "#a3c1ad"
_POINTS_GREEN = "#508124"
_LABEL = css(font_family="monospace", color="gray", font_weight="bold", margin="0", margin_right="8px")


def display_name(game: GameRecord) -> str:
    return game.player_name or ANONYMOUS


def format_time(dt: datetime) -> str:
    """``M/D/YYYY, h:MM:SS AM`` in the timestamp's own offset."""
    hour = dt.hour % 12 or 12
    return f"{dt.month}/{dt.day}/{dt.year}, {hour}:{dt:%M:%S} {'AM' if dt.hour < 12 else 'PM'}"


def elapsed_seconds(game: GameRecord, guesses: Sequence[GuessRecord]) -> list[int]:
    """Whole seconds each guess took, measured from the previous guess.

    The first guess is measured from the start of the game.
    """
    result: list[int] = []
    previous = _as_utc(game.start_time)
    for guess in guesses:
        submitted = _as_utc(guess.submit_time)
        result.append(int((submitted - previous).total_seconds()))
        previous = submitted
    return result


def _as_utc(dt: datetime) -> datetime:
    # Naive backend timestamps are UTC; lets them mix with offset-aware ones.
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt


def _plural(count: int) -> str:
    return "" if count == 1 else "s"


# ---------------------------------------------------------------------------
# History table
# ---------------------------------------------------------------------------


def details_href(game: GameRecord) -> str | None:
    """Link to the game's detail page; None for games without an id."""
    if not game.uuid:
        return None
    return f"{config.DETAILS_PATH}?{urlencode({'id': game.uuid})}"


def render_game_row(soup: BeautifulSoup, game: GameRecord, index: int) -> Tag:
    background = "white" if index % 2 == 0 else "WhiteSmoke"
    href = details_href(game)
    link = element(soup, "a", "See Details", href=href) if href else None
    return element(
        soup,
        "tr",
        element(soup, "th", format_time(game.start_time), scope="row"),
        element(soup, "td", display_name(game)),
        element(soup, "td", str(game.terminal_score), align="right"),
        element(soup, "td", link, align="right"),
        style=css(background=background),
    )


def render_history_table(games: Sequence[GameRecord]) -> Tag:
    soup = new_soup()
    head = element(
        soup,
        "thead",
        element(
            soup,
            "tr",
            element(soup, "th", element(soup, "strong", "Time")),
            element(soup, "th", element(soup, "strong", "Player")),
            element(soup, "th", element(soup, "strong", "Score"), align="right"),
            element(soup, "th", element(soup, "strong", "Details"), align="right"),
        ),
        style=css(background=_HEADER_BLUE),
    )
    body = element(soup, "tbody")
    for index, game in enumerate(games):
        body.append(render_game_row(soup, game, index))
    return element(
        soup,
        "table",
        head,
        body,
        class_="history-table",
        style=css(min_width="650px", border_collapse="collapse"),
    )


def render_history_page(games: Sequence[GameRecord]) -> str:
    return page("Game history", render_history_table(games))


def render_history_error() -> str:
    soup = new_soup()
    return page("Game history", element(soup, "div", LIST_ERROR_TEXT, class_="fetch-error"))


# ---------------------------------------------------------------------------
# Game detail
# ---------------------------------------------------------------------------


def _labelled_row(soup: BeautifulSoup, label: str, content: Tag) -> Tag:
    return element(
        soup,
        "div",
        element(soup, "p", label, style=_LABEL),
        content,
        style=css(display="flex"),
    )


def render_guess_card(
    soup: BeautifulSoup, guess: GuessRecord, total_guesses: int, elapsed: int
) -> Tag:
    card = element(
        soup,
        "div",
        class_="guess-card",
        style=css(border=f"3px solid {_CARD_GREEN}", border_radius="5px", padding="8px"),
    )
    heading = element(soup, "div", class_="guess-heading")
    if guess.album or guess.song_name:
        heading.append(element(soup, "strong", f"{guess.album or '?'} : {guess.song_name or '?'}"))
        heading.append(" ")
    heading.append(f"(Question {guess.order_num + 1} of {total_guesses})")
    card.append(heading)

    card.append(_labelled_row(soup, "Prompt:", render_plain_text(soup, guess.prompt)))
    card.append(_labelled_row(soup, "Guess:", render_flagged_text(soup, guess.user_guess)))
    card.append(_labelled_row(soup, "Actual:", render_flagged_text(soup, guess.correct_answer)))
    card.append(element(soup, "hr"))

    if guess.options:
        card.append(element(soup, "p", "This question was multiple choice."))
    used = describe_used(guess.lifelines_used)
    if used:
        card.append(element(soup, "p", used))

    card.append(element(soup, "hr"))
    card.append(
        element(
            soup,
            "p",
            element(soup, "span", str(guess.points_earned), style=css(color=_POINTS_GREEN, font_weight="bold")),
            f" point{_plural(guess.points_earned)} earned, {elapsed} seconds elapsed",
            class_="guess-points",
        )
    )
    return card


def render_game_summary(soup: BeautifulSoup, detail: GameDetail) -> Tag:
    game = detail.game
    rows = [
        ("Start time:", format_time(game.start_time)),
        ("Played By:", display_name(game)),
        ("Final Score:", str(game.terminal_score)),
        ("Number of Guesses:", str(len(detail.guesses))),
    ]
    body = element(soup, "tbody")
    for label, value in rows:
        body.append(element(soup, "tr", element(soup, "td", element(soup, "strong", label)), element(soup, "td", value)))
    return element(
        soup,
        "div",
        element(soup, "table", body, class_="game-summary"),
        style=css(border=f"3px solid {_HEADER_BLUE}", border_radius="5px", padding="8px"),
    )


class ViewStatus(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    FETCH_FAILURE = "fetch_failure"


@dataclass
class GameDetailView:
    """Detail page of one game; owns the single snapshot it fetched."""

    game_id: str
    status: ViewStatus = ViewStatus.LOADING
    detail: GameDetail | None = None

    async def load(self, client: HistoryClient) -> ViewStatus:
        """Fetch the game once. Failures become FETCH_FAILURE, never exceptions."""
        try:
            self.detail = await client.fetch_game(self.game_id)
        except FetchFailure as exc:
            logger.warning(
                "[history] Could not load game %r (status %s): %s",
                self.game_id,
                exc.status_code,
                exc,
            )
            self.status = ViewStatus.FETCH_FAILURE
        else:
            self.status = ViewStatus.LOADED
        return self.status

    def render(self) -> str:
        soup = new_soup()
        if self.status is ViewStatus.FETCH_FAILURE:
            body = element(soup, "div", DETAIL_ERROR_TEXT, class_="fetch-error")
        elif self.status is ViewStatus.LOADING or self.detail is None:
            body = element(soup, "div", "Loading…", class_="loading", role="progressbar")
        else:
            body = self._render_loaded(soup, self.detail)
        return page("Game details", body)

    @staticmethod
    def _render_loaded(soup: BeautifulSoup, detail: GameDetail) -> Tag:
        total = len(detail.guesses)
        cards = element(soup, "div", style=css(display="flex", flex_direction="column", gap="8px"))
        for guess, elapsed in zip(detail.guesses, elapsed_seconds(detail.game, detail.guesses)):
            cards.append(render_guess_card(soup, guess, total, elapsed))
        return element(
            soup,
            "div",
            render_game_summary(soup, detail),
            cards,
            class_="game-details",
            style=css(display="flex", flex_direction="column", align_items="center", gap="8px"),
        )
