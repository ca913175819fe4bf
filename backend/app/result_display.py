"""Rendering of a single guess result, shown right after the player submits."""

from bs4 import BeautifulSoup, Tag

from .comparator import render_comparison
from .lifelines import lifeline_label
from .markup import css, element, new_soup
from .models import Correct, GuessOutcome, Incorrect, Skipped, TooShort

TOO_SHORT_TEXT = "You're on the right track, but your guess was too short!"
INCORRECT_TEXT = "Incorrect! The Game is now over. Better luck next time!"
SKIPPED_TEXT = "Skipped question:"

_GREEN = css(color="green", font_weight="bold")
_RED = css(color="#BA0021", font_weight="bold")
_BOLD = css(font_weight="bold")


def summary_lines(outcome: GuessOutcome) -> list[str]:
    """Plain-text summary of *outcome*, one entry per rendered line."""
    if isinstance(outcome, TooShort):
        return [TOO_SHORT_TEXT]
    if isinstance(outcome, Correct):
        lines = [f"Correct! You earned {outcome.points_earned} points"]
        if outcome.new_lifeline:
            lines.append(f"You also got a {lifeline_label(outcome.new_lifeline)} lifeline!")
        return lines
    if isinstance(outcome, Incorrect):
        return [INCORRECT_TEXT]
    if isinstance(outcome, Skipped):
        return [SKIPPED_TEXT]
    raise TypeError(f"Not a guess outcome: {type(outcome).__name__}")


def _headline(soup: BeautifulSoup, outcome: GuessOutcome) -> Tag:
    if isinstance(outcome, Correct):
        return element(
            soup,
            "p",
            element(soup, "span", "Correct!", style=_GREEN),
            " You earned ",
            element(soup, "span", str(outcome.points_earned), style=_BOLD),
            " points",
        )
    if isinstance(outcome, Incorrect):
        return element(
            soup,
            "p",
            element(soup, "span", "Incorrect!", style=_RED),
            " The Game is now over. Better luck next time!",
        )
    return element(soup, "p", summary_lines(outcome)[0])


def render_result(outcome: GuessOutcome) -> str:
    """HTML fragment for one guess result."""
    lines = summary_lines(outcome)
    soup = new_soup()
    box = element(soup, "div", _headline(soup, outcome), class_="guess-result")
    for extra in lines[1:]:
        box.append(element(soup, "p", extra))
    if not isinstance(outcome, TooShort):
        box.append(render_comparison(soup, outcome.user_guess, outcome.answer))
    return str(box)
