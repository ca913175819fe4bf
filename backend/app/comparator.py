"""Per-character classification of a guess or answer against its flags.

Flag codes come from the game backend:
    1  → the character differs from the other string
    2  → near match (e.g. the trailing part of a guess that was truncated)
    -1 → neutral, no comparison was made
    anything else → exact match
"""

from enum import Enum
from typing import Sequence

from bs4 import BeautifulSoup, Tag

from .markup import css, element
from .models import AnnotatedText


class CharClass(str, Enum):
    NEUTRAL = "neutral"
    MISMATCH = "mismatch"
    PARTIAL_MATCH = "partial"
    EXACT_MATCH = "exact"


_FLAG_CLASSES: dict[int, CharClass] = {
    1: CharClass.MISMATCH,
    2: CharClass.PARTIAL_MATCH,
    -1: CharClass.NEUTRAL,
}

_CLASS_STYLES: dict[CharClass, str | None] = {
    CharClass.MISMATCH: css(color="#BA0021", font_weight="bold"),
    CharClass.PARTIAL_MATCH: css(color="#BDB76B", font_weight="bold"),
    CharClass.NEUTRAL: css(color="darkgray", font_weight="bold"),
    CharClass.EXACT_MATCH: None,
}

_MONOSPACE = css(font_family="monospace", margin="0")
_LABEL = css(font_family="monospace", color="gray", font_weight="bold", margin="0")


def classify(text: str, flags: Sequence[int] | None = None) -> list[CharClass]:
    """Return one CharClass per character of *text*.

    Without flags every character is neutral. Flag values other than
    1, 2 and -1 classify as exact matches.
    Raises ValueError if *flags* is non-empty and not the length of *text*.
    """
    if not flags:
        return [CharClass.NEUTRAL] * len(text)
    if len(flags) != len(text):
        raise ValueError(
            f"flags length {len(flags)} does not match text length {len(text)}"
        )
    return [_FLAG_CLASSES.get(flag, CharClass.EXACT_MATCH) for flag in flags]


def render_flagged_text(
    soup: BeautifulSoup, text: str, flags: Sequence[int] | None = None
) -> Tag:
    line = element(soup, "p", style=_MONOSPACE, class_="flagged-text")
    for char, char_class in zip(text, classify(text, flags)):
        style = _CLASS_STYLES[char_class]
        span = element(soup, "span", char, style=style, **{"data-class": char_class.value})
        line.append(span)
    return line


def render_plain_text(soup: BeautifulSoup, text: str) -> Tag:
    """Monospace text with no highlighting (used for prompts)."""
    return render_flagged_text(soup, text, [0] * len(text))


def render_comparison(
    soup: BeautifulSoup, guess: AnnotatedText, answer: AnnotatedText
) -> Tag:
    """Two aligned rows: the player's guess above the correct answer."""
    labels = element(
        soup,
        "div",
        element(soup, "p", "Yours:", style=_LABEL),
        element(soup, "p", "Actual:", style=_LABEL),
        style=css(display="flex", flex_direction="column", align_items="flex-end", margin_right="8px"),
    )
    texts = element(
        soup,
        "div",
        render_flagged_text(soup, guess.text, guess.flags),
        render_flagged_text(soup, answer.text, answer.flags),
        style=css(display="flex", flex_direction="column"),
    )
    return element(
        soup, "div", labels, texts, style=css(display="flex", flex_direction="row"), class_="comparison"
    )
