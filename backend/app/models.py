from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class AnnotatedText(_Record):
    text: str
    flags: list[int] = Field(default_factory=list)  # empty → every char neutral

    @field_validator("flags", mode="before")
    @classmethod
    def _null_flags(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def _flags_cover_text(self) -> "AnnotatedText":
        if self.flags and len(self.flags) != len(self.text):
            raise ValueError(
                f"flags length {len(self.flags)} does not match text length {len(self.text)}"
            )
        return self


# ---------------------------------------------------------------------------
# Guess outcome: closed sum of four variants
# ---------------------------------------------------------------------------


class TooShort(_Record):
    pass


class Correct(_Record):
    user_guess: AnnotatedText
    answer: AnnotatedText
    points_earned: int
    new_lifeline: str | None = None


class Incorrect(_Record):
    user_guess: AnnotatedText
    answer: AnnotatedText


class Skipped(_Record):
    user_guess: AnnotatedText
    answer: AnnotatedText


GuessOutcome = TooShort | Correct | Incorrect | Skipped

# Wire tags of the externally-tagged payload
_VARIANTS: dict[str, type[_Record]] = {
    "AFM": TooShort,
    "TooShort": TooShort,
    "Correct": Correct,
    "Incorrect": Incorrect,
    "Skipped": Skipped,
}


def parse_outcome(payload: Any) -> GuessOutcome:
    """Parse a guess result as sent by the game backend.

    The payload is either ``{"<Tag>": {...}}`` with exactly one known tag,
    or the bare string ``"AFM"`` for the unit variant.
    Raises ValueError when the tag is missing, ambiguous or unknown, and
    pydantic.ValidationError when the variant body is malformed.
    """
    if isinstance(payload, str):
        payload = {payload: None}
    if not isinstance(payload, dict):
        raise ValueError(f"Guess result must be an object, got {type(payload).__name__}")

    unknown = [key for key in payload if key not in _VARIANTS]
    if unknown:
        raise ValueError(f"Unknown guess result tag(s): {', '.join(map(str, unknown))}")
    if len(payload) != 1:
        raise ValueError(f"Guess result must carry exactly one tag, got {len(payload)}")

    (tag, body), = payload.items()
    variant = _VARIANTS[tag]
    if variant is TooShort:
        return TooShort()
    return variant.model_validate(body)


# ---------------------------------------------------------------------------
# History records
# ---------------------------------------------------------------------------


class GameRecord(_Record):
    uuid: str | None = None
    start_time: datetime
    player_name: str | None = None
    terminal_score: int


class GuessRecord(_Record):
    order_num: int
    prompt: str
    user_guess: str
    correct_answer: str
    points_earned: int
    submit_time: datetime
    lifelines_used: list[str] = Field(default_factory=list)
    options: list[str] = Field(default_factory=list)  # empty for free-text questions
    album: str | None = None
    song_name: str | None = None


class GameDetail(_Record):
    game: GameRecord
    guesses: list[GuessRecord]
