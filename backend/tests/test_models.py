"""Tests for guess-outcome parsing and history record validation."""

import pytest
from pydantic import ValidationError

from app.models import (
    AnnotatedText,
    Correct,
    GameDetail,
    Incorrect,
    Skipped,
    TooShort,
    parse_outcome,
)

_PAIR = {
    "user_guess": {"text": "we are never", "flags": None},
    "answer": {"text": "we are never ever", "flags": []},
}


# ── AnnotatedText ─────────────────────────────────────────────────────────

class TestAnnotatedText:
    def test_null_flags_become_empty(self):
        assert AnnotatedText(text="abc", flags=None).flags == []

    def test_flags_default_empty(self):
        assert AnnotatedText(text="abc").flags == []

    def test_matching_flags_accepted(self):
        assert AnnotatedText(text="abc", flags=[1, 0, 2]).flags == [1, 0, 2]

    def test_mismatched_flags_rejected(self):
        with pytest.raises(ValidationError):
            AnnotatedText(text="abc", flags=[1])

    def test_frozen(self):
        text = AnnotatedText(text="abc")
        with pytest.raises(ValidationError):
            text.text = "xyz"


# ── parse_outcome ─────────────────────────────────────────────────────────

class TestParseOutcome:
    def test_too_short_string(self):
        assert isinstance(parse_outcome("AFM"), TooShort)

    def test_too_short_object(self):
        assert isinstance(parse_outcome({"AFM": {}}), TooShort)
        assert isinstance(parse_outcome({"TooShort": None}), TooShort)

    def test_correct(self):
        outcome = parse_outcome({"Correct": {**_PAIR, "points_earned": 5, "new_lifeline": None}})
        assert isinstance(outcome, Correct)
        assert outcome.points_earned == 5
        assert outcome.new_lifeline is None
        assert outcome.answer.text == "we are never ever"

    def test_correct_with_lifeline(self):
        outcome = parse_outcome({"Correct": {**_PAIR, "points_earned": 3, "new_lifeline": "Skip"}})
        assert outcome.new_lifeline == "Skip"

    def test_incorrect(self):
        assert isinstance(parse_outcome({"Incorrect": _PAIR}), Incorrect)

    def test_skipped(self):
        assert isinstance(parse_outcome({"Skipped": _PAIR}), Skipped)

    def test_no_tag_rejected(self):
        with pytest.raises(ValueError):
            parse_outcome({})

    def test_two_tags_rejected(self):
        with pytest.raises(ValueError):
            parse_outcome({"Incorrect": _PAIR, "Skipped": _PAIR})

    def test_unknown_tag_rejected(self):
        with pytest.raises(ValueError, match="Unknown"):
            parse_outcome({"Perfect": _PAIR})

    def test_unknown_string_rejected(self):
        with pytest.raises(ValueError):
            parse_outcome("Correct?")

    def test_non_object_rejected(self):
        with pytest.raises(ValueError):
            parse_outcome([{"Skipped": _PAIR}])

    def test_malformed_body_rejected(self):
        with pytest.raises(ValidationError):
            parse_outcome({"Correct": {**_PAIR}})  # no points_earned

    def test_missing_body_rejected(self):
        with pytest.raises(ValueError):
            parse_outcome({"Incorrect": None})


# ── GameDetail ────────────────────────────────────────────────────────────

class TestGameDetail:
    def test_parses_backend_payload(self):
        detail = GameDetail.model_validate(
            {
                "game": {
                    "uuid": "g-1",
                    "start_time": "2024-05-01T12:00:00Z",
                    "player_name": None,
                    "terminal_score": 12,
                    "selected_songs": ["ignored"],
                },
                "guesses": [
                    {
                        "order_num": 0,
                        "prompt": "I knew you were trouble",
                        "user_guess": "when you walked in",
                        "correct_answer": "when you walked in",
                        "points_earned": 26,
                        "submit_time": "2024-05-01T12:00:30Z",
                        "lifelines_used": [],
                        "options": [],
                    }
                ],
            }
        )
        assert detail.game.player_name is None
        assert detail.guesses[0].album is None
        assert detail.guesses[0].points_earned == 26
