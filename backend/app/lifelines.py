from enum import Enum
from typing import Sequence


class Lifeline(str, Enum):
    ShowTitleAlbum = "ShowTitleAlbum"
    ShowPrevLines = "ShowPrevLines"
    Skip = "Skip"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: dict[Lifeline, str] = {
    Lifeline.ShowTitleAlbum: "Show Title",
    Lifeline.ShowPrevLines: "Show Previous Lines",
    Lifeline.Skip: "Skip Question",
}


def lifeline_label(name: str) -> str:
    """Human label for a lifeline wire name; unknown names pass through."""
    try:
        return Lifeline(name).label
    except ValueError:
        return name


def describe_used(names: Sequence[str]) -> str | None:
    """Sentence listing the lifelines used on one question, or None."""
    if not names:
        return None
    labels = ", ".join(lifeline_label(n) for n in names)
    plural = "" if len(names) == 1 else "s"
    return f"Used the {labels} lifeline{plural}."
