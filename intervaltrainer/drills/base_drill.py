from __future__ import annotations

"""Question model shared by the interval drills."""

from dataclasses import dataclass
from typing import Optional

from ..theory.fretboard import FretPosition
from ..theory.intervals import Interval
from ..theory.notes import Note

MODES = ("staff", "tab")


@dataclass(frozen=True)
class TabPair:
    left: FretPosition
    right: FretPosition


@dataclass(frozen=True)
class Question:
    """One drill round: two notes in presentation order plus the answer.

    `answer` is always classified on the low-to-high ordering, so it does not
    depend on `direction`.
    """

    left: Note
    right: Note
    direction: str  # "up" | "down"
    answer: Interval
    tab: Optional[TabPair] = None

    @property
    def mode(self) -> str:
        return "tab" if self.tab is not None else "staff"


def direction_of(left: Note, right: Note) -> str:
    return "up" if right.semitone >= left.semitone else "down"
