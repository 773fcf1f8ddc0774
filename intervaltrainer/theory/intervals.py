from __future__ import annotations

"""Interval number/quality model and the diff-based classifier.

The interval number counts letter steps (unison = 1, octave = 8). The quality
comes from how far the actual semitone span sits from the major/perfect
reference size for that number.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from .notes import Note, semitone_of

PERFECT_CLASS = frozenset({1, 4, 5, 8})
PERFECT_QUALITIES = frozenset({"d", "P", "A"})
IMPERFECT_QUALITIES = frozenset({"d", "m", "M", "A"})

# Display/sort order: d < m < M < P < A
QUALITY_ORDER: Dict[str, int] = {"d": 0, "m": 1, "M": 2, "P": 3, "A": 4}

# Major/perfect reference sizes in semitones for numbers 1..8
BASE_SEMITONES: Dict[int, int] = {1: 0, 2: 2, 3: 4, 4: 5, 5: 7, 6: 9, 7: 11, 8: 12}

PERFECT_DIFF_QUALITY: Dict[int, str] = {0: "P", 1: "A", -1: "d"}
IMPERFECT_DIFF_QUALITY: Dict[int, str] = {0: "M", -1: "m", 1: "A", -2: "d"}

QUALITY_NAMES_EN: Dict[str, str] = {
    "P": "Perfect",
    "M": "Major",
    "m": "minor",
    "A": "Augmented",
    "d": "diminished",
}
NUMBER_NAMES_EN = ["", "unison", "2nd", "3rd", "4th", "5th", "6th", "7th", "octave"]

QUALITY_NAMES_ZH: Dict[str, str] = {"P": "纯", "M": "大", "m": "小", "A": "增", "d": "减"}
NUMBER_NAMES_ZH = ["", "一", "二", "三", "四", "五", "六", "七", "八"]


def is_perfect_class(number: int) -> bool:
    return number in PERFECT_CLASS


def natural_quality(number: int) -> str:
    """Quality of the unaltered (perfect or major) interval for a number."""
    return "P" if is_perfect_class(number) else "M"


@dataclass(frozen=True)
class Interval:
    number: int   # 1..8
    quality: str  # d | m | M | P | A

    def __post_init__(self) -> None:
        if self.number not in BASE_SEMITONES:
            raise ValueError(f"Interval number out of range: {self.number}")
        allowed = PERFECT_QUALITIES if is_perfect_class(self.number) else IMPERFECT_QUALITIES
        if self.quality not in allowed:
            raise ValueError(f"Quality {self.quality!r} is not valid for number {self.number}")

    @property
    def id(self) -> str:
        return interval_id(self)

    def __str__(self) -> str:
        return interval_id(self)


def quality_for(number: int, semis: int) -> str:
    """Resolve a quality from the semitone span of an interval number.

    Diffs beyond the table clamp to A/d by sign, so exotic double-accidental
    spellings never yield doubly augmented or diminished labels.
    """
    diff = semis - BASE_SEMITONES[number]
    table = PERFECT_DIFF_QUALITY if is_perfect_class(number) else IMPERFECT_DIFF_QUALITY
    if diff in table:
        return table[diff]
    return "A" if diff > 0 else "d"


def interval_number(low: Note, high: Note) -> int:
    return high.diatonic - low.diatonic + 1


def classify_interval(low: Note, high: Note) -> Interval:
    """Classify the interval between two notes already ordered low to high.

    Callers must make sure the number lands in 1..8; anything else raises
    ValueError from the Interval constructor.
    """
    number = interval_number(low, high)
    if number not in BASE_SEMITONES:
        raise ValueError(f"Interval number out of range: {number}")
    semis = semitone_of(high) - semitone_of(low)
    return Interval(number, quality_for(number, semis))


def interval_id(iv: Interval) -> str:
    return f"{iv.quality}{iv.number}"


def interval_short(iv: Interval) -> str:
    return interval_id(iv)


def parse_interval(text: str) -> Interval:
    """Parse an id like 'M3' or 'P5' back into an Interval."""
    s = (text or "").strip()
    if len(s) < 2 or s[0] not in QUALITY_ORDER:
        raise ValueError(f"Invalid interval id: {text}")
    try:
        number = int(s[1:])
    except ValueError as e:
        raise ValueError(f"Invalid interval number in: {text}") from e
    return Interval(number, s[0])


def interval_sort_key(iv: Interval) -> Tuple[int, int]:
    return iv.number, QUALITY_ORDER.get(iv.quality, 99)


def interval_text(iv: Interval, lang: str = "en") -> str:
    """Human-readable label, e.g. 'Perfect 5th' or '纯五度'."""
    if lang == "zh":
        q = QUALITY_NAMES_ZH.get(iv.quality, iv.quality)
        n = NUMBER_NAMES_ZH[iv.number] if 0 < iv.number < len(NUMBER_NAMES_ZH) else str(iv.number)
        return f"{q}{n}度"
    q = QUALITY_NAMES_EN.get(iv.quality, iv.quality)
    n = NUMBER_NAMES_EN[iv.number] if 0 < iv.number < len(NUMBER_NAMES_EN) else str(iv.number)
    return f"{q} {n}"
