from __future__ import annotations

"""Staff-mode question generator: two notes inside the C4..C5 treble window."""

import random
from typing import Any, List

from ..app.explain import trace as xtrace
from ..theory.intervals import BASE_SEMITONES, classify_interval, interval_number
from ..theory.notes import LETTERS, Note, diatonic_index, ensure_low_high
from .base_drill import Question

RANGE_LOW = Note("C", 0, 4)
RANGE_HIGH = Note("C", 0, 5)
ALLOWED_INTERVAL_NUMBERS: List[int] = [1, 2, 3, 4, 5, 6, 7, 8]
MAX_TRIES = 400


def allowed_accidentals(allow_altered: bool) -> List[int]:
    return [-1, 0, 1] if allow_altered else [0]


def _note_at(diat: int, accidental: int) -> Note:
    return Note(LETTERS[diat % 7], accidental, diat // 7)


def fallback_staff_question() -> Question:
    return Question(
        left=Note("C", 0, 5),
        right=Note("C", 0, 4),
        direction="down",
        answer=classify_interval(Note("C", 0, 4), Note("C", 0, 5)),
    )


def generate_staff_question(allow_altered: bool = False, rng: Any = None) -> Question:
    """Pick a number, a start letter and accidentals, retrying until the pair fits.

    Returns a descending C5 -> C4 octave if no attempt succeeds.
    """
    rng = rng or random
    low_d = diatonic_index(RANGE_LOW.letter, RANGE_LOW.octave)
    high_d = diatonic_index(RANGE_HIGH.letter, RANGE_HIGH.octave)
    accidentals = allowed_accidentals(allow_altered)

    for _ in range(MAX_TRIES):
        num = rng.choice(ALLOWED_INTERVAL_NUMBERS)
        max_low = high_d - (num - 1)
        if max_low < low_d:
            continue
        base_low = rng.randint(low_d, max_low)
        a = _note_at(base_low, rng.choice(accidentals))
        b = _note_at(base_low + num - 1, rng.choice(accidentals))

        low, high = ensure_low_high(a, b)
        span = high.semitone - low.semitone
        if span < 0 or span > 12:
            continue

        direction = "up" if rng.random() < 0.5 else "down"
        left, right = (low, high) if direction == "up" else (high, low)

        # equal pitches keep left first, so an enharmonic pair shown "down"
        # (F♭4 then E4) counts backwards here and is rejected
        low, high = ensure_low_high(left, right)
        if interval_number(low, high) not in BASE_SEMITONES:
            continue
        return Question(left=left, right=right, direction=direction, answer=classify_interval(low, high))

    xtrace("staff_fallback", {"tries": MAX_TRIES})
    return fallback_staff_question()
