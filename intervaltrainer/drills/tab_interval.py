from __future__ import annotations

"""TAB-mode question generator.

Keeps both notes inside a small fret window ("position") and within three
adjacent strings so the pair is comfortable to fret. Notes derived from fret
positions are spelled with naturals and sharps only.
"""

import random
from typing import Any, List

from ..app.explain import trace as xtrace
from ..theory.fretboard import FretPosition, semitone_from_tab_pos
from ..theory.intervals import BASE_SEMITONES, classify_interval, interval_number
from ..theory.notes import ensure_low_high, is_natural_semitone, note_from_semitone
from .base_drill import Question, TabPair, direction_of

STRINGS: List[int] = [1, 2, 3, 4, 5, 6]
WINDOW_MIN = 0
WINDOW_MAX = 12
WINDOW_WIDTH = 4
MAX_FRET_SPAN = 4
MAX_STRING_SPAN = 2
UNISON_DISCARD_RATE = 0.65
MAX_TRIES = 1200

FALLBACK_LEFT = FretPosition(4, 2)
FALLBACK_RIGHT = FretPosition(3, 2)


def _question_from_positions(pos_a: FretPosition, pos_b: FretPosition) -> Question:
    left = note_from_semitone(semitone_from_tab_pos(pos_a))
    right = note_from_semitone(semitone_from_tab_pos(pos_b))
    low, high = ensure_low_high(left, right)
    return Question(
        left=left,
        right=right,
        direction=direction_of(left, right),
        answer=classify_interval(low, high),
        tab=TabPair(pos_a, pos_b),
    )


def fallback_tab_question() -> Question:
    """Adjacent strings at the same fret, classified like any other pair."""
    return _question_from_positions(FALLBACK_LEFT, FALLBACK_RIGHT)


def generate_tab_question(allow_altered: bool = False, rng: Any = None) -> Question:
    rng = rng or random

    for _ in range(MAX_TRIES):
        pos_start = rng.randint(WINDOW_MIN, max(WINDOW_MIN, WINDOW_MAX - WINDOW_WIDTH))
        pos_end = pos_start + WINDOW_WIDTH

        s1 = rng.choice(STRINGS)
        s2 = rng.randint(max(1, s1 - MAX_STRING_SPAN), min(6, s1 + MAX_STRING_SPAN))
        fret1 = rng.randint(pos_start, pos_end)
        fret2 = rng.randint(max(pos_start, fret1 - MAX_FRET_SPAN), min(pos_end, fret1 + MAX_FRET_SPAN))

        pos_a = FretPosition(s1, fret1)
        pos_b = FretPosition(s2, fret2)
        if pos_a == pos_b:
            continue

        semi_a = semitone_from_tab_pos(pos_a)
        semi_b = semitone_from_tab_pos(pos_b)
        if semi_a is None or semi_b is None:
            continue
        if not allow_altered and not (is_natural_semitone(semi_a) and is_natural_semitone(semi_b)):
            continue

        span = abs(semi_b - semi_a)
        if span > 12:
            continue
        # unisons stay possible but rarer
        if span == 0 and rng.random() < UNISON_DISCARD_RATE:
            continue

        low, high = ensure_low_high(note_from_semitone(semi_a), note_from_semitone(semi_b))
        if interval_number(low, high) not in BASE_SEMITONES:
            continue
        return _question_from_positions(pos_a, pos_b)

    xtrace("tab_fallback", {"tries": MAX_TRIES})
    return fallback_tab_question()
