from __future__ import annotations

"""Answer choice construction.

Builds up to nine distinct intervals around the correct answer: same-number
alternates first, then neighbouring numbers, then common intervals to fill.
Earlier insertions win when two candidates share an id.
"""

import random
from typing import Any, Dict, List

from ..theory.intervals import Interval, interval_id, interval_sort_key, is_perfect_class, natural_quality

MAX_CHOICES = 9

NATURAL_COMMON: List[Interval] = [
    Interval(1, "P"),
    Interval(2, "m"),
    Interval(2, "M"),
    Interval(3, "m"),
    Interval(3, "M"),
    Interval(4, "P"),
    Interval(4, "A"),
    Interval(5, "d"),
    Interval(5, "P"),
    Interval(6, "m"),
    Interval(6, "M"),
    Interval(7, "m"),
    Interval(7, "M"),
    Interval(8, "P"),
]

ALTERED_COMMON: List[Interval] = [
    Interval(2, "A"),
    Interval(2, "d"),
    Interval(3, "A"),
    Interval(3, "d"),
    Interval(6, "A"),
    Interval(6, "d"),
    Interval(7, "A"),
    Interval(7, "d"),
]

# Without altered notes only the tritone spellings stay as same-number alternates.
COMMON_ALTERNATE: Dict[int, str] = {4: "A", 5: "d"}


def is_forbidden(iv: Interval) -> bool:
    """A diminished unison never appears as a choice."""
    return interval_id(iv) == "d1"


def same_number_alternates(n: int, altered: bool) -> List[Interval]:
    if is_perfect_class(n):
        out = [Interval(n, "P")]
        if altered:
            out += [Interval(n, "d"), Interval(n, "A")]
        elif n in COMMON_ALTERNATE:
            out.append(Interval(n, COMMON_ALTERNATE[n]))
        return out
    out = [Interval(n, "m"), Interval(n, "M")]
    if altered:
        out += [Interval(n, "d"), Interval(n, "A")]
    return out


def neighbour_naturals(n: int) -> List[Interval]:
    return [Interval(k, natural_quality(k)) for k in (n - 1, n + 1) if 1 <= k <= 8]


def build_choice_set(correct: Interval, allow_altered: bool = False, rng: Any = None) -> List[Interval]:
    """Return the sorted answer choices for a question, correct answer included."""
    rng = rng or random
    pool: Dict[str, Interval] = {interval_id(correct): correct}

    for c in same_number_alternates(correct.number, allow_altered) + neighbour_naturals(correct.number):
        if not is_forbidden(c):
            pool.setdefault(interval_id(c), c)

    common = NATURAL_COMMON + (ALTERED_COMMON if allow_altered else [])
    for c in common:
        if len(pool) >= MAX_CHOICES:
            break
        if not is_forbidden(c):
            pool.setdefault(interval_id(c), c)

    arr = [iv for iv in pool.values() if not is_forbidden(iv)]
    while len(arr) > MAX_CHOICES:
        idx = rng.randint(0, len(arr) - 1)
        if arr[idx] != correct:
            arr.pop(idx)
    arr.sort(key=interval_sort_key)
    return arr
