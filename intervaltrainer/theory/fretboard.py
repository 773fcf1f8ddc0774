from __future__ import annotations

"""Guitar fretboard mapping for standard EADGBE tuning.

Strings are numbered 1 (high E) to 6 (low E). A fret position maps to a
semitone as open-string semitone + fret, on the same scale as Note.semitone.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .notes import Note, note_from_semitone, semitone_of

MAX_FRET = 17

# string -> semitone of the open string
GUITAR_TUNING: Dict[int, int] = {
    6: 40,  # E2
    5: 45,  # A2
    4: 50,  # D3
    3: 55,  # G3
    2: 59,  # B3
    1: 64,  # E4
}


@dataclass(frozen=True)
class FretPosition:
    string: int  # 1..6
    fret: int    # 0..MAX_FRET


def semitone_from_tab_pos(pos: FretPosition) -> Optional[int]:
    base = GUITAR_TUNING.get(pos.string)
    if base is None:
        return None
    return base + pos.fret


def tab_pos_to_note(pos: FretPosition) -> Optional[Note]:
    semi = semitone_from_tab_pos(pos)
    if semi is None:
        return None
    return note_from_semitone(semi)


def note_to_guitar_positions(note: Note) -> List[FretPosition]:
    """Every playable position for a pitch within the first MAX_FRET frets."""
    semi = semitone_of(note)
    positions: List[FretPosition] = []
    for string in sorted(GUITAR_TUNING, reverse=True):
        fret = semi - GUITAR_TUNING[string]
        if 0 <= fret <= MAX_FRET:
            positions.append(FretPosition(string, fret))
    return positions


def position_cost(pos: FretPosition) -> float:
    # middle strings and low frets are easiest to reach
    return abs(pos.string - 3.5) * 2 + pos.fret * 0.5


def pick_best_guitar_position(note: Note) -> Optional[FretPosition]:
    positions = note_to_guitar_positions(note)
    if not positions:
        return None
    # sorted() is stable, so the first candidate wins ties
    return sorted(positions, key=position_cost)[0]
