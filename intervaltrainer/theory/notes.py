from __future__ import annotations

"""Note spelling and pitch arithmetic.

A note is spelled as letter + accidental + octave. Pitch comparisons always go
through the semitone value; interval numbers go through the diatonic index,
which ignores accidentals.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

LETTERS = ["C", "D", "E", "F", "G", "A", "B"]  # 0..6
NATURAL_PC: Dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

ACCIDENTAL_TEXT: Dict[int, str] = {0: "", 1: "♯", -1: "♭", 2: "𝄪", -2: "𝄫"}

# Canonical spelling for a pitch class: naturals and sharps only.
SHARP_SPELLING: List[Tuple[str, int]] = [
    ("C", 0),
    ("C", 1),
    ("D", 0),
    ("D", 1),
    ("E", 0),
    ("F", 0),
    ("F", 1),
    ("G", 0),
    ("G", 1),
    ("A", 0),
    ("A", 1),
    ("B", 0),
]


@dataclass(frozen=True)
class Note:
    letter: str      # "C".."B"
    accidental: int  # -2..2
    octave: int

    def __post_init__(self) -> None:
        if self.letter not in NATURAL_PC:
            raise ValueError(f"Unknown letter: {self.letter}")

    @property
    def semitone(self) -> int:
        return semitone_of(self)

    @property
    def diatonic(self) -> int:
        return diatonic_index(self.letter, self.octave)

    def __str__(self) -> str:
        return note_to_name(self)


def diatonic_index(letter: str, octave: int) -> int:
    """Letter-step index (C0 = 0); accidentals never move it."""
    return octave * 7 + LETTERS.index(letter)


def semitone_of(note: Note) -> int:
    """MIDI-aligned semitone value (C4 = 60)."""
    return (note.octave + 1) * 12 + NATURAL_PC[note.letter] + note.accidental


def is_natural_pitch_class(pc: int) -> bool:
    return pc in (0, 2, 4, 5, 7, 9, 11)


def is_natural_semitone(semi: int) -> bool:
    return is_natural_pitch_class(semi % 12)


def note_from_semitone(semi: int) -> Note:
    """Spell a bare semitone value, always with sharps for black keys."""
    letter, accidental = SHARP_SPELLING[semi % 12]
    return Note(letter, accidental, semi // 12 - 1)


def accidental_to_text(acc: int) -> str:
    if acc in ACCIDENTAL_TEXT:
        return ACCIDENTAL_TEXT[acc]
    return "#" * acc if acc > 0 else "b" * -acc


def note_to_name(note: Note) -> str:
    return f"{note.letter}{accidental_to_text(note.accidental)}{note.octave}"


def ensure_low_high(a: Note, b: Note) -> Tuple[Note, Note]:
    """Order two notes by pitch. Equal pitches keep the input order."""
    if semitone_of(b) < semitone_of(a):
        return b, a
    return a, b


def parse_note(text: str) -> Note:
    """Parse a note string like 'C4', 'F#4', 'Bb3' or 'Ebb5' into a Note."""
    s = (text or "").strip()
    if len(s) < 2:
        raise ValueError(f"Invalid note string: {text}")
    letter = s[0].upper()
    if letter not in NATURAL_PC:
        raise ValueError(f"Invalid note letter in: {text}")
    idx = 1
    acc = 0
    while idx < len(s) and s[idx] in ("#", "b", "♯", "♭"):
        acc += 1 if s[idx] in ("#", "♯") else -1
        idx += 1
    if abs(acc) > 2:
        raise ValueError(f"Too many accidentals in: {text}")
    try:
        octave = int(s[idx:])
    except ValueError as e:
        raise ValueError(f"Invalid octave in note string: {text}") from e
    return Note(letter, acc, octave)
