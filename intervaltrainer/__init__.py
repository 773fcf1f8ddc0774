"""Interval trainer package initialization.

Re-exports the engine used by front ends: note/interval model, the
fretboard mapper, question generators and answer choice construction.
"""

from __future__ import annotations

from .drills import Question, TabPair, build_choice_set, generate_question
from .theory.fretboard import FretPosition, pick_best_guitar_position, tab_pos_to_note
from .theory.intervals import Interval, classify_interval, interval_id, interval_text
from .theory.notes import Note, ensure_low_high, note_to_name

__version__ = "0.1.0"

# Names matching the drill's external interface.
best_fret_position = pick_best_guitar_position
fret_position_to_note = tab_pos_to_note
format_interval_label = interval_text
format_note_label = note_to_name

__all__ = [
    "__version__",
    "FretPosition",
    "Interval",
    "Note",
    "Question",
    "TabPair",
    "best_fret_position",
    "build_choice_set",
    "classify_interval",
    "ensure_low_high",
    "format_interval_label",
    "format_note_label",
    "fret_position_to_note",
    "generate_question",
    "interval_id",
    "interval_text",
    "note_to_name",
    "pick_best_guitar_position",
    "tab_pos_to_note",
]
