from __future__ import annotations

"""Staff and TAB layout math plus plain-text renderings for the terminal.

Staff steps count diatonic positions above the bottom line of a treble
staff (E4 = 0, top line F5 = 8). Even steps are lines, odd steps spaces.
"""

from typing import Dict, List

from ..drills.base_drill import Question
from ..theory.notes import Note, accidental_to_text, diatonic_index

STAFF_ANCHOR = Note("E", 0, 4)
STAFF_TOP = 40
LINE_GAP = 16
STEP_PX = 8
TOP_LINE_STEP = 8

TAB_LABELS: Dict[int, str] = {1: "e", 2: "B", 3: "G", 4: "D", 5: "A", 6: "E"}


def staff_step_for(note: Note) -> int:
    return diatonic_index(note.letter, note.octave) - STAFF_ANCHOR.diatonic


def y_for_step(step: int) -> float:
    bottom_line_y = STAFF_TOP + 4 * LINE_GAP
    return bottom_line_y - step * STEP_PX


def ledger_steps(step: int) -> List[int]:
    """Ledger line steps a note at `step` needs, nearest the staff first."""
    if step < 0:
        return list(range(-2, step - 1, -2))
    if step > TOP_LINE_STEP:
        return list(range(TOP_LINE_STEP + 2, step + 1, 2))
    return []


def tab_string_row(string: int) -> int:
    # string 1 is drawn on top
    return string - 1


def render_staff_text(q: Question) -> str:
    s1 = staff_step_for(q.left)
    s2 = staff_step_for(q.right)
    x1, x2 = 8, 18 if s1 == s2 else 16
    top = max(TOP_LINE_STEP, s1, s2)
    bottom = min(0, s1, s2)
    width = 26
    rows: List[str] = []
    for step in range(top, bottom - 1, -1):
        on_staff_line = step % 2 == 0 and 0 <= step <= TOP_LINE_STEP
        row = list(("-" if on_staff_line else " ") * width)
        for note, step_n, x in ((q.left, s1, x1), (q.right, s2, x2)):
            if step in ledger_steps(step_n):
                row[x - 2:x + 3] = list("-----")
            if step == step_n:
                row[x] = "o"
                acc = accidental_to_text(note.accidental)
                if acc:
                    row[x - 1 - len(acc):x - 1] = list(acc)
        rows.append("".join(row).rstrip())
    return "\n".join(rows)


def render_tab_text(q: Question) -> str:
    if q.tab is None:
        return "(no TAB data)"
    width = 20
    col1, col2 = 6, 13
    rows: List[str] = []
    for string in range(1, 7):
        row = list("-" * width)
        for pos, col in ((q.tab.left, col1), (q.tab.right, col2)):
            if tab_string_row(pos.string) == tab_string_row(string):
                text = str(pos.fret)
                row[col:col + len(text)] = list(text)
        rows.append(f"{TAB_LABELS[string]}|{''.join(row)}|")
    return "\n".join(rows)


def render_question_text(q: Question) -> str:
    return render_tab_text(q) if q.tab is not None else render_staff_text(q)
