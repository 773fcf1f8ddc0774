"""Interval question generators and answer choice construction."""

from __future__ import annotations

from typing import Any

from .base_drill import MODES, Question, TabPair
from .choices import build_choice_set
from .staff_interval import generate_staff_question
from .tab_interval import generate_tab_question

__all__ = [
    "MODES",
    "Question",
    "TabPair",
    "build_choice_set",
    "generate_question",
    "generate_staff_question",
    "generate_tab_question",
]


def generate_question(mode: str = "staff", allow_altered: bool = False, rng: Any = None) -> Question:
    """Generate one question for the given presentation mode ('staff' or 'tab')."""
    if mode == "tab":
        return generate_tab_question(allow_altered, rng=rng)
    if mode != "staff":
        raise ValueError(f"Unknown mode: {mode}")
    return generate_staff_question(allow_altered, rng=rng)
