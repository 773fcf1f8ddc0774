from __future__ import annotations

"""Randomness helpers for seeding."""

import os
import random
from typing import Optional


def seed_if_needed() -> Optional[int]:
    """Seed the global RNG if the SEED env var holds an integer."""
    seed = os.environ.get("SEED")
    if seed is None:
        return None
    try:
        s = int(seed)
    except ValueError:
        return None
    random.seed(s)
    return s


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Independent RNG; unseeded when seed is None."""
    return random.Random(seed)
