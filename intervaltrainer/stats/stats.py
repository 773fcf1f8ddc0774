from __future__ import annotations

"""Basic session stats: JSON-based aggregation and formatting."""

import json
from pathlib import Path
from typing import Dict

from ..theory.intervals import interval_sort_key, interval_text, parse_interval


def new_session_stats() -> Dict:
    """Create a new, empty stats structure."""
    return {"total": 0, "correct": 0, "per_interval": {}}


def update_stats(stats: Dict, interval: str, correct: bool) -> None:
    """Update stats for a single graded answer, keyed by the correct interval id."""
    stats["total"] = int(stats.get("total", 0)) + 1
    if correct:
        stats["correct"] = int(stats.get("correct", 0)) + 1
    per = stats.setdefault("per_interval", {})
    bucket = per.setdefault(interval, {"asked": 0, "correct": 0})
    bucket["asked"] += 1
    bucket["correct"] += 1 if correct else 0


def write_stats(stats: Dict, path: str) -> None:
    """Write stats as JSON to path."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(stats, f, indent=2, ensure_ascii=False)


def format_summary(stats: Dict, lang: str = "en") -> str:
    """Return a human-readable summary of stats."""
    total = int(stats.get("total", 0))
    correct = int(stats.get("correct", 0))
    lines = [f"Total: {correct}/{total} correct"]
    per = stats.get("per_interval", {})
    for key in sorted(per.keys(), key=lambda k: interval_sort_key(parse_interval(k))):
        asked = per[key].get("asked", 0)
        corr = per[key].get("correct", 0)
        lines.append(f"{interval_text(parse_interval(key), lang)}: {corr}/{asked}")
    return "\n".join(lines)
