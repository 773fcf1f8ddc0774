from __future__ import annotations

"""Minimal tracing helpers (Explain Mode).

Enable with the CLI `--explain` flag to emit terse, readable lines at
milestones: questions created, answers graded, generator fallbacks.
"""

import json
from typing import Any, Dict

_ENABLED = False


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    try:
        data = payload or {}
        print(f"[EXPLAIN] {event} :: {json.dumps(data, separators=(',', ':'), ensure_ascii=False)}")
    except (TypeError, ValueError):
        # payload not JSON-serialisable
        print(f"[EXPLAIN] {event}")
