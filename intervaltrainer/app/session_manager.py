from __future__ import annotations

"""Session Manager: owns the current question, its choices and the score.

Front-end agnostic. A UI drives it with next/answer/reveal/reset and reads
back plain values; nothing here prints or blocks.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..drills import MODES, Question, build_choice_set, generate_question
from ..stats.stats import new_session_stats, update_stats
from ..theory.intervals import Interval, interval_id, interval_text
from ..theory.notes import note_to_name
from .explain import trace as xtrace
from storage.schema import SessionIntervalRow
from storage.store import append_session_interval_stats, init_store, validate_records


@dataclass(frozen=True)
class SessionContext:
    mode: str = "staff"
    allow_altered: bool = False
    label_lang: str = "en"
    session_id: str = field(default_factory=lambda: str(uuid4()))
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class RuntimeState:
    current: Optional[Question] = None
    choices: List[Interval] = field(default_factory=list)
    locked: bool = False
    ended_at: Optional[datetime] = None


@dataclass(frozen=True)
class AnswerOutcome:
    correct: bool
    selected: Interval
    answer: Interval
    detail: str


class DrillSession:
    def __init__(self, ctx: Optional[SessionContext] = None, rng: Any = None) -> None:
        self.ctx = ctx or SessionContext()
        if self.ctx.mode not in MODES:
            raise ValueError(f"Unknown mode: {self.ctx.mode}")
        self.rng = rng
        self.state = RuntimeState()
        self.stats: Dict[str, Any] = new_session_stats()

    @property
    def total(self) -> int:
        return int(self.stats["total"])

    @property
    def correct(self) -> int:
        return int(self.stats["correct"])

    @property
    def accuracy(self) -> int:
        return round(self.correct / self.total * 100) if self.total else 0

    @property
    def current(self) -> Optional[Question]:
        return self.state.current

    @property
    def choices(self) -> List[Interval]:
        return list(self.state.choices)

    def label(self, iv: Interval) -> str:
        return interval_text(iv, self.ctx.label_lang)

    def note_names(self) -> str:
        q = self.state.current
        if q is None:
            return ""
        return f"{note_to_name(q.left)} → {note_to_name(q.right)}"

    def next_question(self) -> Question:
        q = generate_question(self.ctx.mode, self.ctx.allow_altered, rng=self.rng)
        self.state.current = q
        self.state.choices = build_choice_set(q.answer, self.ctx.allow_altered, rng=self.rng)
        self.state.locked = False
        xtrace(
            "question_created",
            {"mode": self.ctx.mode, "notes": self.note_names(), "truth": interval_id(q.answer)},
        )
        return q

    def answer(self, selected: Interval) -> Optional[AnswerOutcome]:
        """Grade a choice.

        Ignored while no question is open, after a correct answer, or when
        `selected` is not one of the offered choices.
        """
        q = self.state.current
        if q is None or self.state.locked:
            return None
        if selected not in self.state.choices:
            return None
        ok = interval_id(selected) == interval_id(q.answer)
        update_stats(self.stats, interval_id(q.answer), ok)
        if ok:
            self.state.locked = True
            detail = f"{self.note_names()} = {self.label(q.answer)}"
        else:
            detail = f"You chose {self.label(selected)}; the answer is {self.label(q.answer)} ({self.note_names()})"
        xtrace("graded", {"answer": interval_id(selected), "truth": interval_id(q.answer), "correct": ok})
        return AnswerOutcome(correct=ok, selected=selected, answer=q.answer, detail=detail)

    def answer_index(self, index: int) -> Optional[AnswerOutcome]:
        """Answer by 1-based position in the choice list."""
        if not 1 <= index <= len(self.state.choices):
            return None
        return self.answer(self.state.choices[index - 1])

    def reveal(self) -> str:
        q = self.state.current
        if q is None:
            return ""
        xtrace("revealed", {"truth": interval_id(q.answer)})
        return f"{self.note_names()} = {self.label(q.answer)}"

    def reset(self) -> Question:
        self.stats = new_session_stats()
        xtrace("reset")
        return self.next_question()

    def set_mode(self, mode: str) -> Question:
        if mode not in MODES:
            raise ValueError(f"Unknown mode: {mode}")
        self.ctx = replace(self.ctx, mode=mode)
        return self.next_question()

    def set_allow_altered(self, flag: bool) -> Question:
        self.ctx = replace(self.ctx, allow_altered=bool(flag))
        return self.next_question()

    def stop(self) -> None:
        self.state.ended_at = datetime.now(timezone.utc)

    def summary(self) -> Dict[str, Any]:
        return {
            "session_id": self.ctx.session_id,
            "mode": self.ctx.mode,
            "allow_altered": self.ctx.allow_altered,
            "total": self.total,
            "correct": self.correct,
            "accuracy": self.accuracy,
            "per_interval": self.stats.get("per_interval", {}),
            "started_at": self.ctx.started_at.isoformat(),
            "ended_at": self.state.ended_at.isoformat() if self.state.ended_at else None,
        }

    def persist(self, data_dir: Path) -> int:
        """Append this session's per-interval rows to the Parquet store.

        Returns the number of rows written.
        """
        rows: List[SessionIntervalRow] = []
        for key, bucket in (self.stats.get("per_interval") or {}).items():
            asked = int(bucket.get("asked", 0))
            if asked <= 0:
                continue
            rows.append(
                SessionIntervalRow(
                    session_id=self.ctx.session_id,
                    session_start=self.ctx.started_at,
                    mode=self.ctx.mode,
                    altered=self.ctx.allow_altered,
                    interval=key,
                    Q=asked,
                    C=int(bucket.get("correct", 0)),
                )
            )
        if not rows:
            return 0
        init_store(Path(data_dir))
        append_session_interval_stats(validate_records(rows), Path(data_dir))
        xtrace("persisted", {"rows": len(rows), "data_dir": str(data_dir)})
        return len(rows)
