from __future__ import annotations

"""Schema constants and Pydantic models for Parquet-backed session stats."""

from datetime import datetime, timezone
from typing import Literal

import pandas as pd
from pandas.api.types import CategoricalDtype
from pydantic import BaseModel, Field, field_validator, model_validator

from intervaltrainer.theory.intervals import Interval, interval_id, parse_interval

# --- Constants ---

MODES = {"staff", "tab"}
# Every interval a question can be labelled with; d1 is never a valid answer.
INTERVAL_IDS = {
    interval_id(Interval(n, q))
    for n in range(1, 9)
    for q in (("d", "P", "A") if n in (1, 4, 5, 8) else ("d", "m", "M", "A"))
} - {"d1"}

def _cat_dtype(categories: set[str]) -> CategoricalDtype:
    return CategoricalDtype(categories=sorted(categories), ordered=False)


DTYPES = {
    "session_id": "string",
    # timezone-aware UTC timestamps
    "session_start": pd.DatetimeTZDtype(tz="UTC"),
    "mode": _cat_dtype(MODES),
    "altered": "boolean",
    "interval": _cat_dtype(INTERVAL_IDS),
    "Q": "UInt16",
    "C": "UInt16",
}


def _to_utc(v: datetime) -> datetime:
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


# --- Pydantic models ---

class SessionIntervalRow(BaseModel):
    session_id: str
    session_start: datetime
    mode: Literal["staff", "tab"]
    altered: bool = False
    interval: str
    Q: int = Field(ge=1, le=65535)
    C: int = Field(ge=0, le=65535)

    @field_validator("interval")
    @classmethod
    def _known_interval(cls, v: str) -> str:
        iv = parse_interval(v)
        if interval_id(iv) not in INTERVAL_IDS:
            raise ValueError(f"interval {v!r} is not a valid drill answer")
        return interval_id(iv)

    @field_validator("session_start")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        return _to_utc(v)

    @model_validator(mode="after")
    def _c_le_q(self) -> "SessionIntervalRow":
        if self.C > self.Q:
            raise ValueError("C must be <= Q")
        return self

