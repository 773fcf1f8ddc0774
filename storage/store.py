from __future__ import annotations

"""Parquet-backed store for session-interval stats using pandas + pyarrow.

Unit of data: (session × interval) summary rows.
"""

from pathlib import Path

import pandas as pd

from .schema import DTYPES, MODES, SessionIntervalRow


DATA_FILE = "session_interval_stats.parquet"


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in DTYPES.items()})


def init_store(data_dir: Path) -> None:
    """Ensure the data directory and an empty stats table with the correct schema exist."""
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    stats_path = data_dir / DATA_FILE
    if not stats_path.exists():
        _empty_df().to_parquet(stats_path, engine="pyarrow", compression="zstd", index=False)


def validate_records(records: list[SessionIntervalRow]) -> pd.DataFrame:
    """Validate a list of SessionIntervalRow and return a DataFrame with proper dtypes.

    - Enforces modes, interval ids and counts via Pydantic.
    - Returns a pandas DataFrame with categorical and unsigned integer dtypes.
    """
    if not isinstance(records, list):
        raise TypeError("records must be a list[SessionIntervalRow]")
    rows = [r if isinstance(r, SessionIntervalRow) else SessionIntervalRow.model_validate(r) for r in records]
    df = pd.DataFrame([r.model_dump() for r in rows])
    return _fix_dtypes(df)


def _fix_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    for col, dt in DTYPES.items():
        if col not in df.columns:
            df[col] = pd.NA
        df[col] = df[col].astype(dt)
    return df[list(DTYPES.keys())]


def append_session_interval_stats(df_new: pd.DataFrame, data_path: Path) -> None:
    """Append rows to the session_interval_stats table.

    - Reads existing, concatenates, fixes dtypes, removes exact duplicates, and writes back.
    - Uses pyarrow with zstd compression.
    """
    f = Path(data_path) / DATA_FILE
    if f.exists():
        df_old = _fix_dtypes(pd.read_parquet(f, engine="pyarrow"))
    else:
        df_old = _empty_df()
    df_new = _fix_dtypes(df_new.copy())
    combined = pd.concat([df_old, df_new], ignore_index=True)
    combined = _fix_dtypes(combined)
    combined = combined.drop_duplicates()  # exact duplicate rows only
    combined.to_parquet(f, engine="pyarrow", compression="zstd", index=False)


def load_all(data_path: Path) -> pd.DataFrame:
    """Load the full session_interval_stats table with an `acc` = C / Q column."""
    f = Path(data_path) / DATA_FILE
    if not f.exists():
        return _empty_df().assign(acc=pd.Series(dtype="float32"))
    df = _fix_dtypes(pd.read_parquet(f, engine="pyarrow"))
    q = df["Q"].astype("float32").where(df["Q"] > 0, other=1.0)
    df["acc"] = (df["C"].astype("float32") / q).astype("float32")
    return df


def query_trend(df: pd.DataFrame, *, mode: str, interval: str) -> pd.DataFrame:
    """Filter rows for a given (mode, interval) and sort by session_start."""
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode}")
    dff = df[(df["mode"].astype("string") == mode) & (df["interval"].astype("string") == interval)]
    return dff.sort_values("session_start").reset_index(drop=True)

