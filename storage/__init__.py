from .schema import MODES, INTERVAL_IDS, DTYPES
from .store import (
    init_store,
    validate_records,
    append_session_interval_stats,
    load_all,
    query_trend,
)

__all__ = [
    "MODES",
    "INTERVAL_IDS",
    "DTYPES",
    "init_store",
    "validate_records",
    "append_session_interval_stats",
    "load_all",
    "query_trend",
]
