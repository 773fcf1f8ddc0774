from __future__ import annotations

"""Configuration loading and validation.

Loads YAML configuration, applies defaults, and validates enumerations so
the CLI can rely on every key being present and sane.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


ALLOWED_MODES = {"staff", "tab"}
ALLOWED_LABEL_LANGS = {"en", "zh"}


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Unsupported enum values are replaced by their default with a warning.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    cfg.setdefault("drill", {})
    cfg.setdefault("stats", {})
    cfg.setdefault("storage", {})

    drill = cfg["drill"]
    stats = cfg["stats"]
    storage = cfg["storage"]

    drill.setdefault("mode", "staff")
    drill.setdefault("allow_altered", False)
    drill.setdefault("questions", 20)
    drill.setdefault("label_lang", "en")

    stats.setdefault("output_path", "./session_stats.json")
    stats.setdefault("show_summary", True)

    storage.setdefault("enabled", False)
    storage.setdefault("data_dir", "./storage/data")

    mode = drill.get("mode")
    if mode not in ALLOWED_MODES:
        print(f"WARNING: Unsupported mode '{mode}', using 'staff'.")
        drill["mode"] = "staff"

    lang = drill.get("label_lang")
    if lang not in ALLOWED_LABEL_LANGS:
        print(f"WARNING: Unsupported label_lang '{lang}', using 'en'.")
        drill["label_lang"] = "en"

    try:
        questions = int(drill.get("questions"))
    except (TypeError, ValueError):
        questions = 0
    if questions < 1:
        print(f"WARNING: Invalid questions '{drill.get('questions')}', using 20.")
        questions = 20
    drill["questions"] = questions

    drill["allow_altered"] = bool(drill.get("allow_altered"))
    storage["enabled"] = bool(storage.get("enabled"))

    return cfg
