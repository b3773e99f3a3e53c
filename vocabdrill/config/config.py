from __future__ import annotations

"""Configuration loading and validation for vocabdrill.

This module loads YAML configuration, applies defaults, and validates
that enumerations and numeric ranges are sane for the drill runner.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml

from ..core.modes import Mode, parse_mode

ALLOWED_MODES = {m.value for m in Mode}
ALLOWED_EXPORT_FORMATS = {"parquet", "ndjson"}


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def default_levels_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "resources" / "levels"


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        default_path = Path(__file__).with_name("defaults.yml")
        cfg = _load_yaml(default_path)
    return cfg


def _non_negative_int(section: Dict[str, Any], key: str, default: int, minimum: int = 0) -> None:
    try:
        value = int(section.get(key, default))
    except (TypeError, ValueError):
        print(f"WARNING: Invalid {key} '{section.get(key)}', using {default}.")
        value = default
    if value < minimum:
        print(f"WARNING: {key} must be >= {minimum}, using {default}.")
        value = default
    section[key] = value


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    # Shallow defaults for missing sections
    cfg.setdefault("session", {})
    cfg.setdefault("words", {})
    cfg.setdefault("speech", {})
    cfg.setdefault("results", {})

    session = cfg["session"]
    words = cfg["words"]
    speech = cfg["speech"]
    results = cfg["results"]

    session.setdefault("mode", "review")
    session.setdefault("max_attempts", 3)
    session.setdefault("retry_delay_ms", 1000)
    session.setdefault("next_delay_ms", 1000)
    session.setdefault("shuffle", False)
    session.setdefault("scramble", False)

    words.setdefault("levels_dir", None)
    words.setdefault("default_level", "H")
    words.setdefault("fallback_level", "H")

    speech.setdefault("enabled", True)

    results.setdefault("export_path", None)
    results.setdefault("export_format", "parquet")

    # Enum validations
    mode = parse_mode(session.get("mode"))
    if mode is None:
        print(f"WARNING: Unsupported mode '{session.get('mode')}', using 'review'.")
        mode = Mode.REVIEW
    session["mode"] = mode.value

    fmt = str(results.get("export_format") or "").lower()
    if fmt not in ALLOWED_EXPORT_FORMATS:
        print(f"WARNING: Unsupported export_format '{results.get('export_format')}', using 'parquet'.")
        fmt = "parquet"
    results["export_format"] = fmt

    _non_negative_int(session, "max_attempts", 3, minimum=1)
    _non_negative_int(session, "retry_delay_ms", 1000)
    _non_negative_int(session, "next_delay_ms", 1000)
    session["shuffle"] = bool(session.get("shuffle"))
    session["scramble"] = bool(session.get("scramble"))
    speech["enabled"] = bool(speech.get("enabled"))

    if session["scramble"] and session["mode"] != Mode.REVIEW.value:
        print("WARNING: scramble only applies in review mode, disabling it.")
        session["scramble"] = False

    # Level ids are upper-case letters in the word lists
    words["default_level"] = str(words.get("default_level") or "H").strip().upper()
    words["fallback_level"] = str(words.get("fallback_level") or "H").strip().upper()
    if not words.get("levels_dir"):
        words["levels_dir"] = str(default_levels_dir())

    return cfg
