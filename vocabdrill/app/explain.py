from __future__ import annotations

"""Minimal tracing helpers (Explain Mode).

Enable with the ``--explain`` CLI flag to get terse, readable lines at
session milestones: items set, answers checked, review passes, exhaustion.
"""

import json
from typing import Any, Dict

_ENABLED = False


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def enabled() -> bool:
    return _ENABLED


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    try:
        data = (payload or {})
        # one line JSON, keep non-ASCII words readable
        print(f"[EXPLAIN] {event} :: {json.dumps(data, separators=(',',':'), ensure_ascii=False, default=str)}")
    except (TypeError, ValueError):
        print(f"[EXPLAIN] {event}")
