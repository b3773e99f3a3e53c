from __future__ import annotations

"""Human-readable progress and summary strings built from session queries."""

from typing import Any, Dict, Iterable, List

REVIEW_STARTED_MESSAGE = "Review Mode: Practicing {count} words you got wrong. Master them all!"
ALL_COMPLETED_MESSAGE = "Congratulations! You have completed all words!"
INCORRECT_MASTERED_MESSAGE = "Great job! You have mastered all the words you previously got wrong!"


def format_units(selected_units: Iterable[int]) -> str:
    units = list(selected_units)
    if not units:
        return "No units selected"
    return "Units: " + ", ".join(str(i + 1) for i in units)


def format_progress(snapshot: Any, level_id: str | None = None, selected_units: Iterable[int] | None = None) -> str:
    """Render a progress line from a ``ProgressSnapshot``.

    Normal pass: ``Progress: <cursor+1> / <pool size>`` plus the incorrect-word
    count when non-zero. Review pass: remaining vs. queued incorrect words.
    """
    parts: List[str] = []
    if level_id:
        parts.append(f"Level: {level_id}")
    if selected_units is not None:
        parts.append(format_units(selected_units))
    parts.append(f"Mode: {snapshot.mode.display_name}")

    if snapshot.reviewing:
        queued = snapshot.review_size
        remaining = max(snapshot.pool_size - snapshot.cursor, 0)
        parts.append(f"Reviewing incorrect words: {remaining} / {queued}")
        return " | ".join(parts)

    shown = min(snapshot.cursor + 1, snapshot.pool_size)
    parts.append(f"Progress: {shown} / {snapshot.pool_size}")
    if snapshot.review_size > 0:
        parts.append(f"Incorrect words: {snapshot.review_size}")
    return " | ".join(parts)


def format_attempts(attempts: int, max_attempts: int) -> str:
    """One mark per allowed attempt: ❌ used, ⭕ left."""
    used = max(0, min(attempts, max_attempts))
    return " ".join(["❌"] * used + ["⭕"] * (max_attempts - used))


def format_summary(summary: Dict[str, Any]) -> str:
    """Return a human-readable summary of a ResultManager summary dict."""
    total = int(summary.get("total", 0))
    correct = int(summary.get("correct", 0))
    lines = [f"Total: {correct}/{total} correct ({summary.get('accuracy', 0.0):.0%})"]
    for mode, st in sorted((summary.get("per_mode") or {}).items()):
        lines.append(f"{mode.capitalize()}: {st.get('correct', 0)}/{st.get('answered', 0)}")
    missed = summary.get("missed") or []
    if missed:
        lines.append("Missed: " + ", ".join(missed))
    return "\n".join(lines)
