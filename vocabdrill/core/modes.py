from __future__ import annotations

"""Practice modes."""

from enum import Enum
from typing import Optional


class Mode(str, Enum):
    REVIEW = "review"
    DICTATION = "dictation"
    LISTENING = "listening"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def counts_attempts(self) -> bool:
        """Dictation and Listening cap incorrect attempts; Review does not."""
        if self is Mode.REVIEW:
            return False
        if self in (Mode.DICTATION, Mode.LISTENING):
            return True
        raise ValueError(f"Unhandled mode: {self!r}")


def parse_mode(value: object) -> Optional[Mode]:
    """Return the Mode for ``value`` (Mode or name, any case) or None."""
    if isinstance(value, Mode):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Mode(value.strip().lower())
    except ValueError:
        return None
