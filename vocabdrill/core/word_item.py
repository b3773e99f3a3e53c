from __future__ import annotations

"""Vocabulary entry with lazy scrambling and answer checking."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .modes import Mode
from ..util.randomness import permute_token

PRONUNCIATION_UNAVAILABLE = "No IPA available"


def normalize_answer(value: Optional[str]) -> str:
    """Trim surrounding whitespace and casefold."""
    return (value or "").strip().casefold()


def scramble_text(text: str, rng: Any | None = None) -> str:
    """Permute the letters of each space-delimited token, rejoined by single spaces."""
    tokens = text.split()
    if not tokens:
        return text
    return " ".join(permute_token(t, rng) for t in tokens)


@dataclass
class WordItem:
    """A single vocabulary entry.

    Only ``scrambled_text`` changes after construction.
    """

    text: str = ""
    syllables: str = ""
    pronunciation: str = PRONUNCIATION_UNAVAILABLE
    meaning: str = ""
    unit_index: Optional[int] = None
    scrambled_text: Optional[str] = field(default=None, compare=False)

    @classmethod
    def from_record(cls, record: Dict[str, Any], unit_index: Optional[int] = None) -> "WordItem":
        text = record.get("word", record.get("text"))
        pron = str(record.get("pronunciation") or "").strip()
        return cls(
            text=str(text or ""),
            syllables=str(record.get("syllables") or ""),
            pronunciation=pron or PRONUNCIATION_UNAVAILABLE,
            meaning=str(record.get("meaning") or ""),
            unit_index=unit_index,
        )

    @property
    def has_pronunciation(self) -> bool:
        p = (self.pronunciation or "").strip()
        return bool(p) and p != PRONUNCIATION_UNAVAILABLE

    def scramble(self, rng: Any | None = None) -> str:
        self.scrambled_text = scramble_text(self.text, rng)
        return self.scrambled_text

    def reset_scramble(self) -> None:
        self.scrambled_text = None

    def display_text(self, scramble_enabled: bool) -> str:
        if scramble_enabled and self.scrambled_text:
            return self.scrambled_text
        return self.text

    def expected_answer(self, mode: Mode) -> str:
        if mode is Mode.LISTENING:
            return self.meaning
        if mode in (Mode.REVIEW, Mode.DICTATION):
            return self.text
        raise ValueError(f"Unhandled mode: {mode!r}")

    def check_answer(self, answer: Optional[str], mode: Mode) -> bool:
        return normalize_answer(answer) == normalize_answer(self.expected_answer(mode))
