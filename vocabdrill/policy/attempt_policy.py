from __future__ import annotations

"""Attempt policies: what happens after a graded answer in each mode."""

from dataclasses import dataclass
from typing import Literal, Protocol

from ..core.modes import Mode


@dataclass(frozen=True)
class Decision:
    action: Literal["next", "retry", "reveal"]
    attempts: int
    clear_input: bool = False
    respeak: bool = False


class AttemptPolicy(Protocol):
    def decide(self, is_correct: bool, attempts: int) -> Decision: ...


class UnlimitedRetry:
    """Correct → next; wrong → clear input, re-speak, try again. No counter."""

    def decide(self, is_correct: bool, attempts: int) -> Decision:
        if is_correct:
            return Decision(action="next", attempts=0)
        return Decision(action="retry", attempts=0, clear_input=True, respeak=True)


class LimitedAttempts:
    """Correct → next; wrong counts an attempt; the last one reveals the answer."""

    def __init__(self, max_attempts: int = 3) -> None:
        if int(max_attempts) < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = int(max_attempts)

    def decide(self, is_correct: bool, attempts: int) -> Decision:
        if is_correct:
            return Decision(action="next", attempts=0)
        used = min(attempts + 1, self.max_attempts)
        if used >= self.max_attempts:
            return Decision(action="reveal", attempts=used, clear_input=True)
        return Decision(action="retry", attempts=used, clear_input=True, respeak=True)


def policy_for_mode(mode: Mode, max_attempts: int) -> AttemptPolicy:
    if mode is Mode.REVIEW:
        return UnlimitedRetry()
    if mode in (Mode.DICTATION, Mode.LISTENING):
        return LimitedAttempts(max_attempts)
    raise ValueError(f"Unhandled mode: {mode!r}")
