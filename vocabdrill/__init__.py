"""vocabdrill package initialization.

Re-exports the practice-session core so applications can simply
``from vocabdrill import SessionController, WordItem``.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .core.modes import Mode, parse_mode
from .core.word_item import PRONUNCIATION_UNAVAILABLE, WordItem
from .core.word_pool import WordPool
from .core.review_queue import ReviewQueue
from .app.session_controller import (
    AnswerOutcome,
    DelayedAction,
    DelayedKind,
    ProgressSnapshot,
    SessionController,
    SessionState,
    Signal,
)

__all__ = [
    "__version__",
    "Mode",
    "parse_mode",
    "PRONUNCIATION_UNAVAILABLE",
    "WordItem",
    "WordPool",
    "ReviewQueue",
    "AnswerOutcome",
    "DelayedAction",
    "DelayedKind",
    "ProgressSnapshot",
    "SessionController",
    "SessionState",
    "Signal",
]
