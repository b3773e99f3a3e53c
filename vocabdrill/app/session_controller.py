from __future__ import annotations

"""Session Controller: the practice-session state machine.

Owns the mode, the attempt counter, the active WordPool and the ReviewQueue,
and moves between three states:

- NORMAL: working through the pool built from the selected units
- REVIEWING: working through a copy of the review queue as the pool
- EXHAUSTED: nothing left in either; terminal until new items are set

Renderers call ``current()`` to draw, ``submit()`` after a check action and
``next_word()`` after a reveal. Timers are never started here: outcomes carry
a ``DelayedAction`` the caller schedules.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Literal, Optional

from ..core.modes import Mode, parse_mode
from ..core.review_queue import ReviewQueue
from ..core.word_item import WordItem
from ..core.word_pool import WordPool
from ..policy.attempt_policy import AttemptPolicy, policy_for_mode
from .events import EventBus
from .explain import trace as xtrace

MAX_ATTEMPTS = 3


class SessionState(Enum):
    NORMAL = "normal"
    REVIEWING = "reviewing"
    EXHAUSTED = "exhausted"


class Signal(str, Enum):
    REVIEW_STARTED = "review_started"
    ALL_COMPLETED = "all_words_completed"
    INCORRECT_MASTERED = "incorrect_words_mastered"


class DelayedKind(str, Enum):
    RESPEAK = "respeak"
    PRESENT_NEXT = "present_next"


@dataclass(frozen=True)
class DelayedAction:
    kind: DelayedKind
    delay_ms: int
    text: str = ""


@dataclass(frozen=True)
class AnswerOutcome:
    item: WordItem
    correct: bool
    action: Literal["next", "retry", "reveal"]
    attempts: int
    clear_input: bool = False
    revealed: Optional[str] = None
    pending: Optional[DelayedAction] = None
    signal: Optional[Signal] = None


@dataclass(frozen=True)
class ProgressSnapshot:
    mode: Mode
    state: SessionState
    total_correct: int
    pool_size: int
    cursor: int
    review_size: int
    reviewing: bool
    attempt_count: int
    max_attempts: int


class SessionController:
    def __init__(
        self,
        *,
        mode: Mode | str = Mode.REVIEW,
        max_attempts: int = MAX_ATTEMPTS,
        retry_delay_ms: int = 1000,
        next_delay_ms: int = 1000,
        shuffle: bool = False,
        scramble: bool = False,
        events: Optional[EventBus] = None,
        results_sink: Any | None = None,
        rng: Any | None = None,
    ) -> None:
        parsed = parse_mode(mode)
        if parsed is None:
            raise ValueError(f"Unknown mode: {mode!r}")
        if int(max_attempts) < 1:
            raise ValueError("max_attempts must be >= 1")
        self._mode = parsed
        self.max_attempts = int(max_attempts)
        self._policy: AttemptPolicy = policy_for_mode(parsed, self.max_attempts)
        self.retry_delay_ms = int(retry_delay_ms)
        self.next_delay_ms = int(next_delay_ms)
        self.pool = WordPool(shuffle_enabled=shuffle, scramble_enabled=scramble and parsed is Mode.REVIEW, rng=rng)
        self.review_queue = ReviewQueue()
        self.events = events or EventBus()
        self.results = results_sink

        self.attempt_count = 0
        self.total_correct = 0
        self.is_reviewing_incorrect = False
        self.input_locked = False
        self.revealed_answer: Optional[str] = None
        self.last_signal: Optional[Signal] = None
        self._submissions = 0
        self._source: List[WordItem] = []

    # ---- Queries ----
    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def state(self) -> SessionState:
        if self.pool.current() is None:
            return SessionState.EXHAUSTED
        return SessionState.REVIEWING if self.is_reviewing_incorrect else SessionState.NORMAL

    @property
    def pool_size(self) -> int:
        return len(self.pool)

    @property
    def cursor(self) -> int:
        return self.pool.cursor

    @property
    def review_size(self) -> int:
        return self.review_queue.size()

    @property
    def shuffle_enabled(self) -> bool:
        return self.pool.shuffle_enabled

    @property
    def scramble_enabled(self) -> bool:
        return self.pool.scramble_enabled

    @property
    def input_enabled(self) -> bool:
        """False when exhausted, after a reveal, or in Dictation without IPA."""
        item = self.pool.current()
        if item is None or self.input_locked:
            return False
        if self._mode is Mode.DICTATION and not item.has_pronunciation:
            return False
        return True

    @property
    def source_items(self) -> List[WordItem]:
        return list(self._source)

    def current(self) -> Optional[WordItem]:
        return self.pool.current()

    def progress(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            mode=self._mode,
            state=self.state,
            total_correct=self.total_correct,
            pool_size=self.pool_size,
            cursor=self.cursor,
            review_size=self.review_size,
            reviewing=self.is_reviewing_incorrect,
            attempt_count=self.attempt_count,
            max_attempts=self.max_attempts,
        )

    # ---- Commands ----
    def set_items(self, items: Iterable[WordItem]) -> Optional[Signal]:
        """Unit or level change: rebuild the pool. Accumulated mistakes are kept."""
        self._source = list(items)
        self.is_reviewing_incorrect = False
        self.pool.set_items(self._source)
        self._reset_presentation()
        xtrace("items_set", {"count": len(self._source), "review_queue": self.review_size})
        return self._settle()

    def set_mode(self, mode: Mode | str) -> bool:
        parsed = parse_mode(mode)
        if parsed is None:
            xtrace("mode_rejected", {"mode": str(mode), "kept": self._mode.value})
            return False
        policy = policy_for_mode(parsed, self.max_attempts)
        self._mode = parsed
        self._policy = policy
        self.total_correct = 0
        self.is_reviewing_incorrect = False
        self.pool.set_items(self._source)
        if parsed is not Mode.REVIEW and self.pool.scramble_enabled:
            self.pool.set_scramble_enabled(False)
        self._reset_presentation()
        xtrace("mode_set", {"mode": parsed.value, "count": len(self._source), "review_queue": self.review_size})
        self._settle()
        return True

    def set_shuffle_enabled(self, flag: bool) -> None:
        self.pool.set_shuffle_enabled(flag)
        xtrace("shuffle_set", {"enabled": bool(flag), "cursor": self.cursor})

    def set_scramble_enabled(self, flag: bool) -> bool:
        if flag and self._mode is not Mode.REVIEW:
            return False
        self.pool.set_scramble_enabled(flag)
        return True

    def submit(self, answer: Optional[str]) -> Optional[AnswerOutcome]:
        """Grade ``answer`` against the current item and apply the mode policy.

        Returns None when there is nothing to grade (exhausted, locked after a
        reveal, or Dictation on an item without pronunciation).
        """
        item = self.pool.current()
        if item is None or not self.input_enabled:
            return None

        reviewing = self.is_reviewing_incorrect
        is_correct = item.check_answer(answer, self._mode)
        self._submissions += 1
        decision = self._policy.decide(is_correct, self.attempt_count)
        self._record(item, answer, is_correct, reviewing)
        xtrace(
            "answer_checked",
            {"word": item.text, "mode": self._mode.value, "correct": is_correct, "action": decision.action, "attempts": decision.attempts},
        )

        if is_correct:
            self.pool.advance()
            self.total_correct += 1
            if reviewing:
                self.review_queue.remove(item.text)
            self._reset_presentation()
            signal = self._settle()
            return AnswerOutcome(
                item=item,
                correct=True,
                action="next",
                attempts=0,
                pending=DelayedAction(DelayedKind.PRESENT_NEXT, self.next_delay_ms),
                signal=signal,
            )

        if not reviewing:
            self.review_queue.add(item)
        self.attempt_count = decision.attempts

        if decision.action == "reveal":
            self.input_locked = True
            self.revealed_answer = item.expected_answer(self._mode)
            return AnswerOutcome(
                item=item,
                correct=False,
                action="reveal",
                attempts=self.attempt_count,
                clear_input=decision.clear_input,
                revealed=self.revealed_answer,
            )

        pending = DelayedAction(DelayedKind.RESPEAK, self.retry_delay_ms, item.text) if decision.respeak else None
        return AnswerOutcome(
            item=item,
            correct=False,
            action="retry",
            attempts=self.attempt_count,
            clear_input=decision.clear_input,
            pending=pending,
        )

    def next_word(self) -> Optional[WordItem]:
        """Explicit "next": move on without counting a correct answer."""
        if self.pool.current() is None:
            return None
        self.pool.advance()
        self._reset_presentation()
        self._settle()
        return self.pool.current()

    # ---- Internals ----
    def _reset_presentation(self) -> None:
        self.attempt_count = 0
        self.input_locked = False
        self.revealed_answer = None
        self._submissions = 0

    def _settle(self) -> Optional[Signal]:
        """Run the exhaustion transitions; returns the signal emitted, if any."""
        self.last_signal = None
        if not self.pool.is_exhausted:
            return None

        xtrace("pool_exhausted", {"reviewing": self.is_reviewing_incorrect, "review_queue": self.review_size})
        if self.review_queue.size() > 0:
            # Also covers a review pass that ended with revealed words still queued
            self.is_reviewing_incorrect = True
            self.pool.set_items(self.review_queue.drain_to_pool())
            self._reset_presentation()
            return self._signal(Signal.REVIEW_STARTED, {"count": self.review_size})

        if self.is_reviewing_incorrect:
            self.is_reviewing_incorrect = False
            self.review_queue.clear()
            return self._signal(Signal.INCORRECT_MASTERED, {"total_correct": self.total_correct})

        return self._signal(Signal.ALL_COMPLETED, {"total_correct": self.total_correct})

    def _signal(self, signal: Signal, payload: Dict[str, Any]) -> Signal:
        self.last_signal = signal
        xtrace(signal.value, payload)
        self.events.emit(signal.value, payload)
        return signal

    def _record(self, item: WordItem, answer: Optional[str], correct: bool, reviewing: bool) -> None:
        if self.results is None:
            return
        self.results.record(
            word=item.text,
            mode=self._mode.value,
            answer=answer or "",
            correct=correct,
            attempt=self._submissions,
            reviewing=reviewing,
            unit_index=item.unit_index,
        )


def make_session_from_config(
    cfg: Dict[str, Any],
    *,
    events: Optional[EventBus] = None,
    results_sink: Any | None = None,
    rng: Any | None = None,
) -> SessionController:
    """Build a controller from a validated config (see ``config.validate_config``)."""
    session = cfg.get("session", {})
    return SessionController(
        mode=session.get("mode", Mode.REVIEW.value),
        max_attempts=int(session.get("max_attempts", MAX_ATTEMPTS)),
        retry_delay_ms=int(session.get("retry_delay_ms", 1000)),
        next_delay_ms=int(session.get("next_delay_ms", 1000)),
        shuffle=bool(session.get("shuffle", False)),
        scramble=bool(session.get("scramble", False)),
        events=events,
        results_sink=results_sink,
        rng=rng,
    )
