from __future__ import annotations

"""Ordered working set of words with shuffle/scramble transforms and a cursor."""

from typing import Any, Iterable, List, Optional, Tuple

from .word_item import WordItem
from ..util.randomness import fisher_yates, resolve_rng


class WordPool:
    """Active pool for one pass. ``cursor == len(items)`` means exhausted."""

    def __init__(self, *, shuffle_enabled: bool = False, scramble_enabled: bool = False, rng: Any | None = None) -> None:
        self._items: List[WordItem] = []
        self.cursor = 0
        self.shuffle_enabled = bool(shuffle_enabled)
        self.scramble_enabled = bool(scramble_enabled)
        self._rng = resolve_rng(rng)

    @property
    def items(self) -> Tuple[WordItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def is_exhausted(self) -> bool:
        return self.cursor >= len(self._items)

    @property
    def remaining(self) -> int:
        return len(self._items) - self.cursor

    def set_items(self, items: Iterable[WordItem]) -> None:
        self._items = list(items)
        if self.shuffle_enabled:
            fisher_yates(self._items, self._rng)
        if self.scramble_enabled:
            self._scramble_all()
        self.cursor = 0

    def current(self) -> Optional[WordItem]:
        if self.cursor >= len(self._items):
            return None
        return self._items[self.cursor]

    def advance(self) -> None:
        if self.cursor < len(self._items):
            self.cursor += 1

    def set_shuffle_enabled(self, flag: bool) -> None:
        # Reshuffles without touching the cursor, so the word just answered
        # may come round again.
        self.shuffle_enabled = bool(flag)
        if self.shuffle_enabled and self._items:
            fisher_yates(self._items, self._rng)

    def set_scramble_enabled(self, flag: bool) -> None:
        self.scramble_enabled = bool(flag)
        if self.scramble_enabled:
            self._scramble_all()
        else:
            for item in self._items:
                item.reset_scramble()

    def _scramble_all(self) -> None:
        for item in self._items:
            item.scramble(self._rng)
