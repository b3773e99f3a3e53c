from __future__ import annotations

"""Holding set for words answered incorrectly during a pass."""

from typing import List

from .word_item import WordItem


class ReviewQueue:
    """Insertion-ordered, unique by case-folded text."""

    def __init__(self) -> None:
        self._items: List[WordItem] = []

    @staticmethod
    def _key(text: str) -> str:
        return (text or "").casefold()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, text: object) -> bool:
        if not isinstance(text, str):
            return False
        key = self._key(text)
        return any(self._key(w.text) == key for w in self._items)

    def size(self) -> int:
        return len(self._items)

    def add(self, item: WordItem) -> bool:
        if item.text in self:
            return False
        self._items.append(item)
        return True

    def remove(self, text: str) -> bool:
        key = self._key(text)
        for i, w in enumerate(self._items):
            if self._key(w.text) == key:
                del self._items[i]
                return True
        return False

    def drain_to_pool(self) -> List[WordItem]:
        """Ordered copy of the contents; the queue itself is left untouched."""
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()
