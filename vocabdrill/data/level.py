from __future__ import annotations

"""Levels and units of vocabulary, with unit selection."""

from dataclasses import dataclass, field
from typing import List, Optional

from ..core.word_item import WordItem


@dataclass
class Unit:
    index: int
    name: str
    items: List[WordItem] = field(default_factory=list)

    @property
    def word_count(self) -> int:
        return len(self.items)


@dataclass
class Level:
    """A word list level. All units start selected."""

    id: str
    units: List[Unit] = field(default_factory=list)
    version: Optional[str] = None
    last_updated: Optional[str] = None
    selected_unit_indices: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.selected_unit_indices:
            self.select_all_units()

    def selected_items(self) -> List[WordItem]:
        """Items of the selected units, in selection order."""
        words: List[WordItem] = []
        for idx in self.selected_unit_indices:
            if 0 <= idx < len(self.units):
                words.extend(self.units[idx].items)
        return words

    def select_all_units(self) -> None:
        self.selected_unit_indices = [u.index for u in self.units]

    def deselect_all_units(self) -> None:
        self.selected_unit_indices = []

    def select_units(self, indices: List[int]) -> None:
        valid = {u.index for u in self.units}
        picked: List[int] = []
        for i in indices:
            if i not in valid:
                raise KeyError(f"Unknown unit index for level {self.id}: {i}")
            if i not in picked:
                picked.append(i)
        self.selected_unit_indices = picked

    def toggle_unit(self, index: int) -> bool:
        """Flip selection of one unit; returns the new state."""
        if index not in {u.index for u in self.units}:
            raise KeyError(f"Unknown unit index for level {self.id}: {index}")
        if index in self.selected_unit_indices:
            self.selected_unit_indices.remove(index)
            return False
        self.selected_unit_indices.append(index)
        return True

    def is_unit_selected(self, index: int) -> bool:
        return index in self.selected_unit_indices

    @property
    def all_units_selected(self) -> bool:
        return bool(self.units) and len(self.selected_unit_indices) == len(self.units)

    @property
    def word_count(self) -> int:
        return sum(u.word_count for u in self.units)
