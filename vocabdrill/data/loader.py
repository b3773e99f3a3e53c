from __future__ import annotations

"""Word-list loader (JSON or YAML level documents).

Document shape::

    {"level": "H", "version": "1.0", "lastUpdated": "2024-03-01",
     "units": [{"unit": "Unit 1",
                "words": [{"word": ..., "syllables": ..., "pronunciation": ..., "meaning": ...}]}]}

``yaml.safe_load`` reads both formats.
"""

from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..app.explain import trace as xtrace
from ..core.word_item import PRONUNCIATION_UNAVAILABLE, WordItem
from .level import Level, Unit

LEVEL_SUFFIXES = (".json", ".yml", ".yaml")


class LevelLoadError(RuntimeError):
    """A level file is missing, unreadable or does not match the schema."""


# --- Pydantic models ---

class WordRecord(BaseModel):
    text: str = Field(default="", validation_alias=AliasChoices("word", "text"))
    syllables: str = ""
    pronunciation: str = PRONUNCIATION_UNAVAILABLE
    meaning: str = ""

    @field_validator("text", "syllables", "meaning", mode="before")
    @classmethod
    def _none_to_empty(cls, v):  # type: ignore[override]
        return "" if v is None else str(v)

    @field_validator("pronunciation", mode="before")
    @classmethod
    def _placeholder(cls, v):  # type: ignore[override]
        s = "" if v is None else str(v).strip()
        return s or PRONUNCIATION_UNAVAILABLE


class UnitRecord(BaseModel):
    unit: Optional[str] = None
    words: List[WordRecord] = Field(default_factory=list)


class LevelRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    level: Optional[str] = None
    version: Optional[str] = None
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")
    units: List[UnitRecord] = Field(default_factory=list)

    @field_validator("level", "version", "last_updated", mode="before")
    @classmethod
    def _stringify(cls, v):  # type: ignore[override]
        return None if v is None else str(v)


def build_level(record: LevelRecord, level_id: Optional[str] = None) -> Level:
    units: List[Unit] = []
    for idx, u in enumerate(record.units):
        items = [WordItem.from_record(w.model_dump(), idx) for w in u.words]
        units.append(Unit(index=idx, name=u.unit or f"Unit {idx + 1}", items=items))
    return Level(
        id=level_id or record.level or "",
        units=units,
        version=record.version,
        last_updated=record.last_updated,
    )


def load_level(path: Path | str, level_id: Optional[str] = None) -> Level:
    """Read and validate one level document."""
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
        record = LevelRecord.model_validate(raw or {})
    except (OSError, yaml.YAMLError, ValidationError) as e:
        raise LevelLoadError(f"Failed to load vocabulary data from {p}: {e}") from e
    if level_id and record.level and record.level != level_id:
        xtrace("level_id_mismatch", {"file": record.level, "requested": level_id})
    level = build_level(record, level_id)
    xtrace("level_loaded", {"level": level.id, "version": level.version, "words": level.word_count})
    return level


class LevelLibrary:
    """Loads ``level<ID>.<json|yml|yaml>`` files from a directory, with caching.

    A failed load of any level other than the fallback retries the fallback
    level once (when it is not loaded yet).
    """

    def __init__(self, levels_dir: Path | str, fallback_level: str = "H") -> None:
        self.levels_dir = Path(levels_dir)
        self.fallback_level = fallback_level
        self._levels: Dict[str, Level] = {}
        self.current_level_id: Optional[str] = None

    def path_for(self, level_id: str) -> Path:
        for suffix in LEVEL_SUFFIXES:
            p = self.levels_dir / f"level{level_id}{suffix}"
            if p.exists():
                return p
        return self.levels_dir / f"level{level_id}.json"

    def available(self) -> List[str]:
        ids = set()
        if self.levels_dir.is_dir():
            for p in self.levels_dir.iterdir():
                if p.suffix in LEVEL_SUFFIXES and p.stem.startswith("level") and len(p.stem) > 5:
                    ids.add(p.stem[5:])
        return sorted(ids)

    def is_loaded(self, level_id: str) -> bool:
        return level_id in self._levels

    def load(self, level_id: str) -> Level:
        if not level_id or not isinstance(level_id, str):
            raise ValueError(f"Invalid level ID: {level_id!r}")
        if self.is_loaded(level_id):
            xtrace("level_cached", {"level": level_id})
            self.current_level_id = level_id
            return self._levels[level_id]
        try:
            level = load_level(self.path_for(level_id), level_id)
        except LevelLoadError as e:
            if level_id != self.fallback_level and not self.is_loaded(self.fallback_level):
                xtrace("level_fallback", {"requested": level_id, "fallback": self.fallback_level, "error": str(e)})
                return self.load(self.fallback_level)
            raise
        self._levels[level_id] = level
        self.current_level_id = level_id
        return level

    def get(self, level_id: str) -> Optional[Level]:
        return self._levels.get(level_id)

    @property
    def current(self) -> Optional[Level]:
        return self._levels.get(self.current_level_id) if self.current_level_id else None

    def set_current(self, level_id: str) -> Optional[Level]:
        if self.is_loaded(level_id):
            self.current_level_id = level_id
            return self.current
        return None
