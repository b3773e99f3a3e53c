from __future__ import annotations

"""Schema constants and Pydantic model for per-answer session records."""

from datetime import datetime, timezone
from typing import Literal, Optional

import pandas as pd
from pandas.api.types import CategoricalDtype
from pydantic import BaseModel, Field, field_validator

from ..core.modes import Mode

# --- Constants ---

MODES = {m.value for m in Mode}


def _cat_dtype(categories: set[str]) -> CategoricalDtype:
    return CategoricalDtype(categories=sorted(categories), ordered=False)


DTYPES = {
    "session_id": "string",
    # timezone-aware UTC timestamps
    "answered_at": pd.DatetimeTZDtype(tz="UTC"),
    "mode": _cat_dtype(MODES),
    "word": "string",
    "answer": "string",
    "correct": "boolean",
    "attempt": "UInt16",
    "reviewing": "boolean",
    "unit_index": "Int16",
}


# --- Pydantic models ---

class AnswerRow(BaseModel):
    session_id: str
    answered_at: datetime
    mode: Literal["review", "dictation", "listening"]
    word: str
    answer: str
    correct: bool
    attempt: int = Field(ge=1, le=65535)
    reviewing: bool = False
    unit_index: Optional[int] = Field(default=None, ge=0, le=32767)

    @field_validator("answered_at")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)
