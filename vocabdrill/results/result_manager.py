from __future__ import annotations

"""Results Manager.

Keeps an in-memory log of graded submissions for one practice session and
exposes it as a typed pandas DataFrame. Export writes a one-off report
(NDJSON or Parquet); nothing is read back.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

import pandas as pd

from .metrics import compute_summary
from .schema import DTYPES, AnswerRow

EXPORT_FORMATS = {"ndjson", "parquet"}


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in DTYPES.items()})


class ResultManager:
    def __init__(self, session_id: Optional[str] = None) -> None:
        self.session_id = session_id or str(uuid4())
        self._rows: List[AnswerRow] = []

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def rows(self) -> List[AnswerRow]:
        return list(self._rows)

    def record(
        self,
        *,
        word: str,
        mode: str,
        answer: str,
        correct: bool,
        attempt: int,
        reviewing: bool = False,
        unit_index: Optional[int] = None,
    ) -> AnswerRow:
        row = AnswerRow(
            session_id=self.session_id,
            answered_at=datetime.now(timezone.utc),
            mode=mode,
            word=word,
            answer=answer,
            correct=correct,
            attempt=attempt,
            reviewing=reviewing,
            unit_index=unit_index,
        )
        self._rows.append(row)
        return row

    def clear(self) -> None:
        self._rows.clear()

    def to_frame(self) -> pd.DataFrame:
        """Return the log as a DataFrame with categorical and nullable dtypes."""
        if not self._rows:
            return _empty_df()
        df = pd.DataFrame([r.model_dump() for r in self._rows])
        for col, dt in DTYPES.items():
            df[col] = df[col].astype(dt)
        return df[list(DTYPES.keys())]

    def summarize(self) -> Dict[str, Any]:
        summary = compute_summary(self.to_frame())
        summary["session_id"] = self.session_id
        return summary

    def export(self, out_path: Path | str, fmt: Optional[str] = None) -> Path:
        """Write the log to ``out_path``; format from ``fmt`` or the file suffix."""
        p = Path(out_path)
        kind = (fmt or ("parquet" if p.suffix.lower() == ".parquet" else "ndjson")).lower()
        if kind not in EXPORT_FORMATS:
            raise ValueError(f"Unknown export format: {kind}")
        p.parent.mkdir(parents=True, exist_ok=True)
        df = self.to_frame()
        if kind == "parquet":
            df.to_parquet(p, engine="pyarrow", compression="zstd", index=False)
        else:
            df.to_json(p, orient="records", lines=True, date_format="iso", force_ascii=False)
        return p
