from __future__ import annotations

"""Summary metrics over the answer log."""

from typing import Any, Dict

import numpy as np
import pandas as pd


def _ratio(num: float, den: float) -> float:
    return float(num) / float(den) if den > 0 else 0.0


def compute_summary(df: pd.DataFrame) -> Dict[str, Any]:
    """Totals, accuracy overall and per mode, first-try rate and missed words.

    - accuracy: correct submissions / all submissions
    - first_try_rate: share of correct answers given on the first submission
    - missed: words with at least one incorrect submission, sorted case-insensitively
    """
    if df.empty:
        return {"total": 0, "correct": 0, "accuracy": 0.0, "first_try_rate": 0.0, "per_mode": {}, "missed": []}

    correct = df["correct"].fillna(False).to_numpy(dtype=bool)
    attempt = df["attempt"].astype("float32").to_numpy()
    total = int(correct.size)
    n_correct = int(np.count_nonzero(correct))
    first_try = int(np.count_nonzero(correct & (attempt == 1)))

    per_mode: Dict[str, Dict[str, Any]] = {}
    for mode, grp in df.groupby("mode", observed=True):
        c = grp["correct"].fillna(False).to_numpy(dtype=bool)
        per_mode[str(mode)] = {
            "answered": int(c.size),
            "correct": int(np.count_nonzero(c)),
            "accuracy": _ratio(np.count_nonzero(c), c.size),
        }

    missed = df.loc[~correct, "word"].astype(str).unique().tolist()
    return {
        "total": total,
        "correct": n_correct,
        "accuracy": _ratio(n_correct, total),
        "first_try_rate": _ratio(first_try, n_correct),
        "per_mode": per_mode,
        "missed": sorted(missed, key=str.casefold),
    }
