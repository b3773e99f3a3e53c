from __future__ import annotations

"""Randomness helpers for shuffling, scrambling and seeding."""

import os
import random
from typing import Any, List, MutableSequence

import numpy as np


def seed_if_needed() -> None:
    """Seed RNGs if SEED env var is set."""
    seed = os.environ.get("SEED")
    if seed is not None:
        try:
            s = int(seed)
        except ValueError:
            return
        random.seed(s)
        np.random.seed(s)


def resolve_rng(rng: Any | None) -> Any:
    """Return ``rng`` or the module-level generator (honours ``seed_if_needed``)."""
    return rng if rng is not None else random


def fisher_yates(seq: MutableSequence[Any], rng: Any | None = None) -> None:
    """Shuffle ``seq`` in place with a uniform random permutation."""
    r = resolve_rng(rng)
    for i in range(len(seq) - 1, 0, -1):
        j = r.randrange(i + 1)
        seq[i], seq[j] = seq[j], seq[i]


def permute_token(token: str, rng: Any | None = None) -> str:
    """Return a uniformly random permutation of the characters of ``token``."""
    if len(token) < 2:
        return token
    chars: List[str] = list(token)
    fisher_yates(chars, rng)
    return "".join(chars)
