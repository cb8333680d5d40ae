"""
Seeded random secrets for experiments.

Lengths are drawn uniformly from [min_len, max_len]; letters uniformly from
the alphabet. The same seed always yields the same list.
"""

from __future__ import annotations

from typing import List

import numpy as np

from packages.oracle import ALPHABET, MAX_LENGTH


def random_secrets(count: int, *, min_len: int = 1, max_len: int = MAX_LENGTH,
                   seed: int | None = None, alphabet: str = ALPHABET) -> List[str]:
    if not 1 <= min_len <= max_len <= MAX_LENGTH:
        raise ValueError(f"need 1 <= min_len <= max_len <= {MAX_LENGTH}; got {min_len}..{max_len}")
    rng = np.random.default_rng(seed)
    letters = np.array(list(alphabet))
    out: List[str] = []
    for n in rng.integers(min_len, max_len + 1, size=count):
        out.append("".join(rng.choice(letters, size=int(n))))
    return out
