"""
Length discovery and per-letter frequency measurement.

Both rely on the same fact: a probe made of one repeated letter matches
exactly at the positions where the secret holds that letter, so its match
count IS that letter's total count, wherever the occurrences are.

  detect_length:        probe "B", "BB", "BBB", ... until the oracle stops
                        answering WRONG_LENGTH. That k is N and the answer
                        is count('B').
  measure_frequencies:  one N-long probe per remaining letter.
"""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Tuple

from packages.oracle import ALPHABET, MAX_LENGTH, INVALID_ALPHABET, WRONG_LENGTH
from .errors import CountSumMismatch, LengthDiscoveryError, OracleInvalidAlphabet

Evaluate = Callable[[str], int]


def detect_length(evaluate: Evaluate, letter: str = ALPHABET[0],
                  max_length: int = MAX_LENGTH) -> Tuple[int, int]:
    """
    Return (N, count of `letter`). Probes lengths 1..max_length only.
    """
    for k in range(1, max_length + 1):
        r = evaluate(letter * k)
        if r == WRONG_LENGTH:
            continue
        if r == INVALID_ALPHABET:
            raise OracleInvalidAlphabet(f"oracle rejected letter '{letter}'")
        return k, r
    raise LengthDiscoveryError(f"no secret length in 1..{max_length} accepted by the oracle")


def measure_frequencies(probe: Evaluate, n: int, known: Mapping[str, int],
                        alphabet: str = ALPHABET) -> Dict[str, int]:
    """
    Measure every letter not already in `known` with one all-same probe.

    `probe` is expected to handle sentinels (see AdaptiveSolver._probe), so
    any value it returns is a real match count.
    """
    counts = {ch: known[ch] for ch in alphabet if ch in known}
    for ch in alphabet:
        if ch in counts:
            continue
        counts[ch] = probe(ch * n)
    return check_counts(counts, n, alphabet)


def check_counts(counts: Mapping[str, int], n: int, alphabet: str = ALPHABET) -> Dict[str, int]:
    ordered = {ch: int(counts.get(ch, 0)) for ch in alphabet}
    if sum(ordered.values()) != n:
        raise CountSumMismatch(ordered, n)
    return ordered


def single_letter(counts: Mapping[str, int]) -> str | None:
    """The only letter present, if exactly one letter has a nonzero count."""
    present = [ch for ch, c in counts.items() if c > 0]
    return present[0] if len(present) == 1 else None
