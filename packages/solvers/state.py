"""
Candidate state: the solver's working hypothesis about the secret.

Holds, for a secret of known length N:
  - counts     : letter -> total occurrences (measured once, never mutated)
  - remaining  : letter -> occurrences not yet pinned to a confirmed position
  - masks      : letter -> int bit vector of positions the letter may still occupy
  - confirmed  : per-position flag
  - candidate  : per-position tentative letter (the answer once confirmed)

Invariants (checked by check_invariants):
  - sum(remaining) == number of open (unconfirmed) positions
  - 0 <= remaining[ch] <= counts[ch]
  - a confirmed position never changes letter

Masks are plain Python ints, so there is no width cap on N. All mutation goes
through confirm_position / eliminate / assign_mask / set_tentative so mask
clearing and remaining bookkeeping happen in exactly one place.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Tuple

from packages.oracle import ALPHABET
from .errors import CountSumMismatch, StateInvariantError


# ---- position masks ----

def full_mask(n: int) -> int:
    return (1 << n) - 1


def mask_of(positions) -> int:
    m = 0
    for p in positions:
        m |= 1 << p
    return m


def popcount(mask: int) -> int:
    return bin(mask).count("1")


def iter_positions(mask: int) -> Iterator[int]:
    """Yield set positions in ascending order."""
    pos = 0
    while mask:
        if mask & 1:
            yield pos
        mask >>= 1
        pos += 1


def split_mask(mask: int) -> Tuple[int, int]:
    """
    Split into (lower, upper): lower holds the first half of the set
    positions by index (rounded down), upper the complement within mask.
    """
    positions = list(iter_positions(mask))
    lower = mask_of(positions[: len(positions) // 2])
    return lower, mask & ~lower


# ---- initial candidate ----

def order_by_count(counts: Mapping[str, int], alphabet: str = ALPHABET) -> List[str]:
    """Letters by descending count; ties keep canonical alphabet order."""
    return sorted(alphabet, key=lambda ch: -counts.get(ch, 0))


def initial_candidate(counts: Mapping[str, int], n: int, alphabet: str = ALPHABET) -> str:
    """
    Frequency-ordered starting guess: the most frequent letter fills the
    lowest positions, then the next, and so on.

    Example: {B:3, A:3, C:2, X:2, I:2, U:2}, n=14 -> "BBBAAACCXXIIUU"

    Raises CountSumMismatch if the counts do not sum to n.
    """
    if sum(counts.get(ch, 0) for ch in alphabet) != n:
        raise CountSumMismatch(counts, n)
    out: List[str] = []
    for ch in order_by_count(counts, alphabet):
        out.extend(ch * counts.get(ch, 0))
    return "".join(out)


class SolverState:
    def __init__(self, counts: Mapping[str, int], n: int, alphabet: str = ALPHABET):
        if sum(counts.get(ch, 0) for ch in alphabet) != n:
            raise CountSumMismatch(counts, n)
        self.alphabet = alphabet
        self.n = n
        self.counts: Dict[str, int] = {ch: int(counts.get(ch, 0)) for ch in alphabet}
        self.remaining: Dict[str, int] = dict(self.counts)
        self.masks: Dict[str, int] = {
            ch: (full_mask(n) if self.counts[ch] else 0) for ch in alphabet
        }
        self.confirmed: List[bool] = [False] * n
        self.candidate: List[str] = list(initial_candidate(self.counts, n, alphabet))

    # ---- read side ----

    def guess(self) -> str:
        return "".join(self.candidate)

    def open_positions(self) -> List[int]:
        return [i for i in range(self.n) if not self.confirmed[i]]

    def open_mask(self) -> int:
        return mask_of(self.open_positions())

    def num_open(self) -> int:
        return self.confirmed.count(False)

    def num_confirmed(self) -> int:
        return self.n - self.num_open()

    def is_solved(self) -> bool:
        return all(self.confirmed)

    def letter_priority(self) -> List[str]:
        """Letters by descending remaining count, canonical order on ties."""
        return order_by_count(self.remaining, self.alphabet)

    def absent_letters(self) -> List[str]:
        return [ch for ch in self.alphabet if self.counts[ch] == 0]

    def could_be(self, letter: str, position: int) -> bool:
        return self.remaining[letter] > 0 and bool((self.masks[letter] >> position) & 1)

    def possible_letters(self, position: int) -> List[str]:
        """Letters that may still sit at `position`, highest priority first."""
        return [ch for ch in self.letter_priority() if self.could_be(ch, position)]

    # ---- mutations ----

    def set_tentative(self, position: int, letter: str) -> None:
        if self.confirmed[position]:
            raise StateInvariantError(f"position {position} is already confirmed")
        self.candidate[position] = letter

    def confirm_position(self, position: int, letter: str) -> None:
        """Pin `letter` at `position` and clear the position from all other masks."""
        if self.confirmed[position]:
            raise StateInvariantError(
                f"position {position} confirmed twice ('{self.candidate[position]}' then '{letter}')")
        if self.remaining[letter] <= 0:
            raise StateInvariantError(f"no '{letter}' left to place at position {position}")
        self.candidate[position] = letter
        self.confirmed[position] = True
        self.remaining[letter] -= 1
        bit = 1 << position
        for ch in self.alphabet:
            if ch != letter:
                self.masks[ch] &= ~bit

    def eliminate(self, letter: str, position: int) -> None:
        self.masks[letter] &= ~(1 << position)

    def assign_mask(self, mask: int, letter: str) -> List[int]:
        """Confirm `letter` at every position in `mask`; returns those positions."""
        positions = list(iter_positions(mask))
        for p in positions:
            self.confirm_position(p, letter)
        return positions

    def check_invariants(self) -> None:
        for ch in self.alphabet:
            if not 0 <= self.remaining[ch] <= self.counts[ch]:
                raise StateInvariantError(
                    f"remaining['{ch}']={self.remaining[ch]} outside 0..{self.counts[ch]}")
        if sum(self.remaining.values()) != self.num_open():
            raise StateInvariantError(
                f"sum(remaining)={sum(self.remaining.values())} but {self.num_open()} open position(s)")

    def __repr__(self) -> str:
        marks = "".join(ch if ok else ch.lower() for ch, ok in zip(self.candidate, self.confirmed))
        return f"SolverState({marks!r}, remaining={self.remaining})"
