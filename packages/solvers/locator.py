"""
Group locator: binary-split localization with a neutral filler letter.

Idea:
  - Pick a letter that does not occur in the secret at all (the filler).
    A filler position can never match, so it contributes nothing.
  - To count how many times letter L sits inside a set S of open positions,
    probe: L on S, filler on every other open position, confirmed letters on
    confirmed positions. Hits in S = result - (number of confirmed positions).
  - Starting from S = open positions where L may still be, with a known
    count c = remaining[L]:
      c == 0           -> L is absent from all of S
      c == |S|         -> every position in S is L (one batch assign)
      otherwise        -> probe the lower half, deduce the upper half as
                          c - lower, recurse into both

That costs one query per split with hits instead of one per position. Every
letter processed this way ends fully localized, so with a filler available the
locator alone finishes the secret.
"""

from __future__ import annotations

from typing import Callable

from .errors import GroupCountMismatch
from .reporting import NullReporter, Reporter
from .state import SolverState, iter_positions, mask_of, popcount, split_mask


class GroupLocator:
    def __init__(self, state: SolverState, probe: Callable[[str], int], filler: str,
                 reporter: Reporter | None = None):
        if state.counts.get(filler, 0) != 0:
            raise ValueError(f"filler '{filler}' occurs in the secret; it cannot be neutral")
        self.state = state
        self.probe = probe
        self.filler = filler
        self.reporter = reporter or NullReporter()

    def run(self) -> None:
        """Localize every letter that still has occurrences to place."""
        for letter in self.state.letter_priority():
            count = self.state.remaining[letter]
            if count == 0:
                continue
            mask = self.state.open_mask() & self.state.masks[letter]
            self.locate(letter, mask, count)

    def locate(self, letter: str, mask: int, count: int) -> None:
        """Resolve exactly `count` occurrences of `letter` inside `mask`."""
        size = popcount(mask)
        if count == 0:
            self._eliminate_all(letter, mask)
            return
        if count == size:
            self._assign(letter, mask)
            return

        lower, upper = split_mask(mask)
        if not lower or not upper:
            self.probe_each(letter, mask, count)
            return

        low_count = self.count_in(letter, lower)
        high_count = count - low_count
        if not 0 <= high_count <= popcount(upper):
            raise GroupCountMismatch(letter, low_count, popcount(lower))
        self.locate(letter, lower, low_count)
        self.locate(letter, upper, high_count)

    def count_in(self, letter: str, mask: int) -> int:
        """One query: how many of `letter` sit at the positions in `mask`."""
        st = self.state
        guess = []
        for i in range(st.n):
            if st.confirmed[i]:
                guess.append(st.candidate[i])
            elif (mask >> i) & 1:
                guess.append(letter)
            else:
                guess.append(self.filler)
        found = self.probe("".join(guess)) - st.num_confirmed()
        if not 0 <= found <= popcount(mask):
            raise GroupCountMismatch(letter, found, popcount(mask))
        return found

    def probe_each(self, letter: str, mask: int, count: int) -> None:
        """
        Defensive fallback, reached only when a split cannot shrink the mask
        (split_mask always halves two or more positions, so run() never gets
        here). Tests positions one at a time until the count is accounted for.
        """
        positions = list(iter_positions(mask))
        for k, p in enumerate(positions):
            left = positions[k:]
            if count == 0:
                self._eliminate_all(letter, mask_of(left))
                return
            if count == len(left):
                self._assign(letter, mask_of(left))
                return
            if self.count_in(letter, 1 << p):
                self.state.confirm_position(p, letter)
                self.reporter.emit("confirm", position=p, letter=letter, how="single-bit")
                count -= 1
            else:
                self.state.eliminate(letter, p)
                self.reporter.emit("eliminate", position=p, letter=letter)

    def _assign(self, letter: str, mask: int) -> None:
        for p in self.state.assign_mask(mask, letter):
            self.reporter.emit("confirm", position=p, letter=letter, how="group")

    def _eliminate_all(self, letter: str, mask: int) -> None:
        for p in iter_positions(mask):
            self.state.eliminate(letter, p)
            self.reporter.emit("eliminate", position=p, letter=letter)
