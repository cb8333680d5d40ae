"""
Single-position refinement by match-count deltas.

With a baseline m0 = matches(current candidate), changing ONE position from
its tentative letter t to a probe letter c moves the count by:
  +1  c is correct there (and t was not)
  -1  t was correct there
   0  neither t nor c is correct there
Anything else breaks the oracle contract.

Loop until every position is confirmed:
  1) forced-fill: if some letter's remaining count equals the number of open
     positions, every open position is that letter
  2) otherwise resolve the lowest open position that can make progress,
     trying letters by descending remaining count
A pass that confirms nothing raises RefinementStall instead of spinning.
"""

from __future__ import annotations

from typing import Callable

from .errors import RefinementStall, StateInvariantError, UnexpectedDelta
from .reporting import NullReporter, Reporter
from .state import SolverState


class SinglePositionRefiner:
    def __init__(self, state: SolverState, probe: Callable[[str], int], baseline: int,
                 reporter: Reporter | None = None):
        self.state = state
        self.probe = probe
        self.baseline = baseline
        self.reporter = reporter or NullReporter()

    def run(self) -> None:
        while not self.state.is_solved():
            if self.forced_fill():
                continue
            if not self.sweep():
                raise RefinementStall(
                    f"no position confirmed in a full pass; open={self.state.open_positions()}")

    def forced_fill(self) -> bool:
        st = self.state
        open_count = st.num_open()
        for letter in st.alphabet:
            if open_count and st.remaining[letter] == open_count:
                positions = st.assign_mask(st.open_mask(), letter)
                self.reporter.emit("forced_fill", letter=letter, positions=positions)
                if not st.is_solved():
                    self.baseline = self.probe(st.guess())
                return True
        return False

    def sweep(self) -> bool:
        """Try open positions in index order; stop at the first confirmation."""
        for pos in self.state.open_positions():
            if self.resolve(pos):
                return True
        return False

    def resolve(self, pos: int) -> bool:
        """Probe letters at `pos` until it is confirmed. Returns True on success."""
        st = self.state
        if self.deduce(pos):
            return True

        for letter in st.possible_letters(pos):
            tentative = st.candidate[pos]
            if letter == tentative:
                continue
            trial = list(st.candidate)
            trial[pos] = letter
            result = self.probe("".join(trial))
            delta = result - self.baseline

            if delta == 1:
                st.confirm_position(pos, letter)
                self.baseline = result
                self.reporter.emit("confirm", position=pos, letter=letter, how="+1")
                return True
            if delta == -1:
                st.confirm_position(pos, tentative)
                self.reporter.emit("confirm", position=pos, letter=tentative, how="-1")
                return True
            if delta != 0:
                raise UnexpectedDelta(pos, letter, delta)

            st.eliminate(letter, pos)
            st.eliminate(tentative, pos)
            self.reporter.emit("eliminate", position=pos, letter=letter)
            if self.deduce(pos):
                return True
        return False

    def deduce(self, pos: int) -> bool:
        """Confirm `pos` without a query when only one letter can still fit."""
        st = self.state
        possible = st.possible_letters(pos)
        if not possible:
            raise StateInvariantError(f"no letter can occupy position {pos}")
        if len(possible) > 1:
            return False
        letter = possible[0]
        if letter != st.candidate[pos]:
            # the tentative letter is ruled out here, so the swap gains one match
            st.set_tentative(pos, letter)
            self.baseline += 1
        st.confirm_position(pos, letter)
        self.reporter.emit("confirm", position=pos, letter=letter, how="deduced")
        return True
