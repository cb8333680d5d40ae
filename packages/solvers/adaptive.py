"""
Adaptive solver: recover the secret from exact-position match counts.

Pipeline:
  1) length discovery      "B", "BB", ... -> N and count('B')
  2) frequency profiling   one all-same probe per other letter
  3) single-letter exit    the secret is one letter repeated
  4) candidate state       initial guess in descending-count blocks
  5) group locating        only if some letter is absent (neutral filler)
  6) single-position refinement on whatever is still open

Any probe whose match count equals N raises CodeCracked, which run() turns
into a normal result. Oracle contract violations surface as SolverError
subclasses; the run stops and no secret is claimed.
"""

from __future__ import annotations

from typing import Dict

from packages.oracle import ALPHABET, MAX_LENGTH, INVALID_ALPHABET, WRONG_LENGTH
from .base import BaseSolver, SolveResult, register
from .counter import QueryCounter
from .errors import (CodeCracked, OracleInvalidAlphabet, OracleLengthMismatch,
                     SolverError, StateInvariantError)
from .locator import GroupLocator
from .profiling import detect_length, measure_frequencies, single_letter
from .refiner import SinglePositionRefiner
from .state import SolverState


@register
class AdaptiveSolver(BaseSolver):
    id = "adaptive"
    name = "Adaptive (group locate + refine)"
    version = "1.0.0"

    ALPHABET = ALPHABET
    MAX_LENGTH = MAX_LENGTH

    # Re-run length discovery this many times when a probe of the known
    # length is rejected mid-run.
    MAX_RESYNC_ATTEMPTS = 1

    USE_GROUP_LOCATOR = True

    # stage that was running when the exact match came back -> reported method
    PHASE_METHODS = {"profile": "single_letter", "group_locate": "group_located", "refine": "refined"}

    def reset(self, oracle, **kwargs) -> None:
        super().reset(oracle, **kwargs)
        self.counter = QueryCounter(oracle, self.reporter)
        self.n = 0
        self.counts: Dict[str, int] = {}
        self.state: SolverState | None = None
        self._phase = "init"

    # ---- probes ----

    def _enter(self, phase: str, **info) -> None:
        self._phase = phase
        self.reporter.emit("phase", name=phase, **info)

    def _probe(self, guess: str) -> int:
        """
        Query a full-length guess. Handles sentinels, raises CodeCracked on
        an exact match.
        """
        attempts = 0
        while True:
            r = self.counter.evaluate(guess)
            if r == INVALID_ALPHABET:
                raise OracleInvalidAlphabet(f"oracle rejected probe {guess!r}")
            if r != WRONG_LENGTH:
                break
            if attempts >= self.MAX_RESYNC_ATTEMPTS:
                raise OracleLengthMismatch(
                    f"probe of length {self.n} still rejected after {attempts} resync(s)")
            attempts += 1
            self._resync_length()
        if r == self.n:
            raise CodeCracked(guess)
        return r

    def _resync_length(self) -> None:
        n, _ = detect_length(self.counter.evaluate, self.ALPHABET[0], self.MAX_LENGTH)
        if n != self.n:
            raise OracleLengthMismatch(f"secret length changed from {self.n} to {n}")

    # ---- pipeline ----

    def run(self) -> SolveResult:
        if self.oracle is None:
            raise RuntimeError("call reset(oracle) before run()")
        try:
            try:
                method = self._solve()
                secret = self.state.guess() if self.state else ""
            except CodeCracked as hit:
                secret = hit.secret
                method = self.PHASE_METHODS[self._phase]
            if self.verify:
                self._verify(secret)
        except SolverError as e:
            self.reporter.emit("failure", error=f"{type(e).__name__}: {e}")
            raise

        result = SolveResult(
            secret=secret, queries=self.counter.count, method=method, length=self.n,
            counts=dict(self.counts), history=list(self.counter.history),
        )
        self.reporter.emit("result", secret=secret, queries=result.queries, method=method)
        return result

    def _solve(self) -> str:
        base = self.ALPHABET[0]
        self._enter("profile")
        self.n, base_count = detect_length(self.counter.evaluate, base, self.MAX_LENGTH)
        self.reporter.emit("phase", name="length", length=self.n, base_count=base_count)
        if base_count == self.n:
            raise CodeCracked(base * self.n)

        self.counts = measure_frequencies(self._probe, self.n, {base: base_count}, self.ALPHABET)
        only = single_letter(self.counts)
        if only is not None:
            raise CodeCracked(only * self.n)

        self.state = SolverState(self.counts, self.n, self.ALPHABET)
        absent = self.state.absent_letters()

        method = "refined"
        if self.USE_GROUP_LOCATOR and absent:
            self._enter("group_locate", filler=absent[0])
            GroupLocator(self.state, self._probe, absent[0], self.reporter).run()
            self.state.check_invariants()
            method = "group_located"

        if not self.state.is_solved():
            self._enter("refine")
            baseline = self._probe(self.state.guess())
            SinglePositionRefiner(self.state, self._probe, baseline, self.reporter).run()
            self.state.check_invariants()
            method = "refined"

        return method

    def _verify(self, secret: str) -> None:
        """Optional extra query: the recovered secret must match everywhere."""
        self._enter("verify")
        r = self.counter.evaluate(secret)
        if r != self.n:
            raise StateInvariantError(f"verification of {secret!r} matched {r}/{self.n}")


@register
class AdaptiveSweepSolver(AdaptiveSolver):
    """Same pipeline without the group locator: refinement does all the work."""
    id = "adaptive_sweep"
    name = "Adaptive (single-position refine only)"
    version = "1.0.0"

    USE_GROUP_LOCATOR = False
