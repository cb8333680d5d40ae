"""
Failure taxonomy for the adaptive solver.

Every SolverError is fatal for the run it occurs in: the state model can no
longer be trusted, so no secret is claimed. Only OracleLengthMismatch gets a
bounded resynchronization attempt before it is raised (see AdaptiveSolver).

CodeCracked is not an error. It is the signal a probe raises when the oracle
reports an exact match, so the solve unwinds straight to run().
"""

from __future__ import annotations


class SolverError(Exception):
    """Base class: an oracle contract or internal invariant was violated."""


class LengthDiscoveryError(SolverError):
    """No probe length in 1..MAX_LENGTH was accepted by the oracle."""


class OracleLengthMismatch(SolverError):
    """The oracle rejected a probe of the discovered length."""


class OracleInvalidAlphabet(SolverError):
    """The oracle rejected a probe's letters (probe construction bug)."""


class CountSumMismatch(SolverError):
    """Measured per-letter counts do not add up to the secret length."""

    def __init__(self, counts, length: int):
        self.counts = dict(counts)
        self.length = length
        super().__init__(
            f"letter counts sum to {sum(self.counts.values())}, expected {length}: {self.counts}")


class UnexpectedDelta(SolverError):
    """A single-position probe moved the match count by more than one."""

    def __init__(self, position: int, letter: str, delta: int):
        self.position = position
        self.letter = letter
        self.delta = delta
        super().__init__(
            f"probing '{letter}' at position {position} changed the match count by {delta}")


class GroupCountMismatch(SolverError):
    """A group probe reported a hit count outside 0..size."""

    def __init__(self, letter: str, found: int, size: int):
        self.letter = letter
        self.found = found
        self.size = size
        super().__init__(f"group probe for '{letter}' found {found} hit(s) in {size} position(s)")


class RefinementStall(SolverError):
    """A full pass over the open positions confirmed nothing."""


class StateInvariantError(SolverError):
    """Bookkeeping in SolverState went inconsistent."""


class CodeCracked(Exception):
    """Raised by a probe whose result equals the secret length."""

    def __init__(self, secret: str):
        self.secret = secret
        super().__init__(secret)
