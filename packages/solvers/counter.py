"""
Query counter: the single choke point for oracle calls.

Every probe a solver issues goes through QueryCounter.evaluate, which counts
it, keeps the (guess, result) history, and reports it. Sentinel handling is
left to the caller: during length discovery -2 is expected, afterwards it is
not.
"""

from __future__ import annotations

from typing import List, Tuple

from .reporting import NullReporter, Reporter


class QueryCounter:
    def __init__(self, oracle, reporter: Reporter | None = None):
        self.oracle = oracle
        self.reporter = reporter or NullReporter()
        self.count = 0
        self.history: List[Tuple[str, int]] = []

    def evaluate(self, guess: str) -> int:
        self.count += 1
        result = self.oracle.evaluate(guess)
        self.history.append((guess, result))
        self.reporter.emit("query", index=self.count, guess=guess, result=result)
        return result
