"""
Reporters: observers for solver events.

The solver never prints. It calls reporter.emit(event, **fields) and the
reporter decides what to do with it. Events emitted:

  phase        name=<stage>                       a stage starts
  query        index, guess, result               one oracle call
  confirm      position, letter, how              a position is proven
  eliminate    position, letter                   a letter is ruled out
  forced_fill  letter, positions                  batch fill of open slots
  result       secret, queries, method            solve finished
  failure      error                              fatal error, no secret claimed
"""

from __future__ import annotations

import sys
from typing import Dict, List, Tuple, TextIO


class Reporter:
    def emit(self, event: str, **fields) -> None:
        raise NotImplementedError("Override in subclass")


class NullReporter(Reporter):
    """Default: drop everything."""

    def emit(self, event: str, **fields) -> None:
        return None


class RecordingReporter(Reporter):
    """Keep every event in memory (tests, notebooks)."""

    def __init__(self):
        self.events: List[Tuple[str, Dict]] = []

    def emit(self, event: str, **fields) -> None:
        self.events.append((event, fields))

    def of(self, event: str) -> List[Dict]:
        return [f for e, f in self.events if e == event]


class ConsoleReporter(Reporter):
    """
    Human-readable trace. With verbose=False only phases, the result and
    failures are printed; verbose=True adds every query and deduction.
    """

    QUIET_EVENTS = ("phase", "result", "failure")

    def __init__(self, stream: TextIO | None = None, verbose: bool = True):
        self.stream = stream or sys.stdout
        self.verbose = verbose

    def _format(self, event: str, f: Dict) -> str:
        if event == "query":
            return f"GUESS#{f['index']} : \"{f['guess']}\" -> {f['result']}"
        if event == "phase":
            extra = " ".join(f"{k}={v}" for k, v in f.items() if k != "name")
            return f"== {f['name']}" + (f" ({extra})" if extra else "")
        if event == "confirm":
            return f"Confirmed pos {f['position']} = '{f['letter']}' ({f['how']})"
        if event == "eliminate":
            return f"Eliminated '{f['letter']}' at pos {f['position']}"
        if event == "forced_fill":
            return f"Forced-fill: {len(f['positions'])} open slot(s) with '{f['letter']}'"
        if event == "result":
            return (f"== done: {f['secret']}  "
                    f"(queries={f['queries']}, method={f['method']})")
        if event == "failure":
            return f"FAILED: {f['error']}"
        return f"{event}: {f}"

    def emit(self, event: str, **fields) -> None:
        if not self.verbose and event not in self.QUIET_EVENTS:
            return
        self.stream.write(self._format(event, fields) + "\n")
