"""
Experiment harness core primitives.

- run_case:  crack a single secret with a given solver against a fresh oracle.
- run_batch: run many secrets in sequence (optionally a sample prefix).
- Refuses secrets the oracle rules do not allow (length 1..18, fixed alphabet).

These functions are intentionally UI-agnostic so they can be reused by
a CLI app, a notebook, or future services without changes.
"""

from __future__ import annotations
import time
from typing import Dict, Iterable, List

from packages.oracle import MAX_LENGTH, SecretOracle, validate_secret
from packages.solvers import SolverError
from packages.solvers.reporting import Reporter


def _assert_secret(secret: str) -> None:
    """Guardrail: the oracle only holds secrets of length 1..MAX_LENGTH."""
    try:
        validate_secret(secret)
    except ValueError as e:
        raise ValueError(f"cannot run secret {secret!r} (max length {MAX_LENGTH}): {e}") from e


def run_case(
        solver,
        secret: str,
        *,
        reporter: Reporter | None = None,
        verify: bool = False,
) -> Dict:
    """
    Execute one solve until the solver returns or fails.

    Args:
        solver:    an object implementing BaseSolver with reset(oracle) / run()
        secret:    the hidden code for this case
        reporter:  optional event observer passed to the solver
        verify:    spend one extra query re-checking the recovered secret

    Returns:
        dict with keys:
            success (bool), queries (int), time_ms (float), method (str),
            secret (str), recovered (str), N (int), error (str), history
    """
    _assert_secret(secret)

    oracle = SecretOracle(secret)
    solver.reset(oracle, reporter=reporter, verify=verify)

    t0 = time.perf_counter()
    try:
        res = solver.run()
    except SolverError as e:
        # Fatal for this case only: record it, claim nothing
        dt = (time.perf_counter() - t0) * 1000.0
        return {
            "success": False, "queries": oracle.calls, "time_ms": dt,
            "method": "failed", "secret": secret, "recovered": "",
            "N": len(secret), "error": f"{type(e).__name__}: {e}", "history": [],
        }
    dt = (time.perf_counter() - t0) * 1000.0

    return {
        "success": res.secret == secret,
        "queries": res.queries,
        "time_ms": dt,
        "method": res.method,
        "secret": secret,
        "recovered": res.secret,
        "N": len(secret),
        "error": "",
        "history": res.history,
    }


def run_batch(
        solver,
        secrets: Iterable[str],
        *,
        sample: int | None = None,
        verify: bool = False,
) -> List[Dict]:
    """
    Run many cases back-to-back. If 'sample' is provided, only the first K
    secrets are used to speed up quick experiments.
    """
    pool = list(secrets)
    if sample is not None:
        pool = pool[:sample]

    out: List[Dict] = []
    for s in pool:
        r = run_case(solver, s, verify=verify)
        r["solver_id"] = solver.id
        out.append(r)
    return out
