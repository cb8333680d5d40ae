# apps/cli/solve.py
"""
Crack one secret and narrate the solve.

Wires a fresh SecretOracle to the chosen solver with a ConsoleReporter, then
prints the recovered secret, the number of oracle queries and the wall time.
Exits non-zero (no secret claimed) if the solver hits a fatal error.

Usage:
    python -m apps.cli.solve BACXIUBACXIUBA
    python -m apps.cli.solve UUUUUU --quiet
"""

from __future__ import annotations

import argparse
import time
from typing import List

from packages.oracle import SecretOracle, validate_secret
from packages.solvers import ConsoleReporter, SolverError, create_solver, get_solver_ids


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="codebreakerAI — crack a single secret")
    ap.add_argument("secret", help="secret held by the oracle (letters BACXIU, length 1..18)")
    ap.add_argument("--solver", default="adaptive",
                    help=f"solver id (one of: {', '.join(get_solver_ids())})")
    ap.add_argument("--quiet", action="store_true", help="only phases and the result")
    ap.add_argument("--verify", action="store_true", help="re-check the answer with one more query")
    args = ap.parse_args(argv)

    try:
        oracle = SecretOracle(validate_secret(args.secret))
    except ValueError as e:
        ap.error(str(e))

    solver = create_solver(args.solver)
    solver.reset(oracle, reporter=ConsoleReporter(verbose=not args.quiet), verify=args.verify)

    t0 = time.perf_counter()
    try:
        res = solver.run()
    except SolverError as e:
        print(f"No secret found: {type(e).__name__}: {e}")
        return 1
    elapsed = (time.perf_counter() - t0) * 1000.0

    print(f"Secret found : {res.secret}")
    print(f"Total guesses: {res.queries}")
    print(f"Time taken   : {elapsed:.2f} ms")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
