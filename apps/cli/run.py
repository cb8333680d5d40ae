# apps/cli/run.py
"""
CLI entry point for running codebreakerAI experiments.

This script:
  1) Gathers the secrets: a secrets file (validated: counts, SHA, length
     histogram), explicit --secret values, or --random generated ones.
  2) Instantiates the requested solver(s).
  3) Runs each solver over the shared cases with a live progress indicator and writes:
       - CSV:  per-case results (queries, method, recovered secret, error)
       - JSON: manifest with config, secrets report, summary stats, git commit
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Dict, List

from tqdm import tqdm

from packages.datasets import validate_secrets, pretty_summary, read_secrets, random_secrets
from packages.harness import run_case, summarize, pretty_stats
from packages.harness.io import write_csv, write_manifest, timestamp_id, git_commit_or_unknown
from packages.oracle import MAX_LENGTH
from packages.solvers import create_solver, get_solver_ids


def _progress_mode(mode: str) -> str:
    if mode == "auto":
        return "bar" if sys.stderr.isatty() else "plain"
    return mode


def _run_one_solver(solver_id: str, cases: List[str], *, progress: str,
                    verify: bool) -> List[Dict]:
    solver = create_solver(solver_id)
    mode = _progress_mode(progress)
    total = len(cases)
    iterator = tqdm(cases, ncols=80, desc=solver_id, unit="secret") if mode == "bar" else cases

    results = []
    start = time.time()
    last_print = 0.0
    for idx, secret in enumerate(iterator, 1):
        r = run_case(solver, secret, verify=verify)
        r["solver_id"] = solver.id  # stamp id for downstream tools
        results.append(r)

        if mode == "plain":
            now = time.time()
            if (now - last_print >= 1.0) or (idx == total):
                elapsed = now - start
                pct = 100.0 * idx / max(1, total)
                sys.stderr.write(f"\r[{solver_id}] {idx}/{total} {pct:5.1f}% | elapsed {elapsed:6.1f}s")
                sys.stderr.flush()
                last_print = now

    if mode == "plain":
        sys.stderr.write("\n"); sys.stderr.flush()
    return results


def main(argv: List[str] | None = None):
    """
    Parse CLI args, gather secrets, run the batch with progress, and write outputs.
    """
    registered = get_solver_ids()

    ap = argparse.ArgumentParser(description="codebreakerAI — run solver experiments")
    ap.add_argument("--solvers", nargs="+", default=["adaptive"],
                    help=f"solver ids or 'ALL' (registered: {', '.join(registered)})")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--secrets", help="path to a secrets file (one per line)")
    src.add_argument("--secret", action="append", help="explicit secret (repeatable)")
    src.add_argument("--random", type=int, metavar="K", help="generate K random secrets")
    ap.add_argument("--min-len", type=int, default=1)
    ap.add_argument("--max-len", type=int, default=MAX_LENGTH)
    ap.add_argument("--sample", type=int, help="run only the first K secrets")
    ap.add_argument("--seed", type=int, default=123, help="RNG seed for --random")
    ap.add_argument("--verify", action="store_true",
                    help="spend one extra query per case re-checking the answer")
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument("--progress", choices=["auto", "bar", "plain", "off"], default="auto")
    args = ap.parse_args(argv)

    # 1) Secrets
    rep = None
    if args.secrets:
        rep = validate_secrets(args.secrets)
        print(pretty_summary(rep))
        if not rep["passed"]:
            raise SystemExit(f"Invalid secrets file: {rep['issues']}")
        cases = read_secrets(args.secrets)
    elif args.secret:
        cases = list(args.secret)
    else:
        cases = random_secrets(args.random, min_len=args.min_len, max_len=args.max_len,
                               seed=args.seed)
    if args.sample is not None:
        cases = cases[: args.sample]

    # 2) Solvers
    if len(args.solvers) == 1 and args.solvers[0].lower() == "all":
        todo = registered
    else:
        todo = args.solvers
        missing = [s for s in todo if s not in registered]
        if missing:
            raise SystemExit(f"Unknown solver ids: {missing}. Registered: {registered}")

    # 3) Run + write outputs under <outdir>/<solver_id>/
    run_id = timestamp_id()
    outdir = Path(args.outdir)
    for sid in todo:
        if args.progress != "off":
            print(f"\n=== Running {sid} on {len(cases)} secrets ===")
        results = _run_one_solver(sid, cases, progress=args.progress, verify=args.verify)
        summary = summarize(results)
        print(pretty_stats(summary))

        sdir = outdir / sid
        csv_path = write_csv(results, str(sdir / f"run_{run_id}.csv"))
        manifest = {
            "run_id": run_id,
            "git_commit": git_commit_or_unknown(),
            "config": vars(args),
            "secrets": rep,
            "num_cases": len(results),
            "solver_id": sid,
            "summary": summary,
        }
        manifest_path = write_manifest(manifest, str(sdir / f"run_{run_id}_manifest.json"))
        print(f"Wrote: {csv_path}")
        print(f"Wrote: {manifest_path}")


if __name__ == "__main__":
    main()
