"""
Batch statistics over harness results.

summarize() reduces a list of run_case dicts to the numbers worth comparing
between solvers: solve rate and the query-count distribution, overall and per
secret length.
"""

from __future__ import annotations

from typing import Dict, List

import numpy as np


def summarize(results: List[Dict]) -> Dict:
    """
    Returns a JSON-serializable dict:
      cases, solved, failed, mean/median/p90/max queries (solved cases only),
      mean time_ms, per-length mean queries, method histogram.
    """
    solved = [r for r in results if r["success"]]
    q = np.array([r["queries"] for r in solved], dtype=float)
    t = np.array([r["time_ms"] for r in results], dtype=float)

    by_length: Dict[str, float] = {}
    lengths = np.array([r["N"] for r in solved], dtype=int)
    for n in np.unique(lengths):
        by_length[str(int(n))] = round(float(q[lengths == n].mean()), 3)

    methods: Dict[str, int] = {}
    for r in results:
        methods[r.get("method", "?")] = methods.get(r.get("method", "?"), 0) + 1

    empty = q.size == 0
    return {
        "cases": len(results),
        "solved": len(solved),
        "failed": len(results) - len(solved),
        "mean_queries": None if empty else round(float(q.mean()), 3),
        "median_queries": None if empty else float(np.median(q)),
        "p90_queries": None if empty else float(np.percentile(q, 90)),
        "max_queries": None if empty else int(q.max()),
        "mean_time_ms": None if t.size == 0 else round(float(t.mean()), 3),
        "mean_queries_by_length": by_length,
        "methods": methods,
    }


def pretty_stats(summary: Dict) -> str:
    """
    One-liner for the console, e.g.
        cases=500 | solved=500 | queries mean=31.2 median=30.0 p90=42.0 max=61
    """
    return (
        f"cases={summary['cases']} | solved={summary['solved']} "
        f"| queries mean={summary['mean_queries']} median={summary['median_queries']} "
        f"p90={summary['p90_queries']} max={summary['max_queries']}"
    )
