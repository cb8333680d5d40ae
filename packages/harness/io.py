"""
I/O utilities for experiment runs.

Responsibilities:
- write_csv:     flatten per-case results into a tidy CSV (one row per secret).
- write_manifest:dump a JSON manifest with config, hashes, and metadata.
- timestamp_id:  stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List
import csv
import json
import subprocess
import datetime as dt

FIELDS = ["solver", "N", "secret", "recovered", "success", "queries", "method",
          "time_ms", "error"]


def write_csv(results: List[Dict], path: str) -> str:
    """
    Serialize a batch of case results to CSV.

    Schema (columns):
      solver, N, secret, recovered, success, queries, method, time_ms, error

    The per-query history is not flattened here: a hard secret can take a
    hundred probes, far too many for fixed columns.

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()
        for r in results:
            w.writerow({
                "solver": r.get("solver_id", "?"),
                "N": r.get("N", len(r["secret"])),
                "secret": r["secret"],
                "recovered": r.get("recovered", ""),
                "success": r["success"],
                "queries": r["queries"],
                "method": r.get("method", ""),
                "time_ms": round(float(r["time_ms"]), 3),
                "error": r.get("error", ""),
            })

    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest with run configuration and dataset validation summary.

    Typical keys:
      - run_id, git_commit
      - config: CLI args (solver, secrets path, seed, sample, outdir)
      - secrets: output of datasets.validate_secrets(...)
      - summary: output of harness.stats.summarize(...)
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
