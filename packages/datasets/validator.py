"""
Secret-list validator.

What this module does:
- Validate a secrets file (one secret per line) against the oracle rules:
  uppercase alphabet letters only, length 1..MAX_LENGTH.
- Detect duplicates and invalid lines; compute SHA-256 of the raw file.
- Build a length histogram so batch results can be read per length.
- Return a machine-readable dict (for manifests) and provide a pretty one-line summary.

Typical use:
    from packages.datasets import validate_secrets, pretty_summary
    rep = validate_secrets("packages/datasets/data/secrets.txt")
    print(pretty_summary(rep))
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Dict, List, Tuple
import hashlib

from packages.oracle import MAX_LENGTH, is_valid_code


@dataclass
class SecretsReport:
    path: str            # file path (as given)
    exists: bool         # did the file exist on disk?
    count: int           # number of VALID secrets
    unique_count: int    # unique valid secrets
    invalid_lines: int   # blank, wrong letters, or wrong length
    sha256: str          # SHA-256 of raw file bytes (empty string if missing)
    lengths: Dict[str, int] = field(default_factory=dict)  # length -> count (valid only)
    passed: bool = False
    issues: List[str] = field(default_factory=list)


def _sha256_file(path: Path) -> str:
    """Compute SHA-256 of a file's raw bytes."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _load_and_check(path: Path) -> Tuple[List[str], int]:
    """
    Returns (valid_secrets, invalid_count). Blank lines count as invalid;
    lowercase is NOT normalized (the oracle is case-sensitive).
    """
    valid: List[str] = []
    invalid = 0
    with path.open("r", encoding="utf-8") as f:
        for raw in f:
            s = raw.strip()
            if s and is_valid_code(s):
                valid.append(s)
            else:
                invalid += 1
    return valid, invalid


def validate_secrets(path: str) -> Dict:
    """
    Validate a secrets file.

    Returns a JSON-serializable dict (SecretsReport schema). `passed` is strict:
    the file must exist, hold at least one secret, and have no invalid lines.
    Duplicates are reported but do not fail validation.
    """
    p = Path(path)
    if not p.exists():
        rep = SecretsReport(path, False, 0, 0, 0, "", issues=[f"secrets file not found: {path}"])
        return asdict(rep)

    secrets, invalid = _load_and_check(p)
    issues: List[str] = []
    if not secrets:
        issues.append("secrets file contains 0 valid secrets")
    if invalid:
        issues.append(
            f"secrets has {invalid} invalid line(s) (letters/length outside rules, max {MAX_LENGTH})")
    unique = set(secrets)
    if len(unique) != len(secrets):
        issues.append("secrets contains duplicate lines")

    hist = Counter(len(s) for s in secrets)
    rep = SecretsReport(
        path=str(p),
        exists=True,
        count=len(secrets),
        unique_count=len(unique),
        invalid_lines=invalid,
        sha256=_sha256_file(p),
        lengths={str(k): hist[k] for k in sorted(hist)},
        passed=bool(secrets) and invalid == 0,
        issues=issues,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Compact, human-friendly one-liner for console/docs.

    Example:
        secrets=500 (uniq=500, sha=abc123...) | lengths 1..18 | OK
    """
    status = "OK" if report["passed"] else "FAIL"
    sha = (report.get("sha256") or "")[:12]
    lengths = [int(k) for k in report.get("lengths", {})]
    span = f"{min(lengths)}..{max(lengths)}" if lengths else "-"
    return (
        f"secrets={report['count']} (uniq={report['unique_count']}, sha={sha}) "
        f"| lengths {span} | invalid={report['invalid_lines']} | {status}"
    )
