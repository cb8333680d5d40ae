from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Type

from .reporting import NullReporter, Reporter

# ---- Global solver registry ----
REGISTRY: Dict[str, Type["BaseSolver"]] = {}


def register(cls: Type["BaseSolver"]) -> Type["BaseSolver"]:
    """
    Decorator: @register on a solver class adds it to REGISTRY by its `id`.
    """
    sid = getattr(cls, "id", None)
    if not sid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if sid in REGISTRY:
        raise ValueError(f"Duplicate solver id: {sid}")
    REGISTRY[sid] = cls
    return cls


@dataclass
class SolveResult:
    """Outcome of one successful run()."""
    secret: str                      # recovered secret
    queries: int                     # oracle calls consumed
    method: str                      # single_letter | group_located | refined
    length: int
    counts: Dict[str, int] = field(default_factory=dict)
    history: List[Tuple[str, int]] = field(default_factory=list)


# ---- Base class that solvers inherit ----
class BaseSolver:
    id = "base"
    name = "Base"
    version = "0.0.0"

    def __init__(self):
        self.oracle = None
        self.reporter: Reporter = NullReporter()
        self.verify: bool = False

    def reset(self, oracle, *, reporter: Reporter | None = None, verify: bool = False) -> None:
        """Bind a fresh oracle (one secret) before each run()."""
        self.oracle = oracle
        self.reporter = reporter or NullReporter()
        self.verify = bool(verify)

    def run(self) -> SolveResult:
        raise NotImplementedError("Override in subclass")
