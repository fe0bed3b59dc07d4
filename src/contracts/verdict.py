"""Typed solve outcome returned by the solver port."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from solver.search import BranchTraceEntry, SearchStats

from .errors import CODE_EXHAUSTED, CODE_INVALID, CODE_UNSATISFIABLE, SolveError

SCHEMA_VERSION = "1.0"

STATUS_SOLVED = "solved"
STATUS_UNSATISFIABLE = "unsatisfiable"
STATUS_INVALID = "invalid"
STATUS_EXHAUSTED = "exhausted"

_STATUS_BY_CODE = {
    CODE_INVALID: STATUS_INVALID,
    CODE_UNSATISFIABLE: STATUS_UNSATISFIABLE,
    CODE_EXHAUSTED: STATUS_EXHAUSTED,
}


@dataclass(frozen=True)
class SolveResult:
    """Outcome of one solve; ``solution`` is set only when ``status`` is solved.

    ``trace`` holds the branch log when a recorder was attached and stays
    ``None`` otherwise.
    """

    status: str
    puzzle: str
    module_id: str
    solution: str | None = None
    error: str | None = None
    stats: SearchStats = field(default_factory=SearchStats)
    time_ms: int = 0
    trace: Tuple[BranchTraceEntry, ...] | None = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_SOLVED

    @classmethod
    def solved(cls, puzzle: str, solution: str, **kwargs: Any) -> "SolveResult":
        return cls(status=STATUS_SOLVED, puzzle=puzzle, solution=solution, **kwargs)

    @classmethod
    def failed(cls, puzzle: str, exc: SolveError, **kwargs: Any) -> "SolveResult":
        status = _STATUS_BY_CODE.get(exc.code, STATUS_UNSATISFIABLE)
        return cls(status=status, puzzle=puzzle, error=str(exc), **kwargs)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "schema_version": SCHEMA_VERSION,
            "module_id": self.module_id,
            "status": self.status,
            "puzzle": self.puzzle,
            "solution": self.solution,
            "stats": self.stats.to_payload(),
            "time_ms": int(self.time_ms),
        }
        if self.error is not None:
            payload["error"] = self.error
        if self.trace is not None:
            payload["trace"] = [
                {"depth": entry.depth, "cell": entry.cell, "digit": entry.digit, "outcome": entry.outcome}
                for entry in self.trace
            ]
        return payload


__all__ = [
    "SCHEMA_VERSION",
    "STATUS_EXHAUSTED",
    "STATUS_INVALID",
    "STATUS_SOLVED",
    "STATUS_UNSATISFIABLE",
    "SolveResult",
]
