"""Work unit definitions for top-level branch scheduling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from solver.search import SearchStats


@dataclass(frozen=True)
class BranchTask:
    """One candidate digit of the root decision cell.

    ``masks`` is an immutable snapshot of the parent store so the task can be
    shipped to a worker process without sharing state with its siblings.
    """

    cell: int
    digit: int
    masks: Tuple[int, ...]
    max_nodes: int | None = None


@dataclass
class BranchResult:
    """Container for executor results."""

    task: BranchTask
    masks: Tuple[int, ...] | None = None
    stats: SearchStats = field(default_factory=SearchStats)
    status: str = "pending"


__all__ = ["BranchResult", "BranchTask"]
