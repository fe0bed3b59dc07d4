"""Constraint-propagation solver for the classic 9x9 Sudoku."""

from __future__ import annotations

from contracts.errors import Unsatisfiable

from .candidates import CandidateStore
from .codec import givens, grid_values, normalise_grid, parse_grid, values_to_string
from .propagation import assign, eliminate
from .search import (
    BranchTraceEntry,
    BranchTraceRecorder,
    SearchLimits,
    SearchStats,
    search,
    select_cell,
)
from .topology import TOPOLOGY, Topology, cross

DESCRIPTOR = {
    "module_id": "sudoku-9x9:solver/propagation@1.0.0",
    "puzzle_kind": "sudoku-9x9",
    "role": "solver",
    "module_version": "1.0.0",
    "capabilities": {"parallelizable": True, "idempotent": True, "stateless": True},
}


def solve(
    grid: str,
    *,
    max_nodes: int | None = None,
    stats: SearchStats | None = None,
    recorder: BranchTraceRecorder | None = None,
) -> str:
    """Solve ``grid`` and return the 81-digit solution.

    Raises :class:`~contracts.errors.InvalidPuzzle` for malformed input,
    :class:`~contracts.errors.Unsatisfiable` when no solution exists and
    :class:`~contracts.errors.SearchExhausted` when ``max_nodes`` runs out
    (``None`` or ``0`` leaves the search unbounded).
    """

    result = search(
        parse_grid(grid),
        limits=SearchLimits(max_nodes=max_nodes),
        stats=stats,
        recorder=recorder,
    )
    if result is None:
        raise Unsatisfiable("no assignment satisfies every unit")
    return values_to_string(result)


__all__ = [
    "DESCRIPTOR",
    "BranchTraceEntry",
    "BranchTraceRecorder",
    "CandidateStore",
    "SearchLimits",
    "SearchStats",
    "TOPOLOGY",
    "Topology",
    "assign",
    "cross",
    "eliminate",
    "givens",
    "grid_values",
    "normalise_grid",
    "parse_grid",
    "search",
    "select_cell",
    "solve",
    "values_to_string",
]
