"""Depth-first backtracking search with the minimum-remaining-values heuristic."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import List, Optional, Tuple

from contracts.errors import SearchExhausted

from .candidates import CandidateStore
from .propagation import assign
from .topology import TOPOLOGY, Topology

_LOGGER = logging.getLogger(__name__)

TRACE_LEVELS = ("none", "branches")


@dataclass(frozen=True)
class SearchLimits:
    """Resource bounds for a single search; ``None`` or ``0`` disables the bound."""

    max_nodes: int | None = None


@dataclass
class SearchStats:
    """Counters collected while searching."""

    nodes: int = 0
    max_depth: int = 0
    backtracks: int = 0

    def merge(self, other: "SearchStats", *, depth_offset: int = 0) -> None:
        self.nodes += other.nodes
        self.backtracks += other.backtracks
        self.max_depth = max(self.max_depth, other.max_depth + depth_offset)

    def to_payload(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class BranchTraceEntry:
    """Outcome of one speculative assignment.

    ``outcome`` is ``"contradiction"`` when propagation rejected the digit
    outright, ``"failed"`` when the subtree was exhausted without a solution and
    ``"solved"`` when the subtree produced the answer.
    """

    depth: int
    cell: int
    digit: int
    outcome: str


@dataclass
class BranchTraceRecorder:
    """In-memory branch log honouring ``trace_level``.

    Entries are appended when a branch finishes, so nested branches appear
    before the branch that contains them.
    """

    trace_level: str = "none"
    entries: List[BranchTraceEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.trace_level not in TRACE_LEVELS:
            raise ValueError(f"Unsupported trace level: {self.trace_level!r}")

    def record(self, entry: BranchTraceEntry) -> None:
        if self.trace_level == "none":
            return
        self.entries.append(entry)

    def snapshot(self) -> Tuple[BranchTraceEntry, ...]:
        return tuple(self.entries)

    def reset(self) -> None:
        self.entries.clear()


def select_cell(store: CandidateStore) -> int | None:
    """Return the undetermined cell with the fewest candidates.

    Ties go to the lowest cell index.  ``None`` means every cell is determined.
    """

    best = None
    best_count = 10
    for cell in store.unsolved():
        count = store.count(cell)
        if count < best_count:
            best, best_count = cell, count
            if count == 2:
                break
    return best


class _SearchRun:
    def __init__(
        self,
        limits: SearchLimits,
        stats: SearchStats,
        recorder: BranchTraceRecorder | None,
        topology: Topology,
    ) -> None:
        self.limits = limits
        self.stats = stats
        self.recorder = recorder
        self.topology = topology

    def _tick(self, depth: int) -> None:
        self.stats.nodes += 1
        if depth > self.stats.max_depth:
            self.stats.max_depth = depth
        max_nodes = self.limits.max_nodes
        if max_nodes and self.stats.nodes > max_nodes:
            _LOGGER.debug("search budget of %d nodes exhausted at depth %d", max_nodes, depth)
            raise SearchExhausted(max_nodes)

    def _record(self, depth: int, cell: int, digit: int, outcome: str) -> None:
        if self.recorder is not None:
            self.recorder.record(BranchTraceEntry(depth=depth, cell=cell, digit=digit, outcome=outcome))

    def visit(self, store: CandidateStore | None, depth: int) -> Optional[CandidateStore]:
        if store is None:
            return None
        self._tick(depth)
        cell = select_cell(store)
        if cell is None:
            return store

        for digit in store.candidates(cell):
            child = assign(store.copy(), cell, digit, self.topology)
            if child is None:
                self._record(depth, cell, digit, "contradiction")
                continue
            result = self.visit(child, depth + 1)
            if result is not None:
                self._record(depth, cell, digit, "solved")
                return result
            self._record(depth, cell, digit, "failed")

        self.stats.backtracks += 1
        return None


def search(
    store: CandidateStore | None,
    *,
    limits: SearchLimits | None = None,
    stats: SearchStats | None = None,
    recorder: BranchTraceRecorder | None = None,
    topology: Topology = TOPOLOGY,
) -> Optional[CandidateStore]:
    """Search for the first complete assignment reachable from ``store``.

    Returns the solved store, or ``None`` when every branch ends in a
    contradiction.  Raises :class:`~contracts.errors.SearchExhausted` when
    ``limits.max_nodes`` is exceeded.  The input store is never mutated.
    """

    run = _SearchRun(limits or SearchLimits(), stats if stats is not None else SearchStats(), recorder, topology)
    return run.visit(store, 0)


__all__ = [
    "BranchTraceEntry",
    "BranchTraceRecorder",
    "SearchLimits",
    "SearchStats",
    "TRACE_LEVELS",
    "search",
    "select_cell",
]
