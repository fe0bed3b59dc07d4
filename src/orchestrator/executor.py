"""Executor backends for top-level branch work."""

from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from typing import List, Protocol, Sequence

from contracts.errors import SearchExhausted
from solver.candidates import CandidateStore
from solver.propagation import assign
from solver.search import SearchLimits, SearchStats, search

from .task import BranchResult, BranchTask

STATUS_SOLVED = "solved"
STATUS_FAILED = "failed"
STATUS_EXHAUSTED = "exhausted"
STATUS_SKIPPED = "skipped"


def run_branch(task: BranchTask) -> BranchResult:
    """Assign the task's digit on a fresh store and search beneath it."""

    stats = SearchStats()
    child = assign(CandidateStore(task.masks), task.cell, task.digit)
    if child is None:
        return BranchResult(task=task, stats=stats, status=STATUS_FAILED)
    try:
        solved = search(child, limits=SearchLimits(max_nodes=task.max_nodes), stats=stats)
    except SearchExhausted:
        return BranchResult(task=task, stats=stats, status=STATUS_EXHAUSTED)
    if solved is None:
        return BranchResult(task=task, stats=stats, status=STATUS_FAILED)
    return BranchResult(task=task, masks=solved.masks, stats=stats, status=STATUS_SOLVED)


class Executor(Protocol):
    """Abstract execution backend."""

    def submit(self, tasks: Sequence[BranchTask]) -> List[BranchResult]:
        """Run ``tasks`` and return one result per task, in task order."""

    def shutdown(self) -> None:
        """Tear down resources allocated by the executor."""


class SequentialExecutor:
    """Deterministic executor processing branches serially.

    Stops at the first branch that either solves or exhausts its budget; the
    remaining branches are reported as skipped, matching plain recursive
    search.
    """

    def submit(self, tasks: Sequence[BranchTask]) -> List[BranchResult]:
        results: List[BranchResult] = []
        done = False
        for task in tasks:
            if done:
                results.append(BranchResult(task=task, status=STATUS_SKIPPED))
                continue
            result = run_branch(task)
            results.append(result)
            done = result.status in (STATUS_SOLVED, STATUS_EXHAUSTED)
        return results

    def shutdown(self) -> None:
        return None


class ProcessExecutor:
    """Run every branch concurrently in a process pool."""

    def __init__(self, max_workers: int | None = None) -> None:
        self.max_workers = max_workers
        self._pool: ProcessPoolExecutor | None = None

    def submit(self, tasks: Sequence[BranchTask]) -> List[BranchResult]:
        if self._pool is None:
            self._pool = ProcessPoolExecutor(max_workers=self.max_workers)
        return list(self._pool.map(run_branch, tasks))

    def shutdown(self) -> None:
        if self._pool is not None:
            self._pool.shutdown()
            self._pool = None


__all__ = [
    "Executor",
    "ProcessExecutor",
    "STATUS_EXHAUSTED",
    "STATUS_FAILED",
    "STATUS_SKIPPED",
    "STATUS_SOLVED",
    "SequentialExecutor",
    "run_branch",
]
