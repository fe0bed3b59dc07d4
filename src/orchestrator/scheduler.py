"""Fan out the root search decision across an executor."""

from __future__ import annotations

import logging
from typing import List, Optional

from contracts.errors import SearchExhausted
from solver.candidates import CandidateStore
from solver.search import SearchStats, select_cell

from .executor import (
    STATUS_EXHAUSTED,
    STATUS_SOLVED,
    Executor,
    SequentialExecutor,
)
from .task import BranchResult, BranchTask

_LOGGER = logging.getLogger(__name__)


class Scheduler:
    """Deterministic branch scheduler with sequential policy by default.

    The answer is always the one plain search would return: results are
    scanned in ascending digit order and the first solved branch wins.  The
    node budget applies to each branch separately.
    """

    def __init__(self, executor: Executor | None = None) -> None:
        self.executor = executor or SequentialExecutor()

    def build_task_graph(self, store: CandidateStore, *, max_nodes: int | None = None) -> List[BranchTask]:
        """Build one task per candidate of the root MRV cell."""

        cell = select_cell(store)
        if cell is None:
            return []
        masks = store.masks
        return [BranchTask(cell=cell, digit=digit, masks=masks, max_nodes=max_nodes) for digit in store.candidates(cell)]

    def submit(self, tasks: List[BranchTask]) -> List[BranchResult]:
        return self.executor.submit(tasks)

    def solve(
        self,
        store: CandidateStore | None,
        *,
        max_nodes: int | None = None,
        stats: SearchStats | None = None,
    ) -> Optional[CandidateStore]:
        if store is None:
            return None
        stats = stats if stats is not None else SearchStats()
        stats.nodes += 1
        tasks = self.build_task_graph(store, max_nodes=max_nodes)
        if not tasks:
            return store

        _LOGGER.debug("scheduling %d root branches on cell %d", len(tasks), tasks[0].cell)
        results = self.submit(tasks)
        for result in results:
            stats.merge(result.stats, depth_offset=1)
        for result in results:
            if result.status == STATUS_SOLVED and result.masks is not None:
                return CandidateStore(result.masks)
            if result.status == STATUS_EXHAUSTED:
                raise SearchExhausted(max_nodes or 0)
        stats.backtracks += 1
        return None

    def shutdown(self) -> None:
        self.executor.shutdown()


__all__ = ["Scheduler"]
