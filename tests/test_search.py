from __future__ import annotations

import pytest

from contracts.errors import SearchExhausted
from solver.candidates import CandidateStore
from solver.codec import parse_grid, values_to_string
from solver.search import (
    BranchTraceRecorder,
    SearchLimits,
    SearchStats,
    search,
    select_cell,
)

GRID2 = "4.....8.5.3..........7......2.....6.....8.4......1.......6.3.7.5..2.....1.4......"


def _store_with_counts(counts: dict[int, int]) -> CandidateStore:
    store = CandidateStore.full()
    for cell, keep in counts.items():
        for digit in range(keep + 1, 10):
            store.discard(cell, digit)
    return store


def test_select_cell_prefers_fewest_candidates() -> None:
    store = _store_with_counts({10: 4, 30: 3})
    assert select_cell(store) == 30


def test_select_cell_breaks_ties_by_lowest_index() -> None:
    store = _store_with_counts({50: 2, 7: 2, 20: 2})
    assert select_cell(store) == 7
    assert select_cell(CandidateStore.full()) == 0


def test_select_cell_skips_determined_cells() -> None:
    store = _store_with_counts({0: 1, 1: 3})
    assert select_cell(store) == 1


def test_search_passes_failure_through() -> None:
    assert search(None) is None


def test_search_returns_solved_store_as_is() -> None:
    solved = parse_grid("483921657967345821251876493548132976729564138136798245372689514814253769695417382")
    assert solved is not None
    assert search(solved) is solved


def test_search_leaves_input_untouched() -> None:
    store = parse_grid(GRID2)
    assert store is not None
    before = store.masks
    result = search(store)
    assert result is not None and result.is_solved()
    assert store.masks == before


def test_search_is_deterministic() -> None:
    first = search(parse_grid(GRID2))
    second = search(parse_grid(GRID2))
    assert first is not None and second is not None
    assert values_to_string(first) == values_to_string(second)


def test_stats_count_nodes() -> None:
    stats = SearchStats()
    search(parse_grid(GRID2), stats=stats)
    assert stats.nodes >= 2
    assert stats.max_depth >= 1
    assert stats.to_payload().keys() == {"nodes", "max_depth", "backtracks"}


def test_node_budget_raises_search_exhausted() -> None:
    stats = SearchStats()
    with pytest.raises(SearchExhausted) as excinfo:
        search(CandidateStore.full(), limits=SearchLimits(max_nodes=1), stats=stats)
    assert excinfo.value.max_nodes == 1
    assert excinfo.value.code == "search-exhausted"
    assert stats.nodes == 2


def test_recorder_collects_branches_only_when_enabled() -> None:
    silent = BranchTraceRecorder()
    search(parse_grid(GRID2), recorder=silent)
    assert silent.snapshot() == ()

    recorder = BranchTraceRecorder(trace_level="branches")
    search(parse_grid(GRID2), recorder=recorder)
    entries = recorder.snapshot()
    assert entries
    assert entries[-1].depth == 0
    assert entries[-1].outcome == "solved"
    assert {entry.outcome for entry in entries} <= {"solved", "failed", "contradiction"}
    recorder.reset()
    assert recorder.snapshot() == ()


def test_recorder_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        BranchTraceRecorder(trace_level="everything")
