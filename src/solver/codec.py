"""Conversion between 81-character grid strings and candidate stores."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from contracts.errors import InvalidPuzzle

from .candidates import CandidateStore
from .propagation import assign
from .topology import CELL_COUNT, DIGITS, TOPOLOGY, Topology

_LOGGER = logging.getLogger(__name__)

BLANKS = "0."
RECOGNISED = DIGITS + BLANKS


def grid_values(grid: str) -> Tuple[str, ...]:
    """Return the recognised characters of ``grid`` in row-major order.

    Digits ``1``-``9`` are givens, ``0`` and ``.`` are blanks, everything else
    (whitespace, separators from pretty-printed grids) is skipped.
    """

    chars = tuple(ch for ch in grid if ch in RECOGNISED)
    if len(chars) != CELL_COUNT:
        raise InvalidPuzzle(f"expected {CELL_COUNT} cells, found {len(chars)}")
    return chars


def givens(grid: str) -> Dict[int, int]:
    """Map cell index to given digit for every non-blank cell."""

    return {cell: int(ch) for cell, ch in enumerate(grid_values(grid)) if ch in DIGITS}


def normalise_grid(grid: str) -> str:
    """Return the 81 recognised characters with blanks rendered as ``.``."""

    return "".join("." if ch in BLANKS else ch for ch in grid_values(grid))


def parse_grid(grid: str, topology: Topology = TOPOLOGY) -> Optional[CandidateStore]:
    """Seed a candidate store from ``grid`` and propagate every given.

    Returns ``None`` when the givens already contradict each other.
    """

    store = CandidateStore.full()
    for cell, digit in givens(grid).items():
        if assign(store, cell, digit, topology) is None:
            _LOGGER.debug("given %d at %s contradicts earlier givens", digit, topology.cell_label(cell))
            return None
    return store


def values_to_string(store: CandidateStore) -> str:
    """Render a fully determined store as an 81-character digit string."""

    out = []
    for cell in range(CELL_COUNT):
        value = store.value(cell)
        if value is None:
            raise ValueError(f"cell {TOPOLOGY.cell_label(cell)} is not determined")
        out.append(str(value))
    return "".join(out)


__all__ = [
    "BLANKS",
    "RECOGNISED",
    "givens",
    "grid_values",
    "normalise_grid",
    "parse_grid",
    "values_to_string",
]
