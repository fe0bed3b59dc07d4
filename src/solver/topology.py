"""Static board structure: cells, units and peers of the classic 9x9 grid.

Cells are addressed by a dense index ``row * 9 + col`` (0..80).  The familiar
``A1``..``I9`` labels are kept for display and debugging only; every solver
table is keyed by the integer index.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Sequence, Tuple

ROWS = "ABCDEFGHI"
COLS = "123456789"
DIGITS = "123456789"
SIZE = 9
CELL_COUNT = SIZE * SIZE

Unit = Tuple[int, ...]


def cross(a: Sequence[str], b: Sequence[str]) -> Tuple[str, ...]:
    """Pair every element of ``a`` with every element of ``b`` (``a``-major)."""

    return tuple(x + y for x in a for y in b)


@dataclass(frozen=True)
class Topology:
    """Immutable unit and peer tables shared by every solve."""

    labels: Tuple[str, ...]
    unit_list: Tuple[Unit, ...]
    units: Tuple[Tuple[Unit, ...], ...]
    peers: Tuple[Tuple[int, ...], ...]

    def cell_index(self, label: str) -> int:
        return _LABEL_INDEX[label]

    def cell_label(self, cell: int) -> str:
        return self.labels[cell]


_LABELS = cross(ROWS, COLS)
_LABEL_INDEX: Dict[str, int] = {label: idx for idx, label in enumerate(_LABELS)}


def _indices(labels: Sequence[str]) -> Unit:
    return tuple(_LABEL_INDEX[label] for label in labels)


@lru_cache(maxsize=1)
def build_topology() -> Topology:
    """Compute the 27 units and the peer table once per process."""

    unit_list = tuple(
        [_indices(cross(ROWS, c)) for c in COLS]
        + [_indices(cross(r, COLS)) for r in ROWS]
        + [
            _indices(cross(rs, cs))
            for rs in ("ABC", "DEF", "GHI")
            for cs in ("123", "456", "789")
        ]
    )
    units = tuple(
        tuple(unit for unit in unit_list if cell in unit) for cell in range(CELL_COUNT)
    )
    peers = tuple(
        tuple(sorted({other for unit in units[cell] for other in unit} - {cell}))
        for cell in range(CELL_COUNT)
    )
    return Topology(labels=_LABELS, unit_list=unit_list, units=units, peers=peers)


TOPOLOGY = build_topology()


def units(cell: int) -> Tuple[Unit, ...]:
    """Return the row, column and box units containing ``cell``."""

    return TOPOLOGY.units[cell]


def peers(cell: int) -> Tuple[int, ...]:
    """Return the 20 cells sharing a unit with ``cell``."""

    return TOPOLOGY.peers[cell]


def cell_index(label: str) -> int:
    return _LABEL_INDEX[label]


def cell_label(cell: int) -> str:
    return _LABELS[cell]


__all__ = [
    "CELL_COUNT",
    "COLS",
    "DIGITS",
    "ROWS",
    "SIZE",
    "TOPOLOGY",
    "Topology",
    "Unit",
    "build_topology",
    "cell_index",
    "cell_label",
    "cross",
    "peers",
    "units",
]
