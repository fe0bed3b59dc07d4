"""Plain-text rendering of 81-character grids."""

from __future__ import annotations

from typing import List

from solver.codec import BLANKS, RECOGNISED

_RULE = "------+-------+------"


def format_grid(grid: str) -> str:
    """Render ``grid`` as a boxed 9x9 layout.

    Column bands are separated by ``|`` and row bands by a dashed rule; blanks
    (``0`` or ``.``) are shown as ``.``.  Characters outside the puzzle
    alphabet are ignored, so an already formatted grid renders unchanged.
    """

    cells = [ch for ch in grid if ch in RECOGNISED]
    if len(cells) != 81:
        raise ValueError(f"expected 81 cells, found {len(cells)}")

    lines: List[str] = []
    for row in range(9):
        if row in (3, 6):
            lines.append(_RULE)
        chunk = ["." if ch in BLANKS else ch for ch in cells[row * 9 : row * 9 + 9]]
        lines.append(" | ".join(" ".join(chunk[band : band + 3]) for band in (0, 3, 6)))
    return "\n".join(lines)


__all__ = ["format_grid"]
