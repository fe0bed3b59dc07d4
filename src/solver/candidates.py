"""Per-solve candidate store backed by 9-bit masks."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Tuple

from .topology import CELL_COUNT

FULL_MASK = (1 << 9) - 1  # digits 1..9 -> bits 0..8


def digit_bit(digit: int) -> int:
    return 1 << (digit - 1)


def mask_digits(mask: int) -> Tuple[int, ...]:
    """Expand a candidate mask into ascending digits."""

    out = []
    bit = 1
    digit = 1
    while bit <= FULL_MASK:
        if mask & bit:
            out.append(digit)
        bit <<= 1
        digit += 1
    return tuple(out)


class CandidateStore:
    """Mapping from each of the 81 cells to its remaining digits.

    The store is mutated in place by the propagation engine.  Search clones it
    with :meth:`copy` before every speculative assignment so a failed branch
    never touches its parent's masks.
    """

    __slots__ = ("_masks",)

    def __init__(self, masks: Iterable[int]) -> None:
        self._masks: List[int] = list(masks)
        if len(self._masks) != CELL_COUNT:
            raise ValueError(f"expected {CELL_COUNT} masks, got {len(self._masks)}")

    @classmethod
    def full(cls) -> "CandidateStore":
        return cls([FULL_MASK] * CELL_COUNT)

    @property
    def masks(self) -> Tuple[int, ...]:
        return tuple(self._masks)

    def mask(self, cell: int) -> int:
        return self._masks[cell]

    def candidates(self, cell: int) -> Tuple[int, ...]:
        return mask_digits(self._masks[cell])

    def count(self, cell: int) -> int:
        return self._masks[cell].bit_count()

    def has(self, cell: int, digit: int) -> bool:
        return bool(self._masks[cell] & digit_bit(digit))

    def value(self, cell: int) -> int | None:
        """Return the determined digit of ``cell`` or ``None``."""

        mask = self._masks[cell]
        if mask and not mask & (mask - 1):
            return mask.bit_length()
        return None

    def discard(self, cell: int, digit: int) -> int:
        """Drop ``digit`` from ``cell`` and return the new mask."""

        mask = self._masks[cell] & ~digit_bit(digit)
        self._masks[cell] = mask
        return mask

    def is_solved(self) -> bool:
        return all(mask and not mask & (mask - 1) for mask in self._masks)

    def unsolved(self) -> Iterator[int]:
        """Yield cells that still hold more than one candidate."""

        for cell, mask in enumerate(self._masks):
            if mask & (mask - 1):
                yield cell

    def copy(self) -> "CandidateStore":
        return CandidateStore(self._masks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CandidateStore):
            return NotImplemented
        return self._masks == other._masks

    def __repr__(self) -> str:
        solved = sum(1 for mask in self._masks if mask and not mask & (mask - 1))
        return f"CandidateStore(solved={solved}/{CELL_COUNT})"


__all__ = ["CandidateStore", "FULL_MASK", "digit_bit", "mask_digits"]
