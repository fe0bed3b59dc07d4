"""Constraint propagation: the mutually recursive ``assign``/``eliminate`` pair.

Both functions mutate the store in place and return it, or return ``None`` as
soon as a contradiction is found.  A ``None`` result poisons the whole store;
callers must discard it rather than keep propagating.
"""

from __future__ import annotations

from typing import Optional

from .candidates import CandidateStore, digit_bit, mask_digits
from .topology import TOPOLOGY, Topology


def assign(
    store: CandidateStore,
    cell: int,
    digit: int,
    topology: Topology = TOPOLOGY,
) -> Optional[CandidateStore]:
    """Constrain ``cell`` to ``digit`` by eliminating every other candidate."""

    others = store.mask(cell) & ~digit_bit(digit)
    for other in mask_digits(others):
        if eliminate(store, cell, other, topology) is None:
            return None
    return store


def eliminate(
    store: CandidateStore,
    cell: int,
    digit: int,
    topology: Topology = TOPOLOGY,
) -> Optional[CandidateStore]:
    """Remove ``digit`` from ``cell`` and propagate the consequences.

    Eliminating a digit that is already gone is a no-op.  Otherwise:

    * an emptied cell is a contradiction;
    * a cell reduced to one digit removes that digit from all of its peers;
    * a unit left with no place for ``digit`` is a contradiction, and a unit
      left with exactly one place assigns ``digit`` there.
    """

    bit = digit_bit(digit)
    if not store.mask(cell) & bit:
        return store

    remaining = store.discard(cell, digit)
    if not remaining:
        return None
    if not remaining & (remaining - 1):
        last = remaining.bit_length()
        for peer in topology.peers[cell]:
            if eliminate(store, peer, last, topology) is None:
                return None

    for unit in topology.units[cell]:
        places = [other for other in unit if store.mask(other) & bit]
        if not places:
            return None
        if len(places) == 1 and assign(store, places[0], digit, topology) is None:
            return None
    return store


__all__ = ["assign", "eliminate"]
