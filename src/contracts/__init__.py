"""Error taxonomy, verdict types and payload validation for the solver."""

from __future__ import annotations

from .errors import InvalidPuzzle, SearchExhausted, SolveError, Unsatisfiable

__all__ = [
    "InvalidPuzzle",
    "SearchExhausted",
    "SolveError",
    "Unsatisfiable",
]
