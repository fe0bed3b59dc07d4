"""Shared error types for puzzle solving."""

from __future__ import annotations

from typing import Optional

CODE_INVALID = "invalid-puzzle"
CODE_UNSATISFIABLE = "unsatisfiable"
CODE_EXHAUSTED = "search-exhausted"


class SolveError(RuntimeError):
    """Base class for failures that end a solve attempt."""

    code = "solve-error"

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail
        message = self.code if detail is None else f"{self.code}:{detail}"
        super().__init__(message)


class InvalidPuzzle(SolveError):
    """Input does not decode to an 81-cell grid."""

    code = CODE_INVALID


class Unsatisfiable(SolveError):
    """No assignment of digits satisfies every unit."""

    code = CODE_UNSATISFIABLE


class SearchExhausted(SolveError):
    """The search node budget ran out before a verdict was reached."""

    code = CODE_EXHAUSTED

    def __init__(self, max_nodes: int, detail: Optional[str] = None) -> None:
        self.max_nodes = max_nodes
        super().__init__(detail or f"max_nodes={max_nodes}")


__all__ = [
    "CODE_EXHAUSTED",
    "CODE_INVALID",
    "CODE_UNSATISFIABLE",
    "InvalidPuzzle",
    "SearchExhausted",
    "SolveError",
    "Unsatisfiable",
]
