"""Port facades exposing configured solver entry points."""

from __future__ import annotations

from .solver_port import SolverSettings, resolve_settings, solve

__all__ = ["SolverSettings", "resolve_settings", "solve"]
