"""Configured facade around the propagation solver."""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from contracts.errors import SolveError, Unsatisfiable
from contracts.schema_validator import validate_verdict
from contracts.verdict import SolveResult
from orchestrator import log as event_log
from orchestrator.executor import ProcessExecutor, SequentialExecutor
from orchestrator.scheduler import Scheduler
from project_config import get_config
from solver import DESCRIPTOR
from solver.codec import parse_grid, values_to_string
from solver.search import TRACE_LEVELS, BranchTraceRecorder, SearchLimits, SearchStats, search

_LOGGER = logging.getLogger(__name__)

EXECUTORS = ("inline", "sequential", "process")


def _build_env(overrides: Mapping[str, str] | None = None) -> Dict[str, str]:
    """Merge process environment with optional overrides."""

    env: Dict[str, str] = {str(k): str(v) for k, v in os.environ.items()}
    if overrides:
        env.update({str(k): str(v) for k, v in overrides.items()})
    return env


@dataclass(frozen=True)
class SolverSettings:
    """Finalised solver policy after precedence resolution."""

    max_nodes: int | None
    executor: str
    workers: int
    trace_level: str
    events_enabled: bool
    events_dir: str
    events_max_bytes: int
    validate_verdict: bool


_DEFAULTS = SolverSettings(
    max_nodes=500_000,
    executor="inline",
    workers=4,
    trace_level="none",
    events_enabled=False,
    events_dir="logs/solve",
    events_max_bytes=100 * 1024 * 1024,
    validate_verdict=True,
)


def _parse_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in {"1", "true", "yes", "on"}:
            return True
        if normalised in {"0", "false", "no", "off"}:
            return False
    return None


def _parse_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip():
            return int(value)
    except (TypeError, ValueError):
        return None
    return None


def _parse_choice(value: Any, choices: tuple[str, ...]) -> Optional[str]:
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in choices:
            return normalised
    return None


def _apply_overrides(settings: SolverSettings, overrides: Mapping[str, Any]) -> SolverSettings:
    changes: Dict[str, Any] = {}

    if "max_nodes" in overrides:
        raw = overrides["max_nodes"]
        maybe = None if raw is None else _parse_int(raw)
        if raw is None or maybe == 0:
            changes["max_nodes"] = None
        elif maybe is not None and maybe > 0:
            changes["max_nodes"] = maybe
    if "executor" in overrides:
        choice = _parse_choice(overrides["executor"], EXECUTORS)
        if choice is not None:
            changes["executor"] = choice
    if "workers" in overrides:
        maybe = _parse_int(overrides["workers"])
        if maybe is not None and maybe > 0:
            changes["workers"] = maybe
    if "trace_level" in overrides:
        choice = _parse_choice(overrides["trace_level"], TRACE_LEVELS)
        if choice is not None:
            changes["trace_level"] = choice
    if "events_enabled" in overrides:
        flag = _parse_bool(overrides["events_enabled"])
        if flag is not None:
            changes["events_enabled"] = flag
    if "events_dir" in overrides:
        value = overrides["events_dir"]
        if isinstance(value, str) and value:
            changes["events_dir"] = value
    if "events_max_bytes" in overrides:
        maybe = _parse_int(overrides["events_max_bytes"])
        if maybe is not None and maybe > 0:
            changes["events_max_bytes"] = maybe
    if "validate_verdict" in overrides:
        flag = _parse_bool(overrides["validate_verdict"])
        if flag is not None:
            changes["validate_verdict"] = flag

    return replace(settings, **changes)


def _config_overrides() -> Dict[str, Any]:
    config = get_config()
    solver_cfg = config.get("solver", {})
    log_cfg = config.get("log", {})
    verdict_cfg = config.get("verdict", {})

    payload: Dict[str, Any] = {}
    if isinstance(solver_cfg, dict):
        for key in ("max_nodes", "executor", "workers", "trace_level"):
            if key in solver_cfg:
                payload[key] = solver_cfg[key]
    if isinstance(log_cfg, dict):
        for source, target in (
            ("events_enabled", "events_enabled"),
            ("events_dir", "events_dir"),
            ("max_bytes", "events_max_bytes"),
        ):
            if source in log_cfg:
                payload[target] = log_cfg[source]
    if isinstance(verdict_cfg, dict) and "validate" in verdict_cfg:
        payload["validate_verdict"] = verdict_cfg["validate"]
    return payload


_ENV_KEYS = {
    "max_nodes": "MAX_NODES",
    "executor": "EXECUTOR",
    "workers": "WORKERS",
    "trace_level": "TRACE_LEVEL",
    "events_enabled": "EVENTS_ENABLED",
    "events_dir": "EVENTS_DIR",
    "events_max_bytes": "EVENTS_MAX_BYTES",
    "validate_verdict": "VALIDATE_VERDICT",
}


def _env_overrides(env: Mapping[str, str], prefix: str) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for field, suffix in _ENV_KEYS.items():
        key = f"{prefix}{suffix}"
        if key in env:
            payload[field] = env[key]
    return payload


def resolve_settings(
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> SolverSettings:
    """Resolve settings: defaults < config.toml < ``SUDOKU_*`` < ``CLI_SUDOKU_*`` < overrides."""

    env_map = _build_env(env)
    settings = _apply_overrides(_DEFAULTS, _config_overrides())
    settings = _apply_overrides(settings, _env_overrides(env_map, "SUDOKU_"))
    settings = _apply_overrides(settings, _env_overrides(env_map, "CLI_SUDOKU_"))
    if overrides:
        settings = _apply_overrides(settings, overrides)
    return settings


def _run_search(grid: str, settings: SolverSettings, stats: SearchStats, recorder: BranchTraceRecorder | None) -> str:
    store = parse_grid(grid)
    if settings.executor == "inline":
        result = search(store, limits=SearchLimits(max_nodes=settings.max_nodes), stats=stats, recorder=recorder)
    else:
        executor = (
            ProcessExecutor(max_workers=settings.workers)
            if settings.executor == "process"
            else SequentialExecutor()
        )
        scheduler = Scheduler(executor)
        try:
            result = scheduler.solve(store, max_nodes=settings.max_nodes, stats=stats)
        finally:
            scheduler.shutdown()
    if result is None:
        raise Unsatisfiable("no assignment satisfies every unit")
    return values_to_string(result)


def _emit_event(result: SolveResult, settings: SolverSettings) -> Path:
    return event_log.open_log(settings.events_dir, settings.events_max_bytes).append(result)


def solve(
    grid: str,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
    recorder: BranchTraceRecorder | None = None,
) -> SolveResult:
    """Solve ``grid`` under the resolved settings and return a typed verdict.

    Puzzle-level failures (malformed input, contradictions, exhausted budget)
    are reported through :attr:`SolveResult.status`; they never raise.
    """

    settings = resolve_settings(env, overrides)
    if recorder is None and settings.trace_level != "none":
        recorder = BranchTraceRecorder(trace_level=settings.trace_level)

    stats = SearchStats()
    failure: SolveError | None = None
    solution = ""
    started = time.perf_counter()
    try:
        solution = _run_search(grid, settings, stats, recorder)
    except SolveError as exc:
        failure = exc
    elapsed = int((time.perf_counter() - started) * 1000)

    common: Dict[str, Any] = {
        "module_id": DESCRIPTOR["module_id"],
        "stats": stats,
        "time_ms": elapsed,
        "trace": recorder.snapshot() if recorder is not None else None,
    }
    if failure is not None:
        result = SolveResult.failed(grid, failure, **common)
        _LOGGER.info("solve failed: %s (nodes=%d)", failure, stats.nodes)
    else:
        result = SolveResult.solved(grid, solution, **common)
        _LOGGER.info("solved in %d ms (nodes=%d, depth=%d)", elapsed, stats.nodes, stats.max_depth)

    if settings.validate_verdict:
        validate_verdict(result.to_payload())
    if settings.events_enabled:
        _emit_event(result, settings)
    return result


__all__ = ["EXECUTORS", "SolverSettings", "resolve_settings", "solve"]
