"""JSONL log of solve verdicts, one directory per UTC day."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from contracts.verdict import SolveResult

__all__ = ["DEFAULT_MAX_BYTES", "SolveEventLog", "open_log", "solve_record"]

DEFAULT_MAX_BYTES = 100 * 1024 * 1024
_PREFIX = "solve_"


def solve_record(result: SolveResult, now: datetime) -> Dict[str, Any]:
    """Flatten ``result`` into the line written for one solve."""

    record: Dict[str, Any] = {
        "event": "solve",
        "ts": now.isoformat(timespec="milliseconds"),
        "module_id": result.module_id,
        "status": result.status,
        "puzzle": result.puzzle,
        "solution": result.solution,
        "error": result.error,
        "nodes": result.stats.nodes,
        "max_depth": result.stats.max_depth,
        "backtracks": result.stats.backtracks,
        "time_ms": int(result.time_ms),
    }
    if result.trace is not None:
        record["branches"] = len(result.trace)
    return record


def _file_index(path: Path) -> int:
    return int(path.stem[len(_PREFIX):])


class SolveEventLog:
    """Appends solve records to ``<base_dir>/<YYYYMMDD>/solve_NN.jsonl``.

    A file is closed for writing once the next record would push it past
    ``max_bytes``; an empty file always accepts one record.  A fresh instance
    resumes the highest-numbered file of the day.
    """

    def __init__(self, base_dir: str | Path, *, max_bytes: int | None = None) -> None:
        self.base_dir = Path(base_dir)
        self.max_bytes = max_bytes or DEFAULT_MAX_BYTES
        self._lock = threading.Lock()
        self._active: Path | None = None

    @property
    def active_path(self) -> Path | None:
        return self._active

    def _target(self, pending: int, now: datetime) -> Path:
        day_dir = self.base_dir / now.strftime("%Y%m%d")
        day_dir.mkdir(parents=True, exist_ok=True)
        if self._active is None or self._active.parent != day_dir:
            existing = sorted(day_dir.glob(f"{_PREFIX}[0-9]*.jsonl"), key=_file_index)
            self._active = existing[-1] if existing else day_dir / f"{_PREFIX}00.jsonl"

        size = self._active.stat().st_size if self._active.exists() else 0
        if size and size + pending > self.max_bytes:
            self._active = day_dir / f"{_PREFIX}{_file_index(self._active) + 1:02d}.jsonl"
        return self._active

    def append(self, result: SolveResult, *, now: datetime | None = None) -> Path:
        """Write one record for ``result`` and return the file it landed in."""

        now = now or datetime.now(timezone.utc)
        line = json.dumps(solve_record(result, now), sort_keys=True, ensure_ascii=False) + "\n"
        with self._lock:
            path = self._target(len(line.encode("utf-8")), now)
            with path.open("a", encoding="utf-8") as handle:
                handle.write(line)
        return path


@lru_cache(maxsize=8)
def open_log(base_dir: str, max_bytes: int) -> SolveEventLog:
    """Return the shared log for ``base_dir`` rotating at ``max_bytes``."""

    return SolveEventLog(base_dir, max_bytes=max_bytes)
