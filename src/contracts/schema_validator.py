"""JSON Schema validation for solve verdict payloads."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping

import jsonschema

from solver.codec import givens
from solver.topology import TOPOLOGY


class SchemaValidationError(RuntimeError):
    """Exception raised when a payload fails validation."""

    def __init__(self, code: str, detail: str | None = None) -> None:
        self.code = code
        self.detail = detail
        message = code if detail is None else f"{code}:{detail}"
        super().__init__(message)


_SCHEMA_ROOT = Path(__file__).resolve().parent / "schemas"
_VERDICT_SCHEMA = "verdict.schema.json"

_schema_cache: Dict[str, Dict[str, Any]] = {}


def load_schema(name: str) -> Dict[str, Any]:
    """Load a schema from the bundled ``schemas`` directory."""

    if name in _schema_cache:
        return _schema_cache[name]
    path = _SCHEMA_ROOT / name
    try:
        schema = json.loads(path.read_text("utf-8"))
    except FileNotFoundError as exc:
        raise SchemaValidationError("schema-not-found", name) from exc
    _schema_cache[name] = schema
    return schema


def _invariant(detail: str) -> None:
    raise SchemaValidationError("invariant-violation", detail)


def is_valid_solution(solution: str) -> bool:
    """Return ``True`` when every unit holds each digit 1-9 exactly once."""

    if len(solution) != len(TOPOLOGY.labels) or not solution.isdigit() or "0" in solution:
        return False
    full = set("123456789")
    return all({solution[cell] for cell in unit} == full for unit in TOPOLOGY.unit_list)


def _validate_solution(puzzle: str, solution: str) -> None:
    if not is_valid_solution(solution):
        _invariant("solution violates a row, column or box")
    for cell, digit in givens(puzzle).items():
        if solution[cell] != str(digit):
            _invariant(f"solution overrides given at {TOPOLOGY.cell_label(cell)}")


def validate_verdict(payload: Mapping[str, Any]) -> None:
    """Validate a verdict payload against the schema and solver invariants."""

    schema = load_schema(_VERDICT_SCHEMA)
    validator_cls = jsonschema.validators.validator_for(schema)
    validator = validator_cls(schema)
    errors = sorted(validator.iter_errors(dict(payload)), key=lambda err: list(err.path))
    if errors:
        first = errors[0]
        location = "/".join(str(part) for part in first.path) or "<root>"
        raise SchemaValidationError("schema-violation", f"{location}: {first.message}")

    status = payload["status"]
    solution = payload["solution"]
    if status == "solved":
        if solution is None:
            _invariant("solved verdict must carry a solution")
        _validate_solution(payload["puzzle"], solution)
    elif solution is not None:
        _invariant(f"{status} verdict must not carry a solution")


__all__ = ["SchemaValidationError", "is_valid_solution", "load_schema", "validate_verdict"]
