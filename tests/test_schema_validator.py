from __future__ import annotations

import pytest

from contracts.schema_validator import SchemaValidationError, is_valid_solution, validate_verdict

GRID1 = "003020600900305001001806400008102900700000008006708200002609500800203009005010300"
GRID1_SOLUTION = "483921657967345821251876493548132976729564138136798245372689514814253769695417382"


def _payload(**changes) -> dict:
    payload = {
        "schema_version": "1.0",
        "module_id": "sudoku-9x9:solver/propagation@1.0.0",
        "status": "solved",
        "puzzle": GRID1,
        "solution": GRID1_SOLUTION,
        "stats": {"nodes": 1, "max_depth": 0, "backtracks": 0},
        "time_ms": 3,
    }
    payload.update(changes)
    return payload


def test_valid_payload_passes() -> None:
    validate_verdict(_payload())
    validate_verdict(_payload(status="unsatisfiable", solution=None, error="unsatisfiable"))


def test_unknown_status_is_a_schema_violation() -> None:
    with pytest.raises(SchemaValidationError) as excinfo:
        validate_verdict(_payload(status="maybe"))
    assert excinfo.value.code == "schema-violation"
    assert excinfo.value.detail.startswith("status")


def test_extra_fields_are_rejected() -> None:
    with pytest.raises(SchemaValidationError):
        validate_verdict(_payload(extra=True))


def test_trace_entries_are_checked() -> None:
    entry = {"depth": 0, "cell": 4, "digit": 7, "outcome": "solved"}
    validate_verdict(_payload(trace=[entry]))
    with pytest.raises(SchemaValidationError) as excinfo:
        validate_verdict(_payload(trace=[{**entry, "digit": 0}]))
    assert excinfo.value.detail.startswith("trace/0/digit")


def test_solved_without_solution_is_rejected() -> None:
    with pytest.raises(SchemaValidationError) as excinfo:
        validate_verdict(_payload(solution=None))
    assert excinfo.value.code == "invariant-violation"


def test_failure_with_solution_is_rejected() -> None:
    with pytest.raises(SchemaValidationError) as excinfo:
        validate_verdict(_payload(status="exhausted"))
    assert excinfo.value.code == "invariant-violation"


def test_solution_must_respect_units_and_givens() -> None:
    swapped = GRID1_SOLUTION[1] + GRID1_SOLUTION[0] + GRID1_SOLUTION[2:]
    with pytest.raises(SchemaValidationError):
        validate_verdict(_payload(solution=swapped))

    other_puzzle = "9" + GRID1[1:]
    with pytest.raises(SchemaValidationError) as excinfo:
        validate_verdict(_payload(puzzle=other_puzzle))
    assert "A1" in str(excinfo.value)


def test_is_valid_solution() -> None:
    assert is_valid_solution(GRID1_SOLUTION)
    assert not is_valid_solution(GRID1)
    assert not is_valid_solution(GRID1_SOLUTION[:-1])
    assert not is_valid_solution("123456789" * 9)
