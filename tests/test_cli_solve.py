from __future__ import annotations

import json

import pytest

from tools.cli import solve as cli

GRID1 = "003020600900305001001806400008102900700000008006708200002609500800203009005010300"
GRID2 = "4.....8.5.3..........7......2.....6.....8.4......1.......6.3.7.5..2.....1.4......"


def test_solves_puzzle_argument(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([GRID1]) == 0
    out = capsys.readouterr().out
    assert out.startswith("arg1\n. . 3 | . 2 . | 6 . .")
    assert "4 8 3 | 9 2 1 | 6 5 7" in out
    assert "nodes=1 depth=0" in out


def test_unsolvable_puzzle_sets_exit_code(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--json", "77" + "." * 79]) == 1
    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["name"] == "arg1"
    assert payload[0]["status"] == "unsatisfiable"
    assert payload[0]["solution"] is None


def test_invalid_puzzle_is_printed_raw(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["12345"]) == 1
    out = capsys.readouterr().out
    assert "12345" in out
    assert "Not able to solve (invalid)" in out


def test_reads_puzzle_file(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "puzzles.txt"
    path.write_text(f"# two puzzles\n{GRID1}\n\n{GRID2}\n", encoding="utf-8")
    assert cli.main(["--file", str(path), "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [item["name"] for item in payload] == ["puzzles.txt:1", "puzzles.txt:2"]
    assert all(item["status"] == "solved" for item in payload)


def test_budget_flag_and_trace(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--max-nodes", "1", "." * 81]) == 1
    assert "Not able to solve (exhausted)" in capsys.readouterr().out

    assert cli.main(["--trace", "branches", GRID2]) == 0
    assert "  depth=0 " in capsys.readouterr().out

    assert cli.main(["--json", "--trace", "branches", GRID2]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["trace"][-1]["outcome"] == "solved"


def test_events_dir_flag_writes_log(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--events-dir", str(tmp_path), GRID1]) == 0
    capsys.readouterr()
    assert len(list(tmp_path.glob("**/solve_*.jsonl"))) == 1


def test_no_puzzles_is_an_error() -> None:
    with pytest.raises(SystemExit):
        cli.main([])


def test_builtin_examples() -> None:
    assert set(cli.EXAMPLE_PUZZLES) == {"grid1", "grid2", "hard"}
    assert cli.EXAMPLE_PUZZLES["grid1"] == GRID1
