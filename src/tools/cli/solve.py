"""Command line driver: solve puzzles and print them boxed or as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

from contracts.verdict import SolveResult
from ports import solver_port
from printer import format_grid
from project_config import get_section
from solver.search import TRACE_LEVELS
from solver.topology import cell_label

EXAMPLE_PUZZLES: Dict[str, str] = {
    "grid1": "003020600900305001001806400008102900700000008006708200002609500800203009005010300",
    "grid2": "4.....8.5.3..........7......2.....6.....8.4......1.......6.3.7.5..2.....1.4......",
    "hard": ".....6....59.....82....8....45........3........6..3.54...325..6..................",
}

_LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"


def _iter_puzzles(path: Path) -> Iterable[str]:
    for line in path.read_text("utf-8").splitlines():
        value = line.strip()
        if not value or value.startswith("#"):
            continue
        yield value


def _collect(args: argparse.Namespace) -> List[Tuple[str, str]]:
    named: List[Tuple[str, str]] = []
    if args.examples:
        named.extend(EXAMPLE_PUZZLES.items())
    if args.file:
        for idx, puzzle in enumerate(_iter_puzzles(Path(args.file)), start=1):
            named.append((f"{Path(args.file).name}:{idx}", puzzle))
    for idx, puzzle in enumerate(args.puzzles, start=1):
        named.append((f"arg{idx}", puzzle))
    return named


def _overrides(args: argparse.Namespace) -> Dict[str, object]:
    overrides: Dict[str, object] = {}
    if args.max_nodes is not None:
        overrides["max_nodes"] = args.max_nodes
    if args.executor is not None:
        overrides["executor"] = args.executor
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.trace != "none":
        overrides["trace_level"] = args.trace
    if args.events_dir is not None:
        overrides["events_enabled"] = True
        overrides["events_dir"] = args.events_dir
    return overrides


def _print_text(name: str, puzzle: str, result: SolveResult) -> None:
    print(name)
    try:
        print(format_grid(puzzle))
    except ValueError:
        print(puzzle)
    print()
    if result.ok and result.solution is not None:
        print(format_grid(result.solution))
    else:
        print(f"Not able to solve ({result.status}): {result.error}")
    print(
        f"nodes={result.stats.nodes} depth={result.stats.max_depth} "
        f"backtracks={result.stats.backtracks} time_ms={result.time_ms}"
    )
    for entry in result.trace or ():
        print(f"  depth={entry.depth} {cell_label(entry.cell)}={entry.digit} {entry.outcome}")
    print()


def cmd_solve(args: argparse.Namespace) -> int:
    puzzles = _collect(args)
    if not puzzles:
        raise SystemExit("No puzzles given; pass puzzle strings, --file or --examples")

    overrides = _overrides(args)
    payloads: List[dict] = []
    all_solved = True
    for name, puzzle in puzzles:
        result = solver_port.solve(puzzle, overrides=overrides)
        all_solved = all_solved and result.ok
        if args.json:
            payloads.append({"name": name, **result.to_payload()})
        else:
            _print_text(name, puzzle, result)

    if args.json:
        print(json.dumps(payloads, indent=2, sort_keys=True))
    return 0 if all_solved else 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve 9x9 Sudoku puzzles by constraint propagation and search")
    parser.add_argument("puzzles", nargs="*", help="81-character puzzles (0 or . for blanks)")
    parser.add_argument("--file", help="Read puzzles from a file, one per line ('#' starts a comment)")
    parser.add_argument("--examples", action="store_true", help="Solve the built-in example puzzles")
    parser.add_argument("--json", action="store_true", help="Print verdict payloads as JSON")
    parser.add_argument("--max-nodes", type=int, default=None, help="Search node budget (0 disables it)")
    parser.add_argument("--executor", choices=solver_port.EXECUTORS, default=None)
    parser.add_argument("--workers", type=int, default=None, help="Worker processes for --executor process")
    parser.add_argument("--trace", choices=TRACE_LEVELS, default="none", help="Print the branch trace")
    parser.add_argument("--events-dir", default=None, help="Append JSONL solve events under this directory")
    parser.add_argument("--log-level", default=None, help="Logging level (default from config.toml)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    level = args.log_level or str(get_section("log.level", "WARNING"))
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT)
    return cmd_solve(args)


if __name__ == "__main__":
    sys.exit(main())
