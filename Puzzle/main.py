#!/usr/bin/env python3
"""
Puzzle Solver - Main Entry Point

Usage:
    puzzle sudoku [<set>]      # data/sudoku/grids/<set>.txt -> output/sudoku/solutions/<set>.txt
    puzzle camping [<name>]    # data/camping/maps/<name>.txt -> data/camping/solutions/<name>.txt

Without a name every .txt file in the grids/ or maps/ directory is processed.
"""

import argparse
import multiprocessing
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional

from Camping.map import Map
from Camping.solver import CampingSolver
from Sudoku.board import Board
from Sudoku.solver import SudokuSolver

from .errors import InvalidBoard, InvalidMap, ParseError, StepBudgetExceeded, Unsolvable
from .output import SolutionFormatter

# ============================================================================
# CONFIGURATION
# ============================================================================
DATA_DIR = "data"                              # Root of the puzzle inputs
SUDOKU_OUTPUT_DIR = "output/sudoku/solutions"  # Sudoku solution files
CAMPING_OUTPUT_DIR = "data/camping/solutions"  # Camping solution files
RENDER_DIR = "data/debug"                      # PNG overlays when rendering is on

EMPTY_CHAR = '.'
# Placeholder for empty cells in Sudoku grid files (qqwing style)

STEP_BUDGET = 1000
# Maximum propagation iterations per Sudoku board; 0 or None disables the cap

WORKERS = 1
# Independent sets/maps solved in parallel; each worker writes its own file

RENDER = False
# Save a PNG overlay of every solved puzzle under RENDER_DIR
# ============================================================================


def _list_inputs(directory: Path) -> List[str]:
    return sorted(p.stem for p in directory.glob("*.txt") if p.is_file())


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{text}'") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {value}")
    return value


# -----------------------------------------------------------------------------
# Sudoku
# -----------------------------------------------------------------------------
def load_sudoku_set(path: Path, empty_char: str = EMPTY_CHAR) -> List[Board]:
    """Read one board per non-blank line"""
    boards = []
    with open(path, 'r') as f:
        for line_no, line in enumerate(f, 1):
            line = line.rstrip('\r\n')
            if not line.strip():
                continue
            try:
                boards.append(Board.from_line(line, empty_char))
            except ParseError as e:
                raise ParseError(f"{path}:{line_no}: {e}") from e
    return boards


def solve_sudoku_set(name: str, data_dir: str = DATA_DIR,
                     output_dir: str = SUDOKU_OUTPUT_DIR,
                     empty_char: str = EMPTY_CHAR,
                     step_budget: Optional[int] = STEP_BUDGET,
                     verbose: bool = False,
                     render: bool = RENDER,
                     render_dir: str = RENDER_DIR) -> Dict:
    """
    Solve every board of one set and write its solution file.

    Returns a totals dict; `error` is set when the set could not be loaded.
    """
    totals = {'name': name, 'solved': 0, 'total': 0, 'steps': 0, 'guesses': 0,
              'backtracks': 0, 'elapsed': 0.0, 'error': None, 'messages': []}
    input_path = Path(data_dir) / "sudoku" / "grids" / f"{name}.txt"

    try:
        boards = load_sudoku_set(input_path, empty_char)
    except (OSError, ParseError) as e:
        totals['error'] = f"Error loading sudoku set '{name}': {e}"
        return totals

    budget = step_budget if step_budget and step_budget > 0 else None
    start = time.perf_counter()
    results = []
    for index, board in enumerate(boards):
        totals['total'] += 1
        try:
            board.validate()
        except InvalidBoard as e:
            totals['messages'].append(f"✗ {name} grid {index}: invalid board: {e}")
            results.append((board, False))
            continue

        solver = SudokuSolver(board, step_budget=budget, verbose=verbose)
        try:
            solution = solver.solve()
        except (Unsolvable, StepBudgetExceeded) as e:
            totals['messages'].append(f"✗ {name} grid {index}: {e}")
            results.append((board, False))
        else:
            totals['solved'] += 1
            results.append((solution, True))
            if render:
                from .overlay import render_sudoku, save_overlay
                save_overlay(render_sudoku(solution, givens=board),
                             str(Path(render_dir) / name / f"grid_{index}.png"))
        finally:
            totals['steps'] += solver.stats['steps']
            totals['guesses'] += solver.stats['guesses']
            totals['backtracks'] += solver.stats['backtracks']
    totals['elapsed'] = time.perf_counter() - start

    try:
        SolutionFormatter.save_sudoku_solutions(results, Path(output_dir) / f"{name}.txt", empty_char)
    except OSError as e:
        totals['error'] = f"Error writing solutions for '{name}': {e}"
    return totals


# -----------------------------------------------------------------------------
# Camping
# -----------------------------------------------------------------------------
def solve_camping_map(name: str, data_dir: str = DATA_DIR,
                      output_dir: str = CAMPING_OUTPUT_DIR,
                      verbose: bool = False,
                      render: bool = RENDER,
                      render_dir: str = RENDER_DIR) -> Dict:
    """Solve one map file and write its solution file when one is found"""
    result = {'name': name, 'solved': False, 'stats': None, 'error': None, 'messages': []}
    input_path = Path(data_dir) / "camping" / "maps" / f"{name}.txt"

    try:
        puzzle = Map.from_file(input_path)
    except (OSError, ParseError) as e:
        result['error'] = f"Error creating map from file for '{name}': {e}"
        return result

    solver = CampingSolver(puzzle, verbose=verbose)
    try:
        solution = solver.solve()
    except InvalidMap as e:
        result['messages'].append(f"✗ Invalid map '{name}': {e}")
        return result
    except Unsolvable:
        result['stats'] = solver.stats
        result['messages'].append(SolutionFormatter.format_camping_result(name, False, solver.stats))
        return result

    result['stats'] = solver.stats
    try:
        SolutionFormatter.save_camping_solution(solution, Path(output_dir) / f"{name}.txt")
    except OSError as e:
        result['error'] = f"Failed to create solution file for map '{name}': {e}"
        return result
    result['solved'] = True
    result['messages'].append(SolutionFormatter.format_camping_result(name, True, solver.stats))
    if verbose:
        result['messages'].append(SolutionFormatter.format_camping_grid(solution))
    if render:
        from .overlay import render_camping, save_overlay
        save_overlay(render_camping(solution), str(Path(render_dir) / name / "solution.png"))
    return result


# -----------------------------------------------------------------------------
# Batch dispatch
# -----------------------------------------------------------------------------
def _sudoku_worker(kwargs: Dict) -> Dict:
    return solve_sudoku_set(**kwargs)


def _camping_worker(kwargs: Dict) -> Dict:
    return solve_camping_map(**kwargs)


def _dispatch(worker, jobs: List[Dict], workers: int) -> List[Dict]:
    if workers <= 1 or len(jobs) <= 1:
        return [worker(job) for job in jobs]
    with multiprocessing.Pool(processes=min(workers, len(jobs))) as pool:
        return pool.map(worker, jobs)


def run_sudoku(args: argparse.Namespace) -> int:
    data_dir = Path(args.data_dir)
    names = [args.name] if args.name else _list_inputs(data_dir / "sudoku" / "grids")
    if not names:
        print(f"No sudoku grid sets found in {data_dir / 'sudoku' / 'grids'}")
        return 0

    jobs = [dict(name=name, data_dir=args.data_dir,
                 output_dir=args.output_dir or SUDOKU_OUTPUT_DIR,
                 empty_char=args.empty_char, step_budget=args.step_budget,
                 verbose=args.verbose, render=args.render, render_dir=args.render_dir)
            for name in names]

    start = time.perf_counter()
    results = _dispatch(_sudoku_worker, jobs, args.workers)
    wall = time.perf_counter() - start

    failed = False
    for totals in results:
        for message in totals['messages']:
            print(f"  {message}")
        if totals['error']:
            print(totals['error'], file=sys.stderr)
            failed = True
            continue
        print(SolutionFormatter.format_sudoku_summary(totals['name'], totals))

    solved = sum(t['solved'] for t in results)
    total = sum(t['total'] for t in results)
    steps = sum(t['steps'] for t in results)
    guesses = sum(t['guesses'] for t in results)
    print(f"\n{'='*60}")
    print(f"Solved: {solved}/{total}")
    print(f"Steps: {steps}, guesses: {guesses}")
    print(f"Wall time: {wall:.3f}s")
    print(f"{'='*60}")
    return 1 if failed else 0


def run_camping(args: argparse.Namespace) -> int:
    data_dir = Path(args.data_dir)
    names = [args.name] if args.name else _list_inputs(data_dir / "camping" / "maps")
    if not names:
        print(f"No camping maps found in {data_dir / 'camping' / 'maps'}")
        return 0

    jobs = [dict(name=name, data_dir=args.data_dir,
                 output_dir=args.output_dir or CAMPING_OUTPUT_DIR,
                 verbose=args.verbose, render=args.render, render_dir=args.render_dir)
            for name in names]
    results = _dispatch(_camping_worker, jobs, args.workers)

    failed = False
    for result in results:
        for message in result['messages']:
            print(message)
        if result['error']:
            print(result['error'], file=sys.stderr)
            failed = True

    solved = sum(1 for r in results if r['solved'])
    print(f"\n{'='*60}")
    print(f"Solved: {solved}/{len(results)} maps")
    print(f"{'='*60}")
    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="puzzle", description="Solve Sudoku and Camping puzzles.")
    subparsers = parser.add_subparsers(dest="game", required=True)

    sudoku = subparsers.add_parser("sudoku", help="Solve Sudoku grid sets")
    sudoku.add_argument("name", nargs="?", help="Grid set name without extension (default: all)")
    sudoku.add_argument("--empty-char", default=EMPTY_CHAR, help="Placeholder for empty cells")
    sudoku.add_argument("--step-budget", type=_non_negative_int, default=STEP_BUDGET,
                        help="Propagation steps per board, 0 for no limit")
    sudoku.set_defaults(run=run_sudoku)

    camping = subparsers.add_parser("camping", help="Solve Camping maps")
    camping.add_argument("name", nargs="?", help="Map name without extension (default: all)")
    camping.set_defaults(run=run_camping)

    for sub in (sudoku, camping):
        sub.add_argument("--data-dir", default=DATA_DIR, help="Root directory of the puzzle inputs")
        sub.add_argument("--output-dir", default=None, help="Directory for solution files")
        sub.add_argument("--workers", type=int, default=WORKERS, help="Parallel worker processes")
        sub.add_argument("--render", action="store_true", default=RENDER, help="Save PNG overlays")
        sub.add_argument("--render-dir", default=RENDER_DIR, help="Directory for PNG overlays")
        sub.add_argument("-v", "--verbose", action="store_true", help="Print solver progress")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    return args.run(args)


if __name__ == "__main__":
    multiprocessing.freeze_support()
    sys.exit(main())
