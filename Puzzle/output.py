"""
Solution files and run summaries.

Sudoku solution files hold one line per input grid: `<81-char board>,<true|false>`.
Camping solution files use the map file format with every free tile resolved.
"""
from pathlib import Path
from typing import Dict, List, Sequence, Union

from Camping.map import Map
from Sudoku.board import EMPTY_CHAR, Board

PathLike = Union[str, Path]


class SolutionFormatter:
    """Formats puzzle solutions for output"""

    @staticmethod
    def format_sudoku_line(board: Board, solved: bool, empty_char: str = EMPTY_CHAR) -> str:
        return f"{board.to_line(empty_char)},{'true' if solved else 'false'}"

    @staticmethod
    def parse_sudoku_line(line: str, empty_char: str = EMPTY_CHAR):
        """Inverse of format_sudoku_line: returns (board, solved)"""
        board_part, _, flag = line.strip().rpartition(',')
        return Board.from_line(board_part, empty_char), flag == 'true'

    @staticmethod
    def save_sudoku_solutions(results: Sequence, output_path: PathLike,
                              empty_char: str = EMPTY_CHAR) -> None:
        """
        Write one line per (board, solved) pair. Unsolved boards are written
        as given, followed by `false`.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            for board, solved in results:
                f.write(SolutionFormatter.format_sudoku_line(board, solved, empty_char) + "\n")

    @staticmethod
    def save_camping_solution(solution: Map, output_path: PathLike) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            f.write(str(solution))

    @staticmethod
    def format_sudoku_summary(name: str, totals: Dict) -> str:
        return (
            f"{name}: solved {totals['solved']}/{totals['total']}, "
            f"{totals['steps']} steps, {totals['guesses']} guesses, "
            f"{totals['elapsed']:.3f}s"
        )

    @staticmethod
    def format_camping_result(name: str, solved: bool, stats: Dict) -> str:
        if solved:
            return (f"✓ Solution for '{name}' found and written to file "
                    f"({stats['guesses']} guesses, {stats['backtracks']} backtracks).")
        return f"✗ No solution found for '{name}'."

    @staticmethod
    def format_camping_grid(solution: Map) -> str:
        """Bordered text rendering with requirements along the edges"""
        lines: List[str] = []
        width = solution.width
        lines.append("   " + "".join(str(int(c)) for c in solution.col_requirements))
        lines.append("  +" + "-" * width + "+")
        for row_index, row in enumerate(str(solution).splitlines()[3:]):
            lines.append(f"{int(solution.row_requirements[row_index]):>2}|{row}|")
        lines.append("  +" + "-" * width + "+")
        return "\n".join(lines)
