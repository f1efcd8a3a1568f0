"""
Immutable 9x9 Sudoku board: the puzzle as read from disk and the answer as
written back. Empty cells are stored as 0 in the array and exposed as None.
"""
from typing import Iterator, List, Optional, Tuple

import numpy as np

from Puzzle.errors import (
    DuplicateBlockValue,
    DuplicateColumnValue,
    DuplicateRowValue,
    ParseError,
)
from Puzzle.location import Location
from .group import GROUPS

EMPTY_CHAR = '.'


class Board:
    """81 cells, each empty or holding a digit 1..9"""

    def __init__(self, cells: np.ndarray):
        cells = np.array(cells, dtype=np.uint8).reshape(9, 9)
        if cells.max(initial=0) > 9:
            raise ValueError("Board values must be in 0..9 (0 meaning empty)")
        cells.flags.writeable = False
        self.cells = cells

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------
    @classmethod
    def from_line(cls, line: str, empty_char: str = EMPTY_CHAR) -> "Board":
        """Parse one 81-character line"""
        if len(line) != 81:
            raise ParseError(f"Line must be exactly 81 characters long, but is {len(line)}. Line: '{line}'")
        values = [
            _parse_char(c, empty_char, f"index {index} in line '{line}'")
            for index, c in enumerate(line)
        ]
        return cls(np.array(values, dtype=np.uint8))

    @classmethod
    def from_grid(cls, grid: str, empty_char: str = EMPTY_CHAR) -> "Board":
        """Parse nine newline-terminated lines of nine characters (90 chars in total)"""
        if len(grid) != 90:
            raise ParseError(
                f"Grid must be exactly 90 characters long (81 for grid, 9 for newlines), "
                f"but is {len(grid)}. Grid: '{grid}'"
            )
        lines = grid.split('\n')
        if lines[-1] == '':
            lines.pop()
        if len(lines) != 9:
            raise ParseError(f"Grid must have exactly 9 lines, but has {len(lines)}.")

        values = []
        for row_index, line in enumerate(lines):
            if len(line) != 9:
                raise ParseError(f"Line must be exactly 9 characters long, but is {len(line)}. Line: '{line}'")
            for col_index, c in enumerate(line):
                values.append(
                    _parse_char(c, empty_char, f"row {row_index}, column {col_index} in grid '{grid}'")
                )
        return cls(np.array(values, dtype=np.uint8))

    @classmethod
    def from_solve_state(cls, state) -> "Board":
        """Project a solver state: fixed cells keep their value, the rest become empty"""
        values = [cell.value or 0 for cell in state.cells]
        return cls(np.array(values, dtype=np.uint8))

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------
    def __getitem__(self, loc: Tuple[int, int]) -> Optional[int]:
        value = int(self.cells[loc[0], loc[1]])
        return value or None

    def values(self) -> Iterator[Tuple[Location, Optional[int]]]:
        """Row-major (location, value) pairs"""
        for (row, col), value in np.ndenumerate(self.cells):
            yield Location(row, col), (int(value) or None)

    def finished(self) -> bool:
        return bool(np.all(self.cells != 0))

    def num_filled(self) -> int:
        return int(np.count_nonzero(self.cells))

    def validate(self) -> None:
        """Raise the first duplicate found in any row, column or block"""
        for group in GROUPS:
            seen = set()
            for loc in group:
                value = self[loc]
                if value is None:
                    continue
                if value in seen:
                    if group.kind == "row":
                        raise DuplicateRowValue(group.index, value)
                    if group.kind == "col":
                        raise DuplicateColumnValue(group.index, value)
                    raise DuplicateBlockValue(group.index, value)
                seen.add(value)

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------
    def to_line(self, empty_char: str = EMPTY_CHAR) -> str:
        return ''.join(_to_char(v, empty_char) for v in self.cells.flat)

    def to_grid(self, empty_char: str = EMPTY_CHAR) -> str:
        """Compact form accepted by from_grid"""
        return ''.join(
            ''.join(_to_char(v, empty_char) for v in row) + '\n' for row in self.cells
        )

    def to_pretty(self, empty_char: str = ' ') -> str:
        lines: List[str] = []
        for row_index, row in enumerate(self.cells):
            if row_index % 3 == 0:
                lines.append("+-------+-------+-------+")
            parts = []
            for col_index, v in enumerate(row):
                if col_index % 3 == 0:
                    parts.append("| ")
                parts.append(_to_char(v, empty_char) + " ")
            lines.append(''.join(parts) + "|")
        lines.append("+-------+-------+-------+")
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.to_pretty()

    def __repr__(self) -> str:
        return f"Board('{self.to_line()}')"

    def __eq__(self, other) -> bool:
        return isinstance(other, Board) and np.array_equal(self.cells, other.cells)

    def __hash__(self) -> int:
        return hash(self.cells.tobytes())


def _parse_char(c: str, empty_char: str, where: str) -> int:
    if c == empty_char:
        return 0
    if c == '0':
        raise ParseError(f"Invalid digit '0' at {where}. '0' is not a valid character")
    if c in "123456789":
        return int(c)
    raise ParseError(f"Invalid character '{c}' at {where}.")


def _to_char(value, empty_char: str) -> str:
    return str(int(value)) if value else empty_char
