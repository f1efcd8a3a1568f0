"""
Grid coordinates shared by the Sudoku and Camping solvers.
"""
from typing import Iterator, List, NamedTuple, Tuple

Dim = Tuple[int, int]


class Location(NamedTuple):
    """A (row, col) pair on a rectangular grid"""
    row: int
    col: int

    def transpose(self) -> "Location":
        return Location(self.col, self.row)

    def adjacents(self, dim: Dim) -> List["Location"]:
        """Orthogonal neighbours that lie inside a grid of shape `dim`"""
        height, width = dim
        row, col = self
        candidates = [(row - 1, col), (row, col + 1), (row + 1, col), (row, col - 1)]
        return [Location(r, c) for r, c in candidates if 0 <= r < height and 0 <= c < width]

    def neighbors(self, dim: Dim) -> List["Location"]:
        """All eight surrounding cells that lie inside a grid of shape `dim`"""
        height, width = dim
        row, col = self
        out = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                r, c = row + dr, col + dc
                if 0 <= r < height and 0 <= c < width:
                    out.append(Location(r, c))
        return out

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


def grid_iter(dim: Dim) -> Iterator[Location]:
    """Row-major walk over every location of a grid"""
    height, width = dim
    for row in range(height):
        for col in range(width):
            yield Location(row, col)
