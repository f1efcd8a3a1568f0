"""
Camping (Tents-and-Trees) map: a grid of tiles plus per-row and per-column
tent requirements.

File format:
    H,W
    r0,r1,...        (H row requirements)
    c0,c1,...        (W column requirements)
    H lines of W characters: 'T' tree, 'X' tent, ' ' free, '#' blocked
"""
from enum import IntEnum
from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np

from Puzzle.errors import (
    InvalidMap,
    NeighbouringTents,
    ParseError,
    PlacementNotFree,
    PlacementOutOfBounds,
    TentNotAdjacentToTree,
    TooFewPossibleTentsInCol,
    TooFewPossibleTentsInRow,
    TooManyTentsInCol,
    TooManyTentsInRow,
)
from Puzzle.location import Dim, Location, grid_iter


class Tile(IntEnum):
    TREE = 0
    TENT = 1
    FREE = 2
    BLOCKED = 3

    @property
    def char(self) -> str:
        return _TILE_CHARS[self]

    @classmethod
    def from_char(cls, c: str) -> "Tile":
        try:
            return _CHAR_TILES[c]
        except KeyError:
            raise ParseError(f"Expected 'T', 'X', ' ', or '#'. Got '{c}'.") from None


_TILE_CHARS = {Tile.TREE: 'T', Tile.TENT: 'X', Tile.FREE: ' ', Tile.BLOCKED: '#'}
_CHAR_TILES = {c: t for t, c in _TILE_CHARS.items()}


class MapView:
    """
    Operations shared by a map and its transposed view.

    Everything here goes through `tiles` and the two requirement arrays, so a
    view whose `tiles` is the transpose of another map's array reads and
    writes that map with rows and columns exchanged.
    """

    tiles: np.ndarray
    row_requirements: np.ndarray
    col_requirements: np.ndarray

    @property
    def dim(self) -> Dim:
        height, width = self.tiles.shape
        return height, width

    @property
    def height(self) -> int:
        return self.tiles.shape[0]

    @property
    def width(self) -> int:
        return self.tiles.shape[1]

    def in_bounds(self, location: Location) -> bool:
        height, width = self.dim
        return 0 <= location.row < height and 0 <= location.col < width

    def get(self, location: Location) -> Optional[Tile]:
        if not self.in_bounds(location):
            return None
        return Tile(int(self.tiles[location.row, location.col]))

    def adjacents(self, location: Location) -> List[Tuple[Location, Tile]]:
        return [(loc, self.get(loc)) for loc in location.adjacents(self.dim)]

    def neighbors(self, location: Location) -> List[Tuple[Location, Tile]]:
        return [(loc, self.get(loc)) for loc in location.neighbors(self.dim)]

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------
    def _place(self, location: Location, tile: Tile) -> None:
        current = self.get(location)
        if current is None:
            raise PlacementOutOfBounds(location)
        if current != Tile.FREE:
            raise PlacementNotFree(location, current)
        self.tiles[location.row, location.col] = tile

    def place_tent(self, location: Location) -> None:
        self._place(location, Tile.TENT)

    def place_blocked(self, location: Location) -> None:
        self._place(location, Tile.BLOCKED)

    # -------------------------------------------------------------------------
    # Counting
    # -------------------------------------------------------------------------
    def row_tents(self, row_index: int) -> int:
        return int(np.count_nonzero(self.tiles[row_index] == Tile.TENT))

    def col_tents(self, col_index: int) -> int:
        return int(np.count_nonzero(self.tiles[:, col_index] == Tile.TENT))

    def num_possible_row_tents(self, row_index: int) -> int:
        """Tents that could still go in this row, judging by the row alone"""
        return _possible_tents(self.tiles[row_index])

    def num_possible_col_tents(self, col_index: int) -> int:
        return _possible_tents(self.tiles[:, col_index])

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------
    def validate(self) -> None:
        """
        Raise the first rule violation found:
         1. no row/column holds more tents than required, and each still has
            enough free tiles to reach its requirement
         2. every tent touches a tree orthogonally
         3. no two tents touch, diagonals included
        """
        tents = self.tiles == Tile.TENT
        possible = tents | (self.tiles == Tile.FREE)

        for row_index, required in enumerate(self.row_requirements):
            placed = int(np.count_nonzero(tents[row_index]))
            if placed > required:
                raise TooManyTentsInRow(row_index, placed, int(required))
            available = int(np.count_nonzero(possible[row_index]))
            if available < required:
                raise TooFewPossibleTentsInRow(row_index, available, int(required))

        for col_index, required in enumerate(self.col_requirements):
            placed = int(np.count_nonzero(tents[:, col_index]))
            if placed > required:
                raise TooManyTentsInCol(col_index, placed, int(required))
            available = int(np.count_nonzero(possible[:, col_index]))
            if available < required:
                raise TooFewPossibleTentsInCol(col_index, available, int(required))

        for row, col in zip(*np.nonzero(tents)):
            loc = Location(int(row), int(col))
            if not any(tile == Tile.TREE for _, tile in self.adjacents(loc)):
                raise TentNotAdjacentToTree(loc)
            for other, tile in self.neighbors(loc):
                if tile == Tile.TENT:
                    raise NeighbouringTents(loc, other)

    def is_valid(self) -> bool:
        try:
            self.validate()
        except InvalidMap:
            return False
        return True

    def is_complete(self) -> bool:
        """No free tiles left and every rule holds"""
        return not np.any(self.tiles == Tile.FREE) and self.is_valid()

    def free_locations(self):
        """Row-major iterator over free tiles"""
        for loc in grid_iter(self.dim):
            if self.tiles[loc.row, loc.col] == Tile.FREE:
                yield loc


class Map(MapView):
    """An owned tile grid with its requirements"""

    def __init__(self, tiles, row_requirements, col_requirements):
        tiles = np.array(tiles, dtype=np.int8)
        if tiles.ndim != 2:
            raise ValueError(f"Tiles must be a 2-D grid, got shape {tiles.shape}")
        self.tiles = tiles
        self.row_requirements = np.array(row_requirements, dtype=np.int64)
        self.col_requirements = np.array(col_requirements, dtype=np.int64)
        if len(self.row_requirements) != tiles.shape[0]:
            raise ValueError("One row requirement per row is needed")
        if len(self.col_requirements) != tiles.shape[1]:
            raise ValueError("One column requirement per column is needed")

    @classmethod
    def parse(cls, text: str) -> "Map":
        lines = text.splitlines()
        while lines and lines[-1] == '':
            lines.pop()
        if len(lines) < 3:
            raise ParseError(f"Expected a size line and two requirement lines, got {len(lines)} lines.")

        size = lines[0].split(',')
        if len(size) != 2:
            raise ParseError(f"Expected two integers separated by a comma. Got '{lines[0]}'.")
        height = _parse_count(size[0], "height")
        width = _parse_count(size[1], "width")

        row_requirements = _parse_requirements(lines[1], height)
        col_requirements = _parse_requirements(lines[2], width)

        rows = lines[3:]
        if len(rows) != height:
            raise ParseError(
                f"Dimensions of map must match dimensions given at start of file. "
                f"Expected {height} rows, got {len(rows)}."
            )
        tiles = []
        for row_index, line in enumerate(rows):
            if len(line) != width:
                raise ParseError(
                    f"Dimensions of map must match dimensions given at start of file. "
                    f"Row {row_index} has {len(line)} tiles, expected {width}."
                )
            tiles.append([Tile.from_char(c) for c in line])
        return cls(np.array(tiles, dtype=np.int8).reshape(height, width),
                   row_requirements, col_requirements)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Map":
        with open(path, 'r') as f:
            return cls.parse(f.read())

    def copy(self) -> "Map":
        return Map(self.tiles.copy(), self.row_requirements.copy(), self.col_requirements.copy())

    def transpose(self) -> "TransposedMap":
        return TransposedMap(self)

    def __str__(self) -> str:
        height, width = self.dim
        lines = [
            f"{height},{width}",
            ",".join(str(int(r)) for r in self.row_requirements),
            ",".join(str(int(c)) for c in self.col_requirements),
        ]
        for row in self.tiles:
            lines.append("".join(Tile(int(t)).char for t in row))
        return "\n".join(lines) + "\n"

    def __eq__(self, other) -> bool:
        return (isinstance(other, Map)
                and np.array_equal(self.tiles, other.tiles)
                and np.array_equal(self.row_requirements, other.row_requirements)
                and np.array_equal(self.col_requirements, other.col_requirements))

    def __repr__(self):
        return f"Map(height={self.height}, width={self.width})"


class TransposedMap(MapView):
    """Zero-copy view of a map with rows and columns exchanged"""

    def __init__(self, map: Map):
        self.map = map
        self.tiles = map.tiles.T
        self.row_requirements = map.col_requirements
        self.col_requirements = map.row_requirements

    def untranspose(self) -> Map:
        return self.map

    def transpose(self) -> Map:
        return self.map


def _possible_tents(line: np.ndarray) -> int:
    # a free tile means the next tile cannot hold a tent as well
    total = 0
    skip = False
    for tile in line:
        if skip:
            skip = False
        elif tile == Tile.FREE:
            total += 1
            skip = True
    return total


def _parse_count(field: str, name: str) -> int:
    try:
        value = int(field.strip())
    except ValueError:
        raise ParseError(f"Expected a non-negative integer {name}. Got '{field}'.") from None
    if value < 0:
        raise ParseError(f"Expected a non-negative integer {name}. Got '{field}'.")
    return value


def _parse_requirements(line: str, expected: int) -> List[int]:
    fields = line.split(',') if line else []
    try:
        values = [int(f.strip()) for f in fields]
    except ValueError:
        raise ParseError(f"Expected {expected} non-negative integers separated by commas. Got '{line}'.") from None
    if any(v < 0 for v in values):
        raise ParseError(f"Expected {expected} non-negative integers separated by commas. Got '{line}'.")
    if len(values) != expected:
        raise ParseError(
            f"Expected {expected} non-negative integers separated by commas. Got {len(values)} integers."
        )
    return values
