"""
Bit-set over the 81 cells of a Sudoku board, indexed row-major.
"""
from typing import Iterable, Iterator, List

from Puzzle.location import Location

_ALL_BITS = (1 << 81) - 1


def cell_index(loc: Location) -> int:
    """Row-major index of a location on the 9x9 board"""
    return loc.row * 9 + loc.col


def location_at(index: int) -> Location:
    if not 0 <= index < 81:
        raise IndexError(f"Board index must be in 0..80, got {index}")
    return Location(index // 9, index % 9)


class LocationSet:
    """Immutable set of board locations; iterates in ascending index order"""
    __slots__ = ("bits",)

    ALL: "LocationSet"
    NONE: "LocationSet"

    def __init__(self, locations: Iterable[Location] = ()):
        bits = 0
        for loc in locations:
            bits |= 1 << cell_index(loc)
        self.bits = bits

    @classmethod
    def _from_bits(cls, bits: int) -> "LocationSet":
        out = cls.__new__(cls)
        out.bits = bits & _ALL_BITS
        return out

    @classmethod
    def from_location(cls, loc: Location) -> "LocationSet":
        return cls._from_bits(1 << cell_index(loc))

    @classmethod
    def row(cls, row_index: int) -> "LocationSet":
        return cls(Location(row_index, col) for col in range(9))

    @classmethod
    def col(cls, col_index: int) -> "LocationSet":
        return cls(Location(row, col_index) for row in range(9))

    @classmethod
    def block(cls, block_index: int) -> "LocationSet":
        start_row = block_index // 3 * 3
        start_col = block_index % 3 * 3
        return cls(
            Location(start_row + dr, start_col + dc) for dr in range(3) for dc in range(3)
        )

    def count(self) -> int:
        return bin(self.bits).count("1")

    __len__ = count

    def is_superset(self, other: "LocationSet") -> bool:
        return self.bits & other.bits == other.bits

    def __contains__(self, loc: Location) -> bool:
        return bool(self.bits >> cell_index(loc) & 1)

    def __iter__(self) -> Iterator[Location]:
        bits = self.bits
        while bits:
            low = bits & -bits
            yield location_at(low.bit_length() - 1)
            bits ^= low

    # ---------- set algebra ----------

    def __or__(self, other: "LocationSet") -> "LocationSet":
        return LocationSet._from_bits(self.bits | other.bits)

    def __and__(self, other: "LocationSet") -> "LocationSet":
        return LocationSet._from_bits(self.bits & other.bits)

    def __sub__(self, other) -> "LocationSet":
        if isinstance(other, Location):
            other = LocationSet.from_location(other)
        return LocationSet._from_bits(self.bits & ~other.bits)

    def __invert__(self) -> "LocationSet":
        # masked to the 81-cell universe
        return LocationSet._from_bits(~self.bits)

    union = __or__
    intersection = __and__
    minus = __sub__
    complement = __invert__

    def __eq__(self, other) -> bool:
        return isinstance(other, LocationSet) and self.bits == other.bits

    def __hash__(self) -> int:
        return hash(self.bits)

    def __repr__(self) -> str:
        return f"LocationSet({[tuple(loc) for loc in self]})"


LocationSet.ALL = LocationSet._from_bits(_ALL_BITS)
LocationSet.NONE = LocationSet._from_bits(0)

ROW_SETS: List[LocationSet] = [LocationSet.row(i) for i in range(9)]
COL_SETS: List[LocationSet] = [LocationSet.col(i) for i in range(9)]
BLOCK_SETS: List[LocationSet] = [LocationSet.block(i) for i in range(9)]
