"""
The 27 Sudoku units: nine rows, nine columns and nine 3x3 blocks.
"""
from dataclasses import dataclass
from typing import Iterator, List

from Puzzle.location import Location
from .location_set import BLOCK_SETS, COL_SETS, ROW_SETS, LocationSet


@dataclass(frozen=True)
class Group:
    kind: str  # 'row', 'col' or 'block'
    index: int
    locations: LocationSet

    def __iter__(self) -> Iterator[Location]:
        return iter(self.locations)

    def __repr__(self):
        return f"Group({self.kind} {self.index})"


ROWS: List[Group] = [Group("row", i, s) for i, s in enumerate(ROW_SETS)]
COLS: List[Group] = [Group("col", i, s) for i, s in enumerate(COL_SETS)]
BLOCKS: List[Group] = [Group("block", i, s) for i, s in enumerate(BLOCK_SETS)]
GROUPS: List[Group] = ROWS + COLS + BLOCKS
