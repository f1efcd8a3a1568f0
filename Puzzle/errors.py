"""
Exception taxonomy for parsing, validating and solving puzzles.

Every error keeps the fields it was built from as attributes so callers can
inspect them; the message is formatted once at construction time.
"""
from typing import Optional


class PuzzleError(Exception):
    """Base class for everything this project raises on purpose"""


class ParseError(PuzzleError, ValueError):
    """Malformed puzzle text"""


# -----------------------------------------------------------------------------
# Sudoku rule violations
# -----------------------------------------------------------------------------
class InvalidBoard(PuzzleError):
    """A Sudoku board breaks a puzzle rule"""


class DuplicateRowValue(InvalidBoard):
    def __init__(self, row: int, value: int):
        self.row = row
        self.value = value
        super().__init__(f"Value {value} appears more than once in row {row}.")


class DuplicateColumnValue(InvalidBoard):
    def __init__(self, col: int, value: int):
        self.col = col
        self.value = value
        super().__init__(f"Value {value} appears more than once in column {col}.")


class DuplicateBlockValue(InvalidBoard):
    def __init__(self, block: int, value: int):
        self.block = block
        self.value = value
        super().__init__(f"Value {value} appears more than once in block {block}.")


# -----------------------------------------------------------------------------
# Camping rule violations
# -----------------------------------------------------------------------------
class InvalidMap(PuzzleError):
    """A Camping map breaks a puzzle rule"""


class TooManyTentsInRow(InvalidMap):
    def __init__(self, row_index: int, placed: int, required: int):
        self.row_index = row_index
        self.placed = placed
        self.required = required
        super().__init__(f"Too many tents in row {row_index}. Placed {placed}, required {required}.")


class TooFewPossibleTentsInRow(InvalidMap):
    def __init__(self, row_index: int, possible: int, required: int):
        self.row_index = row_index
        self.possible = possible
        self.required = required
        super().__init__(
            f"Too few placable tents in row {row_index}. {possible} possible, {required} required."
        )


class TooManyTentsInCol(InvalidMap):
    def __init__(self, col_index: int, placed: int, required: int):
        self.col_index = col_index
        self.placed = placed
        self.required = required
        super().__init__(f"Too many tents in column {col_index}. Placed {placed}, required {required}.")


class TooFewPossibleTentsInCol(InvalidMap):
    def __init__(self, col_index: int, possible: int, required: int):
        self.col_index = col_index
        self.possible = possible
        self.required = required
        super().__init__(
            f"Too few placable tents in column {col_index}. {possible} possible, {required} required."
        )


class TentNotAdjacentToTree(InvalidMap):
    def __init__(self, location):
        self.location = location
        super().__init__(f"Tent not adjacent to tree at {location}.")


class NeighbouringTents(InvalidMap):
    def __init__(self, loc1, loc2):
        self.loc1 = loc1
        self.loc2 = loc2
        super().__init__(f"Pair of neighbouring tents at locations {loc1} and {loc2}.")


# -----------------------------------------------------------------------------
# Map mutation
# -----------------------------------------------------------------------------
class PlacementError(PuzzleError):
    """A tent or block could not be placed"""


class PlacementOutOfBounds(PlacementError):
    def __init__(self, location):
        self.location = location
        super().__init__(f"Location {location} is out of bounds.")


class PlacementNotFree(PlacementError):
    def __init__(self, location, tile):
        self.location = location
        self.tile = tile
        super().__init__(f"Location {location} is not free. Tile is {tile.name}.")


# -----------------------------------------------------------------------------
# Search outcomes
# -----------------------------------------------------------------------------
class Contradiction(PuzzleError):
    """Propagation ran into an impossible state; recovered by backtracking"""


class Unsolvable(PuzzleError):
    """The guess stack was exhausted without finding a solution"""


class StepBudgetExceeded(PuzzleError):
    """The solver hit its iteration cap; `board` holds the earliest partial state"""

    def __init__(self, steps: int, board: Optional[object] = None):
        self.steps = steps
        self.board = board
        super().__init__(f"Step budget exhausted after {steps} propagation steps.")
