"""
Shared pieces for the puzzle solvers: grid locations, the error taxonomy,
solution output, debug overlays and the command-line driver.
"""

from .location import Location, grid_iter
from .errors import (
    PuzzleError,
    ParseError,
    InvalidBoard,
    InvalidMap,
    PlacementError,
    PlacementOutOfBounds,
    PlacementNotFree,
    Contradiction,
    Unsolvable,
    StepBudgetExceeded,
)

__version__ = "1.0.0"
__all__ = [
    'Location',
    'grid_iter',
    'PuzzleError',
    'ParseError',
    'InvalidBoard',
    'InvalidMap',
    'PlacementError',
    'PlacementOutOfBounds',
    'PlacementNotFree',
    'Contradiction',
    'Unsolvable',
    'StepBudgetExceeded',
]
