"""
Sudoku Solver Package

Bit-set constraint propagation with minimum-remaining-values backtracking.
"""

from .value_set import ValueSet
from .location_set import LocationSet
from .group import Group, GROUPS, ROWS, COLS, BLOCKS
from .board import Board, EMPTY_CHAR
from .solver import Cell, SolveState, SudokuSolver, solve, DEFAULT_STEP_BUDGET

__all__ = [
    'ValueSet',
    'LocationSet',
    'Group',
    'GROUPS',
    'ROWS',
    'COLS',
    'BLOCKS',
    'Board',
    'EMPTY_CHAR',
    'Cell',
    'SolveState',
    'SudokuSolver',
    'solve',
    'DEFAULT_STEP_BUDGET',
]
