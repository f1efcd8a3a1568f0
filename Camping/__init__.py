"""
Camping (Tents-and-Trees) Solver Package

Row-run deductions shared between rows and columns via a transposed view,
with a backtracking search over free tiles.
"""

from .map import Map, MapView, TransposedMap, Tile
from .solver import (
    CampingSolver,
    block_neighbors,
    fill_tents,
    handle_rows,
    pre_solve,
    row_runs,
    solve,
)

__all__ = [
    'Map',
    'MapView',
    'TransposedMap',
    'Tile',
    'CampingSolver',
    'block_neighbors',
    'fill_tents',
    'handle_rows',
    'pre_solve',
    'row_runs',
    'solve',
]
