"""
Camping solver: seed deductions from tree adjacency, row-run deductions
applied to rows and (through a transposed view) columns, and a backtracking
search over free tiles.
"""
import time
from typing import Dict, List, Optional, Tuple

from Puzzle.errors import Contradiction, InvalidMap, PlacementError, Unsolvable
from Puzzle.location import Location, grid_iter
from .map import Map, MapView, Tile

Run = Tuple[int, int]  # [start, end) columns


# -----------------------------------------------------------------------------
# Presolve
# -----------------------------------------------------------------------------
def pre_solve(map: MapView) -> bool:
    """
    Block every free tile that touches a tent (diagonals included) or has no
    orthogonal tree. Only ever turns FREE into BLOCKED, so running it again
    changes nothing.
    """
    changed = False
    for loc in grid_iter(map.dim):
        if map.get(loc) != Tile.FREE:
            continue
        near_tent = any(tile == Tile.TENT for _, tile in map.neighbors(loc))
        near_tree = any(tile == Tile.TREE for _, tile in map.adjacents(loc))
        if near_tent or not near_tree:
            map.place_blocked(loc)
            changed = True
    return changed


def _try_block(map: MapView, loc: Location) -> bool:
    """Block `loc` if it is a free tile on the map; report whether it was"""
    try:
        map.place_blocked(loc)
    except PlacementError:
        return False
    return True


def block_neighbors(map: MapView, loc: Location) -> bool:
    changed = False
    for other in loc.neighbors(map.dim):
        changed |= _try_block(map, other)
    return changed


# -----------------------------------------------------------------------------
# Row deductions
# -----------------------------------------------------------------------------
def row_runs(map: MapView, row_index: int) -> List[Run]:
    """Maximal spans of free tiles in a row"""
    runs = []
    run_start = 0
    for col_index in range(map.width):
        if map.tiles[row_index, col_index] != Tile.FREE:
            if col_index > run_start:
                runs.append((run_start, col_index))
            run_start = col_index + 1
    if run_start < map.width:
        runs.append((run_start, map.width))
    return runs


def _fill_saturated_run(map: MapView, row_index: int, run_start: int, run_end: int) -> bool:
    changed = False
    # every other tile of the run holds a tent, so the tiles above and below all touch one
    for col_index in range(run_start, run_end):
        changed |= _try_block(map, Location(row_index - 1, col_index))
        changed |= _try_block(map, Location(row_index + 1, col_index))

    if (run_end - run_start) % 2 == 1:
        for loc in (
            Location(row_index - 1, run_start - 1),
            Location(row_index - 1, run_end),
            Location(row_index + 1, run_start - 1),
            Location(row_index + 1, run_end),
        ):
            _try_block(map, loc)
        for i, col_index in enumerate(range(run_start, run_end)):
            loc = Location(row_index, col_index)
            if i % 2 == 0:
                map.place_tent(loc)
            else:
                map.place_blocked(loc)
        changed = True
    return changed


def handle_row_runs(map: MapView, row_index: int, requirement: int) -> bool:
    """
    Deduce from how many tents the free runs of a row can still hold.

    When the runs can hold exactly the missing tents, each run is packed as
    tightly as possible. When there is one tent to spare, two odd runs split by
    a single tile force a tent next to that tile, so the tiles above and below
    it are blocked.
    """
    missing = requirement - map.row_tents(row_index)
    possible = map.num_possible_row_tents(row_index)
    if possible < missing:
        raise Contradiction(
            f"Row {row_index} can hold {possible} more tents but needs {missing}."
        )

    changed = False
    runs = row_runs(map, row_index)
    if possible == missing:
        for run_start, run_end in runs:
            changed |= _fill_saturated_run(map, row_index, run_start, run_end)
    elif possible == missing + 1:
        for (prev_start, prev_end), (run_start, run_end) in zip(runs, runs[1:]):
            if (run_start - prev_end == 1
                    and (prev_end - prev_start) % 2 == 1
                    and (run_end - run_start) % 2 == 1):
                changed |= _try_block(map, Location(row_index - 1, prev_end))
                changed |= _try_block(map, Location(row_index + 1, prev_end))
    return changed


def block_row_if_finished(map: MapView, row_index: int, requirement: int) -> bool:
    if map.row_tents(row_index) != requirement:
        return False
    changed = False
    for col_index in range(map.width):
        changed |= _try_block(map, Location(row_index, col_index))
    return changed


def handle_rows(map: MapView) -> bool:
    changed = False
    for row_index, requirement in enumerate(map.row_requirements):
        changed |= handle_row_runs(map, row_index, int(requirement))
        changed |= block_row_if_finished(map, row_index, int(requirement))
    return changed


def fill_tents(map: Map) -> bool:
    """One pass over every row, then every column through the transposed view"""
    changed = handle_rows(map)
    changed |= handle_rows(map.transpose())
    return changed


# -----------------------------------------------------------------------------
# Search
# -----------------------------------------------------------------------------
Frame = Tuple[Map, Location]


class CampingSolver:
    """Presolve, run deductions and tent-first backtracking for one map"""

    def __init__(self, map: Map, verbose: bool = False):
        self.map = map
        self.verbose = verbose
        self.stats: Dict[str, float] = {
            'steps': 0,
            'guesses': 0,
            'backtracks': 0,
            'max_depth': 0,
            'elapsed': 0.0,
        }
        self.stack: List[Frame] = []

    def solve(self) -> Map:
        """
        Return a completed copy of the map.

        Raises InvalidMap if the input breaks a rule, before or right after
        presolve, and Unsolvable
        if no completion exists.
        """
        start = time.perf_counter()
        try:
            return self._search()
        finally:
            self.stats['elapsed'] = time.perf_counter() - start
            if self.verbose:
                self._print_stats()

    def _search(self) -> Map:
        self.map.validate()
        self.stack = []
        state = self.map.copy()
        pre_solve(state)
        # presolve can leave a row or column without room for its tents
        state.validate()

        while True:
            try:
                self._propagate(state)
                if state.is_complete():
                    if self.verbose:
                        print("✓ Map solved")
                    return state
                loc = next(state.free_locations())
                state = self._guess(state, loc)
            except Contradiction as e:
                if self.verbose:
                    print(f"  contradiction at depth {len(self.stack)}: {e}")
                state = self._unwind(e)

    def _propagate(self, state: Map) -> None:
        while True:
            self.stats['steps'] += 1
            if not fill_tents(state):
                break
        try:
            state.validate()
        except InvalidMap as e:
            raise Contradiction(str(e)) from e

    def _guess(self, state: Map, loc: Location) -> Map:
        self.stack.append((state, loc))
        self.stats['guesses'] += 1
        self.stats['max_depth'] = max(self.stats['max_depth'], len(self.stack))
        if self.verbose:
            print(f"  guess tent at {loc} (depth {len(self.stack)})")

        guessed = state.copy()
        guessed.place_tent(loc)
        block_neighbors(guessed, loc)
        return guessed

    def _unwind(self, cause: Contradiction) -> Map:
        if not self.stack:
            raise Unsolvable("No solution: guess stack exhausted.") from cause
        prior, loc = self.stack.pop()
        self.stats['backtracks'] += 1
        state = prior.copy()
        state.place_blocked(loc)
        return state

    def _print_stats(self) -> None:
        s = self.stats
        print(f"Steps: {s['steps']}, guesses: {s['guesses']}, backtracks: {s['backtracks']}, "
              f"max depth: {s['max_depth']}, time: {s['elapsed']:.4f}s")


def solve(map: Map) -> Map:
    """Solve `map` with default settings"""
    return CampingSolver(map).solve()
