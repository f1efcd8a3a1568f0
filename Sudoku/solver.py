"""
Sudoku solver: constraint propagation over candidate bit-sets plus a
chronological backtracking search.

Propagation rules:
 - restrict_cells: each group removes its fixed values from its empty cells
   and fixes hidden singles
 - ghosts: a value confined to 2 or 3 cells of one group is removed from
   every other group that contains all of those cells (locked candidates)

Search: run both rules to quiescence, guess the first candidate of the empty
cell with the fewest candidates, and on contradiction pop the guess and
exclude the tried value from the state it was made in.
"""
import time
from typing import Dict, List, Optional, Tuple

from Puzzle.errors import Contradiction, StepBudgetExceeded, Unsolvable
from Puzzle.location import Location
from .board import Board
from .group import GROUPS
from .location_set import LocationSet, cell_index, location_at
from .value_set import ValueSet

DEFAULT_STEP_BUDGET = 1000


class Cell:
    """Either a fixed value or the set of candidates still open"""
    __slots__ = ("value", "candidates")

    def __init__(self, value: Optional[int] = None, candidates: ValueSet = ValueSet.ALL):
        self.value = value
        self.candidates = ValueSet.NONE if value is not None else candidates

    @classmethod
    def fixed(cls, value: int) -> "Cell":
        return cls(value=value)

    @classmethod
    def empty(cls, candidates: ValueSet = ValueSet.ALL) -> "Cell":
        return cls(candidates=candidates)

    @property
    def is_empty(self) -> bool:
        return self.value is None

    def possible_values(self) -> ValueSet:
        if self.value is not None:
            return ValueSet.from_value(self.value)
        return self.candidates

    def __eq__(self, other) -> bool:
        return (isinstance(other, Cell) and self.value == other.value
                and self.candidates == other.candidates)

    def __repr__(self):
        if self.value is not None:
            return f"Value({self.value})"
        return f"Empty({self.candidates})"


def restrict(cell: Cell, values: ValueSet) -> Tuple[Cell, bool]:
    """
    Narrow a cell to `values`.

    Returns the new cell and whether its possibilities shrank. Raises
    Contradiction if nothing is left or a fixed value falls outside `values`.
    """
    if cell.value is not None:
        if cell.value in values:
            return cell, False
        raise Contradiction(f"Cell value {cell.value} is not possible according to value set {values}.")

    narrowed = cell.candidates & values
    if not narrowed:
        raise Contradiction("No possible values left for cell.")
    single = narrowed.single()
    if single is not None:
        return Cell.fixed(single), True
    if narrowed == cell.candidates:
        return cell, False
    return Cell.empty(narrowed), True


class SolveState:
    """Mutable working copy of the board: 81 cells in row-major order"""

    def __init__(self, cells: List[Cell]):
        if len(cells) != 81:
            raise ValueError(f"A solve state needs 81 cells, got {len(cells)}")
        self.cells = cells

    @classmethod
    def from_board(cls, board: Board) -> "SolveState":
        return cls([
            Cell.fixed(value) if value is not None else Cell.empty()
            for _, value in board.values()
        ])

    def copy(self) -> "SolveState":
        # cells are never mutated in place, so a shallow copy is enough
        return SolveState(list(self.cells))

    def __getitem__(self, loc: Location) -> Cell:
        return self.cells[cell_index(loc)]

    def __setitem__(self, loc: Location, cell: Cell) -> None:
        self.cells[cell_index(loc)] = cell

    def __eq__(self, other) -> bool:
        return isinstance(other, SolveState) and self.cells == other.cells

    # -------------------------------------------------------------------------
    # Primitive operations
    # -------------------------------------------------------------------------
    def free_values(self, locations: LocationSet) -> ValueSet:
        """Values not yet fixed anywhere in `locations`"""
        used = ValueSet.NONE
        for loc in locations:
            value = self[loc].value
            if value is not None:
                used = used | ValueSet.from_value(value)
        return ~used

    def restrict(self, loc: Location, values: ValueSet) -> bool:
        try:
            cell, changed = restrict(self[loc], values)
        except Contradiction as e:
            raise Contradiction(f"Error while restricting cell {loc} to values {values}: {e}") from e
        self[loc] = cell
        return changed

    def assign(self, loc: Location, value: int) -> None:
        self[loc] = Cell.fixed(value)

    # -------------------------------------------------------------------------
    # Propagation rules
    # -------------------------------------------------------------------------
    def restrict_cells(self) -> bool:
        """Group restriction and hidden singles over all 27 groups"""
        changed = False
        for group in GROUPS:
            free = self.free_values(group.locations)
            for loc in group:
                if self[loc].is_empty:
                    changed |= self.restrict(loc, free)

            free = self.free_values(group.locations)
            for value in free:
                holders = [loc for loc in group if value in self[loc].possible_values()]
                if not holders:
                    raise Contradiction(f"Value {value} has no place left in {group}.")
                if len(holders) == 1:
                    self.assign(holders[0], value)
                    changed = True
        return changed

    def ghosts(self) -> bool:
        """Locked candidates: eliminate a confined value from overlapping groups"""
        found: List[Tuple[int, LocationSet]] = []
        for group in GROUPS:
            for value in ValueSet.ALL:
                locations = LocationSet(
                    loc for loc in group if value in self[loc].possible_values()
                )
                if locations.count() in (2, 3):
                    found.append((value, locations))

        changed = False
        without = {value: ~ValueSet.from_value(value) for value in ValueSet.ALL}
        for group in GROUPS:
            for value, locations in found:
                if not group.locations.is_superset(locations):
                    continue
                for loc in group.locations - locations:
                    if self[loc].is_empty:
                        changed |= self.restrict(loc, without[value])
        return changed

    def validate(self) -> None:
        """Raise Contradiction if any group holds the same value twice"""
        for group in GROUPS:
            seen = ValueSet.NONE
            for loc in group:
                value = self[loc].value
                if value is None:
                    continue
                if value in seen:
                    raise Contradiction(f"Value {value} appears twice in {group}.")
                seen = seen | ValueSet.from_value(value)

    def min_remaining_location(self) -> Optional[Location]:
        """Empty cell with the fewest candidates; ties go to the first in row-major order"""
        best = None
        best_len = 10
        for index, cell in enumerate(self.cells):
            if cell.is_empty:
                size = len(cell.candidates)
                if size < best_len:
                    best, best_len = index, size
                    if size == 2:
                        break
        return location_at(best) if best is not None else None


Frame = Tuple[SolveState, Location, int]


class SudokuSolver:
    """Propagation plus MRV backtracking for one board"""

    def __init__(self, board: Board, step_budget: Optional[int] = DEFAULT_STEP_BUDGET,
                 verbose: bool = False):
        self.board = board
        self.step_budget = step_budget
        self.verbose = verbose
        self.stats: Dict[str, float] = {
            'steps': 0,
            'guesses': 0,
            'backtracks': 0,
            'max_depth': 0,
            'elapsed': 0.0,
        }
        self.stack: List[Frame] = []

    # -------------------------------------------------------------------------
    # Main solving driver
    # -------------------------------------------------------------------------
    def solve(self) -> Board:
        """
        Solve the board.

        Raises InvalidBoard for duplicate givens, Unsolvable when the search is
        exhausted and StepBudgetExceeded when the step cap is hit.
        """
        start = time.perf_counter()
        try:
            return self._search()
        finally:
            self.stats['elapsed'] = time.perf_counter() - start
            if self.verbose:
                self._print_stats()

    def _search(self) -> Board:
        self.board.validate()
        self.stack = []
        state = SolveState.from_board(self.board)

        while True:
            try:
                self._propagate(state)
                loc = state.min_remaining_location()
                if loc is None:
                    state.validate()
                    if self.verbose:
                        print("✓ Board solved")
                    return Board.from_solve_state(state)
                state = self._guess(state, loc)
            except Contradiction as e:
                if self.verbose:
                    print(f"  contradiction at depth {len(self.stack)}: {e}")
                state = self._unwind()

    def _propagate(self, state: SolveState) -> None:
        while True:
            if self.step_budget is not None and self.stats['steps'] >= self.step_budget:
                raise StepBudgetExceeded(self.stats['steps'], self._earliest_board(state))
            self.stats['steps'] += 1
            if not (state.restrict_cells() or state.ghosts()):
                # restrict can fix a cell that a peer already holds
                state.validate()
                return

    def _guess(self, state: SolveState, loc: Location) -> SolveState:
        value = next(iter(state[loc].candidates))
        self.stack.append((state, loc, value))
        self.stats['guesses'] += 1
        self.stats['max_depth'] = max(self.stats['max_depth'], len(self.stack))
        if self.verbose:
            print(f"  guess {value} at {loc} (depth {len(self.stack)})")

        guessed = state.copy()
        guessed.assign(loc, value)
        return guessed

    def _unwind(self) -> SolveState:
        while self.stack:
            prior, loc, value = self.stack.pop()
            self.stats['backtracks'] += 1
            state = prior.copy()
            try:
                state.restrict(loc, ~ValueSet.from_value(value))
            except Contradiction:
                continue
            return state
        raise Unsolvable("No solution: guess stack exhausted.")

    def _earliest_board(self, current: SolveState) -> Board:
        state = self.stack[0][0] if self.stack else current
        return Board.from_solve_state(state)

    def _print_stats(self) -> None:
        s = self.stats
        print(f"Steps: {s['steps']}, guesses: {s['guesses']}, backtracks: {s['backtracks']}, "
              f"max depth: {s['max_depth']}, time: {s['elapsed']:.4f}s")


def solve(board: Board, step_budget: Optional[int] = DEFAULT_STEP_BUDGET) -> Board:
    """Solve `board` with default settings"""
    return SudokuSolver(board, step_budget=step_budget).solve()
