import numpy as np
import pytest

from conftest import NO_SOLUTION_MAP
from Camping.map import Map, Tile
from Camping.solver import (
    CampingSolver,
    block_row_if_finished,
    fill_tents,
    handle_row_runs,
    pre_solve,
    row_runs,
    solve,
)
from Puzzle.errors import (
    Contradiction,
    TooFewPossibleTentsInRow,
    TooManyTentsInRow,
    Unsolvable,
)
from Puzzle.location import Location

TWO_WAY_MAP = (
    "3,3\n"
    "1,0,1\n"
    "1,0,1\n"
    " T \n"
    "   \n"
    " T \n"
)

BACKTRACK_MAP = (
    "3,5\n"
    "1,1,1\n"
    "1,0,1,1,0\n"
    " T  T\n"
    " T  T\n"
    " T  T\n"
)


def tents(map):
    return {Location(int(r), int(c)) for r, c in zip(*np.nonzero(map.tiles == Tile.TENT))}


# -----------------------------------------------------------------------------
# Presolve
# -----------------------------------------------------------------------------
def test_pre_solve_blocks_tiles_without_trees(small_map):
    assert pre_solve(small_map)
    assert set(small_map.free_locations()) == {
        Location(0, 2), Location(0, 4), Location(1, 3),
        Location(1, 4), Location(2, 3), Location(3, 4),
    }
    assert small_map.get(Location(0, 3)) == Tile.TREE
    assert small_map.get(Location(2, 4)) == Tile.TREE


def test_pre_solve_is_idempotent(six_map):
    pre_solve(six_map)
    after = six_map.copy()
    assert not pre_solve(six_map)
    assert six_map == after


def test_pre_solve_only_blocks_free_tiles(six_map):
    before = six_map.copy()
    pre_solve(six_map)
    for loc in before.free_locations():
        assert six_map.get(loc) in (Tile.FREE, Tile.BLOCKED)
    for r in range(six_map.height):
        for c in range(six_map.width):
            if before.tiles[r, c] != Tile.FREE:
                assert six_map.tiles[r, c] == before.tiles[r, c]


def test_pre_solve_blocks_around_tents():
    m = Map.parse("2,2\n1,0\n1,0\nXT\n T\n")
    pre_solve(m)
    assert m.get(Location(1, 0)) == Tile.BLOCKED


# -----------------------------------------------------------------------------
# Row deductions
# -----------------------------------------------------------------------------
def test_row_runs():
    m = Map.parse("1,7\n0\n0,0,0,0,0,0,0\n  T   #\n")
    assert row_runs(m, 0) == [(0, 2), (3, 6)]


def test_saturated_odd_run_places_tents():
    m = Map.parse("3,3\n0,2,0\n1,0,1\nT T\n   \nT T\n")
    assert handle_row_runs(m, 1, 2)
    assert [m.get(Location(1, c)) for c in range(3)] == [Tile.TENT, Tile.BLOCKED, Tile.TENT]
    assert m.get(Location(0, 1)) == Tile.BLOCKED
    assert m.get(Location(2, 1)) == Tile.BLOCKED


def test_saturated_even_run_blocks_above_and_below():
    m = Map.parse("3,4\n0,2,0\n0,0,0,0\n    \n    \n    \n")
    assert handle_row_runs(m, 1, 2)
    for c in range(4):
        assert m.get(Location(0, c)) == Tile.BLOCKED
        assert m.get(Location(2, c)) == Tile.BLOCKED
        assert m.get(Location(1, c)) == Tile.FREE


def test_one_spare_tent_blocks_around_split():
    m = Map.parse("3,3\n0,1,0\n0,0,0\n   \n T \n   \n")
    assert handle_row_runs(m, 1, 1)
    assert m.get(Location(0, 1)) == Tile.BLOCKED
    assert m.get(Location(2, 1)) == Tile.BLOCKED
    assert m.get(Location(0, 0)) == Tile.FREE


def test_row_runs_without_room_is_a_contradiction():
    m = Map.parse("1,3\n2\n0,0,0\n#T \n")
    with pytest.raises(Contradiction):
        handle_row_runs(m, 0, 2)


def test_finished_row_is_blocked():
    m = Map.parse("2,3\n1,0\n1,0,0\nX  \nT  \n")
    assert block_row_if_finished(m, 0, 1)
    assert m.get(Location(0, 1)) == Tile.BLOCKED
    assert m.get(Location(0, 2)) == Tile.BLOCKED
    assert not block_row_if_finished(m, 1, 1)


def test_fill_tents_covers_columns():
    # column 1 is the only one that can take the tent
    m = Map.parse("3,3\n0,1,0\n0,1,0\n   \n   \n T \n")
    pre_solve(m)
    fill_tents(m)
    assert m.get(Location(1, 1)) == Tile.TENT


# -----------------------------------------------------------------------------
# Search
# -----------------------------------------------------------------------------
def test_small_map_solves_without_guessing(small_map):
    solver = CampingSolver(small_map)
    solution = solver.solve()
    assert solution.is_complete()
    assert tents(solution) == {Location(0, 4), Location(2, 3)}
    assert solver.stats['guesses'] == 0
    # the input map is left untouched
    assert small_map.get(Location(0, 4)) == Tile.FREE


def test_six_map_solution(six_map):
    solution = solve(six_map)
    assert solution.is_complete()
    solution.validate()
    for r, required in enumerate(solution.row_requirements):
        assert solution.row_tents(r) == required
    for c, required in enumerate(solution.col_requirements):
        assert solution.col_tents(c) == required
    for r in range(six_map.height):
        for c in range(six_map.width):
            if six_map.tiles[r, c] == Tile.TREE:
                assert solution.tiles[r, c] == Tile.TREE


def test_guess_takes_first_free_tile():
    solver = CampingSolver(Map.parse(TWO_WAY_MAP))
    solution = solver.solve()
    assert tents(solution) == {Location(0, 0), Location(2, 2)}
    assert solver.stats['guesses'] == 1
    assert solver.stats['backtracks'] == 0


def test_unsolvable_map_after_presolve(unsolvable_map):
    pre_solve(unsolvable_map)
    with pytest.raises(TooFewPossibleTentsInRow) as info:
        unsolvable_map.validate()
    assert info.value.row_index == 2


def test_presolve_dead_end_is_reported_as_invalid_map(unsolvable_map):
    solver = CampingSolver(unsolvable_map)
    with pytest.raises(TooFewPossibleTentsInRow) as info:
        solver.solve()
    assert info.value.row_index == 2
    assert solver.stats['steps'] == 0


def test_map_without_solution():
    solver = CampingSolver(Map.parse(NO_SOLUTION_MAP))
    with pytest.raises(Unsolvable):
        solver.solve()
    assert solver.stats['guesses'] == 0


def test_failed_first_guess_is_unwound():
    # every solution puts row 0's tent in column 2 or 3, so a tent at (0, 0) must be undone
    solver = CampingSolver(Map.parse(BACKTRACK_MAP))
    solution = solver.solve()
    assert solver.stats['backtracks'] >= 1
    assert solution.get(Location(0, 0)) == Tile.BLOCKED
    assert tents(solution) == {Location(0, 2), Location(1, 0), Location(2, 3)}
    solution.validate()
    for loc in tents(solution):
        assert not any(tile == Tile.TENT for _, tile in solution.neighbors(loc))


def test_invalid_input_is_reported_before_search():
    solver = CampingSolver(Map.parse("1,2\n0\n1,0\nXT\n"))
    with pytest.raises(TooManyTentsInRow):
        solver.solve()
    assert solver.stats['steps'] == 0
