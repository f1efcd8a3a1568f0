import numpy as np

from Camping.solver import solve as solve_map
from Puzzle.overlay import GRAY, render_camping, render_sudoku, save_overlay
from Sudoku.solver import solve as solve_board


def test_render_sudoku_shape(easy_board):
    img = render_sudoku(solve_board(easy_board), givens=easy_board)
    assert img.shape == (433, 433, 3)
    assert img.dtype == np.uint8
    # grid lines are drawn on the outer border
    assert tuple(img[0, 200]) == (0, 0, 0)


def test_render_sudoku_pitch(blank_board):
    img = render_sudoku(blank_board, pitch=20)
    assert img.shape == (181, 181, 3)


def test_render_camping_shape(six_map):
    img = render_camping(six_map)
    assert img.shape == (40 + 6 * 40 + 1, 40 + 6 * 40 + 1, 3)


def test_render_camping_blocked_tiles(small_map):
    solution = solve_map(small_map)
    img = render_camping(solution, pitch=40)
    # (1, 0) ends up blocked; sample the middle of its tile
    assert tuple(img[40 + 40 + 20, 40 + 20]) == GRAY


def test_save_overlay(tmp_path, easy_board):
    path = tmp_path / "debug" / "easy" / "grid_0.png"
    save_overlay(render_sudoku(easy_board), str(path))
    assert path.exists()
    assert path.stat().st_size > 0
