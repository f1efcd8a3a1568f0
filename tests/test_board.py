import pytest

from conftest import EASY_LINE, EASY_SOLUTION
from Puzzle.errors import (
    DuplicateBlockValue,
    DuplicateColumnValue,
    DuplicateRowValue,
    ParseError,
)
from Puzzle.location import Location
from Sudoku.board import Board


def test_parse_line(easy_board):
    assert easy_board[Location(0, 0)] == 5
    assert easy_board[Location(0, 2)] is None
    assert easy_board[Location(8, 8)] == 9
    assert easy_board.num_filled() == 30
    assert not easy_board.finished()


def test_line_and_grid_formats_round_trip(easy_board):
    assert Board.from_line(easy_board.to_line()) == easy_board
    grid = easy_board.to_grid()
    assert len(grid) == 90
    assert grid.splitlines()[0] == "53..7...."
    assert Board.from_grid(grid) == easy_board


def test_custom_empty_char():
    line = EASY_LINE.replace('.', '_')
    board = Board.from_line(line, empty_char='_')
    assert board == Board.from_line(EASY_LINE)
    assert board.to_line('_') == line


def test_zero_is_rejected():
    with pytest.raises(ParseError, match="'0'"):
        Board.from_line("0" + EASY_LINE[1:])


@pytest.mark.parametrize("line", [EASY_LINE[:80], EASY_LINE + "1", "x" + EASY_LINE[1:]])
def test_bad_lines(line):
    with pytest.raises(ParseError):
        Board.from_line(line)


def test_bad_grid():
    grid = Board.from_line(EASY_LINE).to_grid()
    with pytest.raises(ParseError):
        Board.from_grid(grid[:-1])
    with pytest.raises(ParseError):
        Board.from_grid(grid.replace("\n", "", 1) + "\n")


def test_finished():
    assert Board.from_line(EASY_SOLUTION).finished()


def test_validate_accepts_solution():
    Board.from_line(EASY_SOLUTION).validate()


def test_duplicate_in_row():
    line = "1" + "." * 7 + "1" + "." * 72
    with pytest.raises(DuplicateRowValue) as info:
        Board.from_line(line).validate()
    assert info.value.row == 0
    assert info.value.value == 1


def test_duplicate_in_column():
    line = "2" + "." * 8 + "." * 9 * 7 + "2" + "." * 8
    with pytest.raises(DuplicateColumnValue) as info:
        Board.from_line(line).validate()
    assert info.value.col == 0
    assert info.value.value == 2


def test_duplicate_in_block():
    line = "3" + "." * 9 + "3" + "." * 70
    with pytest.raises(DuplicateBlockValue) as info:
        Board.from_line(line).validate()
    assert info.value.block == 0


def test_pretty_format(easy_board):
    text = str(easy_board)
    lines = text.splitlines()
    assert lines[0] == "+-------+-------+-------+"
    assert lines[1] == "| 5 3   |   7   |       |"
    assert len(lines) == 13


def test_board_is_immutable(easy_board):
    with pytest.raises(ValueError):
        easy_board.cells[0, 2] = 4
