# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "Puzzle", "Sudoku" and "Camping" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from Camping.map import Map  # noqa: E402
from Sudoku.board import Board  # noqa: E402

EASY_LINE = "53..7....6..195....98....6.8...6...34..8.3..17...2...6.6....28....419..5....8..79"
EASY_SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"
BLANK_LINE = "." * 81

SMALL_MAP = (
    "5,5\n"
    "1,0,1,0,0\n"
    "0,0,0,1,1\n"
    "   T \n"
    "     \n"
    "    T\n"
    "     \n"
    "     \n"
)

SIX_MAP = (
    "6,6\n"
    "1,1,1,1,0,2\n"
    "1,1,0,2,0,2\n"
    " T    \n"
    "    T \n"
    "      \n"
    "T  T  \n"
    "     T\n"
    "  T   \n"
)

# Row 2 cannot reach a tree, yet it needs a tent
UNSOLVABLE_MAP = (
    "3,3\n"
    "1,1,1\n"
    "1,1,1\n"
    "T T\n"
    "   \n"
    "   \n"
)

# Valid after presolve, but both columns force a tent into a row that takes one
NO_SOLUTION_MAP = (
    "1,3\n"
    "1\n"
    "1,0,1\n"
    " T \n"
)


@pytest.fixture
def easy_board() -> Board:
    return Board.from_line(EASY_LINE)


@pytest.fixture
def blank_board() -> Board:
    return Board.from_line(BLANK_LINE)


@pytest.fixture
def small_map() -> Map:
    return Map.parse(SMALL_MAP)


@pytest.fixture
def six_map() -> Map:
    return Map.parse(SIX_MAP)


@pytest.fixture
def unsolvable_map() -> Map:
    return Map.parse(UNSOLVABLE_MAP)
