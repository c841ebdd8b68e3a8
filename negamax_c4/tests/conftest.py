"""
Pytest fixtures for negamax_c4 tests.

Boards are written as six strings, top row first: 'X' is Player.ONE (the
human), 'O' is Player.TWO (the computer) and '.' an empty cell.
"""

import random
from typing import Callable, List

import pytest

from ..debug import debug, DebugLevel
from ..game.board import Board
from ..utils import Player

SYMBOLS = {'.': Player.EMPTY.value, 'X': Player.ONE.value, 'O': Player.TWO.value}

# Full board without four in a row anywhere
DRAW_ROWS = [
    "XOXOXOX",
    "XOXOXOX",
    "OXOXOXO",
    "XOXOXOX",
    "XOXOXOX",
    "OXOXOXO",
]


def rows_to_board(rows: List[str]) -> Board:
    return Board.from_grid([[SYMBOLS[ch] for ch in row] for row in rows])


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep engine summaries out of the test output."""
    debug.configure(level=DebugLevel.ERROR)
    yield
    debug.configure(level=DebugLevel.ERROR)


@pytest.fixture
def board_from_rows() -> Callable[[List[str]], Board]:
    """Build a board from a picture of its rows."""
    return rows_to_board


@pytest.fixture
def empty_board() -> Board:
    return Board()


@pytest.fixture
def draw_board() -> Board:
    return rows_to_board(DRAW_ROWS)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
