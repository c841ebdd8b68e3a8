"""
utils.py - Constants, enumerations and helpers shared across the package

This module holds the fixed board geometry, the default engine settings,
the Player and GameResult enumerations, and ASCII board rendering.
"""

from enum import Enum, auto
from typing import List, Tuple

import numpy as np

# Board geometry
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
CENTER_COLUMN = COLS // 2

# Engine settings
DEFAULT_DEPTH = 3
MAX_RECOMMENDED_DEPTH = 7  # beyond this full-width search gets very slow

Coord = Tuple[int, int]  # (row, col)


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # Moves first, the human in a game against the computer
    TWO = 2    # The computer opponent by default

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @staticmethod
    def win_for(player: Player) -> 'GameResult':
        """The result that means `player` has won."""
        if player == Player.ONE:
            return GameResult.PLAYER_ONE_WIN
        if player == Player.TWO:
            return GameResult.PLAYER_TWO_WIN
        raise ValueError(f"{player!r} cannot win")

    def winner(self) -> Player:
        """The winning player, or Player.EMPTY for a draw or unfinished game."""
        if self == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        if self == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return Player.EMPTY


def render_board_ascii(grid: np.ndarray, highlight: List[Coord] = None) -> str:
    """
    Render the board as ASCII art.

    Args:
        grid: The board grid
        highlight: Cells to mark with '*' (e.g. a winning line)

    Returns:
        ASCII representation of the board
    """
    marked = set(highlight or [])
    width = COLS * 2 - 1
    lines = ["|" + "-" * width + "|"]

    for row in range(ROWS):
        cells = []
        for col in range(COLS):
            symbol = str(Player(int(grid[row, col])))
            if (row, col) in marked:
                symbol = "*"
            cells.append(symbol)
        lines.append("|" + " ".join(cells) + "|")

    lines.append("|" + "-" * width + "|")
    lines.append("|" + " ".join(str(col) for col in range(COLS)) + "|")
    return "\n".join(lines)
