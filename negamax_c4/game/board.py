"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class which holds the 6x7 grid, applies
moves under gravity and detects wins and draws. The board never raises for
ordinary game conditions: dropping into a full column is a silent no-op.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from negamax_c4.debug import debug
from negamax_c4.utils import (ROWS, COLS, CONNECT_N, Coord, Player, GameResult,
                              render_board_ascii)


def _build_windows() -> List[Tuple[Coord, ...]]:
    """
    Every run of four cells, in scan order: horizontal, vertical,
    ascending diagonal, descending diagonal.
    """
    span = range(CONNECT_N)
    windows = []
    for r in range(ROWS):
        for c in range(COLS - CONNECT_N + 1):
            windows.append(tuple((r, c + i) for i in span))
    for r in range(ROWS - CONNECT_N + 1):
        for c in range(COLS):
            windows.append(tuple((r + i, c) for i in span))
    # Diagonals are anchored on their bottom cell
    for r in range(ROWS - 1, CONNECT_N - 2, -1):
        for c in range(COLS - CONNECT_N + 1):
            windows.append(tuple((r - i, c + i) for i in span))
    for r in range(ROWS - 1, CONNECT_N - 2, -1):
        for c in range(COLS - 1, CONNECT_N - 2, -1):
            windows.append(tuple((r - i, c - i) for i in span))
    return windows


WINDOWS = _build_windows()


class Board:
    """
    Represents a Connect Four game board.

    Row 0 is the top of the board and row ROWS-1 the bottom. Besides the
    grid the board carries the last move, the move history and the most
    recently computed outcome with its winning cells.
    """

    def __init__(self):
        """Initialize an empty Connect Four board."""
        self.reset()

    def reset(self) -> None:
        """Reset the board to an empty state."""
        self.grid = np.zeros((ROWS, COLS), dtype=int)
        self.moves_made: List[int] = []
        self.last_move: Optional[Coord] = None
        self.game_result = GameResult.IN_PROGRESS
        self.winning_line: List[Coord] = []

    @classmethod
    def from_grid(cls, grid: Sequence) -> 'Board':
        """
        Build a board from a 6x7 matrix of cell values (0, 1, 2).

        The move history of such a board is unknown, so last_move is None.

        Raises:
            ValueError: If the matrix has the wrong shape, unknown values or
                a token resting above an empty cell
        """
        array = np.array(grid, dtype=int)
        if array.shape != (ROWS, COLS):
            raise ValueError(f"Grid must have shape ({ROWS}, {COLS}), got {array.shape}")
        allowed = [p.value for p in Player]
        if not np.isin(array, allowed).all():
            raise ValueError(f"Grid cells must be one of {allowed}")
        floating = np.argwhere((array[:-1] != Player.EMPTY.value) & (array[1:] == Player.EMPTY.value))
        if floating.size:
            row, col = floating[0]
            raise ValueError(f"Grid violates gravity: cell ({row}, {col}) is above an empty cell")
        board = cls()
        board.grid = array
        board.check_outcome()
        return board

    def copy(self) -> 'Board':
        """
        Create an independent copy of the board.

        Returns:
            A new Board instance sharing no mutable state with this one
        """
        new_board = Board.__new__(Board)
        new_board.grid = self.grid.copy()
        new_board.moves_made = self.moves_made.copy()
        new_board.last_move = self.last_move
        new_board.game_result = self.game_result
        new_board.winning_line = self.winning_line.copy()
        return new_board

    def is_column_full(self, column: int) -> bool:
        """True if the top cell of the column is occupied. Requires 0 <= column < COLS."""
        return bool(self.grid[0, column] != Player.EMPTY.value)

    def is_valid_move(self, column: int) -> bool:
        """
        Check that a column is on the board and still has room.

        Args:
            column: The column to place a piece (0-indexed)
        """
        return 0 <= column < COLS and not self.is_column_full(column)

    def valid_moves(self) -> List[int]:
        """Non-full columns, left to right."""
        return [col for col in range(COLS) if not self.is_column_full(col)]

    def is_full(self) -> bool:
        return bool(np.all(self.grid[0] != Player.EMPTY.value))

    def count_tokens(self, player: Player) -> int:
        return int(np.count_nonzero(self.grid == player.value))

    def apply_move(self, column: int, player: Player) -> Optional[Coord]:
        """
        Drop a token for `player` into `column`.

        Args:
            column: The column to place a piece (0-indexed)
            player: The player owning the token

        Returns:
            The (row, column) the token landed on, or None if the column
            was already full (the board is left untouched)
        """
        if self.is_column_full(column):
            return None

        for row in range(ROWS - 1, -1, -1):
            if self.grid[row, column] == Player.EMPTY.value:
                self.grid[row, column] = player.value
                self.last_move = (row, column)
                self.moves_made.append(column)
                return self.last_move
        return None

    def undo_move(self) -> bool:
        """
        Remove the most recently applied token.

        Returns:
            True if a move was undone, False if there is no recorded move
        """
        if not self.moves_made:
            debug.debug("No moves to undo", "board")
            return False

        column = self.moves_made.pop()
        for row in range(ROWS):
            if self.grid[row, column] != Player.EMPTY.value:
                self.grid[row, column] = Player.EMPTY.value
                break

        self.last_move = None
        if self.moves_made:
            previous = self.moves_made[-1]
            for row in range(ROWS):
                if self.grid[row, previous] != Player.EMPTY.value:
                    self.last_move = (row, previous)
                    break

        self.game_result = GameResult.IN_PROGRESS
        self.winning_line = []
        return True

    def check_outcome(self) -> Tuple[GameResult, List[Coord]]:
        """
        Recompute the outcome of the position from scratch.

        Every run of four equal, non-empty cells counts: the cells of all
        such runs are accumulated into one list, and the owner of the last
        run found is reported as the winner. Without a run the game is a
        draw once the top row is full, otherwise still in progress.

        Returns:
            (result, winning_line) - also stored on the board
        """
        cells = self.grid.tolist()
        winner = Player.EMPTY
        line: List[Coord] = []

        for window in WINDOWS:
            (r0, c0), (r1, c1), (r2, c2), (r3, c3) = window
            value = cells[r0][c0]
            if value and value == cells[r1][c1] == cells[r2][c2] == cells[r3][c3]:
                winner = Player(value)
                line.extend(window)

        if winner != Player.EMPTY:
            result = GameResult.win_for(winner)
        elif all(cells[0]):
            result = GameResult.DRAW
        else:
            result = GameResult.IN_PROGRESS

        self.game_result = result
        self.winning_line = line
        return result, line

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            2D numpy array representing the board
        """
        return self.grid.copy()

    def render(self) -> str:
        """Render the board as a string, marking any winning cells."""
        return render_board_ascii(self.grid, self.winning_line)

    def __str__(self) -> str:
        return self.render()


if __name__ == "__main__":
    from negamax_c4.debug import DebugLevel
    debug.configure(level=DebugLevel.DEBUG)

    board = Board()
    player = Player.ONE
    for col in [3, 2, 4, 2, 5, 2, 6]:
        print(f"\n{player.name} plays column {col} -> {board.apply_move(col, player)}")
        player = player.other()

    result, line = board.check_outcome()
    print(board)
    print(f"Result: {result.name}, winning line: {line}")
