"""
strategies.py - Shortcut rules tried before the full negamax search

Each rule takes the board and the computer's player and returns a column,
or None when it does not apply. The engine runs them in SHORTCUT_RULES
order and the first column returned wins.
"""

from typing import Callable, List, Optional, Tuple

from negamax_c4.game.board import Board
from negamax_c4.utils import ROWS, COLS, CENTER_COLUMN, GameResult, Player

Rule = Callable[[Board, Player], Optional[int]]

BOTTOM_ROW = ROWS - 1

# (opponent column beside the center, empty bottom column to play)
ANTI_TRAP_PATTERNS: Tuple[Tuple[int, int], ...] = (
    (4, 5),
    (2, 1),
    (5, 4),
    (1, 2),
)


def opening_rule(board: Board, player: Player) -> Optional[int]:
    """Take the center while the opponent has made at most one move."""
    if board.count_tokens(player.other()) <= 1:
        return CENTER_COLUMN
    return None


def anti_trap_rule(board: Board, player: Player) -> Optional[int]:
    """
    Break up an early bottom-row setup around the center.

    With shallow search the evaluator prefers the second row over stopping
    the opponent from building an open three along the bottom, so the
    bottom-row gap is taken directly.
    """
    bottom = board.grid[BOTTOM_ROW]
    opponent = player.other().value
    if bottom[CENTER_COLUMN] != opponent:
        return None
    for beside, gap in ANTI_TRAP_PATTERNS:
        if bottom[beside] == opponent and bottom[gap] == Player.EMPTY.value:
            return gap
    return None


def _first_winning_column(board: Board, mover: Player) -> Optional[int]:
    target = GameResult.win_for(mover)
    for column in range(COLS):
        if board.is_column_full(column):
            continue
        child = board.copy()
        child.apply_move(column, mover)
        result, _ = child.check_outcome()
        if result == target:
            return column
    return None


def immediate_win_rule(board: Board, player: Player) -> Optional[int]:
    """Leftmost column that wins on the spot."""
    return _first_winning_column(board, player)


def immediate_block_rule(board: Board, player: Player) -> Optional[int]:
    """Leftmost column where the opponent would win on the spot."""
    return _first_winning_column(board, player.other())


SHORTCUT_RULES: List[Rule] = [
    opening_rule,
    anti_trap_rule,
    immediate_win_rule,
    immediate_block_rule,
]
