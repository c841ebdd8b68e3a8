"""
evaluation.py - Static positional evaluation for the negamax engine

Each cell is weighted by the number of four-in-a-row lines passing through
it. A position is scored from the computer's point of view: its tokens add
their cell weights, the opponent's tokens subtract them, and the total is
offset so that an empty board scores exactly half of the table sum.
"""

import numpy as np

from negamax_c4.utils import Player

EVALUATION_WEIGHTS = np.array([
    [3, 4, 5, 7, 5, 4, 3],
    [4, 6, 8, 10, 8, 6, 4],
    [5, 8, 11, 13, 11, 8, 5],
    [5, 8, 11, 13, 11, 8, 5],
    [4, 6, 8, 10, 8, 6, 4],
    [3, 4, 5, 7, 5, 4, 3],
], dtype=int)
EVALUATION_WEIGHTS.flags.writeable = False

WEIGHT_TOTAL = int(EVALUATION_WEIGHTS.sum())  # 276
MID_SCORE = WEIGHT_TOTAL // 2                  # 138


def evaluate(grid: np.ndarray, player: Player = Player.TWO) -> int:
    """
    Score a position for `player`.

    Args:
        grid: The board grid
        player: The computer's token; its opponent's cells count against it

    Returns:
        MID_SCORE plus the weight balance; above MID_SCORE favours `player`
    """
    own = EVALUATION_WEIGHTS[grid == player.value].sum()
    theirs = EVALUATION_WEIGHTS[grid == player.other().value].sum()
    return MID_SCORE + int(own) - int(theirs)
