"""
negamax.py - Fixed-depth negamax search for the Connect Four computer player

This module provides a NegamaxPlayer class that picks a column by first
trying a few shortcut rules (opening, anti-trap, immediate win, immediate
block) and otherwise running an exhaustive full-width negamax search to a
fixed depth. There is no pruning: every node up to the depth limit is
visited, so the cost grows as 7^depth.

Values follow the negamax sign convention. A node searched with color +1
has the computer to move and scores positions from the computer's side;
color -1 flips the sign. Leaves at the depth limit are scored with the
static evaluator, decided positions with an extremal sentinel.
"""

import math
import random
import sys
from typing import List, Optional

from negamax_c4.ai.evaluation import evaluate
from negamax_c4.ai.strategies import SHORTCUT_RULES, Rule
from negamax_c4.debug import debug
from negamax_c4.game.board import Board
from negamax_c4.utils import COLS, CENTER_COLUMN, DEFAULT_DEPTH, GameResult, Player

WIN_SCORE = sys.maxsize
LOSS_SCORE = -sys.maxsize
DRAW_SCORE = 0


class NegamaxPlayer:
    """
    A Connect Four computer player using plain negamax search.

    The player keeps no game state between calls: each choose_move call is
    parameterized only by the board it is given and the configured depth.
    """

    def __init__(self, depth: int = DEFAULT_DEPTH, player: Player = Player.TWO,
                 rng: Optional[random.Random] = None,
                 rules: Optional[List[Rule]] = None):
        """
        Initialize the negamax player.

        Args:
            depth: Search depth in plies, clamped to at least 1
            player: The token this engine plays; the opponent is player.other()
            rng: Random source for the full-column fallback
            rules: Shortcut rules to try before searching, in order
        """
        self.depth = max(1, int(depth))
        self.player = player
        self.rng = rng or random.Random()
        self.rules = list(SHORTCUT_RULES if rules is None else rules)
        self.nodes_evaluated = 0
        self.last_rule: Optional[str] = None

    def choose_move(self, board: Board) -> int:
        """
        Pick the column to play.

        Args:
            board: The current game board (not modified)

        Returns:
            A column index in [0, COLS)
        """
        self.nodes_evaluated = 0
        debug.start_timer("choose_move")

        column = None
        for rule in self.rules:
            column = rule(board, self.player)
            if column is not None:
                self.last_rule = rule.__name__
                break
        else:
            self.last_rule = "negamax"
            column = self.search(board)

        if board.is_column_full(column):
            column = self._fallback(board, column)

        elapsed = debug.end_timer("choose_move", "engine") or 0.0
        debug.info(f"{self.player.name} plays column {column} via {self.last_rule} "
                   f"(depth {self.depth}, {self.nodes_evaluated} nodes, {elapsed:.3f}s)",
                   "engine")
        return column

    def search(self, board: Board) -> int:
        """
        Run the root of the negamax search and return the best column.

        Children are tried left to right and only a strictly better value
        replaces the current best, so ties go to the leftmost column. The
        search plays and takes back moves on one scratch copy of the board.
        """
        scratch = board.copy()
        best_value = -math.inf
        best_column = CENTER_COLUMN

        for column in range(COLS):
            if scratch.is_column_full(column):
                continue
            scratch.apply_move(column, self.player)
            value = -self._negamax(scratch, self.depth - 1, -1, self.player.other())
            scratch.undo_move()
            debug.trace(f"root column {column}: {value}", "engine")
            if value > best_value:
                best_value = value
                best_column = column

        debug.increment("nodes_evaluated", self.nodes_evaluated)
        return best_column

    def _negamax(self, board: Board, depth: int, color: int, to_move: Player) -> float:
        """
        Negamax value of a position.

        Args:
            board: Position to score; every move played on it is undone
                before returning
            depth: Remaining plies
            color: +1 when the computer is to move, -1 otherwise
            to_move: The player whose turn it is

        Returns:
            The position value from the side to move's perspective
        """
        self.nodes_evaluated += 1

        if depth == 0:
            return color * evaluate(board.grid, self.player)

        result, _ = board.check_outcome()
        if result.is_game_over():
            if result == GameResult.DRAW:
                return DRAW_SCORE
            if result == GameResult.win_for(self.player):
                return color * WIN_SCORE
            return color * LOSS_SCORE

        best_value = -math.inf
        for column in range(COLS):
            if board.is_column_full(column):
                continue
            board.apply_move(column, to_move)
            value = -self._negamax(board, depth - 1, -color, to_move.other())
            board.undo_move()
            if value > best_value:
                best_value = value

        return best_value

    def _fallback(self, board: Board, column: int) -> int:
        """Replace a full column with a random playable one."""
        playable = board.valid_moves()
        if not playable:
            debug.warning(f"No playable column left, keeping column {column}", "engine")
            return column
        replacement = self.rng.choice(playable)
        debug.warning(f"Column {column} is full, falling back to column {replacement}",
                      "engine")
        self.last_rule = "fallback"
        return replacement


def new_engine(max_depth: int = DEFAULT_DEPTH, player: Player = Player.TWO) -> NegamaxPlayer:
    """Create a computer player searching `max_depth` plies (at least 1)."""
    return NegamaxPlayer(depth=max_depth, player=player)
