"""
Tests for the negamax engine: shortcut ordering, search results,
tie-breaking, terminal scores and the full-column fallback.
"""

import random

import pytest

from ..ai.evaluation import evaluate
from ..ai.negamax import NegamaxPlayer, WIN_SCORE, LOSS_SCORE, new_engine
from ..debug import debug
from ..game.board import Board
from ..utils import COLS, GameResult, Player


def best_by_evaluation(board: Board, player: Player = Player.TWO) -> int:
    """Leftmost column whose resulting position scores highest."""
    best_column, best_score = None, None
    for column in board.valid_moves():
        child = board.copy()
        child.apply_move(column, player)
        score = evaluate(child.grid, player)
        if best_score is None or score > best_score:
            best_column, best_score = column, score
    return best_column


def copying_search(board: Board, depth: int, player: Player = Player.TWO) -> int:
    """Root column chosen by a negamax that copies the board for every child."""
    def value(node, remaining, color, to_move):
        if remaining == 0:
            return color * evaluate(node.grid, player)
        result, _ = node.check_outcome()
        if result == GameResult.DRAW:
            return 0
        if result.is_game_over():
            return color * (WIN_SCORE if result == GameResult.win_for(player) else LOSS_SCORE)
        best = None
        for column in node.valid_moves():
            child = node.copy()
            child.apply_move(column, to_move)
            score = -value(child, remaining - 1, -color, to_move.other())
            if best is None or score > best:
                best = score
        return best

    best_column, best_score = None, None
    for column in board.valid_moves():
        child = board.copy()
        child.apply_move(column, player)
        score = -value(child, depth - 1, -1, player.other())
        if best_score is None or score > best_score:
            best_column, best_score = column, score
    return best_column


class TestEngineConstruction:
    """Depth is clamped, never rejected."""

    @pytest.mark.parametrize("depth,expected", [(-5, 1), (0, 1), (1, 1), (4, 4)])
    def test_depth_is_clamped(self, depth, expected):
        assert NegamaxPlayer(depth=depth).depth == expected
        assert new_engine(depth).depth == expected

    def test_defaults(self):
        engine = new_engine()
        assert engine.depth == 3
        assert engine.player == Player.TWO


class TestScenarios:
    """End-to-end choices for well known positions."""

    def test_empty_board_plays_center(self, empty_board):
        engine = new_engine(4)
        assert engine.choose_move(empty_board) == 3
        assert engine.last_rule == "opening_rule"
        assert engine.nodes_evaluated == 0

    def test_reply_to_center_is_center(self, empty_board):
        empty_board.apply_move(3, Player.ONE)
        assert new_engine(4).choose_move(empty_board) == 3

    def test_takes_the_connecting_win(self, board_from_rows):
        board = board_from_rows([
            ".......",
            ".......",
            ".......",
            ".......",
            "..XX...",
            "X.OOO..",
        ])
        engine = new_engine(3)
        assert engine.choose_move(board) == 1
        assert engine.last_rule == "immediate_win_rule"
        assert engine.nodes_evaluated == 0

    def test_blocks_three_in_a_row(self, board_from_rows):
        board = board_from_rows([
            ".......",
            ".......",
            ".......",
            ".......",
            "OO.....",
            "XXX....",
        ])
        engine = new_engine(3)
        assert engine.choose_move(board) == 3
        assert engine.last_rule == "immediate_block_rule"

    def test_win_is_preferred_over_block(self, board_from_rows):
        board = board_from_rows([
            ".......",
            ".......",
            ".......",
            "......O",
            "......O",
            "XXX...O",
        ])
        assert new_engine(3).choose_move(board) == 6

    def test_anti_trap_runs_before_search(self, board_from_rows):
        board = board_from_rows([
            ".......",
            ".......",
            ".......",
            ".......",
            "...O...",
            "...XX..",
        ])
        engine = new_engine(3)
        assert engine.choose_move(board) == 5
        assert engine.last_rule == "anti_trap_rule"


class TestSearch:
    """The full negamax search."""

    def test_depth_one_maximizes_evaluation(self, board_from_rows):
        board = board_from_rows([
            ".......",
            ".......",
            ".......",
            ".......",
            ".......",
            "X..O..X",
        ])
        engine = new_engine(1)
        column = engine.choose_move(board)
        assert engine.last_rule == "negamax"
        assert column == best_by_evaluation(board) == 3

    def test_ties_go_to_the_leftmost_column(self, board_from_rows):
        board = board_from_rows([
            ".......",
            ".......",
            ".......",
            ".......",
            ".......",
            "X.O.O.X",
        ])
        # Columns 2 and 4 both land on a weight-8 cell
        assert new_engine(1).choose_move(board) == 2

    def test_search_sees_a_losing_reply(self, board_from_rows):
        board = board_from_rows([
            ".......",
            ".......",
            ".......",
            ".......",
            "..XXX..",
            "..OXO..",
        ])
        engine = new_engine(3)
        column = engine.choose_move(board)
        assert engine.last_rule == "negamax"
        # Playing 1 or 5 lets the human complete row 4 on top of it
        assert column not in (1, 5)
        assert not board.is_column_full(column)

    def test_node_count_without_pruning(self, empty_board):
        engine = NegamaxPlayer(depth=2, rules=[])
        engine.choose_move(empty_board)
        # 7 children plus 49 grandchildren
        assert engine.nodes_evaluated == 7 + 49

    def test_board_is_not_modified(self, board_from_rows):
        board = board_from_rows([
            ".......",
            ".......",
            ".......",
            ".......",
            "..XXX..",
            "..OXO..",
        ])
        before = board.grid.copy()
        new_engine(3).choose_move(board)
        assert (board.grid == before).all()
        assert board.moves_made == []

    def test_search_adds_to_the_node_counter(self, empty_board):
        engine = NegamaxPlayer(depth=2, rules=[])
        debug.reset_counter("nodes_evaluated")
        engine.choose_move(empty_board)
        engine.choose_move(empty_board)
        assert debug.counter("nodes_evaluated") == 2 * (7 + 49)

    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_matches_search_on_board_copies(self, rng, depth):
        engine = NegamaxPlayer(depth=depth, rules=[])
        for _ in range(6):
            board = Board()
            player = Player.ONE
            for _ in range(rng.randrange(5, 20)):
                board.apply_move(rng.choice(board.valid_moves()), player)
                player = player.other()
            if board.check_outcome()[0].is_game_over():
                continue
            snapshot = board.grid.copy()
            assert engine.search(board) == copying_search(board, depth)
            assert (board.grid == snapshot).all()


class TestTerminalScores:
    """Decided positions short-circuit with extremal scores."""

    COMPUTER_WON = [".......", ".......", ".......", ".......",
                    "XXX....", "OOOO..."]
    HUMAN_WON = [".......", ".......", ".......", ".......",
                 "OOO....", "XXXX..."]

    def test_computer_win(self, board_from_rows):
        engine = new_engine(3)
        board = board_from_rows(self.COMPUTER_WON)
        assert engine._negamax(board, 2, 1, Player.TWO) == WIN_SCORE
        assert engine._negamax(board, 2, -1, Player.ONE) == -WIN_SCORE

    def test_human_win(self, board_from_rows):
        engine = new_engine(3)
        board = board_from_rows(self.HUMAN_WON)
        assert engine._negamax(board, 2, 1, Player.TWO) == LOSS_SCORE
        assert engine._negamax(board, 2, -1, Player.ONE) == -LOSS_SCORE

    def test_draw_scores_zero(self, draw_board):
        engine = new_engine(3)
        assert engine._negamax(draw_board, 5, 1, Player.TWO) == 0
        assert engine._negamax(draw_board, 5, -1, Player.ONE) == 0

    def test_depth_limit_uses_the_evaluator(self, board_from_rows):
        engine = new_engine(3)
        board = board_from_rows(self.COMPUTER_WON)
        assert engine._negamax(board, 0, 1, Player.TWO) == evaluate(board.grid)
        assert engine._negamax(board, 0, -1, Player.ONE) == -evaluate(board.grid)


class TestFallback:
    """A full column chosen by a rule is replaced at random."""

    def test_full_center_from_opening_rule(self, board_from_rows):
        board = board_from_rows([
            "...O...",
            "...O...",
            "...O...",
            "...O...",
            "...O...",
            "...O...",
        ])
        engine = NegamaxPlayer(depth=2, rng=random.Random(7))
        column = engine.choose_move(board)
        assert column != 3
        assert column in board.valid_moves()
        assert engine.last_rule == "fallback"

    def test_fallback_only_picks_playable_columns(self, board_from_rows):
        board = board_from_rows([
            "XOX.XOX",
            "OXO.OXO",
            "XOX.XOX",
            "OXO.OXO",
            "XOX.XOX",
            "OXO.OXO",
        ])

        def always_zero(board, player):
            return 0

        engine = NegamaxPlayer(rng=random.Random(3), rules=[always_zero])
        for _ in range(10):
            assert engine.choose_move(board) == 3

    def test_full_board_returns_a_column(self, draw_board):
        column = new_engine(2).choose_move(draw_board)
        assert 0 <= column < COLS


def test_never_returns_a_full_column(rng):
    engine = NegamaxPlayer(depth=2, rng=random.Random(99))
    for _ in range(15):
        board = Board()
        player = Player.ONE
        for _ in range(rng.randrange(20, 36)):
            board.apply_move(rng.choice(board.valid_moves()), player)
            player = player.other()
        if board.is_full():
            continue
        assert not board.is_column_full(engine.choose_move(board))
