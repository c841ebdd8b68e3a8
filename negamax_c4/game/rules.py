"""
rules.py - Game session management and Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, which runs a session between a human and either a
   second human or the negamax computer player
2. ConnectFourEnv, a gymnasium environment in which an agent plays
   against the negamax computer player
"""

from typing import Any, Dict, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from negamax_c4.ai.negamax import NegamaxPlayer
from negamax_c4.debug import debug
from negamax_c4.game.board import Board
from negamax_c4.utils import ROWS, COLS, DEFAULT_DEPTH, Player, GameResult


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    Player ONE always moves first. When an engine is given it plays the
    other side; otherwise both sides are driven through make_move.
    """

    def __init__(self, engine: Optional[NegamaxPlayer] = None):
        """
        Initialize a new Connect Four game.

        Args:
            engine: Computer opponent, or None for a two-human game
        """
        debug.debug("Initializing ConnectFourGame", "game")
        self.board = Board()
        self.engine = engine

    def reset(self) -> None:
        """Reset the game to initial state."""
        debug.debug("Resetting game", "game")
        self.board.reset()

    @property
    def current_player(self) -> Player:
        return Player.ONE if len(self.board.moves_made) % 2 == 0 else Player.TWO

    def is_computer_turn(self) -> bool:
        return (self.engine is not None and not self.is_game_over()
                and self.current_player == self.engine.player)

    def make_move(self, column: int) -> bool:
        """
        Play a column for the player whose turn it is.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            True if the move was played, False if it was refused
        """
        if self.is_game_over():
            debug.debug(f"Refusing column {column}: game is over", "game")
            return False
        if not self.board.is_valid_move(column):
            debug.debug(f"Refusing column {column}: out of range or full", "game")
            return False

        player = self.current_player
        self.board.apply_move(column, player)
        result, line = self.board.check_outcome()
        debug.debug(f"{player.name} played column {column}, result {result.name}", "game")
        if result.is_game_over():
            debug.info(f"Game over: {result.name} {line}", "game")
        return True

    def computer_move(self) -> Optional[int]:
        """
        Let the engine play its move.

        Returns:
            The column played, or None if it is not the computer's turn
        """
        if not self.is_computer_turn():
            return None
        column = self.engine.choose_move(self.board)
        self.make_move(column)
        return column

    def undo_move(self) -> bool:
        """
        Undo the last move.

        Returns:
            True if a move was undone, False otherwise
        """
        if not self.board.undo_move():
            return False
        self.board.check_outcome()
        return True

    def is_game_over(self) -> bool:
        return self.board.game_result.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or draw
        """
        winner = self.board.game_result.winner()
        return None if winner == Player.EMPTY else winner

    def get_current_player(self) -> Player:
        return self.current_player

    def get_valid_moves(self) -> List[int]:
        if self.is_game_over():
            return []
        return self.board.valid_moves()

    def render(self) -> str:
        return self.board.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The agent plays Player.ONE and moves first. After every legal agent
    move the environment replies with the negamax computer player.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, depth: int = DEFAULT_DEPTH):
        """
        Initialize the Connect Four environment.

        Args:
            render_mode: Mode for rendering the environment
            depth: Search depth of the computer opponent
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        self.action_space = spaces.Discrete(COLS)
        # 6x7 board with 3 possible values (0, 1, 2)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(ROWS, COLS), dtype=np.int8
        )

        self.opponent = NegamaxPlayer(depth=depth, player=Player.TWO)
        self.game = ConnectFourGame(engine=self.opponent)
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to initial state.

        Args:
            seed: Random seed, also used for the opponent's fallback choice
            options: Unused

        Returns:
            Initial observation and info dictionary
        """
        super().reset(seed=seed)
        if seed is not None:
            self.opponent.rng.seed(seed)
        self.game.reset()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's column, then the opponent's reply.

        Args:
            action: Column to place a piece (0-indexed)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        action = int(action)
        if not self.game.make_move(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        opponent_move = None
        if not self.game.is_game_over():
            opponent_move = self.game.computer_move()

        reward = self._reward(self.game.board.game_result)
        terminated = self.game.is_game_over()

        info = self._get_info()
        info['opponent_move'] = opponent_move

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, info

    def _reward(self, result: GameResult) -> float:
        if result == GameResult.PLAYER_ONE_WIN:
            return self.reward_win
        if result == GameResult.PLAYER_TWO_WIN:
            return self.reward_lose
        if result == GameResult.DRAW:
            return self.reward_draw
        return self.reward_step

    def render(self) -> Optional[Union[str, Any]]:
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state().astype(np.int8)

    def _get_info(self) -> Dict:
        board = self.game.board
        valid_moves = self.game.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.game.current_player.value,
            'game_result': board.game_result.name,
            'moves_made': len(board.moves_made),
            'winning_line': list(board.winning_line),
            'last_move': board.last_move,
        }

    def close(self):
        pass
