"""
cli.py - Command-line interface for the negamax Connect Four engine

This module provides a CLI to play against the computer (or a second
human), inspect the engine's choice on a given position, and benchmark
the search at a given depth.
"""

import argparse
import random
import sys
import time
from typing import Callable, List, Optional

import numpy as np

from negamax_c4.ai.evaluation import evaluate
from negamax_c4.ai.negamax import NegamaxPlayer
from negamax_c4.debug import debug, DebugLevel
from negamax_c4.game.board import Board
from negamax_c4.game.rules import ConnectFourGame
from negamax_c4.utils import ROWS, COLS, DEFAULT_DEPTH, MAX_RECOMMENDED_DEPTH, Player

# Special inputs returned by get_human_move
QUIT = -1
UNDO = -2
RESTART = -3


def parse_position(position: str) -> Board:
    """
    Parse a comma-separated list of ROWS*COLS cell values, top row first.

    Raises:
        ValueError: If the string is malformed
    """
    values = [int(cell) for cell in position.replace(" ", "").split(",") if cell]
    if len(values) != ROWS * COLS:
        raise ValueError(f"Position string must have {ROWS * COLS} values, got {len(values)}")
    return Board.from_grid(np.array(values).reshape(ROWS, COLS))


class SimpleCLI:
    """Simple command-line interface for the Connect Four engine."""

    def __init__(self, input_func: Callable[[str], str] = input):
        """
        Initialize the CLI.

        Args:
            input_func: Source of interactive input, replaceable in tests
        """
        self.input = input_func
        self.args = None
        self.game: Optional[ConnectFourGame] = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect Four against a negamax engine')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging verbosity')
        parser.add_argument('--log-file', default=None, help='Also write logs to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--mode', choices=['computer', 'pvp'], default='computer',
                                 help='Play against the computer or another human')
        play_parser.add_argument('--depth', type=int, default=DEFAULT_DEPTH,
                                 help=f'Search depth, 1 (easy) to {MAX_RECOMMENDED_DEPTH} (hard)')
        play_parser.add_argument('--debug', action='store_true', help='Enable debug output')

        analyze_parser = subparsers.add_parser('analyze', help="Show the engine's choice on a position")
        analyze_parser.add_argument('--position', type=str, required=True,
                                    help=f'{ROWS * COLS} comma-separated cells (0 empty, 1, 2), top row first')
        analyze_parser.add_argument('--depth', type=int, default=DEFAULT_DEPTH, help='Search depth')

        benchmark_parser = subparsers.add_parser('benchmark', help='Time the negamax search')
        benchmark_parser.add_argument('--depth', type=int, default=DEFAULT_DEPTH, help='Search depth')
        benchmark_parser.add_argument('--iterations', type=int, default=20,
                                      help='Number of positions to search')
        benchmark_parser.add_argument('--seed', type=int, default=0, help='Random seed')

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Play a Connect Four game interactively."""
        engine = None
        if self.args.mode == 'computer':
            engine = NegamaxPlayer(depth=self.args.depth)
            print(f"Computer search depth set to {engine.depth}. Good luck!")
        self.game = ConnectFourGame(engine=engine)

        print("Enter column number (0-6) to make a move.")
        print("Other commands: 'q' to quit, 'u' to undo, 'r' to restart.")
        print(self.game.render())

        while not self.game.is_game_over():
            if self.game.is_computer_turn():
                print("Computer is thinking...")
                column = self.game.computer_move()
                print(f"Computer plays column {column}")
                print(self.game.render())
                continue

            player = self.game.get_current_player()
            move = self.get_human_move(player)
            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                return
            if move == UNDO:
                self.undo()
                continue
            if move == RESTART:
                self.game.reset()
                print("Game restarted.")
                print(self.game.render())
                continue

            if not self.game.make_move(move):
                print(f"Column {move} is full!")
                continue
            print(self.game.render())

        self.announce_result()

    def undo(self) -> None:
        # Against the computer, take back its reply as well as the human move
        steps = 2 if self.game.engine is not None else 1
        undone = 0
        for _ in range(steps):
            if self.game.undo_move():
                undone += 1
        if undone:
            print("Move undone.")
            print(self.game.render())
        else:
            print("No moves to undo.")

    def announce_result(self) -> None:
        winner = self.game.get_winner()
        print("Game over!")
        if winner is None:
            print("It's a draw!")
        elif self.game.engine is not None and winner == self.game.engine.player:
            print("The computer wins! Better luck next time.")
        else:
            print(f"Player {winner.value} ({winner}) wins the game!")

    def get_human_move(self, player: Player) -> Optional[int]:
        """
        Get a move from human player input.

        Returns:
            Column index, a special command code, or None if the input was invalid
        """
        try:
            user_input = self.input(f"Player {player.value} ({player}), your move (0-6, q/u/r): ")
        except EOFError:
            return QUIT
        user_input = user_input.strip().lower()

        if user_input == 'q':
            return QUIT
        if user_input == 'u':
            return UNDO
        if user_input == 'r':
            return RESTART

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or special command.")
            return None
        if not 0 <= move < COLS:
            print(f"Column must be between 0 and {COLS - 1}.")
            return None
        return move

    def analyze_position(self) -> int:
        """Print a position, its outcome and evaluation, and the engine's move."""
        try:
            board = parse_position(self.args.position)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        result, line = board.check_outcome()
        print("Loaded position:")
        print(board.render())
        print(f"Outcome: {result.name}")
        if line:
            print(f"Winning cells: {line}")
        print(f"Evaluation for {Player.TWO.name}: {evaluate(board.grid, Player.TWO)}")

        if board.is_full():
            print("Board is full, no move to choose.")
            return 0

        engine = NegamaxPlayer(depth=self.args.depth)
        column = engine.choose_move(board)
        print(f"Engine plays column {column} (rule: {engine.last_rule}, "
              f"{engine.nodes_evaluated} nodes searched)")
        return 0

    def benchmark(self) -> None:
        """Time the full negamax search on random mid-game positions."""
        rng = random.Random(self.args.seed)
        engine = NegamaxPlayer(depth=self.args.depth, rules=[])
        print(f"Running benchmark: depth {engine.depth}, {self.args.iterations} positions...")

        debug.reset_counter("nodes_evaluated")
        total_time = 0.0
        for _ in range(self.args.iterations):
            board = self.random_position(rng)
            start = time.perf_counter()
            engine.choose_move(board)
            total_time += time.perf_counter() - start

        total_nodes = debug.counter("nodes_evaluated")
        searches = max(1, self.args.iterations)
        print(f"Searched {total_nodes} nodes in {total_time:.3f} seconds")
        print(f"{total_time / searches * 1000:.2f} ms and {total_nodes // searches} nodes per search")
        if total_time > 0:
            print(f"{total_nodes / total_time:.0f} nodes per second")

    @staticmethod
    def random_position(rng: random.Random, min_moves: int = 4, max_moves: int = 12) -> Board:
        """A random undecided position with the computer (TWO) to move."""
        while True:
            board = Board()
            player = Player.ONE
            moves = rng.randrange(min_moves, max_moves + 1)
            if moves % 2 == 0:
                moves += 1  # odd count leaves TWO to move
            for _ in range(moves):
                board.apply_move(rng.choice(board.valid_moves()), player)
                player = player.other()
            result, _ = board.check_outcome()
            if not result.is_game_over():
                return board


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
