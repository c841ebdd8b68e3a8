"""
negamax_c4.game - Core game mechanics for Connect Four

This package contains the board representation and, in rules.py, the game
session manager and gymnasium environment. rules.py depends on the engine,
so it is not imported here.
"""

from negamax_c4.game.board import Board

__all__ = ['Board']
