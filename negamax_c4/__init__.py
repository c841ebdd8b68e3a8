"""
negamax_c4 - Connect Four with a fixed-depth negamax computer opponent

This package provides the board model, a static positional evaluator, the
negamax move search engine, a game session manager, a gymnasium
environment and a text command-line interface.
"""

__version__ = '1.0.0'
