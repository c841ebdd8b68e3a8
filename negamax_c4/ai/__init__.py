"""
negamax_c4.ai - Computer opponent for Connect Four

The engine tries a short list of shortcut rules and otherwise runs a
full-width negamax search scored by a static weight table.
"""

from negamax_c4.ai.evaluation import evaluate, EVALUATION_WEIGHTS
from negamax_c4.ai.negamax import NegamaxPlayer, new_engine

__all__ = ['NegamaxPlayer', 'new_engine', 'evaluate', 'EVALUATION_WEIGHTS']
