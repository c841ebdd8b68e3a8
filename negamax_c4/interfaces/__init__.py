"""
negamax_c4.interfaces - User interfaces for Connect Four

This package contains the text command-line interface.
"""

# Don't import anything here to avoid circular imports
__all__ = []
